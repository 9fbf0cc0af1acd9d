# controllers.py
import logging
import os

from fastapi import APIRouter, UploadFile, File, Request, Depends
from sqlalchemy.orm import Session

import config
import credentials
import queries
from analyzer import CrackAnalyzer, get_analyzer
from db import get_db
from errors import AuthError, NotFoundError, StoreError, ValidationError
from schemas import LoginRequest, ReportCreate, SignupRequest
from uploads import discard_upload, store_upload

logger = logging.getLogger(__name__)

router = APIRouter()

UPLOAD_DIR = config.UPLOAD_DIR
UPLOAD_URL_PREFIX = config.UPLOAD_URL_PREFIX
MAX_UPLOAD_BYTES = config.MAX_UPLOAD_BYTES


def current_user_id(request: Request) -> int:
    user_id = getattr(request.state, "user_id", None)
    if user_id is None:
        raise AuthError("No token provided")
    return user_id


# auth

@router.post("/auth/signup", status_code=201)
def signup(payload: SignupRequest, db: Session = Depends(get_db)):
    password_hash = credentials.hash_password(payload.password)
    user = queries.query_create_user(db, payload.name, payload.email, password_hash)
    logger.info(f"New user {user.id} signed up ({user.email})")
    return {"user": user.to_public_dict(), "token": credentials.issue_token(user.id)}


@router.post("/auth/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = queries.query_get_user_by_email(db, payload.email)
    if not user or not credentials.verify_password(payload.password, user.password_hash):
        logger.info(f"Failed login for {payload.email}")
        raise AuthError("Invalid email or password")
    return {"user": user.to_public_dict(), "token": credentials.issue_token(user.id)}


@router.get("/auth/me")
def me(request: Request):
    current_user_id(request)
    return {"user": request.state.user}


# upload

@router.post("/upload")
def upload(
    request: Request,
    image: UploadFile | None = File(None),
    analyzer: CrackAnalyzer = Depends(get_analyzer),
):
    user_id = current_user_id(request)
    if image is None:
        raise ValidationError("No file uploaded")

    name, size = store_upload(image, UPLOAD_DIR, MAX_UPLOAD_BYTES)
    stored_path = os.path.join(UPLOAD_DIR, name)
    try:
        analysis = analyzer.analyze(stored_path)
    except Exception as e:
        logger.exception(f"Analyzer {analyzer.name} failed on {stored_path}")
        discard_upload(stored_path)
        raise StoreError("Analysis failed") from e

    logger.info(f"User {user_id} uploaded {image.filename!r} -> {name} ({size} bytes)")
    return {
        "success": True,
        "filename": name,
        "original_filename": image.filename,
        "path": f"{UPLOAD_URL_PREFIX.rstrip('/')}/{name}",
        "analysis": analysis.to_dict(),
    }


# reports

@router.get("/reports")
def list_reports(request: Request, db: Session = Depends(get_db)):
    user_id = current_user_id(request)
    reports = queries.query_get_reports_by_user(db, user_id)
    return {"reports": [r.to_dict() for r in reports]}


@router.post("/reports", status_code=201)
def create_report(payload: ReportCreate, request: Request, db: Session = Depends(get_db)):
    user_id = current_user_id(request)
    report = queries.query_create_report(db, user_id, payload.model_dump())
    return {"report": report.to_dict()}


@router.get("/reports/{report_id}")
def get_report(report_id: int, request: Request, db: Session = Depends(get_db)):
    user_id = current_user_id(request)
    report = queries.query_get_report_for_owner(db, report_id, user_id)
    if not report:
        raise NotFoundError("Report not found")
    return {"report": report.to_dict()}


@router.delete("/reports/{report_id}")
def delete_report(report_id: int, request: Request, db: Session = Depends(get_db)):
    user_id = current_user_id(request)
    if not queries.query_delete_report(db, report_id, user_id):
        raise NotFoundError("Report not found")
    return {"deleted": True, "id": report_id}


@router.get("/health")
def health():
    return {"status": "ok"}
