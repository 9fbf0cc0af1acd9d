# auth_middleware.py
import logging

from fastapi import Request
from fastapi.responses import JSONResponse

import config
import credentials
import queries
from db import SessionLocal
from errors import StoreError

logger = logging.getLogger(__name__)

OPEN_PATHS = {"/health", "/auth/signup", "/auth/login", "/docs", "/openapi.json"}


def resolve_user(user_id: int):
    db = SessionLocal()
    try:
        return queries.query_get_user_by_id(db, user_id)
    finally:
        db.close()


def bearer_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if not auth:
        return None
    scheme, _, token = auth.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def is_open_path(path: str) -> bool:
    prefix = config.UPLOAD_URL_PREFIX.rstrip("/") + "/"
    return path in OPEN_PATHS or path.startswith(prefix)


def bearer_auth_middleware():
    async def middleware(request: Request, call_next):
        if is_open_path(request.url.path):
            return await call_next(request)

        token = bearer_token(request)
        if not token:
            return JSONResponse(status_code=401, content={"error": "No token provided"})

        user_id = credentials.verify_token(token)
        if user_id is None:
            return JSONResponse(status_code=401, content={"error": "Invalid token"})

        try:
            user = resolve_user(user_id)
        except StoreError as e:
            return JSONResponse(status_code=e.status_code, content={"error": e.message})
        if user is None:
            logger.info(f"Token for unknown user {user_id} presented on {request.url.path}")
            return JSONResponse(status_code=404, content={"error": "User not found"})

        request.state.user_id = user.id
        request.state.user = user.to_public_dict()
        return await call_next(request)

    return middleware
