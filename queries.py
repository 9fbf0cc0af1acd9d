#queries.py
import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from errors import StoreError, ValidationError
from models import CrackReport, Severity, User

logger = logging.getLogger(__name__)

REPORT_FIELDS = (
    "filename",
    "image_path",
    "length_mm",
    "width_mm",
    "depth_mm",
    "severity",
    "recommendation",
    "analysis_data",
)


def _commit(db: Session, action: str):
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Store failure during {action}: {e}")
        raise StoreError(f"Failed to {action}") from e


def _read(db: Session, action: str, fn):
    try:
        return fn()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Store failure during {action}: {e}")
        raise StoreError(f"Failed to {action}") from e


# users

def query_create_user(db: Session, name: str, email: str, password_hash: str) -> User:
    user = User(name=name, email=email, password_hash=password_hash)
    db.add(user)
    try:
        _commit(db, "create user")
    except IntegrityError as e:
        logger.info(f"Signup rejected, email already registered: {email}")
        raise ValidationError("Email already registered") from e
    _read(db, "reload user", lambda: db.refresh(user))
    return user


def query_get_user_by_email(db: Session, email: str) -> User | None:
    return _read(db, "load user", lambda: db.query(User).filter(User.email == email).first())


def query_get_user_by_id(db: Session, user_id: int) -> User | None:
    return _read(db, "load user", lambda: db.get(User, user_id))


# crack reports

def query_create_report(db: Session, user_id: int, fields: dict) -> CrackReport:
    values = {name: fields.get(name) for name in REPORT_FIELDS}
    values["severity"] = Severity(values["severity"])
    if values["analysis_data"] is None:
        values["analysis_data"] = {}
    report = CrackReport(user_id=user_id, **values)
    db.add(report)
    try:
        _commit(db, "create report")
    except IntegrityError as e:
        logger.exception(f"Report rejected by store constraints for user {user_id}")
        raise StoreError("Failed to create report") from e
    _read(db, "reload report", lambda: db.refresh(report))
    logger.info(f"Report {report.id} created for user {user_id} ({report.severity.value})")
    return report


def query_get_report_by_id(db: Session, report_id: int) -> CrackReport | None:
    return _read(db, "load report", lambda: db.get(CrackReport, report_id))


def query_get_report_for_owner(db: Session, report_id: int, user_id: int) -> CrackReport | None:
    return _read(
        db,
        "load report",
        lambda: db.query(CrackReport).filter_by(id=report_id, user_id=user_id).first(),
    )


def query_get_reports_by_user(db: Session, user_id: int) -> list[CrackReport]:
    return _read(
        db,
        "list reports",
        lambda: (
            db.query(CrackReport)
            .filter(CrackReport.user_id == user_id)
            .order_by(CrackReport.upload_date.desc(), CrackReport.id.desc())
            .all()
        ),
    )


def query_delete_report(db: Session, report_id: int, user_id: int) -> bool:
    deleted = _read(
        db,
        "delete report",
        lambda: db.query(CrackReport).filter_by(id=report_id, user_id=user_id).delete(),
    )
    _commit(db, "delete report")
    if deleted:
        logger.info(f"Report {report_id} deleted by user {user_id}")
    return deleted > 0
