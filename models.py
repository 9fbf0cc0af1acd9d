# models.py
import enum
from datetime import datetime

from sqlalchemy import Column, String, DateTime, Integer, Float, ForeignKey, Text, JSON, Enum
from sqlalchemy.orm import relationship

from db import Base


class Severity(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class User(Base):
    __tablename__ = 'users'
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    reports = relationship("CrackReport", back_populates="user")

    def to_public_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class CrackReport(Base):
    __tablename__ = 'crack_reports'
    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)
    filename = Column(String(255), nullable=False)
    image_path = Column(String(512), nullable=False)
    upload_date = Column(DateTime, default=datetime.utcnow, nullable=False)
    length_mm = Column(Float, nullable=False)
    width_mm = Column(Float, nullable=False)
    depth_mm = Column(Float, nullable=False)
    severity = Column(Enum(Severity, values_callable=lambda e: [m.value for m in e]), nullable=False)
    recommendation = Column(Text, nullable=False)
    # opaque payload, stored and returned verbatim
    analysis_data = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    user = relationship("User", back_populates="reports")

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "filename": self.filename,
            "image_path": self.image_path,
            "upload_date": self.upload_date.isoformat() if self.upload_date else None,
            "length_mm": self.length_mm,
            "width_mm": self.width_mm,
            "depth_mm": self.depth_mm,
            "severity": self.severity.value if self.severity else None,
            "recommendation": self.recommendation,
            "analysis_data": self.analysis_data,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
