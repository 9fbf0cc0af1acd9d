# schemas.py
from typing import Any

from pydantic import BaseModel, Field

from models import Severity


class SignupRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1)


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ReportCreate(BaseModel):
    filename: str = Field(min_length=1, max_length=255)
    image_path: str = Field(min_length=1, max_length=512)
    length_mm: float = Field(ge=0)
    width_mm: float = Field(ge=0)
    depth_mm: float = Field(ge=0)
    severity: Severity
    recommendation: str = Field(min_length=1)
    analysis_data: Any = None
