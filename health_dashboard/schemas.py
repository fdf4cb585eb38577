# health_dashboard/schemas.py
"""Request bodies accepted by the API. Unknown keys (such as ``userId``) are ignored."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StrictFloat, StrictInt, field_validator


class _RequestModel(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class RegisterRequest(_RequestModel):
    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=40)
    password: str = Field(min_length=6)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower()


class LoginRequest(_RequestModel):
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v):
        return v.lower()


class BloodPressureInput(_RequestModel):
    systolic: Optional[StrictFloat] = Field(default=None, ge=50, le=250)
    diastolic: Optional[StrictFloat] = Field(default=None, ge=30, le=150)


class HealthMetricInput(_RequestModel):
    heartRate: Optional[StrictInt] = Field(default=None, ge=30, le=220)
    steps: Optional[StrictInt] = Field(default=None, ge=0)
    sleepHours: Optional[StrictFloat] = Field(default=None, ge=0, le=24)
    sugarLevel: Optional[StrictFloat] = Field(default=None, ge=0, le=500)
    bloodPressure: Optional[BloodPressureInput] = None
    weight: Optional[StrictFloat] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=500)

    def submitted(self):
        """Only the fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class ChatRequest(_RequestModel):
    query: str = Field(min_length=1, max_length=1000)
    userId: Optional[str] = None

    @field_validator("userId", mode="before")
    @classmethod
    def stringify_user_id(cls, v):
        return str(v) if v is not None else v
