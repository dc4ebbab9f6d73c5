# app/schemas/auth.py
from pydantic import BaseModel, EmailStr, Field, model_validator

from app.schemas.user import UserPublic


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6)
    role: str = Field(default="student", pattern="^(student|faculty|admin)$")
    department: str = Field(min_length=1, max_length=100)
    year: int | None = None

    @model_validator(mode="after")
    def check_student_year(self):
        # students must give a year, 1-6
        if self.role == "student":
            if self.year is None or not 1 <= self.year <= 6:
                raise ValueError(
                    "Please provide a valid year (1-6) for student registration"
                )
        else:
            self.year = None
        return self


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserPublic
