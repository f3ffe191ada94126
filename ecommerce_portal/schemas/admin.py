from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class LoginPayload(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class AdminCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1, max_length=120)
    last_name: str = Field(..., min_length=1, max_length=120)


class AdminCreatePayload(BaseModel):
    details: AdminCreate


class AdminOut(BaseModel):
    id: int
    user_id: int
    email: str
    first_name: str
    last_name: str
    active: bool
    created_at: Optional[str] = None


class UserOut(BaseModel):
    id: int
    email: str
    user_type: str
    active: bool
