from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class SellerCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)
    confirm_password: Optional[str] = None
    first_name: str = Field(..., min_length=1, max_length=120)
    last_name: str = Field(..., min_length=1, max_length=120)
    contact_number: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = None


class SellerUpdate(BaseModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=120)
    last_name: Optional[str] = Field(None, min_length=1, max_length=120)
    contact_number: Optional[str] = Field(None, max_length=32)
    address: Optional[str] = None


class SellerCreatePayload(BaseModel):
    details: SellerCreate


class SellerUpdatePayload(BaseModel):
    details: SellerUpdate


class SellerOut(BaseModel):
    id: int
    user_id: int
    email: str
    first_name: str
    last_name: str
    contact_number: Optional[str] = None
    address: Optional[str] = None
    active: bool
    created_at: Optional[str] = None
