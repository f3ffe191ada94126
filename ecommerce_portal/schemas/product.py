from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProductDetails(BaseModel):
    """JSON carried in the multipart ``details`` field of product add/update."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    quantity: Optional[int] = Field(None, ge=0)
    category_id: Optional[int] = Field(None, ge=1)
    shop_id: Optional[int] = Field(None, ge=1)

    def populated_fields(self) -> dict:
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class ProductOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    quantity: int
    image_name: Optional[str] = None
    image_path: Optional[str] = None
    image_url: Optional[str] = None
    active: bool
    category_id: int
    category_name: Optional[str] = None
    shop_id: int
    shop_name: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
