from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ecommerce_portal.core.config import MAX_IMAGE_SIZE_BYTES
from ecommerce_portal.core.database import get_db
from ecommerce_portal.core.errors import InvalidInputError
from ecommerce_portal.deps import get_current_principal
from ecommerce_portal.schemas.product import ProductDetails, ProductOut
from ecommerce_portal.services import products as product_service
from ecommerce_portal.services.auth import Principal
from ecommerce_portal.services.products import product_to_dict

router = APIRouter(prefix="/product", tags=["product"])


def _parse_details(raw: str) -> ProductDetails:
    try:
        return ProductDetails.model_validate_json(raw or "{}")
    except ValidationError as exc:
        first_error = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first_error.get("loc", ())) or "details"
        raise InvalidInputError(f"Invalid product details ({location}): {first_error.get('msg', 'invalid')}") from exc


def _validate_upload(file: Optional[UploadFile]) -> Optional[UploadFile]:
    if file is None:
        return None
    if not file.filename:
        raise InvalidInputError("Invalid file.")

    content_type = (file.content_type or "").lower()
    if not content_type.startswith("image/"):
        raise InvalidInputError("Only image files are allowed.")

    head = file.file.read(MAX_IMAGE_SIZE_BYTES + 1)
    file.file.seek(0)
    if len(head) > MAX_IMAGE_SIZE_BYTES:
        raise InvalidInputError("The image exceeds the maximum allowed size.")
    return file


@router.get("/all", response_model=List[ProductOut])
def list_products(
    db: Session = Depends(get_db),
    _principal: Principal = Depends(get_current_principal),
):
    return [product_to_dict(product) for product in product_service.list_all(db)]


@router.get("/latest-products", response_model=List[ProductOut])
def list_latest_products(db: Session = Depends(get_db)):
    return [product_to_dict(product) for product in product_service.list_latest(db)]


@router.get("/{product_id}", response_model=ProductOut)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    _principal: Principal = Depends(get_current_principal),
):
    return product_to_dict(product_service.get_by_id(db, product_id))


@router.post("/add")
def add_product(
    details: str = Form(...),
    image_file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    _principal: Principal = Depends(get_current_principal),
):
    parsed = _parse_details(details)
    outcome = product_service.create(db, parsed, _validate_upload(image_file))
    return outcome.as_response()


@router.patch("/update/{product_id}")
def update_product(
    product_id: int,
    details: str = Form("{}"),
    image_file: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    _principal: Principal = Depends(get_current_principal),
):
    parsed = _parse_details(details)
    outcome = product_service.update(db, product_id, parsed, _validate_upload(image_file))
    return outcome.as_response()


@router.patch("/deactivate/{product_id}")
def deactivate_product(
    product_id: int,
    db: Session = Depends(get_db),
    _principal: Principal = Depends(get_current_principal),
):
    return product_service.set_active(db, product_id, False).as_response()


@router.patch("/activate/{product_id}")
def activate_product(
    product_id: int,
    db: Session = Depends(get_db),
    _principal: Principal = Depends(get_current_principal),
):
    return product_service.set_active(db, product_id, True).as_response()
