import json
from types import SimpleNamespace

from fastapi import FastAPI
from fastapi.testclient import TestClient

from ecommerce_portal.core import config
from ecommerce_portal.core.database import get_db
from ecommerce_portal.core.errors import DomainError, domain_error_handler
from ecommerce_portal.deps import get_current_principal
from ecommerce_portal.models.product import Product
from ecommerce_portal.models.user import User
from ecommerce_portal.routers.products import router as products_router
from ecommerce_portal.services import sellers as seller_service
from ecommerce_portal.services import storage
from ecommerce_portal.services.auth import create_access_token
from tests.fixtures_data import HAPPY_PATH_PRODUCT, SELLER_PRINCIPAL, build_session, install_fake_spaces, seed_catalog


def _build_client(monkeypatch, principal=SELLER_PRINCIPAL):
    db = build_session()
    seed_catalog(db)
    spaces = install_fake_spaces(monkeypatch)
    monkeypatch.setattr(storage, "uuid4", lambda: SimpleNamespace(hex="fixeduuid"))

    app = FastAPI()
    app.add_exception_handler(DomainError, domain_error_handler)
    app.include_router(products_router)
    app.dependency_overrides[get_db] = lambda: db
    if principal is not None:
        app.dependency_overrides[get_current_principal] = lambda: principal

    return TestClient(app), db, spaces


def test_add_product_with_image(monkeypatch):
    client, db, spaces = _build_client(monkeypatch)

    response = client.post(
        "/product/add",
        data={"details": json.dumps(HAPPY_PATH_PRODUCT)},
        files={"image_file": ("trail.png", b"png-bytes", "image/png")},
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Created Product Successfully."}
    created = db.query(Product).filter(Product.name == "Trail Runner").one()
    assert created.image_path == "products/2/fixeduuid.png"
    assert spaces.calls[0][1]["ExtraArgs"]["ContentType"] == "image/png"


def test_add_product_rejects_non_image_upload(monkeypatch):
    client, db, spaces = _build_client(monkeypatch)

    response = client.post(
        "/product/add",
        data={"details": json.dumps(HAPPY_PATH_PRODUCT)},
        files={"image_file": ("notes.txt", b"plain", "text/plain")},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Only image files are allowed."
    assert spaces.calls == []


def test_add_product_rejects_oversized_upload(monkeypatch):
    client, _, spaces = _build_client(monkeypatch)
    monkeypatch.setattr("ecommerce_portal.routers.products.MAX_IMAGE_SIZE_BYTES", 4)

    response = client.post(
        "/product/add",
        data={"details": json.dumps(HAPPY_PATH_PRODUCT)},
        files={"image_file": ("big.png", b"0123456789", "image/png")},
    )

    assert response.status_code == 400
    assert spaces.calls == []


def test_add_product_with_malformed_details(monkeypatch):
    client, _, _ = _build_client(monkeypatch)

    response = client.post("/product/add", data={"details": "{not json"})

    assert response.status_code == 400
    assert response.json()["kind"] == "invalid_input"


def test_add_product_with_unknown_shop(monkeypatch):
    client, _, spaces = _build_client(monkeypatch)

    response = client.post(
        "/product/add",
        data={"details": json.dumps({**HAPPY_PATH_PRODUCT, "shop_id": 77})},
        files={"image_file": ("trail.png", b"png-bytes", "image/png")},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "No Shop Found."
    assert spaces.calls == []


def test_update_moves_product_to_other_shop(monkeypatch):
    client, db, spaces = _build_client(monkeypatch)

    response = client.patch("/product/update/1", data={"details": json.dumps({"shop_id": 2})})

    assert response.status_code == 200
    assert [operation for operation, _ in spaces.calls] == ["copy_object", "delete_object"]
    assert db.query(Product).filter(Product.id == 1).one().image_path == "products/2/abc123.jpg"


def test_deactivate_and_activate(monkeypatch):
    client, db, _ = _build_client(monkeypatch)

    assert client.patch("/product/deactivate/1").json() == {"message": "Deactivated product successfully."}
    assert db.query(Product).filter(Product.id == 1).one().active is False
    assert client.patch("/product/activate/1").json() == {"message": "Activated product successfully."}


def test_get_product_includes_public_url(monkeypatch):
    client, _, _ = _build_client(monkeypatch)
    monkeypatch.setattr(config, "SPACES_PUBLIC_URL", "https://cdn.example.com")

    response = client.get("/product/1")

    assert response.status_code == 200
    body = response.json()
    assert body["image_url"] == "https://cdn.example.com/products/1/abc123.jpg"
    assert body["shop_name"] == "First Shop"
    assert body["category_name"] == "Shoes"


def test_unknown_product_is_not_found(monkeypatch):
    client, _, _ = _build_client(monkeypatch)

    response = client.get("/product/404")

    assert response.status_code == 404
    assert response.json()["detail"] == "No Product Found."


def test_latest_products_are_public(monkeypatch):
    client, _, _ = _build_client(monkeypatch, principal=None)

    response = client.get("/product/latest-products")

    assert response.status_code == 200
    assert [product["name"] for product in response.json()] == ["Sneaker"]


def test_product_listing_requires_session(monkeypatch):
    client, _, _ = _build_client(monkeypatch, principal=None)

    response = client.get("/product/all")

    assert response.status_code == 401
    assert response.json()["detail"] == "Unauthorized"


def _build_cookie_client(monkeypatch):
    client, db, _ = _build_client(monkeypatch, principal=None)
    monkeypatch.setattr(config, "JWT_SECRET_KEY", "test-secret")
    seller_user = db.query(User).filter(User.id == 2).one()
    client.cookies.set(config.USER_TOKEN_COOKIE, create_access_token(seller_user))
    return client, db


def test_active_seller_cookie_reaches_handler(monkeypatch):
    client, db = _build_cookie_client(monkeypatch)

    response = client.patch("/product/deactivate/1")

    assert response.status_code == 200
    assert db.query(Product).filter(Product.id == 1).one().active is False


def test_deactivated_seller_cookie_is_rejected(monkeypatch):
    client, db = _build_cookie_client(monkeypatch)
    seller_service.set_active(db, 1, False)

    response = client.patch("/product/deactivate/1")

    assert response.status_code == 401
    assert response.json()["detail"] == "Unauthorized"
    assert db.query(Product).filter(Product.id == 1).one().active is True
