from fastapi import FastAPI
from fastapi.testclient import TestClient

from ecommerce_portal.core.database import get_db
from ecommerce_portal.core.errors import DomainError, domain_error_handler
from ecommerce_portal.deps import get_current_principal
from ecommerce_portal.models.category import Category
from ecommerce_portal.models.shop import Shop
from ecommerce_portal.routers.categories import router as categories_router
from ecommerce_portal.routers.shops import router as shops_router
from tests.fixtures_data import ADMIN_PRINCIPAL, SELLER_PRINCIPAL, build_session, seed_catalog


def _build_client(principal=ADMIN_PRINCIPAL):
    db = build_session()
    seed_catalog(db, with_product=False)

    app = FastAPI()
    app.add_exception_handler(DomainError, domain_error_handler)
    app.include_router(categories_router)
    app.include_router(shops_router)
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_current_principal] = lambda: principal

    return TestClient(app), db


def test_admin_creates_category():
    client, db = _build_client()

    response = client.post("/category/add", json={"name": " Bags ", "description": "Totes and backpacks"})

    assert response.status_code == 200
    assert response.json() == {"message": "Created Category Successfully."}
    assert db.query(Category).filter(Category.name == "Bags").one().active is True


def test_duplicate_category_name_is_conflict():
    client, db = _build_client()

    response = client.post("/category/add", json={"name": "Shoes"})

    assert response.status_code == 409
    assert response.json()["reason"] == "duplicate_name"
    assert db.query(Category).count() == 1


def test_seller_cannot_create_category():
    client, db = _build_client(SELLER_PRINCIPAL)

    response = client.post("/category/add", json={"name": "Bags"})

    assert response.status_code == 403
    assert db.query(Category).count() == 1


def test_seller_can_browse_categories():
    client, _ = _build_client(SELLER_PRINCIPAL)

    response = client.get("/category/all")

    assert response.status_code == 200
    assert [category["name"] for category in response.json()] == ["Shoes"]


def test_category_update_and_deactivate():
    client, db = _build_client()

    update = client.patch("/category/update/1", json={"description": "Footwear"})
    deactivate = client.patch("/category/deactivate/1")

    assert update.json() == {"message": "Updated category details successfully."}
    assert deactivate.json() == {"message": "Deactivated category successfully."}
    category = db.query(Category).filter(Category.id == 1).one()
    assert category.description == "Footwear"
    assert category.active is False


def test_shop_for_unknown_seller_is_not_found():
    client, db = _build_client()

    response = client.post("/shop/add", json={"seller_id": 42, "name": "Ghost Shop"})

    assert response.status_code == 404
    assert response.json()["detail"] == "No Seller Found."
    assert db.query(Shop).count() == 2


def test_admin_creates_and_renames_shop():
    client, db = _build_client()

    created = client.post("/shop/add", json={"seller_id": 1, "name": "Third Shop"})
    renamed = client.patch("/shop/update/3", json={"name": "Outlet"})

    assert created.json() == {"message": "Created Shop Successfully."}
    assert renamed.status_code == 200
    assert db.query(Shop).filter(Shop.id == 3).one().name == "Outlet"


def test_unknown_shop_is_not_found():
    client, _ = _build_client(SELLER_PRINCIPAL)

    response = client.get("/shop/99")

    assert response.status_code == 404
    assert response.json()["detail"] == "No Shop Found."
