import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ecommerce_portal.core.database import get_db
from ecommerce_portal.core.errors import DomainError, InvalidInputError, domain_error_handler
from ecommerce_portal.deps import get_current_principal
from ecommerce_portal.models.activity_log import ActivityLog
from ecommerce_portal.models.admin import Admin
from ecommerce_portal.models.user import User, UserType
from ecommerce_portal.routers.activity_logs import router as activity_logs_router
from ecommerce_portal.routers.admins import router as admins_router
from ecommerce_portal.services.admins import ensure_initial_admin
from tests.fixtures_data import ADMIN_PRINCIPAL, SELLER_PRINCIPAL, build_session, seed_catalog

NEW_ADMIN = {
    "email": "second.admin@example.com",
    "password": "admin-pass",
    "first_name": "Ada",
    "last_name": "Root",
}


def _build_client(principal=ADMIN_PRINCIPAL):
    db = build_session()
    seed_catalog(db, with_product=False)
    db.add(Admin(id=1, user_id=1, first_name="First", last_name="Admin"))
    db.commit()

    app = FastAPI()
    app.add_exception_handler(DomainError, domain_error_handler)
    app.include_router(admins_router)
    app.include_router(activity_logs_router)
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_current_principal] = lambda: principal

    return TestClient(app), db


def test_admin_creates_admin_and_activity_entry():
    client, db = _build_client()

    response = client.post("/admin/add", json={"details": NEW_ADMIN})

    assert response.status_code == 200
    assert response.json() == {"message": "Created Admin Successfully."}
    user = db.query(User).filter(User.email == "second.admin@example.com").one()
    assert user.user_type == UserType.ADMIN
    assert db.query(ActivityLog).one().title == "create-admin"


def test_seller_cannot_list_admins():
    client, _ = _build_client(SELLER_PRINCIPAL)

    response = client.get("/admin/all")

    assert response.status_code == 403
    assert response.json()["detail"] == "Insufficient permissions."


def test_admin_cannot_deactivate_itself():
    client, db = _build_client()

    response = client.patch("/admin/deactivate/1")

    assert response.status_code == 400
    assert db.query(User).filter(User.id == 1).one().active is True


def test_activity_log_listing_is_newest_first():
    client, _ = _build_client()
    client.post("/admin/add", json={"details": NEW_ADMIN})
    client.post("/admin/add", json={"details": {**NEW_ADMIN, "email": "third.admin@example.com"}})

    response = client.get("/activity-log/all", params={"limit": 1})

    assert response.status_code == 200
    entries = response.json()
    assert len(entries) == 1
    assert entries[0]["title"] == "create-admin"


def test_initial_admin_bootstrap_is_idempotent():
    db = build_session()

    admin, created = ensure_initial_admin(
        db, email="boot@example.com", password="boot-pass", first_name="Boot", last_name="Strap"
    )
    again, created_again = ensure_initial_admin(
        db, email="boot@example.com", password="boot-pass", first_name="Boot", last_name="Strap"
    )

    assert created is True
    assert created_again is False
    assert again.id == admin.id
    assert db.query(Admin).count() == 1


def test_initial_admin_bootstrap_refuses_non_admin_email():
    db = build_session()
    seed_catalog(db, with_product=False)

    with pytest.raises(InvalidInputError, match="non-admin"):
        ensure_initial_admin(db, email="seller@example.com", password="x", first_name="A", last_name="B")
