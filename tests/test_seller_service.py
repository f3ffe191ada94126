import pytest

from ecommerce_portal.core.errors import ConflictError, ConflictReason, ForbiddenError, NotFoundError
from ecommerce_portal.models.activity_log import ActivityLog
from ecommerce_portal.models.seller import Seller
from ecommerce_portal.models.user import User, UserType
from ecommerce_portal.repositories.transaction import STALE_RECORD_MESSAGE
from ecommerce_portal.schemas.seller import SellerCreate, SellerUpdate
from ecommerce_portal.services import sellers as seller_service
from ecommerce_portal.services.auth import verify_password
from tests.fixtures_data import (
    ADMIN_PRINCIPAL,
    HAPPY_PATH_SELLER,
    SELLER_PRINCIPAL,
    build_session,
    build_session_factory,
    seed_catalog,
)


def _counts(db):
    return db.query(User).count(), db.query(Seller).count(), db.query(ActivityLog).count()


def test_self_registration_creates_user_seller_and_activity_entry():
    db = build_session()

    outcome = seller_service.create(
        db,
        SellerCreate(**HAPPY_PATH_SELLER),
        created_by_admin=False,
        ip_address="10.0.0.5",
    )

    assert outcome.message == "Created Seller Successfully."
    seller = db.query(Seller).one()
    assert seller.user.email == "new.seller@example.com"
    assert seller.user.user_type == UserType.SELLER
    assert seller.active is True
    assert verify_password("s3cret-pass", seller.user.password_hash)
    entry = db.query(ActivityLog).one()
    assert entry.title == "create-seller"
    assert entry.description == "A new seller named Nina Market was created."
    assert entry.ip_address == "10.0.0.5"


def test_duplicate_email_writes_nothing():
    db = build_session()
    seed_catalog(db, with_product=False)
    before = _counts(db)

    with pytest.raises(ConflictError) as exc_info:
        seller_service.create(
            db,
            SellerCreate(**{**HAPPY_PATH_SELLER, "email": "Seller@Example.com"}),
            created_by_admin=True,
        )

    assert exc_info.value.reason == ConflictReason.EMAIL_TAKEN
    assert exc_info.value.message == "The email address that you provided is already taken."
    assert _counts(db) == before


def test_password_mismatch_on_self_registration_writes_nothing():
    db = build_session()

    with pytest.raises(ConflictError) as exc_info:
        seller_service.create(
            db,
            SellerCreate(**{**HAPPY_PATH_SELLER, "password": "a", "confirm_password": "b"}),
            created_by_admin=False,
        )

    assert exc_info.value.reason == ConflictReason.PASSWORD_MISMATCH
    assert _counts(db) == (0, 0, 0)


def test_admin_creation_does_not_require_confirmation():
    db = build_session()
    details = SellerCreate(**{**HAPPY_PATH_SELLER, "confirm_password": None})

    seller_service.create(db, details, created_by_admin=True)

    assert _counts(db) == (1, 1, 1)


def test_failure_after_user_insert_leaves_no_orphaned_user(monkeypatch):
    db = build_session()

    def _boom(*args, **kwargs):
        raise RuntimeError("seller insert failed")

    monkeypatch.setattr(seller_service.sellers, "add", _boom)

    with pytest.raises(RuntimeError):
        seller_service.create(db, SellerCreate(**HAPPY_PATH_SELLER), created_by_admin=True)

    assert _counts(db) == (0, 0, 0)


def test_deactivating_unknown_seller_touches_no_user():
    db = build_session()
    seed_catalog(db, with_product=False)

    with pytest.raises(NotFoundError) as exc_info:
        seller_service.set_active(db, 999, False)

    assert exc_info.value.message == "No Seller Found."
    assert all(user.active for user in db.query(User).all())


def test_mutating_seller_linked_to_non_seller_user_is_forbidden():
    db = build_session()
    seed_catalog(db, with_product=False)
    db.add(Seller(id=2, user_id=1, first_name="Not", last_name="Seller"))
    db.commit()

    with pytest.raises(ForbiddenError):
        seller_service.set_active(db, 2, False)
    with pytest.raises(ForbiddenError):
        seller_service.update(db, 2, SellerUpdate(first_name="Changed"))

    admin_user = db.query(User).filter(User.id == 1).one()
    assert admin_user.active is True
    assert db.query(Seller).filter(Seller.id == 2).one().first_name == "Not"
    assert db.query(ActivityLog).count() == 0


def test_set_active_flips_linked_user():
    db = build_session()
    seed_catalog(db, with_product=False)

    assert seller_service.set_active(db, 1, False).message == "Deactivated seller successfully."
    assert db.query(User).filter(User.id == 2).one().active is False
    assert seller_service.set_active(db, 1, True).message == "Activated seller successfully."
    assert db.query(User).filter(User.id == 2).one().active is True


def test_update_applies_fields_and_logs_activity():
    db = build_session()
    seed_catalog(db, with_product=False)

    outcome = seller_service.update(
        db,
        1,
        SellerUpdate(email="renamed@example.com", first_name=" Samantha ", address="1 New Road"),
        ip_address="10.0.0.9",
    )

    assert outcome.message == "Updated seller details successfully."
    seller = db.query(Seller).filter(Seller.id == 1).one()
    assert seller.first_name == "Samantha"
    assert seller.address == "1 New Road"
    assert seller.user.email == "renamed@example.com"
    assert db.query(ActivityLog).one().title == "update-seller"


def test_update_to_taken_email_is_conflict():
    db = build_session()
    seed_catalog(db, with_product=False)

    with pytest.raises(ConflictError) as exc_info:
        seller_service.update(db, 1, SellerUpdate(email="admin@example.com"))

    assert exc_info.value.reason == ConflictReason.EMAIL_TAKEN
    assert db.query(User).filter(User.id == 2).one().email == "seller@example.com"


def test_update_of_seller_changed_by_another_session_is_stale_conflict():
    session_factory = build_session_factory()
    first = session_factory()
    seed_catalog(first, with_product=False)
    second = session_factory()

    stale_seller = first.query(Seller).filter(Seller.id == 1).one()
    assert stale_seller.user.email == "seller@example.com"
    fresh_seller = second.query(Seller).filter(Seller.id == 1).one()
    fresh_seller.address = "2 Winner Lane"
    second.commit()

    with pytest.raises(ConflictError) as exc_info:
        seller_service.update(first, 1, SellerUpdate(address="3 Loser Lane"))

    assert exc_info.value.reason == ConflictReason.STALE_RECORD
    assert exc_info.value.message == STALE_RECORD_MESSAGE
    first.expire_all()
    assert first.query(Seller).filter(Seller.id == 1).one().address == "2 Winner Lane"
    assert first.query(ActivityLog).count() == 0


def test_update_without_fields_is_noop():
    db = build_session()
    seed_catalog(db, with_product=False)

    assert seller_service.update(db, 1, SellerUpdate()).is_noop
    assert db.query(ActivityLog).count() == 0


def test_seller_can_only_edit_own_profile():
    db = build_session()
    seed_catalog(db, with_product=False)
    db.add(User(id=3, email="other@example.com", password_hash="hashed", user_type=UserType.SELLER, active=True))
    db.add(Seller(id=2, user_id=3, first_name="Other", last_name="Seller"))
    db.commit()

    seller_service.ensure_actor_can_edit(db, 1, SELLER_PRINCIPAL)
    seller_service.ensure_actor_can_edit(db, 2, ADMIN_PRINCIPAL)
    with pytest.raises(ForbiddenError):
        seller_service.ensure_actor_can_edit(db, 2, SELLER_PRINCIPAL)
