"""Unit tests for AccountService."""

import pytest

from storefront.core.exceptions import Conflict, ValidationFailed
from storefront.domain.services import AccountService
from storefront.infrastructure.auth import verify_password
from storefront.infrastructure.persistence.repositories import UserRepository


@pytest.mark.asyncio
async def test_register_creates_user(db_session):
    user = await AccountService(db_session).register("bob01", "bob@mail.com", "secret1")

    assert user.id is not None
    assert user.role == "USER"
    assert user.tokens == []
    assert user.cart_items == []
    assert user.password_hash != "secret1"
    assert verify_password("secret1", user.password_hash)


@pytest.mark.asyncio
async def test_registered_user_cart_usable_after_commit(db_session):
    user = await AccountService(db_session).register("bob01", "bob@mail.com", "secret1")

    assert user.cart_quantity == 0
    assert len(user.cart_items) == 0


@pytest.mark.asyncio
async def test_register_reports_first_invalid_field(db_session):
    with pytest.raises(ValidationFailed) as exc_info:
        await AccountService(db_session).register("b", "not-an-email", "x")

    assert exc_info.value.field == "account"
    assert exc_info.value.status_code == 400


@pytest.mark.asyncio
async def test_duplicate_account_conflicts(db_session, user):
    with pytest.raises(Conflict) as exc_info:
        await AccountService(db_session).register(user.account, "other@mail.com", "secret1")

    assert exc_info.value.status_code == 409
    assert exc_info.value.field == "account"


@pytest.mark.asyncio
async def test_duplicate_email_conflicts(db_session, user):
    with pytest.raises(Conflict) as exc_info:
        await AccountService(db_session).register("carol01", user.email, "secret1")

    assert exc_info.value.field == "email"


@pytest.mark.asyncio
async def test_ensure_admin_creates_admin(db_session):
    admin = await AccountService(db_session).ensure_admin("root01", "root@mail.com", "rootpw")

    assert admin.is_admin


@pytest.mark.asyncio
async def test_ensure_admin_promotes_existing_account(db_session, user):
    password_hash = user.password_hash

    promoted = await AccountService(db_session).ensure_admin(
        user.account, user.email, "ignored"
    )

    assert promoted.id == user.id
    assert promoted.is_admin
    assert promoted.password_hash == password_hash
    stored = await UserRepository(db_session).get_by_account(user.account)
    assert stored.role == "ADMIN"
