"""Pytest configuration for all tests."""

import os
import tempfile

# Settings are cached on first use, so the environment must be in place
# before anything from storefront is imported.
os.environ["STOREFRONT_ENVIRONMENT"] = "testing"
os.environ["STOREFRONT_DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["STOREFRONT_SECRET_KEY"] = "test-secret-key-at-least-256-bits-long-for-security"
os.environ["STOREFRONT_PASSWORD_HASH_TIME_COST"] = "1"
os.environ["STOREFRONT_RATE_LIMIT_ENABLED"] = "false"
os.environ["STOREFRONT_STORAGE_PATH"] = tempfile.mkdtemp(prefix="storefront-images-")
os.environ["STOREFRONT_LOG_LEVEL"] = "WARNING"

from typing import AsyncGenerator, Awaitable, Callable  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from storefront.domain.entities import UserRole  # noqa: E402
from storefront.domain.services import AccountService, AuthService  # noqa: E402
from storefront.infrastructure.persistence import models  # noqa: E402, F401
from storefront.infrastructure.persistence.database import Base  # noqa: E402
from storefront.infrastructure.persistence.models import ProductModel, UserModel  # noqa: E402

USER_PASSWORD = "secret1"
ADMIN_PASSWORD = "admin123"

ProductFactory = Callable[..., Awaitable[ProductModel]]


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite engine with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client with overridden database dependency."""
    from storefront.infrastructure.api.app import app
    from storefront.infrastructure.persistence.database import get_db_session

    app.dependency_overrides[get_db_session] = lambda: db_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides = {}


@pytest_asyncio.fixture
async def user(db_session: AsyncSession) -> UserModel:
    """A registered account with the USER role."""
    return await AccountService(db_session).register("alice01", "alice@mail.com", USER_PASSWORD)


@pytest_asyncio.fixture
async def admin(db_session: AsyncSession) -> UserModel:
    """A registered account with the ADMIN role."""
    return await AccountService(db_session).register(
        "admin01", "admin@mail.com", ADMIN_PASSWORD, role=UserRole.ADMIN
    )


@pytest_asyncio.fixture
async def user_token(db_session: AsyncSession, user: UserModel) -> str:
    """A live session token of the USER account."""
    token, _ = await AuthService(db_session).login(user.account, USER_PASSWORD)
    return token


@pytest_asyncio.fixture
async def admin_token(db_session: AsyncSession, admin: UserModel) -> str:
    """A live session token of the ADMIN account."""
    token, _ = await AuthService(db_session).login(admin.account, ADMIN_PASSWORD)
    return token


@pytest.fixture
def user_headers(user_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {user_token}"}


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def make_product(db_session: AsyncSession) -> ProductFactory:
    """Factory inserting products directly through the session."""

    async def _make(
        name: str = "Widget",
        description: str = "A useful widget",
        price: float = 9.5,
        sell: bool = True,
        image: str = "widget.png",
    ) -> ProductModel:
        product = ProductModel(
            name=name,
            description=description,
            price=price,
            sell=sell,
            image=image,
        )
        db_session.add(product)
        await db_session.commit()
        return product

    return _make
