"""
Pytest fixtures for test database, client, and authentication.

Every test gets a fresh schema (create_all / drop_all). The default
database is in-memory SQLite; point TEST_DATABASE_URL at Postgres to run
the same suite against the production dialect.
"""

import os
import tempfile
from typing import AsyncGenerator

# Settings are read at import time, so the environment has to be ready
# before anything from `app` is imported.
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["REDIS_ENABLED"] = "false"
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="venue-uploads-"))

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import get_db
from app.core.security import create_access_token, hash_password
from app.domain.enums import BookingStatus, FormType, UserRole
from app.models import FormWindow, GeneralBooking, SamuhLaganBooking, StudentAwardBooking, User
from factories import future_date, person

if TEST_DATABASE_URL.startswith("sqlite"):
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
else:
    test_engine = create_async_engine(TEST_DATABASE_URL, echo=False)

TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield session, then drop tables for isolation."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _create_user(db_session: AsyncSession, username: str, role: UserRole) -> User:
    user = User(
        email=f"{username}@example.com",
        username=username,
        hashed_password=hash_password("testpassword123"),
        role=role.value,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def _headers_for(user: User) -> dict:
    token = create_access_token(data={"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """A plain `user` account."""
    return await _create_user(db_session, "testuser", UserRole.USER)


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict:
    """Authorization headers with Bearer token."""
    return _headers_for(test_user)


@pytest_asyncio.fixture
async def admin_user(db_session: AsyncSession) -> User:
    return await _create_user(db_session, "admin", UserRole.ADMIN)


@pytest_asyncio.fixture
async def admin_headers(admin_user: User) -> dict:
    return _headers_for(admin_user)


@pytest_asyncio.fixture
async def form_manager_headers(db_session: AsyncSession) -> dict:
    return _headers_for(await _create_user(db_session, "formmanager", UserRole.FORM_MANAGER))


@pytest_asyncio.fixture
async def open_forms(db_session: AsyncSession) -> list[FormWindow]:
    """Both registration forms open with no time bounds."""
    forms = [FormWindow(form_type=ft.value, active=True) for ft in FormType]
    db_session.add_all(forms)
    await db_session.commit()
    return forms


@pytest_asyncio.fixture
async def general_booking(db_session: AsyncSession, test_user: User) -> GeneralBooking:
    """A pending hall booking submitted by test_user."""
    booking = GeneralBooking(
        user_id=test_user.id,
        email="ramesh@example.com",
        phone="9876543210",
        event_date=future_date(45),
        first_name="Ramesh",
        surname="Shah",
        event_type="Birthday",
        village_name="Anand",
        guest_count=120,
        additional_services=[],
        additional_notes="",
        is_samaj_member=False,
        event_document="http://test/uploads/documents/id.pdf",
        document_type="Aadhar Card",
        documents=[],
        status=BookingStatus.PENDING.value,
    )
    db_session.add(booking)
    await db_session.commit()
    await db_session.refresh(booking)
    return booking


@pytest_asyncio.fixture
async def samuh_lagan_booking(db_session: AsyncSession, test_user: User) -> SamuhLaganBooking:
    booking = SamuhLaganBooking(
        user_id=test_user.id,
        email="priya@example.com",
        phone="9123456780",
        event_date=future_date(60),
        bride=person("Priya", "priya@example.com"),
        groom=person("Amit", "amit@example.com"),
        status=BookingStatus.PENDING.value,
    )
    db_session.add(booking)
    await db_session.commit()
    await db_session.refresh(booking)
    return booking


@pytest_asyncio.fixture
async def student_award_booking(db_session: AsyncSession, test_user: User) -> StudentAwardBooking:
    booking = StudentAwardBooking(
        user_id=test_user.id,
        email="kavya@example.com",
        phone="9988776655",
        name="Kavya Patel",
        address="4 Lake View, Surat",
        school_name="City High School",
        standard="10",
        board_name="GSEB",
        exam_year="2026",
        total_percentage=72.0,
        rank="none",
        marksheet="http://test/uploads/student-awards/marksheet.pdf",
        status=BookingStatus.PENDING.value,
    )
    db_session.add(booking)
    await db_session.commit()
    await db_session.refresh(booking)
    return booking
