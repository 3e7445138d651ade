import contextlib

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from wedding_api.admin.auth import create_admin_token
from wedding_api.admin.features.groups.router import get_admin_group_write_model
from wedding_api.admin.features.guests.router import get_admin_guest_write_model
from wedding_api.admin.features.stats.router import get_guest_snapshot_read_model
from wedding_api.admin.repository.read_models import SqlGuestSnapshotReadModel
from wedding_api.admin.repository.write_models import (
    SqlAdminGroupWriteModel,
    SqlAdminGuestWriteModel,
)
from wedding_api.email_service.notifications import RsvpNotifier, get_rsvp_notifier
from wedding_api.guests.features.lookup.router import get_group_read_model
from wedding_api.guests.features.submit_rsvp.router import get_rsvp_write_model
from wedding_api.guests.repository import orm_models  # noqa: F401 - registers tables
from wedding_api.guests.repository.read_models import SqlGroupReadModel
from wedding_api.guests.repository.write_models import SqlRSVPWriteModel
from wedding_api.guests.rsvp_window import RsvpWindow, get_rsvp_window
from wedding_api.main import app
from wedding_api.models.base import BaseModel
from wedding_api.tests.fakes import InMemoryEmailService, email_settings

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def db_session():
    """A fresh in-memory database per test; nothing is ever committed."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(BaseModel.metadata.create_all)

    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()
    await engine.dispose()


@pytest.fixture
def email_service():
    return InMemoryEmailService()


@pytest.fixture
def notifier(db_session, email_service):
    return RsvpNotifier(
        email_service=email_service,
        group_read_model=SqlGroupReadModel(session_overwrite=db_session),
        guest_write_model=SqlAdminGuestWriteModel(session_overwrite=db_session),
        config=email_settings(),
    )


@pytest.fixture
def sql_overrides(db_session, notifier):
    """Dependency overrides running the real SQL models against the test session."""
    return {
        get_group_read_model: lambda: SqlGroupReadModel(session_overwrite=db_session),
        get_rsvp_write_model: lambda: SqlRSVPWriteModel(session_overwrite=db_session),
        get_admin_guest_write_model: lambda: SqlAdminGuestWriteModel(session_overwrite=db_session),
        get_admin_group_write_model: lambda: SqlAdminGroupWriteModel(session_overwrite=db_session),
        get_guest_snapshot_read_model: lambda: SqlGuestSnapshotReadModel(
            session_overwrite=db_session
        ),
        get_rsvp_notifier: lambda: notifier,
        get_rsvp_window: lambda: RsvpWindow(deadline=None),
    }


@pytest.fixture
def client_factory():
    """Build an HTTP client for the app with the given dependency overrides installed."""

    @contextlib.asynccontextmanager
    async def _client(overrides: dict | None = None):
        app.dependency_overrides.update(overrides or {})
        try:
            transport = ASGITransport(app=app)
            async with AsyncClient(transport=transport, base_url="http://test") as client:
                yield client
        finally:
            app.dependency_overrides.clear()

    return _client


@pytest.fixture
def admin_headers():
    token = create_admin_token(admin_id="admin-1", email="admin@wedding.example")
    return {"Authorization": f"Bearer {token}"}
