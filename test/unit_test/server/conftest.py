from typing import AsyncGenerator, Callable, Dict

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from lanmic_site.core.database import get_session, get_session_factory
from lanmic_site.core.database.entities.users import User
from lanmic_site.server.core.config import UploadConfig
from lanmic_site.server.main import app
from lanmic_site.server.services.email_service import get_email_service
from lanmic_site.server.services.relay import EventRelay, get_event_relay
from lanmic_site.server.services.security import create_access_token
from lanmic_site.server.services.upload_service import UploadService, get_upload_service


@pytest.fixture
def relay() -> EventRelay:
    return EventRelay(queue_size=10)


@pytest.fixture
def upload_service(tmp_path) -> UploadService:
    return UploadService(UploadConfig(directory=str(tmp_path / "uploads"), max_size_bytes=1024))


@pytest_asyncio.fixture(name="client")
async def client_fixture(
    session: AsyncSession,
    session_factory,
    email_service,
    relay: EventRelay,
    upload_service: UploadService,
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the app with test dependencies."""

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_email_service] = lambda: email_service
    app.dependency_overrides[get_event_relay] = lambda: relay
    app.dependency_overrides[get_upload_service] = lambda: upload_service

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Callable[[User], Dict[str, str]]:
    def _auth_headers(user: User) -> Dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _auth_headers


@pytest_asyncio.fixture
async def owner(make_user) -> User:
    return await make_user()


@pytest_asyncio.fixture
async def other_user(make_user) -> User:
    return await make_user(email="other@example.com", username="other")
