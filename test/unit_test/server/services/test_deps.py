"""Unit tests for the shared API dependencies."""

from datetime import timedelta

import pytest
from fastapi import HTTPException
from fastapi.routing import APIRoute
from fastapi.security import HTTPAuthorizationCredentials
from starlette.requests import Request

from lanmic_site.core.database import get_session, get_session_factory
from lanmic_site.server.api.v1 import events
from lanmic_site.server.services.deps import (
    SessionDep,
    extract_access_token,
    get_current_user,
    get_optional_user,
    get_verified_user,
)
from lanmic_site.server.services.security import create_access_token


def _request(cookie: str = "") -> Request:
    headers = [(b"cookie", cookie.encode())] if cookie else []
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers, "query_string": b""})


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestExtractAccessToken:
    def test_bearer_wins_over_cookie(self):
        assert extract_access_token(_request("access_token=from-cookie"), _bearer("from-header")) == "from-header"

    def test_cookie_fallback(self):
        assert extract_access_token(_request("access_token=from-cookie"), None) == "from-cookie"

    def test_missing(self):
        assert extract_access_token(_request(), None) is None


class TestCurrentUser:
    @pytest.mark.asyncio
    async def test_resolves_user(self, session, make_user):
        user = await make_user()
        resolved = await get_current_user(_request(), session, _bearer(create_access_token(user.id)))
        assert resolved.id == user.id

    @pytest.mark.asyncio
    async def test_missing_token(self, session):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(_request(), session, None)
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == "Unauthorized"

    @pytest.mark.asyncio
    async def test_deleted_user(self, session):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(_request(), session, _bearer(create_access_token(4242)))
        assert exc_info.value.detail == "User not found"

    @pytest.mark.asyncio
    async def test_verified_user_required(self, make_user):
        user = await make_user(is_verified=False)
        with pytest.raises(HTTPException) as exc_info:
            await get_verified_user(user)
        assert exc_info.value.status_code == 403


class TestOptionalUser:
    @pytest.mark.asyncio
    async def test_query_token(self, session_factory, make_user):
        user = await make_user()
        resolved = await get_optional_user(_request(), session_factory, None, token=create_access_token(user.id))
        assert resolved.id == user.id

    @pytest.mark.asyncio
    async def test_invalid_token_is_anonymous(self, session_factory):
        assert await get_optional_user(_request(), session_factory, _bearer("garbage"), token=None) is None

    @pytest.mark.asyncio
    async def test_expired_token_is_anonymous(self, session_factory, make_user):
        user = await make_user()
        expired = create_access_token(user.id, lifetime=timedelta(seconds=-5))
        assert await get_optional_user(_request(), session_factory, None, token=expired) is None

    @pytest.mark.asyncio
    async def test_no_token(self, session_factory):
        assert await get_optional_user(_request(), session_factory, None, token=None) is None

    @pytest.mark.asyncio
    async def test_lookup_session_is_closed_before_returning(self, session_factory, make_user):
        user = await make_user()
        opened = []

        def tracking_factory():
            session = session_factory()
            opened.append(session)
            return session

        resolved = await get_optional_user(_request(), tracking_factory, None, token=create_access_token(user.id))

        assert resolved.id == user.id
        assert resolved.email == user.email
        assert len(opened) == 1
        assert not opened[0].in_transaction()


def _dependency_calls(dependant) -> set:
    calls = set()
    for sub in dependant.dependencies:
        calls.add(sub.call)
        calls |= _dependency_calls(sub)
    return calls


def test_event_stream_does_not_hold_a_request_session():
    route = next(r for r in events.router.routes if isinstance(r, APIRoute))
    calls = _dependency_calls(route.dependant)

    assert get_session not in calls
    assert get_session_factory in calls


def test_session_dep_is_annotated():
    assert hasattr(SessionDep, "__metadata__")
    assert SessionDep.__metadata__[0].dependency.__name__ == "get_session"
