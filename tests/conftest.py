"""Pytest configuration and fixtures for job board client tests."""

from unittest.mock import Mock

import httpx
import pytest

from jobboard.client import ApiClient
from jobboard.config import Settings
from jobboard.services import SessionManager
from jobboard.storage import TokenStore
from tests.fake_backend import BackendState, create_app

EMPLOYER_EMAIL = "hr@acme.test"
SEEKER_EMAIL = "jane@example.com"
PASSWORD = "secret123"


@pytest.fixture
def settings(tmp_path):
    """Settings isolated from the developer's .env and home directory."""
    return Settings(
        _env_file=None,
        api_base_url="http://testserver/api",
        token_path=tmp_path / "token",
        search_debounce_seconds=0.05,
        notification_polling=False,
    )


@pytest.fixture
def token_store(settings):
    return TokenStore(settings.token_path)


@pytest.fixture
def backend():
    """Fake backend seeded with one employer, one job seeker and 25 jobs."""
    state = BackendState()
    state.add_user(EMPLOYER_EMAIL, PASSWORD, "employer", "Alex", "Hiring", companyName="Acme Corp")
    state.add_user(SEEKER_EMAIL, PASSWORD, "job_seeker", "Jane", "Doe", skills=["python", "sql"])
    for i in range(25):
        if i % 2 == 0:
            state.add_job(
                EMPLOYER_EMAIL,
                title=f"Python Developer {i}",
                location="Anchorage, AK",
                jobType="full-time",
                salaryMin=80000,
                salaryMax=120000,
            )
        else:
            state.add_job(EMPLOYER_EMAIL, title=f"Data Analyst {i}", location="Remote", jobType="contract")
    return state


@pytest.fixture
def api_app(backend):
    return create_app(backend)


@pytest.fixture
def transport(api_app):
    return httpx.ASGITransport(app=api_app)


@pytest.fixture
async def api_client(settings, token_store, transport):
    """ApiClient wired to the fake backend over ASGI."""
    client = ApiClient(settings, token_store, transport=transport)
    yield client
    await client.aclose()


@pytest.fixture
def session(api_client, token_store):
    return SessionManager(api_client, token_store)


@pytest.fixture
def seeker_token(backend, token_store):
    """Persist a valid job seeker token, as if from a previous run."""
    token = backend.issue_token(SEEKER_EMAIL)
    token_store.set(token)
    return token


@pytest.fixture
def employer_token(backend, token_store):
    token = backend.issue_token(EMPLOYER_EMAIL)
    token_store.set(token)
    return token


@pytest.fixture
async def seeker_session(session, seeker_token):
    await session.initialize()
    return session


@pytest.fixture
async def employer_session(session, employer_token):
    await session.initialize()
    return session


@pytest.fixture
def offline_session(token_store):
    """SessionManager over a mocked client, for tests that never hit the network."""
    return SessionManager(Mock(spec=ApiClient), token_store)
