import asyncio
import uuid
import pytest
from jose import jwt
from pydantic import SecretStr

from actionthreads.api.main import app
from actionthreads.core.config import get_settings
from actionthreads.services.user import user_id_from_subject

API = "/api/v1"
SECRET = "test-shared-secret"


@pytest.fixture()
def shared_secret(settings):
    configured = settings.model_copy(update={"auth_jwt_secret": SecretStr(SECRET)})
    app.dependency_overrides[get_settings] = lambda: configured
    return configured


def _token(claims: dict, secret: str = SECRET) -> str:
    return jwt.encode({"aud": "authenticated", **claims}, secret, algorithm="HS256")


@pytest.mark.asyncio
@pytest.mark.integration
async def test_missing_token_is_rejected(client):
    r = await client.get(f"{API}/threads")
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "AUTH_REQUIRED"
    assert r.headers["www-authenticate"] == "Bearer"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_token_provisions_user(client, shared_secret):
    sub = str(uuid.uuid4())
    headers = {"Authorization": f"Bearer {_token({'sub': sub, 'email': 'carol@example.com'})}"}
    first = await client.get(f"{API}/users/me", headers=headers)
    assert first.status_code == 200
    assert first.json()["id"] == sub
    assert first.json()["email"] == "carol@example.com"

    second = await client.get(f"{API}/users/me", headers=headers)
    assert second.status_code == 200
    assert second.json()["id"] == sub

    created = await client.post(f"{API}/threads", json={"name": "Via token"}, headers=headers)
    assert created.status_code == 201
    assert created.json()["userId"] == sub


@pytest.mark.asyncio
@pytest.mark.integration
async def test_non_uuid_subject_is_mapped(client, shared_secret):
    headers = {"Authorization": f"Bearer {_token({'sub': 'auth0|abc123', 'email': 'dave@example.com'})}"}
    r = await client.get(f"{API}/users/me", headers=headers)
    assert r.status_code == 200
    assert r.json()["id"] == str(user_id_from_subject("auth0|abc123"))


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize(
    "authorization",
    [
        "Bearer not-a-jwt",
        f"Bearer {_token({'sub': str(uuid.uuid4()), 'email': 'x@example.com'}, secret='wrong')}",
        f"Bearer {_token({'sub': str(uuid.uuid4())})}",
        "Basic dXNlcjpwYXNz",
    ],
    ids=["malformed", "bad-signature", "unknown-user-without-email", "not-bearer"],
)
async def test_bad_tokens_are_rejected(client, shared_secret, authorization):
    r = await client.get(f"{API}/users/me", headers={"Authorization": authorization})
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "AUTH_REQUIRED"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_parallel_first_requests_share_one_user(client, shared_secret):
    sub = str(uuid.uuid4())
    headers = {"Authorization": f"Bearer {_token({'sub': sub, 'email': 'erin@example.com'})}"}
    responses = await asyncio.gather(*(client.get(f"{API}/threads", headers=headers) for _ in range(4)))
    assert [r.status_code for r in responses] == [200, 200, 200, 200]

    me = await client.get(f"{API}/users/me", headers=headers)
    assert me.json()["id"] == sub


@pytest.mark.asyncio
@pytest.mark.integration
async def test_email_of_another_account_is_rejected(client, shared_secret):
    first = {"Authorization": f"Bearer {_token({'sub': str(uuid.uuid4()), 'email': 'frank@example.com'})}"}
    assert (await client.get(f"{API}/users/me", headers=first)).status_code == 200

    second = {"Authorization": f"Bearer {_token({'sub': str(uuid.uuid4()), 'email': 'frank@example.com'})}"}
    r = await client.get(f"{API}/users/me", headers=second)
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "AUTH_REQUIRED"
