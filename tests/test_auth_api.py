from urllib.parse import parse_qs, urlparse

import pytest
import httpx

from app.auth import discord
from app.auth.jwt import mint_refresh, mint_state
from app.core.errors import ProviderError
from tests.fixtures import auth_headers, make_user

PROFILE = {"id": "80351110224678912", "username": "nelly", "discriminator": "1337", "avatar": "8342729096ea3675442027381ff50dfe", "email": "nelly@example.com"}


@pytest.fixture
def fake_discord(monkeypatch):
    calls = {}

    async def exchange_code(code: str) -> str:
        calls["code"] = code
        return "discord-access"

    async def fetch_profile(access_token: str) -> dict:
        calls["token"] = access_token
        return dict(calls.get("profile", PROFILE))

    monkeypatch.setattr(discord, "exchange_code", exchange_code)
    monkeypatch.setattr(discord, "fetch_profile", fetch_profile)
    return calls


@pytest.mark.asyncio
async def test_authorize_url_carries_signed_state(client: httpx.AsyncClient, db):
    resp = await client.get("/v1/auth/discord/authorize")
    assert resp.status_code == 200
    body = resp.json()
    query = parse_qs(urlparse(body["url"]).query)
    assert query["state"] == [body["state"]]
    assert query["response_type"] == ["code"]
    assert "identify" in query["scope"][0]


@pytest.mark.asyncio
async def test_callback_signs_in_and_materializes_session(client: httpx.AsyncClient, db, fake_discord):
    resp = await client.post("/v1/auth/discord/callback", json={"code": "abc", "state": mint_state()})
    assert resp.status_code == 200
    tokens = resp.json()
    assert fake_discord == {"code": "abc", "token": "discord-access"}

    session = await client.get("/v1/auth/session", headers={"Authorization": f"Bearer {tokens['access']}"})
    assert session.status_code == 200
    data = session.json()
    assert data["role"] == "CONTRIBUTOR"
    assert data["discriminator"] == "1337"
    assert data["name"] == "nelly"
    assert data["avatar_url"] == "https://cdn.discordapp.com/avatars/80351110224678912/8342729096ea3675442027381ff50dfe.png"

    fake_discord["profile"] = {**PROFILE, "username": "nelly2", "avatar": None}
    again = await client.post("/v1/auth/discord/callback", json={"code": "def", "state": mint_state()})
    session2 = await client.get("/v1/auth/session", headers={"Authorization": f"Bearer {again.json()['access']}"})
    assert session2.json()["user_id"] == data["user_id"]
    assert session2.json()["name"] == "nelly2"
    assert session2.json()["avatar_url"].endswith("/embed/avatars/2.png")


@pytest.mark.asyncio
async def test_callback_rejects_forged_state(client: httpx.AsyncClient, db, fake_discord):
    resp = await client.post("/v1/auth/discord/callback", json={"code": "abc", "state": "forged"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "invalid_state"
    assert "code" not in fake_discord


@pytest.mark.asyncio
async def test_provider_failure_maps_to_error(client: httpx.AsyncClient, db, monkeypatch):
    async def exchange_code(code: str) -> str:
        raise ProviderError("invalid_discord_code", status_code=401)

    monkeypatch.setattr(discord, "exchange_code", exchange_code)
    resp = await client.post("/v1/auth/discord/callback", json={"code": "bad", "state": mint_state()})
    assert resp.status_code == 401
    assert resp.json()["detail"] == "invalid_discord_code"


@pytest.mark.asyncio
async def test_refresh_flow(client: httpx.AsyncClient, db):
    user = await make_user(db)
    resp = await client.post("/v1/auth/refresh", json={"refresh": mint_refresh(str(user.id))})
    assert resp.status_code == 200
    assert set(resp.json()) == {"access", "refresh"}

    access = auth_headers(user)["Authorization"].split()[1]
    resp = await client.post("/v1/auth/refresh", json={"refresh": access})
    assert resp.status_code == 401
    resp = await client.post("/v1/auth/refresh", json={"refresh": "garbage"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_session_requires_valid_token_and_user(client: httpx.AsyncClient, db):
    user = await make_user(db)
    headers = auth_headers(user)
    assert (await client.get("/v1/auth/session")).status_code == 401
    assert (await client.get("/v1/auth/session", headers={"Authorization": "Bearer nope"})).status_code == 401
    assert (await client.get("/v1/auth/session", headers=headers)).status_code == 200

    await db.delete(user)
    await db.commit()
    assert (await client.get("/v1/auth/session", headers=headers)).status_code == 401


@pytest.mark.asyncio
async def test_health(client: httpx.AsyncClient, db):
    resp = await client.get("/v1/health")
    assert resp.json() == {"ok": True}
