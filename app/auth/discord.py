import os
from typing import Any, Dict
from urllib.parse import urlencode

import httpx

from app.core.errors import ProviderError

DISCORD_API_BASE = os.getenv("DISCORD_API_BASE", "https://discord.com/api").rstrip("/")
DISCORD_CLIENT_ID = os.environ.get("DISCORD_CLIENT_ID", "")
DISCORD_CLIENT_SECRET = os.environ.get("DISCORD_CLIENT_SECRET", "")
DISCORD_REDIRECT_URI = os.environ.get("DISCORD_REDIRECT_URI", "")
DISCORD_SCOPES = "identify email"
DISCORD_TIMEOUT_S = float(os.getenv("DISCORD_TIMEOUT_S", "10"))


def authorize_url(state: str) -> str:
    query = urlencode(
        {
            "client_id": DISCORD_CLIENT_ID,
            "redirect_uri": DISCORD_REDIRECT_URI,
            "response_type": "code",
            "scope": DISCORD_SCOPES,
            "state": state,
            "prompt": "none",
        }
    )
    return f"{DISCORD_API_BASE}/oauth2/authorize?{query}"


async def exchange_code(code: str) -> str:
    if not DISCORD_CLIENT_ID or not DISCORD_CLIENT_SECRET:
        raise ProviderError("discord_not_configured", status_code=404)
    data = {
        "client_id": DISCORD_CLIENT_ID,
        "client_secret": DISCORD_CLIENT_SECRET,
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": DISCORD_REDIRECT_URI,
    }
    try:
        async with httpx.AsyncClient(timeout=DISCORD_TIMEOUT_S) as client:
            resp = await client.post(f"{DISCORD_API_BASE}/oauth2/token", data=data)
    except httpx.HTTPError as e:
        raise ProviderError("discord_unreachable") from e
    if resp.status_code >= 400:
        raise ProviderError("invalid_discord_code", status_code=401)
    token = resp.json().get("access_token")
    if not token:
        raise ProviderError("invalid_discord_code", status_code=401)
    return token


async def fetch_profile(access_token: str) -> Dict[str, Any]:
    try:
        async with httpx.AsyncClient(timeout=DISCORD_TIMEOUT_S) as client:
            resp = await client.get(
                f"{DISCORD_API_BASE}/users/@me",
                headers={"Authorization": f"Bearer {access_token}"},
            )
    except httpx.HTTPError as e:
        raise ProviderError("discord_unreachable") from e
    if resp.status_code >= 400:
        raise ProviderError("discord_profile_unavailable")
    return resp.json()
