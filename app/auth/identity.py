"""Turn a Discord profile into the identity fields stored on ``User``."""
import os
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

DISCORD_CDN_BASE = os.environ.get("DISCORD_CDN_BASE", "https://cdn.discordapp.com").rstrip("/")
DEFAULT_AVATAR_COUNT = 5
ANIMATED_PREFIX = "a_"
_LEADING_DIGITS = re.compile(r"\s*(\d+)")


@dataclass(frozen=True)
class Identity:
    external_id: str
    name: str
    avatar_url: str
    discriminator: str
    email: Optional[str] = None


def default_avatar_index(discriminator: Optional[str]) -> int:
    # leading digits only, so "12ab" reads as 12
    m = _LEADING_DIGITS.match(discriminator or "")
    if not m:
        return 0
    return int(m.group(1)) % DEFAULT_AVATAR_COUNT


def avatar_url(external_id: str, avatar_hash: Optional[str], discriminator: Optional[str]) -> str:
    if not avatar_hash:
        return f"{DISCORD_CDN_BASE}/embed/avatars/{default_avatar_index(discriminator)}.png"
    ext = "gif" if avatar_hash.startswith(ANIMATED_PREFIX) else "png"
    return f"{DISCORD_CDN_BASE}/avatars/{external_id}/{avatar_hash}.{ext}"


def normalize_profile(profile: Dict[str, Any]) -> Identity:
    external_id = str(profile["id"])
    discriminator = str(profile.get("discriminator") or "")
    return Identity(
        external_id=external_id,
        name=profile.get("username") or "",
        avatar_url=avatar_url(external_id, profile.get("avatar"), discriminator),
        discriminator=discriminator,
        email=profile.get("email") or None,
    )
