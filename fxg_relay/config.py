"""Environment-driven configuration for the relay."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

DEFAULT_PORT = 3000

# Seconds to wait for Discord to resolve a user before giving up.
USER_FETCH_TIMEOUT_SECONDS = 10.0

# Interview channels are named "int-<n>".
INTERVIEW_CHANNEL_PREFIX = "int-"

# Custom id carried by the "Join Interview" button.
JOIN_INTERVIEW_CUSTOM_ID = "join_interview"

# Only this application type gets a public welcome post on approval.
WELCOME_APPLICATION_TYPE = "helper"

REQUIRED_ENV_VARS = (
    "DISCORD_BOT_TOKEN",
    "API_SECRET",
    "DISCORD_GUILD_ID",
    "INTERVIEW_CATEGORY_ID",
)


def _parse_id(value: Optional[str]) -> Optional[int]:
    """Return a Discord snowflake from an environment string, or None if unset."""
    if value is None or not value.strip():
        return None
    return int(value.strip())


@dataclass(frozen=True)
class RelayConfig:
    """Settings shared by the HTTP layer and the Discord client."""

    bot_token: str = ""
    api_secret: str = ""
    guild_id: Optional[int] = None
    interview_category_id: Optional[int] = None
    approved_category_id: Optional[int] = None
    denied_category_id: Optional[int] = None
    member_role_id: Optional[int] = None
    team_role_id: Optional[int] = None
    welcome_channel_id: Optional[int] = None
    port: int = DEFAULT_PORT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RelayConfig":
        """Build a config from ``os.environ`` (or the given mapping)."""
        env = os.environ if environ is None else environ
        return cls(
            bot_token=env.get("DISCORD_BOT_TOKEN", ""),
            api_secret=env.get("API_SECRET", ""),
            guild_id=_parse_id(env.get("DISCORD_GUILD_ID")),
            interview_category_id=_parse_id(env.get("INTERVIEW_CATEGORY_ID")),
            approved_category_id=_parse_id(env.get("APPROVED_CATEGORY_ID")),
            denied_category_id=_parse_id(env.get("DENIED_CATEGORY_ID")),
            member_role_id=_parse_id(env.get("MEMBER_ROLE_ID")),
            team_role_id=_parse_id(env.get("TEAM_ROLE_ID")),
            welcome_channel_id=_parse_id(env.get("WELCOME_CHANNEL_ID")),
            port=int(env.get("PORT") or DEFAULT_PORT),
        )

    def missing_required(self) -> List[str]:
        """Return the names of required settings that are not set."""
        values = {
            "DISCORD_BOT_TOKEN": self.bot_token,
            "API_SECRET": self.api_secret,
            "DISCORD_GUILD_ID": self.guild_id,
            "INTERVIEW_CATEGORY_ID": self.interview_category_id,
        }
        return [name for name in REQUIRED_ENV_VARS if not values[name]]

    @property
    def approval_role_ids(self) -> List[int]:
        """Roles granted on approval, in a stable order."""
        if self.member_role_id is None or self.team_role_id is None:
            raise RuntimeError("MEMBER_ROLE_ID and TEAM_ROLE_ID must both be set to add roles")
        return [self.member_role_id, self.team_role_id]
