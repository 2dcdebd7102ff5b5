"""Service layer modules for the FxG Discord relay."""

from . import discord_service, embed_service, platform, relay_service

__all__ = [
    "discord_service",
    "embed_service",
    "platform",
    "relay_service",
]
