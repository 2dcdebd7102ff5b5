"""Applicant workflow: DMs, role grants and interview channel bookkeeping."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

from fxg_relay.config import (
    USER_FETCH_TIMEOUT_SECONDS,
    WELCOME_APPLICATION_TYPE,
    RelayConfig,
)
from fxg_relay.services import embed_service
from fxg_relay.services.platform import ChatPlatform
from fxg_relay.storage import ChannelRegistry
from fxg_relay.utils.loop import EventLoopThread

_LOGGER = logging.getLogger(__name__)

APPLICANT_FIELDS = ("discordId", "applicantName", "applicationType")

Reply = Callable[[str], Awaitable[Any]]


class UserResolutionTimeout(Exception):
    """Discord did not resolve a user within the allowed time."""


@dataclass(frozen=True)
class ApplicantRequest:
    """Body of every ``/send-*-dm`` call."""

    discord_id: Any
    applicant_name: Any
    application_type: Any

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "ApplicantRequest":
        return cls(
            discord_id=payload.get("discordId"),
            applicant_name=payload.get("applicantName"),
            application_type=payload.get("applicationType"),
        )

    def missing_fields(self) -> List[str]:
        values = dict(zip(APPLICANT_FIELDS, (self.discord_id, self.applicant_name, self.application_type)))
        return [name for name in APPLICANT_FIELDS if not values[name]]


def _configured(value: Optional[int], env_name: str) -> int:
    if value is None:
        raise RuntimeError(f"{env_name} is not configured")
    return value


class RelayService:
    """Owns the readiness flag and channel registry for one running bot.

    Coroutines are executed on the Discord client's event loop, so the
    registry is only ever touched from that loop's thread.
    """

    def __init__(
        self,
        config: RelayConfig,
        platform: ChatPlatform,
        loop_thread: Optional[EventLoopThread] = None,
        *,
        user_fetch_timeout: float = USER_FETCH_TIMEOUT_SECONDS,
    ) -> None:
        self.config = config
        self.platform = platform
        self.loop_thread = loop_thread
        self.user_fetch_timeout = user_fetch_timeout
        self.registry = ChannelRegistry()
        self.ready = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def dispatch(self, coro: Awaitable[Any]) -> Any:
        """Run ``coro`` on the bot loop from a Flask worker thread."""
        if self.loop_thread is None:
            raise RuntimeError("RelayService has no event loop attached")
        return self.loop_thread.run(coro)

    async def handle_ready(self) -> None:
        _LOGGER.info("Bot logged in as %s", self.platform.bot_tag)
        try:
            await self.rebuild_channel_counter()
        except Exception:
            _LOGGER.exception("Could not scan interview channels; counter starts at %s", self.registry.counter)
        self.ready = True

    def handle_resumed(self) -> None:
        _LOGGER.info("Discord session resumed")
        self.ready = True

    def handle_disconnect(self) -> None:
        if self.ready:
            _LOGGER.warning("Discord connection lost; rejecting requests until reconnected")
        self.ready = False

    async def rebuild_channel_counter(self) -> int:
        category_id = _configured(self.config.interview_category_id, "INTERVIEW_CATEGORY_ID")
        channels = await self.platform.list_category_channels(category_id)
        counter = self.registry.seed_counter(channel.name for channel in channels)
        _LOGGER.info("Interview channel counter set to %s from %s channels", counter, len(channels))
        return counter

    # ------------------------------------------------------------------
    # Platform helpers
    # ------------------------------------------------------------------

    async def resolve_user(self, user_id) -> Any:
        """Fetch a user, giving up after ``user_fetch_timeout`` seconds."""
        try:
            return await asyncio.wait_for(self.platform.fetch_user(user_id), self.user_fetch_timeout)
        except asyncio.TimeoutError:
            raise UserResolutionTimeout("Discord API timeout") from None

    async def _registered_channel(self, applicant_id) -> Optional[Any]:
        channel_id = self.registry.get(applicant_id)
        if channel_id is None:
            return None
        return await self.platform.fetch_channel(channel_id)

    # ------------------------------------------------------------------
    # HTTP-triggered workflows
    # ------------------------------------------------------------------

    async def send_interview_invite(self, applicant: ApplicantRequest) -> str:
        user = await self.resolve_user(applicant.discord_id)
        embed = embed_service.interview_invitation(applicant.applicant_name, applicant.application_type)
        await self.platform.send_direct_message(user, embed, join_button=True)
        return f"Interview DM sent to {user}"

    async def approve(self, applicant: ApplicantRequest) -> str:
        user = await self.resolve_user(applicant.discord_id)
        member = await self.platform.fetch_member(applicant.discord_id)
        await self.platform.add_roles(member, self.config.approval_role_ids)
        effects = ["roles added"]

        channel = await self._registered_channel(applicant.discord_id)
        if channel is not None:
            category_id = _configured(self.config.approved_category_id, "APPROVED_CATEGORY_ID")
            await self.platform.move_channel(channel, category_id)
            effects.append("channel moved to approved")

        if applicant.application_type == WELCOME_APPLICATION_TYPE:
            welcome_channel_id = _configured(self.config.welcome_channel_id, "WELCOME_CHANNEL_ID")
            await self.platform.send_channel_message(
                welcome_channel_id,
                f"<@{user.id}>",
                embed_service.helper_welcome(user.id),
            )
            effects.append("welcome message sent")

        embed = embed_service.application_approved(applicant.applicant_name, applicant.application_type)
        await self.platform.send_direct_message(user, embed)
        return f"Approval DM sent to {user}, " + ", ".join(effects)

    async def deny(self, applicant: ApplicantRequest) -> str:
        user = await self.resolve_user(applicant.discord_id)
        effects = []

        channel = await self._registered_channel(applicant.discord_id)
        if channel is not None:
            category_id = _configured(self.config.denied_category_id, "DENIED_CATEGORY_ID")
            await self.platform.move_channel(channel, category_id)
            await self.platform.remove_member_overwrite(channel, user)
            effects.append("channel moved to denied")
        if self.registry.forget(applicant.discord_id) is not None:
            effects.append("channel record cleared")

        embed = embed_service.application_denied(applicant.applicant_name, applicant.application_type)
        await self.platform.send_direct_message(user, embed)
        return ", ".join([f"Denial DM sent to {user}"] + effects)

    async def approve_career(self, applicant: ApplicantRequest) -> str:
        user = await self.resolve_user(applicant.discord_id)
        member = await self.platform.fetch_member(applicant.discord_id)
        await self.platform.add_roles(member, self.config.approval_role_ids)

        embed = embed_service.career_approved(applicant.applicant_name, applicant.application_type)
        await self.platform.send_direct_message(user, embed)
        return f"Career approval DM sent to {user}, roles added"

    async def deny_career(self, applicant: ApplicantRequest) -> str:
        user = await self.resolve_user(applicant.discord_id)
        embed = embed_service.career_denied(applicant.applicant_name, applicant.application_type)
        await self.platform.send_direct_message(user, embed)
        return f"Career denial DM sent to {user}"

    # ------------------------------------------------------------------
    # Interaction-triggered workflow
    # ------------------------------------------------------------------

    async def handle_join_click(self, user_id, reply: Reply) -> None:
        """Open (or point to) the clicking user's private interview channel.

        ``reply`` sends an ephemeral message back to the user. Failures are
        reported through it; nothing created before the failure is undone.
        """
        try:
            try:
                member = await self.platform.fetch_member(user_id)
            except Exception:
                _LOGGER.exception("Could not resolve %s as a guild member", user_id)
                await reply("❌ We couldn't find you in the FxG server. Please join the server and try again.")
                return

            if self.registry.get(user_id) is not None:
                existing = await self._registered_channel(user_id)
                if existing is not None:
                    await reply(f"You already have an interview channel: <#{existing.id}>")
                    return
                # Channel deleted out of band; start over.
                self.registry.forget(user_id)

            category_id = _configured(self.config.interview_category_id, "INTERVIEW_CATEGORY_ID")
            name = self.registry.next_channel_name()
            channel = await self.platform.create_interview_channel(name, category_id, member)
            self.registry.record(user_id, channel.id)
            _LOGGER.info("Created interview channel %s for %s", name, user_id)

            await self.platform.send_direct_message(member, embed_service.interview_channel_ready(channel.id))
            await reply(f"✅ Your interview channel has been created: <#{channel.id}>")
        except Exception as exc:
            _LOGGER.exception("Failed to open interview channel for %s", user_id)
            await reply(f"❌ Something went wrong while creating your interview channel: {exc}")
