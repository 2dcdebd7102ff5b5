"""discord.py implementation of :class:`ChatPlatform` plus gateway event wiring."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence

import discord

from fxg_relay.config import JOIN_INTERVIEW_CUSTOM_ID, RelayConfig
from fxg_relay.services.platform import ChatPlatform

if TYPE_CHECKING:
    from fxg_relay.services.relay_service import RelayService

_LOGGER = logging.getLogger(__name__)


def build_client() -> discord.Client:
    """Return a client with the intents the relay needs (guilds only)."""
    intents = discord.Intents.none()
    intents.guilds = True
    return discord.Client(intents=intents)


def join_interview_view() -> discord.ui.View:
    """View carrying the "Join Interview" button.

    Clicks are handled in ``on_interaction`` by custom id, so the view is not
    kept after sending and the button keeps working after a restart.
    """
    view = discord.ui.View(timeout=None)
    view.add_item(
        discord.ui.Button(
            label="Join Interview",
            emoji="🎙️",
            style=discord.ButtonStyle.success,
            custom_id=JOIN_INTERVIEW_CUSTOM_ID,
        )
    )
    return view


class DiscordPlatform(ChatPlatform):
    """Guild-scoped Discord operations backed by a ``discord.Client``."""

    def __init__(self, config: RelayConfig, client: Optional[discord.Client] = None) -> None:
        self.config = config
        self.client = client or build_client()

    @property
    def bot_tag(self) -> Optional[str]:
        user = self.client.user
        return str(user) if user else None

    def _guild(self) -> discord.Guild:
        guild = self.client.get_guild(self.config.guild_id) if self.config.guild_id else None
        if guild is None:
            raise RuntimeError(f"Guild {self.config.guild_id} is not available to the bot")
        return guild

    def _category(self, category_id) -> discord.CategoryChannel:
        category = self._guild().get_channel(int(category_id))
        if not isinstance(category, discord.CategoryChannel):
            raise RuntimeError(f"Category {category_id} not found")
        return category

    async def fetch_user(self, user_id) -> discord.User:
        return await self.client.fetch_user(int(user_id))

    async def fetch_member(self, user_id) -> discord.Member:
        return await self._guild().fetch_member(int(user_id))

    async def fetch_channel(self, channel_id):
        try:
            return await self.client.fetch_channel(int(channel_id))
        except discord.NotFound:
            return None

    async def list_category_channels(self, category_id) -> List[discord.abc.GuildChannel]:
        return list(self._category(category_id).channels)

    async def create_interview_channel(self, name: str, category_id, member) -> discord.TextChannel:
        guild = self._guild()
        overwrites = {
            guild.default_role: discord.PermissionOverwrite(view_channel=False),
            member: discord.PermissionOverwrite(
                view_channel=True,
                send_messages=True,
                read_message_history=True,
            ),
        }
        return await guild.create_text_channel(
            name,
            category=self._category(category_id),
            overwrites=overwrites,
            reason=f"Interview channel for {member}",
        )

    async def move_channel(self, channel, category_id) -> None:
        await channel.edit(category=self._category(category_id), sync_permissions=False)

    async def remove_member_overwrite(self, channel, user) -> None:
        await channel.set_permissions(user, overwrite=None)

    async def add_roles(self, member, role_ids: Sequence[int]) -> None:
        await member.add_roles(*(discord.Object(id=role_id) for role_id in role_ids), reason="Application approved")

    async def send_direct_message(self, user, embed, *, join_button: bool = False) -> None:
        if join_button:
            view = join_interview_view()
            try:
                await user.send(embed=embed, view=view)
            finally:
                # Drop it from the client's view store; the button stays on the message.
                view.stop()
        else:
            await user.send(embed=embed)

    async def send_channel_message(self, channel_id, content: str, embed=None) -> None:
        channel = self.client.get_channel(int(channel_id))
        if channel is None:
            channel = await self.client.fetch_channel(int(channel_id))
        await channel.send(content=content, embed=embed)

    # ------------------------------------------------------------------
    # Gateway wiring
    # ------------------------------------------------------------------

    def bind(self, relay: "RelayService") -> None:
        """Register the gateway event handlers that drive ``relay``."""
        client = self.client

        @client.event
        async def on_ready() -> None:
            await relay.handle_ready()

        @client.event
        async def on_resumed() -> None:
            relay.handle_resumed()

        @client.event
        async def on_disconnect() -> None:
            relay.handle_disconnect()

        @client.event
        async def on_interaction(interaction: discord.Interaction) -> None:
            if interaction.type is not discord.InteractionType.component:
                return
            if (interaction.data or {}).get("custom_id") != JOIN_INTERVIEW_CUSTOM_ID:
                return

            await interaction.response.defer(ephemeral=True, thinking=True)

            async def reply(content: str) -> None:
                await interaction.followup.send(content, ephemeral=True)

            await relay.handle_join_click(interaction.user.id, reply)

        @client.event
        async def on_error(event: str, *args, **kwargs) -> None:
            _LOGGER.exception("Unhandled error in Discord event %s", event)

    async def start(self) -> None:
        await self.client.start(self.config.bot_token)

    async def close(self) -> None:
        await self.client.close()
