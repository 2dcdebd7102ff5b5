"""Capabilities the relay needs from the chat platform."""

from __future__ import annotations

import abc
from typing import Any, List, Optional, Sequence


class ChatPlatform(abc.ABC):
    """Asynchronous chat-platform operations used by :class:`RelayService`.

    Users, members and channels are returned as platform objects; the relay
    only relies on their ``id`` attribute (and ``str()`` for a display tag).
    Every method may raise on upstream failure.
    """

    @property
    @abc.abstractmethod
    def bot_tag(self) -> Optional[str]:
        """Display tag of the logged-in bot, or None while connecting."""

    @abc.abstractmethod
    async def fetch_user(self, user_id) -> Any:
        ...

    @abc.abstractmethod
    async def fetch_member(self, user_id) -> Any:
        """Resolve ``user_id`` as a member of the configured guild."""

    @abc.abstractmethod
    async def fetch_channel(self, channel_id) -> Optional[Any]:
        """Return the channel, or None if it no longer exists."""

    @abc.abstractmethod
    async def list_category_channels(self, category_id) -> List[Any]:
        ...

    @abc.abstractmethod
    async def create_interview_channel(self, name: str, category_id, member) -> Any:
        """Create a text channel visible only to ``member``."""

    @abc.abstractmethod
    async def move_channel(self, channel, category_id) -> None:
        ...

    @abc.abstractmethod
    async def remove_member_overwrite(self, channel, user) -> None:
        ...

    @abc.abstractmethod
    async def add_roles(self, member, role_ids: Sequence[int]) -> None:
        ...

    @abc.abstractmethod
    async def send_direct_message(self, user, embed, *, join_button: bool = False) -> None:
        ...

    @abc.abstractmethod
    async def send_channel_message(self, channel_id, content: str, embed=None) -> None:
        ...
