"""Shared pytest fixtures: a fake chat platform and a relay wired to it."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest

# Ensure the application package is importable during tests.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fxg_relay.config import RelayConfig  # noqa: E402
from fxg_relay.main import create_app  # noqa: E402
from fxg_relay.services.platform import ChatPlatform  # noqa: E402
from fxg_relay.services.relay_service import RelayService  # noqa: E402
from fxg_relay.utils.loop import EventLoopThread  # noqa: E402

API_SECRET = "test-secret"
GUILD_ID = 1
INTERVIEW_CATEGORY_ID = 100
APPROVED_CATEGORY_ID = 101
DENIED_CATEGORY_ID = 102
MEMBER_ROLE_ID = 201
TEAM_ROLE_ID = 202
WELCOME_CHANNEL_ID = 300


class FakeUser:
    def __init__(self, user_id: int, name: str, discriminator: str = "0001") -> None:
        self.id = user_id
        self.name = name
        self.discriminator = discriminator

    def __str__(self) -> str:
        return f"{self.name}#{self.discriminator}"


class FakeChannel:
    def __init__(self, channel_id: int, name: str, category_id: int) -> None:
        self.id = channel_id
        self.name = name
        self.category_id = category_id
        self.member_overwrites: set = set()


class FakePlatform(ChatPlatform):
    """In-memory stand-in for Discord that records every call."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.users: Dict[str, FakeUser] = {}
        self.channels: Dict[int, FakeChannel] = {}
        self.failures: Dict[str, Exception] = {}
        self.fetch_user_delay = 0.0
        self.direct_messages: List[Tuple[Any, Any, bool]] = []
        self.channel_messages: List[Tuple[Any, str, Any]] = []
        self.roles_added: List[Tuple[Any, Tuple[int, ...]]] = []
        self._next_channel_id = 5000

    @property
    def bot_tag(self) -> Optional[str]:
        return "FxG Relay#9999"

    def add_channel(self, name: str, category_id: int) -> FakeChannel:
        self._next_channel_id += 1
        channel = FakeChannel(self._next_channel_id, name, category_id)
        self.channels[channel.id] = channel
        return channel

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))
        if name in self.failures:
            raise self.failures[name]

    def call_names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def _user(self, user_id) -> FakeUser:
        key = str(user_id)
        if key not in self.users:
            self.users[key] = FakeUser(int(user_id), f"user{user_id}")
        return self.users[key]

    async def fetch_user(self, user_id):
        self._record("fetch_user", user_id)
        if self.fetch_user_delay:
            await asyncio.sleep(self.fetch_user_delay)
        return self._user(user_id)

    async def fetch_member(self, user_id):
        self._record("fetch_member", user_id)
        return self._user(user_id)

    async def fetch_channel(self, channel_id):
        self._record("fetch_channel", channel_id)
        return self.channels.get(channel_id)

    async def list_category_channels(self, category_id):
        self._record("list_category_channels", category_id)
        return [channel for channel in self.channels.values() if channel.category_id == category_id]

    async def create_interview_channel(self, name: str, category_id, member):
        self._record("create_interview_channel", name, category_id, member)
        channel = self.add_channel(name, category_id)
        channel.member_overwrites.add(member.id)
        return channel

    async def move_channel(self, channel, category_id) -> None:
        self._record("move_channel", channel, category_id)
        channel.category_id = category_id

    async def remove_member_overwrite(self, channel, user) -> None:
        self._record("remove_member_overwrite", channel, user)
        channel.member_overwrites.discard(user.id)

    async def add_roles(self, member, role_ids: Sequence[int]) -> None:
        self._record("add_roles", member, tuple(role_ids))
        self.roles_added.append((member, tuple(role_ids)))

    async def send_direct_message(self, user, embed, *, join_button: bool = False) -> None:
        self._record("send_direct_message", user, embed)
        self.direct_messages.append((user, embed, join_button))

    async def send_channel_message(self, channel_id, content: str, embed=None) -> None:
        self._record("send_channel_message", channel_id, content)
        self.channel_messages.append((channel_id, content, embed))


@pytest.fixture
def config() -> RelayConfig:
    return RelayConfig(
        bot_token="bot-token",
        api_secret=API_SECRET,
        guild_id=GUILD_ID,
        interview_category_id=INTERVIEW_CATEGORY_ID,
        approved_category_id=APPROVED_CATEGORY_ID,
        denied_category_id=DENIED_CATEGORY_ID,
        member_role_id=MEMBER_ROLE_ID,
        team_role_id=TEAM_ROLE_ID,
        welcome_channel_id=WELCOME_CHANNEL_ID,
    )


@pytest.fixture
def platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture
def loop_thread():
    """Run a real event loop in a background thread, as in production."""
    thread = EventLoopThread(name="test-loop").start()
    yield thread
    thread.stop()


@pytest.fixture
def relay(config: RelayConfig, platform: FakePlatform, loop_thread: EventLoopThread) -> RelayService:
    service = RelayService(config, platform, loop_thread, user_fetch_timeout=0.2)
    service.ready = True
    return service


@pytest.fixture
def client(relay: RelayService):
    app = create_app(relay)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {API_SECRET}"}


@pytest.fixture
def join_click(relay: RelayService):
    """Simulate a "Join Interview" click; returns the ephemeral replies sent."""

    def _click(user_id) -> List[str]:
        replies: List[str] = []

        async def reply(content: str) -> None:
            replies.append(content)

        relay.dispatch(relay.handle_join_click(user_id, reply))
        return replies

    return _click
