"""In-memory interview channel registry backing the relay state."""

from __future__ import annotations

import re
from typing import Dict, Iterable, Optional

from fxg_relay.config import INTERVIEW_CHANNEL_PREFIX

INTERVIEW_CHANNEL_PATTERN = re.compile(rf"^{re.escape(INTERVIEW_CHANNEL_PREFIX)}(\d+)$")


def interview_channel_number(name: str) -> Optional[int]:
    """Return the numeric suffix of an interview channel name, if it is one."""
    match = INTERVIEW_CHANNEL_PATTERN.match(name or "")
    if not match:
        return None
    return int(match.group(1))


class ChannelRegistry:
    """Applicant id to interview channel id, plus the channel name counter.

    Nothing here survives a restart; the counter is rebuilt from existing
    channel names with :meth:`seed_counter`.
    """

    def __init__(self) -> None:
        # Applicant Discord ids (as strings) mapped to channel ids.
        self.channels: Dict[str, int] = {}
        self.counter = 0

    def seed_counter(self, channel_names: Iterable[str]) -> int:
        """Raise the counter to the highest ``int-<n>`` suffix seen.

        A fresh registry ends up at that suffix (0 if none match); a later
        rescan never moves the counter backwards.
        """
        numbers = [n for n in (interview_channel_number(name) for name in channel_names) if n is not None]
        self.counter = max(self.counter, max(numbers, default=0))
        return self.counter

    def next_channel_name(self) -> str:
        """Advance the counter and return the name for the next channel."""
        self.counter += 1
        return f"{INTERVIEW_CHANNEL_PREFIX}{self.counter}"

    def get(self, applicant_id) -> Optional[int]:
        return self.channels.get(str(applicant_id))

    def record(self, applicant_id, channel_id: int) -> None:
        self.channels[str(applicant_id)] = channel_id

    def forget(self, applicant_id) -> Optional[int]:
        """Drop the applicant's entry and return the channel id it pointed to."""
        return self.channels.pop(str(applicant_id), None)
