"""Optional game behaviours: cheat codes and what happens after a win."""

from abc import ABC, abstractmethod
import logging

from neonbreaker.config.settings import MAX_SPEED_LEVEL

logger = logging.getLogger(__name__)


class CheatMode:
    """Recognises typed cheat codes.

    Characters are fed one at a time; when the tail of the buffer
    spells a known code, that code's name is returned. A disabled
    instance ignores everything.
    """

    CODES: dict[str, str] = {
        "clear": "clear",  # break every remaining brick
        "life": "life",    # one extra life
    }

    def __init__(self, enabled: bool = False) -> None:
        self.enabled = enabled
        self._buffer = ""
        self._max_len = max(len(code) for code in self.CODES)

    def feed(self, char: str) -> str | None:
        """Add a character; return the cheat name if a code just completed."""
        if not self.enabled or len(char) != 1 or not char.isalpha():
            return None

        self._buffer = (self._buffer + char.lower())[-self._max_len:]
        for code, name in self.CODES.items():
            if self._buffer.endswith(code):
                self._buffer = ""
                logger.info(f"Cheat activated: {name}")
                return name
        return None

    def clear(self) -> None:
        self._buffer = ""


class ProgressionPolicy(ABC):
    """Decides the speed of the next session after a win."""

    name: str = "base"

    @abstractmethod
    def next_speed(self, level: int) -> int | None:
        """Speed level for the next session, or None to offer no level-up."""

    def challenge_message(self, level: int) -> str | None:
        """Text for the win screen, if any."""
        return None


class StayOnLevel(ProgressionPolicy):
    """No automatic level-up; nudge the player toward a faster speed."""

    name = "stay"

    def next_speed(self, level: int) -> int | None:
        return None

    def challenge_message(self, level: int) -> str | None:
        if level < MAX_SPEED_LEVEL:
            return "Congratulations! Ready for a challenge? Try a faster speed next time!"
        return None


class SpeedUpOnWin(ProgressionPolicy):
    """Each win offers a next level one speed step faster (capped)."""

    name = "speed_up"

    def next_speed(self, level: int) -> int | None:
        return min(level + 1, MAX_SPEED_LEVEL)

    def challenge_message(self, level: int) -> str | None:
        return "Press N for the next level"


POLICIES: dict[str, type[ProgressionPolicy]] = {
    StayOnLevel.name: StayOnLevel,
    SpeedUpOnWin.name: SpeedUpOnWin,
}


def create_progression_policy(name: str) -> ProgressionPolicy:
    """Build a policy by its settings name, defaulting to StayOnLevel."""
    policy_cls = POLICIES.get(name)
    if policy_cls is None:
        logger.warning(f"Unknown progression policy {name!r}, using {StayOnLevel.name}")
        policy_cls = StayOnLevel
    return policy_cls()
