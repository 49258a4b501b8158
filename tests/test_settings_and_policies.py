import pytest

from neonbreaker.config.settings import Settings, parse_speed_level
from neonbreaker.game.policies import (
    CheatMode,
    SpeedUpOnWin,
    StayOnLevel,
    create_progression_policy,
)


class TestSettings:

    def test_defaults(self, settings):
        assert settings.playfield.width == 800
        assert settings.playfield.height == 600
        assert settings.total_bricks == 45
        assert settings.gameplay.initial_lives == 3
        assert settings.effects.particle_burst == 10
        assert settings.effects.trail_length == 10

    @pytest.mark.parametrize("level, speed", [(1, 1.0), (2, 2.0), (3, 3.0)])
    def test_speed_map(self, settings, level, speed):
        assert settings.base_speed(level) == speed

    def test_unknown_level_uses_baseline(self, settings):
        assert settings.base_speed(9) == 1.0

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("NEONBREAKER_GAMEPLAY__INITIAL_LIVES", "5")
        monkeypatch.setenv("NEONBREAKER_GAMEPLAY__CHEATS_ENABLED", "true")
        monkeypatch.setenv("NEONBREAKER_PLAYFIELD__WIDTH", "640")
        settings = Settings(_env_file=None)
        assert settings.gameplay.initial_lives == 5
        assert settings.gameplay.cheats_enabled is True
        assert settings.playfield.width == 640
        # Untouched siblings keep their defaults
        assert settings.playfield.height == 600


@pytest.mark.parametrize("value, expected", [
    (1, 1), (2, 2), (3, 3),
    ("2", 2), (" 3 ", 3),
    ("fast", 1), (None, 1), (0, 1), (4, 1), (-2, 1), ("", 1),
])
def test_parse_speed_level(value, expected):
    assert parse_speed_level(value) == expected


class TestCheatMode:

    def test_codes_complete_on_last_letter(self):
        cheats = CheatMode(enabled=True)
        assert [cheats.feed(c) for c in "xxclear"] == [None] * 6 + ["clear"]
        assert [cheats.feed(c) for c in "LIFE"] == [None] * 3 + ["life"]

    def test_non_letters_are_ignored(self):
        cheats = CheatMode(enabled=True)
        for c in "cl3ea r":
            result = cheats.feed(c)
        assert result == "clear"

    def test_disabled_ignores_everything(self):
        cheats = CheatMode()
        assert all(cheats.feed(c) is None for c in "clear")

    def test_clear_resets_buffer(self):
        cheats = CheatMode(enabled=True)
        for c in "lif":
            cheats.feed(c)
        cheats.clear()
        assert cheats.feed("e") is None


class TestProgression:

    def test_stay_challenges_below_top_speed(self):
        policy = StayOnLevel()
        assert policy.next_speed(1) is None
        assert policy.challenge_message(1)
        assert policy.challenge_message(2)
        assert policy.challenge_message(3) is None

    def test_speed_up_caps_at_three(self):
        policy = SpeedUpOnWin()
        assert policy.next_speed(1) == 2
        assert policy.next_speed(3) == 3

    def test_factory(self):
        assert isinstance(create_progression_policy("speed_up"), SpeedUpOnWin)
        assert isinstance(create_progression_policy("stay"), StayOnLevel)
        assert isinstance(create_progression_policy("bogus"), StayOnLevel)
