"""
Basic tests for the Transcript Bulletizer data model, rendering and configuration.

These tests verify core functionality without touching the pipeline heuristics.
"""

import io
import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from rich.console import Console

from bulletizer.core.config import DEFAULT_SETTINGS, BulletizerSettings, Config, ConfigError, load_env_file
from bulletizer.core.progress import ProgressReporter
from bulletizer.core.render import ResultRenderer
from bulletizer.core.timing import timed_stage, timer
from bulletizer.core.types import GROUP_ORDER, BulletGroup, BulletizedResult, Clause, GroupedBullets, ScoredClause


def _sample_result() -> BulletizedResult:
    return BulletizedResult.from_groups(
        [
            GroupedBullets(group=BulletGroup.NOTES, bullets=["Weather was nice"]),
            GroupedBullets(group=BulletGroup.ACTIONS, bullets=["Call mom tomorrow", "Send the proposal by Friday"]),
            GroupedBullets(group=BulletGroup.IDEAS, bullets=[]),
        ]
    )


class TestTypes:
    """Test the type definitions and data structures."""

    def test_group_order(self):
        """Test the fixed output order of groups."""
        assert GROUP_ORDER == [BulletGroup.ACTIONS, BulletGroup.IDEAS, BulletGroup.KEY_POINTS, BulletGroup.NOTES]
        assert BulletGroup.KEY_POINTS.value == "Key Points"

    def test_clause_rejects_negative_index(self):
        """Test that clause indices cannot be negative."""
        with pytest.raises(ValidationError):
            Clause(text="Call mom tomorrow", original_index=-1)

    def test_scored_clause_is_clause(self):
        """Test ScoredClause carries the clause fields plus a score."""
        scored = ScoredClause(text="Call mom", original_index=2, score=1.5)
        assert isinstance(scored, Clause)
        assert scored.original_index == 2
        assert scored.score == 1.5

    def test_from_groups_orders_and_drops_empty(self):
        """Test groups are reordered and empty groups removed."""
        result = _sample_result()
        assert [g.group for g in result.groups] == [BulletGroup.ACTIONS, BulletGroup.NOTES]
        assert result.has_groups is True
        assert result.is_empty is False

    def test_result_is_immutable(self):
        """Test groups and bullets are tuples that callers cannot change in place."""
        result = _sample_result()
        assert isinstance(result.groups, tuple)
        assert all(isinstance(group.bullets, tuple) for group in result.groups)

        with pytest.raises(AttributeError):
            result.groups.append(GroupedBullets(group=BulletGroup.IDEAS, bullets=["A streak counter"]))
        with pytest.raises(AttributeError):
            result.groups[0].bullets.append("Book the venue")
        with pytest.raises(ValidationError):
            result.groups = ()

        assert result.all_bullets == ["Call mom tomorrow", "Send the proposal by Friday", "Weather was nice"]

    def test_plain_text(self):
        """Test plain text is the prefixed bullets in group order."""
        result = _sample_result()
        assert result.plain_text == "• Call mom tomorrow\n• Send the proposal by Friday\n• Weather was nice"
        assert result.all_bullets == ["Call mom tomorrow", "Send the proposal by Friday", "Weather was nice"]

    def test_bullets_for(self):
        """Test lookup of bullets by group."""
        result = _sample_result()
        assert result.bullets_for(BulletGroup.NOTES) == ["Weather was nice"]
        assert result.bullets_for(BulletGroup.IDEAS) == []

    def test_as_mapping(self):
        """Test mapping view keyed by group display name."""
        mapping = _sample_result().as_mapping()
        assert list(mapping.keys()) == ["Actions", "Notes"]

    def test_empty_result(self):
        """Test the empty result."""
        result = BulletizedResult.empty()
        assert result.is_empty
        assert result.plain_text == ""
        assert result.all_bullets == []
        assert result.has_groups is False

    def test_single_group_has_no_groups_flag(self):
        """Test has_groups is only true with more than one group."""
        result = BulletizedResult.from_groups([GroupedBullets(group=BulletGroup.IDEAS, bullets=["A streak counter"])])
        assert result.has_groups is False


class TestResultRenderer:
    """Test result rendering functionality."""

    def test_renderer_initialization(self):
        """Test ResultRenderer initialization."""
        renderer = ResultRenderer()
        assert "plain" in renderer.profiles
        assert "markdown" in renderer.profiles
        assert "grouped" in renderer.profiles

    def test_render_plain_profile(self):
        """Test plain rendering equals the result's plain text."""
        result = _sample_result()
        assert ResultRenderer().render(result, "plain") == result.plain_text

    def test_render_markdown_profile(self):
        """Test markdown rendering."""
        rendered = ResultRenderer().render(_sample_result(), "markdown")
        assert rendered.startswith("## Actions\n- Call mom tomorrow")
        assert "## Notes\n- Weather was nice" in rendered
        assert "## Ideas" not in rendered

    def test_render_grouped_profile(self):
        """Test grouped rendering with upper-cased headers."""
        rendered = ResultRenderer().render(_sample_result(), "grouped")
        assert "ACTIONS\n  • Call mom tomorrow" in rendered
        assert "NOTES\n  • Weather was nice" in rendered

    def test_render_all_profiles(self):
        """Test rendering all profiles at once."""
        results = ResultRenderer().render_all(_sample_result())
        assert set(results) == {"plain", "markdown", "md", "grouped"}
        assert all(isinstance(text, str) for text in results.values())

    def test_render_empty_result(self):
        """Test rendering an empty result yields empty text."""
        renderer = ResultRenderer()
        assert renderer.render(BulletizedResult.empty(), "markdown") == ""
        assert renderer.render(BulletizedResult.empty(), "plain") == ""

    def test_invalid_profile(self):
        """Test handling of invalid profile."""
        with pytest.raises(ValueError, match="Unsupported profile"):
            ResultRenderer().render(_sample_result(), "invalid")


class TestConfig:
    """Test configuration functionality."""

    def test_default_settings(self):
        """Test default pipeline constants."""
        assert DEFAULT_SETTINGS.min_clause_words == 4
        assert DEFAULT_SETTINGS.min_cleaned_chars == 12
        assert DEFAULT_SETTINGS.max_sentence_words == 3000
        assert DEFAULT_SETTINGS.max_bullet_words == 18
        assert DEFAULT_SETTINGS.min_clause_score == -2.0
        assert DEFAULT_SETTINGS.ellipsis == "…"

    def test_settings_are_frozen(self):
        """Test settings cannot be mutated."""
        with pytest.raises(ValidationError):
            DEFAULT_SETTINGS.max_bullets = 3

    def test_settings_validation(self):
        """Test settings reject out-of-range values."""
        with pytest.raises(ValidationError):
            BulletizerSettings(max_bullet_words=1)

    def test_settings_without_overrides(self):
        """Test settings fall back to the defaults without environment overrides."""
        with patch.dict(os.environ, {}, clear=True):
            assert Config().settings() == DEFAULT_SETTINGS

    def test_settings_with_overrides(self, monkeypatch: pytest.MonkeyPatch):
        """Test environment overrides are applied."""
        monkeypatch.setenv("BZ_MAX_BULLETS", "5")
        monkeypatch.setenv("BZ_MAX_BULLET_WORDS", "10")
        monkeypatch.setenv("BZ_MIN_CLAUSE_SCORE", "0.5")

        settings = Config().settings()
        assert settings.max_bullets == 5
        assert settings.max_bullet_words == 10
        assert settings.min_clause_score == 0.5
        assert settings.min_clause_words == DEFAULT_SETTINGS.min_clause_words

    @pytest.mark.parametrize("value", ["abc", "1", "-3"])
    def test_invalid_override(self, monkeypatch: pytest.MonkeyPatch, value: str):
        """Test invalid overrides raise ConfigError."""
        monkeypatch.setenv("BZ_MAX_BULLET_WORDS", value)
        with pytest.raises(ConfigError, match="Invalid bulletizer settings"):
            Config().settings()

    def test_debug_and_log_level(self, monkeypatch: pytest.MonkeyPatch):
        """Test debug flag and log level properties."""
        monkeypatch.setenv("BZ_DEBUG", "1")
        monkeypatch.setenv("BZ_LOG_LEVEL", "info")
        config = Config()
        assert config.debug is True
        assert config.log_level == "INFO"

        monkeypatch.setenv("BZ_DEBUG", "0")
        monkeypatch.delenv("BZ_LOG_LEVEL")
        assert config.debug is False
        assert config.log_level == "WARNING"

    def test_load_env_file_missing(self, tmp_path: Path):
        """Test an explicit missing env file is a configuration error."""
        with pytest.raises(ConfigError, match="not found"):
            load_env_file(str(tmp_path / "missing.env"))

    def test_load_env_file_none(self, monkeypatch: pytest.MonkeyPatch):
        """Test nothing is loaded without a path or BZ_ENV_FILE."""
        monkeypatch.delenv("BZ_ENV_FILE", raising=False)
        assert load_env_file() is None

    def test_load_env_file_applies_values(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """Test values from an env file reach the settings."""
        env_file = tmp_path / "bulletizer.env"
        env_file.write_text("BZ_MAX_BULLETS=7\n", encoding="utf-8")
        # Registered with monkeypatch so the loaded value is removed afterwards
        monkeypatch.setenv("BZ_MAX_BULLETS", "")

        assert load_env_file(str(env_file), override=True) == str(env_file)
        assert Config().settings().max_bullets == 7

    def test_load_env_file_from_variable(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """Test BZ_ENV_FILE is used when no explicit path is given."""
        env_file = tmp_path / "from-var.env"
        env_file.write_text("BZ_MAX_BULLET_WORDS=12\n", encoding="utf-8")
        monkeypatch.setenv("BZ_ENV_FILE", str(env_file))
        monkeypatch.setenv("BZ_MAX_BULLET_WORDS", "")

        assert load_env_file(override=True) == str(env_file)
        assert Config().settings().max_bullet_words == 12


class TestProgressReporter:
    """Test the progress reporter."""

    def test_reporter_without_initialize_is_noop(self):
        """Test steps are ignored before initialization."""
        reporter = ProgressReporter()
        reporter.step("Reading")
        reporter.complete_step()
        assert reporter.completed_steps == []

    def test_reporter_tracks_steps(self):
        """Test completed steps are recorded and echoed."""
        output = io.StringIO()
        console = Console(file=output, force_terminal=False)
        reporter = ProgressReporter()

        with reporter.initialize(console, "Reading transcript"):
            reporter.step("Extracting bullets")
            reporter.complete_step()

        assert reporter.completed_steps == ["Reading transcript", "Extracting bullets"]
        assert "✓" in output.getvalue()


class TestTiming:
    """Test debug stage timing."""

    def test_timer_logs_when_debug(self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture):
        """Test timings are logged only while BZ_DEBUG=1."""

        @timer
        def stage(value: int) -> int:
            return value * 2

        monkeypatch.setenv("BZ_DEBUG", "0")
        with caplog.at_level(logging.DEBUG, logger="bulletizer.core.timing"):
            assert stage(2) == 4
        assert "[BZ_DEBUG]" not in caplog.text

        monkeypatch.setenv("BZ_DEBUG", "1")
        with caplog.at_level(logging.DEBUG, logger="bulletizer.core.timing"):
            assert stage(3) == 6
            with timed_stage("custom"):
                pass
        assert "[BZ_DEBUG] stage:" in caplog.text
        assert "[BZ_DEBUG] custom:" in caplog.text
