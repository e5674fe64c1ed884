"""Unit tests for ConfigService (backed by a temporary directory)."""

from __future__ import annotations

import json
from pathlib import Path

import pytest


class TestLoadAndSave:
    def test_first_load_writes_defaults(self, tmp_config):
        config = tmp_config.load_config()

        assert config.pomodoro.focus_duration == 1500
        assert tmp_config.config_path.exists()
        on_disk = json.loads(tmp_config.config_path.read_text())
        assert on_disk["pomodoro"]["counter_to_long_break"] == 4

    def test_existing_file_is_read(self, tmp_config):
        tmp_config.config_path.write_text(json.dumps({"pomodoro": {"break_duration": 120}}))
        assert tmp_config.config.pomodoro.break_duration == 120
        assert tmp_config.pomodoro_settings.break_duration == 120

    def test_corrupt_file_raises_runtime_error(self, tmp_config):
        tmp_config.config_path.write_text("{not json")
        with pytest.raises(RuntimeError, match="Failed to load config"):
            tmp_config.load_config()


class TestGetSet:
    def test_get_dotted_key(self, tmp_config):
        assert tmp_config.get("pomodoro.long_break_duration") == 900
        assert tmp_config.get("output.icons") is True

    def test_get_unknown_key_returns_none(self, tmp_config):
        assert tmp_config.get("pomodoro.nope") is None
        assert tmp_config.get("nope") is None

    def test_set_coerces_and_persists(self, tmp_config):
        tmp_config.set("pomodoro.focus_duration", "600")

        assert tmp_config.get("pomodoro.focus_duration") == 600
        on_disk = json.loads(tmp_config.config_path.read_text())
        assert on_disk["pomodoro"]["focus_duration"] == 600

    def test_set_unknown_key_raises_key_error(self, tmp_config):
        with pytest.raises(KeyError):
            tmp_config.set("pomodoro.nope", "1")
        with pytest.raises(KeyError):
            tmp_config.set("nope.deeper", "1")

    def test_set_invalid_value_raises_value_error(self, tmp_config):
        with pytest.raises(ValueError, match="pomodoro.counter_to_long_break"):
            tmp_config.set("pomodoro.counter_to_long_break", "0")
        assert tmp_config.get("pomodoro.counter_to_long_break") == 4


class TestReset:
    def test_reset_single_key(self, tmp_config):
        tmp_config.set("pomodoro.break_duration", "60")
        tmp_config.reset_config("pomodoro.break_duration")
        assert tmp_config.get("pomodoro.break_duration") == 300

    def test_reset_section(self, tmp_config):
        tmp_config.set("output.icons", "false")
        tmp_config.reset_config("output")
        assert tmp_config.get("output.icons") is True

    def test_reset_all(self, tmp_config):
        tmp_config.set("pomodoro.focus_duration", "60")
        tmp_config.set("output.color", "false")
        tmp_config.reset_config()

        assert tmp_config.get("pomodoro.focus_duration") == 1500
        assert tmp_config.get("output.color") is True


class TestTasksFile:
    def test_defaults_to_data_dir(self, tmp_config):
        assert tmp_config.get_tasks_file() == tmp_config.data_dir / "tasks.json"

    def test_configured_path_is_expanded(self, tmp_config, tmp_path):
        target = tmp_path / "elsewhere" / "queue.json"
        tmp_config.set("pomodoro.tasks_file", str(target))
        assert tmp_config.get_tasks_file() == Path(target)


class TestGetConfigService:
    def test_cached_instance(self, tmp_config):
        from pomodoro_cli.services.config_service import get_config_service

        first = get_config_service()
        assert get_config_service() is first
        assert first.config_path == tmp_config.config_path
