"""Tests for configuration loading and the CLI entry point."""

from pathlib import Path

import pytest

from calendar_engine.__main__ import build_registry, main
from calendar_engine.config import AppConfig, StartupConfig, config
from calendar_engine.engine.registry import CalendarRegistry
from calendar_engine.utils.exceptions import ConfigurationError


class TestAppConfig:
    def test_defaults(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        for name in ("LOG_LEVEL", "LOG_FILE", "CALENDAR_EXPORT_DIR", "DEFAULT_CALENDAR_NAME", "DEFAULT_TIMEZONE"):
            monkeypatch.delenv(name, raising=False)
        config = AppConfig()
        assert config.log_level == "INFO"
        assert config.log_file is None
        assert config.export_dir == Path("exports")
        assert config.default_calendar_name == "Default"
        assert config.default_timezone == "UTC"

    def test_environment(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("CALENDAR_EXPORT_DIR", str(tmp_path / "out"))
        monkeypatch.setenv("DEFAULT_TIMEZONE", "Europe/Paris")
        config = AppConfig()
        assert config.export_dir == tmp_path / "out"
        assert config.default_timezone == "Europe/Paris"


class TestStartupConfig:
    def test_missing_file(self, tmp_path):
        startup = StartupConfig(tmp_path / "calendars.yaml")
        assert not startup.has_config

    def test_apply(self, tmp_path):
        path = tmp_path / "calendars.yaml"
        path.write_text(
            "calendars:\n"
            "  Work:\n"
            "    timezone: America/New_York\n"
            "  Home: {}\n"
            "use: Work\n"
        )
        registry = CalendarRegistry()
        registry.add_calendar("Default", "UTC")
        StartupConfig(path, default_timezone="Europe/Paris").apply(registry)

        assert registry.get_all_calendar_names() == ["Default", "Work", "Home"]
        assert registry.get_calendar_timezone("Work") == "America/New_York"
        assert registry.get_calendar_timezone("Home") == "Europe/Paris"
        assert registry.active_calendar_name == "Work"

    def test_unknown_calendar_to_use(self, tmp_path):
        path = tmp_path / "calendars.yaml"
        path.write_text("use: Gym\n")
        with pytest.raises(ConfigurationError):
            StartupConfig(path).apply(CalendarRegistry())

    def test_invalid_timezone(self, tmp_path):
        path = tmp_path / "calendars.yaml"
        path.write_text("calendars:\n  Work:\n    timezone: Nowhere/Town\n")
        with pytest.raises(ConfigurationError, match="Work"):
            StartupConfig(path).apply(CalendarRegistry())

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "calendars.yaml"
        path.write_text("calendars: [unclosed\n")
        with pytest.raises(ConfigurationError):
            StartupConfig(path)


class TestBuildRegistry:
    def test_without_startup_file(self, tmp_path):
        registry = build_registry(StartupConfig(tmp_path / "missing.yaml"))
        assert registry.get_all_calendar_names() == [config.default_calendar_name]
        assert registry.active_calendar_name == config.default_calendar_name

    def test_startup_file_adds_calendars(self, tmp_path):
        path = tmp_path / "calendars.yaml"
        path.write_text("calendars:\n  Gym:\n    timezone: Asia/Tokyo\nuse: Gym\n")
        registry = build_registry(StartupConfig(path))
        assert registry.get_all_calendar_names() == [config.default_calendar_name, "Gym"]
        assert registry.get_calendar_timezone("Gym") == "Asia/Tokyo"
        assert registry.active_calendar_name == "Gym"


class TestMain:
    def test_headless(self, monkeypatch, tmp_path, capsys):
        monkeypatch.chdir(tmp_path)
        commands = tmp_path / "commands.txt"
        commands.write_text(
            "create event Review from 2025-03-03T09:00 to 2025-03-03T10:00\n"
            "show status on 2025-03-03T09:30\n"
            "exit\n"
        )
        assert main(["--mode", "headless", str(commands)]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "Success: Event 'Review' created",
            "Calendar status: BUSY",
            "Exiting...",
        ]

    def test_headless_failures_set_exit_code(self, monkeypatch, tmp_path, capsys):
        monkeypatch.chdir(tmp_path)
        commands = tmp_path / "commands.txt"
        commands.write_text("use calendar --name Gym\nexit\n")
        assert main(["--mode", "headless", str(commands)]) == 1
        assert "Error: Calendar not found: Gym" in capsys.readouterr().out

    def test_headless_missing_file(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        assert main(["--mode", "headless", str(tmp_path / "missing.txt")]) == 1

    def test_headless_requires_file(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit):
            main(["--mode", "headless"])

    def test_interactive_reads_stdin(self, monkeypatch, tmp_path, capsys):
        monkeypatch.chdir(tmp_path)
        lines = iter(["create calendar --name Home --timezone Europe/Paris", "use calendar --name Home"])

        def fake_input(prompt):
            try:
                return next(lines)
            except StopIteration:
                raise EOFError from None

        monkeypatch.setattr("builtins.input", fake_input)
        assert main([]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "Success: Calendar 'Home' created",
            "Success: Using calendar 'Home'",
        ]
