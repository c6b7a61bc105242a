"""Tests for settings persistence."""

import json
import os
from pathlib import Path

import pytest

from textdiff.core.models import DiffMode, DiffOptions
from textdiff.services.settings import (
    DEFAULT_MAX_CELLS,
    ApplicationSettings,
    OutputFormat,
    SettingsManager,
)


def test_defaults_when_file_missing(settings_path):
    manager = SettingsManager(settings_path)
    settings = manager.settings

    assert settings == ApplicationSettings()
    assert settings.comparison.mode == DiffMode.LINES
    assert settings.comparison.max_cells == DEFAULT_MAX_CELLS
    assert settings.comparison.debounce_ms == 300
    assert settings.output.format == OutputFormat.PLAIN
    assert settings.output.show_stats is True
    assert not settings_path.exists()


def test_save_and_reload(settings_path):
    manager = SettingsManager(settings_path)
    settings = manager.settings
    settings.comparison.ignore_case = True
    settings.comparison.mode = DiffMode.WORDS
    settings.comparison.max_cells = None
    settings.output.format = OutputFormat.JSON
    settings.output.show_line_numbers = True

    assert manager.save()

    stored = json.loads(settings_path.read_text(encoding="utf-8"))
    assert stored["comparison"]["mode"] == "WORDS"
    assert stored["output"]["format"] == "JSON"

    reloaded = SettingsManager(settings_path).settings
    assert reloaded == settings


def test_malformed_file_falls_back_to_defaults(settings_path):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text("{not json", encoding="utf-8")

    assert SettingsManager(settings_path).settings == ApplicationSettings()


def test_unknown_enum_names_use_first_member(settings_path):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text(json.dumps({
        "comparison": {"mode": "CHARACTERS", "ignore_whitespace": True},
        "output": {"format": "HTML"},
    }), encoding="utf-8")

    settings = SettingsManager(settings_path).settings

    assert settings.comparison.mode == DiffMode.LINES
    assert settings.comparison.ignore_whitespace is True
    assert settings.output.format == OutputFormat.PLAIN


def test_partial_file_keeps_other_defaults(settings_path):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text(json.dumps({"output": {"show_stats": False}}), encoding="utf-8")

    settings = SettingsManager(settings_path).settings

    assert settings.output.show_stats is False
    assert settings.comparison == ApplicationSettings().comparison


def test_observers_notified_on_save(settings_path):
    manager = SettingsManager(settings_path)
    seen = []
    manager.add_observer(seen.append)

    manager.settings.comparison.ignore_case = True
    manager.save()
    assert len(seen) == 1
    assert seen[0].comparison.ignore_case is True

    manager.remove_observer(seen.append)
    manager.save()
    assert len(seen) == 1


def test_failing_observer_does_not_stop_save(settings_path):
    manager = SettingsManager(settings_path)
    seen = []

    def broken(settings):
        raise RuntimeError("boom")

    manager.add_observer(broken)
    manager.add_observer(seen.append)

    assert manager.save(ApplicationSettings())
    assert len(seen) == 1


def test_save_without_settings_is_noop(settings_path):
    assert SettingsManager(settings_path).save() is False
    assert not settings_path.exists()


def test_reset(settings_path):
    manager = SettingsManager(settings_path)
    manager.settings.comparison.ignore_case = True
    manager.save()

    settings = manager.reset()

    assert settings == ApplicationSettings()
    assert SettingsManager(settings_path).settings == ApplicationSettings()


def test_to_options():
    settings = ApplicationSettings()
    settings.comparison.ignore_whitespace = True
    settings.comparison.mode = DiffMode.WORDS

    assert settings.comparison.to_options() == DiffOptions(
        ignore_case=False, ignore_whitespace=True, mode=DiffMode.WORDS
    )


@pytest.mark.parametrize("value, expected", [
    ("json", OutputFormat.JSON),
    ("PLAIN", OutputFormat.PLAIN),
    ("xml", OutputFormat.PLAIN),
])
def test_output_format_from_string(value, expected):
    assert OutputFormat.from_string(value) == expected


@pytest.mark.skipif(os.name == "nt", reason="XDG paths are not used on Windows")
def test_default_path_honours_xdg(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    assert SettingsManager().settings_path == Path(tmp_path) / "textdiff" / "settings.json"


def test_ill_typed_values_fall_back_per_field(settings_path):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text(json.dumps({
        "comparison": {
            "ignore_case": "yes",
            "ignore_whitespace": True,
            "mode": 3,
            "max_cells": "lots",
            "debounce_ms": -5,
        },
        "output": {"format": ["JSON"], "show_line_numbers": 1, "show_stats": False},
    }), encoding="utf-8")

    settings = SettingsManager(settings_path).settings

    assert settings.comparison.ignore_case is False
    assert settings.comparison.ignore_whitespace is True
    assert settings.comparison.mode == DiffMode.LINES
    assert settings.comparison.max_cells == DEFAULT_MAX_CELLS
    assert settings.comparison.debounce_ms == 300
    assert settings.output.format == OutputFormat.PLAIN
    assert settings.output.show_line_numbers is False
    assert settings.output.show_stats is False


@pytest.mark.parametrize("value", [True, 0, -1, 2.5])
def test_max_cells_must_be_a_positive_integer(settings_path, value):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text(json.dumps({"comparison": {"max_cells": value}}), encoding="utf-8")

    assert SettingsManager(settings_path).settings.comparison.max_cells == DEFAULT_MAX_CELLS


def test_section_that_is_not_an_object_is_ignored(settings_path):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text(json.dumps({
        "comparison": "words",
        "output": {"format": "JSON"},
    }), encoding="utf-8")

    settings = SettingsManager(settings_path).settings

    assert settings.comparison == ApplicationSettings().comparison
    assert settings.output.format == OutputFormat.JSON


def test_top_level_array_falls_back_to_defaults(settings_path):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text("[1, 2]", encoding="utf-8")

    assert SettingsManager(settings_path).settings == ApplicationSettings()


@pytest.mark.parametrize("stored", ["WORDS", "words", "Words"])
def test_mode_accepts_name_or_value(settings_path, stored):
    settings_path.parent.mkdir(parents=True)
    settings_path.write_text(json.dumps({"comparison": {"mode": stored}}), encoding="utf-8")

    assert SettingsManager(settings_path).settings.comparison.mode == DiffMode.WORDS


@pytest.mark.parametrize("value, expected", [
    ("lines", DiffMode.LINES),
    ("WORDS", DiffMode.WORDS),
    ("Words", DiffMode.WORDS),
])
def test_diff_mode_from_string(value, expected):
    assert DiffMode.from_string(value) == expected


def test_diff_mode_from_string_rejects_unknown():
    with pytest.raises(ValueError):
        DiffMode.from_string("characters")
