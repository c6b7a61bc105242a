"""
Application settings management.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from enum import Enum, auto
from pathlib import Path
from typing import Any, Callable, Optional

from textdiff.core.models import DiffMode, DiffOptions


class OutputFormat(Enum):
    """Export format for diff results."""
    PLAIN = auto()
    JSON = auto()

    @classmethod
    def from_string(cls, value: str) -> 'OutputFormat':
        """Create from a member name, case-insensitively."""
        try:
            return cls[value.upper()]
        except (KeyError, AttributeError):
            return cls.PLAIN


# 5000 x 5000 tokens
DEFAULT_MAX_CELLS = 25_000_000


@dataclass
class ComparisonSettings:
    """Settings for text comparison."""
    ignore_case: bool = False
    ignore_whitespace: bool = False
    mode: DiffMode = DiffMode.LINES
    max_cells: Optional[int] = DEFAULT_MAX_CELLS
    debounce_ms: int = 300

    def to_options(self) -> DiffOptions:
        """Build the engine options these settings describe."""
        return DiffOptions(
            ignore_case=self.ignore_case,
            ignore_whitespace=self.ignore_whitespace,
            mode=self.mode,
        )


@dataclass
class OutputSettings:
    """Settings for diff output."""
    format: OutputFormat = OutputFormat.PLAIN
    show_line_numbers: bool = False
    show_stats: bool = True


@dataclass
class ApplicationSettings:
    """Main application settings container."""
    comparison: ComparisonSettings = field(default_factory=ComparisonSettings)
    output: OutputSettings = field(default_factory=OutputSettings)


class SettingsManager:
    """Manager for loading/saving application settings."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = Path(settings_path) if settings_path else self._get_default_path()
        self._settings: Optional[ApplicationSettings] = None
        self._observers: list[Callable[[ApplicationSettings], None]] = []

    @staticmethod
    def _get_default_path() -> Path:
        """Get the default settings file path."""
        if os.name == 'nt':
            # Windows
            app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(app_data) / 'TextDiff' / 'settings.json'
        else:
            # Linux/Mac
            config_home = os.environ.get('XDG_CONFIG_HOME',
                                         os.path.expanduser('~/.config'))
            return Path(config_home) / 'textdiff' / 'settings.json'

    @property
    def settings(self) -> ApplicationSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """Load settings from disk, falling back to defaults."""
        if not self.settings_path.exists():
            return ApplicationSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return self._from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logging.warning(f"SettingsManager - Could not load {self.settings_path}, using defaults: {e}")
            return ApplicationSettings()

    def save(self, settings: Optional[ApplicationSettings] = None) -> bool:
        """Save settings to disk."""
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)

            data = self._to_dict(settings)

            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)

            self._settings = settings
            self._notify_observers()
            return True

        except OSError as e:
            logging.error(f"SettingsManager - Failed to save {self.settings_path}: {e}")
            return False

    def reset(self) -> ApplicationSettings:
        """Reset to default settings."""
        self._settings = ApplicationSettings()
        self.save()
        return self._settings

    def add_observer(self, callback: Callable[[ApplicationSettings], None]) -> None:
        """Add a callback to be notified of settings changes."""
        self._observers.append(callback)

    def remove_observer(self, callback: Callable[[ApplicationSettings], None]) -> None:
        """Remove a settings change observer."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify_observers(self) -> None:
        """Notify all observers of settings change."""
        for callback in self._observers:
            try:
                callback(self._settings)
            except Exception as e:
                logging.error(f"SettingsManager - Observer {callback!r} failed: {e}")

    def _to_dict(self, settings: ApplicationSettings) -> dict:
        """Convert settings to dictionary for JSON serialization."""
        def convert(obj: Any) -> Any:
            if isinstance(obj, Enum):
                return obj.name
            elif isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            elif isinstance(obj, list):
                return [convert(item) for item in obj]
            else:
                return obj

        return convert(asdict(settings))

    def _from_dict(self, data: dict) -> ApplicationSettings:
        """
        Convert dictionary back to settings objects.

        A missing or ill-typed value takes the field's default and logs a
        warning; the rest of the file still applies.
        """
        def section(name: str) -> dict:
            value = data.get(name, {})
            if isinstance(value, dict):
                return value
            reject(name, value)
            return {}

        def reject(key: str, value: Any) -> None:
            logging.warning(f"SettingsManager - Ignoring invalid {key}={value!r} "
                            f"in {self.settings_path}")

        def get_bool(values: dict, key: str, default: bool) -> bool:
            value = values.get(key, default)
            if isinstance(value, bool):
                return value
            reject(key, value)
            return default

        def get_count(values: dict, key: str, default: Optional[int],
                      minimum: int, allow_none: bool = False) -> Optional[int]:
            value = values.get(key, default)
            if value is None and allow_none:
                return None
            # bool is an int subclass
            if isinstance(value, int) and not isinstance(value, bool) and value >= minimum:
                return value
            reject(key, value)
            return default

        def get_mode(values: dict, default: DiffMode) -> DiffMode:
            value = values.get('mode', default.name)
            try:
                return DiffMode.from_string(value)
            except (ValueError, AttributeError):
                reject('mode', value)
                return default

        def get_format(values: dict, default: OutputFormat) -> OutputFormat:
            value = values.get('format', default.name)
            if isinstance(value, str) and value.upper() in OutputFormat.__members__:
                return OutputFormat[value.upper()]
            reject('format', value)
            return default

        comparison_data = section('comparison')
        defaults = ComparisonSettings()
        comparison = ComparisonSettings(
            ignore_case=get_bool(comparison_data, 'ignore_case', defaults.ignore_case),
            ignore_whitespace=get_bool(comparison_data, 'ignore_whitespace',
                                       defaults.ignore_whitespace),
            mode=get_mode(comparison_data, defaults.mode),
            max_cells=get_count(comparison_data, 'max_cells', defaults.max_cells,
                                minimum=1, allow_none=True),
            debounce_ms=get_count(comparison_data, 'debounce_ms', defaults.debounce_ms,
                                  minimum=0),
        )

        output_data = section('output')
        output_defaults = OutputSettings()
        output = OutputSettings(
            format=get_format(output_data, output_defaults.format),
            show_line_numbers=get_bool(output_data, 'show_line_numbers',
                                       output_defaults.show_line_numbers),
            show_stats=get_bool(output_data, 'show_stats', output_defaults.show_stats),
        )

        return ApplicationSettings(comparison=comparison, output=output)
