# -*- coding: utf-8 -*-
"""
Configuration - Settings for the editor runtime.

Settings are pydantic models; ConfigManager loads them from a JSON or TOML
file when one is given and keeps the defaults otherwise.
"""
from typing import Any, Optional
import json
import os
from pydantic import BaseModel, ConfigDict, Field
from loguru import logger

from .core.signal import Signal


class SchedulerSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    period_ms: int = Field(default=1000, gt=0)
    autostart: bool = True

    @property
    def period(self) -> float:
        """Period in seconds."""
        return self.period_ms / 1000.0


class LoggingSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    debug_mode: bool = False
    log_dir: Optional[str] = None


class EditorConfig(BaseModel):
    scheduler: SchedulerSettings = Field(default_factory=SchedulerSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


class ConfigManager:
    """
    Manages editor configuration with optional persistence and reactivity.

    Without a filepath the configuration lives in memory only.
    """
    def __init__(self, filepath: Optional[str] = None):
        self.filepath = filepath
        self._data = EditorConfig()
        self.on_changed = Signal("ConfigChanged")
        self._load()

    @property
    def data(self) -> EditorConfig:
        return self._data

    def update(self, section: str, key: str, value: Any):
        """Update a setting, validate via Pydantic, save, and emit change event."""
        if section not in EditorConfig.model_fields:
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if key not in type(section_obj).model_fields:
            raise ValueError(f"Invalid key: {key} in section {section}")

        setattr(section_obj, key, value)
        self.save()
        self.on_changed.emit(section, key, value)

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        return getattr(section_obj, key)

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if not self.filepath or not os.path.isfile(self.filepath):
            return
        try:
            if self.filepath.endswith('.toml'):
                import tomllib
                with open(self.filepath, "rb") as f:
                    raw = tomllib.load(f)
            else:
                with open(self.filepath, "r", encoding="utf-8") as f:
                    raw = json.load(f)
            self._data = EditorConfig.model_validate(raw)
            logger.debug(f"Loaded config from {self.filepath}")
        except Exception as e:
            logger.error(f"Failed to load config from {self.filepath}: {e}")

    def save(self):
        """Persist current config as JSON (no-op without a filepath)."""
        if not self.filepath:
            return
        if self.filepath.endswith('.toml'):
            logger.warning(f"Not writing TOML config {self.filepath}, it is read-only")
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except OSError as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
