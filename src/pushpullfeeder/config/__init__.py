"""Configuration management for push-pull feeder package."""

from .settings import Settings
from .tape_presets import TapePresets

__all__ = ["Settings", "TapePresets"]
