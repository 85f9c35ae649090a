"""Worlds for bees to forage in."""

from .meadow import Meadow, MeadowConfig

__all__ = ["Meadow", "MeadowConfig"]
