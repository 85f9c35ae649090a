"""
core/flower.py

A stationary pollen source.

Bees within feeding distance drain it one unit per tick each.
When it runs dry it is reborn somewhere else: same object,
new place, fresh pollen.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Optional, Sequence, Tuple
import numpy as np

from .vector import distance, map_range

if TYPE_CHECKING:
    from .bee import Bee

logger = logging.getLogger(__name__)


FLOWER_RADIUS = 10.0
FLOWER_PETALS = 16
HUE_RANGE = (200.0, 359.0)


class Flower:
    """
    Pollen node.

    `hue`, `radius` and `petals` are cosmetic and only kept for
    renderers; `pollen` and `position` drive the simulation.
    """

    def __init__(
        self,
        position: Sequence[float],
        pollen_range: Tuple[float, float] = (1000.0, 2000.0),
        margin: float = 20.0,
        rng: Optional[np.random.Generator] = None,
    ):
        low, high = pollen_range
        if not 0 < low < high:
            raise ValueError(f"pollen_range must satisfy 0 < low < high, got {pollen_range}")

        self.rng = rng if rng is not None else np.random.default_rng()
        self.pollen_range = (float(low), float(high))
        self.margin = margin

        self.position = np.array(position, dtype=np.float64)
        self.radius = FLOWER_RADIUS
        self.petals = FLOWER_PETALS
        self.feeding_distance = self.radius * 3
        self.hue = self.rng.uniform(*HUE_RANGE)
        self.pollen = self.rng.uniform(*self.pollen_range)

    @property
    def vitality(self) -> float:
        """Opacity cue: 100 when fresh, fading to 1 as it drains."""
        return map_range(self.pollen, 1000, 0, 100, 1)

    def drain(self, bees: Sequence[Bee]) -> int:
        """
        Feed every bee within feeding distance one unit of pollen.

        Bee capacity is not checked here; a full bee stops coming once
        its own `check_loaded` turns it toward the hive.

        Returns: units handed out
        """
        fed = 0
        for bee in bees:
            d = distance(self.position, bee.position)
            if 0 < d < self.feeding_distance:
                bee.pollen += 1
                self.pollen -= 1
                fed += 1
        return fed

    def update(self, width: float, height: float) -> bool:
        """
        Rebirth an exhausted flower at a random spot inside the field.

        Returns: True if the flower was reborn
        """
        if self.pollen > 0:
            return False

        self.position = np.array([
            self.rng.uniform(self.margin, width - self.margin),
            self.rng.uniform(self.margin, height - self.margin),
        ])
        self.pollen = self.rng.uniform(*self.pollen_range)
        self.hue = self.rng.uniform(*HUE_RANGE)
        logger.debug(
            f"Flower reborn at [{self.position[0]:.1f}, {self.position[1]:.1f}] "
            f"with {self.pollen:.0f} pollen"
        )
        return True

    def __repr__(self) -> str:
        return (
            f"Flower(pos=[{self.position[0]:.1f}, {self.position[1]:.1f}], "
            f"pollen={self.pollen:.0f})"
        )
