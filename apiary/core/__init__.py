"""
Core components of the apiary simulation.

- bee: The forager - steering, forage/deliver cycle, fitness
- flower: Depletable pollen source
- hive: Storage cells and the comb layout
- vector: 2D vector helpers
"""

from .bee import Bee, BeeState, BeeTraits
from .flower import Flower
from .hive import HiveCell, honeycomb

__all__ = ["Bee", "BeeState", "BeeTraits", "Flower", "HiveCell", "honeycomb"]
