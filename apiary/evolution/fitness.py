"""
apiary/evolution/fitness.py

Fitness of a forager, and a summary of a finished generation.

Fitness is what the population manager optimizes.
A bee earns it by delivering pollen quickly and often:

    term1 = map(constrain(capacity * 100 / best_trip, 1, 100), 1, 100, 1, 10)
    term2 = life_gene / 100
    fitness = term1 ** (rounds + 1) + term2

term1 lives in [1, 10], so each extra round can only raise the score.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, TYPE_CHECKING
import numpy as np

from apiary.core.vector import constrain, map_range

if TYPE_CHECKING:
    from apiary.core.bee import Bee


def foraging_fitness(
    capacity: float,
    best_trip_time: float,
    life_gene: float,
    rounds: int,
) -> float:
    """
    Score a bee from its delivery record.

    Args:
        capacity: Pollen the bee can carry
        best_trip_time: Fastest forage-and-deliver trip, in ticks
        life_gene: The genome's max lifespan gene
        rounds: Completed deliveries

    Returns:
        Exponential reward for fast, repeated deliveries plus a small
        lifespan bonus.
    """
    if best_trip_time <= 0:
        raise ValueError(f"best_trip_time must be positive, got {best_trip_time}")

    ratio = constrain(capacity * 100.0 / best_trip_time, 1.0, 100.0)
    term1 = map_range(ratio, 1.0, 100.0, 1.0, 10.0)
    term2 = life_gene / 100.0
    return float(term1 ** (rounds + 1) + term2)


@dataclass
class GenerationStats:
    """Fitness summary of one generation of bees."""

    count: int = 0
    best: float = 0.0
    mean: float = 0.0
    worst: float = 0.0
    rounds_mean: float = 0.0

    @classmethod
    def from_bees(cls, bees: Iterable[Bee]) -> "GenerationStats":
        bees = list(bees)
        if not bees:
            return cls()

        fitness = np.array([b.state.fitness for b in bees], dtype=np.float64)
        rounds = np.array([b.state.rounds for b in bees], dtype=np.float64)
        return cls(
            count=len(bees),
            best=float(fitness.max()),
            mean=float(fitness.mean()),
            worst=float(fitness.min()),
            rounds_mean=float(rounds.mean()),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "count": self.count,
            "best": self.best,
            "mean": self.mean,
            "worst": self.worst,
            "rounds_mean": self.rounds_mean,
        }
