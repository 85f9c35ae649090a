"""
environments/meadow.py

A bounded field with flowers, a hive, and a swarm of foragers.

This is the reference driver: it owns one generation of bees and
runs the tick in the order the bees expect. Breeding the next
generation is left to whoever consumes the scores.

Inspired by:
- Reynolds boids simulation
- Honeybee colony foraging
"""

from __future__ import annotations
from dataclasses import dataclass, fields
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union
import math
import numpy as np
import yaml

from apiary.core.bee import Bee
from apiary.core.flower import Flower
from apiary.core.hive import HiveCell, honeycomb
from apiary.evolution.fitness import GenerationStats
from apiary.evolution.genome import GenomeLike

logger = logging.getLogger(__name__)


@dataclass
class MeadowConfig:
    """Configuration for the meadow environment."""
    width: float = 800.0
    height: float = 600.0
    flower_count: int = 12
    flower_pollen: Tuple[float, float] = (1000.0, 2000.0)
    flower_margin: float = 20.0                     # Keep flowers off the edges
    hive_center: Optional[Tuple[float, float]] = None  # None -> middle of the field
    hive_rings: int = 2
    cell_radius: float = 12.0
    cell_capacity: Tuple[float, float] = (20.0, 80.0)
    seed: int = 42

    def __post_init__(self):
        if self.width <= 2 * self.flower_margin or self.height <= 2 * self.flower_margin:
            raise ValueError(
                f"Field {self.width}x{self.height} too small for margin {self.flower_margin}"
            )
        self.flower_pollen = tuple(float(v) for v in self.flower_pollen)
        self.cell_capacity = tuple(float(v) for v in self.cell_capacity)
        if self.hive_center is not None:
            self.hive_center = tuple(float(v) for v in self.hive_center)

    @property
    def center(self) -> np.ndarray:
        if self.hive_center is None:
            return np.array([self.width / 2, self.height / 2])
        return np.array(self.hive_center, dtype=np.float64)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "MeadowConfig":
        return cls(**raw)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "MeadowConfig":
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        return cls.from_dict(raw.get("meadow", raw))

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


class Meadow:
    """
    2D field where one generation of bees forages.

    Tick order (see `step`):
    1. Every bee computes its steering against the same world
    2. Every bee moves
    3. Every bee checks its forage/deliver state
    4. Flowers feed nearby bees and regrow when empty
    5. Hive cells take pollen from delivering bees
    6. Bees out of life are scored and retired
    """

    def __init__(self, config: Optional[MeadowConfig] = None):
        self.config = config or MeadowConfig()
        self.rng = np.random.default_rng(self.config.seed)
        self.time = 0

        self.bees: List[Bee] = []
        self.graveyard: List[Bee] = []
        self.flowers: List[Flower] = [
            self._spawn_flower() for _ in range(self.config.flower_count)
        ]
        self.hive: List[HiveCell] = honeycomb(
            self.config.center,
            rings=self.config.hive_rings,
            cell_radius=self.config.cell_radius,
            capacity_range=self.config.cell_capacity,
            rng=self.rng,
        )

    def _spawn_flower(self) -> Flower:
        c = self.config
        position = (
            self.rng.uniform(c.flower_margin, c.width - c.flower_margin),
            self.rng.uniform(c.flower_margin, c.height - c.flower_margin),
        )
        return Flower(position, pollen_range=c.flower_pollen, margin=c.flower_margin, rng=self.rng)

    def populate(self, genomes: Iterable[GenomeLike]) -> List[Bee]:
        """Release one bee per genome from the hive centre."""
        start = len(self.bees) + len(self.graveyard)
        born = [
            Bee(
                self.config.center,
                heading=self.rng.uniform(0, 2 * math.pi),
                genome=genome,
                bee_id=f"bee_{start + i}",
            )
            for i, genome in enumerate(genomes)
        ]
        self.bees.extend(born)
        return born

    def step(self) -> None:
        """Advance the meadow by one tick."""
        self.time += 1
        c = self.config

        # Phase 1: Steering, against an unmoved swarm
        for bee in self.bees:
            bee.compute_steering(self.bees, self.flowers, self.hive)

        # Phase 2: Move
        for bee in self.bees:
            bee.advance(c.width, c.height)

        # Phase 3: Forage/deliver transitions
        for bee in self.bees:
            bee.check_loaded()
            bee.check_unloaded()

        # Phase 4: Flowers
        for flower in self.flowers:
            flower.drain(self.bees)
            flower.update(c.width, c.height)

        # Phase 5: Hive
        for cell in self.hive:
            cell.fill(self.bees)

        # Phase 6: Retire the dead
        dead = [bee for bee in self.bees if not bee.alive]
        if dead:
            for bee in dead:
                bee.calc_fitness()
                logger.debug(f"{bee.id} died at t={self.time} with fitness {bee.state.fitness:.3f}")
            self.bees = [bee for bee in self.bees if bee.alive]
            self.graveyard.extend(dead)

    def run(self, max_ticks: int) -> GenerationStats:
        """
        Step until every bee has died or `max_ticks` have passed.

        Survivors are scored where they stand.
        """
        for _ in range(max_ticks):
            if not self.bees:
                break
            self.step()

        for bee in self.bees:
            bee.calc_fitness()

        stats = GenerationStats.from_bees(self.bees + self.graveyard)
        logger.info(
            f"Generation done at t={self.time}: {stats.count} bees, "
            f"best={stats.best:.3f}, mean={stats.mean:.3f}, "
            f"rounds={stats.rounds_mean:.2f}"
        )
        return stats

    def snapshot(self) -> Dict[str, Any]:
        """Read-only view of the meadow for renderers."""
        return {
            "time": self.time,
            "bees": [
                {
                    "id": bee.id,
                    "position": bee.position.tolist(),
                    "heading": bee.heading,
                    "radius": bee.traits.radius,
                    "wing_length": bee.traits.wing_length,
                    "fill_ratio": bee.fill_ratio,
                    "searching": bee.searching,
                }
                for bee in self.bees
            ],
            "flowers": [
                {
                    "position": flower.position.tolist(),
                    "pollen": flower.pollen,
                    "vitality": flower.vitality,
                    "hue": flower.hue,
                }
                for flower in self.flowers
            ],
            "hive": [
                {
                    "position": cell.position.tolist(),
                    "fill_ratio": cell.fill_ratio,
                    "full": cell.full,
                }
                for cell in self.hive
            ],
        }

    def __repr__(self) -> str:
        return (
            f"Meadow(bees={len(self.bees)}, "
            f"flowers={len(self.flowers)}, "
            f"cells={len(self.hive)}, "
            f"time={self.time})"
        )
