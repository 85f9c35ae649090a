"""
apiary/evolution/genome.py

The bee genome: twelve numbers and a score.

The genome is the genotype; the resulting forager is the phenotype.
Breeding (selection, crossover, mutation) belongs to the population
manager. This module only defines the value the manager hands over
and reads back.

Gene order:
    SPEED       max speed (also sets wing length)
    CAPACITY    pollen capacity (bigger bees are slower)
    STEERING    max steering force
    VISION      flower detection range, in body radii
    SEPARATION  desired flock separation, in body radii
    INFLUENCE   flock influence distance, in body radii
    SEP_FACTOR .. HIVE_FACTOR   weight of each steering force
    LIFE        maximum lifespan in ticks
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Protocol, Sequence, Tuple


SPEED = 0
CAPACITY = 1
STEERING = 2
VISION = 3
SEPARATION = 4
INFLUENCE = 5
SEP_FACTOR = 6
COH_FACTOR = 7
ALI_FACTOR = 8
FOOD_FACTOR = 9
HIVE_FACTOR = 10
LIFE = 11

GENE_COUNT = 12

GENE_NAMES = (
    "speed",
    "capacity",
    "steering",
    "vision",
    "separation",
    "influence",
    "separation_factor",
    "cohesion_factor",
    "alignment_factor",
    "food_factor",
    "hive_factor",
    "life",
)


class GenomeLike(Protocol):
    """Anything a Bee can be built from: ordered genes plus a fitness slot."""

    genes: Sequence[float]
    fitness: float


@dataclass
class BeeGenome:
    """
    Twelve genes and the fitness the bee earned with them.

    Genes are frozen into a tuple on construction; only `fitness`
    is ever written back.
    """

    genes: Tuple[float, ...]
    fitness: float = 0.0

    def __post_init__(self):
        genes = tuple(float(g) for g in self.genes)
        if len(genes) != GENE_COUNT:
            raise ValueError(
                f"BeeGenome needs {GENE_COUNT} genes, got {len(genes)}"
            )
        if genes[CAPACITY] <= 0:
            raise ValueError(f"capacity gene must be positive, got {genes[CAPACITY]}")
        if genes[LIFE] <= 0:
            raise ValueError(f"life gene must be positive, got {genes[LIFE]}")
        self.genes = genes

    def gene(self, index: int) -> float:
        return self.genes[index]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": "BeeGenome", "fitness": self.fitness}
        data.update(zip(GENE_NAMES, self.genes))
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BeeGenome":
        missing = [name for name in GENE_NAMES if name not in data]
        if missing:
            raise ValueError(f"BeeGenome data missing genes: {missing}")
        return cls(
            genes=tuple(data[name] for name in GENE_NAMES),
            fitness=data.get("fitness", 0.0),
        )
