"""
apiary/evolution/

What the genetic algorithm hands in and reads back.

- genome: BeeGenome, twelve genes plus a fitness slot
- fitness: the foraging score and per-generation statistics

Selection, crossover and mutation live with the population manager.
"""

from .genome import BeeGenome, GenomeLike, GENE_COUNT, GENE_NAMES
from .fitness import GenerationStats, foraging_fitness

__all__ = [
    "BeeGenome",
    "GenomeLike",
    "GENE_COUNT",
    "GENE_NAMES",
    "GenerationStats",
    "foraging_fitness",
]
