"""
Tests for apiary/evolution/

Genome contract, fitness formula and generation statistics.
"""

import pytest
import numpy as np

from apiary.core.bee import Bee
from apiary.evolution.genome import BeeGenome, GENE_COUNT, GENE_NAMES, LIFE
from apiary.evolution.fitness import GenerationStats, foraging_fitness

from genomes import build_genome


# ==================== Genome Tests ====================

class TestBeeGenome:

    def test_genes_become_float_tuple(self):
        genome = BeeGenome(genes=list(range(1, 13)))
        assert isinstance(genome.genes, tuple)
        assert all(isinstance(x, float) for x in genome.genes)
        assert genome.gene(LIFE) == 12.0
        assert genome.fitness == 0.0

    @pytest.mark.parametrize("count", [0, 11, 13])
    def test_wrong_gene_count_raises(self, count):
        with pytest.raises(ValueError, match="12 genes"):
            BeeGenome(genes=[1.0] * count)

    @pytest.mark.parametrize("life", [0, -50])
    def test_non_positive_life_raises(self, life):
        with pytest.raises(ValueError, match="life gene"):
            build_genome(life=life)

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_non_positive_capacity_raises(self, capacity):
        with pytest.raises(ValueError, match="capacity gene"):
            build_genome(capacity=capacity)

    def test_serialization(self):
        genome = build_genome(speed=7.5)
        genome.fitness = 3.25

        data = genome.to_dict()
        restored = BeeGenome.from_dict(data)

        assert data["type"] == "BeeGenome"
        assert data["speed"] == 7.5
        assert restored.genes == genome.genes
        assert restored.fitness == 3.25

    def test_from_dict_missing_gene(self):
        data = build_genome().to_dict()
        del data["vision"]
        with pytest.raises(ValueError, match="vision"):
            BeeGenome.from_dict(data)

    def test_gene_names_cover_every_gene(self):
        assert len(GENE_NAMES) == GENE_COUNT


# ==================== Fitness Tests ====================

class TestForagingFitness:

    def test_no_delivery_baseline(self):
        # ratio 50 * 100 / 1000 = 5 -> term1 = 1 + 4 * 9 / 99
        term1 = 1 + 4 * 9 / 99
        assert foraging_fitness(50, 1000, 1000, 0) == pytest.approx(term1 + 10.0)

    def test_rounds_are_exponential(self):
        # ratio 100 -> term1 = 10
        assert foraging_fitness(50, 50, 0, 0) == pytest.approx(10.0)
        assert foraging_fitness(50, 50, 0, 2) == pytest.approx(1000.0)

    def test_ratio_saturates(self):
        assert foraging_fitness(80, 1, 0, 0) == pytest.approx(10.0)
        assert foraging_fitness(5, 1000, 0, 3) == pytest.approx(1.0)

    @pytest.mark.parametrize("capacity,best_trip", [(5, 1000), (50, 1000), (80, 40), (30, 300)])
    def test_monotonic_in_rounds(self, capacity, best_trip):
        scores = [foraging_fitness(capacity, best_trip, 800, r) for r in range(5)]
        assert all(a <= b for a, b in zip(scores, scores[1:]))

    def test_non_positive_trip_time_raises(self):
        with pytest.raises(ValueError):
            foraging_fitness(50, 0, 1000, 1)


class TestGenerationStats:

    def test_empty_generation(self):
        stats = GenerationStats.from_bees([])
        assert stats.count == 0
        assert stats.best == 0.0

    def test_summary(self):
        bees = [Bee((0, 0), 0.0, build_genome()) for _ in range(3)]
        for bee, rounds in zip(bees, [0, 1, 2]):
            bee.state.rounds = rounds
            bee.calc_fitness()

        stats = GenerationStats.from_bees(bees)
        fitness = [b.state.fitness for b in bees]

        assert stats.count == 3
        assert stats.best == pytest.approx(max(fitness))
        assert stats.worst == pytest.approx(min(fitness))
        assert stats.mean == pytest.approx(np.mean(fitness))
        assert stats.rounds_mean == pytest.approx(1.0)
        assert stats.to_dict()["count"] == 3
