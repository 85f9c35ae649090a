"""
core/bee.py

A forager. Flies with the flock, fills up at flowers,
empties into the hive, and is judged by how well it does so.

Each tick the driver calls, in order:
    compute_steering -> advance -> check_loaded -> check_unloaded

Inspired by:
- Reynolds steering behaviours (seek, arrive, boids flocking)
- Honeybee foraging trips
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional, Sequence
import numpy as np

from apiary.evolution import genome as g
from apiary.evolution import fitness as evo_fitness
from .vector import distance, from_angle, heading as heading_of, limit, magnitude, map_range, set_mag

if TYPE_CHECKING:
    from apiary.evolution.genome import GenomeLike
    from .flower import Flower
    from .hive import HiveCell


MAX_ROUNDS = 4
DELIVERY_BONUS = 100
ARRIVE_RADIUS = 100.0
ARRIVE_STOP = 10.0
HIVE_SEARCH_SPAN = 3.0


@dataclass
class BeeTraits:
    """
    The unchanging nature of a bee.
    Derived from its genes at birth, honored throughout life.
    """
    radius: float                 # Body size, grows with capacity
    wing_length: float            # Grows with speed
    max_speed: float              # Speed gene, slowed by capacity
    max_force: float              # Max steering force per tick
    capacity: float               # Pollen it can carry
    vision: float                 # Flower detection range
    separation_radius: float      # Desired flock separation
    influence_radius: float       # Flock cohesion/alignment range
    separation_factor: float
    cohesion_factor: float
    alignment_factor: float
    food_factor: float            # Weight of the pull toward flowers
    hive_factor: float            # Weight of the pull toward the hive
    max_life: float

    @classmethod
    def from_genome(cls, genome: GenomeLike) -> "BeeTraits":
        genes = genome.genes
        speed = genes[g.SPEED]
        capacity = genes[g.CAPACITY]
        radius = map_range(capacity, 20, 80, 3, 6)
        return cls(
            radius=radius,
            wing_length=radius * map_range(speed, 1, 10, 1, 3),
            max_speed=speed - map_range(capacity, 20, 80, -2, 2),
            max_force=genes[g.STEERING],
            capacity=capacity,
            vision=radius * genes[g.VISION],
            separation_radius=radius * genes[g.SEPARATION],
            influence_radius=radius * genes[g.INFLUENCE],
            separation_factor=genes[g.SEP_FACTOR],
            cohesion_factor=genes[g.COH_FACTOR],
            alignment_factor=genes[g.ALI_FACTOR],
            food_factor=genes[g.FOOD_FACTOR],
            hive_factor=genes[g.HIVE_FACTOR],
            max_life=genes[g.LIFE],
        )


@dataclass
class BeeState:
    """
    What a bee IS at this moment.

    `searching` and `pollen` together pick the behaviour:
    foraging while searching, delivering otherwise.
    """
    position: np.ndarray
    velocity: np.ndarray
    life: float
    best_trip_time: float
    acceleration: np.ndarray = field(default_factory=lambda: np.zeros(2))
    timer: int = 0                # Ticks since the last delivery
    rounds: int = 0               # Completed deliveries, capped at MAX_ROUNDS
    pollen: float = 0.0
    searching: bool = True
    fitness: float = 0.0

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=np.float64)
        self.velocity = np.asarray(self.velocity, dtype=np.float64)
        self.acceleration = np.asarray(self.acceleration, dtype=np.float64)


class Bee:
    """
    A single forager in the swarm.

    Steering only reads the other bees, flowers and hive cells and
    accumulates into this bee's acceleration, so every bee can compute
    its force before any of them moves.

    Neighbor lists may contain the bee itself: all neighbor loops skip
    zero-distance entries.
    """

    def __init__(
        self,
        position: Sequence[float],
        heading: float,
        genome: GenomeLike,
        bee_id: Optional[str] = None,
    ):
        self.id = bee_id
        self.genome = genome
        self.traits = BeeTraits.from_genome(genome)
        self.state = BeeState(
            position=np.array(position, dtype=np.float64),
            velocity=from_angle(heading),
            life=self.traits.max_life,
            best_trip_time=self.traits.max_life,
        )

    # ==================== Read-only cues ====================

    @property
    def position(self) -> np.ndarray:
        return self.state.position

    @property
    def velocity(self) -> np.ndarray:
        return self.state.velocity

    @property
    def pollen(self) -> float:
        return self.state.pollen

    @pollen.setter
    def pollen(self, value: float) -> None:
        self.state.pollen = value

    @property
    def searching(self) -> bool:
        return self.state.searching

    @property
    def alive(self) -> bool:
        return self.state.life > 0

    @property
    def heading(self) -> float:
        return heading_of(self.state.velocity)

    @property
    def fill_ratio(self) -> float:
        if self.traits.capacity <= 0:
            return 1.0
        return self.state.pollen / self.traits.capacity

    # ==================== Steering ====================

    def compute_steering(
        self,
        bees: Sequence[Bee],
        flowers: Sequence[Flower],
        hive: Sequence[HiveCell],
    ) -> np.ndarray:
        """
        Weigh the four drives and add them to this tick's acceleration.

        Call exactly once per tick before `advance`; repeated calls stack.
        Returns the combined force.
        """
        t = self.traits
        feed_factor = t.food_factor if self.state.searching else t.hive_factor

        force = (
            self.separate(bees) * t.separation_factor
            + self.cohesion(bees) * t.cohesion_factor
            + self.align(bees) * t.alignment_factor
            + self.forage(flowers, hive) * feed_factor
        )
        self.apply_force(force)
        return force

    def apply_force(self, force: np.ndarray) -> None:
        self.state.acceleration += force

    def separate(self, bees: Sequence[Bee]) -> np.ndarray:
        """
        Steer away from bees closer than the separation radius.

        Closer bees push harder: from max speed at contact down to
        nothing at the edge of the radius.
        """
        tolerance = self.traits.separation_radius
        desired = np.zeros(2)
        count = 0
        for other in bees:
            d = self.distance_to(other)
            if 0 < d < tolerance:
                away = self.state.position - other.position
                desired += set_mag(away, map_range(d, 0, tolerance, self.traits.max_speed, 0))
                count += 1

        if count > 0:
            desired /= count
        if magnitude(desired) > 0:
            return self._steer(set_mag(desired, self.traits.max_speed))
        return np.zeros(2)

    def cohesion(self, bees: Sequence[Bee]) -> np.ndarray:
        """Seek the centre of the bees within the influence radius."""
        centre = self._centroid(bees, self.traits.influence_radius)
        if centre is None:
            return np.zeros(2)
        return self.seek(centre)

    def align(self, bees: Sequence[Bee]) -> np.ndarray:
        """
        Head the way the nearby flock sits.

        Averages neighbour positions, not velocities, and steers along
        that vector at full speed.
        """
        flock = self._centroid(bees, self.traits.influence_radius)
        if flock is None:
            return np.zeros(2)
        return self._steer(set_mag(flock, self.traits.max_speed))

    def forage(self, flowers: Sequence[Flower], hive: Sequence[HiveCell]) -> np.ndarray:
        """
        Pull toward food while searching, toward the hive while loaded.

        Flowers: arrive at the centre of every flower in vision.
        Hive: arrive at the open cell with the lowest distance/capacity
        within reach, or at the first cell when none qualifies.
        """
        if self.state.searching:
            target = self._centroid(flowers, self.traits.vision)
        else:
            target = self._hive_target(hive)

        if target is None:
            return np.zeros(2)
        return self.arrive(target)

    def seek(self, target: np.ndarray) -> np.ndarray:
        """Steer toward `target` at full speed."""
        desired = set_mag(target - self.state.position, self.traits.max_speed)
        return self._steer(desired)

    def arrive(self, target: np.ndarray) -> np.ndarray:
        """Steer toward `target`, slowing down inside ARRIVE_RADIUS."""
        desired = target - self.state.position
        d = magnitude(desired)
        if d < ARRIVE_RADIUS:
            speed = map_range(d, ARRIVE_STOP, ARRIVE_RADIUS, 0, self.traits.max_speed)
        else:
            speed = self.traits.max_speed
        return self._steer(set_mag(desired, speed))

    def _steer(self, desired: np.ndarray) -> np.ndarray:
        # Reynolds: steering = desired - velocity, bounded by max force
        return limit(desired - self.state.velocity, self.traits.max_force)

    def _centroid(self, things: Sequence, radius: float) -> Optional[np.ndarray]:
        total = np.zeros(2)
        count = 0
        for thing in things:
            d = distance(self.state.position, thing.position)
            if 0 < d < radius:
                total += thing.position
                count += 1
        if count == 0:
            return None
        return total / count

    def _hive_target(self, hive: Sequence[HiveCell]) -> Optional[np.ndarray]:
        if not hive:
            return None

        best_index = 0
        best_value = float("inf")
        reach = self.traits.vision * HIVE_SEARCH_SPAN
        for i, cell in enumerate(hive):
            if cell.full:
                continue
            d = distance(self.state.position, cell.position)
            if 0 < d < reach + cell.radius:
                value = d / cell.capacity
                if value < best_value:
                    best_value = value
                    best_index = i
        return np.array(hive[best_index].position, dtype=np.float64)

    # ==================== Integration ====================

    def advance(self, width: float, height: float) -> None:
        """
        Move one tick: integrate acceleration, wrap the field edges,
        then age the bee.
        """
        s = self.state
        s.velocity = limit(s.velocity + s.acceleration, self.traits.max_speed)
        s.position = s.position + s.velocity
        self._wrap(width, height)
        s.acceleration = np.zeros(2)

        s.timer += 1
        s.life -= 1

    def _wrap(self, width: float, height: float) -> None:
        r = self.traits.radius
        pos = self.state.position
        if pos[0] < -r:
            pos[0] = width + r
        if pos[1] < -r:
            pos[1] = height + r
        if pos[0] > width + r:
            pos[0] = -r
        if pos[1] > height + r:
            pos[1] = -r

    # ==================== Forage / deliver ====================

    def check_loaded(self) -> bool:
        """Full of pollen: stop searching and head home."""
        if self.state.pollen >= self.traits.capacity:
            self.state.searching = False
            return True
        return False

    def check_unloaded(self) -> bool:
        """
        Emptied into the hive: count the round, keep the best trip time,
        earn bonus life and go back to searching.
        """
        s = self.state
        if s.pollen <= 0 and not s.searching:
            s.rounds = min(s.rounds + 1, MAX_ROUNDS)
            s.best_trip_time = min(s.best_trip_time, s.timer)
            s.timer = 0
            s.life += DELIVERY_BONUS
            s.searching = True
            return True
        return False

    def calc_fitness(self) -> float:
        """Score the bee and write the score back into its genome."""
        fitness = evo_fitness.foraging_fitness(
            capacity=self.traits.capacity,
            best_trip_time=self.state.best_trip_time,
            life_gene=self.genome.genes[g.LIFE],
            rounds=self.state.rounds,
        )
        self.state.fitness = fitness
        self.genome.fitness = fitness
        return fitness

    # ==================== Utilities ====================

    def distance_to(self, other: Bee) -> float:
        return distance(self.state.position, other.position)

    def __repr__(self) -> str:
        mode = "searching" if self.state.searching else "delivering"
        return (
            f"Bee(id={self.id}, "
            f"pos=[{self.state.position[0]:.2f}, {self.state.position[1]:.2f}], "
            f"pollen={self.state.pollen:.0f}/{self.traits.capacity:.0f}, "
            f"{mode}, life={self.state.life:.0f})"
        )
