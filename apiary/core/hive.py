"""
core/hive.py

Hive cells: where delivering bees leave their pollen.

Bees only read a cell (position, capacity, radius, full).
Storing pollen is the driver's job, through `HiveCell.fill`.
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple
import numpy as np

from .vector import distance

if TYPE_CHECKING:
    from .bee import Bee


@dataclass
class HiveCell:
    """A single storage slot in the comb."""
    position: np.ndarray
    capacity: float
    radius: float = 12.0
    stored: float = 0.0
    full: bool = False

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=np.float64)
        if self.capacity <= 0:
            raise ValueError(f"HiveCell capacity must be positive, got {self.capacity}")
        self.full = self.full or self.stored >= self.capacity

    @property
    def fill_ratio(self) -> float:
        return min(1.0, self.stored / self.capacity)

    def fill(self, bees: Sequence[Bee]) -> int:
        """
        Take one unit from every delivering bee inside the cell.

        Stops as soon as the cell is full.

        Returns: units stored
        """
        stored = 0
        for bee in bees:
            if self.full:
                break
            if bee.searching or bee.pollen <= 0:
                continue
            d = distance(self.position, bee.position)
            if d < self.radius:
                bee.pollen -= 1
                self.stored += 1
                stored += 1
                self.full = self.stored >= self.capacity
        return stored


def honeycomb(
    center: Sequence[float],
    rings: int = 2,
    cell_radius: float = 12.0,
    capacity_range: Tuple[float, float] = (20.0, 80.0),
    rng: Optional[np.random.Generator] = None,
) -> List[HiveCell]:
    """
    Lay out a hexagonal comb around `center`.

    Ring 0 is the centre cell; ring k holds 6k cells, so a comb of
    `rings` rings has 1 + 3 * rings * (rings + 1) cells.
    Capacities are drawn uniformly from `capacity_range`.
    """
    if rings < 0:
        raise ValueError(f"rings must be >= 0, got {rings}")
    rng = rng if rng is not None else np.random.default_rng()
    cx, cy = float(center[0]), float(center[1])

    # Axial hex coordinates, pointy-top, neighbouring cells touch
    spacing = cell_radius * 2
    directions = [(1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1)]

    coords = [(0, 0)]
    for k in range(1, rings + 1):
        q, r = -k, k
        for dq, dr in directions:
            for _ in range(k):
                coords.append((q, r))
                q, r = q + dq, r + dr

    cells = []
    for q, r in coords:
        x = cx + spacing * (q + r / 2)
        y = cy + spacing * r * math.sqrt(3) / 2
        cells.append(HiveCell(
            position=np.array([x, y]),
            capacity=float(rng.uniform(*capacity_range)),
            radius=cell_radius,
        ))
    return cells
