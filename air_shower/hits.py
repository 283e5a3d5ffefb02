from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator

from . import constants
from .particle import Particle, brightness_factor, display_color
from .species import Species


@dataclass(frozen=True)
class HitRecord:
    position: tuple  # (x, y, z) on the ground plane
    color: tuple  # species colour scaled by brightness
    brightness: float
    species: Species
    energy: float


class HitRecorder:
    """Fixed-capacity log of ground impacts; the oldest record is dropped when full."""

    def __init__(self, max_hits: int = constants.MAX_HITS, enabled: bool = True,
                 ground_y: float = constants.GROUND_PLANE_Y + constants.HIT_LIFT):
        self.max_hits = max(1, int(max_hits))
        self.enabled = enabled
        self.ground_y = ground_y
        self._records: Deque[HitRecord] = deque(maxlen=self.max_hits)
        self.evicted = 0

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[HitRecord]:
        return iter(self._records)

    def __getitem__(self, index: int) -> HitRecord:
        return self._records[index]

    @property
    def full(self) -> bool:
        return len(self._records) >= self.max_hits

    def record(self, particle: Particle, primary_energy: float) -> HitRecord | None:
        if not self.enabled:
            return None
        if self.full:
            self.evicted += 1  # the deque drops the leftmost record on append
        bright = brightness_factor(particle.energy, primary_energy)
        rgb = display_color(particle.species, particle.energy, primary_energy)
        hit = HitRecord(
            position=(float(particle.position[0]), self.ground_y, float(particle.position[2])),
            color=tuple(float(c) for c in rgb),
            brightness=bright,
            species=particle.species,
            energy=float(particle.energy),
        )
        self._records.append(hit)
        return hit

    def clear(self) -> None:
        self._records.clear()
