from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, Iterator

from . import constants
from .particle import Particle

logger = logging.getLogger(__name__)


class Population:
    """Live particles in creation order, bounded by ``max_particles``.

    Overflow is only resolved by ``trim``, which the engine calls once per tick
    after every spawn and branch of that tick has been applied.
    """

    def __init__(self, max_particles: int = constants.MAX_PARTICLES):
        self.max_particles = max(1, int(max_particles))
        self._particles: Deque[Particle] = deque()

    def __len__(self) -> int:
        return len(self._particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles)

    def __getitem__(self, index: int) -> Particle:
        return self._particles[index]

    def add(self, particle: Particle) -> None:
        self._particles.append(particle)

    def extend(self, particles: Iterable[Particle]) -> None:
        self._particles.extend(particles)

    def replace(self, survivors: Iterable[Particle]) -> None:
        self._particles = deque(survivors)

    def trim(self) -> int:
        """Evict the oldest particles until at capacity; return the number evicted."""
        excess = len(self._particles) - self.max_particles
        for _ in range(max(0, excess)):
            self._particles.popleft()
        if excess > 0:
            logger.debug("evicted %d oldest particles (capacity %d)", excess, self.max_particles)
        return max(0, excess)

    def clear(self) -> None:
        self._particles.clear()
