"""
The cascade engine: owns the population, the hit log and the spawn clock.

One call to ``ShowerEngine.tick`` advances the whole simulation by ``dt``:

1. continuous spawning (if enabled) emits primaries at ``spawn_rate``;
2. every live particle is moved, offered to the branching engine and checked
   for expiry; floor crossings are written to the hit log;
3. secondaries collected during the pass join the population;
4. the population is trimmed to capacity, oldest first;
5. the live statistics are recomputed.

Consumers should only read snapshots between ticks.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

import numpy as np

from . import constants, species as species_table
from .branching import BranchingEngine
from .config import ShowerConfig, SimulationParams
from .emission import create_primary
from .hits import HitRecorder
from .particle import ExpiryCause, Particle, brightness_factor
from .population import Population
from .rng import NumpyRandom, RandomSource
from .species import Species
from .stats import ShowerStats, summarize

logger = logging.getLogger(__name__)


@dataclass
class Snapshot:
    positions: np.ndarray  # (N, 3)
    colors: np.ndarray  # (N, 3), species colour times brightness
    brightness: np.ndarray  # (N,)

    def __len__(self) -> int:
        return len(self.brightness)


def _empty_snapshot() -> Snapshot:
    return Snapshot(np.zeros((0, 3)), np.zeros((0, 3)), np.zeros(0))


class ShowerEngine:
    def __init__(self, config: Optional[ShowerConfig] = None, params: Optional[SimulationParams] = None,
                 rng: Optional[RandomSource] = None):
        self.config = config or ShowerConfig()
        self.params = params or SimulationParams()
        self.rng = rng or NumpyRandom()
        self.population = Population(self.config.max_particles)
        self.hits = HitRecorder(self.config.max_hits, enabled=self.params.record_hits)
        self.brancher = BranchingEngine(self.rng)
        self.events: Deque[str] = deque(maxlen=max(1, self.config.event_log_size))
        self.stats: ShowerStats = summarize(())
        self.spawn_accumulator = 0.0
        self.elapsed = 0.0
        self.ticks = 0
        self.last_evicted = 0

    # ------------------------------------------------------------------ commands

    def spawn_primary(self, species=None) -> Particle:
        species = Species.parse(self.params.selected_species if species is None else species)
        energy = self.params.primary_energy
        primary = create_primary(species, energy, self.rng)
        self.population.add(primary)
        if not self.params.continuous_spawn:
            self._log_event(f"DETECTED: {species.value.upper()} @ {energy:.1f} TeV")
        return primary

    def burst(self, species=None) -> Particle:
        """Spawn one primary now, whatever the continuous-spawn setting."""
        return self.spawn_primary(species)

    def set_continuous_spawn(self, enabled: bool) -> None:
        was_enabled = self.params.continuous_spawn
        self.params.continuous_spawn = bool(enabled)
        if self.params.continuous_spawn and not was_enabled:
            self.spawn_accumulator = 0.0
            self.spawn_primary()

    def set_hit_recording(self, enabled: bool) -> None:
        self.params.record_hits = bool(enabled)
        self.hits.enabled = self.params.record_hits

    def clear_particles(self) -> None:
        self.population.clear()
        self.stats = summarize(())

    def clear_hits(self) -> None:
        self.hits.clear()

    # ------------------------------------------------------------------ stepping

    def clamp_dt(self, dt: float) -> float:
        return min(max(0.0, float(dt)), self.config.max_dt)

    def tick(self, dt: float) -> ShowerStats:
        dt = self.clamp_dt(dt)
        params = self.params
        self.hits.enabled = params.record_hits

        self._advance_spawner(dt)

        pending: List[Particle] = []
        survivors: List[Particle] = []
        for particle in self.population:
            particle.update(dt)
            self.brancher.offer(particle, pending, params.drive_factor, dt)
            if not particle.check_expiry(constants.FLOOR_Y):
                survivors.append(particle)
            elif particle.expired_by is ExpiryCause.FLOOR:
                self.hits.record(particle, params.primary_energy)

        self.population.replace(survivors)
        self.population.extend(pending)
        self.last_evicted = self.population.trim()

        self.stats = summarize(self.population)
        self.elapsed += dt
        self.ticks += 1
        return self.stats

    def run_until_empty(self, dt: float, max_ticks: int) -> int:
        """Tick until no particle is left (or ``max_ticks``); return ticks taken."""
        taken = 0
        while len(self.population) > 0 and taken < max_ticks:
            self.tick(dt)
            taken += 1
        return taken

    def _advance_spawner(self, dt: float) -> None:
        if not self.params.continuous_spawn:
            self.spawn_accumulator = 0.0
            return
        interval = self.params.spawn_interval
        self.spawn_accumulator += dt
        while self.spawn_accumulator >= interval:
            self.spawn_accumulator -= interval
            self.spawn_primary()

    def _log_event(self, message: str) -> None:
        self.events.appendleft(message)
        logger.info(message)

    # ------------------------------------------------------------------ snapshots

    def particle_snapshot(self) -> Snapshot:
        if len(self.population) == 0:
            return _empty_snapshot()
        primary_energy = self.params.primary_energy
        positions = np.array([p.position for p in self.population])
        brightness = np.array([brightness_factor(p.energy, primary_energy) for p in self.population])
        palette = np.array([species_table.color(p.species) for p in self.population])
        return Snapshot(positions, palette * brightness[:, None], brightness)

    def hit_snapshot(self) -> Snapshot:
        if len(self.hits) == 0:
            return _empty_snapshot()
        return Snapshot(
            np.array([h.position for h in self.hits]),
            np.array([h.color for h in self.hits]),
            np.array([h.brightness for h in self.hits]),
        )
