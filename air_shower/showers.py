"""Headless batch runs: one primary per shower, ticked until nothing is left."""

from __future__ import annotations

import csv
import os
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Optional

from .config import ShowerConfig, SimulationParams
from .engine import ShowerEngine
from .rng import RandomSource
from .species import Species

HIT_FIELDS = ["shower_id", "species", "x", "y", "z", "energy", "brightness", "r", "g", "b"]
PROFILE_FIELDS = ["shower_id", "time", "total", "muon", "gamma", "electron", "hadrons"]


@dataclass
class BatchResult:
    hits: List[Dict] = field(default_factory=list)
    profile: List[Dict] = field(default_factory=list)
    ticks_per_shower: List[int] = field(default_factory=list)
    unfinished: int = 0  # showers stopped by the tick limit with particles still alive


def run_showers(species, energy: float, num_showers: int, *, dt: float = 0.02, max_ticks: int = 5000,
                config: Optional[ShowerConfig] = None, params: Optional[SimulationParams] = None,
                rng: Optional[RandomSource] = None,
                progress: Optional[Callable[[int, int, int], None]] = None) -> BatchResult:
    params = replace(params or SimulationParams(), primary_energy=energy,
                     selected_species=Species.parse(species), continuous_spawn=False)
    engine = ShowerEngine(config=config, params=params, rng=rng)
    result = BatchResult()

    for shower_id in range(1, num_showers + 1):
        engine.clear_particles()
        engine.clear_hits()
        engine.burst(params.selected_species)
        elapsed = 0.0
        ticks = 0
        while len(engine.population) > 0 and ticks < max_ticks:
            stats = engine.tick(dt)
            ticks += 1
            elapsed += engine.clamp_dt(dt)
            result.profile.append({"shower_id": shower_id, "time": elapsed, **stats.as_row()})
        if len(engine.population) > 0:
            result.unfinished += 1

        for hit in engine.hits:
            x, y, z = hit.position
            r, g, b = hit.color
            result.hits.append({
                "shower_id": shower_id, "species": hit.species.value, "x": x, "y": y, "z": z,
                "energy": hit.energy, "brightness": hit.brightness, "r": r, "g": g, "b": b,
            })
        result.ticks_per_shower.append(ticks)
        if progress is not None:
            progress(shower_id, ticks, len(engine.hits))
    return result


def write_rows(path: str | os.PathLike[str], rows: List[Dict], fieldnames: List[str]) -> None:
    with open(path, "w", newline="") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow({key: row[key] for key in fieldnames})
