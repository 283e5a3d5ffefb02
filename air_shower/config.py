from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict

from . import constants
from .species import Species


@dataclass
class ShowerConfig:
    """Fixed engine limits, set once when the engine is built."""

    max_particles: int = constants.MAX_PARTICLES
    max_hits: int = constants.MAX_HITS
    max_dt: float = constants.MAX_DT
    event_log_size: int = constants.EVENT_LOG_SIZE


@dataclass
class SimulationParams:
    """Live inputs; the engine reads them afresh on every tick."""

    primary_energy: float = 1.0  # TeV
    drive_factor: float = 1.0
    spawn_rate: float = 1.0  # primaries per second in continuous mode
    record_hits: bool = True
    continuous_spawn: bool = False
    selected_species: Species = field(default=Species.PROTON)

    def __post_init__(self):
        self.selected_species = Species.parse(self.selected_species)

    @property
    def spawn_interval(self) -> float:
        return 1.0 / max(self.spawn_rate, constants.MIN_SPAWN_RATE)


def _pick(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    return {key: value for key, value in data.items() if key in names}


def config_from_dict(data: Dict[str, Any] | None = None) -> ShowerConfig:
    data = data or {}
    return ShowerConfig(**_pick(ShowerConfig, data.get("engine", data)))


def params_from_dict(data: Dict[str, Any] | None = None) -> SimulationParams:
    data = data or {}
    return SimulationParams(**_pick(SimulationParams, data.get("params", data)))


def load_params(path: str | os.PathLike[str]) -> Dict[str, Any]:
    """
    Load simulation parameters from JSON or TOML.

    Files may hold flat keys, or ``[engine]`` / ``[params]`` tables.
    """
    path = str(path)
    with open(path, "rb") as fh:
        data = fh.read()
    suffix = Path(path).suffix.lower()
    if suffix in {".json", ""}:
        return json.loads(data.decode("utf-8"))
    if suffix in {".toml", ".tml"}:
        return tomllib.loads(data.decode("utf-8"))
    raise ValueError(f"Unsupported parameter file format: {suffix}")
