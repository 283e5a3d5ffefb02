"""
Air-shower cascade engine.

A primary particle enters the volume high up and branches stochastically into
secondaries until every particle has hit the ground, aged out or run out of
energy. The engine is tick driven and keeps bounded buffers for the live
population and the ground-hit log.
"""

from .config import ShowerConfig, SimulationParams, load_params
from .engine import ShowerEngine, Snapshot
from .hits import HitRecord, HitRecorder
from .particle import ExpiryCause, Particle, brightness_factor
from .population import Population
from .rng import NumpyRandom, RandomSource
from .species import Species, color, lifetime
from .stats import ShowerStats, summarize

__all__ = [
    # Engine
    "ShowerEngine",
    "Snapshot",
    # Configuration
    "ShowerConfig",
    "SimulationParams",
    "load_params",
    # Model
    "Species",
    "Particle",
    "ExpiryCause",
    "Population",
    "HitRecord",
    "HitRecorder",
    "ShowerStats",
    # Helpers
    "NumpyRandom",
    "RandomSource",
    "brightness_factor",
    "color",
    "lifetime",
    "summarize",
]
