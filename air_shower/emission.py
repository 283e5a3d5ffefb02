"""
Creation of primaries and secondaries.

Every new particle is launched along a random, mostly downward direction:
the horizontal components are drawn from [-scatter/2, scatter/2] and the
vertical component is ``-1 + upward_bias`` before normalisation. Speed grows
with energy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np

from . import constants
from .particle import Particle
from .rng import RandomSource
from .species import Species


@dataclass(frozen=True)
class Preset:
    scatter: float = constants.DEFAULT_SCATTER
    upward_bias: float = constants.DEFAULT_UPWARD_BIAS
    speed: float = constants.DEFAULT_SPEED


DEFAULT_PRESET = Preset()
PAIR_PRESETS = (Preset(0.8, 0.2, 20.0), Preset(0.85, 0.15, 18.0))

# Kinematics of freshly spawned primaries, and the energy multiplier per species.
PRIMARY_PRESETS: Dict[Species, Preset] = {
    Species.GAMMA: Preset(scatter=0.08, speed=24.0),
    Species.IRON: Preset(scatter=0.25, speed=20.0),
    Species.TAU: Preset(scatter=0.18, speed=22.0),
    Species.ANTIPROTON: Preset(scatter=0.22, speed=18.0),
}
DEFAULT_PRIMARY_PRESET = Preset(scatter=0.2, speed=18.0)
ENERGY_SCALE = {Species.IRON: 1.3}


def energy_scale(species) -> float:
    return ENERGY_SCALE.get(Species.parse(species), 1.0)


def random_direction(rng: RandomSource, scatter: float, upward_bias: float) -> np.ndarray:
    direction = np.array([
        (rng.uniform() - 0.5) * scatter,
        -1.0 + upward_bias,
        (rng.uniform() - 0.5) * scatter,
    ])
    norm = np.linalg.norm(direction)
    if norm == 0.0:  # only reachable with upward_bias == 1 and zero horizontal draw
        return np.array([0.0, -1.0, 0.0])
    return direction / norm


def create_particle(species, origin, energy: float, rng: RandomSource,
                    preset: Preset = DEFAULT_PRESET) -> Particle:
    direction = random_direction(rng, preset.scatter, preset.upward_bias)
    velocity = direction * (preset.speed + energy * constants.SPEED_PER_ENERGY)
    return Particle(
        species=species,
        position=np.array(origin, dtype=np.float64),
        velocity=velocity,
        energy=max(energy, constants.CREATION_ENERGY_FLOOR),
    )


def create_pair(parent: Particle, species_a, species_b, rng: RandomSource) -> Tuple[Particle, Particle]:
    """Split ``parent`` into two particles sharing 0.45 of its energy each."""
    share = parent.energy * constants.PAIR_ENERGY_SHARE
    first = create_particle(species_a, parent.position, share, rng, PAIR_PRESETS[0])
    second = create_particle(species_b, parent.position, share, rng, PAIR_PRESETS[1])
    return first, second


def primary_origin(rng: RandomSource) -> np.ndarray:
    altitude = constants.PRIMARY_ALTITUDE + (rng.uniform() - 0.5) * 2 * constants.PRIMARY_VERTICAL_JITTER
    x = (rng.uniform() - 0.5) * 2 * constants.PRIMARY_HORIZONTAL_JITTER
    z = (rng.uniform() - 0.5) * 2 * constants.PRIMARY_HORIZONTAL_JITTER
    return np.array([x, altitude, z])


def create_primary(species, energy: float, rng: RandomSource) -> Particle:
    species = Species.parse(species)
    preset = PRIMARY_PRESETS.get(species, DEFAULT_PRIMARY_PRESET)
    origin = primary_origin(rng)
    return create_particle(species, origin, energy * energy_scale(species), rng, preset)
