"""
A single simulated body and the per-tick kinematics that move it.

Each tick a live particle ages, drifts along its velocity, is pulled down by
a constant gravity analogue and loses energy at a fixed rate. Photons are
additionally damped, a crude stand-in for electromagnetic energy loss.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from . import constants, species as species_table
from .species import Species


class ExpiryCause(Enum):
    FLOOR = "floor"  # crossed the ground plane: the only cause that makes a hit
    AGE = "age"
    ENERGY = "energy"


@dataclass(eq=False)
class Particle:
    species: Species
    position: np.ndarray
    velocity: np.ndarray
    energy: float
    age: float = 0.0
    expired_by: Optional[ExpiryCause] = None

    def __post_init__(self):
        self.species = Species.parse(self.species)
        self.position = np.array(self.position, dtype=np.float64)
        self.velocity = np.array(self.velocity, dtype=np.float64)
        self.energy = max(0.0, float(self.energy))

    @property
    def alive(self) -> bool:
        return self.expired_by is None

    def update(self, dt: float) -> None:
        dt = max(0.0, dt)
        self.age += dt
        self.position += self.velocity * dt
        self.velocity[1] -= dt * constants.GRAVITY
        if self.species is Species.GAMMA:
            self.velocity *= constants.GAMMA_DRAG
        self.energy = max(0.0, self.energy - dt * constants.ENERGY_LOSS_RATE)

    def expiry_cause(self, floor_y: float = constants.FLOOR_Y) -> Optional[ExpiryCause]:
        # Floor is checked first so a particle that lands and ages out on the
        # same tick still counts as a ground hit.
        if self.position[1] < floor_y:
            return ExpiryCause.FLOOR
        if self.age > species_table.lifetime(self.species):
            return ExpiryCause.AGE
        if self.energy < constants.ENERGY_EXPIRY:
            return ExpiryCause.ENERGY
        return None

    def check_expiry(self, floor_y: float = constants.FLOOR_Y) -> bool:
        """Evaluate the expiry predicate; a particle never comes back once expired."""
        if self.expired_by is None:
            self.expired_by = self.expiry_cause(floor_y)
        return self.expired_by is not None


def brightness_factor(energy: float, primary_energy: float) -> float:
    """Energy-normalised intensity in [0.35, 1] used for display colours."""
    ratio = min(energy / max(primary_energy, constants.PRIMARY_ENERGY_FLOOR), 1.0)
    return float(np.clip(constants.BRIGHTNESS_MIN + constants.BRIGHTNESS_RANGE * ratio,
                         constants.BRIGHTNESS_MIN, 1.0))


def display_color(particle_species, energy: float, primary_energy: float) -> np.ndarray:
    return np.asarray(species_table.color(particle_species)) * brightness_factor(energy, primary_energy)
