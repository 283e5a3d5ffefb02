"""
Stochastic secondary production.

A live particle is offered for branching once per tick. Two independent gates
decide whether it branches at all:

* a rate gate, ``min(1, (0.02 * drive + 0.015 * min(E, 3)) * dt)``, so the
  branching frequency does not depend on the tick length;
* an altitude gate, ``0.7 + 0.3 * clamp((y + 20) / 90, 0, 1)``, which makes
  branching more likely high up.

If both pass, the species rule from ``BRANCH_RULES`` decides what is emitted.
Electromagnetic rules are applied at every altitude (no extra low-altitude
suppression). A "chance X" always means: draw from [0, 1), proceed if the draw
is <= X.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple, Union

import numpy as np

from . import constants
from .emission import Preset, create_pair, create_particle
from .particle import Particle
from .rng import RandomSource
from .species import Species


@dataclass(frozen=True)
class Emission:
    species: Species
    share: float  # fraction of the parent energy
    preset: Preset = Preset()


@dataclass(frozen=True)
class PairEmission:
    first: Species
    second: Species


Product = Union[Emission, PairEmission]


@dataclass(frozen=True)
class BranchRule:
    products: Tuple[Product, ...] = ()
    chance: float = 1.0
    min_age: float = 0.0  # younger particles do not branch at all
    after_age: float = -1.0  # particles must be strictly older than this
    extras: Tuple[Tuple[float, Product], ...] = ()  # independent optional products

    @property
    def terminal(self) -> bool:
        return not self.products and not self.extras


# =========================== Rule Table ===========================
_PION_LEAD = Emission(Species.PION, 0.7, Preset(scatter=0.4))
_PION_WIDE = Emission(Species.PION, 0.45, Preset(scatter=0.65))
_GAMMA_PAIR = (0.5, PairEmission(Species.GAMMA, Species.GAMMA))

BRANCH_RULES: Dict[Species, BranchRule] = {
    Species.PROTON: BranchRule(
        products=(_PION_LEAD, _PION_WIDE), min_age=0.2, extras=(_GAMMA_PAIR,),
    ),
    Species.ANTIPROTON: BranchRule(
        products=(_PION_LEAD, _PION_WIDE), min_age=0.2,
        extras=(_GAMMA_PAIR, (0.35, Emission(Species.GAMMA, 0.5, Preset(scatter=0.5, speed=22.0)))),
    ),
    Species.IRON: BranchRule(
        products=(_PION_LEAD, _PION_WIDE), min_age=0.2,
        extras=(_GAMMA_PAIR, (0.4, Emission(Species.MUON, 0.4, Preset(scatter=0.5, speed=20.0)))),
    ),
    Species.GAMMA: BranchRule(
        products=(PairEmission(Species.ELECTRON, Species.POSITRON),), chance=0.55,
    ),
    Species.PION: BranchRule(
        products=(
            Emission(Species.MUON, 0.7, Preset(scatter=0.25, speed=19.0)),
            Emission(Species.NEUTRINO, 0.2, Preset(scatter=0.4, upward_bias=0.3, speed=16.0)),
        ),
        chance=0.65,
    ),
    Species.TAU: BranchRule(
        products=(
            Emission(Species.MUON, 0.6, Preset(scatter=0.3, speed=20.0)),
            Emission(Species.NEUTRINO, 0.25, Preset(scatter=0.6, speed=18.0)),
            Emission(Species.PION, 0.35, Preset(scatter=0.6, speed=18.0)),
        ),
        after_age=0.05,
    ),
    Species.MUON: BranchRule(
        products=(
            Emission(Species.ELECTRON, 0.5, Preset(scatter=0.35, speed=14.0)),
            Emission(Species.NEUTRINO, 0.15, Preset(scatter=0.5, upward_bias=0.3, speed=16.0)),
        ),
        chance=0.45,
        after_age=0.4,
    ),
    Species.ELECTRON: BranchRule(
        products=(Emission(Species.GAMMA, 0.3, Preset(scatter=0.6, upward_bias=0.1)),), chance=0.3,
    ),
    Species.POSITRON: BranchRule(
        products=(Emission(Species.GAMMA, 0.3, Preset(scatter=0.6, upward_bias=0.1)),), chance=0.3,
    ),
    Species.NEUTRINO: BranchRule(),
}


def rate_chance(energy: float, drive_factor: float, dt: float) -> float:
    base = constants.DRIVE_RATE * drive_factor + constants.ENERGY_RATE * min(energy, constants.ENERGY_RATE_CAP)
    return min(1.0, base * dt)


def altitude_chance(height: float) -> float:
    height_factor = float(np.clip((height + constants.ALTITUDE_OFFSET) / constants.ALTITUDE_SPAN, 0.0, 1.0))
    return constants.ALTITUDE_BASE_CHANCE + constants.ALTITUDE_EXTRA_CHANCE * height_factor


def _passes(rng: RandomSource, chance: float) -> bool:
    if chance >= 1.0:
        return True
    return rng.uniform() <= chance


class BranchingEngine:
    def __init__(self, rng: RandomSource, rules: Dict[Species, BranchRule] | None = None):
        self.rng = rng
        self.rules = BRANCH_RULES if rules is None else rules

    def admits(self, particle: Particle, drive_factor: float, dt: float) -> bool:
        if self.rng.uniform() > rate_chance(particle.energy, drive_factor, dt):
            return False
        return self.rng.uniform() <= altitude_chance(particle.position[1])

    def offer(self, particle: Particle, collector: List[Particle], drive_factor: float, dt: float) -> int:
        """Append any secondaries of ``particle`` to ``collector``; return how many."""
        if not self.admits(particle, drive_factor, dt):
            return 0
        rule = self.rules.get(particle.species)
        if rule is None or rule.terminal or particle.age < rule.min_age or particle.age <= rule.after_age:
            return 0
        if not _passes(self.rng, rule.chance):
            return 0

        before = len(collector)
        for product in rule.products:
            self._emit(particle, product, collector)
        for chance, product in rule.extras:
            if _passes(self.rng, chance):
                self._emit(particle, product, collector)
        return len(collector) - before

    def _emit(self, parent: Particle, product: Product, collector: List[Particle]) -> None:
        if isinstance(product, PairEmission):
            collector.extend(create_pair(parent, product.first, product.second, self.rng))
        else:
            collector.append(create_particle(
                product.species, parent.position, parent.energy * product.share, self.rng, product.preset,
            ))
