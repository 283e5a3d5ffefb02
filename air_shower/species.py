"""
Particle species and their static properties (display colour, lifetime).

Lookups never fail: anything that is not a known species resolves to the
proton entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

RGB = Tuple[float, float, float]


class Species(str, Enum):
    PROTON = "proton"
    GAMMA = "gamma"
    PION = "pion"
    MUON = "muon"
    ELECTRON = "electron"
    POSITRON = "positron"
    NEUTRINO = "neutrino"
    IRON = "iron"
    TAU = "tau"
    ANTIPROTON = "antiproton"

    @classmethod
    def parse(cls, value) -> "Species":
        """Return the species named by ``value``, falling back to proton."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.PROTON


@dataclass(frozen=True)
class SpeciesInfo:
    color: RGB
    max_age: float  # seconds


def _hex_to_rgb(value: int) -> RGB:
    return (
        ((value >> 16) & 0xFF) / 255.0,
        ((value >> 8) & 0xFF) / 255.0,
        (value & 0xFF) / 255.0,
    )


SPECIES_TABLE: Dict[Species, SpeciesInfo] = {
    Species.PROTON: SpeciesInfo(_hex_to_rgb(0xFFC26F), 6.0),
    Species.GAMMA: SpeciesInfo(_hex_to_rgb(0x7EF9FF), 1.2),
    Species.PION: SpeciesInfo(_hex_to_rgb(0xFF7BAC), 1.0),
    Species.MUON: SpeciesInfo(_hex_to_rgb(0x88C4FF), 3.2),
    Species.ELECTRON: SpeciesInfo(_hex_to_rgb(0x66FFD7), 1.7),
    Species.POSITRON: SpeciesInfo(_hex_to_rgb(0xFFA3FF), 1.4),
    Species.NEUTRINO: SpeciesInfo(_hex_to_rgb(0x7A7A7A), 0.6),
    Species.IRON: SpeciesInfo(_hex_to_rgb(0xFFD97D), 6.0),
    Species.TAU: SpeciesInfo(_hex_to_rgb(0x88FF00), 0.5),
    Species.ANTIPROTON: SpeciesInfo(_hex_to_rgb(0xB070FF), 6.0),
}

# Grouping used by the live statistics; neutrinos belong to no category.
CATEGORIES: Dict[str, Tuple[Species, ...]] = {
    "muon": (Species.MUON,),
    "gamma": (Species.GAMMA,),
    "electron": (Species.ELECTRON, Species.POSITRON),
    "hadrons": (Species.PROTON, Species.PION, Species.IRON, Species.ANTIPROTON, Species.TAU),
}


def info(species) -> SpeciesInfo:
    return SPECIES_TABLE.get(Species.parse(species), SPECIES_TABLE[Species.PROTON])


def lifetime(species) -> float:
    return info(species).max_age


def color(species) -> RGB:
    return info(species).color


def max_lifetime() -> float:
    return max(entry.max_age for entry in SPECIES_TABLE.values())
