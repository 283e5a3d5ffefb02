from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable

from .particle import Particle
from .species import CATEGORIES, Species


@dataclass(frozen=True)
class ShowerStats:
    by_species: Dict[Species, int] = field(default_factory=dict)
    by_category: Dict[str, int] = field(default_factory=dict)
    total: int = 0

    def count(self, species) -> int:
        return self.by_species.get(Species.parse(species), 0)

    def as_row(self) -> Dict[str, int]:
        row = {"total": self.total}
        row.update({name: self.by_category.get(name, 0) for name in CATEGORIES})
        return row


def summarize(particles: Iterable[Particle]) -> ShowerStats:
    """Count live particles per species and per display category."""
    counts = Counter(p.species for p in particles)
    by_species = {s: counts.get(s, 0) for s in Species}
    by_category = {
        name: sum(by_species[s] for s in members) for name, members in CATEGORIES.items()
    }
    return ShowerStats(by_species=by_species, by_category=by_category, total=sum(counts.values()))
