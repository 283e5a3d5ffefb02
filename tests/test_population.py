from air_shower.particle import Particle
from air_shower.population import Population
from air_shower.species import Species
from air_shower.stats import summarize


def make(kind=Species.PROTON, energy=1.0):
    return Particle(kind, (0.0, 50.0, 0.0), (0.0, -1.0, 0.0), energy=energy)


def test_trim_evicts_oldest_first():
    population = Population(max_particles=3)
    particles = [make(energy=float(i + 1)) for i in range(5)]
    population.extend(particles)
    assert len(population) == 5  # overflow is only resolved by trim
    assert population.trim() == 2
    assert list(population) == particles[2:]


def test_trim_below_capacity_is_a_no_op():
    population = Population(max_particles=3)
    population.add(make())
    assert population.trim() == 0
    assert len(population) == 1


def test_replace_and_clear():
    population = Population(max_particles=10)
    a, b, c = make(), make(), make()
    population.extend([a, b, c])
    population.replace([a, c])
    assert list(population) == [a, c]
    assert population[1] is c
    population.clear()
    assert len(population) == 0


def test_summary_counts():
    particles = [make(Species.MUON), make(Species.MUON), make(Species.POSITRON), make(Species.ELECTRON),
                 make(Species.NEUTRINO), make(Species.TAU), make(Species.PION)]
    stats = summarize(particles)
    assert stats.total == 7
    assert stats.count("muon") == 2
    assert stats.count(Species.GAMMA) == 0
    assert stats.by_category == {"muon": 2, "gamma": 0, "electron": 2, "hadrons": 2}
    assert stats.as_row() == {"total": 7, "muon": 2, "gamma": 0, "electron": 2, "hadrons": 2}


def test_summary_of_nothing():
    stats = summarize([])
    assert stats.total == 0
    assert all(v == 0 for v in stats.by_species.values())
