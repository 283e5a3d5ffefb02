import numpy as np
import pytest

from air_shower.particle import ExpiryCause, Particle, brightness_factor, display_color
from air_shower.species import Species, color


def test_update_integrates_one_tick():
    p = Particle(Species.PROTON, (0.0, 10.0, 0.0), (1.0, -2.0, 0.0), energy=1.0)
    p.update(0.5)
    assert p.age == pytest.approx(0.5)
    assert np.allclose(p.position, [0.5, 9.0, 0.0])
    assert p.velocity[1] == pytest.approx(-2.0 - 0.5 * 3.8)
    assert p.energy == pytest.approx(0.96)


def test_gamma_is_damped():
    p = Particle(Species.GAMMA, (0.0, 10.0, 0.0), (2.0, -10.0, 0.0), energy=1.0)
    p.update(0.1)
    assert p.velocity[0] == pytest.approx(2.0 * 0.995)
    assert p.velocity[1] == pytest.approx((-10.0 - 0.38) * 0.995)


@pytest.mark.parametrize("dt", [0.0, 0.001, 0.045, 1.0, 50.0])
def test_energy_never_negative(dt):
    p = Particle(Species.MUON, (0.0, 10.0, 0.0), (0.0, 0.0, 0.0), energy=0.01)
    p.update(dt)
    assert p.energy >= 0.0


def test_age_strictly_increases():
    p = Particle(Species.MUON, (0.0, 10.0, 0.0), (0.0, 0.0, 0.0), energy=1.0)
    ages = []
    for _ in range(5):
        p.update(0.02)
        ages.append(p.age)
    assert all(b > a for a, b in zip(ages, ages[1:]))


def test_negative_dt_is_ignored():
    p = Particle(Species.MUON, (0.0, 10.0, 0.0), (0.0, -1.0, 0.0), energy=1.0)
    p.update(-1.0)
    assert p.age == 0.0
    assert np.allclose(p.position, [0.0, 10.0, 0.0])


def test_constructor_copies_vectors_and_clamps_energy():
    origin = np.array([1.0, 2.0, 3.0])
    p = Particle("pion", origin, (0.0, 0.0, 0.0), energy=-3.0)
    origin[0] = 99.0
    assert p.position[0] == 1.0
    assert p.energy == 0.0
    assert p.species is Species.PION


def test_expiry_causes():
    below = Particle(Species.PROTON, (0.0, -20.5, 0.0), (0.0, 0.0, 0.0), energy=1.0)
    old = Particle(Species.PROTON, (0.0, 5.0, 0.0), (0.0, 0.0, 0.0), energy=1.0, age=6.5)
    drained = Particle(Species.PROTON, (0.0, 5.0, 0.0), (0.0, 0.0, 0.0), energy=0.0001)
    fine = Particle(Species.PROTON, (0.0, 5.0, 0.0), (0.0, 0.0, 0.0), energy=1.0, age=1.0)
    assert below.expiry_cause() is ExpiryCause.FLOOR
    assert old.expiry_cause() is ExpiryCause.AGE
    assert drained.expiry_cause() is ExpiryCause.ENERGY
    assert fine.expiry_cause() is None


def test_floor_wins_over_age():
    p = Particle(Species.NEUTRINO, (0.0, -25.0, 0.0), (0.0, 0.0, 0.0), energy=1.0, age=10.0)
    assert p.expiry_cause() is ExpiryCause.FLOOR


def test_expiry_is_final():
    p = Particle(Species.PROTON, (0.0, -21.0, 0.0), (0.0, 0.0, 0.0), energy=1.0)
    assert p.check_expiry()
    p.position[1] = 50.0
    assert p.check_expiry()
    assert not p.alive
    assert p.expired_by is ExpiryCause.FLOOR


def test_brightness_range():
    assert brightness_factor(0.0, 5.0) == pytest.approx(0.35)
    assert brightness_factor(5.0, 5.0) == pytest.approx(1.0)
    assert brightness_factor(50.0, 5.0) == pytest.approx(1.0)
    assert brightness_factor(2.5, 5.0) == pytest.approx(0.675)
    # primary energy is never taken below 0.5
    assert brightness_factor(0.25, 0.1) == pytest.approx(0.675)


def test_display_color_scales_palette():
    rgb = display_color("muon", 0.0, 1.0)
    assert np.allclose(rgb, np.asarray(color("muon")) * 0.35)
