import numpy as np
import pytest

from nu_nsi.globals.backend import Backend
from nu_nsi.matter.path import MatterPath
from nu_nsi.propagation.engine import PropagationEngine


class FixedEngine(PropagationEngine):
    """Engine with hand-made state, no mixing or spectrum involved."""

    def __init__(self, hms=None, density=0.0, zoa=0.5, energy_GeV=1.0, antineutrino=False):
        self.hms = np.zeros((3, 3), dtype=complex) if hms is None else np.asarray(hms, dtype=complex)
        self.path = MatterPath(length_km=1000.0, density=density, zoa=zoa)
        self.energy = energy_GeV
        self.antineutrino = antineutrino
        self.got_es = True
        self.n_invalidations = 0

    def get_mass_matrix(self):
        return self.hms

    def get_path(self):
        return self.path

    def get_energy(self):
        return self.energy

    def is_antineutrino(self):
        return self.antineutrino

    def invalidate_eigensystem(self):
        self.got_es = False
        self.n_invalidations += 1


@pytest.fixture
def hms():
    # Hermitian, with complex off-diagonal entries [eV²]
    return np.array([
        [1.0e-4, 2.0e-4 + 1.0e-4j, -3.0e-4j],
        [2.0e-4 - 1.0e-4j, 1.2e-3, 4.0e-4 + 2.0e-4j],
        [3.0e-4j, 4.0e-4 - 2.0e-4j, 2.4e-3],
    ], dtype=complex)


@pytest.fixture
def make_engine():
    return FixedEngine


@pytest.fixture(autouse=True)
def numpy_backend():
    Backend.set_api(np)
    yield
    Backend.set_api(np)
