from nu_nsi.propagation.engine import PropagationEngine
from nu_nsi.globals.backend import Backend
from nu_nsi.utils.units import GEV_TO_EV, VCOEFF_EV

from abc import ABC, abstractmethod


class HamiltonianBuilderBase(ABC):
    """
    Builds the effective Hamiltonian in matter [eV] from the state of a
    propagation engine.

    Only the upper triangle (i <= j) of `ham` is meaningful, the matrix
    being Hermitian. Use `get_full_hamiltonian` for the mirrored matrix.
    """
    n_neutrinos = 3

    def __init__(self, engine: PropagationEngine):
        if not isinstance(engine, PropagationEngine):
            raise TypeError(f"engine must be a PropagationEngine, got {type(engine).__name__}")
        self._engine = engine
        self._ham = Backend.xp().zeros((self.n_neutrinos, self.n_neutrinos), dtype=Backend.complex_dtype())

    @property
    def engine(self):
        return self._engine

    @property
    def ham(self):
        return self._ham

    def two_energy_eV(self):
        """2E in eV, the divisor turning Hms [eV²] into a Hamiltonian [eV]."""
        return 2 * GEV_TO_EV * self._engine.get_energy()

    def matter_potential_eV(self):
        """sqrt(2) G_F N_e [eV] along the current path."""
        return VCOEFF_EV * self._engine.get_path().electron_density

    @staticmethod
    def _on_backend(arr):
        # arrays follow Backend.set_api calls made after construction
        return Backend.xp().asarray(arr, dtype=Backend.complex_dtype())

    def _vacuum_term(self):
        hms = self._on_backend(self._engine.get_mass_matrix())
        return hms / self.two_energy_eV()

    @abstractmethod
    def update_ham(self):
        """Rebuild `ham` from the current engine state and return it."""
        ...

    def get_full_hamiltonian(self):
        """Hermitian (3, 3) matrix rebuilt from the stored upper triangle."""
        xp = Backend.xp()
        self._ham = self._on_backend(self._ham)
        upper = xp.triu(self._ham)
        strict = xp.triu(self._ham, 1)
        return upper + xp.conjugate(strict.T)
