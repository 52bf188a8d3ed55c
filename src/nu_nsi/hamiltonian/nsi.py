import logging
import math

from nu_nsi.hamiltonian.base import HamiltonianBuilderBase
from nu_nsi.propagation.engine import PropagationEngine
from nu_nsi.globals.backend import Backend

logger = logging.getLogger(__name__)


class NSIHamiltonian(HamiltonianBuilderBase):
    """
    Matter Hamiltonian with Non-Standard Interactions.

    The matter potential sqrt(2) G_F N_e multiplies a Hermitian coupling
    matrix eps instead of diag(1, 0, 0). Couplings are stored in the upper
    triangle only, flavors being 0 = nue, 1 = numu, 2 = nutau. The stored
    ee entry is 1 + eps_ee, so eps = 0 gives back the standard potential.

    Invalid flavor pairs are reported through the module logger and ignored.
    """

    def __init__(self, engine: PropagationEngine):
        super().__init__(engine=engine)
        self._eps = Backend.xp().zeros((self.n_neutrinos, self.n_neutrinos), dtype=Backend.complex_dtype())
        self.set_nsi(0., 0., 0., 0., 0., 0., 0., 0., 0.)

    @property
    def eps_matrix(self):
        """Copy of the stored couplings (upper triangle, ee entry offset by 1)."""
        return Backend.xp().copy(self._store())

    def set_nsi(self, eps_ee, eps_emu, eps_etau,
                eps_mumu, eps_mutau, eps_tautau,
                delta_emu, delta_etau, delta_mutau):
        """
        Set all NSI parameters at once.

        Diagonal couplings are real. Off-diagonal couplings are given by
        their absolute value and their phase in radians.
        """
        self.set_eps(0, 0, eps_ee, 0)
        self.set_eps(1, 1, eps_mumu, 0)
        self.set_eps(2, 2, eps_tautau, 0)

        self.set_eps(0, 1, eps_emu, delta_emu)
        self.set_eps(0, 2, eps_etau, delta_etau)
        self.set_eps(1, 2, eps_mutau, delta_mutau)

    def set_eps(self, flvi: int, flvj: int, val: float, phase: float):
        """
        Set a single NSI coupling.

        A reversed pair (flvi > flvj) is swapped. A pair outside the three
        flavors leaves the couplings untouched. Both cases are logged.
        The engine eigensystem is invalidated only if the stored value changes.
        """
        pair = self._ordered_pair(flvi, flvj)
        if pair is None:
            logger.warning("Eps_%d%d not valid for %d neutrinos. Doing nothing.",
                           min(flvi, flvj), max(flvi, flvj), self.n_neutrinos)
            return
        flvi, flvj = pair

        h = complex(val)
        if flvi != flvj:
            h *= complex(math.cos(phase), math.sin(phase))
        elif flvi == 0:
            h += 1

        # rounded to the store precision, so rewriting a value compares equal
        h = Backend.xp().asarray(h, dtype=Backend.complex_dtype()).item()

        eps = self._store()
        if eps[flvi, flvj].item() != h:
            self._engine.invalidate_eigensystem()

        eps[flvi, flvj] = h

    def get_eps(self, flvi: int, flvj: int) -> complex:
        """Stored coupling for a flavor pair, 0j if the pair is invalid."""
        pair = self._ordered_pair(flvi, flvj)
        if pair is None:
            logger.warning("Eps_%d%d not valid for %d neutrinos. Returning 0.",
                           min(flvi, flvj), max(flvi, flvj), self.n_neutrinos)
            return 0j
        flvi, flvj = pair
        return complex(self._store()[flvi, flvj].item())

    def set_eps_ee(self, a: float):
        self.set_eps(0, 0, a, 0)

    def set_eps_mumu(self, a: float):
        self.set_eps(1, 1, a, 0)

    def set_eps_tautau(self, a: float):
        self.set_eps(2, 2, a, 0)

    def set_eps_emu(self, a: float, phi: float):
        """Set |eps_emu| = a with phase phi [rad]."""
        self.set_eps(0, 1, a, phi)

    def set_eps_etau(self, a: float, phi: float):
        """Set |eps_etau| = a with phase phi [rad]."""
        self.set_eps(0, 2, a, phi)

    def set_eps_mutau(self, a: float, phi: float):
        """Set |eps_mutau| = a with phase phi [rad]."""
        self.set_eps(1, 2, a, phi)

    def update_ham(self):
        """
        Build the full Hamiltonian in matter [eV].

        Hms / 2E gives the vacuum part, then the matter potential weighted
        by eps is added to each flavor pair. Antineutrinos flip the sign of
        the potential and take the complex conjugate of the sum.
        """
        xp = Backend.xp()

        vacuum = self._vacuum_term()
        kr2GNe = self.matter_potential_eV()
        eps = self._store()

        if not self._engine.is_antineutrino():
            H = vacuum + kr2GNe * eps
        else:
            H = xp.conjugate(vacuum - kr2GNe * eps)

        self._ham = xp.triu(H)
        return self._ham

    def _store(self):
        self._eps = self._on_backend(self._eps)
        return self._eps

    def _ordered_pair(self, flvi, flvj):
        if flvi > flvj:
            logger.warning("First argument should be smaller or equal to second argument. "
                           "Setting reverse order (Eps_%d%d).", flvj, flvi)
            flvi, flvj = flvj, flvi
        if flvi < 0 or flvi > 2 or flvj < flvi or flvj > 2:
            return None
        return flvi, flvj


# inline example
if __name__ == "__main__":
    import numpy as np
    from nu_nsi.models.mixing import Mixing
    from nu_nsi.models.spectrum import Spectrum
    from nu_nsi.propagation.engine import PropagationState

    logging.basicConfig(level=logging.INFO)

    angles = {(1, 2): np.deg2rad(33.4), (1, 3): np.deg2rad(8.6), (2, 3): np.deg2rad(49)}
    phases = {(1, 3): np.deg2rad(195)}
    state = PropagationState(
        mixing=Mixing(mixing_angles=angles, dirac_phases=phases),
        spectrum=Spectrum(dm2={(2, 1): 7.42e-5, (3, 2): 0.0024428}),
        energy_GeV=2.5,
    )

    h = NSIHamiltonian(engine=state)
    h.set_eps_etau(0.3, np.deg2rad(-90))
    print(np.round(h.update_ham() * 1e13, 4), "x 1e-13 eV")
