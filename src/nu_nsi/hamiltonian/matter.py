from nu_nsi.hamiltonian.base import HamiltonianBuilderBase
from nu_nsi.globals.backend import Backend
from nu_nsi.utils.flavors import electron


class Hamiltonian(HamiltonianBuilderBase):
    """
    Standard matter Hamiltonian: only electron neutrinos feel the
    charged-current potential.
    """

    def update_ham(self):
        xp = Backend.xp()

        flavor_projector = xp.zeros((self.n_neutrinos, self.n_neutrinos), dtype=Backend.complex_dtype())
        flavor_projector[electron, electron] = 1.0

        vacuum = self._vacuum_term()
        potential = self.matter_potential_eV()

        if not self._engine.is_antineutrino():
            H = vacuum + potential * flavor_projector
        else:
            H = xp.conjugate(vacuum - potential * flavor_projector)

        self._ham = xp.triu(H)
        return self._ham
