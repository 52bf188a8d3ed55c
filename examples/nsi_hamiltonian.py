import logging
import numpy as np
import matplotlib.pyplot as plt
from nu_nsi.models.mixing import Mixing
from nu_nsi.models.spectrum import Spectrum
from nu_nsi.matter.path import MatterPath
from nu_nsi.propagation.engine import PropagationState
from nu_nsi.hamiltonian import matter
from nu_nsi.hamiltonian.nsi import NSIHamiltonian
import nu_nsi.utils.flavors as flavors

logging.basicConfig(level=logging.INFO)

# 3 flavors PMNS, PDG values (2025)
angles = {(1, 2): np.deg2rad(33.4), (1, 3): np.deg2rad(8.6), (2, 3): np.deg2rad(49)}
phases = {(1, 3): np.deg2rad(195)}
# Masses, normal ordering
dm2 = {(2, 1): 7.42e-5, (3, 2): 0.0024428}

# --- DUNE-like configuration ---
state = PropagationState(
    mixing=Mixing(mixing_angles=angles, dirac_phases=phases),
    spectrum=Spectrum(dm2=dm2),
    path=MatterPath(length_km=1300.0, density=2.8, zoa=0.5),
)

h_std = matter.Hamiltonian(engine=state)
h_nsi = NSIHamiltonian(engine=state)

# with zero NSI both builders agree
np.testing.assert_allclose(h_nsi.update_ham(), h_std.update_ham(), rtol=1e-14)

h_nsi.set_nsi(eps_ee=0.5, eps_emu=0.05, eps_etau=0.3,
              eps_mumu=0.0, eps_mutau=0.02, eps_tautau=0.1,
              delta_emu=0.0, delta_etau=np.deg2rad(-90), delta_mutau=0.0)

# a typo in the flavor pair only warns
h_nsi.set_eps(0, 3, 0.1, 0.0)

print("eps (upper triangle, ee offset by 1):")
print(np.round(h_nsi.eps_matrix, 3))
print("H [1e-13 eV]:")
print(np.round(h_nsi.update_ham() * 1e13, 4))

E = np.linspace(0.5, 8.0, 200)  # GeV
pairs = [(i, j) for i in range(3) for j in range(i, 3)]

fig, axes = plt.subplots(1, 2, figsize=(11, 4.5), sharey=True)
for ax, antineutrino in zip(axes, [False, True]):
    state.set_antineutrino(antineutrino)
    H_E = np.empty((E.size, 3, 3), dtype=complex)
    for k, energy in enumerate(E):
        state.set_energy(energy)
        H_E[k] = h_nsi.update_ham()

    for (i, j) in pairs:
        label = f"|H_{flavors.names[i]}{flavors.names[j]}|"
        ax.plot(E, np.abs(H_E[:, i, j]), label=label)

    ax.set_yscale("log")
    ax.set_xlabel(r"$E_\nu$ [GeV]")
    ax.set_title(r"$\bar\nu$" if antineutrino else r"$\nu$")
    ax.grid(alpha=0.3)

axes[0].set_ylabel("[eV]")
axes[1].legend(fontsize=8)
fig.suptitle(r"NSI Hamiltonian in matter, $\rho$ = 2.8 g/cm$^3$")
fig.tight_layout()
plt.show()
