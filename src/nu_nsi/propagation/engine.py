import logging
from abc import ABC, abstractmethod

from nu_nsi.globals.backend import Backend
from nu_nsi.matter.path import MatterPath
from nu_nsi.models.mixing import Mixing
from nu_nsi.models.spectrum import Spectrum

logger = logging.getLogger(__name__)


class PropagationEngine(ABC):
    """
    What a Hamiltonian builder needs from the propagation engine.

    The engine owns the vacuum mass term, the path, the energy and the
    antineutrino flag, plus the flag telling whether its last
    diagonalization still applies.
    """

    @abstractmethod
    def get_mass_matrix(self):
        """Return Hms = U diag(m²) U† in the flavor basis [eV²], (3, 3) complex."""
        ...

    @abstractmethod
    def get_path(self) -> MatterPath:
        ...

    @abstractmethod
    def get_energy(self) -> float:
        """Neutrino energy [GeV]."""
        ...

    @abstractmethod
    def is_antineutrino(self) -> bool:
        ...

    @abstractmethod
    def invalidate_eigensystem(self):
        ...


class PropagationState(PropagationEngine):
    """
    Mutable physical state of a propagation: mixing, masses, path, energy.

    Every setter compares against the current value and only marks the
    eigensystem invalid on a real change. Nothing here sets it back to
    valid except `mark_eigensystem_valid`, called by whoever diagonalizes.
    """

    def __init__(self, mixing: Mixing, spectrum: Spectrum, antineutrino: bool = False,
                 energy_GeV: float = 1.0, path: MatterPath = None):
        if spectrum.n_neutrinos != mixing.n_neutrinos:
            raise ValueError("Spectrum and mixing disagree on the number of neutrinos.")
        self._mixing = mixing
        self._spectrum = spectrum
        self._antineutrino = bool(antineutrino)
        self._energy = self._check_energy(energy_GeV)
        self._path = path if path is not None else MatterPath.standard()

        self._hms = None
        self._built_hms = False
        self._got_es = False

    @property
    def n_neutrinos(self):
        return self._mixing.n_neutrinos

    @property
    def mixing(self):
        return self._mixing

    @property
    def spectrum(self):
        return self._spectrum

    @property
    def eigensystem_valid(self) -> bool:
        return self._got_es

    # ---------- collaborator interface ----------
    def get_mass_matrix(self):
        if not self._built_hms:
            self._build_hms()
        return self._hms

    def get_path(self) -> MatterPath:
        return self._path

    def get_energy(self) -> float:
        return self._energy

    def is_antineutrino(self) -> bool:
        return self._antineutrino

    def invalidate_eigensystem(self):
        self._got_es = False

    def mark_eigensystem_valid(self):
        self._got_es = True

    # ---------- setters ----------
    def set_energy(self, energy_GeV: float):
        energy_GeV = self._check_energy(energy_GeV)
        self._got_es &= (self._energy == energy_GeV)
        self._energy = energy_GeV

    def set_antineutrino(self, antineutrino: bool):
        antineutrino = bool(antineutrino)
        self._got_es &= (self._antineutrino == antineutrino)
        self._antineutrino = antineutrino

    def set_path(self, path: MatterPath):
        self._got_es &= (self._path == path)
        self._path = path

    def set_density(self, density: float):
        self.set_path(MatterPath(self._path.length_km, density, self._path.zoa))

    def set_zoa(self, zoa: float):
        self.set_path(MatterPath(self._path.length_km, self._path.density, zoa))

    def set_mixing(self, mixing: Mixing):
        self._mixing = mixing
        self._built_hms = False
        self._got_es = False

    def set_spectrum(self, spectrum: Spectrum):
        if spectrum.n_neutrinos != self.n_neutrinos:
            raise ValueError("Spectrum and mixing disagree on the number of neutrinos.")
        self._spectrum = spectrum
        self._built_hms = False
        self._got_es = False

    # ---------- internals ----------
    @staticmethod
    def _check_energy(energy_GeV):
        energy_GeV = float(energy_GeV)
        if not energy_GeV > 0:
            raise ValueError(f"Neutrino energy must be positive, got {energy_GeV} GeV")
        return energy_GeV

    def _build_hms(self):
        xp = Backend.xp()
        U = self._mixing.build_mixing_matrix()
        Ud = xp.conjugate(U.T)
        m2 = xp.asarray(self._spectrum.get_m2(), dtype=U.dtype)
        self._hms = U @ xp.diag(m2) @ Ud
        self._built_hms = True
        logger.debug("Rebuilt vacuum mass matrix")
