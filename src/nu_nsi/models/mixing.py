from nu_nsi.globals.backend import Backend


class Mixing:
    """
    Three-flavor PMNS mixing matrix definition.

    Angles are keyed by 1-based mass-state pairs (i, j) with i < j, in radians.
    Only the (1, 3) Dirac phase is physical for three flavors; any other
    phase entry is accepted and applied to its rotation.
    """
    n_neutrinos = 3
    _pdg_order = [(2, 3), (1, 3), (1, 2)]

    def __init__(self, mixing_angles: dict = None, dirac_phases: dict = None):
        self.mixing_angles = dict(mixing_angles) if mixing_angles is not None else dict()
        self.dirac_phases = dict(dirac_phases) if dirac_phases is not None else dict()
        self._check_pairs(self.mixing_angles)
        self._check_pairs(self.dirac_phases)

    def _check_pairs(self, entries: dict):
        for (i, j) in entries:
            if not (1 <= i < j <= self.n_neutrinos):
                raise IndexError(f"mixing index pair ({i},{j}) invalid for n={self.n_neutrinos}")

    def set_angle(self, i: int, j: int, theta: float):
        self._check_pairs({(i, j): theta})
        self.mixing_angles[(i, j)] = theta

    def set_phase(self, i: int, j: int, delta: float):
        self._check_pairs({(i, j): delta})
        self.dirac_phases[(i, j)] = delta

    def build_mixing_matrix(self):
        """
        Return the complex mixing matrix U (3 x 3), PDG convention:
            U = R23 * U13(delta) * R12
        Missing angles are treated as zero.
        """
        xp = Backend.xp()
        U = xp.eye(self.n_neutrinos, dtype=Backend.complex_dtype())

        # right-multiply: rotations act on mass columns
        for (i, j) in self._pdg_order:
            if (i, j) not in self.mixing_angles:
                continue
            theta = xp.asarray(self.mixing_angles[(i, j)], dtype=Backend.real_dtype())
            delta = xp.asarray(self.dirac_phases.get((i, j), 0.0), dtype=Backend.real_dtype())
            s, c = xp.sin(theta), xp.cos(theta)

            R = xp.eye(self.n_neutrinos, dtype=Backend.complex_dtype())
            ii, jj = i - 1, j - 1
            R[ii, ii] = c
            R[jj, jj] = c
            R[ii, jj] = s * xp.exp(-1j * delta)
            R[jj, ii] = -s * xp.exp(+1j * delta)

            U = U @ R

        return U


# inline example
if __name__ == "__main__":
    import numpy as np

    angles = {(1, 2): np.deg2rad(33.4), (1, 3): np.deg2rad(8.6), (2, 3): np.deg2rad(49.0)}
    phases = {(1, 3): np.deg2rad(195)}

    pmns = Mixing(mixing_angles=angles, dirac_phases=phases)
    print(np.round(pmns.build_mixing_matrix(), 3))
