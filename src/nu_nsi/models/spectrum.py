import numpy as np


class Spectrum:
    """
    Three-flavor neutrino mass spectrum.

    Initialize with two independent splittings, e.g.:
        Spectrum(dm2={(2, 1): 7.42e-5, (3, 1): 2.517e-3})

    Any two of (2,1), (3,1), (3,2) (or their reversed keys) fix the third.
    Values are Δm²_ij = m_i² − m_j² in eV².
    """
    n_neutrinos = 3

    def __init__(self, dm2: dict):
        self._dm2_dict = dict()
        self._m2 = np.zeros(self.n_neutrinos, dtype=float)
        self.set_dm2(dm2)

    def set_dm2(self, dm2: dict):
        """Override some splittings. The stored set must stay consistent."""
        merged = dict(self._dm2_dict)
        for (i, j), val in dm2.items():
            if not (1 <= i <= self.n_neutrinos and 1 <= j <= self.n_neutrinos):
                raise IndexError(f"indices ({i},{j}) out of range for n={self.n_neutrinos}")
            if i == j:
                raise ValueError(f"Invalid Δm²({i},{j}): i and j must differ.")
            # keep a single orientation per pair
            merged.pop((j, i), None)
            merged[(i, j)] = float(val)

        if len(merged) > self.n_neutrinos - 1:
            raise ValueError(
                f"Too many Δm² entries ({len(merged)}) for n={self.n_neutrinos}. "
                f"Maximum independent differences is {self.n_neutrinos - 1}."
            )

        self._m2 = self._solve_m2(merged)
        self._dm2_dict = merged

    def _solve_m2(self, dm2: dict):
        # m1² = 0 reference, then propagate through the given pairs
        m2 = [0.0, None, None]
        pending = dict(dm2)
        while pending:
            progressed = False
            for (i, j), val in list(pending.items()):
                a, b = i - 1, j - 1
                if m2[b] is not None and m2[a] is None:
                    m2[a] = m2[b] + val
                elif m2[a] is not None and m2[b] is None:
                    m2[b] = m2[a] - val
                elif m2[a] is None:
                    continue
                del pending[(i, j)]
                progressed = True
            if not progressed:
                break

        if any(v is None for v in m2):
            raise ValueError("Incomplete Δm² network: some states are disconnected.")
        return np.asarray(m2, dtype=float)

    def get_dm2(self, i: int, j: int) -> float:
        """Return Δm²_ij = m_i² − m_j² (1-based indices)."""
        return float(self._m2[i - 1] - self._m2[j - 1])

    def get_m2(self):
        """Mass-squared values relative to m1 [eV²]: (0, Δm²_21, Δm²_31)."""
        return np.copy(self._m2)

    @property
    def ordering(self):
        return "normal" if self._m2[2] > self._m2[0] else "inverted"

    def summary(self):
        print(f"Spectrum with {self.n_neutrinos} mass states ({self.ordering} ordering):")
        for (i, j) in [(2, 1), (3, 1), (3, 2)]:
            print(f"  Δm²_{i}{j} = {self.get_dm2(i, j):.4e} eV²")


if __name__ == "__main__":

    print("Providing 2,1 and 3,2:")
    spec = Spectrum(dm2={(2, 1): 7.42e-5, (3, 2): 0.0024428})
    spec.summary()

    print("Inverted ordering:")
    spec.set_dm2({(3, 2): -2.498e-3})
    spec.summary()
