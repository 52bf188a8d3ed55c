from dataclasses import dataclass


@dataclass(frozen=True)
class MatterPath:
    length_km: float            # path length
    density: float              # matter density [g/cm^3]
    zoa: float = 0.5            # effective Z/A, electrons per nucleon

    def __post_init__(self):
        if self.length_km < 0:
            raise ValueError(f"Path length must be >= 0, got {self.length_km} km")
        if self.density < 0:
            raise ValueError(f"Matter density must be >= 0, got {self.density} g/cm^3")
        if not (0 <= self.zoa <= 1):
            raise ValueError(f"Z/A must lie in [0, 1], got {self.zoa}")

    @staticmethod
    def standard() -> "MatterPath":
        """Default path: 1000 km of crust-like matter."""
        return MatterPath(length_km=1000.0, density=2.8, zoa=0.5)

    @property
    def electron_density(self):
        """Density times Z/A [mol/cm^3], what the matter potential scales with."""
        return self.density * self.zoa
