import logging

logger = logging.getLogger(__name__)


class TorchBackend:

    def __init__(self, device=None):
        import torch
        self.xp = torch
        self._device = device or self.xp.device("cpu")

        logger.info("[Torch] Using device: %s", self._device)

    @property
    def device(self):
        return self._device

    """Subset of the numpy interface mapped to torch."""
    def __getattr__(self, name):
        # delegate to torch if it exists
        if hasattr(self.xp, name):
            return getattr(self.xp, name)
        raise AttributeError(f"TorchCompat: torch has no attribute '{name}'")

    # explicit overrides for calls whose torch signature differs from numpy
    def asarray(self, x, dtype=None):
        return self.xp.as_tensor(x, device=self.device, dtype=dtype)

    def zeros(self, shape, dtype=None, device=None):
        if device is None:
            device = self.device
        return self.xp.zeros(shape, device=device, dtype=dtype)

    def eye(self, n, m=None, dtype=None):
        return self.xp.eye(n, m or n, device=self._device, dtype=dtype)

    def conjugate(self, x):
        # materialized, so that the result can be pulled back to numpy
        return self.xp.conj_physical(x)

    def copy(self, x):
        return x.clone()

    def diag(self, v):
        return self.xp.diag(self.xp.as_tensor(v, device=self.device))
