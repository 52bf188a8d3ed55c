import logging

import numpy as np

logger = logging.getLogger(__name__)


# static class
class Backend:
    _current_api = np  # default
    _api_name = np.__name__
    _real_dtype = "float64"
    _complex_dtype = "complex128"
    _device = None  # e.g. "cuda", "cpu", "mps"

    @classmethod
    def set_api(cls, module, device=None):
        """Set xp backend: numpy or torch."""
        name = module.__name__
        if name not in ("numpy", "torch"):
            raise ValueError(f"Unsupported array backend: {name}")

        cls._api_name = name
        cls._real_dtype = "float64"
        cls._complex_dtype = "complex128"
        if name == "torch":
            from nu_nsi.backends.torch_backend import TorchBackend
            cls._current_api = TorchBackend(device=device)
            cls._device = cls._current_api.device

            if device == "mps":
                # Apple MPS backend currently limited to 32-bit
                cls._real_dtype = "float32"
                cls._complex_dtype = "complex64"
        else:
            cls._current_api = module
            cls._device = None
        logger.info("Array backend set to %s", cls._api_name)

    @classmethod
    def xp(cls):
        """Return the current array API namespace."""
        return cls._current_api

    @classmethod
    def real_dtype(cls):
        xp = cls._current_api
        return getattr(xp, cls._real_dtype, cls._real_dtype)

    @classmethod
    def complex_dtype(cls):
        xp = cls._current_api
        return getattr(xp, cls._complex_dtype, cls._complex_dtype)

    @classmethod
    def from_device(cls, arr):
        """Pull array back to CPU (NumPy)."""
        if cls._api_name == "torch":
            return arr.detach().cpu().numpy()
        return arr


# default is Numpy
Backend.set_api(np)
