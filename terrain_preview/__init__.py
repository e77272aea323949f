# terrain_preview/__init__.py

# This file makes the 'terrain_preview' directory a Python package.
# We can also use it to define the public API of the package.

from .noise import ImprovedNoise, PerlinNoise, wrap
from .sampler import DensityColumnSampler, resolve_settings
from .region import sample_density_slice, window_for_span

__all__ = [
    "DensityColumnSampler",
    "ImprovedNoise",
    "PerlinNoise",
    "resolve_settings",
    "sample_density_slice",
    "window_for_span",
    "wrap",
]
