# terrain_preview/region.py

"""
================================================================================
PREVIEW REGION HELPERS
================================================================================
Drives a DensityColumnSampler across a horizontal span of world x and stacks
the dense columns into a 2D density slice.

Data Contract:
---------------
- Inputs:
    - A sampler, noise settings and the span [x_start, x_start + width).
- Outputs:
    - density (np.ndarray): float64 array of shape (width, column_height),
      x-major, height index 0 at the bottom.
- Side Effects: Resets the sampler (its cache is replaced).
================================================================================
"""

from tqdm import tqdm
import numpy as np

from . import config as DEFAULTS
from .sampler import DensityColumnSampler, resolve_settings


def window_for_span(x_start: int, width: int, cell_width: int) -> tuple[int, int]:
    """
    Returns the (window_offset, window_width) of the smallest coarse window
    covering every column iterate_noise_column touches for the span. Each
    world x needs its own coarse cell and the next one.
    """
    if width < 1:
        raise ValueError(f"Span width must be at least 1, got {width}")
    first_cx = x_start // cell_width
    last_cx = (x_start + width - 1) // cell_width
    return first_cx, last_cx - first_cx + 2


def sample_density_slice(sampler: DensityColumnSampler, settings: dict, x_start: int, width: int,
                         biome_depth: float = DEFAULTS.DEFAULT_BIOME_DEPTH,
                         biome_scale: float = DEFAULTS.DEFAULT_BIOME_SCALE,
                         progress: bool = False) -> np.ndarray:
    """Samples every dense column in the span after resetting the sampler."""
    resolved = resolve_settings(settings)
    cell_width = resolved['size_horizontal'] * DEFAULTS.CELL_UNITS_PER_SIZE
    window_offset, window_width = window_for_span(x_start, width, cell_width)
    sampler.reset(resolved, biome_depth, biome_scale, window_offset, window_width)

    density = np.empty((width, sampler.column_height), dtype=np.float64)
    columns = range(width)
    if progress:
        columns = tqdm(columns, desc="Sampling Columns")
    for i in columns:
        density[i] = sampler.iterate_noise_column(x_start + i)

    sampler.logger.info(
        f"Sampled density slice x=[{x_start}, {x_start + width}) "
        f"({width}x{sampler.column_height})"
    )
    return density
