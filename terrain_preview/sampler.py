# terrain_preview/sampler.py

"""
================================================================================
DENSITY COLUMN SAMPLER
================================================================================
This module contains the DensityColumnSampler class, responsible for turning
four layered noise fields into vertical columns of terrain density for a
preview region.

Density is first evaluated on a coarse grid (one value per coarse cell corner)
and cached per coarse x inside a sliding window. Dense per-voxel columns are
then reconstructed by bilinear interpolation between two adjacent coarse
columns.

Data Contract:
---------------
- Inputs (on reset):
    - settings (dict): Noise settings which can override the internal
      defaults. Expected keys include 'size_horizontal', 'sampling', etc.
    - biome_depth, biome_scale (float): Per-region density bias.
    - window_offset, window_width (int): The coarse x range the caller will
      query until the next reset.
- Outputs (from methods):
    - NumPy float64 arrays of density. Values above the caller's threshold
      are solid.
- Side Effects: Mutates the per-region column cache. Logs via the provided
  logger.
- Invariants: Given the same seed, settings and region, the output is
  deterministic. A coarse column is computed at most once per reset.
================================================================================
"""

import logging
import math

import numpy as np

from . import config as DEFAULTS
from .interpolation import clamped_lerp, lerp2
from .noise import PerlinNoise, wrap


def _integral(name, value) -> int:
    """Returns value as an int, rejecting booleans and fractional numbers."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, float, np.integer, np.floating)):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if not float(value).is_integer():
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(value)


def resolve_settings(user_settings: dict) -> dict:
    """
    Merges user noise settings over the internal defaults and validates the
    result. Nested sections ('sampling', 'top_slide', 'bottom_slide') are
    merged key by key, so a partial section keeps the remaining defaults.

    Raises:
        ValueError: If a value has the wrong type or would make the coarse
            grid degenerate.
    """
    defaults = DEFAULTS.NOISE_SETTINGS
    user_settings = user_settings or {}

    settings = {
        'size_horizontal': _integral('size_horizontal', user_settings.get('size_horizontal', defaults['size_horizontal'])),
        'size_vertical': _integral('size_vertical', user_settings.get('size_vertical', defaults['size_vertical'])),
        'height': _integral('height', user_settings.get('height', defaults['height'])),
        'density_factor': float(user_settings.get('density_factor', defaults['density_factor'])),
        'density_offset': float(user_settings.get('density_offset', defaults['density_offset'])),
        'random_density_offset': user_settings.get('random_density_offset', defaults['random_density_offset']),
    }
    if not isinstance(settings['random_density_offset'], (bool, np.bool_)):
        raise ValueError(
            f"random_density_offset must be a boolean, got {settings['random_density_offset']!r}"
        )
    settings['random_density_offset'] = bool(settings['random_density_offset'])
    for section in ('sampling', 'top_slide', 'bottom_slide'):
        user_section = user_settings.get(section) or {}
        settings[section] = {
            key: float(user_section.get(key, default))
            for key, default in defaults[section].items()
        }

    if settings['size_horizontal'] <= 0 or settings['size_vertical'] <= 0:
        raise ValueError(
            f"Cell sizes must be positive, got size_horizontal={settings['size_horizontal']}, "
            f"size_vertical={settings['size_vertical']}"
        )
    cell_height = settings['size_vertical'] * DEFAULTS.CELL_UNITS_PER_SIZE
    if settings['height'] < cell_height:
        raise ValueError(
            f"World height {settings['height']} is smaller than one cell ({cell_height})"
        )
    if settings['sampling']['xz_factor'] == 0 or settings['sampling']['y_factor'] == 0:
        raise ValueError("Sampling xz_factor and y_factor must be non-zero")
    for section in ('top_slide', 'bottom_slide'):
        if settings[section]['size'] < 0:
            raise ValueError(f"{section} size must not be negative, got {settings[section]['size']}")

    return settings


class DensityColumnSampler:
    """
    Samples terrain density columns from four independently seeded noise
    fields. One instance owns one column cache and must not be shared between
    concurrent callers.
    """
    def __init__(self, logger: logging.Logger = None, seed: int = DEFAULTS.DEFAULT_SEED):
        """
        Initializes the sampler and seeds its noise fields.

        Args:
            logger (logging.Logger): The logger instance for all output.
            seed (int): Master seed. Each field adds its own layer offset.
        """
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.seed = seed

        # --- Initialize Noise ---
        self.min_limit_noise = PerlinNoise.from_range(
            seed + DEFAULTS.MIN_LIMIT_SEED_OFFSET, *DEFAULTS.LIMIT_NOISE_OCTAVES
        )
        self.max_limit_noise = PerlinNoise.from_range(
            seed + DEFAULTS.MAX_LIMIT_SEED_OFFSET, *DEFAULTS.LIMIT_NOISE_OCTAVES
        )
        self.main_noise = PerlinNoise.from_range(
            seed + DEFAULTS.MAIN_SEED_OFFSET, *DEFAULTS.MAIN_NOISE_OCTAVES
        )
        self.depth_noise = PerlinNoise.from_range(
            seed + DEFAULTS.DEPTH_SEED_OFFSET, *DEFAULTS.DEPTH_NOISE_OCTAVES
        )

        # --- Region State (replaced on every reset) ---
        self.settings = None
        self.cell_width = DEFAULTS.CELL_UNITS_PER_SIZE
        self.cell_height = DEFAULTS.CELL_UNITS_PER_SIZE
        self.coarse_count_y = 0
        self.biome_depth = DEFAULTS.DEFAULT_BIOME_DEPTH
        self.biome_scale = DEFAULTS.DEFAULT_BIOME_SCALE
        self._column_cache = []
        self._window_offset = 0

        self.logger.info(f"DensityColumnSampler initialized with seed: {self.seed}")

    @property
    def column_height(self) -> int:
        """Number of fine height levels in a dense column."""
        return self.coarse_count_y * self.cell_height

    def reset(self, settings: dict, biome_depth: float, biome_scale: float,
              window_offset: int, window_width: int):
        """
        Establishes the grid geometry for a new region and clears the cache.

        Args:
            settings (dict): Noise settings, merged over the defaults.
            biome_depth (float): Density bias for the region.
            biome_scale (float): Density falloff scale for the region.
            window_offset (int): First coarse x that may be queried.
            window_width (int): Number of coarse columns in the window.
        """
        if window_width < 1:
            raise ValueError(f"window_width must be at least 1, got {window_width}")
        if biome_scale == 0:
            raise ValueError("biome_scale must be non-zero")

        self.settings = resolve_settings(settings)
        self.cell_width = self.settings['size_horizontal'] * DEFAULTS.CELL_UNITS_PER_SIZE
        self.cell_height = self.settings['size_vertical'] * DEFAULTS.CELL_UNITS_PER_SIZE
        self.coarse_count_y = self.settings['height'] // self.cell_height
        self.biome_depth = biome_depth
        self.biome_scale = biome_scale

        self._column_cache = [None] * window_width
        self._window_offset = window_offset

        self.logger.debug(
            f"Sampler reset: cells {self.cell_width}x{self.cell_height}, "
            f"{self.coarse_count_y} coarse rows, window [{window_offset}, {window_offset + window_width})"
        )

    def _cache_index(self, cx: int) -> int:
        if self.settings is None:
            raise RuntimeError("DensityColumnSampler.reset() must be called before sampling")
        index = cx - self._window_offset
        if index < 0 or index >= len(self._column_cache):
            raise IndexError(
                f"Coarse x {cx} is outside the window "
                f"[{self._window_offset}, {self._window_offset + len(self._column_cache)})"
            )
        return index

    def iterate_noise_column(self, x: int) -> np.ndarray:
        """
        Reconstructs the dense density column at world x by bilinear
        interpolation between the two coarse columns enclosing it.

        Returns:
            np.ndarray: column_height densities, index 0 at the bottom.
        """
        x = math.floor(x)
        size = self.coarse_count_y * self.cell_height
        data = np.empty(size, dtype=np.float64)

        cx = x // self.cell_width
        ox = (x % self.cell_width) / self.cell_width
        noise1 = self.fill_noise_column(cx)
        noise2 = self.fill_noise_column(cx + 1)

        # Rows on a coarse boundary are written by both neighbouring cells;
        # the lower cell's write comes last.
        for y in range(self.coarse_count_y - 1, -1, -1):
            for yy in range(self.cell_height, -1, -1):
                i = y * self.cell_height + yy
                if i >= size:
                    continue
                oy = yy / self.cell_height
                data[i] = lerp2(oy, ox, noise1[y], noise1[y + 1], noise2[y], noise2[y + 1])

        return data

    def fill_noise_column(self, cx: int) -> np.ndarray:
        """
        Returns the coarse density column at coarse x, computing and caching
        it on first use.
        """
        index = self._cache_index(cx)
        cached_column = self._column_cache[index]
        if cached_column is not None:
            return cached_column

        settings = self.settings
        sampling = settings['sampling']
        top_slide = settings['top_slide']
        bottom_slide = settings['bottom_slide']
        count_y = self.coarse_count_y

        scaled_depth = DEFAULTS.DEPTH_SCALE * self.biome_depth
        scaled_scale = DEFAULTS.SCALE_NUMERATOR / self.biome_scale
        xz_scale = DEFAULTS.SAMPLING_BASE_SCALE * sampling['xz_scale']
        y_scale = DEFAULTS.SAMPLING_BASE_SCALE * sampling['y_scale']
        xz_factor = xz_scale / sampling['xz_factor']
        y_factor = y_scale / sampling['y_factor']
        random_density = self.get_random_density(cx) if settings['random_density_offset'] else 0.0
        z = self.main_noise.zero_octave_offset

        data = np.empty(count_y + 1, dtype=np.float64)
        for y in range(count_y + 1):
            noise = self.sample_and_clamp_noise(cx, y, z, xz_scale, y_scale, xz_factor, y_factor)

            # --- Vertical falloff ---
            y_offset = 1 - y * 2 / count_y + random_density
            density = y_offset * settings['density_factor'] + settings['density_offset']
            falloff = (density + scaled_depth) * scaled_scale
            noise += falloff * (DEFAULTS.POSITIVE_FALLOFF_MULTIPLIER if falloff > 0 else 1.0)

            # --- Edge slides ---
            if top_slide['size'] > 0:
                noise = clamped_lerp(
                    top_slide['target'],
                    noise,
                    (count_y - y - top_slide['offset']) / top_slide['size']
                )
            if bottom_slide['size'] > 0:
                noise = clamped_lerp(
                    bottom_slide['target'],
                    noise,
                    (y - bottom_slide['offset']) / bottom_slide['size']
                )
            data[y] = noise

        self._column_cache[index] = data
        self.logger.debug(f"Filled coarse column {cx} ({count_y + 1} samples)")
        return data

    def get_random_density(self, cx: int) -> float:
        """Small signed density bias for a whole coarse column."""
        noise = self.depth_noise.get_value(
            cx * DEFAULTS.RANDOM_DENSITY_X_SCALE,
            DEFAULTS.RANDOM_DENSITY_Y,
            self.depth_noise.zero_octave_offset,
            1.0,
            0.0,
            fix_y=True,
        )
        a = -noise * DEFAULTS.RANDOM_DENSITY_NEGATIVE_FACTOR if noise < 0 else noise
        b = a * DEFAULTS.RANDOM_DENSITY_GAIN - DEFAULTS.RANDOM_DENSITY_SHIFT
        if b < 0:
            return b * DEFAULTS.RANDOM_DENSITY_NEGATIVE_SCALE
        return min(b, 1.0) * DEFAULTS.RANDOM_DENSITY_POSITIVE_SCALE

    def sample_and_clamp_noise(self, x: int, y: int, z: float, xz_scale: float, y_scale: float,
                               xz_factor: float, y_factor: float) -> float:
        """
        Blends the two limit fields using the main field as the weight.

        The limit fields define a density range at (x, y) and the main field,
        sampled at a coarser frequency, picks where in that range the result
        falls.
        """
        a = 0.0
        b = 0.0
        c = 0.0
        d = 1.0

        for i in range(DEFAULTS.BLEND_OCTAVES):
            x2 = wrap(x * xz_scale * d)
            y2 = wrap(y * y_scale * d)
            z2 = wrap(z * xz_scale * d)
            e = y_scale * d

            min_limit = self.min_limit_noise.get_octave_noise(i)
            if min_limit is not None:
                a += min_limit.noise(x2, y2, z2, e, y * e) / d

            max_limit = self.max_limit_noise.get_octave_noise(i)
            if max_limit is not None:
                b += max_limit.noise(x2, y2, z2, e, y * e) / d

            if i < DEFAULTS.MAIN_BLEND_OCTAVES:
                main = self.main_noise.get_octave_noise(i)
                if main is not None:
                    c += main.noise(
                        wrap(x * xz_factor * d),
                        wrap(y * y_factor * d),
                        wrap(z * xz_factor * d),
                        y_factor * d,
                        y * y_factor * d,
                    ) / d

            d /= 2.0

        return clamped_lerp(
            a / DEFAULTS.LIMIT_NOISE_DIVISOR,
            b / DEFAULTS.LIMIT_NOISE_DIVISOR,
            (c / DEFAULTS.MAIN_NOISE_DIVISOR + 1) / 2,
        )
