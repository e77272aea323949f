# terrain_preview/noise.py

"""
================================================================================
NOISE FIELD
================================================================================
This module provides seeded 3D gradient noise and the octave stacks built from
it. A single ImprovedNoise is one lattice octave; a PerlinNoise owns a
fixed-size list of optional octaves and can either be summed as a whole
(get_value) or have its octaves sampled one by one (get_octave_noise).

Data Contract:
---------------
- Inputs:
    - seed: An integer. All randomness comes from numpy.random.default_rng(seed).
    - x, y, z: Python floats. Callers wrap large coordinates with wrap().
- Outputs:
    - Scalar noise values (a single octave lies roughly in [-1, 1]).
- Side Effects: None. Instances are immutable after construction.
- Invariants: Given the same seed and octave layout, every sample is
  deterministic.
================================================================================
"""

import math

import numpy as np
from numba import njit

from . import config as DEFAULTS
from .interpolation import lerp3

# Gradient directions for the improved noise lattice (12 cube edges padded
# to 16 so a 4-bit hash selects one).
_GRADIENTS = np.array([
    [1, 1, 0], [-1, 1, 0], [1, -1, 0], [-1, -1, 0],
    [1, 0, 1], [-1, 0, 1], [1, 0, -1], [-1, 0, -1],
    [0, 1, 1], [0, -1, 1], [0, 1, -1], [0, -1, -1],
    [1, 1, 0], [0, -1, 1], [-1, 1, 0], [0, -1, -1],
], dtype=np.float64)

# Tolerance added before flooring the quantized y fraction.
_Y_QUANTIZE_EPSILON = 1.0e-7


def wrap(value: float) -> float:
    """Folds a coordinate into [-WRAP_PERIOD / 2, WRAP_PERIOD / 2)."""
    period = DEFAULTS.WRAP_PERIOD
    return value - math.floor(value / period + 0.5) * period


@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


@njit
def _perm(p, i):
    return p[i & 255]


@njit
def _grad_dot(h, x, y, z):
    """Calculates the dot product between a hashed gradient and an offset."""
    g = _GRADIENTS[h & 15]
    return g[0] * x + g[1] * y + g[2] * z


@njit
def _improved_noise(p, xo, yo, zo, x, y, z, y_scale, y_max):
    """
    Samples one octave of gradient noise. When y_scale is non-zero the
    vertical fraction used for the gradients is quantized to multiples of
    y_scale (capped by y_max), while the fade still uses the raw fraction.
    """
    sx = x + xo
    sy = y + yo
    sz = z + zo
    xi = int(np.floor(sx))
    yi = int(np.floor(sy))
    zi = int(np.floor(sz))
    fx = sx - xi
    fy = sy - yi
    fz = sz - zi

    y_shift = 0.0
    if y_scale != 0.0:
        capped = y_max if (y_max >= 0.0 and y_max < fy) else fy
        y_shift = np.floor(capped / y_scale + _Y_QUANTIZE_EPSILON) * y_scale
    gy = fy - y_shift

    i = _perm(p, xi) + yi
    j = _perm(p, i) + zi
    k = _perm(p, i + 1) + zi
    h = _perm(p, xi + 1) + yi
    m = _perm(p, h) + zi
    n = _perm(p, h + 1) + zi

    d000 = _grad_dot(_perm(p, j), fx, gy, fz)
    d100 = _grad_dot(_perm(p, m), fx - 1.0, gy, fz)
    d010 = _grad_dot(_perm(p, k), fx, gy - 1.0, fz)
    d110 = _grad_dot(_perm(p, n), fx - 1.0, gy - 1.0, fz)
    d001 = _grad_dot(_perm(p, j + 1), fx, gy, fz - 1.0)
    d101 = _grad_dot(_perm(p, m + 1), fx - 1.0, gy, fz - 1.0)
    d011 = _grad_dot(_perm(p, k + 1), fx, gy - 1.0, fz - 1.0)
    d111 = _grad_dot(_perm(p, n + 1), fx - 1.0, gy - 1.0, fz - 1.0)

    return lerp3(_fade(fx), _fade(fy), _fade(fz),
                 d000, d100, d010, d110, d001, d101, d011, d111)


class ImprovedNoise:
    """
    A single octave of seeded gradient noise: a random origin in [0, 256)^3
    and a shuffled 256-entry permutation table.
    """
    def __init__(self, rng: np.random.Generator):
        origin = rng.random(3) * 256.0
        self.xo = float(origin[0])
        self.yo = float(origin[1])
        self.zo = float(origin[2])
        p = np.arange(256, dtype=np.int64)
        rng.shuffle(p)
        self._p = p

    def noise(self, x: float, y: float, z: float, y_scale: float = 0.0, y_max: float = 0.0) -> float:
        return _improved_noise(
            self._p, self.xo, self.yo, self.zo,
            float(x), float(y), float(z), float(y_scale), float(y_max)
        )


class PerlinNoise:
    """
    A stack of ImprovedNoise octaves sharing one seed.

    Levels are stored from the lowest frequency (first_octave) to the highest.
    An amplitude of zero leaves that level empty; its random draws are still
    consumed so the remaining levels do not depend on which ones are active.
    """
    def __init__(self, seed: int, first_octave: int, amplitudes):
        """
        Args:
            seed (int): Seed for numpy.random.default_rng.
            first_octave (int): Octave of the first (lowest frequency) level.
            amplitudes (list[float]): One amplitude per level.
        """
        if len(amplitudes) == 0:
            raise ValueError("PerlinNoise needs at least one octave amplitude.")

        self.seed = seed
        self.first_octave = first_octave
        self.amplitudes = tuple(float(a) for a in amplitudes)

        rng = np.random.default_rng(seed)
        levels = []
        for amplitude in self.amplitudes:
            level = ImprovedNoise(rng)
            levels.append(level if amplitude != 0.0 else None)
        self.noise_levels = tuple(levels)

        count = len(self.noise_levels)
        self.lowest_freq_input_factor = 2.0 ** first_octave
        self.lowest_freq_value_factor = 2.0 ** (count - 1) / (2.0 ** count - 1.0)

        # Octave 0's origin doubles as a decorrelation input for callers.
        octave_zero = self.get_octave_noise(0)
        self.zero_octave_offset = octave_zero.zo if octave_zero is not None else 0.0

    @classmethod
    def from_range(cls, seed: int, first_octave: int, last_octave: int) -> "PerlinNoise":
        """Creates a stack with amplitude 1 on every octave in [first, last]."""
        if last_octave < first_octave:
            raise ValueError(
                f"Empty octave range: first_octave={first_octave}, last_octave={last_octave}"
            )
        return cls(seed, first_octave, [1.0] * (last_octave - first_octave + 1))

    @property
    def octave_count(self) -> int:
        return len(self.noise_levels)

    def get_octave_noise(self, i: int):
        """
        Returns the level i steps below the finest one (i = 0 is the highest
        frequency), or None if i is out of range or that level is inactive.
        """
        if i < 0 or i >= len(self.noise_levels):
            return None
        return self.noise_levels[len(self.noise_levels) - 1 - i]

    def get_value(self, x: float, y: float, z: float, y_scale: float = 0.0,
                  y_max: float = 0.0, fix_y: bool = False) -> float:
        """
        Sums every active level. With fix_y the vertical input is pinned to
        each level's own origin so that the result only varies in x and z.
        """
        value = 0.0
        input_factor = self.lowest_freq_input_factor
        value_factor = self.lowest_freq_value_factor

        for amplitude, level in zip(self.amplitudes, self.noise_levels):
            if level is not None:
                sample_y = -level.yo if fix_y else wrap(y * input_factor)
                value += amplitude * level.noise(
                    wrap(x * input_factor),
                    sample_y,
                    wrap(z * input_factor),
                    y_scale * input_factor,
                    y_max * input_factor,
                ) * value_factor
            input_factor *= 2.0
            value_factor /= 2.0

        return value
