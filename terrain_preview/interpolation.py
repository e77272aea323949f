# terrain_preview/interpolation.py

"""
================================================================================
INTERPOLATION HELPERS
================================================================================
Scalar linear, bilinear and trilinear interpolation used both by the noise
kernel and by the density column sampler. Pure, stateless and JIT-compiled so
they can be called from other Numba functions.

Data Contract:
---------------
- Inputs: Python floats (fractions and corner values).
- Outputs: A single float.
- Side Effects: None.
================================================================================
"""

from numba import njit


@njit
def lerp(t, a, b):
    "Linear interpolation from a to b by t."
    return a + t * (b - a)


@njit
def lerp2(tx, ty, a00, a10, a01, a11):
    """
    Bilinear interpolation. Interpolates along the first axis on both edges
    of the second axis, then blends the two results along the second axis.
    """
    return lerp(ty, lerp(tx, a00, a10), lerp(tx, a01, a11))


@njit
def lerp3(tx, ty, tz, a000, a100, a010, a110, a001, a101, a011, a111):
    "Trilinear interpolation of the eight corners of a unit cube."
    return lerp(
        tz,
        lerp2(tx, ty, a000, a100, a010, a110),
        lerp2(tx, ty, a001, a101, a011, a111),
    )


@njit
def clamped_lerp(a, b, t):
    """
    Linear interpolation from a to b with t clamped to [0, 1], so values
    outside the span return an endpoint exactly instead of extrapolating.
    """
    if t < 0.0:
        return a
    if t > 1.0:
        return b
    return lerp(t, a, b)
