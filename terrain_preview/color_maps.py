# terrain_preview/color_maps.py

"""
================================================================================
SHARED COLOR MAPPING UTILITIES
================================================================================
This module contains the color constants and functions for converting a raw
density slice into an RGB color array.

It is designed to be a pure, stateless utility with no dependencies on an
image library, so the array can be saved or displayed by any caller.
================================================================================
"""
import numpy as np
from . import config as DEFAULTS

# --- Default Color Mappings ---
COLOR_MAP_DENSITY = {
    "stone_dark": (70, 70, 78),
    "stone_light": (150, 150, 160),
    "water": (26, 102, 255),
    "air": (200, 225, 250),
}

# Densities at or above this many units over the threshold render as the
# darkest stone.
STONE_SHADING_RANGE = 1.0


def get_density_color_array(density: np.ndarray, threshold: float = DEFAULTS.DENSITY_THRESHOLD,
                            sea_level: int = None) -> np.ndarray:
    """
    Converts a (width, height) density slice to a (width, height, 3) uint8
    color array. The height axis is flipped so that row 0 is the top of the
    world, ready for image output.

    Solid cells (density > threshold) are shaded from light to dark stone by
    how far they exceed the threshold. Non-solid cells below sea_level are
    water, everything else is air.
    """
    width, height = density.shape
    solid = density > threshold

    shade = np.clip((density - threshold) / STONE_SHADING_RANGE, 0.0, 1.0)[..., np.newaxis]
    light = np.array(COLOR_MAP_DENSITY["stone_light"], dtype=np.float64)
    dark = np.array(COLOR_MAP_DENSITY["stone_dark"], dtype=np.float64)
    stone = light + shade * (dark - light)

    colors = np.empty((width, height, 3), dtype=np.float64)
    colors[...] = COLOR_MAP_DENSITY["air"]
    if sea_level is not None:
        below_sea = np.arange(height)[np.newaxis, :] < sea_level
        colors[np.broadcast_to(below_sea, solid.shape) & ~solid] = COLOR_MAP_DENSITY["water"]
    colors[solid] = stone[solid]

    return colors[:, ::-1, :].round().astype(np.uint8)
