# terrain_preview/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the terrain
density sampler. These values are used if they are not explicitly provided by
the user's noise settings.

DO NOT MODIFY THIS FILE FOR A SPECIFIC PREVIEW.
Instead, pass a settings dictionary to DensityColumnSampler.reset().
================================================================================
"""

# --- Noise Seeding ---
DEFAULT_SEED = 1337
# Large prime numbers used to offset seeds for the four noise fields, ensuring
# they are unique but deterministic from the master seed.
MIN_LIMIT_SEED_OFFSET = 12347
MAX_LIMIT_SEED_OFFSET = 98761
MAIN_SEED_OFFSET = 54321
DEPTH_SEED_OFFSET = 25391

# --- Octave Layout ---
# Inclusive (first, last) octave ranges. Octave 0 is the finest level; each
# step below it halves the frequency and doubles the amplitude.
LIMIT_NOISE_OCTAVES = (-15, 0)
MAIN_NOISE_OCTAVES = (-7, 0)
DEPTH_NOISE_OCTAVES = (-15, 0)

# Number of octaves visited by the density blend. The main field only ever
# contributes to the first MAIN_BLEND_OCTAVES of them.
BLEND_OCTAVES = 16
MAIN_BLEND_OCTAVES = 8

# --- Sampling Geometry ---
# Fixed geometric constant combined with the configured xz/y scales.
SAMPLING_BASE_SCALE = 684.412
# Fine (voxel) units spanned by one unit of size_horizontal / size_vertical.
CELL_UNITS_PER_SIZE = 4
# Coordinates are folded into this period before sampling so that large
# world coordinates do not lose floating-point precision.
WRAP_PERIOD = 33554432.0

# --- Density Shaping ---
DEPTH_SCALE = 0.265625
SCALE_NUMERATOR = 96.0
LIMIT_NOISE_DIVISOR = 512.0
MAIN_NOISE_DIVISOR = 10.0
# Positive falloff pulls towards solid this many times faster than a
# negative falloff pulls towards air.
POSITIVE_FALLOFF_MULTIPLIER = 4.0

# --- Random Density Offset ---
RANDOM_DENSITY_X_SCALE = 200
RANDOM_DENSITY_Y = 10
RANDOM_DENSITY_NEGATIVE_FACTOR = 0.3
RANDOM_DENSITY_GAIN = 24.575625
RANDOM_DENSITY_SHIFT = 2.0
RANDOM_DENSITY_NEGATIVE_SCALE = 0.009486607142857142
RANDOM_DENSITY_POSITIVE_SCALE = 0.006640625

# --- Default Noise Settings ---
# Overworld-like defaults. A dictionary is used so it can be deep-merged with
# a user-supplied settings dictionary.
NOISE_SETTINGS = {
    "size_horizontal": 1,
    "size_vertical": 2,
    "height": 256,
    "sampling": {
        "xz_scale": 0.9999999814507745,
        "y_scale": 0.9999999814507745,
        "xz_factor": 80.0,
        "y_factor": 160.0,
    },
    "top_slide": {
        "target": -10.0,
        "size": 3,
        "offset": 0,
    },
    "bottom_slide": {
        "target": 15.0,
        "size": 3,
        "offset": 0,
    },
    "density_factor": 1.0,
    "density_offset": -0.46875,
    "random_density_offset": True,
}

# --- Region Defaults ---
DEFAULT_BIOME_DEPTH = 0.1
DEFAULT_BIOME_SCALE = 0.2

# --- Preview Rendering ---
# Densities above this value are solid. The sampler itself never applies it.
DENSITY_THRESHOLD = 0.0
SEA_LEVEL = 63
DEFAULT_PREVIEW_WIDTH = 256
