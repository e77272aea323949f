# render_preview.py

"""
================================================================================
TERRAIN DENSITY PREVIEW SCRIPT
================================================================================
This script is a command-line tool for rendering a vertical slice of the
terrain density field to a PNG image. It samples one dense column per world x
in the requested span and colors each voxel as stone, water or air.

Usage:
    python render_preview.py --config path/to/your/config.json [--output out.png]

Config keys (all optional): seed, noise_settings, biome_depth, biome_scale,
x_start, width, threshold, sea_level.
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import time
import numpy as np
from PIL import Image

from terrain_preview import config as DEFAULTS
from terrain_preview import color_maps
from terrain_preview.region import sample_density_slice
from terrain_preview.sampler import DensityColumnSampler


def save_preview_image(color_array: np.ndarray, file_path: str):
    """Saves a (width, height, 3) color array as an RGB PNG."""
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    # Pillow works with (height, width, channels) arrays.
    img_data = np.ascontiguousarray(np.transpose(color_array, (1, 0, 2)))
    Image.fromarray(img_data, 'RGB').save(file_path, 'PNG')


def render_preview(config_path: str, output_path: str = None) -> int:
    """
    Loads a preview configuration, samples the density slice and writes the
    image. Returns a process exit status.
    """
    # 1. --- Setup Logging ---
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    logger = logging.getLogger("Preview")

    # 2. --- Load Configuration ---
    logger.info(f"Loading configuration from: {config_path}")
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return 1

    seed = config.get('seed', DEFAULTS.DEFAULT_SEED)
    noise_settings = config.get('noise_settings', {})
    biome_depth = config.get('biome_depth', DEFAULTS.DEFAULT_BIOME_DEPTH)
    biome_scale = config.get('biome_scale', DEFAULTS.DEFAULT_BIOME_SCALE)
    x_start = config.get('x_start', 0)
    width = config.get('width', DEFAULTS.DEFAULT_PREVIEW_WIDTH)
    threshold = config.get('threshold', DEFAULTS.DENSITY_THRESHOLD)
    sea_level = config.get('sea_level', DEFAULTS.SEA_LEVEL)

    if output_path is None:
        output_path = os.path.join("previews", f"seed_{seed}_x{x_start}.png")

    # 3. --- Sample the Density Slice ---
    start_time = time.perf_counter()
    sampler = DensityColumnSampler(logger=logger, seed=seed)
    try:
        density = sample_density_slice(
            sampler, noise_settings, x_start, width,
            biome_depth=biome_depth, biome_scale=biome_scale, progress=True
        )
    except ValueError as e:
        logger.critical(f"Invalid preview configuration: {e}")
        return 1

    # 4. --- Color and Save ---
    color_array = color_maps.get_density_color_array(density, threshold=threshold, sea_level=sea_level)
    save_preview_image(color_array, output_path)

    solid_fraction = float(np.count_nonzero(density > threshold)) / density.size
    end_time = time.perf_counter()
    logger.info(f"Preview complete! Total time: {end_time - start_time:.2f} seconds.")
    logger.info(f"  - {width}x{sampler.column_height} voxels, {solid_fraction:.1%} solid")
    logger.info(f"Preview saved to: {output_path}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Render a terrain density slice to a PNG preview.")
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to the JSON configuration file for the preview."
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Path of the PNG to write. Defaults to previews/seed_<seed>_x<x_start>.png."
    )
    args = parser.parse_args(argv)
    return render_preview(args.config, args.output)


# --- Command-Line Interface ---
if __name__ == "__main__":
    sys.exit(main())
