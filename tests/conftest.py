import logging

import pytest

from terrain_preview.sampler import DensityColumnSampler


@pytest.fixture
def logger():
    return logging.getLogger("terrain_preview.tests")


@pytest.fixture
def reference_settings():
    """Settings of the cross-implementation regression scenario."""
    return {
        "size_horizontal": 1,
        "size_vertical": 1,
        "height": 128,
        "sampling": {"xz_scale": 1, "y_scale": 1, "xz_factor": 80, "y_factor": 160},
        "random_density_offset": False,
        "density_factor": 4,
        "density_offset": 20,
        "top_slide": {"size": 0},
        "bottom_slide": {"size": 0},
    }


@pytest.fixture
def small_settings():
    """A short world (8 coarse rows) to keep multi-column tests fast."""
    return {
        "size_horizontal": 1,
        "size_vertical": 1,
        "height": 32,
        "random_density_offset": False,
        "top_slide": {"size": 0},
        "bottom_slide": {"size": 0},
    }


@pytest.fixture
def sampler(logger):
    return DensityColumnSampler(logger=logger)
