import numpy as np

from terrain_preview.color_maps import COLOR_MAP_DENSITY, get_density_color_array


def test_solid_water_and_air_classification():
    # One column, four levels from the bottom: solid, open, open, solid.
    density = np.array([[5.0, -1.0, -1.0, 0.5]])
    colors = get_density_color_array(density, threshold=0.0, sea_level=2)

    assert colors.shape == (1, 4, 3)
    assert colors.dtype == np.uint8
    # Row 0 of the output is the top of the world.
    bottom_up = colors[0, ::-1]
    assert tuple(bottom_up[1]) == COLOR_MAP_DENSITY["water"]
    assert tuple(bottom_up[2]) == COLOR_MAP_DENSITY["air"]
    assert tuple(bottom_up[0]) == COLOR_MAP_DENSITY["stone_dark"]
    assert tuple(bottom_up[3]) not in (COLOR_MAP_DENSITY["air"], COLOR_MAP_DENSITY["water"])


def test_threshold_is_exclusive():
    density = np.array([[0.0, 0.25]])
    colors = get_density_color_array(density, threshold=0.25)
    assert np.all(colors == np.array(COLOR_MAP_DENSITY["air"], dtype=np.uint8))


def test_no_sea_level_means_no_water():
    density = np.full((3, 5), -1.0)
    colors = get_density_color_array(density)
    assert np.all(colors == np.array(COLOR_MAP_DENSITY["air"], dtype=np.uint8))
