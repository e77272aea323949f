import pytest

from terrain_preview import config as DEFAULTS
from terrain_preview.sampler import resolve_settings


def test_empty_settings_resolve_to_defaults():
    settings = resolve_settings({})

    assert settings["size_horizontal"] == DEFAULTS.NOISE_SETTINGS["size_horizontal"]
    assert settings["height"] == DEFAULTS.NOISE_SETTINGS["height"]
    assert settings["sampling"]["y_factor"] == DEFAULTS.NOISE_SETTINGS["sampling"]["y_factor"]
    assert settings["random_density_offset"] is True


def test_partial_sections_keep_remaining_defaults():
    settings = resolve_settings({"top_slide": {"size": 0}, "sampling": {"xz_factor": 40}})

    assert settings["top_slide"]["size"] == 0.0
    assert settings["top_slide"]["target"] == DEFAULTS.NOISE_SETTINGS["top_slide"]["target"]
    assert settings["sampling"]["xz_factor"] == 40.0
    assert settings["sampling"]["y_factor"] == DEFAULTS.NOISE_SETTINGS["sampling"]["y_factor"]


def test_resolve_returns_a_copy():
    user = {"sampling": {"xz_scale": 2}}
    settings = resolve_settings(user)
    settings["sampling"]["xz_scale"] = 5.0

    assert user["sampling"]["xz_scale"] == 2
    assert DEFAULTS.NOISE_SETTINGS["sampling"]["xz_scale"] != 5.0


@pytest.mark.parametrize("bad", [
    {"size_horizontal": 0},
    {"size_vertical": -1},
    {"height": 4, "size_vertical": 2},
    {"sampling": {"y_factor": 0}},
    {"bottom_slide": {"size": -1}},
])
def test_invalid_settings_raise(bad):
    with pytest.raises(ValueError):
        resolve_settings(bad)


@pytest.mark.parametrize("bad", [
    {"random_density_offset": "false"},
    {"random_density_offset": 0},
    {"size_horizontal": 1.5},
    {"size_vertical": True},
    {"height": "128"},
])
def test_mistyped_settings_raise(bad):
    with pytest.raises(ValueError):
        resolve_settings(bad)


def test_integral_floats_are_accepted_as_sizes():
    settings = resolve_settings({"size_horizontal": 2.0, "height": 128.0})

    assert settings["size_horizontal"] == 2
    assert isinstance(settings["size_horizontal"], int)
    assert settings["height"] == 128
