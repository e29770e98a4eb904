"""Tests for derived gearbox parameters and configuration validation."""

import math
from dataclasses import replace

import pytest

from cyclogear.core.types import GearboxConfig, InvalidConfiguration
from cyclogear.gear.parameters import derive, validate_config


def test_default_scenario_values(derived):
    assert derived.sun_reduction_ratio == 9
    assert derived.frame_reduction_ratio == 11
    assert derived.default_eccentricity == pytest.approx(0.19)
    assert derived.sun_root_radius == pytest.approx(1.71)
    assert derived.frame_root_radius == pytest.approx(2.09)
    assert derived.true_eccentricity == pytest.approx(0.14)


def test_base_radii(derived):
    """Sun and frame base circles coincide with the planet orbit."""
    assert derived.sun_base_radius == pytest.approx(1.9)
    assert derived.frame_base_radius == pytest.approx(1.9)


def test_ratios_are_integers(derived):
    assert isinstance(derived.sun_reduction_ratio, int)
    assert isinstance(derived.frame_reduction_ratio, int)


def test_determinism_same_inputs(default_config):
    """Repeated derivation yields identical results."""
    first = derive(default_config)
    second = derive(default_config)
    assert first == second


def test_two_planets_is_minimum_valid():
    derived = derive(GearboxConfig(number_of_planets=2))
    assert derived.sun_reduction_ratio == 1
    assert derived.frame_reduction_ratio == 3
    assert derived.true_eccentricity > 0


@pytest.mark.parametrize("n", [1, 0, -3])
def test_too_few_planets_rejected(n):
    with pytest.raises(InvalidConfiguration, match="number_of_planets"):
        derive(GearboxConfig(number_of_planets=n))


def test_contraction_equal_to_default_eccentricity_rejected(default_config):
    cfg = replace(default_config, contraction=0.19)
    with pytest.raises(InvalidConfiguration, match="contraction"):
        derive(cfg)


def test_contraction_above_default_eccentricity_rejected(default_config):
    with pytest.raises(InvalidConfiguration):
        derive(replace(default_config, contraction=0.5))


def test_negative_contraction_rejected(default_config):
    with pytest.raises(InvalidConfiguration, match="contraction"):
        derive(replace(default_config, contraction=-0.01))


def test_zero_contraction_accepted(default_config):
    derived = derive(replace(default_config, contraction=0.0))
    assert derived.true_eccentricity == pytest.approx(derived.default_eccentricity)


@pytest.mark.parametrize("field", ["planet_orbit_radius", "planet_radius", "planet_shaft_radius"])
@pytest.mark.parametrize("value", [0.0, -1.0, math.nan, math.inf])
def test_non_positive_or_non_finite_radii_rejected(default_config, field, value):
    with pytest.raises(InvalidConfiguration, match=field):
        validate_config(replace(default_config, **{field: value}))


@pytest.mark.parametrize("step", [0.0, -1.0, 360.5, math.nan, math.inf])
def test_bad_step_size_rejected(default_config, step):
    with pytest.raises(InvalidConfiguration, match="step_size_deg"):
        derive(replace(default_config, step_size_deg=step))


def test_full_turn_step_accepted(default_config):
    validate_config(replace(default_config, step_size_deg=360.0))


@pytest.mark.parametrize("n", [10.0, True, "10"])
def test_non_integer_planet_count_rejected(default_config, n):
    with pytest.raises(InvalidConfiguration, match="integer"):
        derive(replace(default_config, number_of_planets=n))


@pytest.mark.parametrize(
    "field",
    ["planet_orbit_radius", "planet_radius", "planet_shaft_radius", "contraction", "step_size_deg"],
)
@pytest.mark.parametrize("value", ["1.9", True, None])
def test_non_real_lengths_rejected(default_config, field, value):
    with pytest.raises(InvalidConfiguration, match=f"{field} must be a real number"):
        derive(replace(default_config, **{field: value}))


def test_integer_lengths_accepted(default_config):
    derived = derive(replace(default_config, planet_orbit_radius=2, contraction=0))
    assert derived.default_eccentricity == pytest.approx(0.2)
    assert derived.true_eccentricity == pytest.approx(0.2)


def test_invalid_configuration_is_value_error(default_config):
    with pytest.raises(ValueError):
        derive(replace(default_config, number_of_planets=1))
