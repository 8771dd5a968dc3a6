"""Tests for volume and fill calculations."""

from types import SimpleNamespace

import pytest

from tote_inventory.utils.volume import (
    CapacityWarningLevel,
    calculate_container_capacity,
    calculate_fill_percentage,
    calculate_rectangular_volume,
    calculate_tapered_volume,
    derive_capacity,
    format_volume,
    get_capacity_warning,
    get_capacity_warning_level,
)


def _dimensions(**values):
    fields = ("length", "width", "height", "top_length", "top_width", "bottom_length", "bottom_width")
    return SimpleNamespace(**{field: values.get(field) for field in fields})


class TestVolumeFormulas:
    """Test cases for the basic volume formulas."""

    def test_rectangular_volume(self):
        assert calculate_rectangular_volume(10, 10, 10) == 1000

    def test_tapered_volume_uses_mean_area(self):
        assert calculate_tapered_volume(24, 16, 20, 13, 12) == 3864

    def test_fill_percentage(self):
        assert calculate_fill_percentage([100, 200], 1000) == 30

    def test_fill_percentage_without_capacity_is_zero(self):
        assert calculate_fill_percentage([], None) == 0
        assert calculate_fill_percentage([500], 0) == 0


class TestDeriveCapacity:
    """Test cases for picking the formula from a dimension set."""

    def test_tapered_set_wins(self):
        dims = _dimensions(
            length=1, width=1, height=12,
            top_length=24, top_width=16, bottom_length=20, bottom_width=13,
        )
        assert derive_capacity(dims) == 3864

    def test_rectangular_set(self):
        assert derive_capacity(_dimensions(length=18, width=12, height=10)) == 2160

    def test_incomplete_dimensions_give_none(self):
        assert derive_capacity(_dimensions(length=18, width=12)) is None
        assert derive_capacity(_dimensions(top_length=24, top_width=16, height=10)) is None


class TestContainerCapacity:
    """Test cases for the fill summary."""

    def test_items_without_volume_only_count_towards_total(self):
        capacity = calculate_container_capacity(1000, [100, None, 200])

        assert capacity.total_item_volume == 300
        assert capacity.items_with_volume == 2
        assert capacity.total_items == 3
        assert capacity.fill_percentage == 30
        assert capacity.has_capacity_data is True
        assert capacity.warning_level is None
        assert capacity.warning is None

    def test_no_capacity_data(self):
        capacity = calculate_container_capacity(None, [100])

        assert capacity.has_capacity_data is False
        assert capacity.fill_percentage == 0
        assert capacity.display_text == "Capacity tracking unavailable"

    def test_display_text_without_item_volumes(self):
        capacity = calculate_container_capacity(5400, [None])
        assert capacity.display_text == "0 / 3.12 cu ft (0%)"

    def test_display_text_with_volumes(self):
        capacity = calculate_container_capacity(5400, [1500])
        assert capacity.display_text == "0.87 cu ft / 3.12 cu ft (27.8%)"

    def test_over_capacity(self):
        capacity = calculate_container_capacity(100, [80, 40])

        assert capacity.warning_level is CapacityWarningLevel.OVER_CAPACITY
        assert capacity.warning.startswith("🚫")


class TestCapacityWarnings:
    """Test cases for warning thresholds."""

    @pytest.mark.parametrize(
        ("fill", "expected"),
        [
            (0, None),
            (74.9, None),
            (75, CapacityWarningLevel.FILLING_UP),
            (89.9, CapacityWarningLevel.FILLING_UP),
            (90, CapacityWarningLevel.NEARLY_FULL),
            (100, CapacityWarningLevel.OVER_CAPACITY),
            (140, CapacityWarningLevel.OVER_CAPACITY),
        ],
    )
    def test_warning_levels(self, fill, expected):
        assert get_capacity_warning_level(fill) is expected

    def test_warning_messages(self):
        assert "filling up (80.0%)" in get_capacity_warning(80)
        assert "nearly full (95.0%)" in get_capacity_warning(95)
        assert get_capacity_warning(10) is None

    def test_adding_to_overfull_container(self):
        message = get_capacity_warning(120, adding_volume=50)
        assert "already over capacity (120.0%)" in message


class TestFormatVolume:
    def test_small_volumes_in_cubic_inches(self):
        assert format_volume(999) == "999.0 cu in"

    def test_large_volumes_in_cubic_feet(self):
        assert format_volume(1728) == "1.00 cu ft"
