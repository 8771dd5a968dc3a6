"""Volume and fill calculations for container capacity tracking.

All measurements are in inches and all volumes in cubic inches.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

CUBIC_INCHES_PER_CUBIC_FOOT = 1728


class CapacityWarningLevel(str, Enum):
    """Fill thresholds that produce a user-facing warning."""

    OVER_CAPACITY = "OVER_CAPACITY"
    NEARLY_FULL = "NEARLY_FULL"
    FILLING_UP = "FILLING_UP"


class SupportsDimensions(Protocol):
    length: float | None
    width: float | None
    height: float | None
    top_length: float | None
    top_width: float | None
    bottom_length: float | None
    bottom_width: float | None


@dataclass(frozen=True)
class ContainerCapacity:
    """Fill summary for one container."""

    total_item_volume: float
    container_capacity: float
    fill_percentage: float
    has_capacity_data: bool
    items_with_volume: int
    total_items: int

    @property
    def warning_level(self) -> CapacityWarningLevel | None:
        return get_capacity_warning_level(self.fill_percentage)

    @property
    def warning(self) -> str | None:
        return get_capacity_warning(self.fill_percentage)

    @property
    def display_text(self) -> str:
        if not self.has_capacity_data:
            return "Capacity tracking unavailable"
        if self.items_with_volume == 0:
            return f"0 / {format_volume(self.container_capacity)} (0%)"
        return (
            f"{format_volume(self.total_item_volume)} / "
            f"{format_volume(self.container_capacity)} "
            f"({self.fill_percentage:.1f}%)"
        )


def calculate_rectangular_volume(length: float, width: float, height: float) -> float:
    return length * width * height


def calculate_tapered_volume(
    top_length: float,
    top_width: float,
    bottom_length: float,
    bottom_width: float,
    height: float,
) -> float:
    """Volume of a tote that narrows towards the bottom.

    Uses the mean of the top and bottom areas times the height. This slightly
    overestimates a true frustum, which is acceptable for fill warnings.
    """
    top_area = top_length * top_width
    bottom_area = bottom_length * bottom_width
    return (top_area + bottom_area) / 2 * height


def calculate_fill_percentage(
    item_volumes: Iterable[float], container_capacity: float | None
) -> float:
    """Percentage of capacity used; 0 when the capacity is unknown or zero."""
    if not container_capacity:
        return 0
    return sum(item_volumes) / container_capacity * 100


def calculate_container_capacity(
    container_capacity: float | None, item_volumes: Iterable[float | None]
) -> ContainerCapacity:
    """Summarize fill for a container given the volumes of its items.

    Items without a volume count towards ``total_items`` only.
    """
    all_volumes = list(item_volumes)
    known = [volume for volume in all_volumes if volume is not None]
    return ContainerCapacity(
        total_item_volume=sum(known),
        container_capacity=container_capacity or 0,
        fill_percentage=calculate_fill_percentage(known, container_capacity),
        has_capacity_data=container_capacity is not None and container_capacity > 0,
        items_with_volume=len(known),
        total_items=len(all_volumes),
    )


def get_capacity_warning_level(fill_percentage: float) -> CapacityWarningLevel | None:
    if fill_percentage >= 100:
        return CapacityWarningLevel.OVER_CAPACITY
    if fill_percentage >= 90:
        return CapacityWarningLevel.NEARLY_FULL
    if fill_percentage >= 75:
        return CapacityWarningLevel.FILLING_UP
    return None


def get_capacity_warning(
    fill_percentage: float, adding_volume: float | None = None
) -> str | None:
    """User-facing warning for a fill level, or None below 75%."""
    if adding_volume and fill_percentage > 100:
        return (
            f"⚠️ This container is already over capacity ({fill_percentage:.1f}%). "
            "Adding this item will exceed safe limits."
        )

    level = get_capacity_warning_level(fill_percentage)
    if level is CapacityWarningLevel.OVER_CAPACITY:
        return (
            f"🚫 This container is at or over capacity ({fill_percentage:.1f}%). "
            "Consider moving some items."
        )
    if level is CapacityWarningLevel.NEARLY_FULL:
        return (
            f"⚠️ This container is nearly full ({fill_percentage:.1f}%). "
            "Limited space remaining."
        )
    if level is CapacityWarningLevel.FILLING_UP:
        return (
            f"📦 This container is filling up ({fill_percentage:.1f}%). "
            "Consider organizing soon."
        )
    return None


def format_volume(cubic_inches: float) -> str:
    """Format a volume as cubic inches below 1000, otherwise as cubic feet."""
    if cubic_inches < 1000:
        return f"{cubic_inches:.1f} cu in"
    return f"{cubic_inches / CUBIC_INCHES_PER_CUBIC_FOOT:.2f} cu ft"


def derive_capacity(dimensions: SupportsDimensions) -> float | None:
    """Capacity from a full tapered or rectangular dimension set, else None."""
    tapered = (
        dimensions.top_length,
        dimensions.top_width,
        dimensions.bottom_length,
        dimensions.bottom_width,
        dimensions.height,
    )
    if all(value is not None for value in tapered):
        return calculate_tapered_volume(*tapered)  # type: ignore[arg-type]

    rectangular = (dimensions.length, dimensions.width, dimensions.height)
    if all(value is not None for value in rectangular):
        return calculate_rectangular_volume(*rectangular)  # type: ignore[arg-type]

    return None
