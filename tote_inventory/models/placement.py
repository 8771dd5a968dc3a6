"""Placement variants for anything that can sit in a rack slot or another container."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Racked:
    """Occupies a rack slot."""

    slot_id: int


@dataclass(frozen=True)
class Nested:
    """Stored inside another container."""

    parent_container_id: int


@dataclass(frozen=True)
class Unplaced:
    """Neither racked nor nested."""


Placement = Racked | Nested | Unplaced


def placement_from_columns(
    current_slot_id: int | None, parent_container_id: int | None
) -> Placement:
    """Build the placement variant from the two persisted nullable columns."""
    if current_slot_id is not None and parent_container_id is not None:
        raise ValueError(
            f"slot {current_slot_id} and parent {parent_container_id} are both set"
        )
    if current_slot_id is not None:
        return Racked(current_slot_id)
    if parent_container_id is not None:
        return Nested(parent_container_id)
    return Unplaced()
