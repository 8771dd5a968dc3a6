"""Location service for the sites that hold racks."""

from sqlalchemy import func, select

from tote_inventory.exceptions import (
    DependencyException,
    RecordNotFoundException,
    ResourceConflictException,
)
from tote_inventory.models.location import Location
from tote_inventory.models.rack import Rack
from tote_inventory.services.base import BaseService


class LocationService(BaseService):
    """Service class for location management operations."""

    def create_location(self, name: str, notes: str | None = None) -> Location:
        name = name.strip()
        if self._find_by_name(name) is not None:
            raise ResourceConflictException("Location", f"name {name}")

        location = Location(name=name, notes=notes)
        self.db.add(location)
        self.db.flush()
        return location

    def get_location(self, location_id: int) -> Location:
        location = self.db.get(Location, location_id)
        if not location:
            raise RecordNotFoundException("Location", location_id)
        return location

    def get_all_locations_with_rack_counts(self) -> list[tuple[Location, int]]:
        """List locations alphabetically with the number of racks at each."""
        stmt = (
            select(Location, func.count(Rack.id).label("rack_count"))
            .outerjoin(Rack, Rack.location_id == Location.id)
            .group_by(Location.id)
            .order_by(Location.name)
        )
        return [(location, rack_count) for location, rack_count in self.db.execute(stmt).all()]

    def update_location(
        self, location_id: int, name: str | None = None, notes: str | None = None
    ) -> Location:
        location = self.get_location(location_id)

        if name is not None:
            name = name.strip()
            existing = self._find_by_name(name)
            if existing is not None and existing.id != location.id:
                raise ResourceConflictException("Location", f"name {name}")
            location.name = name
        if notes is not None:
            location.notes = notes

        self.db.flush()
        return location

    def delete_location(self, location_id: int) -> None:
        """Delete a location that has no racks left."""
        location = self.get_location(location_id)

        rack_count = self.db.execute(
            select(func.count(Rack.id)).where(Rack.location_id == location.id)
        ).scalar() or 0
        if rack_count:
            raise DependencyException(
                "location", location.name, f"it still has {rack_count} rack(s)"
            )

        self.db.delete(location)
        self.db.flush()

    def get_or_create_location(self, name: str) -> tuple[Location, bool]:
        """Find a location by exact name or create it; the flag is True when created."""
        location = self._find_by_name(name.strip())
        if location is not None:
            return location, False
        return self.create_location(name), True

    def _find_by_name(self, name: str) -> Location | None:
        stmt = select(Location).where(Location.name == name)
        return self.db.execute(stmt).scalar_one_or_none()
