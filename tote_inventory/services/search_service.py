"""Global search across containers, items and locations."""

from dataclasses import dataclass, field

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session, selectinload

from tote_inventory.config import Settings
from tote_inventory.models.container import Container
from tote_inventory.models.item import Item, ItemStatus
from tote_inventory.models.location import Location
from tote_inventory.models.rack import Rack
from tote_inventory.models.slot import Slot
from tote_inventory.services.base import BaseService

UNASSIGNED_LOCATION = "Unassigned"


@dataclass
class ContainerHit:
    id: int
    label: str
    code: str
    type_name: str | None
    location_name: str
    rack_name: str | None


@dataclass
class ItemHit:
    id: int
    name: str
    description: str | None
    status: ItemStatus
    container_id: int | None
    container_label: str | None


@dataclass
class LocationHit:
    id: int
    name: str
    rack_count: int


@dataclass
class SearchResults:
    containers: list[ContainerHit] = field(default_factory=list)
    items: list[ItemHit] = field(default_factory=list)
    locations: list[LocationHit] = field(default_factory=list)


class SearchService(BaseService):
    """Case-insensitive substring search with a fixed cap per result kind."""

    def __init__(self, db: Session, config: Settings):
        super().__init__(db)
        self.config = config

    def search(self, query: str | None) -> SearchResults:
        term = (query or "").strip()
        if len(term) < self.config.SEARCH_MIN_QUERY_LENGTH:
            return SearchResults()

        return SearchResults(
            containers=self._search_containers(term),
            items=self._search_items(term),
            locations=self._search_locations(term),
        )

    def _search_containers(self, term: str) -> list[ContainerHit]:
        stmt = (
            select(Container)
            .where(
                or_(
                    Container.label.icontains(term, autoescape=True),
                    Container.code.icontains(term, autoescape=True),
                    Container.description.icontains(term, autoescape=True),
                )
            )
            .options(
                selectinload(Container.current_slot).selectinload(Slot.rack).selectinload(Rack.location),
                selectinload(Container.container_type),
            )
            .order_by(Container.code)
            .limit(self.config.SEARCH_CONTAINER_LIMIT)
        )

        hits = []
        for container in self.db.execute(stmt).scalars():
            rack = container.current_slot.rack if container.current_slot else None
            hits.append(ContainerHit(
                id=container.id,
                label=container.label,
                code=container.code,
                type_name=container.container_type.name if container.container_type else container.legacy_type,
                location_name=rack.location.name if rack else UNASSIGNED_LOCATION,
                rack_name=rack.name if rack else None,
            ))
        return hits

    def _search_items(self, term: str) -> list[ItemHit]:
        stmt = (
            select(Item)
            .where(
                or_(
                    Item.name.icontains(term, autoescape=True),
                    Item.description.icontains(term, autoescape=True),
                    Item.notes.icontains(term, autoescape=True),
                )
            )
            .options(selectinload(Item.container))
            .order_by(Item.name, Item.id)
            .limit(self.config.SEARCH_ITEM_LIMIT)
        )
        return [
            ItemHit(
                id=item.id,
                name=item.name,
                description=item.description,
                status=item.status,
                container_id=item.container_id,
                container_label=item.container.label if item.container else None,
            )
            for item in self.db.execute(stmt).scalars()
        ]

    def _search_locations(self, term: str) -> list[LocationHit]:
        rack_count = (
            select(func.count(Rack.id))
            .where(Rack.location_id == Location.id)
            .correlate(Location)
            .scalar_subquery()
        )
        stmt = (
            select(Location, rack_count)
            .where(
                or_(
                    Location.name.icontains(term, autoescape=True),
                    Location.notes.icontains(term, autoescape=True),
                )
            )
            .order_by(Location.name)
            .limit(self.config.SEARCH_LOCATION_LIMIT)
        )
        return [
            LocationHit(id=location.id, name=location.name, rack_count=count or 0)
            for location, count in self.db.execute(stmt).all()
        ]
