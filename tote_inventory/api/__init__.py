"""API blueprints for the tote inventory."""

from flask import Blueprint

# Create main API blueprint
api_bp = Blueprint("api", __name__, url_prefix="/api")


# Import and register all resource blueprints
# Note: Imports are done after api_bp creation to avoid circular imports
from tote_inventory.api.admin import admin_bp  # noqa: E402
from tote_inventory.api.container_types import container_types_bp  # noqa: E402
from tote_inventory.api.containers import containers_bp  # noqa: E402
from tote_inventory.api.health import health_bp  # noqa: E402
from tote_inventory.api.items import items_bp  # noqa: E402
from tote_inventory.api.locations import locations_bp  # noqa: E402
from tote_inventory.api.metrics import metrics_bp  # noqa: E402
from tote_inventory.api.racks import racks_bp  # noqa: E402
from tote_inventory.api.search import search_bp  # noqa: E402
from tote_inventory.api.slots import slots_bp  # noqa: E402

api_bp.register_blueprint(admin_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(container_types_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(containers_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(health_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(items_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(locations_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(metrics_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(racks_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(search_bp)  # type: ignore[attr-defined]
api_bp.register_blueprint(slots_bp)  # type: ignore[attr-defined]
