"""Flask application factory for the tote inventory backend."""

import logging
from typing import TYPE_CHECKING

from flask_cors import CORS

if TYPE_CHECKING:
    from tote_inventory.config import Settings

from tote_inventory.app import App
from tote_inventory.config import get_settings
from tote_inventory.extensions import db
from tote_inventory.services.container import ServiceContainer

logger = logging.getLogger(__name__)


def create_app(settings: "Settings | None" = None) -> App:
    """Create and configure Flask application."""
    app = App(__name__)

    # Load configuration
    if settings is None:
        settings = get_settings()

    app.config.from_object(settings)

    # Initialize extensions
    db.init_app(app)

    # Import models to register them with SQLAlchemy
    from tote_inventory import models  # noqa: F401

    # SessionLocal for per-request sessions; db.engine requires an app context
    with app.app_context():
        from sqlalchemy.orm import Session, sessionmaker

        SessionLocal: sessionmaker[Session] = sessionmaker(
            class_=Session,
            bind=db.engine,
            autoflush=True,
            expire_on_commit=False,
        )

    # Initialize SpecTree for OpenAPI docs
    from tote_inventory.utils.spectree_config import configure_spectree

    configure_spectree(app)

    # Initialize service container after SpecTree
    container = ServiceContainer()
    container.config.override(settings)
    container.session_maker.override(SessionLocal)

    wire_modules = [
        'tote_inventory.api.admin', 'tote_inventory.api.container_types',
        'tote_inventory.api.containers', 'tote_inventory.api.items',
        'tote_inventory.api.locations', 'tote_inventory.api.metrics',
        'tote_inventory.api.racks', 'tote_inventory.api.scan',
        'tote_inventory.api.search', 'tote_inventory.api.slots',
    ]

    container.wire(modules=wire_modules)

    app.container = container

    # Configure CORS
    CORS(app, origins=settings.CORS_ORIGINS)

    # Initialize Flask-Log-Request-ID for correlation tracking
    from flask_log_request_id import RequestID
    RequestID(app)

    # Register error handlers
    from tote_inventory.utils.flask_error_handlers import register_error_handlers

    register_error_handlers(app)

    # Register main API blueprint
    from tote_inventory.api import api_bp

    app.register_blueprint(api_bp)

    # QR deep links live outside /api so printed labels stay short
    from tote_inventory.api.scan import scan_bp

    app.register_blueprint(scan_bp)

    @app.teardown_request
    def close_session(exc: Exception | None) -> None:
        """Commit or roll back the request session, then close it."""
        try:
            db_session = container.db_session()
            needs_rollback = db_session.info.get('needs_rollback', False)

            if exc or needs_rollback:
                db_session.rollback()
            else:
                db_session.commit()

            # Clear rollback flag after processing
            db_session.info.pop('needs_rollback', None)
            db_session.close()

        finally:
            # Ensure the scoped session is removed after each request
            container.db_session.reset()

    logger.debug(f"Application created for environment {settings.FLASK_ENV}")

    return app
