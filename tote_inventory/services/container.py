"""Dependency injection container for services."""

from dependency_injector import containers, providers
from sqlalchemy.orm import sessionmaker

from tote_inventory.config import Settings
from tote_inventory.services.account_service import AccountService
from tote_inventory.services.container_migration_service import ContainerMigrationService
from tote_inventory.services.container_service import ContainerService
from tote_inventory.services.container_type_service import ContainerTypeService
from tote_inventory.services.csv_import_service import CsvImportService
from tote_inventory.services.item_service import ItemService
from tote_inventory.services.location_service import LocationService
from tote_inventory.services.metrics_service import MetricsService
from tote_inventory.services.placement_service import PlacementService
from tote_inventory.services.rack_service import RackService
from tote_inventory.services.search_service import SearchService
from tote_inventory.services.setup_service import SetupService


class ServiceContainer(containers.DeclarativeContainer):
    """Container for service dependency injection."""

    # Configuration and database session providers
    config = providers.Dependency(instance_of=Settings)
    session_maker = providers.Dependency(instance_of=sessionmaker)
    db_session = providers.ContextLocalSingleton(
        session_maker.provided.call()
    )

    # Metrics service - Singleton so counters register once per app
    metrics_service = providers.Singleton(MetricsService)

    # Service providers - Factory creates new instances for each request
    location_service = providers.Factory(LocationService, db=db_session)
    rack_service = providers.Factory(
        RackService, db=db_session, location_service=location_service
    )
    placement_service = providers.Factory(
        PlacementService, db=db_session, metrics_service=metrics_service
    )
    container_type_service = providers.Factory(ContainerTypeService, db=db_session)
    container_service = providers.Factory(
        ContainerService,
        db=db_session,
        placement_service=placement_service,
        container_type_service=container_type_service,
    )
    item_service = providers.Factory(
        ItemService,
        db=db_session,
        placement_service=placement_service,
        metrics_service=metrics_service,
    )
    search_service = providers.Factory(SearchService, db=db_session, config=config)
    setup_service = providers.Factory(
        SetupService, db=db_session, container_type_service=container_type_service
    )
    container_migration_service = providers.Factory(ContainerMigrationService, db=db_session)
    csv_import_service = providers.Factory(
        CsvImportService,
        db=db_session,
        container_service=container_service,
        container_type_service=container_type_service,
        location_service=location_service,
        metrics_service=metrics_service,
    )
    account_service = providers.Factory(AccountService, db=db_session, config=config)
