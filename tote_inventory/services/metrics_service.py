"""Prometheus metrics service for collecting and exposing application metrics."""

import logging
from abc import ABC, abstractmethod

from prometheus_client import Counter, generate_latest

logger = logging.getLogger(__name__)


class MetricsServiceProtocol(ABC):
    """Protocol for metrics service implementations."""

    @abstractmethod
    def record_placement(self, target: str, outcome: str) -> None:
        """Record the outcome of a slot or parent assignment."""

    @abstractmethod
    def record_movement(self, action: str) -> None:
        """Record an item movement."""

    @abstractmethod
    def record_import_row(self, outcome: str) -> None:
        """Record the outcome of one CSV import row."""

    @abstractmethod
    def get_metrics_text(self) -> str:
        """Render all metrics in Prometheus text format."""


class MetricsService(MetricsServiceProtocol):
    """Service class for Prometheus metrics collection and exposure."""

    def __init__(self) -> None:
        self.initialize_metrics()

    def initialize_metrics(self) -> None:
        """Define all Prometheus metric objects."""
        if hasattr(self, "placement_operations_total"):
            return

        self.placement_operations_total = Counter(
            "tote_placement_operations_total",
            "Slot and parent assignments by target and outcome",
            ["target", "outcome"],
        )
        self.item_movements_total = Counter(
            "tote_item_movements_total",
            "Item movements by action",
            ["action"],
        )
        self.import_rows_total = Counter(
            "tote_import_rows_total",
            "CSV import rows by outcome",
            ["outcome"],
        )

    def record_placement(self, target: str, outcome: str) -> None:
        self.placement_operations_total.labels(target=target, outcome=outcome).inc()

    def record_movement(self, action: str) -> None:
        self.item_movements_total.labels(action=action).inc()

    def record_import_row(self, outcome: str) -> None:
        self.import_rows_total.labels(outcome=outcome).inc()

    def get_metrics_text(self) -> str:
        """Generate metrics in Prometheus text format.

        Returns:
            Metrics data in Prometheus exposition format
        """
        return generate_latest().decode("utf-8")
