"""Flask application subclass carrying the service container."""

from typing import TYPE_CHECKING

from flask import Flask

if TYPE_CHECKING:
    from tote_inventory.services.container import ServiceContainer


class App(Flask):
    """Flask application with a typed dependency injection container."""

    container: "ServiceContainer"
