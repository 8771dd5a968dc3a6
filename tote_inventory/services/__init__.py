"""Service layer for the tote inventory application."""
