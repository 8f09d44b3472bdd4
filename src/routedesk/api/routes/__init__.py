"""Route group exports."""

from . import health, orders, routes

__all__ = ["health", "orders", "routes"]
