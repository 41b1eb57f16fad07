"""Comandas API package."""

from comandas.api.errors import register_error_handlers
from comandas.api.routes import comanda_router, product_router

__all__ = ["comanda_router", "product_router", "register_error_handlers"]
