"""Comandas bounded context: open tabs for a point-of-sale counter.

Handles the comanda lifecycle (open → closed), priced line items with unit
or weight pricing, and payment settlement with cash change.
"""

from protean.domain import Domain

from comandas.utils.logging import configure_logging

configure_logging()

comandas = Domain(name="comandas")
