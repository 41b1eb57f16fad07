"""Catalog lookup used when items are added to a comanda."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from comandas.errors import ProductNotFoundError
from comandas.product.product import Product


def get_product(product_id) -> Product:
    try:
        return current_domain.repository_for(Product).get(str(product_id))
    except ObjectNotFoundError:
        raise ProductNotFoundError(str(product_id)) from None
