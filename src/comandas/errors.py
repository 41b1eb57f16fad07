"""Business rule failures of the comanda engine.

Each failure carries a stable ``code`` for clients and the HTTP status the
transport layer answers with. Field-level input problems are protean
``ValidationError``s instead and never reach this hierarchy.
"""


class ComandaError(Exception):
    """Base exception for all comanda business rule failures."""

    code = "comanda_error"
    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


# ===============================================
# Referenced entity does not exist
# ===============================================


class OrderNotFoundError(ComandaError):
    code = "comanda_not_found"
    status_code = 404

    def __init__(self, comanda_id: str):
        self.comanda_id = comanda_id
        super().__init__(f"Comanda not found: {comanda_id}")


class ItemNotFoundError(ComandaError):
    code = "item_not_found"
    status_code = 404

    def __init__(self, comanda_id: str, item_id: str):
        self.comanda_id = comanda_id
        self.item_id = item_id
        super().__init__(f"Item {item_id} not found on comanda {comanda_id}")


class ProductNotFoundError(ComandaError):
    code = "product_not_found"
    status_code = 404

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


# ===============================================
# Terminal state and conflicts
# ===============================================


class OrderClosedError(ComandaError):
    """Raised when an item mutation targets a closed comanda."""

    code = "comanda_closed"
    status_code = 409

    def __init__(self, comanda_id: str):
        self.comanda_id = comanda_id
        super().__init__(f"Comanda {comanda_id} is closed")


class AlreadyClosedError(ComandaError):
    """Raised when closing a comanda that is already closed."""

    code = "already_closed"
    status_code = 409

    def __init__(self, comanda_id: str):
        self.comanda_id = comanda_id
        super().__init__(f"Comanda {comanda_id} is already closed")


class NumberAlreadyExistsTodayError(ComandaError):
    code = "number_already_exists_today"
    status_code = 409

    def __init__(self, number: int, business_date: str):
        self.number = number
        self.business_date = business_date
        super().__init__(f"Comanda number {number} already exists on {business_date}")


# ===============================================
# Pricing and settlement
# ===============================================


class ProductInactiveError(ComandaError):
    code = "product_inactive"

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product {product_id} is inactive")


class MissingWeightError(ComandaError):
    code = "missing_weight"

    def __init__(self, message="Weight-priced products require weight_grams"):
        super().__init__(message)


class InvalidPricePerKgError(ComandaError):
    code = "invalid_price_per_kg"

    def __init__(self, message="Weight-priced products require price_per_kg > 0"):
        super().__init__(message)


class EmptyOrderError(ComandaError):
    code = "empty_comanda"

    def __init__(self, comanda_id: str):
        self.comanda_id = comanda_id
        super().__init__(f"Comanda {comanda_id} has no items")


class CashInsufficientError(ComandaError):
    code = "cash_insufficient"

    def __init__(self, cash_paid: float | None, total: float):
        self.cash_paid = cash_paid
        self.total = total
        super().__init__(f"Cash paid ({cash_paid}) must be at least the total ({total:.2f})")
