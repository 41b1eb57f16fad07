"""Pydantic request/response schemas for the Comandas API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from comandas.comanda.comanda import MAX_COMANDA_NUMBER


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class OpenComandaRequest(BaseModel):
    number: int = Field(gt=0, le=MAX_COMANDA_NUMBER)

    model_config = {"json_schema_extra": {"examples": [{"number": 12}]}}


class AddItemRequest(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1, default=1)
    weight_grams: int | None = Field(default=None, gt=0)
    observation: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"product_id": "prod-001", "quantity": 2},
                {"product_id": "prod-buffet", "weight_grams": 480, "observation": "no onions"},
            ]
        }
    }


class AdjustQuantityRequest(BaseModel):
    delta: int


class SetObservationRequest(BaseModel):
    observation: str | None = None


class CloseComandaRequest(BaseModel):
    payment_method: Literal["pix", "card", "cash"]
    cash_paid: float | None = Field(default=None, ge=0)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"payment_method": "cash", "cash_paid": 50.0},
                {"payment_method": "pix"},
            ]
        }
    }


class RegisterProductRequest(BaseModel):
    name: str = Field(min_length=1)
    category: str = Field(min_length=1)
    pricing_type: Literal["unit", "weight"] = "unit"
    price: float | None = Field(default=None, ge=0)
    price_per_kg: float | None = Field(default=None, gt=0)
    active: bool = True

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"name": "Coxinha", "category": "Salgados", "price": 9.5},
                {"name": "Buffet", "category": "Pratos", "pricing_type": "weight", "price_per_kg": 69.9},
            ]
        }
    }


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ComandaItemSchema(BaseModel):
    id: str
    product_id: str
    name: str
    pricing_type: str
    quantity: int
    price: float
    weight_grams: int | None = None
    observation: str | None = None


class ComandaSchema(BaseModel):
    id: str
    number: int
    status: str
    total: float
    items_count: int
    payment_method: str | None = None
    cash_paid: float | None = None
    change: float | None = None
    created_at: datetime | None = None
    closed_at: datetime | None = None
    items: list[ComandaItemSchema] = []

    @classmethod
    def from_aggregate(cls, comanda) -> "ComandaSchema":
        return cls(
            id=str(comanda.id),
            number=comanda.number,
            status=comanda.status,
            total=comanda.total,
            items_count=comanda.items_count,
            payment_method=comanda.payment_method,
            cash_paid=comanda.cash_paid,
            change=comanda.change,
            created_at=comanda.created_at,
            closed_at=comanda.closed_at,
            items=[
                ComandaItemSchema(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    name=item.name,
                    pricing_type=item.pricing_type,
                    quantity=item.quantity,
                    price=item.price,
                    weight_grams=item.weight_grams,
                    observation=item.observation,
                )
                for item in comanda.items
            ],
        )


class ProductSchema(BaseModel):
    id: str
    name: str
    category: str
    pricing_type: str
    price: float | None = None
    price_per_kg: float | None = None
    active: bool

    @classmethod
    def from_aggregate(cls, product) -> "ProductSchema":
        return cls(
            id=str(product.id),
            name=product.name,
            category=product.category,
            pricing_type=product.pricing_type,
            price=product.price,
            price_per_kg=product.price_per_kg,
            active=product.active,
        )


class ProductResponse(BaseModel):
    product: ProductSchema


class ComandaResponse(BaseModel):
    comanda: ComandaSchema


class ComandaListResponse(BaseModel):
    comandas: list[ComandaSchema]


class ErrorResponse(BaseModel):
    """Body of every failed request, as rendered by the registered exception handlers."""

    error: str
    message: str | None = None
    details: dict | list | None = None
