"""FastAPI routes for the Comandas domain."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from comandas.api.schemas import (
    AddItemRequest,
    AdjustQuantityRequest,
    CloseComandaRequest,
    ComandaListResponse,
    ComandaResponse,
    ComandaSchema,
    ErrorResponse,
    OpenComandaRequest,
    ProductResponse,
    ProductSchema,
    RegisterProductRequest,
    SetObservationRequest,
)
from comandas.comanda.closing import CloseComanda
from comandas.comanda.items import AddItem, AdjustItemQuantity, SetItemObservation
from comandas.comanda.opening import OpenComanda
from comandas.comanda.queries import comandas_opened_today, get_comanda
from comandas.comanda.recalculation import RecalculateComanda
from comandas.dispatch import dispatch
from comandas.product.lookup import get_product
from comandas.product.registration import RegisterProduct

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input or business rule violation"},
    404: {"model": ErrorResponse, "description": "Comanda, item or product not found"},
    409: {"model": ErrorResponse, "description": "Comanda closed or number already used today"},
}

comanda_router = APIRouter(prefix="/comandas", tags=["comandas"], responses=_ERROR_RESPONSES)
product_router = APIRouter(prefix="/products", tags=["products"], responses=_ERROR_RESPONSES)


def _respond(comanda) -> ComandaResponse:
    return ComandaResponse(comanda=ComandaSchema.from_aggregate(comanda))


@comanda_router.post("", status_code=201, response_model=ComandaResponse)
async def open_comanda(body: OpenComandaRequest) -> ComandaResponse:
    return _respond(dispatch(OpenComanda(number=body.number)))


@comanda_router.get("/today", response_model=ComandaListResponse)
async def list_today() -> ComandaListResponse:
    return ComandaListResponse(comandas=[ComandaSchema.from_aggregate(c) for c in comandas_opened_today()])


@comanda_router.get("/{comanda_id}", response_model=ComandaResponse)
async def get_comanda_detail(comanda_id: str) -> ComandaResponse:
    return _respond(get_comanda(comanda_id))


@comanda_router.post("/{comanda_id}/items", response_model=ComandaResponse)
async def add_item(comanda_id: str, body: AddItemRequest) -> ComandaResponse:
    command = AddItem(
        comanda_id=comanda_id,
        product_id=body.product_id,
        quantity=body.quantity,
        weight_grams=body.weight_grams,
        observation=body.observation,
    )
    return _respond(dispatch(command))


@comanda_router.patch("/{comanda_id}/items/{item_id}/quantity", response_model=ComandaResponse)
async def adjust_item_quantity(comanda_id: str, item_id: str, body: AdjustQuantityRequest) -> ComandaResponse:
    command = AdjustItemQuantity(comanda_id=comanda_id, item_id=item_id, delta=body.delta)
    return _respond(dispatch(command))


@comanda_router.patch("/{comanda_id}/items/{item_id}/observation", response_model=ComandaResponse)
async def set_item_observation(comanda_id: str, item_id: str, body: SetObservationRequest) -> ComandaResponse:
    command = SetItemObservation(comanda_id=comanda_id, item_id=item_id, observation=body.observation)
    return _respond(dispatch(command))


@comanda_router.post("/{comanda_id}/recalculate", response_model=ComandaResponse)
async def recalculate_comanda(comanda_id: str) -> ComandaResponse:
    return _respond(dispatch(RecalculateComanda(comanda_id=comanda_id)))


@comanda_router.post("/{comanda_id}/close", response_model=ComandaResponse)
async def close_comanda(comanda_id: str, body: CloseComandaRequest) -> ComandaResponse:
    command = CloseComanda(
        comanda_id=comanda_id,
        payment_method=body.payment_method,
        cash_paid=body.cash_paid,
    )
    return _respond(dispatch(command))


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
@product_router.post("", status_code=201, response_model=ProductResponse)
async def register_product(body: RegisterProductRequest) -> ProductResponse:
    product_id = current_domain.process(RegisterProduct(**body.model_dump()), asynchronous=False)
    return ProductResponse(product=ProductSchema.from_aggregate(get_product(product_id)))


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product_detail(product_id: str) -> ProductResponse:
    return ProductResponse(product=ProductSchema.from_aggregate(get_product(product_id)))
