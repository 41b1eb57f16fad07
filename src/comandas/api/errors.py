"""Exception handlers that turn domain failures into HTTP answers.

Every failure is rendered as ``{"error": <stable code>, "message": <text>}``.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidDataError, ObjectNotFoundError, ValidationError

from comandas.errors import ComandaError


async def comanda_error_handler(request: Request, exc: ComandaError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "validation_error", "message": "Invalid input", "details": jsonable_encoder(exc.messages)},
    )


async def invalid_data_handler(request: Request, exc: InvalidDataError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "validation_error", "message": "Invalid input", "details": jsonable_encoder(exc.messages)},
    )


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "validation_error", "message": "Invalid request", "details": jsonable_encoder(exc.errors())},
    )


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "not_found", "message": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ComandaError, comanda_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(InvalidDataError, invalid_data_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
