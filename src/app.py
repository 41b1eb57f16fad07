"""Comandas FastAPI application.

Web server for the point-of-sale counter. Commands are processed
synchronously inside the comandas domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV selects the protean config overlay.
from comandas.domain import comandas  # noqa: E402
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

comandas.init()

_DOMAIN_PREFIXES = ("/comandas", "/products")


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Comandas API",
    description="Open tabs for the point-of-sale counter",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the comandas domain context for domain routes."""
    if request.url.path.startswith(_DOMAIN_PREFIXES):
        with comandas.domain_context():
            response = await call_next(request)
        return response
    # Health check, docs, etc.
    return await call_next(request)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from comandas.api import comanda_router, product_router, register_error_handlers  # noqa: E402

app.include_router(comanda_router)
app.include_router(product_router)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": comandas.name})
