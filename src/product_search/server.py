"""
FastAPI server for product search.

Exposes the catalog, the hybrid search engine and a thin pass-through to
an external Vespa engine. The engine is injected through ``create_app`` so
tests and embedders can supply their own catalog.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import SearchSettings, ServerSettings, configure_logging
from .errors import NotFoundError, TransportError, ValidationError
from .models import ProductCreateRequest, SearchRequest, VespaSearchRequest
from .search import ProductSearchEngine
from .storage import build_sample_catalog
from .vespa import VespaClient

logger = logging.getLogger(__name__)


def _error_response(exc: Exception) -> JSONResponse:
    if isinstance(exc, ValidationError):
        return JSONResponse({"error": str(exc)}, status_code=400)
    if isinstance(exc, NotFoundError):
        return JSONResponse({"error": str(exc)}, status_code=404)
    if isinstance(exc, TransportError):
        return JSONResponse({"error": str(exc)}, status_code=502)
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse({"error": str(exc)}, status_code=500)


def _describe_request_errors(errors) -> str:
    problems = []
    for error in errors:
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg', 'invalid value')}")
    return "; ".join(problems) or "Invalid request."


def create_app(
    engine: ProductSearchEngine | None = None,
    *,
    server_settings: ServerSettings | None = None,
) -> FastAPI:
    """Build the FastAPI app around a search engine.

    When no engine is given, one is created over the demo catalog with
    settings read from the environment.
    """
    server_settings = server_settings or ServerSettings.from_env()
    if engine is None:
        engine = ProductSearchEngine(
            build_sample_catalog(),
            settings=SearchSettings.from_env(),
            vespa=VespaClient(server_settings.vespa_url, timeout=server_settings.vespa_timeout),
        )

    app = FastAPI(title="Product Search", description="Hybrid lexical and vector product search")
    app.state.engine = engine
    app.add_middleware(
        CORSMiddleware,
        allow_origins=server_settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError):
        """Report malformed request bodies as 400 with an ``error`` message."""
        return _error_response(ValidationError(_describe_request_errors(exc.errors())))

    @app.get("/health")
    async def health():
        """Liveness check."""
        return {
            "status": "OK",
            "message": "Product search service is running",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    @app.get("/api/products")
    async def list_products(include_vectors: bool = False):
        """List all catalog products in insertion order."""
        try:
            products = engine.list_products()
            return {
                "products": [p.to_dict(include_vectors=include_vectors) for p in products],
                "count": len(products),
                "message": "Catalog products",
            }
        except Exception as exc:
            return _error_response(exc)

    @app.get("/api/products/{product_id}")
    async def get_product(product_id: str, include_vectors: bool = False):
        try:
            product = engine.get_product(product_id)
            return {"product": product.to_dict(include_vectors=include_vectors)}
        except Exception as exc:
            return _error_response(exc)

    @app.post("/api/products", status_code=201)
    async def add_product(request: ProductCreateRequest):
        """Add a product; vectors are derived from the text when omitted."""
        try:
            product = engine.add_product(
                request.title,
                request.description,
                request.category,
                request.price,
                title_vector=request.title_vector,
                description_vector=request.description_vector,
            )
            return {
                "message": "Product added successfully",
                "product": product.to_dict(),
            }
        except Exception as exc:
            return _error_response(exc)

    @app.post("/api/search")
    async def search_products(request: SearchRequest):
        """Search the catalog in text, semantic or hybrid mode."""
        try:
            response = engine.search(
                request.query,
                request.search_type,
                request.query_vector,
            )
            return {
                "query": request.query,
                "searchType": request.search_type,
                "results": [hit.to_dict() for hit in response.results],
                "count": response.count,
                "message": (
                    f"Found {response.count} products using {request.search_type} search"
                ),
            }
        except Exception as exc:
            return _error_response(exc)

    @app.get("/api/vespa/status")
    async def vespa_status():
        """Probe the external engine; always answers 200."""
        status = await engine.external_engine_status()
        return status.to_dict()

    @app.post("/api/vespa/search")
    async def vespa_search(request: VespaSearchRequest):
        """Forward a YQL query to the external engine."""
        if engine.vespa is None:
            return JSONResponse({"error": "No external engine configured."}, status_code=503)
        try:
            result = await engine.vespa.query(request.yql, request.params)
            return {"query": request.yql, "parameters": request.params, "result": result}
        except Exception as exc:
            return _error_response(exc)

    return app


app = create_app()


def run_server(host: str | None = None, port: int | None = None):
    """Run the FastAPI server."""
    import uvicorn

    configure_logging()
    settings = ServerSettings.from_env()
    uvicorn.run(app, host=host or settings.host, port=port or settings.port)


if __name__ == "__main__":
    run_server()
