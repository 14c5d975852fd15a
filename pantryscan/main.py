# pantryscan/main.py
from __future__ import annotations
import hmac
import logging
import os
import traceback
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from .ai_router import OpenAIVisionGateway, require_api_key
from .config import Settings
from .errors import AnalyzerError, AuthenticationError, ValidationError
from .log import log_requests_middleware, setup_logging
from .normalizer import ResponseNormalizer
from .placeholders import sentinel_result
from .prompts import build_prompt
from .schemas import AnalyzeFailure, AnalyzeSuccess
from .validators import check_image, validate_request

logger = logging.getLogger("pantryscan")

ANALYZE_PATH = "/api/analyze"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def success(data: dict) -> JSONResponse:
    return JSONResponse(AnalyzeSuccess(data=data).model_dump())


def failure(status_code: int, error: str, details: Any = None) -> JSONResponse:
    body = AnalyzeFailure(error=error, details=details).model_dump()
    if details is None:
        body.pop("details")
    return JSONResponse(body, status_code=status_code)


def check_shared_secret(request: Request, settings: Settings) -> None:
    """Only active when PANTRYSCAN_SHARED_SECRET is set."""
    if not settings.shared_secret:
        return
    header = request.headers.get("authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not hmac.compare_digest(
        token.strip().encode(), settings.shared_secret.encode()
    ):
        raise AuthenticationError("Invalid or missing API key")


async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    for k, v in CORS_HEADERS.items():
        response.headers[k] = v
    return response


def create_app(settings: Optional[Settings] = None, gateway: Any = None) -> FastAPI:
    """Build the ASGI app.

    `gateway` is anything with `async complete(prompt, image) -> str`; it
    defaults to the OpenAI client wrapper.
    """
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    app = FastAPI(title="pantryscan")
    app.state.settings = settings
    app.state.gateway = gateway or OpenAIVisionGateway(settings)
    app.state.normalizer = ResponseNormalizer()

    # registered last runs first, so timings include the CORS step
    app.middleware("http")(add_cors_headers)
    app.middleware("http")(log_requests_middleware)

    @app.get("/health")
    def health():
        return {"ok": True}

    @app.options(ANALYZE_PATH)
    async def analyze_preflight():
        return Response(status_code=200)

    @app.api_route(ANALYZE_PATH, methods=["GET", "PUT", "PATCH", "DELETE"])
    async def analyze_not_allowed():
        return JSONResponse({"success": False, "error": "Method not allowed"}, status_code=405)

    @app.post(ANALYZE_PATH)
    async def analyze(request: Request):
        settings: Settings = request.app.state.settings
        try:
            check_shared_secret(request, settings)

            try:
                body = await request.json()
            except ValueError:
                raise ValidationError("Request body must be valid JSON") from None
            req = validate_request(body)

            # connectivity check without spending a model call
            if req.is_sentinel:
                logger.info("Test request received - returning mock success")
                return success(sentinel_result(req.type))

            require_api_key(settings)
            logger.info("Processing %s analysis request", req.type)

            image = check_image(req.image)
            prompt = build_prompt(req.type)
            content = await request.app.state.gateway.complete(prompt, image)

            result = request.app.state.normalizer.normalize(content, req.type)
            if result.fallback:
                logger.info("Returning fallback %s payload", req.type)
            else:
                logger.info("Analysis successful")
            return success(result.data)

        except AnalyzerError as e:
            logger.warning("%s: %s", type(e).__name__, e.message)
            return failure(e.status_code, e.message, e.details)
        except Exception as e:
            logger.exception("API Error")
            details = None if settings.is_production else {"traceback": traceback.format_exc()}
            return failure(500, str(e) or "Internal server error", details)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        "pantryscan.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
    )
