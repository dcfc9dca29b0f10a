from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from resource_finder.config import get_settings
from resource_finder.api.routes import resources
from resource_finder.services.logging import logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()

    # Initialize logging
    setup_logging()
    logger.info("Starting Resource Finder")

    logger.info(f"AI Provider: {settings.ai_provider} (configured: {settings.llm_configured})")
    logger.info(f"CORS Origins: {settings.cors_origins}")

    yield

    logger.info("Shutting down Resource Finder")


settings = get_settings()

app = FastAPI(
    title="Resource Finder",
    description="Learning resource recommendations for analyzed code",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(resources.router, prefix="/api", tags=["resources"])


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed /api/resources bodies get the endpoint's own 400 envelope."""
    if request.url.path != "/api/resources":
        return await request_validation_exception_handler(request, exc)

    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = f"{location}: {first.get('msg', 'invalid value')}" if location else first.get("msg", "")
    else:
        detail = "invalid value"

    logger.warning(f"[Resources] Rejected malformed request: {detail}")
    return JSONResponse(
        status_code=400,
        content={"success": False, "error": f"Invalid request body - {detail}"},
    )


@app.get("/api/health")
async def health_check():
    return {"status": "healthy"}


@app.get("/api/status")
async def get_status():
    """Which backends are configured. Never reports credential values."""
    settings = get_settings()
    return {
        "ai_provider": settings.ai_provider,
        "llm_configured": settings.llm_configured,
        "sources": {
            "docs": True,
            "web": bool(settings.tavily_api_key),
            "qa": True,
            "code": bool(settings.github_token),
        },
    }
