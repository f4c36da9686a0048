"""Main FastAPI application with modular architecture."""
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.exceptions import OptimizerBaseException
from app.api import optimization_router, health_router
from app.utils.logging import LoggerSetup, MetricsLogger
from app.utils.response_helpers import ResponseHelper

# Setup logging
LoggerSetup.setup_logging()
logger = logging.getLogger(__name__)
metrics_logger = MetricsLogger()

# Same defaults as helmet, minus the Content-Security-Policy the inline web form would trip
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
    "X-XSS-Protection": "0",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"{settings.api_title} v{settings.api_version} starting up ({settings.environment})")
    logger.info(f"Access the web interface at: http://localhost:{settings.port}")
    logger.info(f"API endpoints available at: http://localhost:{settings.port}/api/")
    yield
    # Shutdown
    logger.info("Application shutting down...")

# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    description=settings.api_description,
    version=settings.api_version,
    lifespan=lifespan,
    swagger_ui_parameters={
        "defaultModelsExpandDepth": -1,
        "tryItOutEnabled": True,
    }
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Attach request ID, security and rate limit headers, then log request metrics."""
    request_id = ResponseHelper.generate_request_id()
    request.state.request_id = request_id
    start_time = datetime.now()

    response = await call_next(request)

    response.headers.update(SECURITY_HEADERS)
    response.headers["X-Request-ID"] = request_id
    decision = getattr(request.state, "rate_limit", None)
    if decision is not None:
        response.headers["X-RateLimit-Limit"] = str(decision.limit)
        response.headers["X-RateLimit-Remaining"] = str(decision.remaining)

    processing_time = int((datetime.now() - start_time).total_seconds() * 1000)
    metrics_logger.log_request_metrics(
        request_id=request_id,
        endpoint=request.url.path,
        method=request.method,
        processing_time_ms=processing_time,
        status_code=response.status_code
    )
    return response

# Global exception handler for custom exceptions
@app.exception_handler(OptimizerBaseException)
async def optimizer_exception_handler(request: Request, exc: OptimizerBaseException):
    """Handle custom optimizer exceptions raised outside endpoint bodies."""
    return ResponseHelper.create_error_from_exception(exc)

@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed request bodies with the standard 400 envelope."""
    return ResponseHelper.create_error_response(message="Invalid request body", status_code=400)

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle routing and HTTP exceptions."""
    if exc.status_code == 404:
        return ResponseHelper.create_error_response(message="Endpoint not found", status_code=404)

    return ResponseHelper.create_error_response(
        message=str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None)
    )

@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": str(exc) if settings.debug_mode else "Something went wrong"
        }
    )

# Include routers
app.include_router(health_router)
app.include_router(optimization_router)
