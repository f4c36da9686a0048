"""API module initialization."""
from .optimization import router as optimization_router
from .health import router as health_router

__all__ = ["optimization_router", "health_router"]
