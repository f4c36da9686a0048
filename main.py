"""Entry point for the YouTube SEO Optimizer service."""

if __name__ == "__main__":
    import uvicorn
    from app.core.config import settings

    print(f"🚀 Starting {settings.api_title} v{settings.api_version}")
    print(f"🌐 Environment: {settings.environment}")
    print(f"🔧 Rate limit: {settings.rate_limit_max_requests} requests per {settings.rate_limit_window_seconds}s")
    print(f"📝 Log level: {settings.log_level}")

    uvicorn.run(
        "app.main:app",  # Use string import for hot reload
        host=settings.host,
        port=settings.port,
        reload=settings.debug_mode,
        log_level=settings.log_level.lower()
    )
