from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from linkstat_app.config import settings
from linkstat_app.database.connection import engine, Base
from linkstat_app.errors import ShortenerError
from linkstat_app.logging_config import setup_logging
from linkstat_app.api.v1 import urls, analytics, redirect

# Import models to ensure they're registered with Base
from linkstat_app.models import URL, ClickEvent

setup_logging()

# Create database tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener with click analytics built with FastAPI",
    debug=settings.debug
)


@app.exception_handler(ShortenerError)
async def shortener_error_handler(request: Request, exc: ShortenerError):
    """Map core error kinds to HTTP responses"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "kind": exc.kind.value},
    )


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
app.include_router(urls.router, prefix="/api/v1")
app.include_router(analytics.router, prefix="/api/v1")
app.include_router(redirect.router)
