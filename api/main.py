"""
NGINX Config Tree API

Parses NGINX configuration files into a tree of blocks, directives and
comments. Parsing is lenient: unbalanced braces and similar authoring
mistakes are reported as warnings instead of failing the request.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from core.request_logger import RequestLoggerMiddleware
from endpoints import parse

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("NGINX Config Tree API starting up...")
    logger.info(f"Config files are resolved against {settings.nginx_conf_dir}")
    yield
    logger.info("NGINX Config Tree API shutting down...")


app = FastAPI(
    title="NGINX Config Tree API",
    description="""
    ## Purpose

    Turns NGINX configuration text into a hierarchical document model:
    blocks with their arguments, directives, includes and comments, in
    source order.

    ## Behaviour

    - Quoted strings may contain `;`, `{` and `#`
    - Several directives may share one line
    - Stray or missing `}` never fail a parse; they are reported as warnings
    - `include` directives are recorded but not followed
    """,
    version=API_VERSION,
    license_info={
        "name": "MIT",
    },
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.include_router(parse.router)

# Request logging middleware
app.add_middleware(RequestLoggerMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.api_debug else [],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get(
    "/",
    summary="API Health Check",
    description="Basic health check endpoint to verify the API is running.",
    response_description="API status and basic information",
    tags=["Health"],
)
async def root():
    """
    Welcome endpoint providing API status and basic information.

    Returns:
        dict: API status, version, and available endpoints information
    """
    return {
        "message": "NGINX Config Tree API is running",
        "version": API_VERSION,
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "docs_url": "/docs",
        "endpoints": ["POST /parse/", "GET /parse/file"],
    }


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.api_host, port=settings.api_port, reload=True, log_level="info")
