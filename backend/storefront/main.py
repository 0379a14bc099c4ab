"""
Storefront Checkout - Backend API
Catalog, cart and checkout over HTTP
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)

from storefront import __version__
from storefront.api import carts, customers, products
from storefront.core.config import settings
from storefront.core.database import get_store
from storefront.core.logging_config import configure_logging
from storefront.domain.catalog import build_sample_catalog, build_sample_customers

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Seed the in-memory store with the sample catalog on startup"""
    store = get_store()
    if settings.SEED_SAMPLE_DATA and not store.products:
        store.seed(build_sample_catalog().values(), build_sample_customers())
    logger.info("%s %s started (%s)", settings.API_TITLE, settings.API_VERSION, settings.ENVIRONMENT)
    yield


# FastAPI application
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(products.router, prefix="/api/v1/products", tags=["Products"])
app.include_router(customers.router, prefix="/api/v1/customers", tags=["Customers"])
app.include_router(carts.router, prefix="/api/v1/carts", tags=["Carts"])


@app.get("/")
async def root():
    """Root endpoint - API status"""
    return {
        "message": settings.API_TITLE,
        "status": "online",
        "version": settings.API_VERSION,
        "description": settings.API_DESCRIPTION
    }


@app.get("/health")
async def health():
    """Health check endpoint for monitoring"""
    store = get_store()

    return {
        "status": "healthy",
        "service": "storefront-api",
        "version": __version__,
        "environment": settings.ENVIRONMENT,
        "store": {
            "products": len(store.products),
            "customers": len(store.customers),
            "carts": len(store.carts),
        }
    }
