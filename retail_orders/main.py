"""
FastAPI Application Entry Point - Retail Order Service
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from retail_orders.config import settings
from retail_orders.database import engine, init_db
from retail_orders.logging_config import configure_logging
from retail_orders.api import health, orders, products, staff, reports

logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="Retail Order Service",
    description="Order fulfillment, stock control and sales reporting for a single store",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(orders.router)
app.include_router(products.router)
app.include_router(staff.router)
app.include_router(reports.router)

# Prometheus metrics
Instrumentator().instrument(app).expose(app)


@app.on_event("startup")
def startup_event():
    """Initialize logging and database on startup"""
    configure_logging()
    logger.info("Starting %s...", settings.SERVICE_NAME)
    init_db()
    logger.info("%s is running on port %s", settings.SERVICE_NAME, settings.SERVICE_PORT)


@app.on_event("shutdown")
def shutdown_event():
    """Release the store connection on shutdown"""
    logger.info("Shutting down %s...", settings.SERVICE_NAME)
    engine.dispose()
