from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import logging

# Import database components
from app.database.database import create_tables
from app.common.exceptions import AppError

# Import routers
from app.modules.clients.router import router as clients_router
from app.modules.invoices.router import router as invoices_router
from app.modules.projects.router import router as projects_router
from app.modules.purchases.router import router as purchases_router
from app.modules.finance.router import router as finance_router
from app.modules.workers.router import router as workers_router
from app.modules.suppliers.router import router as suppliers_router
from app.modules.reports.routers import (
    projects_router as projects_reports_router,
    invoices_router as invoices_reports_router
)

from app.core.config import settings

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.ENVIRONMENT == "production" else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# FastAPI app
app = FastAPI(
    title="Chantier API",
    description="Facturación, obras, compras y finanzas de una empresa constructora",
    version="1.0.0",
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None
)

# Add middleware
app.add_middleware(GZipMiddleware, minimum_size=1000)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Add your frontend URLs
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Include routers
app.include_router(clients_router)
app.include_router(invoices_router)
app.include_router(projects_router)
app.include_router(purchases_router)
app.include_router(finance_router)
app.include_router(workers_router)
app.include_router(suppliers_router)
app.include_router(projects_reports_router)
app.include_router(invoices_reports_router)


@app.get("/")
async def read_root():
    return {
        "message": "Chantier API is running",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy", "environment": settings.ENVIRONMENT}


@app.on_event("startup")
async def startup_event():
    logger.info("Chantier API starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    # Create database tables (only for development - no migrations yet)
    if settings.ENVIRONMENT == "development":
        await create_tables()


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Chantier API shutting down...")
