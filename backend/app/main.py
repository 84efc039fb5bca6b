import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app import config
from app.middleware.error_handler import register_exception_handlers
from app.models.schemas import HealthResponse
from app.routes import calculate, catalog
from domain.core.equipment_catalog import EquipmentCatalog
from services.quote_service import QuoteService, get_quote_service, reset_quote_service
from utils.logging_utils import Timer

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the configured catalog once; calculation code never reads files"""
    config.setup_logging()
    with Timer("load_catalog", logger):
        equipment = EquipmentCatalog.load_from_json(config.AC_CATALOG_PATH)
    reset_quote_service(QuoteService(catalog=equipment))
    logger.info(f"Quote engine ready: catalog v{equipment.version} ({len(equipment)} units)")
    yield

app = FastAPI(
    title="Room AC Quote API",
    version="1.0.0",
    description="Room cooling load calculation and tiered equipment quotes",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)

register_exception_handlers(app)

# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(f"REQUEST: {request.method} {request.url.path}")
    response = await call_next(request)
    logger.info(f"RESPONSE: {response.status_code}")
    return response

# Include API routes
app.include_router(calculate.router, prefix="/api/v1")
app.include_router(catalog.router, prefix="/api/v1")

@app.get("/")
async def root():
    return {"message": "Room AC Quote API is running"}

@app.get("/healthz", response_model=HealthResponse)
async def healthz() -> HealthResponse:
    """Health check endpoint"""
    service = get_quote_service()
    return HealthResponse(
        status="ok",
        catalog_version=service.catalog.version,
        catalog_units=len(service.catalog),
        reference_version=service.reference.version,
    )
