import logging
from fastapi import APIRouter
from typing import Optional

from app.models.schemas import CatalogResponse
from models.enums import QuoteTier
from services.quote_service import get_quote_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["catalog"])

@router.get("/catalog", response_model=CatalogResponse)
async def list_catalog(tier: Optional[QuoteTier] = None) -> CatalogResponse:
    """
    List the equipment catalog, optionally only one efficiency tier
    """
    catalog = get_quote_service().catalog
    units = catalog.units_in_tier(tier) if tier else list(catalog.units)
    logger.debug(f"Catalog listing: tier={tier.value if tier else 'all'}, {len(units)} units")

    return CatalogResponse(
        version=catalog.version,
        currency=catalog.currency,
        statistics=catalog.statistics(),
        units=units,
    )
