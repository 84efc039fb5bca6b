from pydantic import Field
from typing import Dict, List, Optional

from domain.core.models import ACUnit, FrozenModel, QuoteOption, RoomAnalysis, ThermalCalculation, UserInputs
from services.breakdown_formatter import LegacyLoadView, LocalizedBreakdownItem

class CalculateRequest(FrozenModel):
    """Request model for a room quote"""
    analysis: RoomAnalysis
    user_inputs: Optional[UserInputs] = Field(None, description="Defaults apply when omitted")

class CalculationSummary(FrozenModel):
    """Display strings for the headline numbers"""
    total_btu: str
    tonnage: str
    price_ranges: Dict[str, str]

class CalculateResponse(FrozenModel):
    """Response model for a room quote"""
    success: bool = True
    request_id: str
    calculation: ThermalCalculation
    breakdown: List[LocalizedBreakdownItem]
    grouped_breakdown: Dict[str, List[LocalizedBreakdownItem]]
    options: List[QuoteOption]
    legacy: LegacyLoadView
    summary: CalculationSummary

class CatalogResponse(FrozenModel):
    """Response model for catalog browsing"""
    version: str
    currency: str
    statistics: dict
    units: List[ACUnit]

class HealthResponse(FrozenModel):
    status: str
    catalog_version: str
    catalog_units: int
    reference_version: str
