import logging
import uuid
from fastapi import APIRouter

from app.models.schemas import CalculateRequest, CalculateResponse, CalculationSummary
from services.breakdown_formatter import (
    format_btu,
    format_price,
    format_tonnage,
    group_breakdown_items,
    legacy_view,
    localize_breakdown,
    percentage_drift,
)
from services.quote_service import get_quote_service
from utils.logging_utils import create_operation_logger

logger = logging.getLogger(__name__)
router = APIRouter(tags=["calculate"])

@router.post("/calculate", response_model=CalculateResponse)
async def calculate(request: CalculateRequest) -> CalculateResponse:
    """
    Calculate the cooling load for a room and quote equipment for it.
    Errors are turned into structured responses by the app's exception handlers.
    """
    request_id = uuid.uuid4().hex[:12]
    op_logger = create_operation_logger(request_id, logger)
    op_logger.info(f"Quote request: {request.analysis.room_type.value}, "
                   f"{request.analysis.dimensions.area:.1f} m²")

    service = get_quote_service()
    result = service.calculate_quote(request.analysis, request.user_inputs, request_id=request_id)
    calculation = result.calculation

    breakdown = localize_breakdown(calculation)
    drift = percentage_drift(calculation)
    if drift:
        op_logger.debug(f"Breakdown percentages sum to {100 + drift}")

    op_logger.info(f"Quote ready: {format_btu(calculation.total_btu)}, {len(result.options)} options")

    return CalculateResponse(
        request_id=request_id,
        calculation=calculation,
        breakdown=breakdown,
        grouped_breakdown=group_breakdown_items(breakdown),
        options=result.options,
        legacy=legacy_view(calculation, request.analysis, service.reference),
        summary=CalculationSummary(
            total_btu=format_btu(calculation.total_btu),
            tonnage=format_tonnage(calculation.tonnage),
            price_ranges={o.tier.value: format_price(o.estimated_price) for o in result.options},
        ),
    )
