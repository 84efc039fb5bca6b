"""
Quote Service
Validates a room before it reaches the engine, then runs the load calculator
and the quote option generator in sequence.
"""

import logging
from typing import List, Optional

from domain.calculations.quote_options import QuoteOptionGenerator
from domain.calculations.thermal_load import LoadCalculator
from domain.core.equipment_catalog import EquipmentCatalog, get_default_catalog
from domain.core.models import FrozenModel, QuoteOption, RoomAnalysis, ThermalCalculation, UserInputs
from domain.core.reference_data import ReferenceData, get_default_reference_data
from services.error_types import InvalidInputError
from utils.logging_utils import log_analysis_confidence, log_operation

logger = logging.getLogger(__name__)


class QuoteResult(FrozenModel):
    """Everything one quote request produces"""
    calculation: ThermalCalculation
    options: List[QuoteOption]
    user_inputs: UserInputs


class QuoteService:
    """Entry point used by the request handlers"""

    def __init__(
        self,
        catalog: Optional[EquipmentCatalog] = None,
        reference: Optional[ReferenceData] = None
    ):
        self.catalog = catalog or get_default_catalog()
        self.reference = reference or get_default_reference_data()
        self.calculator = LoadCalculator(self.reference)
        self.generator = QuoteOptionGenerator(self.catalog, self.reference)

    @staticmethod
    def validate_analysis(analysis: Optional[RoomAnalysis]) -> RoomAnalysis:
        """Refuse inputs that would produce a meaningless near-zero quote"""
        if analysis is None:
            raise InvalidInputError("Room analysis is required")

        area = analysis.dimensions.area
        if area <= 0:
            raise InvalidInputError(
                f"Room area must be greater than zero, got {area}",
                {"dimensions": analysis.dimensions.to_json()}
            )
        return analysis

    def calculate_quote(
        self,
        analysis: Optional[RoomAnalysis],
        user_inputs: Optional[UserInputs] = None,
        request_id: Optional[str] = None
    ) -> QuoteResult:
        analysis = self.validate_analysis(analysis)
        if user_inputs is None:
            user_inputs = UserInputs.defaults_for(analysis)

        context = {
            "request_id": request_id,
            "room_type": analysis.room_type.value,
            "area_m2": analysis.dimensions.area,
            "climate_zone": user_inputs.climate_zone.value,
        }
        log_analysis_confidence(analysis.confidence_score, list(analysis.insights), logger)

        with log_operation("calculate_quote", context, logger):
            calculation = self.calculator.calculate(analysis, user_inputs)
            options = self.generator.generate(calculation, user_inputs)

        if not options:
            logger.warning(f"No quote options for {calculation.total_btu:,} BTU/h; "
                           f"catalog v{self.catalog.version} has no units in any tier")

        return QuoteResult(calculation=calculation, options=options, user_inputs=user_inputs)


_service = None


def get_quote_service() -> QuoteService:
    """Shared service instance bound to the default catalog and reference data"""
    global _service
    if _service is None:
        _service = QuoteService()
    return _service


def reset_quote_service(service: Optional[QuoteService] = None):
    """Swap the shared instance (a new catalog path, or a test double)"""
    global _service
    _service = service
