"""
Quote Option Generator
Turns a required capacity into up to three equipment bundles
(economic / recommended / premium) drawn from the equipment catalog.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from domain.calculations.thermal_load import round_half_up
from domain.core.equipment_catalog import EquipmentCatalog, get_default_catalog
from domain.core.models import ACUnit, PriceRange, QuoteOption, ThermalCalculation, UserInputs
from domain.core.reference_data import ReferenceData, get_default_reference_data
from models.enums import OperatingHours, QuoteTier
from services.error_types import NoCandidateUnitsError, log_error_with_context
from utils.logging_utils import timed_operation

logger = logging.getLogger(__name__)


# Target capacity as a share of the required load
TIER_TARGET_FACTORS: Dict[QuoteTier, float] = {
    QuoteTier.economic: 0.9,      # Cheaper units run longer
    QuoteTier.recommended: 1.0,
    QuoteTier.premium: 1.1,       # Headroom
}

# A single unit within this share of the target is good enough on its own
SINGLE_UNIT_MIN_COVERAGE = 0.8


@dataclass(frozen=True)
class TierCopy:
    pros: Tuple[str, ...]
    pros_es: Tuple[str, ...]
    cons: Tuple[str, ...]
    cons_es: Tuple[str, ...]


TIER_COPY: Dict[QuoteTier, TierCopy] = {
    QuoteTier.economic: TierCopy(
        pros=("Lowest upfront cost", "Quick availability", "Simple installation"),
        pros_es=("Menor costo inicial", "Disponibilidad rapida", "Instalacion simple"),
        cons=("Higher energy consumption", "Shorter warranty", "Basic features only"),
        cons_es=("Mayor consumo energetico", "Garantia mas corta", "Solo funciones basicas"),
    ),
    QuoteTier.recommended: TierCopy(
        pros=("Best value for money", "Energy efficient (Inverter)", "Extended warranty",
              "WiFi control included"),
        pros_es=("Mejor relacion costo-beneficio", "Eficiencia energetica (Inverter)",
                 "Garantia extendida", "Control WiFi incluido"),
        cons=("Moderate upfront investment",),
        cons_es=("Inversion inicial moderada",),
    ),
    QuoteTier.premium: TierCopy(
        pros=("Maximum energy efficiency", "Longest warranty (12 years)",
              "Premium features & quiet operation", "Award-winning design",
              "Advanced air purification"),
        pros_es=("Maxima eficiencia energetica", "Garantia mas larga (12 anos)",
                 "Funciones premium y operacion silenciosa", "Diseno premiado",
                 "Purificacion de aire avanzada"),
        cons=("Higher upfront cost", "May have longer delivery times"),
        cons_es=("Mayor costo inicial", "Puede tener tiempos de entrega mas largos"),
    ),
}


def coverage_percentage(total_capacity: int, target_btu: float) -> int:
    if target_btu <= 0:
        return 100
    return min(100, round_half_up(total_capacity / target_btu * 100))


def monthly_operating_cost(
    capacity_btu: float,
    seer: float,
    hours_per_month: float,
    reference: ReferenceData
) -> float:
    """
    Estimated monthly electricity cost in USD

    watts = BTU / EER, with EER approximated as SEER × 0.875
    """
    if seer <= 0:
        return 0.0
    watts = capacity_btu / (seer * reference.seer_to_eer)
    kwh = watts / 1000 * hours_per_month
    return math.floor(kwh * reference.energy_cost_per_kwh * 100 + 0.5) / 100


def best_single_unit(candidates: Sequence[ACUnit], target_btu: float) -> Optional[ACUnit]:
    """Smallest unit reaching 80% of the target; ties go to the cheaper, then earlier unit"""
    order = {unit.id: index for index, unit in enumerate(candidates)}
    suitable = [u for u in candidates if u.btu_capacity >= target_btu * SINGLE_UNIT_MIN_COVERAGE]
    if not suitable:
        return None
    return min(suitable, key=lambda u: (u.btu_capacity, u.price_range.min, order[u.id]))


def largest_unit(candidates: Sequence[ACUnit]) -> ACUnit:
    # max() keeps the first of equal capacities
    return max(candidates, key=lambda u: u.btu_capacity)


def cost_optimized_bundle(candidates: Sequence[ACUnit], target_btu: float) -> List[ACUnit]:
    """
    Greedily take units by capacity-per-dollar until the target is met.
    When the candidates run out first, the bundle is all of them.
    The best-ratio unit is always taken, even for a zero target.
    """
    # sorted() is stable: equal ratios keep catalog order
    ranked = sorted(candidates, key=lambda u: u.capacity_per_dollar, reverse=True)

    selected: List[ACUnit] = []
    accumulated = 0
    for unit in ranked:
        if selected and accumulated >= target_btu:
            break
        selected.append(unit)
        accumulated += unit.btu_capacity
    return selected


def bundle_price(units: Sequence[ACUnit], currency: str = "USD") -> PriceRange:
    return PriceRange(
        min=sum(u.price_range.min for u in units),
        max=sum(u.price_range.max for u in units),
        currency=currency,
        installation_included=all(u.price_range.installation_included for u in units),
    )


class QuoteOptionGenerator:
    """Selects one equipment bundle per efficiency tier"""

    def __init__(
        self,
        catalog: Optional[EquipmentCatalog] = None,
        reference: Optional[ReferenceData] = None
    ):
        self.catalog = catalog or get_default_catalog()
        self.reference = reference or get_default_reference_data()

    @timed_operation("generate_quote_options")
    def generate(
        self,
        calculation: ThermalCalculation,
        user_inputs: Optional[UserInputs] = None
    ) -> List[QuoteOption]:
        """
        Build the quote options for a calculation

        Returns 0-3 options in tier order. A tier with no catalog units is
        left out; that is an expected outcome, not a failure.
        """
        operating_hours = user_inputs.operating_hours if user_inputs else OperatingHours.full_day
        hours_per_month = self.reference.lookup("monthly_operating_hours", operating_hours)

        logger.info(f"Generating quote options for {calculation.total_btu:,} BTU/h "
                    f"from catalog v{self.catalog.version} ({len(self.catalog)} units)")

        options: List[QuoteOption] = []
        for tier in QuoteTier:
            try:
                options.append(self.build_option(tier, calculation.total_btu, hours_per_month))
            except NoCandidateUnitsError as e:
                log_error_with_context(e, {"total_btu": calculation.total_btu,
                                           "catalog_version": self.catalog.version})

        logger.info(f"Generated {len(options)} quote options: "
                    f"{', '.join(o.tier.value for o in options) or 'none'}")
        return options

    def build_option(self, tier: QuoteTier, required_btu: int, hours_per_month: float) -> QuoteOption:
        candidates = self.catalog.units_in_tier(tier)
        if not candidates:
            raise NoCandidateUnitsError(tier.value, {"catalog_version": self.catalog.version})

        target_btu = required_btu * TIER_TARGET_FACTORS[tier]

        single = best_single_unit(candidates, target_btu)
        if single is None:
            # Nothing comes close: best effort with the biggest unit, coverage shows the gap
            single = largest_unit(candidates)
            units = [single]
            logger.info(f"{tier.value}: no unit reaches {SINGLE_UNIT_MIN_COVERAGE:.0%} of "
                        f"{target_btu:,.0f} BTU, falling back to {single.id}")
        else:
            units = cost_optimized_bundle(candidates, target_btu)

        total_capacity = sum(u.btu_capacity for u in units)
        average_seer = sum(u.seer for u in units) / len(units)
        copy = TIER_COPY[tier]

        option = QuoteOption(
            id=f"{tier.value}-{'+'.join(u.id for u in units)}",
            tier=tier,
            units=tuple(units),
            target_btu=round_half_up(target_btu),
            total_btu=total_capacity,
            coverage_percentage=coverage_percentage(total_capacity, target_btu),
            estimated_price=bundle_price(units, self.catalog.currency),
            average_seer=round(average_seer, 1),
            estimated_monthly_cost=monthly_operating_cost(
                total_capacity, average_seer, hours_per_month, self.reference
            ),
            pros=copy.pros,
            pros_es=copy.pros_es,
            cons=copy.cons,
            cons_es=copy.cons_es,
            is_recommended=tier == QuoteTier.recommended,
            best_single_unit=single,
        )

        logger.info(f"{tier.value}: {len(units)} unit(s) {[u.id for u in units]} -> "
                    f"{total_capacity:,} BTU ({option.coverage_percentage}% of {target_btu:,.0f})")
        return option


_generator = None


def get_quote_generator() -> QuoteOptionGenerator:
    """Get or create the shared generator bound to the default catalog"""
    global _generator
    if _generator is None:
        _generator = QuoteOptionGenerator()
    return _generator
