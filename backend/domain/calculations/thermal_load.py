"""
Room Cooling Load Calculator
Additive envelope + internal + ventilation model with latent, shape,
ceiling and safety adjustments. Produces the required capacity in BTU/h and
an itemized breakdown in a fixed, reproducible order.
"""

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from domain.core.models import (
    BreakdownItem,
    EnvelopeLoads,
    InternalLoads,
    RoomAnalysis,
    ThermalCalculation,
    UserInputs,
    VentilationLoads,
)
from domain.core.reference_data import ReferenceData, get_default_reference_data
from models.enums import CeilingType, ClimateZone, LoadCategory, LoadGroup
from services.error_types import InvalidInputError

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 away from zero for positive loads"""
    return int(math.floor(value + 0.5))


def round_to_tenth(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def percentage_of(value: int, total: int) -> int:
    """Share of the final total; zero when there is no total"""
    if total <= 0:
        return 0
    return round_half_up(value / total * 100)


class LoadCalculator:
    """
    Pure function of (RoomAnalysis, UserInputs, ReferenceData).

    Step order is fixed: envelope, internal, ventilation, latent,
    shape/ceiling, safety margin. Every component is rounded to whole BTU
    before it is summed, so the breakdown values add up to total_btu exactly.
    """

    def __init__(self, reference: Optional[ReferenceData] = None):
        self.reference = reference or get_default_reference_data()

    def calculate(
        self,
        analysis: RoomAnalysis,
        user_inputs: Optional[UserInputs] = None
    ) -> ThermalCalculation:
        """
        Calculate the cooling requirement for one room

        Args:
            analysis: Room facts from the analyzer
            user_inputs: User answers; defaults are used when omitted

        Returns:
            ThermalCalculation with subtotals and the itemized breakdown
        """
        if analysis is None:
            raise InvalidInputError("No room analysis provided")
        if user_inputs is None:
            user_inputs = UserInputs.defaults_for(analysis)

        ref = self.reference
        climate_zone = user_inputs.climate_zone or ClimateZone.tropical
        delta_t = ref.lookup("design_temp_diff", climate_zone)
        occupants = user_inputs.resolve_occupants(analysis)

        logger.info(f"Cooling load: {analysis.dimensions.area:.1f} m², {analysis.room_type.value}, "
                    f"{climate_zone.value} (ΔT={delta_t}°C), {occupants} occupants")

        breakdown: List[BreakdownItem] = []

        envelope = self._envelope_loads(analysis, delta_t, breakdown)
        internal = self._internal_loads(analysis, user_inputs, occupants, breakdown)
        ventilation = self._ventilation_loads(analysis, occupants, delta_t, breakdown)

        sensible_subtotal = envelope.total + internal.total + ventilation.total
        logger.debug(f"Sensible subtotal: envelope={envelope.total}, internal={internal.total}, "
                     f"ventilation={ventilation.total} -> {sensible_subtotal}")

        latent_load = self._latent_load(sensible_subtotal, climate_zone, breakdown)
        shape_adjustment, ceiling_adjustment = self._shape_and_ceiling(
            analysis, sensible_subtotal, breakdown
        )

        pre_safety_total = sensible_subtotal + latent_load + shape_adjustment + ceiling_adjustment
        safety_margin = round_half_up(pre_safety_total * ref.safety_margin)
        breakdown.append(BreakdownItem(
            category=LoadCategory.safety_margin,
            group=LoadGroup.other,
            value=safety_margin,
            details={"margin": ref.safety_margin}
        ))

        total_btu = pre_safety_total + safety_margin
        tonnage = round_to_tenth(total_btu / ref.btu_per_ton)

        # Percentages against the final total; they are rounded independently
        # and may not add up to exactly 100
        breakdown = [
            item.model_copy(update={"percentage": percentage_of(item.value, total_btu)})
            for item in breakdown
        ]

        calculation = ThermalCalculation(
            envelope=envelope,
            internal=internal,
            ventilation=ventilation,
            sensible_subtotal=sensible_subtotal,
            latent_load=latent_load,
            shape_adjustment=shape_adjustment,
            ceiling_adjustment=ceiling_adjustment,
            safety_margin=safety_margin,
            total_btu=total_btu,
            tonnage=tonnage,
            climate_zone=climate_zone,
            breakdown=tuple(breakdown),
            reference_version=ref.version,
        )

        logger.info(f"Cooling load complete: {total_btu:,} BTU/h ({tonnage:.1f} TR), "
                    f"{len(breakdown)} breakdown items")
        if total_btu == 0:
            logger.warning("Cooling load is zero; room area and occupancy are probably missing")

        return calculation

    # ============================================
    # 1. Envelope
    # ============================================

    def _envelope_loads(
        self,
        analysis: RoomAnalysis,
        delta_t: float,
        breakdown: List[BreakdownItem]
    ) -> EnvelopeLoads:
        ref = self.reference
        dims = analysis.dimensions

        # Walls: construction is not an input yet, assume uninsulated block
        wall_u = ref.lookup("wall_u_values", ref.default_wall_type)
        wall_area = dims.wall_area
        wall_transmission = round_half_up(wall_u * wall_area * delta_t)
        breakdown.append(BreakdownItem(
            category=LoadCategory.wall_transmission,
            group=LoadGroup.envelope,
            value=wall_transmission,
            details={"wallArea": wall_area, "uValue": wall_u, "deltaT": delta_t,
                     "wallType": ref.default_wall_type}
        ))

        roof_transmission = 0
        if analysis.ceiling_type == CeilingType.exposed:
            roof_u = ref.lookup("roof_u_values", ref.exposed_roof_type)
            roof_transmission = round_half_up(roof_u * dims.area * delta_t * ref.exposed_roof_factor)
            breakdown.append(BreakdownItem(
                category=LoadCategory.roof_transmission,
                group=LoadGroup.envelope,
                value=roof_transmission,
                details={"area": dims.area, "uValue": roof_u, "exposureFactor": ref.exposed_roof_factor}
            ))
        elif analysis.ceiling_type == CeilingType.high:
            # Buffered interior volume under a tall roof, not an exterior roof
            roof_transmission = round_half_up(dims.area * delta_t * ref.high_ceiling_buffer_factor)
            breakdown.append(BreakdownItem(
                category=LoadCategory.ceiling_transmission,
                group=LoadGroup.envelope,
                value=roof_transmission,
                details={"area": dims.area, "height": dims.height}
            ))

        window_area = analysis.windows.glazed_area(ref.window_area_per_window_m2)
        window_transmission = round_half_up(ref.window_u_value * window_area * delta_t)

        glass_type = ref.film_glass_type if analysis.windows.has_solar_film else ref.clear_glass_type
        shgc = ref.lookup("window_shgc", glass_type)
        radiation = ref.lookup("solar_radiation", analysis.windows.orientation)
        solar_gain = round_half_up(window_area * shgc * radiation)

        if window_area > 0:
            breakdown.append(BreakdownItem(
                category=LoadCategory.window_transmission,
                group=LoadGroup.envelope,
                value=window_transmission,
                details={"count": analysis.windows.count, "windowArea": window_area,
                         "uValue": ref.window_u_value}
            ))
            breakdown.append(BreakdownItem(
                category=LoadCategory.solar_gain,
                group=LoadGroup.envelope,
                value=solar_gain,
                details={"shgc": shgc, "glassType": glass_type,
                         "orientation": analysis.windows.orientation.value,
                         "directSunlight": analysis.has_direct_sunlight}
            ))

        envelope = EnvelopeLoads(
            wall_transmission=wall_transmission,
            roof_transmission=roof_transmission,
            window_transmission=window_transmission,
            solar_gain=solar_gain,
        )
        logger.debug(f"Envelope: walls={wall_transmission}, roof={roof_transmission}, "
                     f"windows={window_transmission}, solar={solar_gain}")
        return envelope

    # ============================================
    # 2. Internal gains
    # ============================================

    def _internal_loads(
        self,
        analysis: RoomAnalysis,
        user_inputs: UserInputs,
        occupants: int,
        breakdown: List[BreakdownItem]
    ) -> InternalLoads:
        ref = self.reference

        occupants_sensible = round_half_up(occupants * ref.occupant_sensible_btu)
        occupants_latent = round_half_up(occupants * ref.occupant_latent_btu)
        breakdown.append(BreakdownItem(
            category=LoadCategory.occupants_sensible,
            group=LoadGroup.internal,
            value=occupants_sensible,
            details={"occupants": occupants, "btuPerOccupant": ref.occupant_sensible_btu}
        ))

        equipment_btu, lines = self._equipment_load(analysis, user_inputs)
        breakdown.append(BreakdownItem(
            category=LoadCategory.equipment,
            group=LoadGroup.internal,
            value=equipment_btu,
            details={"lines": lines}
        ))

        base_load = ref.lookup("btu_per_sqm", analysis.room_type)
        if base_load > ref.lighting_high_load_threshold:
            watts_per_sqm = ref.lighting_density_high_w_per_sqm
        else:
            watts_per_sqm = ref.lighting_density_standard_w_per_sqm
        lighting = round_half_up(analysis.dimensions.area * watts_per_sqm * ref.watts_to_btu)
        breakdown.append(BreakdownItem(
            category=LoadCategory.lighting,
            group=LoadGroup.internal,
            value=lighting,
            details={"wattsPerSqm": watts_per_sqm, "area": analysis.dimensions.area}
        ))

        internal = InternalLoads(
            occupants_sensible=occupants_sensible,
            occupants_latent=occupants_latent,
            equipment=equipment_btu,
            lighting=lighting,
        )
        logger.debug(f"Internal: occupants={occupants_sensible} (+{occupants_latent} latent), "
                     f"equipment={equipment_btu}, lighting={lighting}")
        return internal

    def _equipment_load(
        self,
        analysis: RoomAnalysis,
        user_inputs: UserInputs
    ) -> Tuple[int, List[Dict[str, Any]]]:
        """Declared equipment plus detected equipment the user did not already list"""
        ref = self.reference
        total = 0.0
        lines: List[Dict[str, Any]] = []
        declared_types = set()

        for equipment in user_inputs.heat_generating_equipment:
            btu_per_unit = ref.equipment_reference_btu(equipment.type)
            total += btu_per_unit * equipment.quantity
            declared_types.add(equipment.type)
            lines.append({"type": equipment.type, "quantity": equipment.quantity,
                          "btuPerUnit": btu_per_unit, "source": "declared"})

        for tag in analysis.detected_equipment:
            if tag in declared_types or not ref.is_known_equipment(tag):
                continue
            btu_per_unit = ref.equipment_reference_btu(tag)
            total += btu_per_unit
            lines.append({"type": tag, "quantity": 1, "btuPerUnit": btu_per_unit, "source": "detected"})

        return round_half_up(total), lines

    # ============================================
    # 3. Ventilation & infiltration
    # ============================================

    def _ventilation_loads(
        self,
        analysis: RoomAnalysis,
        occupants: int,
        delta_t: float,
        breakdown: List[BreakdownItem]
    ) -> VentilationLoads:
        ref = self.reference
        delta_t_f = delta_t * ref.fahrenheit_per_celsius_delta

        ach = ref.lookup("infiltration_ach", ref.infiltration_level)
        infiltration_cfm = analysis.dimensions.volume * ach * ref.cubic_feet_per_cubic_meter / 60
        infiltration = round_half_up(infiltration_cfm * ref.btu_per_cfm_degree_f * delta_t_f)
        breakdown.append(BreakdownItem(
            category=LoadCategory.infiltration,
            group=LoadGroup.ventilation,
            value=infiltration,
            details={"ach": ach, "level": ref.infiltration_level, "cfm": round(infiltration_cfm, 1)}
        ))

        cfm_per_person = ref.lookup("ventilation_cfm_per_person", analysis.room_type)
        fresh_air_cfm = occupants * cfm_per_person
        fresh_air = round_half_up(fresh_air_cfm * ref.btu_per_cfm_degree_f * delta_t_f)
        breakdown.append(BreakdownItem(
            category=LoadCategory.fresh_air,
            group=LoadGroup.ventilation,
            value=fresh_air,
            details={"cfmPerPerson": cfm_per_person, "occupants": occupants}
        ))

        logger.debug(f"Ventilation: infiltration={infiltration} ({infiltration_cfm:.1f} CFM), "
                     f"fresh air={fresh_air} ({fresh_air_cfm:.0f} CFM)")
        return VentilationLoads(infiltration=infiltration, fresh_air=fresh_air)

    # ============================================
    # 4-5. Latent, shape and ceiling
    # ============================================

    def _latent_load(
        self,
        sensible_subtotal: int,
        climate_zone: ClimateZone,
        breakdown: List[BreakdownItem]
    ) -> int:
        factor = self.reference.lookup("latent_heat_factor", climate_zone)
        latent_load = round_half_up(sensible_subtotal * factor)
        breakdown.append(BreakdownItem(
            category=LoadCategory.latent_load,
            group=LoadGroup.other,
            value=latent_load,
            details={"factor": factor, "climateZone": climate_zone.value}
        ))
        return latent_load

    def _shape_and_ceiling(
        self,
        analysis: RoomAnalysis,
        sensible_subtotal: int,
        breakdown: List[BreakdownItem]
    ) -> Tuple[int, int]:
        ref = self.reference

        shape_adjustment = 0
        shape_factor = ref.lookup("shape_factors", analysis.room_shape)
        if shape_factor > 1.0:
            shape_adjustment = round_half_up(sensible_subtotal * (shape_factor - 1))
            breakdown.append(BreakdownItem(
                category=LoadCategory.shape_adjustment,
                group=LoadGroup.other,
                value=shape_adjustment,
                details={"shape": analysis.room_shape.value, "factor": shape_factor}
            ))

        # Half weight: the high-ceiling roof term already covers part of this
        ceiling_adjustment = 0
        height = analysis.dimensions.height
        if analysis.ceiling_type == CeilingType.high and height > ref.high_ceiling_min_height_m:
            ceiling_factor = ref.lookup("ceiling_factors", CeilingType.high)
            ceiling_adjustment = round_half_up(
                sensible_subtotal * (ceiling_factor - 1) * ref.high_ceiling_weight
            )
            breakdown.append(BreakdownItem(
                category=LoadCategory.ceiling_adjustment,
                group=LoadGroup.other,
                value=ceiling_adjustment,
                details={"height": height, "factor": ceiling_factor, "weight": ref.high_ceiling_weight}
            ))

        return shape_adjustment, ceiling_adjustment


# Module-level calculator instance
_calculator = None


def get_load_calculator() -> LoadCalculator:
    """Get or create the shared calculator (reference data is read-only)"""
    global _calculator
    if _calculator is None:
        _calculator = LoadCalculator()
    return _calculator


def calculate_thermal_load(
    analysis: RoomAnalysis,
    user_inputs: Optional[UserInputs] = None
) -> ThermalCalculation:
    """Convenience wrapper around the shared calculator"""
    return get_load_calculator().calculate(analysis, user_inputs)
