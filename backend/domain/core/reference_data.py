"""
Reference Data for Cooling Load Calculations

Immutable, versioned container for the physical constants the load
calculator and quote generator read. Tables keyed by closed enums must cover
every member; a gap is a configuration bug and fails when the object is
built, not halfway through a calculation.
"""

import logging
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Mapping, Type

from pydantic import model_validator

from data import thermal_constants as tc
from domain.core.models import FrozenModel
from models.enums import (
    CeilingType,
    ClimateZone,
    OperatingHours,
    RoomShape,
    RoomType,
    WindowOrientation,
)
from services.error_types import ReferenceDataMissingError

logger = logging.getLogger(__name__)


# Table name -> enum it must fully cover
ENUM_KEYED_TABLES: Dict[str, Type[Enum]] = {
    "btu_per_sqm": RoomType,
    "ventilation_cfm_per_person": RoomType,
    "design_temp_diff": ClimateZone,
    "latent_heat_factor": ClimateZone,
    "solar_radiation": WindowOrientation,
    "ceiling_factors": CeilingType,
    "shape_factors": RoomShape,
    "monthly_operating_hours": OperatingHours,
}


class ReferenceData(FrozenModel):
    """Physical constants and conversion factors"""
    version: str

    # Room type tables
    btu_per_sqm: Dict[RoomType, float]
    ventilation_cfm_per_person: Dict[RoomType, float]

    # Climate tables
    design_temp_diff: Dict[ClimateZone, float]
    latent_heat_factor: Dict[ClimateZone, float]

    # Envelope
    wall_u_values: Dict[str, float]
    roof_u_values: Dict[str, float]
    default_wall_type: str
    exposed_roof_type: str
    exposed_roof_factor: float = 1.5
    high_ceiling_buffer_factor: float = 0.5
    window_u_value: float
    window_area_per_window_m2: float
    window_shgc: Dict[str, float]
    clear_glass_type: str = "clear_single"
    film_glass_type: str = "tinted"
    solar_radiation: Dict[WindowOrientation, float]

    # Internal gains
    occupant_sensible_btu: float
    occupant_latent_btu: float
    equipment_btu: Dict[str, float]
    default_equipment_btu: float
    lighting_high_load_threshold: float = 600
    lighting_density_high_w_per_sqm: float = 15
    lighting_density_standard_w_per_sqm: float = 10
    watts_to_btu: float

    # Air
    infiltration_ach: Dict[str, float]
    infiltration_level: str = "average"
    btu_per_cfm_degree_f: float
    cubic_feet_per_cubic_meter: float
    fahrenheit_per_celsius_delta: float

    # Adjustments
    ceiling_factors: Dict[CeilingType, float]
    shape_factors: Dict[RoomShape, float]
    high_ceiling_min_height_m: float = 3.0
    high_ceiling_weight: float = 0.5
    safety_margin: float
    btu_per_ton: float

    # Operating cost
    energy_cost_per_kwh: float
    monthly_operating_hours: Dict[OperatingHours, float]
    seer_to_eer: float
    direct_sunlight_share: float = 0.3

    @model_validator(mode="after")
    def check_coverage(self):
        for table_name, enum_cls in ENUM_KEYED_TABLES.items():
            table = getattr(self, table_name)
            for member in enum_cls:
                if member not in table:
                    raise ReferenceDataMissingError(table_name, member.value)

        for table_name, key in (
            ("wall_u_values", self.default_wall_type),
            ("roof_u_values", self.exposed_roof_type),
            ("window_shgc", self.clear_glass_type),
            ("window_shgc", self.film_glass_type),
            ("infiltration_ach", self.infiltration_level),
        ):
            if key not in getattr(self, table_name):
                raise ReferenceDataMissingError(table_name, key)
        return self

    def lookup(self, table_name: str, key: Any) -> float:
        """Read one value from a keyed table, failing loudly on a missing key"""
        table: Mapping[Any, float] = getattr(self, table_name)
        if key not in table:
            shown = key.value if isinstance(key, Enum) else key
            raise ReferenceDataMissingError(table_name, shown)
        return table[key]

    def equipment_reference_btu(self, equipment_type: str) -> float:
        """Open-ended equipment tags fall back to a default rating"""
        return self.equipment_btu.get(equipment_type, self.default_equipment_btu)

    def is_known_equipment(self, equipment_type: str) -> bool:
        return equipment_type in self.equipment_btu


def build_default_reference_data() -> ReferenceData:
    """Assemble ReferenceData from the bundled constant tables"""
    return ReferenceData(
        version=tc.REFERENCE_VERSION,
        btu_per_sqm=tc.BTU_PER_SQM,
        ventilation_cfm_per_person=tc.VENTILATION_CFM_PER_PERSON,
        design_temp_diff=tc.DESIGN_TEMP_DIFF,
        latent_heat_factor=tc.LATENT_HEAT_FACTOR,
        wall_u_values=tc.WALL_U_VALUES,
        roof_u_values=tc.ROOF_U_VALUES,
        default_wall_type=tc.DEFAULT_WALL_TYPE,
        exposed_roof_type=tc.EXPOSED_ROOF_TYPE,
        window_u_value=tc.WINDOW_U_VALUE,
        window_area_per_window_m2=tc.WINDOW_AREA_PER_WINDOW_M2,
        window_shgc=tc.WINDOW_SHGC,
        solar_radiation=tc.SOLAR_RADIATION,
        occupant_sensible_btu=tc.OCCUPANT_SENSIBLE_BTU,
        occupant_latent_btu=tc.OCCUPANT_LATENT_BTU,
        equipment_btu=tc.EQUIPMENT_BTU,
        default_equipment_btu=tc.DEFAULT_EQUIPMENT_BTU,
        watts_to_btu=tc.WATTS_TO_BTU,
        infiltration_ach=tc.INFILTRATION_ACH,
        btu_per_cfm_degree_f=tc.BTU_PER_CFM_DEGREE_F,
        cubic_feet_per_cubic_meter=tc.CUBIC_FEET_PER_CUBIC_METER,
        fahrenheit_per_celsius_delta=tc.FAHRENHEIT_PER_CELSIUS_DELTA,
        ceiling_factors=tc.CEILING_FACTORS,
        shape_factors=tc.SHAPE_FACTORS,
        safety_margin=tc.SAFETY_MARGIN,
        btu_per_ton=tc.BTU_PER_TON,
        energy_cost_per_kwh=tc.ENERGY_COST_PER_KWH,
        monthly_operating_hours=tc.MONTHLY_OPERATING_HOURS,
        seer_to_eer=tc.SEER_TO_EER,
    )


@lru_cache(maxsize=1)
def get_default_reference_data() -> ReferenceData:
    """Shared read-only instance"""
    reference = build_default_reference_data()
    logger.debug(f"Loaded reference data v{reference.version}")
    return reference
