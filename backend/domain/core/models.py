"""
Value objects for the room cooling quote engine
Everything here is immutable once built and serializes straight to the
camelCase JSON the browser and chat layers exchange.
"""

from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from models.enums import (
    BudgetPreference,
    CeilingType,
    ClimateZone,
    EnergyLabel,
    EquipmentKind,
    LoadCategory,
    LoadGroup,
    OperatingHours,
    QuoteTier,
    RoomShape,
    RoomType,
    WindowOrientation,
)


class FrozenModel(BaseModel):
    """Base for all engine value objects"""
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_json(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


# ============================================
# Engine inputs
# ============================================

class RoomDimensions(FrozenModel):
    """Room geometry in meters"""
    width: float = Field(..., ge=0, description="Width in meters")
    length: float = Field(..., ge=0, description="Length in meters")
    height: float = Field(..., ge=0, description="Ceiling height in meters")
    area: float = Field(..., ge=0, description="Floor area in m² (width × length unless supplied)")
    volume: float = Field(..., ge=0, description="Volume in m³ (width × length × height)")

    @model_validator(mode="before")
    @classmethod
    def fill_derived_measures(cls, data: Any) -> Any:
        """Derive area and volume when the analyzer did not report them"""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        width, length, height = data.get("width"), data.get("length"), data.get("height")
        if data.get("area") is None and width is not None and length is not None:
            data["area"] = float(width) * float(length)
        if data.get("volume") is None and None not in (width, length, height):
            data["volume"] = float(width) * float(length) * float(height)
        return data

    @property
    def perimeter(self) -> float:
        return 2 * (self.width + self.length)

    @property
    def wall_area(self) -> float:
        return self.perimeter * self.height


class WindowAnalysis(FrozenModel):
    count: int = Field(0, ge=0, description="Number of windows")
    orientation: WindowOrientation = Field(WindowOrientation.unknown, description="Dominant facing")
    has_solar_film: bool = Field(False, description="Tinted or solar film present")
    approximate_area: Optional[float] = Field(None, ge=0, description="Glazed area in m², if known")

    def glazed_area(self, area_per_window: float) -> float:
        """Glazed area, falling back to a per-window default when the area is unknown"""
        if self.approximate_area:
            return self.approximate_area
        return self.count * area_per_window


class RoomAnalysis(FrozenModel):
    """Room facts produced by the vision/text analyzer"""
    dimensions: RoomDimensions
    windows: WindowAnalysis = Field(default_factory=WindowAnalysis)
    room_type: RoomType = RoomType.other
    ceiling_type: CeilingType = CeilingType.standard
    has_direct_sunlight: bool = False
    room_shape: RoomShape = RoomShape.rectangular
    estimated_occupancy: int = Field(0, ge=0)
    detected_equipment: Tuple[str, ...] = ()
    confidence_score: float = Field(0.5, ge=0, le=1, description="Analyzer confidence 0-1")
    insights: Tuple[str, ...] = ()

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "dimensions": {"width": 4, "length": 5, "height": 2.7},
                "windows": {"count": 2, "orientation": "west", "hasSolarFilm": False},
                "roomType": "office",
                "ceilingType": "standard",
                "hasDirectSunlight": True,
                "roomShape": "rectangular",
                "estimatedOccupancy": 4,
                "detectedEquipment": ["computer"],
                "confidenceScore": 0.82,
            }
        }
    )


class HeatEquipment(FrozenModel):
    """A line of heat-generating equipment declared by the user"""
    type: str = Field(..., description="computer, server, printer, kitchen_small, ...")
    quantity: int = Field(1, ge=0)
    btu_per_unit: Optional[float] = Field(None, ge=0, description="Value shown to the user, informational")


class UserInputs(FrozenModel):
    """User answers; every field is optional"""
    occupants: Optional[int] = Field(None, ge=0, description="Overrides the estimated occupancy")
    operating_hours: OperatingHours = OperatingHours.full_day
    heat_generating_equipment: Tuple[HeatEquipment, ...] = ()
    climate_zone: ClimateZone = ClimateZone.tropical
    budget_preference: BudgetPreference = BudgetPreference.balanced

    @field_validator("operating_hours", "climate_zone", "budget_preference", mode="before")
    @classmethod
    def none_means_default(cls, v, info):
        if v is None:
            return cls.model_fields[info.field_name].default
        return v

    @field_validator("heat_generating_equipment", mode="before")
    @classmethod
    def none_means_empty(cls, v):
        return () if v is None else v

    def resolve_occupants(self, analysis: RoomAnalysis) -> int:
        if self.occupants is not None:
            return self.occupants
        return analysis.estimated_occupancy

    @classmethod
    def defaults_for(cls, analysis: RoomAnalysis) -> "UserInputs":
        """Inputs used when the caller sends none at all"""
        return cls(occupants=analysis.estimated_occupancy)


# ============================================
# Catalog
# ============================================

class PriceRange(FrozenModel):
    min: float = Field(..., ge=0)
    max: float = Field(..., ge=0)
    currency: str = "USD"
    installation_included: bool = False

    @model_validator(mode="after")
    def check_bounds(self):
        if self.max < self.min:
            raise ValueError(f"price max {self.max} is below min {self.min}")
        return self


class ACUnit(FrozenModel):
    """A purchasable unit from the equipment catalog"""
    id: str
    brand: str
    model: str
    btu_capacity: int = Field(..., gt=0)
    tonnage: float = Field(..., gt=0)
    seer: float = Field(..., gt=0, description="Seasonal efficiency rating")
    kind: EquipmentKind = Field(EquipmentKind.mini_split, alias="type")
    features: Tuple[str, ...] = ()
    price_range: PriceRange
    warranty: str = ""
    energy_rating: EnergyLabel = EnergyLabel.C
    image_url: Optional[str] = None

    @field_validator("price_range")
    @classmethod
    def price_must_be_positive(cls, v: PriceRange) -> PriceRange:
        if v.min <= 0:
            raise ValueError("price_range.min must be positive")
        return v

    @property
    def capacity_per_dollar(self) -> float:
        return self.btu_capacity / self.price_range.min

    @property
    def display_name(self) -> str:
        return f"{self.brand} {self.model}"


# ============================================
# Engine outputs
# ============================================

class BreakdownItem(FrozenModel):
    """One line of the itemized load; display strings are built elsewhere"""
    category: LoadCategory
    group: LoadGroup
    value: int
    percentage: int = 0
    details: Dict[str, Any] = Field(default_factory=dict)


class EnvelopeLoads(FrozenModel):
    wall_transmission: int = 0
    roof_transmission: int = 0
    window_transmission: int = 0
    solar_gain: int = 0

    @computed_field
    @property
    def total(self) -> int:
        return self.wall_transmission + self.roof_transmission + self.window_transmission + self.solar_gain


class InternalLoads(FrozenModel):
    occupants_sensible: int = 0
    occupants_latent: int = 0   # Displayed only, not part of total
    equipment: int = 0
    lighting: int = 0

    @computed_field
    @property
    def total(self) -> int:
        return self.occupants_sensible + self.equipment + self.lighting


class VentilationLoads(FrozenModel):
    infiltration: int = 0
    fresh_air: int = 0

    @computed_field
    @property
    def total(self) -> int:
        return self.infiltration + self.fresh_air


class ThermalCalculation(FrozenModel):
    """Required cooling capacity with its itemized breakdown"""
    envelope: EnvelopeLoads
    internal: InternalLoads
    ventilation: VentilationLoads
    sensible_subtotal: int
    latent_load: int
    shape_adjustment: int = 0
    ceiling_adjustment: int = 0
    safety_margin: int
    total_btu: int
    tonnage: float
    climate_zone: ClimateZone
    breakdown: Tuple[BreakdownItem, ...]
    reference_version: str = ""


class QuoteOption(FrozenModel):
    """An equipment bundle for one price/quality tier"""
    id: str
    tier: QuoteTier
    units: Tuple[ACUnit, ...]
    target_btu: int
    total_btu: int
    coverage_percentage: int = Field(..., ge=0, le=100)
    estimated_price: PriceRange
    average_seer: float
    estimated_monthly_cost: float
    pros: Tuple[str, ...] = ()
    pros_es: Tuple[str, ...] = ()
    cons: Tuple[str, ...] = ()
    cons_es: Tuple[str, ...] = ()
    is_recommended: bool = False
    best_single_unit: Optional[ACUnit] = None
