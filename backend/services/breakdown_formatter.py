"""
Breakdown Formatter
Turns the language-neutral breakdown of a ThermalCalculation into the
bilingual (English/Spanish) display lines shown to customers, plus the
small number formatters and the legacy flat view older clients still read.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from domain.core.models import BreakdownItem, FrozenModel, PriceRange, RoomAnalysis, ThermalCalculation
from domain.core.reference_data import ReferenceData, get_default_reference_data
from models.enums import LoadCategory, LoadGroup

logger = logging.getLogger(__name__)


class LocalizedBreakdownItem(FrozenModel):
    category: str
    category_es: str
    value: int
    percentage: int
    description: str
    description_es: str
    group: LoadGroup


class LegacyLoadView(FrozenModel):
    """Flat per-source fields from the first calculator release"""
    base_btu: int
    occupant_btu: int
    equipment_btu: int
    window_btu: int
    sunlight_btu: int
    ceiling_btu: int
    safety_margin: int
    total_btu: int
    tonnage: float


CATEGORY_LABELS: Dict[LoadCategory, Tuple[str, str]] = {
    LoadCategory.wall_transmission: ("Wall Transmission", "Transmision Paredes"),
    LoadCategory.roof_transmission: ("Roof Transmission", "Transmision Techo"),
    LoadCategory.ceiling_transmission: ("Ceiling Transmission", "Transmision Cielo"),
    LoadCategory.window_transmission: ("Window Transmission", "Transmision Ventanas"),
    LoadCategory.solar_gain: ("Solar Gain (Windows)", "Ganancia Solar (Ventanas)"),
    LoadCategory.occupants_sensible: ("Occupants (Sensible)", "Ocupantes (Sensible)"),
    LoadCategory.equipment: ("Equipment", "Equipos"),
    LoadCategory.lighting: ("Lighting", "Iluminacion"),
    LoadCategory.infiltration: ("Infiltration", "Infiltracion"),
    LoadCategory.fresh_air: ("Fresh Air (Ventilation)", "Aire Fresco (Ventilacion)"),
    LoadCategory.latent_load: ("Latent Load (Humidity)", "Carga Latente (Humedad)"),
    LoadCategory.shape_adjustment: ("Shape Adjustment", "Ajuste por Forma"),
    LoadCategory.ceiling_adjustment: ("High Ceiling Adjustment", "Ajuste Techo Alto"),
    LoadCategory.safety_margin: ("Safety Margin", "Margen de Seguridad"),
}


# ============================================
# Descriptions, one builder per category
# ============================================

def _describe_wall(d: Dict[str, Any]) -> Tuple[str, str]:
    text = f"{d['wallArea']:.0f}m² × U={d['uValue']} × ΔT={d['deltaT']:g}°C"
    return text, text


def _describe_roof(d: Dict[str, Any]) -> Tuple[str, str]:
    return f"Exposed roof, {d['area']:.0f}m²", f"Techo expuesto, {d['area']:.0f}m²"


def _describe_ceiling(d: Dict[str, Any]) -> Tuple[str, str]:
    return f"High ceiling ({d['height']:.1f}m)", f"Techo alto ({d['height']:.1f}m)"


def _describe_windows(d: Dict[str, Any]) -> Tuple[str, str]:
    return (f"{d['count']} windows, {d['windowArea']:.1f}m²",
            f"{d['count']} ventanas, {d['windowArea']:.1f}m²")


def _describe_solar(d: Dict[str, Any]) -> Tuple[str, str]:
    sun, sun_es = (", direct sun", ", sol directo") if d.get("directSunlight") else ("", "")
    return (f"SHGC={d['shgc']}, {d['orientation']} facing{sun}",
            f"SHGC={d['shgc']}, orientacion {d['orientation']}{sun_es}")


def _describe_occupants(d: Dict[str, Any]) -> Tuple[str, str]:
    btu = f"{d['btuPerOccupant']:g}"
    return (f"{d['occupants']} people × {btu} BTU",
            f"{d['occupants']} personas × {btu} BTU")


def _describe_equipment(d: Dict[str, Any]) -> Tuple[str, str]:
    lines = d.get("lines") or []
    if not lines:
        return "No significant equipment", "Sin equipos significativos"

    english, spanish = [], []
    for line in lines:
        base = f"{line['quantity']}× {line['type']}"
        if line.get("source") == "detected":
            english.append(f"{base} (detected)")
            spanish.append(f"{base} (detectado)")
        else:
            english.append(base)
            spanish.append(base)
    return ", ".join(english), ", ".join(spanish)


def _describe_lighting(d: Dict[str, Any]) -> Tuple[str, str]:
    density = f"{d['wattsPerSqm']:g}"
    return f"{density} W/m² estimated", f"{density} W/m² estimado"


def _describe_infiltration(d: Dict[str, Any]) -> Tuple[str, str]:
    return f"{d['ach']} ACH, typical construction", f"{d['ach']} ACH, construccion tipica"


def _describe_fresh_air(d: Dict[str, Any]) -> Tuple[str, str]:
    cfm = f"{d['cfmPerPerson']:g}"
    return (f"{cfm} CFM/person × {d['occupants']} people",
            f"{cfm} CFM/persona × {d['occupants']} personas")


def _describe_latent(d: Dict[str, Any]) -> Tuple[str, str]:
    share = f"{d['factor'] * 100:.0f}%"
    return (f"{share} of sensible ({d['climateZone']} climate)",
            f"{share} del sensible (clima {d['climateZone']})")


def _describe_shape(d: Dict[str, Any]) -> Tuple[str, str]:
    extra = f"+{(d['factor'] - 1) * 100:.0f}%"
    return f"{d['shape']} room ({extra})", f"Espacio {d['shape']} ({extra})"


def _describe_ceiling_adjustment(d: Dict[str, Any]) -> Tuple[str, str]:
    return f"Height {d['height']:.1f}m > 3m", f"Altura {d['height']:.1f}m > 3m"


def _describe_safety(d: Dict[str, Any]) -> Tuple[str, str]:
    share = f"{d['margin'] * 100:.0f}%"
    return f"{share} safety factor", f"{share} factor de seguridad"


DESCRIBERS: Dict[LoadCategory, Callable[[Dict[str, Any]], Tuple[str, str]]] = {
    LoadCategory.wall_transmission: _describe_wall,
    LoadCategory.roof_transmission: _describe_roof,
    LoadCategory.ceiling_transmission: _describe_ceiling,
    LoadCategory.window_transmission: _describe_windows,
    LoadCategory.solar_gain: _describe_solar,
    LoadCategory.occupants_sensible: _describe_occupants,
    LoadCategory.equipment: _describe_equipment,
    LoadCategory.lighting: _describe_lighting,
    LoadCategory.infiltration: _describe_infiltration,
    LoadCategory.fresh_air: _describe_fresh_air,
    LoadCategory.latent_load: _describe_latent,
    LoadCategory.shape_adjustment: _describe_shape,
    LoadCategory.ceiling_adjustment: _describe_ceiling_adjustment,
    LoadCategory.safety_margin: _describe_safety,
}


def localize_item(item: BreakdownItem) -> LocalizedBreakdownItem:
    label, label_es = CATEGORY_LABELS[item.category]
    description, description_es = DESCRIBERS[item.category](item.details)
    return LocalizedBreakdownItem(
        category=label,
        category_es=label_es,
        value=item.value,
        percentage=item.percentage,
        description=description,
        description_es=description_es,
        group=item.group,
    )


def localize_breakdown(calculation: ThermalCalculation) -> List[LocalizedBreakdownItem]:
    """Display lines in calculation order"""
    return [localize_item(item) for item in calculation.breakdown]


def group_breakdown_items(items: List[LocalizedBreakdownItem]) -> Dict[str, List[LocalizedBreakdownItem]]:
    """Split display lines into envelope / internal / ventilation / other"""
    grouped: Dict[str, List[LocalizedBreakdownItem]] = {group.value: [] for group in LoadGroup}
    for item in items:
        grouped[item.group.value].append(item)
    return grouped


# ============================================
# Number formatting
# ============================================

def format_btu(btu: float) -> str:
    if btu >= 1000:
        return f"{btu / 1000:.1f}K BTU"
    return f"{btu:g} BTU"


def format_tonnage(tonnage: float) -> str:
    return f"{tonnage:.1f} TR"


def _format_amount(amount: float) -> str:
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.2f}"


def format_price(price: PriceRange) -> str:
    return f"${_format_amount(price.min)} - ${_format_amount(price.max)} {price.currency}"


# ============================================
# Derived views
# ============================================

def legacy_view(
    calculation: ThermalCalculation,
    analysis: RoomAnalysis,
    reference: Optional[ReferenceData] = None
) -> LegacyLoadView:
    """
    Project a calculation onto the old flat fields.

    Nothing here feeds back into the totals; baseBtu in particular is the
    old area rule of thumb and is not part of total_btu.
    """
    reference = reference or get_default_reference_data()
    base_per_sqm = reference.lookup("btu_per_sqm", analysis.room_type)
    solar_gain = calculation.envelope.solar_gain

    sunlight_btu = 0
    if analysis.has_direct_sunlight:
        sunlight_btu = int(solar_gain * reference.direct_sunlight_share + 0.5)

    return LegacyLoadView(
        base_btu=int(analysis.dimensions.area * base_per_sqm + 0.5),
        occupant_btu=calculation.internal.occupants_sensible,
        equipment_btu=calculation.internal.equipment,
        window_btu=calculation.envelope.window_transmission + solar_gain,
        sunlight_btu=sunlight_btu,
        ceiling_btu=calculation.envelope.roof_transmission + calculation.ceiling_adjustment,
        safety_margin=calculation.safety_margin,
        total_btu=calculation.total_btu,
        tonnage=calculation.tonnage,
    )


def percentage_drift(calculation: ThermalCalculation) -> int:
    """
    How far the rounded percentages miss 100.

    Each item is rounded on its own, so up to one point per item is expected;
    zero-total calculations report 0.
    """
    if calculation.total_btu <= 0:
        return 0
    drift = sum(item.percentage for item in calculation.breakdown) - 100
    if abs(drift) > len(calculation.breakdown):
        logger.warning(f"Breakdown percentages drift by {drift} points "
                       f"over {len(calculation.breakdown)} items")
    return drift
