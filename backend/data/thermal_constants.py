"""
Thermal reference tables for room cooling loads
ASHRAE/ACCA-style simplified constants, metric areas, BTU/h outputs.
Tuned for Central American market conditions.
"""

from models.enums import (
    CeilingType,
    ClimateZone,
    OperatingHours,
    RoomShape,
    RoomType,
    WindowOrientation,
)

REFERENCE_VERSION = "2025.1"

# Base sensible load by room type (BTU/h per m²), used for lighting density and legacy views
BTU_PER_SQM = {
    RoomType.office: 600,
    RoomType.conference: 650,
    RoomType.server_room: 1000,
    RoomType.residential_bedroom: 500,
    RoomType.residential_living: 550,
    RoomType.restaurant: 700,
    RoomType.retail: 650,
    RoomType.warehouse: 400,
    RoomType.gym: 750,
    RoomType.classroom: 600,
    RoomType.other: 600,
}

OCCUPANT_SENSIBLE_BTU = 250
OCCUPANT_LATENT_BTU = 200

# Reference heat output per unit (BTU/h)
EQUIPMENT_BTU = {
    "computer": 400,
    "server": 2000,
    "printer": 500,
    "kitchen_small": 1500,
    "kitchen_large": 5000,
    "lighting_standard": 100,
    "lighting_intense": 300,
}
DEFAULT_EQUIPMENT_BTU = 300

# U-values in BTU/h·m²·°C (imperial U × ~5.678)
WALL_U_VALUES = {
    "block_uninsulated": 2.5,
    "block_insulated": 1.2,
    "drywall_insulated": 0.8,
    "glass_curtain": 4.0,
    "concrete": 2.0,
}
ROOF_U_VALUES = {
    "concrete_uninsulated": 3.0,
    "concrete_insulated": 1.0,
    "metal_uninsulated": 5.0,
    "metal_insulated": 1.5,
    "tile": 2.0,
}
DEFAULT_WALL_TYPE = "block_uninsulated"
EXPOSED_ROOF_TYPE = "concrete_uninsulated"
WINDOW_U_VALUE = 3.0  # Single pane
WINDOW_AREA_PER_WINDOW_M2 = 2.0

# Outdoor - indoor design difference (°C)
DESIGN_TEMP_DIFF = {
    ClimateZone.tropical: 12,     # 35°C outdoor, 23°C indoor
    ClimateZone.subtropical: 10,  # 33°C outdoor, 23°C indoor
    ClimateZone.temperate: 8,     # 30°C outdoor, 22°C indoor
    ClimateZone.arid: 15,         # 40°C outdoor, 25°C indoor
}

WINDOW_SHGC = {
    "clear_single": 0.86,
    "clear_double": 0.76,
    "tinted": 0.60,
    "low_e": 0.40,
    "reflective": 0.25,
}

# Peak solar radiation (BTU/h·m²)
SOLAR_RADIATION = {
    WindowOrientation.north: 80,
    WindowOrientation.south: 200,
    WindowOrientation.east: 280,
    WindowOrientation.west: 320,   # Afternoon sun
    WindowOrientation.unknown: 200,
}

INFILTRATION_ACH = {
    "tight": 0.3,
    "average": 0.5,
    "leaky": 1.0,
}

VENTILATION_CFM_PER_PERSON = {
    RoomType.office: 20,
    RoomType.conference: 20,
    RoomType.server_room: 0,  # Sealed
    RoomType.residential_bedroom: 15,
    RoomType.residential_living: 15,
    RoomType.restaurant: 20,
    RoomType.retail: 20,
    RoomType.warehouse: 10,
    RoomType.gym: 25,
    RoomType.classroom: 15,
    RoomType.other: 20,
}

BTU_PER_CFM_DEGREE_F = 1.08
CUBIC_FEET_PER_CUBIC_METER = 35.31
FAHRENHEIT_PER_CELSIUS_DELTA = 1.8
WATTS_TO_BTU = 3.412

# Ratio of latent to sensible load
LATENT_HEAT_FACTOR = {
    ClimateZone.tropical: 0.35,     # >70% RH
    ClimateZone.subtropical: 0.30,
    ClimateZone.temperate: 0.20,
    ClimateZone.arid: 0.10,         # <40% RH
}

CEILING_FACTORS = {
    CeilingType.standard: 1.0,
    CeilingType.high: 1.25,
    CeilingType.exposed: 1.15,
    CeilingType.drop: 1.0,
}

SHAPE_FACTORS = {
    RoomShape.rectangular: 1.0,
    RoomShape.l_shaped: 1.10,
    RoomShape.irregular: 1.15,
}

SAFETY_MARGIN = 0.10
BTU_PER_TON = 12000

# Operating cost
ENERGY_COST_PER_KWH = 0.18  # USD, Central America estimate
MONTHLY_OPERATING_HOURS = {
    OperatingHours.morning: 130,    # 6h x 22 days
    OperatingHours.afternoon: 130,
    OperatingHours.full_day: 260,   # 12h x 22 days
    OperatingHours.evening: 130,
    OperatingHours.always_on: 720,  # 24h x 30 days
}
SEER_TO_EER = 0.875
