"""
Enums for the quote engine models to ensure type safety and consistency
"""

from enum import Enum


class RoomType(str, Enum):
    """Room categories produced by the room analyzer"""
    office = 'office'
    conference = 'conference'
    server_room = 'server_room'
    residential_bedroom = 'residential_bedroom'
    residential_living = 'residential_living'
    restaurant = 'restaurant'
    retail = 'retail'
    warehouse = 'warehouse'
    gym = 'gym'
    classroom = 'classroom'
    other = 'other'


class WindowOrientation(str, Enum):
    """Dominant facing of the room's glazing"""
    north = 'north'
    south = 'south'
    east = 'east'
    west = 'west'
    unknown = 'unknown'


class CeilingType(str, Enum):
    standard = 'standard'
    high = 'high'
    exposed = 'exposed'      # Roof slab directly above the room
    drop = 'drop'


class RoomShape(str, Enum):
    rectangular = 'rectangular'
    l_shaped = 'L-shaped'
    irregular = 'irregular'


class ClimateZone(str, Enum):
    """Design climate buckets for the target market"""
    tropical = 'tropical'
    subtropical = 'subtropical'
    temperate = 'temperate'
    arid = 'arid'


class OperatingHours(str, Enum):
    """How long the equipment runs, used for operating cost estimates"""
    morning = 'morning'
    afternoon = 'afternoon'
    full_day = 'full_day'
    evening = 'evening'
    always_on = '24_7'


class BudgetPreference(str, Enum):
    economic = 'economic'
    balanced = 'balanced'
    premium = 'premium'


class EquipmentKind(str, Enum):
    """Catalog unit type"""
    mini_split = 'mini_split'
    central = 'central'
    cassette = 'cassette'
    ducted = 'ducted'
    portable = 'portable'


class EnergyLabel(str, Enum):
    A = 'A'
    B = 'B'
    C = 'C'
    D = 'D'


class QuoteTier(str, Enum):
    """Price/quality tier of a quote option"""
    economic = 'economic'
    recommended = 'recommended'
    premium = 'premium'


class LoadGroup(str, Enum):
    """Grouping of breakdown items for display"""
    envelope = 'envelope'
    internal = 'internal'
    ventilation = 'ventilation'
    other = 'other'


class LoadCategory(str, Enum):
    """Language-neutral tag of a breakdown line"""
    wall_transmission = 'wall_transmission'
    roof_transmission = 'roof_transmission'
    ceiling_transmission = 'ceiling_transmission'
    window_transmission = 'window_transmission'
    solar_gain = 'solar_gain'
    occupants_sensible = 'occupants_sensible'
    equipment = 'equipment'
    lighting = 'lighting'
    infiltration = 'infiltration'
    fresh_air = 'fresh_air'
    latent_load = 'latent_load'
    shape_adjustment = 'shape_adjustment'
    ceiling_adjustment = 'ceiling_adjustment'
    safety_margin = 'safety_margin'
