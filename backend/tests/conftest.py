"""
Pytest configuration and fixtures
"""
import pytest

from domain.core.equipment_catalog import EquipmentCatalog
from domain.core.models import HeatEquipment, RoomAnalysis, UserInputs
from domain.core.reference_data import build_default_reference_data
from models.enums import ClimateZone, OperatingHours


def make_unit(unit_id: str, seer: float, capacity: int, price: float, **overrides) -> dict:
    """Catalog unit document in wire (camelCase) form"""
    unit = {
        "id": unit_id,
        "brand": "Test",
        "model": unit_id.upper(),
        "btuCapacity": capacity,
        "tonnage": round(capacity / 12000, 2),
        "seer": seer,
        "type": "mini_split",
        "features": [],
        "priceRange": {"min": price, "max": price + 100, "installationIncluded": False},
        "warranty": "1 year",
        "energyRating": "B",
    }
    unit.update(overrides)
    return unit


def make_room(**overrides) -> RoomAnalysis:
    """4m x 5m x 2.7m office with two west windows; overrides replace top-level fields"""
    data = {
        "dimensions": {"width": 4, "length": 5, "height": 2.7},
        "windows": {"count": 2, "orientation": "west", "hasSolarFilm": False},
        "roomType": "office",
        "ceilingType": "standard",
        "hasDirectSunlight": True,
        "roomShape": "rectangular",
        "estimatedOccupancy": 4,
        "detectedEquipment": ["computer"],
        "confidenceScore": 0.8,
    }
    data.update(overrides)
    return RoomAnalysis.model_validate(data)


@pytest.fixture
def reference():
    return build_default_reference_data()


@pytest.fixture
def worked_room() -> RoomAnalysis:
    return make_room()


@pytest.fixture
def worked_inputs() -> UserInputs:
    return UserInputs(
        occupants=4,
        operating_hours=OperatingHours.full_day,
        heat_generating_equipment=(HeatEquipment(type="computer", quantity=4, btu_per_unit=400),),
        climate_zone=ClimateZone.tropical,
    )


@pytest.fixture
def abc_catalog() -> EquipmentCatalog:
    """One 12000 BTU unit per tier"""
    return EquipmentCatalog.from_document({
        "version": "test",
        "units": [
            make_unit("A", seer=14, capacity=12000, price=400),
            make_unit("B", seer=18, capacity=12000, price=700),
            make_unit("C", seer=22, capacity=12000, price=1000),
        ],
    })
