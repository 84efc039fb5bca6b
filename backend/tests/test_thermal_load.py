"""
Tests for the room cooling load calculator
"""

import math

import pytest

from conftest import make_room
from domain.calculations.thermal_load import (
    LoadCalculator,
    calculate_thermal_load,
    percentage_of,
    round_half_up,
)
from domain.core.models import HeatEquipment, UserInputs
from models.enums import ClimateZone, LoadCategory, LoadGroup
from services.error_types import InvalidInputError


def categories(calculation):
    return [item.category for item in calculation.breakdown]


def item(calculation, category):
    matches = [i for i in calculation.breakdown if i.category == category]
    assert len(matches) == 1, f"expected one {category} item"
    return matches[0]


class TestWorkedScenario:
    """4m x 5m x 2.7m tropical office, 4 people, 2 west windows, 4 computers"""

    @pytest.fixture
    def calculation(self, reference, worked_room, worked_inputs):
        return LoadCalculator(reference).calculate(worked_room, worked_inputs)

    def test_envelope_terms(self, calculation):
        assert calculation.envelope.wall_transmission == 1458
        assert calculation.envelope.roof_transmission == 0
        assert calculation.envelope.window_transmission == 144
        assert calculation.envelope.solar_gain == 1101
        assert calculation.envelope.total == 2703

    def test_internal_terms(self, calculation):
        assert calculation.internal.occupants_sensible == 1000
        assert calculation.internal.occupants_latent == 800
        assert calculation.internal.equipment == 1600
        assert calculation.internal.lighting == 682
        assert calculation.internal.total == 3282

    def test_ventilation_terms(self, calculation):
        assert calculation.ventilation.infiltration == 371
        assert calculation.ventilation.fresh_air == 1866
        assert calculation.ventilation.total == 2237

    def test_totals(self, calculation):
        assert calculation.sensible_subtotal == 8222
        assert calculation.latent_load == 2878
        assert calculation.shape_adjustment == 0
        assert calculation.ceiling_adjustment == 0
        assert calculation.safety_margin == 1110
        assert calculation.total_btu == 12210
        assert calculation.tonnage == 1.0
        assert calculation.climate_zone == ClimateZone.tropical

    def test_breakdown_order(self, calculation):
        assert categories(calculation) == [
            LoadCategory.wall_transmission,
            LoadCategory.window_transmission,
            LoadCategory.solar_gain,
            LoadCategory.occupants_sensible,
            LoadCategory.equipment,
            LoadCategory.lighting,
            LoadCategory.infiltration,
            LoadCategory.fresh_air,
            LoadCategory.latent_load,
            LoadCategory.safety_margin,
        ]

    def test_breakdown_groups(self, calculation):
        groups = {i.category: i.group for i in calculation.breakdown}
        assert groups[LoadCategory.solar_gain] == LoadGroup.envelope
        assert groups[LoadCategory.lighting] == LoadGroup.internal
        assert groups[LoadCategory.fresh_air] == LoadGroup.ventilation
        assert groups[LoadCategory.latent_load] == LoadGroup.other
        assert groups[LoadCategory.safety_margin] == LoadGroup.other

    def test_breakdown_sums_to_total(self, calculation):
        assert sum(i.value for i in calculation.breakdown) == calculation.total_btu

    def test_percentages(self, calculation):
        assert item(calculation, LoadCategory.wall_transmission).percentage == 12
        assert item(calculation, LoadCategory.latent_load).percentage == 24
        assert item(calculation, LoadCategory.safety_margin).percentage == 9
        assert sum(i.percentage for i in calculation.breakdown) == 100

    def test_declared_equipment_not_double_counted(self, calculation):
        lines = item(calculation, LoadCategory.equipment).details["lines"]
        assert lines == [
            {"type": "computer", "quantity": 4, "btuPerUnit": 400, "source": "declared"}
        ]

    def test_serializes_to_camel_case(self, calculation):
        data = calculation.to_json()
        assert data["totalBtu"] == 12210
        assert data["envelope"]["wallTransmission"] == 1458
        assert data["envelope"]["total"] == 2703
        assert data["breakdown"][0]["category"] == "wall_transmission"


class TestInputsAndDefaults:

    def test_no_user_inputs_uses_estimated_occupancy(self, reference):
        calculation = LoadCalculator(reference).calculate(make_room(estimatedOccupancy=3))
        assert calculation.internal.occupants_sensible == 750
        assert calculation.climate_zone == ClimateZone.tropical

    def test_occupants_override_estimate(self, reference):
        room = make_room(estimatedOccupancy=10)
        calculation = LoadCalculator(reference).calculate(room, UserInputs(occupants=2))
        assert calculation.internal.occupants_sensible == 500

    def test_missing_analysis_is_rejected(self, reference):
        with pytest.raises(InvalidInputError):
            LoadCalculator(reference).calculate(None)

    def test_detected_equipment_counts_known_tags_only(self, reference):
        room = make_room(detectedEquipment=["computer", "printer", "aquarium"])
        calculation = LoadCalculator(reference).calculate(room, UserInputs())
        assert calculation.internal.equipment == 900
        sources = [line["source"] for line in item(calculation, LoadCategory.equipment).details["lines"]]
        assert sources == ["detected", "detected"]

    def test_unknown_declared_equipment_uses_default_rating(self, reference):
        room = make_room(detectedEquipment=[])
        inputs = UserInputs(heat_generating_equipment=[HeatEquipment(type="aquarium", quantity=2)])
        calculation = LoadCalculator(reference).calculate(room, inputs)
        assert calculation.internal.equipment == 600

    def test_equipment_item_present_when_empty(self, reference):
        room = make_room(detectedEquipment=[])
        calculation = LoadCalculator(reference).calculate(room, UserInputs())
        equipment = item(calculation, LoadCategory.equipment)
        assert equipment.value == 0
        assert equipment.details["lines"] == []

    def test_climate_zone_changes_delta_t_and_latent(self, reference, worked_room, worked_inputs):
        arid = worked_inputs.model_copy(update={"climate_zone": ClimateZone.arid})
        calculation = LoadCalculator(reference).calculate(worked_room, arid)
        assert calculation.envelope.wall_transmission == round_half_up(2.5 * 48.6 * 15)
        assert calculation.latent_load == round_half_up(calculation.sensible_subtotal * 0.10)

    def test_high_load_room_type_uses_brighter_lighting(self, reference):
        calculation = LoadCalculator(reference).calculate(make_room(roomType="server_room"), UserInputs())
        assert calculation.internal.lighting == round_half_up(20 * 15 * 3.412)

    def test_server_room_has_no_fresh_air(self, reference):
        calculation = LoadCalculator(reference).calculate(make_room(roomType="server_room"), UserInputs())
        assert calculation.ventilation.fresh_air == 0


class TestWindows:

    def test_solar_film_uses_tinted_glass(self, reference):
        room = make_room(windows={"count": 2, "orientation": "west", "hasSolarFilm": True})
        calculation = LoadCalculator(reference).calculate(room, UserInputs())
        assert calculation.envelope.solar_gain == round_half_up(4 * 0.60 * 320)

    def test_unknown_orientation_uses_default_radiation(self, reference):
        room = make_room(windows={"count": 2, "orientation": "unknown"})
        calculation = LoadCalculator(reference).calculate(room, UserInputs())
        assert calculation.envelope.solar_gain == round_half_up(4 * 0.86 * 200)

    def test_approximate_area_wins_over_count(self, reference):
        room = make_room(windows={"count": 2, "orientation": "north", "approximateArea": 6.5})
        calculation = LoadCalculator(reference).calculate(room, UserInputs())
        assert calculation.envelope.window_transmission == round_half_up(3.0 * 6.5 * 12)

    def test_no_windows_emits_no_window_items(self, reference):
        room = make_room(windows={"count": 0})
        calculation = LoadCalculator(reference).calculate(room, UserInputs())
        assert LoadCategory.window_transmission not in categories(calculation)
        assert LoadCategory.solar_gain not in categories(calculation)
        assert calculation.envelope.solar_gain == 0


class TestCeilingAndShape:

    def test_exposed_roof(self, reference):
        calculation = LoadCalculator(reference).calculate(make_room(ceilingType="exposed"), UserInputs())
        assert calculation.envelope.roof_transmission == 1080
        assert item(calculation, LoadCategory.roof_transmission).group == LoadGroup.envelope
        assert calculation.ceiling_adjustment == 0

    def test_high_ceiling_above_three_meters(self, reference):
        room = make_room(ceilingType="high", dimensions={"width": 4, "length": 5, "height": 3.5})
        calculation = LoadCalculator(reference).calculate(room, UserInputs())
        assert calculation.envelope.roof_transmission == 120
        assert LoadCategory.ceiling_transmission in categories(calculation)
        assert calculation.ceiling_adjustment == round_half_up(calculation.sensible_subtotal * (1.25 - 1) * 0.5)
        assert LoadCategory.ceiling_adjustment in categories(calculation)

    def test_high_ceiling_at_three_meters_has_no_adjustment(self, reference):
        room = make_room(ceilingType="high", dimensions={"width": 4, "length": 5, "height": 3.0})
        calculation = LoadCalculator(reference).calculate(room, UserInputs())
        assert calculation.envelope.roof_transmission == 120
        assert calculation.ceiling_adjustment == 0
        assert LoadCategory.ceiling_adjustment not in categories(calculation)

    def test_drop_ceiling_adds_nothing(self, reference):
        calculation = LoadCalculator(reference).calculate(make_room(ceilingType="drop"), UserInputs())
        assert calculation.envelope.roof_transmission == 0

    @pytest.mark.parametrize("shape,factor", [("L-shaped", 1.10), ("irregular", 1.15)])
    def test_shape_adjustment(self, reference, shape, factor):
        calculation = LoadCalculator(reference).calculate(make_room(roomShape=shape), UserInputs())
        assert calculation.shape_adjustment == round_half_up(calculation.sensible_subtotal * (factor - 1))
        assert item(calculation, LoadCategory.shape_adjustment).details["shape"] == shape


class TestZeroInputs:

    def test_zero_area_does_not_raise(self, reference):
        room = make_room(
            dimensions={"width": 0, "length": 0, "height": 0},
            windows={"count": 0},
            estimatedOccupancy=0,
            detectedEquipment=[],
        )
        calculation = LoadCalculator(reference).calculate(room)
        assert calculation.total_btu == 0
        assert calculation.tonnage == 0.0
        assert all(i.percentage == 0 for i in calculation.breakdown)

    def test_zero_occupants(self, reference):
        calculation = LoadCalculator(reference).calculate(make_room(), UserInputs(occupants=0))
        assert calculation.internal.occupants_sensible == 0
        assert calculation.ventilation.fresh_air == 0
        assert calculation.total_btu > 0

    def test_percentage_of_zero_total(self):
        assert percentage_of(100, 0) == 0


ROOM_GRID = [
    {},
    {"roomType": "restaurant", "roomShape": "irregular"},
    {"ceilingType": "exposed", "windows": {"count": 5, "orientation": "east"}},
    {"ceilingType": "high", "dimensions": {"width": 7, "length": 9.5, "height": 4.2}},
    {"roomType": "gym", "estimatedOccupancy": 25, "roomShape": "L-shaped"},
    {"dimensions": {"width": 2.3, "length": 3.1, "height": 2.4}, "windows": {"count": 1}},
    {"roomType": "warehouse", "dimensions": {"width": 20, "length": 30, "height": 6}, "ceilingType": "high"},
]


class TestInvariants:

    @pytest.mark.parametrize("overrides", ROOM_GRID)
    @pytest.mark.parametrize("zone", list(ClimateZone))
    def test_breakdown_and_rounding_invariants(self, reference, overrides, zone):
        calculation = LoadCalculator(reference).calculate(make_room(**overrides), UserInputs(climate_zone=zone))

        assert sum(i.value for i in calculation.breakdown) == calculation.total_btu
        assert calculation.tonnage == math.floor(calculation.total_btu / 12000 * 10 + 0.5) / 10

        pre_safety = (calculation.sensible_subtotal + calculation.latent_load
                      + calculation.shape_adjustment + calculation.ceiling_adjustment)
        assert calculation.safety_margin == round_half_up(pre_safety * 0.10)
        assert calculation.total_btu == pre_safety + calculation.safety_margin

        drift = sum(i.percentage for i in calculation.breakdown) - 100
        assert abs(drift) <= len(calculation.breakdown)

    @pytest.mark.parametrize("overrides", ROOM_GRID)
    def test_idempotent(self, reference, overrides):
        calculator = LoadCalculator(reference)
        room = make_room(**overrides)
        assert calculator.calculate(room) == calculator.calculate(room)

    def test_more_occupants_never_lowers_total(self, reference):
        calculator = LoadCalculator(reference)
        room = make_room()
        totals = [calculator.calculate(room, UserInputs(occupants=n)).total_btu for n in range(0, 30)]
        assert totals == sorted(totals)

    def test_module_helper_uses_shared_calculator(self, worked_room, worked_inputs):
        assert calculate_thermal_load(worked_room, worked_inputs).total_btu == 12210
