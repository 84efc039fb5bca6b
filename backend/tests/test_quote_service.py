"""
Tests for the quote service wiring and input validation
"""

import logging

import pytest

from conftest import make_room
from domain.core.equipment_catalog import EquipmentCatalog
from services.error_types import InvalidInputError, NoCandidateUnitsError, log_error_with_context
from services.quote_service import QuoteService
from utils.logging_utils import log_analysis_confidence


@pytest.fixture
def service(abc_catalog, reference):
    return QuoteService(catalog=abc_catalog, reference=reference)


class TestQuoteService:

    def test_full_quote(self, service, worked_room, worked_inputs):
        result = service.calculate_quote(worked_room, worked_inputs, request_id="req-1")
        assert result.calculation.total_btu == 12210
        assert [o.coverage_percentage for o in result.options] == [100, 98, 89]
        assert result.user_inputs == worked_inputs

    def test_defaults_when_inputs_missing(self, service):
        result = service.calculate_quote(make_room(estimatedOccupancy=2))
        assert result.user_inputs.occupants == 2
        assert result.calculation.internal.occupants_sensible == 500

    def test_missing_analysis_rejected(self, service):
        with pytest.raises(InvalidInputError):
            service.calculate_quote(None)

    @pytest.mark.parametrize("dimensions", [
        {"width": 0, "length": 5, "height": 2.7},
        {"width": 4, "length": 5, "height": 2.7, "area": 0},
    ])
    def test_zero_area_rejected(self, service, dimensions):
        with pytest.raises(InvalidInputError) as exc_info:
            service.calculate_quote(make_room(dimensions=dimensions))
        assert "area" in exc_info.value.message

    def test_empty_catalog_returns_no_options(self, reference, worked_room):
        service = QuoteService(catalog=EquipmentCatalog([], version="empty"), reference=reference)
        result = service.calculate_quote(worked_room)
        assert result.options == []
        assert result.calculation.total_btu > 0

    def test_result_serializes(self, service, worked_room, worked_inputs):
        data = service.calculate_quote(worked_room, worked_inputs).to_json()
        assert data["calculation"]["totalBtu"] == 12210
        assert data["options"][1]["isRecommended"] is True
        assert data["options"][0]["units"][0]["btuCapacity"] == 12000
        assert data["userInputs"]["climateZone"] == "tropical"


class TestErrorLogging:

    def test_non_critical_errors_log_at_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="services.error_types"):
            log_error_with_context(NoCandidateUnitsError("premium"), {"total_btu": 12210})
        assert caplog.records[-1].levelno == logging.INFO
        assert "premium" in caplog.records[-1].getMessage()

    def test_critical_errors_log_at_error(self, caplog):
        with caplog.at_level(logging.INFO, logger="services.error_types"):
            log_error_with_context(InvalidInputError("bad room"), {})
        assert caplog.records[-1].levelno == logging.ERROR

    def test_error_string_includes_details(self):
        error = InvalidInputError("bad room", {"area": 0})
        assert str(error) == "bad room | Details: {'area': 0}"


class TestConfidenceLogging:

    def test_low_confidence_warns_with_context(self, caplog):
        with caplog.at_level(logging.INFO, logger="utils.logging_utils"):
            log_analysis_confidence(0.4, ["window count guessed"])
        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert record.getMessage() == "[ANALYSIS_CONFIDENCE] 0.40"
        assert record.context == {"confidence_score": 0.4,
                                  "insights": ["window count guessed"],
                                  "insights_count": 1}

    def test_confident_analysis_logs_info(self, caplog):
        with caplog.at_level(logging.INFO, logger="utils.logging_utils"):
            log_analysis_confidence(0.82)
        assert caplog.records[-1].levelno == logging.INFO
        assert caplog.records[-1].context["insights_count"] == 0
