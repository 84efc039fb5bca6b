"""
Equipment Catalog loader and indexer.
"""

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from domain.core.models import ACUnit
from models.enums import QuoteTier
from services.error_types import CatalogError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[2] / "data" / "ac_catalog.json"

# SEER bands per tier: economic < 17 <= recommended < 21 <= premium
RECOMMENDED_MIN_SEER = 17
PREMIUM_MIN_SEER = 21


def tier_for_seer(seer: float) -> QuoteTier:
    """Bucket a unit into a quote tier by its efficiency rating"""
    if seer < RECOMMENDED_MIN_SEER:
        return QuoteTier.economic
    if seer < PREMIUM_MIN_SEER:
        return QuoteTier.recommended
    return QuoteTier.premium


class EquipmentCatalog:
    """
    Read-only set of purchasable units, indexed by tier.
    Unit order is the document order and is used as the final tie-break
    during selection.
    """

    def __init__(self, units: Iterable[ACUnit], version: str = "unversioned", currency: str = "USD"):
        self.version = version
        self.currency = currency
        self.units: List[ACUnit] = list(units)
        self._by_id: Dict[str, ACUnit] = {}
        self._by_tier: Dict[QuoteTier, List[ACUnit]] = defaultdict(list)
        self._build_indexes()

    @classmethod
    def load_from_json(cls, filepath: Union[str, Path]) -> "EquipmentCatalog":
        """
        Load a catalog document: {"version": ..., "currency": ..., "units": [...]}
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise CatalogError(f"Catalog file not found: {filepath}")

        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Catalog file is not valid JSON: {filepath}", {"error": str(e)}) from e

        return cls.from_document(document, source=str(filepath))

    @classmethod
    def from_document(cls, document: Dict, source: str = "<memory>") -> "EquipmentCatalog":
        raw_units = document.get("units")
        if not isinstance(raw_units, list):
            raise CatalogError(f"Catalog {source} has no 'units' list")

        units = []
        for index, raw in enumerate(raw_units):
            try:
                units.append(ACUnit.model_validate(raw))
            except ValidationError as e:
                raise CatalogError(
                    f"Invalid unit #{index} in catalog {source}",
                    {"unit_id": raw.get("id") if isinstance(raw, dict) else None, "errors": e.errors()}
                ) from e

        catalog = cls(units, version=document.get("version", "unversioned"),
                      currency=document.get("currency", "USD"))
        logger.info(f"Loaded catalog v{catalog.version} from {source}: {len(catalog.units)} units")
        return catalog

    def _build_indexes(self):
        self._by_id.clear()
        self._by_tier.clear()

        for unit in self.units:
            if unit.id in self._by_id:
                raise CatalogError(f"Duplicate unit id in catalog: {unit.id}")
            self._by_id[unit.id] = unit
            self._by_tier[tier_for_seer(unit.seer)].append(unit)

    def get(self, unit_id: str) -> Optional[ACUnit]:
        return self._by_id.get(unit_id)

    def units_in_tier(self, tier: QuoteTier) -> List[ACUnit]:
        """Units of one tier, in catalog order"""
        return list(self._by_tier.get(tier, []))

    def __len__(self) -> int:
        return len(self.units)

    def statistics(self) -> Dict:
        """Catalog statistics for health checks and the catalog endpoint"""
        kinds = defaultdict(int)
        capacities = defaultdict(int)

        for unit in self.units:
            kinds[unit.kind.value] += 1
            capacities[str(unit.btu_capacity)] += 1

        return {
            'version': self.version,
            'total_units': len(self.units),
            'tiers': {tier.value: len(self._by_tier.get(tier, [])) for tier in QuoteTier},
            'kinds': dict(kinds),
            'capacities': dict(capacities),
        }


_default_catalog: Optional[EquipmentCatalog] = None


def get_default_catalog() -> EquipmentCatalog:
    """Get or load the bundled catalog"""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = EquipmentCatalog.load_from_json(DEFAULT_CATALOG_PATH)
    return _default_catalog
