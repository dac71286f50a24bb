"""Competitive Intelligence Lookup.

Matches idea text against the crowded-market registry.

Rules
-----
- NO API calls
- Never fails: unmatched ideas get a neutral default built from the DNA
- First fingerprint in registry order wins when several match
"""

from __future__ import annotations

import logging
from typing import Optional

from ..registries import DEFAULT_REGISTRIES, MarketFingerprint, Registries
from ..schemas.business_dna_schema import BusinessDNA
from ..schemas.intelligence_schema import CompetitiveIntelligence

logger = logging.getLogger(__name__)

_DEFAULT_SATURATION = 0.5
_DEFAULT_ENTRY_DIFFICULTY = 5.0
_DEFAULT_CONFIDENCE = 0.6


def default_intelligence(dna: BusinessDNA) -> CompetitiveIntelligence:
    """Neutral competitive profile for a market with no known fingerprint."""
    return CompetitiveIntelligence(
        market_category=f"{dna.industry} {dna.sub_industry}",
        fingerprint=None,
        incumbents=(),
        market_saturation=_DEFAULT_SATURATION,
        entry_difficulty=_DEFAULT_ENTRY_DIFFICULTY,
        switching_costs="medium",
        network_effects=dna.network_effects,
        capital_requirements=dna.capital_intensity,
        brand_importance="medium",
        confidence=_DEFAULT_CONFIDENCE,
    )


class CompetitiveIntelligenceLookup:
    def __init__(self, registries: Registries = DEFAULT_REGISTRIES):
        self._registries = registries

    def match(self, text: str) -> Optional[MarketFingerprint]:
        lowered = (text or "").lower()
        for fingerprint in self._registries.fingerprints:
            if fingerprint.matches(lowered):
                return fingerprint
        return None

    def lookup(self, text: str, dna: BusinessDNA) -> CompetitiveIntelligence:
        fingerprint = self.match(text)
        if fingerprint is None:
            logger.info("[COMPETITIVE] No crowded-market match, using default profile")
            return default_intelligence(dna)

        intel = fingerprint.intelligence
        logger.info(
            "[COMPETITIVE] Matched %s (saturation=%.0f%%, difficulty=%s/10, %d incumbents)",
            fingerprint.key,
            intel.market_saturation * 100,
            intel.entry_difficulty,
            len(intel.incumbents),
        )
        return intel
