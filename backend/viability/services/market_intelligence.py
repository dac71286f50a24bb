"""Market Intelligence Lookup.

Supplies TAM, growth, competition and margin benchmarks for an idea.

Rules
-----
- ``lookup`` is static and never fails
- ``alookup`` is the pluggable research seam: the optional provider is
  awaited under a timeout; timeout, provider error or an empty answer
  fall back to the static benchmark table
- Unknown industries get the low-confidence generic fallback
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from ..exceptions import ResearchProviderError
from ..registries import DEFAULT_REGISTRIES, Registries
from ..schemas.business_dna_schema import BusinessDNA
from ..schemas.intelligence_schema import MarketIntelligence
from .research_provider import MarketResearchProvider

logger = logging.getLogger(__name__)

_DEFAULT_RESEARCH_TIMEOUT = 8.0


class MarketIntelligenceLookup:
    def __init__(
        self,
        registries: Registries = DEFAULT_REGISTRIES,
        provider: Optional[MarketResearchProvider] = None,
        research_timeout: float = _DEFAULT_RESEARCH_TIMEOUT,
    ):
        self._registries = registries
        self._provider = provider
        self._research_timeout = research_timeout

    def lookup(self, text: str, dna: BusinessDNA) -> MarketIntelligence:
        """Static benchmark for ``dna.industry``; *text* is unused here but
        kept so research providers and the table share one signature."""
        benchmark = self._registries.benchmarks.get(dna.industry)
        if benchmark is None:
            logger.info("[MARKET] No benchmark for %r, using fallback", dna.industry)
            return self._registries.fallback_benchmark
        return benchmark

    async def alookup(self, text: str, dna: BusinessDNA) -> MarketIntelligence:
        if self._provider is None:
            return self.lookup(text, dna)

        try:
            researched = await asyncio.wait_for(
                self._provider.research(text, dna),
                timeout=self._research_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "[MARKET] Research timed out after %.1fs, using benchmark", self._research_timeout
            )
            return self.lookup(text, dna)
        except ResearchProviderError as exc:
            logger.warning("[MARKET] Research failed (%s), using benchmark", exc)
            return self.lookup(text, dna)
        except Exception as exc:
            logger.exception("[MARKET] Unexpected research error (%s), using benchmark", exc)
            return self.lookup(text, dna)

        if researched is None:
            logger.info("[MARKET] Research returned nothing, using benchmark")
            return self.lookup(text, dna)

        logger.info("[MARKET] Using researched market intelligence (confidence=%.2f)", researched.confidence)
        return researched
