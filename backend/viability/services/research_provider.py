"""Market Research Providers.

Defines the ``MarketResearchProvider`` abstract interface used by the
Market Intelligence Lookup and an HTTP implementation.  The lookup only
talks to the interface, so the research source is swappable without
touching any caller.

Providers
---------
- ``HttpResearchProvider`` : POSTs the idea and its DNA to a JSON endpoint.

Adding a new provider
---------------------
1. Subclass ``MarketResearchProvider``.
2. Implement ``research``.
3. Return it from ``get_research_provider()``.
"""

from __future__ import annotations

import abc
import asyncio
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..exceptions import ResearchProviderError
from ..schemas.business_dna_schema import BusinessDNA
from ..schemas.intelligence_schema import MarketIntelligence
from ..timing import StepTimer

logger = logging.getLogger(__name__)

_MAX_RETRIES = 1
_INITIAL_BACKOFF = 0.5  # seconds
_RETRYABLE_CODES = {429, 500, 502, 503, 504}


# ===================================================================== #
#  Abstract interface                                                     #
# ===================================================================== #

class MarketResearchProvider(abc.ABC):
    """Interface every external research source must implement.

    ``research`` receives the idea text and its ``BusinessDNA`` and returns
    a ``MarketIntelligence`` honouring the same contract as the static
    benchmark table, or ``None`` when it has nothing to add.  Failures are
    raised as ``ResearchProviderError``; never guess values.
    """

    @abc.abstractmethod
    async def research(self, text: str, dna: BusinessDNA) -> Optional[MarketIntelligence]:
        ...


# ===================================================================== #
#  HTTP provider                                                          #
# ===================================================================== #

class HttpResearchProvider(MarketResearchProvider):
    """Fetches market intelligence from a JSON research endpoint.

    Expected response body: either the ``MarketIntelligence`` fields at the
    top level or nested under ``"market_intelligence"``; ``null`` / empty
    means no data.
    """

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        timeout: float = 8.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = url
        self._timeout = httpx.Timeout(timeout, connect=min(timeout, 5.0))
        self._transport = transport
        self._headers = {"Accept": "application/json"}
        if api_key:
            self._headers["Authorization"] = f"Bearer {api_key}"

    # ------------------------------------------------------------------ #
    #  Public                                                              #
    # ------------------------------------------------------------------ #

    async def research(self, text: str, dna: BusinessDNA) -> Optional[MarketIntelligence]:
        payload = {"idea_text": text, "business_dna": dna.model_dump(mode="json")}
        timer = StepTimer("market_research")
        async with timer.async_step("http"):
            body = await self._post(payload)
        return self._parse(body)

    # ------------------------------------------------------------------ #
    #  Internal helpers                                                    #
    # ------------------------------------------------------------------ #

    async def _post(self, payload: dict) -> object:
        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            headers=self._headers,
        ) as client:
            for attempt in range(_MAX_RETRIES + 1):
                try:
                    resp = await client.post(self._url, json=payload)
                except httpx.HTTPError as exc:
                    raise ResearchProviderError(f"Research request failed: {exc}") from exc

                if resp.status_code == 200:
                    try:
                        return resp.json()
                    except ValueError as exc:
                        raise ResearchProviderError("Research response is not valid JSON") from exc

                if resp.status_code in _RETRYABLE_CODES and attempt < _MAX_RETRIES:
                    logger.warning(
                        "[RESEARCH] Retryable status %d, attempt %d", resp.status_code, attempt + 1
                    )
                    await asyncio.sleep(_INITIAL_BACKOFF * (2 ** attempt))
                    continue

                raise ResearchProviderError(
                    f"Research provider returned HTTP {resp.status_code}"
                )
        raise ResearchProviderError("Research provider retries exhausted")

    @staticmethod
    def _parse(body: object) -> Optional[MarketIntelligence]:
        if not body:
            return None
        if not isinstance(body, dict):
            raise ResearchProviderError("Research response must be a JSON object")
        data = body.get("market_intelligence", body)
        if not data:
            return None
        if not isinstance(data, dict):
            raise ResearchProviderError("market_intelligence must be a JSON object")
        try:
            return MarketIntelligence.model_validate({**data, "source": "research"})
        except ValidationError as exc:
            raise ResearchProviderError(f"Research response failed validation: {exc}") from exc


def get_research_provider(settings: Settings) -> Optional[MarketResearchProvider]:
    """Provider configured by the environment, or ``None`` when unset."""
    if not settings.market_research_url:
        return None
    return HttpResearchProvider(
        url=settings.market_research_url,
        api_key=settings.market_research_api_key,
        timeout=settings.market_research_timeout,
    )
