"""Market intelligence tests: static benchmarks and the research seam."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio
import json

import httpx
import pytest

from viability.exceptions import ResearchProviderError
from viability.schemas import BusinessDNA, MarketIntelligence
from viability.services.market_intelligence import MarketIntelligenceLookup
from viability.services.research_provider import HttpResearchProvider, MarketResearchProvider


def _dna(**overrides):
    fields = dict(
        industry="saas", sub_industry="general", business_model="subscription",
        customer_type="b2b", stage="idea", scale="local", capital_intensity="low",
        regulatory_complexity="low", network_effects="none", confidence=0.7,
    )
    fields.update(overrides)
    return BusinessDNA(**fields)


RESEARCHED = {
    "tam_usd": 42_000_000_000,
    "growth_rate": 0.21,
    "competition_level": 6,
    "key_trends": ["Vertical AI"],
    "regulatory_barriers": [],
    "typical_margins": 0.7,
    "customer_acquisition_difficulty": 4,
    "confidence": 0.9,
}


class _StaticProvider(MarketResearchProvider):
    def __init__(self, result=None, error=None, delay=0.0):
        self.result, self.error, self.delay = result, error, delay

    async def research(self, text, dna):
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error:
            raise self.error
        return self.result


class TestStaticLookup:
    def test_known_industry_uses_benchmark(self):
        market = MarketIntelligenceLookup().lookup("anything", _dna(industry="fintech"))
        assert market.confidence == 0.8
        assert market.source == "benchmark"
        assert "PCI compliance" in market.regulatory_barriers

    def test_unknown_industry_uses_fallback(self):
        market = MarketIntelligenceLookup().lookup("anything", _dna(industry="technology"))
        assert market.confidence == 0.3
        assert market.source == "fallback"
        assert market.tam_usd == 10_000_000_000

    def test_alookup_without_provider_matches_lookup(self):
        lookup = MarketIntelligenceLookup()
        dna = _dna(industry="food")
        assert asyncio.run(lookup.alookup("bakery", dna)) == lookup.lookup("bakery", dna)


class TestResearchSeam:
    def test_provider_result_is_used(self):
        researched = MarketIntelligence(**RESEARCHED, source="research")
        lookup = MarketIntelligenceLookup(provider=_StaticProvider(result=researched))
        assert asyncio.run(lookup.alookup("idea", _dna())) == researched

    def test_provider_error_falls_back(self):
        lookup = MarketIntelligenceLookup(provider=_StaticProvider(error=ResearchProviderError("down")))
        assert asyncio.run(lookup.alookup("idea", _dna())).source == "benchmark"

    def test_provider_timeout_falls_back(self):
        researched = MarketIntelligence(**RESEARCHED, source="research")
        lookup = MarketIntelligenceLookup(
            provider=_StaticProvider(result=researched, delay=1.0),
            research_timeout=0.05,
        )
        assert asyncio.run(lookup.alookup("idea", _dna())).source == "benchmark"

    def test_empty_answer_falls_back(self):
        lookup = MarketIntelligenceLookup(provider=_StaticProvider(result=None))
        assert asyncio.run(lookup.alookup("idea", _dna(industry="edtech"))).confidence == 0.8


class TestHttpResearchProvider:
    def test_parses_nested_payload(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            seen["auth"] = request.headers.get("authorization")
            return httpx.Response(200, json={"market_intelligence": RESEARCHED})

        provider = HttpResearchProvider(
            "https://research.test/market", api_key="secret", transport=httpx.MockTransport(handler)
        )
        market = asyncio.run(provider.research("bakery demand software", _dna(industry="food")))
        assert market.source == "research"
        assert market.tam_usd == 42_000_000_000
        assert seen["body"]["business_dna"]["industry"] == "food"
        assert seen["auth"] == "Bearer secret"

    def test_null_body_means_no_data(self):
        provider = HttpResearchProvider(
            "https://research.test/market",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, content=b"null")),
        )
        assert asyncio.run(provider.research("idea", _dna())) is None

    def test_http_error_raises_provider_error(self):
        provider = HttpResearchProvider(
            "https://research.test/market",
            transport=httpx.MockTransport(lambda request: httpx.Response(404)),
        )
        with pytest.raises(ResearchProviderError):
            asyncio.run(provider.research("idea", _dna()))

    def test_invalid_payload_raises_provider_error(self):
        provider = HttpResearchProvider(
            "https://research.test/market",
            transport=httpx.MockTransport(
                lambda request: httpx.Response(200, json={"tam_usd": -5})
            ),
        )
        with pytest.raises(ResearchProviderError):
            asyncio.run(provider.research("idea", _dna()))

    @pytest.mark.parametrize("payload", [{"market_intelligence": "n/a"}, {"market_intelligence": [1, 2]}])
    def test_non_object_market_intelligence_raises_provider_error(self, payload):
        provider = HttpResearchProvider(
            "https://research.test/market",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json=payload)),
        )
        with pytest.raises(ResearchProviderError):
            asyncio.run(provider.research("idea", _dna()))

    def test_lookup_falls_back_on_non_object_market_intelligence(self):
        provider = HttpResearchProvider(
            "https://research.test/market",
            transport=httpx.MockTransport(
                lambda request: httpx.Response(200, json={"market_intelligence": "n/a"})
            ),
        )
        lookup = MarketIntelligenceLookup(provider=provider)
        market = asyncio.run(lookup.alookup("crm", _dna()))
        assert market.source == "benchmark"

    def test_lookup_falls_back_on_unexpected_provider_error(self):
        class _BrokenProvider(MarketResearchProvider):
            async def research(self, text, dna):
                raise RuntimeError("boom")

        lookup = MarketIntelligenceLookup(provider=_BrokenProvider())
        market = asyncio.run(lookup.alookup("crm", _dna()))
        assert market.source == "benchmark"

    def test_lookup_falls_back_when_http_provider_fails(self):
        provider = HttpResearchProvider(
            "https://research.test/market",
            transport=httpx.MockTransport(lambda request: httpx.Response(403)),
        )
        lookup = MarketIntelligenceLookup(provider=provider)
        assert asyncio.run(lookup.alookup("idea", _dna())).source == "benchmark"
