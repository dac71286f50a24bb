"""Static lookup registries for the scoring pipeline.

Keyword dictionaries, the crowded-market (saturation) registry, the
market-benchmark registry and the category reality-check table.

Rules
-----
- Built ONCE by ``build_registries()`` at import time
- Immutable afterwards (tuples, frozen dataclasses, MappingProxyType)
- Injected into the engines; no engine reads module globals directly
- Declaration order is meaningful: it is the tie-break / first-match order
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Pattern

from .constants import (
    DEMAND_SIGNALS,
    DIFFERENTIATION,
    ECONOMICS,
    MARKET_QUALITY,
    OVERALL,
)
from .schemas.intelligence_schema import CompetitiveIntelligence, MarketIntelligence


# ===================================================================== #
#  Term matching                                                          #
# ===================================================================== #

def compile_term(term: str) -> Pattern[str]:
    """Compile *term* as a word-start match against lowercased text.

    ``payment`` matches "payments" but not "prepayment"; terms starting with
    punctuation (``/month``, ``$``) match anywhere.
    """
    escaped = re.escape(term.lower())
    if term[:1].isalnum():
        return re.compile(r"(?<![a-z0-9])" + escaped)
    return re.compile(escaped)


@dataclass(frozen=True)
class Term:
    text: str
    weight: float = 1.0
    pattern: Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "pattern", compile_term(self.text))

    def found_in(self, text: str) -> bool:
        return self.pattern.search(text) is not None


def _terms(*pairs: tuple[str, float]) -> tuple[Term, ...]:
    return tuple(Term(text, weight) for text, weight in pairs)


def _phrases(*texts: str) -> tuple[Term, ...]:
    return tuple(Term(text) for text in texts)


def contains_any(text: str, terms: tuple[Term, ...]) -> bool:
    return any(t.found_in(text) for t in terms)


# ===================================================================== #
#  Registry record types                                                  #
# ===================================================================== #

@dataclass(frozen=True)
class KeywordCandidate:
    """One taxonomy label and the weighted keywords that vote for it."""

    label: str
    terms: tuple[Term, ...]

    def score(self, text: str) -> float:
        return sum(t.weight for t in self.terms if t.found_in(text))


@dataclass(frozen=True)
class MarketFingerprint:
    """A known crowded market and the phrases that identify it."""

    key: str
    phrases: tuple[Term, ...]
    intelligence: CompetitiveIntelligence

    def matches(self, text: str) -> bool:
        return contains_any(text, self.phrases)


@dataclass(frozen=True)
class RealityCheck:
    """Hard ceilings for a known oversaturated vertical."""

    name: str
    predicate: Callable[[str], bool]
    caps: Mapping[str, float]
    reason: str


@dataclass(frozen=True)
class Registries:
    industries: tuple[KeywordCandidate, ...]
    sub_industries: Mapping[str, tuple[KeywordCandidate, ...]]
    business_models: tuple[KeywordCandidate, ...]
    customer_types: tuple[KeywordCandidate, ...]
    indicator_terms: tuple[Term, ...]
    fingerprints: tuple[MarketFingerprint, ...]
    benchmarks: Mapping[str, MarketIntelligence]
    fallback_benchmark: MarketIntelligence
    generic_feature_penalties: tuple[Term, ...]
    crowded_market_reality: tuple[Term, ...]
    economics_saturation_penalties: tuple[Term, ...]
    economics_generic_terms: tuple[Term, ...]
    reality_checks: tuple[RealityCheck, ...]

    def fingerprint(self, key: str) -> Optional[MarketFingerprint]:
        for fp in self.fingerprints:
            if fp.key == key:
                return fp
        return None


# ===================================================================== #
#  Classifier keyword tables (declaration order = tie-break priority)    #
# ===================================================================== #

def _industry_candidates() -> tuple[KeywordCandidate, ...]:
    return (
        KeywordCandidate("fintech", _terms(
            ("fintech", 3), ("payment", 2), ("banking", 2), ("lending", 2), ("loan", 2),
            ("crypto", 2), ("insurance", 2), ("finance", 1), ("financial", 1),
            ("wallet", 1), ("trading", 1), ("invoice", 1), ("credit", 1),
        )),
        KeywordCandidate("healthtech", _terms(
            ("telemedicine", 3), ("telehealth", 3), ("health", 2), ("medical", 2),
            ("patient", 2), ("clinic", 2), ("therapy", 2), ("doctor", 2),
            ("wellness", 1), ("fitness", 1),
        )),
        KeywordCandidate("edtech", _terms(
            ("edtech", 3), ("education", 2), ("student", 2), ("school", 2), ("tutor", 2),
            ("teacher", 2), ("learning", 1), ("course", 1), ("training", 1),
        )),
        KeywordCandidate("real-estate", _terms(
            ("real estate", 3), ("property", 2), ("housing", 2), ("landlord", 2),
            ("tenant", 2), ("mortgage", 1), ("rent", 1),
        )),
        KeywordCandidate("travel", _terms(
            ("travel", 2), ("hotel", 2), ("flight", 2), ("vacation", 2), ("tourism", 2),
            ("booking", 1), ("trip", 1),
        )),
        KeywordCandidate("food", _terms(
            ("restaurant", 2), ("food", 2), ("meal", 2), ("recipe", 2), ("grocery", 2),
            ("baker", 2), ("bread", 1), ("cooking", 1), ("delivery", 1),
        )),
        KeywordCandidate("beauty", _terms(
            ("skincare", 3), ("beauty", 2), ("makeup", 2), ("cosmetic", 2),
            ("hair", 1), ("nail", 1),
        )),
        KeywordCandidate("entertainment", _terms(
            ("game", 2), ("gaming", 2), ("music", 2), ("streaming", 2), ("podcast", 2),
            ("video", 1), ("media", 1), ("content", 1),
        )),
        KeywordCandidate("ecommerce", _terms(
            ("e-commerce", 3), ("ecommerce", 3), ("online store", 3), ("retail", 2),
            ("shop", 1), ("store", 1), ("sell", 1), ("product", 1), ("shipping", 1),
            ("inventory", 1),
        )),
        KeywordCandidate("saas", _terms(
            ("saas", 3), ("software", 2), ("platform", 1), ("tool", 1), ("dashboard", 1),
            ("api", 1), ("management", 1), ("automation", 1), ("integration", 1),
            ("app", 1), ("cloud", 1),
        )),
    )


def _sub_industry_candidates() -> Mapping[str, tuple[KeywordCandidate, ...]]:
    return MappingProxyType({
        "saas": (
            KeywordCandidate("productivity", _terms(
                ("project", 2), ("task", 2), ("productivity", 2), ("kanban", 2), ("management", 1),
            )),
            KeywordCandidate("sales", _terms(
                ("crm", 3), ("customer relationship", 3), ("sales", 2), ("lead", 1),
            )),
            KeywordCandidate("communication", _terms(
                ("chat", 2), ("messaging", 2), ("collaboration", 2), ("video", 1), ("email", 1),
            )),
            KeywordCandidate("analytics", _terms(
                ("analytics", 2), ("reporting", 2), ("data", 1), ("dashboard", 1), ("insight", 1),
            )),
            KeywordCandidate("security", _terms(
                ("security", 2), ("password", 2), ("compliance", 1),
            )),
        ),
        "fintech": (
            KeywordCandidate("payments", _terms(
                ("payment", 2), ("checkout", 2), ("transaction", 1), ("pay", 1),
            )),
            KeywordCandidate("lending", _terms(
                ("loan", 2), ("lending", 2), ("borrow", 2), ("credit", 1),
            )),
            KeywordCandidate("investing", _terms(
                ("invest", 2), ("trading", 2), ("portfolio", 2), ("stock", 2),
            )),
            KeywordCandidate("insurance", _terms(
                ("insurance", 3), ("claims", 1),
            )),
        ),
        "healthtech": (
            KeywordCandidate("telehealth", _terms(
                ("telemedicine", 3), ("telehealth", 3), ("virtual visit", 2), ("remote", 1),
            )),
            KeywordCandidate("mental-health", _terms(
                ("mental health", 3), ("therapy", 2), ("anxiety", 2), ("counseling", 2),
            )),
            KeywordCandidate("fitness", _terms(
                ("fitness", 2), ("workout", 2), ("exercise", 2), ("wellness", 1),
            )),
        ),
        "beauty": (
            KeywordCandidate("skincare", _terms(
                ("skin", 2), ("moisturizer", 2), ("serum", 2), ("cleanser", 2), ("face", 1),
            )),
            KeywordCandidate("makeup", _terms(
                ("lipstick", 2), ("foundation", 2), ("mascara", 2), ("eyeshadow", 2),
            )),
            KeywordCandidate("haircare", _terms(
                ("shampoo", 2), ("conditioner", 2), ("hair treatment", 2),
            )),
        ),
        "food": (
            KeywordCandidate("delivery", _terms(
                ("delivery", 2), ("courier", 2), ("order", 1),
            )),
            KeywordCandidate("restaurant-tech", _terms(
                ("restaurant", 2), ("reservation", 2), ("menu", 1),
            )),
            KeywordCandidate("home-cooking", _terms(
                ("recipe", 2), ("cooking", 2), ("meal", 1), ("kitchen", 1),
            )),
        ),
        "edtech": (
            KeywordCandidate("k12", _terms(
                ("school", 2), ("teacher", 2), ("homework", 2), ("student", 1),
            )),
            KeywordCandidate("professional-training", _terms(
                ("certification", 2), ("upskill", 2), ("professional", 1),
                ("course", 1), ("training", 1),
            )),
            KeywordCandidate("tutoring", _terms(
                ("tutor", 3), ("lesson", 1),
            )),
        ),
    })


def _business_model_candidates() -> tuple[KeywordCandidate, ...]:
    return (
        KeywordCandidate("subscription", _terms(
            ("subscription", 3), ("monthly", 2), ("/month", 2), ("per month", 2),
            ("recurring", 2), ("annual plan", 2), ("saas", 1),
        )),
        KeywordCandidate("marketplace", _terms(
            ("marketplace", 3), ("two-sided", 3), ("commission", 1), ("connect", 1),
            ("platform", 1),
        )),
        KeywordCandidate("transaction", _terms(
            ("transaction fee", 3), ("per transaction", 3), ("take rate", 3), ("commission", 2),
        )),
        KeywordCandidate("freemium", _terms(
            ("freemium", 3), ("free tier", 2), ("premium", 1), ("upgrade", 1),
        )),
        KeywordCandidate("advertising", _terms(
            ("advertising", 2), ("ads", 2), ("sponsored", 2),
        )),
        KeywordCandidate("ecommerce", _terms(
            ("online store", 2), ("shipping", 2), ("sell", 1), ("product", 1), ("inventory", 1),
        )),
        KeywordCandidate("service", _terms(
            ("done for you", 3), ("consulting", 2), ("agency", 2), ("service", 1),
        )),
    )


def _customer_type_candidates() -> tuple[KeywordCandidate, ...]:
    return (
        KeywordCandidate("marketplace", _terms(
            ("marketplace", 3), ("buyers and sellers", 3), ("two-sided", 3),
            ("platform", 1), ("connect", 1),
        )),
        KeywordCandidate("b2b2c", _terms(
            ("b2b2c", 3), ("white label", 3), ("white-label", 3), ("reseller", 2), ("partner", 1),
        )),
        KeywordCandidate("b2b", _terms(
            ("b2b", 3), ("enterprise", 2), ("business", 2), ("company", 2), ("companies", 2),
            ("organization", 2), ("employees", 2), ("saas", 2), ("team", 1),
        )),
        KeywordCandidate("b2c", _terms(
            ("b2c", 3), ("consumer", 2), ("families", 2), ("individual", 1),
            ("personal", 1), ("people", 1),
        )),
    )


# ===================================================================== #
#  Crowded-market registry (declaration order = first-match order)       #
# ===================================================================== #

def _fingerprints() -> tuple[MarketFingerprint, ...]:
    def fp(key, phrases, **intel) -> MarketFingerprint:
        return MarketFingerprint(
            key=key,
            phrases=_phrases(*phrases),
            intelligence=CompetitiveIntelligence(fingerprint=key, **intel),
        )

    return (
        fp(
            "project-management",
            ("project management", "task management", "team collaboration",
             "project tracking", "workflow management", "kanban", "scrum",
             "team productivity", "project planning"),
            market_category="Project Management Software",
            incumbents=("Monday.com ($11B+ valuation)", "Asana ($7B+ valuation)",
                        "Notion ($10B+ valuation)", "Trello (owned by Atlassian)",
                        "Jira (Atlassian)", "ClickUp", "Airtable", "Slack (Salesforce)"),
            market_saturation=0.95, entry_difficulty=9, switching_costs="low",
            network_effects="weak", capital_requirements="high",
            brand_importance="medium", confidence=0.95,
        ),
        fp(
            "crm",
            ("crm", "customer relationship", "sales pipeline", "lead management",
             "customer management", "sales tracking", "contact management"),
            market_category="Customer Relationship Management",
            incumbents=("Salesforce ($200B+ market cap)", "HubSpot ($20B+ market cap)",
                        "Pipedrive", "Zoho CRM", "Microsoft Dynamics", "Freshworks"),
            market_saturation=0.85, entry_difficulty=8, switching_costs="high",
            network_effects="weak", capital_requirements="high",
            brand_importance="high", confidence=0.90,
        ),
        fp(
            "email-marketing",
            ("email marketing", "newsletter", "email automation", "email campaigns",
             "drip campaigns", "email sequences"),
            market_category="Email Marketing Automation",
            incumbents=("Mailchimp", "Constant Contact", "ConvertKit", "AWeber",
                        "GetResponse", "ActiveCampaign"),
            market_saturation=0.80, entry_difficulty=7, switching_costs="medium",
            network_effects="none", capital_requirements="medium",
            brand_importance="medium", confidence=0.85,
        ),
        fp(
            "social-media-management",
            ("social media management", "social media scheduling", "social media automation",
             "instagram management", "twitter scheduling", "facebook posts"),
            market_category="Social Media Management",
            incumbents=("Hootsuite", "Buffer", "Sprout Social", "Later", "SocialBee", "Planoly"),
            market_saturation=0.75, entry_difficulty=6, switching_costs="low",
            network_effects="none", capital_requirements="medium",
            brand_importance="low", confidence=0.80,
        ),
        fp(
            "video-conferencing",
            ("video conferencing", "video calls", "online meetings", "virtual meetings",
             "zoom alternative", "video chat"),
            market_category="Video Conferencing",
            incumbents=("Zoom ($25B+ market cap)", "Microsoft Teams", "Google Meet",
                        "WebEx (Cisco)", "GoToMeeting"),
            market_saturation=0.90, entry_difficulty=9, switching_costs="medium",
            network_effects="strong", capital_requirements="high",
            brand_importance="high", confidence=0.95,
        ),
        fp(
            "password-management",
            ("password manager", "password management", "password storage",
             "credential management"),
            market_category="Password Management",
            incumbents=("1Password", "LastPass", "Bitwarden", "Dashlane", "Keeper"),
            market_saturation=0.70, entry_difficulty=8, switching_costs="high",
            network_effects="none", capital_requirements="medium",
            brand_importance="high", confidence=0.85,
        ),
        fp(
            "note-taking",
            ("note taking", "note management", "digital notes", "notebook app",
             "knowledge management"),
            market_category="Note Taking & Knowledge Management",
            incumbents=("Notion ($10B+ valuation)", "Obsidian", "Roam Research", "Evernote",
                        "OneNote (Microsoft)", "Bear", "Logseq"),
            market_saturation=0.80, entry_difficulty=7, switching_costs="medium",
            network_effects="weak", capital_requirements="medium",
            brand_importance="medium", confidence=0.80,
        ),
        fp(
            "time-tracking",
            ("time tracking", "time management", "timesheet", "productivity tracking",
             "work hours tracking"),
            market_category="Time Tracking Software",
            incumbents=("Toggl", "Harvest", "RescueTime", "Clockify", "Time Doctor", "DeskTime"),
            market_saturation=0.70, entry_difficulty=6, switching_costs="low",
            network_effects="none", capital_requirements="low",
            brand_importance="low", confidence=0.75,
        ),
    )


# ===================================================================== #
#  Market benchmark registry                                              #
# ===================================================================== #

_DEFAULT_REGULATORY_BARRIERS = ("General business regulations",)


def _benchmarks() -> Mapping[str, MarketIntelligence]:
    def bench(tam, growth, competition, margins, cac, trends, barriers=_DEFAULT_REGULATORY_BARRIERS):
        return MarketIntelligence(
            tam_usd=tam,
            growth_rate=growth,
            competition_level=competition,
            typical_margins=margins,
            customer_acquisition_difficulty=cac,
            key_trends=trends,
            regulatory_barriers=barriers,
            confidence=0.8,
            source="benchmark",
        )

    return MappingProxyType({
        "saas": bench(
            195_000_000_000, 0.18, 2, 0.75, 7,
            ("AI integration", "Vertical specialization", "Usage-based pricing"),
        ),
        "fintech": bench(
            124_000_000_000, 0.15, 3, 0.80, 8,
            ("Embedded finance", "Open banking", "Crypto adoption"),
            ("PCI compliance", "Banking regulations", "AML/KYC requirements"),
        ),
        "healthtech": bench(
            175_000_000_000, 0.16, 4, 0.65, 8,
            ("Telehealth normalization", "Remote patient monitoring", "AI-assisted diagnostics"),
            ("HIPAA compliance", "FDA approval", "Medical device regulations"),
        ),
        "beauty": bench(
            189_000_000_000, 0.055, 4, 0.70, 6,
            ("Clean beauty movement", "Personalization trend", "Social commerce growth"),
            ("FDA cosmetic regulations", "Ingredient safety requirements"),
        ),
        "edtech": bench(
            142_000_000_000, 0.13, 4, 0.60, 7,
            ("Skills-based hiring", "Cohort-based learning", "AI tutoring"),
            ("Student data privacy (FERPA/COPPA)",),
        ),
        "ecommerce": bench(
            600_000_000_000, 0.10, 3, 0.35, 7,
            ("Social commerce", "Direct-to-consumer brands", "Same-day fulfillment"),
            ("Consumer protection rules", "Sales tax compliance"),
        ),
        "food": bench(
            250_000_000_000, 0.09, 4, 0.30, 6,
            ("Food waste reduction", "Ghost kitchens", "Personalized nutrition"),
            ("Food safety regulations", "Health department permits"),
        ),
        "travel": bench(
            120_000_000_000, 0.07, 3, 0.25, 7,
            ("Experiential travel", "Bleisure trips", "Dynamic packaging"),
            ("Consumer travel protection rules",),
        ),
        "real-estate": bench(
            300_000_000_000, 0.06, 4, 0.45, 7,
            ("PropTech adoption", "Remote-work migration", "Build-to-rent"),
            ("Licensing requirements", "Fair housing regulations"),
        ),
        "entertainment": bench(
            90_000_000_000, 0.08, 3, 0.50, 7,
            ("Creator economy", "Short-form video", "Subscription fatigue"),
            ("Copyright and licensing",),
        ),
    })


def _fallback_benchmark() -> MarketIntelligence:
    return MarketIntelligence(
        tam_usd=10_000_000_000,
        growth_rate=0.08,
        competition_level=5,
        key_trends=("Market growth", "Digital adoption"),
        regulatory_barriers=("Standard business requirements",),
        typical_margins=0.4,
        customer_acquisition_difficulty=5,
        confidence=0.3,
        source="fallback",
    )


# ===================================================================== #
#  Scoring penalty tables                                                 #
# ===================================================================== #

# Commodity features are not moats: differentiation loses the largest match.
_GENERIC_FEATURE_PENALTIES = _terms(
    ("kanban", 4.0),
    ("task tracking", 3.5),
    ("slack integration", 3.5),
    ("dashboard", 3.0),
    ("google integration", 3.0),
    ("analytics", 3.0),
    ("automation", 2.5),
    ("workflow", 2.5),
)

# Economics reality (0-10, 6 = uncrowded) for new entrants; weight = score.
_CROWDED_MARKET_REALITY = _terms(
    ("project management", 2.0),
    ("crm", 2.0),
    ("email marketing", 2.0),
)

# Flat saturation penalty on the standalone economics score.
_ECONOMICS_SATURATION_PENALTIES = _terms(
    ("project management", 3.0),
    ("task management", 3.0),
    ("kanban", 3.0),
    ("productivity", 2.5),
    ("collaboration", 2.5),
    ("crm", 2.5),
    ("email marketing", 2.5),
    ("workflow", 2.0),
)

_ECONOMICS_GENERIC_TERMS = _phrases(
    "dashboard", "analytics", "reporting", "integration", "automation", "board", "tracking",
)

_OVERRIDE_GENERIC_FEATURES = _phrases(
    "kanban", "dashboard", "analytics", "integration", "slack integration",
    "google integration", "automation", "task tracking", "workflow", "reporting",
)
_SAAS_BUNDLE_FEATURES = _phrases(
    "kanban", "dashboard", "analytics", "integration", "automation", "workflow", "reporting",
)


def has_generic_features(text: str) -> bool:
    return contains_any(text, _OVERRIDE_GENERIC_FEATURES)


def _has(text: str, *phrases: str) -> bool:
    return any(compile_term(p).search(text) for p in phrases)


def _reality_checks() -> tuple[RealityCheck, ...]:
    def caps(**values: float) -> Mapping[str, float]:
        return MappingProxyType(dict(values))

    return (
        RealityCheck(
            name="generic-project-management",
            predicate=lambda t: _has(t, "project management") and has_generic_features(t),
            caps=caps(**{DIFFERENTIATION: 2, ECONOMICS: 3, DEMAND_SIGNALS: 3,
                         MARKET_QUALITY: 2, OVERALL: 20}),
            reason="Generic project-management tool in a market owned by incumbents",
        ),
        RealityCheck(
            name="generic-crm",
            predicate=lambda t: _has(t, "crm", "customer relationship") and has_generic_features(t),
            caps=caps(**{DIFFERENTIATION: 2, ECONOMICS: 3, DEMAND_SIGNALS: 3,
                         MARKET_QUALITY: 3, OVERALL: 25}),
            reason="Generic CRM competing with entrenched enterprise suites",
        ),
        RealityCheck(
            name="generic-email-marketing",
            predicate=lambda t: _has(t, "email marketing") and has_generic_features(t),
            caps=caps(**{DIFFERENTIATION: 2, ECONOMICS: 3, DEMAND_SIGNALS: 4, OVERALL: 30}),
            reason="Generic email-marketing tool in a commoditized market",
        ),
        RealityCheck(
            name="generic-social-media-management",
            predicate=lambda t: _has(t, "social media") and _has(t, "management") and has_generic_features(t),
            caps=caps(**{DIFFERENTIATION: 3, ECONOMICS: 4, DEMAND_SIGNALS: 4, OVERALL: 35}),
            reason="Social-media management without differentiation",
        ),
        RealityCheck(
            name="video-conferencing",
            predicate=lambda t: _has(t, "video conferencing", "video calls"),
            caps=caps(**{DIFFERENTIATION: 1, ECONOMICS: 2, DEMAND_SIGNALS: 2,
                         MARKET_QUALITY: 1, OVERALL: 15}),
            reason="Video conferencing is dominated by Zoom, Teams and Meet",
        ),
        RealityCheck(
            name="generic-password-management",
            predicate=lambda t: _has(t, "password") and has_generic_features(t),
            caps=caps(**{DIFFERENTIATION: 2, ECONOMICS: 3, DEMAND_SIGNALS: 3, OVERALL: 25}),
            reason="Generic password manager against trusted security brands",
        ),
        RealityCheck(
            name="generic-saas-feature-bundle",
            predicate=lambda t: _has(t, "saas")
            and sum(1 for f in _SAAS_BUNDLE_FEATURES if f.found_in(t)) >= 3,
            caps=caps(**{DIFFERENTIATION: 3, ECONOMICS: 4, OVERALL: 40}),
            reason="SaaS built from three or more commodity features",
        ),
    )


# ===================================================================== #
#  Public API                                                             #
# ===================================================================== #

def build_registries() -> Registries:
    """Construct the immutable registry bundle.  Call once per process."""
    return Registries(
        industries=_industry_candidates(),
        sub_industries=_sub_industry_candidates(),
        business_models=_business_model_candidates(),
        customer_types=_customer_type_candidates(),
        indicator_terms=_phrases(
            "industry", "market", "customers", "pricing", "revenue", "target",
        ),
        fingerprints=_fingerprints(),
        benchmarks=_benchmarks(),
        fallback_benchmark=_fallback_benchmark(),
        generic_feature_penalties=_GENERIC_FEATURE_PENALTIES,
        crowded_market_reality=_CROWDED_MARKET_REALITY,
        economics_saturation_penalties=_ECONOMICS_SATURATION_PENALTIES,
        economics_generic_terms=_ECONOMICS_GENERIC_TERMS,
        reality_checks=_reality_checks(),
    )


DEFAULT_REGISTRIES: Registries = build_registries()
