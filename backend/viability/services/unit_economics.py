"""Unit Economics.

LTV:CAC and CAC payback from caller signals and market margins, with
optional seeded Monte Carlo estimators.

Rules
-----
- Ratios with a non-positive denominator are explicitly UNDEFINED,
  never NaN / infinity
- Monte Carlo randomness comes only from an explicit seed
"""

from __future__ import annotations

import math
import random
import re
from typing import Optional

from ..schemas.economics_schema import (
    EconomicRatio,
    EconomicsSimulation,
    LtvCacSimulation,
    PaybackSimulation,
    SimulationOptions,
    UnitEconomics,
)
from ..schemas.intelligence_schema import MarketIntelligence
from ..schemas.signals_schema import RawSignals

_PRICE_RE = re.compile(r"\$\s?(\d[\d,]*(?:\.\d+)?)")

# Monte Carlo assumptions
_CONTRIBUTION_SD_SHARE = 0.20
_MONTHLY_CHURN = 0.05
_PAYBACK_HORIZON_MONTHS = 24
_LTV_SD_SHARE = 0.25
_CAC_SD_SHARE = 0.25
_LTV_CAC_CAP = 12.0


def effective_price(raw: RawSignals, text: str) -> float:
    """``price_point`` when supplied, else the first ``$N`` in *text*, else 0."""
    if raw.price_point > 0:
        return raw.price_point
    match = _PRICE_RE.search(text or "")
    if match is None:
        return 0.0
    return float(match.group(1).replace(",", ""))


def _finite_ratio(value: float, digits: int) -> EconomicRatio:
    if not math.isfinite(value):
        return EconomicRatio.undefined("Ratio overflow: denominator too small")
    return EconomicRatio(value=round(value, digits))


def ltv_cac_ratio(ltv: float, cac: float) -> EconomicRatio:
    if cac <= 0:
        return EconomicRatio.undefined("CAC must be positive to compute LTV:CAC")
    return _finite_ratio(ltv / cac, 2)


def payback_months(cac: float, monthly_contribution: float) -> EconomicRatio:
    if cac <= 0:
        return EconomicRatio.undefined("CAC must be positive to compute payback")
    if monthly_contribution <= 0:
        return EconomicRatio.undefined("No positive monthly contribution to recover CAC")
    return _finite_ratio(cac / monthly_contribution, 1)


# ── Monte Carlo ─────────────────────────────────────────────────────────

def _percentile_index(q: float, n: int) -> int:
    return min(n - 1, max(0, math.floor(q * n)))


def simulate_payback(
    options: SimulationOptions,
    monthly_contribution: float,
    cac: float,
    churn_rate_monthly: float = _MONTHLY_CHURN,
    horizon_months: int = _PAYBACK_HORIZON_MONTHS,
) -> PaybackSimulation:
    """Months until cumulative contribution covers CAC, under noise and churn.

    Runs that churn out or never pay back within the horizon count as
    "beyond horizon" and show up as ``None`` percentiles.
    """
    rng = random.Random(options.seed)
    horizon = max(1, horizon_months)
    sd = monthly_contribution * _CONTRIBUTION_SD_SHARE
    results: list[int] = []
    within_12 = 0

    for _ in range(options.runs):
        cumulative = -max(0.0, cac)
        months = horizon + 1
        for month in range(1, horizon + 1):
            if rng.random() < churn_rate_monthly:
                break
            cumulative += max(0.0, rng.gauss(monthly_contribution, sd))
            if cumulative >= 0:
                months = month
                break
        results.append(months)
        if months <= 12:
            within_12 += 1

    results.sort()

    def pick(q: float) -> Optional[int]:
        value = results[_percentile_index(q, len(results))]
        return None if value > horizon else value

    return PaybackSimulation(
        p50_months=pick(0.5),
        p90_months=pick(0.9),
        prob_payback_within_12=round(within_12 / options.runs, 3),
    )


def simulate_ltv_cac(options: SimulationOptions, ltv: float, cac: float) -> LtvCacSimulation:
    rng = random.Random(options.seed)
    ratios = []
    for _ in range(options.runs):
        sampled_ltv = max(0.0, rng.gauss(ltv, ltv * _LTV_SD_SHARE))
        sampled_cac = max(1.0, rng.gauss(cac, cac * _CAC_SD_SHARE))
        ratios.append(min(_LTV_CAC_CAP, sampled_ltv / sampled_cac))
    ratios.sort()
    n = len(ratios)
    return LtvCacSimulation(
        p10=round(ratios[_percentile_index(0.1, n)], 2),
        p50=round(ratios[_percentile_index(0.5, n)], 2),
        p90=round(ratios[_percentile_index(0.9, n)], 2),
    )


# ── Public API ──────────────────────────────────────────────────────────

def compute_unit_economics(
    raw: RawSignals,
    text: str,
    market: MarketIntelligence,
    simulation: Optional[SimulationOptions] = None,
) -> UnitEconomics:
    price = effective_price(raw, text)
    contribution = round(price * market.typical_margins, 2)
    ltv, cac = raw.ltv_estimate, raw.cac_estimate

    sim = None
    if simulation is not None:
        sim = EconomicsSimulation(
            runs=simulation.runs,
            seed=simulation.seed,
            payback=(
                simulate_payback(simulation, contribution, cac)
                if contribution > 0 and cac > 0 else None
            ),
            ltv_cac=simulate_ltv_cac(simulation, ltv, cac) if ltv > 0 and cac > 0 else None,
        )

    return UnitEconomics(
        supplied=ltv > 0 or cac > 0,
        price_point=price,
        monthly_contribution=contribution,
        ltv_cac_ratio=ltv_cac_ratio(ltv, cac),
        payback_months=payback_months(cac, contribution),
        simulation=sim,
    )
