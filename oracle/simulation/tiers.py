"""
Hiring tiers.

Scenario hiring plans are keyed by free-form labels ("Junior Dev",
"Senior Designer"). A label resolves to the first registered tier whose name
it contains, case-insensitively. Tier costs are calibrated against the
current team's average hourly rate.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, Optional

from oracle.simulation.errors import InvalidScenario
from oracle.simulation.records import WorkerRecord
from oracle.simulation.types import to_money


DEFAULT_HOURLY_RATE = Decimal("50")
HOURS_PER_MONTH = Decimal("160")
DEFAULT_TIER = "Mid"


@dataclass(frozen=True)
class HiringTier:
    name: str
    cost_multiplier: Decimal


REGISTERED_TIERS = (
    HiringTier("Junior", Decimal("0.7")),
    HiringTier("Mid", Decimal("1.0")),
    HiringTier("Senior", Decimal("1.5")),
    HiringTier("Director", Decimal("2.5")),
)


def match_tier(label: Optional[str]) -> Optional[str]:
    """Return the registered tier name a label refers to, or None."""
    if not label:
        return None
    lowered = label.lower()
    for tier in REGISTERED_TIERS:
        if tier.name.lower() in lowered:
            return tier.name
    return None


def tier_for_worker(worker: WorkerRecord) -> str:
    """Seniority tier of an existing worker, from their job title."""
    return match_tier(worker.job_title) or DEFAULT_TIER


def resolve_hiring_plan(hiring_plan: Dict[str, int]) -> Dict[str, int]:
    """
    Collapse a label-keyed hiring plan into headcount per registered tier.

    Raises InvalidScenario for labels matching no registered tier.
    """
    resolved: Dict[str, int] = {}
    for label, count in hiring_plan.items():
        tier = match_tier(label)
        if tier is None:
            known = ", ".join(t.name for t in REGISTERED_TIERS)
            raise InvalidScenario(f"Unknown hiring tier '{label}' (expected one of: {known})")
        resolved[tier] = resolved.get(tier, 0) + count
    return resolved


class TierTable:
    """Fully-loaded monthly cost per tier for one request."""

    def __init__(self, calibration_base: Decimal):
        self.calibration_base = calibration_base

    @classmethod
    def calibrated(cls, workers: Iterable[WorkerRecord]) -> "TierTable":
        """Calibrate on the mean hourly rate of workers that have one."""
        rates = [Decimal(str(w.hourly_rate)) for w in workers if w.hourly_rate]
        average = sum(rates, Decimal("0")) / len(rates) if rates else DEFAULT_HOURLY_RATE
        return cls(average * HOURS_PER_MONTH)

    def monthly_cost(self, tier_name: str) -> Decimal:
        for tier in REGISTERED_TIERS:
            if tier.name == tier_name:
                whole = (self.calibration_base * tier.cost_multiplier).quantize(
                    Decimal("1"), rounding=ROUND_HALF_UP
                )
                return to_money(whole)
        raise KeyError(tier_name)

    def costs(self) -> Dict[str, Decimal]:
        return {tier.name: self.monthly_cost(tier.name) for tier in REGISTERED_TIERS}

    def hiring_cost(self, hiring_plan: Dict[str, int]) -> Decimal:
        """Monthly cost of every hire in the plan."""
        total = Decimal("0")
        for tier_name, count in resolve_hiring_plan(hiring_plan).items():
            total += self.monthly_cost(tier_name) * count
        return to_money(total)
