"""Driver-load fit scoring service implementation."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from atlas_fit.scoring.config import ScoringConfig, get_scoring_config
from atlas_fit.scoring.matchers import (
    derive_load_regions,
    equipment_matches,
    extract_states_from_text,
    normalize_label,
)
from atlas_fit.scoring.models import (
    DriverPreferenceProfile,
    FitBreakdown,
    FitMeta,
    FitResult,
    LoadCandidate,
    Verdict,
)

logger = logging.getLogger(__name__)

EQUIPMENT_MAX = 30
REGION_MAX = 30
DISTANCE_MAX = 25
COMPLIANCE_MAX = 15

AVOID_STATE_PENALTY = 10
EQUIPMENT_MATCH_POINTS = 28
EQUIPMENT_MISMATCH_POINTS = 8
EQUIPMENT_NEUTRAL_POINTS = 18
REGION_MATCH_POINTS = 26
REGION_MISMATCH_POINTS = 10
REGION_NEUTRAL_POINTS = 18

DISTANCE_TOLERANCE_MILES = 200
DISTANCE_TOLERANCE_FACTOR = 0.7
DISTANCE_FAR_FACTOR = 0.15
HOME_BASE_BONUS = 3
# (upper bound in miles, share of DISTANCE_MAX, label) when no max is set.
DISTANCE_BANDS: tuple[tuple[float, float, str], ...] = (
    (400, 0.9, "short trip favored"),
    (900, 0.6, "medium trip"),
    (math.inf, 0.3, "long trip"),
)

NO_ACCESS_REASON = "No access to driver preferences or preferences missing"


def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _fmt_miles(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.1f}"


def verdict_from_score(score: int) -> Verdict:
    """Map a fit score to its presentation label."""
    if score >= 85:
        return "excellent"
    if score >= 70:
        return "good"
    if score >= 55:
        return "ok"
    return "poor"


def _as_profile(value: Any) -> DriverPreferenceProfile:
    if isinstance(value, DriverPreferenceProfile):
        return value
    if isinstance(value, Mapping):
        try:
            return DriverPreferenceProfile.model_validate(dict(value))
        except ValidationError as e:
            logger.warning(f"Unusable driver profile fields, scoring as empty: {e}")
    return DriverPreferenceProfile()


def _as_load(value: Any) -> LoadCandidate:
    if isinstance(value, LoadCandidate):
        return value
    if isinstance(value, Mapping):
        try:
            return LoadCandidate.model_validate(dict(value))
        except ValidationError as e:
            logger.warning(f"Unusable load fields, scoring as empty: {e}")
    return LoadCandidate()


def score_compliance(
    profile: DriverPreferenceProfile, load: LoadCandidate
) -> tuple[int, int, list[str]]:
    """Score avoid-state compliance.

    Returns:
        points, total penalty deducted, reasons
    """
    avoid = {state.upper() for state in profile.avoid_states}
    penalty = 0
    reasons: list[str] = []

    if load.origin_state and load.origin_state in avoid:
        penalty += AVOID_STATE_PENALTY
        reasons.append(f"Origin in avoid state: {load.origin_state}")
    if load.dest_state and load.dest_state in avoid:
        penalty += AVOID_STATE_PENALTY
        reasons.append(f"Destination in avoid state: {load.dest_state}")

    points = _clamp(COMPLIANCE_MAX - penalty, 0, COMPLIANCE_MAX)
    return points, penalty, reasons


def score_equipment(
    profile: DriverPreferenceProfile, load: LoadCandidate
) -> tuple[int, str | None, list[str]]:
    """Score equipment compatibility.

    Returns:
        points, matched equipment token, reasons
    """
    preferred = profile.preferred_equipment
    if not preferred:
        reasons = []
        if load.equipment_type:
            reasons.append(f"No equipment prefs; load is {load.equipment_type}")
        return EQUIPMENT_NEUTRAL_POINTS, None, reasons

    match = equipment_matches(preferred, load.equipment_type)
    if match.hit:
        return (
            EQUIPMENT_MATCH_POINTS,
            match.matched,
            [f"Equipment match: {load.equipment_type}"],
        )
    return (
        EQUIPMENT_MISMATCH_POINTS,
        None,
        [f"Equipment mismatch (pref: {', '.join(preferred)})"],
    )


def score_region(
    profile: DriverPreferenceProfile, load: LoadCandidate
) -> tuple[int, list[str], list[str]]:
    """Score region overlap between the load's lane and preferred regions.

    Returns:
        points, load region tags, reasons
    """
    load_regions = derive_load_regions(load.origin_state, load.dest_state)

    if not profile.preferred_regions:
        return REGION_NEUTRAL_POINTS, load_regions, ["No region prefs set"]

    preferred = {normalize_label(region) for region in profile.preferred_regions}
    hits = [region for region in load_regions if normalize_label(region) in preferred]
    if hits:
        return REGION_MATCH_POINTS, load_regions, [f"Region match: {', '.join(hits)}"]

    listed = ", ".join(load_regions) or "unknown"
    return (
        REGION_MISMATCH_POINTS,
        load_regions,
        [f"Outside listed regions (load: {listed})"],
    )


def score_distance(
    profile: DriverPreferenceProfile, load: LoadCandidate
) -> tuple[int, list[str]]:
    """Score trip length against the driver's comfort range.

    Unknown miles score zero rather than neutral.
    """
    miles = load.miles
    if not miles or miles <= 0:
        return 0, ["Distance: unknown miles (no score)"]

    reasons: list[str] = []
    limit = profile.max_distance
    if limit and limit > 0:
        soft_cap = limit + DISTANCE_TOLERANCE_MILES
        if miles <= limit:
            points = DISTANCE_MAX
            reasons.append(
                "Distance within preferred max "
                f"({_fmt_miles(miles)} <= {_fmt_miles(limit)})"
            )
        elif miles <= soft_cap:
            remaining = 1 - (miles - limit) / (soft_cap - limit)
            points = _round_half_up(
                DISTANCE_MAX * remaining * DISTANCE_TOLERANCE_FACTOR
            )
            reasons.append(
                "Distance slightly above preferred "
                f"({_fmt_miles(miles)} > {_fmt_miles(limit)})"
            )
        else:
            points = _round_half_up(DISTANCE_MAX * DISTANCE_FAR_FACTOR)
            reasons.append(
                "Distance exceeds comfort "
                f"({_fmt_miles(miles)} >> {_fmt_miles(limit)})"
            )
    else:
        _upper, share, label = next(
            band for band in DISTANCE_BANDS if miles <= band[0]
        )
        points = _round_half_up(DISTANCE_MAX * share)
        reasons.append(f"No max distance set; {label}")

    if load.origin_state and load.origin_state in extract_states_from_text(
        profile.home_base
    ):
        points = _clamp(points + HOME_BASE_BONUS, 0, DISTANCE_MAX)
        reasons.append("Home base aligns with origin state")

    return points, reasons


def compute_driver_fit(profile: Any, load: Any) -> FitResult:
    """Compute a 0..100 fit score with breakdown for one driver and one load.

    Accepts model instances or plain mappings. Never raises: missing or
    unusable fields fall back to neutral (or, for miles, zero) points.
    """
    profile = _as_profile(profile)
    load = _as_load(load)
    reasons: list[str] = []

    compliance, avoid_penalty, compliance_reasons = score_compliance(profile, load)
    reasons.extend(compliance_reasons)

    equipment, matched_equipment, equipment_reasons = score_equipment(profile, load)
    reasons.extend(equipment_reasons)

    region, region_tags, region_reasons = score_region(profile, load)
    reasons.extend(region_reasons)

    distance, distance_reasons = score_distance(profile, load)
    reasons.extend(distance_reasons)

    breakdown = FitBreakdown(
        equipment=equipment,
        region=region,
        distance=distance,
        compliance=compliance,
    )
    score = _clamp(_round_half_up(breakdown.total), 0, 100)

    result = FitResult(
        score=score,
        verdict=verdict_from_score(score),
        reasons=tuple(reasons),
        breakdown=breakdown,
        meta=FitMeta(
            matched_equipment=matched_equipment,
            matched_region_tags=tuple(region_tags),
            hits={"avoid_penalty": avoid_penalty},
        ),
        driver_id=profile.driver_id,
    )
    logger.debug(
        f"Fit driver={profile.driver_id} load={load.load_id} "
        f"score={result.score} verdict={result.verdict}"
    )
    return result


def _no_access_result(driver_id: str | None = None) -> FitResult:
    return FitResult(
        score=0,
        verdict="poor",
        reasons=(NO_ACCESS_REASON,),
        breakdown=FitBreakdown(),
        meta=FitMeta(),
        driver_id=driver_id,
    )


def fit_load_for_driver(raw_profile: Any, load: Any) -> FitResult:
    """Score a load against a raw preference payload.

    A missing payload or one carrying an ``error`` key (for example an
    ``{"error": "access_denied"}`` response) yields a zero-score ``poor``
    result instead of an exception.
    """
    if not raw_profile and not isinstance(raw_profile, Mapping):
        logger.debug("Driver preferences missing; returning no-access fit")
        return _no_access_result()

    if isinstance(raw_profile, DriverPreferenceProfile):
        error, driver_id = raw_profile.error, raw_profile.driver_id
    elif isinstance(raw_profile, Mapping):
        error, driver_id = raw_profile.get("error"), raw_profile.get("driver_id")
    else:
        error = driver_id = None

    if error:
        logger.debug(
            f"Driver preferences unavailable ({error}); returning no-access fit"
        )
        return _no_access_result(str(driver_id) if driver_id else None)
    return compute_driver_fit(raw_profile, load)


def rank_drivers_for_load(
    profiles: Iterable[Any],
    load: Any,
    *,
    min_score: int = 0,
    limit: int | None = None,
) -> list[FitResult]:
    """Score many drivers for one load, best fit first.

    Ties keep input order. Results below ``min_score`` are dropped.
    """
    results = [fit_load_for_driver(profile, load) for profile in profiles]
    ranked = sorted(
        (result for result in results if result.score >= min_score),
        key=lambda result: result.score,
        reverse=True,
    )
    if limit is not None:
        ranked = ranked[:limit]
    return ranked


class DriverFitScorer:
    """Service for scoring and ranking drivers against loads."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or get_scoring_config()

    def evaluate(self, profile: Any, load: Any) -> FitResult:
        """Score one driver for one load, tolerating missing preferences."""
        return fit_load_for_driver(profile, load)

    def rank(
        self,
        profiles: Iterable[Any],
        load: Any,
        *,
        min_score: int | None = None,
        limit: int | None = None,
    ) -> list[FitResult]:
        """Rank drivers for a load using configured cut-offs as defaults."""
        if min_score is None:
            min_score = self.config.rank_min_score
        if limit is None:
            limit = self.config.rank_limit

        ranked = rank_drivers_for_load(
            profiles, load, min_score=min_score, limit=limit
        )
        logger.info(
            f"Ranked {len(ranked)} driver(s) (min_score={min_score}, limit={limit})"
        )
        return ranked

    def format_result(self, result: FitResult) -> str:
        """Format FitResult for CLI output."""
        lines: list[str] = []
        lines.append(f"Driver: {result.driver_id or 'unknown'}")
        lines.append(f"Verdict: {result.verdict.upper()} (score={result.score})")
        lines.append(
            "Breakdown: "
            f"equipment={result.breakdown.equipment}/{EQUIPMENT_MAX} "
            f"region={result.breakdown.region}/{REGION_MAX} "
            f"distance={result.breakdown.distance}/{DISTANCE_MAX} "
            f"compliance={result.breakdown.compliance}/{COMPLIANCE_MAX}"
        )
        if result.meta.matched_equipment:
            lines.append(f"Matched equipment: {result.meta.matched_equipment}")
        if result.meta.matched_region_tags:
            lines.append(
                f"Region tags: {', '.join(result.meta.matched_region_tags)}"
            )
        if result.reasons:
            lines.append("Reasons:")
            for reason in result.reasons:
                lines.append(f"- {reason}")
        return "\n".join(lines)
