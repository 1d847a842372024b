"""Data models for driver-load fit scoring."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from types import MappingProxyType
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

Verdict = Literal["excellent", "good", "ok", "poor"]


def _coerce_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_labels(value: Any) -> list[str]:
    """Turn None, a comma-separated string, or a sequence into clean labels."""
    if value is None:
        return []
    if isinstance(value, str):
        items: list[Any] = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        items = list(value)
    else:
        items = [value]

    labels: list[str] = []
    for item in items:
        if item is None:
            continue
        text = str(item).strip()
        if text:
            labels.append(text)
    return labels


def _coerce_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


class DriverPreferenceProfile(BaseModel):
    """A driver's stated dispatch preferences.

    Mirrors the preference row the application stores per driver. Every
    field is optional; missing values fall back to a neutral score.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    driver_id: str | None = Field(default=None, description="Opaque driver id")
    home_base: str | None = Field(
        default=None, description="Free-text home location, e.g. 'Sacramento, CA'"
    )
    preferred_regions: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("preferred_regions", "regions"),
        description="Region labels such as 'West Coast' or 'Midwest'",
    )
    preferred_equipment: list[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices(
            "preferred_equipment", "equipment", "trailer_type"
        ),
        description="Equipment labels such as 'Dry Van' or 'Reefer'",
    )
    avoid_states: list[str] = Field(
        default_factory=list, description="Two-letter state codes to avoid"
    )
    max_distance: float | None = Field(
        default=None,
        validation_alias=AliasChoices("max_distance", "max_distance_mi"),
        description="One-way comfort range in miles",
    )
    notes: str | None = Field(default=None, description="Dispatcher notes")
    updated_at: str | None = Field(default=None, description="Last update stamp")
    error: str | None = Field(
        default=None,
        description="Set when the preferences could not be read, e.g. 'access_denied'",
    )

    @field_validator("driver_id", "home_base", "notes", "updated_at", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str | None:
        return _coerce_text(value)

    @field_validator("error", mode="before")
    @classmethod
    def _error(cls, value: Any) -> str | None:
        # Falsy markers (False, 0, "") mean no error.
        return _coerce_text(value) if value else None

    @field_validator(
        "preferred_regions", "preferred_equipment", "avoid_states", mode="before"
    )
    @classmethod
    def _labels(cls, value: Any) -> list[str]:
        return _coerce_labels(value)

    @field_validator("max_distance", mode="before")
    @classmethod
    def _max_distance(cls, value: Any) -> float | None:
        number = _coerce_number(value)
        if number is None or number <= 0:
            return None
        return number

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> DriverPreferenceProfile:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class LoadCandidate(BaseModel):
    """A load offered to a driver. Only a handful of fields drive scoring."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    load_id: str | None = Field(default=None, description="Opaque load id")
    origin_city: str | None = None
    origin_state: str | None = Field(default=None, description="e.g. 'CA'")
    dest_city: str | None = None
    dest_state: str | None = Field(default=None, description="e.g. 'WA'")
    equipment_type: str | None = Field(default=None, description="e.g. 'Dry Van'")
    miles: float | None = Field(default=None, description="Planned trip miles")
    lane_name: str | None = None
    pickup_date: str | None = None

    @field_validator(
        "load_id",
        "origin_city",
        "dest_city",
        "equipment_type",
        "lane_name",
        "pickup_date",
        mode="before",
    )
    @classmethod
    def _text(cls, value: Any) -> str | None:
        return _coerce_text(value)

    @field_validator("origin_state", "dest_state", mode="before")
    @classmethod
    def _state(cls, value: Any) -> str | None:
        text = _coerce_text(value)
        return text.upper() if text else None

    @field_validator("miles", mode="before")
    @classmethod
    def _miles(cls, value: Any) -> float | None:
        # Non-positive values are kept; the scorer reports them as unknown.
        return _coerce_number(value)

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> LoadCandidate:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


@dataclass(frozen=True)
class FitBreakdown:
    """Points awarded per category."""

    equipment: int = 0
    region: int = 0
    distance: int = 0
    compliance: int = 0

    def __post_init__(self) -> None:
        for name, upper in (
            ("equipment", 30),
            ("region", 30),
            ("distance", 25),
            ("compliance", 15),
        ):
            value = getattr(self, name)
            if not (0 <= value <= upper):
                raise ValueError(f"{name} must be between 0 and {upper} (got {value})")

    @property
    def total(self) -> int:
        return self.equipment + self.region + self.distance + self.compliance


@dataclass(frozen=True)
class FitMeta:
    """Diagnostics explaining how the breakdown was reached."""

    matched_equipment: str | None = None
    matched_region_tags: tuple[str, ...] = ()
    hits: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Read-only view over a private copy.
        object.__setattr__(self, "hits", MappingProxyType(dict(self.hits)))

    def to_dict(self) -> dict:
        """Serialize to a JSON-ready dictionary."""
        return {
            "matched_equipment": self.matched_equipment,
            "matched_region_tags": list(self.matched_region_tags),
            "hits": dict(self.hits),
        }


@dataclass(frozen=True)
class FitResult:
    """Fit of one driver for one load."""

    score: int
    verdict: Verdict
    reasons: tuple[str, ...] = ()
    breakdown: FitBreakdown = field(default_factory=FitBreakdown)
    meta: FitMeta = field(default_factory=FitMeta)
    driver_id: str | None = None

    def __post_init__(self) -> None:
        if not (0 <= self.score <= 100):
            raise ValueError(f"score must be between 0 and 100 (got {self.score})")
        if self.verdict not in {"excellent", "good", "ok", "poor"}:
            raise ValueError(
                "verdict must be one of: excellent, good, ok, poor "
                f"(got {self.verdict})"
            )

    def to_dict(self) -> dict:
        """Serialize to a JSON-ready dictionary."""
        return {
            "score": self.score,
            "verdict": self.verdict,
            "reasons": list(self.reasons),
            "breakdown": asdict(self.breakdown),
            "meta": self.meta.to_dict(),
            "driver_id": self.driver_id,
        }
