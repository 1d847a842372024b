"""Equipment, region and state matching utilities for fit scoring."""

from __future__ import annotations

import re
from typing import NamedTuple

# Coarse region tags by state. West Coast is kept separate from the
# interior West because dispatch preferences use both labels.
STATE_TO_REGION: dict[str, str] = {
    # West
    "AK": "West Coast",
    "AZ": "West Coast",
    "CA": "West Coast",
    "CO": "West",
    "HI": "West",
    "ID": "West",
    "MT": "West",
    "NV": "West Coast",
    "NM": "West",
    "OR": "West Coast",
    "UT": "West",
    "WA": "West Coast",
    "WY": "West",
    # Midwest
    "IL": "Midwest",
    "IN": "Midwest",
    "IA": "Midwest",
    "KS": "Midwest",
    "MI": "Midwest",
    "MN": "Midwest",
    "MO": "Midwest",
    "NE": "Midwest",
    "ND": "Midwest",
    "OH": "Midwest",
    "SD": "Midwest",
    "WI": "Midwest",
    # South
    "AL": "South",
    "AR": "South",
    "DE": "South",
    "FL": "South",
    "GA": "South",
    "KY": "South",
    "LA": "South",
    "MD": "South",
    "MS": "South",
    "NC": "South",
    "OK": "South",
    "SC": "South",
    "TN": "South",
    "TX": "South",
    "VA": "South",
    "WV": "South",
    "DC": "South",
    # Northeast
    "CT": "Northeast",
    "ME": "Northeast",
    "MA": "Northeast",
    "NH": "Northeast",
    "NJ": "Northeast",
    "NY": "Northeast",
    "PA": "Northeast",
    "RI": "Northeast",
    "VT": "Northeast",
}

# Two-letter postal codes, including DC and the GU/FM territories.
STATE_ABBREVIATION_PATTERN = re.compile(
    r"\b(A[LKZR]|C[AOT]|D[CE]|F[LM]|G[AU]|H[I]|I[ADLN]|K[SY]|L[A]|M[ADEHINOST]"
    r"|N[CDEHJMVY]|O[HKR]|P[A]|R[I]|S[CD]|T[NX]|U[T]|V[AIT]|W[AIVY])\b",
    re.IGNORECASE,
)

# Load text pattern -> driver tokens that count as the same equipment.
_EQUIPMENT_ALIASES: tuple[tuple[re.Pattern[str], tuple[str, ...]], ...] = (
    (re.compile(r"(dry\s*)?van"), ("van", "dry van", "dryvan")),
    (re.compile(r"reefer|refrigerated"), ("reefer", "refrigerated")),
    (re.compile(r"flat\s*bed|flatbed"), ("flat", "flatbed")),
    (re.compile(r"step\s*deck|stepdeck"), ("step deck", "stepdeck", "step-deck")),
    (re.compile(r"power\s*only|poweronly"), ("power only", "power-only")),
)


class EquipmentMatch(NamedTuple):
    hit: bool
    matched: str | None


def normalize_label(value: object) -> str:
    """Lowercase and trim a free-text label; None becomes ''."""
    if value is None:
        return ""
    return str(value).strip().lower()


def equipment_matches(
    preferred_equipment: list[str], load_equipment: str | None
) -> EquipmentMatch:
    """Match a load's equipment text against a driver's preferred equipment.

    Three passes, first hit wins: a preferred token contained in the load
    text, then the alias table, then a last-resort containment check for
    non-empty tokens.
    """
    if not load_equipment:
        return EquipmentMatch(False, None)

    load_text = normalize_label(load_equipment)
    driver_tokens: list[str] = []
    for item in preferred_equipment:
        token = normalize_label(item)
        if token and token not in driver_tokens:
            driver_tokens.append(token)

    for token in driver_tokens:
        if token in load_text:
            return EquipmentMatch(True, token)

    token_set = set(driver_tokens)
    for pattern, keys in _EQUIPMENT_ALIASES:
        if pattern.search(load_text):
            for key in keys:
                if key in token_set:
                    return EquipmentMatch(True, key)

    for token in driver_tokens:
        if token and token in load_text:
            return EquipmentMatch(True, token)

    return EquipmentMatch(False, None)


def region_for_state(state: str | None) -> str | None:
    """Return the region tag for a two-letter state code, if known."""
    if not state:
        return None
    return STATE_TO_REGION.get(state.strip().upper())


def derive_load_regions(origin_state: str | None, dest_state: str | None) -> list[str]:
    """Region tags touched by a load, origin first, without duplicates."""
    tags: list[str] = []
    for state in (origin_state, dest_state):
        region = region_for_state(state)
        if region and region not in tags:
            tags.append(region)
    return tags


def extract_states_from_text(text: str | None) -> list[str]:
    """Find two-letter state codes in free text such as 'Sacramento, CA'."""
    if not text:
        return []
    return [m.group(1).upper() for m in STATE_ABBREVIATION_PATTERN.finditer(text)]
