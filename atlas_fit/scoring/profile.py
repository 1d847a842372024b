"""Profile and load document loading utilities."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from atlas_fit.scoring.config import ScoringConfig, get_scoring_config
from atlas_fit.scoring.matchers import extract_states_from_text
from atlas_fit.scoring.models import DriverPreferenceProfile, LoadCandidate
from atlas_fit.utils.logging import get_logger

logger = get_logger(__name__)


class ProfileService:
    """Service for loading driver preference profiles and loads from disk."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or get_scoring_config()

    def load_profile(self, path: Path | str | None = None) -> DriverPreferenceProfile:
        """Load and validate a driver profile from YAML or JSON."""
        profile_path = Path(path) if path is not None else self.config.profile_path
        data = self._read_mapping(profile_path)
        return DriverPreferenceProfile.model_validate(data)

    def load_profiles(
        self, path: Path | str
    ) -> list[DriverPreferenceProfile | None]:
        """Load several driver profiles.

        The document is either a list of profiles or a mapping with a
        ``drivers`` list. Null entries stay ``None`` and entries with an
        ``error`` key keep it, so the scorer can give them a no-access fit.
        """
        profiles_path = Path(path)
        data = self._read(profiles_path)
        if isinstance(data, dict):
            data = data.get("drivers")
        if not isinstance(data, list):
            raise ValueError(
                f"Drivers file must be a list or contain a 'drivers' list: {profiles_path}"
            )

        profiles: list[DriverPreferenceProfile | None] = []
        for index, item in enumerate(data):
            if item is None:
                profiles.append(None)
                continue
            if not isinstance(item, dict):
                raise ValueError(
                    f"Driver entry {index} must be a mapping/dict: {profiles_path}"
                )
            profiles.append(DriverPreferenceProfile.model_validate(item))
        logger.debug(f"Loaded {len(profiles)} driver profiles from {profiles_path}")
        return profiles

    def load_candidate(self, path: Path | str) -> LoadCandidate:
        """Load a single load record from YAML or JSON."""
        data = self._read_mapping(Path(path))
        return LoadCandidate.model_validate(data)

    def validate_profile(self, profile: DriverPreferenceProfile) -> list[str]:
        """Return warnings for incomplete profiles."""
        warnings: list[str] = []

        if profile.error:
            warnings.append(f"Preferences unavailable ({profile.error}); fit will be 0")
        if not profile.preferred_equipment:
            warnings.append("No preferred equipment (equipment scores neutral)")
        if not profile.preferred_regions:
            warnings.append("No preferred regions (region scores neutral)")
        if profile.max_distance is None:
            warnings.append("No max distance set (absolute mileage bands apply)")
        if not extract_states_from_text(profile.home_base):
            warnings.append("Home base has no recognizable state code")

        return warnings

    def _read_mapping(self, path: Path) -> dict:
        data = self._read(path)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Document must be a mapping/dict: {path}")
        return data

    def _read(self, path: Path) -> Any:
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        suffix = path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            return self._load_yaml(path)
        if suffix == ".json":
            return self._load_json(path)
        return self._load_unknown(path)

    def _load_yaml(self, path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML document: {path}") from e

    def _load_json(self, path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON document: {path}") from e

    def _load_unknown(self, path: Path) -> Any:
        """Auto-detect the format when the file extension is unknown."""
        raw = path.read_text(encoding="utf-8")
        raw_stripped = raw.lstrip()

        # Try JSON first if it looks like JSON, otherwise fall back to YAML.
        if raw_stripped.startswith("{") or raw_stripped.startswith("["):
            try:
                return json.loads(raw)
            except json.JSONDecodeError:
                pass

        try:
            return yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid document format: {path}") from e
