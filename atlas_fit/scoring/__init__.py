"""Driver-load fit scoring.

This module scores how well a load matches a driver's stated preferences
(equipment, regions, comfort range, avoid states).

Public API:
    - compute_driver_fit: Score one driver profile against one load
    - fit_load_for_driver: Null-safe wrapper for raw preference payloads
    - rank_drivers_for_load: Score and order many drivers for one load
    - DriverFitScorer: Service wrapping the above with configuration
    - ProfileService: Load profiles and loads from YAML/JSON
    - DriverPreferenceProfile, LoadCandidate: Input models
    - FitResult, FitBreakdown, FitMeta: Output models
    - ScoringConfig: Configuration settings
"""

from atlas_fit.scoring.config import (
    ScoringConfig,
    get_scoring_config,
    reset_scoring_config,
)
from atlas_fit.scoring.models import (
    DriverPreferenceProfile,
    FitBreakdown,
    FitMeta,
    FitResult,
    LoadCandidate,
)
from atlas_fit.scoring.profile import ProfileService
from atlas_fit.scoring.service import (
    DriverFitScorer,
    compute_driver_fit,
    fit_load_for_driver,
    rank_drivers_for_load,
)

__all__ = [
    "compute_driver_fit",
    "fit_load_for_driver",
    "rank_drivers_for_load",
    "DriverFitScorer",
    "ProfileService",
    "DriverPreferenceProfile",
    "LoadCandidate",
    "FitResult",
    "FitBreakdown",
    "FitMeta",
    "ScoringConfig",
    "get_scoring_config",
    "reset_scoring_config",
]
