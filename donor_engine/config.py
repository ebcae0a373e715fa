"""
Engine settings: tier bands and the impact-category split.

Settings are read from donor_engine/data/engine_settings.yaml, which ships
with the package. Override the location with the DONOR_ENGINE_SETTINGS
environment variable (a .env file is honored).

Usage:
    from donor_engine.config import get_settings

    settings = get_settings()
    settings.tiers[1].name  # "Bronze"
"""

import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, model_validator

load_dotenv()

logger = logging.getLogger(__name__)

SETTINGS_ENV_VAR = "DONOR_ENGINE_SETTINGS"


class TierBand(BaseModel):
    """A named tier starting at min_donations (inclusive)."""

    name: str = Field(..., min_length=1)
    min_donations: int = Field(..., ge=0)

    model_config = ConfigDict(frozen=True)


class ImpactSplit(BaseModel):
    """Fractions of total lives impacted attributed to each category."""

    emergency_surgeries: float = Field(0.3, ge=0, le=1)
    cancer_patients: float = Field(0.4, ge=0, le=1)
    accident_victims: float = Field(0.3, ge=0, le=1)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_total(self) -> "ImpactSplit":
        total = self.emergency_surgeries + self.cancer_patients + self.accident_victims
        if total > 1.0 + 1e-9:
            raise ValueError(f"Impact split fractions sum to {total:.2f}, expected at most 1.0")
        return self


DEFAULT_TIERS = [
    TierBand(name="New", min_donations=0),
    TierBand(name="Bronze", min_donations=5),
    TierBand(name="Silver", min_donations=15),
    TierBand(name="Gold", min_donations=25),
    TierBand(name="Platinum", min_donations=50),
]


class EngineSettings(BaseModel):
    """Validated engine settings."""

    tiers: List[TierBand] = Field(default_factory=lambda: list(DEFAULT_TIERS))
    impact_split: ImpactSplit = Field(default_factory=ImpactSplit)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_tiers(self) -> "EngineSettings":
        if not self.tiers:
            raise ValueError("At least one tier is required")
        if self.tiers[0].min_donations != 0:
            raise ValueError(f"First tier must start at 0 donations, got {self.tiers[0].min_donations}")
        for lower, upper in zip(self.tiers, self.tiers[1:]):
            if upper.min_donations <= lower.min_donations:
                raise ValueError(
                    f"Tier {upper.name} must start above {lower.name} "
                    f"({upper.min_donations} <= {lower.min_donations})"
                )
        names = [t.name for t in self.tiers]
        if len(set(names)) != len(names):
            raise ValueError(f"Tier names must be unique: {names}")
        return self


# Module-level cache
_settings_cache: Optional[EngineSettings] = None


def get_settings_path() -> Path:
    """
    Get the settings file path.

    Uses DONOR_ENGINE_SETTINGS if set, otherwise the data/engine_settings.yaml
    shipped inside the package.
    """
    env_path = os.environ.get(SETTINGS_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser().resolve()
    return Path(__file__).parent / "data" / "engine_settings.yaml"


def load_settings(config_path: Optional[Path] = None) -> EngineSettings:
    """
    Load settings from YAML without touching the cache.

    Falls back to built-in defaults when the file does not exist.

    Raises:
        ValueError: If the file exists but is not a valid settings document
    """
    config_path = config_path or get_settings_path()
    if not config_path.exists():
        logger.warning(f"Engine settings not found at {config_path}, using defaults")
        return EngineSettings()

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Engine settings at {config_path} must be a mapping")

    settings = EngineSettings(**raw)
    logger.info(f"Loaded {len(settings.tiers)} tiers from {config_path}")
    return settings


def get_settings() -> EngineSettings:
    """Load and cache engine settings."""
    global _settings_cache
    if _settings_cache is None:
        _settings_cache = load_settings()
    return _settings_cache


def clear_cache():
    """Clear the settings cache (useful for testing)."""
    global _settings_cache
    _settings_cache = None
