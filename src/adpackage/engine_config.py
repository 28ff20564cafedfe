"""Engine tuning loaded from YAML: overlap coefficients and cadence rates.

Both sections are optional. A missing, empty, or unparseable file yields the
built-in defaults, so the engine runs with zero configuration.

Example ``config/engine.yaml``::

    overlap:
      single_pub_multi_channel: 0.60
      multi_pub_same_geo: 0.75
      multi_pub_diff_geo: 0.90
      default: 0.70
    cadences:
      semi-weekly: 8.66
"""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, Field, field_validator

from adpackage.metrics.cadence import merge_cadence_table
from adpackage.reach.overlap import OverlapConfig

logger = structlog.get_logger()


class EngineConfig(BaseModel):
    """Externally tunable engine parameters."""

    model_config = ConfigDict(frozen=True)

    overlap: OverlapConfig = Field(default_factory=OverlapConfig)
    cadences: dict[str, float] = Field(default_factory=dict)

    @field_validator("cadences")
    @classmethod
    def rates_must_be_positive(cls, v: dict[str, float]) -> dict[str, float]:
        """Ensure every cadence override maps to a positive rate, keyed lower-case."""
        normalized: dict[str, float] = {}
        for cadence, rate in v.items():
            if rate <= 0:
                raise ValueError(f"cadence {cadence!r} must have a positive rate, got {rate}")
            normalized[cadence.strip().lower()] = rate
        return normalized

    def cadence_table(self) -> dict[str, float]:
        """Return the default cadence table with this config's overrides applied."""
        return merge_cadence_table(self.cadences)


def load_engine_config(path: Path) -> EngineConfig:
    """Load and validate engine config from a YAML file.

    Args:
        path: Path to the YAML config file.

    Returns:
        Validated config. Falls back to all-defaults if the file is missing,
        empty, or contains invalid YAML.

    Raises:
        pydantic.ValidationError: If the YAML parses but holds invalid values.
    """
    if not path.exists():
        logger.debug("engine_config_missing", path=str(path))
        return EngineConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError:
        logger.warning("engine_config_invalid_yaml", path=str(path))
        return EngineConfig()

    if raw is None:
        return EngineConfig()

    config = EngineConfig.model_validate(raw)
    logger.info("engine_config_loaded", path=str(path), cadence_overrides=len(config.cadences))
    return config
