"""Load, validate, and hot-reload the insights engine thresholds.

The thresholds live in ``insights_config.yaml`` alongside this module.  They
are loaded once on first use and cached.  Call ``reload_insights_config()``
to re-read from disk after an edit; no restart required.

Usage::

    from src.insights.config_loader import get_insights_config

    config = get_insights_config()
    config.patterns.severity_min_abs_slope   # 0.05
    config.correlations.min_samples          # 5
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger("menoai.insights.config")

# Path to the YAML file sitting next to this module
_CONFIG_PATH = Path(__file__).parent / "insights_config.yaml"


# ---------------------------------------------------------------------------
# Typed config sections
# ---------------------------------------------------------------------------


@dataclass
class PatternThresholds:
    """Gates for the three single-variable pattern analyses."""

    dow_min_days_with_data: int = 3
    dow_min_difference: float = 1.0
    dow_high_confidence_difference: float = 1.5
    severity_min_logs: int = 10
    severity_min_observations: int = 10
    severity_min_abs_slope: float = 0.05
    severity_high_confidence_slope: float = 0.1
    frequency_min_logs: int = 14
    frequency_min_abs_change: int = 3
    frequency_min_abs_percent_change: float = 50.0
    frequency_high_confidence_change: int = 5


@dataclass
class CorrelationThresholds:
    """Minimum |r| and sample size for each correlation family."""

    min_samples: int = 5
    symptom_energy_min_r: float = 0.5
    symptom_mood_min_r: float = 0.5
    symptom_symptom_min_r: float = 0.6
    global_min_r: float = 0.5


@dataclass
class RecommendationRules:
    max_recommendations: int = 5
    strong_negative_r: float = -0.6
    streak_min_logs: int = 21
    streak_max_logs: int = 30  # exclusive
    journal_pairing_min_logs: int = 10  # exclusive
    journal_pairing_min_ratio: float = 0.5


@dataclass
class SummaryRules:
    trend_min_logs: int = 14
    stable_threshold: float = 0.3


@dataclass
class InsightsConfig:
    """Complete, validated insights configuration.

    This is the single in-memory representation of insights_config.yaml.
    Every analysis stage reads its thresholds from this object.

    Attributes:
        version:               Config schema version string.
        min_logs_for_insights: Below this many logs the engine short-circuits.
        patterns:              Pattern detector gates.
        correlations:          Correlation finder gates.
        recommendations:       Recommendation rules and output cap.
        summary:               Summary trend rules.
    """

    version: str = "1.0"
    min_logs_for_insights: int = 5
    patterns: PatternThresholds = field(default_factory=PatternThresholds)
    correlations: CorrelationThresholds = field(default_factory=CorrelationThresholds)
    recommendations: RecommendationRules = field(default_factory=RecommendationRules)
    summary: SummaryRules = field(default_factory=SummaryRules)


# ---------------------------------------------------------------------------
# Loader / validation
# ---------------------------------------------------------------------------


class ConfigValidationError(ValueError):
    """Raised when insights_config.yaml fails validation."""


def _load_yaml(path: Path) -> dict:
    """Read and parse a YAML file.

    Raises:
        FileNotFoundError:     If the file does not exist.
        ConfigValidationError: If the YAML is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Insights config not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        try:
            loaded = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigValidationError(f"YAML parse error in {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"{path} must contain a mapping at the top level")
    return loaded


def _validate_and_build(raw: dict) -> InsightsConfig:
    """Validate the raw YAML dict and construct an InsightsConfig.

    Missing keys fall back to the dataclass defaults.  Every problem is
    collected before raising so one edit can fix them all.

    Raises:
        ConfigValidationError: If any value has the wrong type or range.
    """
    errors: list[str] = []

    def _section(d: Any, key: str, path: str) -> dict:
        value = (d or {}).get(key, {}) if isinstance(d, dict) else {}
        if value is None:
            return {}
        if not isinstance(value, dict):
            errors.append(f"'{path}' must be a mapping")
            return {}
        return value

    def _number(d: dict, key: str, default: float, path: str, cast: type = float) -> Any:
        if key not in d:
            return default
        value = d[key]
        if isinstance(value, bool):
            errors.append(f"{path}.{key} must be a number, got {value!r}")
            return default
        if cast is int and isinstance(value, float) and not value.is_integer():
            errors.append(f"{path}.{key} must be a whole number, got {value!r}")
            return default
        try:
            return cast(value)
        except (TypeError, ValueError):
            errors.append(f"{path}.{key} must be a number, got {value!r}")
            return default

    def _positive(value: float, path: str) -> None:
        if value <= 0:
            errors.append(f"{path} = {value} must be positive")

    version = str(raw.get("version", "1.0"))
    min_logs = _number(raw, "min_logs_for_insights", 5, "root", int)
    _positive(min_logs, "min_logs_for_insights")

    # ── Patterns ──
    p_raw = _section(raw, "patterns", "patterns")
    dow = _section(p_raw, "day_of_week", "patterns.day_of_week")
    sev = _section(p_raw, "severity_trend", "patterns.severity_trend")
    freq = _section(p_raw, "frequency_trend", "patterns.frequency_trend")
    pd = PatternThresholds()
    patterns = PatternThresholds(
        dow_min_days_with_data=_number(
            dow, "min_days_with_data", pd.dow_min_days_with_data, "patterns.day_of_week", int
        ),
        dow_min_difference=_number(
            dow, "min_difference", pd.dow_min_difference, "patterns.day_of_week"
        ),
        dow_high_confidence_difference=_number(
            dow, "high_confidence_difference", pd.dow_high_confidence_difference,
            "patterns.day_of_week",
        ),
        severity_min_logs=_number(
            sev, "min_logs", pd.severity_min_logs, "patterns.severity_trend", int
        ),
        severity_min_observations=_number(
            sev, "min_observations", pd.severity_min_observations,
            "patterns.severity_trend", int,
        ),
        severity_min_abs_slope=_number(
            sev, "min_abs_slope", pd.severity_min_abs_slope, "patterns.severity_trend"
        ),
        severity_high_confidence_slope=_number(
            sev, "high_confidence_slope", pd.severity_high_confidence_slope,
            "patterns.severity_trend",
        ),
        frequency_min_logs=_number(
            freq, "min_logs", pd.frequency_min_logs, "patterns.frequency_trend", int
        ),
        frequency_min_abs_change=_number(
            freq, "min_abs_change", pd.frequency_min_abs_change,
            "patterns.frequency_trend", int,
        ),
        frequency_min_abs_percent_change=_number(
            freq, "min_abs_percent_change", pd.frequency_min_abs_percent_change,
            "patterns.frequency_trend",
        ),
        frequency_high_confidence_change=_number(
            freq, "high_confidence_change", pd.frequency_high_confidence_change,
            "patterns.frequency_trend", int,
        ),
    )
    # Trend regression needs two points to be defined
    if patterns.severity_min_observations < 2:
        errors.append("patterns.severity_trend.min_observations must be at least 2")
    if patterns.dow_high_confidence_difference < patterns.dow_min_difference:
        errors.append(
            "patterns.day_of_week.high_confidence_difference must be >= min_difference"
        )

    # ── Correlations ──
    c_raw = _section(raw, "correlations", "correlations")
    cd = CorrelationThresholds()
    correlations = CorrelationThresholds(
        min_samples=_number(c_raw, "min_samples", cd.min_samples, "correlations", int),
        symptom_energy_min_r=_number(
            c_raw, "symptom_energy_min_r", cd.symptom_energy_min_r, "correlations"
        ),
        symptom_mood_min_r=_number(
            c_raw, "symptom_mood_min_r", cd.symptom_mood_min_r, "correlations"
        ),
        symptom_symptom_min_r=_number(
            c_raw, "symptom_symptom_min_r", cd.symptom_symptom_min_r, "correlations"
        ),
        global_min_r=_number(c_raw, "global_min_r", cd.global_min_r, "correlations"),
    )
    _positive(correlations.min_samples, "correlations.min_samples")
    for name in (
        "symptom_energy_min_r",
        "symptom_mood_min_r",
        "symptom_symptom_min_r",
        "global_min_r",
    ):
        value = getattr(correlations, name)
        if not (0.0 <= value <= 1.0):
            errors.append(f"correlations.{name} = {value} is out of range [0.0, 1.0]")

    # ── Recommendations ──
    r_raw = _section(raw, "recommendations", "recommendations")
    rd = RecommendationRules()
    recommendations = RecommendationRules(
        max_recommendations=_number(
            r_raw, "max_recommendations", rd.max_recommendations, "recommendations", int
        ),
        strong_negative_r=_number(
            r_raw, "strong_negative_r", rd.strong_negative_r, "recommendations"
        ),
        streak_min_logs=_number(
            r_raw, "streak_min_logs", rd.streak_min_logs, "recommendations", int
        ),
        streak_max_logs=_number(
            r_raw, "streak_max_logs", rd.streak_max_logs, "recommendations", int
        ),
        journal_pairing_min_logs=_number(
            r_raw, "journal_pairing_min_logs", rd.journal_pairing_min_logs,
            "recommendations", int,
        ),
        journal_pairing_min_ratio=_number(
            r_raw, "journal_pairing_min_ratio", rd.journal_pairing_min_ratio,
            "recommendations",
        ),
    )
    _positive(recommendations.max_recommendations, "recommendations.max_recommendations")
    if not (-1.0 <= recommendations.strong_negative_r <= 0.0):
        errors.append(
            f"recommendations.strong_negative_r = {recommendations.strong_negative_r} "
            "is out of range [-1.0, 0.0]"
        )
    if recommendations.streak_min_logs >= recommendations.streak_max_logs:
        errors.append("recommendations.streak_min_logs must be < streak_max_logs")

    # ── Summary ──
    s_raw = _section(raw, "summary", "summary")
    sd = SummaryRules()
    summary = SummaryRules(
        trend_min_logs=_number(s_raw, "trend_min_logs", sd.trend_min_logs, "summary", int),
        stable_threshold=_number(
            s_raw, "stable_threshold", sd.stable_threshold, "summary"
        ),
    )
    _positive(summary.trend_min_logs, "summary.trend_min_logs")

    if errors:
        raise ConfigValidationError(
            f"insights_config.yaml has {len(errors)} validation error(s):\n"
            + "\n".join(f"  • {e}" for e in errors)
        )

    return InsightsConfig(
        version=version,
        min_logs_for_insights=min_logs,
        patterns=patterns,
        correlations=correlations,
        recommendations=recommendations,
        summary=summary,
    )


def load_insights_config(path: Path | None = None) -> InsightsConfig:
    """Load and validate the insights config from disk.

    Args:
        path: Override path to YAML. Uses the bundled insights_config.yaml by default.
    """
    target = path or _CONFIG_PATH
    raw = _load_yaml(target)
    config = _validate_and_build(raw)
    logger.info("Loaded insights config v%s from %s", config.version, target)
    return config


# ---------------------------------------------------------------------------
# Global singleton with hot-reload support
# ---------------------------------------------------------------------------

_config: InsightsConfig | None = None
_config_lock = threading.Lock()


def get_insights_config() -> InsightsConfig:
    """Return the global InsightsConfig singleton, loading it on first call."""
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:  # double-checked locking
                _config = load_insights_config()
    return _config


def reload_insights_config(path: Path | None = None) -> InsightsConfig:
    """Reload the config from disk and replace the global singleton.

    If validation fails, the old config is retained and the error is re-raised.

    Raises:
        ConfigValidationError: If the new config is invalid.
        FileNotFoundError:     If the config file is missing.
    """
    global _config
    new_config = load_insights_config(path)  # validate before acquiring lock
    with _config_lock:
        old_version = _config.version if _config else "none"
        _config = new_config
    logger.info("Reloaded insights config: %s → %s", old_version, new_config.version)
    return new_config
