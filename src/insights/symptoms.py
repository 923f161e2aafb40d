"""Symptom vocabulary for the menopause check-in flow.

The check-in form offers a fixed set of 16 symptom tags: seven physical,
eight emotional/cognitive, and a catch-all.  Logs store the raw tag; every
user-facing string goes through ``format_symptom_name``.
"""

from __future__ import annotations

from enum import Enum


class SymptomType(str, Enum):
    # Physical
    hot_flashes = "hot_flashes"
    night_sweats = "night_sweats"
    sleep_issues = "sleep_issues"
    headaches = "headaches"
    joint_pain = "joint_pain"
    fatigue = "fatigue"
    heart_palpitations = "heart_palpitations"
    # Emotional / cognitive
    mood_swings = "mood_swings"
    anxiety = "anxiety"
    irritability = "irritability"
    depression = "depression"
    brain_fog = "brain_fog"
    memory_issues = "memory_issues"
    crying_spells = "crying_spells"
    feeling_overwhelmed = "feeling_overwhelmed"
    # Other
    other = "other"


SYMPTOM_LABELS: dict[SymptomType, str] = {
    SymptomType.hot_flashes: "Hot flashes",
    SymptomType.night_sweats: "Night sweats",
    SymptomType.sleep_issues: "Sleep issues",
    SymptomType.headaches: "Headaches",
    SymptomType.joint_pain: "Joint pain",
    SymptomType.fatigue: "Fatigue",
    SymptomType.heart_palpitations: "Heart palpitations",
    SymptomType.mood_swings: "Mood swings",
    SymptomType.anxiety: "Anxiety",
    SymptomType.irritability: "Irritability",
    SymptomType.depression: "Depression/Low mood",
    SymptomType.brain_fog: "Brain fog",
    SymptomType.memory_issues: "Memory issues",
    SymptomType.crying_spells: "Crying spells",
    SymptomType.feeling_overwhelmed: "Feeling overwhelmed",
    SymptomType.other: "Other",
}

# The label table must cover the whole enum
_missing = set(SymptomType) - SYMPTOM_LABELS.keys()
if _missing:
    raise RuntimeError(
        f"SYMPTOM_LABELS is missing: {sorted(s.value for s in _missing)}"
    )


def format_symptom_name(symptom: str) -> str:
    """Return the display label for a symptom tag.

    Unknown tags (e.g. written by a newer client) are returned unchanged.
    """
    try:
        return SYMPTOM_LABELS[SymptomType(symptom)]
    except ValueError:
        return symptom
