"""Scale and chord interval tables.

Provides the two supported scale modes, the four chord qualities, and the
per-degree record (quality, numeral, harmonic function) for each mode.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union


class ScaleMode(str, Enum):
    """Supported scale modes."""
    MAJOR = "major"
    NATURAL_MINOR = "natural_minor"


class ChordQuality(str, Enum):
    """Chord structures built by the engine."""
    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    DOMINANT_7 = "dom7"


# Scale patterns (semitones from scale root)
SCALE_INTERVALS: Dict[ScaleMode, Tuple[int, ...]] = {
    ScaleMode.MAJOR: (0, 2, 4, 5, 7, 9, 11),  # W-W-H-W-W-W-H
    ScaleMode.NATURAL_MINOR: (0, 2, 3, 5, 7, 8, 10),  # W-H-W-W-H-W-W
}


# Chord intervals from the chord's own root (semitones)
CHORD_INTERVALS: Dict[ChordQuality, Tuple[int, ...]] = {
    ChordQuality.MAJOR: (0, 4, 7),
    ChordQuality.MINOR: (0, 3, 7),
    ChordQuality.DIMINISHED: (0, 3, 6),
    ChordQuality.DOMINANT_7: (0, 4, 7, 10),
}

QUALITY_SUFFIXES: Dict[ChordQuality, str] = {
    ChordQuality.MAJOR: "",
    ChordQuality.MINOR: "m",
    ChordQuality.DIMINISHED: "dim",
    ChordQuality.DOMINANT_7: "7",
}

QUALITY_NAMES: Dict[ChordQuality, str] = {
    ChordQuality.MAJOR: "Major",
    ChordQuality.MINOR: "Minor",
    ChordQuality.DIMINISHED: "Diminished",
    ChordQuality.DOMINANT_7: "Dominant",
}


@dataclass(frozen=True)
class DegreeSpec:
    """Fixed description of one scale degree's triad."""

    quality: ChordQuality
    numeral: str
    function: str


DEGREE_TABLE: Dict[ScaleMode, Tuple[DegreeSpec, ...]] = {
    ScaleMode.MAJOR: (
        DegreeSpec(ChordQuality.MAJOR, "I", "Tonic (rest)"),
        DegreeSpec(ChordQuality.MINOR, "ii", "Subdominant (departure)"),
        DegreeSpec(ChordQuality.MINOR, "iii", "Tonic/Dominant (relative)"),
        DegreeSpec(ChordQuality.MAJOR, "IV", "Subdominant (departure)"),
        DegreeSpec(ChordQuality.MAJOR, "V", "Dominant (tension)"),
        DegreeSpec(ChordQuality.MINOR, "vi", "Tonic (relative)"),
        DegreeSpec(ChordQuality.DIMINISHED, "vii°", "Dominant (leading-tone tension)"),
    ),
    ScaleMode.NATURAL_MINOR: (
        DegreeSpec(ChordQuality.MINOR, "i", "Tonic"),
        DegreeSpec(ChordQuality.DIMINISHED, "ii°", "Subdominant"),
        DegreeSpec(ChordQuality.MAJOR, "III", "Tonic"),
        DegreeSpec(ChordQuality.MINOR, "iv", "Subdominant"),
        DegreeSpec(ChordQuality.MINOR, "v", "Dominant"),
        DegreeSpec(ChordQuality.MAJOR, "VI", "Subdominant"),
        DegreeSpec(ChordQuality.MAJOR, "VII", "Dominant"),
    ),
}


# Secondary dominant targets: (diatonic degree index, label). Major mode only.
SECONDARY_TARGETS: Tuple[Tuple[int, str], ...] = (
    (1, "V7/ii"),
    (2, "V7/iii"),
    (3, "V7/IV"),
    (4, "V7/V"),
    (5, "V7/vi"),
)

# Dominant root sits a perfect fifth above its target
PERFECT_FIFTH = 7

_SCALE_ALIASES = {
    "minor": ScaleMode.NATURAL_MINOR,
    "natural minor": ScaleMode.NATURAL_MINOR,
}


def parse_scale_mode(value: Union[ScaleMode, str]) -> ScaleMode:
    """Convert a scale name (e.g., 'major', 'natural_minor', 'minor') to ScaleMode."""
    if isinstance(value, ScaleMode):
        return value

    key = value.strip().lower()
    if key in _SCALE_ALIASES:
        return _SCALE_ALIASES[key]
    try:
        return ScaleMode(key)
    except ValueError:
        raise ValueError(f"Unknown scale mode: {value}") from None


__all__ = [
    "ScaleMode",
    "ChordQuality",
    "SCALE_INTERVALS",
    "CHORD_INTERVALS",
    "QUALITY_SUFFIXES",
    "QUALITY_NAMES",
    "DegreeSpec",
    "DEGREE_TABLE",
    "SECONDARY_TARGETS",
    "PERFECT_FIFTH",
    "parse_scale_mode",
]
