"""Chord progression catalog and roman-numeral mapping.

Progressions are stored as roman-numeral degree lists and resolved against a
generated harmonic field.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple, Union

from .harmonic_field import Chord, HarmonicField
from .tables import ScaleMode, parse_scale_mode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Progression:
    """Named roman-numeral progression."""

    name: str
    degrees: Tuple[str, ...]
    description: str


COMMON_PROGRESSIONS: Dict[ScaleMode, Tuple[Progression, ...]] = {
    ScaleMode.MAJOR: (
        Progression("Pop 4 Chords", ("I", "V", "vi", "IV"), "The backbone of thousands of pop and rock hits."),
        Progression("Jazz Standard (ii-V-I)", ("ii", "V", "I"), "The most important cadence in jazz."),
        Progression("50s Ballad", ("I", "vi", "IV", "V"), "Classic doo-wop progression."),
        Progression("Pop Punk", ("I", "V", "vi", "iii", "IV"), "Common in Canon in D style songs."),
        Progression("Basic Blues", ("I", "IV", "I", "V", "IV", "I"), "Simplified blues structure."),
    ),
    ScaleMode.NATURAL_MINOR: (
        Progression("Epic / Pop", ("i", "VI", "III", "VII"), "Modern progression heard all over the charts."),
        Progression("Andalusian", ("i", "VII", "VI", "v"), "Descending line, flamenco or Ray Charles style."),
        Progression("Minor Jazz", ("ii°", "v", "i"), "The 2-5-1 cadence in a minor key."),
        Progression("Sad Ballad", ("i", "iv", "v", "i"), "Classic minor progression."),
    ),
}


def get_progressions(scale: Union[ScaleMode, str]) -> Tuple[Progression, ...]:
    """Catalog of common progressions for a scale mode."""
    return COMMON_PROGRESSIONS[parse_scale_mode(scale)]


def find_progression(name: str, scale: Union[ScaleMode, str]) -> Progression:
    """Look up a catalog progression by name."""
    for progression in get_progressions(scale):
        if progression.name == name:
            return progression
    raise ValueError(f"Unknown progression: {name}")


def map_progression(field: HarmonicField, degrees: Sequence[str]) -> List[Chord]:
    """Resolve roman-numeral degrees to chords of `field`.

    Matching is exact string equality, diatonic chords before secondary
    dominants. Degrees that match nothing are left out of the result.
    """
    chords = []
    for degree in degrees:
        chord = field.find(degree)
        if chord is None:
            logger.debug(f"Dropping unresolved degree {degree!r} in {field.root} {field.scale.value}")
            continue
        chords.append(chord)
    return chords


def progression_to_chords(name: str, field: HarmonicField) -> List[Chord]:
    """Resolve a catalog progression against `field`."""
    progression = find_progression(name, field.scale)
    return map_progression(field, progression.degrees)


__all__ = [
    "Progression",
    "COMMON_PROGRESSIONS",
    "get_progressions",
    "find_progression",
    "map_progression",
    "progression_to_chords",
]
