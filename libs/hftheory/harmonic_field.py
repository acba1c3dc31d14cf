"""Harmonic field generation.

Builds the seven diatonic chords of a key and, for major keys, the secondary
dominants that resolve into degrees ii through vi.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .pitch import NOTE_NAMES, NOTES_PER_OCTAVE, note_from_interval, note_index
from .tables import (
    CHORD_INTERVALS,
    DEGREE_TABLE,
    PERFECT_FIFTH,
    QUALITY_NAMES,
    QUALITY_SUFFIXES,
    SCALE_INTERVALS,
    SECONDARY_TARGETS,
    ChordQuality,
    ScaleMode,
    parse_scale_mode,
)

DIATONIC = "diatonic"
SECONDARY = "secondary"


@dataclass(frozen=True)
class Chord:
    """A chord placed in a key.

    `symbol` is what the UI uses to tell chords apart; it is unique within
    one harmonic field.
    """

    roman: str
    name: str
    symbol: str
    notes: Tuple[str, ...]  # root first
    quality: ChordQuality
    intervals: Tuple[int, ...]
    function: str
    category: str = DIATONIC

    @property
    def root(self) -> str:
        return self.notes[0]

    def contains(self, note: str) -> bool:
        """True if the pitch class named `note` is a chord tone."""
        return note in self.notes


@dataclass(frozen=True)
class HarmonicField:
    """Diatonic chords and secondary dominants for one key."""

    root: str
    scale: ScaleMode
    chords: Tuple[Chord, ...]
    secondary_dominants: Tuple[Chord, ...] = ()

    @property
    def all_chords(self) -> Tuple[Chord, ...]:
        return self.chords + self.secondary_dominants

    def find(self, roman: str) -> Optional[Chord]:
        """Chord whose numeral equals `roman`, diatonic chords first."""
        for chord in self.all_chords:
            if chord.roman == roman:
                return chord
        return None


def build_chord(
    root_index: int,
    quality: ChordQuality,
    roman: str,
    function: str,
    category: str = DIATONIC,
) -> Chord:
    """Build a chord from its root pitch class and quality."""
    root_name = NOTE_NAMES[root_index % NOTES_PER_OCTAVE]
    intervals = CHORD_INTERVALS[quality]
    return Chord(
        roman=roman,
        name=f"{root_name} {QUALITY_NAMES[quality]}",
        symbol=root_name + QUALITY_SUFFIXES[quality],
        notes=tuple(note_from_interval(root_index, interval) for interval in intervals),
        quality=quality,
        intervals=intervals,
        function=function,
        category=category,
    )


def _secondary_dominants(chords: Tuple[Chord, ...]) -> Tuple[Chord, ...]:
    dominants = []
    for degree, label in SECONDARY_TARGETS:
        target = chords[degree]
        dominant_root = (note_index(target.root) + PERFECT_FIFTH) % NOTES_PER_OCTAVE
        dominants.append(
            build_chord(
                dominant_root,
                ChordQuality.DOMINANT_7,
                roman=label,
                function=f"Prepares {target.symbol}",
                category=SECONDARY,
            )
        )
    return tuple(dominants)


def generate_harmonic_field(
    root: Union[str, int],
    scale: Union[ScaleMode, str] = ScaleMode.MAJOR,
) -> HarmonicField:
    """Generate the harmonic field for a key.

    Args:
        root: Key root as a note name ('C', 'F#', 'Bb') or pitch index 0-11
        scale: ScaleMode or its string value

    Returns:
        HarmonicField with 7 diatonic chords and, for major keys, 5 secondary
        dominants (V7/ii .. V7/vi). Natural-minor keys get none.
    """
    mode = parse_scale_mode(scale)
    root_index = note_index(root)

    chords = tuple(
        build_chord((root_index + offset) % NOTES_PER_OCTAVE, degree.quality, degree.numeral, degree.function)
        for offset, degree in zip(SCALE_INTERVALS[mode], DEGREE_TABLE[mode])
    )

    secondary: Tuple[Chord, ...] = ()
    if mode is ScaleMode.MAJOR:
        secondary = _secondary_dominants(chords)

    return HarmonicField(
        root=NOTE_NAMES[root_index],
        scale=mode,
        chords=chords,
        secondary_dominants=secondary,
    )


__all__ = [
    "DIATONIC",
    "SECONDARY",
    "Chord",
    "HarmonicField",
    "build_chord",
    "generate_harmonic_field",
]
