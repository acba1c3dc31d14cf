"""Guitar chord shapes for standard tuning.

Maps a chord root and quality to fret positions on six strings. String 0 is
the low E, string 5 the high E. Shapes exist for major, minor, and diminished
triads on all 12 roots; dominant sevenths have no shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from .harmonic_field import Chord
from .tables import ChordQuality

MUTED = -1
OPEN = 0

# Standard tuning, low to high (MIDI)
STANDARD_TUNING: Tuple[int, ...] = (40, 45, 50, 55, 59, 64)  # EADGBE


@dataclass(frozen=True)
class GuitarPosition:
    """One string of a chord shape.

    `finger` is 1 (index) through 4 (little), None for open or muted strings.
    """

    string: int
    fret: int
    finger: Optional[int] = None

    @property
    def is_muted(self) -> bool:
        return self.fret == MUTED

    @property
    def is_open(self) -> bool:
        return self.fret == OPEN

    @property
    def midi(self) -> Optional[int]:
        """Sounding MIDI pitch, None when muted."""
        if self.is_muted:
            return None
        return STANDARD_TUNING[self.string] + self.fret


Fretting = Union[int, Tuple[int, int]]


def _shape(*frets: Fretting) -> Tuple[GuitarPosition, ...]:
    """Build a shape from six entries, low E first: a bare fret or (fret, finger)."""
    positions = []
    for string, entry in enumerate(frets):
        if isinstance(entry, tuple):
            positions.append(GuitarPosition(string, entry[0], entry[1]))
        else:
            positions.append(GuitarPosition(string, entry))
    return tuple(positions)


X = MUTED

# Barre shapes use the E or A form. Diminished entries are four-string
# diminished-seventh grips, which add the bb7 above the triad.
CHORD_SHAPES: Dict[str, Dict[ChordQuality, Tuple[GuitarPosition, ...]]] = {
    "C": {
        ChordQuality.MAJOR: _shape(X, (3, 3), (2, 2), 0, (1, 1), 0),
        ChordQuality.MINOR: _shape(X, (3, 1), (5, 3), (5, 4), (4, 2), (3, 1)),
        ChordQuality.DIMINISHED: _shape(X, X, (1, 1), (2, 2), (1, 1), (2, 3)),
    },
    "C#": {
        ChordQuality.MAJOR: _shape(X, (4, 1), (6, 2), (6, 3), (6, 4), (4, 1)),
        ChordQuality.MINOR: _shape(X, (4, 1), (6, 3), (6, 4), (5, 2), (4, 1)),
        ChordQuality.DIMINISHED: _shape(X, X, (2, 1), (3, 2), (2, 1), (3, 3)),
    },
    "D": {
        ChordQuality.MAJOR: _shape(X, X, 0, (2, 1), (3, 3), (2, 2)),
        ChordQuality.MINOR: _shape(X, X, 0, (2, 2), (3, 3), (1, 1)),
        ChordQuality.DIMINISHED: _shape(X, X, 0, (1, 1), 0, (1, 2)),
    },
    "D#": {
        ChordQuality.MAJOR: _shape(X, (6, 1), (8, 2), (8, 3), (8, 4), (6, 1)),
        ChordQuality.MINOR: _shape(X, (6, 1), (8, 3), (8, 4), (7, 2), (6, 1)),
        ChordQuality.DIMINISHED: _shape(X, X, (1, 1), (2, 2), (1, 1), (2, 3)),
    },
    "E": {
        ChordQuality.MAJOR: _shape(0, (2, 2), (2, 3), (1, 1), 0, 0),
        ChordQuality.MINOR: _shape(0, (2, 2), (2, 3), 0, 0, 0),
        ChordQuality.DIMINISHED: _shape(X, X, (2, 1), (3, 2), (2, 1), (3, 3)),
    },
    "F": {
        ChordQuality.MAJOR: _shape((1, 1), (3, 3), (3, 4), (2, 2), (1, 1), (1, 1)),
        ChordQuality.MINOR: _shape((1, 1), (3, 3), (3, 4), (1, 1), (1, 1), (1, 1)),
        ChordQuality.DIMINISHED: _shape(X, X, (3, 1), (4, 2), (3, 1), (4, 3)),
    },
    "F#": {
        ChordQuality.MAJOR: _shape((2, 1), (4, 3), (4, 4), (3, 2), (2, 1), (2, 1)),
        ChordQuality.MINOR: _shape((2, 1), (4, 3), (4, 4), (2, 1), (2, 1), (2, 1)),
        ChordQuality.DIMINISHED: _shape(X, X, (4, 1), (5, 2), (4, 1), (5, 3)),
    },
    "G": {
        ChordQuality.MAJOR: _shape((3, 2), (2, 1), 0, 0, 0, (3, 3)),
        ChordQuality.MINOR: _shape((3, 1), (5, 3), (5, 4), (3, 1), (3, 1), (3, 1)),
        ChordQuality.DIMINISHED: _shape(X, X, (5, 1), (6, 2), (5, 1), (6, 3)),
    },
    "G#": {
        ChordQuality.MAJOR: _shape((4, 1), (6, 3), (6, 4), (5, 2), (4, 1), (4, 1)),
        ChordQuality.MINOR: _shape((4, 1), (6, 3), (6, 4), (4, 1), (4, 1), (4, 1)),
        ChordQuality.DIMINISHED: _shape(X, X, (6, 1), (7, 2), (6, 1), (7, 3)),
    },
    "A": {
        ChordQuality.MAJOR: _shape(X, 0, (2, 1), (2, 2), (2, 3), 0),
        ChordQuality.MINOR: _shape(X, 0, (2, 2), (2, 3), (1, 1), 0),
        ChordQuality.DIMINISHED: _shape(X, X, (7, 1), (8, 2), (7, 1), (8, 3)),
    },
    "A#": {
        ChordQuality.MAJOR: _shape(X, (1, 1), (3, 2), (3, 3), (3, 4), (1, 1)),
        ChordQuality.MINOR: _shape(X, (1, 1), (3, 3), (3, 4), (2, 2), (1, 1)),
        ChordQuality.DIMINISHED: _shape(X, X, (8, 1), (9, 2), (8, 1), (9, 3)),
    },
    "B": {
        ChordQuality.MAJOR: _shape(X, (2, 1), (4, 2), (4, 3), (4, 4), (2, 1)),
        ChordQuality.MINOR: _shape(X, (2, 1), (4, 3), (4, 4), (3, 2), (2, 1)),
        ChordQuality.DIMINISHED: _shape(X, X, (9, 1), (10, 2), (9, 1), (10, 3)),
    },
}


def guitar_voicing(chord: Optional[Chord]) -> Tuple[GuitarPosition, ...]:
    """Shape for a chord, keyed by its root and quality.

    Returns an empty tuple when no chord is given or no shape exists
    (dominant sevenths).
    """
    if chord is None:
        return ()
    return CHORD_SHAPES.get(chord.root, {}).get(chord.quality, ())


__all__ = [
    "MUTED",
    "OPEN",
    "STANDARD_TUNING",
    "GuitarPosition",
    "CHORD_SHAPES",
    "guitar_voicing",
]
