"""Close-position voicings and inversions for chord playback."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List

from .harmonic_field import Chord
from .pitch import note_index

DEFAULT_BASE_OCTAVE = 3


@dataclass(frozen=True)
class VoicedNote:
    """Pitch class pinned to an absolute octave."""

    name: str
    octave: int


def clamp_inversion(inversion: int, note_count: int) -> int:
    """Clamp an inversion into 0..note_count.

    `note_count` itself is allowed: it is root position one octave up.
    """
    return max(0, min(int(inversion), note_count))


def voice_chord(
    chord: Chord,
    inversion: int = 0,
    base_octave: int = DEFAULT_BASE_OCTAVE,
) -> List[VoicedNote]:
    """Assign octaves to a chord's notes for playback.

    Notes start at `base_octave` in root-first order. Any note whose pitch
    class sits below the root's moves up an octave so the voicing ascends.
    Each inversion step then moves the lowest note to the top, one octave up.

    Args:
        chord: Chord to voice
        inversion: 0 = root position, 1 = first, 2 = second. Clamped to
            0..len(chord.notes)
        base_octave: Octave of the root in root position

    Returns:
        List of VoicedNote, same length as chord.notes
    """
    root_index = note_index(chord.notes[0])
    voiced = [
        VoicedNote(name, base_octave + (1 if note_index(name) < root_index else 0))
        for name in chord.notes
    ]

    for _ in range(clamp_inversion(inversion, len(voiced))):
        lowest = voiced.pop(0)
        voiced.append(replace(lowest, octave=lowest.octave + 1))

    return voiced


__all__ = ["DEFAULT_BASE_OCTAVE", "VoicedNote", "clamp_inversion", "voice_chord"]
