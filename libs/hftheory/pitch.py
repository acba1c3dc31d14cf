"""Pitch-class table for the 12-tone system.

Canonical names use sharps (C, C#, D, ... B) and map to indices 0-11.
"""

from __future__ import annotations

import numbers
from typing import List, Union

NOTE_NAMES: List[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

NOTES_PER_OCTAVE = 12

_NATURALS = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}


def normalize_note_name(name: str) -> str:
    """Return the canonical sharp spelling of a note name.

    Accepts accidentals in either direction (e.g., 'Bb' -> 'A#', 'E#' -> 'F',
    'Cb' -> 'B').
    """
    name = name.strip()
    if not name:
        raise ValueError("Note name must not be empty")

    base_note = name[0].upper()
    accidental = name[1:]

    if base_note not in _NATURALS:
        raise ValueError(f"Invalid note name: {name}")
    if accidental.strip("#b"):
        raise ValueError(f"Invalid accidental in note name: {name}")

    index = _NATURALS[base_note] + accidental.count("#") - accidental.count("b")
    return NOTE_NAMES[index % NOTES_PER_OCTAVE]


def note_index(note: Union[str, int]) -> int:
    """Index (0-11) of a note name or an already-numeric pitch class.

    Any integral type is accepted, including numpy integers.
    """
    if isinstance(note, numbers.Integral):
        return int(note) % NOTES_PER_OCTAVE
    return NOTE_NAMES.index(normalize_note_name(note))


def note_from_interval(root_index: int, interval: int) -> str:
    """Name of the pitch class `interval` semitones above `root_index`."""
    return NOTE_NAMES[(root_index + interval) % NOTES_PER_OCTAVE]


__all__ = [
    "NOTE_NAMES",
    "NOTES_PER_OCTAVE",
    "normalize_note_name",
    "note_index",
    "note_from_interval",
]
