"""MIDI and frequency conversion utilities.

Resolves voiced notes to MIDI numbers and 12-tone equal temperament
frequencies for playback.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from .pitch import NOTE_NAMES, NOTES_PER_OCTAVE, note_index
from .voicing import VoicedNote


def note_to_midi(name: str, octave: int) -> int:
    """Convert note name and octave to a MIDI number (C4 = 60)."""
    return (octave + 1) * NOTES_PER_OCTAVE + note_index(name)


def midi_to_note(midi_pitch: int) -> Tuple[str, int]:
    """Convert a MIDI number to (note name, octave)."""
    octave, index = divmod(int(midi_pitch), NOTES_PER_OCTAVE)
    return NOTE_NAMES[index], octave - 1


def midi_to_freq(midi_pitch: float) -> float:
    """Convert MIDI pitch to frequency in Hz.

    Uses standard MIDI tuning: A4 (MIDI 69) = 440 Hz.
    """
    return 440.0 * (2.0 ** ((midi_pitch - 69.0) / 12.0))


def freq_to_midi(freq: float) -> float:
    """Convert frequency in Hz to MIDI pitch (float)."""
    if freq <= 0:
        raise ValueError(f"Frequency must be positive: {freq}")
    return 69.0 + 12.0 * np.log2(freq / 440.0)


def voicing_to_midi(voicing: Sequence[VoicedNote]) -> List[int]:
    """MIDI numbers for a voicing, in voicing order."""
    return [note_to_midi(note.name, note.octave) for note in voicing]


def voicing_to_frequencies(voicing: Sequence[VoicedNote]) -> np.ndarray:
    """Frequencies in Hz for a voicing, as a float64 array."""
    midi = np.asarray(voicing_to_midi(voicing), dtype=np.float64)
    return 440.0 * np.power(2.0, (midi - 69.0) / 12.0)


__all__ = [
    "note_to_midi",
    "midi_to_note",
    "midi_to_freq",
    "freq_to_midi",
    "voicing_to_midi",
    "voicing_to_frequencies",
]
