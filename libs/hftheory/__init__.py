"""Harmonic field engine.

Diatonic chords, secondary dominants, voicings, and progression mapping over
the 12-tone system.
"""

__version__ = "0.1.0"

from .pitch import NOTE_NAMES, normalize_note_name, note_index, note_from_interval
from .tables import (
    ScaleMode,
    ChordQuality,
    SCALE_INTERVALS,
    CHORD_INTERVALS,
    DEGREE_TABLE,
    DegreeSpec,
    parse_scale_mode,
)
from .harmonic_field import Chord, HarmonicField, build_chord, generate_harmonic_field
from .voicing import VoicedNote, clamp_inversion, voice_chord
from .progressions import (
    COMMON_PROGRESSIONS,
    Progression,
    find_progression,
    get_progressions,
    map_progression,
    progression_to_chords,
)
from .midi_utils import (
    note_to_midi,
    midi_to_note,
    midi_to_freq,
    freq_to_midi,
    voicing_to_midi,
    voicing_to_frequencies,
)
from .guitar import GuitarPosition, CHORD_SHAPES, guitar_voicing
from .exercise import (
    DrillType,
    Feedback,
    Drill,
    ear_drill_points,
    start_drill,
    evaluate_note,
    next_drill,
)

__all__ = [
    # Pitch and interval tables
    "NOTE_NAMES",
    "normalize_note_name",
    "note_index",
    "note_from_interval",
    "ScaleMode",
    "ChordQuality",
    "SCALE_INTERVALS",
    "CHORD_INTERVALS",
    "DEGREE_TABLE",
    "DegreeSpec",
    "parse_scale_mode",
    # Harmonic field
    "Chord",
    "HarmonicField",
    "build_chord",
    "generate_harmonic_field",
    # Voicing
    "VoicedNote",
    "clamp_inversion",
    "voice_chord",
    # Progressions
    "COMMON_PROGRESSIONS",
    "Progression",
    "find_progression",
    "get_progressions",
    "map_progression",
    "progression_to_chords",
    # MIDI/frequency utilities
    "note_to_midi",
    "midi_to_note",
    "midi_to_freq",
    "freq_to_midi",
    "voicing_to_midi",
    "voicing_to_frequencies",
    # Guitar shapes
    "GuitarPosition",
    "CHORD_SHAPES",
    "guitar_voicing",
    # Practice drills
    "DrillType",
    "Feedback",
    "Drill",
    "ear_drill_points",
    "start_drill",
    "evaluate_note",
    "next_drill",
]
