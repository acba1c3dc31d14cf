"""Practice drills over a harmonic field.

Two drills are supported:
- chord: find every tone of a random diatonic chord. Wrong notes are flagged
  but not counted; completing the chord scores 10 points.
- ear: name a random pitch heard at octave 4. A correct answer scores
  max(5, 15 - 5 * attempts); the third wrong attempt ends the drill.

Drill states are immutable. `evaluate_note` returns the next state, so
callers (UI handlers, the harmony pod) hold state wherever they like.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union

from .harmonic_field import Chord, HarmonicField
from .pitch import NOTE_NAMES, normalize_note_name
from .voicing import VoicedNote

CHORD_DRILL_POINTS = 10
EAR_DRILL_MAX_POINTS = 15
EAR_DRILL_MIN_POINTS = 5
EAR_DRILL_PENALTY = 5
EAR_DRILL_MAX_ATTEMPTS = 3
EAR_DRILL_OCTAVE = 4


class DrillType(str, Enum):
    """Available practice drills."""
    CHORD = "chord"
    EAR = "ear"


class Feedback(str, Enum):
    """Outcome of the last answer."""
    IDLE = "idle"
    SUCCESS = "success"
    WRONG = "wrong"
    GAME_OVER = "gameover"


@dataclass(frozen=True)
class Drill:
    """State of one drill round."""

    kind: DrillType
    target_chord: Optional[Chord] = None
    target_note: Optional[VoicedNote] = None
    found: Tuple[str, ...] = ()
    attempts: int = 0
    score: int = 0
    feedback: Feedback = Feedback.IDLE

    @property
    def finished(self) -> bool:
        return self.feedback in (Feedback.SUCCESS, Feedback.GAME_OVER)


def ear_drill_points(attempts: int) -> int:
    """Points for a correct ear-drill answer after `attempts` misses."""
    return max(EAR_DRILL_MIN_POINTS, EAR_DRILL_MAX_POINTS - attempts * EAR_DRILL_PENALTY)


def start_drill(
    field: HarmonicField,
    kind: Union[DrillType, str] = DrillType.CHORD,
    score: int = 0,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Drill:
    """Start a new drill round.

    Args:
        field: Harmonic field the chord drill draws its target from
        kind: DrillType or its string value
        score: Running score carried over from earlier rounds
        seed: Random seed for reproducibility (ignored when `rng` is given)
        rng: Random source to draw targets from
    """
    kind = DrillType(kind)
    if rng is None:
        rng = random.Random(seed)

    if kind is DrillType.CHORD:
        return Drill(kind=kind, target_chord=rng.choice(field.chords), score=score)
    return Drill(kind=kind, target_note=VoicedNote(rng.choice(NOTE_NAMES), EAR_DRILL_OCTAVE), score=score)


def _evaluate_chord(drill: Drill, name: str) -> Drill:
    chord = drill.target_chord
    if not chord.contains(name):
        return replace(drill, feedback=Feedback.WRONG)
    if name in drill.found:
        return drill

    found = drill.found + (name,)
    if all(note in found for note in chord.notes):
        return replace(
            drill,
            found=found,
            score=drill.score + CHORD_DRILL_POINTS,
            feedback=Feedback.SUCCESS,
        )
    return replace(drill, found=found, feedback=Feedback.IDLE)


def _evaluate_ear(drill: Drill, name: str) -> Drill:
    if name == drill.target_note.name:
        return replace(
            drill,
            score=drill.score + ear_drill_points(drill.attempts),
            feedback=Feedback.SUCCESS,
        )

    attempts = drill.attempts + 1
    if attempts >= EAR_DRILL_MAX_ATTEMPTS:
        return replace(drill, attempts=attempts, feedback=Feedback.GAME_OVER)
    return replace(drill, attempts=attempts, feedback=Feedback.WRONG)


def evaluate_note(drill: Drill, note: str) -> Drill:
    """Apply one played note to a drill and return the new state.

    Only the pitch class matters; the octave the note was played in is not
    part of the answer. Finished drills ignore further input.
    """
    if drill.finished:
        return drill

    name = normalize_note_name(note)
    if drill.kind is DrillType.CHORD:
        return _evaluate_chord(drill, name)
    return _evaluate_ear(drill, name)


def next_drill(
    drill: Drill,
    field: HarmonicField,
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Drill:
    """Start the following round of the same drill, keeping the score."""
    return start_drill(field, drill.kind, score=drill.score, seed=seed, rng=rng)


__all__ = [
    "CHORD_DRILL_POINTS",
    "EAR_DRILL_MAX_ATTEMPTS",
    "EAR_DRILL_OCTAVE",
    "DrillType",
    "Feedback",
    "Drill",
    "ear_drill_points",
    "start_drill",
    "evaluate_note",
    "next_drill",
]
