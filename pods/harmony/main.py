"""Harmony Pod: FastAPI service for harmonic fields, voicings, progressions, and drills.

Serves the diatonic chords of a key, playback voicings with MIDI numbers and
frequencies and guitar shapes, roman-numeral progressions resolved to
concrete chords, and stateless chord and ear practice drills.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, field_validator, model_validator

from hfcore.config import get_settings
from hfcore.logging import setup_logging, setup_tracing
from hftheory.exercise import Drill, DrillType, Feedback, evaluate_note, next_drill, start_drill
from hftheory.guitar import GuitarPosition, guitar_voicing
from hftheory.harmonic_field import Chord, generate_harmonic_field
from hftheory.midi_utils import midi_to_freq, note_to_midi, voicing_to_frequencies, voicing_to_midi
from hftheory.pitch import normalize_note_name
from hftheory.progressions import get_progressions, map_progression, progression_to_chords
from hftheory.tables import parse_scale_mode
from hftheory.voicing import VoicedNote, clamp_inversion, voice_chord

logger = logging.getLogger(__name__)

SERVICE_NAME = "harmony"
SERVICE_VERSION = "0.1.0"


def _default_root() -> str:
    return get_settings().HF_DEFAULT_ROOT


def _default_scale() -> str:
    return get_settings().HF_DEFAULT_SCALE


class ChordModel(BaseModel):
    """Chord as shown to clients."""

    roman: str
    name: str
    symbol: str
    notes: List[str]
    quality: str
    intervals: List[int]
    function: str
    category: str

    @classmethod
    def from_chord(cls, chord: Chord) -> "ChordModel":
        return cls(
            roman=chord.roman,
            name=chord.name,
            symbol=chord.symbol,
            notes=list(chord.notes),
            quality=chord.quality.value,
            intervals=list(chord.intervals),
            function=chord.function,
            category=chord.category,
        )


class VoicedNoteModel(BaseModel):
    """Single voiced note ready for playback."""

    name: str
    octave: int
    midi: int = Field(..., ge=0, le=127)
    frequency: float = Field(..., gt=0.0)

    @classmethod
    def from_note(cls, note: VoicedNote) -> "VoicedNoteModel":
        midi = note_to_midi(note.name, note.octave)
        return cls(name=note.name, octave=note.octave, midi=midi, frequency=midi_to_freq(midi))


class GuitarPositionModel(BaseModel):
    """One string of a guitar shape (fret -1 = muted, 0 = open)."""

    string: int = Field(..., ge=0, le=5)
    fret: int = Field(..., ge=-1)
    finger: Optional[int] = Field(default=None, ge=1, le=4)

    @classmethod
    def from_position(cls, position: GuitarPosition) -> "GuitarPositionModel":
        return cls(string=position.string, fret=position.fret, finger=position.finger)


class ProgressionModel(BaseModel):
    """Catalog progression."""

    name: str
    degrees: List[str]
    description: str


class KeyRequest(BaseModel):
    """Key selection shared by all requests."""

    root: str = Field(
        default_factory=_default_root, validate_default=True, description="Key root, e.g., C, F#, Bb"
    )
    scale: str = Field(
        default_factory=_default_scale, validate_default=True, description="major or natural_minor"
    )

    @field_validator("root")
    @classmethod
    def validate_root(cls, value: str) -> str:
        return normalize_note_name(value)

    @field_validator("scale")
    @classmethod
    def validate_scale(cls, value: str) -> str:
        return parse_scale_mode(value).value


class FieldResponse(BaseModel):
    """Harmonic field for one key."""

    root: str
    scale: str
    chords: List[ChordModel]
    secondary_dominants: List[ChordModel]


class VoicingRequest(KeyRequest):
    """Request payload for chord voicing."""

    numeral: str = Field(..., min_length=1, description="Roman numeral, e.g., vi or V7/V")
    inversion: int = Field(default=0, ge=0, le=4)
    base_octave: Optional[int] = Field(default=None, ge=0, le=6)


class VoicingResponse(BaseModel):
    """Voiced chord notes."""

    chord: ChordModel
    inversion: int
    notes: List[VoicedNoteModel]
    guitar: List[GuitarPositionModel] = Field(
        default_factory=list, description="Guitar shape; empty when none exists"
    )


class ProgressionRequest(KeyRequest):
    """Request payload for progression mapping.

    Exactly one of `degrees` or `progression` (a catalog name) is required.
    """

    degrees: Optional[List[str]] = Field(default=None, description="Roman-numeral degrees")
    progression: Optional[str] = Field(default=None, description="Catalog progression name")

    @model_validator(mode="after")
    def validate_source(self) -> "ProgressionRequest":
        if (self.degrees is None) == (self.progression is None):
            raise ValueError("Provide exactly one of 'degrees' or 'progression'")
        return self


class ProgressionResponse(BaseModel):
    """Resolved progression."""

    chords: List[ChordModel]
    dropped: List[str]
    message: str


class ExerciseStartRequest(KeyRequest):
    """Request payload for starting a practice drill."""

    kind: DrillType = Field(default=DrillType.CHORD, description="chord or ear")
    score: int = Field(default=0, ge=0, description="Running score to carry over")
    seed: Optional[int] = Field(default=None, ge=0, description="Deterministic seed")


class DrillModel(BaseModel):
    """Drill state handed to the client and sent back with each answer."""

    root: str
    scale: str
    kind: DrillType
    target_chord: Optional[ChordModel] = None
    target_note: Optional[VoicedNoteModel] = None
    found: List[str] = Field(default_factory=list)
    attempts: int = Field(default=0, ge=0)
    score: int = Field(default=0, ge=0)
    feedback: Feedback = Feedback.IDLE
    finished: bool = False

    @classmethod
    def from_drill(cls, drill: Drill, root: str, scale: str) -> "DrillModel":
        return cls(
            root=root,
            scale=scale,
            kind=drill.kind,
            target_chord=ChordModel.from_chord(drill.target_chord) if drill.target_chord else None,
            target_note=VoicedNoteModel.from_note(drill.target_note) if drill.target_note else None,
            found=list(drill.found),
            attempts=drill.attempts,
            score=drill.score,
            feedback=drill.feedback,
            finished=drill.finished,
        )

    def to_drill(self) -> Drill:
        """Rebuild the engine state; targets are re-resolved from the key."""
        target_chord = None
        target_note = None
        if self.kind is DrillType.CHORD:
            if self.target_chord is None:
                raise ValueError("Chord drill requires target_chord")
            target_chord = generate_harmonic_field(self.root, self.scale).find(self.target_chord.roman)
            if target_chord is None:
                raise ValueError(f"No chord {self.target_chord.roman!r} in {self.root} {self.scale}")
        else:
            if self.target_note is None:
                raise ValueError("Ear drill requires target_note")
            target_note = VoicedNote(normalize_note_name(self.target_note.name), self.target_note.octave)

        return Drill(
            kind=self.kind,
            target_chord=target_chord,
            target_note=target_note,
            found=tuple(self.found),
            attempts=self.attempts,
            score=self.score,
            feedback=self.feedback,
        )


class ExerciseAnswerRequest(BaseModel):
    """One note played against a drill."""

    drill: DrillModel
    note: str = Field(..., min_length=1, description="Played note name, e.g., E or Bb")


class ExerciseNextRequest(BaseModel):
    """Move on to the next round of a drill."""

    drill: DrillModel
    seed: Optional[int] = Field(default=None, ge=0)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown hooks for logging/tracing."""
    try:
        setup_logging(service=SERVICE_NAME)
    except ValueError as exc:  # pragma: no cover - logging fallback
        logging.basicConfig(level=logging.INFO)
        logger.warning(f"Logging fallback (invalid env?): {exc}")

    try:
        if not setup_tracing(service_name=f"{SERVICE_NAME}-pod"):
            logger.info("Tracing not configured")
    except ValueError as exc:  # pragma: no cover - optional tracing
        logger.info(f"Tracing not configured: {exc}")
    logger.info(f"{SERVICE_NAME} pod starting (v{SERVICE_VERSION})...")
    yield
    logger.info(f"{SERVICE_NAME} pod shutting down...")


app = FastAPI(
    title="Harmony Pod",
    description="Harmonic fields, voicings, progressions, and practice drills",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)


@app.get("/")
async def root():
    """API info endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": "Diatonic harmony for any key (chords, voicings, progressions)",
        "endpoints": {
            "GET /": "This info",
            "POST /health": "Health check",
            "POST /field": "Harmonic field for a key",
            "POST /voicing": "Voiced notes for one chord",
            "POST /progression": "Resolve roman numerals to chords",
            "GET /progressions/{scale}": "Progression catalog",
            "POST /exercise/start": "Start a chord or ear drill",
            "POST /exercise/answer": "Answer a drill with one note",
            "POST /exercise/next": "Next round of a drill",
        },
    }


@app.post("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@app.post("/field", response_model=FieldResponse)
async def field(request: KeyRequest):
    """Generate the harmonic field for a key."""
    harmonic_field = generate_harmonic_field(request.root, request.scale)
    return FieldResponse(
        root=harmonic_field.root,
        scale=harmonic_field.scale.value,
        chords=[ChordModel.from_chord(c) for c in harmonic_field.chords],
        secondary_dominants=[ChordModel.from_chord(c) for c in harmonic_field.secondary_dominants],
    )


@app.post("/voicing", response_model=VoicingResponse)
async def voicing(request: VoicingRequest):
    """Voice one chord of the key for playback."""
    harmonic_field = generate_harmonic_field(request.root, request.scale)
    chord = harmonic_field.find(request.numeral)
    if chord is None:
        raise HTTPException(
            status_code=404,
            detail=f"No chord {request.numeral!r} in {harmonic_field.root} {harmonic_field.scale.value}",
        )

    base_octave = request.base_octave
    if base_octave is None:
        base_octave = get_settings().HF_BASE_OCTAVE

    voiced = voice_chord(chord, inversion=request.inversion, base_octave=base_octave)
    midi = voicing_to_midi(voiced)
    freqs = voicing_to_frequencies(voiced)

    return VoicingResponse(
        chord=ChordModel.from_chord(chord),
        inversion=clamp_inversion(request.inversion, len(chord.notes)),
        notes=[
            VoicedNoteModel(name=note.name, octave=note.octave, midi=m, frequency=float(f))
            for note, m, f in zip(voiced, midi, freqs)
        ],
        guitar=[GuitarPositionModel.from_position(p) for p in guitar_voicing(chord)],
    )


@app.post("/progression", response_model=ProgressionResponse)
async def progression(request: ProgressionRequest):
    """Resolve a progression against the key's harmonic field."""
    harmonic_field = generate_harmonic_field(request.root, request.scale)
    try:
        if request.progression is not None:
            chords = progression_to_chords(request.progression, harmonic_field)
            dropped: List[str] = []
        else:
            chords = map_progression(harmonic_field, request.degrees)
            dropped = [d for d in request.degrees if harmonic_field.find(d) is None]
    except ValueError as exc:
        logger.error(f"Validation error: {exc}")
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return ProgressionResponse(
        chords=[ChordModel.from_chord(c) for c in chords],
        dropped=dropped,
        message=f"Resolved {len(chords)} chords in {harmonic_field.root} {harmonic_field.scale.value}",
    )


@app.get("/progressions/{scale}", response_model=List[ProgressionModel])
async def progressions(scale: str):
    """List catalog progressions for a scale mode."""
    try:
        catalog = get_progressions(scale)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return [
        ProgressionModel(name=p.name, degrees=list(p.degrees), description=p.description)
        for p in catalog
    ]


@app.post("/exercise/start", response_model=DrillModel)
async def exercise_start(request: ExerciseStartRequest):
    """Start a chord or ear drill in the requested key."""
    harmonic_field = generate_harmonic_field(request.root, request.scale)
    drill = start_drill(harmonic_field, request.kind, score=request.score, seed=request.seed)
    return DrillModel.from_drill(drill, request.root, request.scale)


@app.post("/exercise/answer", response_model=DrillModel)
async def exercise_answer(request: ExerciseAnswerRequest):
    """Apply a played note to a drill and return the new state."""
    try:
        drill = evaluate_note(request.drill.to_drill(), request.note)
    except ValueError as exc:
        logger.error(f"Validation error: {exc}")
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    logger.info(
        "Drill answered",
        extra={"drill": drill.kind.value, "feedback": drill.feedback.value, "score": drill.score},
    )
    return DrillModel.from_drill(drill, request.drill.root, request.drill.scale)


@app.post("/exercise/next", response_model=DrillModel)
async def exercise_next(request: ExerciseNextRequest):
    """Start the next round of a drill, keeping its score."""
    try:
        current = request.drill.to_drill()
    except ValueError as exc:
        logger.error(f"Validation error: {exc}")
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    harmonic_field = generate_harmonic_field(request.drill.root, request.drill.scale)
    drill = next_drill(current, harmonic_field, seed=request.seed)
    return DrillModel.from_drill(drill, request.drill.root, request.drill.scale)


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    port = get_settings().HF_HARMONY_PORT
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=os.getenv("HF_ENV", "development") == "development",
        log_level="info",
    )
