"""Tests for guitar chord shapes."""

import pytest

from hftheory import NOTE_NAMES, ChordQuality, generate_harmonic_field
from hftheory.guitar import CHORD_SHAPES, MUTED, GuitarPosition, guitar_voicing


@pytest.fixture
def c_major():
    return generate_harmonic_field("C", "major")


def frets(shape):
    return [p.fret for p in shape]


class TestGuitarShapes:
    """Tests for shape lookup."""

    def test_major_shape(self, c_major):
        shape = guitar_voicing(c_major.chords[0])  # C

        assert frets(shape) == [MUTED, 3, 2, 0, 1, 0]
        assert shape[1] == GuitarPosition(string=1, fret=3, finger=3)
        assert shape[3].is_open and shape[3].finger is None
        assert shape[0].is_muted

    def test_minor_shape(self, c_major):
        shape = guitar_voicing(c_major.chords[5])  # Am

        assert frets(shape) == [MUTED, 0, 2, 2, 1, 0]
        assert [p.finger for p in shape] == [None, None, 2, 3, 1, None]

    def test_diminished_shape(self, c_major):
        shape = guitar_voicing(c_major.chords[6])  # Bdim

        assert frets(shape) == [MUTED, MUTED, 9, 10, 9, 10]
        assert [p.finger for p in shape] == [None, None, 1, 2, 1, 3]

    def test_dominant_seventh_has_no_shape(self, c_major):
        assert guitar_voicing(c_major.find("V7/V")) == ()

    def test_no_chord(self):
        assert guitar_voicing(None) == ()

    def test_flat_root_uses_sharp_entry(self):
        field = generate_harmonic_field("Bb", "major")
        assert frets(guitar_voicing(field.chords[0])) == [MUTED, 1, 3, 3, 3, 1]

    def test_table_complete(self):
        for root in NOTE_NAMES:
            for quality in (ChordQuality.MAJOR, ChordQuality.MINOR, ChordQuality.DIMINISHED):
                shape = CHORD_SHAPES[root][quality]
                assert [p.string for p in shape] == list(range(6))

    def test_triad_shapes_sound_chord_tones(self):
        # Diminished grips are full diminished sevenths, so only major and minor are checked
        for root in NOTE_NAMES:
            for mode in ("major", "natural_minor"):
                for chord in generate_harmonic_field(root, mode).chords:
                    if chord.quality is ChordQuality.DIMINISHED:
                        continue
                    for position in guitar_voicing(chord):
                        if position.midi is not None:
                            assert NOTE_NAMES[position.midi % 12] in chord.notes

    def test_sounding_pitch(self, c_major):
        shape = guitar_voicing(c_major.chords[0])
        assert [p.midi for p in shape] == [None, 48, 52, 55, 60, 64]
