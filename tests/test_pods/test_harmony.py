"""Tests for Harmony Pod."""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add pod and project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "pods/harmony"))

from pods.harmony.main import app  # noqa: E402


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


class TestHarmonyPod:
    """Pod-level API tests."""

    def test_health(self, client):
        response = client.post("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "harmony"

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "endpoints" in response.json()

    def test_field_major(self, client):
        response = client.post("/field", json={"root": "G", "scale": "major"})
        assert response.status_code == 200
        data = response.json()

        assert data["root"] == "G"
        assert [c["symbol"] for c in data["chords"]] == ["G", "Am", "Bm", "C", "D", "Em", "F#dim"]
        assert len(data["secondary_dominants"]) == 5
        assert data["secondary_dominants"][3]["roman"] == "V7/V"
        assert data["secondary_dominants"][3]["symbol"] == "A7"

    def test_field_minor_flat_root(self, client):
        response = client.post("/field", json={"root": "Bb", "scale": "natural_minor"})
        assert response.status_code == 200
        data = response.json()

        assert data["root"] == "A#"
        assert data["chords"][0]["symbol"] == "A#m"
        assert data["secondary_dominants"] == []

    def test_field_invalid_root(self, client):
        response = client.post("/field", json={"root": "X", "scale": "major"})
        assert response.status_code == 422

    def test_voicing(self, client):
        request = {"root": "C", "scale": "major", "numeral": "vi", "inversion": 1, "base_octave": 3}
        response = client.post("/voicing", json=request)
        assert response.status_code == 200
        data = response.json()

        assert data["chord"]["symbol"] == "Am"
        assert data["inversion"] == 1
        assert [(n["name"], n["octave"]) for n in data["notes"]] == [("C", 4), ("E", 4), ("A", 4)]
        assert [n["midi"] for n in data["notes"]] == [60, 64, 69]
        assert abs(data["notes"][2]["frequency"] - 440.0) < 0.01
        assert [g["fret"] for g in data["guitar"]] == [-1, 0, 2, 2, 1, 0]
        assert data["guitar"][4] == {"string": 4, "fret": 1, "finger": 1}

    def test_voicing_dominant_has_no_guitar_shape(self, client):
        request = {"root": "C", "scale": "major", "numeral": "V7/V"}
        data = client.post("/voicing", json=request).json()

        assert data["chord"]["symbol"] == "D7"
        assert data["guitar"] == []

    def test_voicing_inversion_clamped(self, client):
        request = {"root": "C", "scale": "major", "numeral": "I", "inversion": 4, "base_octave": 3}
        data = client.post("/voicing", json=request).json()

        assert data["inversion"] == 3
        assert [n["midi"] for n in data["notes"]] == [60, 64, 67]

    def test_voicing_unknown_numeral(self, client):
        request = {"root": "C", "scale": "major", "numeral": "bVII"}
        response = client.post("/voicing", json=request)
        assert response.status_code == 404

    def test_progression_degrees(self, client):
        request = {"root": "C", "scale": "major", "degrees": ["I", "bVII", "V"]}
        response = client.post("/progression", json=request)
        assert response.status_code == 200
        data = response.json()

        assert [c["symbol"] for c in data["chords"]] == ["C", "G"]
        assert data["dropped"] == ["bVII"]

    def test_progression_catalog(self, client):
        request = {"root": "A", "scale": "natural_minor", "progression": "Epic / Pop"}
        data = client.post("/progression", json=request).json()

        assert [c["symbol"] for c in data["chords"]] == ["Am", "F", "C", "G"]

    def test_progression_unknown_name(self, client):
        request = {"root": "C", "scale": "major", "progression": "Nope"}
        response = client.post("/progression", json=request)
        assert response.status_code == 400

    def test_progression_requires_one_source(self, client):
        response = client.post("/progression", json={"root": "C", "scale": "major"})
        assert response.status_code == 422

    def test_progressions_catalog(self, client):
        response = client.get("/progressions/major")
        assert response.status_code == 200
        names = [p["name"] for p in response.json()]
        assert "Pop 4 Chords" in names

        assert client.get("/progressions/lydian").status_code == 400

    def test_key_defaults_from_env(self, client, monkeypatch):
        monkeypatch.setenv("HF_DEFAULT_ROOT", "Eb")
        monkeypatch.setenv("HF_DEFAULT_SCALE", "minor")

        data = client.post("/field", json={}).json()
        assert data["root"] == "D#"
        assert data["scale"] == "natural_minor"

    def test_invalid_key_default_rejected(self, client, monkeypatch):
        monkeypatch.setenv("HF_DEFAULT_ROOT", "H")
        assert client.post("/field", json={}).status_code == 422


class TestExerciseEndpoints:
    """Drill endpoints round-trip their state through the client."""

    def test_start_chord_drill(self, client):
        response = client.post("/exercise/start", json={"root": "G", "scale": "major", "kind": "chord", "seed": 3})
        assert response.status_code == 200
        data = response.json()

        assert data["kind"] == "chord"
        assert data["target_chord"]["roman"] in ["I", "ii", "iii", "IV", "V", "vi", "vii°"]
        assert data["target_note"] is None
        assert data["feedback"] == "idle"

        again = client.post("/exercise/start", json={"root": "G", "scale": "major", "kind": "chord", "seed": 3})
        assert again.json() == data

    def test_chord_drill_round(self, client):
        drill = client.post("/exercise/start", json={"root": "C", "kind": "chord", "seed": 5}).json()

        for note in drill["target_chord"]["notes"]:
            drill = client.post("/exercise/answer", json={"drill": drill, "note": note}).json()

        assert drill["feedback"] == "success"
        assert drill["finished"] is True
        assert drill["score"] == 10

        following = client.post("/exercise/next", json={"drill": drill, "seed": 6}).json()
        assert following["score"] == 10
        assert following["found"] == []
        assert following["feedback"] == "idle"

    def test_ear_drill_game_over(self, client):
        drill = client.post("/exercise/start", json={"kind": "ear", "seed": 1}).json()
        target = drill["target_note"]
        assert target["octave"] == 4
        assert target["midi"] == 60 + ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"].index(target["name"])

        wrong = [n for n in ["C", "D", "E", "F"] if n != target["name"]][:3]
        for note in wrong:
            drill = client.post("/exercise/answer", json={"drill": drill, "note": note}).json()

        assert drill["attempts"] == 3
        assert drill["feedback"] == "gameover"
        assert drill["score"] == 0

    def test_ear_drill_scoring(self, client):
        drill = client.post("/exercise/start", json={"kind": "ear", "seed": 2, "score": 5}).json()
        miss = "C" if drill["target_note"]["name"] != "C" else "D"

        drill = client.post("/exercise/answer", json={"drill": drill, "note": miss}).json()
        assert drill["feedback"] == "wrong"
        drill = client.post("/exercise/answer", json={"drill": drill, "note": drill["target_note"]["name"]}).json()

        assert drill["feedback"] == "success"
        assert drill["score"] == 15

    def test_answer_invalid_note(self, client):
        drill = client.post("/exercise/start", json={"kind": "ear", "seed": 1}).json()
        response = client.post("/exercise/answer", json={"drill": drill, "note": "Z"})
        assert response.status_code == 400

    def test_answer_tampered_target(self, client):
        drill = client.post("/exercise/start", json={"kind": "chord", "seed": 1}).json()
        drill["target_chord"]["roman"] = "bVII"
        response = client.post("/exercise/answer", json={"drill": drill, "note": "C"})
        assert response.status_code == 400

    def test_unknown_kind(self, client):
        response = client.post("/exercise/start", json={"kind": "rhythm"})
        assert response.status_code == 422
