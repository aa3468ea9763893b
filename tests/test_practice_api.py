import random

import pytest
from fastapi.testclient import TestClient

from feedback import PRAISE
from main import app
from session import SessionTracker

client = TestClient(app)


@pytest.fixture(autouse=True)
def fresh_tracker():
    app.state.tracker = SessionTracker(rng=random.Random(3))
    yield app.state.tracker


def _current_answer():
    return app.state.tracker.session.question.answer


def test_health():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json().get("ok") is True


def test_initial_snapshot():
    r = client.get("/practice")
    assert r.status_code == 200
    b = r.json()
    assert b["mode"] == "selection"
    assert b["level"] == 1
    assert b["accuracy"] == 0 and b["accuracy_percent"] == 0
    assert b["question"] is None and b["history"] == []


def test_start_without_topics_reports_error():
    r = client.post("/practice/start")
    assert r.status_code == 200
    b = r.json()
    assert b["ok"] is False
    assert "at least one topic" in b["error"]
    assert client.get("/practice").json()["mode"] == "selection"


def test_toggle_topics():
    r = client.post("/practice/topics", json={"topic": "addition", "enabled": True})
    assert r.status_code == 200
    enabled = {t["topic"]: t["enabled"] for t in r.json()["topics"]}
    assert enabled == {
        "addition": True,
        "subtraction": False,
        "multiplication": False,
        "division": False,
    }
    assert client.get("/practice/topics").json() == r.json()


def test_unknown_topic_rejected():
    r = client.post("/practice/topics", json={"topic": "modulo", "enabled": True})
    assert r.status_code == 422


def test_start_hides_answer():
    client.post("/practice/topics", json={"topic": "multiplication", "enabled": True})
    r = client.post("/practice/start")
    b = r.json()
    assert b["ok"] is True and b["mode"] == "practice"
    assert b["topics"] == ["multiplication"]
    assert b["question"]["topic"] == "multiplication"
    assert "answer" not in b["question"]


def test_start_with_topics_in_body():
    r = client.post("/practice/start", json={"topics": ["division"]})
    b = r.json()
    assert b["topics"] == ["division"]
    assert "÷" in b["question"]["text"]


def test_submit_correct_and_incorrect():
    client.post("/practice/start", json={"topics": ["addition", "subtraction"]})

    r = client.post("/practice/submit", json={"answer": str(_current_answer()), "elapsed_seconds": 3})
    assert r.status_code == 200
    b = r.json()
    assert b["index"] == 0
    assert b["entry"]["correct"] is True
    assert b["entry"]["level"] == 1
    assert b["entry"]["time_taken_seconds"] == 3
    assert b["session"]["level"] == 2

    r = client.post("/practice/submit", json={"answer": "abc", "elapsed_seconds": 3})
    b = r.json()
    assert b["index"] == 1
    assert b["entry"]["correct"] is False
    assert b["entry"]["given"] is None
    assert b["session"]["accuracy"] == 50.0
    assert len(b["session"]["history"]) == 2


def test_submit_before_start_conflicts():
    r = client.post("/practice/submit", json={"answer": "1"})
    assert r.status_code == 409


def test_toggle_during_practice_conflicts():
    client.post("/practice/start", json={"topics": ["addition"]})
    r = client.post("/practice/topics", json={"topic": "division", "enabled": True})
    assert r.status_code == 409


def test_feedback_roundtrip():
    client.post("/practice/start", json={"topics": ["addition"]})
    client.post("/practice/submit", json={"answer": str(_current_answer()), "elapsed_seconds": 2})

    r = client.post("/practice/history/0/feedback")
    assert r.status_code == 200
    b = r.json()
    assert b["ai_feedback"] == PRAISE
    assert client.get("/practice").json()["history"][0]["ai_feedback"] == PRAISE

    r = client.post("/practice/history/5/feedback")
    assert r.status_code == 404


def test_feedback_failure_is_bad_gateway():
    def broken(text, correct):
        raise RuntimeError("reviewer offline")

    app.state.tracker = SessionTracker(rng=random.Random(3), feedback=broken)
    client.post("/practice/start", json={"topics": ["addition"]})
    client.post("/practice/submit", json={"answer": "abc", "elapsed_seconds": 2})

    r = client.post("/practice/history/0/feedback")
    assert r.status_code == 502
    assert "RuntimeError" in r.json()["detail"]


def test_reset_returns_to_selection():
    client.post("/practice/start", json={"topics": ["addition"]})
    client.post("/practice/submit", json={"answer": "abc", "elapsed_seconds": 2})

    r = client.post("/practice/reset")
    b = r.json()
    assert b["mode"] == "selection"
    assert b["history"] == [] and b["topics"] == [] and b["question"] is None
