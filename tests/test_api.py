import json
import random

import pytest
from fastapi.testclient import TestClient

from thanawi import messages
from thanawi.deps import get_question_service, get_text_generator
from thanawi.errors import ConfigurationError
from thanawi.main import create_app

from conftest import MATH, PHYSICS, FakeGenerator


def _generate_body(**overrides):
    body = {
        "userType": "teacher",
        "level": "1st",
        "subject": MATH,
        "questionCount": 5,
        "difficulty": "easy",
        "questionType": "mcq",
        "includeAnswerKey": True,
        "includeSolutions": True,
        "includeMarkingScheme": True,
    }
    body.update(overrides)
    return body


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "message": "Server is running"}


def test_ask_success(client, generator):
    r = client.post("/api/ask", json={"level": "1st", "subject": MATH, "question": "ما هو التفاضل؟"})
    assert r.status_code == 200
    data = r.json()
    assert data["success"] is True
    assert data["response"] == "شرح..."
    assert data["subject"] == MATH
    assert data["question"] == "ما هو التفاضل؟"
    assert data["level"] == "1st"
    assert data["branch"] is None
    assert data["timestamp"]
    assert len(generator.prompts) == 1


def test_ask_accepts_short_questions(client):
    r = client.post("/api/ask", json={"level": "2nd", "branch": "sciences", "subject": PHYSICS, "question": "لماذا"})
    assert r.status_code == 200
    assert r.json()["branch"] == "sciences"


def test_ask_missing_fields(client, generator):
    r = client.post("/api/ask", json={"level": "1st", "subject": MATH})
    assert r.status_code == 400
    assert r.json()["error"] == messages.ASK_MISSING_FIELDS
    assert generator.prompts == []


def test_ask_validation_error(client, generator):
    r = client.post("/api/ask", json={"level": "3rd", "subject": MATH, "question": "سؤال"})
    assert r.status_code == 400
    assert r.json() == {"error": messages.BRANCH_REQUIRED, "details": None}
    assert generator.prompts == []


def test_ask_upstream_failure(make_settings, failing_generator):
    app = create_app(make_settings())
    app.dependency_overrides[get_text_generator] = lambda: failing_generator
    with TestClient(app) as client:
        r = client.post("/api/ask", json={"level": "1st", "subject": MATH, "question": "سؤال"})
    assert r.status_code == 500
    assert r.json() == {"error": messages.ASK_FAILED, "details": None}


def test_ask_without_api_key(make_settings):
    # always_on mode: the app starts and reports the missing key per request
    app = create_app(make_settings())
    with TestClient(app) as client:
        r = client.post("/api/ask", json={"level": "1st", "subject": MATH, "question": "سؤال"})
        assert r.status_code == 500
        assert r.json()["error"] == messages.API_KEY_ERROR
        # validation still runs first
        r = client.post("/api/ask", json={"level": "9th", "subject": MATH, "question": "سؤال"})
        assert r.status_code == 400


def test_development_mode_adds_details(make_settings):
    app = create_app(make_settings(app_env="development"))
    app.dependency_overrides[get_text_generator] = lambda: FakeGenerator(error=ConfigurationError("bad key", details="403"))
    with TestClient(app) as client:
        r = client.post("/api/ask", json={"level": "1st", "subject": MATH, "question": "سؤال"})
    assert r.status_code == 500
    assert r.json()["details"] == "403"


def test_standalone_mode_requires_key(make_settings):
    app = create_app(make_settings(deployment_mode="standalone"))
    with pytest.raises(ConfigurationError):
        with TestClient(app):
            pass


def test_generate_questions(client):
    r = client.post("/api/generate-questions", json=_generate_body())
    assert r.status_code == 200
    data = r.json()
    assert data["success"] is True
    assert data["questionCount"] == 3
    assert data["levelLabel"] == "السنة الأولى ثانوي"
    assert data["branchLabel"] == ""
    assert data["difficulty"] == "easy"
    assert data["difficultyLabel"] == "سهل"
    assert data["questions"].startswith('<div class="questions-list">')
    assert data["answerKey"].startswith('<div class="answer-key">')
    assert data["solutions"].startswith('<div class="solutions">')
    assert "33.33" in data["markingScheme"]
    assert data["timestamp"]


def test_generate_for_student_hides_teacher_fields(client):
    r = client.post("/api/generate-questions", json=_generate_body(userType="student"))
    assert r.status_code == 200
    data = r.json()
    assert data["answerKey"] is None
    assert data["solutions"] is None
    assert data["markingScheme"] is not None


def test_generate_unknown_subject_in_bank(client):
    r = client.post(
        "/api/generate-questions",
        json=_generate_body(level="2nd", branch="literature", subject="الفلسفة"),
    )
    assert r.status_code == 200
    data = r.json()
    assert data["questionCount"] == 0
    assert data["questions"] == '<div class="questions-list"></div>'
    assert "غير متاح" in data["markingScheme"]


def test_generate_missing_fields(client):
    body = _generate_body()
    del body["questionCount"]
    r = client.post("/api/generate-questions", json=body)
    assert r.status_code == 400
    assert r.json()["error"] == messages.GENERATE_MISSING_FIELDS


def test_generate_validation_error(client):
    r = client.post("/api/generate-questions", json=_generate_body(level="2nd", branch="unknown"))
    assert r.status_code == 400
    assert r.json()["error"] == messages.UNKNOWN_BRANCH


def test_malformed_body_is_400(client):
    r = client.post("/api/generate-questions", json=_generate_body(questionCount="many"))
    assert r.status_code == 400
    assert r.json()["error"] == messages.INVALID_REQUEST
    r = client.post("/api/ask", content=b"{oops", headers={"content-type": "application/json"})
    assert r.status_code == 400


def test_generate_is_seeded_by_app_rng(make_settings, generator):
    def picks():
        app = create_app(make_settings())
        app.state.rng = random.Random(99)
        with TestClient(app) as client:
            return client.post("/api/generate-questions", json=_generate_body(questionCount=2)).json()["questions"]

    assert picks() == picks()


def test_broken_data_files_fail_closed(make_settings, tmp_path, generator):
    app = create_app(make_settings(curriculum_path=tmp_path / "nope.json", questions_bank_path=tmp_path / "nope2.json"))
    app.dependency_overrides[get_text_generator] = lambda: generator
    with TestClient(app) as client:
        r = client.post("/api/ask", json={"level": "1st", "subject": MATH, "question": "سؤال"})
        assert r.status_code == 400
        assert client.get("/api/health").status_code == 200
    assert generator.prompts == []


def test_curriculum_document_endpoint(client):
    r = client.get("/curriculum.json")
    assert r.status_code == 200
    assert MATH in r.json()["curriculum"]["1st_year"]["subjects"]


def test_pages_served_from_public_dir(make_settings, tmp_path):
    public = tmp_path / "site"
    public.mkdir()
    (public / "index.html").write_text("<h1>index</h1>", encoding="utf-8")
    (public / "style.css").write_text("body {}", encoding="utf-8")
    app = create_app(make_settings(public_dir=public))
    with TestClient(app) as client:
        assert client.get("/").text == "<h1>index</h1>"
        assert client.get("/style.css").status_code == 200
        r = client.get("/questions")
        assert r.status_code == 404
        assert r.json()["error"] == messages.NOT_FOUND
        assert client.get("/api/health").status_code == 200


def test_corrupt_bank_pools_do_not_block_startup(make_settings, data_files):
    _, bank_path = data_files
    bank_path.write_text(json.dumps({"questions_bank": {MATH: {"easy": True}}}), encoding="utf-8")
    app = create_app(make_settings())
    with TestClient(app) as client:
        assert client.get("/api/health").status_code == 200
        r = client.post("/api/generate-questions", json=_generate_body())
        assert r.status_code == 200
        assert r.json()["questionCount"] == 0


class _BrokenQuestionService:
    def generate(self, req):
        raise RuntimeError("bank index out of range")


@pytest.mark.parametrize("app_env, details", [("production", None), ("development", "bank index out of range")])
def test_generate_unexpected_error(make_settings, app_env, details):
    app = create_app(make_settings(app_env=app_env))
    app.dependency_overrides[get_question_service] = lambda: _BrokenQuestionService()
    with TestClient(app) as client:
        r = client.post("/api/generate-questions", json=_generate_body())
    assert r.status_code == 500
    assert r.json() == {"error": messages.GENERATE_FAILED, "details": details}


def test_unknown_user_type_is_rejected(client):
    r = client.post("/api/generate-questions", json=_generate_body(userType="admin"))
    assert r.status_code == 400
    assert r.json()["error"] == messages.INVALID_REQUEST
