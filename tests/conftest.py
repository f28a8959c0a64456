import json
import random
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "backend") not in sys.path:
    sys.path.insert(0, str(ROOT / "backend"))

from thanawi.curriculum import CurriculumTree
from thanawi.deps import get_text_generator
from thanawi.errors import UpstreamError
from thanawi.main import create_app
from thanawi.question_bank import QuestionBank
from thanawi.settings import Settings


MATH = "الرياضيات"
PHYSICS = "الفيزياء والكيمياء"
PHILOSOPHY = "الفلسفة"
HISTORY = "التاريخ والجغرافيا"

CURRICULUM_DOC = {
    "curriculum": {
        "1st_year": {"subjects": [MATH, PHYSICS, HISTORY]},
        "2nd_year": {
            "branches": {
                "sciences": {"name": "علوم تجريبية", "subjects": [MATH, PHYSICS]},
                "literature": {"name": "آداب وفلسفة", "subjects": [PHILOSOPHY, HISTORY]},
            }
        },
        "3rd_year": {
            "branches": {
                "math": {"name": "رياضيات", "subjects": [MATH, PHYSICS, PHILOSOPHY]},
            }
        },
    }
}


def _mcq(text, options, correct, solution="حل"):
    return {"type": "mcq", "question": text, "options": options, "correct": correct, "solution": solution}


QUESTIONS_DOC = {
    "questions_bank": {
        MATH: {
            "easy": [
                _mcq("سؤال سهل 1", ["1", "2", "3"], "2", "شرح 1"),
                _mcq("سؤال سهل 2", ["أ", "ب"], "ب", "شرح 2"),
                {"type": "other", "question": "سؤال سهل 3", "correct": "x = 3", "solution": "شرح 3"},
            ],
            "medium": [],
            "hard": [_mcq("سؤال صعب", ["نعم", "لا"], "نعم", "شرح صعب")],
        },
        PHYSICS: {
            "medium": [_mcq("سؤال متوسط", ["N", "J"], "N")],
        },
    }
}


class FakeGenerator:
    def __init__(self, reply="شرح...", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def curriculum():
    return CurriculumTree.from_document(CURRICULUM_DOC)


@pytest.fixture
def bank():
    return QuestionBank.from_document(QUESTIONS_DOC)


@pytest.fixture
def data_files(tmp_path):
    curriculum_path = tmp_path / "curriculum.json"
    bank_path = tmp_path / "questions-bank.json"
    curriculum_path.write_text(json.dumps(CURRICULUM_DOC, ensure_ascii=False), encoding="utf-8")
    bank_path.write_text(json.dumps(QUESTIONS_DOC, ensure_ascii=False), encoding="utf-8")
    return curriculum_path, bank_path


@pytest.fixture
def make_settings(tmp_path, data_files):
    curriculum_path, bank_path = data_files

    def _make(**overrides):
        values = dict(
            gemini_api_key=None,
            deployment_mode="always_on",
            app_env="production",
            curriculum_path=curriculum_path,
            questions_bank_path=bank_path,
            public_dir=tmp_path / "public",
            openrouter_api_key=None,
        )
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def client(make_settings, generator):
    app = create_app(make_settings())
    app.state.rng = random.Random(1234)
    app.dependency_overrides[get_text_generator] = lambda: generator
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def failing_generator():
    return FakeGenerator(error=UpstreamError("Gemini call failed", details="503 Service Unavailable"))
