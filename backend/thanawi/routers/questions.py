from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from .. import messages
from ..deps import get_question_service
from ..errors import ThanawiError
from ..models import GenerateRequest, GenerateResponse
from ..question_service import QuestionGenerationService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["questions"])


@router.post("/generate-questions", response_model=GenerateResponse)
def generate_questions(req: GenerateRequest, service: QuestionGenerationService = Depends(get_question_service)):
    try:
        generated = service.generate(req)
    except ThanawiError:
        raise
    except Exception as e:
        logger.exception("Unexpected error while generating questions")
        raise ThanawiError(messages.GENERATE_FAILED, details=str(e)) from e
    return GenerateResponse(
        subject=generated.subject,
        level_label=generated.level_label,
        branch_label=generated.branch_label,
        question_count=generated.question_count,
        difficulty=generated.difficulty,
        difficulty_label=generated.difficulty_label,
        questions=generated.questions_html,
        answer_key=generated.answer_key_html,
        solutions=generated.solutions_html,
        marking_scheme=generated.marking_scheme_html,
    )
