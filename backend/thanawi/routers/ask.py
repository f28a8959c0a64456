from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from .. import messages
from ..answer_service import AnswerService
from ..deps import get_answer_service
from ..errors import ThanawiError, UpstreamError, ValidationError
from ..models import AskRequest, AskResponse


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["ask"])


@router.post("/ask", response_model=AskResponse)
async def ask(req: AskRequest, service: AnswerService = Depends(get_answer_service)):
    if not req.question or not req.level:
        raise ValidationError(messages.ASK_MISSING_FIELDS)
    try:
        text = await service.answer(req.level, req.branch, req.subject, req.question)
    except ThanawiError:
        raise
    except Exception as e:
        logger.exception("Unexpected error while answering a question")
        raise UpstreamError(messages.ASK_FAILED, details=str(e)) from e
    return AskResponse(
        response=text,
        level=req.level,
        branch=req.branch or None,
        subject=req.subject,
        question=req.question,
    )
