from __future__ import annotations

from typing import AsyncIterator

from fastapi import Depends, Request

from .answer_service import AnswerService, TextGenerator
from .curriculum import CurriculumTree
from .gemini_client import GeminiClient
from .question_bank import QuestionBank
from .question_service import QuestionGenerationService
from .settings import Settings


def get_settings(request: Request) -> Settings:
	return request.app.state.settings


def get_curriculum(request: Request) -> CurriculumTree:
	return request.app.state.curriculum


def get_question_bank(request: Request) -> QuestionBank:
	return request.app.state.question_bank


async def get_text_generator(request: Request) -> AsyncIterator[TextGenerator]:
	client = GeminiClient(request.app.state.settings, http_client=request.app.state.http_client)
	try:
		yield client
	finally:
		await client.aclose()


def get_answer_service(
	curriculum: CurriculumTree = Depends(get_curriculum),
	generator: TextGenerator = Depends(get_text_generator),
) -> AnswerService:
	return AnswerService(curriculum, generator)


def get_question_service(
	request: Request,
	curriculum: CurriculumTree = Depends(get_curriculum),
	bank: QuestionBank = Depends(get_question_bank),
) -> QuestionGenerationService:
	return QuestionGenerationService(curriculum, bank, rng=request.app.state.rng)
