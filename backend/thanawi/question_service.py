from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from . import messages
from .curriculum import CurriculumTree
from .errors import ValidationError
from .models import GenerateRequest
from .question_bank import QuestionBank, QuestionRecord, difficulty_label
from .rendering import render_answer_key, render_marking_scheme, render_questions, render_solutions
from .validation import validate

logger = logging.getLogger(__name__)


MIN_QUESTIONS = 1
MAX_QUESTIONS = 10


@dataclass(frozen=True)
class GeneratedSet:
	subject: str
	level_label: str
	branch_label: str
	difficulty: Optional[str]
	difficulty_label: str
	selected: Sequence[QuestionRecord]
	questions_html: str
	answer_key_html: Optional[str]
	solutions_html: Optional[str]
	marking_scheme_html: Optional[str]

	@property
	def question_count(self) -> int:
		return len(self.selected)


def sample_questions(pool: Sequence[QuestionRecord], count: int, rng: random.Random) -> List[QuestionRecord]:
	"""Uniformly random selection of up to count questions from pool.

	Shuffles a copy (Fisher-Yates via random.shuffle) and keeps the head, so
	the shared pool keeps its stored order.
	"""
	candidates = list(pool)
	rng.shuffle(candidates)
	return candidates[: max(0, min(count, len(candidates)))]


class QuestionGenerationService:
	def __init__(self, curriculum: CurriculumTree, bank: QuestionBank, rng: Optional[random.Random] = None) -> None:
		self.curriculum = curriculum
		self.bank = bank
		self.rng = rng or random.Random()

	def generate(self, req: GenerateRequest) -> GeneratedSet:
		if not req.user_type or not req.level or not req.subject or not req.question_count:
			raise ValidationError(messages.GENERATE_MISSING_FIELDS)
		if not MIN_QUESTIONS <= req.question_count <= MAX_QUESTIONS:
			raise ValidationError(messages.question_count_out_of_range(MIN_QUESTIONS, MAX_QUESTIONS))

		result = validate(self.curriculum, req.level, req.branch, req.subject)
		if not result.valid:
			raise ValidationError(result.message)

		pool = self.bank.pool(req.subject, req.difficulty)
		selected = sample_questions(pool, req.question_count, self.rng)
		if len(selected) < req.question_count:
			logger.info(
				"Only %d questions found for %s (%s), %d requested",
				len(selected), req.subject, req.difficulty, req.question_count,
			)

		# Answer keys and solutions are teacher material; students never get them
		answer_key = render_answer_key(selected) if req.is_teacher and req.include_answer_key else None
		solutions = render_solutions(selected) if req.is_teacher and req.include_solutions else None

		return GeneratedSet(
			subject=req.subject,
			level_label=self.curriculum.level_label(req.level),
			branch_label=self.curriculum.branch_label(req.level, req.branch),
			difficulty=req.difficulty,
			difficulty_label=difficulty_label(req.difficulty),
			selected=selected,
			questions_html=render_questions(selected),
			answer_key_html=answer_key,
			solutions_html=solutions,
			marking_scheme_html=render_marking_scheme(len(selected)) if req.include_marking_scheme else None,
		)
