from __future__ import annotations

import logging
from typing import Optional, Protocol

from .curriculum import CurriculumTree
from .errors import ValidationError
from .prompts import build_contextual_prompt
from .validation import validate

logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
	async def generate(self, prompt: str) -> str: ...


class AnswerService:
	"""Answers a student's question through the generative model.

	The curriculum scope is enforced by the prompt only; the model's text is
	returned as-is.
	"""

	def __init__(self, curriculum: CurriculumTree, generator: TextGenerator) -> None:
		self.curriculum = curriculum
		self.generator = generator

	def build_prompt(self, level: str, branch: Optional[str], subject: str, question: str) -> str:
		return build_contextual_prompt(
			level_label=self.curriculum.level_label(level),
			branch_label=self.curriculum.branch_label(level, branch),
			subject=subject,
			question=question,
		)

	async def answer(self, level: str, branch: Optional[str], subject: str, question: str) -> str:
		result = validate(self.curriculum, level, branch, subject)
		if not result.valid:
			raise ValidationError(result.message)
		prompt = self.build_prompt(level, branch, subject, question)
		logger.debug("Asking model: level=%s branch=%s subject=%s", level, branch, subject)
		# UpstreamError / ConfigurationError from the generator propagate unchanged
		return await self.generator.generate(prompt)
