from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError as PydanticValidationError, model_validator

from .curriculum import read_json
from .errors import DataLoadError

logger = logging.getLogger(__name__)


FALLBACK_DIFFICULTY = "easy"

DIFFICULTY_LABELS: Dict[str, str] = {"easy": "سهل", "medium": "متوسط", "hard": "صعب"}


def difficulty_label(difficulty: Optional[str]) -> str:
	# Anything that is not easy/medium reads as hard
	return DIFFICULTY_LABELS.get(difficulty or "", DIFFICULTY_LABELS["hard"])


class QuestionRecord(BaseModel):
	model_config = ConfigDict(frozen=True)

	type: Literal["mcq", "other"]
	question: str
	options: Optional[Tuple[str, ...]] = None
	correct: str
	solution: str = ""

	@property
	def is_mcq(self) -> bool:
		return self.type == "mcq"

	@model_validator(mode="after")
	def _check_options(self) -> "QuestionRecord":
		if self.is_mcq:
			if not self.options:
				raise ValueError("mcq question needs options")
			if self.correct not in self.options:
				raise ValueError("mcq correct answer must be one of the options")
		elif self.options is not None:
			raise ValueError("only mcq questions carry options")
		return self


Pool = Tuple[QuestionRecord, ...]


class QuestionBank:
	"""Read-only mapping subject -> difficulty -> ordered questions."""

	def __init__(self, subjects: Optional[Mapping[str, Mapping[str, Pool]]] = None) -> None:
		self._subjects: Mapping[str, Mapping[str, Pool]] = MappingProxyType(
			{name: MappingProxyType(dict(pools)) for name, pools in (subjects or {}).items()}
		)

	@classmethod
	def empty(cls) -> "QuestionBank":
		return cls()

	@classmethod
	def from_document(cls, document: Dict[str, Any]) -> "QuestionBank":
		try:
			raw_bank = document["questions_bank"]
			items = raw_bank.items()
		except (KeyError, TypeError, AttributeError) as exc:
			raise DataLoadError("question bank document has no questions_bank mapping", details=repr(exc)) from exc
		subjects: Dict[str, Dict[str, Pool]] = {}
		for subject, by_difficulty in items:
			if not isinstance(by_difficulty, dict):
				logger.warning("Skipping subject %r: expected a mapping of difficulties", subject)
				continue
			pools: Dict[str, Pool] = {}
			for difficulty, raw_questions in by_difficulty.items():
				if raw_questions is None:
					raw_questions = []
				if not isinstance(raw_questions, list):
					logger.warning("Skipping %s/%s: expected a list of questions", subject, difficulty)
					continue
				records: List[QuestionRecord] = []
				for index, raw in enumerate(raw_questions):
					try:
						records.append(QuestionRecord.model_validate(raw))
					except PydanticValidationError as exc:
						logger.warning(
							"Skipping invalid question %s/%s[%d]: %s",
							subject, difficulty, index, exc.errors()[0].get("msg"),
						)
				pools[str(difficulty)] = tuple(records)
			subjects[str(subject)] = pools
		return cls(subjects)

	def subjects(self) -> List[str]:
		return list(self._subjects)

	def pool(self, subject: str, difficulty: Optional[str]) -> Pool:
		"""Questions for subject at difficulty, falling back to the easy pool.

		An unknown subject, or a subject with neither the requested nor an easy
		pool, yields an empty tuple.
		"""
		by_difficulty = self._subjects.get(subject)
		if not by_difficulty:
			return ()
		return by_difficulty.get(difficulty or "") or by_difficulty.get(FALLBACK_DIFFICULTY) or ()


def load_question_bank(path: Path) -> QuestionBank:
	bank = QuestionBank.from_document(read_json(path))
	logger.info("Loaded question bank from %s (%d subjects)", path, len(bank.subjects()))
	return bank
