from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from . import messages
from .curriculum import LEVELS, LEVEL_SHORT_LABELS, CurriculumTree, requires_branch


class ValidationResult(BaseModel):
	valid: bool
	message: str


def validate(curriculum: CurriculumTree, level: Optional[str], branch: Optional[str], subject: Optional[str]) -> ValidationResult:
	"""Check a level/branch/subject selection against the curriculum.

	The checks run in a fixed order and the first failure decides the message.
	First year has no branches, so a branch sent with it is ignored.
	"""
	if not level or level not in LEVELS:
		return ValidationResult(valid=False, message=messages.INVALID_LEVEL)

	if requires_branch(level) and not branch:
		return ValidationResult(valid=False, message=messages.BRANCH_REQUIRED)

	if not subject:
		return ValidationResult(valid=False, message=messages.SUBJECT_REQUIRED)

	if requires_branch(level) and curriculum.branch(level, branch) is None:
		return ValidationResult(valid=False, message=messages.UNKNOWN_BRANCH)

	if subject not in curriculum.subjects_for(level, branch):
		return ValidationResult(
			valid=False,
			message=messages.subject_not_found(subject, LEVEL_SHORT_LABELS[level]),
		)

	return ValidationResult(valid=True, message=messages.VALIDATION_OK)
