from __future__ import annotations
from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
	return datetime.now(timezone.utc)


class _CamelModel(BaseModel):
	# Wire format is camelCase; Python side stays snake_case
	model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AskRequest(_CamelModel):
	level: Optional[str] = None
	branch: Optional[str] = None
	subject: Optional[str] = None
	question: Optional[str] = None


class AskResponse(_CamelModel):
	success: bool = True
	response: str
	level: str
	branch: Optional[str] = None
	subject: str
	question: str
	timestamp: datetime = Field(default_factory=utcnow)


class GenerateRequest(_CamelModel):
	user_type: Optional[Literal["student", "teacher"]] = None
	level: Optional[str] = None
	branch: Optional[str] = None
	subject: Optional[str] = None
	question_count: Optional[int] = None
	difficulty: Optional[str] = None
	question_type: Optional[str] = None
	include_answer_key: bool = False
	include_solutions: bool = False
	include_marking_scheme: bool = False

	@property
	def is_teacher(self) -> bool:
		return self.user_type == "teacher"


class GenerateResponse(_CamelModel):
	success: bool = True
	subject: str
	level_label: str
	branch_label: str
	question_count: int
	difficulty: Optional[str] = None
	difficulty_label: str
	questions: str
	answer_key: Optional[str] = None
	solutions: Optional[str] = None
	marking_scheme: Optional[str] = None
	timestamp: datetime = Field(default_factory=utcnow)


class ErrorResponse(BaseModel):
	error: str
	details: Optional[str] = None


class HealthResponse(BaseModel):
	status: str = "ok"
	message: str = "Server is running"
