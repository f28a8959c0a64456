"""HTML fragments for generated question sets.

Class names match the stylesheet shipped with the questions page.
"""
from __future__ import annotations

from html import escape
from typing import Optional, Sequence

from .question_bank import QuestionRecord

MARKING_TOTAL = 100
POINTS_UNAVAILABLE = "غير متاح"


def option_label(index: int) -> str:
	return chr(ord("a") + index)


def _question_heading(number: int) -> str:
	return f"<strong>السؤال {number}:</strong>"


def render_questions(questions: Sequence[QuestionRecord]) -> str:
	items = []
	for number, q in enumerate(questions, start=1):
		parts = [f'<div class="question-item"><p>{_question_heading(number)} {escape(q.question)}</p>']
		if q.is_mcq and q.options:
			parts.append('<div class="question-options">')
			for idx, option in enumerate(q.options):
				css = "option-item correct" if option == q.correct else "option-item"
				parts.append(f'<div class="{css}"><strong>{option_label(idx)}):</strong> {escape(option)}</div>')
			parts.append("</div>")
		parts.append("</div>")
		items.append("".join(parts))
	return f'<div class="questions-list">{"".join(items)}</div>'


def render_answer_key(questions: Sequence[QuestionRecord]) -> str:
	rows = "".join(
		f"<p>{_question_heading(number)} {escape(q.correct)}</p>"
		for number, q in enumerate(questions, start=1)
	)
	return f'<div class="answer-key"><h4>🔑 مفتاح الإجابات:</h4>{rows}</div>'


def render_solutions(questions: Sequence[QuestionRecord]) -> str:
	rows = "".join(
		f'<div class="solution-item"><p>{_question_heading(number)}</p><p>{escape(q.solution)}</p></div>'
		for number, q in enumerate(questions, start=1)
	)
	return f'<div class="solutions"><h4>💡 الحلول والشروحات:</h4>{rows}</div>'


def points_per_question(count: int) -> Optional[float]:
	"""Share of the total mark for each question, or None when there are none."""
	if count <= 0:
		return None
	return round(MARKING_TOTAL / count, 2)


def render_marking_scheme(count: int) -> str:
	points = points_per_question(count)
	points_text = f"{points:.2f} نقطة" if points is not None else POINTS_UNAVAILABLE
	return (
		'<div class="marking-scheme"><h4>📊 سلم التقييم:</h4>'
		f"<p>عدد الأسئلة: {count}</p>"
		f"<p>الدرجة لكل سؤال: {points_text}</p>"
		"</div>"
	)
