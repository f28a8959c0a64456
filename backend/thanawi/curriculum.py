from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import DataLoadError

logger = logging.getLogger(__name__)


LEVELS: Tuple[str, ...] = ("1st", "2nd", "3rd")
FIRST_LEVEL = "1st"

LEVEL_KEYS: Dict[str, str] = {"1st": "1st_year", "2nd": "2nd_year", "3rd": "3rd_year"}

LEVEL_LABELS: Dict[str, str] = {
	"1st": "السنة الأولى ثانوي",
	"2nd": "السنة الثانية ثانوي",
	"3rd": "السنة الثالثة ثانوي (بكالوريا)",
}

# Shorter form used inside validation messages
LEVEL_SHORT_LABELS: Dict[str, str] = {
	"1st": "السنة الأولى",
	"2nd": "السنة الثانية",
	"3rd": "السنة الثالثة",
}


def requires_branch(level: str) -> bool:
	return level != FIRST_LEVEL


@dataclass(frozen=True)
class Branch:
	name: str
	subjects: Tuple[str, ...]


@dataclass(frozen=True)
class CurriculumTree:
	"""Read-only view of the secondary school curriculum.

	First year lists its subjects directly. Second and third year go through a
	branch (shoba) that carries a display name and its own subject list.
	"""

	first_year_subjects: Tuple[str, ...] = ()
	branches: Mapping[str, Mapping[str, Branch]] = field(default_factory=lambda: MappingProxyType({}))

	@classmethod
	def empty(cls) -> "CurriculumTree":
		return cls()

	@classmethod
	def from_document(cls, document: Dict[str, Any]) -> "CurriculumTree":
		try:
			tree = document["curriculum"]
			first = tuple(str(s) for s in tree[LEVEL_KEYS["1st"]]["subjects"])
			branches: Dict[str, Mapping[str, Branch]] = {}
			for level in LEVELS[1:]:
				raw_branches = tree[LEVEL_KEYS[level]]["branches"]
				branches[level] = MappingProxyType({
					str(key): Branch(name=str(raw["name"]), subjects=tuple(str(s) for s in raw["subjects"]))
					for key, raw in raw_branches.items()
				})
		except (KeyError, TypeError, AttributeError) as exc:
			raise DataLoadError("curriculum document has an unexpected shape", details=repr(exc)) from exc
		return cls(first_year_subjects=first, branches=MappingProxyType(branches))

	def branch(self, level: str, branch_id: Optional[str]) -> Optional[Branch]:
		if not branch_id:
			return None
		return self.branches.get(level, {}).get(branch_id)

	def subjects_for(self, level: str, branch_id: Optional[str] = None) -> Tuple[str, ...]:
		if level == FIRST_LEVEL:
			return self.first_year_subjects
		found = self.branch(level, branch_id)
		return found.subjects if found else ()

	def level_label(self, level: str) -> str:
		return LEVEL_LABELS.get(level, "")

	def branch_label(self, level: str, branch_id: Optional[str]) -> str:
		if not requires_branch(level):
			return ""
		found = self.branch(level, branch_id)
		return found.name if found else ""

	def to_document(self) -> Dict[str, Any]:
		curriculum: Dict[str, Any] = {LEVEL_KEYS["1st"]: {"subjects": list(self.first_year_subjects)}}
		for level in LEVELS[1:]:
			curriculum[LEVEL_KEYS[level]] = {
				"branches": {
					key: {"name": b.name, "subjects": list(b.subjects)}
					for key, b in self.branches.get(level, {}).items()
				}
			}
		return {"curriculum": curriculum}


def read_json(path: Path) -> Any:
	try:
		with open(path, "r", encoding="utf-8") as fh:
			return json.load(fh)
	except FileNotFoundError as exc:
		raise DataLoadError(f"data file not found: {path}") from exc
	except (OSError, json.JSONDecodeError) as exc:
		raise DataLoadError(f"could not read data file: {path}", details=str(exc)) from exc


def load_curriculum(path: Path) -> CurriculumTree:
	tree = CurriculumTree.from_document(read_json(path))
	logger.info(
		"Loaded curriculum from %s (%d first-year subjects, %d branches)",
		path,
		len(tree.first_year_subjects),
		sum(len(b) for b in tree.branches.values()),
	)
	return tree
