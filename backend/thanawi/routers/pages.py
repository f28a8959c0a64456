from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from ..curriculum import CurriculumTree
from ..deps import get_curriculum, get_settings
from ..settings import Settings

router = APIRouter(tags=["pages"])


def _page(config: Settings, name: str) -> FileResponse:
	path = config.public_dir / name
	if not path.is_file():
		raise HTTPException(status_code=404)
	return FileResponse(path)

@router.get("/", include_in_schema=False)
def index(config: Settings = Depends(get_settings)):
	return _page(config, "index.html")

@router.get("/questions", include_in_schema=False)
def questions_page(config: Settings = Depends(get_settings)):
	return _page(config, "questions.html")

# The pages build their level/branch/subject pickers from this document
@router.get("/curriculum.json")
def curriculum_document(curriculum: CurriculumTree = Depends(get_curriculum)):
	return curriculum.to_document()
