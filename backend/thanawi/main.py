from __future__ import annotations

import logging
import random
from contextlib import asynccontextmanager
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import messages
from .curriculum import CurriculumTree, load_curriculum
from .errors import ConfigurationError, DataLoadError, ThanawiError, UpstreamError, ValidationError
from .models import ErrorResponse
from .question_bank import QuestionBank, load_question_bank
from .routers import ask, health, pages, questions
from .settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


def _load_stores(config: Settings) -> tuple[CurriculumTree, QuestionBank]:
	# A broken data file leaves its store empty, so every lookup fails closed
	try:
		curriculum = load_curriculum(config.curriculum_path)
	except DataLoadError as exc:
		logger.error("Error loading curriculum: %s %s", exc.message, exc.details or "")
		curriculum = CurriculumTree.empty()
	try:
		bank = load_question_bank(config.questions_bank_path)
	except DataLoadError as exc:
		logger.error("Error loading question bank: %s %s", exc.message, exc.details or "")
		bank = QuestionBank.empty()
	return curriculum, bank


def _error_payload(config: Settings, message: str, details: Optional[str]) -> dict:
	return ErrorResponse(error=message, details=details if config.is_development else None).model_dump()


def _public_message(exc: ThanawiError) -> str:
	if isinstance(exc, ValidationError):
		return exc.message
	if isinstance(exc, ConfigurationError):
		return messages.API_KEY_ERROR
	if isinstance(exc, UpstreamError):
		return messages.ASK_FAILED
	return exc.message


def _install_error_handlers(app: FastAPI, config: Settings) -> None:
	@app.exception_handler(ThanawiError)
	async def handle_thanawi_error(request: Request, exc: ThanawiError):
		if exc.status_code >= 500:
			logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details)
		return JSONResponse(
			status_code=exc.status_code,
			content=_error_payload(config, _public_message(exc), exc.details or exc.message),
		)

	@app.exception_handler(RequestValidationError)
	async def handle_request_validation(request: Request, exc: RequestValidationError):
		return JSONResponse(
			status_code=400,
			content=_error_payload(config, messages.INVALID_REQUEST, str(exc.errors())),
		)

	@app.exception_handler(StarletteHTTPException)
	async def handle_http_exception(request: Request, exc: StarletteHTTPException):
		message = messages.NOT_FOUND if exc.status_code == 404 else str(exc.detail)
		return JSONResponse(status_code=exc.status_code, content=_error_payload(config, message, str(exc.detail)))

	@app.exception_handler(Exception)
	async def handle_unexpected(request: Request, exc: Exception):
		logger.exception("Unhandled error on %s %s", request.method, request.url.path)
		return JSONResponse(status_code=500, content=_error_payload(config, messages.ASK_FAILED, str(exc)))


def create_app(config: Optional[Settings] = None) -> FastAPI:
	config = config or default_settings

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		if config.deployment_mode == "standalone" and not config.gemini_api_key:
			logger.critical("GEMINI_API_KEY is not set; add your Google Gemini API key to .env")
			raise ConfigurationError("GEMINI_API_KEY is not configured")
		app.state.curriculum, app.state.question_bank = _load_stores(config)
		app.state.http_client = httpx.AsyncClient(timeout=config.gemini_timeout_seconds)
		try:
			yield
		finally:
			await app.state.http_client.aclose()

	app = FastAPI(title="Thanawi Assistant API", lifespan=lifespan)
	app.state.settings = config
	app.state.rng = random.Random()
	app.add_middleware(
		CORSMiddleware,
		allow_origins=config.cors_origins,
		allow_methods=["*"],
		allow_headers=["*"],
	)
	_install_error_handlers(app, config)
	app.include_router(health.router)
	app.include_router(ask.router)
	app.include_router(questions.router)
	app.include_router(pages.router)

	# Static front-end assets; must stay last so it never shadows the API
	if config.public_dir.is_dir():
		app.mount("/", StaticFiles(directory=config.public_dir), name="public")
	return app


app = create_app()


def run() -> None:
	logging.basicConfig(
		level=default_settings.log_level.upper(),
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)
	logger.info("Server running on http://%s:%s", default_settings.host, default_settings.port)
	logger.info("Educational platform for Algerian secondary school, curriculum validation enabled")
	uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
	run()
