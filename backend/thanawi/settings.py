from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

BASE_DIR = Path(__file__).resolve().parents[2]
DATA_DIR = BASE_DIR / "data"

class Settings(BaseSettings):
	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	# Provider can be "vertex" (Vertex AI Express) or "ai_studio" (Generative Language API)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	gemini_model: str = Field(default="gemini-2.0-flash", validation_alias="GEMINI_MODEL")
	gemini_timeout_seconds: float = Field(default=30.0, validation_alias="GEMINI_TIMEOUT_SECONDS")
	# Vertex configuration
	vertex_region: str = Field(default="us-central1", validation_alias="GEMINI_VERTEX_REGION")
	vertex_project: str | None = Field(default=None, validation_alias="GEMINI_VERTEX_PROJECT")

	# OpenRouter fallback configuration (optional)
	openrouter_api_key: str | None = Field(default=None, validation_alias="OPENROUTER_API_KEY")
	openrouter_model: str = Field(default="x-ai/grok-4-fast:free", validation_alias="OPENROUTER_MODEL")
	openrouter_base_url: str = Field(default="https://openrouter.ai/api/v1/chat/completions", validation_alias="OPENROUTER_BASE_URL")
	openrouter_referer: str = Field(default="https://localhost", validation_alias="OPENROUTER_HTTP_REFERER")
	openrouter_title: str = Field(default="Thanawi Assistant", validation_alias="OPENROUTER_TITLE")

	# Static reference data
	curriculum_path: Path = Field(default=DATA_DIR / "curriculum.json", validation_alias="CURRICULUM_PATH")
	questions_bank_path: Path = Field(default=DATA_DIR / "questions-bank.json", validation_alias="QUESTIONS_BANK_PATH")
	public_dir: Path = Field(default=BASE_DIR / "public", validation_alias="PUBLIC_DIR")

	# "development" adds exception details to error payloads
	app_env: str = Field(default="production", validation_alias="APP_ENV")
	# "standalone" refuses to start without GEMINI_API_KEY, "always_on" reports it per request
	deployment_mode: str = Field(default="standalone", validation_alias="DEPLOYMENT_MODE")
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
	cors_origins: List[str] = Field(default=["*"], validation_alias="CORS_ORIGINS")

	host: str = Field(default="0.0.0.0", validation_alias="HOST")
	port: int = Field(default=5000, validation_alias="PORT")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

	@property
	def is_development(self) -> bool:
		return self.app_env.lower() == "development"

settings = Settings()
