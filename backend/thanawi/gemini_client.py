from __future__ import annotations
import logging
import httpx
from typing import Any, Dict, Optional
from .errors import ConfigurationError, UpstreamError
from .settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)

# Statuses Gemini uses for a missing, revoked or wrong-project key
_AUTH_STATUSES = (401, 403)


def _is_key_rejection(response: httpx.Response) -> bool:
	if response.status_code in _AUTH_STATUSES:
		return True
	# AI Studio answers 400 with reason API_KEY_INVALID for a malformed key
	return response.status_code == 400 and "API_KEY_INVALID" in response.text


class GeminiClient:
	def __init__(
		self,
		config: Optional[Settings] = None,
		*,
		http_client: Optional[httpx.AsyncClient] = None,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
	) -> None:
		config = config or default_settings
		self.api_key = config.gemini_api_key
		self.model = model or config.gemini_model
		self.provider = config.gemini_provider
		if self.provider == "vertex":
			region = config.vertex_region
			project = config.vertex_project or "placeholder-project"
			# Vertex AI Generative REST endpoint (API key via header)
			self.base_url = base_url or (
				f"https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}/publishers/google/models/{self.model}:generateContent"
			)
			self._auth_in_query = False
		else:
			# Google AI Studio (Generative Language API)
			self.base_url = base_url or f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"
			self._auth_in_query = True
		# A client handed in by the app lifespan is shared and closed by its owner
		self._owns_client = http_client is None
		self._client = http_client or httpx.AsyncClient(timeout=config.gemini_timeout_seconds)
		self._fallback_enabled = bool(config.openrouter_api_key)
		self._openrouter_api_key = config.openrouter_api_key
		self._openrouter_model = config.openrouter_model
		self._openrouter_base_url = config.openrouter_base_url
		self._openrouter_headers = {
			"Authorization": f"Bearer {self._openrouter_api_key}" if self._openrouter_api_key else "",
			"Content-Type": "application/json",
			"HTTP-Referer": config.openrouter_referer,
			"X-Title": config.openrouter_title,
		}

	async def generate(self, prompt: str) -> str:
		if not self.api_key:
			raise ConfigurationError("GEMINI_API_KEY is not configured")
		payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
		params: Dict[str, Any] = {}
		headers: Dict[str, str] = {}
		if self._auth_in_query:
			params["key"] = self.api_key
		else:
			headers["x-goog-api-key"] = self.api_key
		last_error: Optional[Exception] = None
		try:
			r = await self._client.post(self.base_url, params=params, headers=headers, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			if _is_key_rejection(http_err.response):
				raise ConfigurationError("Gemini rejected the API key", details=str(http_err)) from http_err
			last_error = http_err
		except httpx.RequestError as net_err:
			last_error = net_err
		if last_error is None:
			try:
				data = r.json()
				return data["candidates"][0]["content"]["parts"][0]["text"]
			except (ValueError, KeyError, IndexError, TypeError):
				last_error = UpstreamError(f"Unexpected Gemini response: {r.text}")
		logger.warning("Gemini call to %s failed: %s", self.model, last_error)
		if not self._fallback_enabled:
			raise UpstreamError("Gemini call failed", details=str(last_error)) from last_error
		return await self._fallback_generate(prompt, last_error)

	async def aclose(self) -> None:
		if self._owns_client:
			await self._client.aclose()

	async def _fallback_generate(self, prompt: str, primary_error: Exception) -> str:
		headers = {k: v for k, v in self._openrouter_headers.items() if v}
		payload: Dict[str, Any] = {
			"model": self._openrouter_model,
			"messages": [{"role": "user", "content": prompt}],
		}
		try:
			r = await self._client.post(
				self._openrouter_base_url,
				headers=headers,
				json=payload,
			)
			r.raise_for_status()
			data = r.json()
			return data["choices"][0]["message"]["content"]
		except (httpx.HTTPError, ValueError, KeyError, IndexError, TypeError) as fallback_err:
			raise UpstreamError(
				"Gemini call failed and the OpenRouter fallback also failed",
				details=f"{primary_error}; fallback: {fallback_err}",
			) from fallback_err
