from __future__ import annotations


class ThanawiError(Exception):
	"""Base class for failures that the HTTP layer turns into an error payload."""

	status_code = 500

	def __init__(self, message: str, *, details: str | None = None) -> None:
		super().__init__(message)
		self.message = message
		self.details = details


class ValidationError(ThanawiError):
	"""Malformed or curriculum-inconsistent input."""

	status_code = 400


class ConfigurationError(ThanawiError):
	"""The AI collaborator is missing a credential or setting."""


class UpstreamError(ThanawiError):
	"""The AI collaborator failed or returned something unusable."""


class DataLoadError(ThanawiError):
	"""A static reference file is missing or corrupt."""
