from __future__ import annotations


class InertiaError(Exception):
	"""Base class for errors raised by inertia_server."""


class RedirectUrlRequired(InertiaError, ValueError):
	"""Raised when `Inertia.redirect()` is called without a target URL."""

	def __init__(self) -> None:
		super().__init__("Redirect URL is required")


class SsrRenderError(InertiaError):
	"""The SSR render server could not produce markup for a page."""

	url: str
	status_code: int | None

	def __init__(self, message: str, *, url: str, status_code: int | None = None):
		super().__init__(message)
		self.url = url
		self.status_code = status_code


__all__ = ["InertiaError", "RedirectUrlRequired", "SsrRenderError"]
