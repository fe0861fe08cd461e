"""
Adapter layer between the Inertia core and the web framework.

The core only talks to an `Adapter`: it reads request headers, the method and
the URL, and asks the adapter to produce JSON, HTML, redirect or empty
responses. `StarletteAdapter` implements it for Starlette and FastAPI.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from starlette.requests import Request
from starlette.responses import HTMLResponse, Response

logger = logging.getLogger(__name__)

# Characters left untouched by JavaScript's encodeURI()
_URI_SAFE = ";,/?:@&=+$!*'()#~"


def encode_uri(url: str) -> str:
	return quote(url, safe=_URI_SAFE)


class Adapter(ABC):
	"""Framework-specific request/response bridge.

	Terminal methods (`json`, `html`, `redirect`, `end`) return whatever the
	framework expects a handler to return.
	"""

	@abstractmethod
	def get_request(self) -> Any:
		"""Underlying request object, handed to prop callbacks."""

	@abstractmethod
	def get_response(self) -> Any:
		"""Underlying (pending) response object, handed to prop callbacks."""

	@abstractmethod
	def get_header(self, name: str) -> str | None: ...

	@abstractmethod
	def set_header(self, name: str, value: str) -> None: ...

	@abstractmethod
	def get_method(self) -> str: ...

	@abstractmethod
	def get_url(self) -> str: ...

	@abstractmethod
	def set_status(self, code: int) -> None: ...

	@abstractmethod
	def json(self, data: Any) -> Any: ...

	@abstractmethod
	def html(self, content: str) -> Any: ...

	@abstractmethod
	def redirect(self, status: int, url: str) -> Any: ...

	@abstractmethod
	def end(self, data: str | bytes | None = None) -> Any: ...


@dataclass
class HttpContext:
	"""Passed to shared-data factories and callable props."""

	request: Any
	response: Any


@dataclass
class PendingResponse:
	"""Status and headers collected before the final response is built."""

	status_code: int = 200
	headers: dict[str, str] = field(default_factory=dict)

	def set_header(self, name: str, value: str) -> None:
		# Header names are case-insensitive, keep the last write
		for existing in list(self.headers):
			if existing.lower() == name.lower():
				del self.headers[existing]
		self.headers[name] = value


class StarletteAdapter(Adapter):
	request: Request
	pending: PendingResponse

	def __init__(self, request: Request):
		self.request = request
		self.pending = PendingResponse()

	def get_request(self) -> Request:
		return self.request

	def get_response(self) -> PendingResponse:
		return self.pending

	def get_header(self, name: str) -> str | None:
		return self.request.headers.get(name.lower())

	def set_header(self, name: str, value: str) -> None:
		self.pending.set_header(name, value)

	def get_method(self) -> str:
		return self.request.method or "GET"

	def get_url(self) -> str:
		url = self.request.url.path or "/"
		if self.request.url.query:
			url += "?" + self.request.url.query
		return url

	def set_status(self, code: int) -> None:
		self.pending.status_code = code

	def json(self, data: Any) -> Response:
		try:
			body = json.dumps(
				data, separators=(",", ":"), ensure_ascii=False, allow_nan=False
			)
		except (TypeError, ValueError):
			logger.exception("Failed to serialize JSON response")
			self.set_status(500)
			body = json.dumps({"error": "Failed to serialize JSON"})
		return self._build(body, "application/json")

	def html(self, content: str) -> Response:
		return self._build(content, "text/html")

	def redirect(self, status: int, url: str) -> Response:
		location = encode_uri(url)
		self.set_status(status)
		self.set_header("Location", location)

		accept = self.request.headers.get("accept", "")
		if "html" in accept:
			body = f'<p>{status}. Redirecting to <a href="{location}">{location}</a></p>'
		else:
			body = f"{status}. Redirecting to {location}"
		encoded = body.encode("utf-8")
		self.set_header("Content-Length", str(len(encoded)))

		if self.get_method() == "HEAD":
			return self._build(b"", None)
		return self._build(encoded, None)

	def end(self, data: str | bytes | None = None) -> Response:
		return self._build(data if data is not None else b"", None)

	def _build(self, body: str | bytes, media_type: str | None) -> Response:
		cls = HTMLResponse if media_type == "text/html" else Response
		return cls(
			content=body,
			status_code=self.pending.status_code,
			headers=dict(self.pending.headers),
			media_type=media_type,
		)


__all__ = [
	"Adapter",
	"HttpContext",
	"PendingResponse",
	"StarletteAdapter",
	"encode_uri",
]
