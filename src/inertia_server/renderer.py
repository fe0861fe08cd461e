"""
Client for the SSR render server.

The render server is the JavaScript bundle started with `inertia start-ssr`
(or an equivalent Node/Bun process). It accepts a page object on
`POST /render` and answers `{"head": [...], "body": "..."}`.
"""

from __future__ import annotations

import logging
from typing import Any, TypedDict

import httpx

from inertia_server.config import ResolvedConfig
from inertia_server.errors import SsrRenderError
from inertia_server.page import PageObject

logger = logging.getLogger(__name__)


class SsrResult(TypedDict):
	head: list[str]
	body: str


def _parse_result(data: Any, url: str) -> SsrResult:
	if not isinstance(data, dict):
		raise SsrRenderError("SSR response is not a JSON object", url=url)
	head = data.get("head") or []
	body = data.get("body") or ""
	if not isinstance(head, list) or not isinstance(body, str):
		raise SsrRenderError("SSR response has an unexpected shape", url=url)
	return {"head": [str(h) for h in head], "body": body}


class ServerRenderer:
	url: str
	timeout: float

	def __init__(self, config: ResolvedConfig):
		self.url = config.ssr_url
		self.timeout = config.ssr_timeout

	async def render(self, page: PageObject) -> SsrResult:
		try:
			async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout)) as client:
				response = await client.post(self.url, json=page)
		except httpx.HTTPError as exc:
			raise SsrRenderError(
				f"Could not reach SSR render server: {exc}", url=self.url
			) from exc

		if response.status_code >= 400:
			raise SsrRenderError(
				f"SSR render server answered {response.status_code}",
				url=self.url,
				status_code=response.status_code,
			)
		try:
			data = response.json()
		except ValueError as exc:
			raise SsrRenderError(
				"SSR render server returned invalid JSON", url=self.url
			) from exc

		result = _parse_result(data, self.url)
		logger.debug("SSR rendered %s (%d head tags)", page["component"], len(result["head"]))
		return result


__all__ = ["ServerRenderer", "SsrResult"]
