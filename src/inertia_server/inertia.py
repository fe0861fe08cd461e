"""
Main entry point for answering requests with Inertia pages.

An `Inertia` instance is bound to one request through its adapter. Route
handlers call `render()`, `redirect()` or `location()` and return the result.

Example:
    ```python
    @app.get("/users")
    async def users(inertia: InertiaDep):
        return await inertia.render("Users/Index", {
            "users": lambda ctx: load_users(),
            "stats": inertia.defer(load_stats, "sidebar"),
        })
    ```
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from starlette.concurrency import run_in_threadpool

from inertia_server import props as _props
from inertia_server.adapter import Adapter, HttpContext, encode_uri
from inertia_server.config import ResolvedConfig
from inertia_server.errors import RedirectUrlRequired, SsrRenderError
from inertia_server.headers import InertiaHeaders
from inertia_server.page import (
	PageObject,
	RenderContext,
	build_page_object,
	encode_page,
)
from inertia_server.partial import PartialRequest
from inertia_server.props import PropCallback
from inertia_server.renderer import ServerRenderer, SsrResult
from inertia_server.templates import BODY_MARKER, HEAD_MARKER, render_root_element
from inertia_server.vite import TemplateTransformer

logger = logging.getLogger(__name__)

# Methods whose body must not be replayed when following a redirect
_SEE_OTHER_METHODS = ("PUT", "PATCH", "DELETE")


class Inertia:
	adapter: Adapter
	config: ResolvedConfig
	vite: TemplateTransformer | None
	_shared_data: dict[str, Any]
	_renderer: ServerRenderer | None
	_clear_history: bool
	_encrypt_history: bool

	def __init__(
		self,
		adapter: Adapter,
		config: ResolvedConfig,
		vite: TemplateTransformer | None = None,
		renderer: ServerRenderer | None = None,
	):
		self.adapter = adapter
		self.config = config
		self.vite = vite
		self._shared_data = dict(config.shared_data)
		self._renderer = renderer
		self._clear_history = False
		self._encrypt_history = config.encrypt_history

	@property
	def renderer(self) -> ServerRenderer:
		if self._renderer is None:
			self._renderer = ServerRenderer(self.config)
		return self._renderer

	@property
	def shared_data(self) -> Mapping[str, Any]:
		return dict(self._shared_data)

	def share(self, data: Mapping[str, Any]) -> None:
		"""Share data with every page rendered after this call.

		Keys override the shared data defined in the config.
		"""
		self._shared_data = {**self._shared_data, **data}

	def clear_history(self) -> None:
		"""See https://v2.inertiajs.com/history-encryption#clearing-history"""
		self._clear_history = True

	def encrypt_history(self, encrypt: bool = True) -> None:
		"""See https://v2.inertiajs.com/history-encryption"""
		self._encrypt_history = encrypt

	# Prop constructors, exposed on the instance for convenience
	def eager(self, callback: PropCallback[Any]) -> _props.Prop[Any]:
		return _props.eager(callback)

	def optional(self, callback: PropCallback[Any]) -> _props.Prop[Any]:
		return _props.optional(callback)

	def lazy(self, callback: PropCallback[Any]) -> _props.Prop[Any]:
		return _props.lazy(callback)

	def defer(
		self, callback: PropCallback[Any], group: str = _props.DEFAULT_GROUP
	) -> _props.Prop[Any]:
		return _props.defer(callback, group)

	def merge(self, callback: PropCallback[Any]) -> _props.Prop[Any]:
		return _props.merge(callback)

	def always(self, callback: PropCallback[Any]) -> _props.Prop[Any]:
		return _props.always(callback)

	def is_inertia_request(self) -> bool:
		return bool(self.adapter.get_header(InertiaHeaders.Inertia))

	def render_context(self, component: str) -> RenderContext:
		return RenderContext(
			component=component,
			url=self.adapter.get_url() or "/",
			version=self.config.assets_version,
			clear_history=self._clear_history,
			encrypt_history=self._encrypt_history,
			partial=PartialRequest.from_headers(self.adapter.get_header),
		)

	async def build_page_object(
		self, component: str, page_props: Mapping[str, Any] | None = None
	) -> PageObject:
		http = HttpContext(
			request=self.adapter.get_request(), response=self.adapter.get_response()
		)
		return await build_page_object(
			self.render_context(component), self._shared_data, page_props, http
		)

	async def render(
		self, component: str, page_props: Mapping[str, Any] | None = None
	) -> Any:
		"""Render a page as JSON for Inertia visits, or as HTML on first load."""
		page = await self.build_page_object(component, page_props)

		if not self.is_inertia_request():
			return await self._render_document(page)

		self.adapter.set_header(InertiaHeaders.Inertia, "true")
		self.adapter.set_header("Vary", InertiaHeaders.Inertia)
		return self.adapter.json(page)

	async def _should_render_on_server(self, component: str) -> bool:
		return self.config.ssr_enabled

	async def _render_document(self, page: PageObject) -> Any:
		try:
			page_json = encode_page(page)
		except (TypeError, ValueError):
			return self._serialization_failed(page)

		ssr: SsrResult | None = None
		if await self._should_render_on_server(page["component"]):
			try:
				ssr = await self.renderer.render(page)
			except SsrRenderError as exc:
				logger.warning(
					"SSR failed for %s, falling back to client rendering: %s",
					page["component"],
					exc,
				)

		template = await self._resolve_layout()
		if ssr is not None and ssr["body"]:
			html = splice(template, "\n".join(ssr["head"]), ssr["body"])
		else:
			root = render_root_element(self.config.root_element_id, page_json)
			html = splice(template, "", root)
		return self.adapter.html(html)

	def _serialization_failed(self, page: PageObject) -> Any:
		logger.exception("Failed to serialize page object for %s", page["component"])
		self.adapter.set_status(500)
		return self.adapter.json({"error": "Failed to serialize JSON"})

	async def _resolve_root_view(self) -> str:
		entrypoint = self.config.entrypoint
		if callable(entrypoint):
			result = entrypoint(self.adapter.get_request())
			if inspect.isawaitable(result):
				result = await result
			return str(result)
		return await run_in_threadpool(Path(entrypoint).read_text, encoding="utf-8")

	async def _resolve_layout(self) -> str:
		template = await self._resolve_root_view()
		if self.vite is not None:
			template = await self.vite.transform_index_html(
				self.adapter.get_url() or "/", template
			)
		return template

	def location(self, url: str) -> Any:
		"""Hard-navigate the client to `url`.

		For external websites or non-Inertia routes of this application.
		See https://inertiajs.com/redirects#external-redirects
		"""
		self.adapter.set_header(InertiaHeaders.Location, encode_uri(url))
		self.adapter.set_status(409)
		return self.adapter.end()

	def redirect(self, status_or_url: int | str, url: str | None = None) -> Any:
		if isinstance(status_or_url, int):
			status = status_or_url
			location = url or ""
		else:
			status = 302
			location = status_or_url

		if not location:
			raise RedirectUrlRequired()

		method = (self.adapter.get_method() or "HEAD").upper()
		if status == 302 and method in _SEE_OTHER_METHODS:
			status = 303

		self.adapter.set_header("Vary", InertiaHeaders.Inertia)
		return self.adapter.redirect(status, location)


def splice(template: str, head: str, body: str) -> str:
	"""Replace the head and body markers of a layout, once each."""
	return template.replace(HEAD_MARKER, head, 1).replace(BODY_MARKER, body, 1)


__all__ = ["Inertia", "splice"]
