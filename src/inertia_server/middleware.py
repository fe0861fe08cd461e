"""
Starlette / FastAPI integration.

Example:
    ```python
    app = FastAPI()
    app.add_middleware(InertiaMiddleware, config=define_config(InertiaConfig()))

    @app.get("/")
    async def home(inertia: InertiaDep):
        return await inertia.render("Home")
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from inertia_server.adapter import StarletteAdapter, encode_uri
from inertia_server.config import ResolvedConfig
from inertia_server.headers import InertiaHeaders
from inertia_server.inertia import Inertia
from inertia_server.vite import TemplateTransformer

logger = logging.getLogger(__name__)

_SEE_OTHER_METHODS = ("PUT", "PATCH", "DELETE")

Share = Callable[[Request, Inertia], Awaitable[None] | None]


class InertiaMiddleware(BaseHTTPMiddleware):
	"""Attach an `Inertia` instance to every request as `request.state.inertia`.

	Also enforces the protocol rules that apply to every response: asset
	version mismatches force a full reload, and redirects after PUT/PATCH/DELETE
	use 303 so the browser follows them with a GET.
	"""

	config: ResolvedConfig
	vite: TemplateTransformer | None
	share: Share | None

	def __init__(
		self,
		app: ASGIApp,
		config: ResolvedConfig,
		vite: TemplateTransformer | None = None,
		share: Share | None = None,
	):
		super().__init__(app)
		self.config = config
		self.vite = vite
		self.share = share

	async def dispatch(
		self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
	) -> Response:
		inertia = Inertia(StarletteAdapter(request), self.config, vite=self.vite)
		request.state.inertia = inertia
		if self.share is not None:
			result = self.share(request, inertia)
			if result is not None:
				await result

		is_inertia = bool(request.headers.get(InertiaHeaders.Inertia.lower()))
		if is_inertia and request.method == "GET" and self._version_changed(request):
			logger.debug("Asset version changed, forcing reload of %s", request.url)
			return Response(
				status_code=409,
				headers={InertiaHeaders.Location: encode_uri(str(request.url))},
			)

		response = await call_next(request)

		if is_inertia:
			_append_vary(response, InertiaHeaders.Inertia)
		if response.status_code == 302 and request.method in _SEE_OTHER_METHODS:
			response.status_code = 303
		return response

	def _version_changed(self, request: Request) -> bool:
		client_version = request.headers.get(InertiaHeaders.Version.lower())
		if client_version is None:
			return False
		return client_version != str(self.config.assets_version)


def _append_vary(response: Response, value: str) -> None:
	vary = response.headers.get("vary")
	if vary is None:
		response.headers["Vary"] = value
	elif value.lower() not in [v.strip().lower() for v in vary.split(",")]:
		response.headers["Vary"] = f"{vary}, {value}"


def get_inertia(request: Request) -> Inertia:
	"""FastAPI dependency returning the request's `Inertia` instance."""
	inertia = getattr(request.state, "inertia", None)
	if inertia is None:
		raise RuntimeError(
			"No Inertia instance on the request. Did you add InertiaMiddleware?"
		)
	return inertia


InertiaDep = Annotated[Inertia, Depends(get_inertia)]


__all__ = ["InertiaDep", "InertiaMiddleware", "Share", "get_inertia"]
