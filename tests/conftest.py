from collections.abc import Callable

import pytest
from inertia_server.adapter import StarletteAdapter
from inertia_server.config import InertiaConfig, ResolvedConfig, define_config
from starlette.requests import Request

LAYOUT = """<html>
<head><!-- @inertiaHead --></head>
<body><!-- @inertia --></body>
</html>"""

RequestFactory = Callable[..., Request]


@pytest.fixture
def make_request() -> RequestFactory:
	def _make(
		method: str = "GET",
		path: str = "/",
		headers: dict[str, str] | None = None,
		query: str = "",
	) -> Request:
		scope = {
			"type": "http",
			"method": method,
			"path": path,
			"query_string": query.encode(),
			"headers": [
				(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()
			],
			"server": ("localhost", 8000),
			"scheme": "http",
		}
		return Request(scope)

	return _make


@pytest.fixture
def make_adapter(make_request: RequestFactory) -> Callable[..., StarletteAdapter]:
	def _make(**kwargs: object) -> StarletteAdapter:
		return StarletteAdapter(make_request(**kwargs))

	return _make


@pytest.fixture
def config() -> ResolvedConfig:
	return define_config(
		InertiaConfig(
			assets_version="abc123",
			index_entrypoint=lambda _req: LAYOUT,
			env="dev",
		)
	)
