"""Tests for the SSR render server client."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from inertia_server.config import InertiaConfig, define_config
from inertia_server.errors import SsrRenderError
from inertia_server.page import PageObject
from inertia_server.renderer import ServerRenderer

PAGE: PageObject = {
	"component": "Home",
	"url": "/",
	"version": "1",
	"props": {"a": 1},
	"clearHistory": False,
	"encryptHistory": False,
}


@pytest.fixture
def renderer() -> ServerRenderer:
	return ServerRenderer(
		define_config(
			InertiaConfig(ssr_url="http://localhost:13714/render", ssr_timeout=5, env="dev")
		)
	)


def _mock_client(mock_client_class: MagicMock) -> AsyncMock:
	mock_client = AsyncMock()
	mock_client_class.return_value.__aenter__.return_value = mock_client
	return mock_client


@pytest.mark.asyncio
async def test_posts_page_and_returns_markup(renderer: ServerRenderer):
	with patch("inertia_server.renderer.httpx.AsyncClient") as mock_client_class:
		mock_client = _mock_client(mock_client_class)
		mock_response = MagicMock()
		mock_response.status_code = 200
		mock_response.json.return_value = {
			"head": ["<title>Home</title>"],
			"body": '<div id="app">Home</div>',
		}
		mock_client.post.return_value = mock_response

		result = await renderer.render(PAGE)

		assert result == {"head": ["<title>Home</title>"], "body": '<div id="app">Home</div>'}
		mock_client.post.assert_called_once()
		call_args = mock_client.post.call_args
		assert call_args[0][0] == "http://localhost:13714/render"
		assert call_args[1]["json"] == PAGE


@pytest.mark.asyncio
async def test_missing_head_defaults_to_empty(renderer: ServerRenderer):
	with patch("inertia_server.renderer.httpx.AsyncClient") as mock_client_class:
		mock_client = _mock_client(mock_client_class)
		mock_response = MagicMock()
		mock_response.status_code = 200
		mock_response.json.return_value = {"body": "<main/>"}
		mock_client.post.return_value = mock_response

		assert await renderer.render(PAGE) == {"head": [], "body": "<main/>"}


@pytest.mark.asyncio
async def test_connection_error(renderer: ServerRenderer):
	with patch("inertia_server.renderer.httpx.AsyncClient") as mock_client_class:
		mock_client = _mock_client(mock_client_class)
		mock_client.post.side_effect = httpx.ConnectError("refused")

		with pytest.raises(SsrRenderError, match="Could not reach") as info:
			await renderer.render(PAGE)
		assert info.value.url == "http://localhost:13714/render"


@pytest.mark.asyncio
async def test_error_status(renderer: ServerRenderer):
	with patch("inertia_server.renderer.httpx.AsyncClient") as mock_client_class:
		mock_client = _mock_client(mock_client_class)
		mock_response = MagicMock()
		mock_response.status_code = 500
		mock_client.post.return_value = mock_response

		with pytest.raises(SsrRenderError) as info:
			await renderer.render(PAGE)
		assert info.value.status_code == 500


@pytest.mark.asyncio
async def test_invalid_payload(renderer: ServerRenderer):
	with patch("inertia_server.renderer.httpx.AsyncClient") as mock_client_class:
		mock_client = _mock_client(mock_client_class)
		mock_response = MagicMock()
		mock_response.status_code = 200
		mock_response.json.return_value = ["not", "an", "object"]
		mock_client.post.return_value = mock_response

		with pytest.raises(SsrRenderError, match="not a JSON object"):
			await renderer.render(PAGE)


@pytest.mark.asyncio
async def test_invalid_json(renderer: ServerRenderer):
	with patch("inertia_server.renderer.httpx.AsyncClient") as mock_client_class:
		mock_client = _mock_client(mock_client_class)
		mock_response = MagicMock()
		mock_response.status_code = 200
		mock_response.json.side_effect = ValueError("bad json")
		mock_client.post.return_value = mock_response

		with pytest.raises(SsrRenderError, match="invalid JSON"):
			await renderer.render(PAGE)
