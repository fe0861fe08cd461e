import json
from collections.abc import Callable

import pytest
from inertia_server.adapter import PendingResponse, StarletteAdapter, encode_uri

AdapterFactory = Callable[..., StarletteAdapter]


def test_encode_uri_escapes_like_javascript():
	assert encode_uri("/a b/ü?x=1&y=[2]#top") == "/a%20b/%C3%BC?x=1&y=%5B2%5D#top"
	assert encode_uri("https://example.com/~user/(a)") == (
		"https://example.com/~user/(a)"
	)


class TestRequestSide:
	def test_headers_are_case_insensitive(self, make_adapter: AdapterFactory):
		adapter = make_adapter(headers={"X-Inertia": "true"})
		assert adapter.get_header("x-inertia") == "true"
		assert adapter.get_header("X-INERTIA") == "true"
		assert adapter.get_header("X-Missing") is None

	def test_url_includes_query(self, make_adapter: AdapterFactory):
		assert make_adapter(path="/users", query="a=1").get_url() == "/users?a=1"
		assert make_adapter(path="/users").get_url() == "/users"

	def test_method(self, make_adapter: AdapterFactory):
		assert make_adapter(method="PATCH").get_method() == "PATCH"


class TestPendingResponse:
	def test_set_header_replaces_case_insensitively(self):
		pending = PendingResponse()
		pending.set_header("Vary", "Accept")
		pending.set_header("vary", "X-Inertia")
		assert pending.headers == {"vary": "X-Inertia"}

	def test_status_and_headers_flow_into_response(self, make_adapter: AdapterFactory):
		adapter = make_adapter()
		adapter.get_response().set_header("X-Custom", "1")
		adapter.set_status(201)
		response = adapter.html("<p>ok</p>")
		assert response.status_code == 201
		assert response.headers["x-custom"] == "1"
		assert response.body == b"<p>ok</p>"


class TestJson:
	def test_writes_json(self, make_adapter: AdapterFactory):
		response = make_adapter().json({"name": "Zoë"})
		assert response.status_code == 200
		assert response.headers["content-type"] == "application/json"
		assert json.loads(response.body) == {"name": "Zoë"}

	def test_unserializable_degrades_to_500(self, make_adapter: AdapterFactory):
		response = make_adapter().json({"fn": print})
		assert response.status_code == 500
		assert json.loads(response.body) == {"error": "Failed to serialize JSON"}

	def test_non_finite_floats_degrade_to_500(self, make_adapter: AdapterFactory):
		response = make_adapter().json({"ratio": float("-inf")})
		assert response.status_code == 500
		assert json.loads(response.body) == {"error": "Failed to serialize JSON"}


class TestRedirect:
	def test_text_body(self, make_adapter: AdapterFactory):
		response = make_adapter().redirect(302, "/login")
		body = b"302. Redirecting to /login"
		assert response.status_code == 302
		assert response.headers["location"] == "/login"
		assert response.body == body
		assert response.headers["content-length"] == str(len(body))

	def test_html_body(self, make_adapter: AdapterFactory):
		adapter = make_adapter(headers={"Accept": "text/html,application/xhtml+xml"})
		response = adapter.redirect(303, "/a b")
		assert response.headers["location"] == "/a%20b"
		assert response.body == (
			b'<p>303. Redirecting to <a href="/a%20b">/a%20b</a></p>'
		)

	def test_head_request_has_no_body(self, make_adapter: AdapterFactory):
		response = make_adapter(method="HEAD").redirect(302, "/login")
		assert response.body == b""
		assert response.headers["content-length"] == str(
			len(b"302. Redirecting to /login")
		)


def test_end_without_body(make_adapter: AdapterFactory):
	adapter = make_adapter()
	adapter.set_status(409)
	response = adapter.end()
	assert response.status_code == 409
	assert response.body == b""


@pytest.mark.parametrize("body", ["text", b"bytes"])
def test_end_with_body(make_adapter: AdapterFactory, body: str | bytes):
	response = make_adapter().end(body)
	assert response.body == (body.encode() if isinstance(body, str) else body)
