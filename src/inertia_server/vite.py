"""Dev-time hooks for the Vite asset pipeline."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

# Vite's React plugin needs this preamble before any module script
REACT_REFRESH_PREAMBLE = """<script type="module">
import RefreshRuntime from "{base}/@react-refresh";
RefreshRuntime.injectIntoGlobalHook(window);
window.$RefreshReg$ = () => {{}};
window.$RefreshSig$ = () => (type) => type;
window.__vite_plugin_react_preamble_installed__ = true;
</script>"""


class TemplateTransformer(Protocol):
	async def transform_index_html(self, url: str, html: str) -> str: ...


class ViteDevTransformer:
	"""Inject the Vite client and entry scripts into the layout.

	Mirrors what `vite.transformIndexHtml` does for a server-rendered layout
	when the Vite dev server runs as a separate process.
	"""

	dev_server_url: str
	entrypoints: tuple[str, ...]
	react_refresh: bool

	def __init__(
		self,
		dev_server_url: str = "http://localhost:5173",
		entrypoints: Sequence[str] = ("src/main.tsx",),
		react_refresh: bool = False,
	):
		self.dev_server_url = dev_server_url.rstrip("/")
		self.entrypoints = tuple(entrypoints)
		self.react_refresh = react_refresh

	def tags(self) -> str:
		tags: list[str] = []
		if self.react_refresh:
			tags.append(REACT_REFRESH_PREAMBLE.format(base=self.dev_server_url))
		tags.append(
			f'<script type="module" src="{self.dev_server_url}/@vite/client"></script>'
		)
		for entry in self.entrypoints:
			src = f"{self.dev_server_url}/{entry.lstrip('/')}"
			tags.append(f'<script type="module" src="{src}"></script>')
		return "\n".join(tags)

	async def transform_index_html(self, url: str, html: str) -> str:
		tags = self.tags()
		if "</head>" in html:
			return html.replace("</head>", f"{tags}\n</head>", 1)
		return tags + "\n" + html


__all__ = ["TemplateTransformer", "ViteDevTransformer"]
