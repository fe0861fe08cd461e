from __future__ import annotations

import hashlib
import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from inertia_server.env import DEFAULT_SSR_URL, InertiaEnv, env
from inertia_server.templates import render_default_layout

logger = logging.getLogger(__name__)

EntrypointFn = Callable[[Any], str | Awaitable[str]]
"""Receives the framework request and returns the layout HTML."""

Entrypoint = str | Path | EntrypointFn


@dataclass
class InertiaConfig:
	"""
	User-facing Inertia configuration, resolved once with `define_config()`.

	Attributes:
	    root_element_id: `id` of the element the client mounts into.
	    assets_version: Current asset version. Derived from `manifest_path` when omitted.
	    manifest_path: Build manifest hashed into the asset version.
	    encrypt_history: Default for history encryption on every page.
	    shared_data: Props merged into every page. Callables receive an `HttpContext`.
	    index_entrypoint: Layout used in dev, as a file path or a callable.
	    index_build_entrypoint: Layout used in prod, as a file path or a callable.
	    ssr_enabled: Render first visits through the SSR render server.
	    ssr_url: Address of the SSR render endpoint.
	    ssr_timeout: Seconds to wait for the SSR render server.
	    env: "dev" or "prod". Read from INERTIA_ENV when omitted.
	"""

	root_element_id: str = "app"
	assets_version: str | int | None = None
	manifest_path: Path | str | None = None
	encrypt_history: bool = False
	shared_data: dict[str, Any] = field(default_factory=dict)
	index_entrypoint: Entrypoint | None = None
	index_build_entrypoint: Entrypoint | None = None
	ssr_enabled: bool = False
	ssr_url: str | None = None
	ssr_timeout: float = 30.0
	env: InertiaEnv | None = None
	title: str = ""
	"""Document title used by the built-in layout."""


@dataclass(frozen=True)
class ResolvedConfig:
	root_element_id: str
	assets_version: str | int
	encrypt_history: bool
	shared_data: Mapping[str, Any]
	env: InertiaEnv
	entrypoint: Entrypoint
	ssr_enabled: bool
	ssr_url: str
	ssr_timeout: float


def _hash_manifest(path: Path) -> str:
	return hashlib.sha256(path.read_bytes()).hexdigest()[:12]


def resolve_assets_version(config: InertiaConfig) -> str | int:
	if config.assets_version is not None:
		return config.assets_version
	if config.manifest_path is not None:
		path = Path(config.manifest_path)
		if path.is_file():
			return _hash_manifest(path)
		logger.warning("Manifest %s not found, using default assets version", path)
	return "1"


def _default_entrypoint(title: str) -> EntrypointFn:
	def entrypoint(_request: Any) -> str:
		return render_default_layout(title=title)

	return entrypoint


def define_config(config: InertiaConfig | None = None) -> ResolvedConfig:
	"""Resolve an `InertiaConfig` into the immutable settings used per request.

	The environment and the layout entrypoint are picked here, once, rather
	than on every render.
	"""
	config = config or InertiaConfig()
	mode: InertiaEnv = config.env or env.inertia_env
	if mode not in ("dev", "prod"):
		raise ValueError(f"Invalid env {mode!r}, expected 'dev' or 'prod'")

	if mode == "prod":
		entrypoint = config.index_build_entrypoint or config.index_entrypoint
	else:
		entrypoint = config.index_entrypoint or config.index_build_entrypoint
	if entrypoint is None:
		entrypoint = _default_entrypoint(config.title)

	return ResolvedConfig(
		root_element_id=config.root_element_id or "app",
		assets_version=resolve_assets_version(config),
		encrypt_history=config.encrypt_history,
		shared_data=MappingProxyType(dict(config.shared_data)),
		env=mode,
		entrypoint=entrypoint,
		ssr_enabled=config.ssr_enabled,
		ssr_url=config.ssr_url or env.ssr_url or DEFAULT_SSR_URL,
		ssr_timeout=config.ssr_timeout,
	)


__all__ = [
	"Entrypoint",
	"EntrypointFn",
	"InertiaConfig",
	"ResolvedConfig",
	"define_config",
	"resolve_assets_version",
]
