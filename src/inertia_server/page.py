"""
Page object construction.

See https://inertiajs.com/the-protocol#the-page-object
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, NotRequired, TypedDict

from inertia_server.adapter import HttpContext
from inertia_server.partial import PartialRequest, pick_props_to_resolve
from inertia_server.props import DEFAULT_GROUP, Prop
from inertia_server.resolver import resolve_props

logger = logging.getLogger(__name__)


class PageObject(TypedDict):
	component: str
	url: str
	version: str | int
	props: dict[str, Any]
	clearHistory: bool
	encryptHistory: bool
	mergeProps: NotRequired[list[str]]
	deferredProps: NotRequired[dict[str, list[str]]]


@dataclass(frozen=True, slots=True)
class RenderContext:
	"""Everything a single render call needs, captured once up front."""

	component: str
	url: str
	version: str | int
	clear_history: bool
	encrypt_history: bool
	partial: PartialRequest

	@property
	def is_partial(self) -> bool:
		return self.partial.is_partial_for(self.component)


def resolve_deferred_props(
	ctx: RenderContext, page_props: Mapping[str, Any]
) -> dict[str, list[str]]:
	"""Group deferred props so the client can request them after first load."""
	if ctx.is_partial:
		return {}
	groups: dict[str, list[str]] = {}
	for key, value in page_props.items():
		if isinstance(value, Prop) and value.kind == "defer":
			groups.setdefault(value.group or DEFAULT_GROUP, []).append(key)
	return groups


def resolve_merge_props(
	ctx: RenderContext, page_props: Mapping[str, Any]
) -> list[str]:
	reset = set(ctx.partial.reset)
	return [
		key
		for key, value in page_props.items()
		if isinstance(value, Prop) and value.should_merge and key not in reset
	]


async def build_page_object(
	ctx: RenderContext,
	shared_data: Mapping[str, Any],
	page_props: Mapping[str, Any] | None,
	http: HttpContext,
) -> PageObject:
	page_props = page_props or {}
	# Per-call props shadow shared data
	candidates = {**shared_data, **page_props}
	to_resolve = pick_props_to_resolve(ctx.component, candidates, ctx.partial)

	page: PageObject = {
		"component": ctx.component,
		"url": ctx.url or "/",
		"version": ctx.version,
		"props": await resolve_props(to_resolve, http),
		"clearHistory": ctx.clear_history,
		"encryptHistory": ctx.encrypt_history,
	}

	merge_props = resolve_merge_props(ctx, page_props)
	if merge_props:
		page["mergeProps"] = merge_props
	deferred = resolve_deferred_props(ctx, page_props)
	if deferred:
		page["deferredProps"] = deferred
	return page


def encode_page(page: PageObject) -> str:
	"""Serialize a page object for the wire.

	Raises TypeError or ValueError when a prop value is not JSON-encodable,
	NaN and infinities included.
	"""
	return json.dumps(
		page, separators=(",", ":"), ensure_ascii=False, allow_nan=False
	)


def decode_page(data: str | bytes) -> PageObject:
	return json.loads(data)


__all__ = [
	"PageObject",
	"RenderContext",
	"build_page_object",
	"decode_page",
	"encode_page",
	"resolve_deferred_props",
	"resolve_merge_props",
]
