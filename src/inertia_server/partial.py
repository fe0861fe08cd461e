"""
Partial reloads: pick which props a request actually needs.

See https://inertiajs.com/partial-reloads
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from inertia_server.headers import InertiaHeaders, split_header
from inertia_server.props import Prop

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class PartialRequest:
	"""Partial-reload headers of a single request."""

	component: str | None = None
	only: tuple[str, ...] = ()
	except_: tuple[str, ...] = ()
	reset: tuple[str, ...] = ()

	@classmethod
	def from_headers(cls, get_header: Callable[[str], str | None]) -> "PartialRequest":
		return cls(
			component=get_header(InertiaHeaders.PartialComponent) or None,
			only=tuple(split_header(get_header(InertiaHeaders.PartialOnly))),
			except_=tuple(split_header(get_header(InertiaHeaders.PartialExcept))),
			reset=tuple(split_header(get_header(InertiaHeaders.Reset))),
		)

	def is_partial_for(self, component: str) -> bool:
		# A partial reload for another component is a regular visit
		return self.component is not None and self.component == component


def _is_always(value: Any) -> bool:
	return isinstance(value, Prop) and value.kind == "always"


def _ignored_on_first_load(value: Any) -> bool:
	return isinstance(value, Prop) and value.ignore_first_load


def pick_props_to_resolve(
	component: str, props: Mapping[str, Any], partial: PartialRequest
) -> dict[str, Any]:
	"""Return the subset of `props` to resolve for this request.

	`props` is never mutated. `always` props survive every filter.
	"""
	if not partial.is_partial_for(component):
		picked = {k: v for k, v in props.items() if not _ignored_on_first_load(v)}
	else:
		picked = dict(props)
		if partial.only:
			picked = {key: props[key] for key in partial.only if key in props}
		if partial.except_:
			for key in partial.except_:
				picked.pop(key, None)
		logger.debug(
			"Partial reload of %s: only=%s except=%s -> %s",
			component,
			partial.only,
			partial.except_,
			list(picked),
		)

	for key, value in props.items():
		if _is_always(value):
			picked[key] = value

	return picked


__all__ = ["PartialRequest", "pick_props_to_resolve"]
