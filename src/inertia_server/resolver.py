from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Mapping
from typing import Any

from inertia_server.adapter import HttpContext
from inertia_server.props import Prop

logger = logging.getLogger(__name__)


def _takes_context(fn: Any) -> bool:
	"""Whether a prop factory accepts the `HttpContext` argument."""
	try:
		params = list(inspect.signature(fn).parameters.values())
	except (TypeError, ValueError):
		# Builtins without an introspectable signature get the context
		return True
	return any(
		p.kind
		in (
			inspect.Parameter.POSITIONAL_ONLY,
			inspect.Parameter.POSITIONAL_OR_KEYWORD,
			inspect.Parameter.VAR_POSITIONAL,
		)
		for p in params
	)


async def resolve_value(value: Any, context: HttpContext) -> Any:
	"""Turn one prop into its concrete value.

	Wrapped props have their callback invoked. Other callables get the
	`HttpContext` when they take an argument, and a wrapped prop they
	return is unwrapped as well.
	"""
	if isinstance(value, Prop):
		return await value.resolve()
	if callable(value):
		result = value(context) if _takes_context(value) else value()
		if inspect.isawaitable(result):
			result = await result
		if isinstance(result, Prop):
			return await result.resolve()
		return result
	return value


async def resolve_props(
	props: Mapping[str, Any], context: HttpContext
) -> dict[str, Any]:
	"""Resolve all props concurrently, keeping the keys in input order.

	Errors raised by a callback are not caught here.
	"""
	keys = list(props)
	values = await asyncio.gather(*(resolve_value(props[k], context) for k in keys))
	logger.debug("Resolved %d props", len(keys))
	return dict(zip(keys, values, strict=True))


__all__ = ["resolve_props", "resolve_value"]
