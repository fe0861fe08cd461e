"""
Prop wrappers that control when a page prop gets resolved.

Plain values and plain callables are "eager": they are resolved on every
request unless a partial reload filters them out by name. `eager()` wraps a
callback with the same timing. The other wrappers change it:

- optional: skipped on the first visit, only resolved when a partial reload
  asks for it by name
- defer: skipped on the first visit and advertised in `deferredProps` so the
  client fetches it right after
- merge: resolved like an eager prop, but the client merges the value into its
  existing state instead of replacing it
- always: resolved on every request, ignoring `only`/`except` filtering
"""

from __future__ import annotations

import inspect
import warnings
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, replace
from typing import Any, Generic, Literal, TypeVar, cast

T = TypeVar("T")

PropKind = Literal["eager", "optional", "defer", "merge", "always"]

PropCallback = Callable[[], T | Awaitable[T]]

DEFAULT_GROUP = "default"


@dataclass(frozen=True, slots=True)
class Prop(Generic[T]):
	kind: PropKind
	callback: PropCallback[T]
	group: str | None = None
	should_merge: bool = False

	@property
	def ignore_first_load(self) -> bool:
		"""Whether this prop is left out of a non-partial response."""
		return self.kind == "optional" or self.kind == "defer"

	def mergeable(self) -> "Prop[T]":
		"""Flag a deferred prop so the client merges its value once loaded."""
		if self.kind == "merge":
			return self
		if self.kind != "defer":
			raise ValueError(f"Cannot merge a prop of kind '{self.kind}'")
		return replace(self, should_merge=True)

	async def resolve(self) -> T:
		result = self.callback()
		if inspect.isawaitable(result):
			return await cast(Awaitable[T], result)
		return cast(T, result)


def is_prop(value: Any) -> bool:
	return isinstance(value, Prop)


def eager(callback: PropCallback[T]) -> Prop[T]:
	return Prop("eager", callback)


def optional(callback: PropCallback[T]) -> Prop[T]:
	"""Create a prop that is only resolved when explicitly requested.

	See https://inertiajs.com/partial-reloads#lazy-data-evaluation
	"""
	return Prop("optional", callback)


def lazy(callback: PropCallback[T]) -> Prop[T]:
	"""Deprecated alias of `optional`."""
	warnings.warn(
		"lazy() is deprecated, use optional() instead",
		DeprecationWarning,
		stacklevel=2,
	)
	return optional(callback)


def defer(callback: PropCallback[T], group: str = DEFAULT_GROUP) -> Prop[T]:
	"""Create a prop loaded by the client after the initial page render.

	Props sharing a `group` are fetched together in a single request.
	See https://v2.inertiajs.com/deferred-props
	"""
	return Prop("defer", callback, group=group)


def merge(callback: PropCallback[T]) -> Prop[T]:
	"""See https://v2.inertiajs.com/merging-props"""
	return Prop("merge", callback, should_merge=True)


def always(callback: PropCallback[T]) -> Prop[T]:
	return Prop("always", callback)


__all__ = [
	"DEFAULT_GROUP",
	"Prop",
	"PropCallback",
	"PropKind",
	"always",
	"defer",
	"eager",
	"is_prop",
	"lazy",
	"merge",
	"optional",
]
