"""
One-shot flash messages stored in the user session.

Works with any mutable session mapping, typically `request.session` from
Starlette's `SessionMiddleware`. A common pattern is to share them with every
page:

    inertia.share({"flash": lambda ctx: Flash.from_request(ctx.request).all()})
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any

from starlette.requests import HTTPConnection

FLASH_KEY = "flash"


class Flash:
	session: MutableMapping[str, Any]

	def __init__(self, session: MutableMapping[str, Any] | None):
		if session is None:
			raise RuntimeError("Flash requires a session object on the request.")
		self.session = session
		if not isinstance(self.session.get(FLASH_KEY), dict):
			self.session[FLASH_KEY] = {}

	@classmethod
	def from_request(cls, request: HTTPConnection) -> "Flash":
		if "session" not in request.scope:
			raise RuntimeError(
				"Flash requires a session. Install SessionMiddleware first."
			)
		return cls(request.session)

	@property
	def _store(self) -> dict[str, Any]:
		store = self.session.get(FLASH_KEY)
		if not isinstance(store, dict):
			store = {}
			self.session[FLASH_KEY] = store
		return store

	def get(self, key: str, default: Any = None) -> Any:
		"""Read a message and remove it from the session."""
		store = self._store
		if key not in store:
			return default
		value = store.pop(key)
		# Reassign so cookie-backed sessions notice the change
		self.session[FLASH_KEY] = store
		return value

	def set(self, key: str, value: Any) -> "Flash":
		store = self._store
		store[key] = value
		self.session[FLASH_KEY] = store
		return self

	def has(self, key: str) -> bool:
		return key in self._store

	def peek(self, key: str, default: Any = None) -> Any:
		return self._store.get(key, default)

	def all(self) -> dict[str, Any]:
		"""Return every message and empty the store."""
		messages = dict(self._store)
		self.session[FLASH_KEY] = {}
		return messages

	def clear(self) -> None:
		self.session[FLASH_KEY] = {}


__all__ = ["FLASH_KEY", "Flash"]
