"""Environment variables read by inertia_server."""

import os
from typing import Literal, cast

InertiaEnv = Literal["dev", "prod"]

ENV_INERTIA_ENV = "INERTIA_ENV"
ENV_INERTIA_SSR_URL = "INERTIA_SSR_URL"

DEFAULT_SSR_URL = "http://127.0.0.1:13714/render"


class EnvVars:
	def _get(self, key: str) -> str | None:
		return os.environ.get(key)

	def _set(self, key: str, value: str) -> None:
		os.environ[key] = value

	@property
	def inertia_env(self) -> InertiaEnv:
		value = (self._get(ENV_INERTIA_ENV) or "dev").lower()
		if value not in ("dev", "prod"):
			raise ValueError(
				f"Invalid {ENV_INERTIA_ENV}={value!r}, expected 'dev' or 'prod'"
			)
		return cast(InertiaEnv, value)

	@inertia_env.setter
	def inertia_env(self, value: InertiaEnv) -> None:
		self._set(ENV_INERTIA_ENV, value)

	@property
	def ssr_url(self) -> str | None:
		return self._get(ENV_INERTIA_SSR_URL)


env = EnvVars()
