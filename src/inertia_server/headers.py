"""Request and response headers used by the Inertia protocol."""


class InertiaHeaders:
	Inertia = "X-Inertia"
	Version = "X-Inertia-Version"
	PartialComponent = "X-Inertia-Partial-Component"
	PartialOnly = "X-Inertia-Partial-Data"
	PartialExcept = "X-Inertia-Partial-Except"
	Reset = "X-Inertia-Reset"
	Location = "X-Inertia-Location"


def split_header(value: str | list[str] | None) -> list[str]:
	"""Split a comma-separated header into its non-empty keys.

	A missing or empty header means "no constraint" and yields an empty list.
	"""
	if not value:
		return []
	if isinstance(value, list):
		value = ",".join(value)
	return [part.strip() for part in value.split(",") if part.strip()]


__all__ = ["InertiaHeaders", "split_header"]
