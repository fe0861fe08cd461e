"""Server-side adapter for the Inertia.js protocol on Starlette and FastAPI."""

from .adapter import Adapter, HttpContext, PendingResponse, StarletteAdapter
from .config import InertiaConfig, ResolvedConfig, define_config
from .errors import InertiaError, RedirectUrlRequired, SsrRenderError
from .flash import Flash
from .headers import InertiaHeaders
from .inertia import Inertia
from .middleware import InertiaDep, InertiaMiddleware, get_inertia
from .page import PageObject
from .props import (
	Prop,
	always,
	defer,
	eager,
	lazy,
	merge,
	optional,
)
from .renderer import ServerRenderer
from .vite import ViteDevTransformer

__version__ = "0.1.0"

__all__ = [
	"Adapter",
	"Flash",
	"HttpContext",
	"Inertia",
	"InertiaConfig",
	"InertiaDep",
	"InertiaError",
	"InertiaHeaders",
	"InertiaMiddleware",
	"PageObject",
	"PendingResponse",
	"Prop",
	"RedirectUrlRequired",
	"ResolvedConfig",
	"ServerRenderer",
	"SsrRenderError",
	"StarletteAdapter",
	"ViteDevTransformer",
	"always",
	"defer",
	"define_config",
	"eager",
	"get_inertia",
	"lazy",
	"merge",
	"optional",
]
