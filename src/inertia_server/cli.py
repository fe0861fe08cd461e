"""
Command-line interface for inertia_server.

    inertia-server run main.py:app --port 8000
    inertia-server config settings:inertia_config
"""
# typer relies on function calls used as default values
# pyright: reportCallInDefaultInitializer=false

from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from typing import Any, cast

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from inertia_server.config import InertiaConfig, ResolvedConfig, define_config
from inertia_server.env import InertiaEnv, env

cli = typer.Typer(
	name="inertia-server",
	help="Serve and inspect Inertia applications",
	no_args_is_help=True,
)


def parse_target(target: str, default_attr: str) -> tuple[str, str]:
	"""Split 'path/to/file.py[:attr]' or 'module.path[:attr]'."""
	# Windows drive letters contain a colon as well
	module, sep, attr = target.rpartition(":")
	if not sep or "/" in attr or "\\" in attr:
		return target, default_attr
	return module, attr or default_attr


def load_target(target: str, default_attr: str = "app") -> Any:
	module_ref, attr = parse_target(target, default_attr)
	path = Path(module_ref)
	if module_ref.endswith(".py") or path.is_file():
		path = path.resolve()
		if not path.is_file():
			raise FileNotFoundError(f"File not found: {path}")
		sys.path.insert(0, str(path.parent))
		spec = importlib.util.spec_from_file_location(path.stem, path)
		if spec is None or spec.loader is None:
			raise ImportError(f"Cannot import {path}")
		module = importlib.util.module_from_spec(spec)
		sys.modules[path.stem] = module
		spec.loader.exec_module(module)
	else:
		module = importlib.import_module(module_ref)

	if not hasattr(module, attr):
		raise AttributeError(f"'{module.__name__}' has no attribute '{attr}'")
	return getattr(module, attr)


def config_table(config: ResolvedConfig) -> Table:
	table = Table(title="Inertia configuration")
	table.add_column("Setting", style="cyan")
	table.add_column("Value")
	entrypoint = config.entrypoint
	entry_label = (
		getattr(entrypoint, "__qualname__", repr(entrypoint))
		if callable(entrypoint)
		else str(entrypoint)
	)
	table.add_row("env", config.env)
	table.add_row("root_element_id", config.root_element_id)
	table.add_row("assets_version", str(config.assets_version))
	table.add_row("encrypt_history", str(config.encrypt_history))
	table.add_row("entrypoint", entry_label)
	table.add_row("ssr_enabled", str(config.ssr_enabled))
	table.add_row("ssr_url", config.ssr_url)
	table.add_row("shared_data", ", ".join(config.shared_data) or "-")
	return table


@cli.command("run")
def run(
	target: str = typer.Argument(
		..., help="App target: 'path/to/app.py[:var]' or 'module.path:var'"
	),
	host: str = typer.Option("localhost", "--host", help="Host uvicorn binds to"),
	port: int = typer.Option(8000, "--port", help="Port uvicorn binds to"),
	reload: bool = typer.Option(False, "--reload/--no-reload"),
):
	"""Serve an ASGI application with uvicorn."""
	console = Console()
	console.log(f"Loading app from: {target}")
	module_ref, attr = parse_target(target, "app")
	if reload:
		# uvicorn needs an import string to reload
		if module_ref.endswith(".py"):
			path = Path(module_ref).resolve()
			sys.path.insert(0, str(path.parent))
			module_ref = path.stem
		uvicorn.run(f"{module_ref}:{attr}", host=host, port=port, reload=True)
		return
	try:
		app = load_target(target, "app")
	except (ImportError, AttributeError, FileNotFoundError) as exc:
		console.print(f"[red]Could not load {target}: {exc}[/red]")
		raise typer.Exit(1) from exc
	uvicorn.run(app, host=host, port=port)


@cli.command("config")
def show_config(
	target: str = typer.Argument(
		..., help="Config target: 'path/to/file.py[:var]' or 'module.path:var'"
	),
	env_name: str | None = typer.Option(
		None, "--env", help="Resolve as 'dev' or 'prod' instead of INERTIA_ENV"
	),
):
	"""Print the resolved Inertia configuration."""
	console = Console()
	if env_name is not None:
		if env_name not in ("dev", "prod"):
			console.print(f"[red]Invalid --env {env_name!r}, expected dev or prod[/red]")
			raise typer.Exit(1)
		env.inertia_env = cast(InertiaEnv, env_name)
	try:
		value = load_target(target, "config")
	except (ImportError, AttributeError, FileNotFoundError) as exc:
		console.print(f"[red]Could not load {target}: {exc}[/red]")
		raise typer.Exit(1) from exc

	if isinstance(value, InertiaConfig):
		value = define_config(value)
	if not isinstance(value, ResolvedConfig):
		console.print(
			f"[red]Expected InertiaConfig, got {type(value).__name__} from {target}[/red]"
		)
		raise typer.Exit(1)
	console.print(config_table(value))


def main():
	cli()


if __name__ == "__main__":
	main()
