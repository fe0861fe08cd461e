from pathlib import Path
from unittest.mock import patch

import pytest
from inertia_server.cli import cli, load_target, parse_target
from typer.testing import CliRunner

runner = CliRunner()


def test_parse_target_module_style():
	assert parse_target("some.module:app", "app") == ("some.module", "app")


def test_parse_target_default_attr():
	assert parse_target("main.py", "config") == ("main.py", "config")
	assert parse_target("pkg.settings:", "config") == ("pkg.settings", "config")


def test_parse_target_windows_path():
	target = "C:\\project\\main.py"
	assert parse_target(target, "app") == (target, "app")


def test_load_target_from_file(tmp_path: Path):
	file = tmp_path / "inertia_settings_a.py"
	file.write_text("value = 42\n")
	assert load_target(f"{file}:value") == 42


def test_load_target_missing_attr(tmp_path: Path):
	file = tmp_path / "inertia_settings_b.py"
	file.write_text("value = 42\n")
	with pytest.raises(AttributeError, match="other"):
		load_target(f"{file}:other")


def test_load_target_module():
	assert load_target("inertia_server.env:DEFAULT_SSR_URL").startswith("http://")


def test_config_command(tmp_path: Path):
	file = tmp_path / "inertia_settings_c.py"
	file.write_text(
		"from inertia_server import InertiaConfig\n"
		"config = InertiaConfig(assets_version='build-7', env='prod', "
		"shared_data={'appName': 'Demo'})\n"
	)
	result = runner.invoke(cli, ["config", str(file)])
	assert result.exit_code == 0, result.output
	assert "build-7" in result.output
	assert "prod" in result.output
	assert "appName" in result.output


def test_config_command_rejects_other_objects(tmp_path: Path):
	file = tmp_path / "inertia_settings_d.py"
	file.write_text("config = 'nope'\n")
	result = runner.invoke(cli, ["config", str(file)])
	assert result.exit_code == 1
	assert "Expected InertiaConfig" in result.output


def test_config_command_missing_file(tmp_path: Path):
	result = runner.invoke(cli, ["config", str(tmp_path / "missing.py")])
	assert result.exit_code == 1
	assert "Could not load" in result.output


def test_run_command_serves_app(tmp_path: Path):
	file = tmp_path / "inertia_app_e.py"
	file.write_text("app = object()\n")
	with patch("inertia_server.cli.uvicorn.run") as mock_run:
		result = runner.invoke(cli, ["run", f"{file}:app", "--port", "9001"])
	assert result.exit_code == 0, result.output
	mock_run.assert_called_once()
	assert mock_run.call_args.kwargs == {"host": "localhost", "port": 9001}


def test_run_command_with_reload(tmp_path: Path):
	file = tmp_path / "inertia_app_f.py"
	file.write_text("app = object()\n")
	with patch("inertia_server.cli.uvicorn.run") as mock_run:
		result = runner.invoke(cli, ["run", str(file), "--reload"])
	assert result.exit_code == 0, result.output
	mock_run.assert_called_once_with(
		"inertia_app_f:app", host="localhost", port=8000, reload=True
	)


def test_config_command_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv("INERTIA_ENV", "dev")
	file = tmp_path / "inertia_settings_g.py"
	file.write_text(
		"from inertia_server import InertiaConfig\n"
		"config = InertiaConfig(index_entrypoint='dev.html', "
		"index_build_entrypoint='build.html')\n"
	)
	result = runner.invoke(cli, ["config", str(file), "--env", "prod"])
	assert result.exit_code == 0, result.output
	assert "build.html" in result.output


def test_config_command_invalid_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
	monkeypatch.setenv("INERTIA_ENV", "dev")
	result = runner.invoke(cli, ["config", str(tmp_path / "x.py"), "--env", "qa"])
	assert result.exit_code == 1
	assert "Invalid --env" in result.output
