import tomllib
from pathlib import Path

import typer

_config_file = Path(__file__).parent.parent / "pyproject.toml"
with _config_file.open("rb") as f:
    _config = tomllib.load(f)

_project_config = _config["project"]
_tool_config = _config["tool"]["config"]

PROJECT_NAME = _project_config["name"]
PROJECT_VERSION = _project_config["version"]

API_BASE_URL = _tool_config["api_base_url"]
CONNECT_TIMEOUT = _tool_config["connect_timeout"]
READ_TIMEOUT = _tool_config["read_timeout"]
PATTERN_CACHE_SIZE = _tool_config["pattern_cache_size"]
DEFAULT_LOCALE = _tool_config["default_locale"]

# Cache directory for immutable historical responses
CACHE_DIR = Path(".cache")


def config_cli(
    all: bool = typer.Option(False, "--all", help="Show all configuration values"),
    project_name: bool = typer.Option(False, "--project-name", help=PROJECT_NAME),
    project_version: bool = typer.Option(False, "--project-version", help=PROJECT_VERSION),
    api_base_url: bool = typer.Option(False, "--api-base-url", help=API_BASE_URL),
    connect_timeout: bool = typer.Option(False, "--connect-timeout", help=str(CONNECT_TIMEOUT)),
    read_timeout: bool = typer.Option(False, "--read-timeout", help=str(READ_TIMEOUT)),
    pattern_cache_size: bool = typer.Option(False, "--pattern-cache-size", help=str(PATTERN_CACHE_SIZE)),
    default_locale: bool = typer.Option(False, "--default-locale", help=DEFAULT_LOCALE),
) -> None:
    """Get configuration values from pyproject.toml."""
    if all:
        typer.echo(f"project_name={PROJECT_NAME}")
        typer.echo(f"project_version={PROJECT_VERSION}")
        typer.echo(f"api_base_url={API_BASE_URL}")
        typer.echo(f"connect_timeout={CONNECT_TIMEOUT}")
        typer.echo(f"read_timeout={READ_TIMEOUT}")
        typer.echo(f"pattern_cache_size={PATTERN_CACHE_SIZE}")
        typer.echo(f"default_locale={DEFAULT_LOCALE}")
        return

    param_map = [
        (project_name, PROJECT_NAME),
        (project_version, PROJECT_VERSION),
        (api_base_url, API_BASE_URL),
        (connect_timeout, CONNECT_TIMEOUT),
        (read_timeout, READ_TIMEOUT),
        (pattern_cache_size, PATTERN_CACHE_SIZE),
        (default_locale, DEFAULT_LOCALE),
    ]

    for is_set, value in param_map:
        if is_set:
            typer.echo(value)
            return

    typer.secho(
        "Error: No config key specified. Use --help to see available options.",
        fg=typer.colors.RED,
        err=True,
    )
    raise typer.Exit(1)


def main():
    typer.run(config_cli)


if __name__ == "__main__":
    main()
