"""Config commands -- view and initialise configuration.

Provides the ``specdocs config`` sub-command group. ``show`` prints the
effective configuration after every layer (user file, ``./specdocs.json``,
environment variables) has been applied; ``path`` prints where the user
file lives; ``init`` writes a user file holding the defaults, ready to edit.
"""

from __future__ import annotations

import json

import typer

from specdocs.output import error, info, print_data, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the effective configuration as JSON.

    Example::

        specdocs config show
        SPECDOCS_BASE_URL=https://api.test specdocs config show
    """
    from specdocs.config import get_config_dir, resolve_config
    from specdocs.exceptions import ConfigError

    obj = ctx.obj or {}
    try:
        config = resolve_config(cli_base_url=obj.get("base_url"))
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(f"Config directory: {get_config_dir()}")
    print_data(json.dumps(config.model_dump(mode="json"), indent=2))


@config_app.command("path")
def config_path() -> None:
    """Print the path of the user configuration file."""
    from specdocs.config import global_config_path

    print_data(str(global_config_path()))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration file."
    ),
) -> None:
    """Write the default configuration to the user configuration file.

    Example::

        specdocs config init
        specdocs config init --force
    """
    from specdocs.config import global_config_path, save_global_config
    from specdocs.models import GlobalConfig

    path = global_config_path()
    if path.exists() and not force:
        error(f"Config file already exists: {path}")
        info("Use --force to overwrite it.")
        raise typer.Exit(code=2)

    save_global_config(GlobalConfig())
    success(f"Wrote default configuration to {path}")
