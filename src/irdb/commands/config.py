"""Config commands -- view and modify the global configuration.

Provides the ``irdb config`` sub-command group for reading, updating,
and resetting :class:`~irdb.models.GlobalConfig`.  Settings are persisted
in the irdb config directory.
"""

from __future__ import annotations

import typer

from irdb.exit_codes import EXIT_INVALID_USAGE
from irdb.output import error, format_response, info, success


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the stored configuration.

    Example::

        irdb config show
        irdb --json config show
    """
    from irdb.config import get_config_dir, load_global_config

    config = load_global_config()
    info(f"Config directory: {get_config_dir()}")
    format_response(config.model_dump(mode="json"))


@config_app.command("set")
def config_set(
    key: str = typer.Argument(
        help="Config key (dot notation, e.g., 'catalog.base_url')."
    ),
    value: str = typer.Argument(help="Value to set."),
) -> None:
    """Set a configuration value.

    Uses dot notation for nested keys.  The value is coerced to the type
    of the current value (bool or int) and the result is validated
    against :class:`~irdb.models.GlobalConfig` before saving.

    Example::

        irdb config set catalog.base_url http://localhost:8081/api
        irdb config set cache.enabled false
        irdb config set cache.ttl_seconds 86400
    """
    from irdb.config import load_global_config, save_global_config
    from irdb.models import GlobalConfig

    data = load_global_config().model_dump(mode="json")

    keys = key.split(".")
    target = data
    for k in keys[:-1]:
        if k not in target or not isinstance(target[k], dict):
            error(f"Invalid config key: {key}")
            raise typer.Exit(code=EXIT_INVALID_USAGE)
        target = target[k]

    final_key = keys[-1]
    if final_key not in target or isinstance(target[final_key], dict):
        error(f"Unknown config key: {key}")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    current = target[final_key]
    coerced: object = value
    if isinstance(current, bool):
        coerced = value.lower() in ("true", "1", "yes")
    elif isinstance(current, int):
        try:
            coerced = int(value)
        except ValueError:
            error(f"Expected integer for {key}, got: {value}")
            raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    target[final_key] = coerced

    try:
        new_config = GlobalConfig.model_validate(data)
    except ValueError as exc:
        error(f"Validation error: {exc}")
        raise typer.Exit(code=EXIT_INVALID_USAGE) from None

    save_global_config(new_config)
    success(f"Set {key} = {coerced}")


@config_app.command("reset")
def config_reset(
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation."),
) -> None:
    """Reset the configuration to defaults."""
    from irdb.config import save_global_config
    from irdb.models import GlobalConfig

    if not force and not typer.confirm("Reset configuration to defaults?"):
        raise typer.Exit()
    save_global_config(GlobalConfig())
    success("Configuration reset to defaults.")
