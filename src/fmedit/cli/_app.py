"""The command-line interface for fmedit."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from fmedit.config import safe_load_config
from fmedit.utils import create_cli_logger

from ._commands import register_commands
from ._commands._context import CLIContext

APP_HELP = "Edit the front matter of pages stored as JSON, YAML or markdown."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Build the fmedit application.

    Calling the returned app runs a command directly with a default
    context; ``app.meta`` additionally parses the global options and loads
    configuration first.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="fmedit",
        help=APP_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        project_root: Annotated[
            Path | None, Parameter(name="--project-root", help="Path to project root")
        ] = None,
        log_level: Annotated[
            str | None, Parameter(name="--log-level", help="Override the log level")
        ] = None,
    ) -> None:
        """Run fmedit with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            config: Explicit path to config file.
            project_root: Path to project root directory.
            log_level: Log level overriding the configuration.
        """
        cli_overrides: dict[str, object] | None = None
        if log_level is not None:
            cli_overrides = {"logging": {"level": log_level}}

        loaded_config, config_error = safe_load_config(
            config_path=config,
            project_root=project_root,
            cli_overrides=cli_overrides,
        )

        cli_logger = create_cli_logger(
            level=loaded_config.logging.level.value,
            log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
            log_file=loaded_config.logging.file,
        )

        CLIContext.set_current(
            CLIContext(
                config=loaded_config,
                project_root=project_root,
                config_error=config_error,
                logger=cli_logger,
            )
        )

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `fmedit` CLI."""
    app.meta()


if __name__ == "__main__":
    main()
