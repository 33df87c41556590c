"""CLI context for global state.

The CLIContext is built once by the top-level launcher from the global
options and made available to commands through a context variable.
"""

import contextvars
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from fmedit.config import Config


_current_cli_context: contextvars.ContextVar["CLIContext | None"] = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with configuration and options.

    Attributes:
        config: Loaded configuration object.
        project_root: Project root given on the command line, if any.
        config_error: Error message if config loading failed.
        logger: Structured logger for CLI commands (writes to file only).
    """

    config: "Config" = field(repr=False)  # noqa: UP037
    project_root: Path | None = None
    config_error: str | None = None
    logger: "FilteringBoundLogger | None" = field(default=None, repr=False)  # noqa: UP037

    @classmethod
    def get_current(cls) -> "CLIContext":  # noqa: UP037
        """Get the active CLIContext, or a default one if none is set."""
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx

        from fmedit.config import Config  # noqa: PLC0415

        return cls(config=Config.from_dict({}))

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:  # noqa: UP037
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to the default context."""
        _current_cli_context.set(None)
