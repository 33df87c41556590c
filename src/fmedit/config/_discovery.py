"""Project root and config source discovery.

The project root is the nearest directory, searching upward, that holds a
``.fmedit.toml`` file. When the project lives in a git repository, a
``fmedit.toml`` inside the git control directory provides per-worktree
overrides that are never committed.
"""

from pathlib import Path
from typing import Any

from fmedit.utils import (
    PROJECT_CONFIG_FILENAME,
    get_project_config_path,
    get_user_config_path,
)

from ._defaults import DEFAULT_CONFIG
from ._models._common import ConfigSource, ConfigSourceName

WORKTREE_CONFIG_FILENAME = "fmedit.toml"
"""Name of the per-worktree config file inside the git control directory."""


def find_project_root(start: Path | None = None) -> Path | None:
    """Find the project root by searching upward for ``.fmedit.toml``.

    Args:
        start: Directory to start from. Defaults to the current directory.

    Returns:
        The directory containing ``.fmedit.toml``, or None if the filesystem
        root is reached first.
    """
    current = (start or Path.cwd()).resolve()

    while True:
        if (current / PROJECT_CONFIG_FILENAME).is_file():
            return current
        parent = current.parent
        if parent == current:
            return None
        current = parent


def get_git_dir(path: Path | None = None) -> Path | None:
    """Get the git control directory for *path*.

    For linked worktrees this is the worktree-specific directory
    (``.git/worktrees/<name>/``), not the main ``.git/``.

    Args:
        path: Directory to start searching from. Defaults to the current
            directory.

    Returns:
        Path to the control directory, or None outside a git repository.
    """
    from dulwich.errors import NotGitRepository  # noqa: PLC0415
    from dulwich.repo import Repo  # noqa: PLC0415

    search_path = str(path.resolve()) if path else "."

    try:
        with Repo.discover(search_path) as repo:
            return Path(repo.controldir())
    except NotGitRepository:
        return None


def _file_exists(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def discover_sources(
    project_root: Path | None = None,
    *,
    include_env: bool = True,
    include_cli: bool = False,
    cli_overrides: dict[str, Any] | None = None,
) -> list[ConfigSource]:
    """Discover all configuration sources.

    File sources are checked for existence but not read. Sources that depend
    on a project root are omitted when no project root is found.

    Args:
        project_root: Project root directory. If None, auto-detect by
            searching upward for ``.fmedit.toml``.
        include_env: Include environment variables as a source.
        include_cli: Include CLI overrides as a source.
        cli_overrides: CLI argument overrides, used if include_cli is True.

    Returns:
        ConfigSource objects in precedence order, highest first. Missing
        files are still listed with exists=False.
    """
    sources: list[ConfigSource] = []
    resolved_root = project_root if project_root else find_project_root()

    if include_cli:
        sources.append(
            ConfigSource(
                name=ConfigSourceName.CLI,
                path=None,
                exists=bool(cli_overrides),
                values=cli_overrides or {},
            )
        )

    if include_env:
        # Values are parsed during loading
        sources.append(
            ConfigSource(name=ConfigSourceName.ENV, path=None, exists=True, values={})
        )

    if resolved_root:
        git_dir = get_git_dir(resolved_root)
        if git_dir:
            worktree_path = git_dir / WORKTREE_CONFIG_FILENAME
            sources.append(
                ConfigSource(
                    name=ConfigSourceName.WORKTREE,
                    path=worktree_path,
                    exists=_file_exists(worktree_path),
                    values={},
                )
            )

        project_path = get_project_config_path(resolved_root)
        sources.append(
            ConfigSource(
                name=ConfigSourceName.PROJECT,
                path=project_path,
                exists=_file_exists(project_path),
                values={},
            )
        )

    user_path = get_user_config_path()
    sources.append(
        ConfigSource(
            name=ConfigSourceName.USER,
            path=user_path,
            exists=_file_exists(user_path),
            values={},
        )
    )

    sources.append(
        ConfigSource(
            name=ConfigSourceName.DEFAULT,
            path=None,
            exists=True,
            values=DEFAULT_CONFIG,
        )
    )

    return sources
