"""Click-based CLI entrypoint for bselect.

Interactively select git branches and print them to stdout::

    git branch -D $(bselect 'feature/')
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path
from typing import IO, Optional

import click

from bselect import __version__
from bselect.branches import enumerate_branches
from bselect.config import Config, init_config
from bselect.constants import get_config_path
from bselect.errors import BselectError, ConfigError
from bselect.git import BranchGetter, FsBranchGetter
from bselect.git_cli import GitCliBranchGetter
from bselect.tui import BranchSelector, TuiSelector
from bselect.utils import log_debug, log_error, log_warn

BACKENDS = ("fs", "git")


def make_getter(backend: str, git_dir: Path) -> BranchGetter:
    """Pick the discovery backend for *git_dir*."""
    if backend == "git":
        return GitCliBranchGetter(git_dir)
    return FsBranchGetter(git_dir)


def load_user_config() -> Config:
    """Load (or create) the user config, falling back to defaults on error."""
    path = get_config_path()
    try:
        return init_config(path)
    except ConfigError as exc:
        log_warn(f"{exc}; using default config")
        return Config()


def run_bselect(
    git_dir: str | Path,
    getter: BranchGetter,
    selector: BranchSelector,
    include_remotes: bool,
    filters: Sequence[str],
    out: Optional[IO[str]] = None,
) -> list[str]:
    """Enumerate, let the user select, and print the chosen branches.

    Selected display names are written space separated on one line.

    Returns:
        The names that were written.
    """
    candidates = enumerate_branches(
        git_dir, include_remotes=include_remotes, filter_patterns=filters, getter=getter
    )
    selected = selector.select_branches(candidates)
    names = [b.display() for b in selected]
    click.echo(" ".join(names), file=out)
    return names


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("filters", nargs=-1)
@click.option(
    "--git-dir",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Path to git repository",
)
@click.option(
    "--all",
    "include_remotes",
    is_flag=True,
    help="List both remote-tracking branches and local branches",
)
@click.option(
    "--config",
    "show_config",
    is_flag=True,
    help="Print the path to the configuration file and exit",
)
@click.option(
    "--backend",
    type=click.Choice(BACKENDS),
    default="fs",
    show_default=True,
    help="Read refs from disk (fs) or through the git executable (git)",
)
@click.version_option(__version__, prog_name="bselect")
@click.pass_context
def cli(
    ctx: click.Context,
    filters: tuple[str, ...],
    git_dir: str,
    include_remotes: bool,
    show_config: bool,
    backend: str,
) -> None:
    """Interactively select git branches and print them to stdout.

    FILTERS are regular expressions; only branches whose name matches at
    least one of them are listed. Remote branches are matched as
    'remotes/<remote>/<branch>'.
    """
    if show_config:
        click.echo(str(get_config_path()))
        return

    config = load_user_config()
    log_debug(f"Using backend '{backend}' for {git_dir}")
    getter = make_getter(backend, Path(git_dir))
    selector = TuiSelector(theme=config.active_theme(), use_gum=config.use_gum)
    try:
        run_bselect(git_dir, getter, selector, include_remotes, filters)
    except BselectError as exc:
        log_error(str(exc))
        ctx.exit(1)


def main() -> None:
    """Entry point for the CLI.

    Usage errors (bad flags) are normalised to exit code 1; Click's
    default for ``UsageError`` is exit code 2.
    """
    try:
        result = cli(standalone_mode=False)
    except click.UsageError as exc:
        click.echo(f"bselect: {exc.format_message()}", err=True)
        sys.exit(1)
    except click.Abort:
        sys.exit(1)
    except SystemExit as exc:
        code = exc.code if isinstance(exc.code, int) else 1
        sys.exit(1 if code == 2 else code)
    if isinstance(result, int):
        sys.exit(result)


if __name__ == "__main__":
    main()
