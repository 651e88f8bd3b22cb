"""revtree CLI entrypoint.

Command-line interface for reading a repository as of any revision.
"""

from __future__ import annotations

import functools
import logging
import shutil
import stat
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path, PurePath
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from revtree.core.accessor import VersionedAccessor
    from revtree.domain.config import RevtreeConfig

from revtree.core.errors import RevtreeCliError
from revtree.core.tags import sort_semver_tags
from revtree.domain.exceptions import RevtreeError
from revtree.domain.revision import WORKING_TREE
from revtree.version import __version__


def handle_cli_errors(command_name: str):
    """Decorator to handle common CLI errors.

    RevtreeError exceptions become RevtreeCliError with their hint.
    Anything unexpected is reported generically, with a traceback in
    verbose mode.

    Args:
        command_name: Name of the command for error messages.

    Returns:
        Decorated function with error handling.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (click.ClickException, click.exceptions.Exit, click.Abort):
                raise
            except RevtreeError as e:
                raise RevtreeCliError(e.message, hint=e.hint) from e
            except Exception as e:
                ctx = click.get_current_context()
                if ctx.obj.get("verbose", 0):
                    import traceback

                    traceback.print_exc()
                raise RevtreeCliError(
                    f"Unexpected error in {command_name}: {e}",
                    hint="Run with --verbose for more details",
                ) from e

        return wrapper

    return decorator


def _configure_logging(verbose: int, quiet: bool) -> None:
    if quiet:
        level = logging.ERROR
    elif verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


def _load_config() -> RevtreeConfig:
    """Load configuration for the current directory (global + .revtree.toml)."""
    from revtree.adapters.config.toml_config_provider import TomlConfigProvider

    return TomlConfigProvider().load(Path.cwd())


def _open_session(repo: Path | None, remote: str | None) -> VersionedAccessor:
    """Open the repository selected by --repo / --remote.

    Raises:
        RevtreeCliError: If both options are given.
        RevtreeError: If the repository cannot be opened.
    """
    from revtree.adapters.factory import SessionFactory

    if repo is not None and remote is not None:
        raise RevtreeCliError(
            "--repo and --remote cannot be used together",
            hint="Use --repo for a local working copy, --remote to clone one",
        )
    factory = SessionFactory(_load_config())
    if remote is not None:
        return factory.open_remote(remote)
    return factory.open_local(repo or Path.cwd())


def repository_options(func):
    """Add --repo and --remote options to a command."""
    func = click.option(
        "--remote",
        type=str,
        default=None,
        help="Clone this repository URL into a temporary directory and read from it.",
    )(func)
    func = click.option(
        "--repo",
        "-C",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        default=None,
        help="Local working copy to read (default: current directory).",
    )(func)
    return func


def revision_options(func):
    """Add --rev and --baseline options to a command."""
    func = click.option(
        "--baseline",
        is_flag=True,
        help="Read at the default baseline tag (see 'revtree defaults').",
    )(func)
    func = click.option(
        "--rev",
        "-r",
        type=str,
        default=WORKING_TREE,
        show_default=True,
        help=f"Revision to read at; '{WORKING_TREE}' is the working tree as checked out.",
    )(func)
    return func


@contextmanager
def _restoring_working_tree(session: VersionedAccessor) -> Iterator[None]:
    """Put back the tree the user had once the command is done reading."""
    try:
        yield
    finally:
        session.ensure_revision(WORKING_TREE)


def _pick_revision(session: VersionedAccessor, rev: str, baseline: bool) -> str:
    if not baseline:
        return rev
    if rev != WORKING_TREE:
        raise RevtreeCliError(
            "--rev and --baseline cannot be used together",
            hint="Use --baseline alone to read at the default baseline tag",
        )
    return session.default_revisions().before


@click.group()
@click.version_option(version=__version__, prog_name="revtree")
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Enable verbose output (-vv for debug logging).",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Only report errors.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: bool) -> None:
    """revtree - read a repository's files as of any revision.

    Revisions are branches, tags or commit ids; '.' is the working tree as
    currently checked out, including uncommitted changes.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    _configure_logging(verbose, quiet)


@cli.command()
@repository_options
@click.pass_context
@handle_cli_errors("defaults")
def defaults(ctx: click.Context, repo: Path | None, remote: str | None) -> None:
    """Show the revisions compared by default.

    BEFORE is the repository's latest semver tag (configurable under
    [tags]); AFTER is the working tree.
    """
    session = _open_session(repo, remote)
    pair = session.default_revisions()
    click.echo(f"before: {pair.before}")
    click.echo(f"after: {pair.after}")


@cli.command()
@repository_options
@click.pass_context
@handle_cli_errors("tags")
def tags(ctx: click.Context, repo: Path | None, remote: str | None) -> None:
    """List semver tags, lowest precedence first."""
    session = _open_session(repo, remote)
    for tag in sort_semver_tags(session.client.tags()):
        click.echo(tag)


@cli.command(name="ls")
@click.argument("directory", type=str, required=False, default=".")
@repository_options
@revision_options
@click.pass_context
@handle_cli_errors("ls")
def list_directory(
    ctx: click.Context,
    directory: str,
    repo: Path | None,
    remote: str | None,
    rev: str,
    baseline: bool,
) -> None:
    """List DIRECTORY (relative to the repository root) as of a revision."""
    session = _open_session(repo, remote)
    revision = _pick_revision(session, rev, baseline)
    with _restoring_working_tree(session):
        entries = session.list_directory(revision, directory)
    for entry in entries:
        suffix = "/" if entry.is_dir else ""
        click.echo(
            f"{stat.filemode(entry.mode)} {entry.size:>10} "
            f"{entry.modified:%Y-%m-%d %H:%M} {entry.name}{suffix}"
        )


@cli.command()
@click.argument("file", type=str)
@repository_options
@revision_options
@click.option(
    "--highlight",
    "-H",
    is_flag=True,
    help="Show the file as UTF-8 text with syntax highlighting and line numbers.",
)
@click.pass_context
@handle_cli_errors("cat")
def cat(
    ctx: click.Context,
    file: str,
    repo: Path | None,
    remote: str | None,
    rev: str,
    baseline: bool,
    highlight: bool,
) -> None:
    """Write FILE (relative to the repository root) as of a revision to stdout."""
    session = _open_session(repo, remote)
    revision = _pick_revision(session, rev, baseline)

    if highlight:
        from revtree.core.presentation.highlight import render_highlighted

        with _restoring_working_tree(session):
            data = session.read_bytes(revision, file)
        click.echo(render_highlighted(data.decode("utf-8", errors="replace"), PurePath(file)))
        return

    out = click.get_binary_stream("stdout")
    with _restoring_working_tree(session), session.read_file(revision, file) as stream:
        shutil.copyfileobj(stream, out)
    out.flush()


@cli.group()
def config() -> None:
    """Manage revtree configuration."""


@config.command(name="init")
@click.option("--force", is_flag=True, help="Overwrite an existing .revtree.toml.")
@click.pass_context
@handle_cli_errors("config init")
def config_init(ctx: click.Context, force: bool) -> None:
    """Write a commented default .revtree.toml in the current directory."""
    from revtree.shared.config_io import create_default_config_file, get_local_config_path

    path = get_local_config_path(Path.cwd())
    if path.exists() and not force:
        raise RevtreeCliError(
            f"{path} already exists",
            hint="Use --force to overwrite it",
        )
    create_default_config_file(path)
    if not ctx.obj.get("quiet", False):
        click.echo(f"Wrote {path}")


@config.command(name="show")
@click.pass_context
@handle_cli_errors("config show")
def config_show(ctx: click.Context) -> None:
    """Print the effective configuration as TOML."""
    from revtree.shared.config_io import dump_config

    click.echo(dump_config(_load_config()), nl=False)


def main() -> int:
    """Main entrypoint for the CLI."""
    try:
        cli(obj={})
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
