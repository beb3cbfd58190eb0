"""CLI for tfsgit."""

import sys

import click
import structlog
from pydantic import ValidationError

from tfsgit import __version__
from tfsgit.config.logging import configure_logging
from tfsgit.core.exceptions import ConfigurationError, TfsGitError

logger = structlog.get_logger(__name__)


def settings_options(func):
    """Attach the flags that override configuration file and environment."""
    options = [
        click.option("--cred", "-c", default=None, help="User name and access token (user:token)"),
        click.option("--repo", "-r", default=None, help="Repository url"),
        click.option("--branch", "-b", default=None, help="Branch name [default: master]"),
        click.option("--match", "-m", default=None, help="Download only root files matching this regex"),
        click.option("--path", "-p", "path_", default=None, help="Git path to mirror"),
        click.option("--depth", "-d", type=int, default=None, help="Directory depth [default: 10]"),
        click.option("--quiet", "-q", is_flag=True, help="Quiet mode"),
        click.option("--timeout", "-t", type=int, default=None, help="Timeout secs [default: 5]"),
        click.option("--verbosity", "-v", type=int, default=None, help="Output verbosity [default: 0]"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def load_settings(**overrides):
    """Load settings, letting any flag that was given win."""
    from tfsgit.config.settings import Settings

    if "path_" in overrides:
        overrides["path"] = overrides.pop("path_")
    # Unset flags (and a quiet flag left off) defer to file and environment
    given = {
        key: value
        for key, value in overrides.items()
        if value is not None and value is not False
    }
    try:
        return Settings(**given)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'settings'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(f"invalid configuration: {problems}") from e


def fail(error: TfsGitError) -> None:
    """Report a fatal error and exit."""
    click.echo(f"Error: {error}", err=True)
    sys.exit(1)


@click.group()
@click.version_option(__version__, prog_name="tfsgit")
def cli() -> None:
    """tfsgit: mirror a TFS Git repository path to the local directory."""


@cli.command()
@settings_options
def mirror(**overrides) -> None:
    """Mirror a repository path into the current directory.

    Settings come from .tfsgit.yaml, TFS* environment variables and the
    flags below, in increasing precedence.
    """
    try:
        settings = load_settings(**overrides)
    except ConfigurationError as e:
        fail(e)

    configure_logging(log_level=settings.log_level)

    if not settings.quiet:
        click.echo(f"Version {__version__}")
        click.echo(f"Fetch {settings.scope_path}")
        if settings.match:
            click.echo(f"Match {settings.match}")

    from tfsgit.services.mirror import MirrorService

    try:
        stats = MirrorService(settings).mirror()
    except TfsGitError as e:
        logger.debug("Mirror aborted", error=str(e), **e.details)
        fail(e)

    if not settings.quiet:
        click.echo(
            f"Mirrored {stats.files_downloaded} files, "
            f"{stats.directories_created} new directories"
        )


@cli.command()
@settings_options
def status(**overrides) -> None:
    """Show the resolved configuration without contacting the server."""
    try:
        settings = load_settings(**overrides)
    except ConfigurationError as e:
        fail(e)

    click.echo("tfsgit configuration")
    click.echo(f"  Repository: {settings.repo}")
    click.echo(f"  Branch:     {settings.branch}")
    click.echo(f"  Path:       {settings.scope_path}")
    click.echo(f"  Match:      {settings.match or '(none)'}")
    click.echo(f"  Depth:      {settings.depth}")
    click.echo(f"  Timeout:    {settings.timeout}s")
    click.echo(f"  Quiet:      {settings.quiet}")
    click.echo(f"  Verbosity:  {settings.verbosity}")
    click.echo(f"  Credential: {settings.masked_cred}")


if __name__ == "__main__":
    cli()
