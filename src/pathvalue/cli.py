import asyncio
import functools
import logging
import traceback

import click

from .io import Path
from .utils import setup_logger, parse_module_levels
from .exceptions import (
    PathValueError,
    ConfigurationError,
    NotAFilePathError,
)
from . import __version__


def setup_logging(debug: bool, log_levels: str = None, log_file: str = None):
    """Setup logger with debug and module-level configuration"""
    module_levels = parse_module_levels(log_levels) or None
    setup_logger(debug=debug, module_levels=module_levels, log_file=log_file)


def handle_errors(func):
    """Decorator to handle common exceptions"""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ConfigurationError as e:
            logging.error(f"Configuration error: {e}")
            _abort()
        except PathValueError as e:
            logging.error(f"Path error: {e}")
            _abort()
        except OSError as e:
            logging.error(f"Filesystem error: {e}")
            _abort()
    return wrapper


def _abort():
    ctx = click.get_current_context()
    if ctx.obj and ctx.obj.get('debug'):
        traceback.print_exc()
    raise click.Abort()


def describe(path: Path) -> dict:
    """Derived components of a path, '-' where a path has no extension"""
    try:
        extension = path.extension
    except NotAFilePathError:
        extension = "-"
    return {
        "path": str(path),
        "parent": str(path.parent),
        "basename": str(path.basename),
        "extension": extension,
    }


@handle_errors
def do_exists(path: str, must_be: str | None) -> bool:
    return asyncio.run(Path(path).exists(must_be=must_be))


@handle_errors
def do_mkdir(path: str, parents: bool) -> Path:
    return asyncio.run(Path(path).mkdir(recursive=parents))


@handle_errors
def do_remove(path: str, recursive: bool, force: bool):
    asyncio.run(Path(path).remove(recursive=recursive, force=force))


@handle_errors
def do_trash(path: str):
    asyncio.run(Path(path).trash())


@handle_errors
def do_mktemp(prefix: str | None) -> Path:
    return asyncio.run(Path.make_temp_dir(prefix))


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('-l', '--log-levels', help="Comma-separated per-module log levels (e.g., 'fs=DEBUG,conf=INFO')")
@click.option('-f', '--log-file', help='Path to log file')
@click.version_option(version=__version__, prog_name='pathvalue')
@click.pass_context
def cli(ctx, debug, log_levels, log_file):
    """pathvalue - Normalize paths and run filesystem operations on them

    \b
    Examples:
      pathvalue normalize foo//bar/../baz     Print 'foo/baz'
      pathvalue join /srv data ../logs        Print '/srv/logs'
      pathvalue exists --dir ~/.config        Exit 1 unless it is a directory
    """
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    setup_logging(debug, log_levels, log_file)


@cli.command()
@click.argument('paths', nargs=-1, required=True)
@handle_errors
def normalize(paths):
    """Print the normalized form of each PATH"""
    for path in paths:
        click.echo(Path(path))


@cli.command()
@click.argument('base')
@click.argument('segments', nargs=-1)
@handle_errors
def join(base, segments):
    """Join SEGMENTS onto BASE and print the result"""
    click.echo(Path(base).join(*segments))


@cli.command()
@click.argument('path')
@handle_errors
def inspect(path):
    """Print parent, basename and extension of PATH"""
    for key, value in describe(Path(path)).items():
        click.echo(f"{key:<10} {value}")


@cli.command()
@click.argument('path')
@click.option('--file', 'must_be', flag_value='file', help='Require a regular file')
@click.option('--dir', 'must_be', flag_value='directory', help='Require a directory')
@click.pass_context
def exists(ctx, path, must_be):
    """Print whether PATH exists, exit code 1 when it does not"""
    found = do_exists(path, must_be)
    click.echo("true" if found else "false")
    if not found:
        ctx.exit(1)


@cli.command()
@click.argument('path')
@click.option('--no-parents', is_flag=True, help='Fail if a parent directory is missing')
def mkdir(path, no_parents):
    """Create directory PATH"""
    click.echo(do_mkdir(path, not no_parents))


@cli.command()
@click.argument('path')
@click.option('-r', '--recursive', is_flag=True, help='Remove directories and their contents')
@click.option('-f', '--force', is_flag=True, help='Ignore a missing PATH')
def rm(path, recursive, force):
    """Remove PATH"""
    do_remove(path, recursive, force)


@cli.command()
@click.argument('path')
def trash(path):
    """Move PATH to the trash"""
    do_trash(path)
    logging.info(f"Moved to trash: {Path(path)}")


@cli.command()
@click.option('-p', '--prefix', help='Directory name prefix')
def mktemp(prefix):
    """Create a unique temporary directory and print it"""
    click.echo(do_mktemp(prefix))


@cli.command()
@handle_errors
def dirs():
    """Print the home directory and the XDG base directories"""
    click.echo(f"{'home':<8} {Path.home_dir()}")
    for name, path in Path.standard_dirs()._asdict().items():
        click.echo(f"{name:<8} {path}")
