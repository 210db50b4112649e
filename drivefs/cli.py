"""
CLI entry point for drivefs.
Runs a script of filesystem commands against a fresh in-memory drive.
"""
import logging
import shlex
import sys
from typing import Callable, Dict, List, TextIO, Tuple

import click

from .config import DEFAULT_DRIVE_NAME, LOG_FORMAT, LOG_LEVEL
from .errors import FileSystemError
from .filesystem import FileSystem


logger = logging.getLogger(__name__)

COMMAND_USAGE = {
    "create": "create TYPE NAME PARENT",
    "delete": "delete PATH",
    "move": "move SOURCE DEST",
    "write": "write PATH CONTENT",
    "rename": "rename PATH NAME",
    "read": "read PATH",
    "size": "size PATH",
    "ls": "ls PATH",
    "tree": "tree [PATH]",
}


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging for the CLI.

    Args:
        verbose: Log at DEBUG level instead of the configured level
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else LOG_LEVEL,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def parse_line(line: str) -> List[str]:
    """
    Split a script line into words.

    Quotes group words as in a shell, but backslashes are kept literally
    since they separate path segments.

    Args:
        line: One script line

    Returns:
        List of words, empty for blank and comment lines
    """
    lexer = shlex.shlex(line, posix=True)
    lexer.whitespace_split = True
    lexer.escape = ""
    lexer.commenters = "#"
    return list(lexer)


def execute_command(fs: FileSystem, words: List[str], echo: Callable[[str], None]) -> None:
    """
    Run one parsed command against the filesystem.

    Args:
        fs: Target filesystem
        words: Command name followed by its arguments
        echo: Output function for commands that print
    """
    command, args = words[0], words[1:]

    def list_children(path: str) -> None:
        for name in fs.list_children(path):
            echo(name)

    handlers: Dict[str, Tuple[int, Callable[..., None]]] = {
        "create": (3, lambda kind, name, parent: fs.create(_normalize_type(kind), name, parent)),
        "delete": (1, fs.delete),
        "move": (2, fs.move),
        "write": (2, fs.write_to_file),
        "rename": (2, fs.rename),
        "read": (1, lambda path: echo(fs.read_file(path))),
        "size": (1, lambda path: echo(str(fs.size(path)))),
        "ls": (1, list_children),
    }

    if command == "tree":
        if len(args) > 1:
            raise click.UsageError(f"usage: {COMMAND_USAGE['tree']}")
        fs.print_system(args[0] if args else None, echo=echo)
        return

    if command not in handlers:
        raise click.UsageError(f"unknown command {command!r}")

    arity, handler = handlers[command]
    if len(args) != arity:
        raise click.UsageError(f"usage: {COMMAND_USAGE[command]}")

    logger.debug(f"Executing {command} {args}")
    handler(*args)


def run_script(
    fs: FileSystem,
    script: TextIO,
    keep_going: bool = False,
    echo: Callable[[str], None] = click.echo,
) -> int:
    """
    Execute every command of a script.

    Args:
        fs: Target filesystem
        script: Readable text stream of commands, one per line
        keep_going: Continue after a failing command instead of stopping
        echo: Output function for commands that print

    Returns:
        Number of failed commands
    """
    failures = 0

    for line_number, line in enumerate(script, 1):
        try:
            words = parse_line(line)
            if not words:
                continue
            execute_command(fs, words, echo)
        except (FileSystemError, ValueError, click.UsageError) as e:
            failures += 1
            message = e.format_message() if isinstance(e, click.UsageError) else str(e)
            click.echo(f"Error: line {line_number}: {type(e).__name__}: {message}", err=True)
            if not keep_going:
                break

    return failures


def _normalize_type(kind: str) -> str:
    return kind.strip().lower().replace("-", "_")


@click.group()
@click.version_option(package_name="drivefs")
def main():
    """In-memory drive, folder, zip and text file tree."""


@main.command()
@click.argument("script", type=click.File("r"), default="-")
@click.option("--drive", "drive_name", default=DEFAULT_DRIVE_NAME, show_default=True,
              help="Name of the root drive")
@click.option("--keep-going", is_flag=True, help="Continue after failing commands")
@click.option("--tree/--no-tree", default=True, help="Print the final tree")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def run(script: TextIO, drive_name: str, keep_going: bool, tree: bool, verbose: bool):
    """Run the commands in SCRIPT (stdin by default) against a fresh drive."""
    setup_logging(verbose)

    try:
        fs = FileSystem(drive_name)
    except FileSystemError as e:
        raise click.BadParameter(str(e), param_hint="--drive")

    failures = run_script(fs, script, keep_going=keep_going)

    if tree:
        click.echo(f"{drive_name} (size:{fs.size()})")
        fs.print_system()

    if failures:
        sys.exit(1)


if __name__ == "__main__":
    main()
