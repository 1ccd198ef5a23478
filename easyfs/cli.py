"""Command-line interface for EasyFS."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from easyfs.config import SAMPLE_CONFIG, Settings, load_settings, parse_mode
from easyfs.fs import mutate, paths, query, scanner
from easyfs.fs.sizes import format_size, parse_size

app = typer.Typer(
    name="easyfs",
    help="EasyFS - filesystem convenience toolkit",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()


def _configure_logging(level_name: str) -> None:
    numeric_level = getattr(logging, level_name.upper(), logging.WARNING)
    logging.getLogger("easyfs").setLevel(numeric_level)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=numeric_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")


def _settings(ctx: typer.Context) -> Settings:
    """Settings loaded by the app callback (defaults if the callback was skipped)."""
    if isinstance(ctx.obj, Settings):
        return ctx.obj
    return Settings()


def print_success(message: str) -> None:
    """Print success message."""
    console.print(f"[bold green]✓[/bold green] {message}")


def print_error(message: str) -> None:
    """Print error message."""
    console.print(f"[bold red]✗[/bold red] {message}")


def print_warning(message: str) -> None:
    """Print warning message."""
    console.print(f"[bold yellow]⚠[/bold yellow] {message}")


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Config file path (auto-discovered if not set)",
    ),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Override the configured log level"),
) -> None:
    """Load settings and configure logging before any command runs."""
    try:
        settings = load_settings(config)
        if log_level:
            settings = Settings(**{**settings.model_dump(), "log_level": log_level})
    except Exception as e:
        print_error(f"Invalid configuration: {e}")
        raise typer.Exit(1)
    _configure_logging(settings.log_level)
    ctx.obj = settings


@app.command("fmt")
def fmt_size(value: str = typer.Argument(..., help="Byte count, e.g. 1536 or 1.5K")) -> None:
    """Format a byte count with binary units."""
    try:
        typer.echo(format_size(parse_size(value)))
    except ValueError:
        print_error(f"Not a size: {value}")
        raise typer.Exit(1)


@app.command()
def size(path: Path = typer.Argument(..., help="File to measure")) -> None:
    """Show the human-readable size of a file."""
    if not query.exists(path):
        print_error(f"No such path: {path}")
        raise typer.Exit(1)
    typer.echo(query.readable_size(path))


@app.command()
def stat(path: Path = typer.Argument(..., help="Path to inspect")) -> None:
    """Show metadata for a path."""
    info = query.stat_path(path)
    if info is None:
        print_error(f"No such path: {path}")
        raise typer.Exit(1)

    modified = datetime.fromtimestamp(info.mtime).strftime("%Y-%m-%d %H:%M:%S")
    lines = (
        f"[bold]Path:[/bold] {info.path}\n"
        f"[bold]Type:[/bold] {'directory' if info.is_dir else 'file'}\n"
        f"[bold]Size:[/bold] {info.readable_size} ({info.size} bytes)\n"
        f"[bold]Modified:[/bold] {modified}\n"
        f"[bold]Mode:[/bold] {info.mode_string}\n"
        f"[bold]Readable:[/bold] {'yes' if info.readable else 'no'}\n"
        f"[bold]Writable:[/bold] {'yes' if info.writable else 'no'}"
    )
    console.print(Panel(lines, title=f"[bold cyan]{info.name}[/bold cyan]", border_style="cyan"))


@app.command("ls")
def list_dir(path: Path = typer.Argument(Path("."), help="Directory to list")) -> None:
    """List the immediate children of a directory."""
    if not query.is_dir(path):
        print_error(f"Not a directory: {path}")
        raise typer.Exit(1)

    entries = query.list_entries(path)
    if not entries:
        print_warning("Directory is empty")
        return

    table = Table(show_header=True, header_style="bold magenta", border_style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Type", justify="center")
    table.add_column("Size", justify="right", style="green")
    table.add_column("Modified", style="dim", width=17)

    total = 0
    for entry in entries:
        total += entry.size
        modified = datetime.fromtimestamp(entry.mtime).strftime("%y-%m-%d %H:%M:%S") if entry.mtime else ""
        table.add_row(
            entry.name,
            "[cyan]dir[/cyan]" if entry.is_dir else "file",
            "" if entry.is_dir else format_size(entry.size),
            modified,
        )

    console.print(table)
    console.print(f"[dim]{len(entries)} entries | {format_size(total)}[/dim]")


@app.command()
def cat(ctx: typer.Context, path: Path = typer.Argument(..., help="File to print")) -> None:
    """Print a file's text contents."""
    if not query.is_file(path) or not query.is_readable(path):
        print_error(f"Cannot read: {path}")
        raise typer.Exit(1)
    typer.echo(query.get_contents(path, _settings(ctx).encoding), nl=False)


@app.command()
def write(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="File to write (parent directories are created)"),
    content: Optional[str] = typer.Argument(None, help="Text to write (read from stdin if omitted)"),
    append: bool = typer.Option(False, "--append", "-a", help="Append instead of replacing"),
) -> None:
    """Write text to a file."""
    settings = _settings(ctx)
    if content is None:
        content = sys.stdin.read()
    writer = mutate.append_contents if append else mutate.put_contents
    try:
        writer(
            path,
            content,
            encoding=settings.encoding,
            perm=settings.file_mode,
            dir_mode=settings.dir_mode,
        )
    except Exception as e:
        print_error(f"Failed to write {path}: {e}")
        raise typer.Exit(1)
    print_success(f"{'Appended' if append else 'Wrote'} {query.readable_size(path)} to {path}")


@app.command("cp")
def copy_file(
    ctx: typer.Context,
    src: Path = typer.Argument(..., help="Source file"),
    dst: Path = typer.Argument(..., help="Destination file"),
) -> None:
    """Copy a file, creating the destination's parent directories."""
    settings = _settings(ctx)
    try:
        mutate.copy(
            src,
            dst,
            buffer_size=settings.copy_buffer_size,
            fsync=settings.copy_fsync,
            perm=settings.file_mode,
            dir_mode=settings.dir_mode,
        )
    except Exception as e:
        print_error(f"Failed to copy {src}: {e}")
        raise typer.Exit(1)
    print_success(f"Copied {src} -> {dst}")


@app.command("mv")
def move_file(
    ctx: typer.Context,
    src: Path = typer.Argument(..., help="Source path"),
    dst: Path = typer.Argument(..., help="Destination path"),
) -> None:
    """Move or rename a path."""
    try:
        mutate.move(src, dst, dir_mode=_settings(ctx).dir_mode)
    except Exception as e:
        print_error(f"Failed to move {src}: {e}")
        raise typer.Exit(1)
    print_success(f"Moved {src} -> {dst}")


@app.command("rm")
def remove_path(
    path: Path = typer.Argument(..., help="Path to remove (recursively)"),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Skip confirmation prompt",
    ),
) -> None:
    """Remove a file or directory tree."""
    if not query.exists(path):
        print_warning(f"Nothing to remove: {path}")
        return

    try:
        if not force:
            kind = "directory tree" if query.is_dir(path) else "file"
            confirm = typer.confirm(f"Remove {kind} {path}? This cannot be undone")
            if not confirm:
                print_warning("Cancelled.")
                raise typer.Exit(0)
        mutate.remove(path)
    except typer.Exit:
        raise
    except Exception as e:
        print_error(f"Failed to remove {path}: {e}")
        raise typer.Exit(1)
    print_success(f"Removed {path}")


@app.command("mkdir")
def make_dir(ctx: typer.Context, path: Path = typer.Argument(..., help="Directory to create")) -> None:
    """Create a directory and any missing parents."""
    try:
        mutate.mkdir(path, _settings(ctx).dir_mode)
    except Exception as e:
        print_error(f"Failed to create {path}: {e}")
        raise typer.Exit(1)
    print_success(f"Created {path}")


@app.command()
def truncate(
    path: Path = typer.Argument(..., help="File to resize"),
    new_size: str = typer.Argument(..., help="New size, e.g. 0, 512, 4K"),
) -> None:
    """Truncate (or extend) a file to the given size."""
    try:
        mutate.truncate(path, parse_size(new_size))
    except Exception as e:
        print_error(f"Failed to truncate {path}: {e}")
        raise typer.Exit(1)
    print_success(f"{path} is now {query.readable_size(path)}")


@app.command()
def chmod(
    path: Path = typer.Argument(..., help="Path to change"),
    mode: str = typer.Argument(..., help="Octal mode, e.g. 644"),
) -> None:
    """Change permission bits."""
    try:
        mutate.chmod(path, parse_mode(mode))
    except Exception as e:
        print_error(f"Failed to chmod {path}: {e}")
        raise typer.Exit(1)
    print_success(f"{path} mode set to {parse_mode(mode):04o}")


@app.command()
def find(
    path: Path = typer.Argument(..., help="File to scan"),
    char: str = typer.Argument(..., help="Byte to look for (first byte of the argument)"),
    start: int = typer.Option(0, "--start", "-s", help="Offset to start scanning from"),
) -> None:
    """Print the offset of the next occurrence of a byte."""
    try:
        with open(path, "rb") as f:
            offset = scanner.find_next_byte(f, char, start)
    except Exception as e:
        print_error(f"Failed to scan {path}: {e}")
        raise typer.Exit(1)
    if offset is None:
        print_warning(f"{char!r} not found after offset {start}")
        raise typer.Exit(1)
    typer.echo(offset)


@app.command("slice")
def slice_file(
    path: Path = typer.Argument(..., help="File to read from"),
    start: int = typer.Option(0, "--start", "-s", help="First offset (inclusive)"),
    end: Optional[int] = typer.Option(None, "--end", "-e", help="Last offset (exclusive)"),
    until: Optional[str] = typer.Option(None, "--until", "-u", help="Stop before the next occurrence of this byte"),
) -> None:
    """Print the bytes between two offsets, or up to a delimiter."""
    if (end is None) == (until is None):
        print_error("Give exactly one of --end or --until")
        raise typer.Exit(1)

    try:
        with open(path, "rb") as f:
            if until is not None:
                data = scanner.read_until(f, until, start)
            else:
                data = scanner.read_range(f, start, end)  # type: ignore[arg-type]
    except Exception as e:
        print_error(f"Failed to read {path}: {e}")
        raise typer.Exit(1)

    if data is None:
        print_warning(f"{until!r} not found after offset {start}")
        raise typer.Exit(1)
    typer.echo(data, nl=False)


@app.command()
def home() -> None:
    """Print the current user's home directory."""
    try:
        typer.echo(paths.home())
    except Exception as e:
        print_error(f"Cannot resolve home directory: {e}")
        raise typer.Exit(1)


@app.command()
def where() -> None:
    """Show the program, temp and home locations."""
    try:
        home_dir = paths.home()
    except OSError as e:
        home_dir = f"[dim]unavailable ({e})[/dim]"
    lines = (
        f"[bold]Program:[/bold] {paths.exec_path()}\n"
        f"[bold]Program dir:[/bold] {paths.exec_dir()}\n"
        f"[bold]Temp dir:[/bold] {paths.temp_dir()}\n"
        f"[bold]Home:[/bold] {home_dir}"
    )
    console.print(Panel(lines, title="[bold cyan]Locations[/bold cyan]", border_style="cyan"))


@app.command("glob")
def glob_paths(
    pattern: str = typer.Argument(..., help="Shell-style pattern, e.g. 'logs/*.txt'"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Let '**' match across directories"),
) -> None:
    """List paths matching a pattern."""
    matches = paths.glob(pattern, recursive=recursive)
    if not matches:
        print_warning("No matches")
        raise typer.Exit(1)
    for match in matches:
        typer.echo(match)


@app.command("init-config")
def init_config(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the sample config to this file instead of printing it",
    ),
) -> None:
    """Print or write a sample configuration file."""
    if output:
        settings = _settings(ctx)
        try:
            mutate.put_contents(output, SAMPLE_CONFIG, perm=settings.file_mode, dir_mode=settings.dir_mode)
        except Exception as e:
            print_error(f"Failed to write {output}: {e}")
            raise typer.Exit(1)
        print_success(f"Config written to {output}")
    else:
        console.print(Panel(SAMPLE_CONFIG, title="[bold cyan]Sample Config[/bold cyan]", border_style="cyan"))


if __name__ == "__main__":
    app()
