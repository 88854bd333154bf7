"""Command-line interface for docproxy."""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from . import __version__
from .conversion import find_source_files
from .conversion.batch import convert_path
from .logging_config import setup_logging
from .models.config import DocproxyConfig


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="docproxy",
        description="Render pages through a headless browser proxy and convert HTML to markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert one file (writes page.md next to it)
  docproxy convert page.html

  # Convert a directory tree into ./markdown
  docproxy convert ./site ./markdown

  # Run the rendering proxy on port 8001
  docproxy proxy --listen-port 8001

  # Check the installation
  docproxy doctor
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML configuration file",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress output",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # convert
    convert_parser = subparsers.add_parser("convert", help="Convert HTML files to markdown")
    convert_parser.add_argument("input", type=Path, help="HTML file or directory")
    convert_parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        default=None,
        help="Output file or directory (default: next to input / ../markdown-output)",
    )
    convert_parser.add_argument(
        "--source-ext",
        default=None,
        help="Extension of source documents (default: html)",
    )
    convert_parser.add_argument(
        "--target-ext",
        default=None,
        help="Extension of converted documents (default: md)",
    )

    # proxy
    proxy_parser = subparsers.add_parser("proxy", help="Run the rendering proxy")
    proxy_parser.add_argument("--listen-host", default=None, help="Bind address (default: 127.0.0.1)")
    proxy_parser.add_argument("--listen-port", type=int, default=None, help="Port (default: 8001)")
    proxy_parser.add_argument(
        "--headed",
        action="store_true",
        help="Show the browser window",
    )
    proxy_parser.add_argument(
        "--max-pages",
        type=int,
        default=None,
        help="Maximum pages rendered concurrently",
    )
    proxy_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Navigation timeout in seconds",
    )

    # doctor
    subparsers.add_parser("doctor", help="Run diagnostic checks")

    return parser


def build_config(args: argparse.Namespace) -> DocproxyConfig:
    """Merge a YAML config file with command-line overrides."""
    data: dict = {}
    if args.config:
        data = DocproxyConfig.from_yaml_file(args.config).model_dump(exclude_none=True)

    if args.verbose:
        data["log_level"] = "DEBUG"
    elif args.quiet:
        data["log_level"] = "ERROR"
    if args.log_file:
        data["log_file"] = args.log_file

    if args.command == "convert":
        convert = data.setdefault("convert", {})
        if args.source_ext:
            convert["source_ext"] = args.source_ext
        if args.target_ext:
            convert["target_ext"] = args.target_ext

    elif args.command == "proxy":
        proxy = data.setdefault("proxy", {})
        browser = proxy.setdefault("browser", {})
        if args.listen_host:
            proxy["listen_host"] = args.listen_host
        if args.listen_port is not None:
            proxy["listen_port"] = args.listen_port
        if args.headed:
            browser["headless"] = False
        if args.max_pages is not None:
            browser["max_pages"] = args.max_pages
        if args.timeout is not None:
            browser["timeout"] = args.timeout

    return DocproxyConfig.model_validate(data)


def run_convert(args: argparse.Namespace, config: DocproxyConfig, console: Console) -> int:
    """Convert a file or directory tree."""
    if not args.input.exists():
        console.print(f"[red]Error:[/red] Input path does not exist: {args.input}")
        return 1

    total = len(find_source_files(args.input, config.convert.source_ext)) if args.input.is_dir() else 1

    try:
        if args.quiet:
            stats = convert_path(args.input, args.output, config=config.convert)
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                console=console,
                transient=True,
            ) as progress:
                task = progress.add_task("Converting...", total=total)

                def on_file(source: Path, ok: bool) -> None:
                    if not ok:
                        console.print(f"[red]Failed:[/red] {source}")
                    progress.update(task, advance=1, description=f"[cyan]{source.name}")

                stats = convert_path(args.input, args.output, config=config.convert, on_file=on_file)

    except (OSError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    if not args.quiet:
        if stats.files_found == 0:
            console.print(f"No {config.convert.source_ext} files found in {args.input}")
        else:
            console.print("[bold]Results:[/bold]")
            console.print(f"  Files found: {stats.files_found}")
            console.print(f"  Files converted: {stats.files_converted}")
            console.print(f"  Files failed: {stats.files_failed}")
            console.print(f"  Duration: {stats.duration_seconds:.1f}s")

    return 0 if stats.files_failed == 0 else 1


def run_proxy_command(args: argparse.Namespace, config: DocproxyConfig, console: Console) -> int:
    """Run the rendering proxy until interrupted."""
    from .proxy.server import run_proxy

    if not args.quiet:
        console.print(f"[bold blue]docproxy[/bold blue] v{__version__}")
        console.print(f"Listening on {config.proxy.listen_host}:{config.proxy.listen_port}")
        console.print("Press Ctrl-C to stop")

    try:
        asyncio.run(run_proxy(config.proxy))
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    console = Console()

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "doctor":
        from .doctor import run_doctor

        return run_doctor(console=console)

    try:
        config = build_config(args)
    except (ValidationError, yaml.YAMLError, OSError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        rich_console=True,
    )

    if args.command == "convert":
        return run_convert(args, config, console)
    return run_proxy_command(args, config, console)


if __name__ == "__main__":
    sys.exit(main())
