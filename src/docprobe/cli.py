"""Command-line interface for docprobe."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

from . import __version__
from .core.checker import SupportChecker
from .errors import DocprobeError
from .logging_config import DEFAULT_CONSOLE_LEVEL, setup_logging
from .models.config import ProbeConfig
from .models.events import EventType, ProbeEvent
from .models.items import BatchSummary, Classification


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="docprobe",
        description="Check which language codes a documentation site supports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Input format:
  One item per line: <code> <display name>
    en English
    zh-cn Chinese (Simplified)

Examples:
  # Probe languages.txt against https://docs.oracle.com
  docprobe

  # Probe a different list with 20 concurrent checks
  docprobe my_languages.txt --max-concurrent 20

  # Use a YAML config file, overriding the timeout
  docprobe --config docprobe.yaml --timeout 3
        """,
    )

    parser.add_argument(
        "input_file",
        nargs="?",
        type=Path,
        help="File with one '<code> <name>' pair per line (default: languages.txt)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="FILE",
        help="YAML configuration file",
    )

    # Probe settings
    probe_group = parser.add_argument_group("probe settings")
    probe_group.add_argument(
        "--base-url",
        "-b",
        type=str,
        default=None,
        help="Documentation root to probe (default: https://docs.oracle.com)",
    )
    probe_group.add_argument(
        "--max-concurrent",
        "-c",
        type=int,
        default=None,
        help="Maximum concurrent probes (default: 10)",
    )
    probe_group.add_argument(
        "--timeout",
        "-t",
        type=float,
        default=None,
        help="Per-probe timeout in seconds (default: 5)",
    )
    probe_group.add_argument(
        "--method",
        choices=["GET", "HEAD"],
        default=None,
        help="HTTP method for each probe (default: GET)",
    )

    # Network settings
    network_group = parser.add_argument_group("network settings")
    network_group.add_argument(
        "--proxy",
        type=str,
        metavar="URL",
        help="Proxy URL",
    )
    network_group.add_argument(
        "--user-agent",
        type=str,
        help="Custom User-Agent string",
    )

    # Output files
    output_group = parser.add_argument_group("output files")
    output_group.add_argument(
        "--supported-output",
        type=Path,
        default=None,
        metavar="FILE",
        help="Supported results file (default: supported_languages.txt)",
    )
    output_group.add_argument(
        "--unsupported-output",
        type=Path,
        default=None,
        metavar="FILE",
        help="Unsupported results file (default: unsupported_languages.txt)",
    )
    output_group.add_argument(
        "--append",
        action="store_true",
        help="Append to result files instead of overwriting them",
    )

    # Output control
    control_group = parser.add_argument_group("output control")
    control_group.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write logs to this file",
    )
    control_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    control_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only print the final summary",
    )

    return parser


def build_config(args: argparse.Namespace) -> ProbeConfig:
    """
    Merge the optional YAML config file with command-line overrides.

    Raises:
        ValidationError: If the merged values are invalid
        OSError: If the config file cannot be read
        yaml.YAMLError: If the config file is not valid YAML
    """
    data: dict = {}
    if args.config:
        data = yaml.safe_load(args.config.read_text()) or {}

    if args.input_file is not None:
        data["input_file"] = args.input_file
    if args.base_url is not None:
        data["base_url"] = args.base_url
    if args.max_concurrent is not None:
        data["max_concurrent"] = args.max_concurrent

    # Network settings
    network_kwargs: dict = dict(data.get("network") or {})
    if args.timeout is not None:
        network_kwargs["timeout"] = args.timeout
    if args.method:
        network_kwargs["method"] = args.method
    if args.proxy:
        network_kwargs["proxy"] = args.proxy
    if args.user_agent:
        network_kwargs["user_agent"] = args.user_agent
    if network_kwargs:
        data["network"] = network_kwargs

    # Output settings
    output_kwargs: dict = dict(data.get("output") or {})
    if args.supported_output:
        output_kwargs["supported_file"] = args.supported_output
    if args.unsupported_output:
        output_kwargs["unsupported_file"] = args.unsupported_output
    if args.append:
        output_kwargs["append"] = True
    if output_kwargs:
        data["output"] = output_kwargs

    # Log level
    if args.verbose:
        data["log_level"] = "DEBUG"
    elif args.quiet:
        data["log_level"] = "ERROR"
    if args.log_file:
        data["log_file"] = args.log_file

    return ProbeConfig.model_validate(data)


def print_summary(console: Console, summary: BatchSummary, config: ProbeConfig) -> None:
    """Print the final batch summary. Always printed, even if every probe failed."""
    console.print("-------------------------------------------")
    console.print("[bold]Results:[/bold]")
    console.print(f"  Items checked: {summary.total}")
    console.print(f"  Supported: [green]{summary.supported_count}[/green]")
    console.print(f"  Not supported: [red]{summary.unsupported_count}[/red]")
    if summary.dropped_count:
        console.print(f"  Dropped (write errors): [yellow]{summary.dropped_count}[/yellow]")
    if summary.skipped_lines:
        console.print(f"  Malformed lines skipped: [yellow]{summary.skipped_lines}[/yellow]")
    console.print(f"  Duration: {summary.duration_seconds:.1f}s")
    console.print(f"Supported results saved in {config.output.supported_file}")
    console.print(f"Unsupported results saved in {config.output.unsupported_file}")


def console_log_level(config: ProbeConfig, verbose: bool = False) -> str:
    """Console log level: config.log_level with --verbose, else at least WARNING."""
    if verbose:
        return config.log_level
    if logging.getLevelName(config.log_level) < logging.getLevelName(DEFAULT_CONSOLE_LEVEL):
        return DEFAULT_CONSOLE_LEVEL
    return config.log_level


def run_checker(args: argparse.Namespace) -> int:
    """Run a batch with given arguments."""
    console = Console()

    try:
        config = build_config(args)
    except (ValidationError, OSError, yaml.YAMLError) as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        return 1

    setup_logging(
        level=config.log_level,
        log_file=str(config.log_file) if config.log_file else None,
        force=True,
        console_level=console_log_level(config, verbose=args.verbose),
    )

    async def run() -> int:
        if not args.quiet:
            console.print(f"[bold blue]docprobe[/bold blue] v{__version__}")
            console.print("Checking documentation language support...")
            console.print(f"Target: {config.base_url}")
            console.print("-------------------------------------------")

        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                console=console,
                transient=True,
                disable=args.quiet,
            ) as progress:
                task = progress.add_task("Loading input...", total=None)

                def on_event(event: ProbeEvent) -> None:
                    if event.type == EventType.BATCH_STARTED:
                        progress.update(task, total=event.total, description="[cyan]Probing")
                    elif event.type == EventType.ITEM_SKIPPED and not args.quiet:
                        console.print(f"[yellow]Skipped:[/yellow] {escape(event.message or '')}")
                    elif event.type == EventType.PROBE_COMPLETED:
                        progress.update(task, completed=event.current)
                        if args.quiet:
                            return
                        if event.classification == Classification.SUPPORTED:
                            console.print(
                                f"✅ Supported: {escape(event.display_name or '')} ({event.item_id}) -> {event.url}"
                            )
                        else:
                            console.print(
                                f"❌ Not supported: {escape(event.display_name or '')} ({event.item_id}) [{event.status_code}]"
                            )
                    elif event.type == EventType.WRITE_FAILED:
                        progress.update(task, completed=event.current)
                        console.print(f"[red]Write failed:[/red] {event.item_id} - {escape(event.error or '')}")

                async with SupportChecker(config, emit=on_event) as checker:
                    summary = await checker.run()

        except DocprobeError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            return 1

        print_summary(console, summary, config)
        return 0

    return asyncio.run(run())


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run_checker(args)


if __name__ == "__main__":
    sys.exit(main())
