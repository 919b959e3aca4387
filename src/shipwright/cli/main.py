#!/usr/bin/env python3
"""
SHIPWRIGHT CLI - Command Surface
--------------------------------
Translates user commands into engine actions:

    generate   parse game data and write per-species JSON artifacts
    validate   re-read an output tree and check every artifact
    stats      movement figures for one ship from a generated artifact

Author: Shipwright Team
Date: 2026-10-19
"""

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

from shipwright.cli.formatter import ReportFormatter
from shipwright.core.config import load_config
from shipwright.core.context import BatchContext
from shipwright.core.engine import GenerationEngine
from shipwright.core.errors import ArtifactError, ShipwrightError
from shipwright.services.writer import ArtifactWriter
from shipwright.stats.movement import ship_movement_stats
from shipwright.utils.slug import slugify

VERSION = "1.0.0"

console = Console()


class ShipwrightCLI:
    """
    CLI wrapper around the GenerationEngine. Every command returns an exit
    code: 0 on success (dropped records included), 1 on a fatal error.
    """

    def __init__(self, console: Console = console):
        self.console = console
        self.formatter = ReportFormatter(console)
        self.parser = argparse.ArgumentParser(
            prog="shipwright",
            description="Shipwright - game data to per-species JSON artifacts",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self._setup_args()

    def _setup_args(self):
        self.parser.add_argument("-v", "--version", action="version", version=f"shipwright v{VERSION}")
        subparsers = self.parser.add_subparsers(dest="command", metavar="Command")

        common = argparse.ArgumentParser(add_help=False)
        common.add_argument("--debug", action="store_true", help="Verbose logging")

        gen_parser = subparsers.add_parser("generate", parents=[common], help="Generate ship and outfit artifacts")
        gen_parser.add_argument("--config", help="Path to a shipwright.yaml file")
        gen_parser.add_argument("--data-root", help="Game data directory (overrides config)")
        gen_parser.add_argument("--output", help="Output directory (overrides config)")
        gen_parser.add_argument("--workers", type=int, help="Species batches processed in parallel")

        val_parser = subparsers.add_parser("validate", parents=[common], help="Check a generated output tree")
        val_parser.add_argument("--output", default="output", help="Output directory (default: output)")

        stats_parser = subparsers.add_parser("stats", parents=[common], help="Movement stats for one ship")
        stats_parser.add_argument("artifact", help="Path to a ships-<species>.json artifact")
        stats_parser.add_argument("name", help="Ship name or slug")
        stats_parser.add_argument("--named", action="store_true",
                                  help="Report a specific ship (single figures) instead of a generic range")

    def print_header(self, subtitle: str):
        self.console.print(Panel.fit(
            f"[bold cyan]Shipwright v{VERSION}[/bold cyan]",
            title=f"[bold white]{subtitle}[/bold white]",
            border_style="cyan"
        ))

    @staticmethod
    def configure_logging(debug: bool):
        logging.basicConfig(
            level=logging.DEBUG if debug else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )

    def cmd_generate(self, args: argparse.Namespace) -> int:
        config = load_config(args.config).with_overrides(
            data_root=args.data_root,
            output_dir=args.output,
            workers=args.workers,
        )
        engine = GenerationEngine(config)

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        ) as progress:
            task_id = progress.add_task("Generating...", total=None)

            def on_batch(batch: BatchContext):
                progress.update(task_id, description=f"Done: {batch.kind.prefix} ({batch.species})")

            report = engine.run(progress_callback=on_batch)

        self.formatter.print_report(report)
        return 0

    def cmd_validate(self, args: argparse.Namespace) -> int:
        counts = ArtifactWriter(args.output).validate_tree()
        self.formatter.print_validation(counts)
        return 0

    def cmd_stats(self, args: argparse.Namespace) -> int:
        document = ArtifactWriter(".").read(args.artifact)
        wanted = slugify(args.name)
        for ship in document["data"]:
            if ship.get("name") == args.name or ship.get("slug") == wanted:
                self.formatter.print_movement(ship["name"], ship_movement_stats(ship, is_generic=not args.named))
                return 0
        raise ArtifactError(f"No ship named '{args.name}' in {args.artifact}")

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Primary routing entry point."""
        args = self.parser.parse_args(argv)
        if not args.command:
            self.print_header("Game Data Generator")
            self.parser.print_help()
            return 0

        self.configure_logging(args.debug)
        commands = {
            "generate": self.cmd_generate,
            "validate": self.cmd_validate,
            "stats": self.cmd_stats,
        }
        try:
            return commands[args.command](args)
        except ShipwrightError as e:
            self.formatter.print_error(e)
            return 1


def main():
    """Application entry point with interrupt handling."""
    try:
        sys.exit(ShipwrightCLI().run())
    except KeyboardInterrupt:
        console.print("\n[bold red]Terminated by user.[/bold red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
