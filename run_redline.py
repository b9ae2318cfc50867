"""
Legislative Text Redlining - command line

Compares source versions of a statutory section (House, Senate, ...) with
the final enrolled text and renders the redline to the console, a
standalone HTML page, or Markdown.

Usage:
    python run_redline.py compare --source house.txt:"House Version" --final enr.txt
    python run_redline.py groups records.json [--compare "Sec 101"]

Options:
    --debug             Debug mode (show engine details)
    --config FILE       Path to config file (default: $REDLINE_CONFIG or config.yaml)

Examples:
    python run_redline.py compare --source h.txt --source s.txt --final enr.txt --html out/cmp.html
    python run_redline.py groups data/records.json --compare "Sec 101" --markdown out/sec101.md
"""
import os
import sys
import json
import argparse
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from rich.console import Console

from redline_core.config import load_config, get_final_label, get_final_text_fields, get_source_labels
from redline_core.engine import build_comparison, build_group_comparison, group_records
from redline_core.models import ComparisonPayload, SourceText
from redline_core.reports import display_comparison, display_groups, write_comparison_html, write_comparison_markdown

load_dotenv()


# ============================================================================
# LOGGING
# ============================================================================

class LogLevel(Enum):
    NORMAL = 1
    DEBUG = 2


@dataclass
class CliLogger:
    """Console logger for command-line runs."""
    console: Console = field(default_factory=Console)
    level: LogLevel = LogLevel.NORMAL
    show_timestamps: bool = True

    def _format_time(self) -> str:
        if self.show_timestamps:
            return f"[dim]{datetime.now().strftime('%H:%M:%S')}[/dim] "
        return ""

    def info(self, message: str):
        self.console.print(f"{self._format_time()}{message}")

    def debug(self, message: str):
        if self.level.value >= LogLevel.DEBUG.value:
            self.console.print(f"{self._format_time()}[dim cyan]DEBUG: {message}[/dim cyan]")

    def success(self, message: str):
        self.console.print(f"{self._format_time()}[green]✓[/green] {message}")

    def warning(self, message: str):
        self.console.print(f"{self._format_time()}[yellow]⚠[/yellow] {message}")

    def error(self, message: str):
        self.console.print(f"{self._format_time()}[red]✗[/red] {message}")


def get_logger_from_config(config: dict, cli_level: Optional[str] = None) -> CliLogger:
    """Create logger from config; --debug overrides the configured level."""
    log_config = config.get("logging", {})
    if cli_level == "debug":
        level = LogLevel.DEBUG
    else:
        level_str = str(log_config.get("level", "normal"))
        level = LogLevel[level_str.upper()] if level_str.upper() in LogLevel.__members__ else LogLevel.NORMAL

    # Route engine log records to stderr at the matching verbosity.
    logging.basicConfig(
        level=logging.DEBUG if level is LogLevel.DEBUG else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return CliLogger(
        level=level,
        show_timestamps=log_config.get("show_timestamps", True),
    )


# ============================================================================
# INPUTS
# ============================================================================

def parse_source_arg(value: str, index: int) -> tuple[Path, str]:
    """'path[:label]' -> (path, label)."""
    path_str, sep, label = value.partition(":")
    if not sep or not label.strip():
        label = f"Source {index + 1}"
    return Path(path_str), label.strip()


def read_text(path: Path, logger: Optional[CliLogger] = None) -> str:
    """Read UTF-8 text; undecodable bytes become U+FFFD and are reported."""
    raw = path.read_bytes()
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        if logger:
            logger.warning(f"{path} is not valid UTF-8 ({e.reason} at byte {e.start}), replacing undecodable bytes")
        return raw.decode("utf-8", errors="replace")



def load_records(path: Path) -> list:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("records", [])
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of records")
    return data


# ============================================================================
# OUTPUT
# ============================================================================

def emit(payload: ComparisonPayload, args: argparse.Namespace, config: dict, logger: CliLogger):
    display_comparison(payload, out=logger.console)

    title = config.get("report", {}).get("title")
    if args.html:
        out = write_comparison_html(payload, args.html, title=title)
        logger.success(f"HTML comparison written to {out}")
    if args.markdown:
        md_path = Path(args.markdown)
        md_path.parent.mkdir(parents=True, exist_ok=True)
        with open(md_path, "w", encoding="utf-8") as f:
            write_comparison_markdown(f, payload, title=title)
        logger.success(f"Markdown comparison written to {md_path}")


# ============================================================================
# COMMANDS
# ============================================================================

def cmd_compare(args: argparse.Namespace, config: dict, logger: CliLogger) -> int:
    sources = []
    for index, value in enumerate(args.source):
        path, label = parse_source_arg(value, index)
        try:
            sources.append(SourceText(text=read_text(path, logger), label=label))
        except OSError as e:
            logger.error(f"Cannot read source {path}: {e}")
            return 1
        logger.debug(f"Loaded source '{label}' from {path}")

    try:
        final_text = read_text(Path(args.final), logger)
    except OSError as e:
        logger.error(f"Cannot read final text {args.final}: {e}")
        return 1

    payload = build_comparison(
        sources,
        final_text,
        args.phrases,
        final_label=args.final_label or get_final_label(config),
    )
    emit(payload, args, config, logger)
    return 0


def cmd_groups(args: argparse.Namespace, config: dict, logger: CliLogger) -> int:
    try:
        records = load_records(Path(args.records))
    except (OSError, ValueError) as e:
        logger.error(f"Cannot load records: {e}")
        return 1

    groups = group_records(records, final_text_fields=get_final_text_fields(config))
    logger.info(f"Loaded {len(records)} records into {len(groups)} sections")
    display_groups(groups, out=logger.console)

    if not args.compare:
        return 0

    group = next((g for g in groups if g.key == args.compare), None)
    if group is None:
        logger.error(f"No section with header '{args.compare}'")
        return 1

    payload = build_group_comparison(
        group,
        labels=get_source_labels(config),
        final_label=get_final_label(config),
    )
    emit(payload, args, config, logger)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Redline legislative section versions against the final text",
        epilog=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--debug", action="store_true", help="Debug mode (verbose output)")
    parser.add_argument("--config", default=None, help="Config file path")
    sub = parser.add_subparsers(dest="command", required=True)

    output = argparse.ArgumentParser(add_help=False)
    output.add_argument("--html", help="Write standalone HTML comparison to this path")
    output.add_argument("--markdown", help="Write Markdown comparison to this path")

    compare = sub.add_parser("compare", parents=[output], help="Compare text files")
    compare.add_argument("--source", action="append", required=True,
                         help="Source text file, optionally 'path:Label' (repeatable)")
    compare.add_argument("--final", required=True, help="Final enrolled text file")
    compare.add_argument("--final-label", help="Heading for the final panel")
    compare.add_argument("--phrases", help="Agreement phrases, e.g. \"['Agreed on funding']\"")
    compare.set_defaults(handler=cmd_compare)

    groups = sub.add_parser("groups", parents=[output], help="Group records by section header")
    groups.add_argument("records", help="JSON file holding a list of records")
    groups.add_argument("--compare", help="Header of the section to compare")
    groups.set_defaults(handler=cmd_groups)
    return parser


def main(argv: Optional[list] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config_path = args.config or os.getenv("REDLINE_CONFIG", "config.yaml")
    config = load_config(config_path)
    logger = get_logger_from_config(config, "debug" if args.debug else None)
    logger.debug(f"Using config {config_path}")

    return args.handler(args, config, logger)


if __name__ == "__main__":
    sys.exit(main())
