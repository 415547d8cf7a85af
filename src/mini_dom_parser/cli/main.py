"""Main CLI entry point for the ``mini-dom`` command-line tool.

Provides parsing, token dumping and well-formedness checks for markup files.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from mini_dom_parser import __version__
from mini_dom_parser.api import DOMParser
from mini_dom_parser.shared import (
    ConfigError,
    ParseError,
    ParserConfig,
    configure_logging,
    get_logger,
)
from mini_dom_parser.tokenization import HTMLTokenizer
from mini_dom_parser.tree import format_tree, serialize

logger = get_logger(__name__, component="cli")


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self, parser_config: Optional[ParserConfig] = None):
        self.parser_config = parser_config or ParserConfig.default()
        self.output_format = "json"

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CLIConfig":
        """Build configuration from an optional config file plus command-line overrides."""
        config_path = getattr(args, "config", None)
        parser_config = ParserConfig.from_file(config_path) if config_path else None
        config = cls(parser_config)

        max_depth = getattr(args, "max_depth", None)
        if max_depth is not None:
            config.parser_config = config.parser_config.override(
                tree__max_tree_depth=max_depth
            )
        config.output_format = getattr(args, "format", config.output_format)
        return config


class MarkupProcessor:
    """Core processing logic for CLI operations."""

    def __init__(self, config: CLIConfig):
        self.config = config
        self.parser = DOMParser(config.parser_config)

    def process_file(self, file_path: Path) -> Dict[str, Any]:
        """Parse a single file and return a result record.

        The record holds the ``ParseResult`` itself; the node tree is only
        converted to dictionaries when JSON output is requested.
        """
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read file", extra={"file": str(file_path)})
            return {"file": str(file_path), "success": False, "error": {"message": str(e)}}

        result = self.parser.parse_with_diagnostics(text)
        record: Dict[str, Any] = {
            "file": str(file_path),
            "success": result.success,
            "result": result,
        }
        if result.error is not None:
            record["error"] = result.error.to_dict()
        return record


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="mini-dom",
        description="Parse simplified HTML into a document tree"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse markup files")
    parse_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Markup files to parse"
    )
    parse_parser.add_argument(
        "--format", "-f",
        choices=["json", "tree", "html"],
        default="json",
        help="Output format (default: json)"
    )
    parse_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    parse_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path (JSON)"
    )
    parse_parser.add_argument(
        "--max-depth",
        type=int,
        help="Maximum element nesting depth"
    )

    # Tokens command
    tokens_parser = subparsers.add_parser("tokens", help="Dump the token stream of a file")
    tokens_parser.add_argument("path", type=Path, help="Markup file to tokenize")

    # Validate command
    validate_parser = subparsers.add_parser("validate", help="Check markup is well-formed")
    validate_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Markup files to validate"
    )
    validate_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )

    return parser


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format parse results for output."""
    if format_type == "json":
        records = []
        for result in results:
            record: Dict[str, Any] = {"file": result["file"]}
            if "result" in result:
                record.update(result["result"].to_dict())
            else:
                record.update(success=False, error=result["error"])
            records.append(record)
        return json.dumps(records, indent=2)

    lines = []
    for result in results:
        if len(results) > 1:
            lines.append(f"== {result['file']}")
        if not result["success"]:
            lines.append(f"error: {result['error']['message']}")
            continue
        nodes = result["result"].nodes
        lines.append(format_tree(nodes) if format_type == "tree" else serialize(nodes))
    return "\n".join(lines)


def cmd_parse(args: argparse.Namespace) -> int:
    """Handle parse command."""
    config = CLIConfig.from_args(args)
    if not (args.verbose or args.quiet):
        configure_logging(config.parser_config.global_.logging_level)

    processor = MarkupProcessor(config)
    results = [processor.process_file(path) for path in args.paths]
    try:
        formatted_output = format_results(results, args.format)
    except RecursionError:
        # The json encoder recurses once per nesting level
        logger.error("JSON output failed", extra={"format": args.format})
        print(
            "error: document is nested too deeply for JSON output; "
            "use --format tree or --format html",
            file=sys.stderr,
        )
        return 1

    if args.output:
        try:
            args.output.write_text(formatted_output + "\n", encoding="utf-8")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(formatted_output)

    return 0 if all(result["success"] for result in results) else 1


def cmd_tokens(args: argparse.Namespace) -> int:
    """Handle tokens command."""
    try:
        text = args.path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Could not read {args.path}: {e}", file=sys.stderr)
        return 1

    try:
        for token in HTMLTokenizer(text):
            position = token.position
            print(f"{position.line}:{position.column}\t{token}")
    except ParseError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle validate command."""
    processor = MarkupProcessor(CLIConfig())
    results = []
    for path in args.paths:
        record = processor.process_file(path)
        entry: Dict[str, Any] = {"file": str(path), "valid": record["success"]}
        if not record["success"]:
            entry["error"] = record["error"]["message"]
        results.append(entry)

    if args.format == "json":
        print(json.dumps(results, indent=2))
    else:
        valid_count = sum(1 for r in results if r["valid"])
        print(f"Validated {len(results)} files, {valid_count} valid")
        print("-" * 50)
        for result in results:
            status = "ok" if result["valid"] else "FAIL"
            print(f"{status:4} {result['file']}")
            if not result["valid"]:
                print(f"     {result['error']}")

    return 0 if all(r["valid"] for r in results) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")

    handlers = {
        "parse": cmd_parse,
        "tokens": cmd_tokens,
        "validate": cmd_validate,
    }
    try:
        return handlers[args.command](args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
