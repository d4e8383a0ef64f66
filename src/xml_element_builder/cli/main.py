"""Main CLI entry point for the xml-element-builder command-line tool.

Builds element trees from XML files and prints them as JSON or as an indented
outline, or just checks that the files are properly nested.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from xml_element_builder import __version__
from xml_element_builder.api import ParseResult, parse_file
from xml_element_builder.shared.config import BuilderConfig
from xml_element_builder.tree import (
    CDataNode,
    CommentNode,
    Element,
    ProcessingInstructionNode,
    TextNode,
)

TEXT_PREVIEW_LENGTH = 40


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="xml-element-builder",
        description="Build namespace-aware element trees from XML files"
    )

    parser.add_argument("--version", action="version", version=__version__)

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Build and print element trees")
    parse_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files to parse"
    )
    parse_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="json",
        help="Output format (default: json)"
    )
    parse_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    _add_config_arguments(parse_parser)

    check_parser = subparsers.add_parser("check", help="Check that files nest properly")
    check_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files to check"
    )
    _add_config_arguments(check_parser)

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

    return parser


def _add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file"
    )
    parser.add_argument(
        "--prefix", "-p",
        action="append",
        default=[],
        metavar="PREFIX=URI",
        help="Bind a prefix before building (repeatable)"
    )
    parser.add_argument(
        "--default-namespace",
        metavar="URI",
        help="Default namespace inherited by the root element"
    )


def load_config(args: argparse.Namespace) -> BuilderConfig:
    """Merge the configuration file with command-line overrides.

    Raises:
        ValueError: a malformed ``--prefix`` or an invalid configuration
    """
    data: Dict[str, Any] = {}
    if args.config:
        data = BuilderConfig.from_file(args.config).to_dict()

    prefixes = dict(data.get("prefixes", {}))
    for binding in args.prefix:
        prefix, sep, uri = binding.partition("=")
        if not sep:
            raise ValueError(f"Invalid prefix binding '{binding}', expected PREFIX=URI")
        prefixes[prefix] = uri
    data["prefixes"] = prefixes

    if args.default_namespace:
        data["default_namespace"] = args.default_namespace

    return BuilderConfig.from_dict(data)


def format_outline(element: Element, indent: int = 0) -> List[str]:
    """Render an element tree as an indented outline, one node per line."""
    pad = "  " * indent
    label = element.qualified_name
    if element.namespace:
        label += f" [{element.namespace}]"
    lines = [f"{pad}{label}"]
    for (name, namespace), value in element.attributes.items():
        qualified = f"{{{namespace}}}{name}" if namespace else name
        lines.append(f"{pad}  @{qualified}={value!r}")
    for child in element.children:
        if isinstance(child, Element):
            lines.extend(format_outline(child, indent + 1))
        elif isinstance(child, TextNode):
            if child.content.strip():
                lines.append(f"{pad}  \"{_preview(child.content)}\"")
        elif isinstance(child, CDataNode):
            lines.append(f"{pad}  <![CDATA[{_preview(child.content)}]]>")
        elif isinstance(child, CommentNode):
            lines.append(f"{pad}  <!--{_preview(child.content)}-->")
        elif isinstance(child, ProcessingInstructionNode):
            lines.append(f"{pad}  <?{_preview(child.content)}?>")
    return lines


def _preview(text: str) -> str:
    text = " ".join(text.split())
    if len(text) > TEXT_PREVIEW_LENGTH:
        return text[:TEXT_PREVIEW_LENGTH] + "..."
    return text


def format_results(results: Dict[Path, ParseResult], format_type: str) -> str:
    """Format build results for output."""
    if format_type == "json":
        payload = []
        for path, result in results.items():
            entry = {"file": str(path), **result.summary()}
            entry["roots"] = [root.to_dict() for root in result.roots]
            payload.append(entry)
        return json.dumps(payload, indent=2)

    lines = []
    for path, result in results.items():
        status = "OK" if result.success else "FAILED"
        lines.append(f"{path}: {status}")
        for root in result.roots:
            lines.extend(format_outline(root, 1))
        if result.error is not None:
            lines.append(f"  Error: {result.error}")
    return "\n".join(lines)


def _build_all(paths: List[Path], config: BuilderConfig) -> Dict[Path, ParseResult]:
    return {path: parse_file(path, config) for path in paths}


def cmd_parse(args: argparse.Namespace) -> int:
    """Handle parse command."""
    config = load_config(args)
    results = _build_all(args.paths, config)
    output = format_results(results, args.format)

    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(output)

    return 0 if all(result.success for result in results.values()) else 1


def cmd_check(args: argparse.Namespace) -> int:
    """Handle check command."""
    config = load_config(args)
    results = _build_all(args.paths, config)

    for path, result in results.items():
        if result.success:
            if not args.quiet:
                print(f"{path}: OK ({result.element_count} elements)")
        else:
            print(f"{path}: {type(result.error).__name__}: {result.error}")

    return 0 if all(result.success for result in results.values()) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)

    try:
        if args.command == "parse":
            return cmd_parse(args)
        if args.command == "check":
            return cmd_check(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
