"""CLI entry point for designgen.

This module acts as the central entry point for the project's CLI tools.
It loads widget trees and themes from JSON files and delegates to the
conversion pipeline.
"""

import argparse
import json
import subprocess
import sys
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError as ModelValidationError

from src.config import get_environment_info, get_log_level, list_environment_variables
from src.core import get_logger, setup_logging
from src.core.errors import DesignGenError

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")


def _read_json(path: Path) -> Any:
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def _write_text(text: str, output: Path | None) -> None:
    if output:
        output.write_text(text, encoding="utf-8")
        logger.info(f"Output saved to {output}")
    else:
        print(text)


# =============================================================================
# Convert Command
# =============================================================================


def _parse_modes(values: list[str]) -> dict[str, Path]:
    """Parse repeated NAME=FILE mode arguments."""
    modes: dict[str, Path] = {}
    for value in values:
        name, sep, path = value.partition("=")
        if not sep or not name or not path:
            raise ValueError(f"Expected NAME=FILE for --mode, got: {value}")
        modes[name] = Path(path)
    return modes


def cmd_convert(args: argparse.Namespace) -> int:
    """Handle the convert command."""
    from src.mid import ReusableWidgetDefinition, ThemeModel, WidgetNode
    from src.output import format_conversion_summary, format_node_tree
    from src.pipeline import Converter
    from src.style import StyleMappingConfig

    try:
        document = _read_json(args.input)
        tree_data = document.get("tree", document)
        root = WidgetNode.model_validate(tree_data)
        definitions = [
            ReusableWidgetDefinition.model_validate(d)
            for d in document.get("definitions", [])
        ]

        theme = None
        if args.theme:
            theme = ThemeModel.model_validate(_read_json(args.theme))
        elif "theme" in document:
            theme = ThemeModel.model_validate(document["theme"])

        extra_themes = {
            name: ThemeModel.model_validate(_read_json(path))
            for name, path in _parse_modes(args.mode).items()
        }

        overrides: dict[str, Any] = {"collection_prefix": args.collection_prefix}
        if args.strict:
            overrides["fallback_to_direct_values"] = False
        if args.no_variables:
            overrides["use_variables"] = False
        config = StyleMappingConfig.from_environment(**overrides)

        converter = Converter(config, max_variants=args.max_variants)
        result = converter.convert(root, theme, definitions, extra_themes or None)
    except (OSError, json.JSONDecodeError, ModelValidationError, ValueError) as e:
        logger.error(f"Could not load input: {e}")
        return 1
    except DesignGenError as e:
        logger.error(e.to_user_message())
        return 1

    result_json = json.dumps(result.to_dict(), indent=2, ensure_ascii=False)
    if args.format == "tree":
        result_text = format_node_tree(result.root)
    elif args.format == "summary":
        result_text = format_conversion_summary(result)
    elif args.format == "all":
        result_text = (
            f"## Summary\n{format_conversion_summary(result)}\n\n"
            f"## Node Tree\n{format_node_tree(result.root)}\n\n"
            f"## JSON\n```json\n{result_json}\n```"
        )
    else:
        result_text = result_json

    _write_text(result_text, args.output)
    return 0 if result.success else 2


def handle_convert_command(argv: list[str]) -> int:
    """Handle the convert command."""
    parser = argparse.ArgumentParser(
        prog="python . convert",
        description="Convert a widget tree into design-tool node specs",
    )
    parser.add_argument(
        "input",
        type=Path,
        help="JSON file with a 'tree' and optional 'definitions' and 'theme'",
    )
    parser.add_argument(
        "--theme",
        "-t",
        type=Path,
        default=None,
        help="Theme JSON file (overrides a theme embedded in the input)",
    )
    parser.add_argument(
        "--mode",
        action="append",
        default=[],
        metavar="NAME=FILE",
        help="Extra theme mode for multi-mode variables (repeatable)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified)",
    )
    parser.add_argument(
        "--format",
        "-f",
        type=str,
        default="json",
        choices=["json", "tree", "summary", "all"],
        help="Output format (default: json)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Report unresolved theme references as errors instead of using literals",
    )
    parser.add_argument(
        "--no-variables",
        action="store_true",
        help="Apply literal values only, without variable bindings",
    )
    parser.add_argument(
        "--collection-prefix",
        type=str,
        default=None,
        help="Token collection prefix (default: DESIGNGEN_COLLECTION_PREFIX)",
    )
    parser.add_argument(
        "--max-variants",
        type=int,
        default=None,
        help="Variant cap per component (default: DESIGNGEN_MAX_VARIANTS)",
    )
    args = parser.parse_args(argv)
    return cmd_convert(args)


# =============================================================================
# Validate Command
# =============================================================================


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle the validate command."""
    from src.mid import WidgetNode, validate_widget_tree
    from src.schema import validate_widget_dict

    try:
        document = _read_json(args.input)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read {args.input}: {e}")
        return 1

    tree_data = document.get("tree", document) if isinstance(document, dict) else document
    schema_errors = validate_widget_dict(tree_data)
    if schema_errors:
        print(f"Schema errors ({len(schema_errors)}):")
        for error in schema_errors:
            print(f"  {error.path}: {error.message} [{error.error_type}]")
        return 1

    try:
        root = WidgetNode.model_validate(tree_data)
    except ModelValidationError as e:
        print(f"Model errors ({e.error_count()}):")
        for detail in e.errors():
            location = ".".join(str(part) for part in detail["loc"])
            print(f"  {location}: {detail['msg']}")
        return 1

    problems = validate_widget_tree(root)
    if not problems:
        print("Valid widget tree")
        return 0

    print(f"Semantic issues ({len(problems)}):")
    for problem in problems:
        print(f"  {problem.node_id}: {problem.message} [{problem.error_type}]")
    return 1


def handle_validate_command(argv: list[str]) -> int:
    """Handle the validate command."""
    parser = argparse.ArgumentParser(
        prog="python . validate",
        description="Validate a widget tree JSON file",
    )
    parser.add_argument("input", type=Path, help="Widget tree JSON file")
    args = parser.parse_args(argv)
    return cmd_validate(args)


# =============================================================================
# Schema Command
# =============================================================================


def cmd_schema(args: argparse.Namespace) -> int:
    """Handle the schema command."""
    from src.schema import export_json_schema

    _write_text(json.dumps(export_json_schema(), indent=2), args.output)
    return 0


def handle_schema_command(argv: list[str]) -> int:
    """Handle the schema command."""
    parser = argparse.ArgumentParser(
        prog="python . schema",
        description="Print the JSON Schema of the widget input model",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified)",
    )
    args = parser.parse_args(argv)
    return cmd_schema(args)


# =============================================================================
# Tokens Command
# =============================================================================


def cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens command."""
    from src.mid import ThemeModel
    from src.tokens import TokenTable

    try:
        theme = ThemeModel.model_validate(_read_json(args.theme))
    except (OSError, json.JSONDecodeError, ModelValidationError) as e:
        logger.error(f"Could not load theme: {e}")
        return 1

    table = TokenTable.from_theme(theme, args.name)
    for issue in table.issues:
        logger.warning(issue)
    _write_text(json.dumps(table.to_dict(), indent=2, ensure_ascii=False), args.output)
    return 0


def handle_tokens_command(argv: list[str]) -> int:
    """Handle the tokens command."""
    parser = argparse.ArgumentParser(
        prog="python . tokens",
        description="Build the variable collections for a theme",
    )
    parser.add_argument("theme", type=Path, help="Theme JSON file")
    parser.add_argument(
        "--name",
        "-n",
        type=str,
        default="Default",
        help="Collection name prefix (default: Default)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output file path (prints to stdout if not specified)",
    )
    args = parser.parse_args(argv)
    return cmd_tokens(args)


# =============================================================================
# Env Command
# =============================================================================


def cmd_env(args: argparse.Namespace) -> int:
    """Handle the env command."""
    variables = list_environment_variables(args.category)
    if not variables:
        logger.error(f"No variables in category: {args.category}")
        return 1

    current_category = None
    for var in variables:
        info = get_environment_info(var)
        if info.category != current_category:
            current_category = info.category
            print(f"\n[{current_category}]")
        print(f"  {info.name} ({info.var_type.__name__}, default: {info.default})")
        if info.description:
            print(f"      {info.description}")
    return 0


def handle_env_command(argv: list[str]) -> int:
    """Handle the env command."""
    parser = argparse.ArgumentParser(
        prog="python . env",
        description="List designgen configuration variables",
    )
    parser.add_argument(
        "--category",
        "-c",
        type=str,
        default=None,
        choices=["style", "variants", "library", "logging"],
        help="Only show one category",
    )
    args = parser.parse_args(argv)
    return cmd_env(args)


# =============================================================================
# Test Command
# =============================================================================


def cmd_test(extra_args: list[str]) -> int:
    """Run pytest with provided arguments.

    Usage:
        python . test                # Run all tests
        python . test --unit         # Run only unit tests
        python . test -v             # Run with verbose output
        python . test -k "variants"  # Run tests matching pattern
    """
    tier_markers = {
        "--unit": ["-m", "unit"],
        "--all": [],
    }

    pytest_args: list[str] = []
    remaining_args: list[str] = []

    for arg in extra_args:
        if arg in tier_markers:
            pytest_args.extend(tier_markers[arg])
        else:
            remaining_args.append(arg)

    cmd = [sys.executable, "-m", "pytest", *pytest_args, *remaining_args]
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        return 130


# =============================================================================
# Main
# =============================================================================


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: python . {command} [args]")
    print("\n=== Conversion ===")
    print("  convert    Convert a widget tree into design-tool node specs")
    print("  validate   Validate a widget tree JSON file")
    print("  tokens     Build the variable collections for a theme")
    print("\n=== Reference ===")
    print("  schema     Print the widget input JSON Schema")
    print("  env        List configuration variables")
    print("\n=== Development ===")
    print("  test       Run pytest (--unit for unit tests only)")
    print("\nExamples:")
    print("  python . convert screen.json --theme theme.json -f tree")
    print("  python . convert screen.json --mode Dark=dark.json -o out.json")
    print("  python . convert screen.json --strict -f summary")
    print("  python . validate screen.json")
    print("  python . tokens theme.json --name Brand")
    print("  python . env --category style")


def main() -> int:
    """Main entry point for the CLI."""
    if len(sys.argv) < 2:
        show_help()
        return 1

    command = sys.argv[1]
    rest_args = sys.argv[2:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    if command == "test":
        return cmd_test(rest_args)

    commands = {
        "convert": lambda: handle_convert_command(rest_args),
        "validate": lambda: handle_validate_command(rest_args),
        "schema": lambda: handle_schema_command(rest_args),
        "tokens": lambda: handle_tokens_command(rest_args),
        "env": lambda: handle_env_command(rest_args),
    }

    if command in commands:
        setup_logging(get_log_level())
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
