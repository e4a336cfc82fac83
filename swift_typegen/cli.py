"""
Command-line interface for swift-typegen.

Reads a type-model JSON document, generates Swift source and writes it to
a file or prints it.
"""

import argparse
import json
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.markup import escape
from rich.table import Table

from . import __version__
from .codegen import (
    GeneratorConfig,
    RegistryError,
    generate_code,
    get_generator,
    get_registry,
    list_supported_languages,
    load_config,
)
from .codegen.core.config import VALID_CASES, ConfigError, get_config_manager
from .codegen.core.schema import SchemaError, TypeCollection, load_type_collection
from .codegen.registry import get_language_info, list_all_language_info
from .logging_config import configure_logging, get_logger
from .utils import TypeModelLoaderError, load_types, write_output

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Generated code goes to stdout, everything else to stderr
console = Console()
err_console = Console(stderr=True)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="swift-typegen",
        description="Generate Swift Codable types from a type-model JSON document",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  swift-typegen types.json
  swift-typegen types.json -o Types.swift --duplicates qualify
  swift-typegen --stdin --optional-style optional < types.json
  swift-typegen --list-languages
        """.strip(),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    # Input options (mutually exclusive)
    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("file", nargs="?", help="Type-model JSON file")
    input_group.add_argument("--url", help="URL to fetch the type model from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the type model from standard input"
    )

    parser.add_argument("--output", "-o", help="Output file (default: stdout)")
    parser.add_argument("--config", help="Configuration file path (JSON)")
    parser.add_argument(
        "--language", "-l", default="swift", help="Target language (default: swift)"
    )

    naming_group = parser.add_argument_group("naming options")
    cases = sorted(VALID_CASES)
    naming_group.add_argument("--type-case", choices=cases, help="Case for type names")
    naming_group.add_argument("--field-case", choices=cases, help="Case for field names")
    naming_group.add_argument("--enum-case", choices=cases, help="Case for enum cases")
    naming_group.add_argument(
        "--duplicates",
        choices=["warn", "error", "qualify"],
        help="How to handle types that resolve to the same name",
    )
    naming_group.add_argument(
        "--struct-naming",
        choices=["auto_rename", "keep_original"],
        help="How to name structs generated for struct-like enum variants",
    )

    swift_group = parser.add_argument_group("Swift options")
    swift_group.add_argument(
        "--optional-style",
        choices=["question_mark", "optional"],
        help="Spell nullable types as T? or Optional<T>",
    )
    swift_group.add_argument(
        "--initializers", action="store_true", help="Generate memberwise initializers"
    )
    swift_group.add_argument(
        "--no-comments", action="store_true", help="Don't emit doc comments"
    )
    swift_group.add_argument("--indent", type=int, metavar="N", help="Indent width")
    swift_group.add_argument("--tabs", action="store_true", help="Indent with tabs")

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages", action="store_true", help="List supported languages and exit"
    )
    info_group.add_argument(
        "--language-info", metavar="LANGUAGE", help="Show language details and exit"
    )
    info_group.add_argument(
        "--verbose", "-v", action="store_true", help="Show generation metadata"
    )
    info_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the CLI.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    args = create_parser().parse_args(argv)
    configure_logging(args.log_level, console=err_console)

    try:
        if args.list_languages:
            return _list_languages()

        if args.language_info:
            return _show_language_info(args.language_info)

        if not (args.file or args.url or args.stdin):
            err_console.print("[red]✗[/red] Input source required (file, --url, or --stdin)")
            return 2

        types = _load_input(args)
        config = _build_config(args)
        return _generate_and_output(types, config, args)

    except CLIError as e:
        err_console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        return 1


def _load_input(args: argparse.Namespace) -> TypeCollection:
    """Load the type collection from the selected source."""
    try:
        if args.stdin:
            return load_type_collection(json.load(sys.stdin))
        return load_types(file_path=args.file, url=args.url)[1]
    except json.JSONDecodeError as e:
        raise CLIError(f"Invalid JSON input: {e}") from e
    except SchemaError as e:
        raise CLIError(f"Malformed type model: {e}") from e
    except (TypeModelLoaderError, FileNotFoundError) as e:
        raise CLIError(str(e)) from e


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Merge defaults, config file and command-line overrides."""
    overrides = {}

    if args.type_case:
        overrides["type_case"] = args.type_case
    if args.field_case:
        overrides["field_case"] = args.field_case
    if args.enum_case:
        overrides["enum_case"] = args.enum_case
    if args.no_comments:
        overrides["add_comments"] = False
    if args.initializers:
        overrides["generate_initializers"] = True
    if args.indent:
        overrides["indent_size"] = args.indent
    if args.tabs:
        overrides["use_tabs"] = True

    custom = {}
    if args.optional_style:
        custom["optional_style"] = args.optional_style
    if args.duplicates:
        custom["duplicate_strategy"] = args.duplicates
    if args.struct_naming:
        custom["struct_naming"] = args.struct_naming
    if custom:
        overrides["custom"] = custom

    try:
        language = get_registry().resolve_language(args.language)
        config = load_config(language, overrides, args.config)
    except (ConfigError, RegistryError) as e:
        raise CLIError(f"Configuration error: {e}") from e

    problems = get_config_manager().validate_config(config, language)
    if problems:
        raise CLIError(f"Configuration error: {'; '.join(problems)}")
    return config


def _generate_and_output(
    types: TypeCollection, config: GeneratorConfig, args: argparse.Namespace
) -> int:
    """Generate code and handle output with rich formatting."""
    try:
        generator = get_generator(args.language, config)
    except RegistryError as e:
        raise CLIError(str(e)) from e

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
        transient=True,
    ) as progress:
        progress.add_task(f"[green]Generating {generator.language_name} code...", total=None)
        result = generate_code(generator, types)

    if not result.success:
        err_console.print(f"[red]✗ {escape(result.error_message)}[/red]")
        return 1

    output = args.output or config.output_file
    if output:
        try:
            path = write_output(result, output)
        except TypeModelLoaderError as e:
            raise CLIError(str(e)) from e
        err_console.print(f"[green]✓[/green] Generated code saved to [cyan]{path}[/cyan]")
    elif console.is_terminal:
        console.print(Syntax(result.code, generator.language_name, theme="monokai"))
    else:
        sys.stdout.write(result.code)

    if args.verbose and result.metadata:
        _print_metadata(result.metadata)

    if result.warnings:
        err_console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            err_console.print(f"  [yellow]•[/yellow] {escape(warning)}")

    return 0


def _print_metadata(metadata: dict):
    table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")

    for key, value in metadata.items():
        if isinstance(value, (list, tuple)):
            value = ", ".join(str(v) for v in value) or "-"
        table.add_row(key.replace("_", " ").title(), str(value))

    err_console.print()
    err_console.print(table)


def _list_languages() -> int:
    """List supported languages."""
    table = Table(title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name, info in sorted(list_all_language_info().items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "none"
        table.add_row(name, info["file_extension"], info["class"], aliases)

    console.print(table)
    return 0


def _show_language_info(language: str) -> int:
    """Show details and default configuration for one language."""
    try:
        info = get_language_info(language)
        generator = get_generator(language)
    except RegistryError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        err_console.print(
            f"[dim]Supported languages: {', '.join(list_supported_languages())}[/dim]"
        )
        return 1

    info_text = (
        f"[bold]Language:[/bold] {info['name']}\n"
        f"[bold]File Extension:[/bold] {info['file_extension']}\n"
        f"[bold]Generator Class:[/bold] {info['class']}\n"
        f"[bold]Module:[/bold] {info['module']}"
    )
    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"
    console.print(Panel(info_text, title=f"🔧 {info['name'].title()} Generator", border_style="green"))

    config_table = Table(
        title="⚙️  Default Configuration",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    config_table.add_column("Setting", style="bold")
    config_table.add_column("Value", style="green")

    config = generator.config
    for setting in ("type_case", "field_case", "enum_case", "indent_size", "add_comments"):
        config_table.add_row(setting, str(getattr(config, setting)))
    for key, value in sorted(config.custom.items()):
        config_table.add_row(key, str(value))

    console.print(config_table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
