"""
Command-line interface for arch-scaffold.

Loads a schema document, generates the project and writes it as a zip
archive. Failures are printed as the structured error response.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .codegen import (
    ConfigManager,
    GenerationResult,
    generate_project,
    get_language_info,
    is_language_supported,
    list_all_language_info,
)
from .codegen.core.archive import write_archive
from .codegen.core.config import ConfigError
from .codegen.core.generator import project_directory
from .logging_config import get_logger, setup_logging
from .utils import SchemaLoadError, load_json

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="arch-scaffold",
        description="Generate a layered project skeleton from a domain schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  arch-scaffold schema.json
  arch-scaffold -l typescript -o shop.zip schema.json
  arch-scaffold --url https://example.com/schema.json --dry-run
  arch-scaffold --stdin < schema.json
  arch-scaffold --list-languages
        """.strip(),
    )

    input_group = parser.add_mutually_exclusive_group(required=False)
    input_group.add_argument("schema", nargs="?", help="Schema JSON file")
    input_group.add_argument("--url", help="URL to fetch the schema from")
    input_group.add_argument(
        "--stdin", action="store_true", help="Read the schema from standard input"
    )

    parser.add_argument(
        "--output", "-o", help="Archive path (default: <projectName>.zip)"
    )
    parser.add_argument(
        "--language", "-l", help="Output language, overrides the schema's language"
    )
    parser.add_argument("--config", help="Configuration file path (JSON)")

    options = parser.add_argument_group("generation options")
    options.add_argument(
        "--fallback",
        choices=["any", "passthrough"],
        help="What unresolved type references become",
    )
    options.add_argument(
        "--field-resolution",
        choices=["nameAsType", "declaredType"],
        help="How use-case field types are derived (the schema may override)",
    )
    options.add_argument(
        "--flat",
        action="store_true",
        help="Don't nest generated files under the project name",
    )
    options.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't add comments to generated code",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported languages and exit",
    )
    info_group.add_argument(
        "--language-info",
        metavar="LANGUAGE",
        help="Show detailed info about a language and exit",
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the generated file tree without writing the archive",
    )
    output_group.add_argument(
        "--verbose", action="store_true", help="Show generation result metadata"
    )
    output_group.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the command line.

    Returns:
        Exit code: 0 on success (warnings included), 1 on any error
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    if args.list_languages:
        return _list_languages()

    if args.language_info:
        return _show_language_info(args.language_info)

    try:
        payload = _load_input(args)
        config = _build_config(args)
    except (CLIError, ConfigError) as e:
        code = e.code if isinstance(e, ConfigError) else "input_error"
        _print_error({"error": code, "message": str(e), "details": []})
        return 1

    result = generate_project(payload, config=config)
    if not result.success:
        _print_error(result.to_error_response())
        return 1

    if args.dry_run:
        _show_file_tree(result)
    else:
        output_path = Path(args.output or _default_archive_name(result))
        try:
            write_archive(((f.path, f.content) for f in result.files), output_path)
        except OSError as e:
            _print_error(
                {
                    "error": "output_error",
                    "message": f"Failed to write {output_path}: {e}",
                    "details": [],
                }
            )
            return 1
        console.print(
            f"[green]✓[/green] Generated {len(result.files)} files "
            f"({result.metadata.get('language')}) into [cyan]{output_path}[/cyan]"
        )

    if args.verbose and result.metadata:
        _show_metadata(result)

    if result.warnings:
        console.print("\n[yellow]⚠️  Warnings:[/yellow]")
        for warning in result.warnings:
            console.print(f"  [yellow]•[/yellow] {escape(warning)}")

    return 0


def _load_input(args: argparse.Namespace) -> Any:
    """Get the schema document from the selected source."""
    try:
        if args.schema:
            payload = load_json(file_path=args.schema)[1]
        elif args.url:
            payload = load_json(url=args.url)[1]
        elif args.stdin:
            payload = json.load(sys.stdin)
        else:
            raise CLIError("Input source required (schema file, --url, or --stdin)")
    except json.JSONDecodeError as e:
        raise CLIError(f"Invalid JSON input: {e}")
    except SchemaLoadError as e:
        raise CLIError(str(e))

    if args.language:
        if not isinstance(payload, dict):
            raise CLIError("Schema document must be a JSON object")
        payload = dict(payload, language=args.language)
    return payload


def _build_config(args: argparse.Namespace) -> Dict[str, Any]:
    """Configuration overrides: config file first, then command-line flags."""
    config_dict: Dict[str, Any] = {}

    if args.config:
        config_dict.update(ConfigManager().load_config_file(args.config))

    if args.fallback:
        config_dict["fallback_policy"] = args.fallback
    if args.field_resolution:
        config_dict["field_resolution"] = args.field_resolution
    if args.flat:
        config_dict["nest_under_project"] = False
    if args.no_comments:
        config_dict["add_comments"] = False

    return config_dict


def _default_archive_name(result: GenerationResult) -> str:
    return f"{project_directory(result.metadata.get('project_name', ''))}.zip"


def _print_error(response: Dict[str, Any]):
    """Print the structured error response as JSON."""
    logger.debug("Generation failed: %s", response.get("message"))
    console.print_json(data=response)


def _list_languages() -> int:
    """List supported languages with details."""
    language_info = list_all_language_info()

    table = Table(
        title="📋 Supported Languages", box=box.ROUNDED, title_style="bold cyan"
    )
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Profile Class", style="dim")
    table.add_column("Aliases", style="blue")

    for lang_name, info in sorted(language_info.items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(lang_name, info["file_extension"], info["class"], aliases)

    console.print()
    console.print(table)
    console.print()
    console.print(
        Panel(
            "[bold]Usage:[/bold] arch-scaffold [dim]schema.json[/dim] --language [cyan]LANGUAGE[/cyan]\n"
            "[bold]Info:[/bold] arch-scaffold --language-info [cyan]LANGUAGE[/cyan]",
            title="💡 Quick Start",
            border_style="blue",
        )
    )
    return 0


def _show_language_info(language: str) -> int:
    """Show detailed information about a specific language."""
    if not is_language_supported(language):
        console.print(f"[red]✗ Language '{language}' is not supported[/red]")
        console.print("[dim]Use --list-languages to see available options[/dim]")
        return 1

    info = get_language_info(language)

    info_text = f"""[bold]Language:[/bold] {info['name']}
[bold]File Extension:[/bold] {info['file_extension']}
[bold]Unknown Type:[/bold] {info['unknown_type']}
[bold]Profile Class:[/bold] {info['class']}
[bold]Module:[/bold] {info['module']}"""
    if info["aliases"]:
        info_text += f"\n[bold]Aliases:[/bold] {', '.join(info['aliases'])}"

    console.print()
    console.print(Panel(info_text, title=f"🔧 {info['name'].title()}", border_style="green"))

    casing_table = Table(
        title="Identifier Casing",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    casing_table.add_column("Role", style="bold")
    casing_table.add_column("Case", style="green")
    for role, case in info["casing"].items():
        casing_table.add_row(role, case)

    console.print()
    console.print(casing_table)
    console.print(f"[bold]Primitive types:[/bold] {', '.join(info['primitive_types'])}")
    return 0


def _show_file_tree(result: GenerationResult):
    """Print generated paths instead of writing an archive."""
    table = Table(
        title="📄 Generated Files",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Path", style="cyan")
    table.add_column("Kind", style="dim")
    table.add_column("Lines", justify="right")

    for generated in result.files:
        kind = generated.kind.value if generated.kind else "package"
        if generated.placeholder:
            kind += " (placeholder)"
        table.add_row(generated.path, kind, str(generated.content.count("\n")))

    console.print(table)


def _show_metadata(result: GenerationResult):
    metadata_table = Table(
        title="📊 Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    metadata_table.add_column("Property", style="bold")
    metadata_table.add_column("Value", style="green")

    for key, value in result.metadata.items():
        metadata_table.add_row(key.replace("_", " ").title(), str(value))

    console.print()
    console.print(metadata_table)


if __name__ == "__main__":
    sys.exit(main())
