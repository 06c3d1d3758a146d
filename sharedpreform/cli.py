"""
Command-line interface for accessor generation.

    sharedpreform generate app/prefs.json -l kotlin -o build/generated
    sharedpreform generate app.prefs:Settings --method-case snake
    sharedpreform languages
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .core.config import ConfigError, GeneratorConfig, get_config_manager, load_config
from .core.diagnostics import DiagnosticsReporter
from .core.generator import GenerationResult, generate_code
from .core.sink import FileSystemSink
from .loader import SourceLoaderError, load_sources
from .logging_config import configure_logging, get_logger
from .registry import (
    RegistryError,
    get_generator,
    get_registry,
    list_all_language_info,
)

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich console
console = Console()


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser with its subcommands."""
    parser = argparse.ArgumentParser(
        prog="sharedpreform",
        description="Generate typed preference accessor classes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sharedpreform generate prefs.json
  sharedpreform generate app.prefs:Settings -l kotlin -o build/generated
  sharedpreform languages
        """.strip(),
    )
    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser(
        "generate",
        help="Generate accessor classes",
        description="Generate accessor classes for preference aggregates",
    )
    generate.add_argument(
        "sources",
        nargs="+",
        metavar="SOURCE",
        help="JSON schema file, or module:Class / module import reference",
    )
    generate.add_argument(
        "--language", "-l", default="python", help="Target language (default: python)"
    )
    generate.add_argument(
        "--output", "-o", metavar="DIR", help="Output directory (default: print)"
    )
    generate.add_argument("--config", metavar="FILE", help="JSON configuration file")
    generate.add_argument(
        "--package-name", "--package", metavar="NAME", help="Package for generated code"
    )
    generate.add_argument("--class-suffix", metavar="SUFFIX", help="Accessor class suffix")
    generate.add_argument(
        "--method-case", choices=["camel", "snake"], help="Accessor method naming"
    )
    generate.add_argument(
        "--no-comments", action="store_true", help="Don't add comments to generated code"
    )
    generate.add_argument(
        "--allow-duplicate-keys",
        action="store_true",
        help="Warn instead of failing when storage keys repeat",
    )
    generate.add_argument(
        "--stop-on-empty",
        action="store_true",
        help="Stop at the first aggregate without tagged fields",
    )
    _add_verbosity_args(generate)
    generate.set_defaults(func=handle_generate)

    languages = subparsers.add_parser("languages", help="List supported target languages")
    _add_verbosity_args(languages)
    languages.set_defaults(func=handle_languages)

    return parser


def _add_verbosity_args(parser: argparse.ArgumentParser):
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    group.add_argument("--quiet", "-q", action="store_true", help="Only log errors")


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the sharedpreform command."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not getattr(args, "func", None):
        parser.print_help()
        return 1

    configure_logging(verbose=args.verbose, quiet=args.quiet)

    try:
        return args.func(args)
    except (CLIError, ConfigError, RegistryError, SourceLoaderError) as e:
        console.print(f"[red]✗ Error:[/red] {e}")
        return 1


def handle_generate(args: argparse.Namespace) -> int:
    """Run one generation pass for the sources on the command line."""
    registry = get_registry()
    language = registry.resolve(args.language)
    if language is None:
        supported = ", ".join(registry.list_languages())
        raise CLIError(f"Unsupported language '{args.language}' (supported: {supported})")

    config = build_config(args, language)
    for warning in get_config_manager().validate_config(config, language):
        logger.warning("%s", warning)

    generator = get_generator(language, config)
    sources = load_sources(args.sources, search_path=Path.cwd())
    logger.debug("Resolved %d aggregate source(s)", len(sources))

    sink = FileSystemSink(config.output_dir) if config.output_dir else None
    reporter = DiagnosticsReporter()
    result = generate_code(generator, sources, sink, reporter)

    if sink is not None:
        _print_written(result)
    elif result.artifacts:
        _print_code(result, language)

    _print_summary(result)
    if args.verbose:
        _print_metadata(result)

    return reporter.exit_code


def build_config(args: argparse.Namespace, language: str) -> GeneratorConfig:
    """Merge the configuration file and command-line overrides."""
    overrides: Dict[str, Any] = {}

    if args.output:
        overrides["output_dir"] = args.output
    if args.package_name:
        overrides["package_name"] = args.package_name
    if args.class_suffix is not None:
        overrides["class_suffix"] = args.class_suffix
    if args.method_case:
        overrides["method_case"] = args.method_case
    if args.no_comments:
        overrides["add_comments"] = False
    if args.allow_duplicate_keys:
        overrides["allow_duplicate_keys"] = True
    if args.stop_on_empty:
        overrides["stop_on_empty_schema"] = True

    return load_config(language, custom_config=overrides, config_file=args.config)


def handle_languages(args: argparse.Namespace) -> int:
    """List supported languages with details."""
    table = Table(title="Supported Languages", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Language", style="bold green", no_wrap=True)
    table.add_column("Extension", style="cyan")
    table.add_column("Generator Class", style="dim")
    table.add_column("Aliases", style="blue")

    for name, info in sorted(list_all_language_info().items()):
        aliases = ", ".join(info["aliases"]) if info["aliases"] else "[dim]none[/dim]"
        table.add_row(name, info["file_extension"], info["class"], aliases)

    console.print(table)
    console.print(
        Panel(
            "[bold]Usage:[/bold] sharedpreform generate [dim]SOURCE...[/dim] "
            "--language [cyan]LANGUAGE[/cyan]",
            title="Quick Start",
            border_style="blue",
        )
    )
    return 0


def _print_code(result: GenerationResult, language: str):
    for artifact in result.artifacts:
        console.print(f"[green]── {artifact.path} ──[/green]")
        console.print(Syntax(artifact.source, language, theme="monokai"))


def _print_written(result: GenerationResult):
    for artifact in result.artifacts:
        console.print(
            f"[green]✓[/green] {artifact.class_name} written to [cyan]{artifact.location}[/cyan]"
        )


def _print_summary(result: GenerationResult):
    # Individual diagnostics are already logged by the reporter
    errors, warnings = len(result.errors), len(result.warnings)
    generated = len(result.artifacts)
    style = "red" if errors else "yellow" if warnings else "green"
    console.print(
        f"[{style}]{generated} accessor(s) generated, "
        f"{errors} error(s), {warnings} warning(s)[/{style}]"
    )


def _print_metadata(result: GenerationResult):
    table = Table(
        title="Generation Metadata",
        box=box.SIMPLE,
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")

    for key, value in result.metadata.items():
        table.add_row(key.replace("_", " ").title(), str(value))

    console.print(table)


if __name__ == "__main__":
    sys.exit(main())
