"""Command-line interface for navgen code generation."""

from __future__ import annotations

import json
import logging
import sys
from typing import TYPE_CHECKING, NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from navgen.generator import java
from navgen.generator.accessors import resolve
from navgen.generator.aggregate import aggregate
from navgen.generator.classify import classify
from navgen.generator.errors import GenerationError
from navgen.generator.parser import (
    ValidationError,
    is_package_name,
    parse,
    read_options,
    scan,
)
from navgen.generator.universe import DeclaredTypeUniverse
from navgen.generator.writer import write_navigator

if TYPE_CHECKING:
    from navgen.generator.parser import GeneratorOptions
    from navgen.generator.types import OwningClassGroup


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load(input_file: str) -> tuple[list[OwningClassGroup], GeneratorOptions]:
    with open(input_file, encoding="utf-8") as f:
        text = f.read()

    options, types, classes = parse(text)
    groups = aggregate(scan(classes), DeclaredTypeUniverse(types))
    return groups, read_options(options)


def _fail(message: str) -> NoReturn:
    Console(stderr=True, soft_wrap=True).print(f"[bold red]error:[/bold red] {escape(message)}")
    sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """navgen Intent launcher and binder generator."""
    _setup_logging(verbose)


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input declaration file")
@click.option("--output", "-o", "output_dir", required=True, help="Output source root")
@click.option("--package", "-p", default=None, help="Package of the generated Navigator")
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail on bound fields of unsupported types (default: from file, else strict)",
)
def gen(input_file: str, output_dir: str, package: str | None, strict: bool | None) -> None:
    """Generate Navigator.java from a declaration file."""
    try:
        groups, options = _load(input_file)
        if package is not None:
            if not is_package_name(package):
                raise ValidationError(f"--package must be a package name, not {package!r}")
            options.package = package
        if strict is not None:
            options.strict = strict
        generated_file = java.render(groups, package=options.package, strict=options.strict)
    except (ValidationError, GenerationError) as e:
        _fail(str(e))

    if write_navigator(generated_file, output_dir, options.package) is None:
        _fail(f"could not write {java.NAVIGATOR_CLASS}.java below {output_dir}")


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input declaration file")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(input_file: str, output_json: bool) -> None:
    """Display required fields and how each one is read back."""
    try:
        groups, options = _load(input_file)
    except ValidationError as e:
        _fail(str(e))

    if output_json:
        _output_json(groups, options.package)
    else:
        _output_plain(groups, options.package)


@cli.command("parse")
@click.option("--input", "-i", "input_file", required=True, help="Input declaration file")
def parse_command(input_file: str) -> None:
    """Print the parsed declarations as JSON."""
    with open(input_file, encoding="utf-8") as f:
        text = f.read()

    try:
        options, types, classes = parse(text)
    except ValidationError as e:
        _fail(str(e))

    data = {
        "options": [option.to_dict() for option in options],
        "types": [decl.to_dict() for decl in types],
        "classes": [cls.to_dict() for cls in classes],
    }
    print(json.dumps(data, indent=2))


def _field_rows(group: OwningClassGroup) -> list[dict]:
    rows = []
    for field in group.fields:
        t = field.declared_type
        category = classify(t)
        plan = resolve(category, t)
        rows.append(
            {
                "name": field.name,
                "type": t.name,
                "category": category.value,
                "accessor": plan.method if plan else None,
                "default": plan.default if plan else None,
                "cast": plan.needs_cast if plan else False,
                "bind": field.requires_binding,
                "writable": field.is_publicly_writable,
            }
        )
    return rows


def _output_json(groups: list[OwningClassGroup], package: str) -> None:
    """Output field info as JSON."""
    data: dict = {
        "package": package,
        "classes": {},
    }

    for group in groups:
        data["classes"][group.class_name] = {
            "launcher": f"start{group.simple_name}",
            "fields": _field_rows(group),
        }

    print(json.dumps(data, indent=2))


def _output_plain(groups: list[OwningClassGroup], package: str) -> None:
    """Output field info using rich text formatting."""
    console = Console()

    console.print(f"[bold cyan]Navigator[/bold cyan] [dim]{package}[/dim]")
    console.print()

    for group in groups:
        console.print(f"[bold cyan]{group.class_name}[/bold cyan]")

        table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
        table.add_column("Field", style="white")
        table.add_column("Type", style="yellow")
        table.add_column("Category", style="dim")
        table.add_column("Accessor", style="green")
        table.add_column("Default", justify="right")
        table.add_column("Bind")

        for row in _field_rows(group):
            if not row["bind"]:
                bind = "no"
            elif row["writable"]:
                bind = "yes"
            else:
                bind = "[red]not writable[/red]"
            accessor = row["accessor"] or "[red]unsupported[/red]"
            if row["cast"]:
                accessor += " (cast)"
            table.add_row(
                row["name"],
                escape(row["type"]),
                row["category"],
                accessor,
                row["default"] or "",
                bind,
            )

        console.print(table)
        console.print()


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
