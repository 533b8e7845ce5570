"""
graphql-acf command line.

Commands for inspecting the schema produced from an ACF-JSON export:

- sdl: print the augmented schema as GraphQL SDL
- fields: list the fields registered by the augmenter
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from graphql_acf._version import get_version
from graphql_acf.augmenter import AugmentReport, SchemaAugmenter
from graphql_acf.config import AugmenterSettings
from graphql_acf.errors import DefinitionError
from graphql_acf.host import register_host_types
from graphql_acf.schema import TypeRegistry, print_sdl
from graphql_acf.specs import ExposedEntityType
from graphql_acf.store import InMemoryFieldValueStore, JsonFieldGroupStore
from graphql_acf.values import ValueResolver

app = typer.Typer(
    help="Project ACF field groups onto a GraphQL schema.",
    no_args_is_help=True,
)

DEFAULT_ENTITY_TYPES = [
    "post:Post",
    "page:Page",
    "category:Category:taxonomy",
    "post_tag:Tag:taxonomy",
    "attachment:MediaItem:attachment",
]


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"graphql-acf {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build(
    acf_json_dir: Path, entity: list[str], max_depth: int | None
) -> tuple[TypeRegistry, AugmentReport]:
    try:
        entity_types = [ExposedEntityType.parse(text) for text in entity or DEFAULT_ENTITY_TYPES]
    except ValueError as e:
        typer.echo(f"Invalid --entity: {e}", err=True)
        raise typer.Exit(code=2)

    try:
        store = JsonFieldGroupStore.from_directory(acf_json_dir)
    except DefinitionError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    settings = AugmenterSettings.from_env()
    if max_depth is not None:
        settings = settings.model_copy(update={"max_depth": max_depth})

    registry = TypeRegistry()
    register_host_types(registry, entity_types)
    augmenter = SchemaAugmenter(
        store=store,
        values=ValueResolver(InMemoryFieldValueStore()),
        entity_types=entity_types,
        settings=settings,
    )
    return registry, augmenter.augment(registry)


@app.command("sdl")
def sdl_command(
    acf_json_dir: Path = typer.Argument(..., help="Directory of ACF-JSON field group exports"),
    entity: list[str] = typer.Option(
        [],
        "--entity",
        "-e",
        help="Exposed entity type as key:TypeName[:family] (repeatable)",
    ),
    max_depth: int | None = typer.Option(
        None, "--max-depth", help="Maximum group/repeater nesting depth"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write SDL to a file"),
) -> None:
    """
    Print the augmented schema as GraphQL SDL.

    Examples:
        graphql-acf sdl acf-json
        graphql-acf sdl acf-json -e post:Post -e event:Event -o schema.graphql
    """
    registry, report = _build(acf_json_dir, entity, max_depth)
    sdl = print_sdl(registry)
    if output is not None:
        output.write_text(sdl + "\n")
        typer.echo(f"Wrote schema to {output} ({report})")
    else:
        typer.echo(sdl)


@app.command("fields")
def fields_command(
    acf_json_dir: Path = typer.Argument(..., help="Directory of ACF-JSON field group exports"),
    entity: list[str] = typer.Option(
        [],
        "--entity",
        "-e",
        help="Exposed entity type as key:TypeName[:family] (repeatable)",
    ),
    max_depth: int | None = typer.Option(
        None, "--max-depth", help="Maximum group/repeater nesting depth"
    ),
) -> None:
    """List the fields added to each type."""
    registry, report = _build(acf_json_dir, entity, max_depth)
    targets = set(report.entity_types) | set(report.generated_types)

    table = Table(title="ACF fields")
    table.add_column("Type", style="cyan")
    table.add_column("Field", style="green")
    table.add_column("GraphQL type")
    table.add_column("Description", style="dim")

    for type_name, definition in sorted(registry.object_types.items()):
        if type_name not in targets:
            continue
        for field_name, config in definition.fields.items():
            if field_name == "id" and type_name in report.entity_types:
                continue
            table.add_row(type_name, field_name, str(config.type), config.description or "")

    console = Console()
    console.print(table)
    console.print(str(report))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
