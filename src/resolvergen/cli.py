import logging
import sys
from pathlib import Path

import rich_click as click
import yaml
from ariadne.exceptions import GraphQLFileSyntaxError
from graphql import GraphQLError, GraphQLSchema
from pydantic import ValidationError
from rich.traceback import install

from resolvergen import __version__, log
from resolvergen.config import GeneratorConfig, load_generator_config
from resolvergen.generators.typescript import translate_to_typescript
from resolvergen.models import UnmappedModelError
from resolvergen.source.loader import build_schema_listing, load_schema
from resolvergen.writer import write_code_files

schema_option = click.option(
    "--schema",
    "-s",
    "schemas",
    type=click.Path(exists=True, path_type=Path),
    multiple=True,
    help="The GraphQL schema file or directory containing schema files. Can be specified multiple times.",
)


config_option = click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with models, context and generation options",
)


def resolve_config(config: Path | None) -> GeneratorConfig:
    try:
        return load_generator_config(config)
    except (OSError, yaml.YAMLError, TypeError, ValidationError) as e:
        log.error(f"Invalid config: {e}")
        sys.exit(1)


def resolve_schema_paths(schemas: tuple[Path, ...], generator_config: GeneratorConfig) -> list[Path]:
    schema_paths = list(schemas) or generator_config.schema_paths
    if not schema_paths:
        log.error("No schema given. Use --schema or set 'schema' in the config file.")
        sys.exit(1)
    return schema_paths


def resolve_schema(schema_paths: list[Path]) -> GraphQLSchema:
    try:
        return load_schema(schema_paths)
    except (GraphQLError, GraphQLFileSyntaxError, TypeError) as e:
        log.error(f"Invalid schema: {e}")
        sys.exit(1)


@click.group(context_settings={"auto_envvar_prefix": "resolvergen"})
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="INFO",
    help="Log level",
    show_default=True,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Log file",
)
@click.version_option(__version__)
def cli(log_level: str, log_file: Path | None) -> None:
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(message)s"))
        log.addHandler(file_handler)

    log.setLevel(log_level.upper())
    if log_level.upper() == "DEBUG":
        _ = install(show_locals=True)


@cli.command
@schema_option
@config_option
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, writable=True, path_type=Path),
    help="Output directory for the generated files",
)
@click.option(
    "--default-resolvers/--no-default-resolvers",
    default=None,
    help="Emit default resolvers for object types backed by a model",
)
@click.option(
    "--iresolvers-augmentation/--no-iresolvers-augmentation",
    default=None,
    help="Augment graphql-tools' IResolvers type with the generated Resolvers map",
)
@click.option(
    "--prettify/--no-prettify",
    default=None,
    help="Format the generated code with prettier",
)
def generate(
    schemas: tuple[Path, ...],
    config: Path | None,
    output: Path | None,
    default_resolvers: bool | None,
    iresolvers_augmentation: bool | None,
    prettify: bool | None,
) -> None:
    """Generate TypeScript resolver types from a GraphQL schema."""
    generator_config = resolve_config(config)
    schema_paths = resolve_schema_paths(schemas, generator_config)

    if default_resolvers is not None:
        generator_config.default_resolvers = default_resolvers
    if iresolvers_augmentation is not None:
        generator_config.iresolvers_augmentation = iresolvers_augmentation
    if prettify is not None:
        generator_config.prettify = prettify

    output_dir = output or generator_config.output
    if output_dir is None:
        log.error("No output directory given. Use --output or set 'output' in the config file.")
        sys.exit(1)

    graphql_schema = resolve_schema(schema_paths)

    try:
        files = translate_to_typescript(graphql_schema, generator_config)
    except UnmappedModelError as e:
        log.error(str(e))
        log.hint("Add the type to 'models' in the config file.")
        sys.exit(1)

    try:
        written = write_code_files(files, output_dir)
    except OSError as e:
        log.error(f"File I/O error: {e}")
        sys.exit(1)

    log.success(f"Generated {len(written)} of {len(files)} files in {output_dir}")
    for path in written:
        log.list_item(str(path), style="dim")


@cli.command
@schema_option
@config_option
def stats(schemas: tuple[Path, ...], config: Path | None) -> None:
    """Count the schema entities resolver types would be generated for."""
    schema_paths = resolve_schema_paths(schemas, resolve_config(config))
    listing = build_schema_listing(resolve_schema(schema_paths))

    log.rule("GraphQL Schema Entities")
    log.key_value("Objects", len(listing.objects))
    log.key_value("Interfaces", len(listing.interfaces))
    log.key_value("Unions", len(listing.unions))
    log.key_value("Enums", len(listing.enums))
    log.key_value("Input types", len(listing.inputs))


if __name__ == "__main__":
    cli()
