from graphql import GraphQLSchema

from resolvergen import log
from resolvergen.config import GeneratorConfig
from resolvergen.formatting import PrettierFormatter
from resolvergen.models import ContextDefinition, ModelMap
from resolvergen.source.loader import build_schema_listing
from resolvergen.source.types import SchemaListing

from .composer import CodeFormatter, OutputComposer
from .declarations import CodeFile


def generate(
    listing: SchemaListing,
    model_map: ModelMap,
    context: ContextDefinition | None = None,
    default_resolvers_enabled: bool = False,
    iresolvers_augmentation_enabled: bool = False,
    formatter: CodeFormatter | None = None,
) -> list[CodeFile]:
    """
    Generate TypeScript resolver types for a schema listing.

    Args:
        listing: The schema listing
        model_map: Models backing the schema entities
        context: Optional resolver context type; `any` is used when absent
        default_resolvers_enabled: Emit `defaultResolvers` helpers for mapped object types
        iresolvers_augmentation_enabled: Merge the `Resolvers` map into graphql-tools' `IResolvers`
        formatter: Optional code formatter applied to every unit

    Returns:
        list[CodeFile]: One unit per object, interface and union, plus `enums.ts` and `index.ts`
    """
    log.info(
        f"Generating TypeScript resolver types for {len(listing.resolvable_types)} types "
        f"and {len(listing.enums)} enums"
    )

    composer = OutputComposer(
        listing,
        model_map,
        context,
        default_resolvers_enabled,
        iresolvers_augmentation_enabled,
        formatter,
    )
    files = composer.compose()

    log.info(f"Successfully generated {len(files)} TypeScript files")

    return files


def translate_to_typescript(schema: GraphQLSchema, config: GeneratorConfig) -> list[CodeFile]:
    """
    Translate a GraphQL schema to TypeScript resolver types using a generator configuration.

    Args:
        schema: The GraphQL schema
        config: Models, context and feature flags

    Returns:
        list[CodeFile]: The generated units
    """
    return generate(
        build_schema_listing(schema),
        config.model_map,
        config.context,
        default_resolvers_enabled=config.default_resolvers,
        iresolvers_augmentation_enabled=config.iresolvers_augmentation,
        formatter=PrettierFormatter() if config.prettify else None,
    )


__all__ = ["CodeFile", "generate", "translate_to_typescript"]
