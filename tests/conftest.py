from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from ariadne import gql
from graphql import build_schema
from hypothesis import strategies as st
from hypothesis.strategies import composite

from resolvergen.generators.typescript import generate
from resolvergen.models import ROOT_OPERATION_TYPES, ContextDefinition, ModelDefinition, ModelField, ModelMap
from resolvergen.source.loader import build_schema_listing, load_schema_listing
from resolvergen.source.types import (
    Argument,
    Field,
    ObjectType,
    SchemaListing,
    TypeCategory,
    TypeReference,
)

SCALAR_TYPES = ["String", "Int", "Float", "Boolean", "ID"]
MODELS_PATH = "../models"


class TestSchemaData:
    TESTS_DATA_DIR: Path = Path(__file__).parent / "data"
    SCHEMA: Path = TESTS_DATA_DIR / "schema.graphql"
    CONFIG: Path = TESTS_DATA_DIR / "resolvergen.yaml"


def listing_from_sdl(sdl: str) -> SchemaListing:
    return build_schema_listing(build_schema(gql(sdl)))


def model_map_for(*type_names: str, **renamed: str) -> ModelMap:
    """Map every given type to a model of the same name in MODELS_PATH; keyword arguments rename models."""
    models = {type_name: ModelDefinition(name=type_name, path=MODELS_PATH) for type_name in type_names}
    models.update({type_name: ModelDefinition(name=name, path=MODELS_PATH) for type_name, name in renamed.items()})
    return ModelMap(models)


def generate_units(
    listing: SchemaListing,
    model_map: ModelMap,
    context: ContextDefinition | None = None,
    **options: Any,
) -> dict[str, str]:
    """Generate without a formatter and return the code of each unit by path."""
    return {code_file.path: code_file.code for code_file in generate(listing, model_map, context, **options)}


@pytest.fixture(scope="module")
def blog_listing() -> SchemaListing:
    assert TestSchemaData.SCHEMA.exists(), f"Missing test file: {TestSchemaData.SCHEMA}"
    return load_schema_listing([TestSchemaData.SCHEMA])


@pytest.fixture
def blog_model_map() -> ModelMap:
    return ModelMap(
        {
            "User": ModelDefinition(
                name="User",
                path=MODELS_PATH,
                fields=[
                    ModelField(name="id"),
                    ModelField(name="name"),
                    ModelField(name="bio", optional=True),
                    ModelField(name="passwordHash"),
                ],
            ),
            "Post": ModelDefinition(name="PostModel", path=MODELS_PATH),
            "Role": ModelDefinition(name="Role", path=MODELS_PATH, enum=True),
        }
    )


@pytest.fixture
def context() -> ContextDefinition:
    return ContextDefinition(name="Context", path="../context")


field_names = st.from_regex(r"[a-z][a-zA-Z0-9]{0,10}", fullmatch=True)
type_names = st.from_regex(r"[A-Z][a-zA-Z0-9]{0,10}", fullmatch=True).filter(
    lambda name: name not in ROOT_OPERATION_TYPES
)


@composite
def type_reference_strategy(draw: Callable[[st.SearchStrategy[Any]], Any], targets: list[str]) -> TypeReference:
    target = draw(st.sampled_from(targets))
    category = TypeCategory.SCALAR if target in SCALAR_TYPES else TypeCategory.OBJECT
    type_ref = TypeReference(target, category, is_required=draw(st.booleans()))
    if draw(st.booleans()):
        return TypeReference(target, category, is_required=draw(st.booleans()), of_type=type_ref)
    return type_ref


@composite
def schema_listing_strategy(draw: Callable[[st.SearchStrategy[Any]], Any]) -> SchemaListing:
    """Generate a listing of object types whose fields reference scalars or each other."""
    names = draw(st.lists(type_names, min_size=1, max_size=4, unique=True))

    objects = []
    for type_name in names:
        fields = []
        for name in draw(st.lists(field_names, min_size=1, max_size=5, unique=True)):
            arguments = tuple(
                Argument(arg_name, draw(type_reference_strategy(SCALAR_TYPES)))
                for arg_name in draw(st.lists(field_names, max_size=3, unique=True))
            )
            fields.append(Field(name, draw(type_reference_strategy([*SCALAR_TYPES, *names])), arguments))
        objects.append(ObjectType(type_name, tuple(fields)))

    return SchemaListing(objects=tuple(objects))
