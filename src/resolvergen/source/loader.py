from pathlib import Path
from typing import Any, cast

from ariadne import load_schema_from_path
from graphql import (
    GraphQLEnumType,
    GraphQLField,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInterfaceType,
    GraphQLList,
    GraphQLNamedType,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLType,
    GraphQLUnionType,
    build_schema,
    get_named_type,
    is_enum_type,
    is_input_object_type,
    is_interface_type,
    is_list_type,
    is_non_null_type,
    is_object_type,
    is_scalar_type,
    is_union_type,
)

from resolvergen import log
from resolvergen.source.types import (
    Argument,
    EnumType,
    Field,
    InputType,
    InterfaceType,
    ObjectType,
    SchemaListing,
    TypeCategory,
    TypeReference,
    UnionType,
)


def is_introspection_type(type_name: str) -> bool:
    return type_name.startswith("__")


def load_schema(graphql_schema_paths: list[Path]) -> GraphQLSchema:
    """Build a GraphQL schema from one or more files or folders of .graphql files."""
    schema_str = ""
    for graphql_path in graphql_schema_paths:
        schema_str += load_schema_from_path(graphql_path) + "\n"
    return build_schema(schema_str)


def get_type_category(named_type: GraphQLNamedType) -> TypeCategory:
    if is_object_type(named_type):
        return TypeCategory.OBJECT
    if is_interface_type(named_type):
        return TypeCategory.INTERFACE
    if is_union_type(named_type):
        return TypeCategory.UNION
    if is_enum_type(named_type):
        return TypeCategory.ENUM
    if is_input_object_type(named_type):
        return TypeCategory.INPUT
    if is_scalar_type(named_type):
        return TypeCategory.SCALAR
    raise ValueError(f"Unsupported GraphQL type: {named_type}")


def to_type_reference(graphql_type: GraphQLType, is_required: bool = False) -> TypeReference:
    """Convert a (possibly wrapped) graphql-core type into a TypeReference, keeping every modifier."""
    if is_non_null_type(graphql_type):
        return to_type_reference(cast(GraphQLNonNull[Any], graphql_type).of_type, is_required=True)

    named_type = get_named_type(graphql_type)
    category = get_type_category(named_type)

    if is_list_type(graphql_type):
        item_type = to_type_reference(cast(GraphQLList[Any], graphql_type).of_type)
        return TypeReference(named_type.name, category, is_required, item_type)

    return TypeReference(named_type.name, category, is_required)


def _build_field(name: str, graphql_field: GraphQLField) -> Field:
    arguments = tuple(
        Argument(name=arg_name, type=to_type_reference(arg.type)) for arg_name, arg in graphql_field.args.items()
    )
    return Field(name=name, type=to_type_reference(graphql_field.type), arguments=arguments)


def _build_input_field(name: str, input_field: GraphQLInputField) -> Field:
    return Field(name=name, type=to_type_reference(input_field.type))


def build_schema_listing(schema: GraphQLSchema) -> SchemaListing:
    """
    Project a graphql-core schema into the flat listing used by the generators.

    Scalars and introspection types are left out; everything else keeps the ordering of
    `schema.type_map`.

    Args:
        schema: The GraphQL schema

    Returns:
        SchemaListing: objects, interfaces, unions, enums and input types of the schema
    """
    objects: list[ObjectType] = []
    interfaces: list[InterfaceType] = []
    unions: list[UnionType] = []
    enums: list[EnumType] = []
    inputs: list[InputType] = []

    for type_def in schema.type_map.values():
        if is_introspection_type(type_def.name):
            continue

        if is_object_type(type_def):
            object_type = cast(GraphQLObjectType, type_def)
            objects.append(
                ObjectType(
                    name=object_type.name,
                    fields=tuple(_build_field(name, f) for name, f in object_type.fields.items()),
                    implements=tuple(interface.name for interface in object_type.interfaces),
                )
            )
        elif is_interface_type(type_def):
            interface_type = cast(GraphQLInterfaceType, type_def)
            implementations = schema.get_implementations(interface_type)
            interfaces.append(
                InterfaceType(
                    name=interface_type.name,
                    fields=tuple(_build_field(name, f) for name, f in interface_type.fields.items()),
                    implementors=tuple(implementor.name for implementor in implementations.objects),
                )
            )
        elif is_union_type(type_def):
            union_type = cast(GraphQLUnionType, type_def)
            unions.append(UnionType(name=union_type.name, members=tuple(member.name for member in union_type.types)))
        elif is_enum_type(type_def):
            enum_type = cast(GraphQLEnumType, type_def)
            enums.append(EnumType(name=enum_type.name, values=tuple(enum_type.values)))
        elif is_input_object_type(type_def):
            input_type = cast(GraphQLInputObjectType, type_def)
            inputs.append(
                InputType(
                    name=input_type.name,
                    fields=tuple(_build_input_field(name, f) for name, f in input_type.fields.items()),
                )
            )

    log.debug(
        f"Schema listing: {len(objects)} objects, {len(interfaces)} interfaces, {len(unions)} unions, "
        f"{len(enums)} enums, {len(inputs)} input types"
    )

    return SchemaListing(
        objects=tuple(objects),
        interfaces=tuple(interfaces),
        unions=tuple(unions),
        enums=tuple(enums),
        inputs=tuple(inputs),
    )


def load_schema_listing(graphql_schema_paths: list[Path]) -> SchemaListing:
    return build_schema_listing(load_schema(graphql_schema_paths))
