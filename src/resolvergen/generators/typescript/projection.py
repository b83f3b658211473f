from resolvergen.generators.associations import Associations
from resolvergen.generators.typescript.declarations import InterfaceMember
from resolvergen.models import ModelMap
from resolvergen.source.types import Argument, Field, TypeCategory, TypeReference

GRAPHQL_SCALAR_TO_TYPESCRIPT = {
    # Built-in GraphQL scalars
    "String": "string",
    "ID": "string",
    "Int": "number",
    "Float": "number",
    "Boolean": "boolean",
    # Common custom scalars
    "DateTime": "string",
}

DEFAULT_SCALAR_TYPE = "string"


def union(types: list[str]) -> str:
    if not types:
        return "never"
    return " | ".join(types)


def resolver_return_type(return_type: str) -> str:
    """A resolver may return its value directly or a promise of it."""
    return f"{return_type} | Promise<{return_type}>"


def upper_first(name: str) -> str:
    return name[:1].upper() + name[1:]


def render_string_constant(value: str) -> str:
    return f'"{value}"'


def get_scalar_type(scalar_name: str) -> str:
    return GRAPHQL_SCALAR_TO_TYPESCRIPT.get(scalar_name, DEFAULT_SCALAR_TYPE)


class TypeProjector:
    """
    Project schema type references onto TypeScript type expressions.

    Objects become their mapped model, interfaces and unions the union of their members' models,
    enums and input types the locally declared type of the same name, and scalars a primitive.
    List and nullable modifiers are mirrored recursively as `Array<...>` and `... | null`.
    """

    def __init__(self, model_map: ModelMap, associations: Associations) -> None:
        self.model_map = model_map
        self.associations = associations

    def model_union(self, type_names: list[str]) -> str:
        return union([self.model_map.model_name(type_name) for type_name in type_names])

    def named_type(self, type_ref: TypeReference) -> str:
        category = type_ref.category
        if category == TypeCategory.SCALAR:
            return get_scalar_type(type_ref.name)
        if category in (TypeCategory.ENUM, TypeCategory.INPUT):
            return type_ref.name
        if category == TypeCategory.INTERFACE:
            return self.model_union(list(self.associations.implementors_by_interface[type_ref.name]))
        if category == TypeCategory.UNION:
            return self.model_union(list(self.associations.members_by_union[type_ref.name]))
        return self.model_map.model_name(type_ref.name)

    def project(self, type_ref: TypeReference) -> str:
        if type_ref.of_type is not None:
            type_expr = f"Array<{self.project(type_ref.of_type)}>"
        else:
            type_expr = self.named_type(type_ref)

        if type_ref.is_required:
            return type_expr
        return f"{type_expr} | null"

    def member(self, field: Field | Argument) -> InterfaceMember:
        """Project a field or argument onto an interface member, optional unless it is non-null."""
        return InterfaceMember(name=field.name, type=self.project(field.type), optional=not field.type.is_required)
