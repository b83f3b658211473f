"""Abstract type system that the generators consume.

The listing is built once per run (see `resolvergen.source.loader`) and is never mutated afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum


class TypeCategory(str, Enum):
    SCALAR = "scalar"
    OBJECT = "object"
    INTERFACE = "interface"
    UNION = "union"
    ENUM = "enum"
    INPUT = "input"


@dataclass(frozen=True)
class TypeReference:
    """
    Reference to a named type, possibly wrapped in list and non-null modifiers.

    A list reference carries its element reference in `of_type`; `name` and `category`
    always describe the innermost named type.
    """

    name: str
    category: TypeCategory
    is_required: bool = False
    of_type: "TypeReference | None" = None

    @property
    def is_list(self) -> bool:
        return self.of_type is not None

    @property
    def is_scalar(self) -> bool:
        return self.category == TypeCategory.SCALAR

    @property
    def is_enum(self) -> bool:
        return self.category == TypeCategory.ENUM

    @property
    def is_input(self) -> bool:
        return self.category == TypeCategory.INPUT

    @property
    def is_interface(self) -> bool:
        return self.category == TypeCategory.INTERFACE

    @property
    def is_union(self) -> bool:
        return self.category == TypeCategory.UNION


@dataclass(frozen=True)
class Argument:
    name: str
    type: TypeReference


@dataclass(frozen=True)
class Field:
    name: str
    type: TypeReference
    arguments: tuple[Argument, ...] = ()


@dataclass(frozen=True)
class ObjectType:
    name: str
    fields: tuple[Field, ...] = ()
    implements: tuple[str, ...] = ()
    category: TypeCategory = field(default=TypeCategory.OBJECT, init=False)


@dataclass(frozen=True)
class InterfaceType:
    name: str
    fields: tuple[Field, ...] = ()
    implementors: tuple[str, ...] = ()
    category: TypeCategory = field(default=TypeCategory.INTERFACE, init=False)


@dataclass(frozen=True)
class UnionType:
    name: str
    members: tuple[str, ...] = ()
    category: TypeCategory = field(default=TypeCategory.UNION, init=False)


@dataclass(frozen=True)
class EnumType:
    name: str
    values: tuple[str, ...] = ()
    category: TypeCategory = field(default=TypeCategory.ENUM, init=False)


@dataclass(frozen=True)
class InputType:
    name: str
    fields: tuple[Field, ...] = ()
    category: TypeCategory = field(default=TypeCategory.INPUT, init=False)


FieldedType = ObjectType | InterfaceType | InputType
ResolvableType = ObjectType | InterfaceType | UnionType


@dataclass(frozen=True)
class SchemaListing:
    """Flat listing of every user-defined entity in a schema, grouped by category."""

    objects: tuple[ObjectType, ...] = ()
    interfaces: tuple[InterfaceType, ...] = ()
    unions: tuple[UnionType, ...] = ()
    enums: tuple[EnumType, ...] = ()
    inputs: tuple[InputType, ...] = ()

    @property
    def resolvable_types(self) -> tuple[ResolvableType, ...]:
        """Objects, interfaces and unions, in that order."""
        return (*self.objects, *self.interfaces, *self.unions)
