"""Lookup indices derived from a schema listing.

All indices are built once from the listing and exposed as read-only mappings. A missing key is a
contract violation of the caller and surfaces as a plain KeyError.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from resolvergen.source.types import FieldedType, InputType, SchemaListing


@dataclass(frozen=True)
class Associations:
    input_types_by_name: Mapping[str, InputType]
    input_types_per_object: Mapping[str, tuple[str, ...]]
    implementors_by_interface: Mapping[str, tuple[str, ...]]
    members_by_union: Mapping[str, tuple[str, ...]]
    enums_by_object_type: Mapping[str, tuple[str, ...]]

    def unions_containing(self, type_name: str) -> list[str]:
        return [union_name for union_name, members in self.members_by_union.items() if type_name in members]


def _distinct(names: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(names))


def _collect_input_types(type_def: FieldedType, input_types_by_name: Mapping[str, InputType]) -> tuple[str, ...]:
    """Input types reachable from the arguments of `type_def`, following nested input fields."""
    collected: list[str] = []
    pending = [arg.type.name for field in type_def.fields for arg in field.arguments if arg.type.is_input]

    while pending:
        input_name = pending.pop(0)
        if input_name in collected:
            continue
        collected.append(input_name)
        pending.extend(
            input_field.type.name
            for input_field in input_types_by_name[input_name].fields
            if input_field.type.is_input
        )

    return tuple(collected)


def _collect_enums(type_def: FieldedType) -> tuple[str, ...]:
    enum_names: list[str] = []
    for field in type_def.fields:
        if field.type.is_enum:
            enum_names.append(field.type.name)
        enum_names.extend(arg.type.name for arg in field.arguments if arg.type.is_enum)
    return _distinct(enum_names)


def build_associations(listing: SchemaListing) -> Associations:
    """
    Derive the lookup indices used by the dependency resolver and the renderers.

    Args:
        listing: The schema listing

    Returns:
        Associations: input types by name, input types reachable per object/interface, implementors
        per interface, members per union and referenced enums per declaring type
    """
    input_types_by_name = {input_type.name: input_type for input_type in listing.inputs}
    fielded_types: list[FieldedType] = [*listing.objects, *listing.interfaces, *listing.inputs]

    return Associations(
        input_types_by_name=MappingProxyType(input_types_by_name),
        input_types_per_object=MappingProxyType(
            {
                type_def.name: _collect_input_types(type_def, input_types_by_name)
                for type_def in (*listing.objects, *listing.interfaces)
            }
        ),
        implementors_by_interface=MappingProxyType(
            {interface.name: tuple(interface.implementors) for interface in listing.interfaces}
        ),
        members_by_union=MappingProxyType({union.name: tuple(union.members) for union in listing.unions}),
        enums_by_object_type=MappingProxyType({type_def.name: _collect_enums(type_def) for type_def in fielded_types}),
    )
