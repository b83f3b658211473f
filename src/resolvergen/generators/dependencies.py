"""Work out which external models and local enums a generated unit must import."""

from resolvergen.generators.associations import Associations
from resolvergen.models import ContextDefinition, ModelMap, group_models_by_import_path
from resolvergen.source.types import Field, InterfaceType, ObjectType, ResolvableType, UnionType


def _field_type_models(field: Field, associations: Associations) -> list[str]:
    if field.type.is_interface:
        return list(associations.implementors_by_interface[field.type.name])
    if field.type.is_union:
        return list(associations.members_by_union[field.type.name])
    return [field.type.name]


def get_possible_types(object_type: ObjectType, associations: Associations) -> list[str]:
    """
    Object types a value checked by `__isTypeOf` on `object_type` may belong to.

    This is every implementor of each interface the type conforms to, followed by every member of each
    union the type belongs to, without duplicates.
    """
    possible_types: list[str] = []
    for interface_name in object_type.implements:
        possible_types.extend(associations.implementors_by_interface[interface_name])
    for union_name in associations.unions_containing(object_type.name):
        possible_types.extend(associations.members_by_union[union_name])
    return list(dict.fromkeys(possible_types))


def get_abstract_members(type_def: InterfaceType | UnionType, associations: Associations) -> list[str]:
    if isinstance(type_def, InterfaceType):
        return list(associations.implementors_by_interface[type_def.name])
    return list(associations.members_by_union[type_def.name])


def get_needed_models(type_def: ResolvableType, associations: Associations) -> list[str]:
    """
    Names of every schema entity whose model the unit generated for `type_def` may reference.

    The list is ordered by discovery and deduplicated. Names without a model (scalars, enums, unmapped
    root types) are kept here and dropped when the imports are grouped.
    """
    needed_models: list[str] = [type_def.name]

    if isinstance(type_def, UnionType):
        needed_models.extend(associations.members_by_union[type_def.name])
        return list(dict.fromkeys(needed_models))

    if isinstance(type_def, InterfaceType):
        needed_models.extend(associations.implementors_by_interface[type_def.name])

    for field in type_def.fields:
        needed_models.extend(_field_type_models(field, associations))
        needed_models.extend(arg.type.name for arg in field.arguments)

    for input_name in associations.input_types_per_object[type_def.name]:
        for input_field in associations.input_types_by_name[input_name].fields:
            needed_models.extend(_field_type_models(input_field, associations))

    if isinstance(type_def, ObjectType):
        needed_models.extend(get_possible_types(type_def, associations))

    return list(dict.fromkeys(needed_models))


def get_referenced_enums(type_def: ResolvableType, associations: Associations) -> list[str]:
    """Enums used by the fields and arguments of `type_def` and by the input types it renders."""
    if isinstance(type_def, UnionType):
        return []

    enum_names = list(associations.enums_by_object_type[type_def.name])
    for input_name in associations.input_types_per_object[type_def.name]:
        enum_names.extend(associations.enums_by_object_type[input_name])
    return list(dict.fromkeys(enum_names))


def get_model_imports(
    needed_models: list[str],
    model_map: ModelMap,
    context: ContextDefinition | None,
) -> dict[str, list[str]]:
    """
    Group the needed models by the module that declares them.

    Enum-backed and unmapped names are skipped. When a context is configured, its type is appended to
    the group of its own module.

    Returns:
        dict[str, list[str]]: module path -> imported names, both in first-discovery order
    """
    imports = group_models_by_import_path(model_map.importable(needed_models))

    if context:
        context_imports = imports.setdefault(context.path, [])
        if context.name not in context_imports:
            context_imports.append(context.name)

    return imports
