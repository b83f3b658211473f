from resolvergen.generators.associations import Associations
from resolvergen.generators.dependencies import get_abstract_members, get_possible_types
from resolvergen.generators.typescript.declarations import (
    DefaultResolver,
    EntityDeclarations,
    InterfaceDeclaration,
    InterfaceMember,
    TypeAliasDeclaration,
)
from resolvergen.generators.typescript.projection import (
    TypeProjector,
    render_string_constant,
    resolver_return_type,
    union,
    upper_first,
)
from resolvergen.models import ContextDefinition, ModelMap, get_context_name
from resolvergen.source.types import (
    Field,
    InterfaceType,
    ObjectType,
    ResolvableType,
    SchemaListing,
    UnionType,
)

SUBSCRIPTION_TYPE = "Subscription"
RESOLVE_INFO_TYPE = "GraphQLResolveInfo"
IS_TYPE_OF_FN_TYPE = "GraphQLIsTypeOfFn"
RESOLVER_MAP_NAME = "Resolvers"
DEFAULT_RESOLVERS_NAME = "defaultResolvers"
EMPTY_ARGS_TYPE = "{}"
EMPTY_PARENT_TYPE = "undefined"


def args_interface_name(field: Field) -> str:
    return f"Args{upper_first(field.name)}"


def resolver_alias_name(field: Field) -> str:
    return f"{upper_first(field.name)}Resolver"


def resolver_interface_name(type_name: str) -> str:
    return f"I{type_name}"


def resolvers_namespace(type_name: str) -> str:
    return f"{type_name}Resolvers"


class TypeProjectionRenderer:
    """
    Build the resolver declarations for objects, interfaces and unions.

    For an object type this covers the input types reachable from its arguments, one `Args*`
    interface per field with arguments, one `*Resolver` alias per field and the aggregate `I<Type>`
    interface, which also carries `__isTypeOf` when the type is a member of an interface or union.
    Interfaces get the same declarations with optional field resolvers and a required
    `__resolveType`; unions only get an optional `__resolveType`.
    """

    def __init__(
        self,
        model_map: ModelMap,
        associations: Associations,
        context: ContextDefinition | None = None,
        default_resolvers_enabled: bool = False,
    ) -> None:
        self.model_map = model_map
        self.associations = associations
        self.context_name = get_context_name(context)
        self.default_resolvers_enabled = default_resolvers_enabled
        self.projector = TypeProjector(model_map, associations)

    def render(self, type_def: ResolvableType) -> EntityDeclarations:
        if isinstance(type_def, UnionType):
            return self.render_union(type_def)
        if isinstance(type_def, InterfaceType):
            return self.render_interface(type_def)
        return self.render_object(type_def)

    def render_object(self, object_type: ObjectType) -> EntityDeclarations:
        members = [
            InterfaceMember(name=field.name, type=resolver_alias_name(field)) for field in object_type.fields
        ]
        is_type_of = self._build_is_type_of(object_type)
        if is_type_of:
            members.append(is_type_of)

        return EntityDeclarations(
            type_name=object_type.name,
            default_resolvers=self._build_default_resolvers(object_type) if self.default_resolvers_enabled else None,
            input_interfaces=self._build_input_interfaces(object_type),
            args_interfaces=self._build_args_interfaces(object_type),
            resolver_aliases=self._build_resolver_aliases(object_type),
            resolver_interface=InterfaceDeclaration(name=resolver_interface_name(object_type.name), members=members),
        )

    def render_interface(self, interface_type: InterfaceType) -> EntityDeclarations:
        members = [
            InterfaceMember(name=field.name, type=resolver_alias_name(field), optional=True)
            for field in interface_type.fields
        ]
        members.append(InterfaceMember(name="__resolveType", type=self.render_resolve_type(interface_type)))

        return EntityDeclarations(
            type_name=interface_type.name,
            input_interfaces=self._build_input_interfaces(interface_type),
            args_interfaces=self._build_args_interfaces(interface_type),
            resolver_aliases=self._build_resolver_aliases(interface_type),
            resolver_interface=InterfaceDeclaration(name=resolver_interface_name(interface_type.name), members=members),
        )

    def render_union(self, union_type: UnionType) -> EntityDeclarations:
        resolve_type = InterfaceMember(
            name="__resolveType",
            type=self.render_resolve_type(union_type),
            optional=True,
        )
        return EntityDeclarations(
            type_name=union_type.name,
            resolver_interface=InterfaceDeclaration(
                name=resolver_interface_name(union_type.name),
                members=[resolve_type],
            ),
        )

    def render_resolve_type(self, abstract_type: InterfaceType | UnionType) -> str:
        """Signature of `__resolveType`: a possible model in, the name of its object type out."""
        possible_types = get_abstract_members(abstract_type, self.associations)
        type_names = union([render_string_constant(type_name) for type_name in possible_types])
        return (
            f"(value: {self.projector.model_union(possible_types)}, context: {self.context_name}, "
            f"info: {RESOLVE_INFO_TYPE}) => {resolver_return_type(type_names)}"
        )

    def render_field_resolver(self, field: Field, type_def: ObjectType | InterfaceType) -> str:
        """
        Type of the resolver for one field.

        Fields of `Subscription` need a `subscribe` function producing an async iterator and may add a
        `resolve` step. Any other field accepts either a plain resolver function or an object pairing it
        with the query fragment it requires.
        """
        if isinstance(type_def, InterfaceType):
            parent = self.projector.model_union(list(self.associations.implementors_by_interface[type_def.name]))
        else:
            parent = self.model_map.model_name(type_def.name, empty_type=EMPTY_PARENT_TYPE)

        args = args_interface_name(field) if field.arguments else EMPTY_ARGS_TYPE
        params = f"(parent: {parent}, args: {args}, ctx: {self.context_name}, info: {RESOLVE_INFO_TYPE})"
        return_type = self.projector.project(field.type)

        if type_def.name == SUBSCRIPTION_TYPE:
            return (
                f"{{ subscribe: {params} => {resolver_return_type(f'AsyncIterator<{return_type}>')}; "
                f"resolve?: {params} => {resolver_return_type(return_type)} }}"
            )

        resolve_func = f"{params} => {resolver_return_type(return_type)}"
        delegated_resolver = f"{{ fragment: string; resolve: {resolve_func} }}"
        return union([f"({resolve_func})", delegated_resolver])

    def render_resolver_map(self, listing: SchemaListing) -> InterfaceDeclaration:
        """The root `Resolvers` interface: required for objects, optional for interfaces and unions."""
        members = [
            InterfaceMember(
                name=type_def.name,
                type=f"{resolvers_namespace(type_def.name)}.{resolver_interface_name(type_def.name)}",
                optional=not isinstance(type_def, ObjectType),
            )
            for type_def in listing.resolvable_types
        ]
        return InterfaceDeclaration(name=RESOLVER_MAP_NAME, members=members)

    def has_polymorphic_objects(self, type_def: ResolvableType) -> bool:
        return isinstance(type_def, ObjectType) and bool(get_possible_types(type_def, self.associations))

    def _build_is_type_of(self, object_type: ObjectType) -> InterfaceMember | None:
        possible_types = get_possible_types(object_type, self.associations)
        if not possible_types:
            return None
        return InterfaceMember(
            name="__isTypeOf",
            type=f"{IS_TYPE_OF_FN_TYPE}<{self.projector.model_union(possible_types)}, {self.context_name}>",
            optional=True,
        )

    def _build_input_interfaces(self, type_def: ObjectType | InterfaceType) -> list[InterfaceDeclaration]:
        input_interfaces = []
        for input_name in self.associations.input_types_per_object[type_def.name]:
            input_type = self.associations.input_types_by_name[input_name]
            input_interfaces.append(
                InterfaceDeclaration(
                    name=input_type.name,
                    members=[self.projector.member(input_field) for input_field in input_type.fields],
                )
            )
        return input_interfaces

    def _build_args_interfaces(self, type_def: ObjectType | InterfaceType) -> list[InterfaceDeclaration]:
        return [
            InterfaceDeclaration(
                name=args_interface_name(field),
                members=[self.projector.member(arg) for arg in field.arguments],
            )
            for field in type_def.fields
            if field.arguments
        ]

    def _build_resolver_aliases(self, type_def: ObjectType | InterfaceType) -> list[TypeAliasDeclaration]:
        return [
            TypeAliasDeclaration(name=resolver_alias_name(field), type=self.render_field_resolver(field, type_def))
            for field in type_def.fields
        ]

    def _build_default_resolvers(self, object_type: ObjectType) -> list[DefaultResolver] | None:
        model = self.model_map.get(object_type.name)
        if model is None:
            return None

        field_names = {field.name for field in object_type.fields}
        return [
            DefaultResolver(field_name=model_field.name, parent_type=model.name, optional=model_field.optional)
            for model_field in model.fields
            if model_field.name in field_names
        ]
