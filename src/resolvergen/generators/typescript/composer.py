from collections.abc import Callable

from jinja2 import Environment, PackageLoader, select_autoescape

from resolvergen import log
from resolvergen.formatting import FormattingError, FormatterUnavailableError
from resolvergen.generators.associations import build_associations
from resolvergen.generators.dependencies import get_model_imports, get_needed_models, get_referenced_enums
from resolvergen.generators.typescript.declarations import CodeFile, ImportDeclaration, TypeAliasDeclaration
from resolvergen.generators.typescript.projection import render_string_constant, union
from resolvergen.generators.typescript.renderer import (
    IS_TYPE_OF_FN_TYPE,
    RESOLVE_INFO_TYPE,
    RESOLVER_MAP_NAME,
    TypeProjectionRenderer,
)
from resolvergen.models import ContextDefinition, ModelMap, get_context_name
from resolvergen.source.types import ResolvableType, SchemaListing

CodeFormatter = Callable[[str], str]

ENUMS_PATH = "enums.ts"
INDEX_PATH = "index.ts"


class IResolversAugmentation:
    """
    Module augmentation making the `Resolvers` map assignable to graphql-tools' `IResolvers`.

    `IResolvers` is an index type, which the strictly typed map does not satisfy, so the
    interface is merged with ours instead. `@ts-ignore` keeps projects without graphql-tools compiling.
    """

    template_name = "iresolvers_augmentation.j2"

    def render(self, env: Environment) -> str:
        return env.get_template(self.template_name).render(resolver_map_name=RESOLVER_MAP_NAME)


class OutputComposer:
    """
    Assemble the generated TypeScript units.

    One forced unit per object, interface and union (a header with its imports followed by the rendered
    declarations), an `enums.ts` unit when the schema has enums and an `index.ts` unit holding the
    root `Resolvers` map. The last two may be edited by hand, so they are not forced.
    """

    def __init__(
        self,
        listing: SchemaListing,
        model_map: ModelMap,
        context: ContextDefinition | None = None,
        default_resolvers_enabled: bool = False,
        iresolvers_augmentation_enabled: bool = False,
        formatter: CodeFormatter | None = None,
    ) -> None:
        self.listing = listing
        self.model_map = model_map
        self.context = context
        self.formatter = formatter
        self.augmentation = IResolversAugmentation() if iresolvers_augmentation_enabled else None

        self.associations = build_associations(listing)
        self.renderer = TypeProjectionRenderer(model_map, self.associations, context, default_resolvers_enabled)

        self.env = Environment(
            loader=PackageLoader("resolvergen.generators.typescript", "templates"),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def compose(self) -> list[CodeFile]:
        files = [self.compose_entity(type_def) for type_def in self.listing.resolvable_types]

        if self.listing.enums:
            files.append(self.compose_enums())

        files.append(self.compose_index())
        return files

    def compose_entity(self, type_def: ResolvableType) -> CodeFile:
        log.debug(f"Rendering resolver types for {type_def.category.value} '{type_def.name}'")

        needed_models = get_needed_models(type_def, self.associations)
        model_imports = get_model_imports(needed_models, self.model_map, self.context)

        graphql_imports = [RESOLVE_INFO_TYPE]
        if self.renderer.has_polymorphic_objects(type_def):
            graphql_imports.append(IS_TYPE_OF_FN_TYPE)

        code = self.env.get_template("entity.j2").render(
            graphql_imports=graphql_imports,
            model_imports=[ImportDeclaration(names=names, path=path) for path, names in model_imports.items()],
            enums=get_referenced_enums(type_def, self.associations),
            context_placeholder=self.context is None,
            context_name=get_context_name(self.context),
            entity=self.renderer.render(type_def),
        )
        return CodeFile(path=f"{type_def.name}.ts", force=True, code=self.format(code))

    def compose_enums(self) -> CodeFile:
        declarations = [
            TypeAliasDeclaration(
                name=enum_type.name,
                type=union([render_string_constant(value) for value in enum_type.values]),
            )
            for enum_type in self.listing.enums
        ]
        code = self.env.get_template("enums.j2").render(enums=declarations)
        return CodeFile(path=ENUMS_PATH, force=False, code=self.format(code))

    def compose_index(self) -> CodeFile:
        code = self.env.get_template("index.j2").render(
            type_names=[type_def.name for type_def in self.listing.resolvable_types],
            resolver_map=self.renderer.render_resolver_map(self.listing),
            augmentation=self.augmentation.render(self.env) if self.augmentation else None,
        )
        return CodeFile(path=INDEX_PATH, force=False, code=self.format(code))

    def format(self, code: str) -> str:
        """
        Run the formatter, falling back to the unformatted code when it fails.

        A formatter that cannot be started is reported once and not called again for this run.
        """
        if self.formatter is None:
            return code

        try:
            return self.formatter(code)
        except FormatterUnavailableError as e:
            log.warning(f"Formatter unavailable, generated code is left unformatted: {e}")
            self.formatter = None
        except FormattingError as e:
            log.warning(f"There is a syntax error in generated code, unformatted code printed, error: {e}")
        except Exception as e:
            log.warning(f"Formatting failed, unformatted code printed, error: {e!r}")
        return code
