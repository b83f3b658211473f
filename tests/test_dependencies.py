from resolvergen.generators.associations import build_associations
from resolvergen.generators.dependencies import (
    get_model_imports,
    get_needed_models,
    get_possible_types,
    get_referenced_enums,
)
from resolvergen.models import ContextDefinition, ModelDefinition, ModelMap
from resolvergen.source.types import InterfaceType, ObjectType, SchemaListing, UnionType
from tests.conftest import listing_from_sdl, model_map_for

FEED_SCHEMA = """
type Query { feed: [FeedItem!]! node(id: ID!): Node }
interface Node { id: ID! }
type User implements Node { id: ID! }
type Post implements Node { id: ID! author: User! }
type Comment { text: String! }
union FeedItem = Post | Comment
"""


def get_object(listing: SchemaListing, name: str) -> ObjectType:
    return next(o for o in listing.objects if o.name == name)


class TestNeededModels:
    def test_object_includes_itself_fields_and_arguments(self) -> None:
        listing = listing_from_sdl(
            """
            type Query { user: User }
            type User { id: ID! posts(limit: Int): [Post!]! }
            type Post { id: ID! }
            """
        )
        associations = build_associations(listing)

        assert get_needed_models(get_object(listing, "User"), associations) == ["User", "ID", "Post", "Int"]

    def test_interface_and_union_fields_expand_to_members(self) -> None:
        listing = listing_from_sdl(FEED_SCHEMA)
        associations = build_associations(listing)

        needed = get_needed_models(get_object(listing, "Query"), associations)

        assert needed == ["Query", "Post", "Comment", "User", "ID"]
        assert "FeedItem" not in needed
        assert "Node" not in needed

    def test_conformed_interfaces_add_other_implementors(self) -> None:
        listing = listing_from_sdl(FEED_SCHEMA)
        associations = build_associations(listing)

        needed = get_needed_models(get_object(listing, "User"), associations)

        assert needed == ["User", "ID", "Post"]

    def test_interface_and_union_units(self) -> None:
        listing = listing_from_sdl(FEED_SCHEMA)
        associations = build_associations(listing)
        node: InterfaceType = listing.interfaces[0]
        feed_item: UnionType = listing.unions[0]

        assert get_needed_models(node, associations) == ["Node", "User", "Post", "ID"]
        assert get_needed_models(feed_item, associations) == ["FeedItem", "Post", "Comment"]


class TestPossibleTypes:
    def test_interface_implementors(self) -> None:
        listing = listing_from_sdl(FEED_SCHEMA)
        associations = build_associations(listing)

        assert get_possible_types(get_object(listing, "User"), associations) == ["User", "Post"]

    def test_interface_and_union_membership_are_combined(self) -> None:
        listing = listing_from_sdl(FEED_SCHEMA)
        associations = build_associations(listing)

        assert get_possible_types(get_object(listing, "Post"), associations) == ["User", "Post", "Comment"]
        assert get_possible_types(get_object(listing, "Comment"), associations) == ["Post", "Comment"]

    def test_plain_object_has_no_possible_types(self) -> None:
        listing = listing_from_sdl(FEED_SCHEMA)
        associations = build_associations(listing)

        assert get_possible_types(get_object(listing, "Query"), associations) == []


class TestReferencedEnums:
    def test_enums_of_fields_arguments_and_input_types(self, blog_listing: SchemaListing) -> None:
        associations = build_associations(blog_listing)

        assert get_referenced_enums(get_object(blog_listing, "User"), associations) == ["Role"]
        assert get_referenced_enums(get_object(blog_listing, "Query"), associations) == ["Role"]
        assert get_referenced_enums(get_object(blog_listing, "Mutation"), associations) == ["PostStatus"]
        assert get_referenced_enums(blog_listing.unions[0], associations) == []


class TestModelImports:
    def test_models_are_grouped_by_path_in_discovery_order(self) -> None:
        model_map = ModelMap(
            {
                "User": ModelDefinition(name="UserModel", path="../models/user"),
                "Post": ModelDefinition(name="Post", path="../models/post"),
                "Comment": ModelDefinition(name="Comment", path="../models/post"),
            }
        )

        imports = get_model_imports(["Comment", "ID", "User", "Post", "Comment"], model_map, None)

        assert imports == {"../models/post": ["Comment", "Post"], "../models/user": ["UserModel"]}
        assert list(imports) == ["../models/post", "../models/user"]

    def test_enum_models_are_not_imported(self) -> None:
        model_map = ModelMap(
            {
                "User": ModelDefinition(name="User", path="../models"),
                "Role": ModelDefinition(name="Role", path="../models", enum=True),
            }
        )

        assert get_model_imports(["User", "Role"], model_map, None) == {"../models": ["User"]}

    def test_context_is_appended_to_its_module(self) -> None:
        model_map = model_map_for("User")

        same_path = get_model_imports(["User"], model_map, ContextDefinition(name="Ctx", path="../models"))
        other_path = get_model_imports(["User"], model_map, ContextDefinition(name="Ctx", path="../context"))

        assert same_path == {"../models": ["User", "Ctx"]}
        assert other_path == {"../models": ["User"], "../context": ["Ctx"]}

    def test_without_context_or_models(self) -> None:
        assert get_model_imports(["Query", "String"], ModelMap(), None) == {}
