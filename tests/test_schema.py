"""Tests for the SDL parser and the type schema."""

import pytest

from fragment_factories.errors import SchemaError
from fragment_factories.parsing import SchemaParser
from fragment_factories.schema import TypeSchema
from fragment_factories.types import (
    EnumTypeDefinition,
    InputObjectTypeDefinition,
    InterfaceTypeDefinition,
    ListType,
    NamedType,
    NonNullType,
    ObjectTypeDefinition,
    ScalarTypeDefinition,
    UnionTypeDefinition,
    is_list_type,
    unwrap_type,
)

SDL = '''
"""A person using the app."""
type User implements Node & Entity @key(fields: "id") {
  id: ID!
  "Primary address"
  email: String!
  tags: [String!]
  friends(first: Int = 10, after: String): [User!]!
  role: Role!
}

interface Node { id: ID! }
interface Entity { id: ID! }

enum Role {
  ADMIN
  MEMBER @deprecated(reason: "use GUEST")
}

scalar DateTime

union SearchResult = User | Post

type Post {
  id: Int!
  title: String
}

input UserFilter {
  role: Role = ADMIN
  limit: Int = 5
}

schema { query: Query }

type Query {
  me: User
  search(term: String!, filter: UserFilter = { limit: 1 }): [SearchResult]
}

extend type User {
  createdAt: DateTime
}

extend enum Role { GUEST }

directive @key(fields: String!) repeatable on OBJECT | INTERFACE
'''


@pytest.fixture(scope="module")
def schema():
    return TypeSchema.load(SDL)


class TestSchemaParser:
    """Tests for SDL parsing."""

    def test_parse_object_type(self):
        """Test parsing an object type with interfaces."""
        parser = SchemaParser()
        parser.build()
        types = parser.parse("type User implements Node { id: ID! name: String }")

        user = types["User"]
        assert isinstance(user, ObjectTypeDefinition)
        assert user.interfaces == ["Node"]
        assert [f.name for f in user.fields] == ["id", "name"]
        assert user.fields[0].type_ref == NonNullType(NamedType("ID"))

    def test_builtin_scalars_present(self):
        """Test that built-in scalars exist without being declared."""
        types = SchemaParser().parse("")

        assert set(types) == {"String", "Int", "Float", "Boolean", "ID"}
        assert all(isinstance(t, ScalarTypeDefinition) and t.builtin for t in types.values())

    def test_keywords_as_field_names(self):
        """Test that keywords are accepted where names are expected."""
        types = SchemaParser().parse("type Event { type: String input: Int on: Boolean query: ID }")

        assert [f.name for f in types["Event"].fields] == ["type", "input", "on", "query"]

    def test_legacy_comma_separated_interfaces(self):
        """Test the legacy interface list without ampersands."""
        types = SchemaParser().parse("type A implements B, C { id: ID }")
        assert types["A"].interfaces == ["B", "C"]

    def test_leading_pipe_in_union(self):
        """Test a union whose member list starts with a pipe."""
        types = SchemaParser().parse("union U =\n  | A\n  | B")
        assert types["U"].members == ["A", "B"]

    def test_syntax_error(self):
        """Test that invalid SDL raises SchemaError."""
        with pytest.raises(SchemaError, match="Syntax error"):
            SchemaParser().parse("type User { id: }")

    def test_lexer_error_becomes_schema_error(self):
        """Test that lexer failures surface as SchemaError."""
        with pytest.raises(SchemaError, match="Illegal character"):
            SchemaParser().parse("type User { id: ID% }")

    def test_duplicate_type(self):
        """Test that defining a type twice is rejected."""
        with pytest.raises(SchemaError, match="already defined"):
            SchemaParser().parse("type A { id: ID } type A { id: ID }")

    def test_builtin_scalar_may_be_redeclared(self):
        """Test that redeclaring a built-in scalar is allowed."""
        types = SchemaParser().parse("scalar String")
        assert not types["String"].builtin

    def test_extend_unknown_type(self):
        """Test that extending an undefined type is rejected."""
        with pytest.raises(SchemaError, match="unknown type 'Ghost'"):
            SchemaParser().parse("extend type Ghost { id: ID }")

    def test_extend_wrong_kind(self):
        """Test that an extension must match the kind of its target."""
        with pytest.raises(SchemaError, match="not a"):
            SchemaParser().parse("enum Role { A } extend type Role { id: ID }")


class TestTypeSchema:
    """Tests for schema lookups."""

    def test_type_kinds(self, schema):
        assert isinstance(schema.get_type("User"), ObjectTypeDefinition)
        assert isinstance(schema.get_type("Node"), InterfaceTypeDefinition)
        assert isinstance(schema.get_type("Role"), EnumTypeDefinition)
        assert isinstance(schema.get_type("DateTime"), ScalarTypeDefinition)
        assert isinstance(schema.get_type("SearchResult"), UnionTypeDefinition)
        assert isinstance(schema.get_type("UserFilter"), InputObjectTypeDefinition)

    def test_interfaces_in_order(self, schema):
        assert schema.get_type("User").interfaces == ["Node", "Entity"]

    def test_union_members(self, schema):
        assert schema.get_type("SearchResult").members == ["User", "Post"]

    @pytest.mark.parametrize(
        "name, expected",
        [("User", ["User"]), ("SearchResult", ["User", "Post"]), ("Entity", ["User"]), ("Role", ["Role"])],
    )
    def test_possible_types(self, schema, name, expected):
        assert schema.possible_types(name) == expected

    def test_concrete_type_name(self, schema):
        assert schema.concrete_type_name(schema.get_type("SearchResult")) == "User"
        assert schema.concrete_type_name(schema.get_type("Post")) == "Post"

    def test_field_type_signature(self, schema):
        """Test that wrappers are kept in the returned signature."""
        tags = schema.get_field_type("User", "tags")
        friends = schema.get_field_type("User", "friends")

        assert tags == ListType(NonNullType(NamedType("String")))
        assert str(tags) == "[String!]"
        assert str(friends) == "[User!]!"

    def test_extension_fields_appended(self, schema):
        """Test that extensions add fields after the declared ones."""
        fields = [f.name for f in schema.get_type("User").fields]
        assert fields[-1] == "createdAt"
        assert schema.get_field_type("User", "createdAt") == NamedType("DateTime")

    def test_enum_values_in_declaration_order(self, schema):
        assert schema.enum_values("Role") == ["ADMIN", "MEMBER", "GUEST"]

    def test_enum_values_of_non_enum(self, schema):
        with pytest.raises(SchemaError, match="not an enum"):
            schema.enum_values("User")

    def test_missing_type(self, schema):
        assert schema.get_type("Ghost") is None
        assert "Ghost" not in schema
        with pytest.raises(SchemaError, match="Type 'Ghost' not found"):
            schema.get_or_raise("Ghost")

    def test_missing_field(self, schema):
        with pytest.raises(SchemaError, match="Field 'nickname' not found on type 'User'"):
            schema.get_field_type("User", "nickname")

    def test_field_of_scalar(self, schema):
        with pytest.raises(SchemaError, match="has no fields"):
            schema.get_field_type("String", "length")

    def test_named_type(self, schema):
        """Test resolving a signature to its named definition."""
        type_def = schema.named_type(schema.get_field_type("User", "friends"))
        assert type_def is schema.get_type("User")

    def test_from_file_missing(self, tmp_path):
        """Test that an unreadable schema file raises SchemaError."""
        with pytest.raises(SchemaError, match="Cannot read schema file"):
            TypeSchema.from_file(tmp_path / "schema.graphql")

    def test_from_file(self, tmp_path):
        path = tmp_path / "schema.graphql"
        path.write_text("type A { id: ID! }", encoding="utf-8")

        schema = TypeSchema.from_file(path)
        assert "A" in schema
        assert "String" in schema.list_types()


class TestTypeRefHelpers:
    def test_unwrap_type(self):
        ref = NonNullType(ListType(NonNullType(NamedType("User"))))
        assert unwrap_type(ref) == NamedType("User")

    @pytest.mark.parametrize(
        "ref, expected",
        [
            (NamedType("String"), False),
            (NonNullType(NamedType("String")), False),
            (ListType(NamedType("String")), True),
            (NonNullType(ListType(NonNullType(NamedType("String")))), True),
            (ListType(ListType(NamedType("Int"))), True),
        ],
    )
    def test_is_list_type(self, ref, expected):
        assert is_list_type(ref) is expected
