"""Tests for factory emission and naming conventions."""

from pathlib import Path

import pytest

from fragment_factories.emitter import GeneratedFactory, ImportSet, ResolvedField, emit_factory
from fragment_factories.naming import (
    default_object_name,
    enum_member_name,
    factory_name,
    fragment_type_name,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_relative_import,
)


def _factory(**kwargs):
    defaults = dict(
        fragment_name="UserCard",
        type_name="User",
        factory_name="createMockUserCard",
        type_expression="UserCardFragment",
        default_name="defaultUserCard",
    )
    defaults.update(kwargs)
    return GeneratedFactory(**defaults)


class TestImportSet:
    def test_grouped_by_module_in_first_use_order(self):
        imports = ImportSet()
        imports.add("UserCardFragment", "./user-card.fragment.generated")
        imports.add("ids", "../gql/ids")
        imports.add("Role", "../gql/graphql")
        imports.add("Status", "../gql/graphql")
        imports.add("ids", "../gql/ids")

        assert imports.lines() == [
            'import { UserCardFragment } from "./user-card.fragment.generated";',
            'import { ids } from "../gql/ids";',
            'import { Role, Status } from "../gql/graphql";',
        ]
        assert len(imports) == 3


class TestEmitFactory:
    """Tests for emit_factory()."""

    def test_emit_simple_factory(self):
        factory = _factory()
        factory.imports.add("UserCardFragment", "./user-card.fragment.generated")
        factory.imports.add("ids", "../gql/ids")
        factory.fields += [
            ResolvedField("id", "ids.user[0]"),
            ResolvedField("email", '"ada@example.com"'),
        ]

        assert emit_factory(factory) == """\
import { UserCardFragment } from "./user-card.fragment.generated";
import { ids } from "../gql/ids";

const defaultUserCard: UserCardFragment = {
  id: ids.user[0],
  email: "ada@example.com",
  __typename: "User",
};

export const createMockUserCard = (overwrites: Partial<UserCardFragment> = {}): UserCardFragment => ({
  ...defaultUserCard,
  ...overwrites,
});
"""

    def test_spreads_precede_fields_and_typename_is_last(self):
        factory = _factory()
        factory.fields.append(ResolvedField("email", '"x"'))
        factory.add_spread("createMockUserBase")
        factory.add_spread("createMockUserAudit")
        factory.add_spread("createMockUserBase")

        text = emit_factory(factory)
        body = text[text.index("{\n") + 2 : text.index("};")].splitlines()

        assert body == [
            "  ...createMockUserBase(),",
            "  ...createMockUserAudit(),",
            '  email: "x",',
            '  __typename: "User",',
        ]

    def test_inline_factories_declared_before_default(self):
        inline = GeneratedFactory(
            fragment_name="UserCard",
            type_name="User",
            factory_name="createMockUserCardFriend",
            type_expression='NonNullable<UserCardFragment["friend"]>',
            fields=[ResolvedField("id", "ids.user[0]")],
        )
        factory = _factory(inline_factories=[inline])
        factory.fields.append(ResolvedField("friend", "createMockUserCardFriend()"))

        text = emit_factory(factory)

        assert """\
const createMockUserCardFriend = (
  overwrites: Partial<NonNullable<UserCardFragment["friend"]>> = {},
): NonNullable<UserCardFragment["friend"]> => ({
  id: ids.user[0],
  __typename: "User",
  ...overwrites,
});

const defaultUserCard""" in text
        assert text.index("createMockUserCardFriend = (") < text.index("const defaultUserCard")

    def test_emission_is_deterministic(self):
        def build():
            factory = _factory()
            factory.fields.append(ResolvedField("id", "ids.user[0]"))
            return emit_factory(factory)

        assert build() == build()

    def test_has_field(self):
        factory = _factory(fields=[ResolvedField("id", "ids.user[0]")])
        assert factory.has_field("id")
        assert not factory.has_field("email")


class TestNaming:
    @pytest.mark.parametrize(
        "name, expected",
        [("UserCard", "user-card"), ("userCard", "user-card"), ("User", "user"), ("user-card", "user-card")],
    )
    def test_to_kebab_case(self, name, expected):
        assert to_kebab_case(name) == expected

    @pytest.mark.parametrize(
        "name, expected",
        [("user-card", "UserCard"), ("userCard", "UserCard"), ("UserCard", "UserCard"), ("friend", "Friend")],
    )
    def test_to_pascal_case(self, name, expected):
        assert to_pascal_case(name) == expected

    def test_to_camel_case(self):
        assert to_camel_case("BlogPost") == "blogPost"

    def test_derived_names(self):
        assert factory_name("userCard") == "createMockUserCard"
        assert default_object_name("UserCard") == "defaultUserCard"
        assert fragment_type_name("UserCard") == "UserCardFragment"

    @pytest.mark.parametrize(
        "value, case, expected",
        [
            ("ADMIN", "keep", "ADMIN"),
            ("ADMIN", "pascal", "Admin"),
            ("SUPER_ADMIN", "pascal", "SuperAdmin"),
            ("inReview", "pascal", "InReview"),
        ],
    )
    def test_enum_member_name(self, value, case, expected):
        assert enum_member_name(value, case) == expected

    def test_relative_import_sibling(self):
        assert to_relative_import(Path("/app/src/users"), Path("/app/src/users/user-base.factory.ts")) == "./user-base.factory"

    def test_relative_import_parent(self):
        assert to_relative_import(Path("/app/src/users"), Path("/app/src/gql/ids.ts")) == "../gql/ids"

    def test_relative_import_declaration_file(self):
        assert to_relative_import(Path("/app/src"), Path("/app/src/gql/graphql.d.ts")) == "./gql/graphql"
