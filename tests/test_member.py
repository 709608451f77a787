# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for Member records, forwarders and introspection helpers."""

import dataclasses

import pytest
from pydantic import Field

from aliases import Model, attribute
from aliases.member import (
    ALIASED_FROM,
    AliasAccessor,
    Member,
    MemberKind,
    aliased_from,
    aliases_of,
    get_member,
    lookup_member,
    make_forwarder,
)


class Greeter(Model):
    name: str = "world"

    def greet(self, punctuation="!"):
        return f"hello {self.name}{punctuation}"

    @property
    def shout(self):
        return self.greet().upper()

    @classmethod
    def default(cls):
        return cls()

    alias("hi", "greet")  # noqa: F821
    alias("loud", "shout")  # noqa: F821


class TestMember:
    """Tests for the Member record."""

    def test_member_is_frozen(self):
        """Test Member cannot be mutated."""
        member = Member("greet", MemberKind.METHOD)
        with pytest.raises(dataclasses.FrozenInstanceError):
            member.name = "other"

    def test_is_alias(self):
        """Test is_alias follows aliased_from."""
        assert not Member("greet", MemberKind.METHOD).is_alias
        assert Member("hi", MemberKind.METHOD, aliased_from="greet").is_alias

    def test_member_kind_is_str(self):
        """Test MemberKind values compare as strings."""
        assert MemberKind.ACCESSOR == "accessor"

    @pytest.mark.parametrize(
        "value, kind",
        [
            (lambda self: None, MemberKind.METHOD),
            (classmethod(lambda cls: None), MemberKind.METHOD),
            (staticmethod(lambda: None), MemberKind.METHOD),
            (property(lambda self: 1), MemberKind.ACCESSOR),
            (AliasAccessor("x"), MemberKind.ACCESSOR),
            (Field(default=1), MemberKind.ATTRIBUTE),
            (attribute(1, alias="y"), MemberKind.ATTRIBUTE),
        ],
    )
    def test_from_value_kinds(self, value, kind):
        """Test from_value classifies methods, accessors and fields."""
        assert Member.from_value("x", value).kind is kind

    @pytest.mark.parametrize("value", [1, "text", None, int])
    def test_from_value_plain_data(self, value):
        """Test plain data and classes are not members."""
        assert Member.from_value("x", value) is None

    def test_from_value_reads_tag(self):
        """Test from_value picks up the aliased_from tag."""
        forwarder = make_forwarder("hi", "greet")
        assert Member.from_value("hi", forwarder).aliased_from == "greet"
        wrapped = classmethod(make_forwarder("make", "build"))
        assert Member.from_value("make", wrapped).aliased_from == "build"


class TestForwarders:
    """Tests for make_forwarder and AliasAccessor."""

    def test_make_forwarder_metadata(self):
        """Test the forwarder is named after the alias."""
        forwarder = make_forwarder("hi", "greet", owner="Greeter")
        assert forwarder.__name__ == "hi"
        assert forwarder.__qualname__ == "Greeter.hi"
        assert getattr(forwarder, ALIASED_FROM) == "greet"
        assert "greet" in forwarder.__doc__

    def test_make_forwarder_late_binds(self):
        """Test the forwarder looks the source up on each call."""

        class Target:
            def greet(self):
                return "first"

        forwarder = make_forwarder("hi", "greet")
        target = Target()
        assert forwarder(target) == "first"
        target.greet = lambda: "second"
        assert forwarder(target) == "second"

    def test_alias_accessor_forwards(self):
        """Test AliasAccessor forwards get, set and delete."""

        class Plain:
            value = None
            other = AliasAccessor("value")

        obj = Plain()
        obj.other = 3
        assert obj.value == 3
        assert obj.other == 3
        del obj.other
        assert obj.value is None
        assert Plain.other.aliased_from == "value"


class TestIntrospection:
    """Tests for get_member, aliased_from and aliases_of."""

    def test_get_member_method(self):
        """Test a hand-written method."""
        member = get_member(Greeter, "greet")
        assert member.kind is MemberKind.METHOD
        assert member.owner == "Greeter"
        assert not member.is_alias

    def test_get_member_field(self):
        """Test fields are found through pydantic's field table."""
        member = get_member(Greeter, "name")
        assert member.kind is MemberKind.ATTRIBUTE
        assert member.body.default == "world"

    def test_get_member_missing(self):
        """Test unknown names give None."""
        assert get_member(Greeter, "missing") is None

    def test_get_member_inherited(self):
        """Test lookup walks the MRO."""

        class Polite(Greeter):
            pass

        member = get_member(Polite, "hi")
        assert member.owner == "Greeter"
        assert member.aliased_from == "greet"

    def test_lookup_member_order(self):
        """Test the first class in the given order wins."""

        class A:
            def run(self):
                return "A"

        class B:
            def run(self):
                return "B"

        assert lookup_member([B, A], "run").owner.endswith("B")

    def test_alias_forwards_arguments(self):
        """Test alias calls and accessor reads on an instance."""
        greeter = Greeter(name="there")
        assert greeter.hi("?") == "hello there?"
        assert greeter.loud == "HELLO THERE!"

    def test_aliased_from(self):
        """Test aliased_from on classes and instances."""
        assert aliased_from(Greeter, "hi") == "greet"
        assert aliased_from(Greeter(), "loud") == "shout"
        assert aliased_from(Greeter, "greet") is None
        assert aliased_from(Greeter, "missing") is None

    def test_aliases_of(self):
        """Test aliases_of lists every visible alias."""
        assert aliases_of(Greeter) == {"hi": "greet", "loud": "shout"}

    def test_aliases_of_excludes_shadowed(self):
        """Test a subclass overriding an alias hides it."""

        class Quiet(Greeter):
            @property
            def loud(self):
                return "..."

        assert aliases_of(Quiet) == {"hi": "greet"}
        assert Quiet().loud == "..."
