# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for the class body builder and the model metaclass."""

import pytest
from pydantic import create_model

from aliases import (
    ClassBuilder,
    Model,
    NamespaceFinalizedError,
    Role,
    attribute,
)
from aliases.member import MemberKind
from aliases.namespace import linearize


class TestLinearize:
    """Tests for the C3 linearization used during the body."""

    def test_matches_python_mro(self):
        """Test linearize agrees with type() for a diamond."""

        class A:
            pass

        class B(A):
            pass

        class C(A):
            pass

        class D(B, C):
            pass

        assert linearize((B, C)) == list(D.__mro__[1:])

    def test_inconsistent_bases(self):
        """Test an impossible order raises TypeError."""

        class A:
            pass

        class B(A):
            pass

        with pytest.raises(TypeError, match="consistent method resolution"):
            linearize((A, B))


class TestClassBuilder:
    """Tests for ClassBuilder used directly."""

    def test_dsl_injected(self):
        """Test alias and the modifier helpers are available in a body."""
        ns = ClassBuilder("Thing", (Model,))
        assert {"alias", "before", "after", "around"} <= set(ns)
        assert ns.defined_names() == set()

    def test_find_member_order(self):
        """Test body entries shadow bases."""
        ns = ClassBuilder("Thing", (Model,))
        assert ns.find_member("model_dump").owner == "BaseModel"
        ns["model_dump"] = lambda self: {}
        assert ns.find_member("model_dump").owner == "Thing"

    def test_find_member_annotation(self):
        """Test bare annotations are visible as attributes."""
        ns = ClassBuilder("Thing", (Model,))
        ns["__annotations__"] = {"size": int}
        member = ns.find_member("size")
        assert member.kind is MemberKind.ATTRIBUTE
        assert "size" in ns.defined_names()

    def test_find_member_annotated_callable(self):
        """Test an annotated callable default is an attribute, not a method."""
        ns = ClassBuilder("Thing", (Model,))
        ns["__annotations__"] = {"handler": object}
        ns["handler"] = print
        member = ns.find_member("handler")
        assert member.kind is MemberKind.ATTRIBUTE
        assert member.body is print

    def test_dsl_names_are_not_members(self):
        """Test the injected helpers are not resolvable as sources."""
        ns = ClassBuilder("Thing", (Model,))
        assert ns.find_member("alias") is None

    def test_attribute_expanded_on_assignment(self):
        """Test assigning an attribute spec installs the field and aliases."""
        ns = ClassBuilder("Thing", (Model,))
        ns["size"] = attribute(1, alias="n")
        assert ns.attribute_aliases == {"size": ("n",)}
        assert ns.aliases == {"n": "size"}
        assert ns["size"].default == 1

    def test_rebinding_dsl_name_is_kept(self):
        """Test a body may define its own member called alias."""

        class Named(Model):
            def alias(self):
                return "mine"

        assert Named().alias() == "mine"

    def test_is_role_from_bases(self):
        """Test builders know whether they build a role."""
        assert ClassBuilder.for_bases("R", (Role,)).is_role
        assert not ClassBuilder.for_bases("M", (Model,)).is_role

    def test_effective_bases(self):
        """Test roles precede declared bases."""

        class Tagged(Role):
            pass

        ns = ClassBuilder("Thing", (Model,), [Tagged])
        assert ns.effective_bases == (Tagged, Model)


class TestFinalize:
    """Tests for building classes from the builder."""

    def test_finalize_body(self):
        """Test finalize strips helpers and adds bookkeeping."""
        ns = ClassBuilder("Thing", (Model,))
        ns["run"] = lambda self: None
        body = ns.finalize()
        assert "alias" not in body
        assert body["__alias_declarations__"] == {}
        assert body["__is_role__"] is False
        assert ns.finalized

    def test_setitem_after_finalize(self):
        """Test the builder refuses changes once finalized."""
        ns = ClassBuilder("Thing", (Model,))
        ns.finalize()
        with pytest.raises(NamespaceFinalizedError):
            ns["late"] = 1

    def test_captured_alias_after_build(self):
        """Test a helper kept past the class statement cannot add aliases."""
        captured = {}

        class Thing(Model):
            def run(self):
                return "ran"

            captured["helper"] = alias  # noqa: F821

        with pytest.raises(NamespaceFinalizedError):
            captured["helper"]("go", "run")
        assert not hasattr(Thing, "go")

    def test_class_keywords_pass_through(self):
        """Test pydantic class keywords still apply."""

        class Frozen(Model, frozen=True):
            size: int = 0

        assert Frozen.model_config["frozen"] is True

    def test_create_model(self):
        """Test models created without a class statement still work."""
        Dynamic = create_model("Dynamic", __base__=Model, size=(int, 0))
        assert Dynamic(size=2).size == 2
        assert Dynamic.__alias_declarations__ == {}
        assert "alias" not in Dynamic.__dict__

    def test_update_from_skips_foreign_helpers(self):
        """Test helpers of another builder are not copied."""
        other = ClassBuilder("Other", (Model,))
        ns = ClassBuilder("Thing", (Model,))
        ns.update_from({**other, "size": 1})
        assert ns["alias"] is not other["alias"]
        assert ns["size"] == 1
