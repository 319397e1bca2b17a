# Copyright 2026 rdgen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for identifier casing and property naming."""

import pytest

from rdgen.emitter import Diagnostics, Naming, camel_case, pascal_case, snake_case
from rdgen.emitter.naming import constant_case, plural_suffix, quote
from rdgen.model import Property

# ###############
# Casing
# ###############


@pytest.mark.parametrize(
    ("name", "pascal", "camel", "snake", "constant"),
    [
        ("word", "Word", "word", "word", "WORD"),
        ("function-call", "FunctionCall", "functionCall", "function_call", "FUNCTION_CALL"),
        ("a-b-c", "ABC", "aBC", "a_b_c", "A_B_C"),
        ("HTTP-header", "HttpHeader", "httpHeader", "http_header", "HTTP_HEADER"),
        ("trailing-", "Trailing", "trailing", "trailing", "TRAILING"),
    ],
)
def test_casing(name: str, pascal: str, camel: str, snake: str, constant: str) -> None:
    assert pascal_case(name) == pascal
    assert camel_case(name) == camel
    assert snake_case(name) == snake
    assert constant_case(name) == constant


def test_quote_escapes_for_python_source() -> None:
    assert quote('say "hi"\n') == '"say \\"hi\\"\\n"'
    assert quote("\\d") == '"\\\\d"'


# ###############
# Plural suffix
# ###############


def test_singular_has_no_suffix() -> None:
    assert plural_suffix(Property(name="item", owner="list", entity="item")) == ""


def test_plural_suffix() -> None:
    assert plural_suffix(Property(name="item", owner="list", entity="item", is_plural=True)) == "s"


def test_plural_suffix_after_x() -> None:
    assert plural_suffix(Property(name="box", owner="list", entity="box", is_plural=True)) == "es"


# ###############
# Property names
# ###############


class TestNaming:
    def test_plain_property(self) -> None:
        naming = Naming(Diagnostics())
        prop = Property(name="first-name", owner="person", entity="word")
        assert naming.property_name(prop) == "first-name"
        assert naming.member_name(prop) == "first_name"
        assert naming.local_name(prop) == "first_name"

    def test_plural_property(self) -> None:
        naming = Naming(Diagnostics())
        prop = Property(name="argument", owner="call", entity="expression", is_plural=True)
        assert naming.member_name(prop) == "arguments"
        assert naming.local_name(prop) == "arguments"

    def test_self_reference_is_renamed_with_warning(self) -> None:
        diagnostics = Diagnostics()
        naming = Naming(diagnostics)
        prop = Property(name="list", owner="list", entity="list")
        assert naming.property_name(prop) == "next-list"
        assert naming.member_name(prop) == "next_list"
        assert naming.local_name(prop) == "next_list"
        assert diagnostics.messages == ["rewriting property name: list"]

    def test_self_reference_warns_once_per_property(self) -> None:
        diagnostics = Diagnostics()
        naming = Naming(diagnostics)
        prop = Property(name="rule", owner="rule", entity="rule")
        for _ in range(3):
            naming.member_name(prop)
        assert len(diagnostics.items) == 1

    def test_reserved_local_names_are_substituted(self) -> None:
        naming = Naming(Diagnostics())
        for name, local in [("string", "text"), ("int", "number"), ("float", "floating"), ("self", "this")]:
            prop = Property(name=name, owner="literal", entity="word")
            assert naming.local_name(prop) == local
            assert naming.member_name(prop) == name

    def test_keywords_get_trailing_underscore(self) -> None:
        naming = Naming(Diagnostics())
        prop = Property(name="class", owner="rule", entity="word")
        assert naming.member_name(prop) == "class_"
        assert naming.local_name(prop) == "class_"

    def test_other_properties_do_not_warn(self) -> None:
        diagnostics = Diagnostics()
        naming = Naming(diagnostics)
        naming.member_name(Property(name="rule", owner="grammar", entity="rule"))
        assert diagnostics.items == []
