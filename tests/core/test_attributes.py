# SPDX-License-Identifier: MIT
"""Tests for sysinc.core.attributes."""

import pytest

from sysinc.core.attributes import (
    DEBUGGABLE_ATTRIBUTE,
    OPERATING_SYSTEM_ATTRIBUTE,
    OPTIMIZED_ATTRIBUTE,
    USAGE_ATTRIBUTE,
    Attribute,
    AttributeSet,
    OperatingSystemFamily,
    Usage,
)


class TestAttribute:
    def test_identity_is_name_and_type(self):
        assert Attribute("flavor", str) == Attribute("flavor", str)
        assert Attribute("flavor", str) != Attribute("flavor", bool)

    def test_immutable(self):
        attr = Attribute("flavor", str)
        with pytest.raises(AttributeError):
            attr.name = "other"  # type: ignore[misc]


class TestNamed:
    def test_interned(self):
        assert Usage.named("cplusplus-api") is Usage.named("cplusplus-api")

    def test_types_do_not_mix(self):
        """Values of different named types are never equal."""
        assert Usage.named("linux") != OperatingSystemFamily.named("linux")

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            Usage.named("")

    def test_str(self):
        assert str(Usage.named(Usage.SYSTEM_API)) == "cplusplus-system-api"


class TestAttributeSet:
    def test_type_checked(self):
        """Values must match the key's type."""
        with pytest.raises(TypeError, match="native.debuggable"):
            AttributeSet.of((DEBUGGABLE_ATTRIBUTE, "yes"))

    def test_with_attribute_returns_new_set(self):
        attrs = AttributeSet.of((DEBUGGABLE_ATTRIBUTE, True))
        more = attrs.with_attribute(OPTIMIZED_ATTRIBUTE, False)

        assert len(attrs) == 1
        assert more[OPTIMIZED_ATTRIBUTE] is False

    def test_without(self):
        attrs = AttributeSet.of(
            (USAGE_ATTRIBUTE, Usage.named(Usage.C_PLUS_PLUS_API)),
            (DEBUGGABLE_ATTRIBUTE, True),
        )
        assert USAGE_ATTRIBUTE not in attrs.without(USAGE_ATTRIBUTE)
        assert USAGE_ATTRIBUTE in attrs

    def test_filter(self):
        attrs = AttributeSet.of(
            (DEBUGGABLE_ATTRIBUTE, True),
            (OPTIMIZED_ATTRIBUTE, False),
        )
        only_true = attrs.filter(lambda _key, value: value is True)
        assert list(only_true) == [DEBUGGABLE_ATTRIBUTE]

    def test_merge_other_wins(self):
        a = AttributeSet.of((DEBUGGABLE_ATTRIBUTE, True))
        b = AttributeSet.of((DEBUGGABLE_ATTRIBUTE, False), (OPTIMIZED_ATTRIBUTE, True))
        merged = a.merge(b)

        assert merged[DEBUGGABLE_ATTRIBUTE] is False
        assert merged[OPTIMIZED_ATTRIBUTE] is True

    def test_equality_ignores_order(self):
        a = AttributeSet.of((DEBUGGABLE_ATTRIBUTE, True), (OPTIMIZED_ATTRIBUTE, False))
        b = AttributeSet.of((OPTIMIZED_ATTRIBUTE, False), (DEBUGGABLE_ATTRIBUTE, True))
        assert a == b
        assert hash(a) == hash(b)


class TestCompatibility:
    def test_shared_keys_equal(self):
        a = AttributeSet.of((DEBUGGABLE_ATTRIBUTE, True), (OPTIMIZED_ATTRIBUTE, False))
        b = AttributeSet.of((DEBUGGABLE_ATTRIBUTE, True))
        assert a.is_compatible_with(b)
        assert b.is_compatible_with(a)

    def test_shared_key_differs(self):
        a = AttributeSet.of((DEBUGGABLE_ATTRIBUTE, True))
        b = AttributeSet.of((DEBUGGABLE_ATTRIBUTE, False))
        assert not a.is_compatible_with(b)

    def test_disjoint_keys_are_compatible(self):
        a = AttributeSet.of((DEBUGGABLE_ATTRIBUTE, True))
        b = AttributeSet.of(
            (OPERATING_SYSTEM_ATTRIBUTE, OperatingSystemFamily.named("linux"))
        )
        assert a.is_compatible_with(b)

    def test_no_coercion(self):
        """Exact match only: differently named values never match."""
        a = AttributeSet.of((USAGE_ATTRIBUTE, Usage.named(Usage.SYSTEM_API)))
        b = AttributeSet.of((USAGE_ATTRIBUTE, Usage.named(Usage.C_PLUS_PLUS_API)))
        assert not a.is_compatible_with(b)
