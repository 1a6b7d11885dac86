"""Tests for stackdsl.document module."""

from enum import Enum

import pytest

from stackdsl.document import set_array_property, set_property, to_node, with_array
from stackdsl.errors import UnsupportedOperationError
from stackdsl.nodes import Ref, Tag

from schemas import Instance


class Tenancy(Enum):
    DEFAULT = "default"
    DEDICATED = "dedicated"


class TestToNode:
    """Test value conversion."""

    def test_none(self):
        """Test that None stays absent."""
        assert to_node(None) is None

    @pytest.mark.parametrize("value", ["t3.micro", 8, 0.5, True, False, 0, ""])
    def test_primitives_pass_through(self, value):
        """Test that primitives are stored as they are."""
        assert to_node(value) == value
        assert type(to_node(value)) is type(value)

    def test_ref(self):
        """Test that a Ref renders as a Ref object."""
        assert to_node(Ref("Web1")) == {"Ref": "Web1"}

    def test_handle_renders_as_ref(self):
        """Test that a handle renders as a Ref to its node."""
        assert to_node(Instance.create("Web1")) == {"Ref": "Web1"}

    def test_tag(self):
        """Test that values with a to_node method render through it."""
        assert to_node(Tag("Env", "test")) == {"Key": "Env", "Value": "test"}

    def test_enum(self):
        """Test that enum members render as their value."""
        assert to_node(Tenancy.DEDICATED) == "dedicated"

    def test_nested_mapping(self):
        """Test that mappings are converted recursively with string keys."""
        value = {"IpProtocol": "tcp", 443: [Ref("LB"), Tenancy.DEFAULT]}
        assert to_node(value) == {
            "IpProtocol": "tcp",
            "443": [{"Ref": "LB"}, "default"],
        }

    def test_tuple_becomes_list(self):
        """Test that sequences become lists."""
        assert to_node(("a", Ref("b"))) == ["a", {"Ref": "b"}]

    @pytest.mark.parametrize("value", [object(), b"raw", {1, 2}, Instance])
    def test_unconvertible_raises(self, value):
        """Test that values without a document form raise TypeError."""
        with pytest.raises(TypeError, match="Cannot convert"):
            to_node(value)


class TestWithArray:
    """Test with_array."""

    def test_creates_missing_array(self):
        """Test that a missing array is created empty."""
        document = {}
        array = with_array(document, "Tags")
        assert array == []
        assert document["Tags"] is array

    def test_returns_existing_array(self):
        """Test that an existing array is returned, not replaced."""
        existing = ["a"]
        document = {"Items": existing}
        assert with_array(document, "Items") is existing

    def test_non_array_raises(self):
        """Test that a scalar cannot be used as an array."""
        with pytest.raises(UnsupportedOperationError, match="not an array"):
            with_array({"Items": "a"}, "Items")


class TestSetProperty:
    """Test set_property."""

    def test_sets_value(self):
        """Test that a converted value is stored."""
        document = {}
        set_property(document, "SubnetId", Ref("Subnet1"))
        assert document == {"SubnetId": {"Ref": "Subnet1"}}

    def test_none_is_noop(self):
        """Test that None leaves the document unchanged."""
        document = {"ImageId": "ami-1"}
        set_property(document, "KeyName", None)
        set_property(document, "ImageId", None)
        assert document == {"ImageId": "ami-1"}

    def test_replace_keeps_position(self):
        """Test that re-setting a property keeps its place."""
        document = {}
        set_property(document, "A", 1)
        set_property(document, "B", 2)
        set_property(document, "A", 3)
        assert list(document.items()) == [("A", 3), ("B", 2)]


class TestSetArrayProperty:
    """Test set_array_property."""

    def test_drops_none_in_order(self):
        """Test that only non-None values are appended, in order."""
        document = {}
        set_array_property(document, "Zones", [None, "a", None, "b", "c", None])
        assert document == {"Zones": ["a", "b", "c"]}

    def test_appends_to_existing(self):
        """Test that later calls extend the same array."""
        document = {}
        set_array_property(document, "Zones", ["a"])
        set_array_property(document, "Zones", ["b"])
        assert document == {"Zones": ["a", "b"]}

    def test_only_none_writes_nothing(self):
        """Test that no array is created when every value is None."""
        document = {}
        set_array_property(document, "Zones", [None, None])
        set_array_property(document, "Subnets", [])
        assert document == {}


class Labelled:
    """Has a ref attribute that is not a method."""

    def __init__(self, ref):
        self.ref = ref


class TestToNodeRefAttribute:
    """Test values with a non-callable ref attribute."""

    def test_non_callable_ref_raises_cannot_convert(self):
        """Test that a plain ref attribute does not make a value referenceable."""
        with pytest.raises(TypeError, match="Cannot convert Labelled"):
            to_node(Labelled("Web1"))
