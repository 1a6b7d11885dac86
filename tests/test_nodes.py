"""Tests for stackdsl.nodes module."""

import pytest

from stackdsl.adapter import adapter_of
from stackdsl.nodes import Ref, Referenceable, Resource, Tag

from schemas import Instance, Subnet


class TestRef:
    """Test Ref."""

    def test_ref_to_node(self):
        """Test a Ref renders as a single-entry Ref object."""
        assert Ref("Web1").to_node() == {"Ref": "Web1"}

    def test_ref_frozen(self):
        """Test that Ref is immutable."""
        ref = Ref("Web1")
        with pytest.raises((AttributeError, TypeError)):
            ref.id = "Web2"

    def test_ref_equality(self):
        """Test that Refs compare by id."""
        assert Ref("Web1") == Ref("Web1")
        assert Ref("Web1") != Ref("Web2")


class TestTag:
    """Test Tag."""

    def test_tag_to_node(self):
        """Test a Tag renders as a Key/Value pair."""
        assert Tag("Name", "prod").to_node() == {"Key": "Name", "Value": "prod"}

    def test_tag_frozen(self):
        """Test that Tag is immutable."""
        tag = Tag("Name", "prod")
        with pytest.raises((AttributeError, TypeError)):
            tag.value = "test"


class TestReferenceable:
    """Test the Referenceable protocol."""

    def test_handle_is_referenceable(self):
        """Test that handles can produce refs to themselves."""
        assert isinstance(Instance.create("Web1"), Referenceable)

    def test_plain_values_are_not_referenceable(self):
        """Test that primitives and Refs are not Referenceable."""
        assert not isinstance("Web1", Referenceable)
        assert not isinstance(Ref("Web1"), Referenceable)


class TestResourceRegistry:
    """Test schema registration."""

    def test_registry_contains_schemas(self):
        """Test that typed schemas register under their type."""
        registry = Resource.registry()
        assert registry["AWS::EC2::Instance"] is Instance
        assert registry["AWS::EC2::Subnet"] is Subnet

    def test_registry_is_a_copy(self):
        """Test that the returned mapping cannot alter the registry."""
        Resource.registry().pop("AWS::EC2::Instance")
        assert "AWS::EC2::Instance" in Resource.registry()

    def test_shared_type_both_usable(self):
        """Test that two schemas may declare the same type."""

        class Wide(Resource, type="Custom::Shared"):
            def size(self, value: object) -> None: ...

        class Narrow(Resource, type="Custom::Shared"):
            def name(self, value: object) -> None: ...

        wide = Wide.create("W1")
        narrow = Narrow.create("N1")
        wide.size(3)
        narrow.name("n")
        assert adapter_of(wide).type == adapter_of(narrow).type == "Custom::Shared"
        assert wide.get_properties() == {"Size": 3}
        assert narrow.get_properties() == {"Name": "n"}

    def test_shared_type_last_declaration_registered(self):
        """Test that the registry maps a shared type to the latest schema."""

        class First(Resource, type="Custom::Redeclared"):
            pass

        class Second(Resource, type="Custom::Redeclared"):
            pass

        assert Resource.registry()["Custom::Redeclared"] is Second

    def test_type_is_not_inherited(self):
        """Test that a sub-schema without its own type has none."""

        class SpecialInstance(Instance):
            pass

        assert SpecialInstance._type is None
        assert Instance._type == "AWS::EC2::Instance"


class TestResource:
    """Test the Resource base."""

    def test_schema_cannot_be_instantiated(self):
        """Test that schemas are only used through create()."""
        with pytest.raises(TypeError, match="create"):
            Instance()

    def test_create_returns_handle(self):
        """Test that create() returns an instance of the schema."""
        web = Instance.create("Web1")
        assert isinstance(web, Instance)
        assert web.get_id() == "Web1"
