"""Unit tests for Pydantic models and name inflections."""

import pytest
from pydantic import ValidationError

from genhooks.models import (
    BoolDefault,
    HookDeclaration,
    NoDefault,
    OptionDescriptor,
    ValueDefault,
    camelize,
    classify,
    dasherize,
    default_from,
    humanize,
    underscore,
)


class TestInflections:
    """Tests for name conversion helpers."""

    def test_underscore_camel_case(self) -> None:
        """CamelCase names become snake_case."""
        assert underscore("ControllerGenerator") == "controller_generator"
        assert underscore("HTTPServer") == "http_server"
        assert underscore("test-unit") == "test_unit"

    def test_camelize(self) -> None:
        """snake_case names become CamelCase."""
        assert camelize("test_unit") == "TestUnit"
        assert camelize("Bar") == "Bar"

    def test_humanize(self) -> None:
        """Option names become readable phrases."""
        assert humanize("test_framework") == "Test framework"
        assert humanize("orm") == "Orm"

    def test_dasherize(self) -> None:
        """Option names use dashes on the command line."""
        assert dasherize("test_framework") == "test-framework"

    def test_classify_namespaced_token(self) -> None:
        """Namespace tokens become group labels."""
        assert classify("test_unit") == "TestUnit"
        assert classify("rspec:model") == "Rspec::Model"


class TestOptionDefault:
    """Tests for tagged option defaults."""

    def test_none_is_no_default(self) -> None:
        """None is tagged as no default."""
        tagged = default_from(None)
        assert isinstance(tagged, NoDefault)
        assert tagged.value is None

    def test_empty_string_is_no_default(self) -> None:
        """An empty string is tagged as no default."""
        assert isinstance(default_from(""), NoDefault)
        assert OptionDescriptor(name="orm", default="").value is None

    def test_bool_default(self) -> None:
        """Booleans are tagged as flag defaults."""
        tagged = default_from(False)
        assert isinstance(tagged, BoolDefault)
        assert tagged.value is False

    def test_value_default(self) -> None:
        """Strings are tagged as value defaults."""
        tagged = default_from("test_unit")
        assert isinstance(tagged, ValueDefault)
        assert tagged.value == "test_unit"

    def test_tagged_default_is_kept(self) -> None:
        """An already tagged default is returned unchanged."""
        tagged = BoolDefault(value=True)
        assert default_from(tagged) is tagged


class TestOptionDescriptor:
    """Tests for OptionDescriptor model."""

    def test_create_minimal_option(self) -> None:
        """Create option with only required fields."""
        opt = OptionDescriptor(name="orm")
        assert opt.name == "orm"
        assert opt.type == "string"
        assert isinstance(opt.default, NoDefault)
        assert opt.value is None
        assert opt.aliases == []
        assert opt.description == ""
        assert opt.banner is None
        assert opt.group is None
        assert opt.hide is False

    def test_create_full_option(self) -> None:
        """Create option with all fields."""
        opt = OptionDescriptor(
            name="test_framework",
            type="string",
            default="test_unit",
            aliases=["-t"],
            description="Test framework to be invoked",
            banner="NAME",
            group="Rails",
        )
        assert opt.value == "test_unit"
        assert isinstance(opt.default, ValueDefault)
        assert opt.aliases == ["-t"]
        assert opt.banner == "NAME"
        assert opt.group == "Rails"

    def test_name_strips_dashes(self) -> None:
        """Dashed names are stored with underscores."""
        opt = OptionDescriptor(name="--test-framework")
        assert opt.name == "test_framework"

    def test_single_alias_string(self) -> None:
        """A single alias string becomes a list."""
        opt = OptionDescriptor(name="test_framework", aliases="-t")
        assert opt.aliases == ["-t"]

    def test_alias_gets_dash(self) -> None:
        """Aliases without a dash get one."""
        opt = OptionDescriptor(name="test_framework", aliases=["t"])
        assert opt.aliases == ["-t"]

    def test_boolean_with_flag_default(self) -> None:
        """Boolean options accept flag defaults."""
        opt = OptionDescriptor(name="webrat", type="boolean", default=True)
        assert opt.value is True

    def test_boolean_with_string_default_fails(self) -> None:
        """Boolean options reject string defaults."""
        with pytest.raises(ValidationError) as exc_info:
            OptionDescriptor(name="webrat", type="boolean", default="yes")
        assert "boolean" in str(exc_info.value).lower()

    def test_unknown_type_fails(self) -> None:
        """Only string and boolean options exist."""
        with pytest.raises(ValidationError):
            OptionDescriptor(name="count", type="numeric")

    def test_option_is_frozen(self) -> None:
        """Descriptors cannot be changed after creation."""
        opt = OptionDescriptor(name="orm")
        with pytest.raises(ValidationError):
            opt.name = "other"  # type: ignore[misc]


class TestHookDeclaration:
    """Tests for HookDeclaration model."""

    def test_create_declaration(self) -> None:
        """Declarations keep name, base, context and colour."""
        hook = HookDeclaration(name="test_framework", base="genhooks", as_name="controller")
        assert hook.name == "test_framework"
        assert hook.base == "genhooks"
        assert hook.as_name == "controller"
        assert hook.verbose == "white"

    def test_equal_declarations(self) -> None:
        """Declarations with the same fields compare equal."""
        first = HookDeclaration(name="orm", base="genhooks", as_name="model")
        second = HookDeclaration(name="orm", base="genhooks", as_name="model")
        assert first == second
