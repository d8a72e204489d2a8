"""Pydantic models for generator options and hooks."""

import re
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def underscore(name: str) -> str:
    """Convert a CamelCase or dashed name to snake_case."""
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", name)
    return name.replace("-", "_").lower()


def camelize(name: str) -> str:
    """Convert a snake_case name to CamelCase."""
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


def humanize(name: str) -> str:
    """Turn an option name into a human phrase (e.g. 'test_framework' -> 'Test framework')."""
    text = underscore(name).replace("_", " ").strip()
    return text[:1].upper() + text[1:]


def dasherize(name: str) -> str:
    """Convert an option name to its command-line spelling."""
    return name.replace("_", "-")


def classify(token: str) -> str:
    """Build a group label from a namespace token (e.g. 'rspec:model' -> 'Rspec::Model')."""
    return "::".join(camelize(part) for part in str(token).split(":"))


class NoDefault(BaseModel):
    """The option has no default value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["none"] = "none"

    @property
    def value(self) -> None:
        return None


class BoolDefault(BaseModel):
    """The option defaults to a flag value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bool"] = "bool"
    value: bool


class ValueDefault(BaseModel):
    """The option defaults to a string value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["value"] = "value"
    value: str


OptionDefault = Annotated[
    Union[NoDefault, BoolDefault, ValueDefault], Field(discriminator="kind")
]


def default_from(raw: Any) -> NoDefault | BoolDefault | ValueDefault:
    """Tag a raw default value once, when the option is declared."""
    if isinstance(raw, (NoDefault, BoolDefault, ValueDefault)):
        return raw
    if raw is None or raw == "":
        return NoDefault()
    if isinstance(raw, bool):
        return BoolDefault(value=raw)
    return ValueDefault(value=str(raw))


class OptionDescriptor(BaseModel):
    """A class-level option of a generator."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Option name (e.g. 'test_framework')")
    type: Literal["string", "boolean"] = Field(
        default="string", description="Type: string or boolean"
    )
    default: OptionDefault = Field(default_factory=NoDefault)
    aliases: list[str] = Field(
        default_factory=list, description="Extra flags (e.g. ['-t'])"
    )
    description: str = Field(default="", description="Help text for the option")
    banner: str | None = Field(
        default=None, description="Value placeholder shown in help"
    )
    group: str | None = Field(
        default=None, description="Help group, None for the default group"
    )
    hide: bool = Field(default=False, description="Hide the option from help")

    @field_validator("name", mode="before")
    @classmethod
    def clean_name(cls, v: Any) -> Any:
        """Strip leading dashes and store dashed names with underscores."""
        if isinstance(v, str):
            return v.lstrip("-").replace("-", "_")
        return v

    @field_validator("default", mode="before")
    @classmethod
    def tag_default(cls, v: Any) -> Any:
        """Accept raw defaults and tag them."""
        if isinstance(v, dict) and "kind" in v:
            return v
        return default_from(v).model_dump()

    @field_validator("aliases", mode="before")
    @classmethod
    def clean_aliases(cls, v: Any) -> Any:
        """Accept a single alias string, a list, or None."""
        if v is None:
            return []
        if isinstance(v, str):
            v = [v]
        return [alias if alias.startswith("-") else f"-{alias}" for alias in v]

    @model_validator(mode="after")
    def validate_boolean_default(self) -> "OptionDescriptor":
        """Boolean options only take flag defaults."""
        if self.type == "boolean" and isinstance(self.default, ValueDefault):
            raise ValueError(
                f"Boolean option '{self.name}' cannot default to "
                f"'{self.default.value}'"
            )
        return self

    @property
    def value(self) -> bool | str | None:
        """The untagged default value."""
        return self.default.value


class HookDeclaration(BaseModel):
    """A hook declared with ``Generator.hook_for``."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Option that triggers the hook")
    base: str = Field(..., description="Base name of the declaring generator")
    as_name: str = Field(..., description="Context used for the namespace lookup")
    verbose: str | bool = Field(
        default="white", description="Status colour, False to stay silent"
    )
