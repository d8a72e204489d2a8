"""Process-wide generator settings.

Settings supply the default value and the aliases of an option when a
generator declares it without them. They are read when the option is
declared, so load them before importing generator modules.
"""

from pathlib import Path

from pydantic import BaseModel, Field, ValidationError, field_validator

from genhooks.errors import GeneratorError


class GeneratorSettings(BaseModel):
    """Defaults and aliases shared by every generator."""

    options: dict[str, bool | str] = Field(
        default_factory=dict,
        description="Default values by option name (e.g. test_framework)",
    )
    aliases: dict[str, list[str]] = Field(
        default_factory=dict, description="Extra flags by option name"
    )

    @field_validator("aliases", mode="before")
    @classmethod
    def listify_aliases(cls, v: dict) -> dict:
        """Allow a single alias string per option."""
        if isinstance(v, dict):
            return {
                name: [flags] if isinstance(flags, str) else flags
                for name, flags in v.items()
            }
        return v

    def default_for(self, name: str) -> bool | str | None:
        return self.options.get(name)

    def aliases_for(self, name: str) -> list[str]:
        return list(self.aliases.get(name, []))


_settings = GeneratorSettings()


def get_settings() -> GeneratorSettings:
    """Return the active settings."""
    return _settings


def configure(settings: GeneratorSettings) -> GeneratorSettings:
    """Replace the active settings and return the previous ones."""
    global _settings
    previous, _settings = _settings, settings
    return previous


def load_settings(path: str | Path) -> GeneratorSettings:
    """Load settings from a JSON file and make them active.

    Raises:
        GeneratorError: If the file is missing or is not valid settings JSON.
    """
    settings_path = Path(path)
    if not settings_path.exists():
        raise GeneratorError(f"Settings file not found: {settings_path}")

    try:
        settings = GeneratorSettings.model_validate_json(settings_path.read_text())
    except ValidationError as e:
        raise GeneratorError(f"Invalid settings in {settings_path}: {e}") from e

    configure(settings)
    return settings


def default_for(name: str) -> bool | str | None:
    """Default value configured for an option, if any."""
    return _settings.default_for(name)


def aliases_for(name: str) -> list[str]:
    """Aliases configured for an option."""
    return _settings.aliases_for(name)
