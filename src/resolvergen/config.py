from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from resolvergen import log
from resolvergen.models import ContextDefinition, ModelDefinition, ModelMap


class GeneratorConfig(BaseModel):
    """
    Generation settings, usually read from a YAML file such as:

        schema: schema.graphql
        output: src/generated/resolvers
        context:
          name: Context
          path: ../../context
        models:
          User:
            path: ../../models
            fields:
              - name: id
              - name: bio
                optional: true
        default-resolvers: true
        iresolvers-augmentation: false
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    schema_paths: list[Path] = Field(default_factory=list, alias="schema")
    output: Path | None = None
    context: ContextDefinition | None = None
    models: dict[str, ModelDefinition] = Field(default_factory=dict)
    default_resolvers: bool = Field(False, alias="default-resolvers")
    iresolvers_augmentation: bool = Field(False, alias="iresolvers-augmentation")
    prettify: bool = True

    @field_validator("schema_paths", mode="before")
    @classmethod
    def ensure_schema_list(cls, value: Any) -> Any:
        if isinstance(value, str | Path):
            return [value]
        return value

    @field_validator("models", mode="before")
    @classmethod
    def default_model_names(cls, value: Any) -> Any:
        """A model without an explicit `name` is named after its schema type."""
        if not isinstance(value, dict):
            return value
        return {
            type_name: {"name": type_name, **definition} if isinstance(definition, dict) else definition
            for type_name, definition in value.items()
        }

    @property
    def model_map(self) -> ModelMap:
        return ModelMap(self.models)


def load_generator_config(config_path: Path | None) -> GeneratorConfig:
    """
    Load and validate a generator configuration from a YAML file.

    Relative `schema` and `output` paths are resolved against the directory of the file.

    Args:
        config_path: Path to the YAML configuration file, or None for the defaults.

    Returns:
        A validated GeneratorConfig.

    Raises:
        OSError: If the file cannot be read.
        yaml.YAMLError: If the file is not valid YAML.
        TypeError: If the YAML root is not a mapping.
        ValidationError: If validation against GeneratorConfig fails.
    """
    if config_path is None:
        log.debug("No generator config provided")
        return GeneratorConfig()

    raw: Any
    with config_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    log.debug("Loaded generator config from %s", config_path)

    if raw is None or raw == {}:
        return GeneratorConfig()

    if not isinstance(raw, dict):
        raise TypeError(f"Generator config root must be a mapping (YAML object), got {type(raw).__name__}")

    config = GeneratorConfig.model_validate(cast(dict[str, Any], raw))

    base_dir = config_path.parent
    config.schema_paths = [path if path.is_absolute() else base_dir / path for path in config.schema_paths]
    if config.output is not None and not config.output.is_absolute():
        config.output = base_dir / config.output

    return config
