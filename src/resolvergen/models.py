"""External model mapping: which TypeScript type backs each schema entity, and where it lives."""

from collections.abc import Iterable, Mapping

from pydantic import BaseModel, ConfigDict, Field

ROOT_OPERATION_TYPES = ("Query", "Mutation", "Subscription")
DEFAULT_CONTEXT_NAME = "Context"


class UnmappedModelError(LookupError):
    """Raised when a schema entity that must be backed by a model has no mapping."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"No model mapping found for type '{type_name}'")
        self.type_name = type_name


class ModelField(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str
    optional: bool = False


class ModelDefinition(BaseModel):
    """A TypeScript type declared in an external module."""

    model_config = ConfigDict(extra="forbid")

    name: str
    path: str
    fields: list[ModelField] = Field(default_factory=list)
    enum: bool = False


class ContextDefinition(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = DEFAULT_CONTEXT_NAME
    path: str


class ModelMap:
    """Read-only mapping from schema entity names to model definitions."""

    def __init__(self, models: Mapping[str, ModelDefinition] | None = None) -> None:
        self._models: dict[str, ModelDefinition] = dict(models or {})

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._models

    def __len__(self) -> int:
        return len(self._models)

    def get(self, type_name: str) -> ModelDefinition | None:
        return self._models.get(type_name)

    def lookup(self, type_name: str) -> ModelDefinition:
        model = self._models.get(type_name)
        if model is None:
            raise UnmappedModelError(type_name)
        return model

    def model_name(self, type_name: str, empty_type: str | None = None) -> str:
        """
        Return the TypeScript name of the model backing `type_name`.

        Args:
            type_name: Schema entity name
            empty_type: Name to use for an unmapped root operation type (Query, Mutation, Subscription)

        Returns:
            str: The model's TypeScript name

        Raises:
            UnmappedModelError: If the entity is unmapped and is not an allowed root operation type
        """
        if empty_type is not None and type_name in ROOT_OPERATION_TYPES and type_name not in self._models:
            return empty_type
        return self.lookup(type_name).name

    def importable(self, type_names: Iterable[str]) -> list[ModelDefinition]:
        """Mapped, non-enum models for `type_names`, in the given order and without duplicates."""
        seen: set[str] = set()
        models: list[ModelDefinition] = []
        for type_name in type_names:
            model = self._models.get(type_name)
            if model is None or model.enum or type_name in seen:
                continue
            seen.add(type_name)
            models.append(model)
        return models


def group_models_by_import_path(models: Iterable[ModelDefinition]) -> dict[str, list[str]]:
    """Partition model names by their declaring module, preserving first-discovery order."""
    groups: dict[str, list[str]] = {}
    for model in models:
        names = groups.setdefault(model.path, [])
        if model.name not in names:
            names.append(model.name)
    return groups


def get_context_name(context: ContextDefinition | None) -> str:
    return context.name if context else DEFAULT_CONTEXT_NAME
