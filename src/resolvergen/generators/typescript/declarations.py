"""Pydantic models for the TypeScript declarations emitted per unit."""

from pydantic import BaseModel, Field


class InterfaceMember(BaseModel):
    name: str
    type: str
    optional: bool = False


class InterfaceDeclaration(BaseModel):
    """An `export interface` block."""

    name: str
    members: list[InterfaceMember] = Field(default_factory=list)


class TypeAliasDeclaration(BaseModel):
    """An `export type Name = ...` alias."""

    name: str
    type: str


class DefaultResolver(BaseModel):
    """A trivial resolver reading a property straight off the parent model."""

    field_name: str
    parent_type: str
    optional: bool = False


class ImportDeclaration(BaseModel):
    names: list[str]
    path: str


class EntityDeclarations(BaseModel):
    """Everything rendered for one object, interface or union type."""

    type_name: str
    default_resolvers: list[DefaultResolver] | None = None
    input_interfaces: list[InterfaceDeclaration] = Field(default_factory=list)
    args_interfaces: list[InterfaceDeclaration] = Field(default_factory=list)
    resolver_aliases: list[TypeAliasDeclaration] = Field(default_factory=list)
    resolver_interface: InterfaceDeclaration


class CodeFile(BaseModel):
    """A generated output unit. Units with `force=False` may be left alone when they already exist."""

    path: str
    force: bool
    code: str
