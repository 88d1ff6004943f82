"""
TypeScript declaration emitters for OData schemas and EDM primitives.
"""

from typing import List, Union

from .constants import PRIMITIVE_NAMESPACE
from .models import ComplexType, EntityType, EnumType, Member, Schema
from .primitive_types import PrimitiveTypeTable
from .type_resolver import TypeReferenceResolver


class DeclarationEmitter:
    """Emits one namespace block per schema.

    Inside a namespace, entity types come first, then complex types, then
    enums; each group keeps the order of the metadata document.
    """

    def __init__(self, resolver: TypeReferenceResolver):
        self.resolver = resolver

    def emit(self, schemas: List[Schema]) -> str:
        return "".join(self.emit_schema(schema) for schema in schemas)

    def emit_schema(self, schema: Schema) -> str:
        out = f"namespace {schema.namespace} {{\n"
        for entity_type in schema.entity_types:
            out += self.emit_structured_type(entity_type)
        for complex_type in schema.complex_types:
            out += self.emit_structured_type(complex_type)
        for enum_type in schema.enum_types:
            out += self.emit_enum(enum_type)
        out += "}\n"
        return out

    def emit_structured_type(self, structured_type: Union[EntityType, ComplexType]) -> str:
        out = f"export interface {structured_type.name} {{\n"
        for member in structured_type.members:
            out += self.emit_member(member)
        out += "}\n"
        return out

    def emit_member(self, member: Member) -> str:
        marker = "?" if member.optional else ""
        return f"{member.name}{marker}: {self.resolver.resolve(member.type)};\n"

    def emit_enum(self, enum_type: EnumType) -> str:
        body = ",".join(f"{m.name} = {m.value}" for m in enum_type.members)
        return f"export enum {enum_type.name} {{\n{body}}}\n"


class PrimitiveNamespaceEmitter:
    """Emits the ``Edm`` namespace aliasing every primitive in the table.

    Must run after all schemas were emitted, since resolution adds entries.
    """

    def __init__(self, table: PrimitiveTypeTable, namespace: str = PRIMITIVE_NAMESPACE):
        self.table = table
        self.namespace = namespace

    def emit(self) -> str:
        out = f"\nnamespace {self.namespace} {{\n"
        for name, target in self.table.entries():
            out += f"export type {name} = {target};\n"
        out += "}"
        return out
