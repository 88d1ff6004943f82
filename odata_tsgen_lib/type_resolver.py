"""
Resolution of raw OData type references into TypeScript type expressions.
"""

import re
from typing import Optional

from .constants import EDM_PREFIX
from .primitive_types import PrimitiveTypeTable

COLLECTION_PATTERN = re.compile(r'^Collection\((.*)\)$')


class TypeReferenceResolver:
    """Turns type references such as ``Collection(Edm.Int32)`` into ``Edm.Int32[]``.

    Every ``Edm.*`` primitive seen is registered in the run's table so the
    primitive namespace can declare it later.
    """

    def __init__(self, table: PrimitiveTypeTable, inline_primitives: bool = False):
        self.table = table
        self.inline_primitives = inline_primitives

    def resolve(self, type_ref: Optional[str]) -> Optional[str]:
        match = COLLECTION_PATTERN.match(type_ref) if type_ref else None
        if match:
            return f"{self._resolve_element(match.group(1))}[]"
        # A malformed "Collection(" reference falls through as an opaque name
        return self._resolve_element(type_ref)

    def _resolve_element(self, type_ref: Optional[str]) -> Optional[str]:
        if not type_ref:
            return type_ref
        if not type_ref.startswith(EDM_PREFIX):
            return type_ref  # Structured or enum type declared in some schema
        target = self.table.ensure(type_ref[len(EDM_PREFIX):])
        if self.inline_primitives:
            return target
        return type_ref
