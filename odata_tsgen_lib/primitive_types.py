"""
Run-scoped table of EDM primitive types and their TypeScript counterparts.
"""

from typing import Dict, List, Optional, Tuple

from .constants import EDM_PRIMITIVE_TYPES, FALLBACK_TYPE


class PrimitiveTypeTable:
    """Maps EDM primitive short names (e.g. "Guid") to TypeScript types.

    Every instance starts from the 16 OData built-ins. Names discovered while
    resolving type references are added with the fallback type, so one table
    must never be shared between translation runs.
    """

    def __init__(self, fallback_type: str = FALLBACK_TYPE):
        self.fallback_type = fallback_type
        self._types: Dict[str, str] = dict(EDM_PRIMITIVE_TYPES)

    def lookup(self, name: str) -> Optional[str]:
        return self._types.get(name)

    def ensure(self, name: str) -> str:
        """Register ``name`` with the fallback type if unknown; return its target type."""
        if name not in self._types:
            self._types[name] = self.fallback_type
        return self._types[name]

    def entries(self) -> List[Tuple[str, str]]:
        """Built-ins in seed order, then discovered names in order of first use."""
        return list(self._types.items())

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)
