"""
Data models for OData v4 metadata representation.

Models are built from the parsed metadata mapping, where attributes sit under
the ``"$"`` key and every repeatable child element is a list.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, Field

from .constants import ATTRIBUTES_KEY


def _attributes(node: Any) -> Dict[str, Any]:
    """Return the attribute mapping of a parsed element (empty for bare text)."""
    if isinstance(node, dict):
        return node.get(ATTRIBUTES_KEY) or {}
    return {}


def _children(node: Any, tag: str) -> List[Any]:
    """Return the child elements named ``tag``; absent children yield an empty list."""
    if not isinstance(node, dict):
        return []
    children = node.get(tag)
    if children is None:
        return []
    if isinstance(children, list):
        return children
    return [children]


class PropertyRef(BaseModel):
    name: str
    alias: Optional[str] = None

    @classmethod
    def from_parsed(cls, node: Any) -> 'PropertyRef':
        attrs = _attributes(node)
        return cls(name=attrs.get('Name'), alias=attrs.get('Alias'))


class ReferentialConstraint(BaseModel):
    property: str
    referenced_property: str

    @classmethod
    def from_parsed(cls, node: Any) -> 'ReferentialConstraint':
        attrs = _attributes(node)
        return cls(property=attrs.get('Property'), referenced_property=attrs.get('ReferencedProperty'))


class Property(BaseModel):
    kind: Literal["property"] = "property"
    name: str
    type: str  # Raw type reference (e.g., "Edm.String", "Collection(NS.Type)")
    nullable: Optional[bool] = None  # None when the attribute is not declared

    @property
    def optional(self) -> bool:
        # Only an explicit Nullable="false" makes a property required
        return self.nullable is not False

    @classmethod
    def from_parsed(cls, node: Any) -> 'Property':
        attrs = _attributes(node)
        return cls(name=attrs.get('Name'), type=attrs.get('Type'), nullable=attrs.get('Nullable'))


class NavigationProperty(BaseModel):
    kind: Literal["navigation"] = "navigation"
    name: str
    type: str
    nullable: Optional[str] = None  # Declared text, kept unvalidated and never consulted for emission
    partner: Optional[str] = None
    referential_constraints: List[ReferentialConstraint] = []

    @property
    def optional(self) -> bool:
        return True

    @classmethod
    def from_parsed(cls, node: Any) -> 'NavigationProperty':
        attrs = _attributes(node)
        declared_nullable = attrs.get('Nullable')
        return cls(
            name=attrs.get('Name'),
            type=attrs.get('Type'),
            nullable=None if declared_nullable is None else str(declared_nullable),
            partner=attrs.get('Partner'),
            referential_constraints=[
                ReferentialConstraint.from_parsed(rc) for rc in _children(node, 'ReferentialConstraint')
            ]
        )


# A structured type member is tagged once, when the document is loaded
Member = Annotated[Union[Property, NavigationProperty], Field(discriminator="kind")]


class ComplexType(BaseModel):
    name: str
    properties: List[Property] = []

    @property
    def members(self) -> List[Member]:
        return list(self.properties)

    @classmethod
    def from_parsed(cls, node: Any) -> 'ComplexType':
        return cls(
            name=_attributes(node).get('Name'),
            properties=[Property.from_parsed(p) for p in _children(node, 'Property')]
        )


class EntityType(ComplexType):
    key: Optional[List[PropertyRef]] = None
    navigation_properties: List[NavigationProperty] = []

    @property
    def members(self) -> List[Member]:
        """Properties first, then navigation properties, each in source order."""
        return list(self.properties) + list(self.navigation_properties)

    @classmethod
    def from_parsed(cls, node: Any) -> 'EntityType':
        key = None
        key_nodes = _children(node, 'Key')
        if key_nodes:
            key = [PropertyRef.from_parsed(ref) for k in key_nodes for ref in _children(k, 'PropertyRef')]
        return cls(
            name=_attributes(node).get('Name'),
            properties=[Property.from_parsed(p) for p in _children(node, 'Property')],
            key=key,
            navigation_properties=[NavigationProperty.from_parsed(p) for p in _children(node, 'NavigationProperty')]
        )


class EnumMember(BaseModel):
    name: str
    value: int


class EnumType(BaseModel):
    name: str
    members: List[EnumMember] = []

    @classmethod
    def from_parsed(cls, node: Any) -> 'EnumType':
        members = []
        for position, member in enumerate(_children(node, 'Member')):
            attrs = _attributes(member)
            # Members without an explicit Value take their ordinal position
            members.append(EnumMember(name=attrs.get('Name'), value=attrs.get('Value', position)))
        return cls(name=_attributes(node).get('Name'), members=members)


class Schema(BaseModel):
    namespace: str = Field(min_length=1)
    entity_types: List[EntityType] = []
    complex_types: List[ComplexType] = []
    enum_types: List[EnumType] = []

    @classmethod
    def from_parsed(cls, node: Any) -> 'Schema':
        return cls(
            namespace=_attributes(node).get('Namespace'),
            entity_types=[EntityType.from_parsed(t) for t in _children(node, 'EntityType')],
            complex_types=[ComplexType.from_parsed(t) for t in _children(node, 'ComplexType')],
            enum_types=[EnumType.from_parsed(t) for t in _children(node, 'EnumType')]
        )


class MetadataDocument(BaseModel):
    version: str
    schemas: List[Schema] = []

    @classmethod
    def from_parsed(cls, edmx: Dict[str, Any], schemas: List[Any]) -> 'MetadataDocument':
        """Build the document from the ``edmx:Edmx`` element and its Schema elements."""
        return cls(
            version=_attributes(edmx).get('Version'),
            schemas=[Schema.from_parsed(s) for s in schemas]
        )
