"""
OData TSGen Library - Translates OData v4 metadata into TypeScript declarations.
"""

from .models import (
    ComplexType,
    EntityType,
    EnumMember,
    EnumType,
    MetadataDocument,
    NavigationProperty,
    Property,
    Schema
)
from .errors import (
    InvalidDocumentError,
    TranslationError,
    UnexpectedTranslationError,
    UnsupportedVersionError,
    ValidationError
)
from .primitive_types import PrimitiveTypeTable
from .type_resolver import TypeReferenceResolver
from .emitter import DeclarationEmitter, PrimitiveNamespaceEmitter
from .translator import Translator
from .metadata_parser import MetadataParser, metadata_url_for

__all__ = [
    'ComplexType',
    'EntityType',
    'EnumMember',
    'EnumType',
    'MetadataDocument',
    'NavigationProperty',
    'Property',
    'Schema',
    'InvalidDocumentError',
    'TranslationError',
    'UnexpectedTranslationError',
    'UnsupportedVersionError',
    'ValidationError',
    'PrimitiveTypeTable',
    'TypeReferenceResolver',
    'DeclarationEmitter',
    'PrimitiveNamespaceEmitter',
    'Translator',
    'MetadataParser',
    'metadata_url_for'
]
