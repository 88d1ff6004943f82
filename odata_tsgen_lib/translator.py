"""
Translation of OData v4 metadata into TypeScript declaration source.
"""

import sys
import traceback
from datetime import datetime
from typing import Any, Dict, List, Union

from .constants import ATTRIBUTES_KEY, DATA_SERVICES_ELEMENT, ROOT_ELEMENT, SUPPORTED_VERSION
from .emitter import DeclarationEmitter, PrimitiveNamespaceEmitter
from .errors import InvalidDocumentError, UnexpectedTranslationError, UnsupportedVersionError
from .models import MetadataDocument
from .primitive_types import PrimitiveTypeTable
from .type_resolver import TypeReferenceResolver


class Translator:
    """Translates a metadata document into namespaces, interfaces, enums and EDM aliases."""

    def __init__(self, verbose: bool = False, inline_primitives: bool = False):
        self.verbose = verbose
        self.inline_primitives = inline_primitives

    def _log_verbose(self, message: str):
        """Prints message to stderr only if verbose mode is enabled."""
        if self.verbose:
            timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
            print(f"[{timestamp} Translator VERBOSE] {message}", file=sys.stderr)

    def translate(self, document: Union[Dict[str, Any], MetadataDocument]) -> str:
        """
        Translate parsed metadata into declaration source text.

        Args:
            document: Parsed metadata mapping (rooted at ``edmx:Edmx``) or a
                MetadataDocument built beforehand

        Returns:
            The schema namespaces followed by the ``Edm`` primitive namespace

        Raises:
            InvalidDocumentError: the root element is missing or malformed
            UnsupportedVersionError: the metadata version is not 4.0
            UnexpectedTranslationError: anything else went wrong during the walk
        """
        if not isinstance(document, MetadataDocument):
            document = self.load_document(document)
        elif document.version != SUPPORTED_VERSION:
            raise UnsupportedVersionError(document.version)

        try:
            # One table per run
            table = PrimitiveTypeTable()
            resolver = TypeReferenceResolver(table, inline_primitives=self.inline_primitives)
            declarations = DeclarationEmitter(resolver).emit(document.schemas)
            primitives = PrimitiveNamespaceEmitter(table).emit()
        except Exception as e:
            raise self._unexpected(e) from e

        self._log_verbose(f"Translated {len(document.schemas)} schemas, {len(table)} primitive types.")
        return declarations + primitives

    def load_document(self, data: Dict[str, Any]) -> MetadataDocument:
        """Validate the parsed mapping and build a MetadataDocument from it."""
        edmx = data.get(ROOT_ELEMENT) if isinstance(data, dict) else None
        if not isinstance(edmx, dict):
            self._log_verbose(f"Received invalid data: {data!r}")
            raise InvalidDocumentError(f"Missing '{ROOT_ELEMENT}' root element")

        attributes = edmx.get(ATTRIBUTES_KEY) or {}
        if not isinstance(attributes, dict):
            raise InvalidDocumentError(f"Malformed '{ROOT_ELEMENT}' attributes: {attributes!r}")
        version = attributes.get('Version')
        if version != SUPPORTED_VERSION:
            raise UnsupportedVersionError(version)

        schemas = self._schema_elements(edmx)
        try:
            document = MetadataDocument.from_parsed(edmx, schemas)
        except Exception as e:
            raise self._unexpected(e) from e
        self._log_verbose(f"Loaded OData {version} metadata with {len(document.schemas)} schemas.")
        return document

    def _schema_elements(self, edmx: Dict[str, Any]) -> List[Any]:
        data_services = edmx.get(DATA_SERVICES_ELEMENT)
        if isinstance(data_services, list):
            data_services = data_services[0] if data_services else None
        if not isinstance(data_services, dict):
            raise InvalidDocumentError(f"Missing '{DATA_SERVICES_ELEMENT}' element")
        schemas = data_services.get('Schema') or []
        return schemas if isinstance(schemas, list) else [schemas]

    def _unexpected(self, error: Exception) -> UnexpectedTranslationError:
        self._log_verbose(f"Unknown error: {error}")
        if self.verbose:
            traceback.print_exc(file=sys.stderr)
        return UnexpectedTranslationError(f"{type(error).__name__}: {error}")
