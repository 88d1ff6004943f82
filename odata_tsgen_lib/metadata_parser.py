"""
Retrieval of OData $metadata documents and conversion into the parsed mapping
consumed by the translator.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union
import requests
from lxml import etree

from .constants import ATTRIBUTES_KEY

METADATA_SEGMENT = "$metadata"


def metadata_url_for(service_url: str) -> str:
    """Normalize a service URL (with or without $metadata) to its $metadata URL."""
    url = service_url.strip().replace(METADATA_SEGMENT, "")
    if url.endswith("/"):
        url = url[:-1]
    return f"{url}/{METADATA_SEGMENT}"


def _qualified_name(node, name: str) -> str:
    """Turn a Clark-notation name into the prefixed form used in the document."""
    qname = etree.QName(name)
    if qname.namespace is None:
        return qname.localname
    for prefix, uri in node.nsmap.items():
        if uri == qname.namespace and prefix:
            return f"{prefix}:{qname.localname}"
    return qname.localname


def element_to_dict(element) -> Dict[str, Any]:
    """
    Convert an XML element into the attribute-under-``$`` mapping.

    Args:
        element: lxml element

    Returns:
        Mapping with attributes under ``"$"`` and one list per child tag
    """
    result: Dict[str, Any] = {}
    attributes = {_qualified_name(element, k): v for k, v in element.attrib.items()}

    # Namespace declarations introduced by this element are kept as attributes
    parent = element.getparent()
    inherited = parent.nsmap if parent is not None else {}
    for prefix, uri in element.nsmap.items():
        if inherited.get(prefix) != uri:
            attributes["xmlns:" + prefix if prefix else "xmlns"] = uri

    if attributes:
        result[ATTRIBUTES_KEY] = attributes
    for child in element:
        if not isinstance(child.tag, str):
            continue  # Comments and processing instructions
        result.setdefault(_qualified_name(child, child.tag), []).append(element_to_dict(child))
    return result


class MetadataParser:
    """Fetches and parses OData v4 metadata from an OData service."""

    def __init__(self, service_url: str, auth: Optional[Union[Tuple[str, str], Dict[str, str]]] = None,
                 verbose: bool = False):
        self.service_url = service_url
        self.metadata_url = metadata_url_for(service_url)
        self.auth = auth
        self.verbose = verbose
        self.session = requests.Session()
        if isinstance(auth, tuple):
            self.session.auth = auth
        elif isinstance(auth, dict):
            self.session.cookies.update(auth)
        # Standard headers
        self.session.headers.update({
            'Accept': 'application/xml',
            'User-Agent': 'OData-TSGen/1.0'
        })

    def _log_verbose(self, message: str):
        """Prints message to stderr only if verbose mode is enabled."""
        if self.verbose:
            timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]
            print(f"[{timestamp} Parser VERBOSE] {message}", file=sys.stderr)

    @staticmethod
    def parse_xml(content: bytes) -> Dict[str, Any]:
        """Parse metadata XML into a mapping keyed by the prefixed root tag."""
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        root = etree.fromstring(content, parser=parser)
        return {_qualified_name(root, root.tag): element_to_dict(root)}

    def fetch(self) -> Dict[str, Any]:
        """Fetch the $metadata document and return it as a parsed mapping."""
        self._log_verbose(f"Fetching metadata from {self.metadata_url}...")
        try:
            response = self.session.get(self.metadata_url)
            response.raise_for_status()
        except requests.exceptions.RequestException as req_err:
            # Fatal error, print regardless of verbosity
            print(f"FATAL ERROR: Could not fetch metadata: {req_err}", file=sys.stderr)
            if req_err.response is not None and req_err.response.status_code in [401, 403]:
                print("ERROR: Authentication might be required or incorrect. Check credentials.", file=sys.stderr)
            raise
        self._log_verbose("Metadata fetched successfully.")
        return self.parse_xml(response.content)

    @staticmethod
    def load_file(path: Union[str, Path]) -> Dict[str, Any]:
        """Parse a metadata document saved on disk."""
        return MetadataParser.parse_xml(Path(path).read_bytes())
