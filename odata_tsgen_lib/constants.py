"""
Constants used throughout the OData TypeScript generator library.
"""

# OData primitive type mappings to TypeScript types, in emission order
EDM_PRIMITIVE_TYPES = {
    "Duration": "string",
    "Binary": "string",
    "Boolean": "boolean",
    "Byte": "number",
    "Date": "string",
    "DateTimeOffset": "string",
    "Decimal": "number",
    "Double": "number",
    "Guid": "string",
    "Int16": "number",
    "Int32": "number",
    "Int64": "number",
    "SByte": "number",
    "Single": "number",
    "String": "string",
    "TimeOfDay": "string"
}

# Target type for primitives missing from the table
FALLBACK_TYPE = "any"

EDM_PREFIX = "Edm."
PRIMITIVE_NAMESPACE = "Edm"

SUPPORTED_VERSION = "4.0"

# Keys of the parsed metadata mapping
ATTRIBUTES_KEY = "$"
ROOT_ELEMENT = "edmx:Edmx"
DATA_SERVICES_ELEMENT = "edmx:DataServices"
