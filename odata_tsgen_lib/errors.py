"""
Error types raised by the metadata translator.
"""

from typing import Optional


class TranslationError(Exception):
    """Base error for translation failures.

    ``message`` is the text shown to the user; the exception text may carry
    more detail for the console.
    """

    message = "Translation failed."

    def __init__(self, detail: Optional[str] = None, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(detail or self.message)


class ValidationError(TranslationError):
    """The document cannot be translated as given."""


class InvalidDocumentError(ValidationError):
    """Root element is missing or not shaped like OData metadata."""

    message = "Response is not valid oData metadata. See console for more information"


class UnsupportedVersionError(ValidationError):
    """Metadata declares a version other than 4.0."""

    message = "Metadata is not valid Odata Version. Only 4.0 supported."

    def __init__(self, version: Optional[str]):
        self.version = version
        super().__init__(f"Unsupported OData metadata version: {version!r}")


class UnexpectedTranslationError(TranslationError):
    """Any other failure while walking the document."""

    message = "Unknown error occurred, see console output for more information."
