class CMSError(Exception):
    """Base class for errors raised by the CMS."""


class ValidationError(CMSError):
    """User input rejected; the originating form is shown again."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class DocumentNotFound(CMSError):
    def __init__(self, name):
        self.name = name
        super().__init__(self.message)

    @property
    def message(self):
        return f"{self.name} does not exist."


class UnsupportedDocument(DocumentNotFound):
    @property
    def message(self):
        return f"{self.name} cannot be displayed."


class CredentialStoreError(CMSError):
    """The credential file is missing or malformed."""
