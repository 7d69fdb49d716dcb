"""Document providers other than the local index store."""

from .remote import HttpDocumentProvider, ProviderTransportError

__all__ = ["HttpDocumentProvider", "ProviderTransportError"]
