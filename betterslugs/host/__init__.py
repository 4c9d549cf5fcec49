"""Host adapters and capability interfaces for the slug engine."""

from .contentful import ContentfulEntryFetcher
from .memory import InMemoryField, InMemoryHost, InMemorySlugField
from .protocols import EntryField, SlugField, SlugHost

__all__ = [
    "ContentfulEntryFetcher",
    "EntryField",
    "InMemoryField",
    "InMemoryHost",
    "InMemorySlugField",
    "SlugField",
    "SlugHost",
]
