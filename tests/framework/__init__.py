"""
In-memory record layer standing in for an ORM in tests.
"""

from .backend import InMemoryBackend, NotFoundError
from .fields import Field
from .records import Record, RecordInvalid

__all__ = [
    'InMemoryBackend',
    'NotFoundError',
    'Field',
    'Record',
    'RecordInvalid',
]
