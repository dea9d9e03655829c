"""
Meeting store boundary: typed records, the store interface and its implementations.
"""

from .types import Record, MeetingQuery, QueryPage
from .base import IMeetingStore
from .memory import InMemoryMeetingStore
from .notion import NotionMeetingStore, decode_record

__all__ = [
    'Record',
    'MeetingQuery',
    'QueryPage',
    'IMeetingStore',
    'InMemoryMeetingStore',
    'NotionMeetingStore',
    'decode_record'
]
