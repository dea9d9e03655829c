"""
Error taxonomy for the sequencing engine and its store boundary.
Unclassifiable records and records missing from their cohort are outcomes, not errors.
"""


class MeetingLinksError(Exception):
    """Base class for all meeting links errors."""


class MissingIdentifier(MeetingLinksError):
    """The inbound event does not carry a record identifier."""


class SourceUnavailable(MeetingLinksError):
    """A query or retrieve call against the record store failed."""


class WriteRejected(MeetingLinksError):
    """The record store rejected the relation update."""


class MalformedRecord(MeetingLinksError):
    """A raw store payload is missing fields required to classify or sort."""


class ConfigurationError(MeetingLinksError):
    """Required configuration is missing or invalid."""
