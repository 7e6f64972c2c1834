"""Failures raised by record stores and recovered at the API boundary."""


class RecordStoreError(Exception):
    """Base class for record store failures."""


class ValidationFailed(RecordStoreError):
    """A required domain field is missing or empty."""


class NotFound(RecordStoreError):
    """No record exists under the given identifier."""

    def __init__(self, record_id: object) -> None:
        super().__init__(f"no record with id {record_id!r}")
        self.record_id = record_id


class MalformedIdentifier(RecordStoreError):
    """The identifier is not in the shape the backing store expects."""

    def __init__(self, record_id: object) -> None:
        super().__init__(f"malformatted id {record_id!r}")
        self.record_id = record_id
