"""Exceptions raised during ingestion."""


class IngestError(Exception):
    """Base class for ingestion errors."""


class ConfigurationError(IngestError):
    """Unknown source, malformed repository URL or unusable client setup.

    Fatal: raised before anything is fetched.
    """


class TransportError(IngestError):
    """A page could not be fetched (timeout, connection failure, non-2xx)."""

    def __init__(self, url: str, message: str, status_code: int = 0):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class CloneError(IngestError):
    """``git clone`` failed for a repository source."""


class DocumentReadError(IngestError):
    """A file in a cloned repository could not be read."""

    def __init__(self, path: str, message: str):
        super().__init__(message)
        self.path = path
