"""
Custom Exceptions

Application-specific exception classes. Source, enrichment and per-record
storage errors are recovered inside the pipeline; connection and
orchestration errors reach the caller.
"""


class CuraLinkError(Exception):
    """Base exception for all application errors."""
    pass


# === Data Source Errors ===

class SourceError(CuraLinkError):
    """Base exception for data source errors."""
    def __init__(self, source_name: str, message: str):
        self.source_name = source_name
        self.message = message
        super().__init__(f"{source_name}: {message}")


class SourceTimeoutError(SourceError):
    """Data source timed out during request."""
    def __init__(self, source_name: str, timeout_seconds: float):
        super().__init__(source_name, f"Request timed out after {timeout_seconds}s")
        self.timeout_seconds = timeout_seconds


class SourceHTTPError(SourceError):
    """Data source returned a non-2xx status."""
    def __init__(self, source_name: str, status_code: int, detail: str = None):
        msg = f"HTTP {status_code}"
        if detail:
            msg += f": {detail}"
        super().__init__(source_name, msg)
        self.status_code = status_code


class SourceParseError(SourceError):
    """Failed to parse response from data source."""
    def __init__(self, source_name: str, detail: str = None):
        msg = "Failed to parse response"
        if detail:
            msg += f": {detail}"
        super().__init__(source_name, msg)


# === LLM/AI Errors ===

class LLMError(CuraLinkError):
    """Base exception for LLM-related errors."""
    pass


class EnrichmentError(LLMError):
    """Summary generation failed for a single record."""
    def __init__(self, record_key: str, detail: str = None):
        msg = f"Could not summarize {record_key}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
        self.record_key = record_key


# === Store Errors ===

class StoreError(CuraLinkError):
    """Base exception for record store errors."""
    pass


class StoreConnectionError(StoreError):
    """The record store cannot be reached."""
    def __init__(self, url: str, detail: str = None):
        msg = f"Failed to connect to record store at {url}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
        self.url = url


class StoreWriteError(StoreError):
    """A single upsert was rejected by the store."""
    def __init__(self, table: str, record_key: str, detail: str = None):
        msg = f"Upsert into {table} failed for {record_key}"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
        self.table = table
        self.record_key = record_key


# === Ingestion Errors ===

class IngestError(CuraLinkError):
    """Ingestion aborted before producing a result."""
    def __init__(self, kind: str, message: str):
        self.kind = kind
        self.message = message
        super().__init__(f"Ingestion of {kind} failed: {message}")
