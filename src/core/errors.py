"""Error hierarchy for locality detection and SDL validation.

Invariants:
    - Every error has a stable `code` (str) and an operator-ready message
    - Validation errors stop at the first violated rule; nothing is collected
    - DetectionError keeps both provider causes as attributes, not only text
"""

from __future__ import annotations


class LocatorError(Exception):
    """Base exception for every failure raised by this package."""

    code = "LOCATOR_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


# ─── Locality detection ─────────────────────────────────────────

class ProbeError(LocatorError):
    """A single metadata-service probe failed."""

    code = "PROBE_FAILED"

    def __init__(self, provider: str, message: str):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.reason = message


class DetectionError(LocatorError):
    """Neither AWS nor GCP could be detected."""

    code = "DETECTION_FAILED"

    def __init__(self, aws_cause: Exception, gcp_cause: Exception):
        super().__init__(
            "location was not provided and could not be detected, this only "
            "works on an amazon or google instance: "
            f"{gcp_cause}: {aws_cause}"
        )
        self.aws_cause = aws_cause
        self.gcp_cause = gcp_cause

    def to_dict(self) -> dict:
        return {
            **super().to_dict(),
            "aws_cause": str(self.aws_cause),
            "gcp_cause": str(self.gcp_cause),
        }


# ─── SDL payloads ───────────────────────────────────────────────

class SdlDecodeError(LocatorError):
    """SDL body is not JSON or does not have the envelope shape."""

    code = "SDL_DECODE_ERROR"


class UpstreamApiError(LocatorError):
    """SDL answered with its error object instead of an envelope."""

    code = "SDL_API_ERROR"

    def __init__(self, status: int, message: str):
        super().__init__(f"SDL API returned an error: {status}: {message}")
        self.status = status
        self.reason = message


class SdlValidationError(LocatorError):
    """Base for every SDL record validation failure."""

    code = "SDL_VALIDATION_ERROR"


class VersionMismatchError(SdlValidationError):
    code = "SDL_VERSION_MISMATCH"

    def __init__(self, expected: str, actual: str):
        super().__init__(f"Expected version: {expected}, got version: {actual}")
        self.expected = expected
        self.actual = actual


class EmptyResultError(SdlValidationError):
    code = "SDL_EMPTY_RESULT"

    def __init__(self, version: str):
        super().__init__(f"SDL API v{version} returned an empty response")
        self.version = version


class UnrequestedAccessionError(SdlValidationError):
    code = "SDL_UNREQUESTED_ACCESSION"

    def __init__(self, accession_id: str):
        super().__init__(f"SDL API returned accession that wasn't requested: {accession_id}")
        self.accession_id = accession_id


class StatusError(SdlValidationError):
    code = "SDL_ACCESSION_STATUS"

    def __init__(self, accession_id: str, status: int, message: str):
        super().__init__(f"SDL API: {accession_id} returned status: {status}: {message}")
        self.accession_id = accession_id
        self.status = status
        self.reason = message


class EmptyFilesError(SdlValidationError):
    code = "SDL_EMPTY_FILES"

    def __init__(self, accession_id: str):
        super().__init__(f"SDL API returned no files for accession {accession_id}")
        self.accession_id = accession_id


class DuplicateAccessionError(SdlValidationError):
    code = "SDL_DUPLICATE_ACCESSION"

    def __init__(self, accession_id: str):
        super().__init__(f"SDL API returned a duplicate accession: {accession_id}")
        self.accession_id = accession_id


class MissingFieldError(SdlValidationError):
    """A required string field is empty; `record` names the owner (file/location)."""

    code = "SDL_MISSING_FIELD"

    def __init__(self, record: str, field: str, owner: str = ""):
        where = f" ({owner})" if owner else ""
        super().__init__(f"SDL API returned a {record} without a {field}{where}")
        self.record = record
        self.field = field
        self.owner = owner


class MultipleLocationsError(SdlValidationError):
    code = "SDL_MULTIPLE_LOCATIONS"

    def __init__(self, file_name: str, count: int):
        super().__init__(f"SDL API returned {count} locations for file {file_name}, expected at most one")
        self.file_name = file_name
        self.count = count
