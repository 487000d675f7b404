class ChecksumError(Exception):
    """Base exception for checksum resolution and verification errors."""


class InvalidChecksumError(ChecksumError, ValueError):
    """Raised when the checksum argument is neither a hex digest, an absolute URL nor an existing file."""

    def __init__(self, value: str, reason: str | None = None):
        self.value = value
        message = f"invalid checksum: {value!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ChecksumSourceError(ChecksumError):
    """Raised when a remote or local checksum file cannot be retrieved."""

    def __init__(self, message: str, location: str | None = None, cause: Exception | None = None):
        self.location = location
        self.cause = cause
        super().__init__(f"{message}: {cause}" if cause else message)


class DigestNotFoundError(ChecksumError):
    """Raised when a checksum file holds no digest for the requested file."""

    def __init__(self, filename: str):
        self.filename = filename
        super().__init__(f"checksum not found for file {filename!r}")


class ChecksumMismatchError(ChecksumError):
    """Raised when the downloaded content does not match the expected digest."""

    def __init__(self, expected: str, actual: str, filename: str | None = None):
        self.expected = expected
        self.actual = actual
        self.filename = filename
        target = f" for {filename!r}" if filename else ""
        super().__init__(f"checksum validation failed{target}: expected {expected}, got {actual}")


class UnsupportedAlgorithmError(ChecksumError, ValueError):
    """Raised when a hash algorithm selector maps to no known implementation."""

    def __init__(self, algorithm: object):
        self.algorithm = algorithm
        super().__init__(f"invalid hash function: {algorithm!r}")


class DownloadError(Exception):
    """Raised when transferring the payload fails (invalid URL, HTTP status, I/O)."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(f"{message}: {cause}" if cause else message)
