"""Stream files from URLs while validating them against literal or remote checksums."""

from .checksum import HashAlgorithm
from .download import (
    DownloadOptions,
    FileDownloadOptions,
    ProgressBarOptions,
    download,
    download_to_file,
    download_url,
)
from .exceptions import (
    ChecksumError,
    ChecksumMismatchError,
    ChecksumSourceError,
    DigestNotFoundError,
    DownloadError,
    InvalidChecksumError,
    UnsupportedAlgorithmError,
)
from .pipeline.validators import ChecksumValidator, new_validator

__all__ = [
    "ChecksumError",
    "ChecksumMismatchError",
    "ChecksumSourceError",
    "ChecksumValidator",
    "DigestNotFoundError",
    "DownloadError",
    "DownloadOptions",
    "FileDownloadOptions",
    "HashAlgorithm",
    "InvalidChecksumError",
    "ProgressBarOptions",
    "UnsupportedAlgorithmError",
    "download",
    "download_to_file",
    "download_url",
    "new_validator",
]
