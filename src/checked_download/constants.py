"""Constants for progress bars, streaming and HTTP settings."""

PACKAGE_ROOT = "checked_download"

TQDM_BAR_FORMAT = "{desc} ▕{bar:50}▏ {n_fmt:>10}/{total_fmt:<10} ({rate_fmt:>12}, ETA: {remaining:>6}) {postfix}"
TQDM_DEFAULTS = {
    "bar_format": TQDM_BAR_FORMAT,
    "unit": "iB",
    "unit_scale": True,
    "miniters": 1,
    "smoothing": 0.00001,
    "colour": "cyan",
    "ascii": "░▒█",
}
TQDM_SMOOTHING = 0.00001

# Default chunk size for streaming copies
STREAMING_CHUNK_SIZE = 64 * 1024  # 64 KiB

# Timeout (seconds) for connecting to and reading from HTTP servers
DEFAULT_HTTP_TIMEOUT = 30.0

# Prefix of the hidden temporary file a download is streamed into before the final rename
TEMP_FILE_PREFIX = ".tmp-"
