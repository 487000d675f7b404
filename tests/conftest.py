import hashlib
import shutil
import threading
from dataclasses import dataclass
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import pytest

DATA_DIR = Path(__file__).parent / "data"
TESTFILE_NAME = "testfile"
# digests of tests/data/testfile
TESTFILE_MD5 = "1d6a04e4b6252d924365bb29e7d8faeb"
TESTFILE_SHA1 = "807e718506c5195ee542d6d261fc8a2fe5073586"
TESTFILE_SHA256 = "523ee5416f8c48032c55ee3b2a8545880848a89fe9801e37acc6be23e7346362"
TESTFILE_SHA512 = (
    "ee0adf3c0483ae27107457b290720c21524b05a4143b10eb7d370b9b0a94d7f2"
    "1842d45c0303e63e40f3fad6a4ab68d1e92845366fbd6782435f98ef0f950fb1"
)
TESTFILE_DIGESTS = {
    "md5": TESTFILE_MD5,
    "sha1": TESTFILE_SHA1,
    "sha256": TESTFILE_SHA256,
    "sha512": TESTFILE_SHA512,
}


class QuietHTTPRequestHandler(SimpleHTTPRequestHandler):
    """HTTP request handler that suppresses log messages."""

    def log_message(self, format, *args):
        """Override to suppress HTTP request logging."""


@dataclass
class FileServer:
    """A local HTTP server serving the files of `root`."""

    root: Path
    url: str

    def url_for(self, name: str) -> str:
        return f"{self.url}/{name}"

    def add_file(self, name: str, content: str | bytes) -> str:
        path = self.root / name
        if isinstance(content, str):
            path.write_text(content)
        else:
            path.write_bytes(content)
        return self.url_for(name)


@pytest.fixture
def testfile_content() -> bytes:
    return (DATA_DIR / TESTFILE_NAME).read_bytes()


@pytest.fixture
def file_server(tmp_path):
    """
    Serve a temporary directory over HTTP on a random local port.

    The directory initially contains `testfile` and a companion `CHECKSUMS.<algorithm>`
    file in `sha256sum` format for every supported algorithm.
    """
    root = tmp_path / "served"
    root.mkdir()
    shutil.copy(DATA_DIR / TESTFILE_NAME, root / TESTFILE_NAME)

    content = (root / TESTFILE_NAME).read_bytes()
    for algorithm in TESTFILE_DIGESTS:
        digest = hashlib.new(algorithm, content).hexdigest()
        (root / f"CHECKSUMS.{algorithm}").write_text(
            f"{'0' * len(digest)}  other-file.tar.gz\n{digest}  {TESTFILE_NAME}\n"
        )

    handler = partial(QuietHTTPRequestHandler, directory=str(root))
    server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever, name="test-file-server", daemon=True)
    thread.start()

    host, port = server.server_address[:2]
    try:
        yield FileServer(root=root, url=f"http://{host}:{port}")
    finally:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture
def testfile_digests() -> dict[str, str]:
    """Digests of `testfile` keyed by algorithm name."""
    return dict(TESTFILE_DIGESTS)
