"""Tests for retrieving checksums from literal, remote and local sources."""

import pytest
import requests
from checked_download.checksum.resolver import resolve, resolve_expected_digest
from checked_download.checksum.spec import LocalSource, SourceKind
from checked_download.exceptions import ChecksumSourceError, DigestNotFoundError, InvalidChecksumError

DIGEST = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


class TestResolve:
    def test_literal(self):
        resolved = resolve(DIGEST.upper(), None, "abc.bin")
        assert resolved.kind is SourceKind.LITERAL
        assert resolved.content == DIGEST

    def test_remote(self, file_server):
        url = file_server.add_file("SHA256SUMS", f"{DIGEST}  abc.bin\n")
        with requests.Session() as session:
            resolved = resolve(url, session, "abc.bin")
        assert resolved.kind is SourceKind.REMOTE
        assert resolved.location == url
        assert resolved.content == f"{DIGEST}  abc.bin\n"

    def test_remote_without_session(self, file_server):
        url = file_server.add_file("SHA256SUMS", DIGEST)
        assert resolve(url).content == DIGEST

    def test_remote_not_found(self, file_server):
        url = file_server.url_for("MISSING")
        with pytest.raises(ChecksumSourceError, match="status code 404") as excinfo:
            resolve(url, None, "abc.bin")
        assert excinfo.value.location == url

    def test_remote_unreachable(self):
        # port 9 (discard) on localhost is closed in test environments
        with pytest.raises(ChecksumSourceError) as excinfo:
            resolve("http://127.0.0.1:9/SHA256SUMS", None, "abc.bin", timeout=2)
        assert isinstance(excinfo.value.cause, requests.RequestException)

    def test_local(self, tmp_path):
        checksum_file = tmp_path / "SHA256SUMS"
        checksum_file.write_text(f"{DIGEST}  abc.bin\n")

        resolved = resolve(str(checksum_file))
        assert resolved.kind is SourceKind.LOCAL
        assert resolved.location == str(checksum_file)
        assert resolved.content == f"{DIGEST}  abc.bin\n"

    def test_local_unreadable(self, tmp_path):
        checksum_file = tmp_path / "SHA256SUMS"
        checksum_file.write_text(DIGEST)
        spec = LocalSource(checksum_file)
        checksum_file.unlink()

        with pytest.raises(ChecksumSourceError, match="failed to read checksum file"):
            resolve(spec)

    def test_invalid(self):
        with pytest.raises(InvalidChecksumError, match="^invalid checksum"):
            resolve("totally invalid")


class TestResolveExpectedDigest:
    def test_literal_is_used_as_is(self):
        assert resolve_expected_digest(DIGEST.upper(), None, "whatever") == DIGEST

    def test_remote_two_column(self, file_server):
        url = file_server.add_file("SHA256SUMS", f"{'0' * 64}  other.bin\n{DIGEST.upper()}  abc.bin\n")
        assert resolve_expected_digest(url, None, "abc.bin") == DIGEST

    def test_remote_missing_entry(self, file_server):
        url = file_server.add_file("SHA256SUMS", f"{DIGEST}  abc.bin\n")
        with pytest.raises(DigestNotFoundError):
            resolve_expected_digest(url, None, "unrelated.bin")

    def test_local_bare_digest(self, tmp_path):
        checksum_file = tmp_path / "abc.bin.sha256"
        checksum_file.write_text(f"{DIGEST}\n")
        assert resolve_expected_digest(str(checksum_file), None, "any-name") == DIGEST

    def test_remote_non_ascii_filename(self, file_server):
        """
        GIVEN a UTF-8 checksum file served as text/plain without a charset
        WHEN the digest for a non-ASCII filename is resolved
        THEN the entry should be found like it is for a local file
        """
        content = f"{'0' * 64}  other.pdf\n{DIGEST}  résumé.pdf\n".encode()
        url = file_server.add_file("SHA256SUMS.txt", content)
        assert resolve_expected_digest(url, None, "résumé.pdf") == DIGEST

    def test_remote_not_utf8(self, file_server):
        url = file_server.add_file("SHA256SUMS.txt", f"{DIGEST}  r\xe9sum\xe9.pdf\n".encode("latin-1"))
        with pytest.raises(ChecksumSourceError, match="failed to read checksum file") as excinfo:
            resolve_expected_digest(url, None, "résumé.pdf")
        assert isinstance(excinfo.value.cause, UnicodeDecodeError)
