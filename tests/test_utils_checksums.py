import hashlib

import pytest
from checked_download.utils.checksums import calculate_digest


@pytest.mark.parametrize("algorithm", ["md5", "sha1", "sha256", "sha512"])
@pytest.mark.parametrize("progress", [False, True], ids=["plain", "with_tqdm"])
def test_calculate_digest(tmp_path, algorithm, progress):
    """Chunked digests match hashlib for files larger than a chunk"""
    test_data = b"A" * 10000 + b"B" * 10000 + b"C" * 10001
    test_file = tmp_path / "test_file.bin"
    test_file.write_bytes(test_data)

    assert calculate_digest(test_file, algorithm, chunk_size=4096, progress=progress) == (
        hashlib.new(algorithm, test_data).hexdigest()
    )


def test_calculate_digest_defaults_to_sha256(tmp_path):
    test_file = tmp_path / "empty.bin"
    test_file.write_bytes(b"")
    assert calculate_digest(test_file) == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
