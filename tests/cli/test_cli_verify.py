import json

import pytest
from checked_download.cli import build_cli
from click.testing import CliRunner


@pytest.fixture
def local_testfile(file_server):
    return file_server.root / "testfile"


def test_verify_literal(local_testfile, testfile_digests):
    runner = CliRunner()
    result = runner.invoke(
        build_cli(),
        ["verify", str(local_testfile), "--checksum", testfile_digests["sha1"], "--algorithm", "sha1", "--json"],
        catch_exceptions=False,
    )

    assert result.exit_code == 0, result.output
    report = json.loads(next(line for line in result.stdout.splitlines() if line.startswith("{")))
    assert report["valid"] is True
    assert report["checksum"] == testfile_digests["sha1"]


def test_verify_remote_checksum_file(file_server, local_testfile):
    """
    GIVEN a local file and a served checksum file listing it
    WHEN the verify command is called with the checksum file URL
    THEN the verification should succeed
    """
    runner = CliRunner()
    result = runner.invoke(
        build_cli(),
        ["verify", str(local_testfile), "--checksum", file_server.url_for("CHECKSUMS.sha256")],
        catch_exceptions=False,
    )
    assert result.exit_code == 0, result.output


def test_verify_with_name(file_server, tmp_path, testfile_content):
    """
    GIVEN a local copy stored under a different name
    WHEN the verify command is called with --name
    THEN the checksum entry for that name should be used
    """
    copy = tmp_path / "local-copy.bin"
    copy.write_bytes(testfile_content)
    runner = CliRunner()

    result = runner.invoke(build_cli(), ["verify", str(copy), "--checksum", file_server.url_for("CHECKSUMS.md5")])
    assert result.exit_code == 1
    assert "checksum not found for file 'local-copy.bin'" in result.output

    result = runner.invoke(
        build_cli(),
        [
            "verify",
            str(copy),
            "--checksum",
            file_server.url_for("CHECKSUMS.md5"),
            "--algorithm",
            "md5",
            "--name",
            "testfile",
        ],
    )
    assert result.exit_code == 0, result.output


def test_verify_mismatch(local_testfile):
    runner = CliRunner()
    result = runner.invoke(build_cli(), ["verify", str(local_testfile), "--checksum", "00" * 32])

    assert result.exit_code == 1


def test_digest_output_is_a_valid_checksum_file(file_server, local_testfile, tmp_path, testfile_digests):
    """
    GIVEN a local file
    WHEN the digest command output is saved and used as checksum file
    THEN it lists the file's digest and verifies it
    """
    runner = CliRunner()
    result = runner.invoke(
        build_cli(),
        ["--log-level", "WARNING", "digest", str(local_testfile), "--algorithm", "sha512"],
        catch_exceptions=False,
    )

    assert result.exit_code == 0, result.output
    assert f"{testfile_digests['sha512']}  testfile" in result.stdout

    checksum_file = tmp_path / "SHA512SUMS"
    checksum_file.write_text(result.stdout)
    result = runner.invoke(
        build_cli(),
        ["verify", str(local_testfile), "--checksum", str(checksum_file), "--algorithm", "sha512"],
    )
    assert result.exit_code == 0, result.output
