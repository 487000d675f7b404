import json

import pytest
import yaml
from checked_download.cli import build_cli
from checked_download.commands import options
from checked_download.utils.config import merge_config_dicts
from click.testing import CliRunner


@pytest.fixture
def no_default_config(monkeypatch, tmp_path):
    monkeypatch.setattr(options, "DEFAULT_CONFIG_PATH", tmp_path / "does-not-exist.yaml")


@pytest.fixture
def temp_config_file_paths(tmp_path):
    first = tmp_path / "first.yaml"
    first.write_text(yaml.safe_dump({"timeout": 10.0, "progress": {"enabled": False}}))
    second = tmp_path / "second.yaml"
    second.write_text(yaml.safe_dump({"checksum_algorithm": "md5", "progress": {"max_width": 90}}))
    return first, second


def _logged_json(caplog, prefix):
    records = [rec for rec in caplog.records if rec.message.startswith(prefix)]
    assert len(records) == 1
    return json.loads(records[0].message.replace(prefix, ""))


def test_dump_config_no_files(caplog, no_default_config):
    """
    GIVEN the checked-download cli
    WHEN the dump-config command is called without any config files
    THEN the command should succeed and log that no config files were loaded
    """
    runner = CliRunner()
    result = runner.invoke(build_cli(), ["dump-config"])

    assert result.exit_code == 0
    assert "Configuration files to load: []" in caplog.text
    assert "Merged configuration: {}" in caplog.text


def test_dump_config_with_files(caplog, temp_config_file_paths):
    """
    GIVEN the checked-download cli
    WHEN the dump-config command is called with multiple config files
    THEN the command should succeed and log the merged configuration
    """
    first, second = temp_config_file_paths
    runner = CliRunner()
    result = runner.invoke(build_cli(), ["dump-config", "--config-file", str(first), "--config-file", str(second)])

    assert result.exit_code == 0
    assert str(first) in caplog.text
    assert str(second) in caplog.text

    with open(first) as fd:
        first_content = yaml.safe_load(fd)
    with open(second) as fd:
        second_content = yaml.safe_load(fd)

    assert _logged_json(caplog, "Merged configuration: ") == merge_config_dicts(first_content, second_content)


def test_dump_config_global_args(caplog, temp_config_file_paths):
    """
    GIVEN the checked-download cli
    WHEN config files are passed both to the group and to dump-config
    THEN both files should be merged, the group's file first
    """
    first, second = temp_config_file_paths
    runner = CliRunner()
    result = runner.invoke(build_cli(), ["--config-file", str(first), "dump-config", "--config-file", str(second)])

    assert result.exit_code == 0
    assert _logged_json(caplog, "Merged configuration: ") == {
        "timeout": 10.0,
        "checksum_algorithm": "md5",
        "progress": {"enabled": False, "max_width": 90},
    }


def test_dump_config_effective(caplog, temp_config_file_paths, monkeypatch):
    first, second = temp_config_file_paths
    monkeypatch.setenv("CHECKED_DOWNLOAD_TIMEOUT", "3")

    runner = CliRunner()
    result = runner.invoke(
        build_cli(), ["dump-config", "--effective", "--config-file", str(first), "--config-file", str(second)]
    )

    assert result.exit_code == 0
    effective = _logged_json(caplog, "Effective configuration: ")
    assert effective["timeout"] == 3.0
    assert effective["checksum_algorithm"] == "md5"
    assert effective["progress"] == {"enabled": False, "max_width": 90}
