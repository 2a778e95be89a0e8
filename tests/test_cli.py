from click.testing import CliRunner

from orbit_map.cli import cli
from orbit_map.core.config import settings


def test_cli_prints_result_line(write_map, reference_lines):
    path = write_map(reference_lines)
    result = CliRunner().invoke(cli, [str(path)])

    assert result.exit_code == 0
    assert result.output == "The total number of direct and indirect orbits is 42\n"


def test_cli_uses_configured_map_path(write_map, chain_lines, monkeypatch):
    path = write_map(chain_lines)
    monkeypatch.setattr(settings, "MAP_PATH", str(path))

    result = CliRunner().invoke(cli, [])

    assert result.exit_code == 0
    assert result.output.strip().endswith("is 66")


def test_cli_missing_file(tmp_path):
    """No result line and a non-zero exit when the map cannot be read"""
    result = CliRunner().invoke(cli, [str(tmp_path / "missing.txt")])

    assert result.exit_code == 1
    assert "direct and indirect orbits is" not in result.output


def test_cli_malformed_map(write_map):
    path = write_map(["COM)B", "broken"])
    result = CliRunner().invoke(cli, [str(path)])

    assert result.exit_code == 1
    assert "orbits is" not in result.output


def test_cli_directory_argument(tmp_path):
    """A directory is an unreadable map, not a usage error"""
    result = CliRunner().invoke(cli, [str(tmp_path)])

    assert result.exit_code == 1
    assert "orbits is" not in result.output
