"""Tests for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from helloprint.cli.main import cli

from tests.fixtures.hellos import create_client_hello, create_server_hello, create_ssl2_client_hello


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


@pytest.fixture
def client_hex() -> str:
    return create_client_hello(record=True).hex()


class TestVersionOption:
    """Tests for --version option."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "helloprint" in result.output.lower()


class TestHelpOption:
    """Tests for --help option."""

    def test_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "fingerprint" in result.output

    def test_fingerprint_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fingerprint", "--help"])
        assert result.exit_code == 0
        assert "--role" in result.output
        assert "--mode" in result.output
        assert "--json" in result.output


class TestFingerprintCommand:
    """Tests for the fingerprint command."""

    def test_hex_argument(self, runner: CliRunner, client_hex: str) -> None:
        result = runner.invoke(cli, ["fingerprint", client_hex])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("ja4: t13d0408h2_")
        assert "ja4_r" not in result.output

    def test_hex_with_separators(self, runner: CliRunner) -> None:
        data = create_client_hello()
        spaced = "0x" + ":".join(f"{b:02x}" for b in data)
        result = runner.invoke(cli, ["fingerprint", spaced])
        assert result.exit_code == 0, result.output
        assert "t13d0408h2_" in result.output

    def test_raw(self, runner: CliRunner, client_hex: str) -> None:
        result = runner.invoke(cli, ["fingerprint", "--raw", client_hex])
        assert result.exit_code == 0, result.output
        assert "ja4_r: t13d0408h2_1301,1302,1303,c02b_" in result.output

    def test_raw_short_flag(self, runner: CliRunner, client_hex: str) -> None:
        result = runner.invoke(cli, ["fingerprint", "-r", client_hex])
        assert result.exit_code == 0, result.output
        assert "ja4_r: t13d0408h2_" in result.output

    def test_json(self, runner: CliRunner, client_hex: str) -> None:
        result = runner.invoke(cli, ["fingerprint", "--json", client_hex])
        assert result.exit_code == 0, result.output

        payload = json.loads(result.output)
        assert payload["fingerprint"]["ja4"].startswith("t13d0408h2_")
        assert payload["fingerprint"]["degraded"] is False
        assert payload["fields"]["sni"] == "example.com"

    def test_server_role(self, runner: CliRunner) -> None:
        data = create_server_hello(record=True).hex()
        result = runner.invoke(cli, ["fingerprint", "--role", "server", data])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("ja4s: t130200_1301_")

    def test_datagram_mode(self, runner: CliRunner) -> None:
        data = create_client_hello(version=0xFEFD, datagram=True, record=True).hex()
        result = runner.invoke(cli, ["fingerprint", "-m", "datagram", data])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("ja4: d13d")

    def test_file_input(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "hello.bin"
        path.write_bytes(create_client_hello())
        result = runner.invoke(cli, ["fingerprint", "--file", str(path)])
        assert result.exit_code == 0, result.output
        assert "t13d0408h2_" in result.output

    def test_stdin_input(self, runner: CliRunner, client_hex: str) -> None:
        result = runner.invoke(cli, ["fingerprint"], input=client_hex + "\n")
        assert result.exit_code == 0, result.output
        assert "t13d0408h2_" in result.output

    def test_config_file(self, runner: CliRunner, client_hex: str, tmp_path: Path) -> None:
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"include_raw": True}))
        result = runner.invoke(cli, ["fingerprint", "-c", str(path), client_hex])
        assert result.exit_code == 0, result.output
        assert "ja4_r:" in result.output

    def test_options_override_config(self, runner: CliRunner, tmp_path: Path) -> None:
        data = create_client_hello(ciphers=[0xC02B, 0x1301]).hex()
        path = tmp_path / "config.yaml"
        path.write_text("cipher_order: offered\n")
        result = runner.invoke(cli, ["fingerprint", "-c", str(path), "--sorted-ciphers", "--raw", data])
        assert result.exit_code == 0, result.output
        assert "_1301,c02b_" in result.output

    def test_malformed_yaml_config(self, runner: CliRunner, client_hex: str, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("cipher_order: [sorted\n")
        result = runner.invoke(cli, ["fingerprint", "-c", str(path), client_hex])
        assert result.exit_code == 1
        assert "Failed to load config file" in result.output

    def test_yaml_list_config(self, runner: CliRunner, client_hex: str, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- include_raw\n")
        result = runner.invoke(cli, ["fingerprint", "-c", str(path), client_hex])
        assert result.exit_code == 1
        assert "Failed to load config file" in result.output
        assert "mapping" in result.output

    def test_bad_hex(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fingerprint", "zz11"])
        assert result.exit_code != 0
        assert "hex" in result.output

    def test_hex_and_file_conflict(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "hello.bin"
        path.write_bytes(b"\x00")
        result = runner.invoke(cli, ["fingerprint", "--file", str(path), "00"])
        assert result.exit_code == 2

    def test_truncated_input(self, runner: CliRunner, client_hex: str) -> None:
        result = runner.invoke(cli, ["fingerprint", client_hex[:40]])
        assert result.exit_code == 1
        assert "TruncatedMessage" in result.output

    def test_wrong_role(self, runner: CliRunner, client_hex: str) -> None:
        result = runner.invoke(cli, ["fingerprint", "--role", "server", client_hex])
        assert result.exit_code == 1
        assert "NotAHelloMessage" in result.output

    def test_degraded_warning(self, runner: CliRunner) -> None:
        data = create_client_hello(version=0x0002).hex()
        result = runner.invoke(cli, ["fingerprint", data])
        assert result.exit_code == 0
        assert "degraded" in result.output
        assert "ts2i000000_000000000000_000000000000" in result.output

    def test_ssl2_framed_hello(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["fingerprint", create_ssl2_client_hello().hex()])
        assert result.exit_code == 0
        assert "unsupported handshake version 0x0002" in result.output
        assert "ts2i000000_" in result.output
