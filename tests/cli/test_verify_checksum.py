from unittest.mock import patch

from cli.verify_checksum import verify_checksum
from services.errors import FileReadError
from services.hashing_service import HashingService

HELLO_WORLD_SHA256 = "64EC88CA00B268E5BA1A35678A1B5316D212F4F366B2477232534A8AECA37F3C"


def test_verify_checksum_match(cli_runner, cli_context, sample_files):
    hello = str(sample_files / "hello.txt")
    result = cli_runner.invoke(verify_checksum, [hello, HELLO_WORLD_SHA256.lower()], obj=cli_context)

    assert result.exit_code == 0, result.output
    assert f"OK: {hello}" in result.output


def test_verify_checksum_mismatch(cli_runner, cli_context, sample_files):
    hello = str(sample_files / "hello.txt")
    result = cli_runner.invoke(verify_checksum, [hello, "00" * 32], obj=cli_context)

    assert result.exit_code == 1
    assert f"MISMATCH: {hello}" in result.output


def test_verify_checksum_with_algorithm(cli_runner, cli_context, sample_files):
    digits = str(sample_files / "digits.txt")
    result = cli_runner.invoke(verify_checksum, [digits, "cbf43926", "-a", "CRC"], obj=cli_context)

    assert result.exit_code == 0
    assert "OK" in result.output


def test_verify_checksum_unsupported_algorithm(cli_runner, cli_context, sample_files):
    result = cli_runner.invoke(
        verify_checksum, [str(sample_files / "hello.txt"), "00", "-a", "crc32"], obj=cli_context
    )

    assert result.exit_code == 2
    assert "list-algorithms" in result.output


def test_verify_checksum_missing_file(cli_runner, cli_context, tmp_path):
    result = cli_runner.invoke(verify_checksum, [str(tmp_path / "gone.txt"), "00"], obj=cli_context)

    assert result.exit_code == 1
    assert "Path not found" in result.output


def test_verify_checksum_read_error(cli_runner, cli_context, sample_files):
    hello = str(sample_files / "hello.txt")
    error = FileReadError(hello, PermissionError("denied"))
    with patch.object(HashingService, "verify_file", side_effect=error):
        result = cli_runner.invoke(verify_checksum, [hello, HELLO_WORLD_SHA256], obj=cli_context)

    assert result.exit_code == 1
    assert "Failed to read" in result.output
