from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from satprism.cli import valuation as valuation_module
from satprism.cli.main import create_app
from satprism.core.exceptions import ConfigurationError, NotFoundError, RemoteFetchError
from satprism.core.services import ValuationPipeline, ValuationService


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def install_service(monkeypatch: pytest.MonkeyPatch, stub_prices):
    def install(index, prices=None) -> None:
        prices = prices or stub_prices({"01-12-2024": 40000.0})
        monkeypatch.setattr(
            valuation_module,
            "get_valuation_service",
            lambda: ValuationService(ValuationPipeline(index, prices)),
        )

    return install


def _json_rows(text: str) -> list[dict[str, object]]:
    return [json.loads(line) for line in text.splitlines() if line.startswith("{") and '"txid"' in line]


def test_value_jsonl_output(runner: CliRunner, install_service, stub_index, witness_key, legacy_key) -> None:
    index = stub_index([{"hash": "abc", "time": "2024-12-01 13:55:41", "balance_change": -150_000_000}])
    install_service(index)

    result = runner.invoke(create_app(), ["--format", "jsonl", "value", witness_key])

    assert result.exit_code == 0
    rows = _json_rows(result.stdout)
    assert rows == [
        {
            "txid": "abc",
            "time": "1 December 2024 13:55:41",
            "amount": -1.5,
            "usdAmount": -60000.0,
            "currentUsd": -90000.0,
            "diffUsd": -30000.0,
            "type": "send",
        }
    ]
    assert index.calls == [legacy_key]


def test_value_table_output(runner: CliRunner, install_service, stub_index, legacy_key) -> None:
    install_service(stub_index([{"hash": "abc", "time": "2024-12-01 13:55:41", "balance_change": 150_000_000}]))

    result = runner.invoke(create_app(), ["--no-color", "value", legacy_key], env={"COLUMNS": "200"})

    assert result.exit_code == 0
    assert "abc" in result.stdout
    assert "60,000.00" in result.stdout
    assert "30,000.00" in result.stdout


def test_value_writes_to_output_file(runner: CliRunner, install_service, stub_index, legacy_key, tmp_path) -> None:
    install_service(stub_index([{"hash": "abc", "time": "2024-12-01 13:55:41", "balance_change": 1}]))
    target = tmp_path / "rows.jsonl"

    result = runner.invoke(create_app(), ["-f", "jsonl", "-o", str(target), "value", legacy_key])

    assert result.exit_code == 0
    assert [row["txid"] for row in _json_rows(target.read_text(encoding="utf-8"))] == ["abc"]


@pytest.mark.parametrize(
    ("error", "exit_code", "code"),
    [
        (NotFoundError(), 4, "NOT_FOUND"),
        (RemoteFetchError("Error fetching data from blockchair", "blockchair", status_code=503, body="down"), 3, "REMOTE_FETCH_FAILURE"),
        (RuntimeError("boom"), 1, "INTERNAL_FAILURE"),
    ],
)
def test_value_failures_map_to_exit_codes(
    runner: CliRunner, install_service, stub_index, legacy_key, error, exit_code, code
) -> None:
    install_service(stub_index(error=error))

    result = runner.invoke(create_app(), ["value", legacy_key])

    assert result.exit_code == exit_code
    assert code in result.output


def test_blank_key_is_a_validation_error(runner: CliRunner, install_service, stub_index) -> None:
    index = stub_index([])
    install_service(index)

    result = runner.invoke(create_app(), ["value", "   "])

    assert result.exit_code == 2
    assert "MISSING_INPUT" in result.output
    assert index.calls == []


def test_unknown_format_is_rejected(runner: CliRunner, legacy_key) -> None:
    result = runner.invoke(create_app(), ["--format", "xml", "value", legacy_key])

    assert result.exit_code == 2


def test_normalize_command(runner: CliRunner, witness_key, legacy_key) -> None:
    result = runner.invoke(create_app(), ["normalize", witness_key])

    assert result.exit_code == 0
    assert result.stdout.strip() == legacy_key


def test_normalize_echoes_undecodable_input(runner: CliRunner) -> None:
    result = runner.invoke(create_app(), ["normalize", "not-a-key"])

    assert result.exit_code == 0
    assert result.stdout.strip().splitlines()[-1] == "not-a-key"


def test_bad_configuration_is_reported(runner: CliRunner, monkeypatch: pytest.MonkeyPatch, legacy_key) -> None:
    def broken_service() -> ValuationService:
        raise ConfigurationError("Unknown display timezone 'Mars/Olympus'")

    monkeypatch.setattr(valuation_module, "get_valuation_service", broken_service)

    result = runner.invoke(create_app(), ["value", legacy_key])

    assert result.exit_code == 2
    assert "CONFIGURATION_ERROR" in result.output


def test_malformed_environment_does_not_crash_value(
    runner: CliRunner, monkeypatch: pytest.MonkeyPatch, tmp_path
) -> None:
    monkeypatch.setenv("SATPRISM_CONFIG", str(tmp_path / "absent.toml"))
    monkeypatch.setenv("SATPRISM_HTTP_TIMEOUT", "soon")
    monkeypatch.setenv("SATPRISM_PORT", "abc")

    result = runner.invoke(create_app(), ["value", "   "])

    assert result.exit_code == 2
    assert "MISSING_INPUT" in result.output
    assert not isinstance(result.exception, ValueError)
