from __future__ import annotations

import json
import logging
from pathlib import Path

import pandas as pd
import pytest

from technical_analysis.cli import (
    apply_cli_overrides,
    build_parser,
    main,
    parse_option_value,
    parse_options,
)
from technical_analysis.config import Settings

ENV_KEYS = ["TA_DATA_DIR", "TA_INDICATOR", "TA_OUTPUT_FORMAT", "LOG_LEVEL", "TA_LOG_FILE"]


@pytest.fixture(autouse=True)
def _isolated_runtime(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("technical_analysis.config.load_dotenv", lambda *args, **kwargs: None)
    monkeypatch.setattr(
        "technical_analysis.cli.setup_logger",
        lambda *args, **kwargs: logging.getLogger("technical_analysis.tests"),
    )
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write_csv(path: Path, rows: int = 30) -> None:
    frame = pd.DataFrame(
        {
            "date": pd.date_range("2024-01-01", periods=rows, freq="D").strftime("%Y-%m-%d"),
            "open": [100.0 + i for i in range(rows)],
            "high": [101.0 + i for i in range(rows)],
            "low": [99.0 + i for i in range(rows)],
            "close": [100.5 + i for i in range(rows)],
            "volume": [1000.0] * rows,
        }
    )
    frame.to_csv(path, index=False)


def test_parse_option_values() -> None:
    assert parse_option_value("20") == 20
    assert parse_option_value("2.5") == 2.5
    assert parse_option_value(" close ") == "close"
    assert parse_options(["period=5", "price_key=open"]) == {"period": 5, "price_key": "open"}
    with pytest.raises(ValueError, match="KEY=VALUE"):
        parse_options(["period"])


def test_cli_overrides_produce_expected_settings() -> None:
    parser = build_parser()
    args = parser.parse_args(
        ["--indicator", "ICHIMOKU", "--data-dir", "bars", "--format", "json", "--log-level", "debug"]
    )

    settings = apply_cli_overrides(Settings(), args)

    assert settings == Settings(
        data_dir="bars", indicator="ichimoku", output_format="json", log_level="DEBUG"
    )


def test_cli_writes_json_records(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_csv(tmp_path / "SPY.csv")

    exit_code = main(
        [
            "--symbol",
            "SPY",
            "--data-dir",
            str(tmp_path),
            "--option",
            "period=5",
            "--format",
            "json",
        ]
    )

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert len(payload) == 26
    assert payload[0]["date"] == "2024-01-05T00:00:00"
    assert payload[0]["middle_band"] == pytest.approx(102.5)


def test_cli_writes_csv_by_default(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_csv(tmp_path / "SPY.csv", rows=80)

    exit_code = main(["--symbol", "SPY", "--data-dir", str(tmp_path), "--indicator", "ichimoku"])

    lines = capsys.readouterr().out.strip().splitlines()
    assert exit_code == 0
    assert lines[0] == "date,tenkan_sen,kijun_sen,senkou_span_a,senkou_span_b,chikou_span"
    assert len(lines) == 1 + 4


def test_cli_reports_validation_errors(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _write_csv(tmp_path / "SPY.csv")

    exit_code = main(["--symbol", "SPY", "--data-dir", str(tmp_path), "--option", "test=10"])

    assert exit_code == 2
    assert "Error: invalid option(s): test" in capsys.readouterr().out


def test_cli_requires_symbol(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 2
    assert "--symbol is required" in capsys.readouterr().out


def test_cli_lists_indicators(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--list"]) == 0

    descriptions = json.loads(capsys.readouterr().out)
    assert [item["symbol"] for item in descriptions] == ["bb", "ichimoku"]


def test_cli_passes_log_file_to_logger(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _write_csv(tmp_path / "SPY.csv")
    calls: list[tuple[str, str | None]] = []

    def _fake_setup_logger(log_level: str, log_file: str | None = None) -> logging.Logger:
        calls.append((log_level, log_file))
        return logging.getLogger("technical_analysis.tests")

    monkeypatch.setattr("technical_analysis.cli.setup_logger", _fake_setup_logger)
    log_path = str(tmp_path / "run.log")

    exit_code = main(["--symbol", "SPY", "--data-dir", str(tmp_path), "--log-file", log_path])

    assert exit_code == 0
    assert calls == [("INFO", log_path)]
    assert capsys.readouterr().out.startswith("date,lower_band")


def test_cli_reports_unreadable_csv(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (tmp_path / "SPY.csv").write_text("", encoding="utf-8")

    exit_code = main(["--symbol", "SPY", "--data-dir", str(tmp_path)])

    assert exit_code == 2
    assert "Error: SPY: unreadable CSV" in capsys.readouterr().out
