from __future__ import annotations

import json
from pathlib import Path

from scripts.evaluate_applications import DEFAULT_INPUT, main, run_evaluation


def test_sample_data_produces_expected_decisions() -> None:
    outcomes = run_evaluation(input_path=DEFAULT_INPUT)
    by_id = {outcome.applicant_id: outcome for outcome in outcomes}

    assert [outcome.applicant_id for outcome in outcomes] == sorted(by_id)
    assert "4401" not in by_id
    assert by_id["1101"].formatted().endswith("Type: Full, Duration: 2 years")
    assert by_id["1102"].duration == "1 year"
    assert by_id["1103"].reason_message == "GPA below 3.0"
    assert by_id["1104"].reason_message == "Missing Enrollment Certificate"
    assert by_id["2201"].award.value == "Full"
    assert by_id["2203"].reason_message == "Financial status unstable"
    assert by_id["2204"].reason_message == "Missing mandatory document"
    assert by_id["3301"].duration == "2 years"
    assert by_id["3302"].duration == "1 year 6 months"
    assert by_id["3303"].reason_message == "Publication impact too low"
    assert by_id["3304"].reason_message == "Missing Transcript"


def test_main_prints_results_and_writes_output(tmp_path: Path, capsys) -> None:  # noqa: ANN001
    input_path = tmp_path / "applications.csv"
    input_path.write_text("A,1101,Liam,3.55,1200\nD,1101,ENR,12\nT,1101,Y\n", encoding="utf-8")
    output_path = tmp_path / "results.json"

    exit_code = main(["--input", str(input_path), "--output", str(output_path)])

    captured = capsys.readouterr()
    assert exit_code == 0
    assert captured.out.strip() == (
        "Applicant ID: 1101, Name: Liam, Scholarship: Merit, Status: Accepted, Type: Full, Duration: 1 year"
    )
    assert json.loads(output_path.read_text(encoding="utf-8"))["summary"]["accepted"] == 1


def test_main_uses_config_overrides(tmp_path: Path, capsys) -> None:  # noqa: ANN001
    input_path = tmp_path / "applications.csv"
    input_path.write_text("A,1101,Liam,3.55,1200\nD,1101,ENR,12\nT,1101,Y\n", encoding="utf-8")
    config_path = tmp_path / "rules.json"
    config_path.write_text(json.dumps({"merit": {"full_gpa": 3.9}}), encoding="utf-8")

    exit_code = main(["--input", str(input_path), "--config", str(config_path)])

    assert exit_code == 0
    assert "Type: Half" in capsys.readouterr().out


def test_main_returns_error_for_missing_input(tmp_path: Path, capsys) -> None:  # noqa: ANN001
    exit_code = main(["--input", str(tmp_path / "missing.csv")])

    assert exit_code == 1
    assert capsys.readouterr().out == ""
