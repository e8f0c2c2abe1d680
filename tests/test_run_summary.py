"""Tests for the command-line runner"""
from trial_insights.pipeline import run_summary


def test_dry_run_prints_cohort_prompt(capsys):
    code = run_summary.main(["--treatment", "Placebo", "--max-records", "2", "--dry-run"])
    assert code == 0
    out = capsys.readouterr().out
    assert "  - Treatment: Placebo" in out
    assert "2 of 3 records shown" in out


def test_dry_run_unknown_patient(capsys):
    assert run_summary.main(["--patient", "P999", "--dry-run"]) == 1
    assert "Patient not found" in capsys.readouterr().err


def test_invalid_filter_value(capsys):
    assert run_summary.main(["--gender", "Robot", "--dry-run"]) == 2


def test_live_run_uses_client(monkeypatch, capsys):
    class StubClient:
        def generate(self, prompt):
            return "From the stub."

    monkeypatch.setattr(run_summary, "OllamaClient", StubClient)
    assert run_summary.main(["--patient", "P001"]) == 0
    assert "From the stub." in capsys.readouterr().out
