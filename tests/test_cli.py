import json

from typer.testing import CliRunner

from yl_cli.main import app

runner = CliRunner()

LONG = "x" * 95


def test_cli_lint_help():
    result = runner.invoke(app, ["lint", "--help"])
    assert result.exit_code == 0
    assert "Run linter on YAML files" in result.stdout


def test_cli_lint_clean_file(tmp_path):
    file_path = tmp_path / "ok.yaml"
    file_path.write_text("key: value\n")

    result = runner.invoke(app, ["lint", str(file_path), "--no-plugins"])

    assert result.exit_code == 0
    assert "Total problems found: 0 in 1 files" in result.stdout


def test_cli_lint_reports_errors(tmp_path):
    file_path = tmp_path / "long.yaml"
    file_path.write_text(f"{LONG}\n")

    result = runner.invoke(app, ["lint", str(file_path), "--no-plugins"])

    assert result.exit_code == 1
    assert f"{file_path}:1:81: [error] line too long (95 > 80 characters) (line-length)" in result.stdout


def test_cli_relaxed_preset_only_warns(tmp_path):
    file_path = tmp_path / "long.yaml"
    file_path.write_text(f"{LONG}\n")

    result = runner.invoke(app, ["lint", str(file_path), "--preset", "relaxed", "--no-plugins"])

    assert result.exit_code == 0
    assert "[warning]" in result.stdout


def test_cli_json_output(tmp_path):
    file_path = tmp_path / "spaces.yaml"
    file_path.write_text("key: value   \n")

    result = runner.invoke(app, ["lint", str(tmp_path), "--format", "json", "--no-plugins"])

    assert result.exit_code == 1
    assert json.loads(result.stdout) == [
        {
            "path": str(file_path),
            "line": 1,
            "column": 11,
            "severity": "error",
            "rule": "trailing-spaces",
            "message": "trailing whitespace",
            "suggestion": None,
        }
    ]


def test_cli_config_file(tmp_path):
    config_path = tmp_path / "yl-config.yml"
    config_path.write_text("rules:\n  line-length:\n    max: 120\n")
    file_path = tmp_path / "long.yaml"
    file_path.write_text(f"{LONG}\n")

    result = runner.invoke(app, ["lint", str(file_path), "--config", str(config_path), "--no-plugins"])

    assert result.exit_code == 0


def test_cli_lint_errors_exit_with_2(tmp_path):
    result = runner.invoke(app, ["lint", str(tmp_path / "missing.yaml"), "--no-plugins"])
    assert result.exit_code == 2

    bad = tmp_path / "bad.yaml"
    bad.write_text("# yl:set nonsense\n")
    result = runner.invoke(app, ["lint", str(bad), "--no-plugins"])
    assert result.exit_code == 2


def test_cli_unknown_preset_exits_with_2(tmp_path):
    file_path = tmp_path / "ok.yaml"
    file_path.write_text("key: value\n")

    result = runner.invoke(app, ["lint", str(file_path), "--preset", "loud", "--no-plugins"])

    assert result.exit_code == 2


def test_cli_rules_lists_builtins():
    result = runner.invoke(app, ["rules", "--no-plugins"])

    assert result.exit_code == 0
    lines = result.stdout.splitlines()
    assert len(lines) == 20
    assert lines[0].split()[:2] == ["line-length", "enabled"]
    assert any(line.split()[:2] == ["truthy", "disabled"] for line in lines)
