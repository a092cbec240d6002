from typer.testing import CliRunner

from typeweave.cli.main import app
from typeweave.test_utils import SpyBus, WorkspaceFactory

runner = CliRunner()

ORIGINAL = """
def area(width, height) -> float:
    return width * height
"""


def test_check_accepts_complete_completion(tmp_path, monkeypatch):
    (
        WorkspaceFactory(tmp_path)
        .with_source("original.py", ORIGINAL)
        .with_source(
            "completed.py",
            """
            def area(width: float, height: Any) -> float:
                return width * height
            """,
        )
        .build()
    )
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["check", "original.py", "completed.py"])

    assert result.exit_code == 0, result.output
    assert "Completion accepted (score: 5)." in result.output


def test_check_rejects_holes(tmp_path, monkeypatch):
    (
        WorkspaceFactory(tmp_path)
        .with_source("original.py", ORIGINAL)
        .with_source(
            "completed.py",
            """
            def area(width: float, height: _hole_) -> float:
                return width * height
            """,
        )
        .build()
    )
    monkeypatch.chdir(tmp_path)

    spy_bus = SpyBus()
    with spy_bus.patch(monkeypatch):
        result = runner.invoke(app, ["check", "original.py", "completed.py"])

    assert result.exit_code == 1
    spy_bus.assert_id_called("check.issue.not_complete", level="error")
    spy_bus.assert_id_called("check.run.fail", level="error")
    spy_bus.assert_id_not_called("check.issue.changed_code")


def test_check_rejects_code_changes(tmp_path, monkeypatch):
    (
        WorkspaceFactory(tmp_path)
        .with_source("original.py", ORIGINAL)
        .with_source(
            "completed.py",
            """
            def area(width: float, height: float) -> float:
                result = width * height
                return result
            """,
        )
        .build()
    )
    monkeypatch.chdir(tmp_path)

    spy_bus = SpyBus()
    with spy_bus.patch(monkeypatch):
        result = runner.invoke(app, ["check", "original.py", "completed.py"])

    assert result.exit_code == 1
    spy_bus.assert_id_called("check.issue.changed_code", level="error")


def test_check_comment_changes_can_be_allowed(tmp_path, monkeypatch):
    (
        WorkspaceFactory(tmp_path)
        .with_source("original.py", ORIGINAL)
        .with_source(
            "completed.py",
            """
            # Computes the area of a rectangle.
            def area(width: float, height: float) -> float:
                return width * height
            """,
        )
        .build()
    )
    monkeypatch.chdir(tmp_path)

    strict = runner.invoke(app, ["check", "original.py", "completed.py"])
    assert strict.exit_code == 1
    assert "added or removed comments" in strict.output

    lenient = runner.invoke(
        app, ["check", "original.py", "completed.py", "--allow-comment-changes"]
    )
    assert lenient.exit_code == 0, lenient.output
    assert "Completion accepted (score: 0)." in lenient.output


def test_check_uses_configured_hole_marker(tmp_path, monkeypatch):
    (
        WorkspaceFactory(tmp_path)
        .with_config({"hole_marker": "TODO"})
        .with_source("original.py", ORIGINAL)
        .with_source(
            "completed.py",
            """
            def area(width: float, height: TODO) -> float:
                return width * height
            """,
        )
        .build()
    )
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["check", "original.py", "completed.py"])

    assert result.exit_code == 1


def test_check_reports_unparsable_files(tmp_path, monkeypatch):
    (
        WorkspaceFactory(tmp_path)
        .with_source("original.py", ORIGINAL)
        .with_source("completed.py", "def area(width: float, height\n")
        .build()
    )
    monkeypatch.chdir(tmp_path)

    spy_bus = SpyBus()
    with spy_bus.patch(monkeypatch):
        result = runner.invoke(app, ["check", "original.py", "completed.py"])

    assert result.exit_code == 1
    spy_bus.assert_id_called("file.parse_error", level="error")


def test_check_reports_missing_files(tmp_path, monkeypatch):
    WorkspaceFactory(tmp_path).with_source("original.py", ORIGINAL).build()
    monkeypatch.chdir(tmp_path)

    spy_bus = SpyBus()
    with spy_bus.patch(monkeypatch):
        result = runner.invoke(app, ["check", "original.py", "missing.py"])

    assert result.exit_code == 1
    spy_bus.assert_id_called("file.read_error", level="error")


def test_check_reports_invalid_config(tmp_path, monkeypatch):
    (
        WorkspaceFactory(tmp_path)
        .with_config({"kinds": ["everything"]})
        .with_source("original.py", ORIGINAL)
        .build()
    )
    monkeypatch.chdir(tmp_path)

    spy_bus = SpyBus()
    with spy_bus.patch(monkeypatch):
        result = runner.invoke(app, ["check", "original.py", "original.py"])

    assert result.exit_code == 1
    spy_bus.assert_id_called("config.error", level="error")
