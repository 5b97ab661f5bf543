"""Integration tests for the diff, patch, and count commands"""

import pytest
from typer.testing import CliRunner

from revdiff.cli.cli import app


runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def test_diff_cmd(tmp_path):
    (tmp_path / "old.txt").write_text("a\nb\nc\n")
    (tmp_path / "new.txt").write_text("a\nx\nc\n")
    result = runner.invoke(app, ["diff", "old.txt", "new.txt", "--path", "f.txt"])
    assert result.exit_code == 0, result.output
    assert result.output == (
        "diff --git a/f.txt b/f.txt\n"
        "--- a/f.txt\n"
        "+++ b/f.txt\n"
        "@@ -1,3 +1,3 @@\n"
        " a\n"
        "-b\n"
        "+x\n"
        " c\n"
    )


def test_diff_cmd_context_lines(tmp_path):
    (tmp_path / "old.txt").write_text("a\nb\nc\n")
    (tmp_path / "new.txt").write_text("a\nx\nc\n")
    result = runner.invoke(app, ["diff", "old.txt", "new.txt", "-U", "0"])
    assert "@@ -2,1 +2,1 @@\n-b\n+x\n" in result.output


def test_diff_cmd_stat(tmp_path):
    (tmp_path / "old.txt").write_text("a\n")
    (tmp_path / "new.txt").write_text("b\nc\n   \n")
    result = runner.invoke(app, ["diff", "old.txt", "new.txt", "--stat"])
    assert result.exit_code == 0, result.output
    assert result.output == "+2 -1\n"


def test_diff_cmd_new_file(tmp_path):
    (tmp_path / "new.txt").write_text("hello\n")
    result = runner.invoke(app, ["diff", "/dev/null", "new.txt", "--kind", "added"])
    assert result.exit_code == 0, result.output
    assert "new file mode 100644\n--- /dev/null\n+++ b/new.txt\n@@ -0,0 +1,1 @@\n+hello\n" in result.output


def test_diff_cmd_unknown_kind(tmp_path):
    (tmp_path / "a").write_text("")
    result = runner.invoke(app, ["diff", "a", "a", "--kind", "copied"])
    assert result.exit_code == 1
    assert "Unknown change type" in result.output


def test_diff_cmd_missing_file():
    result = runner.invoke(app, ["diff", "nope.txt", "nope2.txt"])
    assert result.exit_code == 1
    assert "Cannot read" in result.output


def test_patch_cmd(tmp_path):
    (tmp_path / "p.patch").write_text("@@ -1,2 +1,2 @@\n keep\n-old\n+new\n")
    result = runner.invoke(app, ["patch", "p.patch", "--path", "src/app.py", "--kind", "modified"])
    assert result.exit_code == 0, result.output
    assert result.output.startswith("diff --git a/src/app.py b/src/app.py\n--- a/src/app.py\n+++ b/src/app.py\n")


def test_patch_cmd_mismatched_path(tmp_path):
    (tmp_path / "p.patch").write_text("--- a/other.py\n+++ b/other.py\n@@ -1 +1 @@\n-a\n+b\n")
    result = runner.invoke(app, ["patch", "p.patch", "--path", "src/app.py"])
    assert result.exit_code == 1
    assert "[content unavailable: patch does not match src/app.py]" in result.output


def test_count_cmd(tmp_path):
    (tmp_path / "c.diff").write_text("--- a/f\n+++ b/f\n@@ -1,2 +1,2 @@\n----x\n-  \n++++y\n+\n")
    result = runner.invoke(app, ["count", "c.diff"])
    assert result.exit_code == 0, result.output
    assert result.output == "+1 -1\n"
