from typer.testing import CliRunner
from revdiff.cli.cli import app

def test_cli_smoke():
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in ("diff", "patch", "count", "review", "show", "list", "clear", "init"):
        assert name in result.output
