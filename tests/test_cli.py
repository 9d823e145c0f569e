from click.testing import CliRunner

from import_order_fixer.cli import cli

UNSORTED = 'import { c } from "c";\nimport b from "b";\n\nb(c);\n'


def test_check_reports_without_modifying(tmp_path):
    target = tmp_path / "main.js"
    target.write_text(UNSORTED)
    result = CliRunner().invoke(cli, ["check", str(tmp_path)])
    assert result.exit_code == 1
    assert target.read_text() == UNSORTED


def test_fix_rewrites_then_check_is_clean(tmp_path):
    target = tmp_path / "main.js"
    target.write_text(UNSORTED)
    runner = CliRunner()

    result = runner.invoke(cli, ["fix", str(target)])
    assert result.exit_code == 1
    assert target.read_text() == 'import b from "b"\nimport { c } from "c"\n\nb(c);\n'

    result = runner.invoke(cli, ["check", str(target)])
    assert result.exit_code == 0


def test_fix_with_semicolons(tmp_path):
    target = tmp_path / "main.ts"
    target.write_text(UNSORTED)
    result = CliRunner().invoke(cli, ["fix", "--semicolons", str(target)])
    assert result.exit_code == 1
    assert target.read_text() == 'import b from "b";\nimport { c } from "c";\n\nb(c);\n'


def test_misplaced_import_fails_check(tmp_path):
    target = tmp_path / "main.js"
    content = 'import a from "a";\nrun();\nimport b from "b";\n'
    target.write_text(content)
    result = CliRunner().invoke(cli, ["fix", str(target)])
    assert result.exit_code == 1
    assert target.read_text() == content


def test_syntax_error_exit_code(tmp_path):
    (tmp_path / "broken.js").write_text("import {\n\nconst = ;\n")
    result = CliRunner().invoke(cli, ["check", str(tmp_path)])
    assert result.exit_code == 2


def test_disabled_by_config(tmp_path):
    (tmp_path / "pyproject.toml").write_text("[tool.import-order-fixer]\nenabled = false\n")
    target = tmp_path / "main.js"
    target.write_text(UNSORTED)
    result = CliRunner().invoke(cli, ["fix", str(tmp_path)])
    assert result.exit_code == 0
    assert target.read_text() == UNSORTED


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "import-order-fixer" in result.output
