"""Tests for the command-line interface."""

import pytest

import NMYAML_CLI
from NMYAML_CLI import main

from .conftest import VALID_WORKFLOW_YAML


@pytest.fixture
def answer(monkeypatch):
    """Answer the next confirmation prompt."""

    def _answer(reply):
        monkeypatch.setattr("builtins.input", lambda prompt="": reply)

    return _answer


class TestValidateCommand:
    """Test `validate`."""

    def test_valid_yaml(self, valid_yaml, capsys):
        assert main(["validate", str(valid_yaml), "--no-color"]) == 0
        assert "passed successfully" in capsys.readouterr().out

    def test_alias(self, valid_yaml):
        assert main(["v", str(valid_yaml)]) == 0

    def test_invalid_yaml(self, tmp_path, capsys):
        path = tmp_path / "bad.yml"
        path.write_text("name: [\n")

        assert main(["validate", str(path), "-d", "--no-color"]) == 1
        out = capsys.readouterr().out
        assert "Syntax" in out
        assert "Validation failed with 1 errors" in out

    def test_missing_file(self, tmp_path, capsys):
        assert main(["validate", str(tmp_path / "missing.yml")]) == 1
        assert "File not found" in capsys.readouterr().err

    def test_unsupported_extension(self, tmp_path, capsys):
        path = tmp_path / "notes.txt"
        path.write_text("x")
        assert main(["validate", str(path), "--no-color"]) == 1
        assert "Unsupported file type: .txt" in capsys.readouterr().err

    def test_xml_with_schema(self, simple_xml, simple_xsd):
        assert main(["validate", str(simple_xml), "-s", str(simple_xsd)]) == 0

    def test_warnings_only_exit_zero(self, tmp_path, capsys):
        path = tmp_path / "ci.yml"
        path.write_text(VALID_WORKFLOW_YAML.replace("name: CI\n", ""))

        assert main(["validate", str(path), "--github-actions", "--no-color"]) == 0
        assert "passed with 1 warnings" in capsys.readouterr().out

    def test_no_color(self, valid_yaml, capsys):
        main(["validate", str(valid_yaml), "--no-color"])
        assert "\033[" not in capsys.readouterr().out


class TestConvertCommand:
    """Test `convert`."""

    def test_convert(self, simple_xml, simple_xslt, simple_xsd, tmp_path):
        output = tmp_path / "ci.yml"
        code = main(
            ["convert", str(simple_xml), str(output), "--schema", str(simple_xsd),
             "--xslt", str(simple_xslt), "-d"]
        )
        assert code == 0
        assert output.is_file()

    def test_convert_xml_errors(self, simple_xslt, simple_xsd, tmp_path, capsys):
        source = tmp_path / "invalid.xml"
        source.write_text("<workflow><jobs/></workflow>")

        code = main(
            ["c", str(source), str(tmp_path / "ci.yml"), "--schema", str(simple_xsd),
             "--xslt", str(simple_xslt), "--no-color"]
        )

        assert code == 1
        assert "XML validation failed" in capsys.readouterr().err

    def test_existing_output_declined(self, bundled_xml, tmp_path, answer):
        output = tmp_path / "ci.yml"
        output.write_text("keep me\n")
        answer("n")

        assert main(["convert", str(bundled_xml), str(output)]) == 0
        assert output.read_text() == "keep me\n"

    def test_existing_output_confirmed(self, bundled_xml, tmp_path, answer):
        output = tmp_path / "ci.yml"
        output.write_text("old\n")
        answer("y")

        assert main(["convert", str(bundled_xml), str(output)]) == 0
        backups = list(tmp_path.glob("ci.yml.*.bak"))
        assert len(backups) == 1
        assert backups[0].read_text() == "old\n"
        assert output.read_text() != "old\n"

    def test_force_skips_prompt(self, bundled_xml, tmp_path, monkeypatch):
        output = tmp_path / "ci.yml"
        output.write_text("old\n")

        def fail(prompt=""):
            raise AssertionError("prompted")

        monkeypatch.setattr("builtins.input", fail)
        assert main(["convert", str(bundled_xml), str(output), "-f"]) == 0

    def test_malformed_xml_without_schema(self, tmp_path, capsys):
        source = tmp_path / "broken.xml"
        source.write_text("<workflow><name>CI</name>")
        output = tmp_path / "ci.yml"

        assert main(["convert", str(source), str(output), "--no-color"]) == 1
        assert not output.exists()
        assert "XML validation failed" in capsys.readouterr().err

    def test_default_schema_applies(self, simple_xml, simple_xslt, tmp_path):
        output = tmp_path / "ci.yml"
        assert main(["convert", str(simple_xml), str(output), "--xslt", str(simple_xslt)]) == 1
        assert not output.exists()

    def test_skip_xml_validation(self, simple_xml, simple_xslt, tmp_path):
        output = tmp_path / "ci.yml"
        code = main(
            ["convert", str(simple_xml), str(output), "--xslt", str(simple_xslt),
             "--skip-xml-validation"]
        )
        assert code == 0
        assert output.is_file()


class TestTransformCommand:
    def test_transform_with_bundled_resources(self, bundled_xml, tmp_path):
        output = tmp_path / "ci.yml"
        assert main(["transform", str(bundled_xml), str(output)]) == 0
        assert output.read_text(encoding="utf-8").startswith("name: CI\n")

    def test_missing_input(self, tmp_path):
        assert main(["t", str(tmp_path / "missing.xml"), str(tmp_path / "ci.yml")]) == 1


class TestSchemaCommand:
    def test_schema_validate(self, simple_xml, simple_xsd):
        assert main(["schema", "validate", str(simple_xml), str(simple_xsd)]) == 0

    def test_schema_validate_missing_schema(self, simple_xml, tmp_path, capsys):
        code = main(["schema", "v", str(simple_xml), str(tmp_path / "missing.xsd"), "-d", "--no-color"])
        assert code == 1
        assert "XSD schema file not found" in capsys.readouterr().out


class TestYamlCommands:
    """Test `yaml validate` and `yaml format`."""

    def test_yaml_validate_export_report(self, valid_yaml, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert main(["yaml", "validate", str(valid_yaml), "--github-actions", "-e"]) == 0
        assert len(list(tmp_path.glob("validation-report-*.json"))) == 1

    def test_yaml_validate_verbose_lists_each_issue_once(self, tmp_path, capsys):
        path = tmp_path / "bad.yml"
        path.write_text("name: [\n")

        assert main(["yaml", "validate", str(path), "-v", "-d", "--no-color"]) == 1
        assert capsys.readouterr().out.count("YAML syntax error") == 1

    def test_yaml_format_dry_run(self, tmp_path, capsys):
        path = tmp_path / "ci.yml"
        path.write_text("a:   1\nb: [x, y]\n")

        assert main(["yaml", "format", str(path), "--dry-run", "-v", "--no-color"]) == 0
        assert path.read_text() == "a:   1\nb: [x, y]\n"
        assert "- a:   1" in capsys.readouterr().out

    def test_yaml_format_to_output(self, tmp_path):
        path = tmp_path / "ci.yml"
        path.write_text("b: [x, y]\n")
        output = tmp_path / "formatted.yml"

        assert main(["yaml", "f", str(path), "-o", str(output)]) == 0
        assert output.read_text() == "b:\n  - x\n  - y\n"

    def test_yaml_format_invalid_indent(self, valid_yaml):
        assert main(["yaml", "format", str(valid_yaml), "--indent", "1"]) == 1

    def test_yaml_format_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yml"
        path.write_text("a: [\n")
        assert main(["yaml", "format", str(path)]) == 1


class TestMain:
    def test_keyboard_interrupt(self, valid_yaml, monkeypatch):
        def interrupted(args, formatter):
            raise KeyboardInterrupt

        monkeypatch.setattr(NMYAML_CLI, "run", interrupted)
        assert main(["validate", str(valid_yaml)]) == 130

    def test_command_required(self):
        with pytest.raises(SystemExit):
            main([])
