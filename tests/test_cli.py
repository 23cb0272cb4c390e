"""Tests for the command-line interface."""

import sys

import orjson
import pytest

from jsvalidation.cli import cli
from jsvalidation.cli.commands.rules import load_target

FORMS_MODULE = "signup_forms"

FORMS_SOURCE = '''
from jsvalidation.validation import FormRequest

RULES = {"email": "required|email|unique:users"}

NOT_RULES = 42


class ContactRequest(FormRequest):
    def rules(self):
        return {"message": "required|max:500"}

    def messages(self):
        return {"message.required": "Say something."}
'''


@pytest.fixture
def forms(tmp_path, monkeypatch):
    """Importable module with rules and a form request."""
    (tmp_path / f"{FORMS_MODULE}.py").write_text(FORMS_SOURCE)
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.chdir(tmp_path)
    yield tmp_path
    sys.modules.pop(FORMS_MODULE, None)


class TestCli:
    def test_no_command(self, capsys):
        assert cli([]) == 0
        assert "usage: jsvalidation" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli(["--version"])

        assert exc.value.code == 0
        assert "JsValidation 1.0.0" in capsys.readouterr().out


class TestPublish:
    """Tests for publishing config and views."""

    def test_publish_all(self, tmp_path, capsys):
        assert cli(["publish", "--path", str(tmp_path)]) == 0

        views = tmp_path / "resources" / "views" / "vendor" / "jsvalidation"
        assert (tmp_path / "config" / "jsvalidation.py").is_file()
        assert sorted(p.name for p in views.iterdir()) == ["bootstrap.html", "bootstrap4.html", "bootstrap5.html"]
        assert "Published 4 file(s)." in capsys.readouterr().out

    def test_existing_files_are_skipped(self, tmp_path, capsys):
        target = tmp_path / "config" / "jsvalidation.py"
        target.parent.mkdir()
        target.write_text("config = {}\n")

        cli(["publish", "--tag", "config", "--path", str(tmp_path)])

        out = capsys.readouterr().out
        assert "Skipped" in out
        assert "Published 0 file(s)." in out
        assert target.read_text() == "config = {}\n"

    def test_force(self, tmp_path, capsys):
        target = tmp_path / "config" / "jsvalidation.py"
        target.parent.mkdir()
        target.write_text("config = {}\n")

        cli(["publish", "--tag", "config", "--path", str(tmp_path), "--force"])

        assert "Published 1 file(s)." in capsys.readouterr().out
        assert "form_selector" in target.read_text()

    def test_views_only(self, tmp_path, capsys):
        cli(["publish", "--tag", "views", "--path", str(tmp_path)])

        assert not (tmp_path / "config").exists()
        assert "Published 3 file(s)." in capsys.readouterr().out

    def test_published_config_loads(self, tmp_path):
        from jsvalidation.core.config import Config

        cli(["publish", "--tag", "config", "--path", str(tmp_path)])

        cfg = Config.from_file(tmp_path / "config" / "jsvalidation.py", load_env=False)
        assert cfg.get("view") == "jsvalidation::bootstrap"


class TestRules:
    """Tests for printing rule maps and scripts."""

    def test_rules_dict(self, forms, capsys):
        assert cli(["rules", f"{FORMS_MODULE}:RULES"]) == 0

        data = orjson.loads(capsys.readouterr().out)
        assert data["selector"] == "form"
        assert [entry[0] for entry in data["rules"]["email"]["laravelValidation"]] == ["Required", "Email"]
        assert data["rules"]["email"]["laravelValidationRemote"][0][1] == ["email", None, False]

    def test_no_remote(self, forms, capsys):
        cli(["rules", f"{FORMS_MODULE}:RULES", "--no-remote", "--selector", "#signup"])

        data = orjson.loads(capsys.readouterr().out)
        assert data["selector"] == "#signup"
        assert "laravelValidationRemote" not in data["rules"]["email"]

    def test_pretty(self, forms, capsys):
        cli(["rules", f"{FORMS_MODULE}:RULES", "--pretty"])

        assert '\n  "rules": {' in capsys.readouterr().out

    def test_form_request(self, forms, capsys):
        cli(["rules", f"{FORMS_MODULE}:ContactRequest"])

        entries = orjson.loads(capsys.readouterr().out)["rules"]["message"]["laravelValidation"]
        assert entries[0] == ["Required", [], "Say something.", True, "message"]
        assert entries[1][0] == "Max"

    def test_render(self, forms, capsys):
        assert cli(["render", f"{FORMS_MODULE}:RULES", "--view", "jsvalidation::bootstrap5"]) == 0

        out = capsys.readouterr().out
        assert '$("form")' in out
        assert "is-invalid" in out

    def test_config_file(self, forms, capsys):
        (forms / "settings.py").write_text('config = {"form_selector": "#from-config"}\n')

        cli(["--config", "settings.py", "rules", f"{FORMS_MODULE}:RULES"])

        assert orjson.loads(capsys.readouterr().out)["selector"] == "#from-config"

    def test_malformed_target(self, capsys):
        assert cli(["rules", "signup_forms"]) == 1
        assert "Error: Target must be 'module:attribute'" in capsys.readouterr().err

    def test_unsupported_target(self, forms, capsys):
        assert cli(["rules", f"{FORMS_MODULE}:NOT_RULES"]) == 1
        assert "is neither a rules dict nor a FormRequest" in capsys.readouterr().err

    def test_load_target(self, forms):
        assert load_target(f"{FORMS_MODULE}:ContactRequest.rules").__name__ == "rules"
