"""
Tests for the entitygen command-line entry point.
"""

import textwrap
from pathlib import Path

import pytest

import entitygen

MODEL = """\
    // META: output=generated/{{EntityName}}.cs
    // META: tags=model
    class {{EntityName}} {}
"""

SERVICE = """\
    // META: output=generated/{{EntityName}}Service.cs
    // META: tags=service
    class {{EntityName}}Service {}
"""


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    """A working directory with a templates/ folder holding two tagged templates."""
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "model.template.cs").write_text(textwrap.dedent(MODEL))
    (templates / "service.template.cs").write_text(textwrap.dedent(SERVICE))
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestMain:
    def test_named_entity(self, project: Path, capsys):
        assert entitygen.main(["--entity", "Product"]) == 0
        assert (project / "generated" / "Product.cs").read_text() == "class Product {}"
        assert (project / "generated" / "ProductService.cs").is_file()
        assert "2 generated, 0 skipped" in capsys.readouterr().out

    def test_tags_flag(self, project: Path):
        assert entitygen.main(["-e", "Order", "-g", "model"]) == 0
        assert (project / "generated" / "Order.cs").is_file()
        assert not (project / "generated" / "OrderService.cs").exists()

    def test_legacy_positionals(self, project: Path, capsys):
        assert entitygen.main(["Invoice", "templates", "service"]) == 0
        assert (project / "generated" / "InvoiceService.cs").is_file()
        assert not (project / "generated" / "Invoice.cs").exists()
        assert "1 generated, 1 skipped" in capsys.readouterr().out

    def test_named_flags_win_over_positionals(self, project: Path):
        assert entitygen.main(["Ignored", "-e", "Named"]) == 0
        assert (project / "generated" / "Named.cs").is_file()

    def test_out_dir(self, project: Path):
        assert entitygen.main(["-e", "User", "-o", "build"]) == 0
        assert (project / "build" / "generated" / "User.cs").is_file()

    def test_rerun_is_success_with_skips(self, project: Path, capsys):
        assert entitygen.main(["-e", "User"]) == 0
        capsys.readouterr()
        assert entitygen.main(["-e", "User"]) == 0
        assert "0 generated, 2 skipped" in capsys.readouterr().out

    def test_missing_entity(self, project: Path, capsys):
        assert entitygen.main([]) == 1
        assert "Entity name is required" in capsys.readouterr().err

    def test_missing_templates_dir(self, project: Path, capsys):
        assert entitygen.main(["-e", "User", "-t", "nowhere"]) == 1
        assert "Templates directory not found" in capsys.readouterr().err

    def test_no_templates(self, project: Path, capsys):
        (project / "empty").mkdir()
        assert entitygen.main(["-e", "User", "-t", "empty"]) == 1
        assert "No templates found" in capsys.readouterr().err

    def test_too_many_positionals(self, project: Path):
        with pytest.raises(SystemExit) as exc:
            entitygen.main(["a", "b", "c", "d"])
        assert exc.value.code == 2

    def test_config_file_defaults(self, project: Path):
        (project / "templates").rename(project / "tpl")
        (project / "entitygen.yaml").write_text("templates: tpl\ntags: [service]\nout: app\n")
        assert entitygen.main(["-e", "Cart"]) == 0
        assert (project / "app" / "generated" / "CartService.cs").is_file()
        assert not (project / "app" / "generated" / "Cart.cs").exists()

    def test_bad_config_file(self, project: Path, capsys):
        (project / "broken.yaml").write_text("- not a mapping\n")
        assert entitygen.main(["-e", "Cart", "--config", "broken.yaml"]) == 1
        assert "Configuration error" in capsys.readouterr().err
