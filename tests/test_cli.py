import json

from click.testing import CliRunner

from inkcms import __version__
from inkcms.cli import cli
from inkcms.project import load_navigation, load_type_registry


def _mock_prompts(monkeypatch, responses):
    """Answer questionary prompts from ``responses`` in order."""
    answers = iter(responses)

    def mock_prompt(*args, **kwargs):
        class MockQuestion:
            def ask(self):
                return next(answers)

        return MockQuestion()

    for name in ("text", "select", "confirm"):
        monkeypatch.setattr(f"inkcms.cli.questionary.{name}", mock_prompt)


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_outside_project_fails(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["add", "blog"])
    assert result.exit_code != 0
    assert "Not in an Ink project" in result.output


def test_add_scaffolds_then_refuses(project, monkeypatch):
    monkeypatch.chdir(project.root)
    runner = CliRunner()

    result = runner.invoke(cli, ["add", "faq"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "content/faq/faq.json" in result.output
    assert "faqs" in load_type_registry(project)

    result = runner.invoke(cli, ["add", "faq"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "already exists" in result.output


def test_add_with_title_creates_entry(project, monkeypatch):
    monkeypatch.chdir(project.root)
    runner = CliRunner()

    result = runner.invoke(cli, ["add", "blog", "Hello", "World"], catch_exceptions=False)
    assert result.exit_code == 0
    assert (project.content_dir("blog") / "hello-world.md").is_file()

    result = runner.invoke(cli, ["add", "blog", "Hello", "World"])
    assert result.exit_code != 0
    assert "already exists" in result.output


def test_add_unknown_type(project, monkeypatch):
    monkeypatch.chdir(project.root)
    result = CliRunner().invoke(cli, ["add", "recipes"])
    assert result.exit_code != 0
    assert 'Unknown content type: "recipes"' in result.output


def test_add_custom_wizard(project, monkeypatch):
    monkeypatch.chdir(project.root)
    _mock_prompts(
        monkeypatch,
        [
            "Testimonials",  # label
            "testimonials",  # slug
            "quotes",  # tag
            "quote",  # field 1 name
            "string",  # field 1 type
            True,  # field 1 required
            "",  # finish fields
            "order",  # sort
            False,  # add to nav
        ],
    )

    result = CliRunner().invoke(cli, ["add-custom"], catch_exceptions=False)

    assert result.exit_code == 0
    stored = json.loads(project.custom_types_path.read_text(encoding="utf-8"))
    assert stored["testimonials"]["fields"] == [{"name": "quote", "type": "string", "required": True}]
    assert stored["testimonials"]["addToNav"] is False
    assert "quotes" in load_type_registry(project)
    assert load_navigation(project)["main"] == []
    layout = (project.layouts_dir / "testimonials.njk").read_text(encoding="utf-8")
    assert "{% if quote %}" in layout


def test_add_custom_rejects_reserved_slug_before_saving(project, monkeypatch):
    monkeypatch.chdir(project.root)
    runner = CliRunner()
    runner.invoke(cli, ["add", "faq"], catch_exceptions=False)
    _mock_prompts(monkeypatch, ["Pages", "pages"])

    result = runner.invoke(cli, ["add-custom"])

    assert result.exit_code != 0
    assert 'Invalid slug "pages"' in result.output
    assert not project.custom_types_path.exists()


def test_add_custom_aborts_on_cancel(project, monkeypatch):
    monkeypatch.chdir(project.root)
    _mock_prompts(monkeypatch, [None])
    result = CliRunner().invoke(cli, ["add-custom"])
    assert result.exit_code != 0
    assert not project.custom_types_path.exists()


def test_component_install_and_remove(project, monkeypatch):
    monkeypatch.chdir(project.root)
    css = project.root / "src" / "css" / "main.css"
    css.parent.mkdir(parents=True)
    css.write_text("body {}\n", encoding="utf-8")
    runner = CliRunner()

    result = runner.invoke(cli, ["add-component", "testimonials"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "testimonialGrid" in result.output
    assert (project.components_dir / "testimonials.njk").is_file()

    result = runner.invoke(cli, ["add-component"], catch_exceptions=False)
    assert "[installed]" in result.output

    result = runner.invoke(cli, ["remove-component", "testimonials"], catch_exceptions=False)
    assert result.exit_code == 0
    assert css.read_text(encoding="utf-8") == "body {}\n"


def test_add_component_unknown(project, monkeypatch):
    monkeypatch.chdir(project.root)
    result = CliRunner().invoke(cli, ["add-component", "carousel"])
    assert result.exit_code != 0
    assert "Unknown component" in result.output


def test_generate_and_list(project, monkeypatch):
    monkeypatch.chdir(project.root)
    runner = CliRunner()

    result = runner.invoke(cli, ["generate", "services", "2"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "Created 2 Services entries." in result.output

    result = runner.invoke(cli, ["list"], catch_exceptions=False)
    assert "services" in result.output
    assert "2 entries" in result.output

    result = runner.invoke(cli, ["list", "services"], catch_exceptions=False)
    assert "web-design" in result.output
    assert "SEO Optimization" in result.output


def test_remove_asks_for_confirmation(project, monkeypatch):
    monkeypatch.chdir(project.root)
    runner = CliRunner()
    runner.invoke(cli, ["add", "faq"], catch_exceptions=False)

    _mock_prompts(monkeypatch, [False])
    result = runner.invoke(cli, ["remove", "faq"])
    assert result.exit_code != 0
    assert project.content_dir("faq").exists()

    result = runner.invoke(cli, ["remove", "faq", "--yes"], catch_exceptions=False)
    assert result.exit_code == 0
    assert not project.content_dir("faq").exists()
    assert "faqs" not in load_type_registry(project)


def test_remove_reports_kept_media(project, monkeypatch):
    monkeypatch.chdir(project.root)
    runner = CliRunner()
    runner.invoke(cli, ["add", "blog"], catch_exceptions=False)
    (project.media_dir("blog") / "hero.jpg").write_bytes(b"x")

    result = runner.invoke(cli, ["remove", "blog", "--yes"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "media/blog/" in result.output
    assert "kept" in result.output


def test_delete_entry(project, monkeypatch):
    monkeypatch.chdir(project.root)
    runner = CliRunner()
    runner.invoke(cli, ["add", "blog", "Old", "News"], catch_exceptions=False)

    result = runner.invoke(cli, ["delete", "blog", "missing", "--yes"])
    assert result.exit_code != 0
    assert "File not found" in result.output

    result = runner.invoke(cli, ["delete", "blog", "../blog/old-news", "--yes"])
    assert result.exit_code != 0
    assert "Invalid slug" in result.output

    _mock_prompts(monkeypatch, [True])
    result = runner.invoke(cli, ["delete", "blog", "old-news"], catch_exceptions=False)
    assert result.exit_code == 0
    assert not (project.content_dir("blog") / "old-news.md").exists()


def test_remove_forget_custom_type(project, monkeypatch):
    monkeypatch.chdir(project.root)
    runner = CliRunner()
    _mock_prompts(monkeypatch, ["Recipes", "recipes", "recipes", "", "date", True])
    runner.invoke(cli, ["add-custom"], catch_exceptions=False)

    result = runner.invoke(cli, ["remove", "recipes", "--yes", "--forget"], catch_exceptions=False)

    assert result.exit_code == 0
    assert json.loads(project.custom_types_path.read_text(encoding="utf-8")) == {}


def test_module_main_entrypoint():
    from inkcms.__main__ import main

    assert callable(main)


def test_add_icons_patches_eleventy_config(project, monkeypatch):
    monkeypatch.chdir(project.root)
    runner = CliRunner()

    result = runner.invoke(cli, ["add", "icons"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "npm install --save-dev @grimlink/eleventy-plugin-lucide-icons" in result.output
    assert "lucideIcons" in project.eleventy_config_path.read_text(encoding="utf-8")

    result = runner.invoke(cli, ["add-plugin"], catch_exceptions=False)
    assert "[installed]" in result.output

    result = runner.invoke(cli, ["remove-plugin", "icons"], catch_exceptions=False)
    assert result.exit_code == 0
    assert "lucideIcons" not in project.eleventy_config_path.read_text(encoding="utf-8")
