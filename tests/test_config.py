from inkcms.config import DEFAULT_CONFIG, load_config
from inkcms.project import Project


def test_load_config_defaults(tmp_path):
    config = load_config(tmp_path)
    assert config == DEFAULT_CONFIG
    config["shared_layouts"].append("mine.njk")
    assert "mine.njk" not in DEFAULT_CONFIG["shared_layouts"]


def test_load_config_overrides(tmp_path):
    (tmp_path / "ink.yaml").write_text(
        "style_bundle: assets/site.css\nshared_layouts:\n  - base.njk\n  - landing.njk\n",
        encoding="utf-8",
    )
    project = Project.at(tmp_path)
    assert project.style_bundle == tmp_path / "assets" / "site.css"
    assert project.script_bundle == tmp_path / "src" / "js" / "main.js"
    assert project.shared_layouts == frozenset({"base.njk", "page.njk", "archive.njk", "home.njk", "landing.njk"})


def test_load_config_invalid_yaml(tmp_path, caplog):
    (tmp_path / "ink.yaml").write_text("style_bundle: [unclosed\n", encoding="utf-8")
    assert load_config(tmp_path) == DEFAULT_CONFIG
    assert "ink.yaml" in caplog.text


def test_load_config_non_mapping(tmp_path):
    (tmp_path / "ink.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    assert load_config(tmp_path) == DEFAULT_CONFIG


def test_empty_config_file(tmp_path):
    (tmp_path / "ink.yaml").write_text("", encoding="utf-8")
    assert load_config(tmp_path) == DEFAULT_CONFIG
