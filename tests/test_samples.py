from datetime import date, timedelta

from inkcms import registry
from inkcms.custom_types import CustomTypeConfig, build_custom_type
from inkcms.frontmatter import read_entry
from inkcms.samples import SAMPLE_POOLS, generate_entries, placeholder_image, sample_pool
from inkcms.scaffold import Outcome
from inkcms.schema import FieldKind, FrontmatterField


def test_sample_pool_numbers_titles_past_pool_size():
    pool_size = len(SAMPLE_POOLS["services"])
    titles = [s["title"] for s in sample_pool("services", pool_size + 2)]
    assert titles[0] == "Web Design"
    assert titles[pool_size] == "Web Design 2"
    assert len(set(titles)) == len(titles)


def test_sample_pool_without_pool():
    assert [s["title"] for s in sample_pool("recipes", 2, "Recipes")] == ["Recipes 1", "Recipes 2"]


def test_placeholder_images():
    assert placeholder_image("team", "photo", 0) == "/media/placeholders/avatar-1.png"
    assert placeholder_image("team", "photo", 3) == "/media/placeholders/avatar-2.png"
    assert placeholder_image("docs", "featured_image", 0) == "/media/placeholders/default.png"


def test_generate_blog_entries(project):
    report = generate_entries(project, registry.get("blog"), "blog", 2)

    entries = [s for s in report.steps if s.action == "entry"]
    assert [s.outcome for s in entries] == [Outcome.CREATED, Outcome.CREATED]
    first = read_entry(project.content_dir("blog") / "getting-started-with-markdown.md")
    assert first.data["title"] == "Getting Started with Markdown"
    assert first.data["date"] == date.today().isoformat()
    assert first.data["author"] == "Admin"
    assert first.data["permalink"] == "/blog/getting-started-with-markdown/"
    assert first.data["published"] is True
    assert "## Key Takeaways" in first.body

    second = read_entry(project.content_dir("blog") / "5-tips-for-better-web-performance.md")
    assert second.data["date"] == (date.today() - timedelta(weeks=1)).isoformat()
    assert project.defaults_path("blog").is_file()


def test_generate_team_uses_url_base_and_order(project):
    generate_entries(project, registry.get("team"), "team", 2)
    entry = read_entry(project.content_dir("employees") / "michael-chen.md")
    assert entry.data["role"] == "Lead Developer"
    assert entry.data["order"] == 2
    assert entry.data["permalink"] == "/team/michael-chen/"
    assert entry.data["photo"].startswith("/media/placeholders/avatar")


def test_generate_service_areas_adds_cta(project):
    generate_entries(project, registry.get("service-areas"), "service-areas", 1)
    entry = read_entry(project.content_dir("service-areas") / "downtown.md")
    assert entry.data["cta_title"] == "Need Service in Downtown?"
    assert entry.data["cta_url"] == "/contact/"


def test_generate_never_overwrites(project):
    faq = registry.get("faq")
    target = project.content_dir("faq") / "how-do-i-get-started.md"
    target.parent.mkdir(parents=True)
    target.write_text("mine", encoding="utf-8")

    report = generate_entries(project, faq, "faq", 2)

    entries = [s for s in report.steps if s.action == "entry"]
    assert [s.outcome for s in entries] == [Outcome.SKIPPED, Outcome.CREATED]
    assert target.read_text(encoding="utf-8") == "mine"


def test_generate_custom_type(project):
    config = CustomTypeConfig(
        "Recipes",
        "recipes",
        "recipes",
        (FrontmatterField("servings", FieldKind.NUMBER), FrontmatterField("vegan", FieldKind.BOOLEAN)),
    )
    generate_entries(project, build_custom_type(config), "recipes", 2)

    entry = read_entry(project.content_dir("recipes") / "recipes-2.md")
    assert entry.data["servings"] == 0
    assert entry.data["vegan"] is True
    assert entry.data["permalink"] == "/recipes/recipes-2/"
    assert "Lorem ipsum" in entry.body
