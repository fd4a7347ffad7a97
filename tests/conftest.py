import pytest

from inkcms.project import PROJECT_MARKER, Project


@pytest.fixture
def project(tmp_path):
    """An empty Ink project rooted at tmp_path."""
    (tmp_path / PROJECT_MARKER).write_text("export default function () {}\n", encoding="utf-8")
    return Project.at(tmp_path)
