"""Global test fixtures for the PageScrub test-suite."""
import os
import sys
from pathlib import Path

import pytest

# Widgets are created without a display in CI.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# ---------------------------------------------------------------------------
# Ensure the repository root is on sys.path so that `import pagescrub_project`
# is always resolvable when tests are run from any working directory.
# ---------------------------------------------------------------------------
_repo_root = Path(__file__).resolve().parent.parent
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    """Point the SettingsService singleton at a throw-away JSON file."""
    from pagescrub_project.src.services.settings_service import SettingsService

    path = tmp_path / "settings.json"
    monkeypatch.setattr(SettingsService, "_path", path)
    monkeypatch.setattr(SettingsService, "_instance", None)
    return path


@pytest.fixture(scope="session")
def fixture_pdf_file(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Generate a blank 5-page PDF using PyPDF2."""
    from PyPDF2 import PdfWriter

    pdf_path = tmp_path_factory.mktemp("pdfs") / "five_pages.pdf"
    writer = PdfWriter()
    for _ in range(5):
        writer.add_blank_page(width=200, height=300)
    with pdf_path.open("wb") as f:
        writer.write(f)
    return str(pdf_path)
