"""Shared fixtures"""

# tests/conftest.py
# mypy: disable-error-code="import-untyped"
import io
import logging
from pathlib import Path
from typing import Callable

import pptx
import pytest

from slide_transitions.internals.define_config import UserConfig
from slide_transitions.internals.run_context import seed_pipeline_run_id


@pytest.fixture(autouse=True)
def user_documents(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ~/Documents at a temp folder so logs, output and manifests never touch the real one."""
    documents = tmp_path / "Documents"
    documents.mkdir()
    monkeypatch.setattr(
        "slide_transitions.internals.paths.user_documents_dir", lambda: str(documents)
    )
    return documents


@pytest.fixture(autouse=True)
def reset_app_state():
    """Undo anything a test did to the app logger or the pipeline run id."""
    yield
    logger = logging.getLogger("slide_transitions")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    seed_pipeline_run_id(None)


@pytest.fixture
def temp_output_dir(tmp_path: Path) -> Path:
    """Temporary directory for test output files"""
    output = tmp_path / "output"
    output.mkdir()
    return output


@pytest.fixture
def make_deck() -> Callable[[int], bytes]:
    """Factory: a python-pptx deck with N blank slides, as .pptx bytes."""

    def _make(slide_count: int) -> bytes:
        prs = pptx.Presentation()
        blank_layout = prs.slide_layouts[6]
        for i in range(slide_count):
            slide = prs.slides.add_slide(blank_layout)
            box = slide.shapes.add_textbox(0, 0, 914400, 914400)
            box.text_frame.text = f"Slide {i + 1}"
        buffer = io.BytesIO()
        prs.save(buffer)
        return buffer.getvalue()

    return _make


@pytest.fixture
def three_slide_deck(make_deck: Callable[[int], bytes]) -> bytes:
    """A freshly generated deck with three slides and no transitions."""
    return make_deck(3)


@pytest.fixture
def input_pptx(tmp_path: Path, three_slide_deck: bytes) -> Path:
    """three_slide_deck written to disk."""
    path = tmp_path / "deck.pptx"
    path.write_bytes(three_slide_deck)
    return path


@pytest.fixture
def sample_cfg(input_pptx: Path, temp_output_dir: Path) -> UserConfig:
    """Sample config object pointing at a real input deck and a temp output folder."""
    return UserConfig(input_pptx=input_pptx, output_folder=temp_output_dir)


@pytest.fixture
def clean_debug_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Ensure debug env var is not set before test.
    Used by at least test_utils + test_startup."""
    monkeypatch.delenv("SLIDE_TRANSITIONS_DEBUG", raising=False)
    return monkeypatch


@pytest.fixture
def sample_config_toml(tmp_path: Path, input_pptx: Path) -> Path:
    """Path to a small, valid config toml"""
    path = tmp_path / "settings.toml"
    path.write_text(
        f'input_pptx = "{input_pptx.as_posix()}"\n'
        'sequence = ["fade", "wipe", "cover"]\n'
        'compression = "stored"\n'
        "verify_output = true\n",
        encoding="utf-8",
    )
    return path
