# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pytest
from PIL import Image

from moving_sale.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_csv: data/data.csv
output_path: public/index.html
image_prefix: images
currency: AED
title: Moving Sale
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "site.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_csv_text() -> str:
    return (
        "Item,New price,Asking price,Available,Images,Notes,Status\n"
        'Chair,500,300,now,"chair1.jpg,chair2.jpg",Good condition,\n'
        '"Sofa, 3-seater",4200,???,end of March,sofa.jpg,"Grey, ""like new""",\n'
        "Desk lamp,???,,???,,,Sold\n"
    )


@pytest.fixture()
def write_csv(temp_workdir: Path, sample_csv_text: str) -> Path:
    path = temp_workdir / "data" / "data.csv"
    path.write_text(sample_csv_text, encoding="utf-8")
    return path


@pytest.fixture()
def make_image():
    """Create an image file: make_image(path, size=(w, h), mode="RGB", fmt=None)."""
    def _make(path: Path, size=(2400, 1600), mode="RGB", fmt=None) -> Path:
        color = (200, 30, 30, 128) if mode == "RGBA" else (200, 30, 30)
        img = Image.new(mode, size, color)
        img.save(path, format=fmt)
        return path
    return _make
