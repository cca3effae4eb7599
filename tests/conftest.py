import io
import json
import logging
from pathlib import Path
from typing import Any

import pytest
import structlog
from PIL import Image

from birdcatalog.catalog import Catalog, load_catalog
from birdcatalog.config import CatalogConfig
from birdcatalog.system.path_resolver import CatalogSources


def image_meta_record(
    filename: str,
    responsive_urls: dict[str, str] | None = None,
    duration: float | None = None,
) -> dict[str, Any]:
    """Build an image metadata record in the wire format of the catalog documents."""
    info: dict[str, Any] = {
        "timestamp": "2020-01-01T00:00:00Z",
        "user": "tester",
        "size": 1024,
        "width": 640,
        "height": 480,
        "comment": "",
        "thumburl": f"https://img.example/thumb/{filename}",
        "thumbwidth": 220,
        "thumbheight": 165,
        "url": f"https://img.example/{filename}",
        "descriptionurl": f"https://img.example/wiki/{filename}",
        "descriptionshorturl": "https://img.example/w/1",
        "mime": "image/jpeg",
    }
    if responsive_urls is not None:
        info["responsiveUrls"] = responsive_urls
    if duration is not None:
        info["duration"] = duration
    return {"filename": filename, "info": info}


def responsive(filename: str) -> dict[str, str]:
    """Responsive URL variants for a filename, 1.5x first."""
    return {
        "1.5": f"https://img.example/330px-{filename}",
        "2": f"https://img.example/440px-{filename}",
    }


@pytest.fixture
def catalog_documents() -> dict[str, list[dict[str, Any]]]:
    """Raw catalog documents: two groups, details and both image indexes."""
    groups = [
        {
            "category": "Trogons",
            "order": {"name": "Trogoniformes", "link": "https://wiki.example/Trogoniformes"},
            "family": {"name": "Trogonidae", "link": "https://wiki.example/Trogonidae"},
            "summary": "Trogons and quetzals.",
            "summaryHTML": "<p>Trogons and quetzals.</p>",
            "images": [
                {"filename": "group_quetzal.jpg", "title": "Quetzal"},
                {"filename": "group_missing.jpg", "title": "Missing"},
            ],
            "birds": [
                {
                    "name": "Resplendent Quetzal",
                    "link": "https://wiki.example/Resplendent_quetzal",
                    "latin": "Pharomachrus mocinno",
                    "displayedHTML": "Resplendent Quetzal (E-R)",
                },
                {
                    "name": "Collared Trogon",
                    "link": "https://wiki.example/Collared_trogon",
                    "latin": "Trogon collaris",
                },
            ],
        },
        {
            "category": "Toucans",
            "order": {"name": "Piciformes", "link": "https://wiki.example/Piciformes"},
            "family": {"name": "Ramphastidae", "link": "https://wiki.example/Toucan"},
            "summary": "Toucans.",
            "summaryHTML": "<p>Toucans.</p>",
            "images": [],
            "birds": [
                {
                    "name": "Keel-billed Toucan",
                    "link": "https://wiki.example/Keel-billed_toucan",
                    "latin": "Ramphastos sulfuratus",
                    "tag": "introduced",
                }
            ],
        },
    ]
    details = [
        {
            "birdTitle": "Resplendent_Quetzal",
            "summary": "Lives in cloud forests.",
            "imageFiles": [
                "quetzal_male.jpg",
                "OOjs_UI_icon_edit-ltr-progressive.svg",
                "quetzal_call.webm",
                "quetzal_female.jpg",
                "quetzal_male.jpg",
                "quetzal_raw.jpg",
                "quetzal_nest.jpg",
            ],
        },
        {
            "birdTitle": "Resplendent_Quetzal",
            "summary": "Duplicate detail that is never used.",
            "imageFiles": ["quetzal_nest.jpg"],
        },
    ]
    image_meta = [
        image_meta_record("quetzal_male.jpg", responsive("quetzal_male.jpg")),
        image_meta_record(
            "OOjs_UI_icon_edit-ltr-progressive.svg",
            responsive("OOjs_UI_icon_edit-ltr-progressive.svg"),
        ),
        image_meta_record("quetzal_call.webm", duration=12.5),
        image_meta_record("quetzal_female.jpg", responsive("quetzal_female.jpg")),
        image_meta_record("quetzal_raw.jpg"),
        image_meta_record("quetzal_nest.jpg", responsive("quetzal_nest.jpg")),
        image_meta_record("quetzal_male.jpg", {"1": "https://img.example/shadowed.jpg"}),
    ]
    group_image_meta = [
        image_meta_record("group_quetzal.jpg", responsive("group_quetzal.jpg")),
    ]
    return {
        "groups": groups,
        "details": details,
        "image_meta": image_meta,
        "group_image_meta": group_image_meta,
    }


@pytest.fixture
def catalog_sources(tmp_path: Path, catalog_documents) -> CatalogSources:
    """Write the catalog documents to disk and return their paths."""
    sources = CatalogSources(
        groups=tmp_path / "bird-groups.json",
        details=tmp_path / "bird-details.json",
        image_meta=tmp_path / "image-meta.json",
        group_image_meta=tmp_path / "bird-groups-image-meta.json",
    )
    for name, path in sources._asdict().items():
        path.write_text(json.dumps(catalog_documents[name]), encoding="utf-8")
    return sources


@pytest.fixture
def catalog(catalog_sources: CatalogSources) -> Catalog:
    """Catalog loaded from the test documents."""
    return load_catalog(*catalog_sources)


@pytest.fixture
def test_config(catalog_sources: CatalogSources) -> CatalogConfig:
    """Configuration pointing at the test documents."""
    return CatalogConfig(data_dir=str(catalog_sources.groups.parent))


@pytest.fixture
def png_bytes() -> bytes:
    """A tiny valid PNG image."""
    buffer = io.BytesIO()
    Image.new("RGB", (4, 3), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def image_meta_factory():
    """Builder for wire-format image metadata records."""
    return image_meta_record


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo logging configuration done by the code under test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()
