"""Pytest fixtures for QueryGen tests."""

from __future__ import annotations

import logging
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from querygen import QueryBuilder, QueryGenerator, QuerySpec
from querygen.reporters import CollectingReporter

HOST = "http://localhost:8080"
PRODUCTS = f"{HOST}/products/by-filters"

PRODUCTS_BY_COLOR_URLS = [
    f"{PRODUCTS}?color=green",
    f"{PRODUCTS}?color=yellow",
    f"{PRODUCTS}?color=red",
    f"{PRODUCTS}?color=green&color=yellow",
    f"{PRODUCTS}?color=green&color=red",
    f"{PRODUCTS}?color=yellow&color=red",
    f"{PRODUCTS}?color=green&color=yellow&color=red",
    f"{PRODUCTS}?colorCodingType=status",
    f"{PRODUCTS}?colorCodingType=status&color=green",
    f"{PRODUCTS}?colorCodingType=status&color=yellow",
    f"{PRODUCTS}?colorCodingType=status&color=red",
    f"{PRODUCTS}?colorCodingType=status&color=green&color=yellow",
    f"{PRODUCTS}?colorCodingType=status&color=green&color=red",
    f"{PRODUCTS}?colorCodingType=status&color=yellow&color=red",
    f"{PRODUCTS}?colorCodingType=status&color=green&color=yellow&color=red",
]

SAMPLE_SUITE = """
host: http://localhost:8080
queries:
  - name: Departments
    url: /app/departments
  - name: Promotion
    url: /promotions/by-filters
    fixed:
      promotion: "123456"
  - name: Products
    url: /products/by-filters
    always_filter: true
    mixed:
      colorCodingType: [status]
      color: [green, yellow, red]
"""


@pytest.fixture(autouse=True)
def reset_querygen_logger():
    """Undo configure_logging() calls made by a test."""
    yield
    logger = logging.getLogger("querygen")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Keep QUERYGEN_* variables and stray .env files out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("QUERYGEN_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def builder() -> QueryBuilder:
    return QueryBuilder()


@pytest.fixture
def generator() -> QueryGenerator:
    return QueryGenerator()


@pytest.fixture
def collector() -> CollectingReporter:
    return CollectingReporter()


@pytest.fixture
def products_spec() -> QuerySpec:
    return (
        QueryBuilder()
        .query("ProductsByFilter")
        .host(HOST)
        .url("/products/by-filters")
        .always_filter()
        .mix_param("colorCodingType", ["status"])
        .mix_param("color", ["green", "yellow", "red"])
        .build()
    )


@pytest.fixture
def write_suite(tmp_path: Path) -> Callable[..., Path]:
    """Write YAML text to a file in tmp_path and return its path."""

    def _write(content: str = SAMPLE_SUITE, name: str = "suite.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content))
        return path

    return _write


@pytest.fixture
def products_urls() -> list[str]:
    """URLs of ``products_spec``, in generation order."""
    return list(PRODUCTS_BY_COLOR_URLS)
