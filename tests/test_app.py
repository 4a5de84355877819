"""
Smoke tests for the Streamlit UI module.
"""

import py_compile
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

import database

APP_PATH = Path(__file__).resolve().parent.parent / "app.py"


def test_app_compiles():
    py_compile.compile(str(APP_PATH), doraise=True)


@pytest.fixture
def memory_database(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("SEED_REFERENCE_DATA", "true")
    monkeypatch.setattr(database, "_db_manager", None)


def test_lowest_price_page_renders(memory_database):
    at = AppTest.from_file(str(APP_PATH), default_timeout=30).run()

    assert not at.exception
    assert not at.error
    assert at.header[0].value == "카테고리별 최저가격 브랜드"
    assert at.metric[0].value == "34,100"
