"""Shared fixtures for Sicilia tests."""

import pytest

from sicilia.schemas import CatalogItem, SeedRecord
from sicilia.store import CatalogStore


@pytest.fixture
def seed_records():
    return [
        SeedRecord(id=1, word="Ciau", meaning="こんにちは", is_premium=False),
        SeedRecord(id=2, word="Grazzi", meaning="ありがとう", is_premium=False),
        SeedRecord(id=3, word="Pani", meaning="パン", is_premium=True),
    ]


@pytest.fixture
def store(tmp_path, seed_records):
    store = CatalogStore(tmp_path / "sicilia.db", seed_records=seed_records)
    assert store.initialize()
    return store


@pytest.fixture
def word_pool():
    words = [
        ("Acqua", "水"), ("Vinu", "ワイン"), ("Casa", "家"),
        ("Mari", "海"), ("Suli", "太陽"), ("Luna", "月"),
    ]
    return [
        CatalogItem(id=idx, word=word, meaning=meaning)
        for idx, (word, meaning) in enumerate(words, 1)
    ]
