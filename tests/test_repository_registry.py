import threading

import pytest

from runtimelibs.domain import ConfigurationError
from runtimelibs.fileget import RepositoryRegistry


def test_trailing_slash_variants_collapse():
    registry = RepositoryRegistry()
    registry.add("https://repo.example/maven2")
    registry.add("https://repo.example/maven2/")
    assert registry.urls == ["https://repo.example/maven2/"]
    assert len(registry) == 1
    assert "https://repo.example/maven2" in registry


def test_insertion_order_is_priority():
    registry = RepositoryRegistry(["https://b.example", "https://a.example"])
    registry.add_all(["https://c.example", "https://a.example/"])
    assert list(registry) == ["https://b.example/", "https://a.example/", "https://c.example/"]


def test_empty_url_rejected():
    with pytest.raises(ConfigurationError):
        RepositoryRegistry().add("")


def test_concurrent_adds_keep_one_entry_each():
    registry = RepositoryRegistry()
    urls = [f"https://repo{i % 5}.example" for i in range(200)]

    def worker(chunk):
        registry.add_all(chunk)

    threads = [threading.Thread(target=worker, args=(urls[i::4],)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sorted(registry.urls) == [f"https://repo{i}.example/" for i in range(5)]


def test_membership_of_blank_or_foreign_values_is_false():
    registry = RepositoryRegistry(["https://repo.example"])
    assert "  " not in registry
    assert "" not in registry
    assert None not in registry
    assert " https://repo.example " in registry
