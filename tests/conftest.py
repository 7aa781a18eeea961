import pytest

from netrum_monitor.cache import NodeCache


@pytest.fixture
def api_base(monkeypatch):
    monkeypatch.setenv("NETRUM_API_BASE", "http://api.test/")
    return "http://api.test"


@pytest.fixture
def cache():
    return NodeCache()
