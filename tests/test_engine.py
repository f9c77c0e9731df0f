# File: tests/test_engine.py
import pytest

import munin_probes.engine as engine_module
from munin_probes.aggregator import Accumulator
from munin_probes.cache import FileCacheStore, MemoryCacheStore
from munin_probes.crawler.models import Category, FetchResult, Instance, MeasurementKey as K
from munin_probes.engine import Engine
from munin_probes.report.munin import render_config
from munin_probes.utils import UNKNOWN


class FakeProbe:
    """Stands in for PageProbe: one 10-byte page per URL, no network."""

    calls: list = []

    def __init__(self, config):
        self.config = config

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return None

    async def probe(self, url):
        FakeProbe.calls.append(url)
        acc = Accumulator()
        acc.record_fetch("a.com", FetchResult(url, 200, "text/html", b"0123456789", 0.25))
        return acc


@pytest.fixture()
def fake_probe(monkeypatch):
    FakeProbe.calls = []
    monkeypatch.setattr(engine_module, "PageProbe", FakeProbe)
    return FakeProbe


def test_run_cycle_writes_every_category(http_config, url_file, fake_probe):
    url_file.write_text("http://a.com/\n", encoding="utf-8")
    store = MemoryCacheStore()
    written = Engine(http_config, store).run_cycle()

    assert fake_probe.calls == ["http://a.com/"]
    assert set(written) == {Instance("httpacom", c) for c in Category}
    assert store.read(Instance("httpacom", Category.SIZE)) == {K.size("a.com"): "10"}
    assert store.read(Instance("httpacom", Category.LOADTIME)) == {K.loadtime("a.com"): "0.25"}
    assert store.read(Instance("httpacom", Category.RESPONSE)) == {K.response("a.com", 200): "1"}
    assert store.read(Instance("httpacom", Category.TAGS)) == {}


def test_run_cycle_marks_stale_series_unknown(http_config, fake_probe):
    instance = Instance("httpacom", Category.SIZE)
    store = MemoryCacheStore({instance: {K.size("a.com"): "5", K.size("gone.com"): "7"}})
    Engine(http_config, store).run_cycle({"httpacom": "http://a.com/"})
    assert store.read(instance) == {K.size("a.com"): "10", K.size("gone.com"): UNKNOWN}


def test_run_cycle_empty_registry(http_config, fake_probe):
    assert Engine(http_config, MemoryCacheStore()).run_cycle() == {}
    assert fake_probe.calls == []


def test_default_store_is_file_store(http_config):
    store = Engine(http_config).store
    assert isinstance(store, FileCacheStore)
    assert store.cache_dir == http_config.cache_dir


@pytest.mark.asyncio()
async def test_probe_all_against_site(http_config, site: str):
    store = MemoryCacheStore()
    await Engine(http_config, store).probe_all({"local": f"{site}/"})
    elements = store.read(Instance("local", Category.ELEMENTS))
    assert elements == {K.elements("localhost"): "5"}
    tags = store.read(Instance("local", Category.TAGS))
    assert tags[K.tag("img", "src")] == "2"


def test_hostless_url_keys_survive_the_cache(http_config, tmp_path):
    store = FileCacheStore(tmp_path / "state")
    urls = {"examplecompage": "example.com/page"}

    written = Engine(http_config, store).run_cycle(urls)
    for instance, cache in written.items():
        assert all(key.subkey for key in cache)
        assert store.read(instance) == cache

    size = Instance("examplecompage", Category.SIZE)
    assert written[size] == {K.size("examplecompage"): "0"}
    assert store.read(Instance("examplecompage", Category.RESPONSE)) == {
        K.response("examplecompage", 500): "1"
    }

    Engine(http_config, store).run_cycle(urls)
    assert store.read(size) == {K.size("examplecompage"): "0"}

    lines = render_config(size, urls["examplecompage"], store.read(size), "network")
    assert "examplecompage.label examplecompage" in lines
    assert "examplecompage.draw AREA" in lines
