"""Shared fixtures: canned API payloads and a fake fetch function."""

import json
from pathlib import Path

import pytest

from acres.api import Api, ApiError, ResponseCache

FIXTURES_DIR = Path(__file__).parent / "fixtures"

API_BASE = "https://api.artic.edu/api/v1"
IIIF_BASE = "https://www.artic.edu/iiif/2"
IMAGE_ID = "2d484387-2509-5e8e-2c43-22f9981972eb"


def load_fixture(name: str) -> bytes:
    return (FIXTURES_DIR / name).read_bytes()


class FakeFetch:
    """Stands in for the HTTP fetch function, recording every URL requested."""

    def __init__(self, responses: dict[str, bytes]):
        self.responses = responses
        self.calls: list[str] = []

    def __call__(self, url: str) -> bytes:
        self.calls.append(url)
        if url not in self.responses:
            raise ApiError(f"could not find {url}", url=url, status=404)
        return self.responses[url]


@pytest.fixture
def responses() -> dict[str, bytes]:
    return {
        f"{API_BASE}/artworks/27992?fields=id,title,image_id": load_fixture("artwork_27992.json"),
        f"{API_BASE}/artworks/27992": load_fixture("artwork_27992.json"),
        f"{API_BASE}/artworks/27992/manifest.json": json.dumps(
            {"@type": "sc:Manifest", "@id": f"{API_BASE}/artworks/27992/manifest.json"}
        ).encode(),
        f"{API_BASE}/artworks": load_fixture("artworks_page.json"),
        f"{API_BASE}/artworks?ids=1,3&limit=2": load_fixture("artworks_page.json"),
        f"{API_BASE}/artworks/search?q=monet&size=2": json.dumps(
            {"pagination": {"total": 2}, "data": [{"id": 16568}, {"id": 16571}]}
        ).encode(),
        f"{IIIF_BASE}/{IMAGE_ID}/info.json": load_fixture("info.json"),
        f"{IIIF_BASE}/{IMAGE_ID}/full/843,/0/default.jpg": b"\xff\xd8\xff\xe0fake-jpeg",
    }


@pytest.fixture
def fake_fetch(responses) -> FakeFetch:
    return FakeFetch(responses)


@pytest.fixture
def cache(tmp_path) -> ResponseCache:
    return ResponseCache(tmp_path / "cache")


@pytest.fixture
def api(fake_fetch, cache) -> Api:
    return Api(API_BASE, use_cache=True, cache=cache, fetch=fake_fetch)
