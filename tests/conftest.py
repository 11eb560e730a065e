from __future__ import annotations

import sys
import time
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from dexquiz.config import Settings
from dexquiz.main import create_app

NAMES = {
    1: "bulbasaur",
    25: "pikachu",
    29: "nidoran-f",
    32: "nidoran-m",
    83: "farfetchd",
    122: "mr-mime",
    250: "ho-oh",
    899: "wyrdeer",
    900: "kleavor",
    901: "ursaluna",
    902: "basculegion",
    903: "sneasler",
    904: "overqwil",
    905: "enamorus",
}


def pokemon_payload(record_id: int) -> dict:
    return {
        "id": record_id,
        "name": NAMES.get(record_id, f"mon-{record_id}"),
        "sprites": {"front_default": f"https://sprites.test/{record_id}.png"},
    }


def catalog_handler(request: httpx.Request) -> httpx.Response:
    record_id = int(request.url.path.rstrip("/").rsplit("/", 1)[-1])
    return httpx.Response(200, json=pokemon_payload(record_id))


def wait_for_state(client: TestClient, *states: str, attempts: int = 300) -> dict:
    body = {}
    for _ in range(attempts):
        body = client.get("/api/session").json()
        if body["state"] in states:
            return body
        time.sleep(0.01)
    raise AssertionError(f"session never reached {states}; last state {body.get('state')}")


@pytest.fixture()
def fast_settings():
    return Settings(
        catalog_base_url="https://catalog.test/api/v2",
        retry_delay=0.0,
        batch_delay=0.0,
    )


@pytest.fixture()
def client(fast_settings):
    app = create_app(fast_settings, transport=httpx.MockTransport(catalog_handler))
    with TestClient(app) as c:
        yield c
