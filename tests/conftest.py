# tests/conftest.py
import asyncio
import copy
import json
from collections import Counter
from typing import Any

import pytest
import pytest_asyncio

from dexgraph.client import DexGraphClient
from dexgraph.config import DexGraphSettings
from dexgraph.exceptions import NotFoundError

BASE_URL = "https://pokeapi.co/api/v2/"


def ref(kind: str, key: int | str, name: str | None = None) -> dict[str, Any]:
    """A PokéAPI ``{name, url}`` link object."""
    link: dict[str, Any] = {"url": f"{BASE_URL}{kind}/{key}/"}
    if name is not None:
        link["name"] = name
    return link


EN = ref("language", 9, "en")

SPECIES_25 = {
    "id": 25,
    "name": "pikachu",
    "order": 35,
    "gender_rate": 4,
    "capture_rate": 190,
    "generation": ref("generation", 1, "generation-i"),
    "evolves_from_species": ref("pokemon-species", 172, "pichu"),
    "evolution_chain": {"url": f"{BASE_URL}evolution-chain/10/"},
    "egg_groups": [ref("egg-group", 5, "ground"), ref("egg-group", 6, "fairy")],
    "names": [
        {"name": "ピカチュウ", "language": ref("language", 1, "ja-Hrkt")},
        {"name": "Pikachu", "language": EN},
    ],
    "genera": [{"genus": "Mouse Pokémon", "language": EN}],
    "varieties": [
        {"is_default": True, "pokemon": ref("pokemon", 25, "pikachu")},
        {"is_default": False, "pokemon": ref("pokemon", 10080, "pikachu-rock-star")},
    ],
}

POKEMON_25 = {
    "id": 25,
    "name": "pikachu",
    "is_default": True,
    "height": 4,
    "weight": 60,
    "species": ref("pokemon-species", 25, "pikachu"),
    "forms": [ref("pokemon-form", 25, "pikachu")],
    "types": [{"slot": 1, "type": ref("type", 13, "electric")}],
    "abilities": [
        {"is_hidden": False, "slot": 1, "ability": ref("ability", 9, "static")}
    ],
    "stats": [{"base_stat": 90, "effort": 2, "stat": ref("stat", 6, "speed")}],
    "sprites": {
        "front_default": "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/25.png",
        "other": {"home": {"front_default": None}},
    },
}

# One minimal valid document per kind, and the fields each kind requires.
PAYLOADS: dict[str, dict[str, Any]] = {
    "pokemon-species": SPECIES_25,
    "pokemon": POKEMON_25,
    "pokemon-form": {"id": 25, "name": "pikachu", "pokemon": ref("pokemon", 25, "pikachu")},
    "move": {"id": 85, "name": "thunderbolt", "type": ref("type", 13, "electric"), "power": 90},
    "move-ailment": {"id": 1, "name": "paralysis"},
    "move-damage-class": {"id": 3, "name": "special"},
    "move-learn-method": {"id": 1, "name": "level-up"},
    "move-target": {"id": 10, "name": "selected-pokemon"},
    "ability": {"id": 9, "name": "static", "generation": ref("generation", 3, "generation-iii")},
    "type": {
        "id": 13,
        "name": "electric",
        "damage_relations": {
            "no_damage_to": [ref("type", 5, "ground")],
            "double_damage_to": [ref("type", 3, "flying"), ref("type", 11, "water")],
        },
    },
    "stat": {"id": 6, "name": "speed", "is_battle_only": False},
    "nature": {"id": 1, "name": "hardy"},
    "characteristic": {"id": 1, "gene_modulo": 0, "highest_stat": ref("stat", 1, "hp")},
    "generation": {"id": 1, "name": "generation-i", "main_region": ref("region", 1, "kanto")},
    "version": {"id": 1, "name": "red", "version_group": ref("version-group", 1, "red-blue")},
    "version-group": {"id": 1, "name": "red-blue", "generation": ref("generation", 1, "generation-i")},
    "pokedex": {"id": 2, "name": "kanto"},
    "language": {"id": 9, "name": "en", "official": True, "iso639": "en", "iso3166": "us"},
    "item": {"id": 1, "name": "master-ball", "category": ref("item-category", 34, "standard-balls")},
    "item-attribute": {"id": 1, "name": "countable"},
    "item-category": {"id": 34, "name": "standard-balls", "pocket": ref("item-pocket", 3, "pokeballs")},
    "item-pocket": {"id": 3, "name": "pokeballs"},
    "machine": {
        "id": 1,
        "item": ref("item", 305, "tm01"),
        "move": ref("move", 5, "mega-punch"),
        "version_group": ref("version-group", 1, "red-blue"),
    },
    "region": {"id": 1, "name": "kanto"},
    "location": {"id": 1, "name": "canalave-city"},
    "location-area": {"id": 1, "name": "canalave-city-area", "location": ref("location", 1, "canalave-city")},
    "egg-group": {"id": 5, "name": "ground"},
    "growth-rate": {"id": 2, "name": "medium", "formula": "x^3"},
    "pokemon-color": {"id": 10, "name": "yellow"},
    "pokemon-shape": {"id": 8, "name": "quadruped"},
    "pokemon-habitat": {"id": 2, "name": "forest"},
    "evolution-chain": {
        "id": 10,
        "chain": {
            "species": ref("pokemon-species", 172, "pichu"),
            "is_baby": True,
            "evolves_to": [
                {
                    "species": ref("pokemon-species", 25, "pikachu"),
                    "evolution_details": [
                        {"trigger": ref("evolution-trigger", 1, "level-up"), "min_happiness": 220}
                    ],
                    "evolves_to": [
                        {
                            "species": ref("pokemon-species", 26, "raichu"),
                            "evolution_details": [
                                {"trigger": ref("evolution-trigger", 3, "use-item")}
                            ],
                        }
                    ],
                }
            ],
        },
    },
    "evolution-trigger": {
        "id": 1,
        "name": "level-up",
        "pokemon_species": [ref("pokemon-species", 25, "pikachu")],
    },
    "move-category": {"id": 4, "name": "net-good-stats"},
    "move-battle-style": {"id": 1, "name": "attack"},
    "pokeathlon-stat": {
        "id": 1,
        "name": "speed",
        "affecting_natures": {"increase": [{"max_change": 2, "nature": ref("nature", 1, "hardy")}]},
    },
    "item-fling-effect": {"id": 1, "name": "badly-poison", "items": [ref("item", 1, "master-ball")]},
    "encounter-method": {"id": 1, "name": "walk", "order": 1},
    "encounter-condition": {"id": 2, "name": "time"},
    "encounter-condition-value": {
        "id": 3,
        "name": "time-morning",
        "condition": ref("encounter-condition", 2, "time"),
    },
    "berry": {
        "id": 1,
        "name": "cheri",
        "firmness": ref("berry-firmness", 2, "soft"),
        "item": ref("item", 126, "cheri-berry"),
        "natural_gift_type": ref("type", 10, "fire"),
        "flavors": [{"potency": 10, "flavor": ref("berry-flavor", 1, "spicy")}],
    },
    "berry-firmness": {"id": 2, "name": "soft"},
    "berry-flavor": {
        "id": 1,
        "name": "spicy",
        "contest_type": ref("contest-type", 1, "cool"),
        "berries": [{"potency": 10, "berry": ref("berry", 1, "cheri")}],
    },
    "contest-type": {
        "id": 1,
        "name": "cool",
        "berry_flavor": ref("berry-flavor", 1, "spicy"),
        "names": [{"name": "Cool", "color": "Red", "language": EN}],
    },
    "contest-effect": {"id": 1, "appeal": 4, "jam": 0},
    "super-contest-effect": {"id": 5, "appeal": 2, "moves": [ref("move", 85, "thunderbolt")]},
}

REQUIRED_FIELDS: dict[str, tuple[str, ...]] = {
    "pokemon-species": ("id", "name", "order", "generation", "varieties"),
    "pokemon": ("id", "name", "species", "is_default"),
    "pokemon-form": ("id", "name", "pokemon"),
    "move": ("id", "name", "type"),
    "move-ailment": ("id", "name"),
    "move-damage-class": ("id", "name"),
    "move-learn-method": ("id", "name"),
    "move-target": ("id", "name"),
    "ability": ("id", "name", "generation"),
    "type": ("id", "name", "damage_relations"),
    "stat": ("id", "name"),
    "nature": ("id", "name"),
    "characteristic": ("id", "gene_modulo", "highest_stat"),
    "generation": ("id", "name", "main_region"),
    "version": ("id", "name", "version_group"),
    "version-group": ("id", "name", "generation"),
    "pokedex": ("id", "name"),
    "language": ("id", "name"),
    "item": ("id", "name", "category"),
    "item-attribute": ("id", "name"),
    "item-category": ("id", "name", "pocket"),
    "item-pocket": ("id", "name"),
    "machine": ("id", "item", "move", "version_group"),
    "region": ("id", "name"),
    "location": ("id", "name"),
    "location-area": ("id", "name", "location"),
    "egg-group": ("id", "name"),
    "growth-rate": ("id", "name", "formula"),
    "pokemon-color": ("id", "name"),
    "pokemon-shape": ("id", "name"),
    "pokemon-habitat": ("id", "name"),
    "evolution-chain": ("id", "chain"),
    "evolution-trigger": ("id", "name"),
    "move-category": ("id", "name"),
    "move-battle-style": ("id", "name"),
    "pokeathlon-stat": ("id", "name"),
    "item-fling-effect": ("id", "name"),
    "encounter-method": ("id", "name"),
    "encounter-condition": ("id", "name"),
    "encounter-condition-value": ("id", "name", "condition"),
    "berry": ("id", "name", "firmness", "item"),
    "berry-firmness": ("id", "name"),
    "berry-flavor": ("id", "name"),
    "contest-type": ("id", "name", "berry_flavor"),
    "contest-effect": ("id", "appeal", "jam"),
    "super-contest-effect": ("id", "appeal"),
}


def payload(kind: str, **overrides: Any) -> dict[str, Any]:
    """A deep copy of the sample document for ``kind`` with ``overrides`` applied."""
    doc = copy.deepcopy(PAYLOADS[kind])
    doc.update(overrides)
    return doc


def encode(doc: Any) -> bytes:
    return json.dumps(doc).encode("utf-8")


def listing_pages(kind: str, total: int, page_size: int) -> dict[str, bytes]:
    """Routes for a listing of ``total`` entries split into ``page_size`` pages."""
    routes: dict[str, bytes] = {}
    for offset in range(0, total, page_size):
        end = min(offset + page_size, total)
        next_url = (
            f"{BASE_URL}{kind}/?offset={end}&limit={page_size}" if end < total else None
        )
        path = (
            f"{kind}/?limit={page_size}&offset=0"
            if offset == 0
            else f"{BASE_URL}{kind}/?offset={offset}&limit={page_size}"
        )
        routes[path] = encode(
            {
                "count": total,
                "next": next_url,
                "previous": None,
                "results": [ref(kind, i, f"{kind}-{i}") for i in range(offset + 1, end + 1)],
            }
        )
    return routes


class FakeTransport:
    """In-memory transport serving canned bodies and counting fetches.

    Paths are looked up verbatim, except that absolute URLs under
    :data:`BASE_URL` for single resources are reduced to their relative path.
    An unknown path raises NotFoundError. While :attr:`gate` is set and not
    yet released, every fetch waits on it.
    """

    def __init__(self, routes: dict[str, bytes | Exception] | None = None):
        self.routes: dict[str, bytes | Exception] = dict(routes or {})
        self.calls: Counter[str] = Counter()
        self.gate: asyncio.Event | None = None
        self.closed = False

    def add(self, kind: str, doc: dict[str, Any], key: int | str | None = None) -> None:
        self.routes[f"{kind}/{doc['id'] if key is None else key}/"] = encode(doc)

    def _route_key(self, path: str) -> str:
        if path in self.routes:
            return path
        if path.startswith(BASE_URL) and "?" not in path:
            return path[len(BASE_URL):]
        return path

    async def fetch(self, path: str) -> bytes:
        key = self._route_key(path)
        self.calls[key] += 1
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        body = self.routes.get(key)
        if body is None:
            raise NotFoundError(f"No route for {key}")
        if isinstance(body, Exception):
            raise body
        return body

    @property
    def total_calls(self) -> int:
        return sum(self.calls.values())

    async def aclose(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> DexGraphSettings:
    """Settings isolated from the environment, with retries disabled."""
    return DexGraphSettings(
        _env_file=None,
        base_url=BASE_URL,
        max_retries=0,
        backoff_factor=0,
        page_size=10,
    )


@pytest.fixture
def fake_transport() -> FakeTransport:
    transport = FakeTransport()
    for kind, doc in PAYLOADS.items():
        transport.add(kind, doc)
    return transport


@pytest_asyncio.fixture
async def client(settings, fake_transport):
    dex = DexGraphClient(settings, transport=fake_transport)
    yield dex
    await dex.aclose()
