import pytest

from dexgraph.exceptions import (
    ConfigurationError,
    MalformedFieldError,
    NetworkError,
    UnknownResourceKindError,
)
from dexgraph.identifier import Identifier

from conftest import BASE_URL, encode, listing_pages, ref


@pytest.mark.asyncio
async def test_pages_through_listing_in_order(client, fake_transport):
    fake_transport.routes.update(listing_pages("move", total=25, page_size=10))

    pager = client.list("move", page_size=10)
    refs = [r async for r in pager]

    assert [r.identifier for r in refs] == [Identifier("move", i) for i in range(1, 26)]
    assert pager.pages_fetched == 3
    assert pager.total_count == 25
    assert pager.observed == 25
    assert pager.exhausted
    assert not pager.count_mismatch
    assert await pager.next() is None
    assert fake_transport.calls["move/?limit=10&offset=0"] == 1
    assert fake_transport.calls[f"{BASE_URL}move/?offset=20&limit=10"] == 1


@pytest.mark.asyncio
async def test_fresh_pager_reproduces_the_sequence(client, fake_transport):
    fake_transport.routes.update(listing_pages("move", total=25, page_size=10))

    first = await client.list("move", page_size=10).collect()
    second = await client.list("move", page_size=10).collect()

    assert first == second
    assert fake_transport.calls["move/?limit=10&offset=0"] == 2


@pytest.mark.asyncio
async def test_pages_are_fetched_lazily(client, fake_transport):
    fake_transport.routes.update(listing_pages("move", total=25, page_size=10))
    pager = client.list("move", page_size=10)

    assert fake_transport.total_calls == 0
    for _ in range(10):
        await pager.next()
    assert pager.pages_fetched == 1
    await pager.next()
    assert pager.pages_fetched == 2


@pytest.mark.asyncio
async def test_default_page_size_comes_from_settings(client, fake_transport):
    fake_transport.routes.update(listing_pages("ability", total=3, page_size=10))
    pager = client.list("ability")
    assert pager.page_size == 10
    assert len(await pager.collect()) == 3


@pytest.mark.asyncio
async def test_count_mismatch_is_a_diagnostic(client, fake_transport):
    fake_transport.routes["move/?limit=10&offset=0"] = encode(
        {"count": 30, "next": None, "previous": None, "results": [ref("move", 1, "pound")]}
    )

    pager = client.list("move", page_size=10)
    refs = await pager.collect()

    assert len(refs) == 1
    assert pager.count_mismatch
    assert pager.exhausted


@pytest.mark.asyncio
async def test_empty_page_ends_iteration(client, fake_transport):
    fake_transport.routes["move/?limit=10&offset=0"] = encode(
        {"count": 0, "next": f"{BASE_URL}move/?offset=10&limit=10", "results": []}
    )
    pager = client.list("move", page_size=10)
    assert await pager.next() is None
    assert pager.pages_fetched == 1


@pytest.mark.asyncio
async def test_page_failure_propagates_and_exhausts(client, fake_transport):
    routes = listing_pages("move", total=25, page_size=10)
    routes[f"{BASE_URL}move/?offset=10&limit=10"] = NetworkError("connection reset")
    fake_transport.routes.update(routes)

    pager = client.list("move", page_size=10)
    for _ in range(10):
        assert await pager.next() is not None
    with pytest.raises(NetworkError):
        await pager.next()

    assert pager.exhausted
    assert await pager.next() is None


@pytest.mark.asyncio
async def test_malformed_page_propagates(client, fake_transport):
    fake_transport.routes["move/?limit=10&offset=0"] = b"<html>oops</html>"
    pager = client.list("move", page_size=10)
    with pytest.raises(MalformedFieldError):
        await pager.next()


@pytest.mark.asyncio
async def test_unresolvable_listing_entries_are_still_yielded(client, fake_transport):
    fake_transport.routes["move/?limit=10&offset=0"] = encode(
        {
            "count": 2,
            "next": None,
            "results": [{"name": "weird", "url": "not-a-path"}, ref("move", 2, "karate-chop")],
        }
    )
    refs = await client.list("move", page_size=10).collect()
    assert [r.resolvable for r in refs] == [False, True]


@pytest.mark.asyncio
async def test_list_unknown_kind(client):
    with pytest.raises(UnknownResourceKindError):
        client.list("pal-park-area")


@pytest.mark.asyncio
async def test_list_rejects_bad_page_size(client):
    with pytest.raises(ConfigurationError):
        client.list("move", page_size=-1)
