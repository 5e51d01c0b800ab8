import pytest

from dexgraph.decoder import ResourceDecoder
from dexgraph.exceptions import MalformedFieldError, UnknownResourceKindError
from dexgraph.identifier import Identifier
from dexgraph.kinds import KINDS
from dexgraph.models import (
    Berry,
    EvolutionChain,
    Pokemon,
    Reference,
    ResourceList,
    Species,
    Type,
    pick_language,
)

from conftest import BASE_URL, PAYLOADS, REQUIRED_FIELDS, encode, payload, ref


@pytest.fixture
def decoder():
    return ResourceDecoder()


@pytest.mark.parametrize("kind", sorted(PAYLOADS))
def test_sample_payload_decodes(decoder, kind):
    resource = decoder.decode(kind, encode(PAYLOADS[kind]))
    assert isinstance(resource, KINDS.model_for(kind))
    assert resource.id == PAYLOADS[kind]["id"]
    assert resource.identifier == Identifier(kind, PAYLOADS[kind]["id"])


@pytest.mark.parametrize(
    ("kind", "field_name"),
    [(kind, field) for kind, fields in sorted(REQUIRED_FIELDS.items()) for field in fields],
)
def test_missing_required_field_is_malformed(decoder, kind, field_name):
    doc = payload(kind)
    del doc[field_name]

    with pytest.raises(MalformedFieldError) as exc_info:
        decoder.decode(kind, encode(doc))

    assert exc_info.value.kind == kind
    assert exc_info.value.field_name == field_name


def test_ill_typed_field_is_malformed(decoder):
    with pytest.raises(MalformedFieldError) as exc_info:
        decoder.decode("pokemon", encode(payload("pokemon", height="tall")))
    assert exc_info.value.field_name == "height"


def test_nested_field_location_is_dotted(decoder):
    doc = payload("pokemon-species")
    del doc["varieties"][0]["pokemon"]

    with pytest.raises(MalformedFieldError) as exc_info:
        decoder.decode("pokemon-species", encode(doc))

    assert exc_info.value.field_name == "varieties.0.pokemon"


@pytest.mark.parametrize("body", [b"not json", b"[1, 2, 3]", b'"pikachu"', b"\xff\xfe"])
def test_non_object_body_is_malformed_at_root(decoder, body):
    with pytest.raises(MalformedFieldError) as exc_info:
        decoder.decode("pokemon", body)
    assert exc_info.value.field_name == "<root>"


def test_unknown_kind(decoder):
    with pytest.raises(UnknownResourceKindError):
        decoder.decode("pal-park-area", encode({"id": 1, "name": "forest"}))


def test_missing_optional_fields_default(decoder):
    species = decoder.decode(
        "pokemon-species",
        encode(
            {
                "id": 1,
                "name": "bulbasaur",
                "order": 1,
                "generation": ref("generation", 1),
                "varieties": [],
            }
        ),
    )
    assert species.evolves_from_species is None
    assert species.egg_groups == ()
    assert species.default_variety is None


def test_malformed_link_degrades_to_unresolvable_reference(decoder):
    doc = payload("pokemon")
    doc["forms"] = [{"name": "pikachu", "url": "https://pokeapi.co/api/v2/"}]

    pokemon = decoder.decode("pokemon", encode(doc))

    form = pokemon.forms[0]
    assert form.identifier is None
    assert not form.resolvable
    assert form.url == "https://pokeapi.co/api/v2/"
    assert form.name == "pikachu"
    # Everything else is intact.
    assert pokemon.species.identifier == Identifier("pokemon-species", 25)
    assert pokemon.types[0].type.name == "electric"
    assert pokemon.height == 4


def test_link_to_unregistered_kind_is_unresolvable(decoder):
    doc = payload(
        "pokemon-species",
        pal_park_encounters=[{"base_score": 80, "rate": 10, "area": ref("pal-park-area", 1, "forest")}],
    )

    species = decoder.decode("pokemon-species", encode(doc))

    area = species.pal_park_encounters[0].area
    assert area.identifier is None
    assert not area.resolvable
    assert area.name == "forest"
    assert species.generation.identifier == Identifier("generation", 1)


def test_evolution_trigger_links_resolve(decoder):
    chain = decoder.decode("evolution-chain", encode(PAYLOADS["evolution-chain"]))
    assert isinstance(chain, EvolutionChain)
    trigger = chain.chain.evolves_to[0].evolution_details[0].trigger
    assert trigger.identifier == Identifier("evolution-trigger", 1)
    assert trigger.name == "level-up"
    assert [s.name for s in chain.species()] == ["pichu", "pikachu", "raichu"]


def test_berry_flavor_potency(decoder):
    berry = decoder.decode("berry", encode(PAYLOADS["berry"]))
    assert isinstance(berry, Berry)
    assert berry.potency_of("spicy") == 10
    assert berry.potency_of("dry") == 0
    assert berry.item.identifier == Identifier("item", 126)
    assert berry.firmness.identifier == Identifier("berry-firmness", 2)


def test_reference_keeps_upstream_name(decoder):
    doc = payload("pokemon", species=ref("pokemon-species", 25, "PIKA"))
    pokemon = decoder.decode("pokemon", encode(doc))
    species = decoder.decode("pokemon-species", encode(PAYLOADS["pokemon-species"]))

    assert pokemon.species.name == "PIKA"
    assert not pokemon.species.name_matches(species)
    assert pokemon.species.identifier == species.identifier


def test_url_only_reference(decoder):
    species = decoder.decode("pokemon-species", encode(PAYLOADS["pokemon-species"]))
    assert species.evolution_chain.name is None
    assert species.evolution_chain.identifier == Identifier("evolution-chain", 10)
    assert str(species.evolution_chain) == f"{BASE_URL}evolution-chain/10/"


def test_decoded_resources_are_frozen(decoder):
    pokemon = decoder.decode("pokemon", encode(PAYLOADS["pokemon"]))
    with pytest.raises(Exception):
        pokemon.name = "raichu"
    assert isinstance(pokemon.forms, tuple)


def test_unknown_fields_are_kept_as_extras(decoder):
    pokemon = decoder.decode("pokemon", encode(payload("pokemon", cries={"latest": "x.ogg"})))
    assert isinstance(pokemon, Pokemon)
    assert pokemon.model_extra["cries"] == {"latest": "x.ogg"}


def test_localized_helpers(decoder):
    species = decoder.decode("pokemon-species", encode(PAYLOADS["pokemon-species"]))
    assert isinstance(species, Species)
    assert species.localized_name() == "Pikachu"
    assert species.localized_name("ja-Hrkt") == "ピカチュウ"
    assert species.localized_name("fr") == "pikachu"
    assert pick_language(species.genera).genus == "Mouse Pokémon"
    assert pick_language(species.genera, "de") is None


def test_references_walks_nested_models(decoder):
    pokemon = decoder.decode("pokemon", encode(PAYLOADS["pokemon"]))
    kinds = {r.kind for r in pokemon.references()}
    assert {"pokemon-species", "pokemon-form", "type", "ability", "stat"} <= kinds
    assert all(isinstance(r, Reference) for r in pokemon.references())


def test_type_multiplier(decoder):
    electric = decoder.decode("type", encode(PAYLOADS["type"]))
    assert isinstance(electric, Type)
    assert electric.multiplier_against("water") == 2.0
    assert electric.multiplier_against("ground") == 0.0
    assert electric.multiplier_against("fire") == 1.0


def test_decode_listing(decoder):
    page = decoder.decode_listing(
        encode(
            {
                "count": 2,
                "next": f"{BASE_URL}pokemon/?offset=2&limit=2",
                "previous": None,
                "results": [ref("pokemon", 1, "bulbasaur"), ref("pokemon", 2, "ivysaur")],
            }
        ),
        "pokemon",
    )
    assert isinstance(page, ResourceList)
    assert page.count == 2
    assert [r.name for r in page.results] == ["bulbasaur", "ivysaur"]
    assert page.results[1].identifier == Identifier("pokemon", 2)


def test_decode_listing_null_results(decoder):
    page = decoder.decode_listing(encode({"count": 0, "next": "", "results": None}))
    assert page.results == ()
    assert page.next is None


def test_decode_listing_malformed(decoder):
    with pytest.raises(MalformedFieldError) as exc_info:
        decoder.decode_listing(encode({"results": [{"name": "x"}]}), "pokemon")
    assert exc_info.value.kind == "pokemon"
    assert exc_info.value.field_name == "results.0.url"
