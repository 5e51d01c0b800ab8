# dexgraph/constants.py
"""Constants for the PokéAPI service and client defaults."""

POKEAPI_BASE_URL = "https://pokeapi.co/api/v2/"

DEFAULT_USER_AGENT = "dexgraph/0.1.0 (+https://pokeapi.co/docs/v2)"

# PokéAPI's own default listing limit.
DEFAULT_PAGE_SIZE = 20

DEFAULT_BLOB_CACHE_SIZE = 64

DEFAULT_LANGUAGE = "en"
