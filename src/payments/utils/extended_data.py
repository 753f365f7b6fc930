"""Helpers for the string-keyed extended-data maps stored on aggregates.

Extended data is persisted as a JSON object in a Text field. Keys and values
are always strings, so processors can stash arbitrary metadata without
schema changes.
"""

import json


def load_extended_data(raw: str | None) -> dict[str, str]:
    if not raw:
        return {}
    return {str(key): str(value) for key, value in json.loads(raw).items()}


def dump_extended_data(data: dict[str, str]) -> str:
    return json.dumps({str(key): str(value) for key, value in data.items()}, sort_keys=True)
