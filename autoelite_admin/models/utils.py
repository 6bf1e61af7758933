"""
camelCase wire names for request bodies built from snake_case models
"""
from pydantic import ConfigDict


def snake_to_camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


# Dump with by_alias=True to get the wire names; snake_case still populates
CAMEL_CASE_CONFIG = ConfigDict(alias_generator=snake_to_camel, populate_by_name=True)
