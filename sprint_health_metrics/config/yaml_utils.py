"""YAML utilities for configuration processing."""

import yaml
from pydicti import odicti


class _CaseInsensitiveLoader(yaml.SafeLoader):
    """SafeLoader that builds ordered, case-insensitive mappings."""


def _construct_mapping(loader, node):
    loader.flatten_mapping(node)
    return odicti(loader.construct_pairs(node))


_CaseInsensitiveLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_mapping
)


def ordered_load(stream):
    """
    Load YAML with mappings as ordered, case-insensitive dictionaries, so
    `Last N` and `last n` address the same key.
    """
    return yaml.load(stream, _CaseInsensitiveLoader)
