"""
YAML source loading.

Bank files mark cross-references with an explicit local tag, conventionally
``!ref``::

    greeting:
      text:
        en:
          "": ["Hello, ", !ref player_name]
          gameA: ["Welcome back, ", !ref player_name]
      tag: [ui]

``yaml.safe_load`` rejects unknown tags, so sources are read with a
SafeLoader subclass that turns every local tag into a ``TaggedValue``.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from .errors import SourceError
from .pieces import TaggedValue

logger = logging.getLogger("localization-bank")


class BankYamlLoader(yaml.SafeLoader):
    """SafeLoader that keeps locally tagged values instead of failing on them.

    Booleans follow YAML 1.2: only true/false spellings are booleans, so
    words such as ``No``, ``Yes``, ``On`` or the language code ``no`` stay strings.
    """


_BOOL_TAG = "tag:yaml.org,2002:bool"

BankYamlLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _BOOL_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
BankYamlLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


def _construct_tagged(loader: BankYamlLoader, tag_suffix: str, node: yaml.Node) -> TaggedValue:
    if isinstance(node, yaml.ScalarNode):
        value: Any = loader.construct_scalar(node)
    elif isinstance(node, yaml.SequenceNode):
        value = loader.construct_sequence(node, deep=True)
    else:
        value = loader.construct_mapping(node, deep=True)
    return TaggedValue(tag=tag_suffix, value=value)


BankYamlLoader.add_multi_constructor("!", _construct_tagged)


def parse_yaml(content: str) -> Any:
    """Parse a YAML string, keeping tagged values.

    Raises:
        SourceError: If the YAML is malformed.
    """
    try:
        return yaml.load(content, Loader=BankYamlLoader)
    except yaml.YAMLError as e:
        raise SourceError(f"Invalid YAML: {e}") from e


def read_yaml(path: Path) -> Any:
    """Read and parse a YAML file, keeping tagged values.

    Raises:
        SourceError: If the file cannot be read or the YAML is malformed.
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise SourceError(f"Cannot read file {path}: {e}") from e

    logger.debug(f"Read {len(content)} characters from {path}")
    try:
        return parse_yaml(content)
    except SourceError as e:
        raise SourceError(f"{path}: {e}") from e
