"""JSON/YAML adapters between the adjacency format and GraphStore.

The serialized form is a collection of named graphs, each mapping a source
label to a mapping of target label -> weight:

    {"graph_00": {"S": {"A": 100, "B": 14}, "A": {"S": 15}}}

Loading picks one graph by label, creates a node for every label it meets
and sets each edge with ``replace_edge``, so a pair listed twice keeps the
last weight. Export writes ``GraphStore.to_mapping()`` in the same shape.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import IO, Annotated, Any

import yaml
from pydantic import Strict, TypeAdapter, ValidationError

from wgraph.config.models import GraphConfig
from wgraph.errors import DecodeError, GraphNotFoundError, UnsupportedFormatError
from wgraph.store import GraphStore
from wgraph.types import Node

logger = logging.getLogger(__name__)

# Strict still accepts ints, but not bools or numeric strings
Weight = Annotated[float, Strict()]

GraphBody = dict[str, dict[str, Weight] | None]
GraphCollection = dict[str, GraphBody | None]

GraphSource = IO[str] | IO[bytes] | str | bytes

_collection_adapter: TypeAdapter[GraphCollection] = TypeAdapter(GraphCollection)
_WHITESPACE = re.compile(r"\s*")


def _read_text(source: GraphSource) -> str:
    data = source if isinstance(source, str | bytes) else source.read()
    if isinstance(data, bytes):
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"input is not valid UTF-8: {e}") from e
    return data


def _validate(raw: Any) -> GraphCollection:
    if raw is None:
        return {}
    try:
        return _collection_adapter.validate_python(raw)
    except ValidationError as e:
        raise DecodeError(f"unexpected graph layout: {e}") from e


def decode_json(source: GraphSource) -> GraphCollection:
    """Decode JSON input into a label -> graph body collection.

    The input may hold several concatenated top-level objects; their labels
    are merged, later objects winning. Empty input decodes to ``{}``.
    """
    text = _read_text(source)
    decoder = json.JSONDecoder()
    merged: dict[str, Any] = {}
    pos = _WHITESPACE.match(text, 0).end()
    while pos < len(text):
        try:
            document, pos = decoder.raw_decode(text, pos)
        except json.JSONDecodeError as e:
            raise DecodeError(f"invalid JSON: {e}") from e
        if not isinstance(document, dict):
            raise DecodeError(
                f"expected an object of graph labels, got {type(document).__name__}"
            )
        merged.update(document)
        pos = _WHITESPACE.match(text, pos).end()
    return _validate(merged)


class _LabelLoader(yaml.SafeLoader):
    """SafeLoader that keeps scalar mapping keys as their source text.

    Labels such as ``1:``, ``2024-01-01:`` or ``yes:`` stay ``"1"``,
    ``"2024-01-01"`` and ``"yes"`` instead of resolving to int, date or bool.
    Values are resolved as usual.
    """

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            self.flatten_mapping(node)
            for key_node, _ in node.value:
                if isinstance(key_node, yaml.ScalarNode):
                    key_node.tag = "tag:yaml.org,2002:str"
        return super().construct_mapping(node, deep=deep)


def decode_yaml(source: GraphSource) -> GraphCollection:
    """Decode a single YAML document into a label -> graph body collection."""
    text = _read_text(source)
    try:
        raw = yaml.load(text, Loader=_LabelLoader)
    except yaml.YAMLError as e:
        raise DecodeError(f"invalid YAML: {e}") from e
    return _validate(raw)


def populate(store: GraphStore, body: Mapping[str, Mapping[str, float] | None]) -> None:
    """Feed one graph body into ``store``.

    Missing nodes are created with empty properties. Edges are set with
    ``replace_edge``; the outcome does not depend on iteration order.
    """
    for source, targets in body.items():
        store.add_node(Node.create(source))
        for target, weight in (targets or {}).items():
            store.add_node(Node.create(target))
            store.replace_edge(source, target, weight)


def _build(
    collection: GraphCollection, graph_id: str, config: GraphConfig | None
) -> GraphStore:
    if graph_id not in collection:
        raise GraphNotFoundError(graph_id)
    store = GraphStore(graph_id, config=config)
    populate(store, collection[graph_id] or {})
    logger.info(
        "Loaded graph %r: %d nodes, %d edges",
        graph_id,
        store.node_count(),
        store.edge_count(),
    )
    return store


def graph_from_json(
    source: GraphSource, graph_id: str, config: GraphConfig | None = None
) -> GraphStore:
    """Build a GraphStore from the graph labelled ``graph_id`` in JSON input.

    Raises:
        DecodeError: If the input is not valid JSON of the expected layout.
        GraphNotFoundError: If ``graph_id`` is not in the input.
    """
    return _build(decode_json(source), graph_id, config)


def graph_from_yaml(
    source: GraphSource, graph_id: str, config: GraphConfig | None = None
) -> GraphStore:
    """Build a GraphStore from the graph labelled ``graph_id`` in YAML input.

    Raises:
        DecodeError: If the input is not valid YAML of the expected layout.
        GraphNotFoundError: If ``graph_id`` is not in the input.
    """
    return _build(decode_yaml(source), graph_id, config)


_LOADERS: dict[str, Callable[..., GraphStore]] = {
    ".json": graph_from_json,
    ".yaml": graph_from_yaml,
    ".yml": graph_from_yaml,
}


def load_graph(
    path: Path | str, graph_id: str, config: GraphConfig | None = None
) -> GraphStore:
    """Load a graph from a ``.json``, ``.yaml`` or ``.yml`` file."""
    path = Path(path)
    loader = _LOADERS.get(path.suffix.lower())
    if loader is None:
        raise UnsupportedFormatError(path)
    with path.open("rb") as f:
        return loader(f, graph_id, config)


# -- Export --


def dumps_json(store: GraphStore, indent: int | None = 2) -> str:
    return json.dumps(store.to_mapping(), indent=indent)


def dumps_yaml(store: GraphStore) -> str:
    return yaml.safe_dump(store.to_mapping(), sort_keys=False, allow_unicode=True)


def _write_text_atomic(path: Path, text: str) -> None:
    """Write text atomically via tempfile + fsync + os.replace()."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        Path(tmp).replace(path)
    except BaseException:
        try:
            Path(tmp).unlink()
        except OSError:
            pass
        raise


def _dump(text: str, destination: Path | str | IO[str], graph_id: str) -> None:
    if isinstance(destination, str | os.PathLike):
        _write_text_atomic(Path(destination), text)
        logger.info("Exported graph %r to %s", graph_id, destination)
    else:
        destination.write(text)


def dump_json(
    store: GraphStore, destination: Path | str | IO[str], indent: int | None = 2
) -> None:
    """Write the store as JSON to a text stream or, atomically, to a path."""
    _dump(dumps_json(store, indent=indent), destination, store.identifier())


def dump_yaml(store: GraphStore, destination: Path | str | IO[str]) -> None:
    """Write the store as YAML to a text stream or, atomically, to a path."""
    _dump(dumps_yaml(store), destination, store.identifier())


def export_graph(store: GraphStore, path: Path | str) -> None:
    """Export to a file, choosing JSON or YAML from the suffix."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".json":
        dump_json(store, path)
    elif suffix in (".yaml", ".yml"):
        dump_yaml(store, path)
    else:
        raise UnsupportedFormatError(path)
