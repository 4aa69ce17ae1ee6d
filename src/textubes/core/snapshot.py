# src/textubes/core/snapshot.py
"""Graph snapshot documents: validation, file I/O, store conversion.

Document shape:
    {"version": 1,
     "nodes": [{"id", "kind", "params", "outputs"}],
     "edges": [{"id", "source", "source_channel", "target", "target_port"}]}

Unknown keys (UI positions, selection flags) are ignored. A document is
validated completely before anything is built from it; callers get either
a fully built GraphStore or a SnapshotValidationError.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from textubes.contracts import ChannelName, EdgeID, NodeID, PortName, SnapshotValidationError
from textubes.core.dag import Edge, GraphStore

SNAPSHOT_VERSION = 1


class NodeDocument(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(min_length=1)
    kind: str = Field(min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)
    outputs: dict[str, str] = Field(default_factory=dict)


class EdgeDocument(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str = Field(min_length=1)
    source: str = Field(min_length=1)
    source_channel: str | None = None
    target: str = Field(min_length=1)
    target_port: str = Field(min_length=1)

    @field_validator("source_channel")
    @classmethod
    def empty_channel_is_default(cls, v: str | None) -> str | None:
        return v or None


class GraphDocument(BaseModel):
    """A complete, importable graph snapshot."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    version: int = SNAPSHOT_VERSION
    nodes: list[NodeDocument]
    edges: list[EdgeDocument]

    @field_validator("version")
    @classmethod
    def supported_version(cls, v: int) -> int:
        if v != SNAPSHOT_VERSION:
            raise ValueError(f"unsupported snapshot version {v} (expected {SNAPSHOT_VERSION})")
        return v


def _format_validation_error(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<document>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def parse_document(data: Any) -> GraphDocument:
    """Validate raw document data.

    Checks shape (nodes/edges present and list-shaped), unique ids, and that
    every edge references existing nodes.

    Raises:
        SnapshotValidationError: If the document is rejected
    """
    if not isinstance(data, Mapping):
        raise SnapshotValidationError(f"Graph document must be a mapping, got {type(data).__name__}")
    try:
        doc = GraphDocument.model_validate(data)
    except ValidationError as e:
        raise SnapshotValidationError(f"Invalid graph document: {_format_validation_error(e)}") from e

    node_ids: set[str] = set()
    for node in doc.nodes:
        if node.id in node_ids:
            raise SnapshotValidationError(f"Duplicate node id: {node.id!r}")
        node_ids.add(node.id)

    edge_ids: set[str] = set()
    for edge in doc.edges:
        if edge.id in edge_ids:
            raise SnapshotValidationError(f"Duplicate edge id: {edge.id!r}")
        edge_ids.add(edge.id)
        for endpoint in (edge.source, edge.target):
            if endpoint not in node_ids:
                raise SnapshotValidationError(f"Edge {edge.id!r} references unknown node {endpoint!r}")
        if edge.source == edge.target:
            raise SnapshotValidationError(f"Edge {edge.id!r} is a self-loop on {edge.source!r}")

    return doc


def build_store(doc: GraphDocument) -> GraphStore:
    """Build a fresh store from a validated document.

    Edges are inserted in document order; a later edge at an already
    occupied (target, port) supersedes the earlier one.
    """
    store = GraphStore()
    for node in doc.nodes:
        store.add_node(node.kind, node.params, node_id=node.id, outputs=node.outputs)
    for edge in doc.edges:
        store.add_edge(
            Edge(
                edge_id=EdgeID(edge.id),
                source=NodeID(edge.source),
                target=NodeID(edge.target),
                target_port=PortName(edge.target_port),
                source_channel=ChannelName(edge.source_channel) if edge.source_channel else None,
            )
        )
    return store


def export_store(store: GraphStore) -> dict[str, Any]:
    """Literal current store contents as a plain document dict."""
    return {
        "version": SNAPSHOT_VERSION,
        "nodes": [
            {
                "id": node.node_id,
                "kind": node.kind,
                "params": dict(node.params),
                "outputs": dict(node.outputs),
            }
            for node in store.nodes()
        ],
        "edges": [
            {
                "id": edge.edge_id,
                "source": edge.source,
                "source_channel": edge.source_channel,
                "target": edge.target,
                "target_port": edge.target_port,
            }
            for edge in store.edges()
        ],
    }


def load_document(path: Path) -> dict[str, Any]:
    """Read a raw document from a JSON or YAML file (by suffix).

    Raises:
        FileNotFoundError: If the file doesn't exist
        SnapshotValidationError: If the file cannot be parsed
    """
    if not path.exists():
        raise FileNotFoundError(f"Graph file not found: {path}")
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in {".yaml", ".yml"}:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SnapshotValidationError(f"Cannot parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise SnapshotValidationError(f"Graph document in {path} must be a mapping")
    return data


def dump_document(document: Mapping[str, Any], path: Path) -> None:
    """Write a document as indented JSON."""
    path.write_text(json.dumps(document, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
