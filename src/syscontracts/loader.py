# SPDX-License-Identifier: Apache-2.0
"""Read contract documents and bundles from JSON or YAML files.

A bundle is a mapping with optional ``envelopes``, ``plans`` and ``receipts``
lists. Any other mapping is treated as a single document whose kind is
inferred from its identifying key.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

import yaml

BUNDLE_KEYS = {"envelope": "envelopes", "plan": "plans", "receipt": "receipts"}


class DocumentLoadError(ValueError):
    """A document file is missing, unparsable, or has the wrong shape."""


def load_document(path: str | Path) -> dict[str, Any]:
    """Load one JSON/YAML file whose root must be a mapping."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DocumentLoadError(f"Document not found: {p}") from exc
    except OSError as exc:
        raise DocumentLoadError(f"Failed to read {p}: {exc}") from exc
    if p.suffix.lower() in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Invalid YAML in {p}: {exc}") from exc
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DocumentLoadError(f"Invalid JSON in {p}: {exc}") from exc
    if not isinstance(data, dict):
        raise DocumentLoadError(f"Document at {p} is not a JSON/YAML object.")
    return data


def is_bundle(data: dict[str, Any]) -> bool:
    return any(key in data for key in BUNDLE_KEYS.values())


def detect_kind(doc: dict[str, Any]) -> str | None:
    """Infer a document kind from its identifying key, or ``None``."""
    if "receipt_id" in doc:
        return "receipt"
    if "plan_id" in doc:
        return "plan"
    if "envelope_id" in doc:
        return "envelope"
    return None


def _bundle_lists(data: dict[str, Any], source: Path) -> dict[str, list[Any]]:
    out: dict[str, list[Any]] = {}
    for key in BUNDLE_KEYS.values():
        value = data.get(key)
        if value is None:
            out[key] = []
        elif isinstance(value, list):
            out[key] = list(value)
        else:
            raise DocumentLoadError(f"'{key}' in {source} must be a list")
    return out


def load_bundle(path: str | Path) -> dict[str, list[Any]]:
    """Load a bundle file, or wrap a single document file as a bundle."""
    p = Path(path)
    data = load_document(p)
    if is_bundle(data):
        return _bundle_lists(data, p)
    kind = detect_kind(data)
    if kind is None:
        raise DocumentLoadError(
            f"Cannot tell the document kind of {p}; expected envelope_id, "
            "plan_id or receipt_id"
        )
    bundle: dict[str, list[Any]] = {key: [] for key in BUNDLE_KEYS.values()}
    bundle[BUNDLE_KEYS[kind]].append(data)
    return bundle


def collect_bundles(paths: Iterable[str | Path]) -> dict[str, list[Any]]:
    """Merge several bundle or document files into one raw bundle."""
    merged: dict[str, list[Any]] = {key: [] for key in BUNDLE_KEYS.values()}
    for path in paths:
        part = load_bundle(path)
        for key, docs in part.items():
            merged[key].extend(docs)
    logging.getLogger(__name__).debug(
        "Loaded %s", {key: len(docs) for key, docs in merged.items()}
    )
    return merged
