"""Attribute documentation for entity classes, with inherited attributes merged in.

Works in two phases over an explicit `DocContext`: collect the `Attributes:`
section of each class docstring, then resolve each class by merging the
attributes of its bases (parents first).
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Tuple

Attribute = Tuple[str, str]


@dataclass
class DocContext:
    """Per-run state: documented attributes keyed by class."""

    attributes: Dict[type, List[Attribute]] = field(default_factory=dict)


def parse_attributes(doc: str) -> List[Attribute]:
    """Return `(name, description)` pairs from a Google-style `Attributes:` section."""
    out: List[Attribute] = []
    lines = inspect.cleandoc(doc or "").splitlines()
    in_section = False
    for line in lines:
        if not in_section:
            in_section = line.strip() == "Attributes:"
            continue
        if not line.strip() or not line.startswith((" ", "\t")):
            break
        name, sep, desc = line.strip().partition(":")
        if not sep:
            # Continuation of the previous description.
            if out:
                out[-1] = (out[-1][0], f"{out[-1][1]} {name}".strip())
            continue
        out.append((name.strip(), desc.strip()))
    return out


def collect(classes: Iterable[type], context: DocContext) -> None:
    for cls in classes:
        for klass in cls.__mro__:
            if klass is object or klass in context.attributes:
                continue
            context.attributes[klass] = parse_attributes(klass.__dict__.get("__doc__") or "")


def resolve(cls: type, context: DocContext) -> List[Attribute]:
    """Attributes of `cls` including inherited ones, parents first; a subclass description wins."""
    merged: Dict[str, str] = {}
    for klass in reversed(cls.__mro__):
        for name, desc in context.attributes.get(klass, []):
            merged[name] = desc
    return list(merged.items())


def document_classes(classes: Iterable[type]) -> Dict[str, List[Attribute]]:
    """Return `{class name: attributes}` with inherited attributes flattened in."""
    classes = list(classes)
    context = DocContext()
    collect(classes, context)
    return {cls.__name__: resolve(cls, context) for cls in classes}


def render_markdown(documented: Dict[str, List[Attribute]]) -> str:
    parts: List[str] = []
    for name, attributes in documented.items():
        parts.append(f"## {name}\n")
        parts.append("| Attribute | Description |")
        parts.append("|---|---|")
        for attr, desc in attributes:
            parts.append(f"| `{attr}` | {desc} |")
        parts.append("")
    return "\n".join(parts)
