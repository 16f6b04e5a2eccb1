"""nrflow test bootstrap.

Puts the project root on `sys.path` so tests import the checkout even when the
package is not installed, and exposes the JSON fixtures under `resources/`.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Dict, List

import pytest

HERE = Path(__file__).resolve()
PROJECT_ROOT = HERE.parents[1]
RESOURCES = HERE.parent / "resources"

if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def load_resource(name: str) -> List[Dict[str, Any]]:
    return json.loads((RESOURCES / name).read_text(encoding="utf-8"))


@pytest.fixture
def full_flow() -> List[Dict[str, Any]]:
    return load_resource("flow-full.json")


@pytest.fixture
def nodes_flow() -> List[Dict[str, Any]]:
    return load_resource("flow-nodes.json")


@pytest.fixture
def resources_dir() -> Path:
    return RESOURCES
