"""Flow record shape checks and flow file IO.

A flow file is either a plain JSON array of records, or the runtime API v2
envelope `{"flows": [...], "rev": "..."}`. Only the record array is kept.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError

from .errors import FlowFileError, InvalidRecordError

logger = logging.getLogger(__name__)


class FlowRecord(BaseModel):
    """Minimal structural contract of a flow record; unknown fields are allowed."""

    model_config = ConfigDict(extra="allow")

    id: StrictStr
    type: StrictStr


def check_record(raw: Any, index: int) -> None:
    """Raise InvalidRecordError unless `raw` is a mapping with string `id` and `type`."""
    try:
        FlowRecord.model_validate(raw)
    except ValidationError as e:
        rid = raw.get("id") if isinstance(raw, dict) else None
        object_id = rid if isinstance(rid, str) else None
        details = "; ".join(f"{'.'.join(str(p) for p in err['loc']) or 'record'}: {err['msg']}" for err in e.errors())
        raise InvalidRecordError(f"Invalid flow record at index {index}: {details}", object_id=object_id) from e


def records_from_json(raw: Any) -> List[Dict[str, Any]]:
    """Return the record array from a decoded flow document."""
    if isinstance(raw, dict):
        flows = raw.get("flows")
        if not isinstance(flows, list):
            raise FlowFileError("Flow document object must contain a 'flows' array")
        return flows
    if isinstance(raw, list):
        return raw
    raise FlowFileError("Flow document must be a JSON array or an object with a 'flows' array")


def load_flow_file(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """Read a flow file and return its record array."""
    p = Path(path).expanduser()
    if not p.is_file():
        raise FlowFileError(f"Flow file not found: {p}")
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise FlowFileError(f"Invalid JSON in {p}: {e}") from e
    records = records_from_json(raw)
    logger.info(f"Loaded {len(records)} records from {p}")
    return records


def save_flow_file(path: Union[str, Path], records: Sequence[Dict[str, Any]], *, indent: int = 4) -> Path:
    """Write `records` as a JSON array and return the written path."""
    p = Path(path).expanduser()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(list(records), indent=indent, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.info(f"Saved {len(records)} records to {p}")
    return p
