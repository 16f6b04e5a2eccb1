"""Command-line interface for nrflow.

Commands:
- inspect: print a JSON summary of a flow file
- export: parse a flow file and write the re-exported records
- check: verify that a flow file survives a parse/export round trip
- trace: list the nodes wired to (or reachable from) a node
- docs: print the attribute reference of the entity classes
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .core import ConfigNode, Flow, FlowObject, Group, Node, Subflow, SubflowInstance
from .docs import document_classes, render_markdown
from .errors import FlowFileError, FlowParseError
from .flowset import FlowSet, parse_flow
from .records import load_flow_file, save_flow_file
from .settings import LOG_LEVELS, ParseOptions, default_log_level
from .summary import summarize_flowset

logger = logging.getLogger(__name__)

_DIRECTIONS = ("next", "previous", "siblings", "downstream", "upstream", "connected")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="nrflow", add_help=True)
    p.add_argument(
        "--log-level",
        type=str.lower,
        choices=LOG_LEVELS,
        default=default_log_level(),
        help="Logging level (default: NRFLOW_LOG_LEVEL or warning)",
    )
    p.add_argument(
        "--allow-duplicate-ids",
        action="store_true",
        default=None,
        help="Let the last record win when ids repeat (default: NRFLOW_ALLOW_DUPLICATE_IDS)",
    )
    sub = p.add_subparsers(dest="command")

    insp = sub.add_parser("inspect", help="Print a JSON summary of a flow file")
    insp.add_argument("flow_file", help="Path to a flow JSON file")

    export = sub.add_parser("export", help="Parse a flow file and write the exported records")
    export.add_argument("flow_file", help="Path to a flow JSON file")
    export.add_argument("--out", required=True, help="Output flow JSON path")
    export.add_argument("--indent", type=int, default=4, help="JSON indentation (default: 4)")

    check = sub.add_parser("check", help="Verify the parse/export round trip of a flow file")
    check.add_argument("flow_file", help="Path to a flow JSON file")

    trace = sub.add_parser("trace", help="List nodes related to a node")
    trace.add_argument("flow_file", help="Path to a flow JSON file")
    trace.add_argument("node_id", help="Id of the node to start from")
    trace.add_argument("--direction", choices=_DIRECTIONS, default="downstream")
    trace.add_argument("--virtual", action="store_true", help="Follow link node virtual wires")

    sub.add_parser("docs", help="Print the attribute reference of the entity classes (Markdown)")

    return p


def _options(ns: argparse.Namespace) -> ParseOptions:
    options = ParseOptions.from_env()
    if ns.allow_duplicate_ids is not None:
        options = options.model_copy(update={"allow_duplicate_ids": bool(ns.allow_duplicate_ids)})
    return options


def round_trip_mismatches(records: List[Dict[str, Any]], flow_set: FlowSet) -> List[str]:
    """Return ids whose exported record differs from the original (or is missing/extra)."""
    original = {r["id"]: r for r in records}
    exported = {r["id"]: r for r in flow_set.export()}
    mismatched = [rid for rid, rec in original.items() if exported.get(rid) != rec]
    mismatched.extend(rid for rid in exported if rid not in original)
    return mismatched


def _trace(flow_set: FlowSet, node_id: str, direction: str, follow_virtual: bool) -> List[Node]:
    node = flow_set.nodes.get(node_id)
    if node is None:
        raise FlowParseError(f"Unknown node {node_id}", object_id=node_id)
    if direction == "next":
        return node.next_nodes(follow_virtual)
    if direction == "previous":
        return node.previous_nodes(follow_virtual)
    if direction == "siblings":
        return node.sibling_nodes(follow_virtual)
    if direction == "upstream":
        return node.upstream_nodes(follow_virtual)
    if direction == "connected":
        return node.connected_nodes(follow_virtual)
    return node.downstream_nodes(follow_virtual)


def _entity_classes() -> List[type]:
    return [FlowObject, Node, SubflowInstance, ConfigNode, Group, Flow, Subflow]


def main(args: Optional[List[str]] = None) -> int:
    if args is None:
        args = sys.argv[1:]

    parser = _build_parser()
    ns = parser.parse_args(args)
    logging.basicConfig(level=ns.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if ns.command == "docs":
        sys.stdout.write(render_markdown(document_classes(_entity_classes())))
        return 0

    if ns.command not in {"inspect", "export", "check", "trace"}:
        parser.print_help()
        return 2

    try:
        records = load_flow_file(ns.flow_file)
        flow_set = parse_flow(records, _options(ns))

        if ns.command == "inspect":
            sys.stdout.write(summarize_flowset(flow_set).model_dump_json(indent=2) + "\n")
            return 0

        if ns.command == "export":
            out = save_flow_file(ns.out, flow_set.export(), indent=ns.indent)
            sys.stdout.write(str(out) + "\n")
            return 0

        if ns.command == "check":
            mismatched = round_trip_mismatches(records, flow_set)
            if mismatched:
                sys.stderr.write(f"Round trip mismatch on {len(mismatched)} record(s): {', '.join(mismatched)}\n")
                return 1
            sys.stdout.write(f"OK ({len(records)} records)\n")
            return 0

        nodes = _trace(flow_set, ns.node_id, ns.direction, ns.virtual)
        sys.stdout.write(json.dumps([n.id for n in nodes], indent=2) + "\n")
        return 0
    except (FlowFileError, FlowParseError) as e:
        logger.error(str(e))
        sys.stderr.write(f"error: {e}\n")
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
