from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import List, Optional

from .export import build_scene_payload, write_scene_json
from .planning.constraints import LayoutConstraintViolation
from .planning.profile import DEFAULT_PROFILE, ProfileError, load_profile_yaml
from .planning.topology_validation import validate_topology
from .session import VisualizerSession


def _find_by_label(session: VisualizerSession, label: str):
    for node in session.topology.nodes():
        if node.label == label:
            return node
    return None


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="fabric-topo-gen",
        description="Generate spine/leaf/server fabric geometry and print it as JSON",
    )
    ap.add_argument("--clusters", type=int, default=1, help="Number of clusters (pods) to lay out")
    ap.add_argument("--servers", action="store_true", help="Include the server tier")
    ap.add_argument("--escape", action="store_true", help="Include escape routes between adjacent clusters")
    ap.add_argument("--focus", default=None, help="Label of the node to focus, e.g. C1-Spine-3")
    ap.add_argument("--profile", default=None, help="YAML layout profile overriding the default constants")
    ap.add_argument("--summary", action="store_true", help="Print counts only instead of the full scene payload")
    ap.add_argument("--output", help="Path to write the scene payload JSON")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    log = logging.getLogger(__name__)

    try:
        profile = load_profile_yaml(args.profile) if args.profile else DEFAULT_PROFILE
    except (OSError, ProfileError) as e:
        log.error("Failed loading layout profile %s: %s", args.profile, e)
        return 2

    try:
        session = VisualizerSession(args.clusters, args.servers, args.escape, profile=profile)
        topology = session.topology
    except LayoutConstraintViolation as e:
        log.error("Invalid layout request: %s", e)
        return 2

    issues = validate_topology(topology, args.clusters, profile)
    for issue in issues:
        log.warning("[validate] %s", issue)

    if args.focus:
        node = _find_by_label(session, args.focus)
        if node is None:
            log.error("No node labelled %r in this layout", args.focus)
            return 2
        session.set_focus(node)

    if args.summary:
        out = session.summarize()
        out["issues"] = issues
        print(json.dumps(out, indent=2, sort_keys=True))
        return 0

    payload = build_scene_payload(session)
    if args.output:
        try:
            write_scene_json(args.output, payload)
        except OSError as e:
            print(f"WARN: failed to write scene file {args.output}: {e}", file=sys.stderr)
            return 1
        log.info("Scene payload written to %s", args.output)
    else:
        print(json.dumps(payload))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
