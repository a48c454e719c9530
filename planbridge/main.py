"""Entry point for the plan bridge.

Loads a discovered test plan manifest, mirrors it as a legacy
class/method tree, replays the tests that were discovered during
execution, and prints the leaves selected by the requested filters.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from planbridge.adapter.filters import (
    all_of,
    describe,
    match_case,
    match_group,
    match_ids,
)
from planbridge.adapter.tree import NodePredicate, TreeAdapter
from planbridge.config import BridgeConfig
from planbridge.plan.identifier import Identifier
from planbridge.plan.manifest import dynamic_entries, load_manifest, plan_from_manifest
from planbridge.reporting.reporter import Reporter


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Plan bridge - mirrors a test plan as a legacy class/method tree"
    )
    parser.add_argument(
        "--plan",
        required=True,
        type=Path,
        help="Path to the JSON plan manifest",
    )
    parser.add_argument(
        "--config-file",
        type=Path,
        default=None,
        help="Path to the .planbridge_config JSON file",
    )
    parser.add_argument(
        "--root-label",
        type=str,
        default=None,
        help="Label of the root suite (overrides the config file)",
    )
    parser.add_argument(
        "--group",
        action="append",
        default=[],
        help="Keep nodes whose group name matches this shell pattern (repeatable)",
    )
    parser.add_argument(
        "--case",
        action="append",
        default=[],
        help="Keep test nodes whose case name matches this shell pattern (repeatable)",
    )
    parser.add_argument(
        "--id",
        dest="ids",
        action="append",
        default=[],
        help="Keep the node with this unique id (repeatable)",
    )
    parser.add_argument(
        "--no-dynamic",
        action="store_true",
        default=False,
        help="Do not replay the manifest's dynamically discovered tests",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Path to write the YAML tree report",
    )
    return parser.parse_args(argv)


def _build_predicate(args: argparse.Namespace) -> NodePredicate | None:
    """Combine the filter flags into one predicate, or None if none given."""
    predicates: list[NodePredicate] = []
    predicates.extend(match_group(pattern) for pattern in args.group)
    predicates.extend(match_case(pattern) for pattern in args.case)
    if args.ids:
        predicates.append(match_ids(args.ids))
    if not predicates:
        return None
    return all_of(*predicates)


def _format_identifier(adapter: TreeAdapter, identifier: Identifier) -> str:
    node = adapter.get_node_for(identifier.unique_id)
    name = node.display_name if node is not None else identifier.display_name
    return f"  [{identifier.kind}] {name}  ({identifier.unique_id})"


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    config = BridgeConfig(args.config_file)
    root_label = args.root_label or config.root_label

    # Load manifest
    try:
        manifest = load_manifest(args.plan)
    except FileNotFoundError:
        print(f"Error: Plan manifest not found: {args.plan}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Cannot read plan manifest {args.plan}: {e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in plan manifest: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Build plan and consumer tree
    try:
        plan = plan_from_manifest(manifest)
    except ValueError as e:
        print(f"Error building plan: {e}", file=sys.stderr)
        return 1
    adapter = TreeAdapter(plan, root_label)

    if config.replay_dynamic and not args.no_dynamic:
        try:
            for identifier, parent_id in dynamic_entries(manifest):
                adapter.insert_dynamic(identifier, parent_id)
        except ValueError as e:
            print(f"Error inserting dynamic test: {e}", file=sys.stderr)
            return 1

    reporter = Reporter(adapter)
    predicate = _build_predicate(args)
    if predicate is None:
        selected = [identifier for identifier in plan if identifier.is_test]
        print(f"Tests in plan: {len(selected)}")
    else:
        selected = adapter.filtered_leaves(predicate)
        reporter.set_selection([i.unique_id for i in selected], describe(predicate))
        print(f"Filter: {describe(predicate)}")
        print(f"Selected leaves: {len(selected)}")
        if not selected:
            print("Warning: filter matched no nodes", file=sys.stderr)

    for identifier in selected:
        print(_format_identifier(adapter, identifier))

    output = args.output or config.report_file
    if output is not None:
        reporter.write_yaml(output)
        print(f"Report written to: {output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
