#!/usr/bin/env python3
"""Entry point for resolve-launcher-check: report readiness without launching"""

import argparse
import json
import sys
from typing import Sequence

from resolve_launcher.lib.config import get_project_root
from resolve_launcher.lib.readiness import run_checks


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="resolve-launcher-check",
        description="Check that everything needed to launch the Resolve MCP server is in place",
    )
    parser.add_argument("--root", help="Project root holding the server script (default: current directory)")
    parser.add_argument("--client", help="MCP client whose template should be checked")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    args = parser.parse_args(argv)

    results = run_checks(get_project_root(args.root), client_name=args.client)
    ready = all(result.passed for result in results)

    if args.json:
        print(json.dumps({"ready": ready, "checks": [r.to_dict() for r in results]}, indent=2))
    else:
        for result in results:
            mark = "OK  " if result.passed else "FAIL"
            print(f"[{mark}] {result.id}: {result.message}")
            if result.hint and not result.passed:
                print(f"       hint: {result.hint}")
        print("Ready to launch" if ready else "Not ready")

    return 0 if ready else 1


if __name__ == "__main__":
    sys.exit(main())
