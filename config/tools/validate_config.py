# config/tools/validate_config.py

import sys
from pprint import pprint

# make src discoverable if running as a script
from pathlib import Path
# __file__ is .../config/tools/validate_config.py
PROJECT_ROOT = Path(__file__).resolve().parents[2]
sys.path.append(str(PROJECT_ROOT / "src"))

from env.loader import DEFAULT_CONFIG_PATH, cells_from_grid, load_walk_config  # noqa: E402
from nav.grid import build_graph  # noqa: E402
from nav.topology import connected_components  # noqa: E402


def main() -> None:
    """Load walk.yaml, build its grid, and report; exit 1 on any error."""
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_CONFIG_PATH
    try:
        config = load_walk_config(path)
        graph = build_graph(
            cells_from_grid(config.grid),
            spacing=config.grid.spacing,
            tolerance=config.grid.tolerance,
        )
    except (OSError, ValueError) as e:
        print("Config validation FAILED:", file=sys.stderr)
        print(repr(e), file=sys.stderr)
        sys.exit(1)

    components = connected_components(graph)

    print("Config validation OK:", path)
    print("\nGrid:")
    pprint(config.grid)
    print("\nWalk:")
    pprint(config.walk)
    print(f"\nGraph: {len(graph)} nodes, {graph.edge_count()} edges, {len(components)} component(s)")
    if len(components) > 1:
        # random goals may land in another component unless require_reachable is set
        print("WARNING: grid is disconnected; sizes:", [len(c) for c in components])


if __name__ == "__main__":
    main()
