import argparse
import sys
from pathlib import Path

# Ensure the local repo package is used even if another "lifesim" is on PYTHONPATH.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from lifesim import Grid, Simulator, create_engine, list_available_engines


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run every engine on the same random grid and compare timings."
    )
    parser.add_argument("--width", type=int, default=256, help="Grid width")
    parser.add_argument("--height", type=int, default=256, help="Grid height")
    parser.add_argument(
        "--generations", type=int, default=50, help="Generations per engine"
    )
    parser.add_argument(
        "--density", type=float, default=0.3, help="Initial live probability"
    )
    parser.add_argument("--seed", type=int, default=1, help="RNG seed")
    parser.add_argument(
        "--workers", type=int, default=None, help="Threads for the parallel engine"
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    grid = Grid.random(args.width, args.height, density=args.density, seed=args.seed)
    print(f"{args.width}x{args.height} grid, {grid.population} live cells")

    results = {}
    for name in list_available_engines():
        kwargs = {"workers": args.workers} if name == "parallel" else {}
        simulator = Simulator()
        with create_engine(name, **kwargs) as engine:
            results[name] = simulator.run(grid, args.generations, engine)
        print(
            f"{name:>10}: {simulator.elapsed * 1000:8.1f} ms, "
            f"population {results[name].population}"
        )

    if len(set(results.values())) != 1:
        print("Engines disagree on the final state!")
        sys.exit(1)


if __name__ == "__main__":
    main()
