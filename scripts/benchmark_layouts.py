#!/usr/bin/env python3
"""
Benchmark layout algorithms on random sparse graphs.

Usage:
    python scripts/benchmark_layouts.py [--sizes N,...] [--algorithms ALGO,...]

Examples:
    python scripts/benchmark_layouts.py
    python scripts/benchmark_layouts.py --sizes 100,500,2000 --algorithms FR,FR+BH
    python scripts/benchmark_layouts.py --theta 0.8 --iterations 50
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import time
from typing import Any

from graph_drawing import (
    Box,
    CircularLayout,
    FruchtermanReingoldLayout,
    Graph,
    IndexedFruchtermanReingoldLayout,
    KamadaKawaiLayout,
    MapLayoutModel,
    RandomLayout,
)


def random_graph(n: int, average_degree: float = 3.0, seed: int = 42) -> Graph[int]:
    """Connected-ish random graph: a spanning path plus random extra edges."""
    rng = random.Random(seed)
    graph: Graph[int] = Graph.from_edges([(i, i + 1) for i in range(n - 1)], vertices=range(n))
    target = int(n * average_degree / 2)
    while len(graph.edges()) < target:
        u, v = rng.randrange(n), rng.randrange(n)
        if u != v:
            graph.add_edge(u, v)
    return graph


def benchmark_layout(
    layout_class: type,
    graph: Graph[int],
    area: Box,
    **kwargs: Any,
) -> dict[str, Any]:
    """
    Benchmark a single layout algorithm.

    Returns:
        Dict with timing and result info
    """
    model: MapLayoutModel[int] = MapLayoutModel(area)

    start = time.perf_counter()
    layout = layout_class(**kwargs)
    layout.layout(graph, model)
    elapsed = time.perf_counter() - start

    return {
        "time_seconds": elapsed,
        "num_vertices": len(graph),
        "num_edges": len(graph.edges()),
        "saved_comparisons": getattr(layout, "saved_comparisons", None),
    }


def run_benchmarks(
    sizes: list[int],
    algorithms: list[str] | None = None,
    iterations: int = 100,
    theta: float = 0.5,
    area: Box = Box(0, 0, 1000, 1000),
) -> list[dict]:
    """Run benchmarks on random graphs of the given sizes."""

    all_algorithms: dict[str, tuple[type, dict[str, Any]]] = {
        "Random": (RandomLayout, {"random_seed": 42}),
        "Circular": (CircularLayout, {}),
        "FR": (FruchtermanReingoldLayout, {"iterations": iterations, "random_seed": 42}),
        "FR+BH": (
            IndexedFruchtermanReingoldLayout,
            {"iterations": iterations, "random_seed": 42, "theta": theta},
        ),
        "KK": (KamadaKawaiLayout, {"iterations": min(iterations, 50), "random_seed": 42}),
    }

    if algorithms:
        selected = {}
        for name in algorithms:
            if name in all_algorithms:
                selected[name] = all_algorithms[name]
            else:
                print(f"Warning: Unknown algorithm '{name}', skipping")
        all_algorithms = selected

    results = []

    print(f"\nBenchmarking {len(all_algorithms)} algorithms on {len(sizes)} graphs")
    print(f"Iterations: {iterations}, theta: {theta}, Area: {area.width:g}x{area.height:g}")
    print("=" * 80)

    for n in sizes:
        graph = random_graph(n)
        name = f"random_{n}"

        print(f"\n{name}: {len(graph)} vertices, {len(graph.edges())} edges")
        print("-" * 60)

        for algo_name, (layout_class, kwargs) in all_algorithms.items():
            if n > 500 and algo_name == "KK":
                print(f"  {algo_name:12s}: SKIPPED (too slow for large graphs)")
                continue

            result = benchmark_layout(layout_class, graph, area, **kwargs)
            line = f"  {algo_name:12s}: {result['time_seconds']:.4f}s"
            if result["saved_comparisons"] is not None:
                line += f"  ({result['saved_comparisons']} comparisons saved)"
            print(line)

            results.append({"graph": name, "algorithm": algo_name, **result})

    # Summary
    print("\n" + "=" * 80)
    print("SUMMARY (times in seconds)")
    print("=" * 80)

    algo_names = list(all_algorithms.keys())
    print(f"{'Graph':<20s}", end="")
    for algo in algo_names:
        print(f"{algo:>10s}", end="")
    print()
    print("-" * (20 + 10 * len(algo_names)))

    for n in sizes:
        graph_name = f"random_{n}"
        print(f"{graph_name:<20s}", end="")
        for algo in algo_names:
            matching = [r for r in results if r["graph"] == graph_name and r["algorithm"] == algo]
            if matching:
                print(f"{matching[0]['time_seconds']:>10.4f}", end="")
            else:
                print(f"{'--':>10s}", end="")
        print()

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark layout algorithms")
    parser.add_argument("--sizes", default="100,500,1000", help="Comma-separated vertex counts")
    parser.add_argument("--algorithms", help="Comma-separated algorithm names (e.g., 'FR,FR+BH')")
    parser.add_argument("--iterations", type=int, default=100, help="Iterations for iterative layouts")
    parser.add_argument("--theta", type=float, default=0.5, help="Barnes-Hut threshold")
    parser.add_argument("--output", help="Output JSON file for results")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    sizes = [int(s) for s in args.sizes.split(",")]
    algorithms = args.algorithms.split(",") if args.algorithms else None

    results = run_benchmarks(
        sizes=sizes,
        algorithms=algorithms,
        iterations=args.iterations,
        theta=args.theta,
    )

    if args.output and results:
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        print(f"\nResults saved to {args.output}")


if __name__ == "__main__":
    main()
