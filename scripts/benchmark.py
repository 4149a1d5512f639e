#!/usr/bin/env python3
"""Benchmark script for callslice performance testing.

Generates a synthetic project (a chain of services across modules),
slices it and minimizes the result.

Outputs results in JSON format compatible with github-action-benchmark.
"""

from __future__ import annotations

import argparse
import json
import tempfile
import time
from pathlib import Path

SERVICE_TEMPLATE = '''from __future__ import annotations

from bench.service_{next} import Service{next}


class Service{index}:
    """Step {index}."""

    def __init__(self, downstream: Service{next}) -> None:
        self.downstream = downstream

    def run(self, value: int) -> int:
        return self._helper(self.downstream.run(value))

    def _helper(self, value: int) -> int:
        return value + {index}

    def unused(self) -> None:
        pass
'''

LAST_TEMPLATE = '''class Service{index}:
    def run(self, value: int) -> int:
        return value
'''


def write_project(root: Path, size: int) -> None:
    """Write a src/bench package with size chained services."""
    package = root / "src" / "bench"
    package.mkdir(parents=True)
    (package / "__init__.py").write_text("")
    for index in range(size):
        template = SERVICE_TEMPLATE if index < size - 1 else LAST_TEMPLATE
        source = template.format(index=index, next=index + 1)
        (package / f"service_{index}.py").write_text(source)


def benchmark_import_time() -> float:
    """Measure import time of callslice package."""
    start = time.perf_counter()
    import callslice  # noqa: F401

    return time.perf_counter() - start


def benchmark_slice(size: int) -> tuple[float, float]:
    """Measure cold and warm pipeline time on a generated project.

    Returns:
        (warm-cache seconds, cold-cache seconds)
    """
    from callslice.application.services.slice_service import SliceService
    from callslice.domain.model.entry_point import EntryPoint
    from callslice.domain.model.traversal_config import TraversalConfig
    from callslice.infrastructure.resolvers.pyproject import load_project_config

    with tempfile.TemporaryDirectory() as tmp:
        root = Path(tmp)
        write_project(root, size)
        project = load_project_config(root)
        traversal = TraversalConfig(
            entry_point=EntryPoint("bench.service_0.Service0", "run"),
            project_root=project.project_root,
        )

        service = SliceService.for_project(project, use_importlib=False)
        start = time.perf_counter()
        service.run(traversal)
        pipeline_time = time.perf_counter() - start

        # Second run: parse cache is warm, measures traversal work
        start = time.perf_counter()
        service.run(traversal)
        warm_time = time.perf_counter() - start

    return warm_time, pipeline_time


def main() -> None:
    """Run benchmarks and output results."""
    parser = argparse.ArgumentParser(description="Run callslice benchmarks")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("benchmark-results.json"),
        help="Output file for benchmark results",
    )
    parser.add_argument(
        "--size",
        type=int,
        default=200,
        help="Number of chained services in the generated project",
    )
    args = parser.parse_args()

    results = []

    # Import time
    import_time = benchmark_import_time()
    results.append(
        {
            "name": "Import Time",
            "unit": "seconds",
            "value": import_time,
        }
    )

    warm_time, pipeline_time = benchmark_slice(args.size)
    results.append(
        {
            "name": f"Slice Pipeline ({args.size} modules, cold cache)",
            "unit": "seconds",
            "value": pipeline_time,
        }
    )
    results.append(
        {
            "name": f"Slice Pipeline ({args.size} modules, warm cache)",
            "unit": "seconds",
            "value": warm_time,
        }
    )

    # Write results
    args.output.write_text(json.dumps(results, indent=2))
    print(f"Benchmark results written to {args.output}")
    for r in results:
        print(f"  {r['name']}: {r['value']:.4f} {r['unit']}")


if __name__ == "__main__":
    main()
