#!/usr/bin/env python3
"""
Benchmarking suite for interface inference.

Measures inference time across sample blueprints, growing array sizes and
fetched real-world documents, plus memory growth during inference.
"""

import json
import os
import sys
import time
from pathlib import Path
from typing import Any, Dict, List

import psutil

sys.path.insert(0, str(Path(__file__).parent.parent / "lib"))

from generate_samples import BLUEPRINTS, SampleDocumentGenerator
from infer_interfaces import infer_definitions, infer_interfaces


class BenchmarkSuite:
    """Benchmarking for interface inference."""

    def __init__(self, runs: int = 5):
        """Initialize benchmark suite."""
        self.runs = runs
        self.results: Dict[str, Any] = {}
        self.generator = SampleDocumentGenerator()
        self.samples_dir = Path(__file__).parent.parent.parent.parent / "benchmarks" / "python" / "samples"
        self.manifest_file = self.samples_dir / "manifest.json"

    def time_inference(self, document: Any) -> float:
        """Return the best of self.runs inference times in seconds."""
        times = []
        for _ in range(self.runs):
            start = time.perf_counter()
            _ = infer_interfaces(document)
            times.append(time.perf_counter() - start)
        return min(times)

    def benchmark_by_blueprint(self):
        """Benchmark inference on generated documents for each blueprint."""
        print("=== Benchmarking by Blueprint ===\n")

        for name, blueprint in BLUEPRINTS.items():
            documents = self.generator.generate_documents(blueprint, count=50)
            elapsed = self.time_inference(documents)
            interfaces = len(infer_definitions(documents).definitions)

            print(f"  {name:<20} {elapsed*1000:8.2f}ms  {interfaces:3d} interfaces")
            self.results[f"blueprint_{name}"] = {"ms": elapsed * 1000, "interfaces": interfaces}

    def benchmark_by_array_length(self):
        """Benchmark how performance scales with the number of array elements."""
        print("\n=== Benchmarking by Array Length ===\n")

        blueprint = BLUEPRINTS["orders"]
        for count in [1, 10, 100, 500, 1000]:
            documents = self.generator.generate_documents(blueprint, count=count)
            elapsed = self.time_inference(documents)

            print(f"  {count:5d} documents: {elapsed*1000:8.2f}ms")
            self.results[f"count_{count}"] = elapsed * 1000

    def benchmark_memory_usage(self):
        """Benchmark memory growth during inference."""
        print("\n=== Memory Usage ===\n")

        process = psutil.Process(os.getpid())
        for name, blueprint in BLUEPRINTS.items():
            documents = self.generator.generate_documents(blueprint, count=200)

            mem_start = process.memory_info().rss / (1024 * 1024)  # MB
            _ = infer_interfaces(documents)
            mem_end = process.memory_info().rss / (1024 * 1024)  # MB

            print(f"  {name:<20} {mem_end - mem_start:8.2f} MB")
            self.results[f"memory_{name}"] = mem_end - mem_start

    def load_manifest(self) -> List[Dict[str, Any]]:
        """Load the fetched sample manifest, if fetch_samples.py has been run."""
        if not self.manifest_file.exists():
            return []
        with open(self.manifest_file) as f:
            return json.load(f)

    def benchmark_fetched_documents(self):
        """Benchmark inference on downloaded real-world documents by category."""
        print("\n=== Fetched Documents ===\n")

        manifest = self.load_manifest()
        if not manifest:
            print("  No fetched samples, run fetch_samples.py first")
            return

        categories: Dict[str, List[float]] = {}
        for entry in manifest:
            with open(entry["document_file"]) as f:
                document = json.load(f)
            elapsed = self.time_inference(document)
            categories.setdefault(entry["category"], []).append(elapsed)

        for category, times in sorted(categories.items()):
            avg = sum(times) / len(times)
            print(f"  {category:<20} {avg*1000:8.2f}ms  ({len(times)} documents)")
            self.results[f"fetched_{category}"] = {"avg_ms": avg * 1000, "samples": len(times)}

    def run_all_benchmarks(self) -> Dict[str, Any]:
        """Run all benchmarks."""
        print("Starting Benchmarking Suite\n")
        print("=" * 70)

        self.benchmark_by_blueprint()
        self.benchmark_by_array_length()
        self.benchmark_memory_usage()
        self.benchmark_fetched_documents()

        print("\n" + "=" * 70)
        print("Benchmarking Complete")

        return self.results


def main():
    """Run benchmarks and save results.json next to this script."""
    suite = BenchmarkSuite()
    results = suite.run_all_benchmarks()

    output_file = Path(__file__).parent / "results.json"
    with open(output_file, "w") as f:
        json.dump(results, f, indent=2)
    print(f"\nResults saved to {output_file}")


if __name__ == "__main__":
    main()
