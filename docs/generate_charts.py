#!/usr/bin/env python3
"""Generate performance charts from benchmark results.json."""

import json
import sys
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

RESULTS_FILE = Path(__file__).parent.parent / "interface_inference" / "src" / "benchmarking" / "results.json"


def load_results(path: Path) -> dict:
    with open(path) as f:
        return json.load(f)


def main():
    results_file = Path(sys.argv[1]) if len(sys.argv) > 1 else RESULTS_FILE
    if not results_file.exists():
        print(f"Error: {results_file} not found. Run benchmark.py first.")
        return
    results = load_results(results_file)

    blueprints = {k[len("blueprint_"):]: v for k, v in results.items() if k.startswith("blueprint_")}
    counts = sorted((int(k[len("count_"):]), v) for k, v in results.items() if k.startswith("count_"))
    memory = {k[len("memory_"):]: v for k, v in results.items() if k.startswith("memory_")}

    fig = plt.figure(figsize=(18, 6))
    fig.suptitle("Interface Inference Performance", fontsize=16, fontweight="bold")

    # Panel 1: Time and interface count per blueprint
    ax1 = plt.subplot(1, 3, 1)
    names = list(blueprints)
    x = np.arange(len(names))
    ax1.bar(x, [blueprints[n]["ms"] for n in names], 0.6, color="#3498db")
    for i, n in enumerate(names):
        ax1.annotate(f"{blueprints[n]['interfaces']} ifaces", (i, blueprints[n]["ms"]), ha="center", va="bottom")
    ax1.set_xlabel("Blueprint")
    ax1.set_ylabel("Time (ms)")
    ax1.set_title("Inference Time by Blueprint (50 documents)")
    ax1.set_xticks(x)
    ax1.set_xticklabels(names, rotation=45, ha="right")
    ax1.grid(True, alpha=0.3)

    # Panel 2: Scaling with document count (log-log)
    ax2 = plt.subplot(1, 3, 2)
    if counts:
        sizes = np.array([c for c, _ in counts])
        times = np.array([t for _, t in counts])
        ax2.loglog(sizes, times, "o-", color="#e74c3c", label="measured")
        ax2.loglog(sizes, times[0] * sizes / sizes[0], "--", color="#95a5a6", label="linear")
        ax2.legend()
    ax2.set_xlabel("Documents")
    ax2.set_ylabel("Time (ms)")
    ax2.set_title("Scaling with Array Length")
    ax2.grid(True, alpha=0.3, which="both")

    # Panel 3: Memory growth
    ax3 = plt.subplot(1, 3, 3)
    mem_names = list(memory)
    ax3.barh(np.arange(len(mem_names)), [memory[n] for n in mem_names], color="#2ecc71")
    ax3.set_yticks(np.arange(len(mem_names)))
    ax3.set_yticklabels(mem_names)
    ax3.set_xlabel("RSS growth (MB)")
    ax3.set_title("Memory Growth (200 documents)")
    ax3.grid(True, alpha=0.3)

    plt.tight_layout()
    output = Path(__file__).parent / "performance_analysis.png"
    plt.savefig(output, dpi=150, bbox_inches="tight")
    print(f"✓ Saved chart to {output}")


if __name__ == "__main__":
    main()
