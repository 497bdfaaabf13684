#!/usr/bin/env python3
"""
Fetch real-world JSON documents from SchemaStore for benchmarking inference.

SchemaStore's schemas are themselves large, deeply nested JSON documents, so
they make good inputs for interface inference.
"""

import json
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests


CATALOG_URL = "https://www.schemastore.org/api/json/catalog.json"
OUTPUT_DIR = Path(__file__).parent.parent / "samples"


def fetch_catalog() -> List[Dict[str, Any]]:
    """Fetch the SchemaStore catalog."""
    print(f"Fetching catalog from {CATALOG_URL}...")
    response = requests.get(CATALOG_URL, timeout=30)
    response.raise_for_status()
    catalog = response.json()
    return catalog.get("schemas", [])


def download_document(url: str) -> Optional[Any]:
    """Download a single JSON document from URL."""
    try:
        response = requests.get(url, timeout=10)
        response.raise_for_status()
        return response.json()
    except (requests.RequestException, ValueError) as e:
        print(f"  Error downloading {url}: {e}")
        return None


def estimate_complexity(document: Any) -> Dict[str, int]:
    """
    Estimate document complexity along the dimensions that drive inference.
    Returns: {size, depth, object_count, array_count, max_array_length}
    """
    def walk(value, depth):
        if isinstance(value, dict):
            stats = [depth, 1, 0, 0]
            children = value.values()
        elif isinstance(value, list):
            stats = [depth, 0, 1, len(value)]
            children = value
        else:
            return [depth, 0, 0, 0]

        for child in children:
            sub = walk(child, depth + 1)
            stats[0] = max(stats[0], sub[0])
            stats[1] += sub[1]
            stats[2] += sub[2]
            stats[3] = max(stats[3], sub[3])
        return stats

    depth, objects, arrays, longest = walk(document, 0)
    return {
        "size": len(json.dumps(document)),
        "depth": depth,
        "object_count": objects,
        "array_count": arrays,
        "max_array_length": longest,
    }


def categorize_document(complexity: Dict[str, int]) -> str:
    """
    Categorize document into one of four quadrants:
    - small+simple
    - small+complex
    - big+simple
    - big+complex
    """
    size_threshold = 10000  # bytes
    complexity_threshold = 40  # combined metric

    is_big = complexity["size"] > size_threshold
    complexity_score = (
        complexity["depth"] * 2 +
        complexity["object_count"] +
        complexity["array_count"] * 2
    )
    is_complex = complexity_score > complexity_threshold

    if is_big and is_complex:
        return "big+complex"
    elif is_big:
        return "big+simple"
    elif is_complex:
        return "small+complex"
    return "small+simple"


def select_diverse_documents(catalog: List[Dict], target_count: int = 40) -> List[Dict]:
    """Download documents and keep an even spread across the four quadrants."""
    analyzed = []

    print(f"\nAnalyzing up to {min(150, len(catalog))} documents from catalog...")
    for idx, entry in enumerate(catalog[:150]):
        url = entry.get("url")
        if not url:
            continue

        print(f"  [{idx+1}] {entry.get('name', 'unknown')}")
        document = download_document(url)
        if document is None:
            continue

        complexity = estimate_complexity(document)
        analyzed.append({
            "name": entry.get("name", "unknown"),
            "url": url,
            "document": document,
            "complexity": complexity,
            "category": categorize_document(complexity),
        })

        # Rate limiting
        time.sleep(0.1)

    categories: Dict[str, List[Dict]] = {"small+simple": [], "small+complex": [], "big+simple": [], "big+complex": []}
    for item in analyzed:
        categories[item["category"]].append(item)

    print("\n=== Document Distribution ===")
    for cat, items in categories.items():
        print(f"{cat}: {len(items)} documents")

    per_category = target_count // 4
    selected = []
    for items in categories.values():
        selected.extend(items[:per_category])

    if len(selected) < target_count:
        leftovers = [item for items in categories.values() for item in items[per_category:]]
        selected.extend(leftovers[:target_count - len(selected)])

    print(f"\n=== Selected {len(selected)} documents ===")
    return selected


def save_documents(documents: List[Dict]):
    """Save documents and a manifest under OUTPUT_DIR."""
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    manifest = []
    for item in documents:
        name = item["name"].replace("/", "_").replace(" ", "_")
        document_file = OUTPUT_DIR / f"{name}.json"
        with open(document_file, "w") as f:
            json.dump(item["document"], f, indent=2)

        manifest.append({
            "name": name,
            "category": item["category"],
            "complexity": item["complexity"],
            "url": item["url"],
            "document_file": str(document_file),
        })
        print(f"  Saved: {name} ({item['category']})")

    manifest_file = OUTPUT_DIR / "manifest.json"
    with open(manifest_file, "w") as f:
        json.dump(manifest, f, indent=2)

    print(f"\nManifest saved to {manifest_file}")


def main():
    """Main execution."""
    catalog = fetch_catalog()
    print(f"Found {len(catalog)} documents in catalog")

    selected = select_diverse_documents(catalog)
    save_documents(selected)
    print("\n✓ Sample collection complete!")


if __name__ == "__main__":
    main()
