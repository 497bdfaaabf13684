#!/usr/bin/env python3
"""
Generate synthetic JSON documents for interface inference.

Documents are produced from small JSON-Schema-like blueprints so that arrays
of records vary in which optional fields they carry, which fields are null and
how long nested arrays are.
"""

import json
import random
import string
import sys
import uuid
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Dict, List


def _record(properties: Dict[str, Any], required: List[str]) -> Dict[str, Any]:
    return {"type": "object", "properties": properties, "required": required}


def _list_of(items: Dict[str, Any], max_items: int = 6) -> Dict[str, Any]:
    return {"type": "array", "items": items, "minItems": 0, "maxItems": max_items}


ADDRESS = _record(
    {
        "street": {"type": "string"},
        "city": {"type": "string"},
        "zip": {"type": "string", "pattern": "[0-9]{5}"},
        "country": {"type": ["string", "null"]},
    },
    ["street", "city"],
)

BLUEPRINTS: Dict[str, Dict[str, Any]] = {
    "users": _record(
        {
            "users": _list_of(
                _record(
                    {
                        "id": {"type": "integer"},
                        "name": {"type": "string"},
                        "email": {"type": "string", "format": "email"},
                        "age": {"type": "integer", "minimum": 18, "maximum": 90},
                        "active": {"type": "boolean"},
                        "address": ADDRESS,
                        "tags": _list_of({"type": "string"}, 4),
                    },
                    ["id", "name", "active"],
                ),
                12,
            ),
        },
        ["users"],
    ),
    "orders": _record(
        {
            "orders": _list_of(
                _record(
                    {
                        "id": {"type": "string", "format": "uuid"},
                        "createdAt": {"type": "string", "format": "date-time"},
                        "total": {"type": "number", "minimum": 0},
                        "coupon": {"type": ["string", "null"]},
                        "lineItems": _list_of(
                            _record(
                                {
                                    "sku": {"type": "string"},
                                    "quantity": {"type": "integer", "minimum": 1, "maximum": 9},
                                    "price": {"type": "number", "minimum": 0},
                                },
                                ["sku", "quantity"],
                            ),
                            5,
                        ),
                        "shipping": ADDRESS,
                        "billing": ADDRESS,
                    },
                    ["id", "total", "lineItems"],
                ),
                10,
            ),
            "nextPage": {"type": ["string", "null"], "format": "uri"},
        },
        ["orders"],
    ),
    "catalog": _record(
        {
            "categories": _list_of(
                _record(
                    {
                        "name": {"type": "string"},
                        "products": _list_of(
                            _record(
                                {
                                    "title": {"type": "string"},
                                    "price": {"type": ["number", "string"]},
                                    "dimensions": _record(
                                        {
                                            "width": {"type": "number"},
                                            "height": {"type": "number"},
                                            "depth": {"type": "number"},
                                        },
                                        ["width", "height"],
                                    ),
                                    "ratings": _list_of({"type": "integer", "minimum": 1, "maximum": 5}),
                                },
                                ["title"],
                            ),
                            8,
                        ),
                    },
                    ["name", "products"],
                ),
                6,
            ),
            "metadata": _record(
                {"generated": {"type": "string", "format": "date"}, "version": {"type": "integer"}},
                ["generated"],
            ),
        },
        ["categories"],
    ),
    "events": _list_of(
        _record(
            {
                "type": {"type": "string", "enum": ["click", "view", "purchase"]},
                "at": {"type": "string", "format": "time"},
                "payload": {"type": ["object", "array", "string", "null"], "properties": {"x": {"type": "integer"}}},
                "source": {"type": "string", "format": "ipv4"},
            },
            ["type", "at"],
        ),
        20,
    ),
}


class SampleDocumentGenerator:
    """Generate varied JSON documents from blueprints."""

    def __init__(self, seed: int = 42):
        """Initialize with a seed for reproducibility."""
        self.random = random.Random(seed)
        self.generation_count = 0

    def generate_documents(self, blueprint: Dict[str, Any], count: int = 20) -> List[Any]:
        """Generate count documents from one blueprint."""
        documents = []
        for i in range(count):
            self.generation_count = i
            documents.append(self.generate_from_blueprint(blueprint))
        return documents

    def generate_from_blueprint(self, blueprint: Dict[str, Any]) -> Any:
        """Generate a single value conforming to blueprint."""
        value_type = blueprint.get("type")

        if isinstance(value_type, list):
            value_type = self.random.choice(value_type)

        if value_type == "object":
            return self._generate_object(blueprint)
        elif value_type == "array":
            return self._generate_array(blueprint)
        elif value_type == "string":
            return self._generate_string(blueprint)
        elif value_type == "number":
            return round(self.random.uniform(blueprint.get("minimum", -1000), blueprint.get("maximum", 1000)), 2)
        elif value_type == "integer":
            return self.random.randint(blueprint.get("minimum", -1000), blueprint.get("maximum", 1000))
        elif value_type == "boolean":
            return self.random.choice([True, False])
        elif value_type == "null":
            return None
        else:
            return self._generate_random_value()

    def _generate_object(self, blueprint: Dict[str, Any]) -> Dict[str, Any]:
        obj = {}
        required = blueprint.get("required", [])

        # Optional properties appear 60% of the time
        for prop, prop_blueprint in blueprint.get("properties", {}).items():
            if prop in required or self.random.random() < 0.6:
                obj[prop] = self.generate_from_blueprint(prop_blueprint)

        return obj

    def _generate_array(self, blueprint: Dict[str, Any]) -> List[Any]:
        min_items = blueprint.get("minItems", 0)
        max_items = blueprint.get("maxItems", 10)
        items = blueprint.get("items")

        # Vary array length across documents
        if self.generation_count % 3 == 0:
            length = max_items
        else:
            length = self.random.randint(min_items, max_items)

        if items is None:
            return [self._generate_random_value() for _ in range(length)]
        return [self.generate_from_blueprint(items) for _ in range(length)]

    def _generate_string(self, blueprint: Dict[str, Any]) -> str:
        format_type = blueprint.get("format")

        if "enum" in blueprint:
            return self.random.choice(blueprint["enum"])
        elif format_type == "date-time":
            moment = datetime(2020, 1, 1) + timedelta(
                days=self.random.randint(0, 1825), hours=self.random.randint(0, 23)
            )
            return moment.isoformat() + "Z"
        elif format_type == "date":
            return (datetime(2020, 1, 1) + timedelta(days=self.random.randint(0, 1825))).strftime("%Y-%m-%d")
        elif format_type == "time":
            r = self.random
            return f"{r.randint(0, 23):02d}:{r.randint(0, 59):02d}:{r.randint(0, 59):02d}"
        elif format_type == "email":
            names = ["alice", "bob", "charlie", "diana", "eve", "frank"]
            domains = ["example.com", "test.org", "demo.net"]
            return f"{self.random.choice(names)}{self.random.randint(1, 999)}@{self.random.choice(domains)}"
        elif format_type == "uri":
            return f"https://example.com/api/page/{self.random.randint(1, 99)}"
        elif format_type == "uuid":
            return str(uuid.UUID(int=self.random.getrandbits(128)))
        elif format_type == "ipv4":
            return ".".join(str(self.random.randint(1, 255)) for _ in range(4))
        elif "pattern" in blueprint:
            return "".join(self.random.choices(string.digits, k=5))
        return self._generate_random_string(3, 12)

    def _generate_random_value(self) -> Any:
        choices = [
            lambda: self.random.randint(0, 100),
            lambda: self._generate_random_string(5, 15),
            lambda: self.random.choice([True, False]),
            lambda: None,
        ]
        return self.random.choice(choices)()

    def _generate_random_string(self, min_len: int, max_len: int) -> str:
        length = self.random.randint(min_len, max_len)
        if self.random.random() < 0.3:
            words = ["lorem", "ipsum", "dolor", "sit", "amet", "consectetur", "adipiscing"]
            return " ".join(self.random.choices(words, k=length // 5 + 1))[:length]
        return "".join(self.random.choices(string.ascii_lowercase, k=length))


def main():
    """Write generated documents for every blueprint to a directory."""
    output_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(__file__).parent.parent / "tests" / "samples"
    output_dir.mkdir(parents=True, exist_ok=True)

    generator = SampleDocumentGenerator()
    for name, blueprint in BLUEPRINTS.items():
        documents = generator.generate_documents(blueprint, count=20)
        output_file = output_dir / f"{name}.json"
        with open(output_file, "w") as f:
            json.dump(documents, f, indent=2)
        print(f"  ✓ {name}: {len(documents)} documents -> {output_file}")


if __name__ == "__main__":
    main()
