#!/usr/bin/env python3
"""
Integration tests using generated sample documents.

Tests that every document conforms to the interfaces inferred from the whole
sample set, and that the command line tool renders the same listing.
"""

import pytest
import json
from pathlib import Path
import sys
from typing import Any, Dict

sys.path.insert(0, str(Path(__file__).parent.parent / "lib"))

from typer.testing import CliRunner

from generate_samples import BLUEPRINTS, SampleDocumentGenerator
from infer_interfaces import InferenceResult, RenderOptions, infer_definitions, infer_interfaces
from interface_cli import app
from interface_config import (
    InterfaceConfigError,
    inference_defaults,
    render_options_from_config,
    root_name_from_config,
)
from interface_signatures import base_name, field_names, signature
from interface_types import ArrayOf, InterfaceDefinition, NamedRef, Primitive, TypeExpression, UnionOf


def validate_against_definitions(
    value: Any,
    expr: TypeExpression,
    definitions: Dict[str, InterfaceDefinition],
    strict: bool = False,
) -> bool:
    """
    Validate a value against an inferred type expression.

    Args:
        value: The value to validate
        expr: The type expression to validate against
        definitions: Inferred interfaces by name
        strict: If True, required fields must be present. If False, only the
            types of present fields are checked.

    Returns:
        True if valid, False otherwise
    """
    if isinstance(expr, Primitive):
        if expr.name == "null":
            return value is None
        elif expr.name == "boolean":
            return isinstance(value, bool)
        elif expr.name == "number":
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        elif expr.name == "string":
            return isinstance(value, str)
        return True

    elif isinstance(expr, ArrayOf):
        if not isinstance(value, list):
            return False
        return all(validate_against_definitions(item, expr.element, definitions, strict) for item in value)

    elif isinstance(expr, UnionOf):
        return any(validate_against_definitions(value, m, definitions, strict) for m in expr.members)

    elif isinstance(expr, NamedRef):
        if not isinstance(value, dict):
            return False
        definition = definitions[expr.name]
        known = {f.name: f for f in definition.fields}

        if strict:
            for f in definition.fields:
                if not f.optional and f.name not in value:
                    return False

        for key, item in value.items():
            if key not in known:
                return False
            if not validate_against_definitions(item, known[key].type, definitions, strict):
                return False
        return True

    return False


def collect_keys(value: Any, keys: set) -> set:
    if isinstance(value, dict):
        for key, item in value.items():
            keys.add(key)
            collect_keys(item, keys)
    elif isinstance(value, list):
        for item in value:
            collect_keys(item, keys)
    return keys


@pytest.fixture(scope="module")
def samples():
    generator = SampleDocumentGenerator(seed=7)
    return {name: generator.generate_documents(blueprint, count=15) for name, blueprint in BLUEPRINTS.items()}


class TestIntegrationWithGeneratedDocuments:
    """Infer interfaces from generated sample sets and check the result."""

    @pytest.mark.parametrize("name", sorted(BLUEPRINTS))
    def test_documents_conform_to_inferred_interfaces(self, samples, name):
        documents = samples[name]
        result = infer_definitions(documents)

        failures = [
            idx
            for idx, document in enumerate(documents)
            if not validate_against_definitions(document, result.root_type.element, result.by_name)
        ]
        assert failures == [], f"{name}: documents {failures} do not match"

    @pytest.mark.parametrize("name", sorted(BLUEPRINTS))
    def test_inferred_interfaces_preserve_keys(self, samples, name):
        result = infer_definitions(samples[name])
        inferred = {f.name for d in result.definitions for f in d.fields}
        assert collect_keys(samples[name], set()) <= inferred

    @pytest.mark.parametrize("name", sorted(BLUEPRINTS))
    def test_registry_invariants_hold(self, samples, name):
        result = infer_definitions(samples[name])
        signatures = [signature(d.fields) for d in result.definitions]
        assert len(signatures) == len(set(signatures))

        shapes = [(base_name(d.name), field_names(d.fields)) for d in result.definitions]
        assert len(shapes) == len(set(shapes))

    @pytest.mark.parametrize("name", sorted(BLUEPRINTS))
    def test_references_resolve(self, samples, name):
        result = infer_definitions(samples[name])

        def refs(expr):
            if isinstance(expr, NamedRef):
                yield expr.name
            elif isinstance(expr, ArrayOf):
                yield from refs(expr.element)
            elif isinstance(expr, UnionOf):
                for member in expr.members:
                    yield from refs(member)

        names = set(result.by_name)
        for definition in result.definitions:
            for f in definition.fields:
                assert set(refs(f.type)) <= names
        assert set(refs(result.root_type)) <= names

    def test_generated_listing_is_deterministic(self, samples):
        for documents in samples.values():
            assert infer_interfaces(documents) == infer_interfaces(documents)

    def test_strict_validation_of_merged_users(self):
        data = {"users": [{"id": 1, "name": "A"}, {"id": 2, "name": "B", "age": 30}]}
        result = infer_definitions(data)
        assert isinstance(result, InferenceResult)
        assert validate_against_definitions(data, result.root_type, result.by_name, strict=True)
        assert not validate_against_definitions({"users": [{"id": 3}]}, result.root_type, result.by_name, strict=True)


class TestConfig:
    """Test the [inference] configuration table."""

    def test_missing_file_is_empty(self, tmp_path):
        assert inference_defaults(config_path=tmp_path / "absent.toml") == {}

    def test_invalid_toml_is_empty(self, tmp_path):
        path = tmp_path / "interface_inference.toml"
        path.write_text("[inference\nindent = ", encoding="utf-8")
        assert inference_defaults(config_path=path) == {}

    def test_reads_section_from_root(self, tmp_path):
        (tmp_path / "interface_inference.toml").write_text(
            '[inference]\nroot_name = "Payload"\nindent = 4\nexport = false\n', encoding="utf-8"
        )
        section = inference_defaults(root=tmp_path)
        assert root_name_from_config(section) == "Payload"
        assert render_options_from_config(section) == RenderOptions(indent=4, export=False)

    def test_defaults(self):
        assert root_name_from_config({}) == "RootInterface"
        assert render_options_from_config({}) == RenderOptions()

    @pytest.mark.parametrize(
        "section",
        [{"indent": -1}, {"indent": "2"}, {"indent": True}, {"export": "yes"}],
    )
    def test_rejects_bad_values(self, section):
        with pytest.raises(InterfaceConfigError):
            render_options_from_config(section)

    def test_rejects_empty_root_name(self):
        with pytest.raises(InterfaceConfigError):
            root_name_from_config({"root_name": ""})


class TestCli:
    """Test the infer-interfaces command."""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture
    def document(self, tmp_path):
        path = tmp_path / "users.json"
        path.write_text(json.dumps({"users": [{"id": 1, "name": "A"}, {"id": 2, "name": "B", "age": 30}]}))
        return path

    def test_reads_file(self, runner, document, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, [str(document)])
        assert result.exit_code == 0
        assert "export interface User {" in result.stdout
        assert "age?: number;" in result.stdout

    def test_reads_stdin(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["-"], input="[1, 2]")
        assert result.exit_code == 0
        assert result.stdout.strip() == "export type RootInterface = number[];"

    def test_root_name_option(self, runner, document, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, [str(document), "--root-name", "Payload"])
        assert result.exit_code == 0
        assert "export interface Payload {" in result.stdout

    def test_config_file(self, runner, document, tmp_path):
        config = tmp_path / "custom.toml"
        config.write_text('[inference]\nroot_name = "Doc"\nindent = 4\nexport = false\n')
        result = runner.invoke(app, [str(document), "--config", str(config)])
        assert result.exit_code == 0
        assert "interface Doc {\n    users: User[];\n}" in result.stdout

    def test_output_file(self, runner, document, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        target = tmp_path / "out.ts"
        result = runner.invoke(app, [str(document), "--output", str(target)])
        assert result.exit_code == 0
        assert target.read_text().endswith("}\n")
        assert "export interface RootInterface {" in target.read_text()

    def test_invalid_json(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")
        result = runner.invoke(app, [str(bad)])
        assert result.exit_code == 2

    def test_bad_config_value(self, runner, document, tmp_path):
        config = tmp_path / "custom.toml"
        config.write_text("[inference]\nindent = -3\n")
        result = runner.invoke(app, [str(document), "--config", str(config)])
        assert result.exit_code == 2


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
