"""Tests for the analysis artifact file."""

import json
import pytest
from mockpreview.artifact import load_artifact, save_artifact
from mockpreview.errors import ArtifactFormatError, ArtifactMissingError
from mockpreview.models import ComponentAnalysis


def test_save_and_load_keep_order_and_unknown_keys(tmp_path):
    path = tmp_path / "nested" / "analysis.json"
    artifact = {
        "src/Zeta.jsx": ComponentAnalysis.model_validate({"props": {"a": 1}, "notes": "kept"}),
        "src/Alpha.jsx": ComponentAnalysis(props={}),
    }

    save_artifact(artifact, path)
    loaded = load_artifact(path)

    assert list(loaded) == ["src/Zeta.jsx", "src/Alpha.jsx"]
    assert loaded["src/Zeta.jsx"].to_json_dict() == {"props": {"a": 1}, "notes": "kept"}
    assert path.read_text().endswith("}\n")


def test_missing_artifact(tmp_path):
    with pytest.raises(ArtifactMissingError, match="mockpreview analyze"):
        load_artifact(tmp_path / "analysis.json")


def test_invalid_json(tmp_path):
    path = tmp_path / "analysis.json"
    path.write_text("{not json")

    with pytest.raises(ArtifactFormatError, match="Could not read"):
        load_artifact(path)


def test_top_level_must_be_object(tmp_path):
    path = tmp_path / "analysis.json"
    path.write_text(json.dumps([{"props": {}}]))

    with pytest.raises(ArtifactFormatError, match="JSON object"):
        load_artifact(path)


def test_invalid_entry_names_the_file(tmp_path):
    path = tmp_path / "analysis.json"
    path.write_text(json.dumps({"src/Broken.jsx": {"wrappers": {"router": True}}}))

    with pytest.raises(ArtifactFormatError, match="src/Broken.jsx"):
        load_artifact(path)


def test_loose_entries_load_unchanged(tmp_path):
    """Entries only need props; odd nested values survive a save and load."""
    path = tmp_path / "analysis.json"
    entry = {"props": {"a": 1}, "wrappers": {"router": None}, "networkMocks": [{"url": "/api/x"}]}
    path.write_text(json.dumps({"src/Odd.jsx": entry}))

    save_artifact(load_artifact(path), path)

    assert json.loads(path.read_text()) == {"src/Odd.jsx": entry}
