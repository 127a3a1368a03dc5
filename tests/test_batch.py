"""Tests for the batch analyzer."""

import json
import logging
import time
import pytest
from unittest.mock import MagicMock
from mockpreview.analyzer.batch import BatchAnalyzer
from mockpreview.errors import ModelInvocationError
from mockpreview.models import ProjectContext
from mockpreview.scanner.context import ProjectContextCollector


@pytest.fixture
def components(project_dir):
    """Three component files on disk, as paths relative strings."""
    src = project_dir / "src"
    for name in ("TaskList.jsx", "Avatar.tsx"):
        (src / name).write_text(f"export default function {name.split('.')[0]}() {{ return null; }}")
    return [str(src / "UserCard.jsx"), str(src / "TaskList.jsx"), str(src / "Avatar.tsx")]


def _analyzer(llm, console, sleeps=None, delay=4.0):
    recorded = sleeps if sleeps is not None else []
    return BatchAnalyzer(llm, delay=delay, sleep=recorded.append, console=console)


def test_artifact_has_one_entry_per_existing_file(
    mock_llm_class, quiet_console, project_dir, components
):
    """Missing paths are skipped; N requested - M missing = keys."""
    requested = [components[0], str(project_dir / "src" / "Gone.jsx"), components[1], components[2]]
    llm = mock_llm_class()

    report = _analyzer(llm, quiet_console).analyze(requested, root=project_dir)

    assert list(report.artifact) == components
    assert len(report.artifact) == len(requested) - 1
    assert [o.status for o in report.outcomes] == ["ok", "skipped", "ok", "ok"]
    assert len(llm.prompts) == 3


def test_delay_between_calls_only(mock_llm_class, quiet_console, project_dir, components):
    """K processed files wait K-1 times; missing files do not count."""
    sleeps = []
    requested = [components[0], str(project_dir / "nope.jsx"), components[1], components[2]]

    _analyzer(mock_llm_class(), quiet_console, sleeps).analyze(requested, root=project_dir)

    assert sleeps == [4.0, 4.0]


def test_single_file_never_waits(mock_llm_class, quiet_console, project_dir, components):
    sleeps = []

    _analyzer(mock_llm_class(), quiet_console, sleeps).analyze(components[:1], root=project_dir)

    assert sleeps == []


def test_wall_time_includes_delays(mock_llm_class, quiet_console, project_dir, components):
    """Real sleeping between three calls takes at least two delays."""
    analyzer = BatchAnalyzer(mock_llm_class(), delay=0.05, console=quiet_console)

    started = time.monotonic()
    report = analyzer.analyze(components, root=project_dir)
    elapsed = time.monotonic() - started

    assert elapsed >= 2 * 0.05
    assert report.elapsed_seconds >= 2 * 0.05


def test_model_failure_becomes_fallback_and_batch_continues(
    mock_llm_class, quiet_console, project_dir, components, user_card_response, caplog
):
    """A failing call yields the fallback entry and the next file still runs."""
    llm = mock_llm_class(
        responses=[ModelInvocationError("quota exceeded"), user_card_response, "not json"]
    )

    with caplog.at_level(logging.WARNING):
        report = _analyzer(llm, quiet_console).analyze(components, root=project_dir)

    first, second, third = (report.artifact[p] for p in components)
    assert first.to_json_dict() == {"props": {}, "wrappers": {}, "networkMocks": []}
    assert second.props["user"]["name"] == "Ada Lovelace"
    assert third.to_json_dict() == {"props": {}, "wrappers": {}, "networkMocks": []}

    assert [o.status for o in report.outcomes] == ["error", "ok", "fallback"]
    assert "quota exceeded" in report.outcomes[0].message
    assert len(report.failures) == 2
    messages = " ".join(r.message for r in caplog.records)
    assert "Model call failed" in messages
    assert "Using empty analysis" in messages


def test_context_collected_once(mock_llm_class, quiet_console, project_dir, components):
    """Context is built once and shared by every prompt."""
    collector = MagicMock(spec=ProjectContextCollector)
    collector.collect.return_value = ProjectContext(name="from-collector")
    llm = mock_llm_class()

    BatchAnalyzer(llm, collector=collector, sleep=lambda _: None, console=quiet_console).analyze(
        components, root=project_dir
    )

    collector.collect.assert_called_once_with(project_dir)
    assert all("Name: from-collector" in prompt for prompt in llm.prompts)


def test_prompts_follow_input_order(mock_llm_class, quiet_console, project_dir, components):
    llm = mock_llm_class()

    _analyzer(llm, quiet_console).analyze(list(reversed(components)), root=project_dir)

    assert "FILE: Avatar.tsx" in llm.prompts[0]
    assert "LANGUAGE: TypeScript" in llm.prompts[0]
    assert "FILE: UserCard.jsx" in llm.prompts[2]


def test_analyze_and_save_overwrites_artifact(
    mock_llm_class, quiet_console, project_dir, components, user_card_response, tmp_path
):
    """The artifact is written once as indented JSON, replacing old content."""
    output = tmp_path / "analysis.json"
    output.write_text(json.dumps({"old/Component.jsx": {"props": {"stale": True}}}))
    llm = mock_llm_class(responses=[user_card_response])

    _analyzer(llm, quiet_console).analyze_and_save(components[:2], output, root=project_dir)

    text = output.read_text()
    data = json.loads(text)
    assert list(data) == components[:2]
    assert data[components[0]] == json.loads(user_card_response)
    assert data[components[1]] == {"props": {}}
    assert '\n  "' in text


def test_unreadable_file_does_not_add_a_delay(
    mock_llm_class, quiet_console, project_dir, components
):
    """A file that never reaches the model gets a fallback entry but no wait."""
    broken = project_dir / "src" / "Broken.jsx"
    broken.write_bytes(b"\xff\xfe\xfa not utf-8")
    sleeps = []
    llm = mock_llm_class()

    report = _analyzer(llm, quiet_console, sleeps).analyze(
        [str(broken), components[0], components[1]], root=project_dir
    )

    assert sleeps == [4.0]
    assert len(llm.prompts) == 2
    assert report.outcomes[0].status == "error"
    assert "unreadable source" in report.outcomes[0].message
    assert report.artifact[str(broken)].to_json_dict() == {"props": {}, "wrappers": {}, "networkMocks": []}
