"""Tests for prompt construction."""

from mockpreview.analyzer.prompt_builder import PromptBuilder
from mockpreview.llm.prompts import PROMPT_VERSION, SYSTEM_PROMPT
from mockpreview.models import AnalysisRequest, ProjectContext

SOURCE = "export default function Price({ amount }) { return <b>{amount}</b>; }"


def _context() -> ProjectContext:
    return ProjectContext(
        name="shop-frontend",
        description="Storefront for a bike shop",
        dependency_names=["react", "react-router-dom"],
        readme_excerpt="Sells bikes and parts.",
    )


def test_prompt_embeds_context_file_and_source():
    """Project context, filename, language flag and literal source are present."""
    request = AnalysisRequest.from_path("src/Price.tsx", SOURCE)

    prompt = PromptBuilder().build(_context(), request)

    assert "Name: shop-frontend" in prompt
    assert "Storefront for a bike shop" in prompt
    assert "react, react-router-dom" in prompt
    assert "Sells bikes and parts." in prompt
    assert "FILE: Price.tsx" in prompt
    assert "LANGUAGE: TypeScript" in prompt
    assert SOURCE in prompt


def test_prompt_contains_rubric():
    """The output rubric is part of every prompt."""
    prompt = PromptBuilder().build(_context(), AnalysisRequest.from_path("src/Price.jsx", SOURCE))

    assert "LANGUAGE: JavaScript" in prompt
    assert "between 3 and 5 items" in prompt
    assert "https://picsum.photos/seed/" in prompt
    assert "Output ONLY valid JSON" in prompt
    assert '"networkMocks"' in prompt
    assert "destructured" in prompt


def test_props_only_variant_skips_network_instructions():
    prompt = PromptBuilder(network_aware=False).build(
        _context(), AnalysisRequest.from_path("src/Price.jsx", SOURCE)
    )

    assert '"props"' in prompt
    assert "networkMocks" not in prompt
    assert "Output ONLY valid JSON" in prompt


def test_prompt_is_deterministic():
    request = AnalysisRequest.from_path("src/Price.jsx", SOURCE)
    builder = PromptBuilder()

    assert builder.build(_context(), request) == builder.build(_context(), request)


def test_empty_context_placeholders():
    """Missing metadata is spelled out instead of leaving blanks."""
    prompt = PromptBuilder().build(
        ProjectContext(name="Unknown Project"), AnalysisRequest.from_path("a.jsx", SOURCE)
    )

    assert "Description: None provided" in prompt
    assert "Dependencies: None found" in prompt


def test_system_prompt_and_version():
    assert PromptBuilder.system_prompt == SYSTEM_PROMPT
    assert PROMPT_VERSION
