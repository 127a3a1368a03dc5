"""Prompt construction for component analysis."""

from ..models import AnalysisRequest, ProjectContext
from ..llm.prompts import (
    COMPONENT_ANALYSIS_PROMPT,
    COMPONENT_PROPS_PROMPT,
    MOCK_DATA_RULES,
    PROJECT_CONTEXT_BLOCK,
    SYSTEM_PROMPT,
)


class PromptBuilder:
    """Builds the single instruction string sent for each component."""

    system_prompt = SYSTEM_PROMPT

    def __init__(self, network_aware: bool = True):
        self.network_aware = network_aware

    def build(self, context: ProjectContext, request: AnalysisRequest) -> str:
        """Render the analysis prompt for one file.

        Args:
            context: Project context collected once per run
            request: File being analyzed

        Returns:
            Prompt text, identical for identical inputs
        """
        template = COMPONENT_ANALYSIS_PROMPT if self.network_aware else COMPONENT_PROPS_PROMPT
        return template.format(
            project_context=self._format_context(context),
            filename=request.filename,
            language="TypeScript" if request.is_typed_variant else "JavaScript",
            rules=MOCK_DATA_RULES,
            source=request.source_text,
        )

    def _format_context(self, context: ProjectContext) -> str:
        return PROJECT_CONTEXT_BLOCK.format(
            name=context.name,
            description=context.description or "None provided",
            dependencies=", ".join(context.dependency_names) or "None found",
            readme=context.readme_excerpt or "None found",
        )
