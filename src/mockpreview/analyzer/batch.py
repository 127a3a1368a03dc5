"""Sequential batch analysis of component files."""

import logging
import time
from pathlib import Path
from typing import Callable, Iterable, Optional
from rich.console import Console
from rich.markup import escape
from ..artifact import save_artifact
from ..errors import ModelInvocationError
from ..llm.provider import LLMProvider
from ..models import (
    AnalysisReport,
    AnalysisRequest,
    ComponentAnalysis,
    FileOutcome,
    ProjectContext,
)
from ..scanner.context import ProjectContextCollector
from .normalizer import normalize_response
from .prompt_builder import PromptBuilder

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_DELAY = 4.0


class BatchAnalyzer:
    """Runs context -> prompt -> model -> normalize for each file in order.

    Model calls are strictly sequential with ``delay`` seconds between them.
    Every file that exists on disk gets exactly one artifact entry, using the
    fallback analysis when its call or its response fails.
    """

    def __init__(
        self,
        llm_provider: LLMProvider,
        collector: Optional[ProjectContextCollector] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        delay: float = DEFAULT_REQUEST_DELAY,
        sleep: Callable[[float], None] = time.sleep,
        console: Optional[Console] = None,
    ):
        self.llm = llm_provider
        self.collector = collector or ProjectContextCollector()
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.delay = delay
        self.sleep = sleep
        self.console = console or Console()

    def analyze(self, file_paths: Iterable[str], root: Optional[Path] = None) -> AnalysisReport:
        """Analyze every existing file in ``file_paths``.

        Args:
            file_paths: Candidate paths, in the order they should appear in the artifact
            root: Project root for context collection (defaults to the cwd)

        Returns:
            AnalysisReport with the artifact and one outcome per requested path
        """
        started = time.monotonic()
        context = self.collector.collect(root or Path.cwd())
        report = AnalysisReport()
        calls_made = 0

        for file_path in file_paths:
            path = Path(file_path)
            if not path.is_file():
                logger.debug("Skipping %s: not found", file_path)
                report.outcomes.append(FileOutcome(path=file_path, status="skipped"))
                continue

            self.console.print(f"📖 Reading component from {escape(file_path)}...")
            try:
                source_text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Could not read %s: %s", file_path, e)
                report.artifact[file_path] = ComponentAnalysis.fallback()
                report.outcomes.append(
                    FileOutcome(path=file_path, status="error", message=f"unreadable source: {e}")
                )
                continue

            if calls_made and self.delay > 0:
                logger.debug("Waiting %.1fs before next model call", self.delay)
                self.sleep(self.delay)
            calls_made += 1

            analysis, outcome = self._analyze_file(file_path, source_text, context)
            report.artifact[file_path] = analysis
            report.outcomes.append(outcome)

        report.elapsed_seconds = time.monotonic() - started
        return report

    def analyze_and_save(
        self, file_paths: Iterable[str], output_path: Path, root: Optional[Path] = None
    ) -> AnalysisReport:
        """Analyze all files, then write the artifact once."""
        report = self.analyze(file_paths, root=root)
        save_artifact(report.artifact, output_path)
        self.console.print(f"✅ Analysis saved to: {escape(str(output_path))}")
        return report

    def _analyze_file(
        self, file_path: str, source_text: str, context: ProjectContext
    ) -> tuple[ComponentAnalysis, FileOutcome]:
        request = AnalysisRequest.from_path(file_path, source_text)
        prompt = self.prompt_builder.build(context, request)

        try:
            with self.console.status(f"🧠 Analyzing {escape(request.filename)}...", spinner="dots"):
                response = self.llm.generate(prompt, system=self.prompt_builder.system_prompt)
        except ModelInvocationError as e:
            logger.warning("Model call failed for %s: %s", file_path, e)
            return ComponentAnalysis.fallback(), FileOutcome(
                path=file_path, status="error", message=str(e)
            )

        normalized = normalize_response(response.content)
        if normalized.is_fallback:
            logger.warning("Using empty analysis for %s: %s", file_path, normalized.error)
            return normalized.analysis, FileOutcome(
                path=file_path, status="fallback", message=normalized.error
            )

        analysis = normalized.analysis
        wrappers = [kind for kind, flag in analysis.wrapper_flags().items() if flag]
        self.console.print(
            f"   {len(analysis.prop_values())} props, "
            f"{len(analysis.mock_entries())} network mocks, "
            f"wrappers: {', '.join(wrappers) or 'none'}"
        )
        return analysis, FileOutcome(path=file_path, status="ok")
