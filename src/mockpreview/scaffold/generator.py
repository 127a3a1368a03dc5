"""Preview entry and host page generation."""

import json
import logging
import os
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from jinja2 import Environment, FileSystemLoader, TemplateNotFound
from ..errors import ScaffoldError
from ..models import AnalysisArtifact, ComponentAnalysis, PreviewEntry
from .interceptor import MOCK_LATENCY_MS, WILDCARD, shadowed_mocks
from .wrappers import WrapperSpec, resolve_wrappers

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).with_name("templates")
CSS_GLOB = "src/**/*.css"
PREVIEW_PREFIX = "preview-"


def template_environment() -> Environment:
    """Jinja environment for the generated JavaScript and HTML files."""
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,
    )


def render_template(env: Environment, name: str, **context) -> str:
    try:
        return env.get_template(name).render(**context)
    except TemplateNotFound as e:
        raise ScaffoldError(f"Missing scaffold template: {name}") from e


def safe_name_for(original_path: str) -> str:
    """File basename without its extension."""
    return Path(original_path).stem


def import_path(target: Path, from_dir: Path) -> str:
    """Relative ES module specifier for ``target`` as seen from ``from_dir``."""
    rel = os.path.relpath(target.resolve(), from_dir.resolve())
    rel = Path(rel).as_posix()
    return rel if rel.startswith("../") else f"./{rel}"


def new_build_token() -> str:
    return str(int(time.time() * 1000))


@dataclass
class PreviewScaffold:
    """Everything the entry template needs, already in JavaScript form."""

    safe_name: str
    component_import: str
    css_imports: list[str] = field(default_factory=list)
    wrappers: list[WrapperSpec] = field(default_factory=list)
    mock_props_json: str = "{}"
    network_mocks_json: str = "[]"
    title_json: str = '""'
    original_path_json: str = '""'


class ScaffoldGenerator:
    """Writes one entry module and one host page per analyzed component."""

    def __init__(
        self,
        output_dir: Path,
        project_root: Optional[Path] = None,
        build_token: Optional[str] = None,
    ):
        """Initialize generator.

        Args:
            output_dir: Directory that receives the generated files
            project_root: Root used to resolve component paths and CSS (defaults to cwd)
            build_token: Cache-busting token for host pages (defaults to current time)
        """
        self.output_dir = Path(output_dir)
        self.project_root = Path(project_root) if project_root else Path.cwd()
        self.build_token = build_token or new_build_token()
        self.env = template_environment()

    def generate_all(self, artifact: AnalysisArtifact) -> list[PreviewEntry]:
        """Generate previews for every artifact entry, in artifact order."""
        entries: list[PreviewEntry] = []
        seen: dict[str, str] = {}
        css_imports = self.discover_css()
        for original_path, analysis in artifact.items():
            safe_name = safe_name_for(original_path)
            if safe_name in seen:
                logger.warning(
                    "%s and %s share the preview name %r; the later one overwrites the earlier",
                    seen[safe_name],
                    original_path,
                    safe_name,
                )
            seen[safe_name] = original_path
            entries.append(self.generate(original_path, analysis, css_imports=css_imports))
        return entries

    def generate(
        self,
        original_path: str,
        analysis: ComponentAnalysis,
        css_imports: Optional[list[str]] = None,
    ) -> PreviewEntry:
        """Write the entry module and host page for one component.

        Returns:
            PreviewEntry describing the written files
        """
        scaffold = self.build_scaffold(original_path, analysis, css_imports)
        entry_script = self.output_dir / f"{PREVIEW_PREFIX}{scaffold.safe_name}.jsx"
        host_page = self.output_dir / f"{PREVIEW_PREFIX}{scaffold.safe_name}.html"

        self.output_dir.mkdir(parents=True, exist_ok=True)
        entry_script.write_text(self.render_entry(scaffold), encoding="utf-8")
        host_page.write_text(
            self.render_host(f"Preview: {scaffold.safe_name}", entry_script.name), encoding="utf-8"
        )
        logger.debug("Generated %s and %s", entry_script, host_page)

        return PreviewEntry(
            safe_name=scaffold.safe_name,
            entry_script_path=entry_script,
            host_page_path=host_page,
            original_path=original_path,
        )

    def build_scaffold(
        self,
        original_path: str,
        analysis: ComponentAnalysis,
        css_imports: Optional[list[str]] = None,
    ) -> PreviewScaffold:
        safe_name = safe_name_for(original_path)
        component = Path(original_path)
        if not component.is_absolute():
            component = self.project_root / component

        if not isinstance(analysis.props, dict):
            logger.warning("%s: props is not an object; rendering without props", original_path)
        mock_entries = analysis.mock_entries()
        raw_mocks = analysis.network_mocks
        if not isinstance(raw_mocks, list) or len(mock_entries) != len(raw_mocks):
            logger.warning("%s: ignoring network mocks that are not objects", original_path)

        mocks = analysis.network_mock_list()
        for mock in mocks:
            if not isinstance(mock.url_pattern, str):
                logger.warning(
                    "%s: network mock without a string urlPattern never matches a request",
                    original_path,
                )
        for mock in shadowed_mocks(mocks):
            logger.warning(
                "%s: network mock %r is shadowed by an earlier pattern and will never be served",
                original_path,
                mock.url_pattern,
            )

        return PreviewScaffold(
            safe_name=safe_name,
            component_import=import_path(component, self.output_dir),
            css_imports=self.discover_css() if css_imports is None else css_imports,
            wrappers=resolve_wrappers(analysis, label=original_path),
            mock_props_json=json.dumps(analysis.prop_values(), indent=2, ensure_ascii=False),
            network_mocks_json=json.dumps(mock_entries, indent=2, ensure_ascii=False),
            title_json=json.dumps(safe_name, ensure_ascii=False),
            original_path_json=json.dumps(original_path, ensure_ascii=False),
        )

    def discover_css(self) -> list[str]:
        """Import specifiers for the project's stylesheets under ``src/``."""
        return [
            import_path(css, self.output_dir)
            for css in sorted(self.project_root.glob(CSS_GLOB))
            if css.is_file()
        ]

    def render_entry(self, scaffold: PreviewScaffold) -> str:
        return render_template(
            self.env,
            "preview_entry.jsx.j2",
            scaffold=scaffold,
            interceptor=self.render_interceptor(scaffold.network_mocks_json).rstrip("\n"),
        )

    def render_interceptor(self, network_mocks_json: str, latency_ms: int = MOCK_LATENCY_MS) -> str:
        """The fetch override alone, as embedded in every entry module."""
        return render_template(
            self.env,
            "fetch_interceptor.js.j2",
            network_mocks_json=network_mocks_json,
            wildcard=WILDCARD,
            latency_ms=latency_ms,
        )

    def render_host(self, title: str, entry_script: str) -> str:
        return render_template(
            self.env,
            "preview_host.html.j2",
            title=title,
            entry_script=entry_script,
            build_token=self.build_token,
        )
