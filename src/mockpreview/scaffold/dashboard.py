"""Dashboard manifest and view assembly."""

import json
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence
from ..errors import ScaffoldError
from ..models import PreviewEntry
from .generator import render_template, template_environment

logger = logging.getLogger(__name__)

ASSETS_DIR = Path(__file__).parent / "assets" / "dashboard"
DASHBOARD_COMPONENT = "Dashboard.jsx"
MANIFEST_IMPORT_MARKER = "'./previews.manifest.js'"

# Preview files are all named "preview-*"; no component name can produce these.
DASHBOARD_PREFIX = "__dashboard__"
MANIFEST_FILE = f"{DASHBOARD_PREFIX}.manifest.js"
DASHBOARD_DIR = DASHBOARD_PREFIX
DASHBOARD_ENTRY = f"{DASHBOARD_PREFIX}.jsx"
DASHBOARD_PAGE = f"{DASHBOARD_PREFIX}.html"


@dataclass
class DashboardFiles:
    """Paths written by the dashboard assembler."""

    manifest_path: Path
    entry_script_path: Path
    host_page_path: Path
    assets_dir: Path


class DashboardAssembler:
    """Builds the page that lists and links every generated preview."""

    def __init__(self, output_dir: Path, build_token: str, assets_dir: Path = ASSETS_DIR):
        self.output_dir = Path(output_dir)
        self.build_token = build_token
        self.assets_dir = Path(assets_dir)
        self.env = template_environment()

    def assemble(self, entries: Sequence[PreviewEntry]) -> DashboardFiles:
        """Write the manifest, copy the view and wire its host page.

        Args:
            entries: Preview entries in artifact order

        Returns:
            DashboardFiles with the written paths
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        manifest_path = self.write_manifest(entries)
        view_dir = self.copy_view(manifest_path)

        entry_script = self.output_dir / DASHBOARD_ENTRY
        entry_script.write_text(
            render_template(
                self.env,
                "dashboard_entry.jsx.j2",
                dashboard_component=f"{DASHBOARD_DIR}/{DASHBOARD_COMPONENT}",
            ),
            encoding="utf-8",
        )

        host_page = self.output_dir / DASHBOARD_PAGE
        host_page.write_text(
            render_template(
                self.env,
                "preview_host.html.j2",
                title="Component previews",
                entry_script=DASHBOARD_ENTRY,
                build_token=self.build_token,
            ),
            encoding="utf-8",
        )

        logger.debug("Dashboard lists %d previews", len(entries))
        return DashboardFiles(
            manifest_path=manifest_path,
            entry_script_path=entry_script,
            host_page_path=host_page,
            assets_dir=view_dir,
        )

    def write_manifest(self, entries: Sequence[PreviewEntry]) -> Path:
        manifest = [entry.to_manifest() for entry in entries]
        manifest_path = self.output_dir / MANIFEST_FILE
        manifest_path.write_text(
            render_template(
                self.env,
                "preview_manifest.js.j2",
                manifest_json=json.dumps(manifest, indent=2, ensure_ascii=False),
            ),
            encoding="utf-8",
        )
        return manifest_path

    def copy_view(self, manifest_path: Path) -> Path:
        """Copy the dashboard view and point its manifest import at ``manifest_path``."""
        if not self.assets_dir.is_dir():
            raise ScaffoldError(f"Dashboard assets not found in {self.assets_dir}")

        view_dir = self.output_dir / DASHBOARD_DIR
        shutil.copytree(self.assets_dir, view_dir, dirs_exist_ok=True)

        component = view_dir / DASHBOARD_COMPONENT
        source = component.read_text(encoding="utf-8")
        occurrences = source.count(MANIFEST_IMPORT_MARKER)
        if occurrences != 1:
            raise ScaffoldError(
                f"{DASHBOARD_COMPONENT} must import {MANIFEST_IMPORT_MARKER} exactly once, "
                f"found {occurrences}"
            )
        manifest_import = f"'../{manifest_path.name}'"
        component.write_text(source.replace(MANIFEST_IMPORT_MARKER, manifest_import), encoding="utf-8")
        return view_dir
