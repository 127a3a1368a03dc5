"""Vite configuration and build invocation."""

import json
import logging
import shlex
import subprocess
from pathlib import Path
from typing import Optional, Sequence
from ..errors import BundlerInvocationError
from ..models import PreviewEntry
from .generator import render_template, template_environment

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "vite.preview.config.mjs"
DASHBOARD_INPUT_KEY = "__dashboard__"

# Resolved to mockpreview's own installed copies in the runtime directory.
PINNED_PACKAGES = ["react", "react-dom", "react-router-dom", "@tanstack/react-query"]


class ViteBundler:
    """Writes a multi-page Vite config and runs ``vite build``.

    The config and the build live in ``root``, the directory holding the
    generated previews. ``runtime_dir`` is where mockpreview keeps its own
    copies of the pinned UI packages; without it nothing is pinned.
    """

    def __init__(
        self,
        root: Path,
        runtime_dir: Optional[Path] = None,
        command: str = "npx vite",
        build_dir: str = "preview-dist",
    ):
        self.root = Path(root)
        self.runtime_dir = Path(runtime_dir) if runtime_dir else None
        self.command = command
        self.build_dir = build_dir
        self.env = template_environment()

    @property
    def config_path(self) -> Path:
        return self.root / CONFIG_FILENAME

    def inputs(self, entries: Sequence[PreviewEntry], dashboard_page: Path) -> dict[str, str]:
        """Rollup input map: each host page keyed by its stem, plus the dashboard."""
        inputs: dict[str, str] = {}
        for entry in entries:
            inputs[entry.host_page_path.stem] = str(entry.host_page_path.resolve())
        inputs[DASHBOARD_INPUT_KEY] = str(Path(dashboard_page).resolve())
        return inputs

    def aliases(self) -> dict[str, str]:
        """Pinned packages that are installed in the runtime directory."""
        if self.runtime_dir is None:
            return {}
        node_modules = self.runtime_dir / "node_modules"
        aliases = {}
        for package in PINNED_PACKAGES:
            package_dir = node_modules / package
            if package_dir.is_dir():
                aliases[package] = str(package_dir.resolve())
            else:
                logger.warning(
                    "Not pinning %s: %s is missing (run `mockpreview setup`)", package, package_dir
                )
        return aliases

    def install_runtime(self, npm_command: str = "npm") -> Path:
        """Install the pinned packages into the runtime directory.

        Raises:
            BundlerInvocationError: If there is no runtime directory or npm fails
        """
        if self.runtime_dir is None:
            raise BundlerInvocationError("No runtime directory configured")
        self.runtime_dir.mkdir(parents=True, exist_ok=True)
        args = shlex.split(npm_command) + ["install", "--prefix", str(self.runtime_dir)]
        args += PINNED_PACKAGES
        self._run(args, cwd=self.runtime_dir)
        return self.runtime_dir / "node_modules"

    def write_config(self, entries: Sequence[PreviewEntry], dashboard_page: Path) -> Path:
        """Render the bundler config next to the previews."""
        config = render_template(
            self.env,
            "vite.config.mjs.j2",
            root_json=json.dumps(str(self.root.resolve())),
            aliases_json=json.dumps(self.aliases(), indent=6),
            dedupe_json=json.dumps(PINNED_PACKAGES),
            out_dir_json=json.dumps(self.build_dir),
            inputs_json=json.dumps(self.inputs(entries, dashboard_page), indent=8),
        )
        self.root.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(config, encoding="utf-8")
        logger.info("Wrote bundler config %s", self.config_path)
        return self.config_path

    def build(self, config_path: Optional[Path] = None) -> None:
        """Run the bundler; its output goes straight to the terminal.

        Raises:
            BundlerInvocationError: If the bundler cannot start or exits non-zero
        """
        args = shlex.split(self.command) + ["build", "--config", str(config_path or self.config_path)]
        self._run(args, cwd=self.root)

    def _run(self, args: list[str], cwd: Path) -> None:
        logger.info("Running %s", " ".join(args))
        try:
            result = subprocess.run(args, cwd=cwd, check=False)
        except OSError as e:
            raise BundlerInvocationError(f"Could not start `{args[0]}`: {e}") from e

        if result.returncode != 0:
            raise BundlerInvocationError(
                f"`{args[0]}` exited with status {result.returncode}", returncode=result.returncode
            )

    def preview_command(self) -> str:
        return f"{self.command} preview --config {self.config_path}"
