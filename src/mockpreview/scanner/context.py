"""Project context collection for prompt grounding."""

import json
import logging
from pathlib import Path
from typing import Optional
from ..errors import ContextReadError
from ..models import ProjectContext

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "Unknown Project"
README_CHAR_LIMIT = 3000
README_NAMES = ["README.md", "README.rst", "README.txt", "README"]


class ProjectContextCollector:
    """Reads package.json and the README of the project being previewed."""

    def __init__(self, readme_char_limit: int = README_CHAR_LIMIT):
        self.readme_char_limit = readme_char_limit

    def collect(self, root: Path) -> ProjectContext:
        """Build the project context for ``root``.

        Missing files are not errors. Unreadable ones are logged as warnings
        and their contribution falls back to the defaults.

        Args:
            root: Project root, normally the current working directory

        Returns:
            ProjectContext shared by every analysis in the run
        """
        name = DEFAULT_PROJECT_NAME
        description = ""
        dependency_names: list[str] = []

        try:
            package = self._read_package_json(root)
        except ContextReadError as e:
            logger.warning("Ignoring project metadata: %s", e)
            package = None

        if package:
            name = str(package.get("name") or DEFAULT_PROJECT_NAME)
            description = str(package.get("description") or "")
            dependency_names = self._dependency_names(package)

        try:
            readme = self._read_readme(root) or ""
        except ContextReadError as e:
            logger.warning("Ignoring README: %s", e)
            readme = ""

        return ProjectContext(
            name=name,
            description=description,
            dependency_names=dependency_names,
            readme_excerpt=readme[: self.readme_char_limit],
        )

    def _read_package_json(self, root: Path) -> Optional[dict]:
        package_json = root / "package.json"
        if not package_json.exists():
            return None
        try:
            data = json.loads(package_json.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            raise ContextReadError(f"{package_json}: {e}") from e
        if not isinstance(data, dict):
            raise ContextReadError(f"{package_json}: expected a JSON object")
        return data

    def _dependency_names(self, package: dict) -> list[str]:
        """Runtime dependencies first, then dev dependencies, without repeats."""
        names: list[str] = []
        for section in ("dependencies", "devDependencies"):
            deps = package.get(section)
            if not isinstance(deps, dict):
                continue
            for dep in deps:
                if dep not in names:
                    names.append(dep)
        return names

    def _read_readme(self, root: Path) -> Optional[str]:
        for readme_name in README_NAMES:
            readme_path = root / readme_name
            if readme_path.is_file():
                try:
                    return readme_path.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as e:
                    raise ContextReadError(f"{readme_path}: {e}") from e
        return None
