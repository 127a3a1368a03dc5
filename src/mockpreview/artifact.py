"""Reading and writing the analysis artifact (``analysis.json``)."""

import json
import logging
from pathlib import Path
from pydantic import ValidationError
from .errors import ArtifactFormatError, ArtifactMissingError
from .models import AnalysisArtifact, ComponentAnalysis

logger = logging.getLogger(__name__)


def save_artifact(artifact: AnalysisArtifact, path: Path) -> Path:
    """Write the whole artifact as pretty-printed JSON, replacing any old file."""
    payload = {file_path: analysis.to_json_dict() for file_path, analysis in artifact.items()}
    path = Path(path)
    if path.parent != Path("."):
        path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    logger.debug("Wrote %d analysis entries to %s", len(payload), path)
    return path


def load_artifact(path: Path) -> AnalysisArtifact:
    """Load an artifact written by ``save_artifact``.

    Raises:
        ArtifactMissingError: If the file does not exist
        ArtifactFormatError: If the file is not a JSON object of analyses
    """
    path = Path(path)
    if not path.exists():
        raise ArtifactMissingError(path)

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        raise ArtifactFormatError(f"Could not read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ArtifactFormatError(f"{path} must contain a JSON object keyed by file path")

    artifact: AnalysisArtifact = {}
    for file_path, entry in data.items():
        try:
            artifact[file_path] = ComponentAnalysis.model_validate(entry)
        except ValidationError as e:
            raise ArtifactFormatError(f"Invalid analysis for {file_path} in {path}: {e}") from e
    return artifact
