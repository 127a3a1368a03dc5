"""Core data models for mockpreview."""

from pathlib import Path, PurePath
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


TYPED_EXTENSIONS = {".ts", ".tsx"}


class ProjectContext(BaseModel):
    """Project-level grounding shared by every per-file analysis."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    dependency_names: List[str] = Field(default_factory=list)
    readme_excerpt: str = ""


class AnalysisRequest(BaseModel):
    """One component file queued for analysis."""

    file_path: str
    filename: str
    source_text: str
    is_typed_variant: bool = False

    @classmethod
    def from_path(cls, file_path: str, source_text: str) -> "AnalysisRequest":
        path = PurePath(file_path)
        return cls(
            file_path=file_path,
            filename=path.name,
            source_text=source_text,
            is_typed_variant=path.suffix.lower() in TYPED_EXTENSIONS,
        )


class NetworkMock(BaseModel):
    """A canned response for requests whose URL contains ``url_pattern``.

    Built from a raw ``networkMocks`` entry for matching on the Python side.
    Fields are read as given; a missing or non-string pattern never matches.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    url_pattern: Any = Field(default=None, alias="urlPattern")
    method: Any = "GET"
    response: Any = None


class ComponentAnalysis(BaseModel):
    """Model output for a single component, stored exactly as parsed.

    Only the presence of ``props`` is required. Values are never validated or
    coerced, so ``to_json_dict`` writes back the object that was received.
    The accessor methods give lenient typed views for scaffolding.
    """

    model_config = ConfigDict(extra="allow")

    props: Any
    wrappers: Any = Field(default_factory=dict)
    network_mocks: Any = Field(default_factory=list, alias="networkMocks")

    @classmethod
    def fallback(cls) -> "ComponentAnalysis":
        """The empty-but-valid record used when a file cannot be analyzed."""
        return cls.model_validate({"props": {}, "wrappers": {}, "networkMocks": []})

    def prop_values(self) -> Dict[str, Any]:
        """Props as a mapping; anything else renders without props."""
        return self.props if isinstance(self.props, dict) else {}

    def wrapper_flags(self) -> Dict[str, Any]:
        return self.wrappers if isinstance(self.wrappers, dict) else {}

    def needs_wrapper(self, kind: str) -> bool:
        """Truthiness of the wrapper flag, so ``null`` is off and ``"yes"`` is on."""
        return bool(self.wrapper_flags().get(kind))

    def mock_entries(self) -> List[Dict[str, Any]]:
        """Raw network mock objects in order, skipping entries that are not objects."""
        if not isinstance(self.network_mocks, list):
            return []
        return [entry for entry in self.network_mocks if isinstance(entry, dict)]

    def network_mock_list(self) -> List[NetworkMock]:
        return [NetworkMock.model_validate(entry) for entry in self.mock_entries()]

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


# Ordered mapping of original file path -> analysis, in input order.
AnalysisArtifact = Dict[str, ComponentAnalysis]


class PreviewEntry(BaseModel):
    """Generated preview files for one analyzed component."""

    safe_name: str
    entry_script_path: Path
    host_page_path: Path
    original_path: str

    @property
    def url(self) -> str:
        return f"/{self.host_page_path.name}"

    def to_manifest(self) -> Dict[str, str]:
        return {"name": self.safe_name, "url": self.url, "originalPath": self.original_path}


class FileOutcome(BaseModel):
    """What happened to one requested file during a batch run."""

    path: str
    status: str  # "ok", "fallback", "error" or "skipped"
    message: Optional[str] = None


class AnalysisReport(BaseModel):
    """Result of a batch run: the artifact plus per-file outcomes."""

    artifact: AnalysisArtifact = Field(default_factory=dict)
    outcomes: List[FileOutcome] = Field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def failures(self) -> List[FileOutcome]:
        return [o for o in self.outcomes if o.status in ("fallback", "error")]
