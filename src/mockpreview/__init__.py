"""mockpreview - Generate mock data and isolated previews for UI components."""

__version__ = "0.1.0"

from .config import Config
from .models import (
    ProjectContext,
    AnalysisRequest,
    NetworkMock,
    ComponentAnalysis,
    PreviewEntry,
    AnalysisReport,
)
from .analyzer.batch import BatchAnalyzer
from .scaffold import ScaffoldGenerator, DashboardAssembler, ViteBundler

__all__ = [
    "Config",
    "ProjectContext",
    "AnalysisRequest",
    "NetworkMock",
    "ComponentAnalysis",
    "PreviewEntry",
    "AnalysisReport",
    "BatchAnalyzer",
    "ScaffoldGenerator",
    "DashboardAssembler",
    "ViteBundler",
]
