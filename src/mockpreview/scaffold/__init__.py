"""Preview project scaffolding: entry modules, dashboard and bundler config."""

from .generator import PreviewScaffold, ScaffoldGenerator, safe_name_for
from .dashboard import DashboardAssembler, DashboardFiles
from .bundler import ViteBundler, DASHBOARD_INPUT_KEY
from .interceptor import match_network_mock

__all__ = [
    "PreviewScaffold",
    "ScaffoldGenerator",
    "safe_name_for",
    "DashboardAssembler",
    "DashboardFiles",
    "ViteBundler",
    "DASHBOARD_INPUT_KEY",
    "match_network_mock",
]
