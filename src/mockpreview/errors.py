"""Exception hierarchy for mockpreview.

Fatal errors (configuration, missing artifact, bundler) stop the CLI with a
non-zero exit. Per-file errors (context, model, response format) are caught
by the batch analyzer and turned into fallback entries.
"""


class MockPreviewError(Exception):
    """Base class for all mockpreview errors."""


class ConfigurationError(MockPreviewError):
    """Raised when required configuration (API key, input files) is missing."""


class ContextReadError(MockPreviewError):
    """Raised when project metadata cannot be read or parsed."""


class ModelInvocationError(MockPreviewError, RuntimeError):
    """Raised when a single model call fails at the transport or API level."""


class ResponseFormatError(MockPreviewError, ValueError):
    """Raised when model output is not a usable component analysis."""


class ArtifactMissingError(MockPreviewError):
    """Raised when the build phase runs without an analysis artifact."""

    def __init__(self, path):
        super().__init__(
            f"Analysis file not found: {path}. Run `mockpreview analyze` first."
        )
        self.path = path


class ArtifactFormatError(MockPreviewError):
    """Raised when the analysis artifact exists but cannot be loaded."""


class ScaffoldError(MockPreviewError):
    """Raised when preview files cannot be generated."""


class BundlerInvocationError(MockPreviewError):
    """Raised when the external bundler fails or cannot be started."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode
