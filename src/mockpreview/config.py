"""Configuration management for mockpreview."""

import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


DEFAULT_MODEL_NAME = "gemini/gemini-2.5-flash"
DEFAULT_RUNTIME_DIR = Path.home() / ".mockpreview" / "runtime"


class Config(BaseModel):
    """Application configuration."""

    # LLM Settings
    model_name: str = Field(default=DEFAULT_MODEL_NAME)
    api_key: Optional[str] = Field(default=None)
    api_base_url: Optional[str] = Field(default=None)
    timeout: int = Field(default=60)

    # Analysis Settings
    request_delay: float = Field(default=4.0)
    readme_char_limit: int = Field(default=3000)
    analyze_network: bool = Field(default=True)
    analysis_path: Path = Field(default=Path("analysis.json"))

    # Scaffold / Build Settings
    output_dir: Path = Field(default=Path("."))
    runtime_dir: Path = Field(default=DEFAULT_RUNTIME_DIR)  # mockpreview's own UI packages
    bundler_command: str = Field(default="npx vite")
    npm_command: str = Field(default="npm")
    build_dir: str = Field(default="preview-dist")

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        def _parse_int(value: Optional[str], fallback: int) -> int:
            try:
                return int(value) if value is not None else fallback
            except ValueError:
                return fallback

        def _parse_float(value: Optional[str], fallback: float) -> float:
            try:
                return float(value) if value is not None else fallback
            except ValueError:
                return fallback

        def _parse_bool(value: Optional[str], fallback: bool) -> bool:
            if value is None:
                return fallback
            return value.strip().lower() not in {"0", "false", "no", "off"}

        runtime_dir_env = os.getenv("PREVIEW_RUNTIME_DIR")

        return cls(
            model_name=os.getenv("MODEL_NAME", DEFAULT_MODEL_NAME),
            api_key=os.getenv("GEMINI_API_KEY") or os.getenv("LLM_API_KEY"),
            api_base_url=os.getenv("LLM_BASE_URL"),
            timeout=_parse_int(os.getenv("LLM_TIMEOUT"), 60),
            request_delay=_parse_float(os.getenv("ANALYSIS_DELAY"), 4.0),
            readme_char_limit=_parse_int(os.getenv("README_CHAR_LIMIT"), 3000),
            analyze_network=_parse_bool(os.getenv("ANALYZE_NETWORK"), True),
            analysis_path=Path(os.getenv("ANALYSIS_PATH", "analysis.json")),
            output_dir=Path(os.getenv("PREVIEW_OUTPUT_DIR", ".")),
            runtime_dir=Path(runtime_dir_env) if runtime_dir_env else DEFAULT_RUNTIME_DIR,
            bundler_command=os.getenv("BUNDLER_COMMAND", "npx vite"),
            npm_command=os.getenv("NPM_COMMAND", "npm"),
            build_dir=os.getenv("PREVIEW_BUILD_DIR", "preview-dist"),
        )
