"""Pytest configuration and shared fixtures."""

import io
import json
import pytest
from pathlib import Path
from typing import Optional
from rich.console import Console
from mockpreview.config import Config
from mockpreview.llm.provider import LLMProvider, LLMResponse


USER_CARD_SOURCE = """import { Link } from 'react-router-dom';

export default function UserCard({ user, tags }) {
  return (
    <div className="card">
      <img src={user.avatar} alt={user.name} />
      <Link to={`/users/${user.id}`}>{user.name}</Link>
      <ul>{tags.map((t) => <li key={t}>{t}</li>)}</ul>
    </div>
  );
}
"""

USER_CARD_RESPONSE = {
    "props": {
        "user": {"id": 7, "name": "Ada Lovelace", "avatar": "https://picsum.photos/seed/ada/200/200"},
        "tags": ["math", "engines", "poetry"],
    },
    "wrappers": {"router": True, "redux": False, "query": False},
    "networkMocks": [],
}


class MockLLMProvider(LLMProvider):
    """Mock LLM for testing.

    Returns queued responses in order; queued exceptions are raised instead.
    """

    def __init__(self, responses: Optional[list] = None, default: str = '{"props": {}}'):
        self.model_name = "mock-model"
        self.responses = list(responses or [])
        self.default = default
        self.prompts: list[str] = []
        self.systems: list[Optional[str]] = []

    def generate(self, prompt: str, system: Optional[str] = None) -> LLMResponse:
        self.prompts.append(prompt)
        self.systems.append(system)
        content = self.responses.pop(0) if self.responses else self.default
        if isinstance(content, Exception):
            raise content
        return LLMResponse(content=content, model=self.model_name)


@pytest.fixture
def mock_llm_class():
    """Expose the mock provider class to tests."""
    return MockLLMProvider


@pytest.fixture
def quiet_console() -> Console:
    """Console writing to memory so progress output stays out of test logs."""
    return Console(file=io.StringIO(), force_terminal=False)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Create a small React project with one component and a stylesheet."""
    project = tmp_path / "shop"
    (project / "src").mkdir(parents=True)

    package_json = {
        "name": "shop-frontend",
        "description": "Storefront for a bike shop",
        "dependencies": {"react": "^18.2.0", "react-router-dom": "^6.22.0"},
        "devDependencies": {"vite": "^5.0.0"},
    }
    (project / "package.json").write_text(json.dumps(package_json))
    (project / "README.md").write_text("# Shop\n\nSells bikes and parts.")
    (project / "src" / "UserCard.jsx").write_text(USER_CARD_SOURCE)
    (project / "src" / "index.css").write_text("body { margin: 0; }")

    return project


@pytest.fixture
def user_card_response() -> str:
    """A well-formed model response for the UserCard component."""
    return json.dumps(USER_CARD_RESPONSE)


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Provide a test configuration."""
    return Config(
        model_name="gemini/gemini-2.5-flash",
        api_key="test-key",
        request_delay=0,
        analysis_path=tmp_path / "analysis.json",
        output_dir=tmp_path / "previews",
    )
