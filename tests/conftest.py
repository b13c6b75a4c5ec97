"""Shared pytest fixtures for fb tests."""

from pathlib import Path

import pytest
import questionary

from fb.config.settings import ENV_OVERRIDES, Settings
from fb.integrations.client import FlowBoardsClient
from fb.integrations.ticket_service import TicketService, create_ticket_service
from fb.utils.logging import setup_logging
from tests.fakes.fake_flowboards import FakeFlowBoards, make_client
from tests.fakes.fake_prompts import ScriptedAnswers

CONFIG_YAML = """auth_key: test-key
org_id: org-1
user_email: dev@example.com
"""


@pytest.fixture(autouse=True)
def clear_fb_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's FB_* variables out of tests."""
    for env_key in [*ENV_OVERRIDES, "FB_HOME"]:
        monkeypatch.delenv(env_key, raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers a test attached to the fb logger."""
    yield
    setup_logging()


@pytest.fixture
def settings() -> Settings:
    return Settings(auth_key="test-key", org_id="org-1", user_email="dev@example.com")


@pytest.fixture
def fake_api() -> FakeFlowBoards:
    return FakeFlowBoards()


@pytest.fixture
def api_client(fake_api: FakeFlowBoards) -> FlowBoardsClient:
    return make_client(fake_api)


@pytest.fixture
def ticket_service(settings: Settings, api_client: FlowBoardsClient) -> TicketService:
    return create_ticket_service(settings, client=api_client)


@pytest.fixture
def fb_home(tmp_path: Path) -> Path:
    """Base directory with a valid config.yaml."""
    home = tmp_path / ".fb"
    home.mkdir()
    (home / "config.yaml").write_text(CONFIG_YAML)
    return home


@pytest.fixture
def answers(monkeypatch: pytest.MonkeyPatch):
    """Replace questionary.text with scripted answers.

    Usage: script = answers("1", "Looks good")
    """

    def install(*replies: str) -> ScriptedAnswers:
        script = ScriptedAnswers(*replies)
        monkeypatch.setattr(questionary, "text", script)
        return script

    return install
