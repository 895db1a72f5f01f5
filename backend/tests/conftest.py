import base64
from io import BytesIO
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.core.config.environment_config import EnvironmentConfig
from app.core.di.service_locator import ServiceLocator
from app.domain.exceptions import CaptionGatewayError
from app.domain.repositories.caption_repository import CaptionRepository
from app.presentation.api.main import create_app


class FakeCaptionRepository(CaptionRepository):
    """Returns a canned caption or raises a preset gateway error."""

    def __init__(self, caption: str = "", error: Optional[CaptionGatewayError] = None) -> None:
        self.caption = caption
        self.error = error
        self.calls: List[dict] = []

    def generate(self, image_data_uri: str, prompt: str) -> str:
        self.calls.append({"image": image_data_uri, "prompt": prompt})
        if self.error is not None:
            raise self.error
        return self.caption


@pytest.fixture
def png_data_uri() -> str:
    buf = BytesIO()
    Image.new("RGB", (4, 4), color=(255, 200, 0)).save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture
def config() -> EnvironmentConfig:
    return EnvironmentConfig(caption_history_limit=3)


@pytest.fixture
def fake_repo() -> FakeCaptionRepository:
    return FakeCaptionRepository(
        caption="**Option 1 (Playful):**\nLiving for golden hour.\n\n**Option 2 (Short):**\nSun. Smiles. Repeat."
    )


@pytest.fixture
def client(config, fake_repo) -> TestClient:
    locator = ServiceLocator(config=config, caption_repo=fake_repo)
    return TestClient(create_app(locator=locator))


@pytest.fixture
def make_client():
    """Build a TestClient around a fake repository (or one passed in)."""

    def build(repo: Optional[CaptionRepository] = None, config: Optional[EnvironmentConfig] = None, **repo_kwargs):
        locator = ServiceLocator(
            config=config or EnvironmentConfig(),
            caption_repo=repo or FakeCaptionRepository(**repo_kwargs),
        )
        return TestClient(create_app(locator=locator))

    return build
