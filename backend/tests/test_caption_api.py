from fastapi.testclient import TestClient

from app.core.config.environment_config import EnvironmentConfig
from app.core.di.service_locator import ServiceLocator
from app.domain.exceptions import InvalidInputError, NotConfiguredError, ProviderFailureError
from app.domain.prompts import DEFAULT_CAPTION_PROMPT
from app.domain.repositories.caption_repository import CaptionRepository
from app.presentation.api.main import create_app


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


# --- /api/caption (gateway contract) ---

def test_gateway_returns_raw_caption(client, fake_repo, png_data_uri):
    resp = client.post("/api/caption", json={"image": png_data_uri, "prompt": "Be fun"})

    assert resp.status_code == 200
    assert resp.json() == {"caption": fake_repo.caption}
    assert fake_repo.calls == [{"image": png_data_uri, "prompt": "Be fun"}]


def test_gateway_uses_default_prompt(client, fake_repo, png_data_uri):
    client.post("/api/caption", json={"image": png_data_uri, "prompt": "  "})
    assert fake_repo.calls[0]["prompt"] == DEFAULT_CAPTION_PROMPT


def test_gateway_missing_image_is_bad_request(client, fake_repo):
    resp = client.post("/api/caption", json={"prompt": "x"})
    assert resp.status_code == 400
    assert "error" in resp.json()
    assert fake_repo.calls == []


def test_gateway_not_configured_is_503(make_client, png_data_uri):
    client = make_client(error=NotConfiguredError("Server not configured: missing GEMINI_API_KEY"))
    resp = client.post("/api/caption", json={"image": png_data_uri, "prompt": "x"})
    assert resp.status_code == 503
    assert resp.json() == {"error": "Server not configured: missing GEMINI_API_KEY"}


def test_gateway_provider_failure_is_500(make_client, png_data_uri):
    client = make_client(error=ProviderFailureError("Gemini API error 500"))
    resp = client.post("/api/caption", json={"image": png_data_uri, "prompt": "x"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Gemini API error 500"}


def test_gateway_unexpected_error_is_generic_500(make_client, png_data_uri):
    class Boom(CaptionRepository):
        def generate(self, image_data_uri, prompt):
            raise KeyError("boom")

    resp = make_client(repo=Boom()).post("/api/caption", json={"image": png_data_uri, "prompt": "x"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate caption"}


def test_gateway_without_key_and_mock_enabled_uses_real_client(png_data_uri):
    locator = ServiceLocator(config=EnvironmentConfig(gemini_api_key="", mock_caption=True))
    client = TestClient(create_app(locator=locator))
    resp = client.post("/api/caption", json={"image": png_data_uri, "prompt": "x"})
    assert resp.status_code == 200
    assert resp.json()["caption"].startswith("Playful vibes:")


def test_gateway_without_key_is_503(png_data_uri):
    client = TestClient(create_app(config=EnvironmentConfig(gemini_api_key="")))
    resp = client.post("/api/caption", json={"image": png_data_uri, "prompt": "x"})
    assert resp.status_code == 503


# --- /api/v1/caption ---

def test_generate_returns_parsed_options_with_share_links(client, png_data_uri):
    resp = client.post("/api/v1/caption/generate", json={"image": png_data_uri})

    assert resp.status_code == 200
    body = resp.json()
    assert body["id"].startswith("caption-")
    assert body["strategy"] == "blank_lines"
    assert [o["text"] for o in body["options"]] == ["Living for golden hour.", "Sun. Smiles. Repeat."]
    assert body["options"][1]["share_url"] == "https://wa.me/?text=Sun.%20Smiles.%20Repeat."
    assert "Option 1" in body["raw"]


def test_generate_maps_gateway_errors_to_status(make_client, png_data_uri):
    client = make_client(error=InvalidInputError("Image payload could not be decoded"))
    resp = client.post("/api/v1/caption/generate", json={"image": png_data_uri})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Image payload could not be decoded"


def test_parse_endpoint(make_client):
    client = make_client()
    resp = client.post("/api/v1/caption/parse", json={"text": "1. Beach day bliss\n2. Sandy toes, sun-kissed nose"})

    assert resp.status_code == 200
    assert resp.json() == {
        "options": ["Beach day bliss", "Sandy toes, sun-kissed nose"],
        "strategy": "option_headers",
    }


def test_parse_endpoint_empty_text(make_client):
    client = make_client()
    resp = client.post("/api/v1/caption/parse", json={"text": ""})
    assert resp.json()["options"] == [""]


def test_history_is_newest_first_bounded_and_clearable(client, fake_repo, png_data_uri):
    ids = []
    for caption in ("First.", "Second.", "Third.", "Fourth."):
        fake_repo.caption = caption
        ids.append(client.post("/api/v1/caption/generate", json={"image": png_data_uri}).json()["id"])

    history = client.get("/api/v1/caption/history").json()
    # caption_history_limit=3 in the test config
    assert [r["id"] for r in history] == list(reversed(ids))[:3]
    assert [r["raw"] for r in history] == ["Fourth.", "Third.", "Second."]

    assert client.delete("/api/v1/caption/history").status_code == 204
    assert client.get("/api/v1/caption/history").json() == []


def test_gateway_requests_are_not_recorded(client, png_data_uri):
    client.post("/api/caption", json={"image": png_data_uri, "prompt": "x"})
    assert client.get("/api/v1/caption/history").json() == []
