"""Unit tests for v0 UI generation."""

import json

import httpx
import pytest

from prole_cli.configuration.exceptions import V0ApiError
from prole_cli.v0.client import V0Client
from prole_cli.v0.models import V0Chat
from prole_cli.v0.prompts import (
    BUILTIN_TEMPLATES,
    TECHNICAL_REQUIREMENTS,
    fetch_prompt_template,
    list_prompt_templates,
    merge_prompt_with_template,
)

CHAT_RESPONSE = {
    "id": "chat-1",
    "webUrl": "https://v0.dev/chat/chat-1",
    "latestVersion": {
        "demoUrl": "https://demo.v0.dev/chat-1",
        "files": [
            {"name": "app/page.tsx", "content": "export default function Page() {}"},
            {"name": "components/login-form.tsx", "content": "export function LoginForm() {}"},
            {"name": "styles.css", "content": "body {}"},
        ],
    },
}

FORM_TEMPLATE = """# Form template

Use this prompt:

```
「{コンポーネント名}」フォームを作成してください。

- {機能1}
- {機能2}
- {機能3}

- {レイアウト}
- {配色（CSS変数使用）}
```
"""


def test_chat_model_extracts_components() -> None:
    """Only .tsx files other than pages are treated as components."""
    chat = V0Chat.model_validate(CHAT_RESPONSE)
    assert chat.demo_url == "https://demo.v0.dev/chat-1"
    assert chat.web_url == "https://v0.dev/chat/chat-1"
    assert [f.name for f in chat.component_files] == ["components/login-form.tsx"]


def test_chat_model_without_version() -> None:
    """A chat without a version has no demo or components."""
    chat = V0Chat.model_validate({"id": "chat-2"})
    assert chat.demo_url is None
    assert chat.component_files == []


def test_create_chat_success() -> None:
    """The prompt is posted with bearer authentication."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=CHAT_RESPONSE)

    client = V0Client(api_key="secret", base_url="https://api.v0.test/v1/", transport=httpx.MockTransport(handler))
    chat = client.create_chat("login form")

    assert chat.id == "chat-1"
    [request] = seen
    assert request.method == "POST"
    assert str(request.url) == "https://api.v0.test/v1/chats"
    assert request.headers["Authorization"] == "Bearer secret"
    assert json.loads(request.content) == {"message": "login form"}


@pytest.mark.parametrize(
    "response,expected_message",
    [
        (httpx.Response(401, json={"message": "Invalid API key"}), "Invalid API key"),
        (httpx.Response(500, json={"error": "boom"}), "API error: 500"),
        (httpx.Response(502, text="<html>bad gateway</html>"), "API error: 502"),
    ],
)
def test_create_chat_error_response(response: httpx.Response, expected_message: str) -> None:
    """Non-2xx responses raise V0ApiError with the API's message when it has one."""
    client = V0Client(api_key="secret", transport=httpx.MockTransport(lambda request: response))
    with pytest.raises(V0ApiError) as exc_info:
        client.create_chat("login form")
    assert str(exc_info.value) == expected_message
    assert exc_info.value.status_code == response.status_code


def test_create_chat_transport_error() -> None:
    """Network failures raise V0ApiError without a status code."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    client = V0Client(api_key="secret", transport=httpx.MockTransport(handler))
    with pytest.raises(V0ApiError) as exc_info:
        client.create_chat("login form")
    assert exc_info.value.status_code is None


def test_merge_prompt_with_template_fills_placeholders() -> None:
    """The template's code block is filled with the prompt and quotes removed."""
    merged = merge_prompt_with_template("login form", FORM_TEMPLATE)
    assert merged == (
        "login formフォームを作成してください。\n\n"
        "- Main features of login form\n\n"
        "- Modern layout\n- Colors from CSS variables\n"
    )


def test_merge_prompt_with_template_without_code_block() -> None:
    """Templates without a code block append the technical requirements."""
    assert merge_prompt_with_template("login form", "# Notes only") == f"login form\n\n{TECHNICAL_REQUIREMENTS}"


@pytest.mark.asyncio
async def test_fetch_prompt_template(make_template_source) -> None:
    """Templates are read from the v0-templates directory; missing ones are None."""
    source = make_template_source({"v0-templates/form.md": FORM_TEMPLATE})
    assert await fetch_prompt_template(source, "form") == FORM_TEMPLATE
    assert await fetch_prompt_template(source, "table") is None


@pytest.mark.asyncio
async def test_list_prompt_templates_from_organization(make_template_source) -> None:
    """Remote templates are listed, described from the built-in list when known."""
    source = make_template_source(
        {
            "v0-templates/README.md": "",
            "v0-templates/form.md": FORM_TEMPLATE,
            "v0-templates/wizard.md": "wizard",
        }
    )
    templates, from_org = await list_prompt_templates(source)
    assert from_org is True
    assert templates[0] == BUILTIN_TEMPLATES["form"]
    assert (templates[1].name, templates[1].description) == ("wizard", "Custom template")


@pytest.mark.asyncio
async def test_list_prompt_templates_offline(offline_source) -> None:
    """The built-in list is used when the organization repository is unreachable."""
    templates, from_org = await list_prompt_templates(offline_source)
    assert from_org is False
    assert [info.name for info in templates] == ["base", "form", "table", "card", "dashboard", "empty-state"]
