"""Tests del cliente de la Bot API usando un transporte simulado de httpx."""

import json
import httpx
import pytest

from app.services.telegram import TelegramAPIError, TelegramClient


def _recording_transport(calls, response=None):
    def handler(request):
        calls.append((request.url.path, json.loads(request.content)))
        return response or httpx.Response(200, json={"ok": True, "result": {}})
    return httpx.MockTransport(handler)


@pytest.mark.asyncio
async def test_send_message_with_keyboard(settings):
    calls = []
    client = TelegramClient(settings, transport=_recording_transport(calls))
    markup = {"keyboard": [[{"text": "Hours"}]], "resize_keyboard": True, "one_time_keyboard": False}

    await client.send_message(10, "Choose an option:", reply_markup=markup)

    path, payload = calls[0]
    assert path == "/bottest-token/sendMessage"
    assert payload == {"chat_id": 10, "text": "Choose an option:", "reply_markup": markup}


@pytest.mark.asyncio
async def test_send_message_html(settings):
    calls = []
    client = TelegramClient(settings, transport=_recording_transport(calls))
    await client.send_message("10", "<b>9-5</b>", parse_mode="HTML")
    assert calls[0][1] == {"chat_id": "10", "text": "<b>9-5</b>", "parse_mode": "HTML"}


@pytest.mark.asyncio
async def test_answer_callback_query(settings):
    calls = []
    client = TelegramClient(settings, transport=_recording_transport(calls))
    await client.answer_callback_query("cb-1", "Success!")
    assert calls[0] == ("/bottest-token/answerCallbackQuery", {"callback_query_id": "cb-1", "text": "Success!"})


@pytest.mark.asyncio
async def test_set_webhook_with_secret(settings):
    calls = []
    client = TelegramClient(settings, transport=_recording_transport(calls))
    await client.set_webhook("https://bot.test/webhook", "s3cret")
    assert calls[0][1]["url"] == "https://bot.test/webhook"
    assert calls[0][1]["secret_token"] == "s3cret"


@pytest.mark.asyncio
async def test_http_error_raises_domain_error(settings):
    calls = []
    response = httpx.Response(403, json={"ok": False, "description": "Forbidden: bot was blocked by the user"})
    client = TelegramClient(settings, transport=_recording_transport(calls, response))
    with pytest.raises(TelegramAPIError):
        await client.send_message(10, "hi")


@pytest.mark.asyncio
async def test_not_ok_body_raises(settings):
    calls = []
    response = httpx.Response(200, json={"ok": False, "description": "Bad Request"})
    client = TelegramClient(settings, transport=_recording_transport(calls, response))
    with pytest.raises(TelegramAPIError, match="Bad Request"):
        await client.send_message(10, "hi")
