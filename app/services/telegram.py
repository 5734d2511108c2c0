import httpx, logging
from typing import Dict, Optional, Union
from app.core.config import Settings, get_settings
logger = logging.getLogger(__name__)

class TelegramAPIError(Exception):
    """Error al llamar a la Bot API de Telegram."""

class TelegramClient:
    """
    Encapsula las llamadas a la Bot API.
    Responsabilidad única: enviar mensajes salientes y responder callbacks.
    """
    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        settings = settings or get_settings()
        self.url = f"{settings.TELEGRAM_API_URL}/bot{settings.TELEGRAM_BOT_TOKEN}"
        self.transport = transport

    async def _call(self, method: str, payload: Dict) -> Dict:
        async with httpx.AsyncClient(timeout=10, transport=self.transport) as client:
            try:
                r = await client.post(f"{self.url}/{method}", json=payload)
                r.raise_for_status()
            except httpx.HTTPStatusError as exc:
                logger.error("TG %s %s – %s", method, exc.response.status_code, exc.response.text)
                # Propaga un error de dominio, no el de httpx
                raise TelegramAPIError(exc.response.text) from exc
            except httpx.RequestError as exc:
                logger.error("TG %s – error de conexión: %s", method, exc)
                raise TelegramAPIError(str(exc)) from exc

        body = r.json()
        if not body.get("ok", False):
            logger.error("TG %s – respuesta no ok: %s", method, body)
            raise TelegramAPIError(body.get("description", "respuesta no ok"))
        return body

    async def send_message(
        self,
        chat_id: Union[int, str],
        text: str,
        parse_mode: Optional[str] = None,
        reply_markup: Optional[Dict] = None
    ) -> Dict:
        """
        Envía un mensaje de texto, opcionalmente con un teclado de respuesta.

        Args:
            chat_id: Chat destino
            text: Cuerpo del mensaje
            parse_mode: "HTML" para respuestas con formato (opcional)
            reply_markup: Teclado a mostrar (opcional)
        """
        payload = {"chat_id": chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        if reply_markup:
            payload["reply_markup"] = reply_markup

        body = await self._call("sendMessage", payload)
        logger.debug(f"[TG] Mensaje enviado a {chat_id} (teclado: {bool(reply_markup)})")
        return body

    async def answer_callback_query(self, callback_query_id: str, text: Optional[str] = None) -> Dict:
        """Confirma un callback para que el cliente deje de mostrar el indicador de carga."""
        payload = {"callback_query_id": callback_query_id}
        if text:
            payload["text"] = text
        return await self._call("answerCallbackQuery", payload)

    async def set_webhook(self, url: str, secret_token: Optional[str] = None) -> Dict:
        """Registra la URL del webhook en Telegram."""
        payload = {"url": url, "allowed_updates": ["message", "callback_query"]}
        if secret_token:
            payload["secret_token"] = secret_token
        return await self._call("setWebhook", payload)
