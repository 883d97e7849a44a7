# ==============================================================================
# SERVICIO DE DESCRIPCIONES - Texto de marketing con Gemini
# ==============================================================================
# Llamada opcional a un servicio externo. Nunca falla hacia el usuario:
# sin API key, con error o con respuesta vacía se devuelve un texto fijo.
# ==============================================================================

import asyncio
import logging
from typing import Any, Dict, Optional

import requests

from dolce_pos import config

logger = logging.getLogger(__name__)

FALLBACK_NO_KEY = "Una deliciosa bebida tradicional preparada con el toque secreto de Dolce Fusión."
FALLBACK_EMPTY = "La bebida más refrescante del evento."
FALLBACK_ERROR = "Sabor venezolano auténtico en cada sorbo."

PROMPT_TEMPLATE = (
    "Eres un experto en marketing gastronómico venezolano. Escribe una frase corta "
    "(máximo 12 palabras) y muy irresistible para vender: {name}. "
    "Debe sonar artesanal y delicioso."
)


class DescriptionService:
    """
    Generador de descripciones de producto.

    La petición HTTP es bloqueante (requests) y se ejecuta en un hilo,
    limitada por un timeout para que quien espera nunca quede colgado.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = config.GEMINI_MODEL,
        timeout: float = config.DESCRIPTION_TIMEOUT,
        session: Optional[requests.Session] = None
    ):
        """
        Args:
            api_key: API key de Gemini (None = siempre texto genérico)
            model: Modelo a usar
            timeout: Segundos máximos de espera por respuesta
            session: Sesión HTTP (inyectable para tests)
        """
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, product_name: str) -> str:
        url = config.GEMINI_ENDPOINT.format(model=self.model)
        payload = {
            'contents': [{'parts': [{'text': PROMPT_TEMPLATE.format(name=product_name)}]}],
        }
        resp = self.session.post(
            url,
            json=payload,
            headers={'x-goog-api-key': self.api_key},
            timeout=self.timeout,
        )
        if resp.status_code >= 400:
            logger.error("[GEMINI] Error %s: %s", resp.status_code, resp.text[:200])
            resp.raise_for_status()
        return self._extract_text(resp.json())

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        candidates = data.get('candidates') or []
        if not candidates:
            return ''
        parts = (candidates[0].get('content') or {}).get('parts') or []
        return ''.join(part.get('text', '') for part in parts).strip()

    async def generate(self, product_name: str) -> str:
        """
        Genera una frase de venta para el producto.

        Returns:
            La frase generada, o un texto fijo si el servicio no está
            disponible, no autoriza, falla o responde vacío
        """
        if not self.api_key:
            logger.warning("[GEMINI] API key no configurada, usando descripción genérica")
            return FALLBACK_NO_KEY

        try:
            text = await asyncio.wait_for(
                asyncio.to_thread(self._request, product_name),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error("[GEMINI] Sin respuesta en %ss", self.timeout)
            return FALLBACK_ERROR
        except Exception as e:
            logger.error("[GEMINI] %s: %s", type(e).__name__, e)
            return FALLBACK_ERROR

        return text or FALLBACK_EMPTY

    async def generate_into(self, draft: 'DescriptionDraft') -> bool:
        """
        Genera la descripción para un borrador de producto.

        Returns:
            True si el texto se aplicó; False si el borrador ya no esperaba
            este resultado (se cerró o se pidió otra generación)
        """
        if not draft.name.strip():
            return False
        token = draft.begin_generation()
        text = await self.generate(draft.name)
        return draft.apply_generated(token, text)


class DescriptionDraft:
    """
    Borrador del formulario de producto mientras se genera su descripción.

    Cada generación recibe un token; un resultado que llega con un token
    viejo, o después de cerrar el borrador, se descarta.
    """

    def __init__(self, name: str = '', description: str = ''):
        self.name = name
        self.description = description
        self.is_generating = False
        self.is_open = True
        self._token = 0

    def begin_generation(self) -> int:
        self._token += 1
        self.is_generating = True
        return self._token

    def apply_generated(self, token: int, text: str) -> bool:
        if not self.is_open or token != self._token:
            return False
        self.description = text
        self.is_generating = False
        return True

    def close(self) -> None:
        """Cierra el formulario: cualquier generación en vuelo queda obsoleta."""
        self.is_open = False
        self.is_generating = False
        self._token += 1
