# ==============================================================================
# REPOSITORIO DE CONFIGURACIONES DEL PUESTO
# ==============================================================================
# Tasa de cambio (string decimal) y logo (data URI o URL), cada uno bajo su
# propia clave.
# ==============================================================================

import logging
import math

from dolce_pos import config
from dolce_pos.repositories.interfaces import IKeyValueStorage

logger = logging.getLogger(__name__)


class SettingsRepository:
    """
    Repositorio para la tasa del día y el logo.

    Formato guardado:
        dolce_exchange_rate -> "45.5"
        dolce_fusion_logo   -> "data:image/png;base64,..."
    """

    def __init__(
        self,
        storage: IKeyValueStorage,
        rate_key: str = config.RATE_KEY,
        logo_key: str = config.LOGO_KEY
    ):
        """
        Args:
            storage: Almacenamiento inyectado
            rate_key: Clave de la tasa de cambio
            logo_key: Clave del logo
        """
        self.storage = storage
        self.rate_key = rate_key
        self.logo_key = logo_key

    def get_exchange_rate(self) -> float:
        """
        Obtiene la tasa guardada.

        Returns:
            Tasa positiva; la tasa por defecto si no hay una válida
        """
        raw = self.storage.load(self.rate_key)
        if raw is None:
            return config.DEFAULT_EXCHANGE_RATE
        try:
            rate = float(raw)
        except (TypeError, ValueError):
            logger.warning("[TASA] Valor guardado inválido %r, usando %s",
                           raw, config.DEFAULT_EXCHANGE_RATE)
            return config.DEFAULT_EXCHANGE_RATE
        if not math.isfinite(rate) or rate <= 0:
            logger.warning("[TASA] Valor guardado fuera de rango %r", raw)
            return config.DEFAULT_EXCHANGE_RATE
        return rate

    def set_exchange_rate(self, rate: float) -> None:
        """Guarda la tasa como string decimal."""
        self.storage.save(self.rate_key, repr(float(rate)))

    def get_logo(self) -> str:
        """Obtiene el logo guardado o la imagen por defecto."""
        raw = self.storage.load(self.logo_key)
        if isinstance(raw, str) and raw.strip():
            return raw
        return config.DEFAULT_LOGO_URL

    def set_logo(self, logo: str) -> None:
        self.storage.save(self.logo_key, logo)
