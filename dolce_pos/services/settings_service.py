# ==============================================================================
# SERVICIO DE CONFIGURACIÓN DEL PUESTO - Tasa del día y logo
# ==============================================================================
# La tasa solo cambia por acción explícita del operador. Cambiarla afecta
# conversiones y ventas FUTURAS; las ventas ya registradas guardan su tasa.
# ==============================================================================

import logging
from typing import Any, Dict

from dolce_pos.repositories.interfaces import ISettingsRepository
from dolce_pos.services.currency_service import parse_rate

logger = logging.getLogger(__name__)


class SettingsService:
    """Servicio para la tasa de cambio vigente y el logo del negocio."""

    def __init__(self, settings_repo: ISettingsRepository):
        self.settings_repo = settings_repo
        self._exchange_rate = settings_repo.get_exchange_rate()
        self._logo = settings_repo.get_logo()

    @property
    def exchange_rate(self) -> float:
        """Bolívares por divisa vigentes."""
        return self._exchange_rate

    @property
    def logo(self) -> str:
        return self._logo

    def update_exchange_rate(self, raw: Any) -> Dict[str, Any]:
        """
        Actualiza la tasa con el valor que escribió el operador.

        Args:
            raw: Valor ingresado (string o número)

        Returns:
            Dict con ok y rate, o ok=False y error (la tasa anterior se mantiene)
        """
        rate = parse_rate(raw)
        if rate is None:
            logger.warning("[TASA] Valor rechazado: %r", raw)
            return {
                'ok': False,
                'error': 'Por favor ingresa una tasa válida',
                'rate': self._exchange_rate,
            }

        self._exchange_rate = rate
        try:
            self.settings_repo.set_exchange_rate(rate)
        except OSError as e:
            logger.error("[TASA] No se pudo guardar la tasa: %s", e)
        logger.info("[TASA] Nueva tasa: %s Bs / 1$", rate)
        return {'ok': True, 'rate': rate}

    def update_logo(self, logo: Any) -> Dict[str, Any]:
        """
        Cambia el logo (data URI o URL).

        Returns:
            Dict con ok, o ok=False y error si el valor está vacío
        """
        if not isinstance(logo, str) or not logo.strip():
            return {'ok': False, 'error': 'Logo inválido'}
        self._logo = logo.strip()
        try:
            self.settings_repo.set_logo(self._logo)
        except OSError as e:
            logger.error("[LOGO] No se pudo guardar el logo: %s", e)
        logger.info("[LOGO] Logo actualizado")
        return {'ok': True}
