"""Request handling for the browser extension's background worker."""

import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel

from ..errors import TrustLensError
from ..models.reliability import Badge
from .classifier import badge_for
from .domain_names import normalize_domain
from .engagement_log import EngagementLog
from .fallback_resolver import FallbackResolver

logger = logging.getLogger(__name__)


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_dump(item) for item in value]
    if isinstance(value, dict):
        return {key: _dump(item) for key, item in value.items()}
    return value


class ExtensionMessageHandler:
    """Dispatch extension messages by their ``action`` field.

    Responses are JSON-ready dictionaries, the way the popup and content
    scripts consume them.
    """

    def __init__(self, resolver: FallbackResolver, engagement: EngagementLog):
        """Initialize the handler.

        Args:
            resolver: Rating resolver
            engagement: Engagement history
        """
        self._resolver = resolver
        self._engagement = engagement
        self._actions = {
            "getDomainRating": self._get_domain_rating,
            "getWeeklySummary": self._get_weekly_summary,
            "logEngagement": self._log_engagement,
            "getStats": self._get_stats,
            "testConnection": self._test_connection,
            "setLogging": self._set_logging,
        }

    async def handle(self, message: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        """Answer one message.

        Args:
            message: Message with an ``action`` key plus action arguments

        Returns:
            Response payload; ``getDomainRating`` answers None when no
            rating exists
        """
        action = (message or {}).get("action")
        handler = self._actions.get(action)
        if handler is None:
            logger.debug(f"Unknown extension action: {action!r}")
            return {"ok": False, "error": f"Unknown action: {action}"}

        try:
            return await handler(message)
        except TrustLensError as e:
            logger.warning(f"⚠️ Extension action {action} failed: {e.message}")
            return {"ok": False, "error": e.message}

    async def _get_domain_rating(self, message: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        resolved = await self._resolver.resolve(message.get("domain"))
        return _dump(resolved) if resolved is not None else None

    async def _get_weekly_summary(self, message: Mapping[str, Any]) -> Dict[str, Any]:
        return _dump(self._engagement.weekly_summary())

    async def _log_engagement(self, message: Mapping[str, Any]) -> Dict[str, Any]:
        return self._engagement.log_engagement(message.get("payload") or {})

    async def _get_stats(self, message: Mapping[str, Any]) -> Dict[str, Any]:
        return _dump(await self._resolver.get_stats())

    async def _test_connection(self, message: Mapping[str, Any]) -> Dict[str, Any]:
        return _dump(await self._resolver.check_connection())

    async def _set_logging(self, message: Mapping[str, Any]) -> Dict[str, Any]:
        self._engagement.set_enabled(bool(message.get("enabled")))
        return {"ok": True, "enabled": self._engagement.enabled}

    async def check_page(self, url: str) -> Optional[Badge]:
        """Rate the page a tab finished loading.

        Logs an engagement when the page's domain has a rating.

        Args:
            url: Page URL

        Returns:
            Badge to show on the toolbar icon, or None to clear it
        """
        domain = normalize_domain(url)
        resolved = await self._resolver.resolve(domain)
        if resolved is None:
            return None

        self._engagement.record_visit(resolved.domain, resolved.rating)
        return badge_for(resolved.rating)
