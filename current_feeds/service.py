from __future__ import annotations

from datetime import timedelta
from typing import Dict, Iterable, Optional, Tuple

import requests

from .cache import DailyPolicy, DurationPolicy
from .config import FeedConfig
from .providers.base import BaseProvider
from .providers.readhub_provider import ReadhubProvider
from .providers.wikinews_provider import WikiNewsProvider
from .renderer import MIMETYPES, Encoding, render


class FeedService:
    """Owns one provider per feed and renders their output on request."""

    def __init__(self, config: Optional[FeedConfig] = None, providers: Optional[Iterable[BaseProvider]] = None) -> None:
        self.config = config or FeedConfig.from_env()
        if providers is not None:
            self.providers: Dict[str, BaseProvider] = {provider.name: provider for provider in providers}
        else:
            self.providers = self._build_providers()
        if not self.providers:
            raise RuntimeError("No providers configured for FeedService")

    def _build_providers(self) -> Dict[str, BaseProvider]:
        tz = self.config.tzinfo()
        session = requests.Session()
        session.headers.update({"User-Agent": self.config.user_agent})
        providers = [
            WikiNewsProvider(DailyPolicy(tz), tz, session=session, timeout=self.config.request_timeout),
            ReadhubProvider(
                DurationPolicy(timedelta(minutes=self.config.readhub_cache_minutes)),
                tz,
                session=session,
                timeout=self.config.request_timeout,
            ),
        ]
        return {provider.name: provider for provider in providers}

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self.providers)

    def render(self, name: str, encoding: Encoding) -> Tuple[str, str]:
        """Fetch feed ``name`` and return ``(body, mimetype)``.

        Raises ``KeyError`` for an unknown feed and ``FetchFailure`` when the
        feed cannot be fetched and nothing is cached.
        """
        provider = self.providers[name]
        feed = provider.fetch()
        return render(feed, encoding, provider.render_text), MIMETYPES[encoding]
