"""Current Feeds package initializer."""

from .config import FeedConfig
from .providers.base import FetchFailure
from .renderer import Encoding
from .service import FeedService

__all__ = ["FeedService", "FeedConfig", "FetchFailure", "Encoding"]
