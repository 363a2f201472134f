"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from commentarea.config import CommentAreaSettings, Settings
from commentarea.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_comment_area_settings(self, settings: Settings) -> CommentAreaSettings:
        """Provide comment area settings."""
        return settings.comments
