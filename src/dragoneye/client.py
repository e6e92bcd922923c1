"""Entry point object holding credentials and API namespaces."""

from __future__ import annotations

from .classification import Classification
from .config import DragoneyeSettings
from .exceptions import ConfigurationError


class Dragoneye:
    """Dragoneye API client.

    The API key is taken from ``api_key`` when given, otherwise from
    ``settings`` (``DRAGONEYE_API_KEY`` by default). A missing key fails here,
    before any request is made.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        settings: DragoneyeSettings | None = None,
    ) -> None:
        self._settings = settings or DragoneyeSettings()
        resolved = api_key if api_key is not None else self._settings.api_key
        if not resolved:
            raise ConfigurationError(
                "API key is required: either DRAGONEYE_API_KEY must be set, "
                "or api_key should be passed to the client."
            )
        self._api_key = resolved
        self.classification = Classification(self)

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def settings(self) -> DragoneyeSettings:
        return self._settings

    @property
    def base_url(self) -> str:
        return self._settings.base_url.rstrip("/")

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._api_key}"}

    def __repr__(self) -> str:
        return f"Dragoneye(base_url={self.base_url!r})"


__all__ = ["Dragoneye"]
