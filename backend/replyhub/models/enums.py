"""Enumerations shared by the sandbox models and schemas."""

from enum import Enum


class ApiType(str, Enum):
    """Third-party APIs the sandbox can emulate."""
    APP_STORE_CONNECT = "app_store_connect"
    GOOGLE_PLAY_DEVELOPER = "google_play_developer"
    OPENAI = "openai"


class ScenarioType(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    TIMEOUT = "timeout"
    RATE_LIMIT = "rate_limit"


# URL slug used by the emulation routes -> emulated API
API_TYPE_SLUGS: dict[str, ApiType] = {
    "app-store": ApiType.APP_STORE_CONNECT,
    "google-play": ApiType.GOOGLE_PLAY_DEVELOPER,
    "openai": ApiType.OPENAI,
}
