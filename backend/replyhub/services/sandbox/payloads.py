"""Typed views over the response documents of each emulated API.

Scenario templates are free-form JSON. Each variant below names the fields
the customizer fills in and keeps everything else as extra fields, so a
template can carry arbitrary additional data through untouched.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from replyhub.models.enums import ApiType


class ResponseKind(str, Enum):
    APP_STORE_REVIEW_LIST = "app_store_review_list"
    APP_STORE_REVIEW_RESPONSE = "app_store_review_response"
    GOOGLE_PLAY_REVIEW_LIST = "google_play_review_list"
    GOOGLE_PLAY_REPLY = "google_play_reply"
    CHAT_COMPLETION = "chat_completion"
    GENERIC = "generic"


class TemplatePayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    def to_document(self) -> dict[str, Any]:
        # Only fields present in the template or assigned by a builder
        return self.model_dump(exclude_unset=True)


class AppStoreReviewList(TemplatePayload):
    data: list[dict[str, Any]] = []
    links: dict[str, Any] = {}


class AppStoreReviewResponse(TemplatePayload):
    data: dict[str, Any] | None = None


class GooglePlayReviewList(TemplatePayload):
    reviews: list[dict[str, Any]] = []
    tokenPagination: dict[str, Any] | None = None


class GooglePlayReply(TemplatePayload):
    result: dict[str, Any] | None = None


class ChatCompletion(TemplatePayload):
    id: str | None = None
    object: str | None = None
    created: int | None = None
    model: str | None = None
    choices: list[dict[str, Any]] = []
    usage: dict[str, Any] | None = None

    def has_completion(self) -> bool:
        if not self.choices:
            return False
        message = self.choices[0].get("message") or {}
        return bool(message.get("content"))


def classify_response(api_type: ApiType | str, path_template: str) -> ResponseKind:
    """Decide which response variant an endpoint template produces."""
    api_type = ApiType(api_type)
    path = path_template.rstrip("/")
    lowered = path.lower()

    if api_type == ApiType.APP_STORE_CONNECT:
        if lowered.endswith("/response"):
            return ResponseKind.APP_STORE_REVIEW_RESPONSE
        if lowered.endswith("reviews"):
            return ResponseKind.APP_STORE_REVIEW_LIST
    elif api_type == ApiType.GOOGLE_PLAY_DEVELOPER:
        if lowered.endswith(":reply"):
            return ResponseKind.GOOGLE_PLAY_REPLY
        if lowered.endswith("/reviews"):
            return ResponseKind.GOOGLE_PLAY_REVIEW_LIST
    elif api_type == ApiType.OPENAI:
        if lowered.endswith("/chat/completions"):
            return ResponseKind.CHAT_COMPLETION

    return ResponseKind.GENERIC
