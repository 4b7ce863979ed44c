"""Turns scenario response templates into concrete, request-aware payloads."""

import copy
import json
import random
from datetime import timedelta
from typing import Any, Callable

from replyhub.models.enums import ApiType
from replyhub.services.sandbox.path_matcher import render_path
from replyhub.services.sandbox.payloads import (
    AppStoreReviewList,
    AppStoreReviewResponse,
    ChatCompletion,
    GooglePlayReply,
    GooglePlayReviewList,
    ResponseKind,
    classify_response,
)
from replyhub.services.sandbox.sample_data import (
    DEVELOPER_ACKNOWLEDGMENT,
    app_store_review_sample,
    completion_sample,
    epoch_seconds,
    google_play_review_sample,
    sample_timestamp,
)

APP_STORE_BASE_URL = "https://api.appstoreconnect.apple.com"

Builder = Callable[[Any, str, dict[str, str], Any, random.Random], Any]


def extract_last_user_message(request_body: Any) -> str:
    """
    Return the content of the most recent user message in a chat request.

    Content given as a list of parts (``[{"type": "text", "text": ...}]``)
    is joined into one string. Returns "" when there is no user message.
    """
    if not isinstance(request_body, dict):
        return ""
    messages = request_body.get("messages")
    if not isinstance(messages, list):
        return ""

    for message in reversed(messages):
        if not isinstance(message, dict) or message.get("role") != "user":
            continue
        content = message.get("content")
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            return "".join(
                part.get("text", "") if isinstance(part, dict) else str(part)
                for part in content
            )
        return ""

    return ""


def build_app_store_review_list(template, path_template, params, request_body, rng):
    payload = AppStoreReviewList.model_validate(template)
    if not payload.data:
        payload.data = [app_store_review_sample(rng)]
    if "app_id" in params:
        payload.links = {**payload.links, "self": APP_STORE_BASE_URL + render_path(path_template, params)}
    return payload.to_document()


def build_app_store_review_response(template, path_template, params, request_body, rng):
    payload = AppStoreReviewResponse.model_validate(template)
    if not payload.data:
        review_id = params.get("review_id", "unknown")
        payload.data = {
            "type": "customerReviewResponses",
            "id": f"response-{review_id}",
            "attributes": {
                "responseBody": DEVELOPER_ACKNOWLEDGMENT,
                "lastModifiedDate": sample_timestamp(rng).isoformat() + "Z",
                "state": "PUBLISHED",
            },
            "relationships": {
                "review": {"data": {"type": "customerReviews", "id": review_id}},
            },
        }
    return payload.to_document()


def build_google_play_review_list(template, path_template, params, request_body, rng):
    payload = GooglePlayReviewList.model_validate(template)
    package_name = params.get("package_name", "")
    if not payload.reviews:
        payload.reviews = [google_play_review_sample(rng, package_name=package_name)]
    if payload.tokenPagination is None:
        payload.tokenPagination = {"nextPageToken": f"{package_name}:{rng.randrange(10**6):06d}"}
    return payload.to_document()


def build_google_play_reply(template, path_template, params, request_body, rng):
    payload = GooglePlayReply.model_validate(template)
    if not payload.result:
        edited = sample_timestamp(rng) + timedelta(hours=1)
        payload.result = {
            "reviewId": params.get("review_id", "unknown"),
            "replyText": DEVELOPER_ACKNOWLEDGMENT,
            "lastEdited": {"seconds": str(epoch_seconds(edited)), "nanos": 0},
        }
    return payload.to_document()


def build_chat_completion(template, path_template, params, request_body, rng):
    payload = ChatCompletion.model_validate(template)
    if payload.has_completion():
        return payload.to_document()

    model = request_body.get("model") if isinstance(request_body, dict) else None
    sample = completion_sample(extract_last_user_message(request_body), model=model)

    payload.choices = sample["choices"]
    for key in ("id", "object", "created", "model", "usage"):
        if getattr(payload, key) is None:
            setattr(payload, key, sample[key])
    return payload.to_document()


class ResponseCustomizer:
    """
    Builds the payload for one emulated call.

    Stored templates are deep-copied before any change. Generated content is
    drawn from a random source seeded with the endpoint template and path
    parameters, so the same call always yields the same payload.
    """

    builders: dict[ResponseKind, Builder] = {
        ResponseKind.APP_STORE_REVIEW_LIST: build_app_store_review_list,
        ResponseKind.APP_STORE_REVIEW_RESPONSE: build_app_store_review_response,
        ResponseKind.GOOGLE_PLAY_REVIEW_LIST: build_google_play_review_list,
        ResponseKind.GOOGLE_PLAY_REPLY: build_google_play_reply,
        ResponseKind.CHAT_COMPLETION: build_chat_completion,
    }

    def customize(
        self,
        api_type: ApiType | str,
        path_template: str,
        path_params: dict[str, str] | None,
        request_body: Any,
        template_response: Any,
    ) -> Any:
        kind = classify_response(api_type, path_template)
        template = copy.deepcopy(template_response)
        builder = self.builders.get(kind)
        if builder is None:
            return template

        params = dict(path_params or {})
        rng = random.Random(self._seed(api_type, path_template, params))
        return builder(template if template is not None else {}, path_template, params, request_body, rng)

    @staticmethod
    def _seed(api_type: ApiType | str, path_template: str, params: dict[str, str]) -> str:
        return json.dumps([ApiType(api_type).value, path_template, params], sort_keys=True)
