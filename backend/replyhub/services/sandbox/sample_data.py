"""Canned sample data for emulated store and LLM responses."""

import hashlib
import random
from datetime import datetime, timedelta

# Generated timestamps are offsets from this instant so that identical
# requests produce identical payloads.
SAMPLE_EPOCH = datetime(2024, 1, 1)

FIRST_NAMES = ["John", "Jane", "Alex", "Maria", "David", "Sarah", "Michael", "Emma"]
LAST_INITIALS = ["S.", "T.", "W.", "M.", "R.", "K.", "B.", "D."]
TERRITORIES = ["US", "GB", "CA", "AU", "FR", "DE", "JP", "MX"]
LANGUAGES = ["en", "es", "fr", "de", "ru"]

# Tier index 0 is rating 5, index 4 is rating 1 or below
REVIEW_TEXT_TIERS = (
    "Absolutely love this app! It has everything I need and works perfectly. "
    "The interface is intuitive and the features are amazing.",
    "Really good app with great features. There are a few small improvements "
    "I would suggest, but overall a solid experience.",
    "Decent app but has some issues. Sometimes it crashes and there are "
    "features missing that would make it much better.",
    "Not very good. The app has too many bugs and is difficult to use. "
    "Needs a lot of work to be useful.",
    "Terrible app, constantly crashes and doesn't work as advertised. "
    "Would not recommend to anyone.",
)

DEVELOPER_ACKNOWLEDGMENT = (
    "Thank you for your feedback. We appreciate your input and will consider "
    "it for future updates."
)

APPRECIATION_REPLY = (
    "We appreciate your feedback! We're constantly working to improve our app "
    "based on user suggestions like yours. Thank you for taking the time to "
    "share your thoughts with us."
)
BUG_REPLY = (
    "We're sorry to hear you're experiencing issues. Our team is actively "
    "investigating this problem. Could you please provide more details about "
    "when this occurs? This will help us resolve it faster."
)
FEATURE_REPLY = (
    "Thank you for your feature suggestion! We're always looking for ways to "
    "enhance our app. We've added this to our roadmap for consideration in "
    "future updates."
)
GENERIC_REPLY = (
    "Thank you for your review. We value all customer feedback and use it to "
    "improve our app. If you have any specific concerns or suggestions, please "
    "don't hesitate to contact our support team."
)

# Evaluated top to bottom; the first rule with a keyword in the prompt wins.
REPLY_RULES: list[tuple[tuple[str, ...], str]] = [
    (("thank",), APPRECIATION_REPLY),
    (("bug", "crash"), BUG_REPLY),
    (("feature", "suggestion"), FEATURE_REPLY),
]

DEFAULT_COMPLETION_MODEL = "gpt-3.5-turbo"


def review_text_for_rating(rating: int) -> str:
    if rating >= 5:
        return REVIEW_TEXT_TIERS[0]
    elif rating >= 4:
        return REVIEW_TEXT_TIERS[1]
    elif rating >= 3:
        return REVIEW_TEXT_TIERS[2]
    elif rating >= 2:
        return REVIEW_TEXT_TIERS[3]
    return REVIEW_TEXT_TIERS[4]


def review_title_for_rating(rating: int) -> str:
    return "Great app!" if rating >= 4 else "Needs improvement"


def generate_reply(prompt: str) -> str:
    """Pick a canned reply for a review prompt using ordered keyword rules."""
    text = (prompt or "").lower()
    for keywords, reply in REPLY_RULES:
        if any(keyword in text for keyword in keywords):
            return reply
    return GENERIC_REPLY


def random_user_name(rng: random.Random) -> str:
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_INITIALS)}"


def random_territory(rng: random.Random) -> str:
    return rng.choice(TERRITORIES)


def sample_timestamp(rng: random.Random) -> datetime:
    return SAMPLE_EPOCH + timedelta(minutes=rng.randrange(60 * 24 * 90))


def _iso(value: datetime) -> str:
    return value.isoformat() + "Z"


def epoch_seconds(value: datetime) -> int:
    return int((value - datetime(1970, 1, 1)).total_seconds())


def app_store_review_sample(rng: random.Random, rating: int | None = None) -> dict:
    """A customerReviews resource as returned by App Store Connect."""
    if rating is None:
        rating = rng.randint(1, 5)
    created = sample_timestamp(rng)

    attributes = {
        "title": review_title_for_rating(rating),
        "body": review_text_for_rating(rating),
        "rating": rating,
        "createdDate": _iso(created),
        "reviewerNickname": random_user_name(rng),
        "territory": random_territory(rng),
    }
    review_id = f"review-{rng.randrange(10**8):08d}"

    if rng.random() > 0.7:
        attributes["developerResponse"] = {
            "id": f"response-{review_id}",
            "body": DEVELOPER_ACKNOWLEDGMENT,
            "lastModifiedDate": _iso(created + timedelta(hours=6)),
            "state": "PUBLISHED",
        }

    return {
        "type": "customerReviews",
        "id": review_id,
        "attributes": attributes,
    }


def google_play_review_sample(
    rng: random.Random,
    rating: int | None = None,
    package_name: str | None = None,
) -> dict:
    """A reviews resource as returned by the Google Play Developer API."""
    if rating is None:
        rating = rng.randint(1, 5)
    modified = sample_timestamp(rng)

    review = {
        "reviewId": f"gp-{rng.randrange(10**8):08d}",
        "authorName": random_user_name(rng),
        "comments": [
            {
                "userComment": {
                    "text": review_text_for_rating(rating),
                    "lastModified": {"seconds": str(epoch_seconds(modified)), "nanos": 0},
                    "starRating": rating,
                    "reviewerLanguage": rng.choice(LANGUAGES),
                    "appVersionName": f"{rng.randrange(5)}.{rng.randrange(10)}.{rng.randrange(10)}",
                }
            }
        ],
    }
    if package_name:
        review["packageName"] = package_name
    return review


def completion_sample(prompt: str, model: str | None = None) -> dict:
    """An OpenAI chat.completion object answering the prompt with a canned reply."""
    content = generate_reply(prompt)
    digest = hashlib.sha1((prompt or "").encode()).hexdigest()
    prompt_tokens = len((prompt or "").split())
    completion_tokens = len(content.split())

    return {
        "id": f"chatcmpl-{digest[:24]}",
        "object": "chat.completion",
        "created": epoch_seconds(SAMPLE_EPOCH),
        "model": model or DEFAULT_COMPLETION_MODEL,
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
        "usage": {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": prompt_tokens + completion_tokens,
        },
    }
