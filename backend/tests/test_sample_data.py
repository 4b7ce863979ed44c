"""Tests for canned review text and the keyword reply generator."""

import random

import pytest

from replyhub.services.sandbox.sample_data import (
    APPRECIATION_REPLY,
    BUG_REPLY,
    FEATURE_REPLY,
    GENERIC_REPLY,
    REVIEW_TEXT_TIERS,
    app_store_review_sample,
    completion_sample,
    generate_reply,
    google_play_review_sample,
    review_text_for_rating,
    review_title_for_rating,
)


@pytest.mark.parametrize("rating,tier", [
    (5, 0),
    (4, 1),
    (3, 2),
    (2, 3),
    (1, 4),
    (0, 4),
    (7, 0),
])
def test_review_text_tiers(rating, tier):
    assert review_text_for_rating(rating) == REVIEW_TEXT_TIERS[tier]


def test_review_title():
    assert review_title_for_rating(4) == "Great app!"
    assert review_title_for_rating(3) == "Needs improvement"


class TestGenerateReply:

    @pytest.mark.parametrize("prompt", ["Found a BUG in login", "it keeps Crashing", "crash on start"])
    def test_bug_keywords(self, prompt):
        assert generate_reply(prompt) == BUG_REPLY

    def test_thank_keyword(self):
        assert generate_reply("Thanks for the update") == APPRECIATION_REPLY

    def test_feature_keywords(self):
        assert generate_reply("A feature request") == FEATURE_REPLY
        assert generate_reply("small suggestion here") == FEATURE_REPLY

    def test_fallback(self):
        assert generate_reply("It works.") == GENERIC_REPLY
        assert generate_reply("") == GENERIC_REPLY

    def test_thank_wins_over_bug(self):
        assert generate_reply("Thank you, but there is a bug") == APPRECIATION_REPLY

    def test_bug_wins_over_feature(self):
        assert generate_reply("Feature X crashes every time") == BUG_REPLY

    def test_is_pure(self):
        prompt = "Please add a feature for exports"
        assert generate_reply(prompt) == generate_reply(prompt)


def test_app_store_sample_uses_rating_tier():
    review = app_store_review_sample(random.Random(1), rating=2)
    assert review["type"] == "customerReviews"
    assert review["attributes"]["rating"] == 2
    assert review["attributes"]["body"] == REVIEW_TEXT_TIERS[3]
    assert review["attributes"]["title"] == "Needs improvement"


def test_google_play_sample_uses_rating_tier():
    review = google_play_review_sample(random.Random(1), rating=5)
    comment = review["comments"][0]["userComment"]
    assert comment["starRating"] == 5
    assert comment["text"] == REVIEW_TEXT_TIERS[0]


def test_samples_are_reproducible_with_same_seed():
    assert app_store_review_sample(random.Random("seed")) == app_store_review_sample(random.Random("seed"))
    assert google_play_review_sample(random.Random("seed")) == google_play_review_sample(random.Random("seed"))


def test_completion_sample():
    sample = completion_sample("the app crashes", model="gpt-4o-mini")
    assert sample["object"] == "chat.completion"
    assert sample["model"] == "gpt-4o-mini"
    assert sample["choices"][0]["message"] == {"role": "assistant", "content": BUG_REPLY}
    assert completion_sample("the app crashes", model="gpt-4o-mini") == sample


def test_google_play_sample_carries_package_name():
    review = google_play_review_sample(random.Random(1), package_name="com.example.app")
    assert review["packageName"] == "com.example.app"
    assert "packageName" not in google_play_review_sample(random.Random(1))
