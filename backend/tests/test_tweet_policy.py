"""
Chirper Backend: Tweet Validation Policy Unit Tests
===================================================

What:  Tests for the `body` rules (required, string, max) and how their
       failures are reported.
How:   Pure function calls; no database, no HTTP.

What we test:
    ✅ Valid bodies are trimmed of surrounding whitespace
    ✅ Missing / null / empty / blank bodies fail `required` only
    ✅ Non-string bodies fail `string`
    ✅ Length is counted in characters, boundary at 280
    ✅ Non-object payloads behave like {}
    ✅ Messages follow the configured locale
"""

import pytest

from chirper.exceptions import ValidationError
from chirper.services.tweet_policy import (
    MAX_TWEET_LENGTH,
    MESSAGES,
    collect_errors,
    validate_create_tweet,
)

REQUIRED = MESSAGES["en"]["body.required"]
STRING = MESSAGES["en"]["body.string"]
MAX = MESSAGES["en"]["body.max"]


class TestValidBodies:
    """Payloads that satisfy every rule."""

    def test_simple_body(self):
        result = validate_create_tweet({"body": "hello"})
        assert result.body == "hello"

    def test_body_is_trimmed(self):
        result = validate_create_tweet({"body": "  hello  "})
        assert result.body == "hello"

    def test_inner_whitespace_is_kept(self):
        result = validate_create_tweet({"body": "\n line one\n\nline two \t"})
        assert result.body == "line one\n\nline two"

    def test_trailing_newline_does_not_count_toward_limit(self):
        body = "a" * MAX_TWEET_LENGTH
        assert collect_errors({"body": body + "\n"}) == []
        assert validate_create_tweet({"body": "  " + body + "\n"}).body == body

    def test_exactly_max_length(self):
        body = "a" * MAX_TWEET_LENGTH
        assert validate_create_tweet({"body": body}).body == body

    def test_multibyte_characters_count_once(self):
        """280 Japanese characters are 840 UTF-8 bytes but still allowed."""
        body = "あ" * MAX_TWEET_LENGTH
        assert len(body.encode("utf-8")) > MAX_TWEET_LENGTH
        assert collect_errors({"body": body}) == []

    def test_extra_fields_are_ignored(self):
        result = validate_create_tweet({"body": "hi", "user_id": 99, "posted_at": "x"})
        assert result.body == "hi"
        assert not hasattr(result, "user_id")


class TestRequiredRule:
    """body.required: missing, null, empty, blank."""

    @pytest.mark.parametrize(
        "payload",
        [{}, {"body": None}, {"body": ""}, {"body": "   "}, {"body": "\n\t"}, {"body": []}],
        ids=["missing", "null", "empty", "spaces", "whitespace", "empty-list"],
    )
    def test_blank_body_fails_required_only(self, payload):
        assert collect_errors(payload) == [("body", REQUIRED)]

    @pytest.mark.parametrize("payload", [None, [], ["body"], "hello", 42])
    def test_non_object_payload_is_treated_as_empty(self, payload):
        assert collect_errors(payload) == [("body", REQUIRED)]


class TestStringRule:
    """body.string: present but not text."""

    @pytest.mark.parametrize("value", [123, 0, 1.5, True, False, {"text": "hi"}, ["hi"]])
    def test_non_string_body(self, value):
        assert collect_errors({"body": value}) == [("body", STRING)]


class TestMaxRule:
    """body.max: more than 280 characters."""

    def test_one_over_limit(self):
        assert collect_errors({"body": "a" * (MAX_TWEET_LENGTH + 1)}) == [("body", MAX)]

    def test_multibyte_one_over_limit(self):
        assert collect_errors({"body": "あ" * (MAX_TWEET_LENGTH + 1)}) == [("body", MAX)]

    def test_padding_does_not_hide_overflow(self):
        padded = "  " + "a" * (MAX_TWEET_LENGTH + 1) + "  "
        assert collect_errors({"body": padded}) == [("body", MAX)]

    def test_max_message_names_the_limit(self):
        assert str(MAX_TWEET_LENGTH) in MAX


class TestValidationErrorShape:
    """validate_create_tweet() groups failures per field."""

    def test_raises_with_field_errors(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create_tweet({"body": ""})

        assert exc_info.value.errors == {"body": [REQUIRED]}
        assert exc_info.value.message == REQUIRED

    def test_too_long_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_create_tweet({"body": "a" * 281})

        assert exc_info.value.errors["body"] == [MAX]

    def test_summary_counts_additional_errors(self):
        err = ValidationError(errors={"body": ["first", "second", "third"]})
        assert err.message == "first (and 2 more errors)"

    def test_summary_singular(self):
        err = ValidationError(errors={"body": ["first", "second"]})
        assert err.message == "first (and 1 more error)"


class TestLocalizedMessages:
    """Messages come from the catalog selected by APP_LOCALE."""

    def test_explicit_japanese_locale(self):
        errors = collect_errors({"body": ""}, locale="ja")
        assert errors == [("body", "ツイート本文は必須です。")]

    def test_japanese_max_message(self):
        errors = collect_errors({"body": "あ" * 281}, locale="ja")
        assert errors == [("body", "ツイート本文は280文字以内で入力してください。")]

    def test_settings_locale_is_default(self, monkeypatch):
        from chirper.config import settings

        monkeypatch.setattr(settings, "app_locale", "ja")
        assert collect_errors({}) == [("body", MESSAGES["ja"]["body.required"])]

    def test_every_locale_defines_every_rule(self):
        keys = set(MESSAGES["en"])
        for locale, catalog in MESSAGES.items():
            assert set(catalog) == keys, locale
