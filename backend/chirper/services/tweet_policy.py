"""
Chirper Backend: Tweet Validation Policy
========================================

What:  Pure checks that turn a raw request payload into a CreateTweetInput or
       a set of field-keyed error messages.
Who:   Called by POST /api/tweets after the caller identity is resolved.

Strings are trimmed of leading and trailing whitespace before any rule runs,
and the trimmed text is what gets stored.

Rules for `body` (evaluated in order, failures accumulate):
    required  missing, null, an empty list/object, or a string that is empty
              once trimmed.
              When this fails it is the only message reported for the field.
    string    present but not a string
    max       more than MAX_TWEET_LENGTH characters (code points, not bytes)

A payload that is not a JSON object is treated as an empty object, so it
fails `required` like a missing body would.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from chirper.config import settings
from chirper.exceptions import ValidationError
from chirper.schemas.tweet import CreateTweetInput

MAX_TWEET_LENGTH = 280

# Message catalogs, keyed by "<field>.<rule>".
MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "body.required": "The tweet body is required.",
        "body.string": "The tweet body must be a string.",
        "body.max": f"The tweet body may not be greater than {MAX_TWEET_LENGTH} characters.",
    },
    "ja": {
        "body.required": "ツイート本文は必須です。",
        "body.string": "ツイート本文は文字列で入力してください。",
        "body.max": f"ツイート本文は{MAX_TWEET_LENGTH}文字以内で入力してください。",
    },
}


def message_for(key: str, locale: Optional[str] = None) -> str:
    catalog = MESSAGES.get(locale or settings.app_locale, MESSAGES["en"])
    return catalog[key]


def _read_body(payload: Any) -> Any:
    data: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}
    value = data.get("body")
    return value.strip() if isinstance(value, str) else value


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, dict)):
        return not value
    return False


def collect_errors(payload: Any, locale: Optional[str] = None) -> List[Tuple[str, str]]:
    """
    Run every rule against `payload` and return (field, message) pairs.

    An empty list means the payload is valid.
    """
    errors: List[Tuple[str, str]] = []

    body = _read_body(payload)
    if _is_blank(body):
        errors.append(("body", message_for("body.required", locale)))
        return errors

    if not isinstance(body, str):
        errors.append(("body", message_for("body.string", locale)))
    elif len(body) > MAX_TWEET_LENGTH:
        errors.append(("body", message_for("body.max", locale)))

    return errors


def validate_create_tweet(payload: Any, locale: Optional[str] = None) -> CreateTweetInput:
    """
    Validate a parsed request body.

    Returns:
        CreateTweetInput with the trimmed body.

    Raises:
        ValidationError: with `errors` grouped per field, e.g.
                         {"body": ["The tweet body is required."]}
    """
    pairs = collect_errors(payload, locale)
    if pairs:
        grouped: Dict[str, List[str]] = {}
        for field, message in pairs:
            grouped.setdefault(field, []).append(message)
        raise ValidationError(errors=grouped, context={"fields": sorted(grouped)})

    return CreateTweetInput(body=_read_body(payload))
