import json
import logging
from typing import Optional

from pydantic import ValidationError

from churro.api.services.models import ModelReply, ParsedReply, ViewDirective, view_directive_adapter

logger = logging.getLogger(__name__)


def find_json_candidate(raw: str) -> Optional[str]:
    """
    Return the text from the first '{' to the last '}' inclusive.

    Models often wrap their JSON in prose or ```json fences; cutting at the
    outermost braces drops both.
    """
    if not isinstance(raw, str):
        return None
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end < start:
        return None
    return raw[start:end + 1]


def parse_view(view) -> Optional[ViewDirective]:
    """
    Validate a view object on its own. An absent or untagged view means no
    view change; an unknown tag or a malformed payload is dropped.
    """
    if not isinstance(view, dict) or view.get("type") is None:
        return None
    try:
        return view_directive_adapter.validate_python(view)
    except ValidationError as e:
        logger.info(f"Dropping unusable '{view.get('type')}' view from model reply: {e}")
        return None


def parse_reply(candidate: str) -> Optional[ParsedReply]:
    """Parse a candidate JSON object; None if it has no usable message."""
    try:
        data = json.loads(candidate)
        reply = ModelReply.model_validate(data)
    except json.JSONDecodeError as e:
        logger.debug(f"Model reply is not valid JSON: {e}")
        return None
    except ValidationError as e:
        logger.debug(f"Model reply does not match the reply shape: {e}")
        return None
    return ParsedReply(message=reply.message, directive=parse_view(reply.view))


def extract_reply(raw: str) -> ParsedReply:
    """
    Turn raw model text into a message and an optional view directive.

    Never raises: anything that cannot be read as a reply object becomes a
    plain message carrying the raw text and no directive.
    """
    candidate = find_json_candidate(raw)
    parsed = parse_reply(candidate) if candidate is not None else None
    if parsed is None:
        logger.info("Model reply had no usable JSON object, returning it as plain text")
        return ParsedReply(message=raw if isinstance(raw, str) else "", directive=None)
    return parsed
