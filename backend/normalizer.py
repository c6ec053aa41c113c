"""Turn the raw text Gemini returns into a validated AnalysisResult.

The work is a straight pipeline: extract the JSON payload from the text,
parse it, check the top-level shape, then coerce every nested entity field by
field. Parsing and shape failures raise distinct errors; field-level problems
never fail, they fall back to safe defaults.
"""
import json
import logging
import re
import time
from typing import Any, Dict, List, Tuple

from errors import MalformedPayload, SchemaMismatch
from models import (
    ActionItem,
    ActionItemStatus,
    ActionItemUrgency,
    AnalysisResult,
    Summary,
    Topic,
    UNASSIGNED,
    UNNAMED_TOPIC,
)

logger = logging.getLogger(__name__)

# First fenced block, optionally tagged json
FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)\s*```", re.DOTALL)

REQUIRED_KEYS = ("topics", "summary", "actionItems")


def extract_payload(raw_text: str) -> str:
    """Return the content of the first fenced block, or the whole trimmed text."""
    text = raw_text.strip()
    match = FENCE_RE.search(text)
    if match and match.group(1):
        return match.group(1).strip()
    return text


def parse_payload(candidate: str) -> Any:
    try:
        return json.loads(candidate)
    except json.JSONDecodeError as e:
        raise MalformedPayload(f"The model's output could not be read as JSON: {e}") from e


def validate_shape(parsed: Any) -> Dict[str, Any]:
    if not isinstance(parsed, dict):
        raise SchemaMismatch(
            f"The model's output was not in the expected format: "
            f"expected a JSON object, got {type(parsed).__name__}"
        )
    missing = [key for key in REQUIRED_KEYS if key not in parsed]
    if missing:
        raise SchemaMismatch(
            f"The model's output was not in the expected format: missing {', '.join(missing)}"
        )
    if not isinstance(parsed["topics"], list) or not isinstance(parsed["actionItems"], list):
        raise SchemaMismatch(
            "The model's output was not in the expected format: topics and actionItems must be arrays"
        )
    if not isinstance(parsed["summary"], dict):
        raise SchemaMismatch(
            "The model's output was not in the expected format: summary must be an object"
        )
    return parsed


# Field decoders: (untyped value) -> (typed value, used_default)

def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    # JSON text, not a Python repr, for objects, arrays and literals
    return json.dumps(value, ensure_ascii=False)


def decode_text(value: Any, default: str = "") -> Tuple[str, bool]:
    if value is None or isinstance(value, (dict, list)):
        return default, True
    return _as_text(value), False


def decode_name(value: Any) -> Tuple[str, bool]:
    if not value or isinstance(value, (dict, list, bool)):
        return UNNAMED_TOPIC, True
    text = _as_text(value)
    if not text.strip():
        return UNNAMED_TOPIC, True
    return text, False


def decode_string_list(value: Any) -> Tuple[List[str], bool]:
    """Keep arrays (items stringified, nulls dropped); replace anything else with []."""
    if not isinstance(value, list):
        return [], True
    return [_as_text(item) for item in value if item is not None], False


def decode_urgency(value: Any) -> Tuple[ActionItemUrgency, bool]:
    try:
        return ActionItemUrgency(value), False
    except ValueError:
        return ActionItemUrgency.MEDIUM, True


def decode_status(value: Any) -> Tuple[ActionItemStatus, bool]:
    try:
        return ActionItemStatus(value), False
    except ValueError:
        return ActionItemStatus.TO_DO, True


class _Defaults:
    """Counts fallbacks taken during one normalization."""

    def __init__(self):
        self.count = 0

    def take(self, decoded, field: str):
        value, used_default = decoded
        if used_default:
            self.count += 1
            logger.debug(f"Defaulted field {field}")
        return value


def _entry(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def coerce_topic(raw: Any, defaults: _Defaults) -> Topic:
    raw = _entry(raw)
    return Topic(
        name=defaults.take(decode_name(raw.get("name")), "topic.name"),
        transcript_sections=defaults.take(
            decode_string_list(raw.get("transcriptSections")), "topic.transcriptSections"
        ),
    )


def coerce_summary(raw: Dict[str, Any], defaults: _Defaults) -> Summary:
    return Summary(
        overview=defaults.take(decode_text(raw.get("overview")), "summary.overview"),
        main_points=defaults.take(decode_string_list(raw.get("mainPoints")), "summary.mainPoints"),
        conclusion=defaults.take(decode_text(raw.get("conclusion")), "summary.conclusion"),
        unanswered_questions=defaults.take(
            decode_string_list(raw.get("unansweredQuestions")), "summary.unansweredQuestions"
        ),
    )


def coerce_action_items(raw_items: List[Any], defaults: _Defaults) -> List[ActionItem]:
    # One stamp per batch, index keeps ids distinct within it
    stamp = time.time_ns()
    items = []
    for index, raw in enumerate(raw_items):
        raw = _entry(raw)
        items.append(
            ActionItem(
                id=f"action-{stamp}-{index}",
                task=defaults.take(decode_text(raw.get("task")), "actionItem.task"),
                assigned_to=defaults.take(
                    decode_text(raw.get("assignedTo"), UNASSIGNED), "actionItem.assignedTo"
                ),
                urgency=defaults.take(decode_urgency(raw.get("urgency")), "actionItem.urgency"),
                status=defaults.take(decode_status(raw.get("status")), "actionItem.status"),
            )
        )
    return items


def normalize_analysis(raw_text: str) -> AnalysisResult:
    """Extract, parse, validate and coerce a raw model response.

    Raises:
        MalformedPayload: the extracted payload is not valid JSON.
        SchemaMismatch: the JSON lacks topics, summary or actionItems, or
            they have the wrong container type.
    """
    candidate = extract_payload(raw_text)
    parsed = validate_shape(parse_payload(candidate))

    defaults = _Defaults()
    result = AnalysisResult(
        topics=[coerce_topic(topic, defaults) for topic in parsed["topics"]],
        summary=coerce_summary(parsed["summary"], defaults),
        action_items=coerce_action_items(parsed["actionItems"], defaults),
    )
    logger.info(
        f"Normalized analysis: topics={len(result.topics)}, "
        f"action_items={len(result.action_items)}, defaulted_fields={defaults.count}"
    )
    return result
