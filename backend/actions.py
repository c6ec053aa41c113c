import csv
import io
from typing import Iterable, List, Optional

from models import ActionItem, ActionItemStatus, ActionItemUrgency

CSV_COLUMNS = ["Task", "Assigned To", "Urgency", "Status"]


def filter_action_items(
    items: Iterable[ActionItem],
    status: Optional[ActionItemStatus] = None,
    urgency: Optional[ActionItemUrgency] = None,
    assignee: str = "",
) -> List[ActionItem]:
    """Filter like the review dashboard: exact status/urgency, assignee substring (case-insensitive)."""
    needle = assignee.lower()
    return [
        item
        for item in items
        if (status is None or item.status == status)
        and (urgency is None or item.urgency == urgency)
        and needle in item.assigned_to.lower()
    ]


def update_status(items: List[ActionItem], item_id: str, status: ActionItemStatus) -> List[ActionItem]:
    if not any(item.id == item_id for item in items):
        raise KeyError(item_id)
    return [
        item.model_copy(update={"status": status}) if item.id == item_id else item
        for item in items
    ]


def export_csv(items: Iterable[ActionItem]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for item in items:
        writer.writerow([item.task, item.assigned_to, item.urgency.value, item.status.value])
    return buffer.getvalue()
