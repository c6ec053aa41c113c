"""
Unit Tests for action item review helpers (filtering, status changes, CSV export)
"""

import csv
import io

import pytest

from actions import CSV_COLUMNS, export_csv, filter_action_items, update_status
from models import ActionItem, ActionItemStatus, ActionItemUrgency


@pytest.fixture
def items():
    return [
        ActionItem(id="a-0", task="Draft budget", assigned_to="Dana Scully", urgency=ActionItemUrgency.HIGH),
        ActionItem(id="a-1", task="Book venue", assigned_to="Fox", status=ActionItemStatus.DONE),
        ActionItem(id="a-2", task="Email vendors", urgency=ActionItemUrgency.LOW),
    ]


class TestFilterActionItems:

    def test_no_filters_keeps_everything(self, items):
        assert filter_action_items(items) == items

    def test_status_filter(self, items):
        assert [i.id for i in filter_action_items(items, status=ActionItemStatus.DONE)] == ["a-1"]

    def test_urgency_filter(self, items):
        assert [i.id for i in filter_action_items(items, urgency=ActionItemUrgency.MEDIUM)] == ["a-1"]

    def test_assignee_substring_is_case_insensitive(self, items):
        assert [i.id for i in filter_action_items(items, assignee="SCUL")] == ["a-0"]

    def test_filters_combine(self, items):
        assert filter_action_items(items, status=ActionItemStatus.TO_DO, assignee="fox") == []


class TestUpdateStatus:

    def test_returns_updated_copy(self, items):
        updated = update_status(items, "a-2", ActionItemStatus.IN_PROGRESS)

        assert updated[2].status is ActionItemStatus.IN_PROGRESS
        assert items[2].status is ActionItemStatus.TO_DO
        assert updated[2].id == "a-2"
        assert updated[0] is items[0]

    def test_unknown_id(self, items):
        with pytest.raises(KeyError):
            update_status(items, "missing", ActionItemStatus.DONE)


class TestExportCsv:

    def test_header_and_rows(self, items):
        lines = export_csv(items).splitlines()

        assert lines[0] == "Task,Assigned To,Urgency,Status"
        assert lines[1] == "Draft budget,Dana Scully,High,To Do"
        assert lines[3] == "Email vendors,Unassigned,Low,To Do"

    def test_delimiters_are_escaped(self):
        item = ActionItem(id="a-9", task='Review "Q3", then\nsign', assigned_to="Kim, Lee")
        rows = list(csv.reader(io.StringIO(export_csv([item]))))

        assert rows[0] == CSV_COLUMNS
        assert rows[1] == ['Review "Q3", then\nsign', "Kim, Lee", "Medium", "To Do"]

    def test_empty_export_has_header_only(self):
        assert export_csv([]) == "Task,Assigned To,Urgency,Status\n"
