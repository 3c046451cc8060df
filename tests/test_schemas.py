"""Tests for request models."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from intake.schemas import GoalStatus, ParseContext, ParseRequest, default_context

NOW = datetime(2026, 3, 10, 14, 30)


class TestParseRequest:
    def test_context_optional(self):
        request = ParseRequest(input="buy milk")
        assert request.context is None

    def test_input_required(self):
        with pytest.raises(ValidationError):
            ParseRequest()

    def test_nested_records_validate(self):
        request = ParseRequest(
            input="x",
            context={
                "current_date": "2026-03-10T14:30:00",
                "active_goals": [{"id": "g1", "title": "Get fit"}],
                "existing_tasks": [{"id": "t1", "title": "Stretch", "goal_id": "g1"}],
            },
        )

        assert request.context.current_date == NOW
        assert request.context.active_goals[0].status is GoalStatus.ACTIVE
        assert request.context.existing_tasks[0].goal_id == "g1"


class TestDefaultContext:
    def test_complete_context(self):
        context = default_context(NOW)

        assert isinstance(context, ParseContext)
        assert context.current_date == NOW
        assert context.active_goals == []
        assert context.existing_tasks == []
        assert context.user_preferences.deep_work_preferences.max_block_duration == 120
        assert context.user_preferences.context_switching.max_tasks_per_block == 3
        assert context.user_preferences.break_preferences.break_frequency == 90
