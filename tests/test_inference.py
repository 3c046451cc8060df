"""Tests for the field inference helpers."""

from datetime import date, datetime, timedelta

from intake.services import inference

NOW = datetime(2026, 3, 10, 14, 30)


class TestPriority:
    def test_urgent_words_are_critical(self):
        assert inference.infer_priority("finish report", "task: finish report ASAP") == "critical"

    def test_important_words_are_high(self):
        assert inference.infer_priority("important client email") == "high"

    def test_tentative_words_are_low(self):
        assert inference.infer_priority("maybe clean the garage") == "low"

    def test_default_is_medium(self):
        assert inference.infer_priority("buy milk") == "medium"

    def test_keywords_match_whole_words(self):
        """'know' must not trigger the urgent keyword 'now'."""
        assert inference.infer_priority("i know the answer") == "medium"


class TestTaskKind:
    def test_creative_wins_over_deep(self):
        # "design" is in both tables; creative is checked first
        assert inference.infer_task_kind("design landing page") == "creative"

    def test_deep(self):
        assert inference.infer_task_kind("write the report") == "deep"

    def test_admin(self):
        assert inference.infer_task_kind("organize files") == "admin"

    def test_default_shallow(self):
        assert inference.infer_task_kind("check email") == "shallow"
        assert inference.infer_task_kind("buy milk") == "shallow"


class TestEnergy:
    def test_high(self):
        assert inference.infer_energy_level("morning workout") == "high"

    def test_low_matches_plural(self):
        assert inference.infer_energy_level("answer emails") == "low"

    def test_medium(self):
        assert inference.infer_energy_level("read a chapter") == "medium"


class TestTimeBlockInference:
    def test_block_types(self):
        assert inference.infer_block_type("team sync meeting") == "meeting"
        assert inference.infer_block_type("lunch") == "break"
        assert inference.infer_block_type("inbox email") == "admin"
        assert inference.infer_block_type("focus time") == "deep"
        assert inference.infer_block_type("errands") == "shallow"

    def test_flexibility(self):
        assert inference.infer_flexibility("dentist appointment") == 0.2
        assert inference.infer_flexibility("whenever works") == 0.9
        assert inference.infer_flexibility("reading") == 0.5


class TestGoalsAndHabits:
    def test_goal_category(self):
        assert inference.infer_goal_category("get a promotion at work") == "work"
        assert inference.infer_goal_category("run a marathon") == "health"
        assert inference.infer_goal_category("read 20 books") == "learning"
        assert inference.infer_goal_category("see the world") == "general"

    def test_habit_category(self):
        assert inference.infer_habit_category("drink water") == "health"
        assert inference.infer_habit_category("journal") == "productivity"
        assert inference.infer_habit_category("practice piano") == "learning"
        assert inference.infer_habit_category("meditate") == "mindfulness"
        assert inference.infer_habit_category("call grandma") == "general"

    def test_frequency(self):
        assert inference.infer_frequency("weekly review") == "weekly"
        assert inference.infer_frequency("every month pay rent") == "monthly"
        assert inference.infer_frequency("drink water") == "daily"

    def test_time_of_day(self):
        assert inference.infer_time_of_day("morning run") == "morning"
        assert inference.infer_time_of_day("walk after lunch") == "afternoon"
        assert inference.infer_time_of_day("read before bed") == "evening"
        assert inference.infer_time_of_day("stretch") == "any"

    def test_time_of_day_from_clock_suffix(self):
        assert inference.infer_time_of_day("daily: stretch at 6am") == "morning"
        assert inference.infer_time_of_day("call mom at 7pm") == "evening"
        assert inference.infer_time_of_day("ham sandwich") == "any"

    def test_measurable(self):
        assert inference.is_measurable("read 20 books") is True
        assert inference.is_measurable("increase sales by 10%") is True
        assert inference.is_measurable("walk 100 miles") is True
        assert inference.is_measurable("run a marathon") is False
        assert inference.is_measurable("lose weight") is False


class TestDurations:
    def test_to_minutes(self):
        assert inference.to_minutes(2, "hours") == 120
        assert inference.to_minutes(1, "h") == 60
        assert inference.to_minutes(45, "min") == 45

    def test_habit_duration_explicit(self):
        assert inference.estimate_habit_duration("meditate 10 minutes") == 10
        assert inference.estimate_habit_duration("read for 1 hour") == 60

    def test_habit_duration_defaults(self):
        assert inference.estimate_habit_duration("drink water") == 5
        assert inference.estimate_habit_duration("workout") == 30
        assert inference.estimate_habit_duration("journal") == 15

    def test_generic_duration(self):
        assert inference.estimate_generic_duration("check email") == 15
        assert inference.estimate_generic_duration("research competitors") == 60
        assert inference.estimate_generic_duration("do stuff") == 30

    def test_generic_duration_long_input(self):
        text = "clean up the garage and sort the boxes before the weekend party starts"
        assert inference.estimate_generic_duration(text) == 45


class TestContext:
    def test_clauses_in_reading_order(self):
        result = inference.extract_context("lunch with sarah at the cafe")
        assert result == ["with sarah at the cafe", "at the cafe"]

    def test_stops_at_punctuation(self):
        result = inference.extract_context("call bob via zoom, then email")
        assert result == ["via zoom"]

    def test_no_clauses(self):
        assert inference.extract_context("buy milk") == []


class TestDates:
    def test_relative_words(self):
        assert inference.resolve_date("today", NOW) == NOW
        assert inference.resolve_date("Tomorrow", NOW) == NOW + timedelta(days=1)
        assert inference.resolve_date("next week", NOW) == NOW + timedelta(days=7)

    def test_relative_words_inside_phrase(self):
        assert inference.resolve_date("tomorrow morning", NOW) == NOW + timedelta(days=1)
        assert inference.resolve_date("tomorrow 5pm", NOW) == NOW + timedelta(days=1)
        assert inference.resolve_date("today evening", NOW) == NOW
        assert inference.resolve_date("the end of next week", NOW) == NOW + timedelta(days=7)

    def test_literal_date(self):
        assert inference.resolve_date("2026-04-01", NOW).date() == date(2026, 4, 1)

    def test_weekday_resolves_forward(self):
        result = inference.resolve_date("friday", NOW)
        assert result.weekday() == 4
        assert result >= NOW

    def test_unparseable_is_none(self):
        assert inference.resolve_date("xyzzy", NOW) is None
        assert inference.resolve_date("", NOW) is None

    def test_extract_deadline(self):
        assert inference.extract_deadline("submit report by tomorrow", NOW) == NOW + timedelta(days=1)
        assert inference.extract_deadline("rent due next week", NOW) == NOW + timedelta(days=7)

    def test_extract_deadline_missing(self):
        assert inference.extract_deadline("finish report for 30 minutes", NOW) is None
        assert inference.extract_deadline("stand by me", NOW) is None


class TestTitles:
    def test_truncate(self):
        assert inference.truncate_title("  " + "a" * 150, 100) == "a" * 100

    def test_word_like_tokens(self):
        assert inference.has_word_like_token("buy milk") is True
        assert inference.has_word_like_token("xq9 zzrp") is False
        assert inference.has_word_like_token("!!! ???") is False
        assert inference.has_word_like_token("") is False
