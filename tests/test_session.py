"""Tests for session module."""

from stepsubs.event import Step
from stepsubs.session import Session, step_title


class TestStepTitle:
    def test_with_args(self):
        step = Step(actor="I", name="fillField", args=("#user", "alice"))
        assert step_title(step) == "I.fillField(#user,alice)"

    def test_without_args(self):
        assert step_title(Step(actor="I", name="logout")) == "I.logout()"

    def test_non_string_args(self):
        assert step_title(Step(actor="I", name="wait", args=(2, 1.5))) == "I.wait(2,1.5)"

    def test_none_and_bool_args(self):
        step = Step(actor="I", name="wait", args=(2, None, True, False))
        assert step_title(step) == "I.wait(2,,true,false)"

    def test_exactly_100_chars_not_truncated(self):
        name = "x" * (100 - len("I.()"))
        title = step_title(Step(actor="I", name=name))
        assert len(title) == 100
        assert not title.endswith("...")

    def test_long_title_truncated(self):
        step = Step(actor="I", name="see", args=("a" * 200,))
        title = step_title(step)
        assert title == ("I.see(" + "a" * 200)[:100] + "..."
        assert len(title) == 103


class TestSessionRecording:
    def test_start_offset_relative_to_test_start(self):
        session = Session()
        session.reset(10_000)
        record = session.record_start(Step(actor="I", name="click", args=("OK",)), 11_500)
        assert record.start == "00:00:01#500"
        assert record.started_at == 11_500
        assert record.end is None
        assert record.title == "I.click(OK)"

    def test_finish_sets_end_offset(self):
        session = Session()
        session.reset(0)
        step = Step(actor="I", name="click")
        record = session.record_start(step, 100)
        session.record_finish(step, 2_100)
        assert record.end == "00:00:02#100"

    def test_finish_correlates_by_key_not_identity(self):
        session = Session()
        session.reset(0)
        session.record_start(Step(actor="I", name="click", key="k1"), 10)
        record = session.record_finish(Step(actor="", name="", key="k1"), 20)
        assert record is not None
        assert record.end == "00:00:00#020"

    def test_identifiers_unique(self):
        session = Session()
        session.reset(0)
        ids = {session.record_start(Step(actor="I", name="x"), 1).id for _ in range(50)}
        assert len(ids) == 50

    def test_step_payload_not_mutated(self):
        session = Session()
        session.reset(0)
        step = Step(actor="I", name="click", key="k1")
        session.record_start(step, 5)
        assert step == Step(actor="I", name="click", key="k1")

    def test_unknown_finish_is_noop(self):
        session = Session()
        session.reset(0)
        assert session.record_finish(Step(actor="I", name="x", key="nope"), 5) is None
        assert session.steps == {}

    def test_finish_without_step_is_noop(self):
        session = Session()
        session.reset(0)
        assert session.record_finish(None, 5) is None

    def test_finish_after_reset_is_noop(self):
        session = Session()
        session.reset(0)
        step = Step(actor="I", name="x")
        session.record_start(step, 1)
        session.reset(100)
        assert session.record_finish(step, 200) is None
        assert session.steps == {}

    def test_reset_clears_state(self):
        session = Session()
        session.reset(0)
        session.record_start(Step(actor="I", name="x"), 1)
        session.reset(500)
        assert session.started_at == 500
        assert session.steps == {}
        assert session.correlation == {}

    def test_start_before_reset_uses_step_as_time_base(self):
        session = Session()
        record = session.record_start(Step(actor="I", name="x"), 42)
        assert session.started_at == 42
        assert record.start == "00:00:00#000"


class TestFinishedSteps:
    def test_sorted_by_start_and_unfinished_dropped(self):
        session = Session()
        session.reset(0)
        first = Step(actor="I", name="first")
        second = Step(actor="I", name="second")
        dangling = Step(actor="I", name="dangling")
        session.record_start(first, 10)
        session.record_start(dangling, 15)
        session.record_start(second, 20)
        session.record_finish(second, 30)
        session.record_finish(first, 40)
        titles = [r.title for r in session.finished_steps()]
        assert titles == ["I.first()", "I.second()"]

    def test_ties_keep_insertion_order(self):
        session = Session()
        session.reset(0)
        steps = [Step(actor="I", name=f"s{i}") for i in range(3)]
        for step in steps:
            session.record_start(step, 5)
        for step in reversed(steps):
            session.record_finish(step, 9)
        assert [r.title for r in session.finished_steps()] == ["I.s0()", "I.s1()", "I.s2()"]
