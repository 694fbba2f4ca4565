"""Tests for FocusCycleEngine (Pomodoro phases)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from worklog_cli.models.focus import FocusSettings, FocusSettingsStore
from worklog_cli.services.focus_engine import FocusCycleEngine


@pytest.fixture()
def focus(settings_store, scheduler):
    return FocusCycleEngine(settings_store, scheduler)


@pytest.fixture()
def quick_focus(settings_store, scheduler):
    """Engine with one-minute phases and a long break after two work sessions."""
    settings_store.save(
        FocusSettings(
            work_minutes=1,
            short_break_minutes=1,
            long_break_minutes=2,
            sessions_until_long_break=2,
        )
    )
    return FocusCycleEngine(settings_store, scheduler)


def _run_phase(engine: FocusCycleEngine, scheduler):
    """Tick until the running phase completes and return the completion."""
    completions = []
    engine.set_on_complete(completions.append)
    scheduler.advance(engine.remaining_seconds)
    assert len(completions) == 1
    return completions[0]


class TestInitialState:
    def test_starts_idle_with_saved_settings(self, quick_focus):
        assert quick_focus.mode == "idle"
        assert quick_focus.is_running is False
        assert quick_focus.remaining_seconds == 0
        assert quick_focus.completed_work_sessions == 0
        assert quick_focus.settings.work_minutes == 1

    def test_idle_derived_values(self, focus):
        assert focus.current_duration == 25 * 60
        assert focus.progress == 0
        assert focus.mode_label == "Ready"
        assert focus.formatted_time == "00:00"


class TestStart:
    def test_start_work(self, focus, scheduler):
        focus.start()

        assert focus.mode == "work"
        assert focus.is_running is True
        assert focus.remaining_seconds == 1500
        assert focus.formatted_time == "25:00"
        assert focus.mode_label == "Work"
        assert focus.is_linked_to_session is False
        assert len(scheduler.active_tasks) == 1

    def test_start_linked(self, focus):
        focus.start("work", linked=True)
        assert focus.is_linked_to_session is True

    def test_start_break_modes(self, focus):
        focus.start("short_break")
        assert focus.remaining_seconds == 300
        focus.start("long_break")
        assert focus.remaining_seconds == 900

    def test_restart_replaces_tick(self, focus, scheduler):
        focus.start("work")
        first = scheduler.active_tasks[0]
        focus.start("short_break")

        assert first.cancelled
        assert len(scheduler.active_tasks) == 1

    def test_idle_is_not_a_phase(self, focus):
        with pytest.raises(ValueError):
            focus.start("idle")
        assert focus.mode == "idle"


class TestTick:
    def test_tick_counts_down(self, focus, scheduler):
        focus.start()
        scheduler.advance(60)

        assert focus.remaining_seconds == 1440
        assert focus.formatted_time == "24:00"
        assert focus.progress == pytest.approx(4.0)

    def test_tick_while_paused_does_nothing(self, focus):
        focus.start()
        focus.pause()
        assert focus.tick() is None
        assert focus.remaining_seconds == 1500

    def test_work_completion_suggests_short_break(self, quick_focus, scheduler):
        quick_focus.start()
        completion = _run_phase(quick_focus, scheduler)

        assert completion.completed_mode == "work"
        assert completion.next_mode == "short_break"
        assert completion.completed_work_sessions == 1
        assert quick_focus.is_running is False
        assert quick_focus.remaining_seconds == 0
        assert quick_focus.mode == "work"
        assert scheduler.active_tasks == []

    def test_break_completion_suggests_work(self, quick_focus, scheduler):
        quick_focus.start("short_break")
        completion = _run_phase(quick_focus, scheduler)

        assert completion.completed_mode == "short_break"
        assert completion.next_mode == "work"
        assert quick_focus.completed_work_sessions == 0

    def test_tick_returns_completion(self, settings_store, scheduler):
        settings_store.save(FocusSettings(work_minutes=0))
        engine = FocusCycleEngine(settings_store, scheduler)
        engine.start()

        completion = engine.tick()

        assert completion is not None
        assert completion.completed_mode == "work"

    def test_fourth_work_session_earns_long_break(self, focus, scheduler):
        """Default settings: work, short, work, short, work, short, work, long."""
        expected = ["short_break", "short_break", "short_break", "long_break"]
        seen = []
        for _ in range(4):
            focus.start("work")
            completion = _run_phase(focus, scheduler)
            seen.append(completion.next_mode)
            focus.start(completion.next_mode)
            _run_phase(focus, scheduler)

        assert seen == expected
        assert focus.completed_work_sessions == 4

    def test_no_auto_advance(self, quick_focus, scheduler):
        quick_focus.start()
        _run_phase(quick_focus, scheduler)

        scheduler.advance(30)

        assert quick_focus.mode == "work"
        assert quick_focus.remaining_seconds == 0
        assert quick_focus.completed_work_sessions == 1


class TestPauseResume:
    def test_pause_and_resume_keep_remaining(self, focus, scheduler):
        focus.start()
        scheduler.advance(100)
        focus.pause()

        assert focus.is_running is False
        assert focus.remaining_seconds == 1400
        assert scheduler.active_tasks == []

        scheduler.advance(50)
        assert focus.remaining_seconds == 1400

        focus.resume()
        assert focus.is_running is True
        assert focus.remaining_seconds == 1400
        scheduler.advance(10)
        assert focus.remaining_seconds == 1390

    def test_resume_while_running_adds_no_tick(self, focus, scheduler):
        focus.start()
        focus.resume()
        scheduler.advance(1)

        assert len(scheduler.active_tasks) == 1
        assert focus.remaining_seconds == 1499

    def test_resume_when_idle_is_noop(self, focus, scheduler):
        focus.resume()
        assert focus.is_running is False
        assert scheduler.tasks == []

    def test_resume_after_completion_is_noop(self, quick_focus, scheduler):
        quick_focus.start()
        _run_phase(quick_focus, scheduler)

        quick_focus.resume()

        assert quick_focus.is_running is False
        assert quick_focus.completed_work_sessions == 1


class TestSkip:
    def test_skip_counts_as_completed(self, focus):
        focus.start()
        completion = focus.skip()

        assert completion.completed_mode == "work"
        assert completion.next_mode == "short_break"
        assert focus.completed_work_sessions == 1
        assert focus.remaining_seconds == 0
        assert focus.is_running is False

    def test_skip_while_paused(self, focus):
        focus.start("short_break")
        focus.pause()
        completion = focus.skip()
        assert completion.next_mode == "work"

    def test_skip_when_idle_returns_none(self, focus):
        assert focus.skip() is None
        assert focus.completed_work_sessions == 0

    def test_skip_after_completion_is_noop(self, focus):
        focus.start()
        focus.skip()

        assert focus.skip() is None
        assert focus.completed_work_sessions == 1
        assert focus.mode == "work"

    def test_skip_after_ticked_completion_is_noop(self, quick_focus, scheduler):
        quick_focus.start()
        _run_phase(quick_focus, scheduler)

        assert quick_focus.skip() is None
        assert quick_focus.completed_work_sessions == 1

    def test_skip_notifies_listener(self, focus):
        received = []
        focus.set_on_complete(received.append)
        focus.start()
        focus.skip()
        assert [c.completed_mode for c in received] == ["work"]


class TestStop:
    def test_stop_resets_everything(self, focus, scheduler):
        focus.start(linked=True)
        focus.skip()
        focus.start("short_break")
        scheduler.advance(3)

        focus.stop()

        assert focus.mode == "idle"
        assert focus.is_running is False
        assert focus.remaining_seconds == 0
        assert focus.completed_work_sessions == 0
        assert focus.is_linked_to_session is False
        assert scheduler.active_tasks == []


class TestSettings:
    def test_update_settings_persists(self, focus, settings_store):
        focus.update_settings(work_minutes=50, sessions_until_long_break=3)

        reloaded = settings_store.load()
        assert reloaded.work_minutes == 50
        assert reloaded.sessions_until_long_break == 3
        assert reloaded.short_break_minutes == 5

    def test_update_settings_ignores_unset_values(self, focus):
        focus.update_settings(work_minutes=None, short_break_minutes=10)
        assert focus.settings.work_minutes == 25
        assert focus.settings.short_break_minutes == 10

    def test_invalid_settings_rejected(self, focus, settings_store):
        with pytest.raises(ValidationError):
            focus.update_settings(sessions_until_long_break=0)
        with pytest.raises(ValidationError):
            focus.update_settings(work_minutes=-1)
        assert focus.settings == FocusSettings()
        assert not settings_store.settings_file.exists()

    def test_running_phase_keeps_its_duration(self, focus, scheduler):
        focus.start()
        scheduler.advance(60)

        focus.update_settings(work_minutes=10)

        assert focus.remaining_seconds == 1440
        assert focus.current_duration == 1500
        assert 0 <= focus.remaining_seconds <= focus.current_duration
        assert focus.progress == pytest.approx(4.0)

        focus.start()
        assert focus.remaining_seconds == 600
        assert focus.current_duration == 600

    def test_zero_length_phase_has_zero_progress(self, settings_store, scheduler):
        settings_store.save(FocusSettings(short_break_minutes=0))
        engine = FocusCycleEngine(settings_store, scheduler)
        engine.start("short_break")
        assert engine.progress == 0

    def test_engine_uses_store_defaults_when_missing(self, tmp_path, scheduler):
        engine = FocusCycleEngine(FocusSettingsStore(tmp_path / "nothing"), scheduler)
        assert engine.settings == FocusSettings()
