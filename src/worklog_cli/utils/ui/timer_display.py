"""Live terminal views for the running timer and the focus cycle."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from rich.align import Align
from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.text import Text

from worklog_cli.models.focus import MODE_LABELS, CycleCompletion
from worklog_cli.services.focus_coordinator import FocusCoordinator
from worklog_cli.services.focus_engine import FocusCycleEngine
from worklog_cli.services.timer_engine import TimerSnapshot
from worklog_cli.utils.time_format import format_clock, format_duration

from .keyboard import KeyboardHandler

REFRESH_SECONDS = 0.25

MODE_COLORS = {
    "work": "red",
    "short_break": "green",
    "long_break": "blue",
    "idle": "white",
}


def render_timer(snapshot: TimerSnapshot) -> Panel:
    """Panel showing the running task timer."""
    if not snapshot.is_running:
        body = Text("No timer running", style="dim", justify="center")
        return Panel(body, title="Timer", border_style="dim")

    task_name = snapshot.active_task.name if snapshot.active_task else snapshot.active_task_id
    body = Group(
        Text(task_name or "", style="bold white", justify="center"),
        Text(""),
        Text(format_duration(snapshot.elapsed_seconds), style="bold cyan", justify="center"),
        Text(f"since {format_clock(snapshot.start_time)}", style="dim", justify="center"),
    )
    return Panel(body, title="⏱ Timer", border_style="cyan")


def render_focus(
    focus: FocusCycleEngine,
    snapshot: TimerSnapshot | None = None,
    pending: CycleCompletion | None = None,
) -> Panel:
    """Panel showing the focus phase, its countdown and the linked timer."""
    color = MODE_COLORS.get(focus.mode, "white")
    status = "" if focus.is_running or focus.mode == "idle" else "  (paused)"

    components = [
        Text(f"{focus.mode_label}{status}", style=f"bold {color}", justify="center"),
        Text(""),
        Text(focus.formatted_time, style=f"bold {color}", justify="center"),
        Align.center(ProgressBar(total=100, completed=focus.progress, width=40)),
        Text(""),
        Text(
            f"Completed work sessions: {focus.completed_work_sessions}"
            f" / {focus.settings.sessions_until_long_break} until long break",
            style="dim",
            justify="center",
        ),
    ]

    if snapshot is not None and snapshot.is_running:
        task_name = snapshot.active_task.name if snapshot.active_task else snapshot.active_task_id
        linked = " (linked)" if focus.is_linked_to_session else ""
        components.append(
            Text(
                f"Tracking {task_name}{linked}: {format_duration(snapshot.elapsed_seconds)}",
                style="cyan",
                justify="center",
            )
        )

    if pending is not None:
        message = f"{MODE_LABELS[pending.completed_mode]} finished. "
        if pending.is_long_break_next:
            message += f"{pending.completed_work_sessions} work sessions done. "
        message += f"Press 'c' to start {MODE_LABELS[pending.next_mode].lower()}"
        components.append(Text(""))
        components.append(Text(message, style="bold yellow", justify="center"))

    components.append(Text(""))
    components.append(
        Text(
            "p pause  •  r resume  •  n skip  •  s stop focus  •  t stop timer  •  q quit",
            style="dim",
            justify="center",
        )
    )
    return Panel(Group(*components), title="🍅 Focus", border_style=color)


class TimerWatchDisplay:
    """Refreshes the running timer until the user quits."""

    def __init__(self, console: Console):
        self.console = console

    async def run(
        self,
        snapshot: Callable[[], TimerSnapshot],
        stop_timer: Callable[[], Awaitable[bool]],
    ) -> str:
        """Returns 'stopped' when the timer was stopped, otherwise 'quit'."""
        keyboard = KeyboardHandler()
        try:
            with Live(
                render_timer(snapshot()), console=self.console, refresh_per_second=4
            ) as live:
                while True:
                    key = keyboard.get_key()
                    if key == "s":
                        stopped = await stop_timer()
                        live.update(render_timer(snapshot()))
                        return "stopped" if stopped else "quit"
                    if key == "q" or not snapshot().is_running:
                        return "quit"
                    live.update(render_timer(snapshot()))
                    await asyncio.sleep(REFRESH_SECONDS)
        except KeyboardInterrupt:
            return "quit"
        finally:
            keyboard.stop()


class FocusDisplay:
    """Interactive focus-cycle view driven by single keypresses."""

    def __init__(self, console: Console, bell: bool = True):
        self.console = console
        self.bell = bell
        self.pending: CycleCompletion | None = None

    def notify(self, completion: CycleCompletion) -> None:
        """Completion notifier for ``FocusCoordinator``."""
        self.pending = completion
        if self.bell:
            self.console.bell()

    async def run(
        self,
        coordinator: FocusCoordinator,
        snapshot: Callable[[], TimerSnapshot],
    ) -> str:
        """Run until the user quits or stops the focus cycle.

        Returns:
            'stopped' if the focus cycle was stopped, otherwise 'quit'
        """
        focus = coordinator.focus
        keyboard = KeyboardHandler()

        def view() -> Panel:
            return render_focus(focus, snapshot(), self.pending)

        try:
            with Live(view(), console=self.console, refresh_per_second=4) as live:
                while True:
                    key = keyboard.get_key()
                    if key == "p":
                        focus.pause()
                    elif key == "r":
                        focus.resume()
                    elif key == "n":
                        focus.skip()
                    elif key == "c" and self.pending is not None:
                        completion, self.pending = self.pending, None
                        coordinator.advance(completion)
                    elif key == "t":
                        await coordinator.stop_task()
                    elif key == "s":
                        coordinator.stop_focus()
                        live.update(view())
                        return "stopped"
                    elif key == "q":
                        return "quit"

                    live.update(view())
                    await asyncio.sleep(REFRESH_SECONDS)
        except KeyboardInterrupt:
            return "quit"
        finally:
            keyboard.stop()
