"""CLI command for computing typing statistics from a recorded keystroke log."""

import json
from pathlib import Path

from ambitype.interfaces import PresenterProtocol
from ambitype.models import TypingEvent
from ambitype.presenters import ConsolePresenter
from ambitype.services.typing_stats import (
    calculate_accuracy,
    calculate_rolling_wpm_from_events,
    calculate_session_average_wpm,
)


def load_events(path: Path) -> list[TypingEvent]:
    """Read a JSON list of ``{t, chars, correctChars}`` objects, sorted by time.

    Raises:
        ValueError: If the file is not a list of event objects
    """
    raw = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise ValueError("Event log must be a JSON list")

    events = []
    for item in raw:
        if not isinstance(item, dict) or "t" not in item:
            raise ValueError(f"Invalid event: {item!r}")
        events.append(
            TypingEvent(
                t=int(item["t"]),
                chars=int(item.get("chars", 1)),
                correct_chars=int(item.get("correctChars", item.get("correct_chars", 0))),
            )
        )
    return sorted(events, key=lambda event: event.t)


def stats_command(args, presenter: PresenterProtocol | None = None) -> int:
    """Execute the stats subcommand.

    Args:
        args: Parsed command-line arguments
        presenter: Output presenter (console by default)

    Returns:
        Exit code (0 = success, 1 = failure)
    """
    presenter = presenter or ConsolePresenter()
    events_file = Path(args.events)

    if not events_file.is_file():
        presenter.show_error(f"Event log not found: {events_file}")
        return 1

    try:
        events = load_events(events_file)
    except (OSError, ValueError, TypeError) as e:
        presenter.show_error(f"Could not read event log: {e}")
        return 1

    if not events:
        presenter.show_warning("Event log is empty")
        return 0

    end = events[-1].t
    rolling = calculate_rolling_wpm_from_events(events, end, args.window_ms)
    total_chars = sum(event.chars for event in events)
    correct_chars = sum(event.correct_chars for event in events)
    session_ms = end - events[0].t

    presenter.show_info(f"Events: {len(events)} over {session_ms / 1000:.1f}s")
    presenter.show_info(
        f"Rolling WPM (last {args.window_ms} ms): {rolling.rolling_wpm} ({rolling.raw_wpm} raw)"
    )
    presenter.show_info(
        f"Average pace: {calculate_session_average_wpm(correct_chars, session_ms)} wpm"
    )
    presenter.show_info(f"Accuracy: {calculate_accuracy(correct_chars, total_chars)}%")
    return 0
