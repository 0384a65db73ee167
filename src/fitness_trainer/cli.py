#!/usr/bin/env python3
"""
Fitness Trainer CLI.

Terminal views over the workout cache, plus a command to run the API.

Usage:
    fitness serve --port 8000
    fitness register --name Alice --email a@x.com --password pw1234
    fitness login --email a@x.com --password pw1234
    fitness profile [--height 170 --weight 65 --goal "Run a 10k"]
    fitness list [--search legs --sort title-asc]
    fitness stats
    fitness show WORKOUT_ID
    fitness add workout.json
    fitness edit WORKOUT_ID changes.json
    fitness delete WORKOUT_ID

Commands that need an account read the token from --token or FITNESS_TOKEN.
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .client.api import ApiError, FitnessApiClient
from .client.notifications import ConsoleNotifier
from .client.session import AuthSession
from .client.store import WorkoutStore
from .client.views import SortOrder, WorkoutSummary, search_workouts, sort_workouts, summarize_workouts
from .config import get_settings
from .models.users import UserResponse
from .models.workouts import Workout
from .utils.log_sanitizer import configure_logging

console = Console()

DIFFICULTY_COLORS = {
    "beginner": "green",
    "intermediate": "yellow",
    "advanced": "red",
}


def format_duration(minutes: Optional[int]) -> str:
    if minutes is None:
        return "-"
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins:02d}m" if hours else f"{mins}m"


def format_seconds(seconds: Optional[int]) -> str:
    if seconds is None:
        return "-"
    mins, secs = divmod(seconds, 60)
    return f"{mins}m {secs:02d}s" if mins else f"{secs}s"


def render_workout_table(workouts: list[Workout], title: str = "Workouts") -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("ID", style="dim")
    table.add_column("Date")
    table.add_column("Title", style="bold")
    table.add_column("Difficulty")
    table.add_column("Exercises", justify="right")
    table.add_column("Duration", justify="right")

    for workout in workouts:
        color = DIFFICULTY_COLORS.get(workout.difficulty.value, "white")
        table.add_row(
            workout.id,
            workout.date.isoformat(),
            workout.title,
            f"[{color}]{workout.difficulty.value}[/{color}]",
            str(len(workout.exercises)),
            format_duration(workout.duration),
        )
    return table


def render_workout_detail(workout: Workout) -> None:
    header = f"[bold]{workout.title}[/bold]  {workout.date.isoformat()}"
    if workout.duration is not None:
        header += f"  ({format_duration(workout.duration)})"
    if workout.description:
        header += f"\n{workout.description}"
    if workout.target_muscle_groups:
        header += f"\nTargets: {', '.join(workout.target_muscle_groups)}"
    console.print(Panel(header, subtitle=workout.difficulty.value))

    table = Table(box=box.SIMPLE)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Exercise", style="cyan")
    table.add_column("Sets", justify="right")
    table.add_column("Reps", justify="right")
    table.add_column("Weight (kg)", justify="right")
    table.add_column("Duration", justify="right")
    table.add_column("Notes")

    for index, exercise in enumerate(workout.exercises, start=1):
        table.add_row(
            str(index),
            exercise.name,
            str(exercise.sets),
            str(exercise.reps),
            "-" if exercise.weight is None else f"{exercise.weight:g}",
            format_seconds(exercise.duration),
            exercise.notes or "",
        )
    console.print(table)


def render_summary(summary: WorkoutSummary) -> None:
    console.print(Panel(
        f"Total workouts: [bold]{summary.total_workouts}[/bold]\n"
        f"This month: [bold]{summary.workouts_this_month}[/bold]",
        title="Dashboard",
    ))
    if summary.recent:
        console.print(render_workout_table(summary.recent, title="Recent workouts"))


def render_profile(user: UserResponse) -> None:
    table = Table(title="Profile", box=box.ROUNDED, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Name", user.name)
    table.add_row("Email", user.email)
    table.add_row("Height", "-" if user.height is None else f"{user.height:g} cm")
    table.add_row("Weight", "-" if user.weight is None else f"{user.weight:g} kg")
    table.add_row("Goal", user.fitness_goal or "-")
    console.print(table)


def load_json_file(path: str) -> dict:
    return json.loads(Path(path).read_text(encoding="utf-8"))


# =============================================================================
# Commands
# =============================================================================

def cmd_serve(args, session: AuthSession, store: WorkoutStore) -> int:
    from .main import run

    run(host=args.host, port=args.port)
    return 0


def cmd_register(args, session: AuthSession, store: WorkoutStore) -> int:
    profile = {
        "height": args.height,
        "weight": args.weight,
        "fitness_goal": args.goal,
    }
    profile = {k: v for k, v in profile.items() if v is not None}
    if not session.register(args.name, args.email, args.password, **profile):
        return 1
    console.print(f"export FITNESS_TOKEN={session.token}", soft_wrap=True)
    return 0


def cmd_login(args, session: AuthSession, store: WorkoutStore) -> int:
    if not session.login(args.email, args.password):
        return 1
    console.print(f"export FITNESS_TOKEN={session.token}", soft_wrap=True)
    return 0


def cmd_profile(args, session: AuthSession, store: WorkoutStore) -> int:
    fields = {
        "name": args.name,
        "height": args.height,
        "weight": args.weight,
        "fitness_goal": args.goal,
    }
    fields = {k: v for k, v in fields.items() if v is not None}

    if fields:
        user = session.update_profile(**fields)
    elif not session.is_authenticated:
        session.notifier.error("You must be logged in to view your profile")
        return 1
    else:
        try:
            user = session.api.get_profile()
        except ApiError as e:
            session.notifier.error(e.message)
            return 1

    if user is None:
        return 1
    render_profile(user)
    return 0


def cmd_list(args, session: AuthSession, store: WorkoutStore) -> int:
    workouts = store.fetch_workouts()
    if store.error:
        return 1
    if not workouts:
        console.print("[dim]No workouts yet.[/dim]")
        return 0

    workouts = sort_workouts(search_workouts(workouts, args.search), args.sort)
    if not workouts:
        console.print(f"[dim]No workouts match '{args.search}'.[/dim]")
        return 0
    console.print(render_workout_table(workouts))
    return 0


def cmd_stats(args, session: AuthSession, store: WorkoutStore) -> int:
    workouts = store.fetch_workouts()
    if store.error:
        return 1
    render_summary(summarize_workouts(workouts))
    return 0


def cmd_show(args, session: AuthSession, store: WorkoutStore) -> int:
    workout = store.get_workout(args.workout_id)
    if workout is None:
        return 1
    render_workout_detail(workout)
    return 0


def cmd_add(args, session: AuthSession, store: WorkoutStore) -> int:
    workout = store.create_workout(load_json_file(args.file))
    if workout is None:
        return 1
    console.print(f"Created [bold]{workout.title}[/bold] ({workout.id})")
    return 0


def cmd_edit(args, session: AuthSession, store: WorkoutStore) -> int:
    workout = store.update_workout(args.workout_id, load_json_file(args.file))
    if workout is None:
        return 1
    render_workout_detail(workout)
    return 0


def cmd_delete(args, session: AuthSession, store: WorkoutStore) -> int:
    return 0 if store.delete_workout(args.workout_id) else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fitness", description="Fitness Trainer CLI")
    parser.add_argument("--url", help="API base URL (default: API_BASE_URL setting)")
    parser.add_argument("--token", help="Bearer token (default: $FITNESS_TOKEN)")
    parser.add_argument("--log-level", default=None, help="Logging level")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    serve.set_defaults(func=cmd_serve)

    register = sub.add_parser("register", help="Create an account")
    register.add_argument("--name", required=True)
    register.add_argument("--email", required=True)
    register.add_argument("--password", required=True)
    register.add_argument("--height", type=float)
    register.add_argument("--weight", type=float)
    register.add_argument("--goal")
    register.set_defaults(func=cmd_register)

    login = sub.add_parser("login", help="Sign in and print a token")
    login.add_argument("--email", required=True)
    login.add_argument("--password", required=True)
    login.set_defaults(func=cmd_login)

    profile = sub.add_parser("profile", help="Show or update your profile")
    profile.add_argument("--name")
    profile.add_argument("--height", type=float)
    profile.add_argument("--weight", type=float)
    profile.add_argument("--goal")
    profile.set_defaults(func=cmd_profile)

    list_ = sub.add_parser("list", help="List your workouts")
    list_.add_argument("--search", help="Match title or description, ignoring case")
    list_.add_argument(
        "--sort",
        choices=[order.value for order in SortOrder],
        default=SortOrder.NEWEST.value,
    )
    list_.set_defaults(func=cmd_list)

    sub.add_parser("stats", help="Totals and recent workouts").set_defaults(func=cmd_stats)

    show = sub.add_parser("show", help="Show one workout")
    show.add_argument("workout_id")
    show.set_defaults(func=cmd_show)

    add = sub.add_parser("add", help="Create a workout from a JSON file")
    add.add_argument("file")
    add.set_defaults(func=cmd_add)

    edit = sub.add_parser("edit", help="Update a workout from a JSON file")
    edit.add_argument("workout_id")
    edit.add_argument("file")
    edit.set_defaults(func=cmd_edit)

    delete = sub.add_parser("delete", help="Delete a workout")
    delete.add_argument("workout_id")
    delete.set_defaults(func=cmd_delete)

    return parser


def main(argv: Optional[list[str]] = None, api: Optional[FitnessApiClient] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(args.log_level or ("DEBUG" if settings.debug else "WARNING"))

    if api is None:
        api = FitnessApiClient(base_url=args.url or settings.api_base_url)
    session = AuthSession(api, ConsoleNotifier())
    token = args.token or os.environ.get("FITNESS_TOKEN")
    if token:
        session.restore(token)
    store = WorkoutStore(session)

    try:
        return args.func(args, session, store)
    except (OSError, json.JSONDecodeError) as e:
        session.notifier.error(f"Could not read input: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
