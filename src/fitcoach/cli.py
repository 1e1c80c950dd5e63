#!/usr/bin/env python3
"""
fitcoach CLI.

Workout progression from the terminal: stats, workouts, daily challenge
and achievements.

Usage:
    fitcoach stats                      # Level, XP and streak
    fitcoach complete "Morning HIIT" --duration 25:30 --calories 280
    fitcoach history --limit 10         # Recent workouts
    fitcoach weekly                     # Last seven days by weekday
    fitcoach challenge                  # Today's challenge
    fitcoach achievements               # Achievement catalog
    fitcoach reset --achievements       # Start over
"""

import argparse
import asyncio
import logging
from typing import List, Optional

from pydantic import ValidationError as PydanticValidationError
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table

from .config import get_settings
from .exceptions import FitCoachError
from .models.progress import AchievementRarity, WorkoutCompletion
from .services.progression import ProgressionEngine
from .services.stats_service import level_progress
from .storage import create_store
from .utils.log_sanitizer import install_log_sanitizer

console = Console()


def get_rarity_color(rarity: AchievementRarity) -> str:
    """Get rich color for an achievement rarity."""
    colors = {
        AchievementRarity.COMMON: "white",
        AchievementRarity.RARE: "blue",
        AchievementRarity.EPIC: "magenta",
        AchievementRarity.LEGENDARY: "yellow",
    }
    return colors.get(rarity, "white")


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    install_log_sanitizer()


# =============================================================================
# Commands
# =============================================================================

async def cmd_stats(args, engine: ProgressionEngine):
    """Show level, XP and streak."""
    stats = await engine.stats.get_stats()
    info = level_progress(stats.experience)

    console.print()
    console.print(Panel(f"[bold]Level {stats.level}[/bold]  {stats.experience} XP"))
    console.print(ProgressBar(total=100, completed=info.progress_percent, width=40))
    console.print(f"[dim]{info.xp_for_next} XP to level {info.level + 1}[/dim]")
    console.print()

    table = Table(box=box.ROUNDED)
    table.add_column("Statistic", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Workouts", str(stats.total_workouts))
    table.add_row("Calories", str(stats.total_calories))
    table.add_row("Minutes", str(stats.total_minutes))
    table.add_row("Current streak", f"{stats.current_streak} days")
    table.add_row("Best streak", f"{stats.best_streak} days")
    table.add_row("This week", str(stats.weekly_workouts))
    table.add_row("This month", str(stats.monthly_workouts))
    table.add_row("Achievements", str(stats.achievements))
    table.add_row("Last workout", stats.last_workout_date or "-")

    console.print(table)
    console.print()


async def cmd_complete(args, engine: ProgressionEngine):
    """Record a completed workout."""
    completion = WorkoutCompletion(
        video_id=args.video_id or args.title.lower().replace(" ", "-"),
        title=args.title,
        duration=args.duration,
        calories=args.calories,
        minutes=args.minutes,
        category=args.category,
        difficulty=args.difficulty,
    )
    result = await engine.complete_workout(completion)
    stats = result.stats

    console.print()
    console.print(Panel(
        f"[bold green]Workout logged:[/bold green] {completion.title}\n"
        f"Level {stats.level} | {stats.experience} XP | "
        f"streak {stats.current_streak} day{'s' if stats.current_streak != 1 else ''}"
    ))

    challenge = result.challenge
    if challenge is not None:
        status = "[green]completed[/green]" if challenge.completed else f"{challenge.current}/{challenge.target}"
        console.print(f"Daily challenge: {challenge.title} ({status})")

    for achievement in result.new_achievements:
        color = get_rarity_color(achievement.rarity)
        console.print(
            f"[bold {color}]Achievement unlocked:[/bold {color}] "
            f"{achievement.title} (+{achievement.experience} XP)"
        )
    console.print()


async def cmd_history(args, engine: ProgressionEngine):
    """Show recent workouts."""
    history = await engine.history.get_all()
    if not history:
        console.print("[yellow]No workouts logged yet.[/yellow]")
        return

    table = Table(title="Workout History", box=box.ROUNDED)
    table.add_column("Completed", style="cyan")
    table.add_column("Workout")
    table.add_column("Category")
    table.add_column("Min", justify="right")
    table.add_column("Kcal", justify="right")

    for item in history[:args.limit]:
        table.add_row(
            item.completed_at.strftime("%Y-%m-%d %H:%M"),
            item.title,
            item.category,
            str(item.minutes),
            str(item.calories),
        )

    console.print(table)


async def cmd_weekly(args, engine: ProgressionEngine):
    """Show per-weekday totals for the last seven days."""
    days = await engine.history.weekly_progress()

    table = Table(title="Last 7 Days", box=box.ROUNDED)
    table.add_column("Day", style="cyan")
    table.add_column("Workouts", justify="right")
    table.add_column("Minutes", justify="right")
    table.add_column("Calories", justify="right")

    for day in days:
        style = "bold" if day.workouts else "dim"
        table.add_row(day.day, str(day.workouts), str(day.minutes), str(day.calories), style=style)

    console.print(table)


async def cmd_challenge(args, engine: ProgressionEngine):
    """Show today's challenge."""
    challenge = await engine.challenges.get_daily_challenge()
    done = "[green]Completed![/green]" if challenge.completed else f"{challenge.current}/{challenge.target}"

    console.print()
    console.print(Panel(
        f"[bold]{challenge.title}[/bold]\n{challenge.description}\n\n"
        f"Progress: {done}\nReward: {challenge.reward}",
        title=f"Daily Challenge {challenge.date}",
    ))
    console.print()


async def cmd_achievements(args, engine: ProgressionEngine):
    """Show the achievement catalog."""
    achievements = await engine.achievements.get_achievements()
    unlocked = sum(1 for a in achievements if a.unlocked)

    table = Table(title=f"Achievements ({unlocked}/{len(achievements)})", box=box.ROUNDED)
    table.add_column("", width=2)
    table.add_column("Achievement")
    table.add_column("Rarity")
    table.add_column("Progress", justify="right")
    table.add_column("XP", justify="right")

    for achievement in achievements:
        color = get_rarity_color(achievement.rarity)
        table.add_row(
            "[green]✓[/green]" if achievement.unlocked else "",
            f"{achievement.title}\n[dim]{achievement.description}[/dim]",
            f"[{color}]{achievement.rarity.value}[/{color}]",
            f"{min(achievement.current, achievement.requirement)}/{achievement.requirement}",
            str(achievement.experience),
        )

    console.print(table)


async def cmd_reset(args, engine: ProgressionEngine):
    """Reset stats (and optionally achievements)."""
    if not args.yes:
        answer = console.input("Reset all progress? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            console.print("Cancelled.")
            return

    await engine.reset(include_achievements=args.achievements)
    scope = "Stats and achievements" if args.achievements else "Stats"
    console.print(f"[green]{scope} reset.[/green]")


COMMANDS = {
    "stats": cmd_stats,
    "complete": cmd_complete,
    "history": cmd_history,
    "weekly": cmd_weekly,
    "challenge": cmd_challenge,
    "achievements": cmd_achievements,
    "reset": cmd_reset,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fitcoach",
        description="fitcoach - workout progression and daily challenges",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fitcoach stats
  fitcoach complete "Morning HIIT" --duration 25:30 --calories 280
  fitcoach history --limit 5
  fitcoach challenge
  fitcoach reset --yes
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("stats", help="Show level, XP and streak")

    complete_p = subparsers.add_parser("complete", help="Record a completed workout")
    complete_p.add_argument("title", help="Workout title")
    complete_p.add_argument("--duration", "-d", default="0:00", help="Duration as M:SS or H:MM:SS")
    complete_p.add_argument("--calories", "-c", type=int, default=150, help="Calories burned")
    complete_p.add_argument("--minutes", "-m", type=int, help="Minutes exercised (default: from duration)")
    complete_p.add_argument("--video-id", help="Catalog video id")
    complete_p.add_argument("--category", default="General")
    complete_p.add_argument("--difficulty", default="Intermediate")

    history_p = subparsers.add_parser("history", help="Show recent workouts")
    history_p.add_argument("--limit", "-n", type=int, default=10, help="Number of workouts to show")

    subparsers.add_parser("weekly", help="Show the last seven days by weekday")
    subparsers.add_parser("challenge", help="Show today's challenge")
    subparsers.add_parser("achievements", help="Show the achievement catalog")

    reset_p = subparsers.add_parser("reset", help="Reset progress")
    reset_p.add_argument("--achievements", action="store_true", help="Also lock all achievements")
    reset_p.add_argument("--yes", "-y", action="store_true", help="Skip confirmation")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    command = COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        return 1

    setup_logging(args.verbose)
    engine = ProgressionEngine(create_store())

    try:
        asyncio.run(command(args, engine))
    except FitCoachError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        return 1
    except PydanticValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        console.print(f"[red]Invalid {field}:[/red] {error['msg']}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
