"""Interactive CLI application."""
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from qotd.calendar_view import WEEKDAY_HEADER
from qotd.config import load_settings
from qotd.dates import long_date
from qotd.errors import AlreadyAnsweredToday, LoadError
from qotd.models import AnswerResult, CalendarGrid, Question, Stats
from qotd.session import QuizSession
from qotd.streak import displayed_streak

console = Console()
logger = logging.getLogger(__name__)

LETTERS = ["A", "B", "C", "D"]


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def get_accuracy_color(accuracy: int) -> str:
    if accuracy >= 80:
        return "green"
    elif accuracy >= 65:
        return "yellow"
    elif accuracy >= 50:
        return "dark_orange"
    return "red"


def show_welcome():
    console.print(Panel(
        "[bold]Question of the Day[/bold]\n[dim]One question, every day[/dim]",
        title="Welcome", border_style="blue",
    ))


def show_menu():
    console.print("\n[bold]Commands:[/bold]")
    commands = [
        ("today", "Today's question"),
        ("stats", "Streak and accuracy"),
        ("calendar", "Answered days this month"),
        ("prev", "Previous month"),
        ("next", "Next month"),
        ("reset", "Erase all progress"),
        ("quit", "Exit"),
    ]
    for cmd, desc in commands:
        console.print(f"  [cyan]{cmd:<14}[/cyan] {desc}")


def show_error(message: str):
    console.print(Panel(f"[bold red]{message}[/bold red]", border_style="red"))


def show_question(session: QuizSession, question: Question):
    header = f"[cyan]{question.subject}[/cyan]  [dim]{question.difficulty}[/dim]"
    console.print(Panel(
        f"{header}\n\n[bold]{question.text}[/bold]",
        title="Today's Question", subtitle=long_date(session.today()), border_style="cyan",
    ))
    for letter, choice in zip(LETTERS, question.choices):
        console.print(f"  [cyan]{letter.lower()})[/cyan] {choice}")


def prompt_answer(question: Question) -> int:
    letters = [letter.lower() for letter in LETTERS[:len(question.choices)]]
    answer = Prompt.ask("\nYour answer", choices=letters)
    return letters.index(answer.strip().lower())


def show_result(result: AnswerResult):
    if result.correct:
        feedback = "[green]That's correct![/green]"
    else:
        feedback = "[yellow]Not quite right, but here's why:[/yellow]"
    lines = [
        feedback,
        "",
        f"Correct Answer: [green]{result.correct_choice}[/green]",
    ]
    if result.question.explanation:
        lines += ["", "[bold]Explanation:[/bold]", result.question.explanation]
    lines += [
        "",
        f"Current Streak: [bold]{displayed_streak(result.streak)}[/bold] days",
        "[dim]Come back tomorrow for a new challenge![/dim]",
    ]
    console.print(Panel("\n".join(lines), title="Question Completed!", border_style="green"))


def show_already_answered(session: QuizSession):
    streak = displayed_streak(session.streak())
    console.print(Panel(
        "[bold]You've already answered today's question![/bold]\n"
        "[dim]Come back tomorrow for a new challenge![/dim]\n\n"
        f"Current Streak: [bold]{streak}[/bold] days",
        title="Today's Question", subtitle=long_date(session.today()),
    ))


def show_stats(stats: Stats, streak: int):
    color = get_accuracy_color(stats.accuracy)
    console.print(f"\n  Streak: [bold]{streak}[/bold]  |  "
                  f"Correct: [bold]{stats.correct_answers}[/bold]  |  "
                  f"Accuracy: [{color}]{stats.accuracy}%[/{color}]")


def show_calendar(grid: CalendarGrid):
    table = Table(title=grid.label)
    for name in WEEKDAY_HEADER:
        table.add_column(name, justify="center")
    for week in grid.weeks():
        row = []
        for cell in week:
            if cell.is_empty:
                row.append("")
                continue
            text = str(cell.day)
            if cell.is_answered:
                text = f"[bold red]{text}*[/bold red]"
            if cell.is_today:
                text = f"[reverse]{text}[/reverse]"
            row.append(text)
        table.add_row(*row)
    console.print(table)


def cmd_today(session: QuizSession):
    decision = session.decide()
    if decision.completed:
        show_already_answered(session)
        return
    question = decision.question
    show_question(session, question)
    selected = prompt_answer(question)
    try:
        result = session.submit(question, selected)
    except AlreadyAnsweredToday:
        show_already_answered(session)
        return
    show_result(result)
    show_stats(result.stats, displayed_streak(result.streak))


def cmd_stats(session: QuizSession):
    show_stats(session.stats(), displayed_streak(session.streak()))


def cmd_calendar(session: QuizSession):
    show_calendar(session.calendar())


def cmd_navigate(session: QuizSession, direction: int):
    grid = session.navigate_calendar(direction)
    if grid is None:
        console.print("[dim]Calendar is busy, try again.[/dim]")
        return
    show_calendar(grid)


def cmd_reset(session: QuizSession):
    if Confirm.ask("Erase all progress?", default=False):
        session.reset()
        console.print("[green]Progress erased.[/green]")


def run_command(session: QuizSession, choice: str) -> bool:
    """Run one menu command. Returns False when the user asked to quit."""
    try:
        if choice == "today":
            session.stats()
            cmd_today(session)
        elif choice == "stats":
            cmd_stats(session)
        elif choice == "calendar":
            cmd_calendar(session)
        elif choice == "prev":
            cmd_navigate(session, -1)
        elif choice == "next":
            cmd_navigate(session, 1)
        elif choice == "reset":
            cmd_reset(session)
        elif choice in ("quit", "exit", "q"):
            console.print("[dim]See you tomorrow![/dim]")
            return False
        else:
            console.print("[red]Unknown command. Try again.[/red]")
    except KeyboardInterrupt:
        console.print("\n[dim]Use 'quit' to exit.[/dim]")
    except Exception as e:
        logger.debug("Command %r failed", choice, exc_info=True)
        console.print(f"[red]Error: {e}[/red]")
    return True


def main():
    settings = load_settings()
    configure_logging(settings.log_level)
    try:
        session = QuizSession.start(settings)
    except LoadError as e:
        show_error(f"Failed to load questions. {e}")
        sys.exit(1)

    show_welcome()
    run_command(session, "today")

    while True:
        show_menu()
        choice = Prompt.ask("\n[bold]>[/bold]", default="today").strip().lower()
        if not run_command(session, choice):
            break


if __name__ == "__main__":
    main()
