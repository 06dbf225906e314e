"""
Command-line interface for the meeting date scheduler.

Usage:
    python -m datecsp solve problem.json -o schedule.json --timeout 10
    python -m datecsp validate problem.json
    python -m datecsp check problem.json schedule.json
    python -m datecsp generate problem.json --meetings 6 --seed 1
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from .config import DEFAULT_NUM_BINARY, DEFAULT_NUM_DAYS, DEFAULT_NUM_MEETINGS, DEFAULT_NUM_UNARY, MAX_TIME_LIMIT_SECONDS
from .data.generator import GeneratorConfig, generate_problem, get_generation_stats
from .data.models import ProblemInput, load_problem_from_json, save_problem
from .domain import has_empty_domain
from .logging_utils import set_verbosity
from .output.schema import ScheduleOutput, create_schedule_output
from .scheduler import MeetingScheduler, verify_solution
from .validation import ProblemValidationError

# Create Typer app
app = typer.Typer(
    name="datecsp",
    help="Assign dates to meetings subject to date constraints.",
    add_completion=False,
)

# Rich console for pretty output
console = Console()


# =============================================================================
# Helper Functions
# =============================================================================

def load_input(input_path: Path) -> ProblemInput:
    """Load and validate a problem file."""
    if not input_path.exists():
        console.print(f"[red]Error:[/red] Input file not found: {input_path}")
        raise typer.Exit(code=1)

    try:
        return load_problem_from_json(input_path)
    except Exception as e:
        console.print(f"[red]Error loading input:[/red] {e}")
        raise typer.Exit(code=1)


def load_output(output_path: Path) -> ScheduleOutput:
    """Load a schedule file written by the solve command."""
    if not output_path.exists():
        console.print(f"[red]Error:[/red] Schedule file not found: {output_path}")
        raise typer.Exit(code=1)

    try:
        with open(output_path) as f:
            data = json.load(f)
        return ScheduleOutput.model_validate(data)
    except Exception as e:
        console.print(f"[red]Error loading schedule:[/red] {e}")
        raise typer.Exit(code=1)


def print_summary(output: ScheduleOutput) -> None:
    """Print solution summary to console."""
    status_color = "green" if output.is_feasible else "red"
    status_text = Text(output.status.value.upper(), style=f"bold {status_color}")

    console.print(Panel(
        status_text,
        title="Solution Status",
        subtitle=f"Solved in {output.solve_time_seconds:.3f}s"
    ))

    table = Table(title="Summary", show_header=False, box=None)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Meetings Scheduled", str(len(output.meetings)))
    table.add_row("Distinct Dates", str(len(output.by_date)))
    table.add_row("Search Nodes", str(output.stats.nodes))
    table.add_row("Rejections", str(output.stats.rejections))
    table.add_row("Backtracks", str(output.stats.backtracks))

    console.print(table)


def print_meetings(output: ScheduleOutput) -> None:
    """Print the assigned date of every meeting."""
    table = Table(title="Schedule")
    table.add_column("Meeting", style="cyan", justify="right")
    table.add_column("Date", style="white")
    table.add_column("Weekday", style="dim")

    for m in output.meetings:
        table.add_row(str(m.meeting), m.date, m.weekday)

    console.print(table)


# =============================================================================
# Commands
# =============================================================================

@app.command()
def solve(
    input_file: Path = typer.Argument(
        ...,
        help="Path to input JSON file with the problem",
        exists=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Path to write output JSON file",
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout", "-t",
        help="Maximum search time in seconds (overrides the input file)",
        min=1,
        max=MAX_TIME_LIMIT_SECONDS,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    ),
) -> None:
    """
    Solve a meeting scheduling problem.

    Example:
        python -m datecsp solve problem.json -o schedule.json --timeout 10
    """
    set_verbosity(verbose)
    console.print(f"\n[bold]Loading input from:[/bold] {input_file}")

    problem = load_input(input_file)
    summary = problem.summary()

    console.print(f"[green]Loaded:[/green] {summary['meetings']} meetings, "
                  f"{summary['days']} days, {summary['constraints']} constraints")

    scheduler = MeetingScheduler(
        problem.meeting_count,
        problem.range_start,
        problem.range_end,
        problem.to_constraints(),
    )
    scheduler.create_variables()
    scheduler.prune()

    if verbose:
        sizes = scheduler.get_statistics()["domain_sizes"]
        console.print(f"  Domain sizes after pruning: {sizes}")

    time_limit = timeout or problem.config.time_limit_seconds
    label = f"timeout: {time_limit}s" if time_limit else "no timeout"
    console.print(f"\n[bold]Solving ({label})...[/bold]")

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task("Searching for a consistent schedule...", total=None)
        solution = scheduler.solve(time_limit_seconds=time_limit)

    schedule = create_schedule_output(solution)

    console.print()
    print_summary(schedule)

    if not solution.is_feasible:
        console.print(f"\n[red]No solution found.[/red]")
        raise typer.Exit(code=1)

    print_meetings(schedule)

    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w") as f:
            f.write(schedule.to_json())
        console.print(f"\n[green]Schedule saved to:[/green] {output}")

    console.print()


@app.command()
def validate(
    input_file: Path = typer.Argument(
        ...,
        help="Path to input JSON file to validate",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Show detailed validation results",
    ),
) -> None:
    """
    Validate a problem file.

    Checks for:
    - Valid JSON structure
    - Schema compliance (operators, operands, meeting references)
    - Meetings left without candidate dates by the fixed-date constraints

    Example:
        python -m datecsp validate problem.json
    """
    console.print(f"\n[bold]Validating:[/bold] {input_file}\n")

    if not input_file.exists():
        console.print(f"[red]Error:[/red] File not found: {input_file}")
        raise typer.Exit(code=1)

    # Step 1: JSON parsing
    console.print("[cyan]1. Checking JSON syntax...[/cyan]")
    try:
        with open(input_file) as f:
            json.load(f)
        console.print("   [green]JSON syntax is valid[/green]")
    except json.JSONDecodeError as e:
        console.print(f"   [red]Invalid JSON:[/red] {e}")
        raise typer.Exit(code=1)

    # Step 2: Schema validation
    console.print("[cyan]2. Validating against schema...[/cyan]")
    try:
        problem = load_problem_from_json(input_file)
        console.print("   [green]Schema validation passed[/green]")
    except Exception as e:
        console.print(f"   [red]Schema validation failed:[/red]")
        for line in str(e).split("\n"):
            console.print(f"   {line}")
        raise typer.Exit(code=1)

    # Step 3: Domains after pruning
    console.print("[cyan]3. Checking candidate dates...[/cyan]")
    scheduler = MeetingScheduler(
        problem.meeting_count,
        problem.range_start,
        problem.range_end,
        problem.to_constraints(),
    )
    scheduler.create_variables()
    scheduler.prune()

    if has_empty_domain(scheduler.variables):
        empty = [str(v.index) for v in scheduler.variables if not v.domain]
        console.print("   [yellow]Warnings found:[/yellow]")
        console.print(f"   - Meetings with no candidate dates: {', '.join(empty)}")
    else:
        console.print("   [green]Every meeting has candidate dates[/green]")

    # Summary
    summary = problem.summary()
    console.print("\n[bold]Summary:[/bold]")
    table = Table(show_header=False, box=None)
    table.add_column("Item", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Meetings", str(summary["meetings"]))
    table.add_row("Date range", f"{summary['range_start']} .. {summary['range_end']}")
    table.add_row("Days", str(summary["days"]))
    table.add_row("Unary constraints", str(summary["unary_constraints"]))
    table.add_row("Binary constraints", str(summary["binary_constraints"]))

    console.print(table)

    if verbose:
        console.print("\n[bold]Constraints:[/bold]")
        for spec in problem.constraints:
            console.print(f"  {spec}")
        console.print("\n[bold]Domain sizes after pruning:[/bold]")
        for variable in scheduler.variables:
            console.print(f"  meeting{variable.index}: {len(variable.domain)}")

    console.print("\n[green]Validation complete.[/green]\n")


@app.command()
def check(
    input_file: Path = typer.Argument(
        ...,
        help="Path to the problem JSON file",
        exists=True,
    ),
    schedule_file: Path = typer.Argument(
        ...,
        help="Path to the schedule JSON file to check",
        exists=True,
    ),
) -> None:
    """
    Check a schedule against every constraint of a problem.

    Example:
        python -m datecsp check problem.json schedule.json
    """
    problem = load_input(input_file)
    schedule = load_output(schedule_file)

    dates = schedule.dates()
    if dates is None:
        console.print(f"[yellow]Schedule has status {schedule.status.value}; nothing to check.[/yellow]")
        raise typer.Exit(code=1)

    out_of_range = [
        str(i) for i, d in enumerate(dates)
        if not problem.range_start <= d <= problem.range_end
    ]

    try:
        violated = verify_solution(dates, problem.to_constraints(), problem.meeting_count)
    except ProblemValidationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    if out_of_range:
        console.print(f"[red]Meetings outside the date range:[/red] {', '.join(out_of_range)}")
    for constraint in violated:
        console.print(f"[red]Violated:[/red] {constraint}")

    if violated or out_of_range:
        raise typer.Exit(code=1)

    console.print(f"[green]All {len(problem.constraints)} constraints satisfied.[/green]")


@app.command()
def generate(
    output: Path = typer.Argument(
        ...,
        help="Path to write the generated problem JSON",
    ),
    meetings: int = typer.Option(DEFAULT_NUM_MEETINGS, "--meetings", "-m", min=0, help="Number of meetings"),
    days: int = typer.Option(DEFAULT_NUM_DAYS, "--days", "-d", min=1, help="Days in the date range"),
    unary: int = typer.Option(DEFAULT_NUM_UNARY, "--unary", min=0, help="Number of fixed-date constraints"),
    binary: int = typer.Option(DEFAULT_NUM_BINARY, "--binary", min=0, help="Number of meeting-to-meeting constraints"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    free_draw: bool = typer.Option(
        False,
        "--any",
        help="Draw constraints freely instead of around a known solution",
    ),
) -> None:
    """
    Generate a random problem file.

    Example:
        python -m datecsp generate problem.json --meetings 6 --seed 1
    """
    try:
        config = GeneratorConfig(
            num_meetings=meetings,
            num_days=days,
            num_unary=unary,
            num_binary=binary,
            satisfiable=not free_draw,
            seed=seed,
        )
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    problem = generate_problem(config)
    save_problem(problem, output)

    stats = get_generation_stats(problem)
    console.print(f"[green]Problem written to:[/green] {output}")
    console.print(f"  {stats['meetings']} meetings, {stats['days']} days, "
                  f"{stats['unary_constraints']} unary and {stats['binary_constraints']} binary constraints")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
