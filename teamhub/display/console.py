# teamhub/display/console.py
from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from teamhub.models.collection import TeamCollection
from teamhub.models.team import TeamRecord


def _roster_table(record: TeamRecord) -> Table:
    table = Table(title=f"Roster ({len(record.players)} members)", expand=True)
    table.add_column("Nickname", style="bold")
    table.add_column("Elo", justify="right")
    table.add_column("Lvl", justify="right")
    table.add_column("Country")
    for player in record.players:
        table.add_row(player.nickname, player.elo, player.lvl, player.country)
    return table


def _matches_table(record: TeamRecord) -> Table:
    table = Table(title="Upcoming matches", expand=True)
    table.add_column("Date")
    table.add_column("Time")
    table.add_column("Opponent", style="bold")
    for match in record.matches:
        table.add_row(match.date, match.time, match.opponent)
    return table


def team_panel(record: TeamRecord) -> Panel:
    header = Text(f"{record.region} • {record.league}", style="dim")
    parts = [header, _roster_table(record)]
    if record.stats is not None:
        parts.append(
            Text(
                f"{record.stats.wins} / {record.stats.losses} • "
                f"Position: {record.stats.position}"
            )
        )
    if record.matches:
        parts.append(_matches_table(record))
    if record.ai_report:
        parts.append(Panel(Text(record.ai_report), title="AI Scouting Report"))
    return Panel(
        Group(*parts),
        title=Text(record.name, style="bold orange1"),
        subtitle=record.id,
    )


def render_collection(collection: TeamCollection, console: Optional[Console] = None) -> None:
    console = console or Console()
    if not collection.teams:
        console.print("[yellow]No teams loaded.[/]")
        return
    for record in collection.teams:
        console.print(team_panel(record))
