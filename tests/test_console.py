"""
Tests for the rich console rendering.
"""
from rich.console import Console

from teamhub.display.console import render_collection
from teamhub.extraction.pipeline import extract_team
from teamhub.models.collection import TeamCollection

from conftest import build_page


def rendered(collection: TeamCollection) -> str:
    console = Console(record=True, width=120, color_system=None)
    render_collection(collection, console)
    return console.export_text()


def test_renders_roster_matches_and_report():
    record = extract_team(build_page())
    collection = TeamCollection().append_batch([record]).attach_report(record.id, "Equipa em forma")
    text = rendered(collection)
    assert "Lusitanos" in text
    assert "fer0x" in text
    assert "Dragões" in text
    assert "7 W / 2 L" in text
    assert "Equipa em forma" in text


def test_empty_collection():
    assert "No teams loaded" in rendered(TeamCollection())
