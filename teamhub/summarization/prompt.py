from teamhub.models.team import TeamRecord


def build_prompt(record: TeamRecord, language: str) -> str:
    """Builds the scouting-report request for one team."""
    players = ", ".join(f"{p.nickname} (Elo: {p.elo})" for p in record.players)
    opponents = ", ".join(m.opponent for m in record.matches)

    lines = [
        f"Analyze this CS2 Team: {record.name}.",
        f"League: {record.league} in {record.region}.",
        f"Players: {players}.",
        f"Scheduled matches against: {opponents}.",
    ]
    if record.stats is not None:
        lines.append(f"Record: {record.stats.wins}-{record.stats.losses}.")
    lines.append(
        f"Give a short, motivating esports scouting report summary in {language}. "
        "Format it as short bullet points."
    )
    return "\n".join(lines)
