"""Argument parsing shared by the CLI commands."""

from __future__ import annotations

from datetime import datetime, timezone

import click

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M"])


def parse_pairs(raw: str, label: str) -> list[tuple[str, int]]:
    """Parse 'A:3,B:5' into [("A", 3), ("B", 5)]."""
    pairs: list[tuple[str, int]] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid format '{pair}'. Expected '{label}:Quantity'."
            )
        key, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for {label.lower()} '{key}'."
            )
        pairs.append((key.strip(), qty))
    return pairs


def as_utc(value: datetime | None) -> datetime:
    """Treat a date typed on the command line as UTC; default to now."""
    if value is None:
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
