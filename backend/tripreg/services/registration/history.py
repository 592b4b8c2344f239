"""Diff rendering of registration history (read path only)."""

from __future__ import annotations

from collections.abc import Sequence

from tripreg.models.base import as_utc
from tripreg.models.registration import RegistrationHistory
from tripreg.services.registration.dto import HistoryEntryOut


def render_history(entries: Sequence[RegistrationHistory], *, diff: bool = True) -> list[HistoryEntryOut]:
    """
    Render newest-first snapshots.

    The oldest entry always carries every field. With ``diff`` each other
    entry only carries the fields that differ from its chronological
    predecessor, i.e. the next element of ``entries``.

    :param entries: Snapshots ordered newest first.
    :param diff: Render only changed fields when ``True``.
    :returns: Rendered entries in the same order.
    """
    rendered: list[HistoryEntryOut] = []
    last = len(entries) - 1
    for i, entry in enumerate(entries):
        if diff and i < last:
            fields = entry.fields.changed_from(entries[i + 1].fields)
        else:
            fields = entry.fields.as_dict()
        rendered.append(
            HistoryEntryOut(
                id=entry.id,
                registration_id=entry.registration_id,
                user_id=entry.user_id,
                event=entry.event,
                created_at=as_utc(entry.created_at),
                fields=fields,
            )
        )
    return rendered
