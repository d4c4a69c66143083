"""Merge server-confirmed records back into the client's draft list.

A draft and a saved record are the same logical annotation when they are on
the same page and share the first two normalized coordinates (the top-left
corner). The first saved record that matches wins. Two drafts with the same
page and corner are not told apart and may both pick up one record's identity;
this is a known precision limit and is left as is.
"""

import dataclasses
from collections.abc import Sequence

from field_mapper.annotations.models import Annotation
from field_mapper.logging.logger import Log


def matches(saved: Annotation, draft: Annotation) -> bool:
    saved_norm = saved.bbox_norm
    draft_norm = draft.bbox_norm
    if saved_norm is None or draft_norm is None:
        return False
    return (
        saved.page == draft.page
        and saved_norm[0] == draft_norm[0]
        and saved_norm[1] == draft_norm[1]
    )


def overlay(draft: Annotation, saved: Annotation) -> Annotation:
    """Copy every field of the saved record onto the draft."""
    changes = {f.name: getattr(saved, f.name) for f in dataclasses.fields(saved)}
    return dataclasses.replace(draft, **changes)


def reconcile(drafts: Sequence[Annotation], saved: Sequence[Annotation]) -> list[Annotation]:
    """Return the draft list with server identity applied to matching entries.

    Order and length are preserved; unmatched entries are returned unchanged.
    """
    merged: list[Annotation] = []
    used: dict[str | None, int] = {}
    for draft in drafts:
        match = next((s for s in saved if matches(s, draft)), None)
        if match is None:
            merged.append(draft)
            continue
        used[match.id] = used.get(match.id, 0) + 1
        merged.append(overlay(draft, match))

    shared = [record_id for record_id, count in used.items() if count > 1]
    if shared:
        Log.debug(f"Saved records matched more than one draft: {shared}")
    return merged
