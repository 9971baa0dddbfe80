from __future__ import annotations

import dataclasses

from scorewave.model.program import Program
from scorewave.model.types import Part


def collate_part(part: Part, program: Program) -> Part:
    """Lay the notes of `part` out in the order `program` plays them.

    Each segment contributes the notes starting inside it, moved so the
    segment begins where the previous ones left off. A note running past
    the end of its segment is cut there; a note that started before the
    segment is not picked up. Repeated segments repeat their notes.
    """
    notes = []
    elapsed = 0.0
    for start, stop in program.segments:
        for note in part.notes:
            if start <= note.offset < stop:
                notes.append(
                    dataclasses.replace(
                        note,
                        offset=elapsed + (note.offset - start),
                        duration=min(note.end, stop) - note.offset,
                    )
                )
        elapsed += stop - start
    return dataclasses.replace(part, notes=notes)
