# PROV: MOTIONDIFF.REPORT.01
# WHY: Collect mismatch entries for one comparison in a deterministic, append-only buffer.

from __future__ import annotations


class DiffReport:
    """Ordered mismatch entries for a single event comparison.

    Each entry carries its own trailing space; the report text is the plain
    concatenation of the entries in the order they were written.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []

    def write(self, entry: str) -> None:
        self._entries.append(entry)

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __str__(self) -> str:
        return "".join(self._entries)
