"""
Symbol Table
============

The set of identifiers declared by the program being translated. Every
variable in the tiny language is a single numeric cell, so a name is all
there is to record.

A name is declared by its first LET target or INPUT operand. Later
declaring mentions are re-uses: nothing is re-declared and no error is
raised. Every other mention must find the name already here.

One table belongs to one translation run and is discarded with it.
"""

from typing import Iterator


class SymbolTable:
    """
    Identifiers declared so far, in first-declaration order.

    Example:
        symbols = SymbolTable()
        symbols.declare("x")      # True, first use
        symbols.declare("x")      # False, re-use
        "x" in symbols            # True
    """

    def __init__(self) -> None:
        # dict keeps insertion order; values are unused
        self._names: dict[str, None] = {}

    def declare(self, name: str) -> bool:
        """
        Insert a name if it is not present yet.

        Returns:
            True if this call declared the name, False if it was already
            declared
        """
        if name in self._names:
            return False
        self._names[name] = None
        return True

    def is_declared(self, name: str) -> bool:
        return name in self._names

    def names(self) -> list[str]:
        """Declared names in first-declaration order."""
        return list(self._names)

    def clear(self) -> None:
        self._names.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def find_similar(self, name: str, limit: int = 3) -> list[str]:
        """
        Find declared names that look like a typo of name.

        A declared name qualifies when it is at most two edits away, or one
        edit for names of three characters or fewer. Identifiers are
        case-sensitive, so a change of case counts as an edit like any
        other. Closest names come first; ties keep declaration order.
        """
        max_distance = 1 if len(name) <= 3 else 2

        candidates = []
        for order, declared in enumerate(self._names):
            distance = _typo_distance(name, declared)
            if distance <= max_distance:
                candidates.append((distance, order, declared))

        candidates.sort()
        return [declared for _, _, declared in candidates[:limit]]


def _typo_distance(typed: str, declared: str) -> int:
    """
    Count the single-character edits turning typed into declared.

    Insertion, deletion, substitution and swapping two adjacent characters
    each cost one edit, so ``cuont`` is one edit from ``count``.
    """
    rows = len(typed) + 1
    cols = len(declared) + 1
    table = [[0] * cols for _ in range(rows)]
    for i in range(rows):
        table[i][0] = i
    for j in range(cols):
        table[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            cost = 0 if typed[i - 1] == declared[j - 1] else 1
            table[i][j] = min(
                table[i - 1][j] + 1,
                table[i][j - 1] + 1,
                table[i - 1][j - 1] + cost,
            )
            if (
                i > 1 and j > 1 and
                typed[i - 1] == declared[j - 2] and
                typed[i - 2] == declared[j - 1]
            ):
                table[i][j] = min(table[i][j], table[i - 2][j - 2] + 1)

    return table[-1][-1]
