# care/rules.py
"""
Fluia Care — Ordered Rule Tables

Priority-ordered decisions (problem detection, tone, goal text, eligibility
blocks) are written as tables of predicate -> result pairs evaluated top to
bottom. Keeping them as data makes the priority order readable in one place
and testable row by row.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, List, Optional, TypeVar

C = TypeVar("C")  # evaluation context
R = TypeVar("R")  # rule result


@dataclass(frozen=True)
class Rule(Generic[C, R]):
    """A named predicate with the result it yields when it holds."""
    name: str
    predicate: Callable[[C], bool]
    result: Any  # R, or a callable C -> R for results built from the context

    def applies(self, context: C) -> bool:
        return bool(self.predicate(context))

    def resolve(self, context: C) -> R:
        if callable(self.result):
            return self.result(context)
        return self.result


def first_match(rules: Iterable[Rule[C, R]], context: C, default: Optional[R] = None) -> Optional[R]:
    """Result of the first rule whose predicate holds, else `default`."""
    for rule in rules:
        if rule.applies(context):
            return rule.resolve(context)
    return default


def first_matching_rule(rules: Iterable[Rule[C, R]], context: C) -> Optional[Rule[C, R]]:
    """The first rule whose predicate holds, or None."""
    for rule in rules:
        if rule.applies(context):
            return rule
    return None


def all_matches(rules: Iterable[Rule[C, R]], context: C) -> List[R]:
    """Results of every rule that holds, in table order."""
    return [rule.resolve(context) for rule in rules if rule.applies(context)]


__all__ = [
    "Rule",
    "first_match",
    "first_matching_rule",
    "all_matches",
]
