"""Index from series ids to their rules and member events."""

from datetime import datetime, timedelta
from typing import Optional

from ..models.event import EventKey
from ..models.series import SeriesRule


class SeriesIndex:
    """
    Tracks which events belong to which series.

    Membership is weak: the index stores event keys, never events, and the
    owning calendar keeps it in step with its event set.
    """

    def __init__(self) -> None:
        self._rules: dict[str, SeriesRule] = {}
        self._members: dict[str, list[EventKey]] = {}

    def __contains__(self, series_id: object) -> bool:
        return series_id in self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def add(self, rule: SeriesRule, keys: list[EventKey]) -> None:
        """Register a series and its member keys."""
        self._rules[rule.series_id] = rule
        self._members[rule.series_id] = sorted(keys, key=_by_start)

    def rule(self, series_id: Optional[str]) -> Optional[SeriesRule]:
        if series_id is None:
            return None
        return self._rules.get(series_id)

    def members(self, series_id: str) -> list[EventKey]:
        """Member keys of a series ordered by start."""
        return list(self._members.get(series_id, []))

    def members_from(self, series_id: str, start: datetime) -> list[EventKey]:
        """Member keys starting at or after ``start``."""
        return [key for key in self._members.get(series_id, []) if key[1] >= start]

    def rekey(self, series_id: str, mapping: dict[EventKey, EventKey]) -> None:
        """
        Replace member keys after their events changed subject or start.

        All keys are swapped at once, so a new key may equal another
        member's old key.
        """
        members = self._members[series_id]
        self._members[series_id] = sorted(
            (mapping.get(key, key) for key in members), key=_by_start
        )

    def detach(self, series_id: str, key: EventKey) -> None:
        """
        Remove one member from a series.

        Count-terminated rules lose one occurrence; an emptied series is
        dropped altogether.
        """
        members = self._members.get(series_id)
        if not members or key not in members:
            return
        members.remove(key)
        if not members:
            self.remove(series_id)
            return
        rule = self._rules[series_id]
        if rule.occurrences is not None:
            self._rules[series_id] = rule.model_copy(
                update={"occurrences": rule.occurrences - 1}
            )

    def split(self, series_id: str, at: datetime) -> Optional[SeriesRule]:
        """
        Split a series so members starting at or after ``at`` form a new one.

        The earlier members keep the original id, with the rule truncated
        before ``at``. Nothing happens when no member precedes ``at``.

        Returns:
            Rule of the new tail series, or None if no split was needed
        """
        members = self._members[series_id]
        head = [key for key in members if key[1] < at]
        tail = [key for key in members if key[1] >= at]
        if not head or not tail:
            return None

        rule = self._rules[series_id]
        if rule.occurrences is not None:
            head_rule = rule.model_copy(update={"occurrences": len(head)})
            tail_rule = rule.renewed(occurrences=len(tail))
        else:
            head_rule = rule.model_copy(update={"until": at.date() - timedelta(days=1)})
            tail_rule = rule.renewed()

        self._rules[series_id] = head_rule
        self._members[series_id] = head
        self.add(tail_rule, tail)
        return tail_rule

    def remove(self, series_id: str) -> None:
        self._rules.pop(series_id, None)
        self._members.pop(series_id, None)


def _by_start(key: EventKey) -> tuple[datetime, str]:
    return (key[1], key[0])
