"""Thread-safe in-memory store of Match records.

Every public method takes the repository's reader-writer lock for its whole
duration, so a reader never sees a half-applied mutation. Absent ids are
reported through `None`/`False` return values rather than exceptions; the
HTTP layer turns those into 404 responses.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import AbstractSet, Callable, Dict, List, Optional

from matchtracker.locks import ReadWriteLock
from matchtracker.models import COUNTER_FIELDS, TEXT_FIELDS, Match

logger = logging.getLogger(__name__)


class MatchRepository:
    """Mapping of match id -> Match with monotonically assigned ids.

    Ids start at 1 and are never reused, even after a delete. Stored records
    are private: callers always receive copies.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._matches: Dict[int, Match] = {}
        self._next_id = 1

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._matches)

    def list_matches(self) -> List[Match]:
        with self._lock.read_locked():
            return [replace(m) for m in self._matches.values()]

    def get_match(self, match_id: int) -> Optional[Match]:
        with self._lock.read_locked():
            match = self._matches.get(match_id)
            return replace(match) if match is not None else None

    def create_match(self, match: Match) -> int:
        """Store a copy of `match` under the next id and return that id."""
        with self._lock.write_locked():
            match_id = self._next_id
            self._matches[match_id] = replace(match, id=match_id)
            self._next_id += 1
        logger.info("created match %d (%s vs %s)", match_id, match.home_team, match.away_team)
        return match_id

    def update_match(
        self,
        match_id: int,
        match: Match,
        fields: Optional[AbstractSet[str]] = None,
    ) -> bool:
        """Replace the stored record for `match_id`, keeping its id.

        `fields` lists the attributes the caller actually supplied. Team and
        date text is always replaced; a counter only when it was supplied, so
        a PUT that leaves out `goalCount` does not wipe the score. `extra_time`
        can be raised to True here but never lowered. With `fields=None`
        every attribute counts as supplied.
        """
        with self._lock.write_locked():
            current = self._matches.get(match_id)
            if current is None:
                return False

            changes = {name: getattr(match, name) for name in TEXT_FIELDS}
            for name in COUNTER_FIELDS:
                if fields is None or name in fields:
                    changes[name] = getattr(match, name)
            changes["extra_time"] = current.extra_time or (
                (fields is None or "extra_time" in fields) and match.extra_time
            )
            self._matches[match_id] = replace(current, **changes)
        logger.debug("updated match %d", match_id)
        return True

    def delete_match(self, match_id: int) -> bool:
        with self._lock.write_locked():
            if match_id not in self._matches:
                return False
            del self._matches[match_id]
        logger.info("deleted match %d", match_id)
        return True

    def _mutate(self, match_id: int, apply: Callable[[Match], None], what: str) -> bool:
        with self._lock.write_locked():
            match = self._matches.get(match_id)
            if match is None:
                return False
            apply(match)
        logger.debug("%s recorded for match %d", what, match_id)
        return True

    def register_goal(self, match_id: int) -> bool:
        def _apply(m: Match) -> None:
            m.goal_count += 1

        return self._mutate(match_id, _apply, "goal")

    def register_yellow_card(self, match_id: int) -> bool:
        def _apply(m: Match) -> None:
            m.yellow_cards += 1

        return self._mutate(match_id, _apply, "yellow card")

    def register_red_card(self, match_id: int) -> bool:
        def _apply(m: Match) -> None:
            m.red_cards += 1

        return self._mutate(match_id, _apply, "red card")

    def set_extra_time(self, match_id: int) -> bool:
        """Flag the match as having gone to extra time. Idempotent."""
        def _apply(m: Match) -> None:
            m.extra_time = True

        return self._mutate(match_id, _apply, "extra time")
