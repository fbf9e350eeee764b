"""
Ranking of table indexes for ordered scans
"""
import logging
from typing import Any, Callable, List, Optional, Tuple

from table_inspector.core.errors import IndexNotFound, NoUsableIndex
from table_inspector.models.schema import PRIMARY_KEY_NAME, Key, KeyKind, Table

Observer = Callable[[str, Any], None]


class IndexSelector:
    """
    Picks the best index to walk a table in key order

    Could be replaced by mysql.innodb_index_stats, but that needs a live
    server and a fresh ANALYZE TABLE.
    """

    def __init__(self, logger: Optional[logging.Logger] = None,
                 observer: Optional[Observer] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.observer = observer

    def _trace(self, message: str, value: Any) -> None:
        self.logger.debug(f"{message}: {value!r}")
        if self.observer is not None:
            self.observer(message, value)

    @staticmethod
    def _rank(table: Table, key: Key) -> Tuple[bool, bool, bool, int]:
        # False sorts first
        return (
            key.name != PRIMARY_KEY_NAME,
            not key.unique,
            table.key_is_nullable(key),
            -len(key.columns),
        )

    def sort_indexes(self, table: Table) -> List[Key]:
        """
        Sort BTREE indexes, best first

        Order: PRIMARY, unique, all columns NOT NULL, more columns; ties
        keep declaration order.
        """
        candidates = [key for key in table.keys.values() if key.kind == KeyKind.BTREE]
        ranked = sorted(candidates, key=lambda key: self._rank(table, key))
        self._trace("Sorted indexes, best is first", [key.name for key in ranked])
        return ranked

    def find_best_index(self, table: Table, preferred: Optional[str] = None) -> str:
        """
        Find the index to use for a table

        Args:
            table: Parsed table
            preferred: Index requested by the caller, if any

        Returns:
            Name of the chosen index

        Raises:
            IndexNotFound: If the preferred index does not exist in the table
            NoUsableIndex: If no preference is given and the table has no BTREE index
        """
        if preferred:
            if preferred not in table.keys:
                raise IndexNotFound(preferred, table.name)
            best = preferred
        else:
            ranked = self.sort_indexes(table)
            if not ranked:
                raise NoUsableIndex(table.name)
            best = ranked[0].name

        self._trace("Best index found is", best)
        return best


_default = IndexSelector()


def sort_indexes(table: Table) -> List[Key]:
    return _default.sort_indexes(table)


def find_best_index(table: Table, preferred: Optional[str] = None) -> str:
    return _default.find_best_index(table, preferred)
