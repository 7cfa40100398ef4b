"""Case-insensitive "contains" filter predicates."""

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class FilterPredicate:
    """Matches records where any of ``fields`` contains ``word``, ignoring case."""

    fields: tuple[str, ...]
    word: str

    def matches(self, record: dict) -> bool:
        needle = self.word.casefold()
        for field in self.fields:
            value = record.get(field)
            if value is not None and needle in str(value).casefold():
                return True
        return False


def to_regexp_query(fields: str | Iterable[str], word: str) -> FilterPredicate:
    """Build a predicate over one field name, a comma-separated list, or an iterable.

    Blank entries are dropped; an empty field list raises ``ValueError``.
    """
    if isinstance(fields, str):
        fields = fields.split(",")
    names = tuple(f.strip() for f in fields if f and f.strip())
    if not names:
        raise ValueError("At least one filter field is required")
    return FilterPredicate(fields=names, word=word)
