"""
Catalog filter/sort pipeline.

Parts are fetched once in the default order and narrowed in memory:
category, then free-text search, then the featured flag, then one of a
fixed set of orderings. Sorting is stable, so parts that compare equal
keep the order they were fetched in.
"""
import enum
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

SEARCH_FIELDS = ("name", "description", "brand", "compatible_models")


class PartSort(str, enum.Enum):
    """Orderings offered by the catalog view."""
    DEFAULT = "default"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    FEATURED_FIRST = "featured-first"


@dataclass(frozen=True)
class CatalogQuery:
    category_id: Optional[int] = None
    search: Optional[str] = None
    featured_only: bool = False
    sort: PartSort = PartSort.DEFAULT


def _text(part, field: str) -> str:
    return (getattr(part, field, None) or "").lower()


def _name_key(part) -> str:
    return (part.name or "").casefold()


def matches_search(part, term: str) -> bool:
    """Case-insensitive substring match over the searchable text fields."""
    term = term.lower()
    return any(term in _text(part, field) for field in SEARCH_FIELDS)


def filter_parts(parts: Iterable, query: CatalogQuery) -> List:
    result = list(parts)

    if query.category_id is not None:
        result = [p for p in result if p.category_id == query.category_id]

    term = (query.search or "").strip()
    if term:
        result = [p for p in result if matches_search(p, term)]

    if query.featured_only:
        result = [p for p in result if p.featured]

    return result


def sort_parts(parts: Iterable, sort: PartSort = PartSort.DEFAULT) -> List:
    sort = PartSort(sort)
    parts = list(parts)

    if sort is PartSort.NAME_ASC:
        return sorted(parts, key=_name_key)
    if sort is PartSort.NAME_DESC:
        return sorted(parts, key=_name_key, reverse=True)
    if sort is PartSort.PRICE_ASC:
        return sorted(parts, key=lambda p: p.price)
    if sort is PartSort.PRICE_DESC:
        return sorted(parts, key=lambda p: p.price, reverse=True)
    if sort is PartSort.FEATURED_FIRST:
        return sorted(parts, key=lambda p: not p.featured)
    # default: featured first, then by name
    return sorted(parts, key=lambda p: (not p.featured, _name_key(p)))


def apply_catalog_query(parts: Iterable, query: CatalogQuery) -> List:
    """Run the full pipeline: filter, then sort."""
    return sort_parts(filter_parts(parts, query), query.sort)


def suggest_parts(parts: Sequence, term: str, limit: int = 5) -> List[str]:
    """
    Part names for a search-as-you-type box.

    Names starting with the term come before names that merely contain it;
    within each group the input order is kept. Duplicate names are dropped.
    """
    term = (term or "").strip().lower()
    if not term or limit < 1:
        return []

    prefix, contains = [], []
    seen = set()
    for part in parts:
        name = part.name or ""
        lowered = name.lower()
        if lowered in seen:
            continue
        if lowered.startswith(term):
            prefix.append(name)
            seen.add(lowered)
        elif term in lowered:
            contains.append(name)
            seen.add(lowered)

    return (prefix + contains)[:limit]
