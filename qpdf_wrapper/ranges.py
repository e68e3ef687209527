"""Page range parsing and resolution.

A range expression is a comma-separated list of tokens. Each token is a page
number (``3``) or an inclusive pair (``4-6``) whose upper bound may be the
end-of-document sentinel (``4-end`` or qpdf's own ``4-z``).
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Union

from .exceptions import MissingContextError, RangeSyntaxError

PageList = List[int]
RangeExpression = Union[str, int]

END_SENTINELS = frozenset({"end", "z"})

_NUMBER = re.compile(r"^\d+$")


def _to_page(value: str, token: str) -> int:
    value = value.strip()
    if not _NUMBER.match(value):
        raise RangeSyntaxError(
            f"Invalid page range token: '{token}'. Expected 'N', 'N-M' or 'N-end'."
        )
    return int(value)


def _inclusive(start: int, stop: int) -> range:
    if start <= stop:
        return range(start, stop + 1)
    return range(start, stop - 1, -1)


def _tokens(expression: RangeExpression) -> List[str]:
    if isinstance(expression, bool):
        raise RangeSyntaxError(f"Invalid page range: {expression!r}")
    if isinstance(expression, int):
        return [str(expression)]
    if not isinstance(expression, str):
        raise RangeSyntaxError(f"Invalid page range: {expression!r}")
    return [token.strip() for token in expression.split(",")]


def parse_range(expression: RangeExpression, page_count: Optional[int] = None) -> PageList:
    """Resolve *expression* into an ascending list of unique page numbers.

    Args:
        expression: Page range expression such as ``"1,3,5-8,10-end"``.
        page_count: Number of pages in the referenced document. Required when
            the end sentinel is used. When given, pages above it are dropped.

    Raises:
        RangeSyntaxError: If a token is neither a page number nor a pair.
        MissingContextError: If the end sentinel is used without ``page_count``.

    Returns:
        The resolved pages. Pages below 1 are not filtered out.
    """

    pages: PageList = []
    for token in _tokens(expression):
        if not token:
            raise RangeSyntaxError(f"Empty page range token in {expression!r}")

        if "-" not in token:
            pages.append(_to_page(token, token))
            continue

        low, high = token.split("-", 1)
        start = _to_page(low, token)
        if high.strip().lower() in END_SENTINELS:
            if page_count is None:
                raise MissingContextError(
                    f"Cannot use '{high.strip()}' in '{token}' without a document page count"
                )
            pages.extend(_inclusive(start, page_count))
        else:
            pages.extend(_inclusive(start, _to_page(high, token)))

    if page_count is not None:
        # ignore ranges beyond the number of pages in the document
        pages = [page for page in pages if page <= page_count]

    return sorted(set(pages))


def format_pages(pages: Iterable[int]) -> str:
    """Render resolved pages in the comma-joined form qpdf accepts."""

    return ",".join(str(page) for page in pages)


def complement(pages: Iterable[int], page_count: int) -> PageList:
    """Return every page of a *page_count* document not listed in *pages*."""

    excluded = set(pages)
    return [page for page in range(1, page_count + 1) if page not in excluded]


__all__ = [
    "END_SENTINELS",
    "PageList",
    "RangeExpression",
    "complement",
    "format_pages",
    "parse_range",
]
