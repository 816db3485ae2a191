"""Markup-shape assumptions for the upstream ASP.NET NAV listing.

Every pattern that depends on how the upstream page is rendered lives in
this module: the NAV table row, the "Next" pager marker and anchor, and
the hidden form inputs. When the upstream markup drifts, this is the one
file to change; the parsers and the pagination controller only call the
helpers below.

Provides:
- iter_row_cells: raw (date, name, option, nav) cell text per table row
- has_next_marker: whether the page renders a "Next" pager link
- find_next_target: the __doPostBack target of the "Next" link
- form_inputs: every named <input> with its value and hidden flag
"""

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# Four-cell row: date, name, option, right-aligned NAV, in that order.
ROW_PATTERN = re.compile(
    r"<tr>\s*<td>\s*(.*?)\s*</td>"
    r"\s*<td>\s*(.*?)\s*</td>"
    r"\s*<td>\s*(.*?)\s*</td>"
    r'\s*<td class="rightAlign">\s*(.*?)\s*</td>'
)

# Literal marker of the pager's "Next" link text.
NEXT_MARKER = ">Next<"

# Tried in order; the first match wins. Covers plain and &#39;-escaped
# quotes, with and without the href= attribute prefix.
NEXT_ANCHOR_PATTERNS = (
    re.compile(
        r"""href="javascript:__doPostBack\('([^']+)',''\)"[^>]*>Next<""",
        re.IGNORECASE,
    ),
    re.compile(
        r'href="javascript:__doPostBack\(&#39;([^&#]+)&#39;,&#39;&#39;\)"[^>]*>Next<',
        re.IGNORECASE,
    ),
    re.compile(
        r"""javascript:__doPostBack\('([^']+)',''\)[^>]*>Next<""",
        re.IGNORECASE,
    ),
    re.compile(
        r"javascript:__doPostBack\(&#39;([^&#]+)&#39;,&#39;&#39;\)[^>]*>Next<",
        re.IGNORECASE,
    ),
    re.compile(
        r"""<a[^>]*href="javascript:__doPostBack\('([^']+)'[^>]*>Next</a>""",
        re.IGNORECASE,
    ),
)

# Fallback: any postback identifier in a window around the marker.
FALLBACK_POSTBACK_PATTERN = re.compile(r"__doPostBack\((?:'|&#39;)([^'&]+)")
FALLBACK_WINDOW_BEFORE = 200
FALLBACK_WINDOW_AFTER = 50


def iter_row_cells(html: str) -> Iterator[tuple[str, str, str, str]]:
    """Yield the raw cell text of every NAV table row, in document order."""
    for match in ROW_PATTERN.finditer(html):
        yield match.group(1), match.group(2), match.group(3), match.group(4)


def has_next_marker(html: str) -> bool:
    """True when the page renders a "Next" pager link."""
    return NEXT_MARKER in html


def find_next_target(html: str) -> str | None:
    """Return the __doPostBack target of the "Next" link, or None.

    The anchor patterns are tried in priority order. If none matches,
    the text just before (and slightly after) the first "Next" marker is
    scanned for any postback identifier.
    """
    for index, pattern in enumerate(NEXT_ANCHOR_PATTERNS):
        match = pattern.search(html)
        if match:
            logger.debug("Next target %r (pattern %d)", match.group(1), index)
            return match.group(1)

    position = html.find(NEXT_MARKER)
    if position == -1:
        return None

    window = html[
        max(0, position - FALLBACK_WINDOW_BEFORE):position + FALLBACK_WINDOW_AFTER
    ]
    match = FALLBACK_POSTBACK_PATTERN.search(window)
    if match:
        logger.debug("Next target %r (fallback window)", match.group(1))
        return match.group(1)
    return None


@dataclass(frozen=True)
class InputField:
    """A named <input> that carries a value attribute."""

    name: str
    value: str
    hidden: bool


def form_inputs(html: str) -> list[InputField]:
    """Return every named <input> with a value, in document order.

    Attribute order in the markup does not matter (type-before-name and
    name-before-type both parse). Inputs lacking a name or a value
    attribute are skipped. Values are entity-decoded.
    """
    soup = BeautifulSoup(html, "lxml")
    fields: list[InputField] = []
    for element in soup.find_all("input"):
        name = element.get("name")
        value = element.get("value")
        if not name or value is None:
            continue
        input_type = str(element.get("type", "")).strip().lower()
        fields.append(InputField(name=name, value=value, hidden=input_type == "hidden"))
    return fields
