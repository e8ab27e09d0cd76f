"""
aggregator.py

Responsibility: Group starred repositories by primary language.

Descriptions are cleaned here so that templates can drop them into Markdown
as-is: markup brackets are escaped and line breaks removed.
"""

from __future__ import annotations

from typing import Iterable

from stargazed.github_client import StarredItem

OTHERS = "Others"

Grouping = dict[str, list[tuple[str, str, str]]]

_MARKUP_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
}


def escape_markup(text: str) -> str:
    for char, entity in _MARKUP_ESCAPES.items():
        text = text.replace(char, entity)
    return text


def trim(text: str) -> str:
    return text.strip()


def clean_description(description: str | None) -> str:
    if not description:
        return ""
    text = escape_markup(description)
    text = text.replace("\r", "").replace("\n", "")
    return trim(text)


def group_by_language(items: Iterable[StarredItem]) -> Grouping:
    """
    Bucket `items` by language, keeping the order they were fetched in.

    Items without a language go under "Others". Languages appear in the
    returned dict in first-seen order.
    """
    grouping: Grouping = {}
    for item in items:
        language = item.language or OTHERS
        grouping.setdefault(language, []).append(
            (item.name, item.url, clean_description(item.description))
        )
    return grouping
