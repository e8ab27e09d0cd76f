"""
renderer.py

Responsibility: Render the language grouping into README text and write it out.

Rules:
- Templates are Jinja2 text with `languages`, `username`, `stargazed` and `anchors`
  (language -> Markdown heading slug) bound.
- Undefined template variables are errors, not empty strings.
- Output is UTF-8 with `\n` newlines so repeated runs are byte-identical.

This module intentionally does NOT know about GitHub or CLI parsing.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from jinja2 import Environment, StrictUndefined, TemplateError

from stargazed.aggregator import Grouping

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = Path(__file__).resolve().parent / "templates" / "template.md"
OUTPUT_FILENAME = "README.md"

# GitHub drops everything but word characters, spaces and hyphens from heading slugs.
_ANCHOR_STRIP = re.compile(r"[^\w\- ]")


class RenderError(RuntimeError):
    pass


class WriteError(RuntimeError):
    pass


def load_template(path: str | Path | None = None) -> str:
    tpl_path = Path(path) if path is not None else DEFAULT_TEMPLATE
    try:
        text = tpl_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RenderError(f"README template loading failed: {tpl_path}: {e}") from e
    logger.info("README template loaded")
    return text


def language_index(grouping: Grouping, *, sort: bool = False) -> list[str]:
    """
    Languages in the order they should be listed (first-seen order).
    """
    if sort:
        logger.warning("Sorting is not supported; languages keep their fetch order")
    return list(grouping)


def heading_anchor(text: str) -> str:
    """GitHub's slug for a Markdown heading: `C++` -> `c`, `Vim Script` -> `vim-script`."""
    return _ANCHOR_STRIP.sub("", text.strip().lower()).replace(" ", "-")


def heading_anchors(headings: list[str], *, taken: tuple[str, ...] = ("contents",)) -> dict[str, str]:
    """
    Map each heading to its anchor, numbering repeats the way GitHub does
    (`C`, `C++`, `C#` -> `c`, `c-1`, `c-2`). `taken` holds slugs of headings
    that appear earlier in the document.
    """
    seen = {slug: 1 for slug in taken}
    anchors: dict[str, str] = {}
    for heading in headings:
        slug = heading_anchor(heading)
        count = seen.get(slug, 0)
        seen[slug] = count + 1
        anchors[heading] = f"{slug}-{count}" if count else slug
    return anchors


def render_readme(template_text: str, *, username: str, grouping: Grouping, languages: list[str]) -> str:
    env = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    try:
        template = env.from_string(template_text)
        return template.render(
            languages=languages,
            username=username,
            stargazed=grouping,
            anchors=heading_anchors(languages),
        )
    except TemplateError as e:
        raise RenderError(f"Failed rendering README template: {e}") from e


def write_readme(content: str, path: str | Path = OUTPUT_FILENAME) -> Path:
    out = Path(path)
    try:
        out.write_text(content, encoding="utf-8", newline="\n")
    except OSError as e:
        raise WriteError(f"README creation failed: {out}: {e}") from e
    logger.info("README created at %s", out)
    return out
