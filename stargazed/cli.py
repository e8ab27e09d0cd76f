"""
cli.py

Responsibility: CLI entrypoint for stargazed.

High-level flow:
1) Validate flags / config file -> `Options`
2) Fetch every starred repository (all pages)
3) Group repositories by language
4) Render the README template
5) Write README.md
6) (Optional) Publish README.md to a GitHub repo

This module should orchestrate behavior but keep concerns isolated:
- Option validation: `options.py`
- GitHub API: `github_client.py`
- Grouping: `aggregator.py`
- Rendering / writing: `renderer.py`
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any

from stargazed import __version__
from stargazed.aggregator import group_by_language
from stargazed.github_client import API_BASE, GitHubClient, GitHubError
from stargazed.options import Options, OptionsError, check_required, load_config_file, validate_options
from stargazed.renderer import (
    OUTPUT_FILENAME,
    RenderError,
    WriteError,
    language_index,
    load_template,
    render_readme,
    write_readme,
)

logger = logging.getLogger(__name__)

FATAL_ERRORS = (OptionsError, GitHubError, RenderError, WriteError)

# Flags that map straight onto option names.
_OPTION_FLAGS = ("username", "token", "repo", "message", "sort", "version", "help")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stargazed",
        description="Create an awesome list of your starred GitHub repositories",
        add_help=False,
    )
    p.add_argument("-u", "--username", default=None, help="GitHub username whose stars are listed (required)")
    p.add_argument("-t", "--token", default=None, help="GitHub token (or set env GITHUB_TOKEN)")
    p.add_argument("-r", "--repo", default=None, help="Repository to publish README.md to (needs a token)")
    p.add_argument("-m", "--message", default=None, help="Commit message used when publishing")
    p.add_argument("-s", "--sort", action="store_true", default=None, help="Sort languages (not supported yet)")
    p.add_argument("-v", "--version", action="store_true", default=None, help="Show the version and exit")
    p.add_argument("-h", "--help", action="store_true", default=None, help="Show this help and exit")
    p.add_argument("--config", default=None, help="YAML file with the same options (flags take precedence)")
    p.add_argument("--template", default=None, help="Jinja2 README template (default: bundled template)")
    return p


def collect_raw_options(args: argparse.Namespace) -> dict[str, Any]:
    raw: dict[str, Any] = load_config_file(args.config) if args.config else {}
    for name in _OPTION_FLAGS:
        value = getattr(args, name)
        if value is not None:
            raw[name] = value
    return raw


def run(
    options: Options,
    *,
    template_path: str | Path | None = None,
    output_path: str | Path = OUTPUT_FILENAME,
    api_base: str = API_BASE,
) -> Path:
    check_required(options)

    client = GitHubClient(options.token, api_base=api_base)
    if not client.authenticated:
        logger.warning("No GitHub token given - requests are unauthenticated and rate limited")

    logger.info("Fetching stargazed repositories...")
    items = client.fetch_starred(options.username)
    logger.info("Fetched %d items", len(items))

    grouping = group_by_language(items)
    languages = language_index(grouping, sort=options.sort)

    template = load_template(template_path)
    content = render_readme(template, username=options.username, grouping=grouping, languages=languages)
    out = write_readme(content, output_path)

    if options.repo:
        repo = client.publish_readme(options.repo, content, options.message)
        logger.info("README published to %s", repo.html_url)

    return out


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        options = validate_options(collect_raw_options(args))
        if options.help:
            parser.print_help()
            return 0
        if options.version:
            print(__version__)
            return 0
        if not options.token:
            env_token = os.environ.get("GITHUB_TOKEN") or None
            options = dataclasses.replace(options, token=env_token)

        run(
            options,
            template_path=args.template,
            api_base=os.environ.get("GITHUB_API_URL") or API_BASE,
        )
    except FATAL_ERRORS as e:
        print(f"✖ {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
