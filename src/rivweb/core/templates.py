"""Token substitution for the page and feed templates."""

import re
from collections.abc import Mapping
from datetime import datetime
from email.utils import format_datetime

TOKEN_TITLE = "$site:title"
TOKEN_NAME = "$site:name"
TOKEN_STYLE = "$site:style"
TOKEN_NAV = "$site:nav"
TOKEN_BODY = "$site:body"
TOKEN_LINK = "$site:link"
TOKEN_EDIT = "$site:edit"
TOKEN_UPDATED = "$site:updated"
TOKEN_YEAR = "$site:year"
TOKEN_POSTS = "$site:posts"


def prepare_template(text: str) -> str:
    """Strip leading and trailing whitespace from every template line."""
    return "\n".join(line.strip() for line in text.split("\n"))


def prepare_stylesheet(text: str) -> str:
    """Flatten a stylesheet onto one line for inlining."""
    return text.replace("\r", "").replace("\n", "")


def substitute(template: str, tokens: Mapping[str, str]) -> str:
    """Replace every token in ``template`` with its value.

    Tokens are matched literally, longest first, in a single pass, so a
    substituted value is never scanned for further tokens.
    """
    if not tokens:
        return template
    pattern = re.compile(
        "|".join(re.escape(token) for token in sorted(tokens, key=len, reverse=True))
    )
    return pattern.sub(lambda m: tokens[m.group(0)], template)


def short_date(dt: datetime) -> str:
    """Format a date as ``YYMMDD``."""
    return dt.strftime("%y%m%d")


def feed_date(dt: datetime) -> str:
    """Format a timestamp as an RFC 822 date for RSS."""
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return format_datetime(dt)


def page_tokens(
    *,
    site_title: str,
    name: str,
    style: str,
    nav: str,
    body: str,
    link: str,
    edit: str,
    updated: datetime,
    now: datetime,
) -> dict[str, str]:
    """Build the token map for one page."""
    return {
        TOKEN_TITLE: site_title,
        TOKEN_NAME: name,
        TOKEN_STYLE: style,
        TOKEN_NAV: nav,
        TOKEN_BODY: body,
        TOKEN_LINK: link,
        TOKEN_EDIT: edit,
        TOKEN_UPDATED: short_date(updated),
        TOKEN_YEAR: str(now.year),
    }


def feed_tokens(*, site_title: str, name: str, posts: str, now: datetime) -> dict[str, str]:
    """Build the token map for the feed."""
    return {
        TOKEN_TITLE: site_title,
        TOKEN_NAME: name,
        TOKEN_UPDATED: feed_date(now),
        TOKEN_POSTS: posts,
        TOKEN_YEAR: str(now.year),
    }
