"""Markdown to Slack mrkdwn conversion."""

from __future__ import annotations

import re

_BLANK_LINES = re.compile(r"\n\s*\n")
_LEADING_WHITESPACE = re.compile(r"^[ \t]+", re.MULTILINE)
_HEADERS = (
    re.compile(r"^# (.*)$", re.MULTILINE),
    re.compile(r"^## (.*)$", re.MULTILINE),
    re.compile(r"^### (.*)$", re.MULTILINE),
)
_BOLD = re.compile(r"\*\*(.*?)\*\*")
_CODE_BLOCK = re.compile(r"```.*?```", re.DOTALL)
_LINK = re.compile(r"\[(.*?)\]\((.*?)\)")
_UNORDERED_ITEM = re.compile(r"^\* (.*)$", re.MULTILINE)
_ORDERED_ITEM = re.compile(r"^\d+\. (.*)$", re.MULTILINE)


def _trim_code_block(match: re.Match[str]) -> str:
    return "```" + match.group(0)[3:-3].strip() + "```"


def markdown_to_mrkdwn(markdown: str) -> str:
    """Convert generic Markdown to Slack mrkdwn.

    Rules run in a fixed order and later rules see the output of earlier
    ones. ``_italic_`` and `` `code` `` spans are already valid mrkdwn and
    pass through untouched. Literal ``*`` and ``_`` elsewhere in the text
    are not escaped.

    Example:
        >>> markdown_to_mrkdwn("## Status\\n**ok** see [docs](https://x)")
        '*Status*\\n*ok* see <https://x|docs>'
    """
    mrkdwn = _BLANK_LINES.sub("\n\n", markdown)
    mrkdwn = _LEADING_WHITESPACE.sub("", mrkdwn)

    for header in _HEADERS:
        mrkdwn = header.sub(r"*\1*", mrkdwn)

    mrkdwn = _BOLD.sub(r"*\1*", mrkdwn)
    mrkdwn = _CODE_BLOCK.sub(_trim_code_block, mrkdwn)
    mrkdwn = _LINK.sub(r"<\2|\1>", mrkdwn)

    # List numbering is discarded, not renumbered
    mrkdwn = _UNORDERED_ITEM.sub(r"• \1", mrkdwn)
    mrkdwn = _ORDERED_ITEM.sub(r"• \1", mrkdwn)

    return mrkdwn
