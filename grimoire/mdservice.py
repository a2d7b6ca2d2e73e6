"""Markdown rendering with a delimited front-matter header."""

import io
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import IO, Any, Dict, Iterator, Optional, Union

from markdown_it import MarkdownIt

DEFAULT_DELIMITER = "---fm---"
FRONT_MATTER_ERROR = "check front-matter header for errors"

Source = Union[str, bytes, IO[str], IO[bytes]]


class FrontMatterError(ValueError):
    """A front-matter line is not a single ``key: value`` pair."""


@dataclass
class FrontMatter:
    """Article metadata taken from the front-matter header."""

    title: str = ""
    author: str = ""
    description: str = ""
    date: str = ""
    category: str = ""
    image: str = ""


@dataclass
class Article:
    """A parsed article: its metadata, markdown source and rendered HTML."""

    front_matter: FrontMatter = field(default_factory=FrontMatter)
    raw: str = ""
    html: str = ""


def _lines(source: Source) -> Iterator[str]:
    if isinstance(source, str):
        source = io.StringIO(source)
    elif isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(bytes(source))
    for line in source:
        if isinstance(line, bytes):
            line = line.decode("utf-8")
        line = line[:-1] if line.endswith("\n") else line
        yield line[:-1] if line.endswith("\r") else line


def _slug(text: str) -> str:
    chars = []
    for ch in text.strip():
        if ch.isalnum():
            chars.append(ch.lower())
        elif ch.isspace():
            chars.append("-")
        elif ch in "-_":
            chars.append(ch)
    return "".join(chars) or "heading"


def _heading_ids(state: Any) -> None:
    seen = set()
    tokens = state.tokens
    for opening, inline in zip(tokens, tokens[1:]):
        if opening.type != "heading_open" or opening.attrGet("id"):
            continue
        text = "".join(
            child.content
            for child in inline.children or []
            if child.type in ("text", "code_inline")
        )
        base = _slug(text)
        candidate, suffix = base, 1
        while candidate in seen:
            candidate = f"{base}-{suffix}"
            suffix += 1
        seen.add(candidate)
        opening.attrSet("id", candidate)


def _build_parser() -> MarkdownIt:
    parser = MarkdownIt("commonmark", {"html": True, "breaks": True})
    parser.enable(["table", "strikethrough"])
    parser.core.ruler.push("heading_ids", _heading_ids)
    return parser


class MDService:
    """Parses markdown documents with front matter and renders them to HTML.

    Raw HTML passes through, single newlines become line breaks, tables and
    strikethrough are supported and headings get generated ids.
    """

    def __init__(self) -> None:
        self._parser = _build_parser()

    def article(self, stream: Source) -> Article:
        """Parse ``stream`` and return the rendered article."""
        fields: Dict[str, str] = {}
        raw = self.parse(stream, fields)
        return Article(front_matter=self.front_matter(fields), raw=raw, html=self.markdown(raw))

    def markdown(self, text: Union[str, bytes]) -> str:
        """Render markdown ``text`` to HTML."""
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("utf-8")
        return self._parser.render(text)

    def front_matter(self, fields: Dict[str, str]) -> FrontMatter:
        """Build metadata from parsed header fields, dated today.

        ``thumb`` becomes the image only if it names an existing path.
        """
        matter = FrontMatter(
            title=fields.get("title", ""),
            author=fields.get("author", ""),
            description=fields.get("desc", ""),
        )
        thumb = fields.get("thumb")
        if thumb and os.path.exists(thumb):
            matter.image = thumb
        now = datetime.now()
        matter.date = f"{now:%a, %b} {now.day} {now.year}"
        return matter

    def parse_delimited(
        self, stream: Source, delimiter: str, fields: Optional[Dict[str, str]]
    ) -> str:
        """Return the markdown outside ``delimiter`` blocks.

        Header lines are stored into ``fields`` unless it is None.
        """
        body = []
        in_header = False
        for line in _lines(stream):
            if line == delimiter:
                in_header = not in_header
            elif not in_header:
                body.append(line + "\n")
            elif fields is not None:
                parts = line.split(":")
                if len(parts) != 2:
                    raise FrontMatterError(FRONT_MATTER_ERROR)
                fields[parts[0]] = parts[1].strip()
        return "".join(body)

    def parse(self, stream: Source, fields: Optional[Dict[str, str]]) -> str:
        """Like ``parse_delimited`` with the default delimiter."""
        return self.parse_delimited(stream, DEFAULT_DELIMITER, fields)