"""
Rich-Inline Parser
Turns an editor-produced inline HTML fragment into a flat sequence of styled
runs that both renderers consume.

Only the formatting subset the editor emits is understood (b/strong, i/em, u,
sub, sup, br, block separators, data-URI images). Anything else is ignored
while its children are still visited, so parsing never fails.
"""
import base64
import binascii
import html
import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from html.parser import HTMLParser
from typing import Iterable, Iterator, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

STYLE_TAGS = {
    "b": "bold",
    "strong": "bold",
    "i": "italic",
    "em": "italic",
    "u": "underline",
    "sub": "subscript",
    "sup": "superscript",
}
BLOCK_TAGS = {"p", "div", "li", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote"}
VOID_TAGS = {"br", "img", "hr", "wbr", "input", "col", "source", "meta", "link"}
SKIPPED_TAGS = {"script", "style"}

_DATA_URI = re.compile(r"^data:image/([a-zA-Z0-9.+-]+);base64,(.*)$", re.DOTALL)
_ALIGN_CLASS = re.compile(r"\bql-align-(left|center|right|justify)\b")
_ALIGN_STYLE = re.compile(r"text-align\s*:\s*(left|center|right|justify)", re.IGNORECASE)


@dataclass(frozen=True)
class TextRun:
    """Text with uniform style. A run with line_break=True is a forced break and has no text."""
    text: str
    bold: bool = False
    italic: bool = False
    underline: bool = False
    subscript: bool = False
    superscript: bool = False
    line_break: bool = False


@dataclass(frozen=True)
class ImageRun:
    """An inline image decoded once from its data URI."""
    data: bytes = field(repr=False)
    image_type: str = "png"
    src: str = field(default="", repr=False, compare=False)


Run = Union[TextRun, ImageRun]

LINE_BREAK = TextRun(text="", line_break=True)


def _image_type(subtype: str) -> str:
    subtype = subtype.lower()
    if subtype in ("jpeg", "jpg"):
        return "jpg"
    if subtype in ("gif", "bmp"):
        return subtype
    return "png"


@lru_cache(maxsize=128)
def decode_data_uri(uri: str) -> Optional[Tuple[bytes, str]]:
    """
    Decodes a base64 image data URI.

    Results are cached so a logo or image referenced repeatedly is decoded once.

    Returns:
        (image bytes, image type) or None if the URI is not a decodable image.
    """
    match = _DATA_URI.match(uri.strip())
    if not match:
        return None
    try:
        data = base64.b64decode(match.group(2), validate=False)
    except (binascii.Error, ValueError):
        logger.debug("Dropping undecodable image payload")
        return None
    if not data:
        return None
    return data, _image_type(match.group(1))


class _RunCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.runs: List[Run] = []
        self.alignment: Optional[str] = None
        self._stack: List[str] = []
        self._after_block = False

    def _flags(self) -> dict:
        flags = {}
        for tag in self._stack:
            style = STYLE_TAGS.get(tag)
            if style:
                flags[style] = True
        return flags

    def _skipping(self) -> bool:
        return any(tag in SKIPPED_TAGS for tag in self._stack)

    def handle_starttag(self, tag, attrs):
        attributes = dict(attrs)
        if tag == "br":
            if not self._skipping():
                self.runs.append(LINE_BREAK)
            return
        if tag == "img":
            self._add_image(attributes.get("src") or "")
            return
        if tag in VOID_TAGS:
            return

        if tag in BLOCK_TAGS:
            if self.runs:
                self.runs.append(LINE_BREAK)
            self._after_block = True
            if self.alignment is None:
                self.alignment = _block_alignment(attributes)
        self._stack.append(tag)

    def handle_startendtag(self, tag, attrs):
        if tag in VOID_TAGS:
            self.handle_starttag(tag, attrs)

    def handle_endtag(self, tag):
        if tag not in self._stack:
            logger.debug("Ignoring unmatched closing tag <%s>", tag)
            return
        while self._stack:
            if self._stack.pop() == tag:
                break
        if tag in BLOCK_TAGS:
            self._after_block = True

    def handle_data(self, data):
        if not data or self._skipping():
            return
        if not data.strip() and "\n" in data:
            # Whitespace between inline elements collapses to one space
            previous = self.runs[-1] if self.runs else None
            if self._after_block or not isinstance(previous, TextRun) or previous.line_break:
                return
            data = " "
        self.runs.append(TextRun(text=data, **self._flags()))
        self._after_block = False

    def _add_image(self, src: str) -> None:
        if self._skipping() or not src.startswith("data:image"):
            return
        decoded = decode_data_uri(src)
        if decoded is None:
            return
        data, image_type = decoded
        self.runs.append(ImageRun(data=data, image_type=image_type, src=src))
        self._after_block = False


def _block_alignment(attributes: dict) -> Optional[str]:
    match = _ALIGN_CLASS.search(attributes.get("class") or "")
    if not match:
        match = _ALIGN_STYLE.search(attributes.get("style") or "")
    return match.group(1).lower() if match else None


def _collect(fragment: Optional[str]) -> _RunCollector:
    collector = _RunCollector()
    if not fragment:
        return collector
    try:
        collector.feed(fragment)
        collector.close()
    except (AssertionError, ValueError) as e:
        logger.debug("Malformed inline markup, keeping %d parsed runs: %s", len(collector.runs), e)
    return collector


def iter_runs(fragment: Optional[str]) -> Iterator[Run]:
    """
    Parses a rich-text fragment into runs.

    Args:
        fragment: Inline HTML as stored by the editor (may be empty or None).

    Returns:
        One-shot iterator of TextRun/ImageRun in document order.
    """
    yield from _collect(fragment).runs


def fragment_alignment(fragment: Optional[str]) -> Optional[str]:
    """Alignment of the first block that declares one ("center", "right", ...)."""
    return _collect(fragment).alignment


def plain_text(fragment: Optional[str]) -> str:
    """Flattens a fragment to text; forced breaks become newlines, images vanish."""
    parts = []
    for run in iter_runs(fragment):
        if isinstance(run, TextRun):
            parts.append("\n" if run.line_break else run.text)
    return "".join(parts).strip()


def _image_src(run: ImageRun) -> str:
    if run.src:
        return run.src
    mime = "jpeg" if run.image_type == "jpg" else run.image_type
    return f"data:image/{mime};base64,{base64.b64encode(run.data).decode('ascii')}"


def runs_to_html(runs: Iterable[Run]) -> str:
    """Serializes runs back to canonical inline HTML."""
    parts = []
    for run in runs:
        if isinstance(run, ImageRun):
            parts.append(f'<img src="{html.escape(_image_src(run))}" alt="" />')
            continue
        if run.line_break:
            parts.append("<br/>")
            continue

        text = html.escape(run.text, quote=False)
        if run.subscript:
            text = f"<sub>{text}</sub>"
        if run.superscript:
            text = f"<sup>{text}</sup>"
        if run.underline:
            text = f"<u>{text}</u>"
        if run.italic:
            text = f"<em>{text}</em>"
        if run.bold:
            text = f"<strong>{text}</strong>"
        parts.append(text)
    return "".join(parts)
