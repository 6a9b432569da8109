"""
Content rendering — decides how a document is shown from its extension.
"""

import enum
from typing import NamedTuple, Union

import markdown

from cms.documents import extension_of
from cms.errors import UnsupportedDocument

MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]


class DocumentKind(enum.Enum):
    PLAIN_TEXT = "text/plain"
    MARKDOWN = "text/html"
    IMAGE_JPG = "image/jpeg"
    IMAGE_PNG = "image/png"
    UNSUPPORTED = None

    @property
    def mimetype(self):
        return self.value

    @property
    def is_image(self) -> bool:
        return self in (DocumentKind.IMAGE_JPG, DocumentKind.IMAGE_PNG)


_KINDS_BY_EXTENSION = {
    ".txt": DocumentKind.PLAIN_TEXT,
    ".md": DocumentKind.MARKDOWN,
    ".jpg": DocumentKind.IMAGE_JPG,
    ".png": DocumentKind.IMAGE_PNG,
}


class Rendered(NamedTuple):
    body: Union[str, bytes]
    mimetype: str
    kind: DocumentKind


def kind_for(name: str) -> DocumentKind:
    return _KINDS_BY_EXTENSION.get(extension_of(name), DocumentKind.UNSUPPORTED)


def render_markdown(text: str) -> str:
    return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


def render(name: str, data: bytes) -> Rendered:
    """Turn raw document bytes into a response body and mimetype.

    Markdown comes back as an HTML fragment; the caller decides whether to
    wrap it in a page.
    """
    kind = kind_for(name)

    if kind is DocumentKind.PLAIN_TEXT or kind.is_image:
        return Rendered(data, kind.mimetype, kind)

    if kind is DocumentKind.MARKDOWN:
        html = render_markdown(data.decode("utf-8", errors="replace"))
        return Rendered(html, kind.mimetype, kind)

    raise UnsupportedDocument(name)
