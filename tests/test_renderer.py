import pytest

from cms.errors import UnsupportedDocument
from cms.renderer import DocumentKind, kind_for, render, render_markdown


@pytest.mark.parametrize(
    "name, kind",
    [
        ("about.txt", DocumentKind.PLAIN_TEXT),
        ("notes.md", DocumentKind.MARKDOWN),
        ("NOTES.MD", DocumentKind.MARKDOWN),
        ("photo.jpg", DocumentKind.IMAGE_JPG),
        ("logo.png", DocumentKind.IMAGE_PNG),
        ("setup.exe", DocumentKind.UNSUPPORTED),
        ("noext", DocumentKind.UNSUPPORTED),
    ],
)
def test_kind_for(name, kind):
    assert kind_for(name) is kind


def test_render_plain_text_passes_bytes_through():
    rendered = render("about.txt", b"# not a heading")

    assert rendered.body == b"# not a heading"
    assert rendered.mimetype == "text/plain"


def test_render_markdown():
    rendered = render("notes.md", b"# Title")

    assert "<h1>Title</h1>" in rendered.body
    assert rendered.mimetype == "text/html"
    assert rendered.kind is DocumentKind.MARKDOWN


def test_render_markdown_fenced_code():
    html = render_markdown("```\nprint('hi')\n```")

    assert "<code>" in html


@pytest.mark.parametrize(
    "name, mimetype", [("photo.jpg", "image/jpeg"), ("logo.png", "image/png")]
)
def test_render_images(name, mimetype):
    rendered = render(name, b"\x00\x01binary")

    assert rendered.body == b"\x00\x01binary"
    assert rendered.mimetype == mimetype
    assert rendered.kind.is_image


def test_render_unsupported():
    with pytest.raises(UnsupportedDocument) as exc:
        render("setup.exe", b"MZ")

    assert exc.value.message == "setup.exe cannot be displayed."
