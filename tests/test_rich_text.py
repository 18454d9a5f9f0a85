"""
Test Rich-Inline Parser
Tests run extraction, graceful degradation and canonical re-serialization.
"""
from examsheet.services.rich_text import (
    LINE_BREAK,
    ImageRun,
    TextRun,
    decode_data_uri,
    fragment_alignment,
    iter_runs,
    plain_text,
    runs_to_html,
)


def test_nested_styles_accumulate():
    """Nested style tags combine."""
    runs = list(iter_runs("<b>bold <i>both</i></b> plain"))
    assert runs == [
        TextRun(text="bold ", bold=True),
        TextRun(text="both", bold=True, italic=True),
        TextRun(text=" plain"),
    ]


def test_style_tag_aliases():
    """Test style tag aliases."""
    runs = list(iter_runs("<strong>s</strong><em>e</em><u>u</u>H<sub>2</sub>O x<sup>2</sup>"))
    assert runs[0].bold and runs[1].italic and runs[2].underline
    assert TextRun(text="2", subscript=True) in runs
    assert TextRun(text="2", superscript=True) in runs


def test_breaks_and_blocks_become_line_breaks():
    """Breaks and blocks become line breaks."""
    runs = list(iter_runs("<p>one</p><p>two<br>three</p>"))
    assert runs == [
        TextRun(text="one"), LINE_BREAK, TextRun(text="two"), LINE_BREAK, TextRun(text="three"),
    ]
    assert plain_text("<p>one</p><p>two</p>") == "one\ntwo"


def test_newline_between_inline_elements_keeps_word_gap():
    """Whitespace between inline tags collapses to a single space."""
    assert plain_text("<b>Ali</b>\n<i>Budi</i>") == "Ali Budi"
    runs = list(iter_runs("<b>Ali</b>\n  <i>Budi</i>"))
    assert runs == [TextRun(text="Ali", bold=True), TextRun(text=" "), TextRun(text="Budi", italic=True)]


def test_newline_at_block_boundaries_is_dropped():
    """Formatting whitespace around blocks and breaks adds no text."""
    assert plain_text("\n<p>one</p>\n<p>two</p>\n") == "one\ntwo"
    assert plain_text("one<br>\n<b>two</b>") == "one\ntwo"


def test_empty_fragment():
    """Test empty fragments."""
    assert list(iter_runs("")) == []
    assert list(iter_runs(None)) == []
    assert plain_text(None) == ""


def test_entities_are_decoded():
    """Test entities are decoded."""
    assert plain_text("a &lt; b &amp; c") == "a < b & c"


def test_malformed_markup_never_raises():
    """Unclosed, stray and unknown tags are skipped while text survives."""
    assert plain_text("<b>unclosed <i>text") == "unclosed text"
    assert plain_text("</u>stray<blink>blink</blink>") == "strayblink"
    assert plain_text("<script>alert(1)</script>safe") == "safe"


def test_unmatched_closing_tag_keeps_open_styles():
    """Stray closing tags leave open styles alone."""
    runs = list(iter_runs("<b>one</i>two</b>"))
    assert runs == [TextRun(text="one", bold=True), TextRun(text="two", bold=True)]


def test_alignment_from_class_or_style():
    """Test alignment from class or style."""
    assert fragment_alignment('<p class="ql-align-center">x</p>') == "center"
    assert fragment_alignment('<div style="text-align: right">x</div>') == "right"
    assert fragment_alignment("<p>x</p>") is None


def test_data_uri_image_becomes_image_run(png_data_uri):
    """Data URI images become image runs."""
    runs = list(iter_runs(f'Lihat <img src="{png_data_uri}"> gambar'))
    image = runs[1]
    assert isinstance(image, ImageRun)
    assert image.image_type == "png"
    assert image.data.startswith(b"\x89PNG")


def test_external_or_broken_images_are_dropped():
    """External and broken images are dropped."""
    assert list(iter_runs('<img src="https://example.com/a.png">')) == []
    assert list(iter_runs('<img src="data:image/png;base64,">')) == []
    assert decode_data_uri("not a uri") is None


def test_decode_data_uri_types(png_data_uri):
    """Test image types from data URIs."""
    data, image_type = decode_data_uri(png_data_uri)
    assert image_type == "png"
    assert decode_data_uri(png_data_uri.replace("image/png", "image/jpeg"))[1] == "jpg"


def test_runs_to_html_is_canonical():
    """Serialized runs use canonical tags."""
    fragment = "<b><i>x</i></b> &amp; <u>y</u><br/><sub>2</sub>"
    html = runs_to_html(iter_runs(fragment))
    assert html == "<strong><em>x</em></strong> &amp; <u>y</u><br/><sub>2</sub>"
    # Serializing the canonical form again is stable
    assert runs_to_html(iter_runs(html)) == html


def test_runs_to_html_keeps_images(png_data_uri):
    """Serialized runs keep images."""
    html = runs_to_html(iter_runs(f'<img src="{png_data_uri}">'))
    assert html.startswith('<img src="data:image/png;base64,')
