# tests/sectionizer/test_extract.py
from pagespec.dom.builder import parse_html
from pagespec.dom.query import Region
from pagespec.sectionizer.extract import (
    extract_ctas,
    extract_form,
    extract_heading,
    extract_link_counts,
    extract_media,
    extract_style_hints,
    extract_text_blocks,
)


def _region(html):
    soup = parse_html(f"<div id='root'>{html}</div>").soup
    return Region.of(soup.find(id="root"))


def test_heading_document_order():
    region = _region("<h3>Small first</h3><h1>Big later</h1>")

    assert extract_heading(region) == "Small first"


def test_heading_skips_empty_headings():
    assert extract_heading(_region("<h2>   </h2><h2>Real</h2>")) == "Real"


def test_heading_falls_back_to_large_inline_font():
    region = _region('<p style="font-size: 14px">Body</p><span style="font-size:32px">Big Title</span>')

    assert extract_heading(region) == "Big Title"


def test_heading_fallback_requires_font_above_threshold():
    assert extract_heading(_region('<span style="font-size: 20px">Not quite</span>')) is None


def test_text_blocks_filter_and_cap():
    paragraphs = "".join(f"<p>Paragraph number {i}</p>" for i in range(12))
    region = _region("<p>Too short</p><div class='text'>Div styled as text</div>" + paragraphs)
    blocks = extract_text_blocks(region)

    assert len(blocks) == 10
    assert blocks[0] == "Div styled as text"
    assert "Too short" not in blocks


def test_ctas_include_test_id_buttons():
    region = _region('<div data-testid="hero-button">Go</div><a href="/x">Read more</a><a>No href</a>')

    assert [c.text for c in extract_ctas(region)] == ["Go", "Read more"]


def test_ctas_exclude_navigation_when_requested():
    region = _region("""
        <nav><a href="/">Home</a></nav>
        <div role="navigation"><a href="/docs">Docs</a></div>
        <a href="/start">Get started</a>
    """)

    assert len(extract_ctas(region)) == 3
    assert [c.text for c in extract_ctas(region, exclude_nav=True)] == ["Get started"]


def test_ctas_skip_empty_and_long_text():
    region = _region(f'<a href="/a"></a><a href="/b">{"x" * 100}</a><button>OK</button>')

    assert [c.text for c in extract_ctas(region)] == ["OK"]


def test_media_images_then_videos():
    region = _region("""
        <video><source src="/clip.mp4"></video>
        <img src="/a.png" alt="A">
        <img src="/b.png">
        <img alt="no source">
        <video src="/direct.mp4"></video>
    """)
    media = extract_media(region)

    assert [(m.type, m.src, m.alt) for m in media] == [
        ("image", "/a.png", "A"),
        ("image", "/b.png", None),
        ("video", "/clip.mp4", None),
        ("video", "/direct.mp4", None),
    ]


def test_form_fields_and_labels():
    form = parse_html("""
        <form name="contact">
          <label for="email">Email address</label>
          <input id="email" type="email" required>
          <input type="text" placeholder="Your name">
          <div>Message <textarea aria-required="true"></textarea></div>
          <select aria-label="Topic"><option>A</option></select>
          <input type="submit" value="Send">
        </form>
    """).soup.form
    result = extract_form(form)

    assert result.name == "contact"
    assert result.submit_text == "Send"
    assert [(f.label, f.type, f.required) for f in result.fields] == [
        ("Email address", "email", True),
        ("Your name", "text", False),
        ("Message", "textarea", True),
        ("Topic", "select", False),
    ]


def test_form_without_submit():
    form = parse_html('<form id="news"><input type="email" aria-label="Email"><button>Go</button></form>').soup.form
    result = extract_form(form)

    assert result.name == "news"
    assert result.submit_text is None


def test_link_counts():
    region = _region("""
        <a href="/about">About</a>
        <a href="https://example.com/blog">Blog</a>
        <a href="https://other.com">Other</a>
        <a href="#top">Top</a>
        <a href="mailto:hi@example.com">Mail</a>
        <a href="tel:123">Call</a>
        <a href="javascript:void(0)">JS</a>
    """)
    counts = extract_link_counts(region, "https://example.com")

    assert (counts.internal, counts.external) == (2, 1)


def test_style_hints():
    full = _region("")
    full.anchor["style"] = "background-color: rgb(255, 0, 0); width: 100%"
    hints = extract_style_hints(full)
    assert hints.background_color == "rgb(255, 0, 0)"
    assert hints.layout == "fullWidth"

    contained = _region("")
    contained.anchor["style"] = "max-width: 960px; background-color: rgba(0, 0, 0, 0)"
    hints = extract_style_hints(contained)
    assert hints.background_color is None
    assert hints.layout == "contained"

    wide = _region("")
    wide.anchor["style"] = "max-width: 1600px"
    assert extract_style_hints(wide) is None
