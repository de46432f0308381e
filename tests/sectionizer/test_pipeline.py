# tests/sectionizer/test_pipeline.py
import pytest

from pagespec.sectionizer.pipeline import sectionize_html, sectionize_html_with_trace

BASE_URL = "https://example.com"

FULL_PAGE = """
<html>
  <body>
    <header>
      <h1>Acme</h1>
      <nav><a href="/">Home</a><a href="/about">About</a></nav>
      <a href="/signup">Sign up</a>
    </header>
    <main>
      <section class="hero"><h1>Welcome</h1><p>Get started with Acme today.</p></section>
      <section></section>
      <section><h2>About us</h2><p>We build things for the web.</p><a href="https://partner.com">Partner</a></section>
    </main>
    <footer><p>Copyright Acme Inc 2024</p><nav><a href="/privacy">Privacy</a></nav></footer>
  </body>
</html>
"""


def test_extracts_header_section():
    html = """
      <body>
        <header>
          <h1>Site Title</h1>
          <nav><a href="/">Home</a></nav>
        </header>
      </body>
    """
    sections = sectionize_html(html)

    assert len(sections) > 0
    assert sections[0].type == "header"
    assert sections[0].heading == "Site Title"


def test_extracts_hero_content():
    html = """
      <body>
        <main>
          <section class="hero">
            <h1>Welcome</h1>
            <p>Get started today</p>
            <a href="/signup">Sign Up</a>
          </section>
        </main>
      </body>
    """
    sections = sectionize_html(html)

    assert sections[0].heading == "Welcome"
    assert len(sections[0].ctas) > 0


def test_extracts_footer_section():
    sections = sectionize_html("<body><footer><p>&copy; 2024 Company</p></footer></body>")

    assert any(s.type == "footer" for s in sections)


def test_extracts_contact_form_section():
    html = """
      <body>
        <main>
          <section class="contact">
            <h2>Contact Us</h2>
            <form>
              <input type="text" name="name" />
              <input type="email" name="email" />
              <button>Submit</button>
            </form>
          </section>
        </main>
      </body>
    """
    sections = sectionize_html(html)

    contact = [s for s in sections if s.type == "contactForm"]
    assert len(contact) == 1
    assert len(contact[0].forms) == 1
    assert [f.type for f in contact[0].forms[0].fields] == ["text", "email"]


def test_extracts_media():
    html = """
      <body>
        <main>
          <section>
            <h2>Gallery</h2>
            <img src="/img1.jpg" alt="Image 1" />
            <img src="/img2.jpg" alt="Image 2" />
            <img src="/img3.jpg" alt="Image 3" />
          </section>
        </main>
      </body>
    """
    sections = sectionize_html(html)

    gallery = next(s for s in sections if len(s.media) >= 3)
    assert gallery.media[0].src == "/img1.jpg"
    assert gallery.media[0].alt == "Image 1"


def test_section_ids_are_sequential():
    html = """
      <body>
        <main>
          <section><h2>Section 1</h2></section>
          <section><h2>Section 2</h2></section>
          <section><h2>Section 3</h2></section>
        </main>
      </body>
    """
    sections = sectionize_html(html)

    assert [s.id for s in sections] == ["sec_001", "sec_002", "sec_003"]


def test_ids_follow_header_body_footer_order():
    sections = sectionize_html(FULL_PAGE, BASE_URL)

    assert [s.id for s in sections] == ["sec_001", "sec_002", "sec_003", "sec_004"]
    assert sections[0].type == "header"
    assert sections[-1].type == "footer"
    assert [s.heading for s in sections[1:3]] == ["Welcome", "About us"]


def test_skips_empty_sections():
    html = """
      <body>
        <main>
          <section></section>
          <section><h2>Has content</h2></section>
          <section></section>
        </main>
      </body>
    """
    sections = sectionize_html(html)

    assert len(sections) == 1
    assert sections[0].heading == "Has content"
    assert sections[0].id == "sec_001"


def test_heading_whitespace_is_normalized():
    sections = sectionize_html("<body><main><section><h1>  Spaced   Title  </h1></section></main></body>")

    assert sections[0].heading == "Spaced Title"


def test_extracts_text_blocks():
    html = """
      <body>
        <main>
          <section>
            <h2>Rich Text</h2>
            <p>This is paragraph one.</p>
            <p>This is paragraph two.</p>
            <p>This is paragraph three.</p>
          </section>
        </main>
      </body>
    """
    sections = sectionize_html(html)

    assert sections[0].text_blocks == [
        "This is paragraph one.",
        "This is paragraph two.",
        "This is paragraph three.",
    ]


def test_extracts_ctas():
    html = """
      <body>
        <main>
          <section>
            <h2>Call to Action</h2>
            <a href="/buy">Buy Now</a>
            <button>Learn More</button>
          </section>
        </main>
      </body>
    """
    sections = sectionize_html(html)

    assert len(sections[0].ctas) == 2
    assert sections[0].ctas[0].text == "Buy Now"
    assert sections[0].ctas[0].href == "/buy"
    assert sections[0].ctas[1].href is None


def test_header_and_footer_skip_navigation_ctas():
    sections = sectionize_html(FULL_PAGE, BASE_URL)

    assert [c.text for c in sections[0].ctas] == ["Sign up"]
    assert sections[-1].ctas == []


def test_link_counts_only_with_base_url():
    with_base = sectionize_html(FULL_PAGE, BASE_URL)
    without_base = sectionize_html(FULL_PAGE)

    about = with_base[2]
    assert about.links.internal == 0
    assert about.links.external == 1
    assert with_base[0].links.internal == 3
    assert all(s.links is None for s in without_base)


def test_sectionizing_is_deterministic():
    first = [s.to_dict() for s in sectionize_html(FULL_PAGE, BASE_URL)]
    second = [s.to_dict() for s in sectionize_html(FULL_PAGE, BASE_URL)]

    assert first == second


def test_every_section_has_anchor_and_hash():
    for section in sectionize_html(FULL_PAGE, BASE_URL):
        assert section.dom_anchor.value
        assert len(section.structural_hash) == 16


@pytest.mark.parametrize("html", ["", "   ", "<html><body></body></html>"])
def test_empty_documents_yield_no_sections(html):
    assert sectionize_html(html) == []


def test_body_without_landmarks_is_segmented_structurally():
    html = """
      <body>
        <div class="wrapper">
          <h2>First</h2><p>Opening paragraph text.</p>
          <h2>Second</h2><p>Closing paragraph text.</p>
        </div>
      </body>
    """
    sections = sectionize_html(html)

    assert [s.heading for s in sections] == ["First", "Second"]


def test_deeply_nested_section_is_extracted():
    depth = 1500
    html = "<main><section>" + "<div>" * depth + "<p>Deep paragraph text here</p>" + "</div>" * depth + "</section></main>"

    sections = sectionize_html(html)

    assert len(sections) == 1
    assert sections[0].text_blocks == ["Deep paragraph text here"]


def test_trace_exposes_candidates_and_features():
    sections, trace = sectionize_html_with_trace(FULL_PAGE, BASE_URL)

    # the empty <section> is filtered before classification
    assert len(trace.block_candidates) == 2
    assert [f.block_index for f in trace.features] == [0, 2]
    assert trace.block_candidates[0].tag == "section"
    assert trace.block_candidates[0].classes == "hero"
    assert trace.block_candidates[0].text_preview.startswith("Welcome")
    assert trace.features[0].type == sections[1].type

    data = trace.to_dict()
    assert "blockCandidates" in data
    assert "textPreview" in data["blockCandidates"][0]
    assert "blockIndex" in data["features"][0]
