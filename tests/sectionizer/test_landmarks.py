# tests/sectionizer/test_landmarks.py
from pagespec.dom.builder import parse_html
from pagespec.dom.query import element_text, tag_name
from pagespec.sectionizer.landmarks import detect_landmarks, main_content_area


def test_header_prefers_header_tag_over_earlier_nav():
    doc = parse_html("<body><nav><a href='/'>Home</a></nav><header><h1>Brand</h1></header></body>")
    landmarks = detect_landmarks(doc)

    assert tag_name(landmarks.header.node) == "header"
    assert landmarks.header.selector_hint == "header"


def test_role_landmarks():
    doc = parse_html("""
        <body>
          <div role="banner">Top</div>
          <div role="main"><p>Body</p></div>
          <div role="contentinfo">Bottom</div>
        </body>
    """)
    landmarks = detect_landmarks(doc)

    assert landmarks.header.selector_hint == '[role="banner"]'
    assert landmarks.main.selector_hint == '[role="main"]'
    assert element_text(landmarks.footer.node) == "Bottom"


def test_nav_is_header_fallback():
    doc = parse_html("<body><nav><a href='/'>Home</a></nav><main><p>x</p></main></body>")

    assert tag_name(detect_landmarks(doc).header.node) == "nav"


def test_main_falls_back_to_largest_body_child():
    doc = parse_html("""
        <body>
          <header><h1>A much longer header text than anything else here</h1></header>
          <div id="small">Short</div>
          <div id="large">This block has quite a bit more text than the other one.</div>
          <script>var a = "a script with a very long body that must not count";</script>
          <footer>Footer</footer>
        </body>
    """)
    landmarks = detect_landmarks(doc)

    assert landmarks.main.node.get("id") == "large"
    assert landmarks.main.selector_hint == "body > *"


def test_missing_landmarks_are_none():
    doc = parse_html("<body></body>")
    landmarks = detect_landmarks(doc)

    assert landmarks.header is None
    assert landmarks.footer is None
    assert landmarks.main is None
    assert main_content_area(doc, landmarks) is doc.root


def test_empty_document_has_no_landmarks():
    landmarks = detect_landmarks(parse_html(""))

    assert (landmarks.header, landmarks.footer, landmarks.main) == (None, None, None)
