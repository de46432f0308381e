# tests/services/test_meta_parse_service.py
from pagespec.services.meta_parse_service import MetaParseService, page_meta_from_record


def test_extracts_head_metadata():
    svc = MetaParseService("""
        <html><head>
          <title>Home</title>
          <meta name="description" content="  About us  ">
          <link rel="canonical stylesheet" href="https://example.com/">
          <meta property="og:type" content="website">
          <meta property="og:locale" content="en_US">
        </head><body></body></html>
    """)
    meta = svc.extract_page_meta()

    assert meta.title == "Home"
    assert meta.description == "About us"
    assert meta.canonical == "https://example.com/"
    assert meta.og.type == "website"
    assert svc.extract_open_graph_tags() == {"type": "website", "locale": "en_US"}


def test_missing_metadata():
    meta = MetaParseService("<p>no head</p>").extract_page_meta()

    assert meta.title == ""
    assert meta.description is None
    assert meta.canonical is None
    assert meta.og is None


def test_meta_record_from_capture():
    meta = page_meta_from_record({
        "title": "About",
        "metaDescription": "Who we are",
        "canonical": None,
        "og": {"title": "About Acme", "url": "https://example.com/about"},
    })

    assert meta.title == "About"
    assert meta.description == "Who we are"
    assert meta.og.url == "https://example.com/about"
    assert meta.to_dict()["og"]["title"] == "About Acme"
