# tests/sectionizer/test_anchor.py
import pytest

from pagespec.dom.builder import parse_html
from pagespec.sectionizer.anchor import css_path, generate_dom_anchor, stable_classes
from pagespec.sectionizer.settings import DEFAULT_SETTINGS


def _node(html, node_id=None):
    soup = parse_html(html).soup
    return soup.find(id=node_id) if node_id else soup.find(True)


def test_volatile_id_is_not_used():
    anchor = generate_dom_anchor(_node('<div id="comp-8f3a2b91" class="content">x</div>'), 0)

    assert anchor.value != "#comp-8f3a2b91"
    assert anchor.strategy == "selector"
    assert anchor.value == ".content"


def test_stable_id_is_used():
    anchor = generate_dom_anchor(_node('<div id="main-nav">x</div>'), 0)

    assert anchor.value == "#main-nav"


@pytest.mark.parametrize("token", ["comp-8f3a2b91", "wixui-box", "style__a1b2", "_x9", "deadbeef42", "uniqueId_12"])
def test_volatile_tokens(token):
    assert DEFAULT_SETTINGS.volatility.is_volatile(token)


@pytest.mark.parametrize("token", ["main-nav", "card", "hero-banner", "abc123"])
def test_stable_tokens(token):
    assert not DEFAULT_SETTINGS.volatility.is_volatile(token)


def test_landmark_role_wins_over_id():
    anchor = generate_dom_anchor(_node('<div role="banner" id="top">x</div>'), 0, landmark="header")

    assert anchor.value == '[role="banner"]'


def test_landmark_tag():
    anchor = generate_dom_anchor(_node('<footer id="site-footer">x</footer>'), 5, landmark="footer")

    assert anchor.value == "footer"


def test_stable_data_attribute():
    anchor = generate_dom_anchor(_node('<div data-hook="abc" data-block="12345678" data-section="intro">x</div>'), 0)

    assert anchor.value == '[data-section="intro"]'


def test_nth_of_type_for_semantic_tags():
    main = parse_html('<main><section>a</section><div>b</div><section id="comp-abc123">c</section></main>').soup.main
    second = main.find_all("section")[1]

    assert generate_dom_anchor(second, 1).value == "section:nth-of-type(2)"


def test_volatile_classes_are_skipped():
    node = _node('<div class="wixui-box style__abc123 card">x</div>')

    assert stable_classes(node) == ["card"]
    assert generate_dom_anchor(node, 0).value == ".card"


def test_path_fallback_uses_section_index():
    anchor = generate_dom_anchor(_node("<div>x</div>"), 4)

    assert anchor.strategy == "path"
    assert anchor.value == "section-4"


def test_css_path():
    soup = parse_html("<body><main><div>a</div><div><p id='t'>b</p></div></main></body>").soup

    assert css_path(soup.find(id="t")) == "main > div:nth-of-type(2) > p"
