# tests/patterns/test_signatures.py
import pytest

from pagespec.patterns.signatures import count_bucket, generate_signature, section_ref, sections_match


def test_signature_bucketing(make_section):
    section = make_section(type="richText", texts=6)

    assert generate_signature(section) == "type:richText|h:0|txt:many|med:0|cta:0"


def test_signature_with_heading_and_mixed_counts(make_section):
    section = make_section(type="hero", heading="Welcome", texts=1, media=3, ctas=2)

    assert generate_signature(section) == "type:hero|h:1|txt:1|med:few|cta:few"


@pytest.mark.parametrize("count, many_from, bucket", [
    (0, 5, "0"), (1, 5, "1"), (2, 5, "few"), (4, 5, "few"), (5, 5, "many"),
    (2, 3, "few"), (3, 3, "many"),
])
def test_count_bucket(count, many_from, bucket):
    assert count_bucket(count, many_from) == bucket


def test_cta_buckets(make_section):
    assert generate_signature(make_section(ctas=2)).endswith("cta:few")
    assert generate_signature(make_section(ctas=3)).endswith("cta:many")


def test_sections_match_ignores_content(make_section):
    first = make_section(type="cta", heading="One", ctas=2)
    second = make_section(section_id="sec_009", type="cta", heading="Two", ctas=2)
    third = make_section(type="cta", ctas=2)

    assert sections_match(first, second)
    assert not sections_match(first, third)


def test_section_ref():
    assert section_ref("about-us", "sec_003") == "about-us#sec_003"
