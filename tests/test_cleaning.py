from current_feeds.cleaning import append_annotations, clean_html, clean_text, decode_entities, unique


def test_decode_entities_fixed_table():
    raw = "&amp; &lt; &gt; &quot; &#39; &ndash; &mdash; a&nbsp;b &copy;"
    assert decode_entities(raw) == "& < > \" ' – — a b &copy;"


def test_clean_html_strips_tags_and_collapses_whitespace():
    assert clean_html("  <b>Bold</b>\n\n  <i>text</i>  ") == "Bold text"


def test_clean_html_flattens_nested_list():
    html = "Topic<ul><li>First event.</li><li>Second event</li></ul>"
    assert clean_html(html) == "Topic: First event. • Second event"


def test_clean_html_tidies_space_before_punctuation():
    assert clean_html("Storm <b>hits</b> coast . Warning :") == "Storm hits coast. Warning:"


def test_clean_text_decodes_title():
    assert clean_text("<span>Law &amp; crime</span>") == "Law & crime"


def test_append_annotations():
    assert append_annotations("Text", []) == "Text"
    assert append_annotations("Text", ["A (u1)", "B (u2)"]) == "Text [A (u1), B (u2)]"


def test_unique_keeps_first_occurrence_order():
    assert unique(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
