from rss_posts.feed_parse import (
    ParserKind,
    parse_feed,
    repair_double_slashes,
    strip_html,
    tag_content,
)


def test_parse_rss_item():
    xml = (
        "<item><title>A</title><link>http://x.com/a</link>"
        "<pubDate>Mon, 01 Jan 2024 00:00:00 GMT</pubDate><category>Tech</category></item>"
    )
    out = parse_feed(xml)

    assert len(out) == 1
    assert out[0].title == "A"
    assert out[0].url == "http://x.com/a"
    assert out[0].pub_date == "Mon, 01 Jan 2024 00:00:00 GMT"
    assert out[0].categories == ["Tech"]


def test_parse_atom_entry():
    xml = '<entry><title>B</title><link href="http://x.com/b"/><updated>2024-01-02T00:00:00Z</updated></entry>'
    out = parse_feed(xml)

    assert len(out) == 1
    assert out[0].url == "http://x.com/b"
    assert out[0].pub_date == "2024-01-02T00:00:00Z"


def test_parse_full_documents_preserve_order(rss_xml, atom_xml):
    assert [e.title for e in parse_feed(rss_xml)] == ["Older", "Newer"]
    assert [e.title for e in parse_feed(atom_xml)] == ["Middle"]


def test_description_cdata_unwrapped_and_html_stripped(rss_xml):
    out = parse_feed(rss_xml)
    assert out[0].description == "Older post"


def test_description_prefers_summary_then_description_then_content():
    xml = "<item><description></description><content>from content</content></item>"
    assert parse_feed(xml)[0].description == "from content"

    xml = "<entry><summary>sum</summary><content>body</content></entry>"
    assert parse_feed(xml)[0].description == "sum"


def test_pub_date_prefers_updated_then_pubdate_then_published():
    xml = "<entry><published>2024-01-01</published><updated>2024-02-01</updated></entry>"
    assert parse_feed(xml)[0].pub_date == "2024-02-01"

    xml = "<entry><published>2024-01-01</published></entry>"
    assert parse_feed(xml)[0].pub_date == "2024-01-01"


def test_defaults_for_missing_fields():
    out = parse_feed("<item></item>")

    assert out[0].title == "Untitled"
    assert out[0].url == "#"
    assert out[0].description == ""
    assert out[0].pub_date is None
    assert out[0].categories == []


def test_atom_href_link_wins_over_rss_link():
    xml = '<entry><link>http://x.com/text</link><link rel="alternate" href="http://x.com/href"/></entry>'
    assert parse_feed(xml)[0].url == "http://x.com/href"


def test_double_slash_repair():
    assert repair_double_slashes("http://x.com//a//b") == "http://x.com/a/b"
    assert parse_feed("<item><link>http://x.com//a//b</link></item>")[0].url == "http://x.com/a/b"


def test_categories_terms_first_then_tags_deduplicated():
    xml = (
        '<entry><category>Web</category><category term="Tech"/>'
        '<category term="AI"></category><category><b>Web</b></category></entry>'
    )
    out = parse_feed(xml)
    assert out[0].categories[:2] == ["Tech", "AI"]
    assert out[0].categories.count("Web") == 1


def test_categories_html_stripped_and_empty_skipped():
    xml = "<item><category><![CDATA[Python]]></category><category>  </category></item>"
    assert parse_feed(xml)[0].categories == ["Python"]


def test_malformed_xml_does_not_raise():
    assert parse_feed("<rss><channel><item><title>open</rss>") == []
    assert parse_feed("") == []

    out = parse_feed("<rss><item><title>ok</title></item><item><title>broken</rss>")
    assert [e.title for e in out] == ["ok"]


def test_container_tags_are_case_insensitive():
    out = parse_feed("<ITEM><Title>Upper</Title></ITEM>")
    assert out[0].title == "Upper"


def test_astro_paper_splits_category_and_tags():
    xml = "<item><category>Tech</category><category>Web</category><category>AI</category></item>"
    out = parse_feed(xml, ParserKind.ASTRO_PAPER)

    assert out[0].category == "Tech"
    assert out[0].tags == ["Web", "AI"]
    assert out[0].categories == ["Tech", "Web", "AI"]


def test_astro_paper_defaults_to_uncategorized():
    out = parse_feed("<item><title>x</title></item>", ParserKind.ASTRO_PAPER)

    assert out[0].category == "Uncategorized"
    assert out[0].tags == []
    assert out[0].categories == ["Uncategorized"]


def test_astro_paper_trims_terms():
    xml = '<entry><category term=" Tech "/><category term="Web"/></entry>'
    out = parse_feed(xml, ParserKind.ASTRO_PAPER)
    assert out[0].categories == ["Tech", "Web"]


def test_parser_kind_from_name():
    assert ParserKind.from_name("astroPaper") is ParserKind.ASTRO_PAPER
    assert ParserKind.from_name("jekyllFeed") is ParserKind.JEKYLL_FEED
    assert ParserKind.from_name("default") is ParserKind.DEFAULT
    assert ParserKind.from_name("hugoSomething") is ParserKind.DEFAULT
    assert ParserKind.from_name(None) is ParserKind.DEFAULT


def test_generic_parser_leaves_category_unset():
    out = parse_feed("<item><category>Tech</category></item>", ParserKind.JEKYLL_FEED)
    assert out[0].category is None
    assert out[0].tags is None


def test_tag_content_and_strip_html_helpers():
    assert tag_content('<title type="html"><![CDATA[Hi]]></title>', "title") == "Hi"
    assert tag_content("<summary>x</summary>", "title") is None
    assert strip_html("<p>Hello <em>there</em></p>") == "Hello there"
    assert strip_html(None) == ""
