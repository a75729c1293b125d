from scanner.meta_extractor import extract_tags
from scanner.seo_checker import evaluate


PAGE = """
<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta http-equiv="X-UA-Compatible" content="IE=edge">
  <title>
     Example Domain | Widgets for everyone
  </title>
  <meta name="description" content="  The best widgets.  ">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <meta name="theme-color" content="#ffffff">
  <meta property="og:title" content="OG title">
  <meta property="og:image" content="https://example.com/a.png">
  <meta property="og:image" content="https://example.com/b.png">
  <meta property="og:empty" content="">
  <meta name="twitter:card" content="summary">
  <meta name="Twitter:title" content="wrong case">
  <link rel="canonical" href="https://example.com/">
</head>
<body><h1>Hi</h1></body>
</html>
"""


def test_title_and_description_keep_raw_text():
    tags = extract_tags(PAGE, "https://example.com/")
    assert tags.url == "https://example.com/"
    assert tags.title == "\n     Example Domain | Widgets for everyone\n  "
    assert tags.meta_description == "  The best widgets.  "


def test_padding_counts_toward_title_length():
    title = " " + "x" * 28 + " "
    tags = extract_tags("<title>{}</title>".format(title), "https://x.test/")
    assert tags.title == title
    length_check = evaluate(tags).checks.title[1]
    assert length_check.character_count == 30
    assert length_check.status == "pass"


def test_open_graph_and_twitter_maps():
    tags = extract_tags(PAGE, "https://example.com/")
    # later duplicates win; empty content is skipped
    assert tags.og_tags == {"og:title": "OG title", "og:image": "https://example.com/b.png"}
    assert tags.twitter_tags == {"twitter:card": "summary"}


def test_all_meta_tags_collects_misc_entries():
    all_meta = extract_tags(PAGE, "https://example.com/").all_meta_tags

    assert list(all_meta)[0] == "title"
    assert all_meta["description"] == "  The best widgets.  "
    assert all_meta["viewport"] == "width=device-width, initial-scale=1"
    assert all_meta["theme-color"] == "#ffffff"
    assert all_meta["og:title"] == "OG title"
    assert all_meta["twitter:card"] == "summary"
    assert all_meta["http-equiv:X-UA-Compatible"] == "IE=edge"
    assert all_meta["charset"] == "utf-8"
    assert all_meta["canonical"] == "https://example.com/"


def test_bare_page_yields_empty_tags():
    tags = extract_tags("<html><body>nothing here</body></html>", "https://example.com/")
    assert tags.title is None
    assert tags.meta_description is None
    assert tags.og_tags == {}
    assert tags.twitter_tags == {}
    assert tags.all_meta_tags == {}


def test_blank_title_is_treated_as_missing():
    tags = extract_tags("<title>   </title><meta name='description' content=''>", "https://x.test/")
    assert tags.title is None
    assert tags.meta_description is None
