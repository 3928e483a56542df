from __future__ import annotations

import unittest

from linkrules.link import MarkdownLink
from linkrules.match import download, external, prefix, same_page


class TestPrefix(unittest.TestCase):
    def test_prefix_checks_href_first(self) -> None:
        match = prefix("x:")
        link = MarkdownLink(href="x:/a", title="x:title", text="x:text")
        assert match(link) == {"href": "/a"}

    def test_prefix_falls_back_to_title_then_text(self) -> None:
        match = prefix("x:")
        assert match(MarkdownLink(href="/a", title="x:title", text="x:text")) == {"title": "title"}
        assert match(MarkdownLink(href="/a", text="x:text")) == {"text": "text"}

    def test_prefix_returns_none_without_match(self) -> None:
        assert prefix("x:")(MarkdownLink(href="/a", title="t", text="x")) is None

    def test_prefix_tolerates_empty_link(self) -> None:
        assert prefix("x:")(MarkdownLink()) is None


class TestExternal(unittest.TestCase):
    def test_absolute_http_links_match_without_rewrite(self) -> None:
        match = external()
        assert match(MarkdownLink(href="http://example.com")) == {}
        assert match(MarkdownLink(href="https://example.com/page")) == {}

    def test_external_prefix_in_text(self) -> None:
        link = MarkdownLink(href="/discussion", text="external:Discussion on Github")
        assert external()(link) == {"text": "Discussion on Github"}

    def test_relative_link_is_not_external(self) -> None:
        assert external()(MarkdownLink(href="/about")) is None

    def test_protocol_relative_link_is_not_external(self) -> None:
        assert external()(MarkdownLink(href="//cdn.example.com/x")) is None


class TestDownload(unittest.TestCase):
    def test_file_extension_matches_with_filename(self) -> None:
        assert download()(MarkdownLink(href="/assets/my-article.pdf")) == {"download": "my-article.pdf"}

    def test_extension_is_case_insensitive_for_page_check(self) -> None:
        assert download()(MarkdownLink(href="/index.HTML")) is None
        assert download()(MarkdownLink(href="/index.htm")) is None

    def test_query_and_fragment_are_ignored(self) -> None:
        out = download()(MarkdownLink(href="https://example.com/files/data.csv?v=2#top"))
        assert out == {"download": "data.csv"}

    def test_any_extension_length_counts(self) -> None:
        # Extension length is not bounded; long extensions still qualify.
        assert download()(MarkdownLink(href="/notes.markdown")) == {"download": "notes.markdown"}
        assert download()(MarkdownLink(href="/file.")) == {"download": "file."}

    def test_filename_is_taken_verbatim_from_the_path(self) -> None:
        # Spaces are not percent-encoded; an already encoded name stays encoded.
        assert download()(MarkdownLink(href="/files/my file.pdf")) == {"download": "my file.pdf"}
        assert download()(MarkdownLink(href="/files/my%20file.pdf")) == {"download": "my%20file.pdf"}

    def test_path_without_extension_falls_back_to_prefix(self) -> None:
        assert download()(MarkdownLink(href="/docs/guide")) is None
        assert download()(MarkdownLink(href="/docs/guide", text="download:Guide")) == {"text": "Guide"}

    def test_download_prefix_in_href(self) -> None:
        assert download()(MarkdownLink(href="download:/export")) == {"href": "/export"}

    def test_malformed_address_is_no_match(self) -> None:
        assert download()(MarkdownLink(href="http://[broken/file.zip")) is None

    def test_missing_href_uses_prefix(self) -> None:
        assert download()(MarkdownLink(title="download:Report")) == {"title": "Report"}


class TestSamePage(unittest.TestCase):
    def test_fragment_link(self) -> None:
        assert same_page()(MarkdownLink(href="#chapter-2")) is True

    def test_other_links(self) -> None:
        assert same_page()(MarkdownLink(href="/page#chapter-2")) is False
        assert same_page()(MarkdownLink()) is False


if __name__ == "__main__":
    unittest.main()
