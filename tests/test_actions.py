from __future__ import annotations

import unittest

from linkrules.actions import merge_attr, merge_class, merge_tokens, set_attr
from linkrules.link import Link


class TestSetAttr(unittest.TestCase):
    def test_set_overwrites_only_the_given_key(self) -> None:
        link = Link(href="/a", target="_self", class_name="x")
        out = set_attr("target", "_blank")(link)
        assert out.target == "_blank"
        assert out.href == "/a"
        assert out.class_name == "x"

    def test_set_does_not_touch_input(self) -> None:
        link = Link(href="/a")
        set_attr("href", "/b")(link)
        assert link.href == "/a"

    def test_set_unknown_key_goes_to_extra(self) -> None:
        out = set_attr("data-kind", "file")(Link())
        assert out.extra["data-kind"] == "file"

    def test_set_accepts_class_alias(self) -> None:
        out = set_attr("className", "btn")(Link())
        assert out.class_name == "btn"


class TestMergeAttr(unittest.TestCase):
    def test_merge_sets_value_when_absent(self) -> None:
        assert merge_attr("rel", "nofollow")(Link()).rel == "nofollow"

    def test_merge_prepends_new_token(self) -> None:
        out = merge_attr("class_name", "external")(Link(class_name="btn primary"))
        assert out.class_name == "external btn primary"

    def test_merge_keeps_existing_token_order_without_duplicates(self) -> None:
        out = merge_attr("class_name", "primary")(Link(class_name="btn primary"))
        assert out.class_name == "primary btn"

    def test_merge_is_idempotent(self) -> None:
        step = merge_attr("class_name", "x")
        once = step(Link(class_name="a b"))
        twice = step(once)
        assert once == twice

    def test_merge_replaces_non_string_value(self) -> None:
        out = merge_attr("download", "file.pdf")(Link(download=True))
        assert out.download == "file.pdf"

    def test_merge_does_not_mutate_input(self) -> None:
        link = Link(class_name="a")
        merge_class("b")(link)
        assert link.class_name == "a"

    def test_merge_tokens_strips_surrounding_space(self) -> None:
        assert merge_tokens("  a b ", "c") == "c a b"


class TestMergeClass(unittest.TestCase):
    def test_merge_class_targets_class_name(self) -> None:
        assert merge_class("download")(Link()).class_name == "download"


if __name__ == "__main__":
    unittest.main()
