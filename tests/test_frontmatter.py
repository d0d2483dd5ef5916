"""Tests for front matter parsing."""

from datetime import date, datetime

import pytest

from blog.exceptions import FrontMatterError
from blog.frontmatter import parse_date, split_document, split_list


class TestKeyValueHeader:
    """Test the 'Key: value' header style."""

    def test_split_metadata_and_body(self, sample_text):
        metadata, body = split_document(sample_text)

        assert metadata["title"] == "Understanding descriptors"
        assert metadata["date"] == "2020-05-01 09:30"
        assert metadata["slug"] == "understanding-descriptors"
        assert body.startswith("## Lookup order")

    def test_keys_are_lower_cased(self):
        metadata, _ = split_document("TITLE: Upper\nCategory: X\n\nBody\n")
        assert set(metadata) == {"title", "category"}

    def test_continuation_lines_are_folded(self, sample_text):
        metadata, _ = split_document(sample_text)
        assert metadata["summary"] == "How attribute lookup really works."

    def test_value_may_contain_colons(self):
        metadata, _ = split_document("Title: Metaclasses: a tour\nImage: https://example.com/a.png\n\nx\n")
        assert metadata["title"] == "Metaclasses: a tour"
        assert metadata["image"] == "https://example.com/a.png"

    def test_header_without_body(self):
        metadata, body = split_document("Title: Only a header\n")
        assert metadata == {"title": "Only a header"}
        assert body == ""

    def test_byte_order_mark_is_ignored(self):
        metadata, _ = split_document("\ufeffTitle: BOM\n\nBody\n")
        assert metadata["title"] == "BOM"

    def test_malformed_line_raises(self):
        with pytest.raises(FrontMatterError) as exc_info:
            split_document("Title: ok\nthis line has no key\n\nBody\n", path="post.md")

        assert exc_info.value.line == 2
        assert exc_info.value.path == "post.md"
        assert "post.md:2" in str(exc_info.value)

    def test_body_without_header_raises(self):
        with pytest.raises(FrontMatterError):
            split_document("# Just a heading\n\nSome text.\n")

    def test_leading_blank_line_raises(self):
        with pytest.raises(FrontMatterError):
            split_document("\nTitle: late\n")

    def test_empty_document_raises(self):
        with pytest.raises(FrontMatterError):
            split_document("")


class TestYamlHeader:
    """Test the '---' fenced YAML header style."""

    def test_split_yaml_header(self):
        text = "---\nTitle: YAML post\nDate: 2021-01-02\nTags: [a, b]\n---\n\n# Body\n"
        metadata, body = split_document(text)

        assert metadata["title"] == "YAML post"
        assert metadata["date"] == date(2021, 1, 2)
        assert metadata["tags"] == ["a", "b"]
        assert body == "# Body\n"

    def test_empty_yaml_header(self):
        metadata, body = split_document("---\n---\nBody\n")
        assert metadata == {}
        assert body == "Body\n"

    def test_unclosed_yaml_header_raises(self):
        with pytest.raises(FrontMatterError, match="unclosed"):
            split_document("---\nTitle: never closed\n")

    def test_invalid_yaml_raises(self):
        with pytest.raises(FrontMatterError, match="invalid YAML"):
            split_document("---\nTitle: [unbalanced\n---\nBody\n")

    def test_non_mapping_yaml_raises(self):
        with pytest.raises(FrontMatterError, match="mapping"):
            split_document("---\n- just\n- a list\n---\nBody\n")


class TestParseDate:
    """Test date parsing."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2019-03-02 10:20", datetime(2019, 3, 2, 10, 20)),
            ("2019-03-02 10:20:30", datetime(2019, 3, 2, 10, 20, 30)),
            ("2019-03-02T10:20", datetime(2019, 3, 2, 10, 20)),
            ("2019-03-02", datetime(2019, 3, 2)),
            ("2019/03/02", datetime(2019, 3, 2)),
        ],
    )
    def test_parse_strings(self, value, expected):
        assert parse_date(value) == expected

    def test_parse_iso_with_offset(self):
        parsed = parse_date("2019-03-02T10:20:00+02:00")
        assert parsed.utcoffset().total_seconds() == 7200

    def test_date_and_datetime_objects(self):
        assert parse_date(date(2020, 1, 5)) == datetime(2020, 1, 5)
        moment = datetime(2020, 1, 5, 8, 0)
        assert parse_date(moment) is moment

    @pytest.mark.parametrize("value", [None, "", "   ", "yesterday", "2019-13-45", 42])
    def test_invalid_dates_raise(self, value):
        with pytest.raises(FrontMatterError):
            parse_date(value)


class TestSplitList:
    """Test list normalization for Tags and Authors."""

    def test_comma_separated_string(self):
        assert split_list("python, oop ,, metaclass ") == ("python", "oop", "metaclass")

    def test_list_value(self):
        assert split_list(["a", " b ", ""]) == ("a", "b")

    def test_none_and_scalar(self):
        assert split_list(None) == ()
        assert split_list(2019) == ("2019",)
