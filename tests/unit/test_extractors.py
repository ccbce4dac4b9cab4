"""Unit tests for contest and problem page extractors."""

import pytest
from bs4 import BeautifulSoup

from forces.domain.exceptions import ElementNotFoundError, MalformedPageError
from forces.domain.models import Test
from forces.infrastructure.parsers import (
    extract_problem_ids,
    extract_problem_name,
    extract_sample_tests,
)
from forces.infrastructure.tree import SoupNode


class TestExtractProblemIds:
    """Test problem id extraction from contest pages."""

    def test_extracts_ids_in_listing_order(self, contest_page):
        root = SoupNode.from_html(contest_page(["A", "B", "C1", "C2"]))

        assert extract_problem_ids(root) == ["A", "B", "C1", "C2"]

    def test_header_only_table_yields_no_ids(self, contest_page):
        root = SoupNode.from_html(contest_page([]))

        assert extract_problem_ids(root) == []

    def test_table_with_tbody(self):
        root = SoupNode.from_html(
            '<table class="problems"><tbody>'
            "<tr><th>#</th></tr>"
            '<tr><td><a href="#"> D </a></td></tr>'
            "</tbody></table>"
        )

        assert extract_problem_ids(root) == ["D"]

    def test_missing_table_raises(self):
        root = SoupNode.from_html("<html><body><p>Contest not found</p></body></html>")

        with pytest.raises(ElementNotFoundError):
            extract_problem_ids(root)

    def test_row_without_link_raises(self):
        root = SoupNode.from_html(
            '<table class="problems"><tr><th>#</th></tr><tr><td>A</td></tr></table>'
        )

        with pytest.raises(MalformedPageError):
            extract_problem_ids(root)


class TestExtractProblemName:
    """Test problem name extraction."""

    def test_returns_header_title(self, problem_page):
        root = SoupNode.from_html(problem_page("D1. Xor-Subsequence (easy version)", [("1", "2")]))

        assert extract_problem_name(root) == "D1. Xor-Subsequence (easy version)"

    def test_missing_title_raises(self):
        root = SoupNode.from_html("<div class='header'><p>No title</p></div>")

        with pytest.raises(ElementNotFoundError):
            extract_problem_name(root)


class TestExtractSampleTests:
    """Test sample test extraction."""

    def test_three_pairs_in_document_order(self, problem_page):
        root = SoupNode.from_html(
            problem_page("A. Sum", [("1 2", "3"), ("2 2", "4"), ("5<br/>6", "11")])
        )

        tests = extract_sample_tests(root)

        assert tests == [
            Test(input="1 2", output="3"),
            Test(input="2 2", output="4"),
            Test(input="5\n6", output="11"),
        ]

    def test_line_divs_are_joined_with_newlines(self, problem_page):
        lines = '<div class="test-example-line">2</div><div class="test-example-line">1 3</div>'
        # html.parser keeps the line divs nested inside <pre>
        root = SoupNode(BeautifulSoup(problem_page("A. Sum", [(lines, "4")]), "html.parser"))

        assert extract_sample_tests(root) == [Test(input="2\n1 3", output="4")]

    def test_unpaired_trailing_input_raises(self, sample_block):
        html = (
            '<div class="sample-test">'
            + sample_block("input", "1")
            + sample_block("output", "1")
            + sample_block("input", "2")
            + "</div>"
        )

        with pytest.raises(MalformedPageError):
            extract_sample_tests(SoupNode.from_html(html))

    def test_empty_pre_raises(self, sample_block):
        html = (
            '<div class="sample-test">'
            + sample_block("input", "")
            + sample_block("output", "1")
            + "</div>"
        )

        with pytest.raises(MalformedPageError):
            extract_sample_tests(SoupNode.from_html(html))

    def test_missing_sample_block_raises(self):
        root = SoupNode.from_html('<div class="problem-statement"><p>Interactive</p></div>')

        with pytest.raises(ElementNotFoundError):
            extract_sample_tests(root)

    def test_newline_after_pre_is_not_sample_data(self):
        html = (
            '<div class="sample-test">'
            '<div class="input"><div class="title">Input</div><pre>\n2 2\n</pre></div>'
            '<div class="output"><div class="title">Output</div><pre>\n4\n</pre></div>'
            "</div>"
        )

        tests = extract_sample_tests(SoupNode.from_html(html))

        assert tests == [Test(input="2 2\n", output="4\n")]
