"""Unit tests for the pure clean_query() function.

Tests cover fence stripping, comment and blank-line removal, the
required-table check, and the pipe-or-bare-table rule.
"""

from __future__ import annotations

import pytest
from entities.query_extractor import clean_query

TABLE = "LogExecutionClusterInfo"


# ── Accepted queries ─────────────────────────────────────────────────


class TestAcceptedQueries:
    """Candidates that survive cleaning."""

    def test_single_line_pipeline(self) -> None:
        """A one-line pipeline is returned unchanged."""
        query = f"{TABLE} | take 10"
        assert clean_query(query) == query

    def test_multi_line_is_trimmed_and_joined(self) -> None:
        """Lines are trimmed and rejoined with a single newline."""
        query = f"  {TABLE}  \n    | where poolId == 'ACI'\n\t| count  "
        assert clean_query(query) == f"{TABLE}\n| where poolId == 'ACI'\n| count"

    def test_bare_table_is_accepted(self) -> None:
        """Exactly the table name, with no pipe, is a valid query."""
        assert clean_query(f"  {TABLE}  ") == TABLE

    def test_crlf_line_endings(self) -> None:
        """Windows line endings do not leave blank or dirty lines."""
        query = f"{TABLE}\r\n| take 5\r\n"
        assert clean_query(query) == f"{TABLE}\n| take 5"


# ── Noise removal ────────────────────────────────────────────────────


class TestNoiseRemoval:
    """Markdown fences, comments and blank lines are dropped."""

    @pytest.mark.parametrize("fence", ["```kql", "```kusto", "```"])
    def test_fence_markers_removed(self, fence: str) -> None:
        query = f"{fence}\n{TABLE}\n| take 1\n```"
        assert clean_query(query) == f"{TABLE}\n| take 1"

    def test_comment_lines_removed(self) -> None:
        """Lines starting with // or # are removed."""
        query = f"// daily utilization\n{TABLE}\n# filter\n| where cpuLoad > 0"
        assert clean_query(query) == f"{TABLE}\n| where cpuLoad > 0"

    def test_blank_lines_removed(self) -> None:
        query = f"{TABLE}\n\n   \n| take 1"
        assert clean_query(query) == f"{TABLE}\n| take 1"

    def test_trailing_comment_on_code_line_is_kept(self) -> None:
        """Only whole comment lines are removed."""
        query = f"{TABLE} | take 1 // sample"
        assert clean_query(query) == query


# ── Rejections ───────────────────────────────────────────────────────


class TestRejections:
    """Candidates that clean to an empty string."""

    @pytest.mark.parametrize("text", ["", "   ", "\n\n", "// only a comment\n# another"])
    def test_empty_or_comment_only(self, text: str) -> None:
        assert clean_query(text) == ""

    def test_missing_table_is_rejected(self) -> None:
        """Without the required table the query is rejected regardless of content."""
        assert clean_query("OtherTable | where x > 1 | take 10") == ""

    def test_table_in_comment_only_is_rejected(self) -> None:
        """A table mention inside a removed comment line does not count."""
        assert clean_query(f"// {TABLE}\nOtherTable | take 1") == ""

    def test_extra_text_without_pipe_is_rejected(self) -> None:
        """Table name plus other text but no pipe is not a query."""
        assert clean_query(f"{TABLE} take 10") == ""

    def test_prose_mentioning_table_is_rejected(self) -> None:
        assert clean_query(f"This query reads {TABLE} for the pool.") == ""
