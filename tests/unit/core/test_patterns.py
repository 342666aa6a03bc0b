import pytest

from threadline.core.utils.patterns import (
    compile_glob,
    expand_pattern_variants,
    filter_matching,
    matches,
    matches_any,
)


class TestMatches:
    @pytest.mark.parametrize("path", ["src/a/b.ts", "a.ts", "src/a.ts"])
    def test_double_star_spans_zero_or_more_directories(self, path: str) -> None:
        assert matches(path, "**/*.ts")

    def test_single_star_stays_in_one_segment(self) -> None:
        assert matches("src/a.ts", "src/*.ts")
        assert not matches("src/b/a.ts", "src/*.ts")

    def test_anchored_full_path(self) -> None:
        """A pattern must cover the whole path, not a substring of it."""
        assert not matches("lib/src/a.ts", "src/*.ts")
        assert not matches("src/a.tsx", "src/*.ts")

    def test_question_mark_matches_exactly_one_character(self) -> None:
        assert matches("src/a1.ts", "src/a?.ts")
        assert not matches("src/a12.ts", "src/a?.ts")
        assert not matches("src/a.ts", "src/a?.ts")

    def test_trailing_double_star_matches_directory_contents(self) -> None:
        assert matches("db/migrations/001.sql", "db/**")
        assert matches("db/schema.sql", "db/**")
        assert not matches("dbx/schema.sql", "db/**")

    def test_middle_double_star_matches_zero_segments(self) -> None:
        assert matches("src/index.ts", "src/**/index.ts")
        assert matches("src/a/b/index.ts", "src/**/index.ts")

    def test_regex_metacharacters_are_literal(self) -> None:
        assert matches("docs/a+b.md", "docs/a+b.md")
        assert not matches("docs/aab.md", "docs/a+b.md")
        assert matches("src/(app)/page.tsx", "src/(app)/*.tsx")

    def test_backslashes_are_normalized(self) -> None:
        assert matches("src\\a.ts", "src/*.ts")

    def test_empty_inputs_never_match(self) -> None:
        assert not matches("", "**/*")
        assert not matches("a.ts", "")


class TestMatchesAny:
    def test_any_pattern_is_enough(self) -> None:
        assert matches_any("db/q.sql", ["**/*.ts", "**/*.sql"])

    def test_no_patterns(self) -> None:
        assert not matches_any("a.ts", [])


class TestFilterMatching:
    def test_preserves_input_order(self) -> None:
        files = ["z.ts", "b.py", "a.ts", "src/c.ts"]
        assert filter_matching(files, ["**/*.ts"]) == ["z.ts", "a.ts", "src/c.ts"]

    def test_no_match(self) -> None:
        assert filter_matching(["a.ts"], ["**/*.sql"]) == []

    def test_empty_patterns(self) -> None:
        assert filter_matching(["a.ts"], []) == []


class TestCompileGlob:
    def test_double_star_tokenized_before_single_star(self) -> None:
        assert compile_glob("**").pattern == "^.*$"
        assert compile_glob("*").pattern == "^[^/]*$"

    def test_compiled_patterns_are_cached(self) -> None:
        assert compile_glob("src/**/*.py") is compile_glob("src/**/*.py")


def test_expand_pattern_variants_adds_zero_segment_forms() -> None:
    variants = expand_pattern_variants("src/**/*.ts")
    assert "src/**/*.ts" in variants
    assert "src/*.ts" in variants
