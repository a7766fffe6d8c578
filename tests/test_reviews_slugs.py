"""
domains/reviews/slugs.py 테스트
"""

import pytest

from domains.reviews.slugs import generate_slug


class TestGenerateSlug:
    """generate_slug 함수 테스트"""

    def test_punctuation_runs_collapse(self):
        """구두점/공백 연속 구간은 '-' 하나로"""
        assert generate_slug("The Matrix: Reloaded!!") == "the-matrix-reloaded"

    @pytest.mark.parametrize(
        "title, expected",
        [
            ("Heat", "heat"),
            ("  Blade   Runner 2049  ", "blade-runner-2049"),
            ("--Alien--", "alien"),
            ("Amélie", "am-lie"),
            ("Se7en", "se7en"),
        ],
    )
    def test_examples(self, title, expected):
        assert generate_slug(title) == expected

    def test_no_alphanumerics_gives_empty(self):
        """영숫자가 없으면 빈 문자열 (저장소에서 거부)"""
        assert generate_slug("!!! ???") == ""
        assert generate_slug("") == ""

    def test_output_charset(self):
        slug = generate_slug("Crouching Tiger, Hidden Dragon (2000)")
        assert slug == "crouching-tiger-hidden-dragon-2000"
        assert not slug.startswith("-") and not slug.endswith("-")
        assert "--" not in slug

    def test_deterministic(self):
        assert generate_slug("Dune: Part Two") == generate_slug("Dune: Part Two")
