"""Tests for the readability analyzer."""

import pytest

from aeo_audit.scoring.models import Category
from aeo_audit.scoring.readability import (
    READABILITY_WEIGHTS,
    ReadabilityAnalyzer,
    analyze_readability,
    density_points,
    flesch_points,
    paragraph_points,
    passive_points,
    vocabulary_points,
)

PAGE_URL = "https://example.com/blog/post"


def _cards(result):
    return {card.id: card for drawer in result.section.drawers for card in drawer.cards}


class AlwaysPassive:
    """Detector stub that flags every sentence."""

    def is_passive(self, sentence):
        return True

    def count_passive(self, sentences):
        return len(sentences)


class TestPointFunctions:
    """Tests for the score bucket helpers."""

    @pytest.mark.parametrize(
        "score,points", [(70, 20), (60, 20), (85, 15), (45, 10), (35, 6), (10, 3)]
    )
    def test_flesch_points(self, score, points):
        """Test Flesch windows, widest last."""
        assert flesch_points(score) == points

    @pytest.mark.parametrize("ratio,points", [(0.0, 20), (0.07, 16), (0.12, 12), (0.5, 8)])
    def test_passive_points(self, ratio, points):
        """Test passive ratio buckets."""
        assert passive_points(ratio) == points

    def test_other_buckets(self):
        """Test paragraph, density and vocabulary buckets and floors."""
        assert paragraph_points(0.9) == 20
        assert paragraph_points(0.5) == 12
        assert paragraph_points(0.1) == 4
        assert density_points(0.35) == 15
        assert density_points(0.05) == 3
        assert vocabulary_points(0.65) == 10
        assert vocabulary_points(0.1) == 2

    def test_weights_total(self):
        """Test card maxima add up to 100."""
        assert sum(READABILITY_WEIGHTS.values()) == 100


class TestReadabilityAnalyzer:
    """Tests for ReadabilityAnalyzer."""

    def test_perfect_page(self, perfect_html, page_url):
        """Test well written prose scores high."""
        result = ReadabilityAnalyzer().analyze(perfect_html, page_url)
        cards = _cards(result)

        assert result.category == Category.READABILITY
        assert result.max_score == 100
        assert result.score >= 80
        assert cards["paragraph-structure"].score == 20
        assert cards["passive-voice-ratio"].score == 20
        assert cards["sentence-length-variance"].score == 15
        assert [d.id for d in result.section.drawers] == [
            "text-clarity",
            "content-organization",
            "linguistic-precision",
        ]

    def test_whitespace_body(self):
        """Test a page with no readable text yields six error cards."""
        result = ReadabilityAnalyzer().analyze("<html><body>   </body></html>", PAGE_URL)
        cards = _cards(result)

        assert len(cards) == 6
        assert all(card.score == 0 for card in cards.values())
        assert all(card.status == "error" for card in cards.values())
        assert result.score == 0
        assert result.failed is False

    def test_punctuation_only_text(self):
        """Test text made only of punctuation gets the same error cards as empty text."""
        result = ReadabilityAnalyzer().analyze("<main><p>... !!! ??? -- ***</p></main>", PAGE_URL)
        cards = _cards(result)

        assert len(cards) == 6
        assert all(card.status == "error" for card in cards.values())
        assert result.score == 0
        assert result.raw_data["wordCount"] == 0

    def test_no_paragraphs(self):
        """Test text outside <p> gets an error paragraph card."""
        html = "<main><div>Plants need water. Soil needs compost. Gardens need sun.</div></main>"
        card = _cards(ReadabilityAnalyzer().analyze(html, PAGE_URL))["paragraph-structure"]

        assert card.score == 0
        assert card.status == "error"
        assert card.raw_data == {"paragraphs": 0}

    def test_long_paragraph(self):
        """Test a single oversized paragraph gets the floor score and advice."""
        sentence = "Tomatoes grow best in warm soil with plenty of light. "
        html = f"<main><p>{sentence * 25}</p></main>"
        card = _cards(ReadabilityAnalyzer().analyze(html, PAGE_URL))["paragraph-structure"]

        assert card.score == 4
        assert len(card.recommendations) == 2

    def test_injected_passive_detector(self, perfect_html, page_url):
        """Test the passive detector can be replaced."""
        analyzer = ReadabilityAnalyzer(passive_detector=AlwaysPassive())
        card = _cards(analyzer.analyze(perfect_html, page_url))["passive-voice-ratio"]

        assert card.score == 8
        assert "100" in card.recommendations[0].problem

    def test_monotonous_short_sentences(self):
        """Test short uniform sentences lose variance points."""
        html = "<main><p>" + "The cat sat on the mat. " * 12 + "</p></main>"
        card = _cards(ReadabilityAnalyzer().analyze(html, PAGE_URL))["sentence-length-variance"]

        assert card.score == 10
        assert len(card.recommendations) == 2

    def test_thin_content(self):
        """Test very short text is flagged as thin."""
        html = "<main><p>Short page.</p></main>"
        card = _cards(ReadabilityAnalyzer().analyze(html, PAGE_URL))["content-density"]

        problems = [rec.problem for rec in card.recommendations]
        assert "The main content is only 11 characters long." in problems

    def test_convenience_function(self, perfect_html, page_url):
        """Test analyze_readability honors the weight."""
        result = analyze_readability(perfect_html, page_url, weight_percentage=30)

        assert result.section.weight_percentage == 30
