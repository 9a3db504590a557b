"""Readability score calculator.

Scores the main-content text for clarity (Flesch reading ease, passive
voice), organization (paragraph structure, content density) and
linguistic precision (sentence length variance, vocabulary diversity).
"""

from __future__ import annotations

import numpy as np
import structlog

from aeo_audit.extraction.dom import PageDocument, parse_html
from aeo_audit.extraction.passive import PassiveVoiceDetector, TaggerPassiveDetector
from aeo_audit.extraction.text import (
    TextStatistics,
    analyze_text,
    extract_main_text,
    flesch_level,
    split_sentences,
    split_words,
)
from aeo_audit.fixes.readability import READABILITY_FIXES
from aeo_audit.scoring.models import (
    Category,
    CategoryResult,
    DrawerSubSection,
    MainSection,
    MetricCard,
    PerformanceStatus,
    Recommendation,
    round_half_up,
    round_to_tenth,
)
from aeo_audit.signals.models import CollectedSignals

logger = structlog.get_logger(__name__)

SECTION_ID = "readability"
SECTION_NAME = "Readability"
SECTION_DESCRIPTION = "Clarity and organization of the main content text"

# Card maxima (total = 100)
READABILITY_WEIGHTS = {
    "flesch_reading_ease": 20,
    "passive_voice_ratio": 20,
    "paragraph_structure": 20,
    "content_density": 15,
    "sentence_length_variance": 15,
    "vocabulary_diversity": 10,
}

# Flesch windows, widest last: (low, high, points)
FLESCH_WINDOWS = [(60, 80, 20), (50, 90, 15), (40, 95, 10)]
FLESCH_FLOOR = 30
FLESCH_FLOOR_POINTS = 6
FLESCH_MIN_POINTS = 3

# (max ratio, points); anything above the last threshold scores 8
PASSIVE_BUCKETS = [(0.05, 20), (0.10, 16), (0.15, 12)]
PASSIVE_MIN_POINTS = 8

PARAGRAPH_MIN_WORDS = 50
PARAGRAPH_MAX_WORDS = 150
PARAGRAPH_BUCKETS = [(0.8, 20), (0.6, 16), (0.4, 12), (0.2, 8)]
PARAGRAPH_MIN_POINTS = 4
LONG_PARAGRAPH_SHARE = 0.3
SHORT_PARAGRAPH_SHARE = 0.4
INCONSISTENCY_FACTOR = 0.8

DENSITY_BUCKETS = [(0.3, 15), (0.2, 12), (0.15, 9), (0.1, 6)]
DENSITY_MIN_POINTS = 3
THIN_CONTENT_CHARS = 300

LONG_SENTENCE_AVG = 25
SHORT_SENTENCE_AVG = 15
MIN_SENTENCE_STD = 3
LONG_SENTENCE_PENALTY = 5
SHORT_SENTENCE_PENALTY = 3
MONOTONY_PENALTY = 2

VOCABULARY_BUCKETS = [(0.6, 10), (0.5, 8), (0.4, 6), (0.3, 4)]
VOCABULARY_MIN_POINTS = 2


def _bucket_at_least(value: float, buckets: list[tuple[float, int]], floor: int) -> int:
    for threshold, points in buckets:
        if value >= threshold:
            return points
    return floor


def flesch_points(score: float) -> int:
    for low, high, points in FLESCH_WINDOWS:
        if low <= score <= high:
            return points
    return FLESCH_FLOOR_POINTS if score >= FLESCH_FLOOR else FLESCH_MIN_POINTS


def passive_points(ratio: float) -> int:
    for threshold, points in PASSIVE_BUCKETS:
        if ratio < threshold:
            return points
    return PASSIVE_MIN_POINTS


def paragraph_points(ratio: float) -> int:
    return _bucket_at_least(ratio, PARAGRAPH_BUCKETS, PARAGRAPH_MIN_POINTS)


def density_points(ratio: float) -> int:
    return _bucket_at_least(ratio, DENSITY_BUCKETS, DENSITY_MIN_POINTS)


def vocabulary_points(ratio: float) -> int:
    return _bucket_at_least(ratio, VOCABULARY_BUCKETS, VOCABULARY_MIN_POINTS)


def _error_card(card_id: str, name: str, max_score: int, reason: str) -> MetricCard:
    return MetricCard(
        id=card_id,
        name=name,
        score=0,
        max_score=max_score,
        explanation=reason,
        recommendations=[READABILITY_FIXES["no_text"].render()],
        raw_data={"error": reason},
        status=PerformanceStatus.ERROR,
    )


class ReadabilityAnalyzer:
    """Scores the readability of a page's main content."""

    def __init__(
        self,
        weight_percentage: int = 15,
        passive_detector: PassiveVoiceDetector | None = None,
    ):
        self.weight_percentage = weight_percentage
        self.passive_detector = passive_detector or TaggerPassiveDetector()

    def analyze(
        self,
        html: str,
        url: str,
        signals: CollectedSignals | None = None,
    ) -> CategoryResult:
        """
        Analyze readability of a page.

        Args:
            html: Page HTML
            url: Page URL
            signals: Unused

        Returns:
            CategoryResult with three drawers totalling 100 points
        """
        try:
            return self._analyze(html, url)
        except Exception as e:
            logger.warning("readability_analysis_failed", url=url, error=str(e))
            return CategoryResult.failure(
                Category.READABILITY, SECTION_ID, SECTION_NAME, self.weight_percentage, str(e)
            )

    def _analyze(self, html: str, url: str) -> CategoryResult:
        doc = parse_html(html)
        text = extract_main_text(html)

        stats = analyze_text(text) if text.strip() else None
        # punctuation or symbols alone leave no words to score
        if stats is None or stats.word_count == 0:
            cards = self._empty_text_cards()
        else:
            cards = {
                "flesch": self._score_flesch(stats),
                "passive": self._score_passive(text),
                "paragraphs": self._score_paragraphs(doc),
                "density": self._score_density(text, html),
                "variance": self._score_sentence_variance(stats),
                "vocabulary": self._score_vocabulary(stats),
            }

        drawers = [
            DrawerSubSection(
                id="text-clarity",
                name="Text Clarity",
                description="Reading ease and use of the active voice",
                cards=[cards["flesch"], cards["passive"]],
            ),
            DrawerSubSection(
                id="content-organization",
                name="Content Organization",
                description="Paragraph structure and text-to-markup density",
                cards=[cards["paragraphs"], cards["density"]],
            ),
            DrawerSubSection(
                id="linguistic-precision",
                name="Linguistic Precision",
                description="Sentence rhythm and vocabulary range",
                cards=[cards["variance"], cards["vocabulary"]],
            ),
        ]
        section = MainSection.additive(
            id=SECTION_ID,
            name=SECTION_NAME,
            description=SECTION_DESCRIPTION,
            weight_percentage=self.weight_percentage,
            drawers=drawers,
        )

        logger.info(
            "readability_analyzed",
            url=url,
            words=stats.word_count if stats else 0,
            total_score=section.total_score,
        )

        return CategoryResult(
            category=Category.READABILITY,
            section=section,
            raw_data={"textLength": len(text), **(stats.to_dict() if stats else {})},
        )

    def _empty_text_cards(self) -> dict[str, MetricCard]:
        reason = "No readable text was found in the main content."
        return {
            "flesch": _error_card("flesch-reading-ease", "Flesch Reading Ease", 20, reason),
            "passive": _error_card("passive-voice-ratio", "Passive Voice Ratio", 20, reason),
            "paragraphs": _error_card("paragraph-structure", "Paragraph Structure", 20, reason),
            "density": _error_card("content-density", "Content Density", 15, reason),
            "variance": _error_card("sentence-length-variance", "Sentence Length Variance", 15, reason),
            "vocabulary": _error_card("vocabulary-diversity", "Vocabulary Diversity", 10, reason),
        }

    def _score_flesch(self, stats: TextStatistics) -> MetricCard:
        flesch = round_to_tenth(stats.flesch_reading_ease)
        level = flesch_level(flesch)
        recommendations: list[Recommendation] = []

        if flesch < 60:
            recommendations.append(READABILITY_FIXES["text_too_complex"].render(score=flesch, level=level))
        elif flesch > 80:
            recommendations.append(READABILITY_FIXES["text_too_simple"].render(score=flesch, level=level))

        return MetricCard(
            id="flesch-reading-ease",
            name="Flesch Reading Ease",
            score=flesch_points(flesch),
            max_score=READABILITY_WEIGHTS["flesch_reading_ease"],
            explanation=(
                "The Flesch score combines sentence length and word complexity. Scores between "
                "60 and 80 read comfortably for a general audience."
            ),
            recommendations=recommendations,
            success_message=f"The text reads comfortably (Flesch {flesch}, {level}).",
            raw_data={"fleschScore": flesch, "level": level},
        )

    def _score_passive(self, text: str) -> MetricCard:
        sentences = split_sentences(text)
        passive = self.passive_detector.count_passive(sentences)
        ratio = passive / len(sentences) if sentences else 0.0
        recommendations: list[Recommendation] = []

        if ratio >= PASSIVE_BUCKETS[0][0]:
            recommendations.append(
                READABILITY_FIXES["passive_voice"].render(percent=round_half_up(ratio * 100))
            )

        return MetricCard(
            id="passive-voice-ratio",
            name="Passive Voice Ratio",
            score=passive_points(ratio),
            max_score=READABILITY_WEIGHTS["passive_voice_ratio"],
            explanation="Active sentences state who does what, which makes facts easy to extract.",
            recommendations=recommendations,
            success_message="The text mostly uses the active voice.",
            raw_data={
                "passiveSentences": passive,
                "totalSentences": len(sentences),
                "passiveRatio": round(ratio, 3),
            },
        )

    def _score_paragraphs(self, doc: PageDocument) -> MetricCard:
        max_score = READABILITY_WEIGHTS["paragraph_structure"]
        counts = [len(split_words(p.get_text(" ", strip=True))) for p in doc.select("p")]
        counts = [c for c in counts if c > 0]

        if not counts:
            return MetricCard(
                id="paragraph-structure",
                name="Paragraph Structure",
                score=0,
                max_score=max_score,
                explanation="No <p> paragraphs were found to evaluate.",
                recommendations=[READABILITY_FIXES["no_paragraphs"].render()],
                raw_data={"paragraphs": 0},
                status=PerformanceStatus.ERROR,
            )

        lengths = np.array(counts, dtype=np.float64)
        total = len(counts)
        well = int(((lengths >= PARAGRAPH_MIN_WORDS) & (lengths <= PARAGRAPH_MAX_WORDS)).sum())
        long_share = float((lengths > PARAGRAPH_MAX_WORDS).sum()) / total
        short_share = float((lengths < PARAGRAPH_MIN_WORDS).sum()) / total
        average = float(lengths.mean())
        deviation = float(lengths.std())
        ratio = well / total

        recommendations: list[Recommendation] = []
        if ratio < 0.6:
            recommendations.append(
                READABILITY_FIXES["poor_paragraph_structure"].render(percent=round_half_up(ratio * 100))
            )
        if long_share > LONG_PARAGRAPH_SHARE:
            recommendations.append(
                READABILITY_FIXES["long_paragraphs"].render(percent=round_half_up(long_share * 100))
            )
        if short_share > SHORT_PARAGRAPH_SHARE:
            recommendations.append(
                READABILITY_FIXES["short_paragraphs"].render(percent=round_half_up(short_share * 100))
            )
        if total > 1 and deviation > INCONSISTENCY_FACTOR * average:
            recommendations.append(
                READABILITY_FIXES["inconsistent_paragraphs"].render(
                    average=round_half_up(average), deviation=round_half_up(deviation)
                )
            )

        return MetricCard(
            id="paragraph-structure",
            name="Paragraph Structure",
            score=paragraph_points(ratio),
            max_score=max_score,
            explanation="Paragraphs of 50 to 150 words hold one idea each and are easy to chunk.",
            recommendations=recommendations,
            success_message="Paragraphs are well sized and consistent.",
            raw_data={
                "paragraphs": total,
                "wellStructured": well,
                "averageWords": round(average, 1),
                "standardDeviation": round(deviation, 1),
            },
        )

    def _score_density(self, text: str, html: str) -> MetricCard:
        ratio = len(text) / len(html) if html else 0.0
        recommendations: list[Recommendation] = []

        if len(text) < THIN_CONTENT_CHARS:
            recommendations.append(READABILITY_FIXES["thin_content"].render(length=len(text)))
        if ratio < DENSITY_BUCKETS[-1][0]:
            recommendations.append(
                READABILITY_FIXES["low_content_density"].render(percent=round_to_tenth(ratio * 100))
            )

        return MetricCard(
            id="content-density",
            name="Content Density",
            score=density_points(ratio),
            max_score=READABILITY_WEIGHTS["content_density"],
            explanation="The share of the HTML that is readable text rather than markup and scripts.",
            recommendations=recommendations,
            success_message="Text makes up a healthy share of the page.",
            raw_data={"textLength": len(text), "htmlLength": len(html), "ratio": round(ratio, 3)},
        )

    def _score_sentence_variance(self, stats: TextStatistics) -> MetricCard:
        max_score = READABILITY_WEIGHTS["sentence_length_variance"]
        average = stats.avg_sentence_length
        deviation = stats.sentence_length_std
        recommendations: list[Recommendation] = []
        score = max_score

        if average > LONG_SENTENCE_AVG:
            score -= LONG_SENTENCE_PENALTY
            recommendations.append(
                READABILITY_FIXES["long_sentences"].render(average=round_to_tenth(average))
            )
        elif average < SHORT_SENTENCE_AVG:
            score -= SHORT_SENTENCE_PENALTY
            recommendations.append(
                READABILITY_FIXES["short_sentences"].render(average=round_to_tenth(average))
            )
        if deviation < MIN_SENTENCE_STD:
            score -= MONOTONY_PENALTY
            recommendations.append(
                READABILITY_FIXES["monotonous_sentences"].render(deviation=round_to_tenth(deviation))
            )

        return MetricCard(
            id="sentence-length-variance",
            name="Sentence Length Variance",
            score=score,
            max_score=max_score,
            explanation="Sentences of 15 to 25 words with some variety keep text clear and engaging.",
            recommendations=recommendations,
            success_message="Sentence length is well balanced.",
            raw_data={
                "averageLength": round_to_tenth(average),
                "standardDeviation": round_to_tenth(deviation),
                "sentences": stats.sentence_count,
            },
        )

    def _score_vocabulary(self, stats: TextStatistics) -> MetricCard:
        diversity = stats.vocabulary_diversity
        recommendations: list[Recommendation] = []
        if diversity < VOCABULARY_BUCKETS[-1][0]:
            recommendations.append(
                READABILITY_FIXES["low_vocabulary_diversity"].render(
                    percent=round_half_up(diversity * 100)
                )
            )

        return MetricCard(
            id="vocabulary-diversity",
            name="Vocabulary Diversity",
            score=vocabulary_points(diversity),
            max_score=READABILITY_WEIGHTS["vocabulary_diversity"],
            explanation="A varied vocabulary signals precise, information-rich writing.",
            recommendations=recommendations,
            success_message="The vocabulary is varied and precise.",
            raw_data={"uniqueWords": stats.unique_words, "diversity": round(diversity, 3)},
        )


def analyze_readability(
    html: str,
    url: str,
    signals: CollectedSignals | None = None,
    weight_percentage: int = 15,
    passive_detector: PassiveVoiceDetector | None = None,
) -> CategoryResult:
    """Convenience function to score readability."""
    return ReadabilityAnalyzer(weight_percentage, passive_detector).analyze(html, url, signals)
