"""Tests for recommendation templates and the knowledge bases."""

import pytest

from aeo_audit.fixes.accessibility import ACCESSIBILITY_FIXES
from aeo_audit.fixes.discoverability import DISCOVERABILITY_FIXES
from aeo_audit.fixes.llm_formatting import LLM_FORMATTING_FIXES
from aeo_audit.fixes.readability import READABILITY_FIXES
from aeo_audit.fixes.structured_data import JSONLD_FIXES, META_TAG_FIXES, SOCIAL_META_FIXES
from aeo_audit.fixes.templates import RecommendationTemplate, build_registry
from aeo_audit.scoring.models import Recommendation

ALL_REGISTRIES = [
    DISCOVERABILITY_FIXES,
    JSONLD_FIXES,
    META_TAG_FIXES,
    SOCIAL_META_FIXES,
    LLM_FORMATTING_FIXES,
    ACCESSIBILITY_FIXES,
    READABILITY_FIXES,
]


class TestRecommendationTemplate:
    """Tests for RecommendationTemplate."""

    def test_render_fills_placeholders(self):
        """Test every field is formatted with the given values."""
        template = RecommendationTemplate(
            key="demo",
            problem="{count} images lack alt text.",
            solution="Add alt text to {count} images.",
            explanation="Found on {page}.",
            impact=6,
        )
        rec = template.render(count=3, page="/home")

        assert isinstance(rec, Recommendation)
        assert rec.problem == "3 images lack alt text."
        assert rec.solution == "Add alt text to 3 images."
        assert rec.explanation == "Found on /home."
        assert rec.impact == 6

    def test_placeholders(self):
        """Test placeholder names are collected from all fields."""
        template = RecommendationTemplate(
            key="demo", problem="{a}", solution="{b}", explanation="{c}", impact=1
        )

        assert template.placeholders == {"a", "b", "c"}

    def test_missing_value_raises(self):
        """Test rendering without a placeholder value fails loudly."""
        template = RecommendationTemplate(key="demo", problem="{count}", solution="x", impact=1)

        with pytest.raises(KeyError, match="demo"):
            template.render()

    def test_duplicate_keys_rejected(self):
        """Test a registry cannot hold two templates with one key."""
        template = RecommendationTemplate(key="dup", problem="p", solution="s", impact=1)

        with pytest.raises(ValueError, match="dup"):
            build_registry(template, template)


class TestKnowledgeBases:
    """Tests for the per-category knowledge bases."""

    @pytest.mark.parametrize("registry", ALL_REGISTRIES)
    def test_impacts_in_range(self, registry):
        """Test every template impact is within 0-10."""
        assert all(0 <= t.impact <= 10 for t in registry.values())

    @pytest.mark.parametrize("registry", ALL_REGISTRIES)
    def test_keys_match_registry(self, registry):
        """Test templates are keyed by their own key."""
        assert all(key == template.key for key, template in registry.items())

    @pytest.mark.parametrize("registry", ALL_REGISTRIES)
    def test_templates_render(self, registry):
        """Test every template renders with dummy values for its placeholders."""
        for template in registry.values():
            rec = template.render(**{name: "1" for name in template.placeholders})

            assert "{" not in rec.problem
            assert "{" not in rec.solution
            assert rec.problem
            assert rec.solution
