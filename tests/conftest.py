"""Pytest configuration and fixtures."""

import os

import pytest

# Set test environment before any engine code runs
os.environ["AEO_ENV"] = "test"

from aeo_audit.signals.models import (  # noqa: E402
    CollectedSignals,
    FetchResult,
    PageSpeedResult,
)

PAGE_URL = "https://example.com/guides/vegetable-garden"

PERFECT_JSON_LD = """
{
  "@context": "https://schema.org",
  "@graph": [
    {
      "@type": "Organization",
      "@id": "https://example.com/#organization",
      "name": "Example Gardens",
      "url": "https://example.com",
      "logo": "https://example.com/logo.png",
      "description": "Practical guides for home vegetable growers.",
      "sameAs": ["https://www.linkedin.com/company/example-gardens"]
    },
    {
      "@type": "WebSite",
      "@id": "https://example.com/#website",
      "url": "https://example.com",
      "name": "Example Gardens",
      "publisher": {"@id": "https://example.com/#organization"},
      "potentialAction": {
        "@type": "SearchAction",
        "target": "https://example.com/search?q={search_term_string}",
        "query-input": "required name=search_term_string"
      }
    },
    {
      "@type": "Article",
      "@id": "https://example.com/guides/vegetable-garden#article",
      "headline": "How to Start a Vegetable Garden at Home",
      "image": "https://example.com/img/raised-bed.jpg",
      "datePublished": "2024-03-01",
      "author": {
        "@type": "Person",
        "@id": "https://example.com/#maria-lopez",
        "name": "Maria Lopez"
      },
      "publisher": {"@id": "https://example.com/#organization"}
    },
    {
      "@type": "BreadcrumbList",
      "@id": "https://example.com/guides/vegetable-garden#breadcrumb",
      "itemListElement": [
        {"@type": "ListItem", "position": 1, "name": "Guides", "item": "https://example.com/guides"},
        {"@type": "ListItem", "position": 2, "name": "Vegetable Garden"}
      ]
    }
  ]
}
"""

PERFECT_HTML = f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<meta name="robots" content="index, follow">
<title>How to Start a Vegetable Garden at Home: A Beginner Guide</title>
<meta name="description" content="Learn how to start a vegetable garden at home: pick a sunny spot, build rich soil with compost, and water young plants the right way all season long.">
<meta property="og:title" content="How to Start a Vegetable Garden at Home">
<meta property="og:description" content="A step by step guide for first time vegetable growers.">
<meta property="og:image" content="https://example.com/img/raised-bed.jpg">
<meta property="og:image:alt" content="Raised garden bed with tomato plants">
<meta property="og:image:width" content="1200">
<meta property="og:image:height" content="630">
<meta property="og:url" content="https://example.com/guides/vegetable-garden">
<meta property="og:type" content="article">
<meta property="og:site_name" content="Example Gardens">
<meta name="twitter:card" content="summary_large_image">
<meta name="twitter:site" content="@examplegardens">
<meta name="twitter:creator" content="@marialopez">
<script type="application/ld+json">{PERFECT_JSON_LD}</script>
</head>
<body>
<a href="#main" class="skip-link">Skip to main content</a>
<header role="banner">
<nav role="navigation" aria-label="Main navigation">
<a href="/guides">Vegetable growing guides</a>
<a href="/tools">Garden tool reviews</a>
<a href="/team">Our gardening team</a>
</nav>
<nav aria-label="Breadcrumb" class="breadcrumb">
<a href="/guides">Gardening guides</a> <span>Vegetable garden basics</span>
</nav>
</header>
<main id="main" role="main" aria-label="Guide content">
<article aria-labelledby="page-title">
<h1 id="page-title">How to Start a Vegetable Garden at Home</h1>
<img src="/img/raised-bed.webp" alt="Raised garden bed with tomato and pepper plants" width="1200" height="800" loading="lazy">
<p>A small vegetable garden can feed a family for much of the summer and into the fall. You do not need a large yard, costly tools, or years of practice to get good results. Most people grow more food than they expect in their very first year. This guide walks you through each step, from picking a spot to picking your first ripe tomato.</p>
<section aria-labelledby="spot">
<h2 id="spot">Choosing the Best Spot for Your Garden</h2>
<p>Pick a spot that gets at least six hours of direct sun on most days of the year. Tomatoes, peppers, and beans all need strong light to grow well and to set fruit. Look for ground that drains fast after rain, since roots rot when they sit in water for too long. If your soil stays wet, build a <a href="/guides/raised-beds">raised bed</a> and fill it with a good mix of soil and compost. A spot close to your kitchen door also helps, because you will visit a garden that you can see every day.</p>
</section>
<section aria-labelledby="soil">
<h2 id="soil">Preparing Rich Soil Before You Plant</h2>
<p>Good soil is the base of every healthy garden, so spend a little time on it before you plant. Clear away grass and weeds, then loosen the top layer with a fork or a spade. Mix in two or three inches of <a href="https://www.epa.gov/recycle/composting-home">compost</a> to feed the plants and to help the soil hold water. You can buy compost at a garden center, or you can make your own from kitchen scraps and dry leaves. Test the soil with a <a href="https://extension.illinois.edu/soil">cheap soil kit</a> if your plants looked weak in past years.</p>
<h3>Adding Compost and Mulch Each Season</h3>
<p>Spread a thin layer of mulch over the soil once your plants reach a few inches tall. Mulch keeps the ground cool, holds in water, and stops most weeds from coming up. <a href="/guides/mulch">Straw, shredded leaves, and wood chips</a> all work well in a home garden. Add fresh compost each spring and each fall so the soil stays rich and loose for years to come.</p>
</section>
<section aria-labelledby="water">
<h2 id="water">Watering and Caring for Young Plants</h2>
<img src="/img/watering.webp" alt="Gardener watering young lettuce at sunrise" width="1200" height="800" loading="lazy">
<p>Water your garden deeply two or three times a week instead of a little bit every day. Deep water pushes roots down into the soil, where they stay cool and find more food. Early morning works best, because the leaves dry out before the hot sun comes up. Check the soil with your finger, and water again when the top inch feels dry. Walk through your garden often, pull weeds while they are small, and pick off any <a href="/guides/garden-pests">pests you see</a> on the leaves.</p>
</section>
<article aria-labelledby="author">
<h2 id="author">Meet the Author of This Guide</h2>
<p>Maria Lopez has grown food in small city yards for more than fifteen years. She teaches free classes at her local library and writes a weekly column for new gardeners. Her own garden fits in a space the size of a parking spot, yet it gives her fresh food from June to October.</p>
</article>
</article>
<aside role="complementary" aria-labelledby="tips">
<h2 id="tips">Quick Tips for First Time Growers</h2>
<ul>
<li>Start with five or six easy crops such as lettuce, beans, and zucchini for your first season.</li>
<li>Grow the foods your family likes to eat most, since you will use them right away in meals.</li>
</ul>
</aside>
</main>
<aside aria-label="Season reminder">
<h2>Planting Calendar Reminder for Spring</h2>
<div>Plant cool crops in early spring and warm crops after the last frost.</div>
</aside>
<footer role="contentinfo">
<small>Copyright 2024 Example Gardens</small>
</footer>
</body>
</html>
"""

MINIMAL_HTML = """<html>
<head><title>Plain page</title></head>
<body><div>Plain content with no structured data and no headings.</div></body>
</html>
"""

ALLOW_ALL_ROBOTS = """User-agent: *
Allow: /

Sitemap: https://example.com/sitemap.xml
"""

BLOCK_ALL_ROBOTS = """User-agent: *
Disallow: /
"""

SITEMAP_XML = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">
  <url><loc>https://example.com/</loc><lastmod>2024-03-01</lastmod></url>
  <url><loc>https://example.com/guides/vegetable-garden</loc><lastmod>2024-03-01</lastmod></url>
</urlset>
"""

LLMS_TXT = """# Example Gardens

> Practical vegetable gardening guides for small city yards.

## Guides

- [Vegetable garden basics](https://example.com/guides/vegetable-garden): Start a first garden
- [Raised beds](https://example.com/guides/raised-beds): Build and fill a raised bed
- [Mulch](https://example.com/guides/mulch): Choose and spread mulch
"""


@pytest.fixture(autouse=True)
def _test_settings():
    """Fresh settings for every test."""
    from aeo_audit.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def page_url() -> str:
    return PAGE_URL


@pytest.fixture
def perfect_html() -> str:
    return PERFECT_HTML


@pytest.fixture
def minimal_html() -> str:
    return MINIMAL_HTML


@pytest.fixture
def perfect_signals() -> CollectedSignals:
    """Signals for a fully reachable, fast, server-rendered page."""
    return CollectedSignals(
        robots_txt=FetchResult(success=True, data=ALLOW_ALL_ROBOTS, status_code=200),
        sitemap=FetchResult(success=True, data=SITEMAP_XML, status_code=200),
        rendered_html=PERFECT_HTML,
        page_speed=PageSpeedResult(performance_score=95, accessibility_score=98),
        llms_txt=FetchResult(success=True, data=LLMS_TXT, status_code=200),
    )


@pytest.fixture
def blocking_signals(perfect_signals: CollectedSignals) -> CollectedSignals:
    """Same page, but robots.txt shuts out every crawler."""
    return perfect_signals.model_copy(
        update={"robots_txt": FetchResult(success=True, data=BLOCK_ALL_ROBOTS, status_code=200)}
    )
