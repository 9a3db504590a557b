"""Knowledge base for accessibility recommendations."""

from aeo_audit.fixes.templates import RecommendationTemplate, build_registry

ACCESSIBILITY_FIXES = build_registry(
    # Critical DOM
    RecommendationTemplate(
        key="rendered_html_unavailable",
        problem="The rendered DOM could not be captured, so JavaScript dependency was not measured.",
        solution="Run the audit again with a rendered snapshot of the page.",
        impact=3,
    ),
    RecommendationTemplate(
        key="content_requires_javascript",
        problem="Only {percent}% of the page content is present before JavaScript runs.",
        solution="Render the main content on the server or pre-render it so crawlers receive it in the HTML.",
        explanation="Most AI crawlers do not execute JavaScript and only see the static HTML.",
        impact=9,
    ),
    RecommendationTemplate(
        key="navigation_requires_javascript",
        problem="Only {percent}% of the navigation links exist in the static HTML.",
        solution="Output navigation links as plain <a href> elements in the server response.",
        impact=7,
    ),
    RecommendationTemplate(
        key="semantics_require_javascript",
        problem="Only {percent}% of the semantic structure exists in the static HTML.",
        solution="Serve headings and landmark elements in the initial HTML rather than injecting them client side.",
        impact=6,
    ),
    # Semantic navigation
    RecommendationTemplate(
        key="weak_semantic_structure",
        problem="Semantic HTML5 coverage is low ({score}/60).",
        solution="Use <main>, <header>, <nav>, <footer>, <article> and landmark roles to describe the page.",
        impact=6,
    ),
    RecommendationTemplate(
        key="heading_structure_issues",
        problem="The heading structure is incomplete: {issues}.",
        solution="Use one H1 and descend through heading levels without skipping.",
        impact=6,
    ),
    RecommendationTemplate(
        key="missing_skip_link",
        problem="No skip link to the main content was found.",
        solution="Add a first focusable link such as <a href=\"#main\">Skip to content</a>.",
        impact=3,
    ),
    RecommendationTemplate(
        key="missing_navigation_landmark",
        problem="No <nav> element or navigation landmark was found.",
        solution="Wrap the main navigation in a <nav> element.",
        impact=5,
    ),
    # Images
    RecommendationTemplate(
        key="images_missing_alt",
        problem="{count} of {total} images have no alt text.",
        solution="Describe each informative image in its alt attribute and mark decorative ones with alt=\"\" and role=\"presentation\".",
        explanation="Alt text is the only way for screen readers and text-only crawlers to understand an image.",
        impact=8,
    ),
    RecommendationTemplate(
        key="images_poor_alt",
        problem="{count} image(s) use placeholder alt text such as file names.",
        solution="Replace file names and generic words with a description of the image content.",
        impact=5,
    ),
    RecommendationTemplate(
        key="images_long_alt",
        problem="{count} image(s) have alt text longer than 125 characters.",
        solution="Keep alt text short and move long descriptions to a caption or the surrounding text.",
        impact=4,
    ),
    RecommendationTemplate(
        key="images_oversized",
        problem="{count} image(s) declare dimensions larger than 2000 pixels.",
        solution="Resize images to the size they are displayed at and serve responsive variants.",
        impact=4,
    ),
    RecommendationTemplate(
        key="images_legacy_format",
        problem="{count} of your {total} images are not using modern, efficient formats like WebP or AVIF.",
        solution="Convert images to WebP or AVIF, or serve them through <picture> with a modern <source>.",
        explanation="Smaller images make pages load faster for users and crawlers alike.",
        impact=7,
    ),
    RecommendationTemplate(
        key="images_not_lazy",
        problem="{count} of your {total} images are missing the loading=\"lazy\" attribute.",
        solution="Add loading=\"lazy\" to images below the fold.",
        explanation="Lazy loading defers offscreen images so the main content renders first.",
        impact=5,
    ),
    # Page speed
    RecommendationTemplate(
        key="page_speed_unavailable",
        problem="Page speed data is temporarily unavailable.",
        solution="Run the audit again later to include performance measurements.",
        impact=2,
    ),
    RecommendationTemplate(
        key="slow_page",
        problem="The performance score is {score}/100.",
        solution="Address the top opportunities: {opportunities}.",
        explanation="Slow pages are crawled less often and may time out for AI crawlers.",
        impact=6,
    ),
)
