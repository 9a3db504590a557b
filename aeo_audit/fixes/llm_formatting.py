"""Knowledge base for LLM formatting recommendations."""

from aeo_audit.fixes.templates import RecommendationTemplate, build_registry

LLM_FORMATTING_FIXES = build_registry(
    # Heading structure
    RecommendationTemplate(
        key="no_headings",
        problem="The page has no headings (H1-H6).",
        solution="Structure the content with one H1 followed by H2 and H3 subheadings.",
        explanation="Headings are the outline language models use to split a page into answerable chunks.",
        impact=9,
    ),
    RecommendationTemplate(
        key="missing_h1",
        problem="The page has no H1 heading.",
        solution="Add a single H1 that states the main topic of the page.",
        explanation="The H1 is the strongest signal of what the page is about.",
        impact=8,
    ),
    RecommendationTemplate(
        key="multiple_h1",
        problem="The page has {count} H1 headings instead of one.",
        solution="Keep one H1 for the page title and demote the others to H2.",
        explanation="Several H1s make the main topic ambiguous.",
        impact=6,
    ),
    RecommendationTemplate(
        key="hierarchy_violations",
        problem="The heading hierarchy has {count} order violations (e.g. a skip from H2 to H4).",
        solution="Start with an H1 and never skip a level when going deeper.",
        explanation="A logical hierarchy lets models reconstruct the parent-child structure of sections.",
        impact=7,
    ),
    RecommendationTemplate(
        key="few_headings",
        problem="The page only has {count} heading(s).",
        solution="Break long content into sections with at least three descriptive headings.",
        impact=5,
    ),
    RecommendationTemplate(
        key="generic_headings",
        problem="{count} heading(s) are generic or too short to describe their section.",
        solution="Rewrite headings so each one states what the section covers, e.g. 'How to reset your password'.",
        explanation="Descriptive headings act as labels that retrieval systems match against questions.",
        impact=6,
    ),
    RecommendationTemplate(
        key="low_semantic_headings",
        problem="Most headings carry little information ({percent}% are informative).",
        solution="Use headings of at least three words that include the key terms of the section.",
        impact=5,
    ),
    # Data grouping
    RecommendationTemplate(
        key="simulated_structure",
        problem="A {structure} of {count} items is written as plain text, e.g. \"{sample}\".",
        solution="Mark it up with {element} instead of line breaks, bullets or spacing.",
        explanation="Models recognise semantic lists and tables as groups of related items and keep them together.",
        impact=5,
    ),
    # Semantic HTML5
    RecommendationTemplate(
        key="missing_structural_elements",
        problem="Structural HTML5 elements are missing: {elements}.",
        solution="Wrap the page in <header>, <nav>, <main> and <footer> landmarks.",
        explanation="Landmarks let crawlers separate the main content from navigation and boilerplate.",
        impact=7,
    ),
    RecommendationTemplate(
        key="multiple_main",
        problem="The page has {count} <main> elements.",
        solution="Keep exactly one <main> element per page.",
        impact=6,
    ),
    RecommendationTemplate(
        key="weak_semantic_accessibility",
        problem="ARIA labels, relationships and landmark roles are sparse.",
        solution="Add aria-label to unlabeled controls and role attributes to the main landmarks.",
        impact=5,
    ),
    RecommendationTemplate(
        key="weak_content_flow",
        problem="Content is not organized with <article>, <section> or <aside> elements.",
        solution="Wrap self-contained content in <article>, group topics in <section> and put related content in <aside>.",
        explanation="Content-flow elements mark where one topic ends and the next begins.",
        impact=6,
    ),
    # Links
    RecommendationTemplate(
        key="no_internal_links",
        problem="The page has no internal links.",
        solution="Link to related pages on your site with descriptive anchor text.",
        explanation="Internal links help crawlers discover content and understand topical relationships.",
        impact=6,
    ),
    RecommendationTemplate(
        key="non_descriptive_internal_links",
        problem="{count} internal link(s) use non-descriptive anchor text.",
        solution="Replace text such as 'click here' with the name of the destination page.",
        impact=5,
    ),
    RecommendationTemplate(
        key="weak_external_links",
        problem="External links are rarely descriptive or authoritative ({percent}% quality).",
        solution="Cite authoritative sources and describe them in the anchor text.",
        impact=4,
    ),
    RecommendationTemplate(
        key="links_without_context",
        problem="Only {percent}% of links appear inside paragraphs of prose.",
        solution="Place important links within sentences that explain why the reader should follow them.",
        impact=4,
    ),
    # Technical markup
    RecommendationTemplate(
        key="inline_styles",
        problem="The page uses {count} inline style attributes.",
        solution="Move presentation into stylesheets and keep the markup semantic.",
        impact=3,
    ),
    RecommendationTemplate(
        key="deprecated_tags",
        problem="Presentational tags are used: {tags}.",
        solution="Replace <font> and <center> with CSS, and <b>/<i> with <strong>/<em> where emphasis is meant.",
        impact=4,
    ),
    RecommendationTemplate(
        key="deep_nesting",
        problem="Elements are nested {depth} levels deep.",
        solution="Flatten wrapper elements so content sits no deeper than 10 levels.",
        impact=4,
    ),
    RecommendationTemplate(
        key="missing_nav",
        problem="The page has no <nav> element.",
        solution="Wrap the main navigation links in a <nav> element.",
        impact=5,
    ),
    RecommendationTemplate(
        key="few_nav_links",
        problem="Navigation contains fewer than three links.",
        solution="Expose the main sections of the site in the navigation.",
        impact=3,
    ),
    RecommendationTemplate(
        key="missing_breadcrumb_markup",
        problem="No breadcrumb navigation was found in the markup.",
        solution="Add a breadcrumb trail (e.g. <nav aria-label=\"breadcrumb\">) showing the page's position.",
        impact=3,
    ),
    # CTA clarity
    RecommendationTemplate(
        key="generic_ctas",
        problem="{count} link(s) or button(s) use generic text such as {examples}.",
        solution="Say what happens on click, e.g. 'Download the 2024 pricing guide' instead of 'Download'.",
        explanation="Generic calls to action give AI agents no hint of the destination or the action.",
        impact=7,
    ),
    RecommendationTemplate(
        key="empty_ctas",
        problem="{count} link(s) or button(s) have no accessible name.",
        solution="Give icon-only links and buttons visible text or a descriptive aria-label.",
        explanation="An element without a name is invisible to screen readers and AI agents alike.",
        impact=8,
    ),
)
