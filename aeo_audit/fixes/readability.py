"""Knowledge base for readability recommendations."""

from aeo_audit.fixes.templates import RecommendationTemplate, build_registry

READABILITY_FIXES = build_registry(
    RecommendationTemplate(
        key="no_text",
        problem="No readable text was found in the main content.",
        solution="Make sure the page serves its text in the HTML inside <main> or <article>.",
        explanation="Without text there is nothing for an answer engine to quote.",
        impact=10,
    ),
    RecommendationTemplate(
        key="no_paragraphs",
        problem="The page has no <p> paragraphs.",
        solution="Wrap prose in <p> elements instead of bare <div>s or line breaks.",
        impact=7,
    ),
    # Flesch
    RecommendationTemplate(
        key="text_too_complex",
        problem="The text is hard to read (Flesch reading ease {score}, {level}).",
        solution="Use shorter sentences and plainer words. Aim for a score between 60 and 80.",
        explanation="Plain text is easier for models to summarize accurately and to quote.",
        impact=8,
    ),
    RecommendationTemplate(
        key="text_too_simple",
        problem="The text may be overly simple (Flesch reading ease {score}, {level}).",
        solution="Add precise terminology and detail where the audience expects it.",
        impact=4,
    ),
    # Passive voice
    RecommendationTemplate(
        key="passive_voice",
        problem="{percent}% of sentences use the passive voice.",
        solution="Rewrite sentences so the subject performs the action, e.g. 'We updated the policy'.",
        explanation="Active sentences state who does what, which makes facts easier to extract.",
        impact=6,
    ),
    # Paragraphs
    RecommendationTemplate(
        key="poor_paragraph_structure",
        problem="Only {percent}% of paragraphs are between 50 and 150 words.",
        solution="Keep each paragraph focused on one idea in 50 to 150 words.",
        impact=6,
    ),
    RecommendationTemplate(
        key="long_paragraphs",
        problem="{percent}% of paragraphs are longer than 150 words.",
        solution="Split long paragraphs at each change of idea.",
        impact=8,
    ),
    RecommendationTemplate(
        key="short_paragraphs",
        problem="{percent}% of paragraphs are shorter than 50 words.",
        solution="Merge fragments into complete paragraphs that develop one idea.",
        impact=5,
    ),
    RecommendationTemplate(
        key="inconsistent_paragraphs",
        problem="Paragraph lengths vary widely (average {average} words, deviation {deviation}).",
        solution="Aim for a consistent paragraph rhythm across the page.",
        impact=4,
    ),
    # Density
    RecommendationTemplate(
        key="low_content_density",
        problem="Text makes up only {percent}% of the HTML.",
        solution="Reduce markup and script bloat or add substantive content.",
        explanation="A low text-to-code ratio buries the content under boilerplate.",
        impact=7,
    ),
    RecommendationTemplate(
        key="thin_content",
        problem="The main content is only {length} characters long.",
        solution="Expand the page with content that fully answers the questions it targets.",
        explanation="Thin pages rarely contain enough context to be cited.",
        impact=9,
    ),
    # Sentence length
    RecommendationTemplate(
        key="long_sentences",
        problem="Sentences average {average} words.",
        solution="Keep most sentences between 15 and 25 words.",
        impact=7,
    ),
    RecommendationTemplate(
        key="short_sentences",
        problem="Sentences average only {average} words.",
        solution="Combine related short sentences so ideas are fully connected.",
        impact=4,
    ),
    RecommendationTemplate(
        key="monotonous_sentences",
        problem="Sentence lengths barely vary (deviation {deviation} words).",
        solution="Mix short and longer sentences to keep the text engaging.",
        impact=3,
    ),
    # Vocabulary
    RecommendationTemplate(
        key="low_vocabulary_diversity",
        problem="Vocabulary diversity is {percent}%.",
        solution="Avoid repeating the same words; use synonyms and precise terms.",
        impact=4,
    ),
)
