"""Knowledge base for structured data, meta tag and social meta recommendations."""

from aeo_audit.fixes.templates import RecommendationTemplate, build_registry

JSONLD_FIXES = build_registry(
    # Identity and structure
    RecommendationTemplate(
        key="no_owner",
        problem="No 'Organization' or 'Person' entity was found to define the site owner.",
        solution="Add an 'Organization' schema for a company or a 'Person' schema for an individual.",
        explanation="Defining the owner establishes identity and trust, which are key signals for AI systems.",
        impact=9,
    ),
    RecommendationTemplate(
        key="owner_missing_name",
        problem="The '{owner_type}' entity is missing a 'name'.",
        solution="Provide a 'name' for your '{owner_type}' to state who you are.",
        explanation="The name is the most basic identifier of your entity.",
        impact=8,
    ),
    RecommendationTemplate(
        key="owner_missing_url",
        problem="The '{owner_type}' entity is missing a 'url'.",
        solution="Add a 'url' property pointing to your homepage.",
        explanation="The url property links your schema entity to your actual website.",
        impact=7,
    ),
    RecommendationTemplate(
        key="organization_missing_logo",
        problem="The 'Organization' entity is missing a 'logo'.",
        solution="Add a 'logo' property with a full URL to your logo image.",
        explanation="The logo reinforces brand identity for AI systems that process images.",
        impact=6,
    ),
    RecommendationTemplate(
        key="owner_missing_same_as",
        problem="The '{owner_type}' entity is missing 'sameAs' links to social or professional profiles.",
        solution="Add a 'sameAs' array with URLs to your official profiles.",
        explanation="'sameAs' links connect your site entity to your other profiles and strengthen its identity graph.",
        impact=8,
    ),
    RecommendationTemplate(
        key="no_website",
        problem="No 'WebSite' entity was found.",
        solution="Add a 'WebSite' schema to describe the site itself.",
        explanation="The 'WebSite' schema defines the site as an entity and declares features such as site search.",
        impact=9,
    ),
    RecommendationTemplate(
        key="website_missing_search_action",
        problem="The 'WebSite' entity is missing a 'SearchAction'.",
        solution="Add a 'potentialAction' of type 'SearchAction' describing your internal site search.",
        explanation="A 'SearchAction' tells AI systems how your site search works.",
        impact=6,
    ),
    RecommendationTemplate(
        key="no_breadcrumb",
        problem="No 'BreadcrumbList' entity was found on this page.",
        solution="Implement a 'BreadcrumbList' showing the page's location in the site hierarchy.",
        explanation="Breadcrumbs give AI systems the page's context within the rest of the site.",
        impact=7,
    ),
    # Main entity
    RecommendationTemplate(
        key="no_main_entity",
        problem="No main entity (e.g., Article, Product) was found on this page.",
        solution="Add a primary schema that describes the main content of this page.",
        explanation="Without a main entity an AI system cannot tell what the page is fundamentally about.",
        impact=9,
    ),
    RecommendationTemplate(
        key="article_missing_headline",
        problem="The '{entity_type}' is missing a 'headline'.",
        solution="Add a 'headline' property with the main title of the content.",
        explanation="The headline is the primary identifier of an article for summaries and topic detection.",
        impact=9,
    ),
    RecommendationTemplate(
        key="article_author_not_linked",
        problem="The '{entity_type}' author is plain text or missing instead of a linked 'Person' entity.",
        solution="Use a nested 'Person' schema (or an '@id' reference) for the 'author'.",
        explanation="A linked author connects the content to a real expert, a strong authority signal.",
        impact=9,
    ),
    RecommendationTemplate(
        key="article_publisher_not_linked",
        problem="The '{entity_type}' publisher is plain text or missing instead of a linked 'Organization'.",
        solution="Use a nested 'Organization' schema (or an '@id' reference) for the 'publisher'.",
        explanation="A linked publisher establishes who is responsible for the content.",
        impact=8,
    ),
    RecommendationTemplate(
        key="product_missing_offers",
        problem="The 'Product' is missing the 'offers' property.",
        solution="Add an 'offers' property containing an 'Offer' schema with price and availability.",
        explanation="Offers carry the commercial data (price, currency, stock) that makes a product actionable.",
        impact=9,
    ),
    RecommendationTemplate(
        key="product_offer_incomplete",
        problem="The product offer is missing: {missing_fields}.",
        solution="Complete the 'Offer' with 'price', 'priceCurrency' and 'availability'.",
        explanation="Incomplete offers cannot be quoted in shopping answers.",
        impact=6,
    ),
    RecommendationTemplate(
        key="local_business_missing_address",
        problem="The 'LocalBusiness' is missing an 'address'.",
        solution="Add a 'PostalAddress' with street, locality, postal code and country.",
        explanation="The address is what makes a local business findable in location-based answers.",
        impact=8,
    ),
    RecommendationTemplate(
        key="local_business_missing_telephone",
        problem="The 'LocalBusiness' is missing a 'telephone'.",
        solution="Add a 'telephone' property in international format.",
        explanation="A phone number lets assistants answer 'how do I contact' questions directly.",
        impact=6,
    ),
    RecommendationTemplate(
        key="local_business_missing_hours",
        problem="The 'LocalBusiness' is missing 'openingHours'.",
        solution="Add 'openingHours' or 'openingHoursSpecification' for each day you are open.",
        explanation="Opening hours are among the most frequently asked questions about local businesses.",
        impact=5,
    ),
    RecommendationTemplate(
        key="service_provider_not_linked",
        problem="The 'Service' has no linked 'provider'.",
        solution="Add a 'provider' that is a nested 'Organization' or an '@id' reference to one.",
        explanation="The provider ties the service to the business that offers it.",
        impact=8,
    ),
    # Enrichment
    RecommendationTemplate(
        key="faq_missing_questions",
        problem="The 'FAQPage' exists but is missing well-structured questions and answers.",
        solution="Add a 'mainEntity' array of 'Question' entities, each with an 'acceptedAnswer'.",
        explanation="A well-formed FAQPage lets AI systems extract question-answer pairs directly.",
        impact=7,
    ),
    RecommendationTemplate(
        key="howto_missing_steps",
        problem="The 'HowTo' guide is missing its sequence of 'step's.",
        solution="Add a 'step' property containing an array of 'HowToStep' items.",
        explanation="Steps let AI systems present the process in the right order.",
        impact=7,
    ),
    # Graph connectivity
    RecommendationTemplate(
        key="entity_missing_id",
        problem="The '{entity_type}' entity is missing a unique identifier ('@id').",
        solution="Add a unique '@id' (for example the page URL with a fragment) to this entity.",
        explanation="'@id' values let entities reference each other and form a knowledge graph.",
        impact=9,
    ),
    RecommendationTemplate(
        key="no_entity_references",
        problem="Entities are not linking to each other using '@id' references.",
        solution="Reference related entities by '@id', e.g. an Article 'author' pointing to a Person's '@id'.",
        explanation="Explicit links turn a list of isolated entities into a graph AI systems can traverse.",
        impact=8,
    ),
)

META_TAG_FIXES = build_registry(
    RecommendationTemplate(
        key="title_missing",
        problem="Title tag is missing or empty.",
        solution="Add a unique, descriptive <title> to the page.",
        explanation="The title is the first thing crawlers and answer engines read about a page.",
        impact=9,
    ),
    RecommendationTemplate(
        key="title_length",
        problem="Title tag is {length} characters long.",
        solution="Aim for a title of 50 to 60 characters.",
        impact=5,
    ),
    RecommendationTemplate(
        key="title_very_short",
        problem="Title tag is very short ({length} characters).",
        solution="Write a descriptive title that states the page topic.",
        impact=6,
    ),
    RecommendationTemplate(
        key="description_missing",
        problem="Meta description is missing.",
        solution="Add a <meta name=\"description\"> summarizing the page in 140 to 160 characters.",
        explanation="Descriptions are often reused as the summary shown next to a citation.",
        impact=8,
    ),
    RecommendationTemplate(
        key="description_length",
        problem="Meta description is {length} characters long.",
        solution="Aim for a description of 140 to 160 characters.",
        impact=4,
    ),
    RecommendationTemplate(
        key="description_very_short",
        problem="Meta description is very short ({length} characters).",
        solution="Write a unique description that summarizes the page content.",
        impact=5,
    ),
    RecommendationTemplate(
        key="viewport_missing",
        problem="Viewport meta tag is missing or empty.",
        solution="Add <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\">.",
        impact=6,
    ),
    RecommendationTemplate(
        key="charset_missing",
        problem="Character encoding declaration is missing.",
        solution="Add <meta charset=\"utf-8\"> at the top of the <head>.",
        impact=4,
    ),
    RecommendationTemplate(
        key="robots_meta_missing",
        problem="Robots meta tag is missing (optional but recommended).",
        solution="Add <meta name=\"robots\" content=\"index, follow\"> to state crawling directives.",
        impact=2,
    ),
)

SOCIAL_META_FIXES = build_registry(
    RecommendationTemplate(
        key="og_title_missing",
        problem="Open Graph title (og:title) is missing.",
        solution="Add <meta property=\"og:title\" content=\"...\"> with the page title.",
        impact=9,
    ),
    RecommendationTemplate(
        key="og_description_missing",
        problem="Open Graph description (og:description) is missing.",
        solution="Add <meta property=\"og:description\" content=\"...\"> with a one-sentence summary.",
        impact=9,
    ),
    RecommendationTemplate(
        key="og_image_missing",
        problem="Open Graph image (og:image) is missing.",
        solution="Add <meta property=\"og:image\" content=\"...\"> pointing to a 1200x630 image.",
        impact=9,
    ),
    RecommendationTemplate(
        key="og_url_missing",
        problem="Open Graph URL (og:url) is missing.",
        solution="Add <meta property=\"og:url\" content=\"...\"> with the canonical URL.",
        impact=7,
    ),
    RecommendationTemplate(
        key="og_type_missing",
        problem="Open Graph type (og:type) is missing.",
        solution="Add <meta property=\"og:type\" content=\"website\"> (or 'article' for posts).",
        impact=9,
    ),
    RecommendationTemplate(
        key="twitter_card_missing",
        problem="Twitter Card type (twitter:card) is missing.",
        solution="Add <meta name=\"twitter:card\" content=\"summary_large_image\">.",
        impact=8,
    ),
    RecommendationTemplate(
        key="og_image_alt_missing",
        problem="og:image is present, but its descriptive text (og:image:alt) is missing.",
        solution="Add <meta property=\"og:image:alt\" content=\"...\"> describing the image.",
        impact=6,
    ),
    RecommendationTemplate(
        key="site_name_missing",
        problem="Website name (og:site_name) is missing.",
        solution="Add <meta property=\"og:site_name\" content=\"...\"> with your brand name.",
        impact=4,
    ),
    RecommendationTemplate(
        key="twitter_site_missing",
        problem="The site's main Twitter handle (twitter:site) is missing.",
        solution="Add <meta name=\"twitter:site\" content=\"@yourbrand\">.",
        impact=4,
    ),
    RecommendationTemplate(
        key="twitter_creator_missing",
        problem="The author's Twitter handle (twitter:creator) is missing.",
        solution="Add <meta name=\"twitter:creator\" content=\"@author\"> on article pages.",
        impact=5,
    ),
    RecommendationTemplate(
        key="og_image_dimensions_missing",
        problem="Image dimensions (og:image:width and og:image:height) are missing.",
        solution="Add og:image:width and og:image:height so platforms can render previews without fetching the image.",
        impact=3,
    ),
)
