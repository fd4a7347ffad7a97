"""Sample content generation.

Populates a content type with realistic placeholder entries so layouts can be
tried out before real content exists. Each built-in type has a pool of sample
records; custom types fall back to numbered generic entries.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any

from .custom_types import default_for_kind
from .frontmatter import compose
from .project import Project
from .scaffold import Outcome, ScaffoldReport, Step, defaults_json, ensure_dir, write_if_absent
from .schema import ContentTypeDefinition, FieldKind
from .utils import slugify

logger = logging.getLogger(__name__)

DEFAULT_COUNT = 3

# Written by the generator itself, not taken from the field list
_GENERATED_FIELDS = frozenset({"title", "slug", "published", "permalink"})

_BLOG_BODY = """{intro}

## Why This Matters

Understanding the fundamentals sets you apart. Whether you are just starting out or refining your approach, the principles stay the same: be clear, be consistent and keep your audience in mind.

## Key Takeaways

- **Start with a solid foundation.** Do not skip the basics.
- **Measure what matters.** Let data guide your decisions.
- **Iterate and improve.** The best results come from continuous refinement.

## Conclusion

Focus on the fundamentals and keep going. Tools change; these principles do not.
"""

_DOCS_BODY = """{intro}

## Overview

This section covers what you need to get up and running. Follow the steps below in order.

## Step 1: Install

```bash
npm install
```

## Step 2: Verify

```bash
npm run dev
```

You should see output confirming the server is running.

## Next Steps

Explore the other documentation pages to learn about configuration, content types and deployment.
"""

LOREM_BODY = """This is sample content generated by Ink. Replace it with your actual content.

## About This Entry

Lorem ipsum dolor sit amet, consectetur adipiscing elit. Sed do eiusmod tempor incididunt ut labore et dolore magna aliqua. Ut enim ad minim veniam, quis nostrud exercitation ullamco laboris.

## Details

Duis aute irure dolor in reprehenderit in voluptate velit esse cillum dolore eu fugiat nulla pariatur. Excepteur sint occaecat cupidatat non proident, sunt in culpa qui officia deserunt mollit anim id est laborum.
"""


def _blog(title: str, excerpt: str, intro: str) -> dict[str, Any]:
    return {"title": title, "excerpt": excerpt, "body": _BLOG_BODY.format(intro=intro)}


def _doc(title: str, excerpt: str, intro: str) -> dict[str, Any]:
    return {"title": title, "excerpt": excerpt, "body": _DOCS_BODY.format(intro=intro)}


SAMPLE_POOLS: dict[str, list[dict[str, Any]]] = {
    "blog": [
        _blog(
            "Getting Started with Markdown",
            "Learn the basics of Markdown formatting and how it powers your website.",
            "Markdown is a lightweight markup language that makes writing for the web intuitive.",
        ),
        _blog(
            "5 Tips for Better Web Performance",
            "Speed matters. Here are five actionable tips to make your site faster.",
            "Website performance directly affects user experience and search rankings.",
        ),
        _blog(
            "The Power of Static Sites",
            "Why static site generators are a great fit for most websites.",
            "Static sites offer security, speed and simplicity compared to traditional CMS platforms.",
        ),
        _blog(
            "Design Principles for Small Business Websites",
            "Good design does not have to be complicated.",
            "Your website is often the first impression potential customers have of your business.",
        ),
        _blog(
            "SEO Basics Every Business Owner Should Know",
            "A beginner-friendly guide to search engine optimization.",
            "Search engine optimization does not have to be mysterious.",
        ),
        _blog(
            "Content Strategy That Actually Works",
            "How to plan and create content that drives results.",
            "A solid content strategy is the foundation of any online presence.",
        ),
    ],
    "services": [
        {"title": "Web Design", "excerpt": "Custom, responsive websites built for your brand."},
        {"title": "SEO Optimization", "excerpt": "Boost your search rankings and drive organic traffic."},
        {"title": "Content Marketing", "excerpt": "Engaging content that attracts and converts customers."},
        {"title": "Brand Identity", "excerpt": "Logo, color palette and typography that tell your story."},
        {"title": "Email Marketing", "excerpt": "Campaigns that nurture leads and drive conversions."},
        {"title": "Consulting", "excerpt": "Expert guidance to help you make the right decisions."},
    ],
    "team": [
        {
            "title": "Sarah Johnson",
            "role": "CEO & Founder",
            "body": "Sarah founded the company to make a professional web presence accessible to every business.\n",
        },
        {
            "title": "Michael Chen",
            "role": "Lead Developer",
            "body": "Michael brings a decade of full-stack experience and a passion for fast, accessible websites.\n",
        },
        {
            "title": "Emily Rodriguez",
            "role": "Creative Director",
            "body": "Emily oversees all creative output, from brand identity to web design.\n",
        },
        {
            "title": "David Kim",
            "role": "Marketing Manager",
            "body": "David combines SEO expertise with compelling content to help clients reach their goals.\n",
        },
        {
            "title": "Rachel Thompson",
            "role": "UX Designer",
            "body": "Rachel designs interfaces that make complex tasks feel simple and natural.\n",
        },
    ],
    "docs": [
        _doc("Getting Started", "Set up your project and start building.", "This guide walks you through setting up your project."),
        _doc("Configuration", "Customize your site settings and options.", "Site configuration is managed through a few key files."),
        _doc("Content Types", "Learn about the available content types.", "Content types define the structure of your site's content."),
        _doc("Deployment", "Deploy your site to production.", "Once your site is ready, deploying it is straightforward."),
        _doc("Troubleshooting", "Common issues and how to resolve them.", "This guide covers the most common problems."),
    ],
    "features": [
        {"title": "Lightning Fast", "subtitle": "Built for speed from the ground up", "excerpt": "Pages load in milliseconds."},
        {"title": "SEO Optimized", "subtitle": "Rank higher, reach more people", "excerpt": "Best practices baked in from day one."},
        {"title": "Fully Accessible", "subtitle": "Works for everyone", "excerpt": "WCAG 2.1 AA compliance out of the box."},
        {"title": "Mobile Responsive", "subtitle": "Looks great on every device", "excerpt": "Fluid layouts that adapt to any screen."},
        {"title": "Secure by Default", "subtitle": "No database to attack", "excerpt": "Static files remove whole classes of risk."},
    ],
    "service-areas": [
        {"title": "Downtown", "excerpt": "Serving the Downtown area with reliable, professional service."},
        {"title": "Midtown", "excerpt": "Proud to serve Midtown and surrounding neighborhoods."},
        {"title": "Westside", "excerpt": "Providing top-quality service to the Westside community."},
        {"title": "Northgate", "excerpt": "Your trusted partner in the Northgate area."},
        {"title": "Riverside", "excerpt": "Serving Riverside and the surrounding region."},
        {"title": "Oak Park", "excerpt": "Reliable service in Oak Park and beyond."},
    ],
    "portfolio": [
        {
            "title": "Brand Refresh for Coastal Cafe",
            "excerpt": "A complete visual overhaul for a beloved local coffee shop.",
            "client": "Coastal Cafe",
        },
        {
            "title": "E-Commerce Platform Launch",
            "excerpt": "Building a scalable online store from the ground up.",
            "client": "Modern Goods Co.",
        },
        {
            "title": "Healthcare Portal Redesign",
            "excerpt": "Improving patient experience through thoughtful UX design.",
            "client": "ClearPath Health",
        },
        {
            "title": "Non-Profit Campaign Site",
            "excerpt": "A fundraising website that exceeded donation targets.",
            "client": "Green Future Initiative",
        },
    ],
    "faq": [
        {
            "title": "How do I get started?",
            "category": "General",
            "body": "Reach out through our contact page and we will schedule an initial consultation.\n",
        },
        {
            "title": "What is your pricing structure?",
            "category": "Pricing",
            "body": "Pricing is project-based. You get a detailed proposal with no hidden fees.\n",
        },
        {
            "title": "How long does a typical project take?",
            "category": "Process",
            "body": "A simple website typically takes 2-4 weeks; larger projects take 6-12 weeks.\n",
        },
        {
            "title": "Do you offer ongoing support?",
            "category": "Support",
            "body": "Yes. Maintenance packages cover security updates, content changes and monitoring.\n",
        },
        {
            "title": "Can I update the content myself?",
            "category": "General",
            "body": "Absolutely. Content lives in plain Markdown files you can edit directly.\n",
        },
    ],
}

PLACEHOLDER_IMAGES: dict[str, list[str]] = {
    "photo": ["/media/placeholders/avatar-1.png", "/media/placeholders/avatar-2.png"],
    "blog": [
        "/media/placeholders/landscape-1.png",
        "/media/placeholders/landscape-2.png",
        "/media/placeholders/landscape-3.png",
    ],
    "services": ["/media/placeholders/building.png", "/media/placeholders/product.png"],
    "portfolio": ["/media/placeholders/product.png", "/media/placeholders/landscape-1.png"],
    "features": ["/media/placeholders/product.png", "/media/placeholders/landscape-2.png"],
    "service-areas": ["/media/placeholders/map.png", "/media/placeholders/landscape-3.png"],
}
DEFAULT_PLACEHOLDER = "/media/placeholders/default.png"


def sample_pool(type_id: str, count: int, label: str = "Entry") -> list[dict[str, Any]]:
    """Pick ``count`` sample records for a type.

    Records cycle through the type's pool; once the pool is exhausted each
    title gets a round number appended (``"Web Design 2"``) so slugs stay
    distinct. Types without a pool get ``"<label> 1"``, ``"<label> 2"``...

    Args:
        type_id: Content type identifier.
        count: Number of records wanted.
        label: Title stem for types without a pool.

    Returns:
        List of record dictionaries, each with at least a ``title``.
    """
    pool = SAMPLE_POOLS.get(type_id)
    if not pool:
        return [{"title": f"{label} {i + 1}"} for i in range(count)]
    results = []
    for i in range(count):
        base = pool[i % len(pool)]
        round_number = i // len(pool)
        if round_number:
            base = {**base, "title": f"{base['title']} {round_number + 1}"}
        results.append(base)
    return results


def placeholder_image(type_id: str, field_name: str, index: int) -> str:
    pool = PLACEHOLDER_IMAGES["photo"] if field_name == "photo" else PLACEHOLDER_IMAGES.get(type_id)
    if not pool:
        return DEFAULT_PLACEHOLDER
    return pool[index % len(pool)]


def _field_value(type_id: str, name: str, kind: FieldKind, sample: dict[str, Any], index: int) -> Any:
    if name in sample:
        return sample[name]
    if name == "date":
        return date.today() - timedelta(weeks=index)
    if name == "order":
        return index + 1
    if name in ("photo", "featured_image"):
        return placeholder_image(type_id, name, index)
    if name == "author":
        return "Admin"
    if name == "category":
        return "General"
    return default_for_kind(kind)


def build_sample_entry(definition: ContentTypeDefinition, type_id: str, sample: dict[str, Any], index: int) -> str:
    """Render one generated entry.

    The frontmatter holds ``title`` and ``slug``, one value per declared
    field, ``published`` and a ``permalink`` under the type's URL base.
    """
    title = sample["title"]
    slug = slugify(title)
    record: dict[str, Any] = {"title": title, "slug": slug}
    for f in definition.fields:
        if f.name not in _GENERATED_FIELDS:
            record[f.name] = _field_value(type_id, f.name, f.kind, sample, index)
    record["published"] = True
    record["permalink"] = f"{definition.url_base}/{slug}/"

    if type_id == "service-areas":
        record["cta_title"] = f"Need Service in {title}?"
        record["cta_text"] = "Contact us today for a free estimate."
        record["cta_url"] = "/contact/"
        record["cta_label"] = "Get a Quote"

    return compose(record, sample.get("body", LOREM_BODY))


def generate_entries(
    project: Project, definition: ContentTypeDefinition, type_id: str, count: int = DEFAULT_COUNT
) -> ScaffoldReport:
    """Write ``count`` sample entries for a content type.

    Ensures the content directory and defaults file exist first. Entries
    whose file already exists are skipped, never overwritten.

    Args:
        project: Target project.
        definition: Content type to populate.
        type_id: Identifier the type was requested under.
        count: Number of entries to generate.

    Returns:
        ScaffoldReport with one step per entry.
    """
    report = ScaffoldReport(type_id, definition.label)
    content_dir = project.content_dir(definition.dir)
    report.steps.append(Step("content directory", project.relative(content_dir) + "/", ensure_dir(content_dir)))
    defaults_path = project.defaults_path(definition.dir)
    report.steps.append(
        Step("directory defaults", project.relative(defaults_path), write_if_absent(defaults_path, defaults_json(definition)))
    )

    for index, sample in enumerate(sample_pool(type_id, count, definition.label)):
        slug = slugify(sample["title"])
        path = content_dir / f"{slug}.md"
        outcome = write_if_absent(path, build_sample_entry(definition, type_id, sample, index))
        detail = "already exists" if outcome is Outcome.SKIPPED else ""
        report.steps.append(Step("entry", project.relative(path), outcome, detail))

    created = sum(1 for s in report.steps if s.action == "entry" and s.outcome is Outcome.CREATED)
    logger.debug("Generated %d %s entries", created, type_id)
    return report
