"""Built-in catalog of content types, components and plugins.

The catalog is fixed at import time. ``get``, ``get_component`` and
``get_plugin`` are plain lookups: a missing key returns None, and callers
decide whether to fall back to the project's custom types (see
``resolve_type``).
"""

from __future__ import annotations

from datetime import date

from .errors import UnknownComponentError, UnknownPluginError, UnknownTypeError
from .frontmatter import compose
from .schema import (
    ArchivePage,
    ComponentDefinition,
    ComponentFiles,
    ContentTypeDefinition,
    FieldKind,
    FrontmatterField,
    NavEntry,
    PluginDefinition,
)

S, N, B, D = FieldKind.STRING, FieldKind.NUMBER, FieldKind.BOOLEAN, FieldKind.DATE


def _fields(*specs: tuple) -> tuple[FrontmatterField, ...]:
    """Build a field tuple from ``(name, kind[, required[, label]])`` specs."""
    return tuple(FrontmatterField(*spec) for spec in specs)


def _defaults(layout: str, tag: str) -> dict[str, object]:
    return {"layout": layout, "tags": tag, "published": True}


def make_archive_page(filename: str, title: str, seo_title: str, description: str, slug: str, collection: str) -> ArchivePage:
    record = {
        "title": title,
        "seo_title": seo_title,
        "meta_description": description,
        "slug": slug,
        "layout": "archive.njk",
        "permalink": f"/{slug}/",
        "published": True,
        "collection_name": collection,
    }
    return ArchivePage(filename, compose(record, ""))


# --- Layout templates ---

BLOG_LAYOUT = """---
layout: base.njk
og_type: article
---
<article class="section">
  <div class="container container--narrow">
    {% if featured_image %}
    <div class="hero hero--sm" style="background-image: url('{{ featured_image }}')">
      <div class="hero__overlay"></div>
    </div>
    {% endif %}
    <header class="detail__header">
      <h1>{{ title }}</h1>
      <div class="post-meta">
        {% if date %}<time class="post-meta__item" datetime="{{ date | dateISO }}">{{ date | dateFormat }}</time>{% endif %}
        {% if author %}<span class="post-meta__item">{{ author }}</span>{% endif %}
        {% if content %}<span class="post-meta__item">{{ content | readingTime }}</span>{% endif %}
      </div>
    </header>
    <div class="detail__content">
      {{ content | safe }}
    </div>
    {% if post_tags %}
    <div class="post-tags">
      {% for tag in post_tags | split(",") %}
      <span class="post-tags__tag">{{ tag | trim }}</span>
      {% endfor %}
    </div>
    {% endif %}
    {%- set allPosts = collections.posts %}
    {%- set currentIndex = -1 %}
    {%- for post in allPosts %}
      {%- if post.url == page.url %}{%- set currentIndex = loop.index0 %}{%- endif %}
    {%- endfor %}
    {%- if currentIndex > 0 or currentIndex < allPosts.length - 1 %}
    <nav class="post-nav" aria-label="Post navigation">
      {%- if currentIndex < allPosts.length - 1 %}
      <a href="{{ allPosts[currentIndex + 1].url }}" class="post-nav__link post-nav__link--prev">
        <span class="post-nav__label">Previous</span>
        <span class="post-nav__title">{{ allPosts[currentIndex + 1].data.title }}</span>
      </a>
      {%- else %}<span></span>{%- endif %}
      {%- if currentIndex > 0 %}
      <a href="{{ allPosts[currentIndex - 1].url }}" class="post-nav__link post-nav__link--next">
        <span class="post-nav__label">Next</span>
        <span class="post-nav__title">{{ allPosts[currentIndex - 1].data.title }}</span>
      </a>
      {%- else %}<span></span>{%- endif %}
    </nav>
    {%- endif %}
  </div>
</article>"""

DOCS_LAYOUT = """---
layout: base.njk
og_type: article
---
<div class="section">
  <div class="container">
    <div class="docs-layout">
      <nav class="docs-sidebar" aria-label="Documentation navigation">
        <h3>Documentation</h3>
        <ul>
          {%- for doc in collections.docs %}
          <li><a href="{{ doc.url }}"{% if doc.url == page.url %} class="active" aria-current="page"{% endif %}>{{ doc.data.title }}</a></li>
          {%- endfor %}
        </ul>
      </nav>
      <article class="docs-content detail__content">
        <h1>{{ title }}</h1>
        {{ content | safe }}
      </article>
    </div>
  </div>
</div>"""

FEATURE_LAYOUT = """---
layout: base.njk
og_type: article
---
<article class="section">
  <div class="container container--narrow">
    {% if featured_image %}
    <div class="hero hero--sm" style="background-image: url('{{ featured_image }}')">
      <div class="hero__overlay"></div>
    </div>
    {% endif %}
    <div class="detail__content">
      <h1>{{ title }}</h1>
      {% if subtitle %}<p class="detail__subtitle">{{ subtitle }}</p>{% endif %}
      {{ content | safe }}
    </div>
  </div>
</article>"""

SERVICE_AREA_LAYOUT = """---
layout: base.njk
og_type: article
---
<article class="section">
  <div class="container container--narrow">
    {% if featured_image %}
    <div class="hero hero--sm" style="background-image: url('{{ featured_image }}')">
      <div class="hero__overlay"></div>
    </div>
    {% endif %}
    <div class="detail__content">
      <h1>{{ title }}</h1>
      {{ content | safe }}
    </div>
    {% if cta_title %}
    {% include "components/cta-strip.njk" %}
    {% endif %}
  </div>
</article>"""

PROJECT_LAYOUT = """---
layout: base.njk
og_type: article
---
<article class="section">
  <div class="container container--narrow">
    {% if featured_image %}
    <div class="hero hero--sm" style="background-image: url('{{ featured_image }}')">
      <div class="hero__overlay"></div>
    </div>
    {% endif %}
    <div class="detail__content">
      <h1>{{ title }}</h1>
      {% if client %}<p class="detail__meta">Client: {{ client }}</p>{% endif %}
      {% if date %}<time class="detail__meta" datetime="{{ date | dateISO }}">{{ date | dateFormat }}</time>{% endif %}
      {{ content | safe }}
    </div>
  </div>
</article>"""

FAQ_LAYOUT = """---
layout: base.njk
og_type: article
---
<article class="section">
  <div class="container container--narrow">
    <div class="detail__content">
      <h1>{{ title }}</h1>
      {{ content | safe }}
    </div>
  </div>
</article>"""


# --- Sample entries ---


def _blog_entry(title: str, slug: str) -> str:
    record = {
        "title": title,
        "slug": slug,
        "excerpt": "",
        "date": date.today(),
        "author": "Admin",
        "post_tags": "",
        "featured_image": "",
        "published": True,
        "permalink": f"/blog/{slug}/",
    }
    return compose(record, "Write your blog post content here.\n")


def _service_entry(title: str, slug: str) -> str:
    record = {
        "title": title,
        "slug": slug,
        "excerpt": "",
        "featured_image": "",
        "order": 10,
        "published": True,
        "permalink": f"/services/{slug}/",
    }
    return compose(record, "Describe this service here.\n")


def _team_entry(title: str, slug: str) -> str:
    record = {
        "title": title,
        "slug": slug,
        "role": "",
        "photo": "",
        "order": 10,
        "published": True,
        "permalink": f"/team/{slug}/",
    }
    return compose(record, "Write the team member bio here.\n")


def _doc_entry(title: str, slug: str) -> str:
    record = {
        "title": title,
        "slug": slug,
        "excerpt": "",
        "order": 10,
        "published": True,
        "permalink": f"/docs/{slug}/",
    }
    return compose(record, "Write your documentation here.\n")


def _feature_entry(title: str, slug: str) -> str:
    record = {
        "title": title,
        "slug": slug,
        "excerpt": "",
        "subtitle": "",
        "order": 10,
        "published": True,
        "permalink": f"/features/{slug}/",
    }
    return compose(record, "Describe this feature here.\n")


def _service_area_entry(title: str, slug: str) -> str:
    record = {
        "title": title,
        "slug": slug,
        "excerpt": f"Serving the {title} area with reliable, professional service.",
        "order": 10,
        "published": True,
        "permalink": f"/service-areas/{slug}/",
        "cta_title": f"Need Service in {title}?",
        "cta_text": "Contact us today for a free estimate.",
        "cta_url": "/contact/",
        "cta_label": "Get a Quote",
    }
    body = f"## Serving {title}\n\nWe're proud to serve the {title} area and surrounding neighborhoods.\n"
    return compose(record, body)


def _project_entry(title: str, slug: str) -> str:
    record = {
        "title": title,
        "slug": slug,
        "excerpt": "",
        "date": date.today(),
        "client": "",
        "featured_image": "",
        "published": True,
        "permalink": f"/portfolio/{slug}/",
    }
    return compose(record, "Describe this project here.\n")


def _faq_entry(title: str, slug: str) -> str:
    record = {
        "title": title,
        "slug": slug,
        "excerpt": "",
        "category": "General",
        "order": 10,
        "published": True,
        "permalink": f"/faq/{slug}/",
    }
    return compose(record, "Write the answer here.\n")


CONTENT_TYPES: dict[str, ContentTypeDefinition] = {
    "blog": ContentTypeDefinition(
        label="Blog",
        dir="blog",
        layout_name="post.njk",
        tag="posts",
        sort_key="date",
        directory_defaults=_defaults("post.njk", "posts"),
        layout_template=BLOG_LAYOUT,
        sample_entry_builder=_blog_entry,
        fields=_fields(
            ("title", S, True),
            ("slug", S, True),
            ("excerpt", S),
            ("date", D),
            ("author", S),
            ("featured_image", S),
            ("post_tags", S),
            ("published", B),
        ),
        archive_page=make_archive_page(
            "blog.md", "Blog", "Blog — Latest News & Insights",
            "Read our latest articles, news, and insights.", "blog", "posts",
        ),
        nav_entry=NavEntry("Blog", "/blog/"),
        sample_title="Welcome to Our Blog",
    ),
    "services": ContentTypeDefinition(
        label="Services",
        dir="services",
        layout_name="service.njk",
        tag="services",
        sort_key="order",
        directory_defaults=_defaults("service.njk", "services"),
        layout_template="",
        sample_entry_builder=_service_entry,
        fields=_fields(
            ("title", S, True),
            ("slug", S, True),
            ("excerpt", S),
            ("featured_image", S),
            ("order", N),
            ("price_note", S),
            ("published", B),
        ),
        nav_entry=NavEntry("Services", "/services/"),
        sample_title="Our Service",
    ),
    "team": ContentTypeDefinition(
        label="Team / Staff",
        dir="employees",
        layout_name="employee.njk",
        tag="employees",
        sort_key="order",
        directory_defaults=_defaults("employee.njk", "employees"),
        layout_template="",
        sample_entry_builder=_team_entry,
        fields=_fields(
            ("title", S, True, "Full Name"),
            ("slug", S, True),
            ("role", S),
            ("photo", S),
            ("order", N),
            ("published", B),
        ),
        nav_entry=NavEntry("Team", "/team/"),
        sample_title="Team Member",
    ),
    "docs": ContentTypeDefinition(
        label="Documentation",
        dir="docs",
        layout_name="doc.njk",
        tag="docs",
        sort_key="order",
        directory_defaults=_defaults("doc.njk", "docs"),
        layout_template=DOCS_LAYOUT,
        sample_entry_builder=_doc_entry,
        fields=_fields(
            ("title", S, True),
            ("slug", S, True),
            ("excerpt", S),
            ("order", N),
            ("published", B),
        ),
        archive_page=make_archive_page(
            "docs.md", "Documentation", "Documentation",
            "Browse our documentation and guides.", "docs", "docs",
        ),
        nav_entry=NavEntry("Docs", "/docs/"),
        sample_title="Getting Started",
    ),
    "features": ContentTypeDefinition(
        label="Features",
        dir="features",
        layout_name="feature.njk",
        tag="features",
        sort_key="order",
        directory_defaults=_defaults("feature.njk", "features"),
        layout_template=FEATURE_LAYOUT,
        sample_entry_builder=_feature_entry,
        fields=_fields(
            ("title", S, True),
            ("slug", S, True),
            ("excerpt", S),
            ("subtitle", S),
            ("featured_image", S),
            ("order", N),
            ("published", B),
        ),
        archive_page=make_archive_page(
            "features.md", "Features", "Features — What We Offer",
            "Explore our powerful features designed to help you succeed.", "features", "features",
        ),
        nav_entry=NavEntry("Features", "/features/"),
        sample_title="Key Feature",
    ),
    "service-areas": ContentTypeDefinition(
        label="Service Areas",
        dir="service-areas",
        layout_name="service-area.njk",
        tag="serviceAreas",
        sort_key="order",
        directory_defaults=_defaults("service-area.njk", "serviceAreas"),
        layout_template=SERVICE_AREA_LAYOUT,
        sample_entry_builder=_service_area_entry,
        fields=_fields(
            ("title", S, True),
            ("slug", S, True),
            ("excerpt", S),
            ("featured_image", S),
            ("order", N),
            ("cta_title", S),
            ("cta_text", S),
            ("cta_url", S),
            ("cta_label", S),
            ("published", B),
        ),
        archive_page=make_archive_page(
            "service-areas.md", "Service Areas", "Service Areas — Where We Work",
            "Find out if we serve your area.", "service-areas", "serviceAreas",
        ),
        nav_entry=NavEntry("Service Areas", "/service-areas/"),
        sample_title="Downtown",
    ),
    "portfolio": ContentTypeDefinition(
        label="Portfolio / Projects",
        dir="portfolio",
        layout_name="project.njk",
        tag="projects",
        sort_key="date",
        directory_defaults=_defaults("project.njk", "projects"),
        layout_template=PROJECT_LAYOUT,
        sample_entry_builder=_project_entry,
        fields=_fields(
            ("title", S, True),
            ("slug", S, True),
            ("excerpt", S),
            ("date", D),
            ("client", S),
            ("featured_image", S),
            ("published", B),
        ),
        archive_page=make_archive_page(
            "portfolio.md", "Portfolio", "Portfolio — Our Work",
            "Browse our portfolio of completed projects and case studies.", "portfolio", "projects",
        ),
        nav_entry=NavEntry("Portfolio", "/portfolio/"),
        sample_title="Sample Project",
    ),
    "faq": ContentTypeDefinition(
        label="FAQ",
        dir="faq",
        layout_name="faq.njk",
        tag="faqs",
        sort_key="order",
        directory_defaults=_defaults("faq.njk", "faqs"),
        layout_template=FAQ_LAYOUT,
        sample_entry_builder=_faq_entry,
        fields=_fields(
            ("title", S, True, "Question"),
            ("slug", S, True),
            ("excerpt", S),
            ("category", S),
            ("order", N),
            ("published", B),
        ),
        archive_page=make_archive_page(
            "faq.md", "Frequently Asked Questions", "FAQ — Common Questions Answered",
            "Find answers to our most frequently asked questions.", "faq", "faqs",
        ),
        nav_entry=NavEntry("FAQ", "/faq/"),
        sample_title="How do I get started?",
    ),
}


def _component(name: str, label: str, description: str, tier: int, usage: str, style: bool = True, script: bool = False) -> ComponentDefinition:
    files = ComponentFiles(
        template=f"{name}.njk",
        style=f"{name}.css" if style else None,
        script=f"{name}.js" if script else None,
    )
    return ComponentDefinition(name, label, description, files, tier, usage)


COMPONENTS: dict[str, ComponentDefinition] = {
    c.name: c
    for c in (
        _component(
            "contact-form", "Contact Form",
            "Styled form macro with Formspree/Netlify support and client-side validation", 1,
            '{% from "components/contact-form.njk" import contactForm %}\n'
            '{{ contactForm(action="https://formspree.io/f/YOUR_ID") }}',
            script=True,
        ),
        _component(
            "feature-grid", "Feature Grid",
            "2-4 column grid with icon, title, and description for each feature", 1,
            '{% from "components/feature-grid.njk" import featureGrid %}\n'
            '{{ featureGrid([{ icon: "⚡", title: "Lightning Fast", description: "Pages load in milliseconds." }]) }}',
        ),
        _component(
            "testimonials", "Testimonials",
            "Customer testimonial cards with optional star ratings and photos", 1,
            '{% from "components/testimonials.njk" import testimonial, testimonialGrid %}\n'
            '{{ testimonial("Amazing service!", "Jane Doe", "CEO", "/media/jane.jpg", 5) }}',
        ),
        _component(
            "pricing-table", "Pricing Table",
            "2-3 column pricing cards with featured plan highlight and feature lists", 1,
            '{% from "components/pricing-table.njk" import pricingTable %}\n'
            '{{ pricingTable([{ name: "Starter", price: "$29", period: "mo", features: ["5 Pages"] }]) }}',
        ),
        _component(
            "stats-counter", "Stats Counter",
            "Animated number counters that count up when scrolled into view", 2,
            '{% from "components/stats-counter.njk" import statsCounter %}\n'
            '{{ statsCounter([{ value: 500, suffix: "+", label: "Projects Completed" }]) }}',
            script=True,
        ),
        _component(
            "image-gallery", "Image Gallery",
            "Responsive image grid with fullscreen lightbox overlay", 2,
            '{% from "components/image-gallery.njk" import imageGallery %}\n'
            '{{ imageGallery([{ src: "/media/photo-1.jpg", alt: "Project photo", caption: "Our latest work" }]) }}',
            script=True,
        ),
        _component(
            "tabs", "Tabs",
            "Tabbed content panels with ARIA roles and keyboard navigation", 2,
            '{% from "components/tabs.njk" import tabs %}\n'
            '{{ tabs([{ label: "Overview", content: "<p>Overview content here</p>" }]) }}',
            script=True,
        ),
        _component(
            "logo-cloud", "Logo Cloud",
            "Row of partner or client logos with optional grayscale hover effect", 2,
            '{% from "components/logo-cloud.njk" import logoCloud %}\n'
            '{{ logoCloud([{ src: "/media/logos/client-1.svg", alt: "Client Name", url: "https://example.com" }]) }}',
        ),
        _component(
            "newsletter-signup", "Newsletter Signup",
            "Email capture form for Mailchimp, ConvertKit, or custom endpoints", 2,
            '{% from "components/newsletter-signup.njk" import newsletterSignup %}\n'
            '{{ newsletterSignup(action="https://your-provider.com/subscribe", heading="Stay Updated") }}',
        ),
        _component(
            "timeline", "Timeline",
            "Vertical timeline for company history, process steps, or milestones", 3,
            '{% from "components/timeline.njk" import timeline %}\n'
            '{{ timeline([{ year: "2020", title: "Founded", description: "Started with a small team." }]) }}',
        ),
        _component(
            "modal", "Modal / Dialog",
            "Accessible dialog overlay with focus trap, escape-to-close, and scroll lock", 3,
            '{% from "components/modal.njk" import modal, modalTrigger %}\n'
            '{{ modalTrigger("open-demo", "Open Demo") }}\n'
            '{{ modal("open-demo", "Demo Modal", "<p>Modal content here</p>") }}',
            script=True,
        ),
        _component(
            "social-share", "Social Share",
            "Share buttons for Twitter, Facebook, LinkedIn using Web Share API with fallbacks", 3,
            '{% from "components/social-share.njk" import socialShare %}\n'
            "{{ socialShare(title, page.url, site.url) }}",
            script=True,
        ),
    )
}


PLUGINS: dict[str, PluginDefinition] = {
    "icons": PluginDefinition(
        name="icons",
        label="Lucide icons",
        description="Inline SVG icons through a lucide shortcode",
        package="@grimlink/eleventy-plugin-lucide-icons",
        import_name="lucideIcons",
        usage='{% lucide "check" %}',
        docs_url="https://lucide.dev/icons",
    ),
}


def get(type_id: str) -> ContentTypeDefinition | None:
    """Look up a built-in content type."""
    return CONTENT_TYPES.get(type_id)


def get_component(name: str) -> ComponentDefinition | None:
    """Look up a catalog component."""
    return COMPONENTS.get(name)


def require_component(name: str) -> ComponentDefinition:
    component = get_component(name)
    if component is None:
        raise UnknownComponentError(name)
    return component


def type_for_dir(dir_name: str, custom: dict[str, ContentTypeDefinition] | None = None) -> tuple[str, ContentTypeDefinition] | None:
    """Find the type (built-in first, then custom) storing entries in ``dir_name``."""
    for catalog in (CONTENT_TYPES, custom or {}):
        for type_id, definition in catalog.items():
            if definition.dir == dir_name:
                return type_id, definition
    return None


def resolve_type(type_id: str, custom: dict[str, ContentTypeDefinition] | None = None) -> ContentTypeDefinition:
    """Resolve a type identifier against the built-in catalog, then ``custom``.

    Raises:
        UnknownTypeError: When neither catalog knows the identifier.
    """
    definition = get(type_id)
    if definition is None and custom:
        definition = custom.get(type_id)
    if definition is None:
        raise UnknownTypeError(type_id, [*CONTENT_TYPES, *(custom or {})])
    return definition


def get_plugin(name: str) -> PluginDefinition | None:
    """Look up a catalog plugin."""
    return PLUGINS.get(name)


def require_plugin(name: str) -> PluginDefinition:
    plugin = get_plugin(name)
    if plugin is None:
        raise UnknownPluginError(name)
    return plugin
