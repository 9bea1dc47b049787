"""Link-preview tags for snap share pages."""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape

DEFAULT_SITE_NAME = "Stellar Snaps"


@dataclass
class MetaTags:
    og: dict[str, str] = field(default_factory=dict)
    twitter: dict[str, str] = field(default_factory=dict)
    standard: dict[str, str] = field(default_factory=dict)


def _describe(title: str, description: str | None, amount: str | None, asset_code: str) -> str:
    if description:
        return description
    if amount:
        return f"Pay {amount} {asset_code} - {title}"
    return f"Make a payment - {title}"


def generate_meta_tags(
    *,
    title: str,
    url: str,
    description: str | None = None,
    image_url: str | None = None,
    amount: str | None = None,
    asset_code: str = "XLM",
    site_name: str = DEFAULT_SITE_NAME,
) -> MetaTags:
    """OpenGraph, Twitter card and plain tags for a snap page."""
    summary = _describe(title, description, amount, asset_code)

    og = {
        "og:title": title,
        "og:description": summary,
        "og:url": url,
        "og:site_name": site_name,
        "og:type": "website",
    }
    twitter = {
        "twitter:card": "summary_large_image" if image_url else "summary",
        "twitter:title": title,
        "twitter:description": summary,
    }
    if image_url:
        og["og:image"] = image_url
        twitter["twitter:image"] = image_url

    return MetaTags(
        og=og,
        twitter=twitter,
        standard={"title": f"{title} | {site_name}", "description": summary},
    )


def meta_tags_to_html(tags: MetaTags) -> str:
    lines: list[str] = []
    if tags.standard.get("title"):
        lines.append(f"<title>{escape(tags.standard['title'])}</title>")
    if tags.standard.get("description"):
        lines.append(f'<meta name="description" content="{escape(tags.standard["description"])}" />')
    for prop, content in tags.og.items():
        lines.append(f'<meta property="{escape(prop)}" content="{escape(content)}" />')
    for name, content in tags.twitter.items():
        lines.append(f'<meta name="{escape(name)}" content="{escape(content)}" />')
    return "\n".join(lines)


def generate_json_ld(
    *,
    title: str,
    url: str,
    description: str | None = None,
    amount: str | None = None,
    asset_code: str = "XLM",
    image_url: str | None = None,
) -> dict:
    """schema.org ``PaymentService`` description of a snap."""
    data: dict = {
        "@context": "https://schema.org",
        "@type": "PaymentService",
        "name": title,
        "description": description or f"Pay {amount or 'any amount'} {asset_code}",
        "url": url,
    }
    if image_url:
        data["image"] = image_url
    if amount:
        data["offers"] = {"@type": "Offer", "price": amount, "priceCurrency": asset_code}
    return data
