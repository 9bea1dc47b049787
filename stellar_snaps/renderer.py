"""HTML generation for snap cards."""

from html import escape

from .models import RegistryEntry, SnapMetadata

CARD_CLASS = "stellar-snap-card"
SNAP_ID_ATTR = "data-snap-id"
PAY_BUTTON_CLASS = "snap-pay-btn"
STATUS_CLASS = "snap-status"
AMOUNT_INPUT_CLASS = "snap-amount-input"
DEFAULT_CARD_NETWORK = "testnet"


def truncate_address(address: str, head: int = 6, tail: int = 4) -> str:
    """Shorten a Stellar address for display, e.g. ``GABCDE...WXYZ``."""
    if len(address) <= head + tail:
        return address
    return f"{address[:head]}...{address[-tail:]}"


def _trust_badge(entry: RegistryEntry | None) -> str:
    if entry is not None and entry.status == "trusted":
        return '<span class="snap-trust-badge snap-trusted">Verified</span>'
    return '<span class="snap-trust-badge snap-unverified">Unverified</span>'


def render_card(metadata: SnapMetadata, href: str, entry: RegistryEntry | None = None) -> str:
    """
    Render the card markup for one snap.

    Every metadata field comes from a third-party endpoint and is escaped.
    Snaps without a fixed amount get an amount input instead.
    """
    network = metadata.network or DEFAULT_CARD_NETWORK
    asset_code = metadata.asset_code or "XLM"

    lines = [
        f'<div class="{CARD_CLASS}" {SNAP_ID_ATTR}="{escape(metadata.id)}">',
        '<div class="snap-card-header">',
        '<span class="snap-card-logo">✦</span>',
        f'<span class="snap-card-title">{escape(metadata.title)}</span>',
        _trust_badge(entry),
        "</div>",
    ]

    if metadata.description:
        lines.append(f'<p class="snap-card-desc">{escape(metadata.description)}</p>')

    lines.append('<div class="snap-card-amount">')
    if metadata.amount:
        lines.append(f'<span class="snap-fixed-amount">{escape(metadata.amount)}</span>')
    else:
        lines.append(
            f'<input type="number" placeholder="Enter amount" class="{AMOUNT_INPUT_CLASS}" step="any" min="0" />'
        )
    lines.extend(
        [
            f'<span class="snap-asset">{escape(asset_code)}</span>',
            "</div>",
            '<div class="snap-card-destination">',
            '<span class="snap-dest-label">To:</span>',
            f'<span class="snap-dest-value">{escape(truncate_address(metadata.destination))}</span>',
            "</div>",
            f'<button class="{PAY_BUTTON_CLASS}">Pay with Stellar</button>',
            '<div class="snap-card-footer">',
            f'<span class="snap-network-badge">{escape(network)}</span>',
            f'<a href="{escape(href)}" target="_blank" rel="noopener" class="snap-view-link">View</a>',
            "</div>",
            f'<div class="{STATUS_CLASS}"></div>',
            "</div>",
        ]
    )
    return "\n".join(lines)
