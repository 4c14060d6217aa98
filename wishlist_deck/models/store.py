"""
Store target model.

Derived identifiers for one storefront, computed once from the CLI input.
"""

from dataclasses import dataclass

from ..common.text_utils import safe_filename, strip_domain


@dataclass(frozen=True)
class StoreTarget:
    """Normalized storefront identity."""

    base_url: str           # Input with an https:// scheme added when missing
    domain: str             # Lower-cased host without protocol or www.
    safe_name: str          # Filesystem-safe domain, used for the output file
    readable_domain: str    # Domain shown on the intro page
    from_email: str         # Sender address shown on use-case pages

    @classmethod
    def from_input(cls, raw: str) -> "StoreTarget":
        """
        Derive a StoreTarget from a raw store URL or domain.

        Args:
            raw: e.g. "www.Shop.com", "https://shop.com/collections/all"

        Raises:
            ValueError: If no domain can be derived
        """
        raw = raw.strip()
        base_url = raw if raw.lower().startswith('http') else f"https://{raw}"
        domain = strip_domain(base_url).lower()
        if not domain:
            raise ValueError(f"Cannot derive a store domain from {raw!r}")

        return cls(
            base_url=base_url,
            domain=domain,
            safe_name=safe_filename(domain),
            readable_domain=domain,
            from_email=f"marketing@{domain}",
        )
