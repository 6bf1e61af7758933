import logging

logger = logging.getLogger(__name__)

DEFAULT_DELIVERY_URL = "https://imagedelivery.net"
DEFAULT_VARIANT = "public"

# Values starting with these are already usable as an <img> src
_LOCATOR_PREFIXES = ("blob:", "http")


def delivery_url(delivery_base: str, account_hash: str, image_id: str, variant: str = DEFAULT_VARIANT) -> str:
    """Image-store delivery URL: {base}/{account_hash}/{image_id}/{variant}"""
    return f"{delivery_base.rstrip('/')}/{account_hash}/{image_id}/{variant}"


def resolve_image_url(
    stored_value: str | None,
    delivery_base: str | None,
    account_hash: str | None,
    variant: str = DEFAULT_VARIANT,
) -> str:
    """
    Turn whatever an image record holds into something displayable.

    Full URLs and local blob previews pass through unchanged. Bare image ids
    are expanded to a delivery URL when the delivery base and account hash are
    both configured; otherwise the id comes back as-is.
    """
    if not stored_value:
        logger.warning("Image URL is undefined or empty")
        return ""

    if stored_value.startswith(_LOCATOR_PREFIXES):
        return stored_value

    if delivery_base and account_hash:
        return delivery_url(delivery_base, account_hash, stored_value, variant)

    return stored_value
