"""Identity Rules — pure derivation of a user profile from provider data.

Invariants:
    - Display name is "first last" trimmed, or "User" when both are blank
    - Email is the first non-blank address; absence raises MissingProfileData
    - Avatar is optional and normalized to "" when absent
"""

from fintrack.core.domain_types import ExternalIdentity
from fintrack.core.errors import MissingProfileData

DEFAULT_DISPLAY_NAME = "User"


def derive_display_name(first_name: str | None, last_name: str | None) -> str:
    name = f"{first_name or ''} {last_name or ''}".strip()
    return name or DEFAULT_DISPLAY_NAME


def primary_email(identity: ExternalIdentity) -> str:
    for address in identity.email_addresses:
        if address and address.strip():
            return address.strip()
    raise MissingProfileData("email address")


def build_user_fields(identity: ExternalIdentity) -> dict:
    """Column values for a freshly provisioned user."""
    return {
        "external_user_id": identity.external_user_id,
        "name": derive_display_name(identity.first_name, identity.last_name),
        "email": primary_email(identity),
        "image_url": identity.image_url or "",
    }
