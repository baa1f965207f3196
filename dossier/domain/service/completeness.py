"""Profile completeness rules."""

from dossier.domain.model.profile import ProfileDocument

REQUIRED_TEXT_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "city",
    "state",
    "zip",
)


def is_complete(document: ProfileDocument) -> bool:
    """Decide whether a profile has everything a complete profile needs.

    Every required text field must be non-blank, age must be present, and
    there must be at least one application and one appointment. Other
    fields do not matter.

    Args:
        document: Profile document to evaluate

    Returns:
        True if the profile is complete
    """
    for name in REQUIRED_TEXT_FIELDS:
        value = getattr(document, name)
        if value is None or not value.strip():
            return False
    if document.age is None:
        return False
    return bool(document.applications) and bool(document.appointments)
