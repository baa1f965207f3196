"""Mappers for converting between database rows and domain models.

This is the only place profile documents are handled as loose dicts.
"""

from typing import Any, Dict

from dossier.domain.model import ProfileDocument


def row_to_profile(row: Dict[str, Any]) -> ProfileDocument:
    """Convert database row to ProfileDocument domain model.

    Args:
        row: Database row as dict

    Returns:
        ProfileDocument domain model
    """
    body = dict(row["document"])
    # Column values win over a stale copy inside the JSON body
    body["_id"] = row["id"]
    if row.get("update_dt") is not None:
        body["updateDt"] = row["update_dt"]
    return ProfileDocument.model_validate(body)


def profile_to_row(document: ProfileDocument) -> Dict[str, Any]:
    """Convert ProfileDocument domain model to database dict.

    Args:
        document: ProfileDocument domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": document.id,
        "email": document.email,
        "document": document.model_dump(mode="json", by_alias=True),
        "update_dt": document.update_dt,
    }
