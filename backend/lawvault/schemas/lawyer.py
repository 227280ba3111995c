from typing import Any
from lawvault.models.lawyer import Lawyer


def lawyer_to_dict(lawyer: Lawyer) -> dict[str, Any]:
    """Flatten the stored profile next to the generated fields."""
    data = dict(lawyer.profile or {})
    data["id"] = lawyer.id
    data["created_at"] = lawyer.created_at.isoformat() if lawyer.created_at else None
    return data
