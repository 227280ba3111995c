from lawvault.models.user import User
from lawvault.models.lawyer import Lawyer
from lawvault.models.appointment import Appointment

__all__ = ["User", "Lawyer", "Appointment"]
