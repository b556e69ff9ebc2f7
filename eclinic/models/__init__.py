from eclinic.models.user import User
from eclinic.models.patient import Patient
from eclinic.models.consultation import Consultation
from eclinic.models.medicine import Medicine

__all__ = ["User", "Patient", "Consultation", "Medicine"]
