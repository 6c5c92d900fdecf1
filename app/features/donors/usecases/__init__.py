"""Donor use cases."""

from .change_donor_status_usecase import ChangeDonorStatusUseCaseImpl
from .find_donors_by_blood_type_usecase import FindDonorsByBloodTypeUseCaseImpl
from .get_current_donor_usecase import GetCurrentDonorUseCaseImpl
from .get_donor_usecase import GetDonorUseCaseImpl
from .login_donor_usecase import LoginDonorUseCaseImpl
from .register_donor_usecase import RegisterDonorUseCaseImpl
from .update_donor_profile_usecase import UpdateDonorProfileUseCaseImpl

__all__ = [
    "RegisterDonorUseCaseImpl",
    "LoginDonorUseCaseImpl",
    "GetDonorUseCaseImpl",
    "GetCurrentDonorUseCaseImpl",
    "UpdateDonorProfileUseCaseImpl",
    "ChangeDonorStatusUseCaseImpl",
    "FindDonorsByBloodTypeUseCaseImpl",
]
