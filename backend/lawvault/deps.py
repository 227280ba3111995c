from fastapi import Request
from lawvault.services.account_service import AccountService
from lawvault.services.appointment_service import AppointmentService


def get_account_service(request: Request) -> AccountService:
    return request.app.state.account_service


def get_appointment_service(request: Request) -> AppointmentService:
    return request.app.state.appointment_service
