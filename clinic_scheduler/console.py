"""Numbered text menu over a :class:`SchedulingService`.

Input and output are injectable so the loop can be driven from tests.
"""
from __future__ import annotations

from typing import Callable, Iterable, Optional

from .errors import SchedulingError
from .service import SchedulingService

MENU = """
--- Hospital Management System ---
1. Add Patient
2. Add Doctor
3. Schedule Appointment
4. View Patients
5. View Doctors
6. View Appointments
7. Update Patient Diagnosis
0. Exit"""


def _print_items(items: Iterable[object], output: Callable[[str], None]) -> None:
    items = list(items)
    if not items:
        output("No items found.")
        return
    for item in items:
        output(str(item))
        output("")


def _read_id(prompt: str, input_fn: Callable[[str], str]) -> Optional[int]:
    try:
        return int(input_fn(prompt).strip())
    except ValueError:
        return None


def _blank_to_none(value: str) -> Optional[str]:
    return value if value.strip() else None


def run_menu(
    service: SchedulingService,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print,
) -> None:
    """Loop until the user picks 0 or input runs out."""
    while True:
        output(MENU)
        try:
            choice = input_fn("Enter your choice: ").strip()
            if choice == "0":
                output("Exiting.")
                return
            _dispatch(choice, service, input_fn, output)
        except EOFError:
            return


def _dispatch(choice, service, input_fn, output) -> None:
    try:
        if choice == "1":
            name = input_fn("Name: ")
            age = input_fn("Age: ")
            diagnosis = input_fn("Diagnosis: ")
            patient = service.add_patient(name, _blank_to_none(age), _blank_to_none(diagnosis))
            output(f"Patient added successfully! ID={patient.id}")
        elif choice == "2":
            name = input_fn("Name: ")
            specialization = input_fn("Specialization: ")
            doctor = service.add_doctor(name, specialization)
            output(f"Doctor added successfully! ID={doctor.id}")
        elif choice == "3":
            patient_id = _read_id("Patient ID: ", input_fn)
            doctor_id = _read_id("Doctor ID: ", input_fn)
            if patient_id is None or doctor_id is None:
                output("Invalid ID. Please enter a number.")
                return
            date_time = input_fn("Date (YYYY-MM-DD [HH:mm]): ")
            appointment = service.schedule_appointment(patient_id, doctor_id, date_time)
            output(f"Appointment scheduled successfully! ID={appointment.id}")
        elif choice == "4":
            _print_items(service.list_patients(), output)
        elif choice == "5":
            _print_items(service.list_doctors(), output)
        elif choice == "6":
            _print_items(service.list_appointments(), output)
        elif choice == "7":
            patient_id = _read_id("Patient ID: ", input_fn)
            if patient_id is None:
                output("Invalid ID. Please enter a number.")
                return
            diagnosis = input_fn("New diagnosis: ")
            service.update_patient_diagnosis(patient_id, diagnosis)
            output("Diagnosis updated successfully!")
        else:
            output("Invalid choice.")
    except SchedulingError as exc:
        output(f"Error: {exc}")
