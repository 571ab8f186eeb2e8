"""In-memory scheduling service for doctors, patients and appointments.

The service is the only place that creates entities and hands out ids. One
instance is built at start-up and passed to every caller (HTTP app, console
menu); there is no module-level singleton.
"""
from __future__ import annotations

import logging
import re
import threading
from datetime import datetime
from typing import Optional, Sequence, Union

from .errors import DateFormatError, ReferenceNotFoundError, ValidationError
from .models import Appointment, Doctor, Patient

logger = logging.getLogger(__name__)

DATE_TIME_FORMATS: tuple[str, ...] = ("%Y-%m-%d %H:%M", "%Y-%m-%d")

_INTEGER_RE = re.compile(r"[+-]?\d+")

# ages are 32-bit signed integers
_AGE_MIN, _AGE_MAX = -(2**31), 2**31 - 1

_FIELD_WIDTHS = {"%Y": r"\d{4}", "%m": r"\d{2}", "%d": r"\d{2}", "%H": r"\d{2}", "%M": r"\d{2}"}


def _fixed_width(fmt: str) -> "re.Pattern[str]":
    pattern = re.escape(fmt)
    for directive, digits in _FIELD_WIDTHS.items():
        pattern = pattern.replace(directive, digits)
    return re.compile(pattern)


def _required_text(field: str, value: Optional[str]) -> str:
    if value is None or not value.strip():
        raise ValidationError(field, f"{field.capitalize()} cannot be empty.")
    return value.strip()


def _optional_text(field: str, value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return _required_text(field, value)


def _parse_age(value: Union[int, str, None]) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        age = value
    elif isinstance(value, str) and _INTEGER_RE.fullmatch(value.strip()):
        age = int(value.strip())
    else:
        raise ValidationError("age", "Invalid age. Please enter a number.")
    if not _AGE_MIN <= age <= _AGE_MAX:
        raise ValidationError("age", "Invalid age. Number is out of range.")
    return age


class SchedulingService:
    def __init__(self, date_formats: Sequence[str] = DATE_TIME_FORMATS):
        self._date_formats = tuple(date_formats)
        self._doctors: list[Doctor] = []
        self._patients: list[Patient] = []
        self._appointments: list[Appointment] = []
        self._next_doctor_id = 1
        self._next_patient_id = 1
        self._next_appointment_id = 1
        self._lock = threading.Lock()

    @property
    def date_formats(self) -> tuple[str, ...]:
        return self._date_formats

    # Doctors ---------------------------------------------------------------

    def add_doctor(self, name: str, specialization: str) -> Doctor:
        name = _required_text("name", name)
        specialization = _required_text("specialization", specialization)
        with self._lock:
            doctor = Doctor(id=self._next_doctor_id, name=name, specialization=specialization)
            self._next_doctor_id += 1
            self._doctors.append(doctor)
        logger.info("Added doctor %s (%s)", doctor.id, doctor.specialization)
        return doctor

    def find_doctor_by_id(self, doctor_id: int) -> Optional[Doctor]:
        with self._lock:
            return next((d for d in self._doctors if d.id == doctor_id), None)

    def list_doctors(self) -> list[Doctor]:
        with self._lock:
            return list(self._doctors)

    # Patients --------------------------------------------------------------

    def add_patient(
        self,
        name: str,
        age: Union[int, str, None] = None,
        diagnosis: Optional[str] = None,
        contact: Optional[str] = None,
    ) -> Patient:
        """Register a patient.

        ``age`` may be an int or text holding an integer; anything else is a
        ``ValidationError``. ``diagnosis`` and ``contact`` are optional but must
        not be blank when given.
        """
        name = _required_text("name", name)
        parsed_age = _parse_age(age)
        diagnosis = _optional_text("diagnosis", diagnosis)
        contact = _optional_text("contact", contact)
        with self._lock:
            patient = Patient(
                id=self._next_patient_id,
                name=name,
                age=parsed_age,
                diagnosis=diagnosis,
                contact=contact,
            )
            self._next_patient_id += 1
            self._patients.append(patient)
        logger.info("Added patient %s", patient.id)
        return patient

    def find_patient_by_id(self, patient_id: int) -> Optional[Patient]:
        with self._lock:
            return self._find_patient(patient_id)

    def list_patients(self) -> list[Patient]:
        with self._lock:
            return list(self._patients)

    def update_patient_diagnosis(self, patient_id: int, diagnosis: str) -> Patient:
        diagnosis = _required_text("diagnosis", diagnosis)
        with self._lock:
            patient = self._find_patient(patient_id)
            if patient is None:
                raise ReferenceNotFoundError("patient", patient_id)
            patient.diagnosis = diagnosis
        logger.info("Updated diagnosis for patient %s", patient_id)
        return patient

    # Appointments ----------------------------------------------------------

    def schedule_appointment(self, patient_id: int, doctor_id: int, date_time_text: str) -> Appointment:
        """Book an appointment between an existing patient and doctor.

        References are resolved before the date is parsed. No conflict
        detection: overlapping or past slots are accepted.
        """
        with self._lock:
            patient = self._find_patient(patient_id)
            if patient is None:
                raise ReferenceNotFoundError("patient", patient_id)
            doctor = next((d for d in self._doctors if d.id == doctor_id), None)
            if doctor is None:
                raise ReferenceNotFoundError("doctor", doctor_id)

            scheduled_at, fmt = self._parse_date_time(date_time_text)
            appointment = Appointment(
                id=self._next_appointment_id,
                doctor=doctor,
                patient=patient,
                scheduled_at=scheduled_at,
                all_day="%H" not in fmt,
            )
            self._next_appointment_id += 1
            self._appointments.append(appointment)
        logger.info(
            "Scheduled appointment %s: patient %s with doctor %s at %s",
            appointment.id, patient_id, doctor_id, appointment.formatted_date_time,
        )
        return appointment

    def list_appointments(self) -> list[Appointment]:
        with self._lock:
            return list(self._appointments)

    # Internals -------------------------------------------------------------

    def _find_patient(self, patient_id: int) -> Optional[Patient]:
        return next((p for p in self._patients if p.id == patient_id), None)

    def _parse_date_time(self, text: str) -> tuple[datetime, str]:
        value = (text or "").strip()
        for fmt in self._date_formats:
            # strptime accepts unpadded fields; the patterns are fixed-width
            if not _fixed_width(fmt).fullmatch(value):
                continue
            try:
                return datetime.strptime(value, fmt), fmt
            except ValueError:
                continue
        raise DateFormatError(text, self._date_formats)


def seed_demo_data(service: SchedulingService) -> None:
    """Load the starter doctors and patients the clinic demo ships with."""
    service.add_doctor("Dr. Smith", "Cardiology")
    service.add_doctor("Dr. Jones", "Neurology")
    service.add_patient("Alice", 30, "Heart Palpitations")
    service.add_patient("Bob", 45, "Migraines")
