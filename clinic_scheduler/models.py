from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator


class Doctor(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    specialization: str

    def __str__(self) -> str:
        return f"Doctor [ID={self.id}, Name={self.name}, Specialization={self.specialization}]"


class Patient(BaseModel):
    """A registered patient. Only ``diagnosis`` may change after creation."""
    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(frozen=True)
    name: str = Field(frozen=True)
    age: Optional[int] = Field(default=None, frozen=True)
    diagnosis: Optional[str] = None
    contact: Optional[str] = Field(default=None, frozen=True)

    @field_validator("diagnosis", "contact")
    @classmethod
    def _not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("must not be blank")
        return value

    def __setattr__(self, name, value):
        if name == "diagnosis" and value is None:
            raise ValueError("diagnosis cannot be cleared")
        super().__setattr__(name, value)

    def __str__(self) -> str:
        age =self.age if self.age is not None else "N/A"
        diagnosis = self.diagnosis if self.diagnosis is not None else "N/A"
        text = f"Patient [ID={self.id}, Name={self.name}, Age={age}, Diagnosis={diagnosis}"
        if self.contact is not None:
            text += f", Contact={self.contact}"
        return text + "]"


class Appointment(BaseModel):
    """Booked slot linking an existing doctor and patient (shared, not copied)."""
    model_config = ConfigDict(frozen=True)

    id: int
    doctor: Doctor
    patient: Patient
    scheduled_at: datetime
    all_day: bool = False  # parsed from a date-only pattern

    @property
    def formatted_date_time(self) -> str:
        at = self.scheduled_at
        # %Y is not zero-padded below year 1000 on every platform
        date = f"{at.year:04d}-{at.month:02d}-{at.day:02d}"
        return date if self.all_day else f"{date} {at.hour:02d}:{at.minute:02d}"

    def __str__(self) -> str:
        return (
            f"Appointment [ID={self.id}, Date={self.formatted_date_time}\n"
            f"  Patient: {self.patient.name}\n"
            f"  Doctor: {self.doctor.name} ({self.doctor.specialization})]"
        )


# Request bodies for the HTTP API. Values are passed to the service as-is so
# that emptiness and integer checks happen in one place.

class DoctorCreate(BaseModel):
    name: str
    specialization: str

class PatientCreate(BaseModel):
    name: str
    age: Union[StrictInt, str, None] = None  # text is parsed by the service
    diagnosis: Optional[str] = None
    contact: Optional[str] = None

class DiagnosisUpdate(BaseModel):
    diagnosis: str

class AppointmentCreate(BaseModel):
    patient_id: int
    doctor_id: int
    date_time: str = Field(description="yyyy-MM-dd HH:mm or yyyy-MM-dd")
