import logging
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings, get_settings
from .errors import DateFormatError, ReferenceNotFoundError, SchedulingError, ValidationError
from .models import (
    Appointment,
    AppointmentCreate,
    DiagnosisUpdate,
    Doctor,
    DoctorCreate,
    Patient,
    PatientCreate,
)
from .service import SchedulingService, seed_demo_data

logger = logging.getLogger(__name__)

# HTTPBearer scheme so Swagger-UI can attach the Authorization header globally
auth_scheme = HTTPBearer(auto_error=False)


def verify_api_key(request: Request, credentials: HTTPAuthorizationCredentials = Depends(auth_scheme)):
    """Validate Bearer token provided via Authorization header"""
    api_key = request.app.state.settings.api_key
    if credentials is None or credentials.scheme.lower() != "bearer" or credentials.credentials != api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")


def get_service(request: Request) -> SchedulingService:
    return request.app.state.service


def _to_http(exc: SchedulingError) -> HTTPException:
    if isinstance(exc, ReferenceNotFoundError):
        return HTTPException(status_code=404, detail=exc.message)
    if isinstance(exc, (ValidationError, DateFormatError)):
        return HTTPException(status_code=422, detail=exc.message)
    return HTTPException(status_code=400, detail=str(exc))


def create_app(service: Optional[SchedulingService] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API around one service instance shared by every route."""
    settings = settings or get_settings()
    if service is None:
        service = SchedulingService()
        if settings.seed_demo_data:
            seed_demo_data(service)
            logger.info("Seeded demo doctors and patients")

    app = FastAPI(title="Clinic Scheduler")
    app.state.service = service
    app.state.settings = settings
    guarded = [Depends(verify_api_key)]

    # Doctors -----------------------------------------------------------------

    @app.post("/doctors", dependencies=guarded, response_model=Doctor, status_code=201)
    async def add_doctor(req: DoctorCreate, svc: SchedulingService = Depends(get_service)):
        try:
            return svc.add_doctor(req.name, req.specialization)
        except SchedulingError as exc:
            raise _to_http(exc)

    @app.get("/doctors", dependencies=guarded, response_model=list[Doctor])
    async def list_doctors(svc: SchedulingService = Depends(get_service)):
        return svc.list_doctors()

    @app.get("/doctors/{doctor_id}", dependencies=guarded, response_model=Doctor)
    async def get_doctor(doctor_id: int, svc: SchedulingService = Depends(get_service)):
        doctor = svc.find_doctor_by_id(doctor_id)
        if doctor is None:
            raise _to_http(ReferenceNotFoundError("doctor", doctor_id))
        return doctor

    # Patients ----------------------------------------------------------------

    @app.post("/patients", dependencies=guarded, response_model=Patient, status_code=201)
    async def add_patient(req: PatientCreate, svc: SchedulingService = Depends(get_service)):
        try:
            return svc.add_patient(req.name, req.age, req.diagnosis, req.contact)
        except SchedulingError as exc:
            raise _to_http(exc)

    @app.get("/patients", dependencies=guarded, response_model=list[Patient])
    async def list_patients(svc: SchedulingService = Depends(get_service)):
        return svc.list_patients()

    @app.get("/patients/{patient_id}", dependencies=guarded, response_model=Patient)
    async def get_patient(patient_id: int, svc: SchedulingService = Depends(get_service)):
        patient = svc.find_patient_by_id(patient_id)
        if patient is None:
            raise _to_http(ReferenceNotFoundError("patient", patient_id))
        return patient

    @app.patch("/patients/{patient_id}/diagnosis", dependencies=guarded, response_model=Patient)
    async def update_diagnosis(patient_id: int, req: DiagnosisUpdate, svc: SchedulingService = Depends(get_service)):
        try:
            return svc.update_patient_diagnosis(patient_id, req.diagnosis)
        except SchedulingError as exc:
            raise _to_http(exc)

    # Appointments ------------------------------------------------------------

    @app.post("/appointments", dependencies=guarded, response_model=Appointment, status_code=201)
    async def schedule_appointment(req: AppointmentCreate, svc: SchedulingService = Depends(get_service)):
        """Book an appointment. Double-booking is not checked."""
        try:
            return svc.schedule_appointment(req.patient_id, req.doctor_id, req.date_time)
        except SchedulingError as exc:
            raise _to_http(exc)

    @app.get("/appointments", dependencies=guarded, response_model=list[Appointment])
    async def list_appointments(svc: SchedulingService = Depends(get_service)):
        return svc.list_appointments()

    return app
