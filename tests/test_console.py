from clinic_scheduler.console import run_menu
from clinic_scheduler.service import SchedulingService


def drive(service, answers):
    feed = iter(answers)
    lines = []

    def fake_input(prompt):
        try:
            return next(feed)
        except StopIteration:
            raise EOFError

    run_menu(service, input_fn=fake_input, output=lines.append)
    return lines


def test_add_and_list():
    svc = SchedulingService()
    lines = drive(svc, [
        "2", "Dr. Smith", "Cardiology",
        "1", "Alice", "30", "Heart Palpitations",
        "3", "1", "1", "2025-01-01",
        "5", "4", "6",
        "0",
    ])
    assert "Doctor added successfully! ID=1" in lines
    assert "Patient added successfully! ID=1" in lines
    assert "Appointment scheduled successfully! ID=1" in lines
    assert "Doctor [ID=1, Name=Dr. Smith, Specialization=Cardiology]" in lines
    assert "Patient [ID=1, Name=Alice, Age=30, Diagnosis=Heart Palpitations]" in lines
    assert any(line.startswith("Appointment [ID=1, Date=2025-01-01\n") for line in lines)
    assert lines[-1] == "Exiting."


def test_errors_are_reported_and_loop_continues():
    svc = SchedulingService()
    lines = drive(svc, [
        "1", "Bob", "notanumber", "x",
        "3", "abc", "1",
        "3", "1", "1", "2025-01-01",
        "9",
        "6",
    ])
    assert "Error: Invalid age. Please enter a number." in lines
    assert "Invalid ID. Please enter a number." in lines
    assert "Error: Patient with ID 1 not found." in lines
    assert "Invalid choice." in lines
    assert "No items found." in lines
    assert svc.list_patients() == []


def test_update_diagnosis():
    svc = SchedulingService()
    svc.add_patient("Alice", 30, "Heart Palpitations")
    lines = drive(svc, ["7", "1", "Arrhythmia", "0"])
    assert "Diagnosis updated successfully!" in lines
    assert svc.find_patient_by_id(1).diagnosis == "Arrhythmia"
