"""
Demo catalog templates, one doctor and one service per department.

    Example: Seed only cardiology
        await seed_db(db_manager, {"Cardiology": DEPARTMENT_TEMPLATES["Cardiology"]}, records=3)

    Example: Seed every department
        await seed_db(db_manager, DEPARTMENT_TEMPLATES, records=2)
"""

from typing import Any

DEPARTMENTS = (
    "Cardiology",
    "Neurology",
    "Ophthalmology",
    "Orthopedics",
    "Dermatology",
    "Pediatrics",
)

_SPECIALTIES = {
    "Cardiology": ("Cardiologist", "Cardiac Checkup", "Comprehensive heart care"),
    "Neurology": ("Neurologist", "Neurological Assessment", "Brain and nervous system care"),
    "Ophthalmology": ("Ophthalmologist", "Eye Examination", "Complete eye care"),
    "Orthopedics": ("Orthopedic Surgeon", "Joint Consultation", "Bone and joint treatment"),
    "Dermatology": ("Dermatologist", "Skin Screening", "Skin care and treatment"),
    "Pediatrics": ("Pediatrician", "Child Wellness Visit", "Care for infants, children and teens"),
}


def doctor_template(department: str) -> dict[str, Any]:
    specialty, _, _ = _SPECIALTIES[department]
    return {
        "name": f"Dr. {department}",
        "specialty": specialty,
        "department": department,
        "experience": 10,
        "rating": 4.8,
        "reviews": 120,
        "bio": f"{specialty} at the hospital's {department} department.",
        "education": "MD, Board Certified",
        "email": f"{department.lower()}@hospital.example",
        "phone": "555-0100",
    }


def service_template(department: str) -> dict[str, Any]:
    _, service_name, description = _SPECIALTIES[department]
    return {
        "name": service_name,
        "description": description,
        "department": department,
        "price": 150.0,
        "duration": "45 minutes",
        "features": ["Specialist consultation", "Follow-up plan"],
        "is_active": True,
    }


DEPARTMENT_TEMPLATES: dict[str, dict[str, dict[str, Any]]] = {
    department: {
        "doctors": doctor_template(department),
        "services": service_template(department),
    }
    for department in DEPARTMENTS
}

__all__ = [
    "DEPARTMENTS",
    "DEPARTMENT_TEMPLATES",
    "doctor_template",
    "service_template",
]
