"""
Request payload builders shared by the test modules.
"""

from datetime import date, timedelta


def future_date(days: int = 30) -> date:
    return date.today() + timedelta(days=days)


def general_booking_payload(**overrides) -> dict:
    """A valid hall booking form as the web frontend posts it (camelCase)."""
    payload = {
        "firstName": "Ramesh",
        "surname": "Shah",
        "email": "ramesh@example.com",
        "phone": "9876543210",
        "eventType": "Wedding Reception",
        "date": future_date().isoformat(),
        "villageName": "Anand",
        "guestCount": 250,
        "additionalServices": ["catering"],
        "additionalNotes": "",
        "eventDocument": "http://test/uploads/documents/invite.pdf",
        "documentType": "Event Invitation",
    }
    payload.update(overrides)
    return payload


def person(name: str, email: str) -> dict:
    return {
        "name": name,
        "fatherName": f"{name} Sr",
        "motherName": f"{name} Mother",
        "age": 24,
        "contactNumber": "9123456780",
        "email": email,
        "address": "12 Station Road, Vadodara",
        "photo": "http://test/uploads/samuh-lagan/photo.jpg",
        "documents": [],
    }


def samuh_lagan_payload(**overrides) -> dict:
    payload = {
        "bride": person("Priya", "priya@example.com"),
        "groom": person("Amit", "amit@example.com"),
        "ceremonyDate": future_date(60).isoformat(),
    }
    payload.update(overrides)
    return payload


def student_award_payload(**overrides) -> dict:
    payload = {
        "name": "Kavya Patel",
        "contactNumber": "9988776655",
        "email": "kavya@example.com",
        "address": "4 Lake View, Surat",
        "schoolName": "City High School",
        "standard": "10",
        "boardName": "GSEB",
        "examYear": "2026",
        "totalPercentage": 91.4,
        "rank": "2nd",
        "marksheet": "http://test/uploads/student-awards/marksheet.pdf",
    }
    payload.update(overrides)
    return payload

