# School Fee Tracker - offline/demo data shown when the API cannot be reached
from fees import Payment, Student


def fallback_students() -> list[Student]:
    return [Student.model_validate(s) for s in [
        {
            "id": "1",
            "name": "John Doe",
            "class": "Grade 10A",
            "guardianName": "Jane Doe",
            "guardianPhone": "+263 77 123 4567",
            "guardianEmail": "jane.doe@email.com",
            "balance": 150.00,
            "lastPayment": "2024-01-15",
            "status": "pending",
        },
        {
            "id": "2",
            "name": "Sarah Smith",
            "class": "Grade 9B",
            "guardianName": "Mike Smith",
            "guardianPhone": "+263 77 234 5678",
            "guardianEmail": "mike.smith@email.com",
            "balance": 0.00,
            "lastPayment": "2024-01-20",
            "status": "paid",
        },
        {
            "id": "3",
            "name": "David Johnson",
            "class": "Grade 11A",
            "guardianName": "Lisa Johnson",
            "guardianPhone": "+263 77 345 6789",
            "guardianEmail": "lisa.johnson@email.com",
            "balance": 200.00,
            "lastPayment": "2024-01-10",
            "status": "overdue",
        },
    ]]


def fallback_payments() -> list[Payment]:
    return [Payment.model_validate(p) for p in [
        {
            "id": "1",
            "studentId": "2",
            "studentName": "Sarah Smith",
            "amount": 150.00,
            "paymentMethod": "ecocash",
            "reference": "ECO123456",
            "description": "School Fees - January 2024",
            "date": "2024-01-20",
            "recordedBy": "Admin",
            "receiptNumber": "RCP-001",
            "status": "completed",
        },
        {
            "id": "2",
            "studentId": "1",
            "studentName": "John Doe",
            "amount": 100.00,
            "paymentMethod": "cash",
            "description": "School Fees - January 2024",
            "date": "2024-01-15",
            "recordedBy": "Admin",
            "receiptNumber": "RCP-002",
            "status": "completed",
        },
    ]]
