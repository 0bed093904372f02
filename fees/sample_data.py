# School Fee Tracker - fixed demo dataset
from datetime import datetime, timezone

SAMPLE_STUDENTS = [
    {
        "id": "1",
        "name": "Michael Chen",
        "class": "Grade 11B",
        "guardianName": "Linda Chen",
        "guardianPhone": "+263 77 123 4567",
        "guardianEmail": "linda.chen@email.com",
        "balance": 1250,
        "lastPayment": "2024-01-10",
        "status": "overdue",
    },
    {
        "id": "2",
        "name": "Sarah Williams",
        "class": "Grade 9A",
        "guardianName": "John Williams",
        "guardianPhone": "+263 77 234 5678",
        "guardianEmail": "john.williams@email.com",
        "balance": 850,
        "lastPayment": "2024-01-15",
        "status": "pending",
    },
    {
        "id": "3",
        "name": "David Brown",
        "class": "Grade 12C",
        "guardianName": "Mary Brown",
        "guardianPhone": "+263 77 345 6789",
        "guardianEmail": "mary.brown@email.com",
        "balance": 2100,
        "lastPayment": "2023-12-20",
        "status": "overdue",
    },
    {
        "id": "4",
        "name": "Emma Davis",
        "class": "Grade 10A",
        "guardianName": "Robert Davis",
        "guardianPhone": "+263 77 456 7890",
        "guardianEmail": "robert.davis@email.com",
        "balance": 0,
        "lastPayment": "2024-01-20",
        "status": "paid",
    },
    {
        "id": "5",
        "name": "James Wilson",
        "class": "Grade 11A",
        "guardianName": "Jennifer Wilson",
        "guardianPhone": "+263 77 567 8901",
        "guardianEmail": "jennifer.wilson@email.com",
        "balance": 1200,
        "lastPayment": "2024-01-12",
        "status": "pending",
    },
    {
        "id": "6",
        "name": "Sophie Miller",
        "class": "Grade 9B",
        "guardianName": "Mark Miller",
        "guardianPhone": "+263 77 678 9012",
        "guardianEmail": "mark.miller@email.com",
        "balance": 0,
        "lastPayment": "2024-01-18",
        "status": "paid",
    },
]

SAMPLE_PAYMENTS = [
    {
        "id": "p1",
        "studentId": "1",
        "studentName": "Michael Chen",
        "amount": 1200,
        "paymentMethod": "ecocash",
        "reference": "EC12345",
        "description": "School Fees - January",
        "date": "2024-01-10",
        "recordedBy": "Admin",
        "receiptNumber": "REC001",
        "status": "completed",
    },
    {
        "id": "p2",
        "studentId": "2",
        "studentName": "Sarah Williams",
        "amount": 1200,
        "paymentMethod": "bank_transfer",
        "reference": "BT67890",
        "description": "School Fees - January",
        "date": "2024-01-15",
        "recordedBy": "Admin",
        "receiptNumber": "REC002",
        "status": "completed",
    },
]


async def seed_sample_data(store) -> None:
    """Write the demo students and payments, overwriting any records with the same ids."""
    created_at = datetime.now(timezone.utc).isoformat()
    for student in SAMPLE_STUDENTS:
        await store.set(f"student:{student['id']}", {**student, "createdAt": created_at})
    for payment in SAMPLE_PAYMENTS:
        await store.set(f"payment:{payment['id']}", {**payment, "createdAt": created_at})
