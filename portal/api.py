# School Fee Tracker - HTTP client for the payment tracking API
import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from fees import Payment, PaymentStats, Receipt, Reminder, Student, UserProfile

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed API call: an error payload from the server, a transport failure or an unreadable response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class FeesAPI:
    """Thin async wrapper over the JSON endpoints; one method per route."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ):
        self.token = token
        self._client = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("API request failed for %s: %s", path, exc)
            raise ApiError(f"Network error: {exc}") from exc
        try:
            body = response.json()
        except ValueError:
            body = None
        if response.is_error:
            message = body.get("error") if isinstance(body, dict) else None
            raise ApiError(message or f"HTTP {response.status_code}: {response.reason_phrase}", response.status_code)
        if body is None:
            logger.error("Non-JSON response from %s", path)
            raise ApiError(f"Invalid response from {path}", response.status_code)
        return body

    async def _get_model(self, model: type[BaseModel], method: str, path: str, many: bool = False, **kwargs):
        data = await self._request(method, path, **kwargs)
        try:
            if many:
                if not isinstance(data, list):
                    raise ApiError(f"Invalid response from {path}")
                return [model.model_validate(item) for item in data]
            return model.model_validate(data)
        except PydanticValidationError as exc:
            logger.error("Unexpected %s payload from %s: %s", model.__name__, path, exc)
            raise ApiError(f"Invalid response from {path}") from exc

    # --- Auth ---
    async def signup(self, email: str, password: str, name: str, role: str) -> str:
        data = await self._request("POST", "/auth/signup", json={
            "email": email, "password": password, "name": name, "role": role,
        })
        if not isinstance(data, dict) or "userId" not in data:
            raise ApiError("Invalid response from /auth/signup")
        return data["userId"]

    async def login(self, email: str, password: str) -> str:
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        if not isinstance(data, dict) or "access_token" not in data:
            raise ApiError("Invalid response from /auth/login")
        self.token = data["access_token"]
        return self.token

    async def get_profile(self) -> UserProfile:
        return await self._get_model(UserProfile, "GET", "/auth/profile")

    # --- Students ---
    async def list_students(self) -> list[Student]:
        return await self._get_model(Student, "GET", "/students", many=True)

    async def create_student(self, fields: dict) -> Student:
        return await self._get_model(Student, "POST", "/students", json=fields)

    async def update_student(self, student_id: str, updates: dict) -> Student:
        return await self._get_model(Student, "PUT", f"/students/{student_id}", json=updates)

    # --- Payments ---
    async def list_payments(self, student_id: str | None = None) -> list[Payment]:
        params = {"studentId": student_id} if student_id else None
        return await self._get_model(Payment, "GET", "/payments", many=True, params=params)

    async def create_payment(self, fields: dict) -> Payment:
        return await self._get_model(Payment, "POST", "/payments", json=fields)

    async def payment_stats(self) -> PaymentStats:
        return await self._get_model(PaymentStats, "GET", "/stats/payments")

    # --- Receipts / notifications ---
    async def generate_receipt(self, payment_id: str) -> Receipt:
        return await self._get_model(Receipt, "POST", "/receipts/generate", json={"paymentId": payment_id})

    async def send_reminder(self, student_id: str) -> Reminder:
        data = await self._request("POST", "/notifications/reminder", json={"studentId": student_id})
        if not isinstance(data, dict):
            raise ApiError("Invalid response from /notifications/reminder")
        try:
            return Reminder.model_validate(data.get("reminder"))
        except PydanticValidationError as exc:
            raise ApiError("Invalid response from /notifications/reminder") from exc

    async def init_sample_data(self) -> None:
        await self._request("POST", "/init-sample-data")
