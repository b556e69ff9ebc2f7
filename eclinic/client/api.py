"""
Async HTTP client for the clinic API.

Every call returns the decoded JSON body on success. Failures surface as
APIError (the server answered with {success: false, message}) or
ClinicConnectionError (the server could not be reached).
"""

import logging
from typing import Optional
import httpx
from eclinic.config import get_settings

logger = logging.getLogger(__name__)


class APIError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class ClinicConnectionError(Exception):
    """The API could not be reached."""


class ClinicAPI:
    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None,
                 timeout: float = 10.0):
        self.base_url = base_url or get_settings().api_base_url
        self.token: Optional[str] = None
        self._client = httpx.AsyncClient(base_url=self.base_url, transport=transport, timeout=timeout)

    async def aclose(self):
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            response = await self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ClinicConnectionError(str(e)) from e
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {}
            message = body.get("message") or str(body.get("detail") or response.reason_phrase)
            raise APIError(response.status_code, message)
        return response

    async def _json(self, method: str, path: str, **kwargs):
        response = await self._request(method, path, **kwargs)
        return response.json()

    # -------------------------------
    # Authentication
    # -------------------------------

    async def login(self, username: str, password: str) -> dict:
        """Logs in and keeps the bearer token for subsequent calls."""
        data = await self._json("POST", "/api/login", json={"username": username, "password": password})
        self.token = data["access_token"]
        return data

    def logout(self):
        self.token = None

    async def get_recovery_question(self, username: str) -> str:
        data = await self._json("GET", "/api/forgot-password", params={"username": username})
        return data["question"]

    async def reset_password(self, username: str, answer: str, new_password: str) -> dict:
        return await self._json(
            "POST", "/api/reset-password",
            json={"username": username, "answer": answer, "newPassword": new_password},
        )

    # -------------------------------
    # Profile
    # -------------------------------

    async def get_user(self) -> dict:
        return await self._json("GET", "/api/user")

    async def update_user(self, username: str, name: str, password: Optional[str] = None,
                          recovery_question: Optional[str] = None, recovery_answer: Optional[str] = None) -> dict:
        body = {"username": username, "name": name}
        if password:
            body["password"] = password
        if recovery_question:
            body["recoveryQuestion"] = recovery_question
        if recovery_answer:
            body["recoveryAnswer"] = recovery_answer
        return await self._json("PUT", "/api/user", json=body)

    async def check_username(self, username: str, exclude_id: Optional[int] = None) -> bool:
        params = {"username": username}
        if exclude_id is not None:
            params["excludeId"] = exclude_id
        data = await self._json("GET", "/api/check-username", params=params)
        return data["available"]

    # -------------------------------
    # Clinic records
    # -------------------------------

    async def list_patients(self, search: str = "") -> list[dict]:
        data = await self._json("GET", "/api/patients", params={"search": search} if search else None)
        return data["patients"]

    async def create_patient(self, patient: dict) -> dict:
        return await self._json("POST", "/api/patients", json=patient)

    async def update_patient(self, patient_id: str, changes: dict) -> dict:
        return await self._json("PUT", f"/api/patients/{patient_id}", json=changes)

    async def delete_patient(self, patient_id: str) -> dict:
        return await self._json("DELETE", f"/api/patients/{patient_id}")

    async def export_patients_csv(self) -> str:
        response = await self._request("GET", "/api/patients/export")
        return response.text

    async def list_consultations(self) -> list[dict]:
        data = await self._json("GET", "/api/consultations")
        return data["consultations"]

    async def create_consultation(self, consultation: dict) -> dict:
        return await self._json("POST", "/api/consultations", json=consultation)

    async def list_medicines(self, search: str = "") -> list[dict]:
        data = await self._json("GET", "/api/medicines", params={"search": search} if search else None)
        return data["medicines"]

    async def create_medicine(self, medicine: dict) -> dict:
        return await self._json("POST", "/api/medicines", json=medicine)

    async def update_medicine(self, medicine_id: str, changes: dict) -> dict:
        return await self._json("PUT", f"/api/medicines/{medicine_id}", json=changes)

    # -------------------------------
    # Dashboard & geo
    # -------------------------------

    async def dashboard_stats(self) -> dict:
        return await self._json("GET", "/api/dashboard/stats")

    async def analytics_charts(self) -> dict:
        return await self._json("GET", "/api/analytics/charts")

    async def generate_insights(self) -> dict:
        return await self._json("POST", "/api/dashboard/insights")

    async def nearest_purok(self, lat: float, lng: float) -> Optional[str]:
        data = await self._json("POST", "/api/puroks/nearest", json={"lat": lat, "lng": lng})
        return data["purok"]
