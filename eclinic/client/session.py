"""
Client-side application state.

ClinicSession holds the logged-in user, the active view and the clinic records
for one UI session. Records are loaded from and written back to the server;
nothing here is the source of truth. Every async handler records its outcome
on the state object and always clears its loading flag.
"""

import asyncio
import csv
import io
import logging
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Optional
from eclinic.client.api import ClinicAPI, APIError, ClinicConnectionError
from eclinic.geo import Locator, PurokDetection, detect_purok

logger = logging.getLogger(__name__)

CONNECTION_ERROR = "Connection error"


class View(str, Enum):
    DASHBOARD = "dashboard"
    PATIENTS = "patients"
    CONSULTATIONS = "consultations"
    INVENTORY = "inventory"
    ANALYTICS = "analytics"
    SETTINGS = "settings"


class RecoveryStep(str, Enum):
    AWAITING_USERNAME = "awaiting_username"
    AWAITING_ANSWER = "awaiting_answer"
    COMPLETED = "completed"


class RecoveryFlow:
    """Forgot-password wizard: username, then recovery answer and new password."""

    def __init__(self, api: ClinicAPI):
        self.api = api
        self.step = RecoveryStep.AWAITING_USERNAME
        self.username = ""
        self.question = ""
        self.error = ""
        self.success = ""
        self.loading = False

    async def submit_username(self, username: str):
        self.error = ""
        self.loading = True
        try:
            self.question = await self.api.get_recovery_question(username)
            self.username = username
            self.step = RecoveryStep.AWAITING_ANSWER
        except APIError as e:
            self.error = e.message
        except ClinicConnectionError:
            self.error = CONNECTION_ERROR
        finally:
            self.loading = False

    async def submit_answer(self, answer: str, new_password: str):
        if self.step is not RecoveryStep.AWAITING_ANSWER:
            raise RuntimeError("submit_username must succeed first")
        self.error = ""
        self.loading = True
        try:
            data = await self.api.reset_password(self.username, answer, new_password)
            self.success = data.get("message", "")
            self.step = RecoveryStep.COMPLETED
        except APIError as e:
            self.error = e.message
        except ClinicConnectionError:
            self.error = CONNECTION_ERROR
        finally:
            self.loading = False


class UsernameChecker:
    """
    Debounced live availability check for the profile form.

    Each keystroke restarts the debounce timer. Once a check is dispatched it
    runs to completion, but its result is applied only if no newer check was
    dispatched (or the input reset) in the meantime.
    """

    def __init__(self, api: ClinicAPI, delay: float = 0.5):
        self.api = api
        self.delay = delay
        self.available: Optional[bool] = None
        self.checking = False
        self._seq = 0
        self._latest = 0
        self._timer: Optional[asyncio.Task] = None
        self._timer_seq = 0
        self._tasks: set[asyncio.Task] = set()

    def on_input(self, username: str, current_username: str, exclude_id: Optional[int]):
        self._seq += 1
        seq = self._seq

        # Restart the debounce window only if the pending check has not been sent yet
        if self._timer is not None and not self._timer.done() and self._timer_seq > self._latest:
            self._timer.cancel()

        if not username or username == current_username:
            self._latest = seq
            self.available = None
            self.checking = False
            return

        task = asyncio.get_running_loop().create_task(self._debounced(seq, username, exclude_id))
        self._timer = task
        self._timer_seq = seq
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _debounced(self, seq: int, username: str, exclude_id: Optional[int]):
        await asyncio.sleep(self.delay)
        self._latest = seq
        self.checking = True
        try:
            available = await self.api.check_username(username, exclude_id)
        except (APIError, ClinicConnectionError) as e:
            logger.error("Check username error: %s", e)
            return
        finally:
            if seq == self._latest:
                self.checking = False
        if seq == self._latest:
            self.available = available

    async def wait(self):
        """Wait for every scheduled or in-flight check to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)


class ClinicSession:
    def __init__(self, api: ClinicAPI):
        self.api = api
        self.user: Optional[dict] = None
        self.view = View.DASHBOARD
        self.search_query = ""
        self.patients: list[dict] = []
        self.consultations: list[dict] = []
        self.medicines: list[dict] = []
        self.error = ""
        self.loading = False
        self.profile_status: Optional[dict] = None
        self.updating_profile = False
        self.insights: Optional[str] = None
        self.loading_insights = False
        self.stats: Optional[dict] = None
        self.charts: Optional[dict] = None

    @property
    def is_logged_in(self) -> bool:
        return self.user is not None

    # -------------------------------
    # Authentication
    # -------------------------------

    async def login(self, username: str, password: str) -> bool:
        self.error = ""
        self.loading = True
        try:
            data = await self.api.login(username, password)
            await self.refresh()
            self.user = data["user"]
            return True
        except APIError as e:
            self.error = e.message or "Login failed"
        except ClinicConnectionError:
            self.error = "Connection error. Please try again."
        finally:
            self.loading = False
        # No token without loaded records
        self.api.logout()
        self.user = None
        self.patients, self.consultations, self.medicines = [], [], []
        return False

    def logout(self):
        self.api.logout()
        self.user = None
        self.view = View.DASHBOARD
        self.patients, self.consultations, self.medicines = [], [], []
        self.insights = None
        self.profile_status = None
        self.stats = None
        self.charts = None

    def recovery_flow(self) -> RecoveryFlow:
        return RecoveryFlow(self.api)

    def username_checker(self, delay: float = 0.5) -> UsernameChecker:
        return UsernameChecker(self.api, delay=delay)

    # -------------------------------
    # Records
    # -------------------------------

    async def refresh(self):
        self.patients = await self.api.list_patients()
        self.consultations = await self.api.list_consultations()
        self.medicines = await self.api.list_medicines()

    @property
    def filtered_patients(self) -> list[dict]:
        if not self.search_query:
            return self.patients
        query = self.search_query.lower()
        return [
            p for p in self.patients
            if query in p["first_name"].lower()
            or query in p["last_name"].lower()
            or query in p["patient_id"]
            or query in (p.get("purok") or "").lower()
        ]

    @property
    def filtered_medicines(self) -> list[dict]:
        if not self.search_query:
            return self.medicines
        query = self.search_query.lower()
        return [m for m in self.medicines if query in m["name"].lower() or query in m["category"].lower()]

    async def _mutate(self, call) -> Optional[dict]:
        self.error = ""
        self.loading = True
        try:
            result = await call
            await self.refresh()
            return result
        except APIError as e:
            self.error = e.message
        except ClinicConnectionError:
            self.error = CONNECTION_ERROR
        finally:
            self.loading = False
        return None

    async def save_patient(self, data: dict, patient_id: Optional[str] = None) -> Optional[dict]:
        if patient_id:
            return await self._mutate(self.api.update_patient(patient_id, data))
        return await self._mutate(self.api.create_patient(data))

    async def delete_patient(self, patient_id: str) -> Optional[dict]:
        return await self._mutate(self.api.delete_patient(patient_id))

    async def record_consultation(self, data: dict) -> Optional[dict]:
        return await self._mutate(self.api.create_consultation(data))

    async def save_medicine(self, data: dict, medicine_id: Optional[str] = None) -> Optional[dict]:
        if medicine_id:
            return await self._mutate(self.api.update_medicine(medicine_id, data))
        return await self._mutate(self.api.create_medicine(data))

    async def export_patients_csv(self, directory: Path) -> Path:
        content = await self.api.export_patients_csv()
        path = Path(directory) / f"patients_export_{date.today().isoformat()}.csv"
        path.write_text(content, encoding="utf-8")
        rows = list(csv.reader(io.StringIO(content)))
        logger.info("Exported %d patients to %s", max(len(rows) - 1, 0), path)
        return path

    async def detect_purok(self, locator: Optional[Locator], timeout: float = 10.0) -> PurokDetection:
        return await detect_purok(locator, timeout=timeout)

    async def assign_purok(self, lat: float, lng: float) -> Optional[str]:
        """Nearest purok for a coordinate picked on the map, or None if the lookup fails."""
        try:
            return await self.api.nearest_purok(lat, lng)
        except (APIError, ClinicConnectionError) as e:
            logger.error("Purok lookup error: %s", e)
            return None

    # -------------------------------
    # Profile & dashboard
    # -------------------------------

    async def update_profile(self, username: str, name: str, password: Optional[str] = None,
                             recovery_question: Optional[str] = None, recovery_answer: Optional[str] = None) -> bool:
        self.updating_profile = True
        self.profile_status = None
        try:
            await self.api.update_user(username, name, password, recovery_question, recovery_answer)
            self.profile_status = {"type": "success", "message": "Profile updated successfully!"}
            if self.user is not None:
                self.user = {**self.user, "username": username, "name": name}
            return True
        except APIError as e:
            self.profile_status = {"type": "error", "message": e.message or "Update failed"}
        except ClinicConnectionError:
            self.profile_status = {"type": "error", "message": CONNECTION_ERROR}
        finally:
            self.updating_profile = False
        return False

    async def load_dashboard(self) -> bool:
        self.error = ""
        try:
            self.stats = await self.api.dashboard_stats()
            self.charts = await self.api.analytics_charts()
            return True
        except APIError as e:
            self.error = e.message
        except ClinicConnectionError:
            self.error = CONNECTION_ERROR
        return False

    async def generate_insights(self) -> Optional[str]:
        self.loading_insights = True
        try:
            data = await self.api.generate_insights()
            self.insights = data["insights"]
        except (APIError, ClinicConnectionError) as e:
            logger.error("AI Error: %s", e)
            self.insights = "Error connecting to AI service. Please check your API key."
        finally:
            self.loading_insights = False
        return self.insights
