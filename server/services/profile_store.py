"""
Profile Store abstraction.

Durable source of truth for behavioral profiles. Implementations: in-memory
(tests, local runs), JSON file (single process), Firestore (production).
The profiling service keeps its own bounded cache in front of the store.
"""

import asyncio
import json
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from behavioral.models import BehavioralProfile
from behavioral.utils import BoundedLRU

PROFILES_COLLECTION = "behavioral_profiles"


class ProfileStore(Protocol):
    """Protocol for profile persistence. Implement for memory, JSON file, or Firestore."""

    async def load_async(self, user_id: str) -> Optional[BehavioralProfile]:
        """Return the stored profile, or None if the user has none."""
        ...

    async def save_async(self, profile: BehavioralProfile) -> None:
        """Persist the profile, replacing any stored version."""
        ...


class InMemoryProfileStore:
    """Profile store held in a dict. Used for tests and local runs."""

    def __init__(self):
        self._profiles: Dict[str, Dict[str, Any]] = {}

    async def load_async(self, user_id: str) -> Optional[BehavioralProfile]:
        data = self._profiles.get(user_id)
        return BehavioralProfile.model_validate(data) if data is not None else None

    async def save_async(self, profile: BehavioralProfile) -> None:
        self._profiles[profile.user_id] = profile.model_dump(mode="json")

    def __len__(self) -> int:
        return len(self._profiles)


class JsonProfileStore:
    """Profile store backed by a JSON file (e.g. data/profiles.json): {"profiles": {user_id: profile}}."""

    def __init__(self, path: Union[Path, str]):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._profiles: Dict[str, Dict[str, Any]] = {}
        self._load()

    def _load(self) -> None:
        if not self._path.exists():
            return
        with open(self._path) as f:
            data = json.load(f)
        profiles = data.get("profiles", {}) if isinstance(data, dict) else {}
        if isinstance(profiles, dict):
            self._profiles = profiles

    def _save_file(self) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        with open(tmp, "w") as f:
            json.dump({"profiles": self._profiles}, f, indent=2)
        tmp.replace(self._path)

    def _load_one(self, user_id: str) -> Optional[BehavioralProfile]:
        with self._lock:
            data = self._profiles.get(user_id)
        return BehavioralProfile.model_validate(data) if data is not None else None

    def _save_one(self, profile: BehavioralProfile) -> None:
        with self._lock:
            self._profiles[profile.user_id] = profile.model_dump(mode="json")
            self._save_file()

    async def load_async(self, user_id: str) -> Optional[BehavioralProfile]:
        return await asyncio.to_thread(self._load_one, user_id)

    async def save_async(self, profile: BehavioralProfile) -> None:
        await asyncio.to_thread(self._save_one, profile)


class FirestoreProfileStore:
    """
    Profile store backed by Firestore collection behavioral_profiles/{user_id}.
    Uses google.cloud.firestore.AsyncClient with the same service account as firebase-admin.
    """

    def __init__(
        self,
        project_id: Optional[str] = None,
        credentials_path: Optional[Union[Path, str]] = None,
        collection: str = PROFILES_COLLECTION,
    ):
        try:
            import firebase_admin
            from firebase_admin import credentials
            from google.cloud.firestore import AsyncClient
            from google.oauth2 import service_account
        except ImportError:
            raise ImportError(
                "firebase-admin and google-cloud-firestore are required for FirestoreProfileStore. "
                "pip install '.[firestore]'"
            )
        if not credentials_path:
            raise ValueError("FirestoreProfileStore requires credentials_path")
        cred_file = str(Path(credentials_path).resolve())
        if not firebase_admin._apps:
            opts = {"projectId": project_id} if project_id else None
            firebase_admin.initialize_app(credentials.Certificate(cred_file), opts)
        creds = service_account.Credentials.from_service_account_file(cred_file)
        proj = project_id or _project_id_from_credentials_file(cred_file)
        self._db = AsyncClient(project=proj, credentials=creds)
        self._collection = collection

    async def load_async(self, user_id: str) -> Optional[BehavioralProfile]:
        doc = await self._db.collection(self._collection).document(user_id).get()
        if not doc.exists:
            return None
        return BehavioralProfile.model_validate(doc.to_dict())

    async def save_async(self, profile: BehavioralProfile) -> None:
        ref = self._db.collection(self._collection).document(profile.user_id)
        await ref.set(profile.model_dump(mode="json"))


def _project_id_from_credentials_file(credentials_path: Union[Path, str]) -> Optional[str]:
    """Read project_id from a Google service account JSON file if present."""
    path = Path(credentials_path)
    if not path.is_file():
        return None
    with open(path) as f:
        data = json.load(f)
    return data.get("project_id") or data.get("projectId")


class ProfileCache:
    """Bounded LRU of profiles in front of the store. Evicted entries are reloaded from the store."""

    def __init__(self, capacity: int = 10_000):
        self._entries: BoundedLRU[str, BehavioralProfile] = BoundedLRU(capacity)

    def get(self, user_id: str) -> Optional[BehavioralProfile]:
        return self._entries.get(user_id)

    def put(self, profile: BehavioralProfile) -> None:
        self._entries.put(profile.user_id, profile)

    def invalidate(self, user_id: str) -> None:
        self._entries.pop(user_id)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
