"""Workflow session storage - persists sessions between requests"""
from pathlib import Path
from typing import Dict, List, Optional

from config import settings
from models.session import WorkflowSession
from utils.json_io import atomic_write_json, read_json


class SessionStore:
    def __init__(self, storage_path: Optional[Path] = None):
        self.storage_path = storage_path or settings.data_dir / "sessions.json"
        self._ensure_storage()

    def _ensure_storage(self):
        """Ensure storage file exists"""
        if not self.storage_path.exists():
            self._save_data({"sessions": {}})

    def _load_data(self) -> dict:
        return read_json(self.storage_path, default={"sessions": {}})

    def _save_data(self, data: dict):
        atomic_write_json(self.storage_path, data)

    async def list(self) -> List[WorkflowSession]:
        """All sessions, most recently updated first"""
        data = self._load_data()
        sessions = [WorkflowSession.model_validate(s) for s in data["sessions"].values()]
        sessions.sort(key=lambda s: s.updated_at, reverse=True)
        return sessions

    async def get(self, session_id: str) -> Optional[WorkflowSession]:
        data = self._load_data()
        raw = data["sessions"].get(session_id)
        if raw is None:
            return None
        return WorkflowSession.model_validate(raw)

    async def save(self, session: WorkflowSession) -> WorkflowSession:
        """Insert or replace a session"""
        session.touch()
        data = self._load_data()
        data["sessions"][session.id] = session.model_dump(mode="json")
        self._save_data(data)
        return session

    async def delete(self, session_id: str) -> bool:
        data = self._load_data()
        if session_id in data["sessions"]:
            del data["sessions"][session_id]
            self._save_data(data)
            return True
        return False

    async def stats(self) -> Dict[str, int]:
        data = self._load_data()
        counts: Dict[str, int] = {}
        for raw in data["sessions"].values():
            step = raw.get("step", "input")
            counts[step] = counts.get(step, 0) + 1
        return {"total": len(data["sessions"]), **counts}


session_store = SessionStore()
