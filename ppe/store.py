"""In-memory profile store holding the finished project records."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

from .project import Profile, ProjectRecord

logger = logging.getLogger(__name__)


class ProfileStore:
    """Owns the profile and every submitted project record.

    ``on_discard`` is called with each record that leaves the store, either
    removed or replaced by a newer version.
    """

    def __init__(self, profile: Optional[Profile] = None, on_discard: Optional[Callable[[ProjectRecord], None]] = None) -> None:
        self.profile = profile if profile is not None else Profile(id="1")
        self.on_discard = on_discard

    @classmethod
    def from_dict(cls, data: Dict[str, Any], **kwargs: Any) -> "ProfileStore":
        return cls(Profile.from_dict(data), **kwargs)

    @property
    def projects(self) -> Dict[str, ProjectRecord]:
        return dict(self.profile.projects)

    def list_projects(self) -> List[ProjectRecord]:
        return list(self.profile.projects.values())

    def get(self, project_id: str) -> Optional[ProjectRecord]:
        return self.profile.projects.get(project_id)

    def create(self, project: ProjectRecord) -> bool:
        if project.id in self.profile.projects:
            logger.warning("Cannot create project %s, the id is taken", project.id)
            return False
        self.profile.projects[project.id] = project
        logger.info("Created project %s (%r)", project.id, project.title)
        return True

    def replace(self, project: ProjectRecord) -> bool:
        previous = self.profile.projects.get(project.id)
        if previous is None:
            logger.warning("Cannot replace unknown project %s", project.id)
            return False
        self.profile.projects[project.id] = project
        logger.info("Replaced project %s (%r)", project.id, project.title)
        self._discard(previous)
        return True

    def remove(self, project_id: str) -> bool:
        removed = self.profile.projects.pop(project_id, None)
        if removed is None:
            return False
        logger.info("Removed project %s", project_id)
        self._discard(removed)
        return True

    def update_profile(self, **kwargs: Any) -> bool:
        changed = False
        for key, value in kwargs.items():
            if key in ("id", "projects") or not hasattr(self.profile, key):
                continue
            setattr(self.profile, key, value)
            changed = True
        return changed

    def _discard(self, record: ProjectRecord) -> None:
        if self.on_discard is not None:
            self.on_discard(record)
