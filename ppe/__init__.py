"""Portfolio Project Editor backend package."""

from .backend import Backend
from .constants import APP_NAME
from .form import ProjectForm
from .gallery import Gallery, ImageEntry
from .local_refs import LocalRef, LocalRefRegistry
from .project import Profile, ProjectDraft, ProjectRecord
from .store import ProfileStore
from .tag_input import TagInput

__all__ = [
    "APP_NAME",
    "Backend",
    "Gallery",
    "ImageEntry",
    "LocalRef",
    "LocalRefRegistry",
    "Profile",
    "ProfileStore",
    "ProjectDraft",
    "ProjectForm",
    "ProjectRecord",
    "TagInput",
]
