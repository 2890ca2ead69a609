"""Project related data models."""
from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .gallery import Gallery
from .tag_input import TagInput

SCALAR_FIELDS = ("title", "description", "demo_url", "repo_url")


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass(frozen=True)
class ProjectRecord:
    """A finished project as kept by the profile store."""

    id: str
    title: str
    description: str
    image: str
    categories: Tuple[str, ...] = ()
    technologies: Tuple[str, ...] = ()
    additional_images: Tuple[str, ...] = ()
    demo_url: str = ""
    repo_url: str = ""
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectRecord":
        return cls(
            id=str(data["id"]),
            title=data.get("title", ""),
            description=data.get("description", ""),
            image=data.get("image", ""),
            categories=tuple(data.get("categories", ())),
            technologies=tuple(data.get("technologies", ())),
            additional_images=tuple(data.get("additional_images", ())),
            demo_url=data.get("demo_url") or "",
            repo_url=data.get("repo_url") or "",
            created_at=data.get("created_at", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        for key in ("categories", "technologies", "additional_images"):
            data[key] = list(data[key])
        return data

    def image_urls(self) -> List[str]:
        return ([self.image] if self.image else []) + list(self.additional_images)


@dataclass
class Profile:
    """Profile metadata plus the projects shown on it, keyed by id."""

    id: str
    name: str = ""
    bio: str = ""
    avatar: str = ""
    location: str = ""
    website: str = ""
    github: str = ""
    twitter: str = ""
    linkedin: str = ""
    skills: List[str] = field(default_factory=list)
    projects: Dict[str, ProjectRecord] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Profile":
        records = [ProjectRecord.from_dict(item) for item in data.get("projects", [])]
        return cls(
            id=str(data.get("id", "1")),
            name=data.get("name", ""),
            bio=data.get("bio", ""),
            avatar=data.get("avatar", ""),
            location=data.get("location", ""),
            website=data.get("website", ""),
            github=data.get("github", ""),
            twitter=data.get("twitter", ""),
            linkedin=data.get("linkedin", ""),
            skills=list(data.get("skills", [])),
            projects={record.id: record for record in records},
        )

    def __repr__(self) -> str:  # pragma: no cover - utility repr
        return f"<Profile '{self.name}' ({len(self.projects)} projects)>"


@dataclass
class ProjectDraft:
    """The in-memory project being created or edited.

    ``image`` and ``additional_images`` are read from the gallery every time,
    so they can never disagree with it.
    """

    categories: TagInput
    technologies: TagInput
    gallery: Gallery = field(default_factory=Gallery)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    title: str = ""
    description: str = ""
    demo_url: str = ""
    repo_url: str = ""
    created_at: str = field(default_factory=utc_timestamp)

    @classmethod
    def empty(cls, categories: Sequence[str], technologies: Sequence[str], gallery: Optional[Gallery] = None) -> "ProjectDraft":
        return cls(
            categories=TagInput(categories),
            technologies=TagInput(technologies),
            gallery=gallery if gallery is not None else Gallery(),
        )

    @classmethod
    def from_record(
        cls,
        record: ProjectRecord,
        categories: Sequence[str],
        technologies: Sequence[str],
        gallery: Optional[Gallery] = None,
    ) -> "ProjectDraft":
        gallery = gallery if gallery is not None else Gallery()
        gallery.seed(record.image, record.additional_images)
        return cls(
            categories=TagInput(categories, record.categories),
            technologies=TagInput(technologies, record.technologies),
            gallery=gallery,
            id=record.id,
            title=record.title,
            description=record.description,
            demo_url=record.demo_url,
            repo_url=record.repo_url,
            created_at=record.created_at,
        )

    @property
    def image(self) -> str:
        return self.gallery.main_url()

    @property
    def additional_images(self) -> List[str]:
        return self.gallery.additional_urls()

    def to_record(self) -> ProjectRecord:
        return ProjectRecord(
            id=self.id,
            title=self.title,
            description=self.description,
            image=self.image,
            categories=tuple(self.categories.selected),
            technologies=tuple(self.technologies.selected),
            additional_images=tuple(self.additional_images),
            demo_url=self.demo_url,
            repo_url=self.repo_url,
            created_at=self.created_at,
        )
