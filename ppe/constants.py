"""Core constants for the Portfolio Project Editor backend."""

from typing import Any, Dict, List

CONFIG_FILE = "config.json"
VOCABULARIES_FILE = "vocabularies.json"
PROFILE_FILE = "profile.json"
LANG_DIR = "lang"
DEFAULT_LANG_CODE = "en"
DEFAULT_THEME = "flatly"
DEFAULT_LOG_LEVEL = "INFO"
APP_NAME = "Portfolio Project Editor"

LOCAL_REF_SCHEME = "local"

SUPPORTED_IMAGE_FORMATS = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp")

DEFAULT_THUMBNAIL_SIZE = (150, 150)
MAIN_THUMBNAIL_SIZE = (420, 300)

DEFAULT_LANG_KEYS: Dict[str, str] = {
    "critical_error_title": "Critical Error",
    "lang_load_error": (
        "Could not load language file '{lang_code}'. Ensure '{lang_code}.json' exists "
        "in the '{lang_dir}' folder or reinstall the application. Using default language."
    ),
    "lang_default_load_error": (
        "Could not load default language file ('{lang_code}.json'). Using built-in strings."
    ),
    "title_required": "Title is required",
    "description_required": "Description is required",
    "categories_required": "Select at least one category",
    "technologies_required": "Select at least one technology",
    "image_required": "At least one image is required",
}

DEFAULT_CATEGORIES: List[str] = [
    "Web Development",
    "Mobile Development",
    "Desktop Application",
    "Data Science",
    "Machine Learning",
    "DevOps",
    "Game Development",
    "E-commerce",
    "Productivity",
    "Education",
    "Open Source",
]

DEFAULT_TECHNOLOGIES: List[str] = [
    "React",
    "Redux",
    "Vue.js",
    "Angular",
    "Svelte",
    "TypeScript",
    "JavaScript",
    "Node.js",
    "Express",
    "Python",
    "Django",
    "Flask",
    "FastAPI",
    "GraphQL",
    "MongoDB",
    "PostgreSQL",
    "Firebase",
    "Docker",
    "Kubernetes",
    "Tailwind CSS",
]

DEFAULT_PROFILE: Dict[str, Any] = {
    "id": "1",
    "name": "Jane Developer",
    "bio": "Full-stack developer passionate about creating intuitive user experiences",
    "avatar": "https://images.unsplash.com/photo-1494790108377-be9c29b29330?auto=format&fit=crop&w=250&q=80",
    "location": "San Francisco, CA",
    "website": "https://janedeveloper.com",
    "github": "janedeveloper",
    "twitter": "janedeveloper",
    "linkedin": "janedeveloper",
    "skills": ["React", "TypeScript", "Node.js", "GraphQL"],
    "projects": [
        {
            "id": "1",
            "title": "E-commerce Platform",
            "description": (
                "A full-featured e-commerce platform with product management, cart, "
                "and checkout functionality."
            ),
            "image": "https://images.unsplash.com/photo-1557821552-17105176677c?auto=format&fit=crop&w=1350&q=80",
            "demo_url": "https://ecommerce-demo.com",
            "repo_url": "https://github.com/janedeveloper/ecommerce",
            "categories": ["Web Development", "E-commerce"],
            "technologies": ["React", "Node.js", "MongoDB", "Express"],
            "created_at": "2023-01-15T00:00:00Z",
        },
        {
            "id": "2",
            "title": "Task Management App",
            "description": "A productivity app for managing tasks, projects, and team collaboration.",
            "image": "https://images.unsplash.com/photo-1540350394557-8d14678e7f91?auto=format&fit=crop&w=1350&q=80",
            "demo_url": "https://taskmanager-demo.com",
            "repo_url": "https://github.com/janedeveloper/taskmanager",
            "categories": ["Web Development", "Productivity"],
            "technologies": ["Vue.js", "Firebase", "Tailwind CSS"],
            "created_at": "2023-03-22T00:00:00Z",
        },
    ],
}
