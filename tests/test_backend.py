from __future__ import annotations

import json
from pathlib import Path

from PIL import Image

from ppe.backend import Backend
from ppe.form import ProjectForm
from ppe.local_refs import LocalRef


def test_backend_starts_with_seed_profile_and_defaults(backend: Backend) -> None:
    assert backend.store.profile.name == "Jane Developer"
    assert [record.id for record in backend.list_projects()] == ["1", "2"]
    assert "React" in backend.vocabularies["technologies"]
    assert backend.thumbnail_size == (150, 150)
    assert backend.initialization_warning is None


def test_unknown_project_id_opens_no_form(backend: Backend) -> None:
    assert backend.open_project_form("missing") is None


def test_edit_form_is_seeded_from_store(backend: Backend) -> None:
    form = backend.open_project_form("2")

    assert form is not None
    assert form.is_edit
    assert form.draft.title == "Task Management App"
    assert form.technologies.selected == ["Vue.js", "Firebase", "Tailwind CSS"]
    assert form.draft.image.startswith("https://")


def test_new_project_end_to_end(backend: Backend) -> None:
    form = backend.open_project_form()
    form.update_fields(title="Weather App", description="Forecasts")
    form.categories.set_query("mob")
    form.categories.select(form.categories.suggestions[0])
    form.technologies.set_query("Svelte Native")
    form.technologies.commit_free_text()
    form.select_files(["cover.png", "detail.png"])

    record = form.submit()

    assert record is not None
    assert backend.get_project(record.id) == record
    assert record.categories == ("Mobile Development",)
    assert record.technologies == ("Svelte Native",)
    assert record.image not in record.additional_images
    assert len(backend.registry) == 2


def test_replacing_and_removing_projects_release_dropped_images(backend: Backend) -> None:
    form = backend.open_project_form()
    form.update_fields(title="T", description="D")
    form.categories.select("Web Development")
    form.technologies.select("React")
    main, extra = form.select_files(["a.png", "b.png"])
    record = form.submit()

    edit = backend.open_project_form(record.id)
    edit.clear_image(str(extra.url))
    assert extra.url in backend.registry
    edit.submit()
    assert extra.url not in backend.registry
    assert main.url in backend.registry

    assert backend.remove_project(record.id)
    assert len(backend.registry) == 0


def test_cancelled_edit_keeps_stored_images(backend: Backend) -> None:
    form = backend.open_project_form()
    form.update_fields(title="T", description="D")
    form.categories.select("Web Development")
    form.technologies.select("React")
    form.select_files(["a.png"])
    record = form.submit()

    with backend.open_project_form(record.id) as edit:
        edit.clear_image()
        edit.select_files(["b.png"])
        assert len(backend.registry) == 2

    assert len(backend.registry) == 1
    assert backend.registry.resolve(record.image) == "a.png"


def test_cleanup_releases_everything(backend: Backend, workdir: Path) -> None:
    path = workdir / "pic.png"
    Image.new("RGB", (20, 20)).save(path)
    form = backend.open_project_form()
    (entry,) = form.select_files([str(path)])
    assert backend.get_cached_thumbnail(str(entry.url)) is not None

    backend.cleanup()

    assert len(backend.registry) == 0
    assert len(backend.thumbnails) == 0


def test_backend_reads_config_files(workdir: Path) -> None:
    (workdir / "config.json").write_text(
        json.dumps({"language": "fr", "thumbnail_size": "bad", "theme": "darkly"}), encoding="utf-8"
    )
    (workdir / "vocabularies.json").write_text(
        json.dumps({"categories": ["Games"], "technologies": ["Godot"]}), encoding="utf-8"
    )

    backend = Backend()

    assert backend.theme == "darkly"
    assert backend.thumbnail_size == (150, 150)
    assert backend.initialization_warning is not None
    assert backend.vocabularies == {"categories": ["Games"], "technologies": ["Godot"]}
    form = backend.open_project_form()
    assert form.categories.candidate_pool == ("Games",)


def _submit_new(backend: Backend, files: list[str]):
    form = backend.open_project_form()
    form.update_fields(title="T", description="D")
    form.categories.select("Web Development")
    form.technologies.select("React")
    entries = form.select_files(files)
    return form.submit(), entries


def test_stored_project_has_one_open_form_at_a_time(backend: Backend) -> None:
    first = backend.open_project_form("1")

    assert backend.open_project_form("1") is first
    assert backend.open_project_form("2") is not first

    first.cancel()
    second = backend.open_project_form("1")
    assert second is not first

    second.submit()
    assert backend.open_project_form("1") is not second


def test_new_project_forms_are_never_shared(backend: Backend) -> None:
    assert backend.open_project_form() is not backend.open_project_form()


def test_stale_form_does_not_store_released_reference(backend: Backend) -> None:
    record, (main, extra) = _submit_new(backend, ["a.png", "b.png"])
    current = backend.open_project_form(record.id)
    stale = ProjectForm(backend.store, backend.vocabularies, existing=record, registry=backend.registry)

    current.clear_image(str(extra.url))
    current.submit()
    assert extra.url not in backend.registry

    stored = stale.submit()

    assert stored is not None
    assert stored.image_urls() == [str(main.url)]
    for url in backend.get_project(record.id).image_urls():
        assert LocalRef.parse(url) in backend.registry


def test_cleanup_cancels_open_forms(backend: Backend) -> None:
    record, _ = _submit_new(backend, ["a.png"])
    edit = backend.open_project_form(record.id)
    edit.select_files(["b.png"])
    assert len(backend.registry) == 2

    backend.cleanup()

    assert edit.closed
    assert len(backend.registry) == 0
    assert backend.open_project_form(record.id) is not edit


def test_update_profile_changes_details_but_not_projects(backend: Backend) -> None:
    assert backend.update_profile(name="Sam Coder", projects={}, website="https://sam.dev")

    profile = backend.store.profile
    assert profile.name == "Sam Coder"
    assert profile.website == "https://sam.dev"
    assert len(profile.projects) == 2


def test_removing_project_cancels_its_open_form(backend: Backend) -> None:
    record, _ = _submit_new(backend, ["a.png"])
    edit = backend.open_project_form(record.id)
    edit.select_files(["b.png"])

    assert backend.remove_project(record.id)

    assert edit.closed
    assert len(backend.registry) == 0
    assert backend.open_project_form(record.id) is None
