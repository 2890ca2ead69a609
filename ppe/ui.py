# ui.py
import logging
import sys
import tkinter as tk
from tkinter import filedialog, messagebox

import ttkbootstrap as ttk
from PIL import ImageTk

from . import config
from .backend import Backend
from .constants import APP_NAME, DEFAULT_LOG_LEVEL, MAIN_THUMBNAIL_SIZE, SUPPORTED_IMAGE_FORMATS
from .thumbnails import filter_image_paths

logger = logging.getLogger(__name__)


def is_within(widget, container):
    """Check whether a widget path lies inside a container path."""
    name = str(widget)
    root = str(container)
    return name == root or name.startswith(root.rstrip(".") + ".")


class TagInputWidget(ttk.Frame):
    """
    Chips for the selected tags, a query entry and a suggestion dropdown.

    All state lives in the wrapped TagInput; this widget only forwards
    events to it and redraws.
    """
    def __init__(self, parent, tag_input, placeholder=""):
        super().__init__(parent)
        self.tag_input = tag_input
        self.placeholder = placeholder
        self._syncing = False
        self.grid_columnconfigure(0, weight=1)

        self.chips_frame = ttk.Frame(self, relief="solid", borderwidth=1, padding=3)
        self.chips_frame.grid(row=0, column=0, sticky="ew")
        self.chips_frame.bind("<Button-1>", lambda e: self._on_open())

        self.query_var = tk.StringVar()
        self.query_var.trace_add("write", lambda *args: self._on_query_changed())
        self.entry = ttk.Entry(self.chips_frame, textvariable=self.query_var, width=18)
        self.entry.bind("<FocusIn>", lambda e: self._on_open())
        self.entry.bind("<KeyPress-Return>", self._on_key)
        self.entry.bind("<KeyPress-KP_Enter>", self._on_key)
        self.entry.bind("<KeyPress-BackSpace>", self._on_key)

        self.dropdown = tk.Listbox(self, height=6, exportselection=False)
        self.dropdown.bind("<ButtonRelease-1>", self._on_suggestion_click)

        self.refresh()

    def contains(self, widget):
        """Check whether a widget is inside this tag input."""
        return is_within(widget, self)

    def close_dropdown(self):
        if self.tag_input.is_open:
            self.tag_input.close()
            self._refresh_dropdown()

    # ====================== EVENTS ======================
    def _on_open(self):
        self.tag_input.open()
        self._refresh_dropdown()

    def _on_query_changed(self):
        if self._syncing:
            return
        self.tag_input.set_query(self.query_var.get())
        self._refresh_dropdown()

    def _on_key(self, event):
        # The engine expects the query as it is before the key takes effect
        self.tag_input.query = self.query_var.get()
        if self.tag_input.handle_key(event.keysym):
            self.refresh()
            return "break"
        return None

    def _on_suggestion_click(self, event):
        selection = self.dropdown.curselection()
        if not selection:
            return
        self.tag_input.select(self.dropdown.get(selection[0]))
        self.refresh()
        self.entry.focus_set()

    def _on_remove_chip(self, value):
        self.tag_input.remove(value)
        self.refresh()

    # ====================== DISPLAY ======================
    def refresh(self):
        """Redraw chips, entry text and dropdown from the tag input state."""
        for child in self.chips_frame.winfo_children():
            if child is not self.entry:
                child.destroy()

        column = 0
        for value in self.tag_input.selected:
            chip = ttk.Frame(self.chips_frame, bootstyle="info")
            chip.grid(row=0, column=column, padx=(0, 3), pady=1)
            ttk.Label(chip, text=value, bootstyle="inverse-info", padding=(4, 1)).grid(row=0, column=0)
            ttk.Button(
                chip, text="x", width=2, bootstyle="info",
                command=lambda v=value: self._on_remove_chip(v)
            ).grid(row=0, column=1)
            column += 1

        self.entry.grid(row=0, column=column, sticky="ew")
        self.chips_frame.grid_columnconfigure(column, weight=1)

        if self.query_var.get() != self.tag_input.query:
            self._syncing = True
            self.query_var.set(self.tag_input.query)
            self._syncing = False

        self._refresh_dropdown()

    def _refresh_dropdown(self):
        self.dropdown.delete(0, tk.END)
        if not self.tag_input.dropdown_visible:
            self.dropdown.grid_remove()
            return

        for option in self.tag_input.suggestions:
            self.dropdown.insert(tk.END, option)
        self.dropdown.grid(row=1, column=0, sticky="ew")


class ProjectEditor(ttk.Toplevel):
    """Editor window for one project form session."""
    def __init__(self, app, form):
        super().__init__(master=app)
        self.app = app
        self.backend = app.backend
        self.lang = app.lang
        self.form = form
        self._photos = []
        self.error_labels = {}

        title_key = "edit_project_title" if form.is_edit else "new_project_title"
        self.title(self.lang.get(title_key, "Edit Project" if form.is_edit else "Add New Project"))
        self.geometry("900x800")
        self.protocol("WM_DELETE_WINDOW", self.ui_cancel)
        self.bind("<Button-1>", self._on_click_anywhere, add="+")

        self._create_editor_gui()
        self.refresh_gallery()

    # ====================== GUI STRUCTURE ======================
    def _create_editor_gui(self):
        """Create the form fields, gallery and tag inputs."""
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        body = ttk.Frame(self, padding=10)
        body.grid(row=0, column=0, sticky="nsew")
        body.grid_columnconfigure(1, weight=1)

        draft = self.form.draft
        row = 0

        ttk.Label(body, text=self.lang.get("title_label", "Project Title *")).grid(row=row, column=0, sticky="nw", pady=2)
        self.title_var = tk.StringVar(value=draft.title)
        self.title_var.trace_add("write", lambda *args: self.form.update_fields(title=self.title_var.get()))
        ttk.Entry(body, textvariable=self.title_var).grid(row=row, column=1, sticky="ew", pady=2)
        row = self._add_error_label(body, "title", row + 1)

        ttk.Label(body, text=self.lang.get("description_label", "Project Description *")).grid(row=row, column=0, sticky="nw", pady=2)
        self.desc_text = tk.Text(body, height=5, wrap="word")
        self.desc_text.insert(tk.END, draft.description)
        self.desc_text.bind("<KeyRelease>", lambda e: self.form.update_fields(description=self.desc_text.get(1.0, tk.END).strip()))
        self.desc_text.grid(row=row, column=1, sticky="ew", pady=2)
        row = self._add_error_label(body, "description", row + 1)

        for field, label_key, default in (
            ("demo_url", "demo_url_label", "Demo URL"),
            ("repo_url", "repo_url_label", "Repository URL"),
        ):
            ttk.Label(body, text=self.lang.get(label_key, default)).grid(row=row, column=0, sticky="w", pady=2)
            var = tk.StringVar(value=getattr(draft, field))
            var.trace_add("write", lambda *args, f=field, v=var: self.form.update_fields(**{f: v.get()}))
            ttk.Entry(body, textvariable=var).grid(row=row, column=1, sticky="ew", pady=2)
            row += 1

        images_frame = ttk.LabelFrame(body, text=self.lang.get("images_label", "Project Images"), padding=5)
        images_frame.grid(row=row, column=0, columnspan=2, sticky="nsew", pady=(8, 2))
        images_frame.grid_columnconfigure(0, weight=1)
        self.main_image_frame = ttk.Frame(images_frame)
        self.main_image_frame.grid(row=0, column=0, sticky="ew")
        ttk.Button(
            images_frame,
            text=self.lang.get("add_images_button", "+ Add images"),
            command=self.ui_add_images,
            bootstyle="primary-outline"
        ).grid(row=1, column=0, sticky="w", pady=5)
        self.additional_frame = ttk.Frame(images_frame)
        self.additional_frame.grid(row=2, column=0, sticky="ew")
        row = self._add_error_label(body, "image", row + 1)

        self.tag_widgets = {}
        for field, label_key, default in (
            ("categories", "categories_label", "Categories *"),
            ("technologies", "technologies_label", "Technologies Used *"),
        ):
            ttk.Label(body, text=self.lang.get(label_key, default)).grid(row=row, column=0, sticky="nw", pady=2)
            widget = TagInputWidget(body, getattr(self.form, field))
            widget.grid(row=row, column=1, sticky="ew", pady=2)
            self.tag_widgets[field] = widget
            row = self._add_error_label(body, field, row + 1)

        buttons = ttk.Frame(self, padding=10)
        buttons.grid(row=1, column=0, sticky="e")
        ttk.Button(
            buttons, text=self.lang.get("cancel_button", "Cancel"),
            command=self.ui_cancel, bootstyle="secondary-outline"
        ).grid(row=0, column=0, padx=4)
        submit_key = "update_project_button" if self.form.is_edit else "add_project_button"
        ttk.Button(
            buttons,
            text=self.lang.get(submit_key, "Update Project" if self.form.is_edit else "Add Project"),
            command=self.ui_submit
        ).grid(row=0, column=1, padx=4)

    def _add_error_label(self, parent, field, row):
        label = ttk.Label(parent, text="", bootstyle="danger")
        label.grid(row=row, column=1, sticky="w")
        self.error_labels[field] = label
        return row + 1

    # ====================== GALLERY ======================
    def _thumbnail_label(self, parent, url, size):
        thumb = self.backend.get_cached_thumbnail(url, size)
        if thumb is None:
            return ttk.Label(parent, text=url, wraplength=size[0])
        photo = ImageTk.PhotoImage(thumb)
        self._photos.append(photo)
        label = ttk.Label(parent, image=photo)
        label.image = photo
        return label

    def refresh_gallery(self):
        """Redraw the main image and the additional image grid."""
        self._photos = []
        for frame in (self.main_image_frame, self.additional_frame):
            for child in frame.winfo_children():
                child.destroy()

        gallery = self.form.gallery
        main_url = gallery.main_url()
        if main_url:
            self._thumbnail_label(self.main_image_frame, main_url, MAIN_THUMBNAIL_SIZE).grid(row=0, column=0, sticky="w")
            ttk.Label(self.main_image_frame, text=self.lang.get("main_badge", "Main"), bootstyle="inverse-primary").grid(row=0, column=1, sticky="nw", padx=5)
            ttk.Button(
                self.main_image_frame, text="x", width=2, bootstyle="danger-outline",
                command=lambda: self._on_clear_image(None)
            ).grid(row=0, column=2, sticky="ne")
        elif len(gallery):
            ttk.Label(
                self.main_image_frame,
                text=self.lang.get("no_main_image", "No main image selected. Pick one below."),
                bootstyle="warning"
            ).grid(row=0, column=0, sticky="w")
        else:
            ttk.Label(
                self.main_image_frame,
                text=self.lang.get("no_images", "No images yet. PNG, JPG, GIF, BMP or WEBP.")
            ).grid(row=0, column=0, sticky="w")

        max_cols = 3
        for index, url in enumerate(gallery.additional_urls()):
            cell = ttk.Frame(self.additional_frame, relief="groove", borderwidth=1, padding=3)
            cell.grid(row=index // max_cols, column=index % max_cols, padx=3, pady=3, sticky="nsew")
            self._thumbnail_label(cell, url, self.backend.thumbnail_size).grid(row=0, column=0, columnspan=2)
            ttk.Button(
                cell, text=self.lang.get("set_main_button", "Main"), bootstyle="primary-link",
                command=lambda u=url: self._on_set_main(u)
            ).grid(row=1, column=0, sticky="w")
            ttk.Button(
                cell, text="x", width=2, bootstyle="danger-outline",
                command=lambda u=url: self._on_clear_image(u)
            ).grid(row=1, column=1, sticky="e")

    def _on_set_main(self, url):
        self.form.set_main_image(url)
        self.refresh_gallery()

    def _on_clear_image(self, url):
        self.form.clear_image(url)
        self.refresh_gallery()

    def ui_add_images(self):
        """Pick one or more images and add them to the gallery."""
        patterns = " ".join(f"*{ext}" for ext in SUPPORTED_IMAGE_FORMATS)
        paths = filedialog.askopenfilenames(
            title=self.lang.get("select_images", "Select Images"),
            filetypes=[
                (self.lang.get("image_files", "Image Files"), patterns),
                (self.lang.get("all_files", "All Files"), "*.*")
            ],
            parent=self
        )
        if not paths:
            return

        accepted, rejected = filter_image_paths(paths)
        if rejected:
            messagebox.showwarning(
                self.lang.get("warning", "Warning"),
                self.lang.get("load_errors", "Some files are not supported images:\n") + "\n".join(rejected[:5]),
                parent=self
            )
        self.form.select_files(accepted)
        self.refresh_gallery()

    # ====================== TAG INPUTS ======================
    def _on_click_anywhere(self, event):
        for widget in self.tag_widgets.values():
            if not widget.contains(event.widget):
                widget.close_dropdown()

    # ====================== SUBMIT / CANCEL ======================
    def _show_errors(self, errors):
        for field, label in self.error_labels.items():
            label.config(text=errors.get(field, ""))

    def ui_submit(self):
        """Validate the form and store the project."""
        record = self.form.submit()
        self._show_errors(self.form.errors)
        if record is None:
            return
        self.app.refresh_project_list()
        self._close_window()

    def ui_cancel(self):
        """Discard the draft and close the editor."""
        self.form.cancel()
        self._close_window()

    def _close_window(self):
        if self.form.existing is not None:
            self.app.editors.pop(self.form.existing.id, None)
        self.destroy()


class ProfileEditor(ttk.Toplevel):
    """Small dialog for the profile name, bio and links."""
    FIELDS = (
        ("name", "Name"),
        ("bio", "Bio"),
        ("location", "Location"),
        ("website", "Website"),
        ("github", "GitHub"),
    )

    def __init__(self, app):
        super().__init__(master=app)
        self.app = app
        self.lang = app.lang
        self.title(self.lang.get("profile_title", "Edit Profile"))
        self.grid_columnconfigure(1, weight=1)

        profile = app.backend.store.profile
        self.vars = {}
        for row, (field, default) in enumerate(self.FIELDS):
            ttk.Label(self, text=self.lang.get(f"profile_{field}_label", default)).grid(row=row, column=0, sticky="w", padx=5, pady=2)
            var = tk.StringVar(value=getattr(profile, field))
            ttk.Entry(self, textvariable=var, width=40).grid(row=row, column=1, sticky="ew", padx=5, pady=2)
            self.vars[field] = var

        buttons = ttk.Frame(self, padding=5)
        buttons.grid(row=len(self.FIELDS), column=0, columnspan=2, sticky="e")
        ttk.Button(buttons, text=self.lang.get("cancel_button", "Cancel"), command=self.destroy, bootstyle="secondary").grid(row=0, column=0, padx=2)
        ttk.Button(buttons, text=self.lang.get("save_button", "Save"), command=self.ui_save).grid(row=0, column=1, padx=2)

    def ui_save(self):
        self.app.backend.update_profile(**{field: var.get().strip() for field, var in self.vars.items()})
        self.app.refresh_project_list()
        self.destroy()


class App(ttk.Window):
    """
    Main application window for the Portfolio Project Editor.

    Lists the projects on the profile and opens editor windows to add or
    change them.
    """
    def __init__(self, themename=None):
        """Initialize the application and its backend."""
        try:
            backend = Backend()
        except Exception as e:
            logger.exception("Backend initialization failed")
            messagebox.showerror("Startup Error", f"Failed to initialize application:\n{e}")
            sys.exit(1)

        super().__init__(themename=themename or backend.theme)
        self.backend = backend
        self.lang = backend.lang
        self.editors = {}

        if backend.initialization_error:
            messagebox.showwarning(
                self.lang.get("critical_error_title", "Critical Error"),
                backend.initialization_error
            )
        elif backend.initialization_warning:
            messagebox.showwarning(self.lang.get("warning", "Warning"), backend.initialization_warning)

        self.title(self.lang.get("app_title", APP_NAME))
        self.geometry("900x500")

        self._create_main_gui()
        self.protocol("WM_DELETE_WINDOW", self._on_app_close)
        self.refresh_project_list()

    # ====================== WINDOW LIFECYCLE ======================
    def _on_app_close(self):
        """Handle application closing: cleanup and destroy."""
        self.backend.cleanup()
        self.destroy()

    # ====================== MAIN GUI STRUCTURE ======================
    def _create_main_gui(self):
        """Create the toolbar and the project list."""
        self.grid_rowconfigure(1, weight=1)
        self.grid_columnconfigure(0, weight=1)

        top_frame = ttk.Frame(self, padding="5 5 5 5")
        top_frame.grid(row=0, column=0, sticky="ew")
        top_frame.grid_columnconfigure(4, weight=1)

        ttk.Button(
            top_frame, text=self.lang.get("new_project_button", "+ Project"),
            command=self.ui_add_new_project
        ).grid(row=0, column=0, padx=1)
        ttk.Button(
            top_frame, text=self.lang.get("edit_project_button", "Edit"),
            command=self.ui_edit_selected_project
        ).grid(row=0, column=1, padx=1)
        ttk.Button(
            top_frame, text=self.lang.get("remove_project_button", "Delete"),
            command=self.ui_remove_selected_project, bootstyle="danger-outline"
        ).grid(row=0, column=2, padx=1)
        ttk.Button(
            top_frame, text=self.lang.get("profile_button", "Profile"),
            command=self.ui_edit_profile
        ).grid(row=0, column=3, padx=1)

        self.profile_label_var = tk.StringVar()
        ttk.Label(top_frame, textvariable=self.profile_label_var, anchor="e").grid(row=0, column=4, sticky="e")

        columns = ("title", "categories", "technologies", "images")
        self.project_tree = ttk.Treeview(self, columns=columns, show="headings", selectmode="browse")
        for column, default in zip(columns, ("Title", "Categories", "Technologies", "Images")):
            self.project_tree.heading(column, text=self.lang.get(f"column_{column}", default))
        self.project_tree.column("images", width=60, anchor="center")
        self.project_tree.grid(row=1, column=0, sticky="nsew", padx=5, pady=5)
        self.project_tree.bind("<Double-Button-1>", lambda e: self.ui_edit_selected_project())

    def refresh_project_list(self):
        """Reload the project list from the store."""
        self.project_tree.delete(*self.project_tree.get_children())
        for record in self.backend.list_projects():
            self.project_tree.insert(
                "", tk.END, iid=record.id,
                values=(
                    record.title,
                    ", ".join(record.categories),
                    ", ".join(record.technologies),
                    len(record.image_urls()),
                )
            )
        profile = self.backend.store.profile
        self.profile_label_var.set(f"{profile.name} ({len(profile.projects)})")

    def _selected_project_id(self):
        selection = self.project_tree.selection()
        return selection[0] if selection else None

    # ====================== ACTIONS ======================
    def ui_add_new_project(self):
        """Open an editor for a new project."""
        ProjectEditor(self, self.backend.open_project_form())

    def ui_edit_selected_project(self):
        """Open an editor for the selected project."""
        project_id = self._selected_project_id()
        if project_id is None:
            return
        editor = self.editors.get(project_id)
        if editor is not None and editor.winfo_exists():
            editor.lift()
            editor.focus_set()
            return
        form = self.backend.open_project_form(project_id)
        if form is None:
            messagebox.showwarning(
                self.lang.get("warning", "Warning"),
                self.lang.get("project_not_found", "That project no longer exists."),
                parent=self
            )
            self.refresh_project_list()
            return
        self.editors[project_id] = ProjectEditor(self, form)

    def ui_edit_profile(self):
        """Open the profile details dialog."""
        ProfileEditor(self)

    def ui_remove_selected_project(self):
        """Remove the selected project after confirmation."""
        project_id = self._selected_project_id()
        if project_id is None:
            return
        if messagebox.askyesno(
            self.lang.get("confirm_delete", "Confirm Deletion"),
            self.lang.get("confirm_remove_project", "Remove selected project?"),
            parent=self
        ):
            editor = self.editors.get(project_id)
            if editor is not None and editor.winfo_exists():
                editor.ui_cancel()
            self.backend.remove_project(project_id)
            self.refresh_project_list()


def main():
    """Configure logging and run the editor."""
    level = str(config.load_main_config().get("log_level", DEFAULT_LOG_LEVEL)).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    App().mainloop()
