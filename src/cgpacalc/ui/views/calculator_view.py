import logging
from pathlib import Path
from typing import Callable

import flet as ft

from cgpacalc.config.settings import settings
from cgpacalc.core import document as ops
from cgpacalc.core.gpa import calculate_cgpa, calculate_sgpa, credits_text
from cgpacalc.core.grades import SCALE_LABELS, grade_options
from cgpacalc.core.models import Semester, Subject
from cgpacalc.services.storage import (
    INVALID_FORMAT,
    ImportFormatError,
    StorageError,
    export_to_file,
    load_into,
)
from cgpacalc.state.app_state import AppState

logger = logging.getLogger(__name__)


def build_calculator_view(page: ft.Page, app_state: AppState) -> ft.View:
    status = ft.Text(color=ft.Colors.RED_400)
    cgpa_text = ft.Text(size=56, weight=ft.FontWeight.BOLD, color=ft.Colors.WHITE)
    scale_text = ft.Text(color=ft.Colors.WHITE70)
    semesters_column = ft.Column(spacing=16)

    grade_system = ft.Dropdown(
        label="Grade System",
        width=260,
        value=app_state.document.grade_system,
        options=[ft.dropdown.Option(key, label) for key, label in SCALE_LABELS.items()],
    )

    def set_status(message: str, is_error: bool = True) -> None:
        status.value = message
        status.color = ft.Colors.RED_400 if is_error else ft.Colors.GREEN_400

    def refresh_cgpa() -> None:
        doc = app_state.document
        cgpa_text.value = calculate_cgpa(doc)
        scale_text.value = f"out of {doc.grade_system}"

    def subject_row(semester: Semester, subject: Subject, sgpa_text: ft.Text) -> ft.Row:
        def on_field(field_name: str) -> Callable:
            def handler(e: ft.ControlEvent) -> None:
                ops.update_subject(app_state.document, semester.id, subject.id, field_name, e.control.value or "")
                sgpa_text.value = calculate_sgpa(
                    ops.find_semester(app_state.document, semester.id), app_state.document.grade_system
                )
                refresh_cgpa()
                page.update()

            return handler

        def on_remove(_) -> None:
            ops.remove_subject(app_state.document, semester.id, subject.id)
            render()

        name = ft.TextField(
            value=subject.name,
            hint_text="Enter subject name",
            expand=True,
            on_change=on_field("name"),
        )
        credits = ft.TextField(
            value=credits_text(subject.credits),
            hint_text="Credits",
            width=110,
            keyboard_type=ft.KeyboardType.NUMBER,
            on_change=on_field("credits"),
        )
        grade = ft.Dropdown(
            value=subject.grade or None,
            hint_text="Select Grade",
            width=170,
            options=[ft.dropdown.Option(key, label) for key, label in grade_options(app_state.document.grade_system)],
            on_change=on_field("grade"),
        )
        controls = [name, credits, grade]
        if len(semester.subjects) > 1:
            controls.append(ft.IconButton(icon=ft.Icons.DELETE_OUTLINE, icon_color=ft.Colors.RED_400, on_click=on_remove))
        return ft.Row(controls=controls)

    def semester_card(semester: Semester) -> ft.Card:
        sgpa_text = ft.Text(
            calculate_sgpa(semester, app_state.document.grade_system),
            size=22,
            weight=ft.FontWeight.BOLD,
            color=ft.Colors.INDIGO_600,
        )

        def on_add_subject(_) -> None:
            ops.add_subject(app_state.document, semester.id)
            render()

        def on_remove_semester(_) -> None:
            ops.remove_semester(app_state.document, semester.id)
            render()

        def on_rename(e: ft.ControlEvent) -> None:
            ops.rename_semester(app_state.document, semester.id, e.control.value or "")

        header = [
            ft.TextField(
                value=semester.name,
                text_size=22,
                border=ft.InputBorder.NONE,
                expand=True,
                on_blur=on_rename,
                on_submit=on_rename,
            ),
            ft.Column(controls=[ft.Text("SGPA", size=12), sgpa_text], spacing=0),
        ]
        if len(app_state.document.semesters) > 1:
            header.append(ft.IconButton(icon=ft.Icons.DELETE, icon_color=ft.Colors.RED_400, on_click=on_remove_semester))

        rows = [subject_row(semester, sub, sgpa_text) for sub in semester.subjects]
        return ft.Card(
            content=ft.Container(
                padding=16,
                content=ft.Column(
                    controls=[
                        ft.Row(controls=header),
                        *rows,
                        ft.OutlinedButton("Add Subject", icon=ft.Icons.ADD, on_click=on_add_subject),
                    ]
                ),
            )
        )

    def render() -> None:
        semesters_column.controls = [semester_card(sem) for sem in app_state.document.semesters]
        grade_system.value = app_state.document.grade_system
        refresh_cgpa()
        page.update()

    def on_grade_system_change(e: ft.ControlEvent) -> None:
        ops.set_grade_system(app_state.document, e.control.value)
        render()

    def on_add_semester(_) -> None:
        ops.add_semester(app_state.document)
        render()

    def on_import_result(e: ft.FilePickerResultEvent) -> None:
        if not e.files:
            return
        path = e.files[0].path
        if not path:
            set_status("Import needs a local file.")
            page.update()
            return
        try:
            raw = Path(path).read_bytes()
            load_into(app_state, raw)
        except OSError as exc:
            logger.warning("Could not read %s: %s", path, exc)
            set_status(INVALID_FORMAT)
            page.update()
            return
        except ImportFormatError as exc:
            set_status(str(exc))
            page.update()
            return
        set_status("Data imported.", is_error=False)
        render()

    def on_export_result(e: ft.FilePickerResultEvent) -> None:
        try:
            if e.path:
                target = Path(e.path)
                saved = export_to_file(app_state.document, directory=target.parent, filename=target.name)
            else:
                saved = export_to_file(app_state.document)
        except StorageError as exc:
            logger.error("Export failed: %s", exc)
            set_status(f"Export failed: {exc}")
            page.update()
            return
        set_status(f"Saved to {saved}", is_error=False)
        page.update()

    import_picker = ft.FilePicker(on_result=on_import_result)
    export_picker = ft.FilePicker(on_result=on_export_result)
    page.overlay.extend([import_picker, export_picker])

    grade_system.on_change = on_grade_system_change

    toolbar = ft.Row(
        controls=[
            ft.Text("CGPA Calculator", size=30, weight=ft.FontWeight.BOLD, expand=True),
            ft.ElevatedButton(
                "Export",
                icon=ft.Icons.DOWNLOAD,
                on_click=lambda _: export_picker.save_file(file_name=settings.export_filename, allowed_extensions=["json"]),
            ),
            ft.ElevatedButton(
                "Import",
                icon=ft.Icons.UPLOAD,
                on_click=lambda _: import_picker.pick_files(allow_multiple=False, allowed_extensions=["json"]),
            ),
        ]
    )

    banner = ft.Container(
        padding=24,
        border_radius=16,
        bgcolor=ft.Colors.INDIGO_600,
        content=ft.Column(
            controls=[ft.Text("Your Overall CGPA", color=ft.Colors.WHITE), cgpa_text, scale_text],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
        ),
    )

    semesters_column.controls = [semester_card(sem) for sem in app_state.document.semesters]
    refresh_cgpa()

    return ft.View(
        route="/",
        scroll=ft.ScrollMode.AUTO,
        controls=[
            toolbar,
            grade_system,
            status,
            banner,
            semesters_column,
            ft.ElevatedButton("Add New Semester", icon=ft.Icons.ADD, on_click=on_add_semester),
        ],
    )
