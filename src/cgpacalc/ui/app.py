import flet as ft

from cgpacalc.state.app_state import AppState
from cgpacalc.ui.views.calculator_view import build_calculator_view


def main(page: ft.Page) -> None:
    page.title = "CGPA Calculator"
    page.theme_mode = ft.ThemeMode.LIGHT

    app_state = AppState()

    def route_change(_: ft.RouteChangeEvent) -> None:
        page.views.clear()
        page.views.append(build_calculator_view(page, app_state))
        page.update()

    page.on_route_change = route_change
    page.go("/")
