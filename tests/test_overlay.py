import pytest

from conftest import FakeSurface
from lsp_adapter.buffer import Position, ScreenPoint, Size
from lsp_adapter.completion import HintList
from lsp_adapter.errors import MalformedResponseError
from lsp_adapter.overlay import (
    ContextMenu,
    HoverText,
    MenuEntry,
    OverlayPresenter,
    Tooltip,
    TooltipSection,
    final_overlay_point,
    initial_overlay_point,
    normalize_hover_contents,
)


def make_tooltip(text: str = "doc", role: str = "hover") -> Tooltip:
    return Tooltip((TooltipSection(role, (text,)),))


def test_initial_point_is_one_line_above_target() -> None:
    assert initial_overlay_point(ScreenPoint(30, 50), 10) == ScreenPoint(30, 40)


def test_final_point_rests_bottom_edge_on_target_line() -> None:
    point = final_overlay_point(ScreenPoint(30, 50), Size(100, 20), 10)

    assert point == ScreenPoint(30, 30)


def test_final_point_flips_below_when_top_would_be_negative() -> None:
    point = final_overlay_point(ScreenPoint(30, 15), Size(100, 20), 10)

    assert point == ScreenPoint(30, 25)


def test_final_point_at_exact_top_does_not_flip() -> None:
    point = final_overlay_point(ScreenPoint(0, 20), Size(10, 20), 10)

    assert point == ScreenPoint(0, 0)


@pytest.mark.parametrize(
    ("contents", "expected"),
    [
        ("plain", HoverText("plain")),
        ({"kind": "markdown", "value": "**b**"}, HoverText("**b**", is_markup=True)),
        ({"kind": "plaintext", "value": "p"}, HoverText("p")),
        ({"language": "python", "value": "def f()"}, HoverText("def f()")),
        (["first", "second"], HoverText("first")),
        ([{"kind": "markdown", "value": "m"}], HoverText("m", is_markup=True)),
    ],
)
def test_normalize_hover_contents(contents: object, expected: HoverText) -> None:
    assert normalize_hover_contents(contents) == expected


@pytest.mark.parametrize("contents", [None, "", [], {"kind": "markdown", "value": ""}])
def test_normalize_empty_hover_contents(contents: object) -> None:
    assert normalize_hover_contents(contents) is None


@pytest.mark.parametrize("contents", [{"kind": "markdown"}, 12])
def test_normalize_rejects_malformed_hover_contents(contents: object) -> None:
    with pytest.raises(MalformedResponseError):
        normalize_hover_contents(contents)


def test_context_menu_choose_runs_matching_action() -> None:
    chosen: list[str] = []
    menu = ContextMenu(
        (
            MenuEntry("One", lambda: chosen.append("one")),
            MenuEntry("Two", lambda: chosen.append("two")),
        )
    )

    menu.choose("Two")

    assert chosen == ["two"]
    with pytest.raises(KeyError):
        menu.choose("Three")


def test_presenter_mounts_then_repositions_after_layout() -> None:
    surface = FakeSurface()
    presenter = OverlayPresenter(surface)

    presenter.show(make_tooltip(), ScreenPoint(20, 100))

    handle = surface.overlays[0]
    assert handle.point == ScreenPoint(20, 90)
    assert handle.moves == []

    surface.run_layout()

    assert handle.moves == [ScreenPoint(20, 70)]
    assert presenter.is_open


def test_presenter_keeps_a_single_overlay() -> None:
    surface = FakeSurface()
    presenter = OverlayPresenter(surface)

    presenter.show(make_tooltip("a"), ScreenPoint(0, 100))
    presenter.show(make_tooltip("b"), ScreenPoint(0, 100))

    first, second = surface.overlays
    assert first.removed
    assert not second.removed
    assert presenter.content == make_tooltip("b")

    surface.run_layout()

    assert first.moves == []
    assert len(second.moves) == 1


def test_presenter_skips_reposition_after_removal() -> None:
    surface = FakeSurface()
    presenter = OverlayPresenter(surface)

    presenter.show(make_tooltip(), ScreenPoint(0, 100))
    presenter.remove()
    surface.run_layout()

    assert surface.overlays[0].removed
    assert surface.overlays[0].moves == []
    assert not presenter.is_open
    assert presenter.content is None


def test_outside_click_closes_but_inside_click_does_not() -> None:
    surface = FakeSurface()
    presenter = OverlayPresenter(surface)
    presenter.show(make_tooltip(), ScreenPoint(0, 100))
    handle = surface.overlays[0]

    assert presenter.handle_outside_click(handle) is False
    assert presenter.is_open

    assert presenter.handle_outside_click("elsewhere") is True
    assert handle.removed
    assert presenter.handle_outside_click("elsewhere") is False


def test_presenter_hint_popup_and_dispose() -> None:
    surface = FakeSurface()
    presenter = OverlayPresenter(surface)
    hints = HintList(Position(0, 0), Position(0, 1), ())

    presenter.show_hints(hints)
    presenter.close_hints()
    presenter.close_hints()

    assert surface.hints == [hints]
    assert surface.hint_closes == 1
    assert not presenter.hints_open

    presenter.show(make_tooltip(), ScreenPoint(0, 100))
    presenter.dispose()

    assert surface.overlays[0].removed
    assert surface.hint_closes == 2
