from datetime import date

from contrib3d.services.interaction import BarHoverState
from contrib3d.services.interaction import HoverState
from contrib3d.services.normalizer import normalize_calendar
from contrib3d.services.scene import build_scene


def test_bar_starts_idle_without_tooltip() -> None:
    bar = BarHoverState(count=4, day=date(2024, 3, 1), color="#26a641")

    assert bar.state is HoverState.IDLE
    assert bar.tooltip is None
    assert bar.emissive == ("#000000", 0.0)


def test_pointer_enter_and_leave() -> None:
    bar = BarHoverState(count=4, day=date(2024, 3, 1), color="#26a641")

    bar.pointer_enter()
    tooltip = bar.tooltip

    assert bar.state is HoverState.HOVERED
    assert tooltip is not None
    assert (tooltip.count, tooltip.date) == (4, date(2024, 3, 1))
    assert tooltip.text == "4 contributions\n2024-03-01"
    assert bar.emissive == ("#26a641", 0.5)

    bar.pointer_leave()

    assert bar.state is HoverState.IDLE
    assert bar.tooltip is None


def test_hover_state_is_scoped_per_bar(calendar_payload) -> None:
    scene = build_scene(normalize_calendar(calendar_payload([1, 2, 3])), "octocat")
    first = scene.bars[0].hover_state()
    second = scene.bars[1].hover_state()

    first.pointer_enter()

    assert first.hovered
    assert not second.hovered


def test_hover_does_not_change_scene(calendar_payload) -> None:
    dataset = normalize_calendar(calendar_payload([1, 2, 3]))
    scene = build_scene(dataset, "octocat")
    before = scene.bars

    hover = scene.bars[2].hover_state()
    hover.pointer_enter()
    hover.pointer_leave()

    assert scene.bars == before
    assert build_scene(dataset, "octocat") == scene
