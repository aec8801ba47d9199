from pathlib import Path

import pytest

from contrib3d.errors import NoSurfaceMountedError
from contrib3d.render.surface import MatplotlibSurface
from contrib3d.render.surface import camera_angles
from contrib3d.services.contributions_service import ContributionsSession
from contrib3d.services.exporter import capture_frame
from contrib3d.services.exporter import export_snapshot
from contrib3d.services.exporter import save_to_directory
from contrib3d.services.exporter import snapshot_filename
from contrib3d.services.normalizer import normalize_calendar
from contrib3d.services.scene import build_scene


PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class FakeSurface:
    def __init__(self) -> None:
        self.scene = None
        self.captures = 0

    @property
    def mounted(self) -> bool:
        return self.scene is not None

    def mount(self, scene) -> None:
        self.scene = scene

    def unmount(self) -> None:
        self.scene = None

    def capture_frame(self) -> bytes:
        self.captures += 1
        return b"frame"


def test_snapshot_filename_uses_username() -> None:
    assert snapshot_filename("octocat") == "octocat_contributions_3d.png"


def test_capture_without_surface_raises() -> None:
    with pytest.raises(NoSurfaceMountedError):
        capture_frame(None)

    with pytest.raises(NoSurfaceMountedError):
        capture_frame(FakeSurface())


def test_export_without_surface_is_a_noop() -> None:
    saved: list[tuple[str, bytes]] = []

    result = export_snapshot(None, "octocat", lambda name, data: saved.append((name, data)))

    assert result is None
    assert saved == []


def test_export_hands_frame_to_save_action(calendar_payload) -> None:
    surface = FakeSurface()
    surface.mount(build_scene(normalize_calendar(calendar_payload([1, 2])), "octocat"))
    saved: list[tuple[str, bytes]] = []

    result = export_snapshot(surface, "octocat", lambda name, data: saved.append((name, data)))

    assert result == "octocat_contributions_3d.png"
    assert saved == [("octocat_contributions_3d.png", b"frame")]
    assert surface.captures == 1


def test_session_export_without_dataset_does_not_raise() -> None:
    surface = FakeSurface()
    saved: list[tuple[str, bytes]] = []

    result = ContributionsSession().export(surface, lambda name, data: saved.append((name, data)))

    assert result is None
    assert saved == []
    assert surface.captures == 0


def test_save_to_directory_writes_file(tmp_path: Path) -> None:
    save = save_to_directory(tmp_path / "out")

    save("octocat_contributions_3d.png", b"png-bytes")

    assert (tmp_path / "out" / "octocat_contributions_3d.png").read_bytes() == b"png-bytes"


def test_matplotlib_surface_renders_png(calendar_payload) -> None:
    dataset = normalize_calendar(calendar_payload([0, 1, 5, 12, 3, 0, 8, 2, 9]))
    surface = MatplotlibSurface(width=320, height=240, dpi=80)

    with pytest.raises(NoSurfaceMountedError):
        surface.capture_frame()

    surface.mount(build_scene(dataset, "octocat"))
    image = surface.capture_frame()

    assert image.startswith(PNG_SIGNATURE)

    surface.unmount()
    assert not surface.mounted


def test_camera_angles_look_down_from_the_front() -> None:
    elevation, azimuth = camera_angles((0.0, 26.0, 36.4))

    assert 0 < elevation < 90
    assert azimuth == pytest.approx(90.0)


def test_session_export_mounts_current_scene(calendar_payload) -> None:
    session = ContributionsSession()
    session.resolve(session.begin("octocat"), calendar_payload([2, 0, 7]))
    surface = FakeSurface()
    saved: list[tuple[str, bytes]] = []

    result = session.export(surface, lambda name, data: saved.append((name, data)))

    assert result == "octocat_contributions_3d.png"
    assert saved == [("octocat_contributions_3d.png", b"frame")]
    assert surface.scene == session.scene()
