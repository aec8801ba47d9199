from dataclasses import asdict

from fastapi import APIRouter
from fastapi import HTTPException
from fastapi import Query
from fastapi import Response
from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials

from contrib3d.api.schemas.contributions import BarSchema
from contrib3d.api.schemas.contributions import CameraSchema
from contrib3d.api.schemas.contributions import ContributionDay
from contrib3d.api.schemas.contributions import ContributionsResponse
from contrib3d.api.schemas.contributions import PlaneSchema
from contrib3d.api.schemas.contributions import SceneResponse
from contrib3d.api.schemas.contributions import StatsSchema
from contrib3d.core.security import bearer_scheme
from contrib3d.core.security import extract_optional_bearer_token
from contrib3d.errors import ConfigurationError
from contrib3d.errors import ContributionsError
from contrib3d.errors import EmptyDatasetError
from contrib3d.errors import MalformedPayloadError
from contrib3d.errors import NoSurfaceMountedError
from contrib3d.errors import ProviderError
from contrib3d.errors import TransportError
from contrib3d.models import CalendarDataset
from contrib3d.render.surface import MatplotlibSurface
from contrib3d.services.contributions_service import github_fetcher
from contrib3d.services.contributions_service import load_contributions
from contrib3d.services.exporter import capture_frame
from contrib3d.services.exporter import snapshot_filename
from contrib3d.services.scene import Scene
from contrib3d.services.scene import build_scene
from contrib3d.settings import Settings


router = APIRouter()


def error_to_http(exc: ContributionsError, username: str) -> HTTPException:
    """Map a typed contributions failure onto an HTTP error response."""

    if isinstance(exc, ConfigurationError):
        return HTTPException(
            status_code=500, detail="Server configuration error: Missing GitHub token."
        )
    if isinstance(exc, TransportError):
        status_code = exc.status_code if exc.status_code in {401, 403, 404} else 502
        return HTTPException(status_code=status_code, detail=str(exc))
    if isinstance(exc, ProviderError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, EmptyDatasetError):
        return HTTPException(
            status_code=404,
            detail=(
                f"No contribution data found for {username}. The user might not "
                "exist or has no public contributions in the last year."
            ),
        )
    if isinstance(exc, MalformedPayloadError):
        return HTTPException(
            status_code=502, detail="Unexpected contribution data from GitHub"
        )
    return HTTPException(status_code=500, detail="Contribution request failed")


async def fetch_dataset(
    username: str, credentials: HTTPAuthorizationCredentials | None
) -> CalendarDataset:
    token = extract_optional_bearer_token(credentials)
    try:
        return await load_contributions(username, github_fetcher(Settings(), token))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Username is required") from exc
    except ContributionsError as exc:
        raise error_to_http(exc, username) from exc


def scene_to_response(scene: Scene) -> SceneResponse:
    return SceneResponse(
        username=scene.username,
        title=scene.title,
        total_count=scene.total_count,
        week_count=scene.week_count,
        stats=StatsSchema(**asdict(scene.stats)),
        camera=CameraSchema(**asdict(scene.camera)),
        plane=PlaneSchema(**asdict(scene.plane)),
        bars=[
            BarSchema(
                column=bar.column,
                row=bar.row,
                position=bar.position,
                center_y=bar.center_y,
                height=bar.height,
                color_bucket=bar.color_bucket,
                color=bar.color,
                count=bar.count,
                date=bar.date,
            )
            for bar in scene.bars
        ],
    )


@router.get("/")
async def root() -> dict[str, str]:
    """Return a basic service greeting."""

    return {"message": "Hello World"}


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


@router.get("/api/github-contributions", response_model=ContributionsResponse)
async def get_contributions(
    username: str | None = Query(default=None),
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
) -> ContributionsResponse:
    """Return the flattened contribution calendar for a GitHub user."""

    if not username or not username.strip():
        raise HTTPException(status_code=400, detail="Username is required")

    dataset = await fetch_dataset(username, credentials)
    return ContributionsResponse(
        contributions=[
            ContributionDay(
                contribution_count=day.count, date=day.date, weekday=day.weekday
            )
            for day in dataset.days
        ],
        total_contributions=dataset.total_count,
        weeks=dataset.week_count,
    )


@router.get("/contributions/{username}/scene", response_model=SceneResponse)
async def get_scene(
    username: str,
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
) -> SceneResponse:
    """Return render-ready bars, camera framing and stats for a user."""

    dataset = await fetch_dataset(username, credentials)
    return scene_to_response(build_scene(dataset, username.strip()))


@router.get("/contributions/{username}/snapshot.png")
async def get_snapshot(
    username: str,
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
) -> Response:
    """Render a still image of a user's contribution scene as a PNG download."""

    dataset = await fetch_dataset(username, credentials)
    username = username.strip()

    settings = Settings()
    surface = MatplotlibSurface(
        width=settings.snapshot_width,
        height=settings.snapshot_height,
        dpi=settings.snapshot_dpi,
    )
    surface.mount(build_scene(dataset, username))
    try:
        image = capture_frame(surface)
    except NoSurfaceMountedError as exc:
        raise HTTPException(status_code=409, detail="Nothing to export") from exc
    finally:
        surface.unmount()

    return Response(
        content=image,
        media_type="image/png",
        headers={
            "Content-Disposition": f'attachment; filename="{snapshot_filename(username)}"'
        },
    )
