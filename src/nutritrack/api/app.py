"""FastAPI application factory."""

import logging
from dataclasses import asdict
from datetime import UTC, datetime
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import FastAPI, HTTPException, Request, status

from nutritrack.api.models import (
    BmiRequest,
    BmrRequest,
    EnergyBalanceRequest,
    IdealWeightRequest,
    NutritionPayload,
    ProgressRequest,
    TargetsRequest,
    TdeeRequest,
)
from nutritrack.app_logging import configure_logging
from nutritrack.containers import AppContainer
from nutritrack.services.dashboard import DailySummary
from nutritrack.services.energy import (
    BmrFormula,
    calculate_bmr,
    calculate_bmr_harris_benedict,
    calculate_energy_balance,
    calculate_tdee,
    get_activity_multiplier,
)
from nutritrack.services.profiles import ProfileNotFoundError
from nutritrack.services.progress import (
    calculate_bmi,
    calculate_ideal_weight_range,
    calculate_macro_percentages,
    calculate_progress,
    format_calories,
)
from nutritrack.services.targets import calculate_daily_targets


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/calculations/bmr")
    async def bmr(payload: BmrRequest) -> dict[str, object]:
        """Return BMR for body metrics with the selected formula."""
        if payload.formula == BmrFormula.HARRIS_BENEDICT:
            value = calculate_bmr_harris_benedict(
                payload.weight_kg, payload.height_cm, payload.age, payload.gender
            )
        else:
            value = calculate_bmr(
                payload.weight_kg, payload.height_cm, payload.age, payload.gender
            )
        return {"bmr": value, "formula": payload.formula}

    @app.post("/calculations/tdee")
    async def tdee(payload: TdeeRequest) -> dict[str, float]:
        return {
            "multiplier": get_activity_multiplier(payload.activity_level),
            "tdee": calculate_tdee(payload.bmr, payload.activity_level),
        }

    @app.post("/calculations/targets")
    async def targets(payload: TargetsRequest, request: Request) -> dict[str, object]:
        """Return daily targets for a profile and goal context."""
        state_container: AppContainer = request.app.state.container
        result = calculate_daily_targets(
            payload.to_domain(),
            payload.to_goals(),
            state_container.settings.bmr_formula,
        )
        return result.to_dict()

    @app.post("/calculations/energy-balance")
    async def energy_balance(
        payload: EnergyBalanceRequest, request: Request
    ) -> dict[str, object]:
        """Return the day's energy balance."""
        state_container: AppContainer = request.app.state.container
        balance = calculate_energy_balance(
            payload.to_domain(),
            calories_consumed=payload.calories_consumed,
            targets=payload.to_targets(),
            exercises=[exercise.to_domain() for exercise in payload.exercises],
            steps=payload.steps,
            formula=state_container.settings.bmr_formula,
        )
        return asdict(balance)

    @app.post("/calculations/macros")
    async def macros(payload: NutritionPayload) -> dict[str, int]:
        return asdict(calculate_macro_percentages(payload.to_domain()))

    @app.post("/calculations/progress")
    async def progress(payload: ProgressRequest) -> dict[str, object]:
        return asdict(calculate_progress(payload.current, payload.target.to_domain()))

    @app.post("/calculations/bmi")
    async def bmi(payload: BmiRequest) -> dict[str, object]:
        return asdict(calculate_bmi(payload.weight_kg, payload.height_cm))

    @app.post("/calculations/ideal-weight")
    async def ideal_weight(payload: IdealWeightRequest) -> dict[str, int]:
        return asdict(calculate_ideal_weight_range(payload.height_cm))

    @app.post("/users/{user_id}/targets")
    async def refresh_user_targets(
        user_id: UUID, request: Request
    ) -> dict[str, object]:
        """Recompute a user's targets from their profile and store them."""
        state_container: AppContainer = request.app.state.container
        try:
            resolved = state_container.profile_service.get_resolved(
                user_id, datetime.now(tz=UTC).date()
            )
        except ProfileNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        result = state_container.targets_service.refresh_targets(
            resolved.biometrics, resolved.goals
        )
        state_container.profile_service.store_targets(user_id, result)
        logger.info("Stored daily targets for user %s", user_id)
        return result.to_dict()

    @app.get("/users/{user_id}/dashboard")
    async def dashboard(
        user_id: UUID, request: Request, timezone: str | None = None
    ) -> dict[str, object]:
        """Return today's summary in the requested timezone."""
        state_container: AppContainer = request.app.state.container
        timezone_name = timezone or state_container.settings.default_timezone
        try:
            ZoneInfo(timezone_name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown timezone: {timezone_name}",
            ) from exc
        try:
            summary = state_container.dashboard_service.get_today(
                user_id, timezone_name
            )
        except ProfileNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
            ) from exc
        return _format_summary(summary)

    return app


def _format_summary(summary: DailySummary) -> dict[str, object]:
    return {
        "day": summary.day.isoformat(),
        "consumed": asdict(summary.consumed),
        "targets": summary.targets.to_dict(),
        "energy_balance": asdict(summary.energy_balance),
        "macro_split": asdict(summary.macro_split),
        "progress": {name: asdict(item) for name, item in summary.progress.items()},
        "steps": summary.steps,
        "water_ml": summary.water_ml,
        "remaining_label": format_calories(summary.energy_balance.remaining_quota),
        "balance_description": summary.balance_description,
    }
