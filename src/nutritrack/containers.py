"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutritrack.adapters.supabase_daily_log_repository import (
    SupabaseDailyLogRepository,
)
from nutritrack.adapters.supabase_profile_repository import SupabaseProfileRepository
from nutritrack.config import Settings
from nutritrack.services.cache import InMemoryCache
from nutritrack.services.dashboard import DashboardService
from nutritrack.services.profiles import ProfileService
from nutritrack.services.targets import TargetsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    targets_service: TargetsService
    dashboard_service: DashboardService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    targets_service = TargetsService(
        cache=InMemoryCache(),
        formula=resolved_settings.bmr_formula,
        ttl_seconds=resolved_settings.targets_cache_ttl_seconds,
        debug=resolved_settings.debug,
    )
    dashboard_service = DashboardService(
        profile_service=profile_service,
        targets_service=targets_service,
        log_repository=SupabaseDailyLogRepository(supabase_client),
        formula=resolved_settings.bmr_formula,
    )
    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        targets_service=targets_service,
        dashboard_service=dashboard_service,
    )
