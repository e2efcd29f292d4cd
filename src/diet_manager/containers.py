"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from diet_manager.adapters.supabase_food_repository import SupabaseFoodRepository
from diet_manager.adapters.supabase_meal_log_repository import (
    SupabaseMealLogRepository,
)
from diet_manager.adapters.supabase_plan_repository import SupabasePlanRepository
from diet_manager.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from diet_manager.adapters.supabase_totals_repository import (
    SupabaseTotalsRepository,
)
from diet_manager.adapters.supabase_user_repository import SupabaseUserRepository
from diet_manager.adapters.supabase_weight_repository import (
    SupabaseWeightRepository,
)
from diet_manager.config import Settings
from diet_manager.services.admin import AdminService
from diet_manager.services.clock import SystemClock
from diet_manager.services.foods import FoodService
from diet_manager.services.meals import MealLogService
from diet_manager.services.plans import PlanService
from diet_manager.services.profiles import ProfileService
from diet_manager.services.progress import ProgressService
from diet_manager.services.totals import TotalsService
from diet_manager.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    profile_service: ProfileService
    food_service: FoodService
    totals_service: TotalsService
    meal_log_service: MealLogService
    plan_service: PlanService
    progress_service: ProgressService
    admin_service: AdminService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_service = UserService(SupabaseUserRepository(supabase_client))
    profile_service = ProfileService(SupabaseProfileRepository(supabase_client))
    food_service = FoodService(SupabaseFoodRepository(supabase_client))
    totals_service = TotalsService(
        repository=SupabaseTotalsRepository(supabase_client),
        clock=SystemClock(),
        timezone_name=resolved_settings.timezone,
    )
    meal_log_service = MealLogService(
        repository=SupabaseMealLogRepository(supabase_client),
        food_service=food_service,
        totals_service=totals_service,
    )
    plan_service = PlanService(
        repository=SupabasePlanRepository(supabase_client),
        food_service=food_service,
        profile_service=profile_service,
    )
    progress_service = ProgressService(
        repository=SupabaseWeightRepository(supabase_client),
        profile_service=profile_service,
        totals_service=totals_service,
    )
    admin_service = AdminService(
        user_service=user_service,
        totals_service=totals_service,
        meal_log_service=meal_log_service,
        progress_service=progress_service,
    )
    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        profile_service=profile_service,
        food_service=food_service,
        totals_service=totals_service,
        meal_log_service=meal_log_service,
        plan_service=plan_service,
        progress_service=progress_service,
        admin_service=admin_service,
    )
