"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from diet_manager.config import Settings
from diet_manager.containers import AppContainer
from diet_manager.domain.foods import DEFAULT_SERVING_SIZE, Food
from diet_manager.domain.meals import MealLogEntry
from diet_manager.domain.models import ROLE_ADMIN, ROLE_USER, UserRecord
from diet_manager.domain.nutrition import MacroProfile
from diet_manager.domain.plans import DietPlan
from diet_manager.domain.profiles import Profile, parse_goal
from diet_manager.domain.progress import WeightEntry
from diet_manager.domain.stats import DailyTotals
from diet_manager.services.admin import AdminService
from diet_manager.services.clock import Clock
from diet_manager.services.foods import FoodRepository, FoodService
from diet_manager.services.meals import MealLogRepository, MealLogService
from diet_manager.services.plans import PlanRepository, PlanService
from diet_manager.services.profiles import ProfileRepository, ProfileService
from diet_manager.services.progress import ProgressService, WeightRepository
from diet_manager.services.totals import TotalsRepository, TotalsService
from diet_manager.services.users import UserRepository, UserService

# A Wednesday; the surrounding Monday-start week begins 2024-01-08.
FIXED_NOW = datetime(2024, 1, 10, 12, 0, tzinfo=UTC)


@dataclass
class FixedClock(Clock):
    """Clock pinned to a settable instant."""

    current: datetime = FIXED_NOW

    def now(self) -> datetime:
        return self.current


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)

    def get_by_token(self, api_token: str) -> UserRecord | None:
        return next(
            (user for user in self.users.values() if user.api_token == api_token),
            None,
        )

    def get_by_email(self, email: str) -> UserRecord | None:
        return next(
            (user for user in self.users.values() if user.email == email), None
        )

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def create_user(self, email: str, role: str, api_token: str) -> UserRecord:
        user = UserRecord(
            id=uuid4(),
            email=email,
            role=role,
            api_token=api_token,
            created_at=datetime.now(tz=UTC),
        )
        self.users[user.id] = user
        return user

    def list_users(self) -> list[UserRecord]:
        return list(reversed(self.users.values()))


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, Profile] = field(default_factory=dict)

    def get_profile(self, user_id: UUID) -> Profile | None:
        return self.profiles.get(user_id)

    def upsert_profile(self, user_id: UUID, payload: dict[str, object]) -> Profile:
        profile = self.profiles.get(user_id) or Profile(
            user_id=user_id, age=None, height=None, weight=None
        )
        changes = dict(payload)
        if "goal" in changes:
            changes["goal"] = parse_goal(changes["goal"])
        profile = replace(profile, **changes)
        self.profiles[user_id] = profile
        return profile

    def update_weight(self, user_id: UUID, weight: float) -> None:
        profile = self.profiles.get(user_id)
        if profile is not None:
            self.profiles[user_id] = replace(profile, weight=weight)


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food catalog for tests."""

    foods: dict[UUID, Food] = field(default_factory=dict)

    def add(self, name: str, macros: MacroProfile, category: str = "other") -> Food:
        food = Food(
            id=uuid4(),
            name=name,
            calories=macros.calories,
            protein_g=macros.protein_g,
            carbs_g=macros.carbs_g,
            fat_g=macros.fat_g,
            category=category,
        )
        self.foods[food.id] = food
        return food

    def create_food(self, payload: dict[str, object]) -> Food:
        values = dict(payload)
        created_by = values.pop("created_by", None)
        food = Food(
            id=uuid4(),
            created_by=UUID(str(created_by)) if created_by else None,
            serving_size=str(values.pop("serving_size", DEFAULT_SERVING_SIZE)),
            **values,
        )
        self.foods[food.id] = food
        return food

    def get_food(self, food_id: UUID) -> Food | None:
        return self.foods.get(food_id)

    def get_foods(self, food_ids: list[UUID]) -> list[Food]:
        return [self.foods[food_id] for food_id in food_ids if food_id in self.foods]

    def list_foods(
        self, category: str | None, search: str | None, limit: int
    ) -> list[Food]:
        foods = sorted(self.foods.values(), key=lambda food: food.name)
        if category:
            foods = [food for food in foods if food.category == category]
        if search:
            foods = [food for food in foods if search.lower() in food.name.lower()]
        return foods[:limit]

    def update_food(self, food_id: UUID, payload: dict[str, object]) -> Food | None:
        food = self.foods.get(food_id)
        if food is None:
            return None
        food = replace(food, **payload)
        self.foods[food_id] = food
        return food

    def delete_food(self, food_id: UUID) -> bool:
        return self.foods.pop(food_id, None) is not None


@dataclass
class InMemoryMealLogRepository(MealLogRepository, TotalsRepository):
    """In-memory meal logs plus the daily totals derived from them."""

    logs: dict[UUID, MealLogEntry] = field(default_factory=dict)
    totals: dict[tuple[UUID, date], DailyTotals] = field(default_factory=dict)
    upserts: list[DailyTotals] = field(default_factory=list)

    def create_meal_log(  # noqa: PLR0913
        self,
        user_id: UUID,
        food_id: UUID,
        quantity: float,
        meal_type: str,
        logged_at: datetime,
        macros: MacroProfile,
    ) -> MealLogEntry:
        entry = MealLogEntry(
            id=uuid4(),
            user_id=user_id,
            food_id=food_id,
            quantity=quantity,
            meal_type=meal_type,
            logged_at=logged_at,
            calories=macros.calories,
            protein_g=macros.protein_g,
            carbs_g=macros.carbs_g,
            fat_g=macros.fat_g,
        )
        self.logs[entry.id] = entry
        return entry

    def get_meal_log(self, meal_log_id: UUID) -> MealLogEntry | None:
        return self.logs.get(meal_log_id)

    def update_meal_log(
        self, meal_log_id: UUID, payload: dict[str, object]
    ) -> MealLogEntry:
        entry = replace(self.logs[meal_log_id], **payload)
        self.logs[meal_log_id] = entry
        return entry

    def delete_meal_log(self, meal_log_id: UUID) -> None:
        self.logs.pop(meal_log_id, None)

    def list_meal_logs(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealLogEntry]:
        return sorted(
            (
                log
                for log in self.logs.values()
                if log.user_id == user_id and start <= log.logged_at < end
            ),
            key=lambda log: log.logged_at,
        )

    def list_recent_meal_logs(self, user_id: UUID, limit: int) -> list[MealLogEntry]:
        logs = [log for log in self.logs.values() if log.user_id == user_id]
        return sorted(logs, key=lambda log: log.logged_at, reverse=True)[:limit]

    def get_daily_totals(self, user_id: UUID, day: date) -> DailyTotals | None:
        return self.totals.get((user_id, day))

    def upsert_daily_totals(self, totals: DailyTotals) -> DailyTotals:
        self.totals[(totals.user_id, totals.day)] = totals
        self.upserts.append(totals)
        return totals

    def list_daily_totals(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyTotals]:
        return sorted(
            (
                totals
                for (owner, day), totals in self.totals.items()
                if owner == user_id and start <= day <= end
            ),
            key=lambda totals: totals.day,
        )


@dataclass
class InMemoryPlanRepository(PlanRepository):
    """In-memory diet plans for tests."""

    plans: dict[UUID, DietPlan] = field(default_factory=dict)

    def create_plan(self, plan: DietPlan) -> DietPlan:
        stored = replace(plan, created_at=plan.created_at or datetime.now(tz=UTC))
        self.plans[stored.id] = stored
        return stored

    def save_plan(self, plan: DietPlan) -> DietPlan:
        self.plans[plan.id] = plan
        return plan

    def get_plan(self, plan_id: UUID) -> DietPlan | None:
        return self.plans.get(plan_id)

    def list_plans(self, user_id: UUID) -> list[DietPlan]:
        plans = reversed(self.plans.values())
        return [plan for plan in plans if plan.user_id == user_id]

    def get_active_plan(self, user_id: UUID) -> DietPlan | None:
        return next(
            (
                plan
                for plan in self.plans.values()
                if plan.user_id == user_id and plan.is_active
            ),
            None,
        )

    def deactivate_plans(self, user_id: UUID, keep: UUID | None = None) -> None:
        for plan_id, plan in list(self.plans.items()):
            if plan.user_id == user_id and plan_id != keep:
                self.plans[plan_id] = replace(plan, is_active=False)

    def delete_plan(self, plan_id: UUID) -> None:
        self.plans.pop(plan_id, None)


@dataclass
class InMemoryWeightRepository(WeightRepository):
    """In-memory weight entries for tests."""

    entries: dict[UUID, WeightEntry] = field(default_factory=dict)

    def create_weight(
        self, user_id: UUID, value: float, measured_at: datetime, notes: str | None
    ) -> WeightEntry:
        entry = WeightEntry(
            id=uuid4(), user_id=user_id, value=value, date=measured_at, notes=notes
        )
        self.entries[entry.id] = entry
        return entry

    def get_weight(self, entry_id: UUID) -> WeightEntry | None:
        return self.entries.get(entry_id)

    def update_weight(self, entry_id: UUID, payload: dict[str, object]) -> WeightEntry:
        entry = replace(self.entries[entry_id], **payload)
        self.entries[entry_id] = entry
        return entry

    def delete_weight(self, entry_id: UUID) -> None:
        self.entries.pop(entry_id, None)

    def list_weights(self, user_id: UUID) -> list[WeightEntry]:
        entries = [entry for entry in self.entries.values() if entry.user_id == user_id]
        return sorted(entries, key=lambda entry: entry.date)

    def list_recent_weights(self, user_id: UUID, limit: int) -> list[WeightEntry]:
        return list(reversed(self.list_weights(user_id)))[:limit]

    def list_weights_between(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[WeightEntry]:
        return [
            entry
            for entry in self.list_weights(user_id)
            if start <= entry.date < end
        ]


def make_user(role: str = ROLE_USER) -> UserRecord:
    """Build a user record that is not stored anywhere."""
    return UserRecord(
        id=uuid4(), email=f"{uuid4().hex[:8]}@example.com", role=role, api_token="t"
    )


def make_admin() -> UserRecord:
    return make_user(ROLE_ADMIN)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def meal_log_repository() -> InMemoryMealLogRepository:
    return InMemoryMealLogRepository()


@pytest.fixture
def totals_service(
    meal_log_repository: InMemoryMealLogRepository, clock: FixedClock
) -> TotalsService:
    return TotalsService(repository=meal_log_repository, clock=clock)


@pytest.fixture
def food_service(food_repository: InMemoryFoodRepository) -> FoodService:
    return FoodService(food_repository)


@pytest.fixture
def profile_service() -> ProfileService:
    return ProfileService(InMemoryProfileRepository())


@pytest.fixture
def meal_log_service(
    meal_log_repository: InMemoryMealLogRepository,
    food_service: FoodService,
    totals_service: TotalsService,
) -> MealLogService:
    return MealLogService(
        repository=meal_log_repository,
        food_service=food_service,
        totals_service=totals_service,
    )


@pytest.fixture
def plan_service(
    food_service: FoodService, profile_service: ProfileService
) -> PlanService:
    return PlanService(
        repository=InMemoryPlanRepository(),
        food_service=food_service,
        profile_service=profile_service,
    )


@pytest.fixture
def progress_service(
    profile_service: ProfileService, totals_service: TotalsService
) -> ProgressService:
    return ProgressService(
        repository=InMemoryWeightRepository(),
        profile_service=profile_service,
        totals_service=totals_service,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    food_service: FoodService,
    profile_service: ProfileService,
    totals_service: TotalsService,
    meal_log_service: MealLogService,
    plan_service: PlanService,
    progress_service: ProgressService,
) -> AppContainer:
    user_service = UserService(InMemoryUserRepository())
    return AppContainer(
        settings=settings,
        user_service=user_service,
        profile_service=profile_service,
        food_service=food_service,
        totals_service=totals_service,
        meal_log_service=meal_log_service,
        plan_service=plan_service,
        progress_service=progress_service,
        admin_service=AdminService(
            user_service=user_service,
            totals_service=totals_service,
            meal_log_service=meal_log_service,
            progress_service=progress_service,
        ),
    )
