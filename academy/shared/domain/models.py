"""Wire models for the course API.

Payloads are camelCase and Mongo-flavoured (``_id``); the models expose
snake_case attributes and accept either ``id`` or ``_id`` for identifiers.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

FavoriteKey = Tuple[str, int]


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


def _ensure_aware(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ============================================================================
# Identity
# ============================================================================


class User(ApiModel):
    """The authenticated learner as returned by ``/auth/*`` and ``/profile``."""

    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    email: str
    first_name: str = ""
    last_name: str = ""
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    faculty: Optional[str] = None
    is_admin: bool = False
    has_completed_sorting: bool = False
    has_accepted_rules: bool = False
    has_seen_welcome_modal: bool = False

    @field_validator("faculty", mode="before")
    @classmethod
    def _blank_faculty_is_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def display_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.email


class Session(BaseModel):
    """Authenticated identity plus the bearer credential it was issued with."""

    user: User
    token: str

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def faculty(self) -> Optional[str]:
        return self.user.faculty

    @property
    def is_admin(self) -> bool:
        return self.user.is_admin


# ============================================================================
# Course content
# ============================================================================


class Material(ApiModel):
    type: str = ""
    title: str = ""
    url: str = ""


class Lesson(ApiModel):
    number: int
    title: str
    video_url: str = ""
    description: str = ""
    materials: List[Material] = Field(default_factory=list)
    homework: str = ""
    duration: int = 0
    is_completed: bool = False


class Module(ApiModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    number: int
    title: str
    description: str = ""
    is_locked: bool = False
    unlock_date: Optional[datetime] = None
    lessons: List[Lesson] = Field(default_factory=list)
    progress: float = 0
    category: str = ""

    def lesson(self, number: int) -> Optional[Lesson]:
        for lesson in self.lessons:
            if lesson.number == number:
                return lesson
        return None


# ============================================================================
# Engagement
# ============================================================================


class FavoriteLesson(ApiModel):
    module_id: str
    module_number: int
    module_title: str = ""
    lesson_number: int
    lesson_title: str = ""
    video_url: str = ""
    description: str = ""
    duration: int = 0
    is_completed: bool = False
    added_at: Optional[datetime] = None

    @property
    def key(self) -> FavoriteKey:
        return (self.module_id, self.lesson_number)


class FavoritesPage(ApiModel):
    favorites: List[FavoriteLesson] = Field(default_factory=list)
    total: int = 0


class EarningRecord(ApiModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    amount: Decimal
    date: datetime
    description: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("date", "created_at")
    @classmethod
    def _aware_dates(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _ensure_aware(value)


class EarningsSummary(ApiModel):
    total_earnings: Decimal = Decimal("0")
    history: List[EarningRecord] = Field(default_factory=list)

    def sorted(self) -> "EarningsSummary":
        """Copy with history ordered newest first."""
        return self.model_copy(update={"history": sort_history(self.history)})


def sort_history(history: List[EarningRecord]) -> List[EarningRecord]:
    return sorted(history, key=lambda record: record.date, reverse=True)


class LeaderboardEntry(ApiModel):
    rank: int
    name: str
    earnings: Decimal = Decimal("0")
    is_current_user: bool = False


class ProfileStats(ApiModel):
    modules_completed: int = 0
    total_modules: int = 0
    lessons_completed: int = 0
    total_lessons: int = 0
    earnings: Decimal = Decimal("0")
    rank: int = 0


class ProfileResponse(ApiModel):
    user: User
    stats: ProfileStats = Field(default_factory=ProfileStats)


class AdminUser(ApiModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    email: str
    first_name: str = ""
    last_name: str = ""
    phone: Optional[str] = None
    faculty: Optional[str] = None
    is_admin: bool = False
    earnings: Decimal = Decimal("0")
    completed_lessons_count: int = 0
    completed_modules_count: int = 0


# ============================================================================
# Mutation results
# ============================================================================


class LessonCompletionResult(ApiModel):
    success: bool = True
    message: str = ""
    completed_lessons: int = 0
    # Present only when the server echoes the resulting state
    is_completed: Optional[bool] = None


class LessonStatus(ApiModel):
    is_completed: bool = False


class ModuleCompletionResult(ApiModel):
    success: bool = True
    message: str = ""
    completed_modules: int = 0


class FavoriteMutationResult(ApiModel):
    success: bool = True
    is_favorite: Optional[bool] = None
    lesson: Optional[Dict[str, Any]] = None


class AdminToggleResult(ApiModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    email: str = ""
    is_admin: bool


class AvatarUploadResult(ApiModel):
    success: bool = True
    avatar_url: str
    user: User
