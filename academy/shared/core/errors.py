"""Error taxonomy shared by the resource clients, session store and screens."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Operation(str, Enum):
    """Remote operations, each carrying its generic failure message."""

    LOGIN = "login"
    LOGOUT = "logout"
    CURRENT_USER = "current_user"

    LIST_MODULES = "list_modules"
    GET_MODULE = "get_module"
    GET_MODULE_BY_NUMBER = "get_module_by_number"
    CREATE_MODULE = "create_module"
    UPDATE_MODULE = "update_module"
    DELETE_MODULE = "delete_module"

    COMPLETE_LESSON = "complete_lesson"
    UNCOMPLETE_LESSON = "uncomplete_lesson"
    LESSON_STATUS = "lesson_status"
    COMPLETE_MODULE = "complete_module"

    FAVORITE_ADD = "favorite_add"
    FAVORITE_REMOVE = "favorite_remove"
    FAVORITE_CHECK = "favorite_check"
    FAVORITES_LIST = "favorites_list"

    PROFILE_GET = "profile_get"
    PROFILE_UPDATE = "profile_update"
    AVATAR_UPLOAD = "avatar_upload"
    EARNINGS_LIST = "earnings_list"
    EARNING_ADD = "earning_add"
    EARNING_DELETE = "earning_delete"
    LEADERBOARD = "leaderboard"

    ADMIN_LIST_USERS = "admin_list_users"
    ADMIN_ASSIGN_FACULTY = "admin_assign_faculty"
    ADMIN_TOGGLE_ADMIN = "admin_toggle_admin"

    @property
    def default_message(self) -> str:
        return DEFAULT_MESSAGES.get(self, "Request failed")


DEFAULT_MESSAGES: dict[Operation, str] = {
    Operation.LOGIN: "Login failed",
    Operation.LOGOUT: "Logout failed",
    Operation.CURRENT_USER: "Not authenticated",
    Operation.LIST_MODULES: "Failed to load modules",
    Operation.GET_MODULE: "Failed to load module",
    Operation.GET_MODULE_BY_NUMBER: "Failed to load module",
    Operation.CREATE_MODULE: "Failed to create module",
    Operation.UPDATE_MODULE: "Failed to update module",
    Operation.DELETE_MODULE: "Failed to delete module",
    Operation.COMPLETE_LESSON: "Failed to complete lesson",
    Operation.UNCOMPLETE_LESSON: "Failed to uncomplete lesson",
    Operation.LESSON_STATUS: "Failed to get lesson status",
    Operation.COMPLETE_MODULE: "Failed to complete module",
    Operation.FAVORITE_ADD: "Failed to add lesson to favorites",
    Operation.FAVORITE_REMOVE: "Failed to remove lesson from favorites",
    Operation.FAVORITE_CHECK: "Failed to check favorite status",
    Operation.FAVORITES_LIST: "Failed to load favorite lessons",
    Operation.PROFILE_GET: "Failed to fetch profile",
    Operation.PROFILE_UPDATE: "Failed to update profile",
    Operation.AVATAR_UPLOAD: "Failed to upload avatar",
    Operation.EARNINGS_LIST: "Failed to load earnings",
    Operation.EARNING_ADD: "Failed to add earning",
    Operation.EARNING_DELETE: "Failed to delete earning",
    Operation.LEADERBOARD: "Failed to fetch leaderboard",
    Operation.ADMIN_LIST_USERS: "Failed to load users",
    Operation.ADMIN_ASSIGN_FACULTY: "Failed to assign faculty",
    Operation.ADMIN_TOGGLE_ADMIN: "Failed to change admin rights",
}


class AcademyError(Exception):
    """Base class for every failure raised by the client layer."""


class Unauthenticated(AcademyError):
    """No token, or the server rejected the one we sent."""

    def __init__(self, message: str = "Not authenticated") -> None:
        super().__init__(message)
        self.message = message


class InvalidCredentials(AcademyError):
    """Login was rejected."""

    def __init__(self, message: str = "Login failed") -> None:
        super().__init__(message)
        self.message = message


class ValidationFailed(AcademyError):
    """User input rejected before any request was issued."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field


class RequestFailed(AcademyError):
    """Non-2xx response for a specific operation."""

    def __init__(
        self,
        operation: Operation,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        self.operation = operation
        self.message = message or operation.default_message
        self.status_code = status_code
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"RequestFailed({self.operation.value!r}, {self.message!r}, status={self.status_code})"


class NetworkUnavailable(AcademyError):
    """Transport-level failure, no response was received."""

    def __init__(self, operation: Operation, detail: str = "") -> None:
        self.operation = operation
        self.detail = detail
        self.message = f"{operation.default_message}: network unavailable"
        super().__init__(self.message)
