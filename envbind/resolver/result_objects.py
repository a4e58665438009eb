"""
Result objects for resolver operations.
"""

from dataclasses import dataclass
from typing import Any, Optional

from envbind.core.enums import ResolutionStatus
from envbind.core.exceptions import (
    CacheDisabledError, EnvbindError, MissingVariableError, ReloadError
)

_ERRORS = {
    ResolutionStatus.UNDEFINED: MissingVariableError,
    ResolutionStatus.CACHE_DISABLED: CacheDisabledError,
    ResolutionStatus.RELOAD_FAILED: ReloadError,
}


@dataclass
class Resolution:
    """
    Outcome of a resolver operation.

    `success` tells whether `value` is meaningful; on failure
    `error_message` names the variable and the reason. `source` is the
    binding id the value came from, or "cache"/"default"/"explicit"/"none".
    """
    success: bool
    status: ResolutionStatus
    value: Any = None
    source: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def ok(cls, value: Any, status: ResolutionStatus = ResolutionStatus.RESOLVED,
           source: Optional[str] = None) -> "Resolution":
        return cls(success=True, status=status, value=value, source=source)

    @classmethod
    def error(cls, status: ResolutionStatus, message: str) -> "Resolution":
        return cls(success=False, status=status, error_message=message)

    @property
    def is_error(self) -> bool:
        return not self.success

    def unwrap(self) -> Any:
        """
        Return the value, raising on failure.

        Raises:
            MissingVariableError, CacheDisabledError, ReloadError
        """
        if self.success:
            return self.value
        error_class = _ERRORS.get(self.status, EnvbindError)
        raise error_class(self.error_message)

    def __bool__(self):
        return self.success
