"""Application health flag."""

from dataclasses import dataclass


@dataclass
class HealthState:
    """Holds the externally controlled app-down flag."""

    is_app_down: bool = False

    def set_app_down(self, is_app_down: bool) -> None:
        """Mark the application as down (or back up)."""
        self.is_app_down = is_app_down

    def status(self) -> str:
        return "down" if self.is_app_down else "ok"
