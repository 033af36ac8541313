from __future__ import annotations

from dataclasses import dataclass, field

from ..services import AuthService, ScheduleService, ServiceContext


@dataclass(slots=True)
class ApiState:
    context: ServiceContext = field(default_factory=ServiceContext)
    auth: AuthService = field(init=False)
    schedule: ScheduleService = field(init=False)

    def __post_init__(self) -> None:
        self.auth = AuthService(self.context)
        self.schedule = ScheduleService(self.context)

    def reset(self, context: ServiceContext) -> None:
        """Swap in a new context, dropping the previous session and subscription."""

        self.schedule.stop_listening()
        self.context = context
        self.__post_init__()


api_state = ApiState()
