"""View state of the schedule window and the transitions between states.

The window never mutates state directly: every user action or backend event is
an action object passed through :func:`reduce`, which returns a new state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Optional, Tuple, Union

from ..domain import ScheduleEntry, UserAccount, ViewMonth
from ..domain.calendar import to_date_key


class Phase(str, Enum):
    LOADING = "loading"
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class EntryForm:
    title: str = ""
    date: str = ""
    time: str = ""
    notes: str = ""

    def cleared(self) -> "EntryForm":
        """Keep the date, drop everything typed for the previous entry."""

        return EntryForm(date=self.date)

    def as_fields(self) -> dict[str, str]:
        return {"title": self.title, "date": self.date, "time": self.time, "notes": self.notes}


@dataclass(frozen=True)
class ViewState:
    phase: Phase = Phase.LOADING
    user: Optional[UserAccount] = None
    entries: Tuple[ScheduleEntry, ...] = ()
    view_month: ViewMonth = field(default_factory=ViewMonth.current)
    selected_date: Optional[str] = None
    modal_open: bool = False
    editing_entry_id: Optional[str] = None
    form: EntryForm = field(default_factory=EntryForm)

    @property
    def is_editing(self) -> bool:
        return self.editing_entry_id is not None

    def find_entry(self, entry_id: str) -> Optional[ScheduleEntry]:
        return next((entry for entry in self.entries if entry.id == entry_id), None)


# ---------------------------------------------------------------------- actions


@dataclass(frozen=True)
class AuthChanged:
    user: Optional[UserAccount]


@dataclass(frozen=True)
class EntriesLoaded:
    entries: Tuple[ScheduleEntry, ...]


@dataclass(frozen=True)
class SelectDay:
    key: str


@dataclass(frozen=True)
class EditEntry:
    entry_id: str


@dataclass(frozen=True)
class UpdateForm:
    name: str
    value: str


@dataclass(frozen=True)
class SubmitSucceeded:
    pass


@dataclass(frozen=True)
class CancelEdit:
    pass


@dataclass(frozen=True)
class CloseModal:
    pass


@dataclass(frozen=True)
class EntryDeleted:
    entry_id: str


@dataclass(frozen=True)
class PrevMonth:
    pass


@dataclass(frozen=True)
class NextMonth:
    pass


@dataclass(frozen=True)
class GoToday:
    today: Optional[date] = None


Action = Union[
    AuthChanged,
    EntriesLoaded,
    SelectDay,
    EditEntry,
    UpdateForm,
    SubmitSucceeded,
    CancelEdit,
    CloseModal,
    EntryDeleted,
    PrevMonth,
    NextMonth,
    GoToday,
]

_FORM_FIELDS = ("title", "date", "time", "notes")


def _reset_form(state: ViewState) -> ViewState:
    return replace(state, editing_entry_id=None, form=EntryForm(date=state.selected_date or ""))


def reduce(state: ViewState, action: Action) -> ViewState:
    if isinstance(action, AuthChanged):
        if action.user is None:
            return ViewState(phase=Phase.UNAUTHENTICATED, view_month=state.view_month)
        if state.user is not None and state.user.id != action.user.id:
            return ViewState(phase=Phase.AUTHENTICATED, user=action.user, view_month=state.view_month)
        return replace(state, phase=Phase.AUTHENTICATED, user=action.user)

    if isinstance(action, EntriesLoaded):
        return replace(state, entries=tuple(action.entries))

    if isinstance(action, SelectDay):
        return replace(
            state,
            selected_date=action.key,
            modal_open=True,
            editing_entry_id=None,
            form=EntryForm(date=action.key),
        )

    if isinstance(action, EditEntry):
        entry = state.find_entry(action.entry_id)
        if entry is None:
            return state
        return replace(
            state,
            selected_date=entry.date,
            modal_open=True,
            editing_entry_id=entry.id,
            form=EntryForm(title=entry.title, date=entry.date, time=entry.time, notes=entry.notes),
        )

    if isinstance(action, UpdateForm):
        if action.name not in _FORM_FIELDS:
            raise ValueError(f"Unknown form field {action.name!r}")
        return replace(state, form=replace(state.form, **{action.name: action.value}))

    if isinstance(action, SubmitSucceeded):
        return replace(state, editing_entry_id=None, form=state.form.cleared())

    if isinstance(action, CancelEdit):
        return _reset_form(state)

    if isinstance(action, CloseModal):
        return replace(state, modal_open=False, editing_entry_id=None, form=state.form.cleared())

    if isinstance(action, EntryDeleted):
        if state.editing_entry_id == action.entry_id:
            return _reset_form(state)
        return state

    if isinstance(action, PrevMonth):
        return replace(state, view_month=state.view_month.shift(-1))

    if isinstance(action, NextMonth):
        return replace(state, view_month=state.view_month.shift(1))

    if isinstance(action, GoToday):
        today = action.today or date.today()
        key = to_date_key(today)
        return replace(
            state,
            view_month=ViewMonth.from_date(today),
            selected_date=key,
            form=replace(state.form, date=key),
        )

    raise TypeError(f"Unsupported action: {action!r}")


# ---------------------------------------------------------------------- submissions


@dataclass(frozen=True)
class CreateCommand:
    fields: dict


@dataclass(frozen=True)
class UpdateCommand:
    entry_id: str
    fields: dict


def submission(state: ViewState) -> Optional[Union[CreateCommand, UpdateCommand]]:
    """The write the current form would produce, or ``None`` if it is incomplete."""

    form = state.form
    if not form.title.strip() or not form.date:
        return None
    fields = form.as_fields()
    if state.editing_entry_id is not None:
        return UpdateCommand(entry_id=state.editing_entry_id, fields=fields)
    return CreateCommand(fields=fields)
