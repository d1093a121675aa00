"""Live-editing state machine for an IDL editing session.

The session state is an immutable ``EditorState`` value. It only changes
through ``transition(state, action, composer)``, which keeps the rules about
clean and dirty schemas in one place:

- ``clean`` is the last schema that composed; a failed composition never
  replaces it.
- ``dirty_schema`` is composed from the current buffer and silently dropped
  while the buffer does not compose.
- ``dirty`` tracks whether the buffer differs from the last saved text.

``EditorSession`` drives the state machine against a running server with an
``httpx.AsyncClient``:

    async with EditorSession("http://localhost:9002", "petstore") as session:
        await session.initialize()
        session.edit("type Query { pets: [String] }")
        await session.save()
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable

import httpx
from graphql import GraphQLSchema

from .composer import SchemaComposer
from .errors import CompositionError
from .models import UserIDL

logger = logging.getLogger(__name__)

SAVED_STATUS = "Saved!"
UNSAVED_CHANGES_PROMPT = "You have unsaved changes. Exit?"


class View(Enum):
    EDITOR = "editor"
    CONSOLE = "console"


@dataclass(frozen=True)
class EditorState:
    """Snapshot of an editing session."""

    value: str | None = None
    cached_value: str | None = None
    clean: GraphQLSchema | None = None
    dirty_schema: GraphQLSchema | None = None
    dirty: bool = False
    error: str | None = None
    status: str | None = None
    active_view: View = View.EDITOR
    edit_mode: bool = False
    # Base schema IDL in extension mode; never saved.
    base_idl: str | None = None
    pending_save: str | None = None
    save_seq: int = 0

    @property
    def extension_mode(self) -> bool:
        return self.base_idl is not None

    @property
    def console_schema(self) -> GraphQLSchema | None:
        """Schema the query console is fed with."""
        return self.dirty_schema or self.clean

    @property
    def console_enabled(self) -> bool:
        return self.clean is not None

    @property
    def needs_leave_confirmation(self) -> bool:
        return self.dirty


# Actions


@dataclass(frozen=True)
class Loaded:
    schema_idl: str
    extension_idl: str | None = None
    edit_mode: bool = True


@dataclass(frozen=True)
class Edited:
    text: str


@dataclass(frozen=True)
class SaveRequested:
    pass


@dataclass(frozen=True)
class SaveSucceeded:
    text: str


@dataclass(frozen=True)
class SaveFailed:
    message: str


@dataclass(frozen=True)
class StatusCleared:
    pass


@dataclass(frozen=True)
class ViewSwitched:
    view: View


Action = Loaded | Edited | SaveRequested | SaveSucceeded | SaveFailed | StatusCleared | ViewSwitched


def _compose(composer: SchemaComposer, state: EditorState, text: str) -> GraphQLSchema:
    return composer.compose(text, state.base_idl)


def transition(state: EditorState, action: Action, composer: SchemaComposer) -> EditorState:
    """Return the state that follows ``action``."""
    if isinstance(action, Loaded):
        value = action.extension_idl or action.schema_idl
        state = replace(
            state,
            value=value,
            cached_value=value,
            base_idl=action.schema_idl if action.extension_idl else None,
            edit_mode=action.edit_mode,
            active_view=View.EDITOR if action.edit_mode else View.CONSOLE,
            dirty=False,
            dirty_schema=None,
            error=None,
        )
        # Initial load is best-effort: no error is surfaced.
        try:
            return replace(state, clean=_compose(composer, state, value))
        except CompositionError:
            return state

    if isinstance(action, Edited):
        changes: dict[str, Any] = {}
        try:
            dirty_schema = _compose(composer, state, action.text)
        except CompositionError as e:
            dirty_schema = None
            if state.error:
                changes["error"] = e.message
        else:
            # A shown error is refreshed live; fixing the buffer clears it.
            if state.error:
                changes.update(clean=dirty_schema, error=None)
        return replace(
            state,
            value=action.text,
            dirty=action.text != state.cached_value,
            dirty_schema=dirty_schema,
            **changes,
        )

    if isinstance(action, SaveRequested):
        if not state.dirty:
            return state
        try:
            schema = _compose(composer, state, state.value)
        except CompositionError as e:
            return replace(state, error=e.message)
        return replace(
            state,
            clean=schema,
            error=None,
            pending_save=state.value,
            save_seq=state.save_seq + 1,
        )

    if isinstance(action, SaveSucceeded):
        pending = None if state.pending_save == action.text else state.pending_save
        if action.text != state.value:
            # Stale confirmation: the buffer changed while the save was in flight.
            return replace(state, pending_save=pending)
        return replace(
            state,
            cached_value=action.text,
            dirty=False,
            dirty_schema=None,
            error=None,
            status=SAVED_STATUS,
            pending_save=pending,
        )

    if isinstance(action, SaveFailed):
        return replace(state, error=action.message, pending_save=None)

    if isinstance(action, StatusCleared):
        return replace(state, status=None)

    if isinstance(action, ViewSwitched):
        if action.view is View.CONSOLE and not state.console_enabled:
            return state
        if action.view is View.EDITOR and not state.edit_mode:
            return state
        return replace(state, active_view=action.view)

    raise TypeError(f"Unknown editor action: {action!r}")


class EditorSession:
    """An editing session for one schema slot on a gql-faker server.

    Args:
        base_url: Server root URL
        schema_name: Schema slot to edit; empty for the default slot
        composer: Composer shared with the server
        client: Optional preconfigured ``httpx.AsyncClient``
        headers: Extra headers sent with every request
        status_delay: Seconds before the "Saved!" status clears
    """

    def __init__(
        self,
        base_url: str,
        schema_name: str | None = None,
        composer: SchemaComposer | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        headers: dict[str, str] | None = None,
        status_delay: float = 2.0,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.schema_name = schema_name or ""
        self.composer = composer or SchemaComposer()
        self.status_delay = status_delay
        self.state = EditorState()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url, headers=headers, timeout=timeout
        )
        self._status_task: asyncio.Task | None = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def dispatch(self, action: Action) -> EditorState:
        self.state = transition(self.state, action, self.composer)
        return self.state

    def _endpoint(self, prefix: str) -> str:
        return f"{prefix}/{self.schema_name}" if self.schema_name else prefix

    async def initialize(self, fallback_to_default: bool = True) -> EditorState:
        """Fetch the slot's IDL and compose it.

        A missing schema falls back to the default slot, or with
        ``fallback_to_default=False`` starts the slot from an empty document.
        """
        response = await self._client.get(self._endpoint("/user-idl"))
        if response.status_code == 404 and self.schema_name:
            logger.error('Schema "%s" not found...', self.schema_name)
            if not fallback_to_default:
                return self.dispatch(Loaded(schema_idl=""))
            logger.info("Falling back to the default schema")
            self.schema_name = ""
            response = await self._client.get(self._endpoint("/user-idl"))
        response.raise_for_status()

        payload = UserIDL.model_validate(response.json())
        return self.dispatch(
            Loaded(
                schema_idl=payload.schema_idl,
                extension_idl=payload.extension_idl,
                edit_mode=payload.edit_mode is not False,
            )
        )

    def edit(self, text: str) -> EditorState:
        return self.dispatch(Edited(text))

    def switch_view(self, view: View) -> EditorState:
        return self.dispatch(ViewSwitched(view))

    async def save(self) -> bool:
        """Validate and persist the buffer.

        Returns:
            True if the server accepted the text
        """
        previous_seq = self.state.save_seq
        self.dispatch(SaveRequested())
        if self.state.save_seq == previous_seq:
            return False

        text = self.state.pending_save
        try:
            response = await self._client.post(
                self._endpoint("/user-idl"),
                content=text.encode("utf-8"),
                headers={"Content-Type": "text/plain"},
            )
        except httpx.HTTPError as e:
            self.dispatch(SaveFailed(str(e) or e.__class__.__name__))
            return False

        if not response.is_success:
            self.dispatch(SaveFailed(response.text))
            return False

        self.dispatch(SaveSucceeded(text))
        if self.state.status == SAVED_STATUS:
            self._schedule_status_clear()
        return True

    async def fetch_graphql(self, params: dict[str, Any]) -> dict[str, Any]:
        """Send a GraphQL request for this slot, as the query console does."""
        response = await self._client.post(self._endpoint("/graphql"), json=params)
        return response.json()

    def close(self, confirm: Callable[[str], bool] | None = None) -> bool:
        """Ask to end the session.

        While there are unsaved changes ``confirm`` is called with a prompt;
        without a confirmation the session stays open.

        Returns:
            True if the session may be closed
        """
        if not self.state.needs_leave_confirmation:
            return True
        return bool(confirm and confirm(UNSAVED_CHANGES_PROMPT))

    async def aclose(self):
        """Release the HTTP client and pending timers."""
        if self._status_task is not None:
            self._status_task.cancel()
            self._status_task = None
        if self._owns_client:
            await self._client.aclose()

    def _schedule_status_clear(self):
        if self._status_task is not None:
            self._status_task.cancel()
        self._status_task = asyncio.get_running_loop().create_task(self._clear_status_later())

    async def _clear_status_later(self):
        await asyncio.sleep(self.status_delay)
        self.dispatch(StatusCleared())
