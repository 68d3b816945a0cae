"""The story engine: drives a simulation from a command script.

The engine is a small state machine::

    AWAITING_COMMAND -> DISPATCHING -> SUCCESS | RECOVERED_ERROR -> AWAITING_COMMAND
                                                                  \\-> DONE

Every command is processed independently. A StoryError raised anywhere
inside a command is caught at the dispatch boundary and becomes exactly one
output line; the run always continues with the next command. Only a bad
script header (ScriptFormatError) stops a run, and it does so before any
command is processed.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from itertools import islice
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from fantasy_story.core.config import Settings, get_settings
from fantasy_story.core.exceptions import (
    ErrorKind,
    MalformedCommandError,
    ScriptFormatError,
    StoryError,
    UnknownCommandError,
)
from fantasy_story.core.logging import bind_context, clear_context, get_logger
from fantasy_story.engine.commands import (
    ActionCommand,
    Command,
    CreateCharacterCommand,
    CreateItemCommand,
    DialogueCommand,
    ShowCommand,
    Verb,
    parse_action_count,
    parse_command,
)
from fantasy_story.models.archetypes import create_character
from fantasy_story.models.items import ITEM_TYPES
from fantasy_story.models.roster import Roster


if TYPE_CHECKING:
    from fantasy_story.engine.io import LineSink

logger = get_logger(__name__)

NARRATOR = "Narrator"
"""Speaker allowed in dialogue without being in the roster."""


# =============================================================================
# Engine State
# =============================================================================


class EngineState(StrEnum):
    """Where the engine is in its command cycle."""

    AWAITING_COMMAND = "awaiting_command"
    """Ready for the next command."""

    DISPATCHING = "dispatching"
    """A command is being executed."""

    SUCCESS = "success"
    """The last command completed."""

    RECOVERED_ERROR = "recovered_error"
    """The last command failed and its error was logged."""

    DONE = "done"
    """The declared number of commands was processed, or input ran out."""


class OutcomeStatus(StrEnum):
    """How a single command ended."""

    SUCCESS = "success"
    ERROR = "error"
    IGNORED = "ignored"


@dataclass
class CommandOutcome:
    """Result of processing one command.

    Attributes:
        line_number: 1-based script line number (0 when executed directly).
        line: The raw command line.
        status: How the command ended.
        output: Lines written to the output log for this command.
        error_kind: Classification of the failure, if any.
        message: Error message, if any.
    """

    line_number: int
    line: str
    status: OutcomeStatus
    output: list[str] = field(default_factory=list)
    error_kind: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status != OutcomeStatus.ERROR


def format_error(error: StoryError) -> str:
    """Render a recovered error as its single output line."""
    return f"Error caught: {error.message}"


# =============================================================================
# Story Engine
# =============================================================================


class StoryEngine:
    """Executes story commands against a roster of characters.

    Attributes:
        roster: The characters of this story.
        state: Current engine state.
        history: Outcomes of every command processed so far.

    Example:
        >>> engine = StoryEngine()
        >>> engine.execute("Create character fighter Rin 100").output
        ['A new fighter came to town, Rin.']
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        roster: Roster | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            settings: Application settings; the configured ones when omitted.
            roster: Existing roster to continue a story with.
        """
        self._settings = settings or get_settings()
        self._roster = roster if roster is not None else Roster()
        self._state = EngineState.AWAITING_COMMAND
        self._history: list[CommandOutcome] = []

    @property
    def roster(self) -> Roster:
        return self._roster

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def history(self) -> list[CommandOutcome]:
        return self._history.copy()

    # -------------------------------------------------------------------------
    # Running
    # -------------------------------------------------------------------------

    def run(self, source: Iterable[str], sink: LineSink) -> list[CommandOutcome]:
        """Process a whole script.

        The first line of ``source`` is the number of commands to process.
        Input ending early is a normal truncation, not an error.

        Args:
            source: Script lines, header first.
            sink: Receiver of output lines.

        Returns:
            Outcomes of the processed commands, in order.

        Raises:
            ScriptFormatError: If the header is missing or not a valid count.
        """
        lines = iter(source)
        action_count = self.read_header(lines)
        return self.run_commands(lines, action_count, sink)

    def read_header(self, lines: Iterator[str]) -> int:
        """Consume the script header and return the number of commands.

        Raises:
            ScriptFormatError: If the header is missing or not a valid count.
        """
        header = next(lines, None)
        if header is None:
            raise ScriptFormatError("Script is empty; expected the number of actions")
        try:
            return parse_action_count(header)
        except MalformedCommandError as exc:
            raise ScriptFormatError(
                f"Invalid action count: {exc.message}",
                details={"header": header},
            ) from exc

    def run_commands(
        self,
        lines: Iterable[str],
        action_count: int,
        sink: LineSink,
    ) -> list[CommandOutcome]:
        """Process up to ``action_count`` command lines that follow the header.

        Returns:
            Outcomes of the processed commands, in order.
        """
        logger.info("Story started", actions=action_count)
        outcomes: list[CommandOutcome] = []
        for line_number, line in enumerate(islice(lines, action_count), start=2):
            outcome = self.execute(line, line_number=line_number)
            for output_line in outcome.output:
                sink.write_line(output_line)
            outcomes.append(outcome)

        if len(outcomes) < action_count:
            logger.info(
                "Script ended early",
                declared=action_count,
                processed=len(outcomes),
            )
        self._state = EngineState.DONE
        logger.info(
            "Story finished",
            processed=len(outcomes),
            errors=sum(1 for o in outcomes if not o.ok),
        )
        return outcomes

    def execute(self, line: str, *, line_number: int = 0) -> CommandOutcome:
        """Process a single command line.

        Never raises for command-level failures: they are returned as an
        ERROR outcome carrying one output line.

        Args:
            line: Raw command line.
            line_number: Script line number, for logs.

        Returns:
            The command's outcome.
        """
        self._state = EngineState.DISPATCHING
        bind_context(line_number=line_number)
        try:
            command = parse_command(line)
            output = self._dispatch(command)
        except UnknownCommandError as exc:
            if self._settings.strict_commands:
                outcome = self._recover(line, line_number, exc)
            else:
                logger.debug("Ignoring unknown command", line=line)
                outcome = CommandOutcome(line_number, line, OutcomeStatus.IGNORED)
                self._state = EngineState.SUCCESS
        except StoryError as exc:
            outcome = self._recover(line, line_number, exc)
        else:
            outcome = CommandOutcome(line_number, line, OutcomeStatus.SUCCESS, output=output)
            self._state = EngineState.SUCCESS
        finally:
            clear_context()

        self._history.append(outcome)
        self._state = EngineState.AWAITING_COMMAND
        return outcome

    def _recover(self, line: str, line_number: int, error: StoryError) -> CommandOutcome:
        self._state = EngineState.RECOVERED_ERROR
        logger.warning(
            "Command failed",
            line_number=line_number,
            kind=str(error.kind),
            error=error.message,
        )
        return CommandOutcome(
            line_number,
            line,
            OutcomeStatus.ERROR,
            output=[format_error(error)],
            error_kind=error.kind,
            message=error.message,
        )

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def _dispatch(self, command: Command) -> list[str]:
        if isinstance(command, CreateCharacterCommand):
            return self._create_character(command)
        if isinstance(command, CreateItemCommand):
            return self._create_item(command)
        if isinstance(command, ActionCommand):
            return self._act(command)
        if isinstance(command, ShowCommand):
            return self._show(command)
        if isinstance(command, DialogueCommand):
            return self._dialogue(command)
        raise UnknownCommandError(f"No handler for {type(command).__name__}")

    def _create_character(self, command: CreateCharacterCommand) -> list[str]:
        character = _build(
            create_character,
            command.archetype,
            command.name,
            command.health_points,
            capacities=self._settings.capacities,
        )
        self._roster.add(character)
        logger.info(
            "Character created",
            name=character.name,
            archetype=command.archetype,
            hp=character.health_points,
        )
        return [f"A new {command.archetype} came to town, {character.name}."]

    def _create_item(self, command: CreateItemCommand) -> list[str]:
        owner = self._roster.get(command.owner)
        facet = owner.facet(command.kind)
        item = _build(ITEM_TYPES[command.kind], name=command.name, **command.attributes)
        facet.obtain(owner, item)
        return [f"{owner.name} just obtained a new {command.kind} called {item.name}."]

    def _act(self, command: ActionCommand) -> list[str]:
        actor = self._roster.get(command.actor)
        target = self._roster.get(command.target)
        actor.facet(command.kind).use_item(actor, target, command.item_name)

        if command.verb == Verb.ATTACK:
            return [f"{actor.name} attacks {target.name} with their {command.item_name}!"]
        if command.verb == Verb.DRINK:
            return [f"{target.name} drinks {command.item_name} from {actor.name}."]
        return [f"{actor.name} casts {command.item_name} on {target.name}!"]

    def _show(self, command: ShowCommand) -> list[str]:
        if command.kind is None:
            return [self._roster.describe()]
        character = self._roster.get(command.name or "")
        return [character.show(command.kind)]

    def _dialogue(self, command: DialogueCommand) -> list[str]:
        if command.speaker != NARRATOR:
            self._roster.get(command.speaker)
        return [f"{command.speaker}: {command.speech}"]


def _build(factory: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a model factory, reporting invalid field values as malformed input."""
    try:
        return factory(*args, **kwargs)
    except PydanticValidationError as exc:
        raise MalformedCommandError(
            f"Invalid value: {exc.errors()[0]['msg']}",
            details={"errors": exc.error_count()},
        ) from exc


__all__ = [
    "EngineState",
    "OutcomeStatus",
    "CommandOutcome",
    "StoryEngine",
    "format_error",
    "NARRATOR",
]
