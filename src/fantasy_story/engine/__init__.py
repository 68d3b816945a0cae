"""Story engine module.

This module turns a line-oriented script into actions on the story models.

Submodules:
    commands: Tokenizing script lines into typed commands
    story: The StoryEngine dispatch state machine
    io: Line sources and sinks
"""

from __future__ import annotations

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
from fantasy_story.engine.io import ListSink, LineSink, StreamSink, open_sink, read_script
from fantasy_story.engine.story import (
    NARRATOR,
    CommandOutcome,
    EngineState,
    OutcomeStatus,
    StoryEngine,
    format_error,
)


__all__ = [
    # Commands
    "Verb",
    "Command",
    "CreateCharacterCommand",
    "CreateItemCommand",
    "ActionCommand",
    "ShowCommand",
    "DialogueCommand",
    "parse_command",
    "parse_action_count",
    # Engine
    "StoryEngine",
    "EngineState",
    "OutcomeStatus",
    "CommandOutcome",
    "format_error",
    "NARRATOR",
    # IO
    "LineSink",
    "ListSink",
    "StreamSink",
    "read_script",
    "open_sink",
]
