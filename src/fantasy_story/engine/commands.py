"""Tokenizing story script lines into typed commands.

One line is one command. Tokens are separated by whitespace; verbs are
case-sensitive.

Grammar:
    Create character <archetype> <name> <hp>
    Create item weapon <owner> <name> <damage>
    Create item potion <owner> <name> <heal>
    Create item spell <owner> <name> <damage|heal> <power> <m> <target_1> ... <target_m>
    Attack <attacker> <target> <weapon>
    Drink <supplier> <drinker> <potion>
    Cast <caster> <target> <spell>
    Show characters
    Show <weapons|potions|spells> <name>
    Dialogue <speaker> <n> <word_1> ... <word_n>
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from fantasy_story.core.exceptions import MalformedCommandError, UnknownCommandError
from fantasy_story.models.enums import ItemKind, SpellEffect


class Verb(StrEnum):
    """First token of every command."""

    CREATE = "Create"
    ATTACK = "Attack"
    DRINK = "Drink"
    CAST = "Cast"
    SHOW = "Show"
    DIALOGUE = "Dialogue"


ACTION_KINDS: dict[Verb, ItemKind] = {
    Verb.ATTACK: ItemKind.WEAPON,
    Verb.DRINK: ItemKind.POTION,
    Verb.CAST: ItemKind.SPELL,
}


# =============================================================================
# Command Types
# =============================================================================


@dataclass(frozen=True)
class CreateCharacterCommand:
    """``Create character <archetype> <name> <hp>``."""

    archetype: str
    name: str
    health_points: int


@dataclass(frozen=True)
class CreateItemCommand:
    """``Create item <kind> <owner> <name> ...``.

    Attributes:
        kind: Item kind to build.
        owner: Name of the character receiving the item.
        name: Item name.
        attributes: Kind-specific item fields (e.g. ``{"damage": 10}``).
    """

    kind: ItemKind
    owner: str
    name: str
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ActionCommand:
    """``Attack``/``Drink``/``Cast``: ``actor`` uses ``item_name`` on ``target``."""

    verb: Verb
    actor: str
    target: str
    item_name: str

    @property
    def kind(self) -> ItemKind:
        return ACTION_KINDS[self.verb]


@dataclass(frozen=True)
class ShowCommand:
    """``Show characters`` (``kind`` is None) or ``Show <kind>s <name>``."""

    kind: ItemKind | None = None
    name: str | None = None


@dataclass(frozen=True)
class DialogueCommand:
    """``Dialogue <speaker> <n> <words...>``."""

    speaker: str
    speech: str


Command = (
    CreateCharacterCommand | CreateItemCommand | ActionCommand | ShowCommand | DialogueCommand
)


# =============================================================================
# Parsing
# =============================================================================


def _expect_length(tokens: list[str], expected: int, line: str, usage: str) -> None:
    if len(tokens) != expected:
        raise MalformedCommandError(
            f"Expected {usage}",
            line=line,
            details={"tokens": len(tokens), "expected": expected},
        )


def _parse_int(token: str, field_name: str, line: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise MalformedCommandError(
            f"{field_name} must be an integer, got {token!r}",
            line=line,
        ) from None


def _parse_create(tokens: list[str], line: str) -> Command:
    if len(tokens) < 2:
        raise MalformedCommandError("Create what?", line=line)

    if tokens[1] == "character":
        _expect_length(tokens, 5, line, "Create character <type> <name> <hp>")
        return CreateCharacterCommand(
            archetype=tokens[2],
            name=tokens[3],
            health_points=_parse_int(tokens[4], "Health points", line),
        )

    if tokens[1] != "item":
        raise MalformedCommandError(
            f"Cannot create {tokens[1]!r}; expected 'character' or 'item'",
            line=line,
        )

    if len(tokens) < 3:
        raise MalformedCommandError("Create item <kind> ...", line=line)
    try:
        kind = ItemKind(tokens[2])
    except ValueError:
        raise MalformedCommandError(
            f"Unknown item kind {tokens[2]!r}",
            line=line,
            details={"expected": [k.value for k in ItemKind]},
        ) from None

    if kind == ItemKind.WEAPON:
        _expect_length(tokens, 6, line, "Create item weapon <owner> <name> <damage>")
        attributes: dict[str, Any] = {"damage": _parse_int(tokens[5], "Damage", line)}
    elif kind == ItemKind.POTION:
        _expect_length(tokens, 6, line, "Create item potion <owner> <name> <heal>")
        attributes = {"heal_value": _parse_int(tokens[5], "Heal value", line)}
    else:
        attributes = _parse_spell_attributes(tokens, line)

    return CreateItemCommand(kind=kind, owner=tokens[3], name=tokens[4], attributes=attributes)


def _parse_spell_attributes(tokens: list[str], line: str) -> dict[str, Any]:
    usage = "Create item spell <owner> <name> <damage|heal> <power> <m> <targets...>"
    if len(tokens) < 8:
        raise MalformedCommandError(f"Expected {usage}", line=line)
    try:
        effect = SpellEffect(tokens[5])
    except ValueError:
        raise MalformedCommandError(
            f"Unknown spell effect {tokens[5]!r}",
            line=line,
            details={"expected": [e.value for e in SpellEffect]},
        ) from None
    power = _parse_int(tokens[6], "Spell power", line)
    target_count = _parse_int(tokens[7], "Number of targets", line)
    _expect_length(tokens, 8 + target_count, line, usage)
    return {
        "effect": effect,
        "power": power,
        "allowed_targets": set(tokens[8:]),
    }


def _parse_show(tokens: list[str], line: str) -> ShowCommand:
    if len(tokens) == 2 and tokens[1] == "characters":
        return ShowCommand()
    _expect_length(tokens, 3, line, "Show <weapons|potions|spells> <name>")
    for kind in ItemKind:
        if tokens[1] == kind.plural:
            return ShowCommand(kind=kind, name=tokens[2])
    raise MalformedCommandError(f"Cannot show {tokens[1]!r}", line=line)


def _parse_dialogue(tokens: list[str], line: str) -> DialogueCommand:
    if len(tokens) < 3:
        raise MalformedCommandError("Expected Dialogue <speaker> <n> <words...>", line=line)
    word_count = _parse_int(tokens[2], "Number of words", line)
    if word_count < 1:
        raise MalformedCommandError("Dialogue needs at least one word", line=line)
    _expect_length(tokens, 3 + word_count, line, "Dialogue <speaker> <n> <words...>")
    return DialogueCommand(speaker=tokens[1], speech=" ".join(tokens[3:]))


def parse_command(line: str) -> Command:
    """Tokenize one script line into a command.

    Args:
        line: Raw script line.

    Returns:
        The parsed command.

    Raises:
        UnknownCommandError: If the first token is not a known verb.
        MalformedCommandError: If the line does not fit the verb's grammar.
    """
    tokens = line.split()
    if not tokens:
        raise MalformedCommandError("Empty command", line=line)

    try:
        verb = Verb(tokens[0])
    except ValueError:
        raise UnknownCommandError(
            f"Unknown command {tokens[0]!r}",
            details={"line": line},
        ) from None

    if verb == Verb.CREATE:
        return _parse_create(tokens, line)
    if verb == Verb.SHOW:
        return _parse_show(tokens, line)
    if verb == Verb.DIALOGUE:
        return _parse_dialogue(tokens, line)

    _expect_length(tokens, 4, line, f"{verb} <actor> <target> <item>")
    return ActionCommand(verb=verb, actor=tokens[1], target=tokens[2], item_name=tokens[3])


def parse_action_count(line: str) -> int:
    """Parse the script header holding the number of commands.

    Raises:
        MalformedCommandError: If the header is not a non-negative integer.
    """
    count = _parse_int(line.strip(), "Action count", line)
    if count < 0:
        raise MalformedCommandError("Action count cannot be negative", line=line)
    return count


__all__ = [
    "Verb",
    "Command",
    "CreateCharacterCommand",
    "CreateItemCommand",
    "ActionCommand",
    "ShowCommand",
    "DialogueCommand",
    "parse_command",
    "parse_action_count",
]
