"""Command registry for classifying command text.

The registry holds an ordered list of rules. Each rule pairs a regular
expression with a factory building the command from the match. Rules are
tried in registration order and the first match wins, so a rule registered
earlier shadows any later rule matching the same text.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, List, Union

from .base import BaseCommand
from .system_commands import InvalidCommand

logger = logging.getLogger(__name__)

CommandFactory = Callable[[re.Match], BaseCommand]


@dataclass(frozen=True)
class CommandRule:
    """One entry of the command grammar.

    Attributes:
        name: Rule name, used in logs
        pattern: Compiled pattern, applied with search()
        factory: Builds the command from the match
    """

    name: str
    pattern: re.Pattern
    factory: CommandFactory


class CommandRegistry:
    """Ordered command grammar.

    Example:
        registry = CommandRegistry()
        registry.register("test", r"^test\\s*$", lambda m: TestCommand())

        command = registry.resolve("test")
    """

    def __init__(self):
        """Initialize empty registry."""
        self._rules: List[CommandRule] = []

    def register(
        self, name: str, pattern: Union[str, re.Pattern], factory: CommandFactory
    ) -> None:
        """Append a rule after all previously registered rules.

        Args:
            name: Rule name
            pattern: Regular expression, compiled with re.ASCII if given as a
                string so \\b and \\w only treat ASCII letters as word characters
            factory: Builds the command from the match

        Returns:
            None
        """
        compiled = re.compile(pattern, re.ASCII) if isinstance(pattern, str) else pattern
        self._rules.append(CommandRule(name=name, pattern=compiled, factory=factory))
        logger.debug(f"Registered command rule: {name}")

    def resolve(self, text: str) -> BaseCommand:
        """Classify command text.

        Args:
            text: Command body with the bot mention already removed

        Returns:
            Command built by the first matching rule, InvalidCommand if no
            rule matches
        """
        for rule in self._rules:
            match = rule.pattern.search(text)
            if match is not None:
                logger.debug(f"Command text matched rule: {rule.name}")
                return rule.factory(match)

        logger.debug("Command text matched no rule")
        return InvalidCommand()

    def list_rules(self) -> List[str]:
        """List rule names in evaluation order.

        Returns:
            List of rule names
        """
        return [rule.name for rule in self._rules]
