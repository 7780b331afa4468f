"""Pure function-based command parser for extracting commands from text."""

from dataclasses import dataclass, field


@dataclass
class ParsedCommand:
    """Represents a parsed command with its name and arguments.

    Attributes:
        name: The command name (lowercase normalized, prefix removed).
        args: Remaining whitespace-separated tokens.
    """

    name: str
    args: list[str] = field(default_factory=list)


def parse_command(text: str, prefix: str = "!") -> ParsedCommand | None:
    """Parse a command from text.

    The raw text must start with the prefix; leading whitespace is not
    stripped first, so " !ping" is not a command. After the prefix the rest
    is trimmed and split on runs of whitespace. The first token becomes the
    lowercased command name and the remaining tokens become the arguments.

    Args:
        text: The text to parse for a command.
        prefix: Non-empty command prefix.

    Returns:
        ParsedCommand if text starts with the prefix and has a command name,
        otherwise None.

    Examples:
        >>> parse_command("!ping")
        ParsedCommand(name='ping', args=[])

        >>> parse_command("!TESTE  a   b")
        ParsedCommand(name='teste', args=['a', 'b'])

        >>> parse_command("/status now", prefix="/")
        ParsedCommand(name='status', args=['now'])

        >>> parse_command("hello !ping")
        None

        >>> parse_command("!   ")
        None
    """
    if not text.startswith(prefix):
        return None

    tokens = text[len(prefix) :].split()
    if not tokens:
        return None

    return ParsedCommand(name=tokens[0].lower(), args=tokens[1:])
