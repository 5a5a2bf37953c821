"""
Help text layout.

The parser hands over a banner and an ordered list of HelpEntry values (one per
registered switch or separator); this module only decides where things go.

Layout
- a switch line starts with four spaces, then the switch names;
- the first info line starts at column 37 (or on the next line when the names
  are too wide), every further info line is indented to column 37;
- separators are emitted verbatim.

    -n, --name NAME                  Set the name
        --[no-]quiet                 Be quiet
                                     (default: --no-quiet)
"""
from collections import defaultdict
from typing import NamedTuple

from rich.text import Text


class HelpEntry(NamedTuple):
    label: str
    info: tuple = ()
    verbatim: bool = False


class HelpFormatter:
    """
    column layout for help entries, as plain text or as rich Text.
    """

    def __init__(self, *, indent=4, column=37):
        if indent < 0 or column <= indent:
            raise ValueError("help column must be greater than the indent")
        self.indent = indent
        self.column = column

    def _lines(self, entry):
        # Yield (names, info) fragments, one per output line.
        if entry.verbatim:
            yield entry.label, None
            return
        names = " " * self.indent + entry.label
        if not entry.info:
            yield names, None
            return
        first, *rest = entry.info
        if len(names) < self.column:
            yield names.ljust(self.column), first
        else:
            yield names, None
            yield " " * self.column, first
        for line in rest:
            yield " " * self.column, line

    def render(self, banner, entries, /):
        """
        return the help text for `entries`, preceded by `banner` when not empty.
        """
        lines = [banner] if banner else []
        for entry in entries:
            lines.extend(names + (info or "") for names, info in self._lines(entry))
        return "\n".join(lines)

    def renderable(self, banner, entries, /, *, colorful=True):
        """
        return the same layout as render() as a styled rich Text.

        Palette keys (override through a __styles__ mapping in __main__)
        - usage-section, separator, option-name, argument-description
        """
        styles = defaultdict(str, {
            "usage-section": "bold #36C5F0",  # sky-blue banner
            "separator": "bold #FFFFFF",  # white section headers
            "option-name": "bold #00E6FF",  # cyan switch names
            "argument-description": "#9CA3AF",  # muted gray info
        } | getattr(__import__("__main__"), "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        lines = [Text(banner, styler("usage-section"))] if banner else []
        for entry in entries:
            for names, info in self._lines(entry):
                if entry.verbatim:
                    lines.append(Text(names, styler("separator")))
                    continue
                lines.append(Text.assemble(
                    (names, styler("option-name")),
                    (info or "", styler("argument-description")),
                ))
        return Text("\n").join(lines)


__all__ = (
    "HelpEntry",
    "HelpFormatter",
)
