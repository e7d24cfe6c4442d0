"""latexdiff markup options, passed through latexdiff-vc.

Each entry of OPTIONS is (field, long flag, short flag, metavar, help).
Entries with a metavar take a value and become ``--flag=value``; the others
are booleans and become a bare ``--flag``.
"""

import argparse
from dataclasses import dataclass, fields

DEFAULT_ENCODING = "utf8"

OPTIONS = [
    ("markup_style", "--type", "-t", "markupstyle", "Markup style for \\DIFadd and \\DIFdel commands"),
    ("sub_style", "--subtype", "-s", "markstyle", "Style for block start/end commands"),
    ("float_style", "--floattype", "-f", "markstyle", "Markup style within floating environments"),
    ("encoding", "--encoding", "-e", "enc", f"Character encoding for input files (default: {DEFAULT_ENCODING})"),
    ("preamble", "--preamble", "-p", "file", "Custom preamble file for diff output"),
    ("packages", "--packages", None, "pkg1,pkg2,...", "Comma-separated list of required packages"),
    ("show_preamble", "--show-preamble", None, None, "Display the preamble being used"),
    ("exclude_safe_cmd", "--exclude-safecmd", "-A", "pattern", "Exclude commands from safe command list"),
    ("append_safe_cmd", "--append-safecmd", "-a", "pattern", "Add commands to safe command list"),
    ("replace_safe_cmd", "--replace-safecmd", None, "pattern", "Replace safe command list entirely"),
    ("exclude_text_cmd", "--exclude-textcmd", "-X", "pattern", "Exclude commands from text command list"),
    ("append_text_cmd", "--append-textcmd", "-x", "pattern", "Add commands to text command list"),
    ("replace_text_cmd", "--replace-textcmd", None, "pattern", "Replace text command list entirely"),
    ("append_context1_cmd", "--append-context1cmd", None, "pattern", "Add commands to context1 command list"),
    ("replace_context1_cmd", "--replace-context1cmd", None, "pattern", "Replace context1 command list entirely"),
    ("append_context2_cmd", "--append-context2cmd", None, "pattern", "Add commands to context2 command list"),
    ("replace_context2_cmd", "--replace-context2cmd", None, "pattern", "Replace context2 command list entirely"),
    ("exclude_mbox_safe_cmd", "--exclude-mboxsafecmd", None, "pattern", "Exclude commands from mbox-safe command list"),
    ("append_mbox_safe_cmd", "--append-mboxsafecmd", None, "pattern", "Add commands to mbox-safe command list"),
    ("config", "--config", "-c", "var1=val1,...", "Set configuration variables"),
    ("add_to_config", "--add-to-config", None, "var=pattern1;...", "Add patterns to regex variables"),
    ("show_safe_cmd", "--show-safecmd", None, None, "Display current safe command list"),
    ("show_text_cmd", "--show-textcmd", None, None, "Display current text command list"),
    ("show_config", "--show-config", None, None, "Display all configuration variables"),
    ("show_all", "--show-all", None, None, "Execute all --show-* options together"),
    ("math_markup", "--math-markup", None, "level", "Math markup granularity (off, whole, coarse, fine)"),
    ("graphics_markup", "--graphics-markup", None, "mode", "Graphics markup handling (off, new-only, both)"),
    ("disable_citation_markup", "--disable-citation-markup", None, None, "Disable citation markup processing"),
    ("disable_auto_mbox", "--disable-auto-mbox", None, None, "Disable automatic mbox protection"),
    ("enable_citation_markup", "--enable-citation-markup", None, None, "Enable citation markup processing"),
    ("enforce_auto_mbox", "--enforce-auto-mbox", None, None, "Force automatic mbox protection"),
    ("driver", "--driver", None, "type", "Driver type for output format"),
    ("ignore_warnings", "--ignore-warnings", None, None, "Suppress warning messages"),
    ("label", "--label", "-L", "label", "Label for diff output identification"),
    ("no_label", "--no-label", None, None, "Suppress label line in diff output"),
    ("visible_label", "--visible-label", None, None, "Make labels visible in the output"),
]

# --verbose is shared with latexmk and goes right after this option
_VERBOSE_AFTER = "enforce_auto_mbox"


@dataclass(frozen=True)
class LatexdiffOpts:
    markup_style: str | None = None
    sub_style: str | None = None
    float_style: str | None = None
    encoding: str | None = None
    preamble: str | None = None
    packages: str | None = None
    show_preamble: bool = False
    exclude_safe_cmd: str | None = None
    append_safe_cmd: str | None = None
    replace_safe_cmd: str | None = None
    exclude_text_cmd: str | None = None
    append_text_cmd: str | None = None
    replace_text_cmd: str | None = None
    append_context1_cmd: str | None = None
    replace_context1_cmd: str | None = None
    append_context2_cmd: str | None = None
    replace_context2_cmd: str | None = None
    exclude_mbox_safe_cmd: str | None = None
    append_mbox_safe_cmd: str | None = None
    config: str | None = None
    add_to_config: str | None = None
    show_safe_cmd: bool = False
    show_text_cmd: bool = False
    show_config: bool = False
    show_all: bool = False
    math_markup: str | None = None
    graphics_markup: str | None = None
    disable_citation_markup: bool = False
    disable_auto_mbox: bool = False
    enable_citation_markup: bool = False
    enforce_auto_mbox: bool = False
    driver: str | None = None
    ignore_warnings: bool = False
    label: str | None = None
    no_label: bool = False
    visible_label: bool = False

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> "LatexdiffOpts":
        return cls(**{f.name: getattr(args, f.name) for f in fields(cls)})

    def args(self, verbose: bool = False) -> list[str]:
        """Translate to latexdiff flags; verbose mirrors latexmk's --verbose."""
        args = []
        for name, flag, _short, metavar, _help in OPTIONS:
            value = getattr(self, name)
            if name == "encoding" and value is None:
                value = DEFAULT_ENCODING
            if metavar is None:
                if value:
                    args.append(flag)
            elif value is not None:
                args.append(f"{flag}={value}")
            if name == _VERBOSE_AFTER and verbose:
                args.append("--verbose")
        return args


def add_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("latexdiff options")
    for name, flag, short, metavar, help_text in OPTIONS:
        flags = [short, flag] if short else [flag]
        if metavar is None:
            group.add_argument(*flags, dest=name, action="store_true", help=help_text)
        else:
            group.add_argument(*flags, dest=name, metavar=metavar, help=help_text)
