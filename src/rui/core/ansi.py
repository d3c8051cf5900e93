# SPDX-FileCopyrightText: 2024 Rui Developers
# SPDX-License-Identifier: Apache-2.0

"""Usage text highlighting on top of the ANSI primitives from CmdKit."""


# type annotations
from __future__ import annotations
from typing import Callable

# standard libs
import re

# external libs
from cmdkit.ansi import (NO_COLOR, COLOR_STDOUT, COLOR_STDERR, Ansi,
                         bold, faint, italic, magenta, cyan, yellow, green)

# public interface
__all__ = ['NO_COLOR', 'COLOR_STDOUT', 'COLOR_STDERR', 'Ansi',
           'bold', 'faint', 'italic', 'magenta', 'cyan', 'yellow', 'green',
           'colorize_usage', ]


def colorize_usage(text: str) -> str:
    """
    Apply rich ANSI formatting to usage and help text.
    Has no effect if NO_COLOR is set or stdout is not a TTY.
    """
    if not COLOR_STDOUT:  # NOTE: usage is on stdout not stderr
        return text
    else:
        return _apply_formatters(text,
                                 _format_headers,
                                 _format_options,
                                 _format_special_args,
                                 _format_special_marker,
                                 _format_backtick_string,
                                 _format_external_commands,
                                 )


def _apply_formatters(text: str, *formatters: Callable[[str], str]) -> str:
    """Apply all usage text formatters."""
    if formatters:
        return formatters[0](_apply_formatters(text, *formatters[1:]))
    else:
        return text


# Look-around pattern to negate matches within quotation
NOT_QUOTED = (
    r'(?=([^"]*"[^"]*")*[^"]*$)' +
    r"(?=([^']*'[^']*')*[^']*$)" +
    r'(?=([^`]*`[^`]*`)*[^`]*$)'
)


def _format_headers(text: str) -> str:
    """Add rich ANSI formatting to section headers."""
    names = ['Usage', 'Commands', 'Arguments', 'Options', 'Environment', 'Files']
    return re.sub(r'(?P<name>' + '|'.join(names) + r'):' + NOT_QUOTED, bold(r'\g<name>:'), text)


def _format_options(text: str) -> str:
    """Add rich ANSI formatting to option syntax."""
    option_pattern = r'(?P<leader>[ /\[,])(?P<option>-[a-zA-Z]|--[a-z]+(-[a-z]+)*)\b'
    return re.sub(option_pattern + NOT_QUOTED, r'\g<leader>' + cyan(r'\g<option>'), text)


def _format_special_args(text: str) -> str:
    """Add rich ANSI formatting to metavars."""
    metavars = ['ARGS', 'NAME', 'HOST', 'REF', 'VAR', 'SECTION']
    metavars_pattern = r'\b(?P<arg>' + '|'.join(metavars) + r')\b'
    return re.sub(metavars_pattern + NOT_QUOTED, italic(r'\g<arg>'), text)


def _format_special_marker(text: str) -> str:
    """Add rich ANSI formatting to special markers (e.g., '<command>')."""
    args = ['<command>', '<args>', '<action>', ]
    return re.sub(r'(?P<arg>' + '|'.join(args) + r')' + NOT_QUOTED, italic(r'\g<arg>'), text)


def _format_backtick_string(text: str) -> str:
    """Add rich ANSI formatting to quoted strings."""
    return re.sub(r'`(?P<subtext>[^`]*)`', yellow(r'`\g<subtext>`'), text)


def _format_external_commands(text: str) -> str:
    """Add rich ANSI formatting to wrapped tool names."""
    names = ['nh', 'home-manager', 'nixos-rebuild', 'doas', 'sudo', 'notify-send', ]
    return re.sub(r'(?<![-\w])(?P<name>' + '|'.join(names) + r')(?![-\w])' + NOT_QUOTED,
                  green(r'\g<name>'), text)
