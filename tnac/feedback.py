"""Callback hub through which the library reports errors and requests."""

from __future__ import annotations

import os
from typing import Any, Callable, Optional


class Feedback:
    """Holds user-supplied handlers; an unset handler makes its event a no-op."""

    def __init__(self) -> None:
        self._error_handler: Optional[Callable[[str], Any]] = None
        self._parse_error_handler: Optional[Callable[[Any], Any]] = None
        self._compile_error_handler: Optional[Callable[[Any, str], Any]] = None
        self._compile_warning_handler: Optional[Callable[[Any, str], Any]] = None
        self._compile_note_handler: Optional[Callable[[Any, str], Any]] = None
        self._command_handler: Optional[Callable[[Any], Any]] = None
        self._file_loader: Optional[Callable[[Any], bool]] = None

    # Handler registration

    def on_error(self, handler: Callable[[str], Any]) -> None:
        self._error_handler = handler

    def on_parse_error(self, handler: Callable[[Any], Any]) -> None:
        self._parse_error_handler = handler

    def on_compile_error(self, handler: Callable[[Any, str], Any]) -> None:
        self._compile_error_handler = handler

    def on_compile_warning(self, handler: Callable[[Any, str], Any]) -> None:
        self._compile_warning_handler = handler

    def on_compile_note(self, handler: Callable[[Any, str], Any]) -> None:
        self._compile_note_handler = handler

    def on_command(self, handler: Callable[[Any], Any]) -> None:
        self._command_handler = handler

    def on_load_request(self, handler: Callable[[Any], bool]) -> None:
        self._file_loader = handler

    # Dispatch

    def error(self, msg: str) -> None:
        if self._error_handler is not None:
            self._error_handler(msg)

    def parse_error(self, err: Any) -> None:
        if self._parse_error_handler is not None:
            self._parse_error_handler(err)

    def compile_error(self, loc: Any, msg: str) -> None:
        if self._compile_error_handler is not None:
            self._compile_error_handler(loc, msg)

    def compile_warning(self, loc: Any, msg: str) -> None:
        if self._compile_warning_handler is not None:
            self._compile_warning_handler(loc, msg)

    def compile_note(self, loc: Any, msg: str) -> None:
        if self._compile_note_handler is not None:
            self._compile_note_handler(loc, msg)

    def command(self, cmd: Any) -> None:
        if self._command_handler is not None:
            self._command_handler(cmd)

    def load_file(self, path: str | os.PathLike) -> bool:
        """Ask the registered loader to process a file; False if none is set."""
        if self._file_loader is None:
            return False
        return bool(self._file_loader(path))