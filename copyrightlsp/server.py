"""Language server loop: reads framed messages and dispatches them."""

from __future__ import annotations

import argparse
import contextlib
import json
import logging
import os
import sys
from collections.abc import Callable
from typing import Any, BinaryIO, TextIO

from copyrightlsp.codeactions import calculate_code_actions
from copyrightlsp.diagnostics import calculate_diagnostics
from copyrightlsp.lsp import (
    Range,
    new_code_action_response,
    new_initialize_response,
    new_publish_diagnostics_notification,
    new_shutdown_response,
)
from copyrightlsp.rpc import RpcError, decode_message, encode_message, read_messages
from copyrightlsp.state import State

_LOG_FORMAT = "[copyrightlsp]%(asctime)s %(filename)s:%(lineno)d: %(message)s"
_LOG_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
_MAX_SEARCH_RANGE = 255


def _null_logger() -> logging.Logger:
    logger = logging.Logger("copyrightlsp")
    logger.addHandler(logging.NullHandler())
    return logger


def _object(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _string(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def _request_id(request: dict[str, Any]) -> int:
    value = request.get("id")
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return 0


class Server:
    """Handles language server messages and writes replies to ``writer``."""

    def __init__(self, writer: BinaryIO, logger: logging.Logger | None = None) -> None:
        self.writer = writer
        self.logger = logger or _null_logger()
        self.state = State()
        self._handlers: dict[str, Callable[[bytes], None]] = {
            "initialize": self._initialize,
            "shutdown": self._shutdown,
            "textDocument/didOpen": self._did_open,
            "textDocument/didChange": self._did_change,
            "textDocument/didClose": self._did_close,
            "textDocument/codeAction": self._code_action,
            "workspace/didChangeConfiguration": self._did_change_configuration,
        }

    def handle_message(self, method: str, content: bytes) -> None:
        """Dispatch one decoded message; unknown methods are ignored."""
        self.logger.info("received message with method '%s'", method)
        handler = self._handlers.get(method)
        if handler is not None:
            handler(content)

    def serve(self, reader: BinaryIO) -> None:
        """Process messages from ``reader`` until ``exit`` or end of input."""
        try:
            for frame in read_messages(reader):
                try:
                    method, content = decode_message(frame)
                except RpcError as err:
                    self.logger.error("got an error: %s", err)
                    continue

                if method == "exit":
                    self.logger.info("received the 'exit' request")
                    return

                self.handle_message(method, content)
        except RpcError as err:
            self.logger.error("failed to read message: %s", err)

    def _parse(self, method: str, content: bytes) -> dict[str, Any]:
        try:
            data = json.loads(content)
        except ValueError as err:
            self.logger.warning("received invalid '%s' message: %s", method, err)
            return {}
        if not isinstance(data, dict):
            self.logger.warning("received invalid '%s' message: not an object", method)
            return {}
        return data

    def _reply(self, message: Any) -> None:
        data = encode_message(message).encode("utf-8")
        try:
            self.writer.write(data)
            self.writer.flush()
        except OSError as err:
            self.logger.error("failed to write response: %s", err)

    def _publish_diagnostics(self, uri: str) -> None:
        diagnostics = calculate_diagnostics(self.state, uri)
        self._reply(new_publish_diagnostics_notification(uri, diagnostics))
        self.logger.info("calculated document diagnostics %s [%d]", uri, len(diagnostics))

    def _initialize(self, content: bytes) -> None:
        request = self._parse("initialize", content)
        client_info = _object(_object(request, "params"), "clientInfo")
        version = client_info.get("version")
        client_version = version if isinstance(version, str) else "UNKNOWN"
        self.logger.info(
            "connected to %s (Version: %s)", _string(client_info, "name"), client_version
        )
        self._reply(new_initialize_response(_request_id(request)))
        self.logger.info("sent the 'initialize' response")

    def _shutdown(self, content: bytes) -> None:
        request = self._parse("shutdown", content)
        self.logger.info("shutdown")
        self._reply(new_shutdown_response(_request_id(request)))
        self.logger.info("sent the 'shutdown' response")

    def _did_open(self, content: bytes) -> None:
        request = self._parse("textDocument/didOpen", content)
        item = _object(_object(request, "params"), "textDocument")
        uri = _string(item, "uri")
        language = _string(item, "languageId")
        self.state.open_document(uri, _string(item, "text"), language)
        self.logger.info("opened document %s [%s]", uri, language)
        self._publish_diagnostics(uri)

    def _did_change(self, content: bytes) -> None:
        request = self._parse("textDocument/didChange", content)
        params = _object(request, "params")
        uri = _string(_object(params, "textDocument"), "uri")
        changes = params.get("contentChanges")
        for change in changes if isinstance(changes, list) else ():
            if isinstance(change, dict):
                self.state.update_document(uri, _string(change, "text"))
        self.logger.info("changed document %s", uri)
        self._publish_diagnostics(uri)

    def _did_close(self, content: bytes) -> None:
        request = self._parse("textDocument/didClose", content)
        uri = _string(_object(_object(request, "params"), "textDocument"), "uri")
        self.state.close_document(uri)
        self.logger.info("closed document %s", uri)

    def _code_action(self, content: bytes) -> None:
        request = self._parse("textDocument/codeAction", content)
        params = _object(request, "params")
        uri = _string(_object(params, "textDocument"), "uri")
        try:
            span = Range.from_dict(_object(params, "range"))
        except ValueError as err:
            self.logger.warning("received invalid 'textDocument/codeAction' message: %s", err)
            span = Range()
        actions = calculate_code_actions(self.state, uri, span.start, span.end)
        self.logger.info("calculated %d code actions for %s", len(actions), uri)
        self._reply(new_code_action_response(_request_id(request), actions))

    def _did_change_configuration(self, content: bytes) -> None:
        method = "workspace/didChangeConfiguration"
        request = self._parse(method, content)
        settings = _object(_object(request, "params"), "settings")

        templates: dict[str, list[str]] = {}
        for language, lines in _object(settings, "templates").items():
            if isinstance(lines, list) and all(isinstance(line, str) for line in lines):
                templates[language] = lines
            else:
                self.logger.warning("received invalid template for '%s'", language)

        search_ranges: dict[str, int] = {}
        for language, value in _object(settings, "searchRanges").items():
            if (
                isinstance(value, int)
                and not isinstance(value, bool)
                and 0 <= value <= _MAX_SEARCH_RANGE
            ):
                search_ranges[language] = value
            else:
                self.logger.warning("received invalid search range for '%s'", language)

        self.state.update_templates(templates)
        self.state.update_search_ranges(search_ranges)
        self.logger.info("updated settings")


def _open_log_file(path: str) -> TextIO:
    try:
        fd = os.open(path, os.O_CREAT | os.O_TRUNC | os.O_WRONLY, 0o600)
    except OSError as err:
        raise SystemExit(f"failed to open or create the log file: {err}") from err
    return os.fdopen(fd, "w", encoding="utf-8")


def main(argv: list[str] | None = None) -> int:
    """Run the language server on standard input and output."""
    parser = argparse.ArgumentParser(prog="copyrightlsp")
    parser.add_argument(
        "-logFile",
        "--logFile",
        dest="log_file",
        default="",
        help="log message to the given file",
    )
    args = parser.parse_args(argv)

    logger = logging.Logger("copyrightlsp")
    with contextlib.ExitStack() as stack:
        handler: logging.Handler
        if args.log_file:
            stream = stack.enter_context(_open_log_file(args.log_file))
            handler = logging.StreamHandler(stream)
            handler.setFormatter(logging.Formatter(_LOG_FORMAT, _LOG_DATE_FORMAT))
        else:
            handler = logging.NullHandler()
        logger.addHandler(handler)
        stack.callback(logger.removeHandler, handler)

        logger.info("started copyrightlsp")
        Server(sys.stdout.buffer, logger).serve(sys.stdin.buffer)
    return 0