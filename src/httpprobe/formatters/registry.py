# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Formatter registry keyed by media type."""

from __future__ import annotations

import logging
from typing import Any, BinaryIO

from ..errors import FormatterError
from .base import InputFormatter, OutputFormatter
from .raw_json import RawJsonInputFormatter, RawJsonOutputFormatter

logger = logging.getLogger(__name__)


def _accept_candidates(accept: str | None) -> list[str]:
    if not accept:
        return [""]
    return [item.strip() for item in accept.split(",") if item.strip()] or [""]


class FormatterRegistry:
    """
    Ordered input/output formatters.

    Lookup walks formatters in registration order and returns the first match,
    so register specific formatters before generic ones.
    """

    def __init__(self) -> None:
        self._inputs: list[InputFormatter] = []
        self._outputs: list[OutputFormatter] = []

    def register(self, formatter: InputFormatter | OutputFormatter) -> None:
        if isinstance(formatter, InputFormatter):
            self._inputs.append(formatter)
        elif isinstance(formatter, OutputFormatter):
            self._outputs.append(formatter)
        else:
            raise TypeError(f"Not a body formatter: {formatter!r}")

    @property
    def input_formatters(self) -> tuple[InputFormatter, ...]:
        return tuple(self._inputs)

    @property
    def output_formatters(self) -> tuple[OutputFormatter, ...]:
        return tuple(self._outputs)

    def reader_for(self, value_type: type, content_type: str | None) -> InputFormatter:
        for formatter in self._inputs:
            if formatter.can_read(value_type, content_type):
                return formatter
        raise FormatterError(f"No input formatter for {value_type.__name__} as {content_type or '<none>'}")

    def writer_for(self, value_type: type, accept: str | None) -> tuple[OutputFormatter, str]:
        """Return the first matching formatter and the accepted media type it matched."""
        for candidate in _accept_candidates(accept):
            for formatter in self._outputs:
                if formatter.can_write(value_type, candidate):
                    return formatter, candidate
        raise FormatterError(f"No output formatter for {value_type.__name__} accepting {accept or '<any>'}")

    def read_body(self, value_type: type, stream: BinaryIO, content_type: str | None) -> Any:
        formatter = self.reader_for(value_type, content_type)
        encoding = formatter.select_encoding(content_type, strict=True)
        logger.debug("Reading %s body with %s (%s)", value_type.__name__, type(formatter).__name__, encoding)
        return formatter.read(stream, encoding)

    def write_body(self, value: Any, stream: BinaryIO, accept: str | None = None) -> str:
        """Write `value` to `stream`; returns the Content-Type header value used."""
        formatter, media_type = self.writer_for(type(value), accept)
        encoding = formatter.select_encoding(media_type)
        formatter.write(value, stream, encoding)
        return formatter.content_type(encoding)


def default_registry() -> FormatterRegistry:
    """Registry with the raw JSON input and output formatters."""
    registry = FormatterRegistry()
    registry.register(RawJsonInputFormatter())
    registry.register(RawJsonOutputFormatter())
    return registry


__all__ = ["FormatterRegistry", "default_registry"]
