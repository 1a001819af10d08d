# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Body formatter strategy interfaces.

A formatter declares the media types and text encodings it supports and the
Python types it can turn a body into (input) or out of (output). Hosts pick a
formatter by (type, media type) and hand it a binary stream.
"""

from __future__ import annotations

import codecs
from abc import ABC, abstractmethod
from typing import Any, BinaryIO

from ..errors import FormatterError


def parse_media_type(value: str | None) -> tuple[str, dict[str, str]]:
    """Split `type/subtype; key=value` into a lowercase media type and its parameters."""
    if not value:
        return "", {}
    head, *raw_params = value.split(";")
    params: dict[str, str] = {}
    for raw in raw_params:
        key, sep, param_value = raw.partition("=")
        if not sep:
            continue
        params[key.strip().lower()] = param_value.strip().strip('"')
    return head.strip().lower(), params


def normalize_encoding(name: str | None) -> str | None:
    """Canonical codec name, or None when Python does not know the encoding."""
    if not name:
        return None
    try:
        return codecs.lookup(name).name
    except LookupError:
        return None


def _media_type_matches(supported: str, requested: str) -> bool:
    if requested in {"", "*/*"}:
        return True
    if requested.endswith("/*"):
        return supported.split("/", 1)[0] == requested[:-2]
    return supported == requested


class BodyFormatter(ABC):
    """Common media type / encoding negotiation for input and output formatters."""

    supported_media_types: tuple[str, ...] = ()
    supported_encodings: tuple[str, ...] = ()

    @abstractmethod
    def can_handle_type(self, value_type: type) -> bool:
        """Whether values of `value_type` can be read into or written from a body."""

    def matches_media_type(self, media_type: str | None, *, allow_wildcards: bool = False) -> bool:
        requested, _ = parse_media_type(media_type)
        if not requested:
            return allow_wildcards
        if not allow_wildcards and "*" in requested:
            return False
        return any(_media_type_matches(supported, requested) for supported in self.supported_media_types)

    def select_encoding(self, media_type: str | None, *, strict: bool = False) -> str:
        """
        Use the media type's charset when supported, else the preferred encoding.

        With `strict`, a charset the formatter does not support is an error
        instead of being replaced.
        """
        _, params = parse_media_type(media_type)
        charset = params.get("charset")
        requested = normalize_encoding(charset)
        supported = [normalize_encoding(name) for name in self.supported_encodings]
        if requested is not None and requested in supported:
            return requested
        if strict and charset:
            raise FormatterError(f"Unsupported charset {charset!r} for {type(self).__name__}")
        return supported[0] if supported else "utf-8"

    def content_type(self, encoding: str) -> str:
        return f"{self.supported_media_types[0]}; charset={encoding}"


class InputFormatter(BodyFormatter):
    def can_read(self, value_type: type, media_type: str | None) -> bool:
        return self.can_handle_type(value_type) and self.matches_media_type(media_type)

    @abstractmethod
    def read(self, stream: BinaryIO, encoding: str) -> Any:
        """Consume the whole body from `stream`."""


class OutputFormatter(BodyFormatter):
    def can_write(self, value_type: type, media_type: str | None) -> bool:
        return self.can_handle_type(value_type) and self.matches_media_type(media_type, allow_wildcards=True)

    @abstractmethod
    def write(self, value: Any, stream: BinaryIO, encoding: str) -> None:
        """Encode `value` onto `stream`."""


__all__ = [
    "BodyFormatter",
    "InputFormatter",
    "OutputFormatter",
    "normalize_encoding",
    "parse_media_type",
]
