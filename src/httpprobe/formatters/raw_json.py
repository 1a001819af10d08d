# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pass-through formatters for `application/json` bodies handled as plain strings."""

from __future__ import annotations

from typing import Any, BinaryIO

from .base import InputFormatter, OutputFormatter, normalize_encoding

JSON_MEDIA_TYPE = "application/json"


class RawJsonInputFormatter(InputFormatter):
    """Reads a JSON request body verbatim into a `str`; no parsing or validation."""

    supported_media_types = (JSON_MEDIA_TYPE,)
    supported_encodings = ("utf-8", "utf-16-le")

    def can_handle_type(self, value_type: type) -> bool:
        return value_type is str

    def read(self, stream: BinaryIO, encoding: str) -> str:
        data = stream.read()
        # A UTF-8 byte order mark is not part of the document.
        if normalize_encoding(encoding) == "utf-8":
            return data.decode("utf-8-sig")
        return data.decode(encoding)


class RawJsonOutputFormatter(OutputFormatter):
    """Writes a `str` response body as-is under `application/json`."""

    supported_media_types = (JSON_MEDIA_TYPE,)
    supported_encodings = ("utf-8", "utf-16-le")

    def can_handle_type(self, value_type: type) -> bool:
        return value_type is str

    def write(self, value: Any, stream: BinaryIO, encoding: str) -> None:
        stream.write(str(value).encode(encoding))


__all__ = ["JSON_MEDIA_TYPE", "RawJsonInputFormatter", "RawJsonOutputFormatter"]
