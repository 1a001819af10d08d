# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request/response body formatters."""

from .base import BodyFormatter, InputFormatter, OutputFormatter, normalize_encoding, parse_media_type
from .raw_json import JSON_MEDIA_TYPE, RawJsonInputFormatter, RawJsonOutputFormatter
from .registry import FormatterRegistry, default_registry

__all__ = [
    "BodyFormatter",
    "FormatterRegistry",
    "InputFormatter",
    "JSON_MEDIA_TYPE",
    "OutputFormatter",
    "RawJsonInputFormatter",
    "RawJsonOutputFormatter",
    "default_registry",
    "normalize_encoding",
    "parse_media_type",
]
