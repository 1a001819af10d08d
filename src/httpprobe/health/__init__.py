# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP health probing."""

from .probe import HttpHealthProbe

__all__ = ["HttpHealthProbe"]
