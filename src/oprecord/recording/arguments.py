# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Argument extraction — picks the one argument handed to the strategy."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


def extract_argument(arguments: Iterable[Any] | None, args_type: type | tuple[type, ...] = object) -> Any:
    """Return the first argument that is an instance of *args_type*.

    ``None`` arguments never match, so with ``args_type=object`` the result is
    the first non-``None`` argument. Returns ``None`` for an empty or missing
    argument list, or when nothing matches.

    >>> extract_argument([7, {"name": "X"}], dict)
    {'name': 'X'}
    >>> extract_argument([], dict) is None
    True
    """
    if not arguments:
        return None
    for arg in arguments:
        if arg is not None and isinstance(arg, args_type):
            return arg
    return None
