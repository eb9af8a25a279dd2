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
"""Capability classification — decides whether prior state must be captured."""

from __future__ import annotations

from oprecord.recording.types import Capability, OperationDescriptor


def requires_capture(descriptor: OperationDescriptor, capability: Capability) -> bool:
    """Return ``True`` when the before-processor has to run for this call.

    Capture runs when the descriptor asks for comparison, marks a deletion
    (the data is gone after the call), or the strategy's variant needs a
    "before" value to have anything to record.
    """
    return descriptor.comparable or descriptor.removed or capability.records_arguments
