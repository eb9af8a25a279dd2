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
"""Operation recording — capture/record pipeline around business methods."""

from oprecord.recording.after import AfterProcessor
from oprecord.recording.arguments import extract_argument
from oprecord.recording.before import BeforeProcessor
from oprecord.recording.classifier import requires_capture
from oprecord.recording.configuration import RecordingProperties, create_dispatcher
from oprecord.recording.decorators import get_descriptor, op
from oprecord.recording.dispatcher import OperationDispatcher
from oprecord.recording.registry import StrategyRegistry
from oprecord.recording.strategies import (
    LoggingParamStrategy,
    LoggingReturnStrategy,
    NoOpStrategy,
    OperationRecord,
)
from oprecord.recording.strategy import (
    NeedsQueryStrategy,
    OpStrategy,
    ParamStrategy,
    ReturnStrategy,
    capability_of,
)
from oprecord.recording.types import Capability, InvocationContext, OperationDescriptor
from oprecord.recording.weaver import weave_bean

__all__ = [
    "AfterProcessor",
    "BeforeProcessor",
    "Capability",
    "InvocationContext",
    "LoggingParamStrategy",
    "LoggingReturnStrategy",
    "NeedsQueryStrategy",
    "NoOpStrategy",
    "OpStrategy",
    "OperationDescriptor",
    "OperationDispatcher",
    "OperationRecord",
    "ParamStrategy",
    "RecordingProperties",
    "ReturnStrategy",
    "StrategyRegistry",
    "capability_of",
    "create_dispatcher",
    "extract_argument",
    "get_descriptor",
    "op",
    "requires_capture",
    "weave_bean",
]
