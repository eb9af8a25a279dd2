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
"""Tests for StructlogAdapter."""

import logging

import pytest
import structlog

from oprecord.core.config import Config
from oprecord.logging.structlog_adapter import StructlogAdapter


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    structlog.reset_defaults()
    for name in ("oprecord", "audit.trail"):
        target = logging.getLogger(name)
        for handler in list(target.handlers):
            target.removeHandler(handler)
        target.setLevel(logging.NOTSET)


def _named_handlers(name: str) -> list[logging.Handler]:
    return [h for h in logging.getLogger(name).handlers if h.get_name() == "oprecord"]


class TestStructlogAdapterConfigure:
    def test_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter.output_format == "console"
        assert adapter.records_logger == "oprecord.records"
        assert logging.getLogger("oprecord").level == logging.INFO

    def test_reads_format_and_records_logger(self):
        adapter = StructlogAdapter()
        config = Config({"oprecord": {"logging": {"format": "JSON", "records": "audit.trail"}}})
        adapter.configure(config)
        assert adapter.output_format == "json"
        assert adapter.records_logger == "audit.trail"
        assert len(_named_handlers("audit.trail")) == 1

    def test_records_logger_from_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("OPRECORD_LOGGING_RECORDS", "audit.trail")
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter.records_logger == "audit.trail"

    def test_levels(self):
        config = Config({"oprecord": {"logging": {"level": {"root": "warning", "oprecord.recording": "debug"}}}})
        StructlogAdapter().configure(config)
        assert logging.getLogger("oprecord").level == logging.WARNING
        assert logging.getLogger("oprecord.recording").level == logging.DEBUG
        logging.getLogger("oprecord.recording").setLevel(logging.NOTSET)

    def test_unknown_level_falls_back_to_info(self):
        config = Config({"oprecord": {"logging": {"level": {"root": "chatty"}}}})
        StructlogAdapter().configure(config)
        assert logging.getLogger("oprecord").level == logging.INFO

    def test_reconfigure_does_not_stack_handlers(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        adapter.configure(Config({}))
        assert len(_named_handlers("oprecord")) == 1

    def test_root_logger_untouched(self):
        before = list(logging.getLogger().handlers)
        StructlogAdapter().configure(Config({}))
        assert logging.getLogger().handlers == before


class TestStructlogAdapterOutput:
    def test_json_record_reaches_records_logger(self, capsys: pytest.CaptureFixture[str]):
        adapter = StructlogAdapter()
        adapter.configure(Config({"oprecord": {"logging": {"format": "json"}}}))
        adapter.get_logger(adapter.records_logger).info("operation_recorded", record={"method_name": "create"})

        out = capsys.readouterr().out
        assert '"event": "operation_recorded"' in out
        assert '"method_name": "create"' in out
        assert '"logger": "oprecord.records"' in out
