"""Tests for spine_logf.logging.logger module."""

import structlog
from structlog.testing import CapturingLogger

from spine_logf.core import field as f
from spine_logf.core.errors import collect_error_fields, wrap_error
from spine_logf.core.level import Level, LevelCheckerGetterFunc
from spine_logf.logging import FieldContext, configure_logging
from spine_logf.logging.logger import FieldLogger, get_logger
from spine_logf.logging.processors import ErrorFieldsProcessor


def _logger(level=Level.DEBUG, **kwargs):
    cap = CapturingLogger()
    bound = structlog.wrap_logger(cap, processors=[ErrorFieldsProcessor()])
    return FieldLogger(bound, level.checker(), **kwargs), cap


class TestFieldLoggerEmission:
    def test_info_emits_fields(self):
        log, cap = _logger()
        log.info("ingest.started", f.string("source", "finra"), f.int_("rows", 120))

        assert cap.calls[0].method_name == "info"
        assert cap.calls[0].kwargs == {"event": "ingest.started", "source": "finra", "rows": 120}

    def test_level_methods(self):
        log, cap = _logger()
        log.debug("d")
        log.warn("w")
        log.warning("w2")
        log.error("e")

        assert [c.method_name for c in cap.calls] == ["debug", "warning", "warning", "error"]

    def test_disabled_levels_dropped(self):
        log, cap = _logger(Level.WARN)
        log.info("skipped")
        log.debug("skipped")
        log.warn("kept")

        assert [c.kwargs["event"] for c in cap.calls] == ["kept"]

    def test_enabled(self):
        log, _ = _logger(Level.INFO)
        assert log.enabled(Level.INFO)
        assert not log.enabled(Level.DEBUG)

    def test_event_key_does_not_clash(self):
        log, cap = _logger()
        log.info("message", f.string("event", "field value"))

        assert cap.calls[0].kwargs["event"] == "message"


class TestFieldLoggerFields:
    def test_with_fields_is_immutable(self):
        base, cap = _logger()
        child = base.with_fields(f.string("workflow", "ingest"))

        base.info("base")
        child.info("child")

        assert "workflow" not in cap.calls[0].kwargs
        assert cap.calls[1].kwargs["workflow"] == "ingest"
        assert base.fields == ()

    def test_precedence(self):
        log, cap = _logger()
        log = log.with_fields(f.string("k", "logger"), f.string("only_logger", "1"))
        with FieldContext(f.string("k", "context"), f.string("only_context", "1")):
            log.info("x", f.string("k", "call"))

        kwargs = cap.calls[0].kwargs
        assert kwargs["k"] == "call"
        assert kwargs["only_logger"] == "1"
        assert kwargs["only_context"] == "1"

    def test_with_name(self):
        log, cap = _logger()
        log.with_name("svc.loader").info("x")
        assert cap.calls[0].kwargs["logger"] == "svc.loader"


class TestFieldLoggerErrors:
    def test_error_field_expands_wrapped_fields(self):
        log, cap = _logger()
        err = wrap_error(ValueError("bad row"), f.string("file", "a.csv"), f.int_("row", 17))
        log.error("load.failed", f.error(err), f.int_("row", 18))

        kwargs = cap.calls[0].kwargs
        assert kwargs["error"] == "bad row"
        assert kwargs["file"] == "a.csv"
        assert kwargs["row"] == 18

    def test_error_fields_prefix(self):
        log, cap = _logger(error_fields_prefix="error.")
        err = wrap_error(ValueError("bad row"), f.string("file", "a.csv"))
        log.error("load.failed", f.error(err))

        kwargs = cap.calls[0].kwargs
        assert kwargs["error.file"] == "a.csv"
        assert "file" not in kwargs

    def test_nil_error_field(self):
        log, cap = _logger()
        log.error("x", f.error(None))
        assert cap.calls[0].kwargs["error"] == "<nil>"

    def test_with_error_fields(self):
        log, _ = _logger()
        err = wrap_error(ValueError("x"), f.string("a", "1"))
        assert [x.key for x in log.with_error_fields(err).fields] == ["a"]

    def test_wrap_error_uses_context_and_logger_fields(self):
        log, _ = _logger()
        log = log.with_fields(f.string("logger_field", "1"))
        with FieldContext(f.string("context_field", "1")):
            err = log.wrap_error(KeyError("k"))

        assert [x.key for x in collect_error_fields(err)] == ["context_field", "logger_field"]


class TestGetLogger:
    def test_default_level_from_configuration(self):
        configure_logging(level="warn", force=True)
        log = get_logger(__name__)

        assert log.enabled(Level.WARN)
        assert not log.enabled(Level.INFO)

    def test_explicit_level(self):
        assert get_logger(level=Level.DEBUG).enabled(Level.DEBUG)

    def test_level_checker_getter(self):
        getter = LevelCheckerGetterFunc(lambda: lambda lvl: lvl is Level.ERROR)
        log = get_logger(level=getter)

        assert log.enabled(Level.ERROR)
        assert not log.enabled(Level.WARN)


class TestFieldLoggerErrorLayers:
    def test_outer_layer_wins_same_key(self):
        log, cap = _logger()
        inner = wrap_error(ValueError("boom"), f.string("user", "inner"))
        outer = wrap_error(inner, f.string("user", "outer"))

        log.error("x", f.error(outer))

        assert cap.calls[0].kwargs["user"] == "outer"

    def test_bound_error_fields_recovered(self):
        log, cap = _logger()
        err = wrap_error(ValueError("boom"), f.string("file", "a.csv"))

        log.with_fields(f.error(err)).error("x")

        assert cap.calls[0].kwargs["error"] == "boom"
        assert cap.calls[0].kwargs["file"] == "a.csv"

    def test_context_error_fields_recovered(self):
        log, cap = _logger()
        err = wrap_error(ValueError("boom"), f.string("file", "a.csv"))

        with FieldContext(f.named_error("cause", err)):
            log.info("x")

        assert cap.calls[0].kwargs["cause"] == "boom"
        assert cap.calls[0].kwargs["file"] == "a.csv"

    def test_call_error_fields_beat_bound_error_fields(self):
        log, cap = _logger()
        bound_err = wrap_error(ValueError("a"), f.string("file", "bound.csv"))
        call_err = wrap_error(ValueError("b"), f.string("file", "call.csv"))

        log.with_fields(f.named_error("earlier", bound_err)).error("x", f.error(call_err))

        assert cap.calls[0].kwargs["file"] == "call.csv"
