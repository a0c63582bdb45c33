"""
Tests for contextual fields.

Tests verify:
- Fields bind, replace and clear
- FieldContext restores the previous fields (sync and async)
- Errors created in a context carry its fields
"""

import asyncio

from spine_logf.core import field as f
from spine_logf.core.errors import ErrorWrapper, collect_error_fields
from spine_logf.logging.context import (
    FieldContext,
    bind_fields,
    clear_fields,
    get_fields,
    new_error,
    set_fields,
    with_error_fields,
    wrap_error,
)


class TestContextManagement:
    def test_empty_by_default(self):
        assert get_fields() == ()

    def test_set_replaces(self):
        bind_fields(f.string("a", "1"))
        set_fields(f.string("b", "2"))
        assert [x.key for x in get_fields()] == ["b"]

    def test_bind_appends(self):
        bind_fields(f.string("a", "1"))
        bind_fields(f.string("b", "2"))
        assert [x.key for x in get_fields()] == ["a", "b"]

    def test_clear(self):
        bind_fields(f.string("a", "1"))
        clear_fields()
        assert get_fields() == ()


class TestFieldContext:
    def test_restores_on_exit(self):
        bind_fields(f.string("outer", "1"))
        with FieldContext(f.string("inner", "2")):
            assert [x.key for x in get_fields()] == ["outer", "inner"]
        assert [x.key for x in get_fields()] == ["outer"]

    def test_restores_after_exception(self):
        try:
            with FieldContext(f.string("k", "v")):
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        assert get_fields() == ()

    def test_nested(self):
        with FieldContext(f.string("a", "1")):
            with FieldContext(f.string("b", "2")):
                assert len(get_fields()) == 2
            assert len(get_fields()) == 1

    def test_async(self):
        async def handler():
            async with FieldContext(f.string("request_id", "r-1")):
                return [x.key for x in get_fields()]

        assert asyncio.run(handler()) == ["request_id"]
        assert get_fields() == ()


class TestContextErrors:
    def test_wrap_error_carries_context_fields(self):
        with FieldContext(f.string("request_id", "r-1")):
            err = wrap_error(LookupError("missing"))

        assert isinstance(err, ErrorWrapper)
        assert [x.key for x in err.fields] == ["request_id"]
        assert str(err) == "missing"

    def test_new_error_formats_message(self):
        err = new_error("user %s not found", "bob")
        assert str(err) == "user bob not found"

    def test_new_error_without_args_keeps_percent(self):
        assert str(new_error("100% broken")) == "100% broken"

    def test_nested_contexts_join_into_one_list(self):
        with FieldContext(f.string("workflow", "ingest")):
            inner = wrap_error(ValueError("bad row"))
            with FieldContext(f.int_("row", 17)):
                outer = wrap_error(inner)

        assert [x.key for x in collect_error_fields(outer)] == ["workflow", "row"]

    def test_with_error_fields(self):
        err = new_error("boom")
        with FieldContext(f.string("a", "1")):
            err = wrap_error(err)
        with_error_fields(err)

        assert [x.key for x in get_fields()] == ["a"]
