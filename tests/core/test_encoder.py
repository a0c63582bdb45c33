"""Tests for spine_logf.core.encoder module."""

import pytest

from spine_logf.core import field as f
from spine_logf.core.encoder import (
    ArrayEncoder,
    FieldEncoder,
    ObjectEncoder,
    PrefixingFieldEncoder,
)
from spine_logf.core.field import Field, FieldType
from tests._support.encoders import RecordingFieldEncoder


class Point:
    def encode_log_object(self, enc):
        enc.encode_field_int64("x", 1)


class Tags:
    def encode_log_array(self, enc):
        enc.encode_type_string("a")


class TestPrefixingFieldEncoder:
    """Every method prepends the prefix and forwards unchanged."""

    def test_string_matches_direct_call(self):
        via_prefix = RecordingFieldEncoder()
        PrefixingFieldEncoder("p.", via_prefix).encode_field_string("k", "v")

        direct = RecordingFieldEncoder()
        direct.encode_field_string("p.k", "v")

        assert via_prefix.calls == direct.calls

    @pytest.mark.parametrize("field_type", list(FieldType))
    def test_forwards_every_method(self, field_type):
        inner = RecordingFieldEncoder()
        sentinel = object()
        method = f"encode_field_{field_type.value}"

        getattr(PrefixingFieldEncoder("error.", inner), method)("k", sentinel)

        assert inner.calls == [(method, "error.k", sentinel)]

    def test_key(self):
        assert PrefixingFieldEncoder("a.", RecordingFieldEncoder()).key("b") == "a.b"

    def test_empty_prefix_is_identity(self, recorder):
        f.int32("n", 7).accept(PrefixingFieldEncoder("", recorder))
        assert recorder.calls == [("encode_field_int32", "n", 7)]

    def test_nested_prefixes_compose(self, recorder):
        enc = PrefixingFieldEncoder("outer.", PrefixingFieldEncoder("inner.", recorder))
        enc.encode_field_bool("flag", True)

        assert recorder.calls == [("encode_field_bool", "inner.outer.flag", True)]

    def test_duplicate_keys_forwarded(self, recorder):
        enc = PrefixingFieldEncoder("p.", recorder)
        enc.encode_field_string("k", "1")
        enc.encode_field_string("k", "2")

        assert [c[1] for c in recorder.calls] == ["p.k", "p.k"]

    def test_object_fields_flatten_into_parent(self, recorder):
        Point().encode_log_object(PrefixingFieldEncoder("pos.", recorder))
        assert recorder.result == {"pos.x": 1}

    def test_field_accept_through_prefix(self, recorder):
        Field("verbose", FieldType.STRING, "full").accept(PrefixingFieldEncoder("error.", recorder))
        assert recorder.result == {"error.verbose": "full"}


class TestProtocols:
    def test_prefixing_encoder_is_field_encoder(self, recorder):
        assert isinstance(PrefixingFieldEncoder("p.", recorder), FieldEncoder)

    def test_object_encoder(self):
        assert isinstance(Point(), ObjectEncoder)
        assert not isinstance(Point(), ArrayEncoder)

    def test_array_encoder(self):
        assert isinstance(Tags(), ArrayEncoder)
