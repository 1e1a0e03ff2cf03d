import dataclasses
import datetime
from typing import Annotated

import attrs
import pytest

import gcfg
from gcfg.schema import NAME, Kind, metadata, normalize, schema
from gcfg.types import IntMode


@attrs.define
class Section:
    a: int = 0
    b: list[Annotated[str, "doc"]] = attrs.Factory(list)
    c: datetime.timedelta | None = None
    d: int = gcfg.field(default=0, int_mode="h")
    e: dict[str, int] = attrs.Factory(dict)
    f: list[list[str]] = attrs.Factory(list)
    g: object = None


@dataclasses.dataclass
class Record:
    http_server: Section | None = None
    http_proxy: dict[str, Section] = dataclasses.field(default_factory=dict)
    httpserver: Section | None = None
    skip: int = dataclasses.field(default=0, metadata=metadata(name="-"))


def test_normalize():
    assert normalize("HTTP-Server") == "httpserver"
    assert normalize("http_server") == "httpserver"


def test_metadata():
    assert metadata() == {}
    assert metadata(name="x", int_mode="dh") == {
        NAME: "x",
        "gcfg.int": IntMode.DEC | IntMode.HEX,
    }


def test_schema_kinds():
    fields = schema(Section).fields

    assert fields["a"].kind is Kind.INT
    assert fields["b"].kind is Kind.LIST
    assert fields["b"].elem is Kind.STRING
    assert fields["c"].kind is Kind.DURATION
    assert fields["d"].int_mode == IntMode.HEX
    assert fields["e"].kind is Kind.INVALID
    assert fields["f"].kind is Kind.INVALID
    assert fields["g"].kind is Kind.INVALID


def test_schema_dataclass():
    s = schema(Record)

    assert s.lookup("http-server").attr == "http_server"
    assert s.lookup("HTTP_PROXY").kind is Kind.MAP
    assert s.lookup("http-proxy").type is Section
    assert s.lookup("skip") is None


def test_schema_first_field_wins():
    assert schema(Record).lookup("httpserver").attr == "http_server"


def test_schema_not_record():
    with pytest.raises(TypeError):
        schema(dict)
