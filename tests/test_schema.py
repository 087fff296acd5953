# 說明：本測試涵蓋 SchemaContext、型別登錄表與模型彙整登錄表的基本行為。
from __future__ import annotations

from dataclasses import replace

import pytest
from sqlalchemy import MetaData, Unicode

from darb_schema.context import NAMING_CONVENTION, SchemaContext
from darb_schema.exceptions import ModelNotFoundError
from darb_schema.models import MODEL_DEFINERS, SchemaRegistry, build_schema
from darb_schema.types import TypeRegistry, default_types


def test_build_schema_registers_every_model(schema: SchemaRegistry) -> None:
    assert set(schema) == set(MODEL_DEFINERS)
    assert len(schema) == 1
    assert "user" in schema
    assert schema.context.tables == ["users"]
    assert schema.metadata is schema.context.metadata


def test_unknown_model_lookup(schema: SchemaRegistry) -> None:
    with pytest.raises(ModelNotFoundError) as excinfo:
        schema["campaign"]
    assert excinfo.value.name == "campaign"
    assert schema.get("campaign") is None


def test_context_defaults_and_supplied_metadata() -> None:
    context = SchemaContext()
    assert context.metadata.naming_convention["pk"] == NAMING_CONVENTION["pk"]
    assert context.registry.metadata is context.metadata

    metadata = MetaData()
    supplied = build_schema(SchemaContext(metadata=metadata))
    assert supplied.metadata is metadata
    assert "users" in metadata.tables


def test_custom_type_registry_is_used() -> None:
    types = replace(default_types(), STRING=Unicode)
    schema = build_schema(types=types)

    users = schema.metadata.tables["users"]
    assert isinstance(users.c.email.type, Unicode)
    assert users.c.email.type.length == 100


def test_incomplete_type_registry_fails() -> None:
    class Broken:
        pass

    with pytest.raises(AttributeError):
        build_schema(types=Broken())  # type: ignore[arg-type]


def test_type_registry_is_frozen() -> None:
    with pytest.raises(Exception):
        TypeRegistry().STRING = Unicode  # type: ignore[misc]
